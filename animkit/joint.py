"""Joints: named, animatable transforms organised into a hierarchy."""

from __future__ import annotations

import numpy as np

from animkit.matrix3 import RotOrder
from animkit.transform import Transform


class Joint:
    """A node in a skeleton hierarchy holding local and global transforms."""

    def __init__(self, name: str = "") -> None:
        self.name = name
        self._id = -1
        self.num_channels = 6
        self.rotation_order = RotOrder.XYZ
        self.dirty = False
        self.parent: Joint | None = None
        self.children: list[Joint] = []
        self.local2parent = Transform()
        self.local2global = Transform()

    @property
    def id(self) -> int:
        return self._id

    @id.setter
    def id(self, value: int) -> None:
        """Assign the id; joints named ``Site...`` are renamed ``Site<id>``."""
        self._id = int(value)
        if self.name.startswith("Site"):
            self.name = f"Site{self._id}"

    @property
    def local_translation(self) -> np.ndarray:
        return self.local2parent.translation.copy()

    @local_translation.setter
    def local_translation(self, value) -> None:
        self.local2parent.translation = np.array(value, dtype=float)

    @property
    def local_rotation(self) -> np.ndarray:
        return self.local2parent.rotation.copy()

    @local_rotation.setter
    def local_rotation(self, value) -> None:
        self.local2parent.rotation = np.array(value, dtype=float)

    @property
    def global_translation(self) -> np.ndarray:
        return self.local2global.translation.copy()

    @property
    def global_rotation(self) -> np.ndarray:
        return self.local2global.rotation.copy()

    def copy(self) -> Joint:
        """Copy everything except the parent and children links."""
        clone = Joint(self.name)
        clone._id = self._id
        clone.num_channels = self.num_channels
        clone.rotation_order = self.rotation_order
        clone.dirty = True
        clone.local2parent = self.local2parent.copy()
        clone.local2global = self.local2global.copy()
        return clone

    def append_child(self, child: Joint) -> None:
        self.children.append(child)

    def child_at(self, index: int) -> Joint:
        if not 0 <= index < len(self.children):
            raise IndexError(f"child index {index} out of range")
        return self.children[index]

    def fk(self) -> None:
        """Update the global transform of this joint and all its descendants."""
        if self.parent is not None:
            self.local2global = self.parent.local2global * self.local2parent
        else:
            self.local2global = self.local2parent.copy()
        for child in self.children:
            child.fk()

    @staticmethod
    def attach(parent: Joint | None, child: Joint | None) -> None:
        """Move ``child`` under ``parent``, removing it from its old parent."""
        if child is None:
            return
        old = child.parent
        if old is not None:
            old.children[:] = [c for c in old.children if c is not child]
        child.parent = parent
        if parent is not None:
            parent.children.append(child)

    @staticmethod
    def detach(parent: Joint | None, child: Joint | None) -> None:
        """Unlink ``child`` from ``parent`` if ``parent`` is its current parent."""
        if child is None or child.parent is not parent:
            return
        if parent is not None:
            for index, candidate in enumerate(parent.children):
                if candidate is child:
                    del parent.children[index]
                    break
        child.parent = None

    def __repr__(self) -> str:
        return f"Joint({self.name!r}, id={self._id})"