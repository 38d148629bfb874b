"""Skeletons: ordered collections of joints with a single root."""

from __future__ import annotations

from collections.abc import Iterator

from animkit.glmmath import vec3
from animkit.joint import Joint
from animkit.pose import Pose


class Skeleton:
    """Joints numbered in the order they are added; the root has id 0."""

    def __init__(self) -> None:
        self._joints: list[Joint] = []
        self.root: Joint | None = None

    def copy(self) -> Skeleton:
        """Deep copy, including the parent/child relationships."""
        clone = Skeleton()
        clone._joints = [joint.copy() for joint in self._joints]
        position = {id(joint): i for i, joint in enumerate(self._joints)}
        for original, joint in zip(self._joints, clone._joints):
            if original.parent is not None:
                joint.parent = clone._joints[position[id(original.parent)]]
            else:
                joint.parent = None
                clone.root = joint
            for child in original.children:
                joint.append_child(clone._joints[position[id(child)]])
        return clone

    def fk(self) -> None:
        """Recompute the global transform of every joint."""
        if self.root is not None:
            self.root.fk()

    def clear(self) -> None:
        self.root = None
        self._joints.clear()

    def find(self, name: str) -> Joint | None:
        """Return the first joint with the given name, or None."""
        return next((joint for joint in self._joints if joint.name == name), None)

    def __getitem__(self, joint_id: int) -> Joint:
        if not 0 <= joint_id < len(self._joints):
            raise IndexError(f"joint id {joint_id} out of range")
        return self._joints[joint_id]

    def __len__(self) -> int:
        return len(self._joints)

    def __iter__(self) -> Iterator[Joint]:
        return iter(self._joints)

    def add_joint(self, joint: Joint, parent: Joint | None = None) -> None:
        """Add a joint; without a parent it becomes the root."""
        joint.id = len(self._joints)
        self._joints.append(joint)
        if parent is None:
            self.root = joint
        else:
            Joint.attach(parent, joint)

    def delete_joint(self, name: str) -> None:
        """Delete the named joint and its descendants; ids are reassigned."""
        joint = self.find(name)
        if joint is not None:
            self._delete(joint)

    def _delete(self, joint: Joint) -> None:
        for child in list(joint.children):
            Joint.detach(joint, child)
            self._delete(child)

        parent = joint.parent
        if parent is not None:
            Joint.detach(parent, joint)
            if not parent.children:
                parent.num_channels = 0

        start = joint.id
        del self._joints[start]
        for new_id, other in enumerate(self._joints[start:], start):
            other.id = new_id
        if joint is self.root:
            self.root = None

    def get_pose(self) -> Pose:
        """The root translation and every joint's local rotation."""
        if not self._joints:
            return Pose()
        return Pose(
            root_pos=self._joints[0].local_translation,
            joint_rots=[joint.local_rotation for joint in self._joints],
        )

    def set_pose(self, pose: Pose) -> None:
        """Apply a pose whose rotations match this skeleton's joints, then run fk."""
        if len(pose.joint_rots) != len(self._joints):
            raise ValueError(
                f"pose has {len(pose.joint_rots)} rotations, "
                f"skeleton has {len(self._joints)} joints"
            )
        for i, (joint, rotation) in enumerate(zip(self._joints, pose.joint_rots)):
            if i == 0:
                joint.local_translation = pose.root_pos
            joint.local_rotation = rotation
        self.fk()


__all__ = ["Skeleton", "vec3"]