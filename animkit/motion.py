"""Motions: evenly spaced pose keys interpolated as a linear spline."""

from __future__ import annotations

import math
from collections.abc import Iterator

import numpy as np

from animkit.pose import Pose
from animkit.skeleton import Skeleton

_FLOAT_EPS = float(np.finfo(np.float32).eps)


class Motion:
    """Keys spaced ``1 / fps`` seconds apart."""

    def __init__(self, fps: float = 120.0) -> None:
        self._fps = float(fps)
        self._dt = 1.0 / self._fps
        self._keys: list[Pose] = []

    @property
    def framerate(self) -> float:
        return self._fps

    @framerate.setter
    def framerate(self, fps: float) -> None:
        self._fps = float(fps)
        self._dt = 1.0 / self._fps

    @property
    def delta_time(self) -> float:
        return self._dt

    @delta_time.setter
    def delta_time(self, dt: float) -> None:
        self._dt = float(dt)
        self._fps = 1.0 / self._dt

    @property
    def duration(self) -> float:
        """Seconds between the first and last key."""
        if not self._keys:
            return 0.0
        return (len(self._keys) - 1) * self._dt

    def copy(self) -> Motion:
        clone = Motion(self._fps)
        clone._dt = self._dt
        clone._keys = [key.copy() for key in self._keys]
        return clone

    def update(self, skeleton: Skeleton, time: float, loop: bool = True) -> None:
        """Pose ``skeleton`` at the given time."""
        skeleton.set_pose(self.get_value(time, loop))

    def get_value(self, t: float, loop: bool = True) -> Pose:
        """The interpolated pose at time ``t``."""
        if not self._keys:
            return Pose()
        if len(self._keys) == 1:
            return self._keys[0].copy()

        duration = self.duration
        if loop:
            t = self.normalized_duration(t) * duration
        elif t >= duration - _FLOAT_EPS:
            return self._keys[-1].copy()
        elif t < 0:
            return self._keys[0].copy()

        segment = min(int(t / self._dt), len(self._keys) - 2)
        u = (t - segment * self._dt) / self._dt
        return Pose.lerp(self._keys[segment], self._keys[segment + 1], u)

    def append_key(self, value: Pose) -> None:
        self._keys.append(value.copy())

    def _check(self, key_id: int) -> None:
        if not 0 <= key_id < len(self._keys):
            raise IndexError(f"key id {key_id} out of range")

    def edit_key(self, key_id: int, value: Pose) -> None:
        self._check(key_id)
        self._keys[key_id] = value.copy()

    def delete_key(self, key_id: int) -> None:
        """Remove a key; later keys shift down by one."""
        self._check(key_id)
        del self._keys[key_id]

    def __getitem__(self, key_id: int) -> Pose:
        self._check(key_id)
        return self._keys[key_id].copy()

    def __len__(self) -> int:
        return len(self._keys)

    def __iter__(self) -> Iterator[Pose]:
        return (key.copy() for key in self._keys)

    def clear(self) -> None:
        self._keys.clear()

    def normalized_duration(self, t: float) -> float:
        """Fraction of the way through the motion at time ``t``, wrapping around."""
        duration = self.duration
        if duration == 0:
            return math.nan
        return math.fmod(t, duration) / duration

    def key_id(self, t: float) -> int:
        """Index of the key starting the interval that contains ``t``."""
        if not self._keys or self.duration == 0:
            return 0
        t = self.normalized_duration(t) * self.duration
        return int(t / self._dt)