"""Rigid transforms made of a rotation, a translation and a per-axis scale."""

from __future__ import annotations

import numpy as np

from animkit.glmmath import (
    IDENTITY_Q,
    angle_axis,
    quat_inverse,
    quat_multiply,
    quat_rotate,
    quat_to_mat3,
    vec3,
)


def _vec_str(v) -> str:
    return "vec3({:.6f}, {:.6f}, {:.6f})".format(*(float(c) for c in v))


def _quat_str(q) -> str:
    w, x, y, z = (float(c) for c in q)
    return f"quat({w:.6f}, {{{x:.6f}, {y:.6f}, {z:.6f}}})"


class Transform:
    """A transform applying scale, then rotation, then translation."""

    __slots__ = ("rotation", "translation", "scale")

    def __init__(self, rotation=None, translation=None, scale=None) -> None:
        self.rotation = np.array(IDENTITY_Q if rotation is None else rotation, dtype=float)
        self.translation = np.array(
            vec3(0.0) if translation is None else translation, dtype=float
        )
        self.scale = np.array(vec3(1.0) if scale is None else scale, dtype=float)

    @staticmethod
    def identity() -> Transform:
        return Transform()

    @staticmethod
    def from_scale(s) -> Transform:
        """Pure scale; a single number scales every axis."""
        scale = vec3(float(s)) if np.ndim(s) == 0 else np.asarray(s, dtype=float)
        return Transform(scale=scale)

    @staticmethod
    def from_angle_axis(angle: float, axis) -> Transform:
        return Transform(rotation=angle_axis(angle, axis))

    @staticmethod
    def from_rotation(q) -> Transform:
        return Transform(rotation=q)

    @staticmethod
    def from_translation(pos) -> Transform:
        return Transform(translation=pos)

    def inverse(self) -> Transform:
        """Inverse transform; exact when the scale is uniform."""
        inv_rot = quat_inverse(self.rotation)
        inv_s = 1.0 / self.scale
        offset = -(inv_s * (quat_to_mat3(inv_rot) @ self.translation))
        return Transform(inv_rot, offset, inv_s)

    def transform_point(self, pos) -> np.ndarray:
        return quat_rotate(self.rotation, self.scale * np.asarray(pos, dtype=float)) + (
            self.translation
        )

    def transform_vector(self, direction) -> np.ndarray:
        return quat_rotate(self.rotation, self.scale * np.asarray(direction, dtype=float))

    def matrix(self) -> np.ndarray:
        """The 4x4 homogeneous matrix T * R * S."""
        m = np.eye(4)
        m[:3, :3] = quat_to_mat3(self.rotation) * self.scale
        m[:3, 3] = self.translation
        return m

    def copy(self) -> Transform:
        return Transform(self.rotation, self.translation, self.scale)

    def __mul__(self, other: Transform) -> Transform:
        if not isinstance(other, Transform):
            return NotImplemented
        rotation = quat_multiply(self.rotation, other.rotation)
        translation = self.translation + quat_rotate(
            self.rotation, self.scale * other.translation
        )
        return Transform(rotation, translation, self.scale * other.scale)

    def __repr__(self) -> str:
        return (
            f"Transform({self.rotation.tolist()!r}, "
            f"{self.translation.tolist()!r}, {self.scale.tolist()!r})"
        )

    def __str__(self) -> str:
        return (
            f"T: {_vec_str(self.translation)}\n"
            f"R: {_quat_str(self.rotation)}\n"
            f"S: {_vec_str(self.scale)}"
        )