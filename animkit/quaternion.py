"""Double-precision quaternions stored as (x, y, z, w)."""

from __future__ import annotations

import math
import warnings
from collections.abc import Iterator
from numbers import Real

from animkit.matrix3 import Matrix3
from animkit.vector3 import EPSILON, Vector3

# Tolerance used by the approximate equality operator.
_EQ_EPS = 0.001

_NAMES = ("x", "y", "z", "w")


def _acos(v: float) -> float:
    return math.acos(v) if -1.0 <= v <= 1.0 else math.nan


def _div(a: float, b: float) -> float:
    if b == 0:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


class Quaternion:
    """A mutable quaternion; index 0..3 maps to x, y, z, w."""

    __slots__ = _NAMES

    def __init__(
        self, x: float = 0.0, y: float = 0.0, z: float = 0.0, w: float = 0.0
    ) -> None:
        self.x = float(x)
        self.y = float(y)
        self.z = float(z)
        self.w = float(w)

    @staticmethod
    def identity() -> Quaternion:
        return Quaternion(0, 0, 0, 1)

    @staticmethod
    def zero() -> Quaternion:
        return Quaternion()

    @staticmethod
    def dot(q0: Quaternion, q1: Quaternion) -> float:
        return q0.w * q1.w + q0.x * q1.x + q0.y * q1.y + q0.z * q1.z

    @staticmethod
    def slerp(q0: Quaternion, q1: Quaternion, t: float) -> Quaternion:
        """Spherical interpolation; coincident inputs yield NaN components."""
        a = _acos(Quaternion.dot(q0, q1))
        sin_a = math.sin(a)
        c0 = _div(math.sin(a * (1 - t)), sin_a)
        c1 = _div(math.sin(a * t), sin_a)
        return c0 * q0 + c1 * q1

    @staticmethod
    def from_axis_angle(axis: Vector3, angle: float) -> Quaternion:
        """Build a rotation of ``angle`` radians about ``axis``."""
        s = math.sin(angle / 2)
        return Quaternion(s * axis[0], s * axis[1], s * axis[2], math.cos(angle / 2))

    @staticmethod
    def from_matrix(rot: Matrix3) -> Quaternion:
        """Build a quaternion from a rotation matrix.

        Only the branch where the scalar part dominates uses the full set of
        off-diagonal terms; the other branches keep the reduced forms of the
        original formulas.
        """
        w2 = (rot[0][0] + rot[1][1] + rot[2][2] + 1) / 4
        x2 = (1 + rot[0][0] - rot[1][1] - rot[2][2]) / 4
        y2 = (1 - rot[0][0] + rot[1][1] - rot[2][2]) / 4
        z2 = (1 - rot[0][0] - rot[1][1] + rot[2][2]) / 4

        if w2 >= x2 and w2 >= y2 and w2 >= z2:
            vw = math.sqrt(w2)
            k = 1 / (4 * vw)
            vz = k * (rot[1][0] - rot[0][1])
            vx = k * (rot[2][1] - rot[1][2])
            vy = k * (rot[0][2] - rot[2][0])
        elif x2 >= w2 and x2 >= y2 and x2 >= z2:
            vx = math.sqrt(x2)
            vw = -rot[1][2] / vx
            vy = rot[0][1] / vx
            vz = 0.0
        elif y2 >= w2 and y2 >= x2 and y2 >= z2:
            vy = math.sqrt(y2)
            vx = rot[0][1] / vy
            vz = 0.0
            vw = 0.0
        else:
            vz = math.sqrt(z2) if z2 >= 0 else math.nan
            vy = 0.0
            vw = 0.0
            vx = 0.0
        return Quaternion(vx, vy, vz, vw)

    def to_axis_angle(self) -> tuple[Vector3, float]:
        """Return ``(axis, angle)`` with the angle in radians."""
        angle = _acos(self.w) * 2
        s = math.sin(angle / 2)
        if s == 0:
            return Vector3(1, 0, 0), angle
        return Vector3(self.x / s, self.y / s, self.z / s), angle

    def to_matrix(self) -> Matrix3:
        x, y, z, w = self.x, self.y, self.z, self.w
        return Matrix3(
            1 - 2 * (y * y + z * z), 2 * (x * y - w * z), 2 * (x * z + w * y),
            2 * (x * y + w * z), 1 - 2 * (x * x + z * z), 2 * (y * z - w * x),
            2 * (x * z - w * y), 2 * (y * z + w * x), 1 - 2 * (x * x + y * y),
        )

    def sqr_length(self) -> float:
        return self.w * self.w + self.x * self.x + self.y * self.y + self.z * self.z

    def length(self) -> float:
        return math.sqrt(self.sqr_length())

    def normalized(self) -> Quaternion:
        """Return a unit-length copy; a near-zero quaternion is returned unchanged."""
        length = self.length()
        if length > EPSILON:
            return self / length
        warnings.warn("normalizing a quaternion with length 0", RuntimeWarning)
        return self.copy()

    def normalize(self) -> None:
        """Scale this quaternion to unit length in place."""
        self.x, self.y, self.z, self.w = self.normalized()

    def inverse(self) -> Quaternion:
        return Quaternion(-self.x, -self.y, -self.z, self.w) / self.sqr_length()

    def copy(self) -> Quaternion:
        return Quaternion(self.x, self.y, self.z, self.w)

    @staticmethod
    def from_string(text: str) -> Quaternion:
        """Parse four whitespace-separated numbers given in the order w x y z."""
        parts = text.split()
        if len(parts) != 4:
            raise ValueError(f"expected 4 numbers, got {len(parts)}")
        w, x, y, z = (float(p) for p in parts)
        return Quaternion(x, y, z, w)

    def _check_index(self, i: int) -> None:
        if not 0 <= i <= 3:
            raise IndexError(f"quaternion index {i} out of range")

    def __getitem__(self, i: int) -> float:
        self._check_index(i)
        return getattr(self, _NAMES[i])

    def __setitem__(self, i: int, value: float) -> None:
        self._check_index(i)
        setattr(self, _NAMES[i], float(value))

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z
        yield self.w

    def __neg__(self) -> Quaternion:
        return Quaternion(-self.x, -self.y, -self.z, -self.w)

    def __add__(self, other: Quaternion) -> Quaternion:
        if not isinstance(other, Quaternion):
            return NotImplemented
        return Quaternion(*(a + b for a, b in zip(self, other)))

    def __sub__(self, other: Quaternion) -> Quaternion:
        if not isinstance(other, Quaternion):
            return NotImplemented
        return Quaternion(*(a - b for a, b in zip(self, other)))

    def __mul__(self, other):
        """Hamilton product, rotation of a vector, or scaling by a number."""
        if isinstance(other, Quaternion):
            x0, y0, z0, w0 = self
            x1, y1, z1, w1 = other
            return Quaternion(
                w0 * x1 + x0 * w1 + y0 * z1 - z0 * y1,
                w0 * y1 + y0 * w1 + z0 * x1 - x0 * z1,
                w0 * z1 + z0 * w1 + x0 * y1 - y0 * x1,
                w0 * w1 - x0 * x1 - y0 * y1 - z0 * z1,
            )
        if isinstance(other, Vector3):
            return self.to_matrix() * other
        if isinstance(other, Real):
            return Quaternion(*(v * other for v in self))
        return NotImplemented

    def __rmul__(self, d):
        if isinstance(d, Real):
            return self * d
        return NotImplemented

    def __truediv__(self, d: float) -> Quaternion:
        return Quaternion(*(v / d for v in self))

    def __eq__(self, other: object) -> bool:
        """Approximate equality; ``q`` and ``-q`` compare equal."""
        if not isinstance(other, Quaternion):
            return NotImplemented
        same = all(abs(a - b) < _EQ_EPS for a, b in zip(self, other))
        opposite = all(abs(a + b) < _EQ_EPS for a, b in zip(self, other))
        return same or opposite

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Quaternion({self.x!r}, {self.y!r}, {self.z!r}, {self.w!r})"

    def __str__(self) -> str:
        return " ".join(f"{v:.6g}" for v in self)