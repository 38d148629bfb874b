"""Three-component double-precision vectors and shared numeric constants."""

from __future__ import annotations

import math
from collections.abc import Iterator

PI = 3.1415926535897932384626433832795
PI_2 = 1.5707963267948966192313216916398
EPSILON = 0.000001
RAD2DEG = 180.0 / PI
DEG2RAD = PI / 180.0

# Tolerance used by the approximate equality operator.
_EQ_EPS = 0.001


def is_zero(x: float, eps: float = 0.001) -> bool:
    """Return True when ``x`` lies strictly within ``eps`` of zero."""
    return abs(x) < eps


def sgn(x: float) -> int:
    """Return 1 for non-negative values and -1 otherwise."""
    return 1 if x >= 0 else -1


def _format(value: float) -> str:
    return f"{value:.6g}"


class Vector3:
    """A mutable 3D vector with approximate equality."""

    __slots__ = ("x", "y", "z")

    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0) -> None:
        self.x = float(x)
        self.y = float(y)
        self.z = float(z)

    def _check_index(self, i: int) -> None:
        if not 0 <= i <= 2:
            raise IndexError(f"vector index {i} out of range")

    def __getitem__(self, i: int) -> float:
        self._check_index(i)
        return (self.x, self.y, self.z)[i]

    def __setitem__(self, i: int, value: float) -> None:
        self._check_index(i)
        setattr(self, ("x", "y", "z")[i], float(value))

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __repr__(self) -> str:
        return f"Vector3({self.x!r}, {self.y!r}, {self.z!r})"

    def __str__(self) -> str:
        return " ".join(_format(v) for v in self)

    def __neg__(self) -> Vector3:
        return Vector3(-self.x, -self.y, -self.z)

    def __add__(self, other: Vector3) -> Vector3:
        if not isinstance(other, Vector3):
            return NotImplemented
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector3) -> Vector3:
        if not isinstance(other, Vector3):
            return NotImplemented
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, other):
        """Scale by a number, or take the dot product with another vector."""
        if isinstance(other, Vector3):
            return Vector3.dot(self, other)
        if isinstance(other, (int, float)):
            return Vector3(other * self.x, other * self.y, other * self.z)
        return NotImplemented

    def __rmul__(self, other):
        if isinstance(other, (int, float)):
            return self * other
        return NotImplemented

    def __truediv__(self, d: float) -> Vector3:
        inv = 1.0 / d
        return Vector3(self.x * inv, self.y * inv, self.z * inv)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vector3):
            return NotImplemented
        return (
            abs(self.x - other.x) < _EQ_EPS
            and abs(self.y - other.y) < _EQ_EPS
            and abs(self.z - other.z) < _EQ_EPS
        )

    __hash__ = None  # type: ignore[assignment]

    def length(self) -> float:
        return math.sqrt(self.sqr_length())

    def sqr_length(self) -> float:
        return self.x * self.x + self.y * self.y + self.z * self.z

    def normalized(self) -> Vector3:
        """Return a unit-length copy; near-zero vectors are returned unchanged."""
        length = self.length()
        result = self.copy()
        if length > EPSILON:
            result = result / length
        return result

    def normalize(self) -> None:
        """Scale this vector to unit length in place."""
        self.x, self.y, self.z = self.normalized()

    def copy(self) -> Vector3:
        return Vector3(self.x, self.y, self.z)

    @staticmethod
    def from_string(text: str) -> Vector3:
        """Parse three whitespace-separated numbers."""
        parts = text.split()
        if len(parts) != 3:
            raise ValueError(f"expected 3 numbers, got {len(parts)}")
        return Vector3(*(float(p) for p in parts))

    @staticmethod
    def dot(a: Vector3, b: Vector3) -> float:
        return a.x * b.x + a.y * b.y + a.z * b.z

    @staticmethod
    def cross(left: Vector3, right: Vector3) -> Vector3:
        return Vector3(
            left.y * right.z - left.z * right.y,
            left.z * right.x - left.x * right.z,
            left.x * right.y - left.y * right.x,
        )

    @staticmethod
    def distance(a: Vector3, b: Vector3) -> float:
        return math.sqrt(Vector3.distance_sqr(a, b))

    @staticmethod
    def distance_sqr(a: Vector3, b: Vector3) -> float:
        return (a.x - b.x) ** 2 + (a.y - b.y) ** 2 + (a.z - b.z) ** 2

    @staticmethod
    def lerp(a: Vector3, b: Vector3, t: float) -> Vector3:
        return a * (1 - t) + b * t