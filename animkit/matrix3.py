"""Row-major 3x3 double-precision matrices with Euler-angle conversions."""

from __future__ import annotations

import math
from enum import IntEnum
from numbers import Real

from animkit.vector3 import Vector3

# Tolerance used by the approximate equality operator.
_EQ_EPS = 0.001


class RotOrder(IntEnum):
    """Euler angle rotation orders."""

    XYZ = 0
    XZY = 1
    YXZ = 2
    YZX = 3
    ZXY = 4
    ZYX = 5


def _asin(v: float) -> float:
    return math.asin(v) if -1.0 <= v <= 1.0 else math.nan


def _acos(v: float) -> float:
    return math.acos(v) if -1.0 <= v <= 1.0 else math.nan


class Matrix3:
    """A mutable 3x3 matrix indexed as ``m[row][col]``.

    Constructed with no arguments (zero matrix), nine numbers in row order,
    another matrix, a quaternion, ``(RotOrder, Vector3)`` Euler angles in
    radians, or ``(Vector3, angle)`` as an axis and angle in radians.
    """

    __slots__ = ("_m",)

    def __init__(self, *args) -> None:
        self._m = [[0.0] * 3 for _ in range(3)]
        if not args:
            return
        if len(args) == 9:
            values = [float(a) for a in args]
            self._m = [values[0:3], values[3:6], values[6:9]]
            return
        if len(args) == 1:
            (arg,) = args
            if isinstance(arg, Matrix3):
                self._m = [list(row) for row in arg._m]
                return
            if hasattr(arg, "to_matrix"):
                self._m = Matrix3.from_quaternion(arg)._m
                return
        if len(args) == 2:
            first, second = args
            if isinstance(first, RotOrder):
                self._m = Matrix3.from_euler_angles(first, second)._m
                return
            if isinstance(first, Vector3):
                self._m = Matrix3.from_axis_angle(first, second)._m
                return
        raise TypeError(f"cannot build a Matrix3 from {args!r}")

    @staticmethod
    def identity() -> Matrix3:
        return Matrix3(1, 0, 0, 0, 1, 0, 0, 0, 1)

    @staticmethod
    def zero() -> Matrix3:
        return Matrix3()

    @staticmethod
    def x_matrix(angle: float) -> Matrix3:
        c, s = math.cos(angle), math.sin(angle)
        return Matrix3(1, 0, 0, 0, c, -s, 0, s, c)

    @staticmethod
    def y_matrix(angle: float) -> Matrix3:
        c, s = math.cos(angle), math.sin(angle)
        return Matrix3(c, 0, s, 0, 1, 0, -s, 0, c)

    @staticmethod
    def z_matrix(angle: float) -> Matrix3:
        c, s = math.cos(angle), math.sin(angle)
        return Matrix3(c, -s, 0, s, c, 0, 0, 0, 1)

    @staticmethod
    def from_euler_angles(roo: RotOrder, angles: Vector3) -> Matrix3:
        """Build a rotation; ``angles`` always holds x, y, z in radians."""
        rx = Matrix3.x_matrix(angles[0])
        ry = Matrix3.y_matrix(angles[1])
        rz = Matrix3.z_matrix(angles[2])
        products = {
            RotOrder.XYZ: (rx, ry, rz),
            RotOrder.XZY: (rx, rz, ry),
            RotOrder.YXZ: (ry, rx, rz),
            RotOrder.YZX: (ry, rz, rx),
            RotOrder.ZXY: (rz, rx, ry),
            RotOrder.ZYX: (rz, ry, rx),
        }
        a, b, c = products[RotOrder(roo)]
        return a * b * c

    @staticmethod
    def from_axis_angle(axis: Vector3, angle: float) -> Matrix3:
        from animkit.quaternion import Quaternion

        return Quaternion.from_axis_angle(axis, angle).to_matrix()

    @staticmethod
    def from_quaternion(q) -> Matrix3:
        return q.to_matrix()

    def to_axis_angle(self) -> tuple[Vector3, float]:
        """Return ``(axis, angle)`` with the angle in radians."""
        return self.to_quaternion().to_axis_angle()

    def to_quaternion(self):
        from animkit.quaternion import Quaternion

        return Quaternion.from_matrix(self)

    def to_euler_angles(self, roo: RotOrder) -> Vector3:
        """Return the Euler angles (x, y, z in radians) for the given order."""
        extractors = {
            RotOrder.XYZ: self._euler_xyz,
            RotOrder.XZY: self._euler_xzy,
            RotOrder.YXZ: self._euler_yxz,
            RotOrder.YZX: self._euler_yzx,
            RotOrder.ZXY: self._euler_zxy,
            RotOrder.ZYX: self._euler_zyx,
        }
        return extractors[RotOrder(roo)]()

    def _euler_xyz(self) -> Vector3:
        (m11, m12, m13), (m21, m22, m23), _ = self._m
        theta = _asin(m13)
        if m13 == 1:
            alpha, beta = math.atan2(m21, m22), 0.0
        elif m13 == -1:
            alpha, beta = math.atan2(-m21, m22), 0.0
        else:
            alpha = _asin(m23 / -math.cos(theta))
            beta = _asin(m12 / -math.cos(theta))
        return Vector3(alpha, theta, beta)

    def _euler_xzy(self) -> Vector3:
        (m11, m12, _), (m21, m22, m23), _ = self._m
        beta = _asin(-m12)
        if m12 == 1:
            theta, alpha = math.atan2(-m23, -m21), 0.0
        elif m12 == -1:
            theta, alpha = math.atan2(m23, m21), 0.0
        else:
            theta = -_acos(m11 / math.cos(beta))
            alpha = _acos(m22 / math.cos(beta))
        return Vector3(alpha, theta, beta)

    def _euler_yxz(self) -> Vector3:
        (_, _, m13), (m21, _, m23), (m31, m32, _) = self._m
        alpha = _asin(-m23)
        if m23 == 1:
            beta, theta = math.atan2(-m31, -m32), 0.0
        elif m23 == -1:
            beta, theta = math.atan2(m31, m32), 0.0
        else:
            beta = _asin(m21 / math.cos(alpha))
            theta = _asin(m13 / math.cos(alpha))
        return Vector3(alpha, theta, beta)

    def _euler_yzx(self) -> Vector3:
        (m11, _, _), (m21, m22, _), (_, m32, m33) = self._m
        beta = _asin(m21)
        if m21 == 1 or m21 == -1:
            alpha, theta = math.atan2(m32, m33), 0.0
        else:
            alpha = _acos(m22 / math.cos(beta))
            theta = -_acos(m11 / math.cos(beta))
        return Vector3(alpha, theta, beta)

    def _euler_zxy(self) -> Vector3:
        _, (m21, m22, m23), (_, m32, m33) = self._m
        alpha = _asin(m32)
        if m32 == 1:
            theta, beta = 0.0, math.atan2(m21, -m23)
        elif m32 == -1:
            theta, beta = 0.0, math.atan2(m21, m23)
        else:
            theta = -_acos(m33 / math.cos(alpha))
            beta = _acos(m22 / math.cos(alpha))
        return Vector3(alpha, theta, beta)

    def _euler_zyx(self) -> Vector3:
        (m11, m12, m13), (m21, _, _), (m31, m32, m33) = self._m
        theta = _asin(-m31)
        if m31 == -1:
            alpha, beta = math.atan2(m12, m13), 0.0
        elif m31 == 1:
            alpha, beta = math.atan2(-m12, -m13), 0.0
        else:
            alpha = math.atan2(m32, m33)
            beta = math.atan2(m21, m11)
        return Vector3(alpha, theta, beta)

    def transpose(self) -> Matrix3:
        return Matrix3(*(self._m[j][i] for i in range(3) for j in range(3)))

    def to_gl_matrix(self) -> list[float]:
        """Return the 4x4 homogeneous form as 16 floats in column-major order."""
        gl = [0.0] * 16
        for row, values in enumerate(self._m):
            for col, value in enumerate(values):
                gl[col * 4 + row] = value
        gl[15] = 1.0
        return gl

    @staticmethod
    def from_string(text: str) -> Matrix3:
        """Parse nine whitespace-separated numbers in row order."""
        parts = text.split()
        if len(parts) != 9:
            raise ValueError(f"expected 9 numbers, got {len(parts)}")
        return Matrix3(*(float(p) for p in parts))

    def copy(self) -> Matrix3:
        return Matrix3(self)

    def __getitem__(self, i: int) -> list[float]:
        if not 0 <= i <= 2:
            raise IndexError(f"matrix row {i} out of range")
        return self._m[i]

    def __iter__(self):
        return iter(self._m)

    def __neg__(self) -> Matrix3:
        return Matrix3(*(-v for row in self._m for v in row))

    def __add__(self, other: Matrix3) -> Matrix3:
        if not isinstance(other, Matrix3):
            return NotImplemented
        return Matrix3(
            *(a + b for ra, rb in zip(self._m, other._m) for a, b in zip(ra, rb))
        )

    def __sub__(self, other: Matrix3) -> Matrix3:
        if not isinstance(other, Matrix3):
            return NotImplemented
        return Matrix3(
            *(a - b for ra, rb in zip(self._m, other._m) for a, b in zip(ra, rb))
        )

    def __mul__(self, other):
        """Multiply by a matrix, transform a vector, or scale by a number."""
        if isinstance(other, Matrix3):
            cols = list(zip(*other._m))
            return Matrix3(
                *(sum(a * b for a, b in zip(row, col)) for row in self._m for col in cols)
            )
        if isinstance(other, Vector3):
            return Vector3(*(sum(a * b for a, b in zip(row, other)) for row in self._m))
        if isinstance(other, Real):
            return Matrix3(*(other * v for row in self._m for v in row))
        return NotImplemented

    def __rmul__(self, d):
        if isinstance(d, Real):
            return self * d
        return NotImplemented

    def __truediv__(self, d: float) -> Matrix3:
        return Matrix3(*(v / d for row in self._m for v in row))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix3):
            return NotImplemented
        return all(
            abs(a - b) <= _EQ_EPS
            for ra, rb in zip(self._m, other._m)
            for a, b in zip(ra, rb)
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        values = ", ".join(repr(v) for row in self._m for v in row)
        return f"Matrix3({values})"

    def __str__(self) -> str:
        return "".join(" ".join(f"{v:.6g}" for v in row) + "\n" for row in self._m)