"""Vector, quaternion and rotation helpers built on numpy arrays.

Vectors are float arrays of shape (3,). Quaternions are arrays of shape (4,)
ordered (w, x, y, z). Matrices are 3x3 arrays indexed [row, column], so that
``m @ v`` rotates ``v``.
"""

from __future__ import annotations

import math

import numpy as np

from animkit.matrix3 import RotOrder

_FLOAT_EPS = float(np.finfo(np.float32).eps)
_COS_ONE_OVER_TWO = math.cos(0.5)

_AXES = {
    RotOrder.XYZ: (0, 1, 2),
    RotOrder.XZY: (0, 2, 1),
    RotOrder.YXZ: (1, 0, 2),
    RotOrder.YZX: (1, 2, 0),
    RotOrder.ZXY: (2, 0, 1),
    RotOrder.ZYX: (2, 1, 0),
}
_CYCLIC = {(0, 1, 2), (1, 2, 0), (2, 0, 1)}


def _frozen(values) -> np.ndarray:
    array = np.array(values, dtype=float)
    array.setflags(write=False)
    return array


ZERO3 = _frozen([0.0, 0.0, 0.0])
AXIS_X = _frozen([1.0, 0.0, 0.0])
AXIS_Y = _frozen([0.0, 1.0, 0.0])
AXIS_Z = _frozen([0.0, 0.0, 1.0])
ZERO3X3 = _frozen(np.zeros((3, 3)))
IDENTITY3X3 = _frozen(np.eye(3))
IDENTITY4X4 = _frozen(np.eye(4))
IDENTITY_Q = _frozen([1.0, 0.0, 0.0, 0.0])


def vec3(x: float = 0.0, y: float | None = None, z: float | None = None) -> np.ndarray:
    """Build a vector; a single argument fills all three components."""
    if y is None and z is None:
        return np.full(3, float(x))
    return np.array([x, 0.0 if y is None else y, 0.0 if z is None else z], dtype=float)


def quat(w: float = 1.0, x: float = 0.0, y: float = 0.0, z: float = 0.0) -> np.ndarray:
    """Build a quaternion from its scalar and vector parts."""
    return np.array([w, x, y, z], dtype=float)


def quat_multiply(a, b) -> np.ndarray:
    """Hamilton product ``a * b``."""
    w0, x0, y0, z0 = a
    w1, x1, y1, z1 = b
    return np.array(
        [
            w0 * w1 - x0 * x1 - y0 * y1 - z0 * z1,
            w0 * x1 + x0 * w1 + y0 * z1 - z0 * y1,
            w0 * y1 + y0 * w1 + z0 * x1 - x0 * z1,
            w0 * z1 + z0 * w1 + x0 * y1 - y0 * x1,
        ],
        dtype=float,
    )


def quat_rotate(q, v) -> np.ndarray:
    """Rotate the vector ``v`` by the quaternion ``q``."""
    q = np.asarray(q, dtype=float)
    v = np.asarray(v, dtype=float)
    u = q[1:]
    uv = np.cross(u, v)
    uuv = np.cross(u, uv)
    return v + 2.0 * (uv * q[0] + uuv)


def quat_inverse(q) -> np.ndarray:
    q = np.asarray(q, dtype=float)
    conjugate = np.array([q[0], -q[1], -q[2], -q[3]])
    return conjugate / float(np.dot(q, q))


def quat_to_mat3(q) -> np.ndarray:
    w, x, y, z = (float(v) for v in q)
    xx, yy, zz = x * x, y * y, z * z
    xy, xz, yz = x * y, x * z, y * z
    wx, wy, wz = w * x, w * y, w * z
    return np.array(
        [
            [1 - 2 * (yy + zz), 2 * (xy - wz), 2 * (xz + wy)],
            [2 * (xy + wz), 1 - 2 * (xx + zz), 2 * (yz - wx)],
            [2 * (xz - wy), 2 * (yz + wx), 1 - 2 * (xx + yy)],
        ]
    )


def mat3_to_quat(m) -> np.ndarray:
    """Convert a rotation matrix to a quaternion, choosing the largest component."""
    m = np.asarray(m, dtype=float)
    four_squared_minus_1 = [
        m[0, 0] + m[1, 1] + m[2, 2],
        m[0, 0] - m[1, 1] - m[2, 2],
        m[1, 1] - m[0, 0] - m[2, 2],
        m[2, 2] - m[0, 0] - m[1, 1],
    ]
    biggest = max(range(4), key=lambda i: (four_squared_minus_1[i], -i))
    big = math.sqrt(four_squared_minus_1[biggest] + 1.0) * 0.5
    mult = 0.25 / big
    if biggest == 0:
        return quat(
            big,
            (m[2, 1] - m[1, 2]) * mult,
            (m[0, 2] - m[2, 0]) * mult,
            (m[1, 0] - m[0, 1]) * mult,
        )
    if biggest == 1:
        return quat(
            (m[2, 1] - m[1, 2]) * mult,
            big,
            (m[1, 0] + m[0, 1]) * mult,
            (m[0, 2] + m[2, 0]) * mult,
        )
    if biggest == 2:
        return quat(
            (m[0, 2] - m[2, 0]) * mult,
            (m[1, 0] + m[0, 1]) * mult,
            big,
            (m[2, 1] + m[1, 2]) * mult,
        )
    return quat(
        (m[1, 0] - m[0, 1]) * mult,
        (m[0, 2] + m[2, 0]) * mult,
        (m[2, 1] + m[1, 2]) * mult,
        big,
    )


def angle_axis(angle: float, axis) -> np.ndarray:
    """Rotation of ``angle`` radians about ``axis`` (not normalised)."""
    s = math.sin(angle * 0.5)
    axis = np.asarray(axis, dtype=float)
    return np.array([math.cos(angle * 0.5), *(axis * s)])


def quat_angle(q) -> float:
    """Rotation angle of a unit quaternion, in radians."""
    w = float(q[0])
    if abs(w) > _COS_ONE_OVER_TWO:
        a = math.asin(min(1.0, math.sqrt(float(np.dot(q[1:], q[1:]))))) * 2.0
        return 2.0 * math.pi - a if w < 0 else a
    return math.acos(w) * 2.0


def quat_axis(q) -> np.ndarray:
    """Rotation axis of a unit quaternion; the z axis when there is no rotation."""
    tmp1 = 1.0 - float(q[0]) * float(q[0])
    if tmp1 <= 0.0:
        return vec3(0.0, 0.0, 1.0)
    return np.asarray(q[1:], dtype=float) / math.sqrt(tmp1)


def _mix(x, y, a: float) -> np.ndarray:
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)
    cos_theta = float(np.dot(x, y))
    if cos_theta > 1.0 - _FLOAT_EPS:
        return x * (1.0 - a) + y * a
    angle = math.acos(max(-1.0, cos_theta))
    return (math.sin((1.0 - a) * angle) * x + math.sin(a * angle) * y) / math.sin(angle)


def slerp(q1, q2, u: float) -> np.ndarray:
    """Spherical interpolation along the shortest path."""
    q1 = np.asarray(q1, dtype=float)
    z = np.asarray(q2, dtype=float)
    cos_theta = float(np.dot(q1, z))
    if cos_theta < 0.0:
        z = -z
        cos_theta = -cos_theta
    if cos_theta > 1.0 - _FLOAT_EPS:
        return q1 * (1.0 - u) + z * u
    angle = math.acos(min(1.0, cos_theta))
    return (math.sin((1.0 - u) * angle) * q1 + math.sin(u * angle) * z) / math.sin(angle)


def squad(q1, q2, s1, s2, u: float) -> np.ndarray:
    """Spherical cubic interpolation between ``q1`` and ``q2``."""
    return _mix(_mix(q1, q2, u), _mix(s1, s2, u), 2.0 * (1.0 - u) * u)


def _axis_matrix(axis: int, angle: float) -> np.ndarray:
    c, s = math.cos(angle), math.sin(angle)
    u, v = (axis + 1) % 3, (axis + 2) % 3
    m = np.eye(3)
    m[u, u] = c
    m[v, v] = c
    m[v, u] = s
    m[u, v] = -s
    return m


def euler_angle_ro(roo: RotOrder, xyz) -> np.ndarray:
    """Rotation matrix for the order ``roo``; ``xyz`` holds x, y, z in radians."""
    i, j, k = _AXES[RotOrder(roo)]
    return (
        _axis_matrix(i, float(xyz[i]))
        @ _axis_matrix(j, float(xyz[j]))
        @ _axis_matrix(k, float(xyz[k]))
    )


def extract_euler_angle_ro(roo: RotOrder, rotation) -> np.ndarray:
    """Euler angles (x, y, z in radians) of a matrix or quaternion for ``roo``."""
    m = np.asarray(rotation, dtype=float)
    if m.shape == (4,):
        m = quat_to_mat3(m)
    elif m.shape != (3, 3):
        raise ValueError(f"expected a quaternion or a 3x3 matrix, got shape {m.shape}")
    i, j, k = _AXES[RotOrder(roo)]
    p = 1.0 if (i, j, k) in _CYCLIC else -1.0
    a = math.atan2(-p * m[j, k], m[k, k])
    b = math.atan2(p * m[i, k], math.hypot(m[i, i], m[i, j]))
    rest = (_axis_matrix(i, a) @ _axis_matrix(j, b)).T @ m
    u, v = (k + 1) % 3, (k + 2) % 3
    c = math.atan2(rest[v, u], rest[u, u])
    xyz = np.zeros(3)
    xyz[i], xyz[j], xyz[k] = a, b, c
    return xyz


def angle_axis_mat3(angle: float, axis) -> np.ndarray:
    return quat_to_mat3(angle_axis(angle, axis))


def extract_angle_axis_mat3(m) -> tuple[float, np.ndarray]:
    """Return ``(angle, axis)`` of a rotation matrix."""
    q = mat3_to_quat(m)
    return quat_angle(q), quat_axis(q)