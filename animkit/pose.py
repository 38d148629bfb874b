"""Skeleton poses: a root position plus one local rotation per joint."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

import numpy as np

from animkit.glmmath import quat, quat_inverse, quat_multiply, slerp, squad, vec3


def q_exp(q) -> np.ndarray:
    """Exponential of the vector part ``A*(x, y, z)`` as ``cos A + sin A*(x, y, z)``."""
    q = np.asarray(q, dtype=float)
    angle = math.sqrt(float(np.dot(q[1:], q[1:])))
    sn = math.sin(angle)
    cs = math.cos(angle)
    coeff = 1.0 if abs(sn) < 0.000001 else sn / angle
    return np.array([cs, *(coeff * q[1:])])


def q_log(q) -> np.ndarray:
    """Logarithm of a quaternion following ``log(q) = A*(x, y, z)``."""
    q = np.asarray(q, dtype=float)
    angle = math.sqrt(float(np.dot(q[1:], q[1:])))
    sn = math.sin(angle)
    coeff = 1.0 if abs(sn) < 0.0000001 else angle / sn
    return np.array([math.log(float(np.linalg.norm(q))), *(coeff * q[1:])])


def intermediate(q0, q1, q2) -> np.ndarray:
    """Inner control point for squad interpolation around ``q1``."""
    inv_q1 = quat_inverse(q1)
    term1 = quat_multiply(q2, inv_q1)
    term2 = quat_multiply(q0, inv_q1)
    numerator = -0.25 * q_log(term1 + term2)
    return quat_multiply(q_exp(numerator), q1)


def _vec_str(v) -> str:
    return "vec3({:.6f}, {:.6f}, {:.6f})".format(*(float(c) for c in v))


def _quat_str(q) -> str:
    w, x, y, z = (float(c) for c in q)
    return f"quat({w:.6f}, {{{x:.6f}, {y:.6f}, {z:.6f}}})"


def _check_lengths(first: Pose, *others: Pose) -> None:
    for other in others:
        if len(other.joint_rots) < len(first.joint_rots):
            raise ValueError(
                f"pose has {len(other.joint_rots)} rotations, "
                f"expected at least {len(first.joint_rots)}"
            )


@dataclass(eq=False)
class Pose:
    """Root position and per-joint local rotations (w, x, y, z)."""

    root_pos: np.ndarray = field(default_factory=lambda: vec3(0.0))
    joint_rots: list[np.ndarray] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.root_pos = np.array(self.root_pos, dtype=float)
        self.joint_rots = [np.array(q, dtype=float) for q in self.joint_rots]

    @staticmethod
    def lerp(p1: Pose, p2: Pose, u: float) -> Pose:
        """Linear root and spherical rotation interpolation."""
        _check_lengths(p1, p2)
        root = p1.root_pos * (1.0 - u) + p2.root_pos * u
        rots = [slerp(a, b, u) for a, b in zip(p1.joint_rots, p2.joint_rots)]
        return Pose(root, rots)

    @staticmethod
    def squad(p0: Pose, p1: Pose, p2: Pose, p3: Pose, u: float) -> Pose:
        """Interpolate between ``p1`` and ``p2`` using neighbours for smoothness."""
        _check_lengths(p1, p0, p2, p3)
        root = p1.root_pos * (1.0 - u) + p2.root_pos * u
        rots = []
        for q0, q1, q2, q3 in zip(p0.joint_rots, p1.joint_rots, p2.joint_rots, p3.joint_rots):
            s1 = intermediate(q0, q1, q2)
            s2 = intermediate(q1, q2, q3)
            rots.append(squad(q1, q2, s1, s2, u))
        return Pose(root, rots)

    def copy(self) -> Pose:
        return Pose(self.root_pos, self.joint_rots)

    def __str__(self) -> str:
        lines = ["pose(", _vec_str(self.root_pos)]
        lines.extend(_quat_str(q) for q in self.joint_rots)
        return "\n".join(lines) + "\n)\n"


__all__ = ["Pose", "intermediate", "q_exp", "q_log", "quat"]