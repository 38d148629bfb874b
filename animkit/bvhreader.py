"""Reading skeletons and motions from BVH text."""

from __future__ import annotations

import math
import re
import warnings
from typing import TextIO

import numpy as np

from animkit.glmmath import euler_angle_ro, mat3_to_quat, vec3
from animkit.joint import Joint
from animkit.matrix3 import RotOrder
from animkit.motion import Motion
from animkit.pose import Pose
from animkit.skeleton import Skeleton


class BVHError(ValueError):
    """Raised when BVH text does not follow the expected layout."""


# Searched in this order; the first match wins.
_ORDERS = (
    ("Zrotation Xrotation Yrotation", RotOrder.ZXY),
    ("Zrotation Yrotation Xrotation", RotOrder.ZYX),
    ("Xrotation Yrotation Zrotation", RotOrder.XYZ),
    ("Xrotation Zrotation Yrotation", RotOrder.XZY),
    ("Yrotation Xrotation Zrotation", RotOrder.YXZ),
    ("Yrotation Zrotation Xrotation", RotOrder.YZX),
)

# For each order, the x/y/z slot that the first, second and third channel fill.
_CHANNEL_SLOTS = {
    RotOrder.XYZ: (0, 1, 2),
    RotOrder.XZY: (0, 2, 1),
    RotOrder.YXZ: (1, 0, 2),
    RotOrder.YZX: (1, 2, 0),
    RotOrder.ZXY: (2, 0, 1),
    RotOrder.ZYX: (2, 1, 0),
}

_LEADING_NUMBER = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def string_to_roo(order: str) -> RotOrder:
    """Rotation order named in a CHANNELS line; XYZ with a warning if none is found."""
    for pattern, roo in _ORDERS:
        if pattern in order:
            return roo
    warnings.warn(f"invalid rotation order {order!r}", RuntimeWarning, stacklevel=2)
    return RotOrder.XYZ


def compute_bvh_rot(r1: float, r2: float, r3: float, roo: RotOrder) -> np.ndarray:
    """Quaternion for three channel angles in degrees, given in ``roo`` order."""
    roo = RotOrder(roo)
    xyz = [0.0, 0.0, 0.0]
    for slot, value in zip(_CHANNEL_SLOTS[roo], (r1, r2, r3)):
        xyz[slot] = float(value)
    return mat3_to_quat(euler_angle_ro(roo, np.radians(xyz)))


def _leading_float(text: str) -> float:
    match = _LEADING_NUMBER.match(text)
    return float(match.group(1)) if match else 0.0


class _Scanner:
    """Whitespace-separated tokens mixed with line reads over a string."""

    def __init__(self, text: str) -> None:
        self._text = text
        self._pos = 0

    def token(self) -> str:
        text, pos, end = self._text, self._pos, len(self._text)
        while pos < end and text[pos].isspace():
            pos += 1
        start = pos
        while pos < end and not text[pos].isspace():
            pos += 1
        self._pos = pos
        if start == pos:
            raise BVHError("unexpected end of input")
        return text[start:pos]

    def skip_char(self) -> None:
        if self._pos < len(self._text):
            self._pos += 1

    def line(self) -> str:
        end = self._text.find("\n", self._pos)
        if end < 0:
            end = len(self._text)
        result = self._text[self._pos:end]
        self._pos = min(end + 1, len(self._text))
        return result

    def number(self) -> float:
        tok = self.token()
        try:
            return float(tok)
        except ValueError:
            raise BVHError(f"expected a number, got {tok!r}") from None

    def integer(self) -> int:
        tok = self.token()
        try:
            return int(tok)
        except ValueError:
            raise BVHError(f"expected an integer, got {tok!r}") from None

    def expect(self, word: str) -> None:
        tok = self.token()
        if tok != word:
            raise BVHError(f"expected {word!r}, got {tok!r}")


def _read_offset(scanner: _Scanner, joint: Joint) -> None:
    scanner.token()  # "{"
    scanner.token()  # "OFFSET"
    x = scanner.number()
    y = scanner.number()
    z = scanner.number()
    joint.local_translation = vec3(x, y, z)


def _read_children(scanner: _Scanner, skeleton: Skeleton, parent: Joint) -> None:
    tok = scanner.token()
    while tok != "}":
        _read_joint(scanner, skeleton, parent, tok)
        tok = scanner.token()


def _read_joint(scanner: _Scanner, skeleton: Skeleton, parent: Joint, prefix: str) -> None:
    if prefix == "JOINT":
        scanner.skip_char()
        joint = Joint(scanner.line().rstrip())
        skeleton.add_joint(joint, parent)
        _read_offset(scanner, joint)
        scanner.token()  # "CHANNELS"
        joint.num_channels = scanner.integer()
        joint.rotation_order = string_to_roo(scanner.line())
        _read_children(scanner, skeleton, joint)
    elif prefix == "End":
        scanner.skip_char()
        name = scanner.line()
        name = parent.name + "Site" if "Site" in name else name.rstrip()
        joint = Joint(name)
        joint.num_channels = 0
        skeleton.add_joint(joint, parent)
        _read_offset(scanner, joint)
        scanner.token()  # "}"
    else:
        raise BVHError(f"unexpected {prefix!r} in hierarchy")


def _read_skeleton(scanner: _Scanner, skeleton: Skeleton) -> None:
    scanner.expect("HIERARCHY")
    keyword = scanner.token()
    if keyword not in ("ROOT", "JOINT"):
        raise BVHError(f"expected ROOT, got {keyword!r}")
    scanner.skip_char()
    root = Joint(scanner.line().rstrip())
    skeleton.add_joint(root)
    _read_offset(scanner, root)
    scanner.expect("CHANNELS")
    root.num_channels = scanner.integer()
    root.rotation_order = string_to_roo(scanner.line())
    _read_children(scanner, skeleton, root)
    skeleton.fk()


def _read_frame(scanner: _Scanner, skeleton: Skeleton, motion: Motion) -> None:
    root_pos = vec3(0.0)
    rotations = []
    for index, joint in enumerate(skeleton):
        translation = [0.0, 0.0, 0.0]
        angles = [0.0, 0.0, 0.0]
        if joint.num_channels == 6:
            translation = [scanner.number() for _ in range(3)]
            angles = [scanner.number() for _ in range(3)]
        elif joint.num_channels == 3:
            angles = [scanner.number() for _ in range(3)]
        if index == 0:
            root_pos = vec3(*translation)
        rotations.append(compute_bvh_rot(*angles, joint.rotation_order))
    motion.append_key(Pose(root_pos, rotations))


def _read_motion(scanner: _Scanner, skeleton: Skeleton, motion: Motion) -> None:
    scanner.expect("MOTION")
    scanner.expect("Frames:")
    frame_count = scanner.integer()
    scanner.token()  # "Frame"
    dt = _leading_float(scanner.line()[6:])
    motion.framerate = 1.0 / dt if dt != 0 else math.inf
    for _ in range(frame_count):
        _read_frame(scanner, skeleton, motion)


def loads(text: str) -> tuple[Skeleton, Motion]:
    """Parse BVH text into a skeleton and its motion."""
    skeleton = Skeleton()
    motion = Motion()
    scanner = _Scanner(text)
    _read_skeleton(scanner, skeleton)
    _read_motion(scanner, skeleton, motion)
    return skeleton, motion


def read(stream: TextIO) -> tuple[Skeleton, Motion]:
    """Parse BVH text from an open text stream."""
    return loads(stream.read())


def load(path) -> tuple[Skeleton, Motion]:
    """Parse the BVH file at ``path``."""
    with open(path, encoding="utf-8") as stream:
        return read(stream)