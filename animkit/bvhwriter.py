"""Writing skeletons and motions as BVH text."""

from __future__ import annotations

from collections.abc import Iterator
from typing import TextIO

import numpy as np

from animkit.glmmath import extract_euler_angle_ro
from animkit.joint import Joint
from animkit.matrix3 import RotOrder
from animkit.motion import Motion
from animkit.pose import Pose
from animkit.skeleton import Skeleton

_ROO_NAMES = {
    RotOrder.XYZ: "Xrotation Yrotation Zrotation",
    RotOrder.XZY: "Xrotation Zrotation Yrotation",
    RotOrder.YXZ: "Yrotation Xrotation Zrotation",
    RotOrder.YZX: "Yrotation Zrotation Xrotation",
    RotOrder.ZXY: "Zrotation Xrotation Yrotation",
    RotOrder.ZYX: "Zrotation Yrotation Xrotation",
}

# For each order, the x/y/z components written as the three channels.
_CHANNEL_SLOTS = {
    RotOrder.XYZ: (0, 1, 2),
    RotOrder.XZY: (0, 2, 1),
    RotOrder.YXZ: (1, 0, 2),
    RotOrder.YZX: (1, 2, 0),
    RotOrder.ZXY: (2, 0, 1),
    RotOrder.ZYX: (2, 1, 0),
}


def roo_to_string(roo) -> str:
    """Channel names for a rotation order, or ``"Unknown"``."""
    try:
        return _ROO_NAMES[RotOrder(roo)]
    except ValueError:
        return "Unknown"


def _num(value) -> str:
    return f"{float(value):.6g}"


def _offset_line(prefix: str, joint: Joint) -> str:
    x, y, z = joint.local_translation
    return f"{prefix}\tOFFSET {_num(x)} {_num(y)} {_num(z)}"


def _joint_lines(joint: Joint, prefix: str) -> Iterator[str]:
    if joint.children:
        yield f"{prefix}JOINT {joint.name}"
        yield f"{prefix}{{"
        yield _offset_line(prefix, joint)
        yield f"{prefix}\tCHANNELS 3 {roo_to_string(joint.rotation_order)}"
    else:
        if "Site" in joint.name:
            yield f"{prefix}End Site"
        else:
            yield f"{prefix}End {joint.name}"
        yield f"{prefix}{{"
        yield _offset_line(prefix, joint)
    for child in joint.children:
        yield from _joint_lines(child, prefix + "\t")
    yield f"{prefix}}}"


def _skeleton_lines(skeleton: Skeleton) -> Iterator[str]:
    root = skeleton.root
    if root is None:
        raise ValueError("skeleton has no root joint")
    yield "HIERARCHY"
    yield f"ROOT {root.name}"
    yield "{"
    yield "\tOFFSET 0.00 0.00 0.00"
    yield f"\tCHANNELS 6 Xposition Yposition Zposition {roo_to_string(root.rotation_order)}"
    for child in root.children:
        yield from _joint_lines(child, "\t")
    yield "}"


def _frame_line(skeleton: Skeleton, pose: Pose) -> str:
    values = [_num(v) for v in pose.root_pos]
    for index, joint in enumerate(skeleton):
        if not joint.children:
            continue
        roo = RotOrder(joint.rotation_order)
        angles = np.degrees(extract_euler_angle_ro(roo, pose.joint_rots[index]))
        values.extend(_num(angles[slot]) for slot in _CHANNEL_SLOTS[roo])
    return "\t".join(values)


def _motion_lines(skeleton: Skeleton, motion: Motion) -> Iterator[str]:
    yield "MOTION"
    yield f"Frames: {len(motion)}"
    yield f"Frame Time: {_num(motion.delta_time)}"
    for pose in motion:
        yield _frame_line(skeleton, pose)


def dumps(skeleton: Skeleton, motion: Motion) -> str:
    """BVH text for a skeleton and its motion."""
    lines = [*_skeleton_lines(skeleton), *_motion_lines(skeleton, motion)]
    return "\n".join(lines) + "\n"


def dump(stream: TextIO, skeleton: Skeleton, motion: Motion) -> None:
    """Write BVH text to an open text stream."""
    stream.write(dumps(skeleton, motion))


def save(path, skeleton: Skeleton, motion: Motion) -> None:
    """Write BVH text to the file at ``path``."""
    text = dumps(skeleton, motion)
    with open(path, "w", encoding="utf-8") as stream:
        stream.write(text)