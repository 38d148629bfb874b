"""Skeletal animation toolkit: 3D math, joints, skeletons, poses, motions and BVH files."""

__version__ = "0.1.0"

__all__ = [
    "bvhreader",
    "bvhwriter",
    "glmmath",
    "joint",
    "matrix3",
    "motion",
    "pose",
    "quaternion",
    "skeleton",
    "transform",
    "vector3",
]