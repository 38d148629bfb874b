# animkit

A small library for skeletal character animation: 3D math, joint
hierarchies with forward kinematics, keyed motions, and reading and writing
BVH motion-capture files.

## Modules

- `animkit.vector3`: `Vector3`, a mutable double-precision vector with
  arithmetic operators, `dot`, `cross`, `distance`, `lerp` and
  `normalized`. `==` compares with a tolerance of 0.001. Also `is_zero`,
  `sgn` and the constants `PI`, `EPSILON`, `RAD2DEG`, `DEG2RAD`.
- `animkit.matrix3`: `RotOrder` (`XYZ`, `XZY`, `YXZ`, `YZX`, `ZXY`, `ZYX`)
  and `Matrix3`, a row-major 3x3 matrix (`m[row][col]`) with
  `from_euler_angles`, `to_euler_angles`, `from_axis_angle`,
  `to_axis_angle`, `to_quaternion`, `transpose` and `to_gl_matrix`
  (16 floats, column-major).
- `animkit.quaternion`: `Quaternion` stored as `(x, y, z, w)`, with the
  Hamilton product, `slerp`, `from_axis_angle`, `to_axis_angle`,
  `from_matrix`, `to_matrix`, `inverse` and `normalized`. `q == -q` is true.
- `animkit.glmmath`: numpy helpers. Vectors are arrays of shape `(3,)`,
  quaternions are arrays `(w, x, y, z)`, matrices are 3x3 arrays. Includes
  `vec3`, `quat`, `quat_multiply`, `quat_rotate`, `quat_to_mat3`,
  `mat3_to_quat`, `angle_axis`, `slerp`, `squad`, `euler_angle_ro` and
  `extract_euler_angle_ro`.
- `animkit.transform`: `Transform`, a rotation/translation/scale triple.
  Transforms compose with `*` and offer `inverse`, `transform_point`,
  `transform_vector` and `matrix` (4x4, T·R·S).
- `animkit.joint`: `Joint`, with local and global transforms, channel count,
  rotation order, and `Joint.attach` / `Joint.detach` for re-parenting.
- `animkit.skeleton`: `Skeleton`, joints numbered in the order they were
  added (root is 0). Supports indexing, `len`, iteration, `find`,
  `add_joint`, `delete_joint` (deletes descendants and renumbers), `fk`,
  `get_pose` and `set_pose`.
- `animkit.pose`: `Pose` (root position plus one local rotation per joint)
  with `Pose.lerp` and `Pose.squad`.
- `animkit.motion`: `Motion`, evenly spaced keys at `framerate` frames per
  second. `get_value(t, loop)` interpolates between keys, and
  `update(skeleton, t, loop)` poses a skeleton.
- `animkit.bvhreader`: `load(path)`, `read(stream)` and `loads(text)`, each
  returning `(skeleton, motion)`. Malformed input raises `BVHError`. A
  channel line with no recognisable rotation order gives a `RuntimeWarning`,
  and that joint uses `XYZ`.
- `animkit.bvhwriter`: `save(path, skeleton, motion)`, `dump(stream, ...)`
  and `dumps(...)`. The root is written with a zero offset and six
  channels. Joints that have children are written with three rotation
  channels. Leaf joints are written as `End` entries. Numbers are written
  to six significant digits.

## Installation

```
pip install animkit
```

## Usage

```python
from animkit import bvhreader, bvhwriter

skeleton, motion = bvhreader.load("walk.bvh")
print(len(skeleton), "joints,", len(motion), "frames")

# Pose the skeleton half a second into the clip, looping
motion.update(skeleton, 0.5, True)
root = skeleton[0]
print(root.name, root.global_translation)

bvhwriter.save("walk-copy.bvh", skeleton, motion)
```

To interpolate between two poses:

```python
from animkit.pose import Pose

halfway = Pose.lerp(motion[0], motion[1], 0.5)
```

## What it does not do

animkit does no rendering. It has no window, viewer or drawing of
skeletons. It computes joint transforms, and displaying them is left to
you.

## Running the tests

```
pip install animkit[test]
pytest
```