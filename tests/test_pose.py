import numpy as np
import pytest

from animkit.glmmath import angle_axis, quat, slerp, vec3
from animkit.pose import Pose, intermediate, q_exp, q_log


def _unit(q):
    q = np.asarray(q, dtype=float)
    return q / np.linalg.norm(q)


def _pose(root, *rots):
    return Pose(vec3(*root), [_unit(q) for q in rots])


P0 = _pose((0.0, 0.0, 0.0), [1.0, 0.1, 0.0, 0.0], [1.0, 0.0, 0.2, 0.0])
P1 = _pose((1.0, 2.0, 3.0), [1.0, 0.2, 0.1, 0.0], [1.0, 0.0, 0.3, 0.1])
P2 = _pose((2.0, 0.0, -1.0), [1.0, 0.3, 0.1, 0.1], [1.0, 0.1, 0.3, 0.2])
P3 = _pose((4.0, 1.0, 0.0), [1.0, 0.4, 0.0, 0.2], [1.0, 0.2, 0.2, 0.3])


def test_default_pose_is_empty():
    p = Pose()
    assert np.array_equal(p.root_pos, vec3(0.0))
    assert p.joint_rots == []


def test_constructor_copies_inputs():
    root = vec3(1.0, 2.0, 3.0)
    p = Pose(root, [quat()])
    root[0] = 9.0
    assert p.root_pos[0] == pytest.approx(1.0)


def test_lerp_endpoints():
    start = Pose.lerp(P1, P2, 0.0)
    end = Pose.lerp(P1, P2, 1.0)
    assert np.allclose(start.root_pos, P1.root_pos)
    assert np.allclose(end.root_pos, P2.root_pos)
    assert all(np.allclose(a, b) for a, b in zip(start.joint_rots, P1.joint_rots))
    assert all(np.allclose(a, b) for a, b in zip(end.joint_rots, P2.joint_rots))


def test_lerp_midpoint_root():
    mid = Pose.lerp(P1, P2, 0.5)
    assert np.allclose(mid.root_pos, (P1.root_pos + P2.root_pos) / 2)


def test_lerp_rotations_use_slerp():
    mid = Pose.lerp(P1, P2, 0.3)
    expected = [slerp(a, b, 0.3) for a, b in zip(P1.joint_rots, P2.joint_rots)]
    assert len(mid.joint_rots) == len(expected)
    assert all(np.allclose(a, b) for a, b in zip(mid.joint_rots, expected))


def test_lerp_with_fewer_rotations_raises():
    short = Pose(vec3(0.0), [quat()])
    with pytest.raises(ValueError):
        Pose.lerp(P1, short, 0.5)


def test_q_log_of_identity_is_zero():
    assert np.allclose(q_log(quat()), np.zeros(4))


def test_q_exp_of_zero_is_identity():
    assert np.allclose(q_exp(np.zeros(4)), quat())


def test_q_exp_of_pure_quaternion_is_rotation():
    axis = _unit([0.2, -0.5, 0.8])
    pure = np.array([0.0, *(0.4 * axis)])
    assert np.allclose(q_exp(pure), angle_axis(0.8, axis))


def test_intermediate_of_identities_is_identity():
    assert np.allclose(intermediate(quat(), quat(), quat()), quat())


def test_squad_endpoints():
    start = Pose.squad(P0, P1, P2, P3, 0.0)
    end = Pose.squad(P0, P1, P2, P3, 1.0)
    assert np.allclose(start.root_pos, P1.root_pos)
    assert np.allclose(end.root_pos, P2.root_pos)
    assert all(np.allclose(a, b) for a, b in zip(start.joint_rots, P1.joint_rots))
    assert all(np.allclose(a, b) for a, b in zip(end.joint_rots, P2.joint_rots))


def test_squad_root_is_linear():
    p = Pose.squad(P0, P1, P2, P3, 0.25)
    assert np.allclose(p.root_pos, P1.root_pos * 0.75 + P2.root_pos * 0.25)


def test_squad_with_fewer_rotations_raises():
    short = Pose(vec3(0.0), [quat()])
    with pytest.raises(ValueError):
        Pose.squad(short, P1, P2, P3, 0.5)


def test_copy_is_deep():
    original = Pose(vec3(1.0, 2.0, 3.0), [quat()])
    c = original.copy()
    c.joint_rots[0][0] = 42.0
    c.root_pos[1] = -5.0
    assert original.joint_rots[0][0] == pytest.approx(1.0)
    assert original.root_pos[1] == pytest.approx(2.0)
    assert c.joint_rots[0][0] == pytest.approx(42.0)


def test_str_layout():
    text = str(Pose(vec3(0.0), [quat(), quat()]))
    lines = text.split("\n")
    assert lines[0] == "pose("
    assert text.endswith(")\n")
    assert len(lines) == 6