import math

import pytest

from animkit.matrix3 import Matrix3
from animkit.quaternion import Quaternion
from animkit.vector3 import Vector3


def test_identity_and_zero_components():
    assert list(Quaternion.identity()) == [0.0, 0.0, 0.0, 1.0]
    assert list(Quaternion.zero()) == [0.0, 0.0, 0.0, 0.0]


def test_indexing_maps_to_xyzw():
    q = Quaternion(1, 2, 3, 4)
    assert [q[i] for i in range(4)] == [1.0, 2.0, 3.0, 4.0]
    q[3] = 9
    assert q.w == 9.0


def test_index_out_of_range():
    q = Quaternion(1, 2, 3, 4)
    with pytest.raises(IndexError):
        q.__getitem__(4)
    with pytest.raises(IndexError):
        q.__setitem__(-1, 1.0)
    assert list(q) == [1.0, 2.0, 3.0, 4.0]


def test_identity_matrix():
    assert Quaternion.identity().to_matrix() == Matrix3.identity()


@pytest.mark.parametrize(
    "axis,builder",
    [
        (Vector3(1, 0, 0), Matrix3.x_matrix),
        (Vector3(0, 1, 0), Matrix3.y_matrix),
        (Vector3(0, 0, 1), Matrix3.z_matrix),
    ],
)
def test_axis_angle_matches_elementary_rotation(axis, builder):
    q = Quaternion.from_axis_angle(axis, 0.7)
    assert q.to_matrix() == builder(0.7)


def test_axis_angle_round_trip():
    axis = Vector3(1, 2, 3).normalized()
    axis_out, angle = Quaternion.from_axis_angle(axis, 1.1).to_axis_angle()
    assert angle == pytest.approx(1.1)
    assert axis_out == axis


def test_to_axis_angle_identity_defaults_to_x_axis():
    axis, angle = Quaternion.identity().to_axis_angle()
    assert angle == 0.0
    assert axis == Vector3(1, 0, 0)


def test_from_matrix_round_trip_small_rotation():
    q = Quaternion.from_axis_angle(Vector3(0.3, -0.5, 0.8).normalized(), 0.9)
    assert Quaternion.from_matrix(q.to_matrix()) == q


def test_from_matrix_identity():
    assert Quaternion.from_matrix(Matrix3.identity()) == Quaternion.identity()


def test_equality_accepts_negation():
    q = Quaternion.from_axis_angle(Vector3(0, 1, 0), 0.4)
    assert q == -q
    assert q != Quaternion.from_axis_angle(Vector3(0, 1, 0), 0.8)


def test_product_with_inverse_is_identity():
    q = Quaternion(1, 2, 3, 4)
    assert q * q.inverse() == Quaternion.identity()
    assert q.inverse() * q == Quaternion.identity()


def test_product_composes_rotations():
    a = Quaternion.from_axis_angle(Vector3(0, 0, 1), 0.3)
    b = Quaternion.from_axis_angle(Vector3(0, 0, 1), 0.5)
    assert a * b == Quaternion.from_axis_angle(Vector3(0, 0, 1), 0.8)
    assert (a * b).to_matrix() == a.to_matrix() * b.to_matrix()


def test_rotate_vector():
    q = Quaternion.from_axis_angle(Vector3(0, 0, 1), math.pi / 2)
    assert q * Vector3(1, 0, 0) == Vector3(0, 1, 0)


def test_scalar_arithmetic():
    q = Quaternion(1, 2, 3, 4)
    assert list(2 * q) == pytest.approx([2, 4, 6, 8])
    assert list(q * 2) == pytest.approx([2, 4, 6, 8])
    assert list(q / 2) == pytest.approx([0.5, 1, 1.5, 2])
    assert list(q + q) == pytest.approx([2, 4, 6, 8])
    assert list(q - q) == pytest.approx([0, 0, 0, 0])
    assert list(-q) == pytest.approx([-1, -2, -3, -4])


def test_dot_and_lengths():
    q = Quaternion(1, 2, 3, 4)
    assert Quaternion.dot(q, q) == pytest.approx(q.sqr_length())
    assert q.length() == pytest.approx(math.sqrt(q.sqr_length()))


def test_normalized_has_unit_length():
    q = Quaternion(1, 2, 3, 4)
    assert q.normalized().length() == pytest.approx(1.0)
    q.normalize()
    assert q.length() == pytest.approx(1.0)


def test_normalize_zero_warns_and_keeps_value():
    with pytest.warns(RuntimeWarning):
        result = Quaternion.zero().normalized()
    assert list(result) == [0.0, 0.0, 0.0, 0.0]


def test_slerp_endpoints():
    q0 = Quaternion.identity()
    q1 = Quaternion.from_axis_angle(Vector3(0, 0, 1), 1.0)
    assert Quaternion.slerp(q0, q1, 0.0) == q0
    assert Quaternion.slerp(q0, q1, 1.0) == q1


def test_slerp_midpoint_halves_angle():
    axis = Vector3(0, 1, 0)
    q0 = Quaternion.identity()
    q1 = Quaternion.from_axis_angle(axis, 1.0)
    assert Quaternion.slerp(q0, q1, 0.5) == Quaternion.from_axis_angle(axis, 0.5)


def test_copy_is_independent():
    q = Quaternion(1, 2, 3, 4)
    c = q.copy()
    c[0] = 10
    assert q.x == 1.0


def test_from_string_reads_w_first():
    q = Quaternion.from_string("4 1 2 3")
    assert list(q) == [1.0, 2.0, 3.0, 4.0]


def test_from_string_rejects_wrong_count():
    with pytest.raises(ValueError):
        Quaternion.from_string("1 2 3")


def test_str_prints_xyzw():
    assert str(Quaternion(1, 2, 3, 4)) == "1 2 3 4"


def test_matrix3_converts_through_quaternion():
    q = Quaternion.from_axis_angle(Vector3(1, 0, 0), 0.6)
    assert Matrix3(q) == q.to_matrix()
    assert Matrix3.from_axis_angle(Vector3(1, 0, 0), 0.6).to_quaternion() == q