import math

import pytest

from animkit.vector3 import EPSILON, Vector3, is_zero, sgn


def test_is_zero_and_sgn():
    assert is_zero(0.0005)
    assert not is_zero(0.5)
    assert is_zero(0.05, eps=0.1)
    assert sgn(0.0) == 1
    assert sgn(3.5) == 1
    assert sgn(-2.0) == -1


def test_indexing_and_iteration():
    v = Vector3(1, 2, 3)
    assert [v[0], v[1], v[2]] == [1.0, 2.0, 3.0]
    assert list(v) == [1.0, 2.0, 3.0]
    v[1] = 7
    assert v.y == 7.0


@pytest.mark.parametrize("index", [-1, 3])
def test_index_out_of_range(index):
    v = Vector3(1, 2, 3)
    with pytest.raises(IndexError):
        v.__getitem__(index)
    with pytest.raises(IndexError):
        v.__setitem__(index, 1.0)
    assert list(v) == [1.0, 2.0, 3.0]


def test_default_is_zero():
    v = Vector3()
    assert v.sqr_length() == 0.0


def test_arithmetic_round_trip():
    a = Vector3(1.5, -2.0, 4.0)
    b = Vector3(0.25, 3.0, -1.0)
    assert (a + b) - b == a
    assert -(-a) == a
    assert (a * 2.0) / 2.0 == a
    assert 2.0 * a == a * 2.0
    assert a + (-a) == Vector3()


def test_vector_product_is_dot():
    a = Vector3(1, 2, 3)
    b = Vector3(4, -5, 6)
    assert a * b == Vector3.dot(a, b)
    assert Vector3.dot(a, a) == pytest.approx(a.sqr_length())


def test_approximate_equality():
    a = Vector3(1, 2, 3)
    assert a == Vector3(1.0005, 2, 3)
    assert not (a == Vector3(1.01, 2, 3))
    assert a != Vector3(1.01, 2, 3)


def test_cross_is_perpendicular_and_anticommutative():
    a = Vector3(1, 2, 3)
    b = Vector3(-2, 0.5, 4)
    c = Vector3.cross(a, b)
    assert Vector3.dot(c, a) == pytest.approx(0.0)
    assert Vector3.dot(c, b) == pytest.approx(0.0)
    assert Vector3.cross(b, a) == -c


def test_cross_of_axes():
    x = Vector3(1, 0, 0)
    y = Vector3(0, 1, 0)
    assert Vector3.cross(x, y) == Vector3(0, 0, 1)


def test_normalized_has_unit_length():
    v = Vector3(3, -4, 12)
    n = v.normalized()
    assert n.length() == pytest.approx(1.0)
    assert v.length() == pytest.approx(13.0)
    v.normalize()
    assert v == n


def test_normalize_zero_vector_stays_zero():
    v = Vector3(EPSILON / 10, 0, 0)
    assert v.normalized().x == v.x


def test_copy_is_independent():
    v = Vector3(1, 2, 3)
    c = v.copy()
    c[0] = 9
    assert v.x == 1.0


def test_distance():
    a = Vector3(1, 1, 1)
    b = Vector3(2, 3, -1)
    assert Vector3.distance(a, b) == pytest.approx((b - a).length())
    assert Vector3.distance_sqr(a, b) == pytest.approx((b - a).sqr_length())
    assert Vector3.distance(a, a) == 0.0


def test_lerp_endpoints_and_midpoint():
    a = Vector3(0, 2, 4)
    b = Vector3(2, 6, -4)
    assert Vector3.lerp(a, b, 0.0) == a
    assert Vector3.lerp(a, b, 1.0) == b
    mid = Vector3.lerp(a, b, 0.5)
    assert Vector3.distance(a, mid) == pytest.approx(Vector3.distance(mid, b))


def test_string_round_trip():
    v = Vector3(1.5, -2, 3.25)
    assert str(v) == "1.5 -2 3.25"
    assert Vector3.from_string(str(v)) == v


def test_from_string_rejects_wrong_count():
    with pytest.raises(ValueError):
        Vector3.from_string("1 2")


def test_length_nonnegative():
    v = Vector3(-1, -1, -1)
    assert v.length() == pytest.approx(math.sqrt(3))