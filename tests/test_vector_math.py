import numpy as np
import pytest

from physicsim.util import (
    f64, vec3, dot, cross, norm, unit, distance, project, with_magnitude,
)


def test_cross_matches_right_hand_rule():
    x, y, z = vec3(1, 0, 0), vec3(0, 1, 0), vec3(0, 0, 1)
    assert np.array_equal(cross(x, y), z)
    assert np.array_equal(cross(y, z), x)
    assert np.array_equal(cross(z, x), y)

    a, b = vec3(1.5, -2.0, 0.25), vec3(-3.0, 0.5, 4.0)
    assert np.allclose(cross(a, b), np.cross(a, b))


def test_unit_of_zero_vector_is_zero():
    """A zero vector has no direction; unit() must not divide by zero."""
    u = unit(vec3(0.0, 0.0, 0.0))
    assert np.array_equal(u, vec3())
    assert norm(unit(vec3(3.0, 4.0, 0.0))) == pytest.approx(1.0)


def test_helpers_do_not_alias_inputs():
    v = vec3(1.0, 2.0, 3.0)
    w = f64(v)
    w[0] = 99.0
    assert v[0] == 1.0

    scaled = with_magnitude(v, 10.0)
    assert norm(scaled) == pytest.approx(10.0)
    assert v[0] == 1.0


def test_project_splits_into_normal_and_tangential():
    v = vec3(3.0, 4.0, -1.0)
    n = vec3(1.0, 0.0, 0.0)
    vn, vt = project(v, n)
    assert vn == 3.0
    assert np.array_equal(vt, vec3(0.0, 4.0, -1.0))
    assert dot(vt, n) == 0.0


def test_distance():
    assert distance(vec3(1, 1, 1), vec3(4, 5, 1)) == pytest.approx(5.0)
