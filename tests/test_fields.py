import math

import numpy as np
import pytest

from physicsim.constants import K_COULOMB, ELEMENTARY_CHARGE, PROTON_MASS
from physicsim.core import (
    lorentz_acceleration,
    magnetic_turn_acceleration,
    gap_speed,
    gap_crossing_time,
    gap_acceleration,
    uniform_field_acceleration,
    coulomb_force_magnitude,
    coulomb_accelerations,
    centripetal_acceleration,
)
from physicsim.util import vec3, norm, with_magnitude


def test_lorentz_is_perpendicular_to_velocity():
    v = vec3(3.0, 0.0, 1.0)
    B = vec3(0.0, 1.2, 0.0)
    a = lorentz_acceleration(v, B, q=1.6, m=1.7)
    assert np.dot(a, v) == pytest.approx(0.0, abs=1e-12)
    assert np.allclose(a, (1.6 / 1.7) * np.cross(v, B))


def test_magnetic_turn_magnitude_and_direction():
    """|a| = |v| B q / m along unit(v × B)."""
    v = vec3(5.0, 0.0, 0.0)
    B = vec3(0.0, 2.0, 0.0)
    a = magnetic_turn_acceleration(v, B, q=1.0, m=2.0)
    assert norm(a) == pytest.approx(5.0 * 2.0 * 1.0 / 2.0)
    assert np.allclose(a / norm(a), vec3(0.0, 0.0, 1.0))


def test_magnetic_turning_preserves_speed():
    """Applying the bending acceleration then restoring |v| keeps the speed over many steps."""
    v = vec3(4.0, 0.0, 0.0)
    B = vec3(0.0, 1.2, 0.0)
    speed = norm(v)
    for _ in range(1000):
        a = magnetic_turn_acceleration(v, B, q=1.6, m=1.7)
        v = with_magnitude(v + a * 0.01, speed)
    assert norm(v) == pytest.approx(speed, rel=1e-12)
    assert v[1] == 0.0


def test_gap_speed_energy_per_crossing():
    """½ m v_n² = n |qV|."""
    q, V, m = 1.6, 100.0, 1.7
    for n in range(1, 6):
        v = gap_speed(n, V, q, m)
        assert 0.5 * m * v * v == pytest.approx(n * q * V)
    assert gap_speed(0, V, q, m) == 0.0
    assert gap_speed(3, -V, -q, m) == gap_speed(3, V, q, m)


def test_gap_crossing_time_matches_uniform_acceleration():
    """t = Δv / a with a = |qV| / (m d)."""
    d, m, V, q = 2.0, 1.7, 100.0, 1.6
    dv = gap_speed(1, V, q, m)
    a = abs(q * V) / (m * d)
    assert gap_crossing_time(d, m, dv, V, q) == pytest.approx(dv / a)
    assert gap_crossing_time(d, m, dv, 0.0, q) == math.inf


def test_gap_acceleration_follows_travel_direction():
    forward = gap_acceleration(vec3(2.0, 0, 0), V=100.0, q=1.6, m=1.7, d=2.0)
    backward = gap_acceleration(vec3(-2.0, 0, 1.0), V=100.0, q=1.6, m=1.7, d=2.0)
    assert forward[0] > 0 and backward[0] < 0
    assert forward[0] == pytest.approx(-backward[0])


def test_uniform_field():
    a = uniform_field_acceleration(vec3(0, 10.0, 0), q=2.0, m=4.0)
    assert np.allclose(a, vec3(0, 5.0, 0))
    assert np.array_equal(uniform_field_acceleration(vec3(1, 1, 1), 1.0, 0.0), vec3())


def test_coulomb_magnitude():
    r = 1e-13
    q1, q2 = 79 * ELEMENTARY_CHARGE, 2 * ELEMENTARY_CHARGE
    assert coulomb_force_magnitude(q1, q2, r) == pytest.approx(K_COULOMB * q1 * q2 / r**2)
    assert coulomb_force_magnitude(q1, q2, 0.0) == 0.0


def test_coulomb_like_charges_repel_with_newtons_third_law():
    m1, m2 = 79 * PROTON_MASS, 4 * PROTON_MASS
    q1, q2 = 79 * ELEMENTARY_CHARGE, 2 * ELEMENTARY_CHARGE
    p1, p2 = vec3(), vec3(1e-13, 0, 0)
    a1, a2 = coulomb_accelerations(p1, q1, m1, p2, q2, m2)

    assert a1[0] < 0 < a2[0]
    assert np.allclose(m1 * a1, -m2 * a2, rtol=1e-12, atol=0.0)


def test_coulomb_acts_at_sub_picometre_separation():
    """Nuclear-scale distances are far below 1e-12 m but still interact."""
    q1, q2 = 79 * ELEMENTARY_CHARGE, 2 * ELEMENTARY_CHARGE
    m2 = 4 * PROTON_MASS
    for r in (3e-13, 1e-14, 1e-15):
        a1, a2 = coulomb_accelerations(vec3(), q1, 0.0, vec3(r, 0, 0), q2, m2)
        assert np.array_equal(a1, vec3())
        assert a2[0] == pytest.approx(K_COULOMB * q1 * q2 / (r * r) / m2)


def test_coulomb_opposite_charges_attract():
    a1, a2 = coulomb_accelerations(vec3(), 1.0, 1.0, vec3(1.0, 0, 0), -1.0, 1.0)
    assert a1[0] > 0 > a2[0]


def test_coulomb_cutoff_and_degenerate_distance():
    far = coulomb_accelerations(vec3(), 1.0, 1.0, vec3(10.0, 0, 0), 1.0, 1.0, cutoff=5.0)
    same = coulomb_accelerations(vec3(), 1.0, 1.0, vec3(), 1.0, 1.0)
    for a in (*far, *same):
        assert np.array_equal(a, vec3())


def test_centripetal_uses_tangential_speed_only():
    pos = vec3(20.0, 0.0, 0.0)
    # 3 m/s straight at the centre, 10 m/s tangential
    v = vec3(-3.0, 0.0, 10.0)
    a = centripetal_acceleration(pos, v, vec3(), 20.0)
    assert np.allclose(a, vec3(-100.0 / 20.0, 0.0, 0.0))
