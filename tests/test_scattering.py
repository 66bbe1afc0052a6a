import numpy as np
import pytest

from physicsim.constants import K_COULOMB, ELEMENTARY_CHARGE, PROTON_MASS
from physicsim.simulations import ScatteringSimulation, ScatteringConfig
from physicsim.simulations.scattering import grid_offsets


def test_grid_offsets_count_and_spacing():
    assert grid_offsets(0, 150, 150) == [(0.0, 0.0)]

    grid = grid_offsets(4, 150, 150)
    assert len(grid) == 25
    ys = sorted({y for y, _ in grid})
    assert ys == pytest.approx([-50.0, -25.0, 0.0, 25.0, 50.0])

    # Clamped to 0..6
    assert len(grid_offsets(10, 150, 150)) == 49
    assert len(grid_offsets(-3, 150, 150)) == 1


def test_head_on_alpha_turns_back_at_closest_approach():
    """
    Energy conservation for a fixed nucleus, starting at distance r0:
      ½ m_α u² + k q_N q_α / r0 = k q_N q_α / d_min
    The alpha stops at d_min and comes back out along the axis.
    """
    sim = ScatteringSimulation(ScatteringConfig(count=0))
    alpha = sim.alphas[0]
    u = alpha.speed
    r0 = float(np.linalg.norm(alpha.position))

    kqq = K_COULOMB * (79 * ELEMENTARY_CHARGE) * (2 * ELEMENTARY_CHARGE)
    m = 4 * PROTON_MASS
    energy = 0.5 * m * u * u + kqq / r0
    d_min = kqq / energy

    closest = np.inf
    for _ in range(2400):
        sim.step(1 / 240)
        closest = min(closest, float(np.linalg.norm(alpha.position)))

    assert closest == pytest.approx(d_min, rel=0.05)
    assert alpha.velocity[0] < 0
    r = float(np.linalg.norm(alpha.position))
    assert 0.5 * m * alpha.speed ** 2 + kqq / r == pytest.approx(energy, rel=1e-2)

    state = sim.current_state()
    assert state.deflections[0] == pytest.approx(np.pi, abs=1e-6)


def test_off_axis_alphas_deflect_less():
    sim = ScatteringSimulation(ScatteringConfig(count=2))
    for _ in range(600):
        sim.step(1 / 60)
    deflections = sim.current_state().deflections
    centre = len(deflections) // 2
    assert deflections[centre] == max(deflections)
    assert all(d < deflections[centre] for i, d in enumerate(deflections) if i != centre)


def test_nucleus_fixed_unless_recoil():
    fixed = ScatteringSimulation(ScatteringConfig(count=0))
    recoil = ScatteringSimulation(ScatteringConfig(count=0, nucleus_recoil=True))
    for _ in range(300):
        fixed.step(1 / 60)
        recoil.step(1 / 60)

    assert np.array_equal(fixed.current_state().nucleus_position, np.zeros(3))
    assert recoil.current_state().nucleus_position[0] > 0


def test_alphas_beyond_cutoff_move_in_straight_lines():
    sim = ScatteringSimulation(ScatteringConfig(count=0, cutoff=100.0))
    alpha = sim.alphas[0]
    v0 = alpha.velocity.copy()
    for _ in range(20):
        sim.step(1 / 60)
    assert np.array_equal(alpha.velocity, v0)


def test_state_reports_length_units_and_trails():
    sim = ScatteringSimulation(ScatteringConfig(count=1, trail_length=5))
    state = sim.current_state()
    assert state.alpha_positions.shape == (4, 3)
    assert np.allclose(state.alpha_positions[:, 0], -300.0)

    for _ in range(8):
        sim.step(1 / 60)
    state = sim.current_state()
    assert all(len(trail) == 5 for trail in state.trails)
    assert state.trails[0][-1] == pytest.approx(state.alpha_positions[0])


def test_non_integer_proton_number_is_floored(caplog):
    with caplog.at_level("WARNING"):
        sim = ScatteringSimulation(ScatteringConfig(proton_number=-79.6, count=0))
    assert sim.nucleus.charge == pytest.approx(79 * ELEMENTARY_CHARGE)
    assert "coerced" in caplog.text
