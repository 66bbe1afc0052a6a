from dataclasses import dataclass

import numpy as np
import pytest

from physicsim.simulations import (
    Simulation, SimulationKind, SimulationState,
    register, get_simulation, list_simulations, create_simulation,
    CollisionsSimulation, CollisionsConfig,
    CircularMotionSimulation, CircularMotionConfig,
    SnellsLawSimulation, SnellsLawConfig,
)
from physicsim.simulations.registry import _REGISTRY


ALL = [
    "circular_motion", "collisions", "cyclotron", "interference",
    "nuclear_decay", "projectile", "scattering", "snells_law",
]


@dataclass(frozen=True)
class _EmptyConfig:
    pass


# =============================================================================
# Registry
# =============================================================================

def test_every_model_is_registered_with_a_kind():
    assert list_simulations() == ALL
    assert list_simulations(SimulationKind.TWO_D) == ["interference", "nuclear_decay"]
    assert len(list_simulations(SimulationKind.THREE_D)) == 6
    assert get_simulation("snells_law").is_static
    assert not get_simulation("collisions").is_static


@pytest.mark.parametrize("name", ALL)
def test_every_model_steps_and_snapshots(name):
    sim = create_simulation(name)
    assert sim.name == name
    for _ in range(5):
        sim.step(1 / 30)
    state = sim.current_state()
    assert isinstance(state, SimulationState)
    # Snapshots hold arrays; equality is identity and they stay hashable
    assert state == state
    assert state != sim.current_state()
    hash(state)
    data = state.to_dict()
    assert isinstance(data["time"], float)
    assert data["paused"] in (True, False)


def test_unknown_name_is_rejected():
    with pytest.raises(ValueError, match="Unknown simulation"):
        get_simulation("pendulum")


def test_register_requires_a_kind():
    with pytest.raises(TypeError):
        @register("no_kind")
        class NoKind(Simulation):
            config_class = _EmptyConfig

            def init(self, config):
                pass

            def step(self, dt):
                pass

            def current_state(self):
                return SimulationState(self.time, self.paused)
    assert "no_kind" not in _REGISTRY


def test_register_rejects_non_simulations_and_duplicates():
    with pytest.raises(TypeError):
        register("plain")(object)

    with pytest.raises(ValueError, match="already registered"):
        @register("collisions")
        class Impostor(CollisionsSimulation):
            pass
    assert get_simulation("collisions") is CollisionsSimulation


def test_incomplete_model_fails_on_construction():
    class Incomplete(Simulation):
        kind = SimulationKind.TWO_D
        config_class = _EmptyConfig

        def init(self, config):
            pass

    with pytest.raises(TypeError):
        Incomplete()


# =============================================================================
# Shared behaviour
# =============================================================================

def test_update_config_rejects_unknown_keys():
    sim = CollisionsSimulation()
    with pytest.raises(ValueError, match="velocity_c"):
        sim.update_config(velocity_c=(1.0, 0.0, 0.0))
    sim.update_config(restitution=0.5)
    assert sim.config.restitution == 0.5


def test_reset_starts_again_from_the_current_config():
    sim = CollisionsSimulation()
    for _ in range(20):
        sim.step(1 / 30)
    sim.update_config(mass_a=2.0)
    sim.reset()

    state = sim.current_state()
    assert state.time == 0.0
    assert state.collision_count == 0
    assert sim.a.mass == 2.0
    assert np.array_equal(state.positions[0], [-20.0, 0.0, 0.0])


def test_toggle_pause_freezes_state():
    sim = CollisionsSimulation()
    assert sim.toggle_pause() is True
    before = sim.current_state()
    sim.step(1 / 30)
    assert np.array_equal(sim.current_state().positions, before.positions)
    assert sim.toggle_pause() is False


def test_negative_mass_is_flipped_with_warning(caplog):
    with caplog.at_level("WARNING"):
        sim = CollisionsSimulation(CollisionsConfig(mass_a=-0.5))
    assert sim.a.mass == 0.5
    assert "mass_a" in caplog.text


# =============================================================================
# Collisions
# =============================================================================

def test_perfectly_inelastic_equal_masses_come_to_rest_and_pause():
    sim = CollisionsSimulation(CollisionsConfig(mass_a=1.0, mass_b=1.0, restitution=0.0))
    for _ in range(100):
        sim.step(1 / 30)
        if sim.paused:
            break

    assert sim.paused
    assert sim.a.speed == pytest.approx(0.0, abs=1e-12)
    assert sim.b.speed == pytest.approx(0.0, abs=1e-12)
    assert len(sim.records()) == 1


def test_rest_rule_can_be_disabled():
    sim = CollisionsSimulation(CollisionsConfig(mass_a=1.0, mass_b=1.0, restitution=0.0, stop_decimals=None))
    for _ in range(100):
        sim.step(1 / 30)
    assert not sim.paused


def test_elastic_collision_conserves_momentum_and_logs():
    sim = CollisionsSimulation()
    p0 = sim.total_momentum()
    while not sim.records():
        sim.step(1 / 30)

    assert np.allclose(sim.total_momentum(), p0)
    record = sim.records()[0]
    assert record.pax + record.pbx == pytest.approx(record.pax_after + record.pbx_after)
    assert len(record) == len(sim.CSV_HEADER)

    state = sim.current_state()
    assert state.momenta.shape == (3, 3)
    assert np.allclose(state.momenta[2], state.momenta[0] + state.momenta[1])
    assert state.half_extent == 100.0


def test_walls_keep_particles_inside():
    sim = CollisionsSimulation(CollisionsConfig(velocity_a=(0.0, 3.0, 0.0), velocity_b=(0.0, 0.0, -4.0)))
    for _ in range(300):
        sim.step(1 / 30)
    state = sim.current_state()
    assert np.all(np.abs(state.positions) <= state.half_extent)


# =============================================================================
# Circular motion
# =============================================================================

def test_circular_motion_forces_in_si():
    """F = m v² / r and ω = v / r, reported in SI whatever the drawing scale."""
    state = CircularMotionSimulation().current_state()
    assert state.path_radius == 200.0
    assert state.angular_velocity == pytest.approx(0.5)
    assert np.linalg.norm(state.centripetal_force) == pytest.approx(5.0 * 10.0 ** 2 / 20.0)
    assert state.centrifugal_force is None


def test_rotating_frame_reports_centrifugal_force():
    state = CircularMotionSimulation(CircularMotionConfig(rotating_frame=True)).current_state()
    assert np.allclose(state.centrifugal_force, -state.centripetal_force)


def test_angular_velocity_sets_speed():
    sim = CircularMotionSimulation(CircularMotionConfig(angular_velocity=0.25))
    assert sim.particle.speed == pytest.approx(0.25 * 200.0)


def test_rk4_holds_the_radius():
    sim = CircularMotionSimulation(CircularMotionConfig(integrator="rk4"))
    for _ in range(600):
        sim.step(1 / 60)
    assert np.linalg.norm(sim.particle.position) == pytest.approx(sim.path_radius, rel=1e-3)
    assert sim.current_state().series[-1].t == pytest.approx(10.0)


def test_unknown_integrator():
    with pytest.raises(ValueError, match="integrator"):
        CircularMotionSimulation(CircularMotionConfig(integrator="euler"))


# =============================================================================
# Snell's law
# =============================================================================

def test_snell_default_passes_straight_through():
    """With n = 1 the block is invisible to the ray."""
    state = SnellsLawSimulation().current_state()
    directions = np.array(state.directions)
    assert np.allclose(directions, directions[0])
    assert state.segments[-1][1] is None


def test_snell_source_never_moves_inside_block():
    sim = SnellsLawSimulation()
    sim.update_config(source_position=(0.0, 0.0, 0.0))
    sim.step(1 / 30)
    assert np.array_equal(sim.source, [-25.0, 25.0, 0.0])

    sim.update_config(source_position=(-30.0, 30.0, 0.0))
    sim.step(1 / 30)
    assert np.array_equal(sim.source, [-30.0, 30.0, 0.0])


def test_snell_index_change_rebuilds_the_path(caplog):
    sim = SnellsLawSimulation()
    sim.update_config(refractive_index=1.5)
    sim.step(1 / 30)
    table = sim.current_state().table()
    assert table[0][0] == pytest.approx(45.0)
    assert table[0][1] == ""
    assert len(sim.records()) == 2

    with caplog.at_level("WARNING"):
        sim.update_config(refractive_index=0.0)
        sim.step(1 / 30)
    assert sim.geometry.refractive_index == 1.0
    assert "Refractive index 0" in caplog.text
