import math

import pytest

from physicsim.simulations import InterferenceSimulation, InterferenceConfig
from physicsim.simulations.interference import (
    path_difference, phase_difference, perceived_amplitude,
)


def test_phase_and_amplitude_formulas():
    """φ = ((|d1 - d2| mod λ) / λ) 2π, A = (1 + cos φ) / 2."""
    assert path_difference(5.0, 2.0, 2.0) == pytest.approx(1.0)
    assert phase_difference(5.0, 2.0, 2.0) == pytest.approx(math.pi)
    assert phase_difference(4.0, 2.0, 2.0) == pytest.approx(0.0)
    assert perceived_amplitude(0.0) == 1.0
    assert perceived_amplitude(math.pi) == pytest.approx(0.0)
    assert perceived_amplitude(math.pi / 2) == pytest.approx(0.5)


def test_centre_of_track_is_constructive():
    state = InterferenceSimulation().current_state()
    assert state.path_difference == pytest.approx(0.0)
    assert state.amplitude == pytest.approx(1.0)
    assert state.frequency == pytest.approx(343.0 / 1.5)


def test_half_wavelength_offset_is_destructive():
    """Moving λ/4 off centre changes the path difference by λ/2."""
    sim = InterferenceSimulation(InterferenceConfig(observer_position=0.525))
    state = sim.current_state()
    assert state.path_difference == pytest.approx(0.75)
    assert state.amplitude == pytest.approx(0.0, abs=1e-12)


def test_sources_at_quarter_points():
    state = InterferenceSimulation(InterferenceConfig(width=20.0)).current_state()
    assert state.sources[0][0] == pytest.approx(5.0)
    assert state.sources[1][0] == pytest.approx(15.0)


def test_observer_walks_and_turns_at_ends():
    sim = InterferenceSimulation(InterferenceConfig(observer_position=0.99, observer_speed=0.15))
    start = sim.observer[0]
    sim.step(0.5)
    assert sim.observer[0] == pytest.approx(start + 0.075)

    sim.step(2.0)
    assert sim.observer[0] == pytest.approx(15.0)
    assert sim.direction == -1.0

    sim.step(1.0)
    assert sim.observer[0] == pytest.approx(14.85)


def test_wavelength_is_live():
    sim = InterferenceSimulation()
    sim.update_config(wavelength=3.0)
    assert sim.current_state().frequency == pytest.approx(343.0 / 3.0)
