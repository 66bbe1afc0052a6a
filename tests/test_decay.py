import math

import numpy as np
import pytest

from physicsim.core import DecaySampler, decay_probability
from physicsim.simulations import NuclearDecaySimulation, NuclearDecayConfig


def test_probability_formula():
    """p = 1 - exp(-λ dt)."""
    assert decay_probability(0.5, 1.0) == pytest.approx(1 - math.exp(-0.5))
    assert decay_probability(0.0, 10.0) == 0.0

    sampler = DecaySampler(10, 0.5, 2.0)
    assert sampler.probability() == pytest.approx(1 - math.exp(-1.0))
    assert sampler.probability(1.0) == pytest.approx(1 - math.exp(-0.5))


def test_population_never_increases_and_stays_in_range():
    sampler = DecaySampler(1000, 0.5, 0.2, rng=np.random.default_rng(7))
    counts = [sampler.state.n]
    for _ in range(100):
        sampler.step()
        counts.append(sampler.state.n)

    assert all(0 <= n <= 1000 for n in counts)
    assert all(b <= a for a, b in zip(counts, counts[1:]))
    assert sampler.state.t == pytest.approx(20.0)


def test_certain_decay_empties_sample_in_one_step():
    """With p = 1 (huge λ dt) every nucleus decays on the first step."""
    sampler = DecaySampler(500, 1e6, 1.0, rng=np.random.default_rng(0))
    assert decay_probability(1e6, 1.0) == 1.0
    assert sampler.step() == 500
    assert sampler.state.n == 0


def test_stable_sample_never_decays():
    sampler = DecaySampler(100, 0.0, 1.0, rng=np.random.default_rng(0))
    for _ in range(20):
        assert sampler.step() == 0
    assert sampler.state.n == 100
    assert sampler.half_life() == math.inf


def test_simulated_count_tracks_model():
    """Over a large sample the Monte Carlo count stays near N₀ exp(-λ t)."""
    sampler = DecaySampler(100_000, 0.3, 0.5, rng=np.random.default_rng(42))
    for _ in range(10):
        sampler.step()
    expected = sampler.model(sampler.state.t)
    assert sampler.state.n == pytest.approx(expected, rel=0.02)


def test_batch_run_records_samples_plus_final_point():
    """Batch mode ends where the model expects half a nucleus."""
    sampler = DecaySampler(1000, 0.5, 1.0, rng=np.random.default_rng(1))
    history = sampler.run_to_completion(samples=50)

    assert len(history) == 51
    t_end = math.log(2 * 1000) / 0.5
    assert history[-1].t == pytest.approx(t_end)
    assert history[-1].model == pytest.approx(0.5)
    assert history[0] == (0.0, 1000.0, 1000)


def test_batch_run_with_no_nuclei():
    history = DecaySampler(0, 0.5, 1.0).run_to_completion()
    assert history == [(0.0, 0.0, 0)]


def test_negative_inputs_rejected():
    with pytest.raises(ValueError):
        DecaySampler(-1, 0.5, 1.0)
    with pytest.raises(ValueError):
        DecaySampler(10, -0.5, 1.0)
    with pytest.raises(ValueError):
        DecaySampler(10, 0.5, 0.0)


def test_seeded_runs_are_reproducible():
    a = NuclearDecaySimulation(NuclearDecayConfig(seed=123, real_time=False))
    b = NuclearDecaySimulation(NuclearDecayConfig(seed=123, real_time=False))
    assert a.records() == b.records()


def test_real_time_mode_samples_once_per_interval():
    sim = NuclearDecaySimulation(NuclearDecayConfig(seed=3, interval=1.0))
    # First point is recorded at init
    assert len(sim.records()) == 1

    for _ in range(90):
        sim.step(1 / 30)
    # 3 s of frame time: three more intervals
    assert len(sim.records()) in (3, 4)
    assert sim.current_state().time == pytest.approx(3.0)


def test_batch_mode_is_paused_and_complete():
    sim = NuclearDecaySimulation(NuclearDecayConfig(seed=5, real_time=False, batch_samples=20))
    state = sim.current_state()
    assert state.paused
    assert len(state.history) == 21
    assert sim.CSV_HEADER == ("t", "model", "simulated")

    sim.step(1.0)
    assert len(sim.current_state().history) == 21


def test_negative_config_values_are_flipped(caplog):
    with caplog.at_level("WARNING"):
        sim = NuclearDecaySimulation(NuclearDecayConfig(n0=-200, decay_constant=-0.5, seed=0))
    assert sim.sampler.state.n0 == 200
    assert sim.sampler.state.decay_constant == 0.5
    assert "not physical" in caplog.text
