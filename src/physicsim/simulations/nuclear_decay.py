# MIT License (see LICENSE)
"""
Radioactive decay of a sample, simulated nucleus by nucleus.

Two modes:
- real time: one sampling interval elapses per ``interval`` seconds of frame
  time, so the curve grows while you watch;
- batch: the whole run to N = 0.5 expected nuclei is computed at init in 50
  steps and the simulation is paused.

The simulated count is charted against the analytic N₀ exp(-λ t).
"""
from __future__ import annotations
import logging
from dataclasses import dataclass

import numpy as np

from ..core import DecaySampler, DecaySample
from .base import Simulation, SimulationKind, SimulationState, coerce_non_negative
from .registry import register

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NuclearDecayConfig:
    """
    Attributes:
        n0: Initial number of nuclei.
        decay_constant: λ in 1/s.
        interval: Sampling interval dt in s (real-time mode).
        real_time: Step with frame time instead of computing the run at once.
        batch_samples: Steps used by the batch run.
        seed: Seed for reproducible runs; None draws fresh entropy.
    """
    n0: int = 1000
    decay_constant: float = 0.5
    interval: float = 1.0
    real_time: bool = True
    batch_samples: int = 50
    seed: int | None = None


@dataclass(frozen=True, eq=False)
class NuclearDecayState(SimulationState):
    """
    Attributes:
        n: Surviving nuclei.
        n0: Initial nuclei.
        model: Analytic expectation at the sampler's current time.
        half_life: ln 2 / λ.
        history: Recorded (t, model, simulated) rows.
    """
    n: int
    n0: int
    model: float
    half_life: float
    history: tuple[DecaySample, ...]


@register("nuclear_decay", "Nuclear Decay")
class NuclearDecaySimulation(Simulation):
    """Monte Carlo decay compared with the exponential law."""
    kind = SimulationKind.TWO_D
    config_class = NuclearDecayConfig
    CSV_HEADER = ("t", "model", "simulated")

    def init(self, config: NuclearDecayConfig) -> None:
        n0 = int(coerce_non_negative("initial nuclei", config.n0))
        decay_constant = coerce_non_negative("decay constant", config.decay_constant)
        interval = coerce_non_negative("sampling interval", config.interval)
        if interval == 0:
            logger.warning("Sampling interval 0 cannot advance time; using 1.0 s")
            interval = 1.0

        self.sampler = DecaySampler(n0, decay_constant, interval, rng=np.random.default_rng(config.seed))
        self._accumulated = 0.0

        if not config.real_time:
            self.sampler.run_to_completion(samples=max(1, config.batch_samples))
            self.time = self.sampler.state.t
            self.paused = True
        else:
            # The first point is recorded immediately, as the first tick
            self.sampler.step()

    def step(self, dt: float) -> None:
        if self.paused:
            return
        self.time += dt
        self._accumulated += dt
        while self._accumulated >= self.sampler.dt:
            self._accumulated -= self.sampler.dt
            self.sampler.step()

    def current_state(self) -> NuclearDecayState:
        s = self.sampler.state
        return NuclearDecayState(
            time=self.time,
            paused=self.paused,
            n=s.n,
            n0=s.n0,
            model=self.sampler.model(s.t),
            half_life=self.sampler.half_life(),
            history=tuple(self.sampler.history),
        )

    def records(self) -> list[DecaySample]:
        return list(self.sampler.history)
