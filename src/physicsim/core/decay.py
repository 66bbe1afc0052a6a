# MIT License (see LICENSE)
"""
Stochastic radioactive decay.

Each surviving nucleus independently decays in an interval dt with
probability

    p = 1 - exp(-λ dt)

The sampler draws one uniform number per surviving nucleus every step. This
is deliberately not replaced by a single binomial draw: the point is to
watch the per-nucleus Monte Carlo process approach the analytic curve

    N(t) = N₀ exp(-λ t)
"""
from __future__ import annotations
import logging
import math
from typing import NamedTuple

import numpy as np

from ..types import DecayState

logger = logging.getLogger(__name__)


class DecaySample(NamedTuple):
    """One recorded point: time, analytic model count and simulated count."""
    t: float
    model: float
    simulated: int


def decay_probability(decay_constant: float, dt: float) -> float:
    """Probability that one nucleus decays within dt."""
    return 1.0 - math.exp(-decay_constant * dt)


class DecaySampler:
    """
    Per-nucleus Monte Carlo decay compared against the exponential model.

    Attributes:
        state: Current DecayState (n, n0, λ, t).
        dt: Sampling interval in seconds.
        history: Recorded DecaySample rows, one per step.
    """

    def __init__(
        self,
        n0: int,
        decay_constant: float,
        dt: float,
        rng: np.random.Generator | None = None,
    ) -> None:
        if n0 < 0:
            raise ValueError(f"Initial nuclei must be non-negative, got {n0}")
        if decay_constant < 0:
            raise ValueError(f"Decay constant must be non-negative, got {decay_constant}")
        if dt <= 0:
            raise ValueError(f"Sampling interval must be positive, got {dt}")

        self.state = DecayState(n=int(n0), n0=int(n0), decay_constant=float(decay_constant))
        self.dt = float(dt)
        self.rng = rng if rng is not None else np.random.default_rng()
        self.history: list[DecaySample] = []

    def model(self, t: float) -> float:
        """Analytic expectation N₀ exp(-λ t)."""
        s = self.state
        return s.n0 * math.exp(-s.decay_constant * t)

    def probability(self, dt: float | None = None) -> float:
        """Per-nucleus decay probability over dt (the sampling interval by default)."""
        return decay_probability(self.state.decay_constant, self.dt if dt is None else dt)

    def half_life(self) -> float:
        """t½ = ln 2 / λ (infinite for a stable sample)."""
        if self.state.decay_constant == 0:
            return math.inf
        return math.log(2.0) / self.state.decay_constant

    def step(self) -> int:
        """
        Record the current point and advance one interval.

        Returns:
            The number of nuclei that decayed during this interval.
        """
        s = self.state
        self.history.append(DecaySample(s.t, self.model(s.t), s.n))

        p = self.probability()
        # One independent draw per surviving nucleus
        draws = self.rng.random(s.n)
        decayed = int(np.count_nonzero(draws <= p))

        s.n -= decayed
        s.t += self.dt
        logger.debug("t=%.3f decayed=%d remaining=%d", s.t, decayed, s.n)
        return decayed

    def run_to_completion(self, samples: int = 50) -> list[DecaySample]:
        """
        Batch mode: simulate until the model expects half a nucleus left.

        Solving N₀ exp(-λ t) = 0.5 gives t_end = ln(2 N₀) / λ. The interval
        is reset to t_end / samples so the whole run takes ``samples`` steps.

        Returns:
            The full history including a final point at the end time.
        """
        s = self.state
        if s.n0 == 0:
            self.history.append(DecaySample(s.t, 0.0, 0))
            return self.history

        if s.decay_constant > 0:
            t_end = math.log(2.0 * s.n0) / s.decay_constant
            self.dt = t_end / samples
        # Step count, not a float comparison on t, so rounding cannot add a step
        for _ in range(samples):
            self.step()
        self.history.append(DecaySample(s.t, self.model(s.t), s.n))
        logger.info(
            "Decay run finished at t=%.3f with %d of %d nuclei remaining",
            s.t, s.n, s.n0,
        )
        return self.history
