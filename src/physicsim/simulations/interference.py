# MIT License (see LICENSE)
"""
Two-source interference heard by a moving observer.

Two coherent speakers sit at a quarter and three quarters of a line of
length ``width``. An observer walks back and forth along the line; at each
position the path difference to the two speakers gives the phase
difference and hence the perceived loudness:

    φ = ((|d1 - d2| mod λ) / λ) 2π
    A = (1 + cos φ) / 2

A = 1 is fully constructive, A = 0 fully destructive. The tone frequency is
v / λ. No sound is produced.
"""
from __future__ import annotations
import logging
import math
from dataclasses import dataclass

import numpy as np

from ..constants import SPEED_OF_SOUND
from ..util import distance, vec3
from .base import Simulation, SimulationKind, SimulationState, coerce_non_negative
from .registry import register

logger = logging.getLogger(__name__)


def path_difference(d1: float, d2: float, wavelength: float) -> float:
    """|d1 - d2| reduced modulo one wavelength."""
    return abs(d1 - d2) % wavelength


def phase_difference(d1: float, d2: float, wavelength: float) -> float:
    """Phase difference in radians, in [0, 2π)."""
    return path_difference(d1, d2, wavelength) / wavelength * 2.0 * math.pi


def perceived_amplitude(phase: float) -> float:
    """Relative loudness (1 + cos φ) / 2 of two equal coherent waves."""
    return (1.0 + math.cos(phase)) / 2.0


@dataclass(frozen=True)
class InterferenceConfig:
    """
    Attributes:
        wavelength: λ in m. Live.
        width: Length of the observer's track in m.
        observer_position: Starting point as a fraction 0..1 of the track.
        observer_speed: Walking speed in m/s. Live.
        wave_speed: v in m/s.
    """
    wavelength: float = 1.5
    width: float = 15.0
    observer_position: float = 0.5
    observer_speed: float = 0.15
    wave_speed: float = SPEED_OF_SOUND


@dataclass(frozen=True, eq=False)
class InterferenceState(SimulationState):
    sources: tuple[np.ndarray, np.ndarray]
    observer: np.ndarray
    observer_fraction: float
    path_difference: float
    phase_difference: float
    amplitude: float
    frequency: float


@register("interference", "Interference")
class InterferenceSimulation(Simulation):
    """Constructive and destructive interference along a line."""
    kind = SimulationKind.TWO_D
    config_class = InterferenceConfig

    def init(self, config: InterferenceConfig) -> None:
        self.width = coerce_non_negative("track width", config.width)
        self.sources = (vec3(0.25 * self.width), vec3(0.75 * self.width))
        fraction = min(1.0, max(0.0, config.observer_position))
        self.observer = vec3(fraction * self.width)
        self.direction = 1.0

    @property
    def observer_fraction(self) -> float:
        return float(self.observer[0] / self.width) if self.width else 0.0

    def step(self, dt: float) -> None:
        if self.paused:
            return
        x = float(self.observer[0]) + self.direction * abs(self.config.observer_speed) * dt
        # Turn around at either end of the track
        if x > self.width:
            x, self.direction = self.width, -1.0
        elif x < 0.0:
            x, self.direction = 0.0, 1.0
        self.observer = vec3(x)
        self.time += dt

    def current_state(self) -> InterferenceState:
        cfg = self.config
        wavelength = abs(cfg.wavelength)
        d1 = distance(self.sources[0], self.observer)
        d2 = distance(self.sources[1], self.observer)
        if wavelength > 0:
            pd = path_difference(d1, d2, wavelength)
            phase = phase_difference(d1, d2, wavelength)
            frequency = cfg.wave_speed / wavelength
        else:
            pd, phase, frequency = 0.0, 0.0, math.inf
        return InterferenceState(
            time=self.time,
            paused=self.paused,
            sources=(self.sources[0].copy(), self.sources[1].copy()),
            observer=self.observer.copy(),
            observer_fraction=self.observer_fraction,
            path_difference=pd,
            phase_difference=phase,
            amplitude=perceived_amplitude(phase),
            frequency=frequency,
        )
