# MIT License (see LICENSE)
"""
Charged particle spiralling out of a cyclotron.

Geometry (top view, B along +y, motion in the x-z plane):

        dee        gap       dee
    x < -d/2   |x| <= d/2   x > d/2

- In the gap the alternating field accelerates the particle. Its speed is
  interpolated from v_n to v_(n+1) over the crossing time
  t_gap = d m Δv / (|V| |q|), where v_n = sqrt(2 n |V| |q| / m).
- Leaving the gap completes crossing n+1 and the speed becomes v_(n+1).
- In a dee the magnetic field only bends the path: the bending
  acceleration is applied over dt and the speed is restored afterwards.
- Beyond ``dee_radius`` the particle is extracted and moves in a straight
  line.

Units are display units (mass x1e-27 kg, charge x1e-19 C); the drawn orbit
and period keep the right proportions without SI-sized numbers.
"""
from __future__ import annotations
import logging
import math
from collections import deque
from dataclasses import dataclass
from typing import NamedTuple

import numpy as np

from ..core import (
    gap_acceleration,
    gap_crossing_time,
    gap_speed,
    kinematic_step,
    magnetic_turn_acceleration,
)
from ..types import Particle
from ..util import unit, vec3, with_magnitude, zeros3
from .base import Simulation, SimulationKind, SimulationState, coerce_non_negative
from .registry import register

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CyclotronConfig:
    """
    Attributes:
        mass: Particle mass (x1e-27 kg).
        charge: Particle charge (x1e-19 C).
        magnetic_field: Flux density B in T, along +y. Live.
        potential_difference: Gap voltage (display units, V / 100). Live.
        gap_width: Width d of the accelerating gap.
        dee_radius: Radius at which the particle is extracted.
        history_limit: Trail and chart length.
    """
    mass: float = 1.7
    charge: float = 1.6
    magnetic_field: float = 1.2
    potential_difference: float = 100.0
    gap_width: float = 2.0
    dee_radius: float = 100.0
    history_limit: int = 500


class CyclotronSample(NamedTuple):
    """Chart sample: time, speed, gap potential and x displacement."""
    t: float
    speed: float
    potential: float
    x: float


@dataclass(frozen=True, eq=False)
class CyclotronState(SimulationState):
    position: np.ndarray
    velocity: np.ndarray
    speed: float
    crossings: int
    in_gap: bool
    extracted: bool
    period: float
    potential: float
    trail: tuple[np.ndarray, ...]
    series: tuple[CyclotronSample, ...]


@register("cyclotron", "Cyclotron")
class CyclotronSimulation(Simulation):
    """Gap acceleration plus magnetic bending, crossing by crossing."""
    kind = SimulationKind.THREE_D
    config_class = CyclotronConfig

    def init(self, config: CyclotronConfig) -> None:
        self.particle = Particle(
            mass=coerce_non_negative("mass", config.mass),
            charge=config.charge,
            history=deque(maxlen=max(1, config.history_limit)),
        )
        self.direction = vec3(1.0, 0.0, 0.0)
        self.speed = 0.0
        self.crossings = 0
        self.in_gap = True
        self.gap_time = 0.0
        self.extracted = False
        self.series: deque[CyclotronSample] = deque(maxlen=max(1, config.history_limit))

    @property
    def period(self) -> float:
        """Cyclotron period T = 2π m / (q B)."""
        qB = abs(self.particle.charge * self.config.magnetic_field)
        if qB == 0:
            return math.inf
        return 2.0 * math.pi * self.particle.mass / qB

    def potential(self, t: float) -> float:
        """Gap potential V cos(2π t / T), in phase with the crossings."""
        return self.config.potential_difference * math.cos(2.0 * math.pi * t / self.period)

    def step(self, dt: float) -> None:
        if self.paused:
            return
        p = self.particle

        if self.extracted:
            p.acceleration = zeros3()
            kinematic_step(p, dt)
        elif abs(p.position[0]) <= self.config.gap_width / 2:
            self._gap_step(dt)
        else:
            self._dee_step(dt)

        self.time += dt
        p.record_position()
        self.series.append(CyclotronSample(
            self.time, self.speed, self.potential(self.time), float(p.position[0]),
        ))

    def _gap_step(self, dt: float) -> None:
        cfg = self.config
        p = self.particle
        m, q, V = p.mass, p.charge, cfg.potential_difference

        if not self.in_gap:
            self.in_gap = True
            self.gap_time = 0.0

        v_n = gap_speed(self.crossings, V, q, m)
        v_next = gap_speed(self.crossings + 1, V, q, m)
        t_gap = gap_crossing_time(cfg.gap_width, m, v_next - v_n, V, q)

        self.gap_time += dt
        fraction = 1.0 if t_gap == 0 else min(1.0, self.gap_time / t_gap)
        self.speed = v_n + (v_next - v_n) * fraction

        p.velocity = self.direction * self.speed
        p.acceleration = gap_acceleration(p.velocity, V, q, m, cfg.gap_width, axis=0)
        p.position = p.position + p.velocity * dt

    def _dee_step(self, dt: float) -> None:
        cfg = self.config
        p = self.particle

        if self.in_gap:
            self.in_gap = False
            self.crossings += 1
            self.speed = gap_speed(self.crossings, cfg.potential_difference, p.charge, p.mass)
            logger.debug("Gap crossing %d complete, v=%.4f", self.crossings, self.speed)

        x, _, z = p.position
        if math.hypot(x, z) > cfg.dee_radius:
            self.extracted = True
            logger.info("Particle extracted after %d crossings at v=%.4f", self.crossings, self.speed)
            p.acceleration = zeros3()
            p.velocity = self.direction * self.speed
            kinematic_step(p, dt)
            return

        B = vec3(0.0, cfg.magnetic_field, 0.0)
        v = self.direction * self.speed
        a = magnetic_turn_acceleration(v, B, p.charge, p.mass)
        # Rotate only; the speed is owned by the crossing count
        v_new = with_magnitude(v + a * dt, self.speed)
        if self.speed > 0:
            self.direction = unit(v_new)

        p.acceleration = a
        p.velocity = v_new
        p.position = p.position + v_new * dt

    def current_state(self) -> CyclotronState:
        p = self.particle
        return CyclotronState(
            time=self.time,
            paused=self.paused,
            position=p.position.copy(),
            velocity=p.velocity.copy(),
            speed=self.speed,
            crossings=self.crossings,
            in_gap=self.in_gap,
            extracted=self.extracted,
            period=self.period,
            potential=self.potential(self.time),
            trail=tuple(p.history) if p.history is not None else (),
            series=tuple(self.series),
        )
