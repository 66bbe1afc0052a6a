# MIT License (see LICENSE)
"""
Projectile under uniform gravity bouncing on the ground plane y = 0.

The vertical axis is y. Each bounce reconstructs the impact speed from the
energy relation (see core.integrators.reflect_at_boundary), so the bounce
height does not depend on the frame rate. The simulation pauses itself when
the projectile leaves the ±size square in x or z.
"""
from __future__ import annotations
import logging
from collections import deque
from dataclasses import dataclass
from typing import NamedTuple

import numpy as np

from ..core import gravity_acceleration, kinematic_step, reflect_at_boundary
from ..types import Particle
from .base import Simulation, SimulationKind, SimulationState, coerce_non_negative
from .registry import register

logger = logging.getLogger(__name__)

Vec = tuple[float, float, float]

VERTICAL = 1


@dataclass(frozen=True)
class ProjectileConfig:
    """
    Attributes:
        mass: Mass in kg (only affects the drawn radius).
        velocity: Initial velocity u in m/s.
        position: Initial position s in m.
        restitution: Coefficient of restitution e at the ground. Live.
        gravity: Magnitude g in m/s², acting along -y. Live.
        size: Half-width of the ground square in m. Live.
        radius_scale: k in radius = k * sqrt(mass).
        history_limit: Number of chart samples kept.
    """
    mass: float = 2.0
    velocity: Vec = (0.0, 0.0, 10.0)
    position: Vec = (0.0, 0.0, 20.0)
    restitution: float = 1.0
    gravity: float = 9.81
    size: float = 250.0
    radius_scale: float = 4.0
    history_limit: int = 200


class Bounce(NamedTuple):
    """One ground contact: time, speed at the ground and speed after."""
    t: float
    v_at_ground: float
    v_after: float


class ProjectileSample(NamedTuple):
    """One chart sample of the vertical motion."""
    t: float
    height: float
    vertical_velocity: float
    vertical_acceleration: float


@dataclass(frozen=True, eq=False)
class ProjectileState(SimulationState):
    position: np.ndarray
    velocity: np.ndarray
    acceleration: np.ndarray
    radius: float
    size: float
    series: tuple[ProjectileSample, ...]
    bounce_count: int


@register("projectile", "Projectile Motion")
class ProjectileSimulation(Simulation):
    """Projectile motion with restitution at the ground."""
    kind = SimulationKind.THREE_D
    config_class = ProjectileConfig
    CSV_HEADER = ("t", "v_at_ground", "v_after")

    def init(self, config: ProjectileConfig) -> None:
        self.particle = Particle(
            mass=coerce_non_negative("mass", config.mass),
            position=config.position,
            velocity=config.velocity,
            acceleration=(0.0, -config.gravity, 0.0),
            radius_scale=config.radius_scale,
        )
        self.bounces: list[Bounce] = []
        self.series: deque[ProjectileSample] = deque(maxlen=max(1, config.history_limit))

    def step(self, dt: float) -> None:
        if self.paused:
            return
        cfg = self.config
        p = self.particle

        p.acceleration = gravity_acceleration((0.0, -cfg.gravity, 0.0))
        kinematic_step(p, dt)
        self.time += dt

        v_b = reflect_at_boundary(p, VERTICAL, 0.0, cfg.restitution, side=-1)
        if v_b is not None:
            bounce = Bounce(self.time, v_b, float(p.velocity[VERTICAL]))
            self.bounces.append(bounce)
            logger.debug("Bounce at t=%.3f: v_b=%.4f -> %.4f", *bounce)

        self.series.append(ProjectileSample(
            self.time,
            float(p.position[VERTICAL]),
            float(p.velocity[VERTICAL]),
            float(p.acceleration[VERTICAL]),
        ))

        if self._outside(cfg.size):
            self.paused = True
            logger.info("Projectile left the simulation area; paused")

    def _outside(self, size: float) -> bool:
        x, _, z = self.particle.position
        return abs(x) > size or abs(z) > size

    def current_state(self) -> ProjectileState:
        p = self.particle
        return ProjectileState(
            time=self.time,
            paused=self.paused,
            position=p.position.copy(),
            velocity=p.velocity.copy(),
            acceleration=p.acceleration.copy(),
            radius=p.radius,
            size=self.config.size,
            series=tuple(self.series),
            bounce_count=len(self.bounces),
        )

    def records(self) -> list[Bounce]:
        return list(self.bounces)
