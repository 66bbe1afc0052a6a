# MIT License (see LICENSE)
"""
Two spheres colliding inside a reflecting cube.

Each frame:
    1. Resolve a contact between A and B (restitution e, overlap correction).
    2. Advance both particles by dt * time_scale.
    3. Reflect them off the walls at ±half_extent.
    4. Pause once both speeds round to zero.

Step 4 is a stopping policy for the display, not physics; the number of
decimals is configurable.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass

import numpy as np

from ..collision import resolve_collision, reflect_edges
from ..core import kinematic_step, kinetic_energy, linear_momentum, momentum_table
from ..types import Particle, CollisionRecord, COLLISION_CSV_HEADER
from .base import Simulation, SimulationKind, SimulationState, coerce_non_negative
from .registry import register

logger = logging.getLogger(__name__)

Vec = tuple[float, float, float]


@dataclass(frozen=True)
class CollisionsConfig:
    """
    Parameters of the collisions model.

    Attributes:
        mass_a, mass_b: Masses in kg.
        velocity_a, velocity_b: Initial velocities in m/s.
        position_a, position_b: Initial positions in m.
        restitution: Coefficient of restitution e in [0, 1]. Live.
        size: Size slider value; walls sit at ±size * time_scale. Live.
        time_scale: Simulated seconds per real second.
        radius_scale: k in radius = k * sqrt(mass).
        stop_decimals: Both speeds rounding to zero at this many decimals
                       pauses the simulation. None disables the rule.
    """
    mass_a: float = 0.5
    mass_b: float = 1.0
    velocity_a: Vec = (2.5, 0.0, 0.0)
    velocity_b: Vec = (-2.5, 0.0, 0.0)
    position_a: Vec = (-20.0, 0.0, 0.0)
    position_b: Vec = (20.0, 0.0, 0.0)
    restitution: float = 1.0
    size: float = 10.0
    time_scale: float = 10.0
    radius_scale: float = 10.0
    stop_decimals: int | None = 2


@dataclass(frozen=True, eq=False)
class CollisionsState(SimulationState):
    """
    Attributes:
        positions: (2, 3) array, rows A and B.
        velocities: (2, 3) array, rows A and B.
        radii: Radii of A and B.
        momenta: (3, 3) array, rows A, B and total; the bar chart data.
        kinetic_energy: Total kinetic energy in J.
        half_extent: Wall distance from the origin.
        collision_count: Number of recorded collisions.
    """
    positions: np.ndarray
    velocities: np.ndarray
    radii: tuple[float, float]
    momenta: np.ndarray
    kinetic_energy: float
    half_extent: float
    collision_count: int


@register("collisions", "Collisions")
class CollisionsSimulation(Simulation):
    """Head-on and oblique collisions between two spheres."""
    kind = SimulationKind.THREE_D
    config_class = CollisionsConfig
    CSV_HEADER = COLLISION_CSV_HEADER

    def init(self, config: CollisionsConfig) -> None:
        self.a = Particle(
            mass=coerce_non_negative("mass_a", config.mass_a),
            position=config.position_a,
            velocity=config.velocity_a,
            radius_scale=config.radius_scale,
        )
        self.b = Particle(
            mass=coerce_non_negative("mass_b", config.mass_b),
            position=config.position_b,
            velocity=config.velocity_b,
            radius_scale=config.radius_scale,
        )
        self.log: list[CollisionRecord] = []

    @property
    def half_extent(self) -> float:
        return abs(self.config.size) * self.config.time_scale

    def step(self, dt: float) -> None:
        if self.paused:
            return
        cfg = self.config

        record = resolve_collision(self.a, self.b, cfg.restitution)
        if record is not None:
            self.log.append(record)

        sim_dt = dt * cfg.time_scale
        kinematic_step(self.a, sim_dt)
        kinematic_step(self.b, sim_dt)
        reflect_edges(self.a, self.half_extent)
        reflect_edges(self.b, self.half_extent)
        self.time += dt

        if cfg.stop_decimals is not None and self._at_rest(cfg.stop_decimals):
            self.paused = True
            logger.info("Both particles at rest; collisions simulation paused")

    def _at_rest(self, decimals: int) -> bool:
        return round(self.a.speed, decimals) == 0 and round(self.b.speed, decimals) == 0

    def current_state(self) -> CollisionsState:
        particles = [self.a, self.b]
        return CollisionsState(
            time=self.time,
            paused=self.paused,
            positions=np.array([self.a.position, self.b.position]),
            velocities=np.array([self.a.velocity, self.b.velocity]),
            radii=(self.a.radius, self.b.radius),
            momenta=momentum_table(particles),
            kinetic_energy=kinetic_energy(particles),
            half_extent=self.half_extent,
            collision_count=len(self.log),
        )

    def total_momentum(self) -> np.ndarray:
        return linear_momentum([self.a, self.b])

    def records(self) -> list[CollisionRecord]:
        return list(self.log)
