# MIT License (see LICENSE)
"""
A mass on a horizontal circle around a fixed centre.

The particle starts at (r, 0, 0) moving along +z. Each frame the velocity
is split into the part along the line to the centre and the tangential
part; only the tangential part sets the centripetal pull |v_t|²/r.

Lengths and speeds are drawn at ``scale`` times their physical value; the
chart series are divided back to SI.
"""
from __future__ import annotations
import logging
from collections import deque
from dataclasses import dataclass
from typing import NamedTuple

import numpy as np

from ..core import centripetal_acceleration, kinematic_step, rk4_step
from ..types import Particle
from ..util import project, unit, vec3, zeros3
from .base import Simulation, SimulationKind, SimulationState, coerce_non_negative
from .registry import register

logger = logging.getLogger(__name__)

INTEGRATORS = ("kinematic", "rk4")


@dataclass(frozen=True)
class CircularMotionConfig:
    """
    Attributes:
        mass: Mass in kg.
        radius: Path radius in m.
        speed: Tangential speed in m/s. Ignored if angular_velocity is set.
        angular_velocity: ω in rad/s; when given, speed = ω r.
        scale: Drawing units per metre.
        integrator: "kinematic" (constant acceleration per frame) or "rk4".
        rotating_frame: Report the centrifugal force seen by a co-rotating
                        observer.
        radius_scale: k in radius = k * sqrt(mass) for the drawn sphere.
        history_limit: Number of chart samples kept.
    """
    mass: float = 5.0
    radius: float = 20.0
    speed: float = 10.0
    angular_velocity: float | None = None
    scale: float = 10.0
    integrator: str = "kinematic"
    rotating_frame: bool = False
    radius_scale: float = 2.0
    history_limit: int = 500


class CircularSample(NamedTuple):
    """x-components in SI units: displacement, velocity, acceleration."""
    t: float
    x: float
    v_x: float
    a_x: float


@dataclass(frozen=True, eq=False)
class CircularMotionState(SimulationState):
    position: np.ndarray
    velocity: np.ndarray
    tangential_velocity: np.ndarray
    centripetal_acceleration: np.ndarray
    centripetal_force: np.ndarray
    centrifugal_force: np.ndarray | None
    centre: np.ndarray
    path_radius: float
    angular_velocity: float
    series: tuple[CircularSample, ...]


@register("circular_motion", "Circular Motion")
class CircularMotionSimulation(Simulation):
    """Uniform circular motion driven by a centripetal acceleration."""
    kind = SimulationKind.THREE_D
    config_class = CircularMotionConfig

    def init(self, config: CircularMotionConfig) -> None:
        if config.integrator not in INTEGRATORS:
            raise ValueError(f"Unknown integrator {config.integrator!r}; expected one of {INTEGRATORS}")

        self.path_radius = coerce_non_negative("radius", config.radius) * config.scale
        if config.angular_velocity is not None:
            speed = config.angular_velocity * self.path_radius
        else:
            speed = config.speed * config.scale

        self.centre = zeros3()
        self.particle = Particle(
            mass=coerce_non_negative("mass", config.mass),
            position=self.centre + vec3(self.path_radius, 0.0, 0.0),
            velocity=vec3(0.0, 0.0, speed),
            radius_scale=config.radius_scale,
        )
        self.particle.acceleration = self._acceleration(self.particle.position, self.particle.velocity)
        self.series: deque[CircularSample] = deque(maxlen=max(1, config.history_limit))

    def _acceleration(self, position: np.ndarray, velocity: np.ndarray) -> np.ndarray:
        return centripetal_acceleration(position, velocity, self.centre, self.path_radius)

    @property
    def angular_velocity(self) -> float:
        """ω = |v_t| / r in rad/s."""
        if self.path_radius == 0:
            return 0.0
        _, v_t = project(self.particle.velocity, unit(self.centre - self.particle.position))
        return float(np.linalg.norm(v_t)) / self.path_radius

    def step(self, dt: float) -> None:
        if self.paused:
            return
        p = self.particle

        if self.config.integrator == "rk4":
            rk4_step(p, dt, self._acceleration)
        else:
            p.acceleration = self._acceleration(p.position, p.velocity)
            kinematic_step(p, dt)
        self.time += dt

        s = self.config.scale
        self.series.append(CircularSample(
            self.time,
            float(p.position[0]) / s,
            float(p.velocity[0]) / s,
            float(p.acceleration[0]) / s,
        ))

    def current_state(self) -> CircularMotionState:
        p = self.particle
        s = self.config.scale
        a = self._acceleration(p.position, p.velocity)
        _, v_t = project(p.velocity, unit(self.centre - p.position))
        # Forces in SI: drawing units / scale
        force = a * (p.mass / s)
        return CircularMotionState(
            time=self.time,
            paused=self.paused,
            position=p.position.copy(),
            velocity=p.velocity.copy(),
            tangential_velocity=v_t,
            centripetal_acceleration=a,
            centripetal_force=force,
            centrifugal_force=-force if self.config.rotating_frame else None,
            centre=self.centre.copy(),
            path_radius=self.path_radius,
            angular_velocity=self.angular_velocity,
            series=tuple(self.series),
        )
