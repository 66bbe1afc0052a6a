# MIT License (see LICENSE)
"""
Numerical integrators for particle kinematics.

This module provides time-stepping methods to advance a particle's state.
All integrators solve
    ds/dt = v,         dv/dt = a

Available integrators:
- kinematic_step: Constant-acceleration update (exact for constant a)
- rk4_step: 4th-order Runge-Kutta for state-dependent accelerations
- reflect_at_boundary: Bounce off a reflecting plane with restitution

``dt`` is always a parameter. Hosts driven by real elapsed frame time pass
a different value every frame.

Reference:
    Runge-Kutta methods: https://en.wikipedia.org/wiki/Runge-Kutta_methods
"""
from __future__ import annotations
from typing import Callable

import numpy as np

from ..types import Particle


AccelerationFn = Callable[[np.ndarray, np.ndarray], np.ndarray]


def kinematic_step(particle: Particle, dt: float) -> None:
    """
    Advance particle state by dt under its current (constant) acceleration.

    The SUVAT update is used:
        s(t+dt) = s(t) + v(t)*dt + 0.5*a*dt²
        v(t+dt) = v(t) + a*dt

    It is exact when a is constant over the step, so with a = 0 the
    displacement is exactly v*dt and there is no drift.

    Args:
        particle: Particle to integrate (its attributes are reassigned).
        dt: Timestep in seconds.

    Note:
        Massless particles are exempt from acceleration: the update is a
        no-op for them.
    """
    if particle.mass == 0:
        return

    a = particle.acceleration
    v = particle.velocity
    particle.position = particle.position + v * dt + 0.5 * a * (dt * dt)
    particle.velocity = v + a * dt


def rk4_step(particle: Particle, dt: float, acceleration: AccelerationFn) -> None:
    """
    Advance particle state by dt using classical 4th-order Runge-Kutta.

    Unlike kinematic_step, the acceleration is re-evaluated at the four
    stage points, which matters when it depends on position or velocity
    (e.g. a centripetal pull toward a fixed centre).

    Args:
        particle: Particle to integrate (its attributes are reassigned).
        dt: Timestep in seconds.
        acceleration: Function (position, velocity) -> acceleration.

    Reference:
        https://en.wikipedia.org/wiki/Runge-Kutta_methods#The_Runge-Kutta_method
    """
    if particle.mass == 0:
        return

    x0 = particle.position.copy()
    v0 = particle.velocity.copy()

    # Each stage is (dx/dt, dv/dt) = (v, a(x, v))
    k1x, k1v = v0, acceleration(x0, v0)
    k2x = v0 + 0.5 * dt * k1v
    k2v = acceleration(x0 + 0.5 * dt * k1x, k2x)
    k3x = v0 + 0.5 * dt * k2v
    k3v = acceleration(x0 + 0.5 * dt * k2x, k3x)
    k4x = v0 + dt * k3v
    k4v = acceleration(x0 + dt * k3x, k4x)

    particle.position = x0 + (dt / 6.0) * (k1x + 2 * k2x + 2 * k3x + k4x)
    particle.velocity = v0 + (dt / 6.0) * (k1v + 2 * k2v + 2 * k3v + k4v)
    particle.acceleration = acceleration(particle.position, particle.velocity)


def reflect_at_boundary(
    particle: Particle,
    axis: int,
    boundary: float,
    restitution: float,
    side: int = -1,
) -> float | None:
    """
    Bounce a particle that has crossed a reflecting plane.

    The plane is ``coordinate[axis] == boundary``. With side=-1 the allowed
    region is above the plane (a floor); with side=+1 it is below (a
    ceiling). When the particle has crossed the plane during the last step,
    the velocity it had at the plane is reconstructed from the energy
    relation

        v_b² = v² - 2*a*(s - boundary)

    rather than taken from the overshot state, so a large dt does not add
    or remove energy. The coordinate is clamped to the plane and the
    velocity component becomes -e * v_b.

    Args:
        particle: Particle to test and update.
        axis: Index of the tracked coordinate (0=x, 1=y, 2=z).
        boundary: Plane position along that axis.
        restitution: Coefficient of restitution e in [0, 1].
        side: -1 for a floor, +1 for a ceiling.

    Returns:
        The reconstructed velocity at the plane if a bounce occurred,
        otherwise None.
    """
    s = float(particle.position[axis])
    crossed = s < boundary if side < 0 else s > boundary
    if not crossed:
        return None

    v = float(particle.velocity[axis])
    a = float(particle.acceleration[axis])

    # Rounding can push v_b² slightly negative right at the apex
    vb_sq = max(v * v - 2.0 * a * (s - boundary), 0.0)
    # v_b keeps the sign of the crossing motion (into the wall)
    v_b = float(np.copysign(np.sqrt(vb_sq), side))

    position = particle.position.copy()
    velocity = particle.velocity.copy()
    position[axis] = boundary
    velocity[axis] = -restitution * v_b
    particle.position = position
    particle.velocity = velocity
    return v_b
