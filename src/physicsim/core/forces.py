# MIT License (see LICENSE)
"""
Force laws expressed as accelerations.

Every function here is pure: it reads the current kinematic state and field
parameters and returns a new acceleration vector (or a scalar derived from
the law). None of them integrate; owning simulations feed the result into
core.integrators.

Key concepts:
- Lorentz force: F = q (v × B). In a cyclotron dee it only bends the path.
- Gap crossing: a uniform electric field between the dees adds qV of kinetic
  energy per crossing, so after n crossings v_n = sqrt(2 n |qV| / m).
- Coulomb force: F = q1 q2 / (4π ε₀ r²) along the joining line.
"""
from __future__ import annotations
import math

import numpy as np

from ..constants import K_COULOMB
from ..util import cross, f64, norm, unit, zeros3, project


def gravity_acceleration(g: np.ndarray | tuple[float, float, float]) -> np.ndarray:
    """Uniform gravitational field: a = g, independent of mass."""
    return f64(g)


def uniform_field_acceleration(E: np.ndarray, q: float, m: float) -> np.ndarray:
    """
    Acceleration of a charge in a uniform electric field, a = qE/m.

    Returns the zero vector for a massless particle.
    """
    if m == 0:
        return zeros3()
    return (q / m) * f64(E)


def centripetal_acceleration(
    position: np.ndarray,
    velocity: np.ndarray,
    centre: np.ndarray,
    radius: float,
) -> np.ndarray:
    """
    Centripetal acceleration |v_t|² / r directed at the centre.

    Only the tangential part of the velocity (perpendicular to the line to
    the centre) contributes.

    Args:
        position: Particle position.
        velocity: Particle velocity.
        centre: Centre of the circular path.
        radius: Path radius (> 0).
    """
    if radius <= 0:
        return zeros3()
    n = unit(f64(centre) - position)
    _, v_t = project(velocity, n)
    a = float(np.dot(v_t, v_t)) / radius
    return n * a


def lorentz_acceleration(
    velocity: np.ndarray,
    B: np.ndarray,
    q: float,
    m: float,
    E: np.ndarray | None = None,
) -> np.ndarray:
    """
    Full Lorentz acceleration a = (q/m)(E + v × B).

    Args:
        velocity: Particle velocity.
        B: Magnetic flux density vector in T.
        q: Charge.
        m: Mass. Returns zero acceleration for m == 0.
        E: Optional electric field.
    """
    if m == 0:
        return zeros3()
    F = cross(velocity, f64(B))
    if E is not None:
        F = F + f64(E)
    return (q / m) * F


def magnetic_turn_acceleration(
    velocity: np.ndarray,
    B: np.ndarray,
    q: float,
    m: float,
) -> np.ndarray:
    """
    Bending acceleration inside a dee.

    Magnitude |v| * |B| * q / m, direction unit(v × B). For a velocity
    perpendicular to B this equals the Lorentz acceleration; it is applied
    as a pure rotation and the owning simulation restores |v| afterwards.

    Returns zero for a massless or stationary particle.
    """
    if m == 0:
        return zeros3()
    B = f64(B)
    direction = unit(cross(velocity, B))
    magnitude = norm(velocity) * norm(B) * q / m
    return direction * magnitude


def gap_speed(n: int, V: float, q: float, m: float) -> float:
    """
    Speed after n gap crossings starting from rest.

    Each crossing adds |qV| of kinetic energy:
        ½ m v_n² = n |q V|  →  v_n = sqrt(2 n |V| |q| / m)
    """
    if m == 0 or n <= 0:
        return 0.0
    return math.sqrt(2.0 * n * abs(V) * abs(q) / abs(m))


def gap_crossing_time(d: float, m: float, dv: float, V: float, q: float) -> float:
    """
    Time to gain dv in the accelerating gap.

    The gap field is V/d, so the acceleration is |qV|/(m d) and
        t_gap = d * m * Δv / (|V| * |q|)

    Returns inf when there is no field to cross with.
    """
    if V == 0 or q == 0:
        return math.inf
    return d * abs(m) * abs(dv) / (abs(V) * abs(q))


def gap_acceleration(
    velocity: np.ndarray,
    V: float,
    q: float,
    m: float,
    d: float,
    axis: int = 0,
) -> np.ndarray:
    """
    Acceleration from the alternating field between the dees.

    The field has magnitude |V|/d along ``axis``; its polarity is flipped so
    the particle is always pushed in its direction of travel along that
    axis (the oscillator is assumed to be in phase).
    """
    a = zeros3()
    if m == 0 or d <= 0:
        return a
    travel = velocity[axis]
    sign = 1.0 if travel >= 0 else -1.0
    a[axis] = sign * abs(q * V) / (abs(m) * d)
    return a


def coulomb_force_magnitude(q1: float, q2: float, r: float) -> float:
    """
    Coulomb's law, F = q1 q2 / (4π ε₀ r²).

    Positive values are repulsive. Returns 0 for coincident charges, where
    the law is singular.
    """
    if r <= 0:
        return 0.0
    return K_COULOMB * q1 * q2 / (r * r)


def coulomb_accelerations(
    p1: np.ndarray,
    q1: float,
    m1: float,
    p2: np.ndarray,
    q2: float,
    m2: float,
    cutoff: float = math.inf,
) -> tuple[np.ndarray, np.ndarray]:
    """
    Accelerations of two point charges due to their mutual Coulomb force.

    Uses Newton's third law: equal and opposite forces along the joining
    line, divided by each particle's own mass.

    Args:
        p1, p2: Positions in metres.
        q1, q2: Charges in C.
        m1, m2: Masses in kg. A zero mass receives zero acceleration.
        cutoff: Pairs further apart than this (in metres) do not interact.
                This is a performance guard, not physics.

    Returns:
        Tuple (a1, a2). Both are zero beyond the cutoff or when the charges
        coincide.
    """
    r_vec = f64(p2) - f64(p1)
    r = norm(r_vec)
    if r > cutoff or r == 0:
        return zeros3(), zeros3()

    F = coulomb_force_magnitude(q1, q2, r)
    n = r_vec / r  # from 1 toward 2

    a1 = -n * (F / m1) if m1 != 0 else zeros3()
    a2 = n * (F / m2) if m2 != 0 else zeros3()
    return a1, a2
