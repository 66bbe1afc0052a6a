# MIT License (see LICENSE)
"""
Core physics components.

This subpackage provides:
    - Force laws: gravity, centripetal, Lorentz, cyclotron gap, Coulomb.
    - Integrators: constant-acceleration SUVAT step, RK4, boundary bounce.
    - Invariants: kinetic energy and momentum totals.
    - Decay: per-nucleus Monte Carlo decay sampler.

Typical usage:
    from physicsim.core import kinematic_step, reflect_at_boundary

    p.acceleration = gravity_acceleration((0, -9.81, 0))
    kinematic_step(p, dt=1/30)
    reflect_at_boundary(p, axis=1, boundary=0.0, restitution=0.8)
"""
from .forces import (
    gravity_acceleration,
    uniform_field_acceleration,
    centripetal_acceleration,
    lorentz_acceleration,
    magnetic_turn_acceleration,
    gap_speed,
    gap_crossing_time,
    gap_acceleration,
    coulomb_force_magnitude,
    coulomb_accelerations,
)
from .integrators import kinematic_step, rk4_step, reflect_at_boundary
from .invariants import kinetic_energy, linear_momentum, momentum_table
from .decay import DecaySampler, DecaySample, decay_probability

__all__ = [
    # Forces
    "gravity_acceleration",
    "uniform_field_acceleration",
    "centripetal_acceleration",
    "lorentz_acceleration",
    "magnetic_turn_acceleration",
    "gap_speed",
    "gap_crossing_time",
    "gap_acceleration",
    "coulomb_force_magnitude",
    "coulomb_accelerations",
    # Integrators
    "kinematic_step",
    "rk4_step",
    "reflect_at_boundary",
    # Invariants
    "kinetic_energy",
    "linear_momentum",
    "momentum_table",
    # Decay
    "DecaySampler",
    "DecaySample",
    "decay_probability",
]
