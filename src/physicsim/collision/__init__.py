# MIT License (see LICENSE)
"""
Collision detection and resolution subsystem.

This subpackage provides:
    - Contact: sphere-sphere detection with overlap information.
    - Resolution: 1D impulse exchange along the normal with restitution,
      penetration correction and momentum logging.
    - Boundary: reflecting walls of the cubic simulation volume.

Typical usage:
    from physicsim.collision import resolve_collision, reflect_edges

    record = resolve_collision(a, b, restitution=1.0)
    reflect_edges(a, half_extent=100.0)
"""
from .contact import (
    Contact,
    detect_contact,
    exchange_normal_velocities,
    separate,
    resolve_collision,
)
from .boundary import reflect_edges

__all__ = [
    # Contact
    "Contact",
    "detect_contact",
    "exchange_normal_velocities",
    "separate",
    "resolve_collision",
    # Boundary
    "reflect_edges",
]
