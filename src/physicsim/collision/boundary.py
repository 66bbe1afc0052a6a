# MIT License (see LICENSE)
"""
Reflecting walls of a cubic simulation volume.

The volume spans [-half_extent, +half_extent] on every axis. Each axis is
handled independently: a particle past a wall has that velocity component
flipped and the coordinate clamped onto the wall.
"""
from __future__ import annotations

from ..types import Particle


def reflect_edges(particle: Particle, half_extent: float) -> list[int]:
    """
    Reflect a particle off the walls of the simulation volume.

    Args:
        particle: Particle to test (position/velocity reassigned on a hit).
        half_extent: Distance from the origin to each wall.

    Returns:
        Indices of the axes on which a reflection happened.
    """
    position = particle.position.copy()
    velocity = particle.velocity.copy()
    hit: list[int] = []

    for axis in range(3):
        if position[axis] > half_extent:
            position[axis] = half_extent
        elif position[axis] < -half_extent:
            position[axis] = -half_extent
        else:
            continue
        velocity[axis] = -velocity[axis]
        hit.append(axis)

    if hit:
        particle.position = position
        particle.velocity = velocity
    return hit
