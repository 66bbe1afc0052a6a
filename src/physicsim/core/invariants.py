# MIT License (see LICENSE)
"""
Utilities for calculating physical invariants and conserved quantities.

Used for verifying simulation correctness and for the momentum charts of
the collisions model. For elastic collisions with no boundary contact, total
momentum and kinetic energy stay constant up to rounding.
"""
from __future__ import annotations
from typing import Iterable

import numpy as np

from ..types import Particle


def kinetic_energy(particles: Iterable[Particle]) -> float:
    """
    Total kinetic energy T = Σ ½ m v².

    Args:
        particles: Particles to sum over.

    Returns:
        Total kinetic energy in J.
    """
    ke = 0.0
    for p in particles:
        if p.mass <= 0:
            continue
        ke += 0.5 * p.mass * float(np.dot(p.velocity, p.velocity))
    return ke


def linear_momentum(particles: Iterable[Particle]) -> np.ndarray:
    """
    Total linear momentum P = Σ m v.

    Returns:
        Momentum vector [Px, Py, Pz] in kg·m/s.
    """
    p_total = np.zeros(3, dtype=np.float64)
    for p in particles:
        p_total += p.mass * p.velocity
    return p_total


def momentum_table(particles: list[Particle]) -> np.ndarray:
    """
    Per-particle momentum plus the system total.

    Returns:
        Array of shape (len(particles) + 1, 3); the last row is the total.
        This is the data behind the per-axis momentum bar charts.
    """
    rows = [p.momentum for p in particles]
    rows.append(linear_momentum(particles))
    return np.array(rows, dtype=np.float64)
