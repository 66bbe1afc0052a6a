# MIT License (see LICENSE)
"""
Contact detection and resolution for sphere-sphere collisions.

Collisions are resolved as a 1D impulse exchange along the line of centres
with a coefficient of restitution e. Tangential velocity components pass
through unchanged.

Key concepts:
- Contact: geometric description of an overlap (normal, distance, overlap).
- Penetration correction: overlapping spheres are pushed apart by half the
  overlap each, so they do not stay interpenetrated across frames.
- CollisionRecord: momenta before and after, appended to both particles'
  logs for export.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass

import numpy as np

from ..constants import DEGENERATE_DISTANCE
from ..types import Particle, CollisionRecord
from ..util import project, vec3

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class Contact:
    """
    A touching or overlapping pair of spheres.

    Attributes:
        a: First particle.
        b: Second particle.
        normal: Unit normal from a toward b.
        distance: Distance between centres.
        overlap: (r_a + r_b) - distance. Zero when just touching.
    """
    a: Particle
    b: Particle
    normal: np.ndarray
    distance: float
    overlap: float


def detect_contact(a: Particle, b: Particle) -> Contact | None:
    """
    Detect contact between two spherical particles.

    A collision triggers when distance <= r_a + r_b (touching counts).

    Returns:
        Contact if the spheres touch or overlap, None otherwise.
    """
    d = b.position - a.position
    dist = float(np.linalg.norm(d))
    R = a.radius + b.radius

    if dist > R:
        return None

    # Coincident centres have no line of centres; pick +x
    n = d / dist if dist > DEGENERATE_DISTANCE else vec3(1.0, 0.0, 0.0)
    return Contact(a=a, b=b, normal=n, distance=dist, overlap=R - dist)


def exchange_normal_velocities(
    m1: float,
    m2: float,
    v1n: float,
    v2n: float,
    e: float,
) -> tuple[float, float]:
    """
    1D collision along the normal with restitution e.

        v1n' = (m1 v1n - e m2 v1n + m2 v2n + e m2 v2n) / (m1 + m2)
        v2n' = (m2 v2n - e m1 v2n + m1 v1n + e m1 v1n) / (m1 + m2)

    e = 1 conserves kinetic energy; e = 0 leaves both moving with the
    centre-of-mass velocity along the normal. Momentum is conserved for
    any e.

    Two massless particles have no defined exchange and keep their
    velocities.
    """
    M = m1 + m2
    if M == 0:
        return v1n, v2n
    v1n_new = (m1 * v1n - e * m2 * v1n + m2 * v2n + e * m2 * v2n) / M
    v2n_new = (m2 * v2n - e * m1 * v2n + m1 * v1n + e * m1 * v1n) / M
    return v1n_new, v2n_new


def separate(contact: Contact) -> None:
    """
    Push an overlapping pair apart along the normal.

    Each particle moves overlap/2, symmetrically, so the spheres end up
    exactly touching.
    """
    if contact.overlap <= 0:
        return
    shift = contact.normal * (0.5 * contact.overlap)
    contact.a.position = contact.a.position - shift
    contact.b.position = contact.b.position + shift


def resolve_collision(a: Particle, b: Particle, restitution: float) -> CollisionRecord | None:
    """
    Detect and resolve a collision between two particles.

    Steps:
        1. Unit normal n from a to b.
        2. Split velocities into normal scalars and tangential vectors.
        3. Exchange the normal components with restitution e.
        4. Recombine v' = v_t + n * v_n'.
        5. Separate overlapping spheres by overlap/2 each.
        6. Append a CollisionRecord to both particles' logs.

    A pair that is already moving apart along n (for example on the frame
    after an impulse, while still touching) only gets the position
    correction. Resolving it again would undo the previous exchange.

    Args:
        a: First particle (modified in place).
        b: Second particle (modified in place).
        restitution: Coefficient of restitution e in [0, 1].

    Returns:
        The appended CollisionRecord, or None if no impulse was applied.
    """
    contact = detect_contact(a, b)
    if contact is None:
        return None

    n = contact.normal
    v1n, v1t = project(a.velocity, n)
    v2n, v2t = project(b.velocity, n)

    separate(contact)

    # Relative approach speed along n; <= 0 means separating or resting
    if v1n - v2n <= 0:
        return None

    pa, pb = a.momentum, b.momentum

    v1n_new, v2n_new = exchange_normal_velocities(a.mass, b.mass, v1n, v2n, restitution)
    a.velocity = v1t + n * v1n_new
    b.velocity = v2t + n * v2n_new

    record = CollisionRecord.from_momenta(pa, pb, a.momentum, b.momentum)
    a.collisions.append(record)
    b.collisions.append(record)
    logger.debug(
        "Collision resolved: v_n (%.4f, %.4f) -> (%.4f, %.4f), overlap=%.4g",
        v1n, v2n, v1n_new, v2n_new, contact.overlap,
    )
    return record
