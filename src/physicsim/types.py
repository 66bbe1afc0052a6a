# MIT License (see LICENSE)
"""
Core type definitions shared by the simulation engines.

Defines the fundamental data structures:
- Particle: a point mass with kinematic state, charge and a display radius.
- CollisionRecord: a fixed-width momentum record appended on each collision.
- DecayState: the population of a decaying sample.

Equations of motion follow Newtonian mechanics:
  - ds/dt = v
  - dv/dt = a = F/m
"""
from __future__ import annotations
from collections import deque
from dataclasses import dataclass, field
from typing import NamedTuple

import numpy as np

from .util import f64


# =============================================================================
# Particle
# =============================================================================

@dataclass(eq=False)
class Particle:
    """
    A point particle with full kinematic state.

    Attributes:
        mass: Mass in kg (or in the owning simulation's mass unit). A mass of
              zero marks a particle that is exempt from acceleration.
        position: Position [x, y, z].
        velocity: Velocity [vx, vy, vz].
        acceleration: Current acceleration [ax, ay, az]. Set by the owning
                      simulation each step from its force law.
        charge: Electric charge (0 for neutral particles).
        radius_scale: Constant k in radius = k * sqrt(mass).
        collisions: Append-only log of CollisionRecords this particle took
                    part in. Cleared only by replacing the particle on reset.
        history: Optional bounded trail of past positions.

    Note:
        position/velocity/acceleration are converted to float64 copies on
        init, so tuples or caller-owned arrays can be passed safely.
    """
    mass: float
    position: np.ndarray | tuple[float, float, float] = (0.0, 0.0, 0.0)
    velocity: np.ndarray | tuple[float, float, float] = (0.0, 0.0, 0.0)
    acceleration: np.ndarray | tuple[float, float, float] = (0.0, 0.0, 0.0)
    charge: float = 0.0
    radius_scale: float = 1.0
    collisions: list[CollisionRecord] = field(default_factory=list)
    history: deque | None = None

    def __post_init__(self) -> None:
        self.position = f64(self.position)
        self.velocity = f64(self.velocity)
        self.acceleration = f64(self.acceleration)

    @property
    def radius(self) -> float:
        """Display/collision radius, k * sqrt(mass)."""
        return self.radius_scale * float(np.sqrt(abs(self.mass)))

    @property
    def momentum(self) -> np.ndarray:
        """Linear momentum m * v."""
        return self.mass * self.velocity

    @property
    def speed(self) -> float:
        return float(np.linalg.norm(self.velocity))

    def record_position(self) -> None:
        """Append the current position to the trail, if one is kept."""
        if self.history is not None:
            self.history.append(self.position.copy())


# =============================================================================
# Collision log
# =============================================================================

class CollisionRecord(NamedTuple):
    """
    Momentum components of both particles before and after one collision.

    Field order matches the CSV export columns:
    pax, pbx, pay, pby, paz, pbz, pax', pbx', pay', pby', paz', pbz'
    """
    pax: float
    pbx: float
    pay: float
    pby: float
    paz: float
    pbz: float
    pax_after: float
    pbx_after: float
    pay_after: float
    pby_after: float
    paz_after: float
    pbz_after: float

    @classmethod
    def from_momenta(
        cls,
        pa: np.ndarray,
        pb: np.ndarray,
        pa_after: np.ndarray,
        pb_after: np.ndarray,
    ) -> CollisionRecord:
        """Interleave per-axis momenta of A and B into a record."""
        return cls(
            float(pa[0]), float(pb[0]),
            float(pa[1]), float(pb[1]),
            float(pa[2]), float(pb[2]),
            float(pa_after[0]), float(pb_after[0]),
            float(pa_after[1]), float(pb_after[1]),
            float(pa_after[2]), float(pb_after[2]),
        )


COLLISION_CSV_HEADER: tuple[str, ...] = (
    "pax", "pbx", "pay", "pby", "paz", "pbz",
    "pax'", "pbx'", "pay'", "pby'", "paz'", "pbz'",
)


# =============================================================================
# Decay
# =============================================================================

@dataclass
class DecayState:
    """
    Population of a decaying sample.

    Attributes:
        n: Surviving nuclei, 0 <= n <= n0, never increases.
        n0: Initial nuclei.
        decay_constant: λ in 1/s, > 0.
        t: Elapsed simulated time in seconds.
    """
    n: int
    n0: int
    decay_constant: float
    t: float = 0.0
