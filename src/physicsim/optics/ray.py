# MIT License (see LICENSE)
"""
Ray chains produced by the tracer.

A traced path is a singly linked list of Ray segments. Each segment owns its
successor; the last segment has ``next = None`` and is drawn as a
half-infinite ray in its direction. Chains are rebuilt from scratch every
frame, so nothing here is mutated after tracing finishes.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Iterator

import numpy as np

from ..util import f64, unit


REFRACTION = "refraction"
REFLECTION = "reflection"

RAY_CSV_HEADER: tuple[str, ...] = ("i/rad", "c/rad", "r/rad", "n1", "n2")


@dataclass(frozen=True, eq=False)
class Interaction:
    """
    What happened where a segment met a surface.

    Attributes:
        incidence: Angle of incidence i in radians.
        critical: Critical angle c in radians, or None when n2 >= n1.
        refraction: Angle of refraction r in radians, or None for total
                    internal reflection.
        n1: Index of the incident medium.
        n2: Index of the transmission medium.
        point: Where the surface was hit.
        kind: REFRACTION or REFLECTION.
    """
    incidence: float
    critical: float | None
    refraction: float | None
    n1: float
    n2: float
    point: np.ndarray
    kind: str

    @property
    def is_total_internal_reflection(self) -> bool:
        return self.kind == REFLECTION

    def as_row(self) -> tuple[float | str, ...]:
        """CSV row; angles in radians, blanks where not defined."""
        return (
            self.incidence,
            "" if self.critical is None else self.critical,
            "" if self.refraction is None else self.refraction,
            self.n1,
            self.n2,
        )


@dataclass(eq=False)
class Ray:
    """
    One straight segment of a traced path.

    Attributes:
        origin: Start point.
        direction: Unit direction (normalised on construction).
        medium_index: Refractive index of the medium the segment travels in.
        is_source: True for the first segment leaving the light source.
        depth: Position in the chain, 0 for the source.
        next: Following segment, or None if this one runs to infinity.
        interaction: Surface interaction at the end of this segment, or None
                     for the terminal segment.
    """
    origin: np.ndarray
    direction: np.ndarray
    medium_index: float = 1.0
    is_source: bool = False
    depth: int = 0
    next: Ray | None = None
    interaction: Interaction | None = None

    def __post_init__(self) -> None:
        self.origin = f64(self.origin)
        self.direction = unit(f64(self.direction))

    @property
    def end(self) -> np.ndarray | None:
        """Hit point ending this segment, None for a terminal segment."""
        return None if self.interaction is None else self.interaction.point

    def chain(self) -> Iterator[Ray]:
        """Iterate this segment and all its successors."""
        ray: Ray | None = self
        while ray is not None:
            yield ray
            ray = ray.next

    def interactions(self) -> list[Interaction]:
        """Surface interactions along the chain, in order."""
        return [r.interaction for r in self.chain() if r.interaction is not None]

    def __len__(self) -> int:
        return sum(1 for _ in self.chain())
