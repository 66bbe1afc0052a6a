# MIT License (see LICENSE)
"""
Ray diagram through a glass block.

A single light source shines into a 75 x 15 x 40 box of adjustable
refractive index. The ray chain is rebuilt from scratch every frame from the
current inputs, so moving the source, turning it or changing the index is
reflected immediately. The source is never moved inside the block: a
requested position inside it is ignored and the previous one kept.
"""
from __future__ import annotations
import logging
import math
from dataclasses import dataclass

import numpy as np

from ..constants import RAY_EPSILON
from ..optics import BoxGeometry, Interaction, Ray, RayTracer, RAY_CSV_HEADER
from ..util import f64
from .base import Simulation, SimulationKind, SimulationState
from .registry import register

logger = logging.getLogger(__name__)

Vec = tuple[float, float, float]


@dataclass(frozen=True)
class SnellsLawConfig:
    """
    Attributes:
        source_position: Light source position (y up). Live.
        source_direction: Direction the source points; need not be unit. Live.
        refractive_index: Index of the block. Live.
        box_size: Block width (x), height (y) and depth (z).
        box_center: Block centre.
        max_depth: Maximum segments per traced path.
        epsilon: Intersection and containment tolerance.
    """
    source_position: Vec = (-25.0, 25.0, 0.0)
    source_direction: Vec = (3.0, -3.0, 0.0)
    refractive_index: float = 1.0
    box_size: Vec = (75.0, 15.0, 40.0)
    box_center: Vec = (0.0, 0.0, 0.0)
    max_depth: int = 10
    epsilon: float = RAY_EPSILON


@dataclass(frozen=True, eq=False)
class SnellsLawState(SimulationState):
    """
    Attributes:
        segments: (origin, end) pairs; end is None for the final,
                  half-infinite segment.
        directions: Unit direction of each segment.
        interactions: Surface interactions in path order.
        refractive_index: Index the block was traced with.
    """
    segments: tuple[tuple[np.ndarray, np.ndarray | None], ...]
    directions: tuple[np.ndarray, ...]
    interactions: tuple[Interaction, ...]
    refractive_index: float

    def table(self, degrees: bool = True) -> list[tuple[float | str, ...]]:
        """Interaction table rows i, c, r, n1, n2 (angles in degrees by default)."""
        rows = []
        for interaction in self.interactions:
            i, c, r, n1, n2 = interaction.as_row()
            if degrees:
                i, c, r = (math.degrees(x) if x != "" else "" for x in (i, c, r))
            rows.append((i, c, r, n1, n2))
        return rows


def _valid_index(n: float) -> float:
    if n > 0:
        return n
    if n == 0:
        logger.warning("Refractive index 0 is not physical; using 1.0")
        return 1.0
    logger.warning("Negative refractive index %r is not physical; using %r", n, abs(n))
    return abs(n)


@register("snells_law", "Snell's Law")
class SnellsLawSimulation(Simulation):
    """Refraction and total internal reflection in a rectangular block."""
    kind = SimulationKind.THREE_D
    is_static = True
    config_class = SnellsLawConfig
    CSV_HEADER = RAY_CSV_HEADER

    def init(self, config: SnellsLawConfig) -> None:
        self.geometry = BoxGeometry(
            *config.box_size,
            center=config.box_center,
            refractive_index=_valid_index(config.refractive_index),
        )
        self.tracer = RayTracer([self.geometry], max_depth=config.max_depth, epsilon=config.epsilon)
        self.source = f64(config.source_position)
        if self.geometry.is_inside(self.source, config.epsilon):
            logger.warning("Light source %s starts inside the block", self.source.tolist())
        self.ray = self.tracer.trace(self.source, config.source_direction)

    def step(self, dt: float) -> None:
        if self.paused:
            return
        cfg = self.config

        n = _valid_index(cfg.refractive_index)
        if n != self.geometry.refractive_index:
            self.geometry = self.geometry.with_refractive_index(n)
            self.tracer.geometries = [self.geometry]

        requested = f64(cfg.source_position)
        if not any(g.is_inside(requested, cfg.epsilon) for g in self.tracer.geometries):
            self.source = requested

        self.ray = self.tracer.trace(self.source, cfg.source_direction)
        self.time += dt

    def current_state(self) -> SnellsLawState:
        chain: list[Ray] = list(self.ray.chain())
        return SnellsLawState(
            time=self.time,
            paused=self.paused,
            segments=tuple((r.origin.copy(), None if r.end is None else r.end.copy()) for r in chain),
            directions=tuple(r.direction.copy() for r in chain),
            interactions=tuple(self.ray.interactions()),
            refractive_index=self.geometry.refractive_index,
        )

    def records(self) -> list[tuple[float | str, ...]]:
        return [i.as_row() for i in self.ray.interactions()]
