# MIT License (see LICENSE)
"""
Geometric ray tracing through refracting boxes.

A path is traced segment by segment:

    Traveling -> Intersecting -> Refracted | Reflected -> Traveling -> ...
                                                       -> Terminated

At each step the nearest surface hit over all planes of all geometries is
found, Snell's law (or total internal reflection) gives the new direction,
and a new segment starts at the hit point. Tracing stops when no surface is
hit (the last segment runs to infinity) or when the chain reaches
``max_depth`` segments.

Conventions:
    n     unit surface normal pointing back toward the incident side, so
          cos i = -n·d > 0
    n1    index of the medium the ray is leaving
    n2    index of the medium the ray would enter

Reference:
    https://en.wikipedia.org/wiki/Snell%27s_law#Vector_form
"""
from __future__ import annotations
import logging
import math
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from ..constants import RAY_EPSILON
from ..util import dot, f64, unit
from .geometry import BoxGeometry, Plane
from .ray import Ray, Interaction, REFRACTION, REFLECTION

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class Hit:
    """Nearest valid ray/surface intersection."""
    t: float
    point: np.ndarray
    plane: Plane
    geometry: BoxGeometry


def critical_angle(n1: float, n2: float) -> float | None:
    """
    Critical angle for light going from index n1 into index n2.

        c = acos(sqrt(1 - (n2/n1)²))   (equivalently asin(n2/n1))

    Only defined when n2 < n1; returns None otherwise, since total internal
    reflection is then impossible.
    """
    if n1 <= 0 or n2 >= n1:
        return None
    return math.acos(math.sqrt(1.0 - (n2 / n1) ** 2))


def interact(
    direction: np.ndarray,
    normal: np.ndarray,
    n1: float,
    n2: float,
    point: np.ndarray | None = None,
) -> tuple[np.ndarray, Interaction]:
    """
    Refract or totally internally reflect a ray at a surface.

    Args:
        direction: Unit direction d of the incoming ray.
        normal: Unit normal n facing the incoming ray (n·d < 0).
        n1: Index of the incident medium.
        n2: Index of the transmission medium.
        point: Hit point, stored on the Interaction.

    Returns:
        Tuple (new_direction, interaction).

    Rules:
        i = acos(-n·d)
        TIR when n2 < n1 and i > c:
            d' = d + 2 cos(i) n                       (medium unchanged)
        otherwise:
            cos r = sqrt(1 - (n1/n2)² (1 - cos² i))
            d' = (n1/n2) d + n ((n1/n2) cos i - cos r)  (medium becomes n2)
    """
    point = f64(point) if point is not None else np.zeros(3, dtype=np.float64)
    cos_i = min(1.0, max(-1.0, -dot(normal, direction)))
    i = math.acos(cos_i)
    c = critical_angle(n1, n2)

    if c is not None and i > c:
        reflected = direction + normal * (2.0 * cos_i)
        interaction = Interaction(
            incidence=i, critical=c, refraction=None,
            n1=n1, n2=n2, point=point, kind=REFLECTION,
        )
        return unit(reflected), interaction

    eta = n1 / n2
    # Guard against rounding just below zero at grazing incidence
    cos_r = math.sqrt(max(0.0, 1.0 - eta * eta * (1.0 - cos_i * cos_i)))
    refracted = direction * eta + normal * (eta * cos_i - cos_r)
    interaction = Interaction(
        incidence=i, critical=c, refraction=math.acos(cos_r),
        n1=n1, n2=n2, point=point, kind=REFRACTION,
    )
    return unit(refracted), interaction


class RayTracer:
    """
    Traces rays through a scene of BoxGeometry objects.

    Attributes:
        geometries: Boxes in the scene.
        max_depth: Maximum number of segments in a chain (>= 1).
        epsilon: Tolerance for grazing rays, self-intersection and the
                 containment test.
        ambient_index: Refractive index of the space around the boxes.

    Example:
        tracer = RayTracer([BoxGeometry(75, 15, 40, refractive_index=1.5)])
        ray = tracer.trace(origin=(-25, 25, 0), direction=(3, -3, 0))
        for interaction in ray.interactions():
            print(interaction.incidence, interaction.refraction)
    """

    def __init__(
        self,
        geometries: Sequence[BoxGeometry] = (),
        max_depth: int = 10,
        epsilon: float = RAY_EPSILON,
        ambient_index: float = 1.0,
    ) -> None:
        self.geometries = list(geometries)
        self.max_depth = max(1, int(max_depth))
        self.epsilon = epsilon
        self.ambient_index = ambient_index

    def intersect(self, origin: np.ndarray, direction: np.ndarray) -> Hit | None:
        """
        Find the nearest surface hit along a ray.

        For each plane, t = n·(p - o) / n·d. Planes the ray runs parallel to
        (|n·d| < eps) are skipped, as are non-finite t and hits at or behind
        the origin (t <= eps). The smallest remaining t whose point lies
        within its own geometry's bounds wins.

        Returns:
            The nearest Hit, or None when nothing is hit.
        """
        best: Hit | None = None
        eps = self.epsilon

        for geometry in self.geometries:
            for plane in geometry.planes:
                n_dot_dir = dot(plane.normal, direction)
                if abs(n_dot_dir) < eps:
                    continue

                t = dot(plane.normal, plane.point - origin) / n_dot_dir
                if not math.isfinite(t) or t <= eps:
                    continue
                if best is not None and t >= best.t:
                    continue

                x = origin + direction * t
                if geometry.is_inside(x, eps):
                    best = Hit(t=t, point=x, plane=plane, geometry=geometry)

        return best

    def _media(self, ray: Ray, hit: Hit) -> tuple[float, float, np.ndarray]:
        """
        Incident/transmission indices and the normal facing the ray.

        A segment whose midpoint lies inside the hit geometry travelled
        through it and is leaving; otherwise it is entering.
        """
        midpoint = ray.origin + ray.direction * (0.5 * hit.t)
        if hit.geometry.is_inside(midpoint, self.epsilon):
            return hit.geometry.refractive_index, self.ambient_index, -hit.plane.normal
        return ray.medium_index, hit.geometry.refractive_index, hit.plane.normal

    def trace(
        self,
        origin: np.ndarray | tuple[float, float, float],
        direction: np.ndarray | tuple[float, float, float],
        medium_index: float | None = None,
    ) -> Ray:
        """
        Trace a ray from a source through the scene.

        Args:
            origin: Source position.
            direction: Initial direction (normalised here).
            medium_index: Index at the source; defaults to the ambient index.

        Returns:
            The source Ray, head of the chain. The chain has at most
            max_depth segments; its last segment has next = None.
        """
        if medium_index is None:
            medium_index = self.ambient_index
        head = Ray(origin=origin, direction=direction, medium_index=medium_index, is_source=True)

        ray = head
        while ray.depth + 1 < self.max_depth:
            hit = self.intersect(ray.origin, ray.direction)
            if hit is None:
                break

            n1, n2, normal = self._media(ray, hit)
            new_direction, interaction = interact(ray.direction, normal, n1, n2, hit.point)
            ray.interaction = interaction

            if interaction.is_total_internal_reflection:
                logger.debug(
                    "TIR at depth %d: i=%.4f > c=%.4f", ray.depth, interaction.incidence,
                    interaction.critical,
                )
                next_index = n1
            else:
                next_index = n2

            ray.next = Ray(
                origin=hit.point,
                direction=new_direction,
                medium_index=next_index,
                depth=ray.depth + 1,
            )
            ray = ray.next

        return head
