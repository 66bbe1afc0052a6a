# MIT License (see LICENSE)
"""
Geometric optics: ray tracing through refracting boxes.

This subpackage provides:
    - Geometry: Plane and axis-aligned BoxGeometry with a refractive index.
    - Ray: linked chain of segments with per-surface Interaction records.
    - Tracer: nearest-hit search, Snell's law, total internal reflection.

Typical usage:
    from physicsim.optics import BoxGeometry, RayTracer

    tracer = RayTracer([BoxGeometry(75, 15, 40, refractive_index=1.5)])
    ray = tracer.trace(origin=(-25, 25, 0), direction=(3, -3, 0))
    rows = [i.as_row() for i in ray.interactions()]
"""
from .geometry import Plane, BoxGeometry
from .ray import Ray, Interaction, REFRACTION, REFLECTION, RAY_CSV_HEADER
from .tracer import Hit, RayTracer, critical_angle, interact

__all__ = [
    # Geometry
    "Plane",
    "BoxGeometry",
    # Rays
    "Ray",
    "Interaction",
    "REFRACTION",
    "REFLECTION",
    "RAY_CSV_HEADER",
    # Tracer
    "Hit",
    "RayTracer",
    "critical_angle",
    "interact",
]
