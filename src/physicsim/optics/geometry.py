# MIT License (see LICENSE)
"""
Refracting geometry for the ray tracer.

A BoxGeometry is an axis-aligned cuboid of uniform refractive index. Its six
bounding planes are derived once from the dimensions; changing the index or
the dimensions produces a new geometry rather than mutating planes in place.
"""
from __future__ import annotations
from dataclasses import dataclass, field, replace

import numpy as np

from ..util import f64, vec3


@dataclass(frozen=True, eq=False)
class Plane:
    """
    Infinite plane through ``point`` with unit ``normal``.

    For a BoxGeometry face the normal points out of the box.
    """
    point: np.ndarray
    normal: np.ndarray

    def __post_init__(self) -> None:
        object.__setattr__(self, "point", f64(self.point))
        object.__setattr__(self, "normal", f64(self.normal))


# Outward normals in face order: -z, +z, -y, +y, -x, +x
_FACE_NORMALS = (
    vec3(0.0, 0.0, -1.0),
    vec3(0.0, 0.0, 1.0),
    vec3(0.0, -1.0, 0.0),
    vec3(0.0, 1.0, 0.0),
    vec3(-1.0, 0.0, 0.0),
    vec3(1.0, 0.0, 0.0),
)


@dataclass(frozen=True, eq=False)
class BoxGeometry:
    """
    Axis-aligned box of refractive material.

    Attributes:
        width: Extent along x.
        height: Extent along y.
        depth: Extent along z.
        center: Centre of the box.
        refractive_index: Index n of the material (> 0).
        planes: The six face planes, derived on construction.
    """
    width: float
    height: float
    depth: float
    center: np.ndarray | tuple[float, float, float] = (0.0, 0.0, 0.0)
    refractive_index: float = 1.5
    planes: tuple[Plane, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "center", f64(self.center))
        half = (self.depth / 2, self.depth / 2,
                self.height / 2, self.height / 2,
                self.width / 2, self.width / 2)
        planes = tuple(
            Plane(point=self.center + n * h, normal=n)
            for n, h in zip(_FACE_NORMALS, half)
        )
        object.__setattr__(self, "planes", planes)

    @property
    def half_extents(self) -> np.ndarray:
        return vec3(self.width / 2, self.height / 2, self.depth / 2)

    def is_inside(self, point: np.ndarray, eps: float) -> bool:
        """
        Inclusive containment test with tolerance.

        Points on the surface (within eps) count as inside, which is what
        lets intersection points on a face pass the bounds check.
        """
        offset = np.abs(f64(point) - self.center)
        return bool(np.all(offset <= self.half_extents + eps))

    def with_refractive_index(self, n: float) -> BoxGeometry:
        """Copy of this geometry with a different refractive index."""
        return replace(self, refractive_index=n)
