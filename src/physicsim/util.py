# MIT License (see LICENSE)
"""
Utility functions for 3D vector math.

Vectors are numpy float64 arrays of shape (3,). Every helper here returns a
new array and never modifies its arguments, so engines can reassign state
(``p.velocity = p.velocity + a * dt``) without aliasing surprises.
"""
from __future__ import annotations

import numpy as np


def f64(x) -> np.ndarray:
    """
    Convert any array-like to a float64 numpy array.

    A fresh copy is always returned, so tuples, lists and arrays owned by
    callers can be passed in safely.
    """
    return np.array(x, dtype=np.float64)


def vec3(x: float = 0.0, y: float = 0.0, z: float = 0.0) -> np.ndarray:
    """Build a 3D vector from components."""
    return np.array([x, y, z], dtype=np.float64)


def zeros3() -> np.ndarray:
    """Zero vector."""
    return np.zeros(3, dtype=np.float64)


def dot(a: np.ndarray, b: np.ndarray) -> float:
    """Scalar product a · b."""
    return float(a[0] * b[0] + a[1] * b[1] + a[2] * b[2])


def cross(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """
    Vector product a × b.

    Written out rather than using np.cross, which is slow for single
    3-vectors.
    """
    return np.array(
        [
            a[1] * b[2] - a[2] * b[1],
            a[2] * b[0] - a[0] * b[2],
            a[0] * b[1] - a[1] * b[0],
        ],
        dtype=np.float64,
    )


def norm2(v: np.ndarray) -> float:
    """Squared magnitude. Avoids sqrt for performance."""
    return dot(v, v)


def norm(v: np.ndarray) -> float:
    """Magnitude (length) of a vector."""
    return float(np.sqrt(norm2(v)))


def unit(v: np.ndarray, eps: float = 1e-12) -> np.ndarray:
    """
    Return a unit vector in the same direction as v.

    Returns the zero vector if |v| < eps to avoid division by zero.
    """
    n = norm(v)
    if n < eps:
        return zeros3()
    return v / n


def distance(a: np.ndarray, b: np.ndarray) -> float:
    """Euclidean distance between two points."""
    return norm(b - a)


def add(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Vector sum a + b."""
    return a + b


def scale(v: np.ndarray, s: float) -> np.ndarray:
    """Vector scaled by s."""
    return v * s


def project(v: np.ndarray, n: np.ndarray) -> tuple[float, np.ndarray]:
    """
    Split v into its component along unit vector n and the remainder.

    Returns:
        Tuple (v_n, v_t) where v_n = v·n is a scalar and
        v_t = v - n*v_n is the part perpendicular to n.
    """
    vn = dot(v, n)
    return vn, v - n * vn


def with_magnitude(v: np.ndarray, magnitude: float, eps: float = 1e-12) -> np.ndarray:
    """
    Rescale v to the given magnitude, keeping its direction.

    A zero vector has no direction and is returned unchanged.
    """
    n = norm(v)
    if n < eps:
        return f64(v)
    return v * (magnitude / n)
