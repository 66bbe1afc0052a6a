# MIT License (see LICENSE)
"""
Physical constants and engine tolerances used throughout the simulations.

Physical values use SI units. Tolerances are dimensionless or expressed in
the simulation's own length units.
"""
from __future__ import annotations

import math

# Vacuum permittivity ε₀ in F/m.
# Reference: https://physics.nist.gov/cgi-bin/cuu/Value?ep0
EPSILON_0: float = 8.8541878128e-12

# Coulomb's constant k = 1/(4πε₀), N·m²/C².
K_COULOMB: float = 1.0 / (4.0 * math.pi * EPSILON_0)

# Elementary charge in C.
ELEMENTARY_CHARGE: float = 1.602176634e-19

# Proton and electron rest masses in kg.
PROTON_MASS: float = 1.67262192e-27
ELECTRON_MASS: float = 9.1093837e-31

# Standard gravity in m/s².
STANDARD_GRAVITY: float = 9.81

# Speed of sound in air at ~20°C, m/s (interference demo).
SPEED_OF_SOUND: float = 343.0

# Tolerance used by ray/plane intersection and containment tests.
# Intersections closer than this are treated as the ray's own origin.
RAY_EPSILON: float = 1e-6

# Contact distances (simulation units) below this are treated as coincident
# centres with no defined direction.
DEGENERATE_DISTANCE: float = 1e-12
