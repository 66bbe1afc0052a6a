# MIT License (see LICENSE)
"""
Rutherford scattering of alpha particles by a heavy nucleus.

A square grid of alpha particles is fired along +x at a nucleus of proton
number Z sitting at the origin. Each frame the Coulomb repulsion between
the nucleus and every alpha within the cutoff distance sets the alpha's
acceleration, then the alpha is integrated over the frame.

Units:
    Physics runs in SI. Positions are reported in femtometres
    (``length_unit`` metres each) and one real second of animation covers
    ``time_scale`` seconds of physical time, so a 2 MeV alpha crosses the
    scene in a few seconds and the closest approach to gold (~100 fm) is
    visible.

The nucleus is held fixed unless ``nucleus_recoil`` is set.
"""
from __future__ import annotations
import logging
from collections import deque
from dataclasses import dataclass

import numpy as np

from ..constants import ELEMENTARY_CHARGE, PROTON_MASS
from ..core import coulomb_accelerations, kinematic_step
from ..types import Particle
from ..util import vec3, zeros3
from .base import Simulation, SimulationKind, SimulationState
from .registry import register

logger = logging.getLogger(__name__)

MAX_GRID = 6


@dataclass(frozen=True)
class ScatteringConfig:
    """
    Attributes:
        proton_number: Z of the target nucleus (floored, absolute value).
        initial_speed: Alpha speed in units of 1e7 m/s.
        count: Grid size control 0..6; the grid has count + 1 alphas per side.
        height, width: Grid extents in fm at count = 6.
        start_x: Starting x of the alphas in fm.
        cutoff: Interaction range in fm. Live.
        length_unit: Metres per reported length unit.
        time_scale: Physical seconds per animation second. Live.
        trail_length: Positions kept per alpha trail.
        nucleus_recoil: Integrate the nucleus too.
    """
    proton_number: float = 79
    initial_speed: float = 1.0
    count: int = 4
    height: float = 150.0
    width: float = 150.0
    start_x: float = -300.0
    cutoff: float = 10000.0
    length_unit: float = 1e-15
    time_scale: float = 1e-20
    trail_length: int = 30
    nucleus_recoil: bool = False


@dataclass(frozen=True, eq=False)
class ScatteringState(SimulationState):
    """
    Attributes:
        nucleus_position: In length units.
        alpha_positions: (N, 3) array in length units.
        alpha_velocities: (N, 3) array in m/s.
        deflections: Angle between each alpha's velocity and +x, radians.
        trails: Recent positions of each alpha, in length units.
    """
    nucleus_position: np.ndarray
    alpha_positions: np.ndarray
    alpha_velocities: np.ndarray
    deflections: np.ndarray
    trails: tuple[tuple[np.ndarray, ...], ...]


def grid_offsets(count: int, height: float, width: float) -> list[tuple[float, float]]:
    """
    (y, z) starting offsets of the alpha grid.

    Spacing is height/6 and width/6; the grid spans count spacings in each
    direction, centred on the axis.
    """
    count = max(0, min(MAX_GRID, int(count)))
    dy, dz = abs(height) / MAX_GRID, abs(width) / MAX_GRID
    ys = [dy * (i - count / 2) for i in range(count + 1)]
    zs = [dz * (j - count / 2) for j in range(count + 1)]
    return [(y, z) for y in ys for z in zs]


@register("scattering", "Alpha Scattering")
class ScatteringSimulation(Simulation):
    """Alpha particles deflected by a nucleus's Coulomb field."""
    kind = SimulationKind.THREE_D
    config_class = ScatteringConfig

    def init(self, config: ScatteringConfig) -> None:
        Z = int(abs(config.proton_number))
        if Z != config.proton_number:
            logger.warning("Proton number %r coerced to %d", config.proton_number, Z)

        L = config.length_unit
        self.nucleus = Particle(mass=Z * PROTON_MASS, charge=Z * ELEMENTARY_CHARGE)
        speed = config.initial_speed * 1e7

        self.alphas: list[Particle] = []
        for y, z in grid_offsets(config.count, config.height, config.width):
            self.alphas.append(Particle(
                mass=4 * PROTON_MASS,
                charge=2 * ELEMENTARY_CHARGE,
                position=vec3(config.start_x, y, z) * L,
                velocity=vec3(speed, 0.0, 0.0),
                history=deque(maxlen=max(1, config.trail_length)),
            ))
        logger.debug("Scattering set up with Z=%d and %d alphas", Z, len(self.alphas))

    def step(self, dt: float) -> None:
        if self.paused:
            return
        cfg = self.config
        L = cfg.length_unit
        dt_phys = dt * cfg.time_scale
        cutoff = cfg.cutoff * L
        nucleus = self.nucleus

        nucleus_acc = zeros3()
        for alpha in self.alphas:
            a_n, a_alpha = coulomb_accelerations(
                nucleus.position, nucleus.charge, nucleus.mass,
                alpha.position, alpha.charge, alpha.mass,
                cutoff=cutoff,
            )
            alpha.acceleration = a_alpha
            nucleus_acc = nucleus_acc + a_n

        for alpha in self.alphas:
            kinematic_step(alpha, dt_phys)
            alpha.history.append(alpha.position / L)

        if cfg.nucleus_recoil:
            nucleus.acceleration = nucleus_acc
            kinematic_step(nucleus, dt_phys)
        self.time += dt

    def current_state(self) -> ScatteringState:
        L = self.config.length_unit
        if self.alphas:
            positions = np.array([a.position for a in self.alphas]) / L
            velocities = np.array([a.velocity for a in self.alphas])
            deflections = np.arctan2(np.linalg.norm(velocities[:, 1:], axis=1), velocities[:, 0])
        else:
            positions = np.zeros((0, 3))
            velocities = np.zeros((0, 3))
            deflections = np.zeros(0)
        return ScatteringState(
            time=self.time,
            paused=self.paused,
            nucleus_position=self.nucleus.position / L,
            alpha_positions=positions,
            alpha_velocities=velocities,
            deflections=deflections,
            trails=tuple(tuple(a.history) for a in self.alphas),
        )
