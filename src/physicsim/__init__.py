# MIT License (see LICENSE)
"""
physicsim - Interactive physics simulations with a renderer-independent core.

This package provides the numerical engines behind a suite of teaching
simulations (collisions, projectile motion, circular motion, cyclotron,
alpha scattering, Snell's law, nuclear decay, interference) plus the host
machinery to drive them frame by frame.

Main entry points:
    - create_simulation / list_simulations: the registered models.
    - Simulation: the init / step / current_state interface.
    - FrameLoop: drives a simulation from frame, pause and visibility events.
    - Particle: point mass with kinematic state and charge.

Submodules:
    - core: Integrators, force laws, invariants, decay sampler.
    - collision: Sphere contact resolution and wall reflection.
    - optics: Ray tracing through refracting boxes.
    - simulations: The physical models and their registry.
    - io: JSON configs and CSV export.
    - renderer: Optional visualization adapters.

Example:
    from physicsim import create_simulation

    sim = create_simulation("collisions")
    for _ in range(300):
        sim.step(1 / 30)
    print(sim.current_state().momenta)
"""
from .types import Particle, CollisionRecord, DecayState
from .clock import SimulationClock, FrameTimer
from .simulations import (
    Simulation,
    SimulationKind,
    SimulationState,
    create_simulation,
    get_simulation,
    list_simulations,
)
from .host import FrameLoop
from .logging_config import setup_logging

__version__ = "0.1.0"

__all__ = [
    # Data types
    "Particle",
    "CollisionRecord",
    "DecayState",
    # Timing
    "SimulationClock",
    "FrameTimer",
    # Simulations
    "Simulation",
    "SimulationKind",
    "SimulationState",
    "create_simulation",
    "get_simulation",
    "list_simulations",
    # Host
    "FrameLoop",
    "setup_logging",
]
