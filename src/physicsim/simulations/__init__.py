# MIT License (see LICENSE)
"""
The physical models, one module each.

Importing this package registers every simulation:

    from physicsim.simulations import create_simulation, list_simulations

    list_simulations()
    # ['circular_motion', 'collisions', 'cyclotron', 'interference',
    #  'nuclear_decay', 'projectile', 'scattering', 'snells_law']
    sim = create_simulation("cyclotron")
"""
from .base import Simulation, SimulationKind, SimulationState, coerce_non_negative
from .registry import register, get_simulation, list_simulations, create_simulation
from .collisions import CollisionsSimulation, CollisionsConfig, CollisionsState
from .projectile import ProjectileSimulation, ProjectileConfig, ProjectileState
from .circular_motion import CircularMotionSimulation, CircularMotionConfig, CircularMotionState
from .cyclotron import CyclotronSimulation, CyclotronConfig, CyclotronState
from .scattering import ScatteringSimulation, ScatteringConfig, ScatteringState
from .snells_law import SnellsLawSimulation, SnellsLawConfig, SnellsLawState
from .nuclear_decay import NuclearDecaySimulation, NuclearDecayConfig, NuclearDecayState
from .interference import InterferenceSimulation, InterferenceConfig, InterferenceState

__all__ = [
    # Interface
    "Simulation",
    "SimulationKind",
    "SimulationState",
    "coerce_non_negative",
    # Registry
    "register",
    "get_simulation",
    "list_simulations",
    "create_simulation",
    # Models
    "CollisionsSimulation", "CollisionsConfig", "CollisionsState",
    "ProjectileSimulation", "ProjectileConfig", "ProjectileState",
    "CircularMotionSimulation", "CircularMotionConfig", "CircularMotionState",
    "CyclotronSimulation", "CyclotronConfig", "CyclotronState",
    "ScatteringSimulation", "ScatteringConfig", "ScatteringState",
    "SnellsLawSimulation", "SnellsLawConfig", "SnellsLawState",
    "NuclearDecaySimulation", "NuclearDecayConfig", "NuclearDecayState",
    "InterferenceSimulation", "InterferenceConfig", "InterferenceState",
]
