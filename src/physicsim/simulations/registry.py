# MIT License (see LICENSE)
"""
Explicit registry of simulation classes.

Each simulation module registers its class with a decorator. Whether it
needs a 2D or 3D surface is read from the class's declared ``kind`` at
registration time, never discovered by inspecting the class hierarchy.

    @register("collisions", "Collisions")
    class CollisionsSimulation(Simulation):
        kind = SimulationKind.THREE_D
        ...
"""
from __future__ import annotations
import logging
from typing import Any, Callable, TypeVar

from .base import Simulation, SimulationKind

logger = logging.getLogger(__name__)

S = TypeVar("S", bound=type[Simulation])

_REGISTRY: dict[str, type[Simulation]] = {}


def register(name: str, title: str | None = None) -> Callable[[S], S]:
    """
    Class decorator adding a simulation to the registry.

    Raises:
        TypeError: If the class is not a Simulation or lacks a valid kind.
        ValueError: If the name is already taken by another class.
    """
    def decorator(cls: S) -> S:
        if not (isinstance(cls, type) and issubclass(cls, Simulation)):
            raise TypeError(f"{cls!r} is not a Simulation subclass")
        kind = getattr(cls, "kind", None)
        if not isinstance(kind, SimulationKind):
            raise TypeError(f"{cls.__name__} must declare kind as a SimulationKind, got {kind!r}")
        existing = _REGISTRY.get(name)
        if existing is not None and existing is not cls:
            raise ValueError(f"Simulation name {name!r} already registered by {existing.__name__}")

        cls.name = name
        cls.title = title or name.replace("_", " ").title()
        _REGISTRY[name] = cls
        logger.debug("Registered %s as %r (%s)", cls.__name__, name, kind.value)
        return cls

    return decorator


def get_simulation(name: str) -> type[Simulation]:
    """
    Look up a registered simulation class.

    Raises:
        ValueError: For an unknown name.
    """
    try:
        return _REGISTRY[name]
    except KeyError:
        raise ValueError(
            f"Unknown simulation {name!r}; available: {', '.join(sorted(_REGISTRY))}"
        ) from None


def list_simulations(kind: SimulationKind | None = None) -> list[str]:
    """Registered names, optionally only those of one kind."""
    return sorted(n for n, cls in _REGISTRY.items() if kind is None or cls.kind is kind)


def create_simulation(name: str, config: Any = None) -> Simulation:
    """Instantiate a registered simulation, with its default config if none is given."""
    return get_simulation(name)(config)
