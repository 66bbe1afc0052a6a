# MIT License (see LICENSE)
"""
Common interface for all simulations.

A simulation is driven from outside:

    sim = CollisionsSimulation(CollisionsConfig(restitution=0.8))
    for _ in range(frames):
        sim.step(dt)
        state = sim.current_state()

Every concrete simulation implements three methods:
    init(config)      build fresh physical state from a config
    step(dt)          advance by dt seconds; does nothing while paused
    current_state()   frozen snapshot for renderers and charts

and declares two capability markers checked at registration:
    kind       SimulationKind.TWO_D or SimulationKind.THREE_D
    is_static  True when the picture only changes with its inputs (ray
               diagrams), False for anything that evolves in time

Parameters live in a dataclass config. ``update_config`` swaps in a new
config; a step reads whatever config is current, so live edits take effect
on the next frame. Parameters that shape the initial state (masses, starting
positions) take effect on the next ``reset``.
"""
from __future__ import annotations
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, fields, is_dataclass, replace
from enum import Enum
from typing import Any, ClassVar, Sequence

import numpy as np

logger = logging.getLogger(__name__)


class SimulationKind(Enum):
    """Which rendering surface a simulation needs."""
    TWO_D = "2d"
    THREE_D = "3d"


def _plain(value: Any) -> Any:
    """Convert numpy values and containers into JSON-friendly Python types."""
    if isinstance(value, np.ndarray):
        return value.tolist()
    if isinstance(value, np.generic):
        return value.item()
    if isinstance(value, Enum):
        return value.value
    if is_dataclass(value) and not isinstance(value, type):
        return {f.name: _plain(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, tuple) and hasattr(value, "_asdict"):
        return {k: _plain(v) for k, v in value._asdict().items()}
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return value


@dataclass(frozen=True, eq=False)
class SimulationState:
    """
    Base snapshot returned by ``current_state``.

    Attributes:
        time: Simulated seconds since the last reset.
        paused: Whether the simulation was paused when the snapshot was taken.
    """
    time: float
    paused: bool

    def to_dict(self) -> dict[str, Any]:
        """Snapshot as plain Python types (lists instead of arrays)."""
        return _plain(self)


def coerce_non_negative(name: str, value: float) -> float:
    """
    Return |value|, warning when a negative input had to be flipped.

    Non-physical inputs such as a negative mass are corrected rather than
    rejected so an interactive session keeps running.
    """
    if value < 0:
        logger.warning("Negative %s %r is not physical; using %r", name, value, abs(value))
        return abs(value)
    return value


class Simulation(ABC):
    """
    Abstract base for one physical model.

    Subclasses set the class attributes below and implement init, step and
    current_state. Instantiating a subclass that misses any of the three
    raises TypeError immediately.

    Attributes:
        name: Registry key, set by ``register``.
        title: Human readable title, set by ``register``.
        kind: Rendering capability marker.
        is_static: True if the model does not evolve between input changes.
        config_class: Dataclass holding the model's parameters.
        CSV_HEADER: Column names for ``records()`` rows.
    """
    name: ClassVar[str] = ""
    title: ClassVar[str] = ""
    kind: ClassVar[SimulationKind]
    is_static: ClassVar[bool] = False
    config_class: ClassVar[type]
    CSV_HEADER: ClassVar[tuple[str, ...]] = ()

    def __init__(self, config: Any = None) -> None:
        self.config = config if config is not None else self.config_class()
        self.paused = False
        self.time = 0.0
        self.init(self.config)
        logger.info("%s initialized", type(self).__name__)

    @abstractmethod
    def init(self, config: Any) -> None:
        """Build fresh physical state from ``config``."""
        ...

    @abstractmethod
    def step(self, dt: float) -> None:
        """
        Advance the model by ``dt`` seconds.

        Must leave physical state untouched while ``paused`` is set.
        """
        ...

    @abstractmethod
    def current_state(self) -> SimulationState:
        """Frozen snapshot of everything a renderer or chart needs."""
        ...

    def reset(self) -> None:
        """Discard all state and start again from the current config."""
        self.time = 0.0
        self.paused = False
        self.init(self.config)
        logger.info("%s reset", type(self).__name__)

    def toggle_pause(self, paused: bool | None = None) -> bool:
        """
        Flip (or set) the pause flag.

        Args:
            paused: Explicit value, or None to toggle.

        Returns:
            The new pause state.
        """
        self.paused = (not self.paused) if paused is None else bool(paused)
        logger.info("%s %s", type(self).__name__, "paused" if self.paused else "resumed")
        return self.paused

    def update_config(self, **changes: Any) -> Any:
        """
        Replace parameter values.

        Raises:
            ValueError: If a key is not a field of the config dataclass.
        """
        known = {f.name for f in fields(self.config)}
        unknown = sorted(set(changes) - known)
        if unknown:
            raise ValueError(f"Unknown {type(self.config).__name__} parameter(s): {', '.join(unknown)}")
        self.config = replace(self.config, **changes)
        logger.debug("%s config updated: %s", type(self).__name__, changes)
        return self.config

    def records(self) -> Sequence[Sequence[Any]]:
        """Ordered event log for export; rows match ``CSV_HEADER``."""
        return []
