# MIT License (see LICENSE)
"""
Renderer adapters.

The engine never draws anything. A renderer is handed the frozen snapshot a
simulation returns from ``current_state()`` and turns it into pixels, text
or stored data. Each adapter declares which surfaces it can draw on
(``surfaces``); ``render`` refuses a simulation whose declared kind is not
among them, so a 2D-only chart backend is never asked to draw a 3D scene.
"""
from __future__ import annotations
import sys
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, ClassVar, TextIO

import numpy as np

from ..simulations.base import SimulationKind, SimulationState

if TYPE_CHECKING:
    from ..simulations.base import Simulation


class RendererAdapter(ABC):
    """
    Interface between a simulation snapshot and a drawing backend.

    A frame is drawn in three calls:

        renderer.begin_frame(state.time)
        renderer.draw_state("projectile", state)
        renderer.end_frame()

    ``render(simulation)`` performs all three for the simulation's current
    snapshot.
    """
    surfaces: ClassVar[frozenset[SimulationKind]] = frozenset(SimulationKind)

    @abstractmethod
    def begin_frame(self, time: float) -> None:
        """Start a frame at simulated time ``time`` (seconds)."""
        ...

    @abstractmethod
    def draw_state(self, name: str, state: SimulationState) -> None:
        """Draw the snapshot of the simulation registered as ``name``."""
        ...

    @abstractmethod
    def end_frame(self) -> None:
        ...

    def render(self, simulation: "Simulation") -> None:
        """
        Snapshot ``simulation`` and draw it as one frame.

        Raises:
            TypeError: If the simulation needs a surface this adapter lacks.
        """
        if simulation.kind not in self.surfaces:
            raise TypeError(
                f"{type(self).__name__} cannot draw {simulation.kind.value} simulation {simulation.name!r}"
            )
        state = simulation.current_state()
        self.begin_frame(state.time)
        self.draw_state(simulation.name, state)
        self.end_frame()


def _fmt(value: Any) -> str:
    if isinstance(value, np.ndarray):
        if value.ndim == 1 and value.size <= 3:
            return "(" + ", ".join(f"{v:.2f}" for v in value) + ")"
        return f"array{value.shape}"
    if isinstance(value, float):
        return f"{value:.4g}"
    if isinstance(value, (tuple, list)):
        return f"[{len(value)} items]"
    return str(value)


class DebugRenderer(RendererAdapter):
    """
    Text renderer writing one line per snapshot.

    Scalars and 3-vectors are printed; arrays and long series only by shape
    or length.

        === t=0.0333 ===
        [projectile] paused=False position=(0.00, 0.00, 20.33) ...
    """

    def __init__(self, output: TextIO | None = None, verbose: bool = True):
        """
        Args:
            output: Stream to write to; sys.stdout when omitted.
            verbose: Write every field, or only the pause flag.
        """
        self.output = output if output is not None else sys.stdout
        self.verbose = verbose

    def begin_frame(self, time: float) -> None:
        print(f"=== t={time:.4f} ===", file=self.output)

    def draw_state(self, name: str, state: SimulationState) -> None:
        values = vars(state) if self.verbose else {"paused": state.paused}
        text = " ".join(f"{key}={_fmt(value)}" for key, value in values.items() if key != "time")
        print(f"[{name}] {text}", file=self.output)

    def end_frame(self) -> None:
        print(file=self.output, flush=True)


class NullRenderer(RendererAdapter):
    """Draws nothing; used for headless timing runs."""

    def begin_frame(self, time: float) -> None:
        pass

    def draw_state(self, name: str, state: SimulationState) -> None:
        pass

    def end_frame(self) -> None:
        pass


class BufferedRenderer(RendererAdapter):
    """
    Keeps every drawn snapshot as plain data.

    Each entry of ``frames`` is ``{"time", "simulation", "state"}`` with the
    state converted by ``to_dict()``, ready for charting or JSON dumps:

        recorder = BufferedRenderer()
        FrameLoop(sim, renderer=recorder).run(frames=300, dt=1/30)
        heights = [f["state"]["position"][1] for f in recorder.frames]
    """

    def __init__(self):
        self.frames: list[dict[str, Any]] = []
        self._pending: dict[str, Any] | None = None

    def begin_frame(self, time: float) -> None:
        self._pending = {"time": time, "simulation": None, "state": None}

    def draw_state(self, name: str, state: SimulationState) -> None:
        if self._pending is not None:
            self._pending.update(simulation=name, state=state.to_dict())

    def end_frame(self) -> None:
        if self._pending is not None:
            self.frames.append(self._pending)
        self._pending = None

    def clear(self) -> None:
        self.frames.clear()
