# MIT License (see LICENSE)
"""
Frame loop that drives one simulation from explicit host events.

The host (a browser shell, a GUI toolkit or the headless runner) owns the
real clock and the input devices. It reports what happened by calling:

    on_frame(now)                      once per animation frame
    toggle_pause(now)                  pause button
    reset(now)                         reset button
    on_visibility_change(hidden, now)  window hidden or shown
    on_pointer_enter_panel()           pointer over the controls panel
    on_pointer_leave_panel()
    on_scroll_start() / on_scroll_end()

Hiding the window pauses the simulation and remembers whether the user had
already paused it; showing it again restores that choice. The first frame
after a start, resume or reveal only re-establishes the timing baseline.

Camera rotation is allowed (``rotate_control``) unless the pointer is over
the controls panel or the page is scrolling.
"""
from __future__ import annotations
import logging

from .clock import FrameTimer, SimulationClock
from .renderer import RendererAdapter
from .simulations import Simulation

logger = logging.getLogger(__name__)


class FrameLoop:
    """
    Per-frame driver for a Simulation.

    Attributes:
        simulation: The model being driven.
        renderer: Optional adapter called after every frame.
        clock: Elapsed time excluding pauses.
        timer: Frame-to-frame dt with baseline resets.
        rotate_control: Whether camera orbiting is currently allowed.
        paused_for_visibility: True while paused because the window is hidden.
        frames: Frames that advanced the simulation.
        skipped_frames: Frames dropped because the step raised.
    """

    def __init__(self, simulation: Simulation, renderer: RendererAdapter | None = None) -> None:
        self.simulation = simulation
        self.renderer = renderer
        self.clock = SimulationClock()
        self.timer = FrameTimer()
        self.rotate_control = True
        self.paused_for_visibility = False
        self._paused_before_hidden = False
        self._over_panel = False
        self._scrolling = False
        self.frames = 0
        self.skipped_frames = 0

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self, now: float) -> None:
        """Begin timing at ``now``; the next frame is a baseline."""
        self.clock.reset(now)
        if self.simulation.paused:
            self.clock.pause(now)
        self.timer.reset_baseline()

    def reset(self, now: float) -> None:
        """Rebuild the simulation from its config and restart timing."""
        self.simulation.reset()
        self.paused_for_visibility = False
        self.start(now)

    def elapsed(self, now: float) -> float:
        return self.clock.elapsed(now)

    # ------------------------------------------------------------------
    # Frames
    # ------------------------------------------------------------------

    def on_frame(self, now: float) -> bool:
        """
        Handle one animation frame.

        Returns:
            True if the simulation was stepped, False for a baseline frame,
            a paused frame or a frame skipped after a numerical error.
        """
        dt = self.timer.frame(now)
        stepped = False

        if dt is not None and not self.simulation.paused:
            try:
                self.simulation.step(dt)
            except (ArithmeticError, ValueError) as exc:
                # Keep the loop alive; the next frame tries again
                self.skipped_frames += 1
                logger.warning("Skipping frame at t=%.3f: %s", now, exc)
            else:
                self.frames += 1
                stepped = True
                if self.simulation.paused and not self.clock.paused:
                    # The model stopped itself (came to rest, left the area)
                    self.clock.pause(now)
                    logger.debug("Simulation paused itself at t=%.3f", now)

        if self.renderer is not None:
            self.renderer.render(self.simulation)
        return stepped

    def run(self, frames: int, dt: float, start: float = 0.0) -> None:
        """
        Drive the simulation headless with evenly spaced frames.

        One baseline frame is issued at ``start`` followed by ``frames``
        frames dt apart.
        """
        self.start(start)
        self.on_frame(start)
        for i in range(1, frames + 1):
            self.on_frame(start + i * dt)

    # ------------------------------------------------------------------
    # Input events
    # ------------------------------------------------------------------

    def toggle_pause(self, now: float) -> bool:
        """Pause button. Returns the new pause state."""
        paused = self.simulation.toggle_pause()
        self._sync_clock(paused, now)
        return paused

    def on_visibility_change(self, hidden: bool, now: float) -> None:
        """Window hidden or shown."""
        if hidden:
            if self.paused_for_visibility:
                return
            self.paused_for_visibility = True
            self._paused_before_hidden = self.simulation.paused
            self.simulation.toggle_pause(True)
            self.clock.pause(now)
            logger.debug("Window hidden; simulation paused")
        else:
            if not self.paused_for_visibility:
                return
            self.paused_for_visibility = False
            self.simulation.toggle_pause(self._paused_before_hidden)
            self._sync_clock(self._paused_before_hidden, now)
            logger.debug("Window shown; pause state restored to %s", self._paused_before_hidden)

    def on_pointer_enter_panel(self) -> None:
        self._over_panel = True
        self._update_rotate_control()

    def on_pointer_leave_panel(self) -> None:
        self._over_panel = False
        self._update_rotate_control()

    def on_scroll_start(self) -> None:
        self._scrolling = True
        self._update_rotate_control()

    def on_scroll_end(self) -> None:
        self._scrolling = False
        self._update_rotate_control()

    def _update_rotate_control(self) -> None:
        self.rotate_control = not (self._over_panel or self._scrolling)

    def _sync_clock(self, paused: bool, now: float) -> None:
        if paused:
            self.clock.pause(now)
        else:
            self.clock.resume(now)
        # The interval just measured spans the pause
        self.timer.reset_baseline()
