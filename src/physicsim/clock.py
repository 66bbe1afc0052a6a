# MIT License (see LICENSE)
"""
Pause-aware time keeping for frame-driven simulations.

Two pieces:
- SimulationClock: elapsed simulated time that excludes paused intervals,
      elapsed = now - start_time - cumulative_pause
- FrameTimer: turns successive frame timestamps into per-frame dt. The first
  frame after a start or resume only sets the baseline and yields no dt, so
  an interval spanning a pause (or a hidden tab) is never applied as one
  giant step.

Timestamps are plain floats in seconds supplied by the host (for example
time.perf_counter()); nothing here reads a clock itself, which keeps both
classes deterministic under test.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass
class SimulationClock:
    """
    Elapsed-time bookkeeping that freezes while paused.

    Attributes:
        start_time: Timestamp of the last reset.
        cumulative_pause: Total paused duration since the last reset.
        paused: Whether the clock is currently paused.
        pause_started: Timestamp the current pause began, or None.
    """
    start_time: float = 0.0
    cumulative_pause: float = 0.0
    paused: bool = False
    pause_started: float | None = None

    def reset(self, now: float) -> None:
        """Restart the clock at ``now``, running."""
        self.start_time = now
        self.cumulative_pause = 0.0
        self.paused = False
        self.pause_started = None

    def pause(self, now: float) -> None:
        """Stop the clock. Pausing twice has no further effect."""
        if self.paused:
            return
        self.paused = True
        self.pause_started = now

    def resume(self, now: float) -> None:
        """Restart the clock, adding the paused interval to the total."""
        if not self.paused:
            return
        if self.pause_started is not None:
            self.cumulative_pause += max(0.0, now - self.pause_started)
        self.paused = False
        self.pause_started = None

    def elapsed(self, now: float) -> float:
        """
        Simulated time since the last reset.

        While paused the value is frozen at the moment the pause began.
        """
        end = self.pause_started if self.paused and self.pause_started is not None else now
        return end - self.start_time - self.cumulative_pause


class FrameTimer:
    """
    Per-frame dt from frame timestamps.

    Example:
        timer = FrameTimer()
        timer.frame(10.00)   # None, baseline
        timer.frame(10.02)   # 0.02
        timer.reset_baseline()
        timer.frame(55.00)   # None, baseline again
    """

    def __init__(self) -> None:
        self._last: float | None = None

    @property
    def is_first_frame(self) -> bool:
        return self._last is None

    def reset_baseline(self) -> None:
        """Discard the previous timestamp; the next frame is a baseline."""
        self._last = None

    def frame(self, now: float) -> float | None:
        """
        Register a frame at ``now``.

        Returns:
            Seconds since the previous frame, or None for a baseline frame.
        """
        last, self._last = self._last, now
        if last is None:
            return None
        dt = now - last
        if dt < 0:
            logger.warning("Frame timestamp went backwards by %.4f s; treating as baseline", -dt)
            return None
        return dt
