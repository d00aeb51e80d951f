"""Simulation clock: tick counter plus the elapsed-time reading per tick."""

from typing import Optional

from .constants import FRAME_MS_DEFAULT
from .errors import ClockError


class SimulationClock:
    """
    Resolves the time used by one tick.

    Drivers either pass a monotonic clock reading to advance() (browser-style
    requestAnimationFrame timestamps) or let the clock step by a fixed frame.
    """

    def __init__(self, frame_ms: float = FRAME_MS_DEFAULT, start_ms: float = 0.0) -> None:
        if frame_ms <= 0:
            raise ValueError("frame_ms must be positive")
        self._frame_ms = float(frame_ms)
        self._start_ms = float(start_ms)
        self._elapsed_ms = float(start_ms)
        self._tick_number = 0

    @property
    def frame_ms(self) -> float:
        return self._frame_ms

    @property
    def tick_number(self) -> int:
        return self._tick_number

    @property
    def elapsed_ms(self) -> float:
        return self._elapsed_ms

    def advance(self, now_ms: Optional[float] = None) -> float:
        """
        Start the next tick and return its clock reading.

        Args:
            now_ms: External monotonic reading; None steps one fixed frame

        Raises:
            ClockError: now_ms is earlier than the previous reading
        """
        if now_ms is None:
            now_ms = self._elapsed_ms + self._frame_ms if self._tick_number else self._elapsed_ms
        elif now_ms < self._elapsed_ms:
            raise ClockError(
                f"Clock went backwards: {now_ms} ms < {self._elapsed_ms} ms"
            )

        self._elapsed_ms = float(now_ms)
        self._tick_number += 1
        return self._elapsed_ms

    def reset(self, start_ms: Optional[float] = None) -> None:
        if start_ms is not None:
            self._start_ms = float(start_ms)
        self._elapsed_ms = self._start_ms
        self._tick_number = 0
