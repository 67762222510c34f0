"""State behind the two-axis G-force plot with its fading trace."""

from __future__ import annotations

import math
import time
from dataclasses import dataclass
from typing import Callable, Iterator

Point = tuple[float, float]


@dataclass(frozen=True)
class TracePoint:
    """One recorded acceleration, in g, with its time in seconds."""

    ax: float
    ay: float
    timestamp: float


class GForceTrace:
    """Current lateral acceleration plus the samples of the last few seconds."""

    def __init__(
        self,
        max_g: float = 3.0,
        window: float = 2.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.max_g = max_g
        self.window = window
        self._clock = clock
        self.ax = 0.0
        self.ay = 0.0
        self.last_update_time = 0.0
        self._trace: list[TracePoint] = []

    @property
    def trace(self) -> tuple[TracePoint, ...]:
        return tuple(self._trace)

    def set_acceleration(self, ax: float, ay: float) -> None:
        """Record a new acceleration and drop samples older than the window."""
        self.ax = ax
        self.ay = ay
        now = self._clock()
        self.last_update_time = now
        self._trace.append(TracePoint(ax, ay, now))
        while self._trace and now - self._trace[0].timestamp > self.window:
            self._trace.pop(0)

    def _scale(self, ax: float, ay: float, radius: float) -> Point:
        return ax / self.max_g * radius, -ay / self.max_g * radius

    def ring_radii(self, radius: float) -> list[float]:
        """Radii of the whole-g rings for a plot of the given radius."""
        return [radius * (i / self.max_g) for i in range(1, int(self.max_g) + 1)]

    def segments(self, radius: float) -> Iterator[tuple[Point, Point, float]]:
        """Yield (start, end, opacity) for each visible segment of the trace."""
        now = self.last_update_time
        for prev, curr in zip(self._trace, self._trace[1:]):
            age = now - curr.timestamp
            if age > self.window:
                continue
            alpha = 1.0 - age / self.window
            yield (
                self._scale(prev.ax, prev.ay, radius),
                self._scale(curr.ax, curr.ay, radius),
                alpha,
            )

    def dot_position(self, radius: float) -> Point:
        """Plot position of the current acceleration; y grows downward."""
        return self._scale(self.ax, self.ay, radius)

    def dot_color(self) -> str:
        """Colour of the current-acceleration dot by magnitude."""
        magnitude = math.hypot(self.ax, self.ay)
        if magnitude > 2.5:
            return "magenta"
        if magnitude > 1.5:
            return "yellow"
        return "red"