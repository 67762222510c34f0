"""Geometry and colouring of the six servo bars drawn on a hexagon."""

from __future__ import annotations

import math

BAR_COUNT = 6
HEXAGON_RADIUS = 100.0
BAR_LENGTH = 50.0
BAR_WIDTH = 15.0
HEIGHT_SCALE = 10.0
DEFAULT_VALUE = 0.5

Point = tuple[float, float]


def bar_color(value: float) -> tuple[int, int, int]:
    """RGB colour running from green (0.0) through yellow (0.5) to red (1.0)."""
    if value <= 0.5:
        return int(510 * value), 255, 0
    return 255, int(255 - 510 * (value - 0.5)), 0


def servo_angle_to_value(angle: float) -> float:
    """Map a servo angle in degrees (-90..90) onto a bar value (0..1)."""
    return (angle + 90.0) / 180.0


class HexagonBars:
    """Six bars, one per hexagon corner, each pointing toward the centre."""

    def __init__(self, width: int = 200, height: int = 200) -> None:
        self.width = width
        self.height = height
        self._values = [DEFAULT_VALUE] * BAR_COUNT

    @property
    def values(self) -> tuple[float, ...]:
        return tuple(self._values)

    @property
    def center(self) -> Point:
        return float(self.width // 2), float(self.height // 2)

    def set_bar_value(self, index: int, value: float) -> None:
        """Set one bar, clamped to 0..1; indexes outside 0..5 are ignored."""
        if 0 <= index < BAR_COUNT:
            self._values[index] = min(max(value, 0.0), 1.0)

    def bar_value(self, index: int) -> float:
        """Value of one bar, or 0.0 for an index outside 0..5."""
        return self._values[index] if 0 <= index < BAR_COUNT else 0.0

    def hexagon_points(self) -> list[Point]:
        """Corner points of the hexagon, starting at angle 0 and going by 60°."""
        cx, cy = self.center
        return [
            (
                cx + HEXAGON_RADIUS * math.cos(math.radians(60 * i)),
                cy + HEXAGON_RADIUS * math.sin(math.radians(60 * i)),
            )
            for i in range(BAR_COUNT)
        ]

    def bar_tips(self) -> list[Point]:
        """Inner end of each bar, value × bar length in from its corner."""
        cx, cy = self.center
        tips = []
        for (ox, oy), value in zip(self.hexagon_points(), self._values):
            dx, dy = cx - ox, cy - oy
            length = math.hypot(dx, dy)
            reach = BAR_LENGTH * value
            tips.append((ox + dx / length * reach, oy + dy / length * reach))
        return tips

    def bar_heights(self) -> list[float]:
        """Height of the raised-section indicator for each bar."""
        return [value * HEIGHT_SCALE for value in self._values]