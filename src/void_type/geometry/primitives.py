"""Backend-independent drawing primitives.

Every shape is expressed in the cell-local frame: the origin sits at the
cell centre and y grows downward, as in both SVG and raster image space.
A Placement then moves the cell into the world by translating to the cell
centre and rotating by a whole number of quarter turns.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Literal, Union

Cap = Literal["butt", "round", "square"]
Join = Literal["miter", "round"]


@dataclass(frozen=True)
class DashPattern:
    """A dash/gap pair and the number of dashes it yields along a path.

    ``offset`` slides the whole pattern forward along the path; dashes that
    then cross either end of the path are clipped.
    """

    dash: float
    gap: float
    count: int
    offset: float = 0.0

    @property
    def period(self) -> float:
        return self.dash + self.gap

    @property
    def span(self) -> float:
        """Path length the pattern was fitted to."""
        return self.count * self.dash + (self.count - 1) * self.gap

    def shifted(self, offset: float) -> DashPattern:
        return DashPattern(self.dash, self.gap, self.count, offset)

    def intervals(self, length: float | None = None) -> list[tuple[float, float]]:
        """(start, end) distances of each dash along the path."""
        if not self.offset:
            return [
                (i * self.period, i * self.period + self.dash) for i in range(self.count)
            ]
        if length is None:
            length = self.span
        out = []
        start = self.offset % self.period - self.period
        while start < length:
            a, b = max(start, 0.0), min(start + self.dash, length)
            if b > a:
                out.append((a, b))
            start += self.period
        return out


@dataclass(frozen=True)
class FilledRect:
    """Solid axis-aligned rectangle with optional rounded corners."""

    x: float
    y: float
    width: float
    height: float
    corner_radius: float = 0.0

    @property
    def radius(self) -> float:
        """Corner radius, capped at half the shorter side."""
        return max(0.0, min(self.corner_radius, self.width / 2, self.height / 2))


@dataclass(frozen=True)
class FilledSector:
    """Solid annulus sector around (cx, cy); inner_radius 0 gives a pie."""

    cx: float
    cy: float
    outer_radius: float
    inner_radius: float
    start_angle: float
    end_angle: float


@dataclass(frozen=True)
class StrokedPolyline:
    """Open path of straight segments painted with a stroke."""

    points: tuple[tuple[float, float], ...]
    width: float
    cap: Cap = "butt"
    join: Join = "miter"
    dash: DashPattern | None = None

    @property
    def length(self) -> float:
        return sum(
            math.dist(a, b) for a, b in zip(self.points, self.points[1:])
        )


@dataclass(frozen=True)
class StrokedArc:
    """Circular arc painted with a stroke. Angles in radians, y down."""

    cx: float
    cy: float
    radius: float
    start_angle: float
    end_angle: float
    width: float
    cap: Cap = "butt"
    dash: DashPattern | None = None

    @property
    def length(self) -> float:
        return self.radius * abs(self.end_angle - self.start_angle)

    def point_at(self, angle: float) -> tuple[float, float]:
        return (
            self.cx + self.radius * math.cos(angle),
            self.cy + self.radius * math.sin(angle),
        )


Shape = Union[FilledRect, FilledSector, StrokedPolyline, StrokedArc]


def is_filled(shape: Shape) -> bool:
    return isinstance(shape, (FilledRect, FilledSector))


def path_length(shape: Shape) -> float:
    """Length of a stroked path (0 for filled shapes)."""
    if isinstance(shape, (StrokedPolyline, StrokedArc)):
        return shape.length
    return 0.0


@dataclass(frozen=True)
class Placement:
    """Cell-to-world transform: translate to (cx, cy), then rotate."""

    cx: float
    cy: float
    rotation: int = 0

    @property
    def degrees(self) -> int:
        return (self.rotation % 4) * 90

    def apply(self, x: float, y: float) -> tuple[float, float]:
        """Map a cell-local point into world coordinates."""
        turn = self.rotation % 4
        # Exact quarter turns; rotate(90) maps (x, y) -> (-y, x) with y down
        if turn == 1:
            x, y = -y, x
        elif turn == 2:
            x, y = -x, -y
        elif turn == 3:
            x, y = y, -x
        return (self.cx + x, self.cy + y)


@dataclass(frozen=True)
class ModuleShapes:
    """Primitives for one module together with its placement."""

    placement: Placement
    shapes: tuple[Shape, ...]
