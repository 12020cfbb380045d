"""Module geometry engine.

Turns one (module type, rotation) cell into backend-independent primitives
for a given render style. Every handler works in the cell-local frame with
the origin at the cell centre; the returned Placement rotates the result
about that centre by whole quarter turns.

The anchor constants are specific to this typeface: the Straight stem hugs
the left edge, Round and Bend pivot on the right-top corner, and stroke
centerlines sit on the visual centre of the corresponding filled shape.

Stroked styles also know which of the module's sides are free ends (see
``geometry.endpoints``). With round caps or closed ends enabled, strokes
stop half a stroke width short of a free end, so the cap or closing bar
lands inside the cell.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from void_type.geometry.dash import adaptive_dash
from void_type.geometry.endpoints import Side
from void_type.geometry.primitives import (
    FilledRect,
    FilledSector,
    ModuleShapes,
    Placement,
    Shape,
    StrokedArc,
    StrokedPolyline,
)
from void_type.geometry.stripes import clamp_radius, stripe_centers, stripe_metrics
from void_type.glyphs.model import Module, ModuleType

ARC_START = math.pi / 2
ARC_END = math.pi

MAX_ARC_TRIM = (ARC_END - ARC_START) / 4
"""Largest angle cut from either end of an arc at a free end."""


class RenderStyle(Enum):
    """How a module shape is turned into painted geometry."""

    FILL = "fill"
    STRIPES = "stripes"
    STRIPES_DASH = "stripes-dash"
    STROKE = "stroke"
    DASH = "dash"
    RANDOM = "random"


@dataclass(frozen=True)
class StyleParams:
    """Everything the engine needs to know about one module's style.

    ``stem`` is the nominal stem weight; shapes are ``stem / 2`` thick.
    ``dash_length`` and ``gap_length`` are multiples of the stem (dash
    style) or of the stripe width (dashed stripes). ``free_ends`` holds the
    module's free sides in its own unrotated frame.
    """

    style: RenderStyle = RenderStyle.FILL
    stem: float = 24.0
    stroke_count: int = 2
    stroke_gap_ratio: float = 1.0
    corner_radius: float = 0.0
    rounded_caps: bool = False
    dash_length: float = 0.10
    gap_length: float = 0.30
    dashed_stripes: bool = False
    close_ends: bool = False
    dash_chess: bool = False
    free_ends: frozenset[Side] = frozenset()

    @property
    def thickness(self) -> float:
        return self.stem / 2

    @property
    def cap(self) -> str:
        return "round" if self.rounded_caps else "butt"

    @property
    def join(self) -> str:
        return "round" if self.rounded_caps else "miter"

    @property
    def bar_cap(self) -> str:
        return "round" if self.rounded_caps else "square"

    @property
    def is_dashed(self) -> bool:
        if self.style in (RenderStyle.DASH, RenderStyle.STRIPES_DASH):
            return True
        return self.dashed_stripes and self.style in (
            RenderStyle.STRIPES, RenderStyle.RANDOM,
        )

    def trim(self, side: Side, amount: float) -> float:
        """How far a stroke stops short of ``side``."""
        if side in self.free_ends and (self.rounded_caps or self.close_ends):
            return amount
        return 0.0


Handler = Callable[[float, float, StyleParams], list[Shape]]
StripeHandler = Callable[
    [float, float, StyleParams], tuple[list[Shape], list[Shape]]
]


# ---------------------------------------------------------------------------
# Fill
# ---------------------------------------------------------------------------


def _fill_straight(w: float, h: float, p: StyleParams) -> list[Shape]:
    return [FilledRect(-w / 2, -h / 2, p.thickness, h, p.corner_radius)]


def _fill_central(w: float, h: float, p: StyleParams) -> list[Shape]:
    t = p.thickness
    return [FilledRect(-t / 2, -h / 2, t, h, p.corner_radius)]


def _fill_joint(w: float, h: float, p: StyleParams) -> list[Shape]:
    t = p.thickness
    return _fill_straight(w, h, p) + [
        FilledRect(-w / 2 + t, -t / 2, w - t, t, p.corner_radius)
    ]


def _fill_link(w: float, h: float, p: StyleParams) -> list[Shape]:
    t = p.thickness
    return _fill_straight(w, h, p) + [
        FilledRect(-w / 2, h / 2 - t, w, t, p.corner_radius)
    ]


def _fill_round(w: float, h: float, p: StyleParams) -> list[Shape]:
    inner = max(0.0, w - p.thickness)
    return [FilledSector(w / 2, -h / 2, w, inner, ARC_START, ARC_END)]


def _fill_bend(w: float, h: float, p: StyleParams) -> list[Shape]:
    return [FilledSector(w / 2, -h / 2, p.thickness, 0.0, ARC_START, ARC_END)]


# ---------------------------------------------------------------------------
# Centerline (stroke and dash)
# ---------------------------------------------------------------------------


def _line(points, width: float, p: StyleParams) -> StrokedPolyline:
    return StrokedPolyline(tuple(points), width, p.cap, p.join)


def _vertical(x: float, h: float, width: float, p: StyleParams) -> StrokedPolyline:
    half = width / 2
    top = -h / 2 + p.trim(Side.TOP, half)
    bottom = h / 2 - p.trim(Side.BOTTOM, half)
    return _line([(x, top), (x, bottom)], width, p)


def _arc_trim(p: StyleParams, side: Side, amount: float, radius: float) -> float:
    """Angle that leaves the arc's end point ``amount`` inside the cell edge."""
    cut = p.trim(side, amount)
    if not cut:
        return 0.0
    return min(math.asin(min(1.0, cut / radius)), MAX_ARC_TRIM)


def _arc(
    w: float, h: float, radius: float, width: float, p: StyleParams
) -> StrokedArc:
    r = clamp_radius(radius, width)
    # The right end sits at ARC_START, the top end at ARC_END
    start = ARC_START + _arc_trim(p, Side.RIGHT, width / 2, r)
    end = ARC_END - _arc_trim(p, Side.TOP, width / 2, r)
    return StrokedArc(w / 2, -h / 2, r, start, end, width, p.cap)


def _stem_x(w: float, p: StyleParams) -> float:
    return -w / 2 + p.thickness / 2


def _stroke_straight(w: float, h: float, p: StyleParams) -> list[Shape]:
    return [_vertical(_stem_x(w, p), h, p.thickness, p)]


def _stroke_central(w: float, h: float, p: StyleParams) -> list[Shape]:
    return [_vertical(0.0, h, p.thickness, p)]


def _stroke_joint(w: float, h: float, p: StyleParams) -> list[Shape]:
    x = _stem_x(w, p)
    right = w / 2 - p.trim(Side.RIGHT, p.thickness / 2)
    return _stroke_straight(w, h, p) + [_line([(x, 0.0), (right, 0.0)], p.thickness, p)]


def _stroke_link(w: float, h: float, p: StyleParams) -> list[Shape]:
    half = p.thickness / 2
    x = _stem_x(w, p)
    y = h / 2 - half
    top = -h / 2 + p.trim(Side.TOP, half)
    right = w / 2 - p.trim(Side.RIGHT, half)
    return [_line([(x, top), (x, y), (right, y)], p.thickness, p)]


def _stroke_round(w: float, h: float, p: StyleParams) -> list[Shape]:
    return [_arc(w, h, w - p.thickness / 2, p.thickness, p)]


def _stroke_bend(w: float, h: float, p: StyleParams) -> list[Shape]:
    return [_arc(w, h, p.thickness / 2, p.thickness, p)]


# ---------------------------------------------------------------------------
# Stripes
#
# Stripe handlers return the stripes and, separately, the bars that close
# them off at free ends.
# ---------------------------------------------------------------------------


def _metrics(p: StyleParams) -> tuple[float, float]:
    return stripe_metrics(p.thickness, p.stroke_count, p.stroke_gap_ratio)


def _count(p: StyleParams) -> int:
    return max(1, int(p.stroke_count))


def _bar(a, b, width: float, p: StyleParams, cap: str | None = None) -> StrokedPolyline:
    return StrokedPolyline((a, b), width, cap or p.bar_cap, p.join)


def _closes(p: StyleParams, side: Side) -> bool:
    return p.close_ends and side in p.free_ends and _count(p) > 1


def _vertical_run(xs: list[float], h: float, sw: float, p: StyleParams):
    stripes: list[Shape] = [_vertical(x, h, sw, p) for x in xs]
    bars: list[Shape] = []
    if _closes(p, Side.TOP):
        y = -h / 2 + p.trim(Side.TOP, sw / 2)
        bars.append(_bar((xs[0], y), (xs[-1], y), sw, p))
    if _closes(p, Side.BOTTOM):
        y = h / 2 - p.trim(Side.BOTTOM, sw / 2)
        bars.append(_bar((xs[0], y), (xs[-1], y), sw, p))
    return stripes, bars


def _stripes_straight(w: float, h: float, p: StyleParams):
    sw, gap = _metrics(p)
    return _vertical_run(stripe_centers(-w / 2 + sw / 2, _count(p), sw, gap), h, sw, p)


def _stripes_central(w: float, h: float, p: StyleParams):
    sw, gap = _metrics(p)
    start = -p.thickness / 2 + sw / 2
    return _vertical_run(stripe_centers(start, _count(p), sw, gap), h, sw, p)


def _stripes_joint(w: float, h: float, p: StyleParams):
    sw, gap = _metrics(p)
    n = _count(p)
    xs = stripe_centers(-w / 2 + sw / 2, n, sw, gap)
    ys = stripe_centers(-p.thickness / 2 + sw / 2, n, sw, gap)
    stripes, bars = _vertical_run(xs, h, sw, p)
    right = w / 2 - p.trim(Side.RIGHT, sw / 2)
    # Horizontal arm starts at the outermost vertical stripe, not the edge
    stripes += [_line([(xs[-1], y), (right, y)], sw, p) for y in ys]
    if _closes(p, Side.RIGHT):
        bars.append(_bar((right, ys[0]), (right, ys[-1]), sw, p))
    return stripes, bars


def _stripes_link(w: float, h: float, p: StyleParams):
    sw, gap = _metrics(p)
    n = _count(p)
    xs = stripe_centers(-w / 2 + sw / 2, n, sw, gap)
    ys = stripe_centers(h / 2 - p.thickness + sw / 2, n, sw, gap)
    top = -h / 2 + p.trim(Side.TOP, sw / 2)
    right = w / 2 - p.trim(Side.RIGHT, sw / 2)
    # Nested corners: the outermost vertical pairs with the lowest horizontal
    stripes: list[Shape] = [
        _line([(x, top), (x, y), (right, y)], sw, p)
        for x, y in zip(xs, reversed(ys))
    ]
    bars: list[Shape] = []
    if _closes(p, Side.TOP):
        bars.append(_bar((xs[0], top), (xs[-1], top), sw, p))
    if _closes(p, Side.RIGHT):
        bars.append(_bar((right, ys[0]), (right, ys[-1]), sw, p))
    return stripes, bars


def _arc_stripes(w: float, h: float, outer: float, p: StyleParams):
    sw, gap = _metrics(p)
    arcs = [
        _arc(w, h, outer - sw / 2 - i * (sw + gap), sw, p)
        for i in range(_count(p))
    ]
    first, last = arcs[0], arcs[-1]
    bars: list[Shape] = []
    if _closes(p, Side.RIGHT):
        bars.append(_bar(
            first.point_at(first.start_angle), last.point_at(last.start_angle), sw, p, p.cap,
        ))
    if _closes(p, Side.TOP):
        bars.append(_bar(
            first.point_at(first.end_angle), last.point_at(last.end_angle), sw, p, p.cap,
        ))
    return arcs, bars


def _stripes_round(w: float, h: float, p: StyleParams):
    return _arc_stripes(w, h, w, p)


def _stripes_bend(w: float, h: float, p: StyleParams):
    return _arc_stripes(w, h, p.thickness, p)


# ---------------------------------------------------------------------------
# Dashes
# ---------------------------------------------------------------------------


def _dashed(shapes: list[Shape], dash: float, gap: float) -> list[Shape]:
    out: list[Shape] = []
    for shape in shapes:
        pattern = adaptive_dash(shape.length, dash, gap)
        out.append(_with_dash(shape, pattern))
    return out


def _with_dash(shape, pattern):
    if isinstance(shape, StrokedArc):
        return StrokedArc(
            shape.cx, shape.cy, shape.radius, shape.start_angle, shape.end_angle,
            shape.width, shape.cap, pattern,
        )
    return StrokedPolyline(shape.points, shape.width, shape.cap, shape.join, pattern)


def _dash_handler(centerline: Handler) -> Handler:
    def handler(w: float, h: float, p: StyleParams) -> list[Shape]:
        return _dashed(
            centerline(w, h, p), p.stem * p.dash_length, p.stem * p.gap_length
        )
    return handler


def _stripes_handler(stripes: StripeHandler, dashed: bool = False) -> Handler:
    def handler(w: float, h: float, p: StyleParams) -> list[Shape]:
        lines, bars = stripes(w, h, p)
        if not (dashed or p.dashed_stripes):
            return lines + bars
        sw = lines[0].width
        dash, gap = sw * p.dash_length, sw * p.gap_length
        n = _count(p)
        out: list[Shape] = []
        for i, shape in enumerate(lines):
            pattern = adaptive_dash(shape.length, dash, gap)
            # Chess: every other stripe of a run is shifted by half a dash
            if pattern is not None and p.dash_chess and (i % n) % 2:
                pattern = pattern.shifted(pattern.dash / 2)
            out.append(_with_dash(shape, pattern))
        return out + _dashed(bars, dash, gap)
    return handler


_FILL: dict[ModuleType, Handler] = {
    ModuleType.STRAIGHT: _fill_straight,
    ModuleType.CENTRAL: _fill_central,
    ModuleType.JOINT: _fill_joint,
    ModuleType.LINK: _fill_link,
    ModuleType.ROUND: _fill_round,
    ModuleType.BEND: _fill_bend,
}

_STROKE: dict[ModuleType, Handler] = {
    ModuleType.STRAIGHT: _stroke_straight,
    ModuleType.CENTRAL: _stroke_central,
    ModuleType.JOINT: _stroke_joint,
    ModuleType.LINK: _stroke_link,
    ModuleType.ROUND: _stroke_round,
    ModuleType.BEND: _stroke_bend,
}

_STRIPES: dict[ModuleType, StripeHandler] = {
    ModuleType.STRAIGHT: _stripes_straight,
    ModuleType.CENTRAL: _stripes_central,
    ModuleType.JOINT: _stripes_joint,
    ModuleType.LINK: _stripes_link,
    ModuleType.ROUND: _stripes_round,
    ModuleType.BEND: _stripes_bend,
}

HANDLERS: dict[tuple[ModuleType, RenderStyle], Handler] = {}
for _type in _FILL:
    HANDLERS[(_type, RenderStyle.FILL)] = _FILL[_type]
    HANDLERS[(_type, RenderStyle.STROKE)] = _STROKE[_type]
    HANDLERS[(_type, RenderStyle.DASH)] = _dash_handler(_STROKE[_type])
    HANDLERS[(_type, RenderStyle.STRIPES)] = _stripes_handler(_STRIPES[_type])
    HANDLERS[(_type, RenderStyle.STRIPES_DASH)] = _stripes_handler(
        _STRIPES[_type], dashed=True
    )
    HANDLERS[(_type, RenderStyle.RANDOM)] = HANDLERS[(_type, RenderStyle.STRIPES)]


def module_shapes(
    module: Module,
    x: float,
    y: float,
    w: float,
    h: float,
    style: StyleParams,
) -> ModuleShapes | None:
    """Build the primitives for one module whose cell starts at (x, y).

    Returns None for empty modules, whatever their rotation.
    """
    if module.is_empty:
        return None
    handler = HANDLERS[(module.type, style.style)]
    placement = Placement(x + w / 2, y + h / 2, module.rotation)
    return ModuleShapes(placement, tuple(handler(w, h, style)))
