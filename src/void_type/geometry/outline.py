"""Convert primitives into shapely outlines in world coordinates.

The raster backend paints these outlines, and they double as the reference
footprint when comparing render styles. Arcs are flattened with their end
points included, so bounding boxes of quarter arcs stay exact.
"""

from __future__ import annotations

import math

from shapely import affinity
from shapely.geometry import LineString, Point, Polygon
from shapely.geometry.base import BaseGeometry
from shapely.ops import substring, unary_union

from void_type.geometry.primitives import (
    FilledRect,
    FilledSector,
    ModuleShapes,
    Shape,
    StrokedArc,
    StrokedPolyline,
)

ARC_SEGMENTS = 64
"""Segments used to flatten a quarter arc."""

CURVE_SEGMENTS = 8
"""Segments used to flatten a quadratic rounded corner."""

BUFFER_RESOLUTION = 16
"""Quadrant segments for round caps and joins."""

_CAP_STYLES = {"butt": "flat", "round": "round", "square": "square"}
_JOIN_STYLES = {"miter": "mitre", "round": "round"}


def _arc_points(
    cx: float, cy: float, radius: float, start: float, end: float
) -> list[tuple[float, float]]:
    sweep = end - start
    steps = max(2, math.ceil(ARC_SEGMENTS * abs(sweep) / (math.pi / 2)))
    return [
        (
            cx + radius * math.cos(start + sweep * i / steps),
            cy + radius * math.sin(start + sweep * i / steps),
        )
        for i in range(steps + 1)
    ]


def _quad(p0, c, p1) -> list[tuple[float, float]]:
    pts = []
    for i in range(1, CURVE_SEGMENTS + 1):
        t = i / CURVE_SEGMENTS
        a = (1 - t) * (1 - t)
        b = 2 * (1 - t) * t
        d = t * t
        pts.append((
            a * p0[0] + b * c[0] + d * p1[0],
            a * p0[1] + b * c[1] + d * p1[1],
        ))
    return pts


def rect_outline(rect: FilledRect) -> Polygon:
    """Rectangle polygon with quadratic rounded corners."""
    x, y, w, h = rect.x, rect.y, rect.width, rect.height
    r = rect.radius
    if r <= 0:
        return Polygon([(x, y), (x + w, y), (x + w, y + h), (x, y + h)])
    pts = [(x + r, y), (x + w - r, y)]
    pts += _quad((x + w - r, y), (x + w, y), (x + w, y + r))
    pts.append((x + w, y + h - r))
    pts += _quad((x + w, y + h - r), (x + w, y + h), (x + w - r, y + h))
    pts.append((x + r, y + h))
    pts += _quad((x + r, y + h), (x, y + h), (x, y + h - r))
    pts.append((x, y + r))
    pts += _quad((x, y + r), (x, y), (x + r, y))
    return Polygon(pts)


def _sector_polygon(
    cx: float, cy: float, outer: float, inner: float, start: float, end: float
) -> Polygon:
    outer_pts = _arc_points(cx, cy, outer, start, end)
    if inner > 0:
        return Polygon(outer_pts + _arc_points(cx, cy, inner, start, end)[::-1])
    return Polygon(outer_pts + [(cx, cy)])


def sector_outline(sector: FilledSector) -> Polygon:
    return _sector_polygon(
        sector.cx, sector.cy, sector.outer_radius, sector.inner_radius,
        sector.start_angle, sector.end_angle,
    )


def centerline(shape: StrokedPolyline | StrokedArc) -> LineString:
    if isinstance(shape, StrokedArc):
        return LineString(
            _arc_points(shape.cx, shape.cy, shape.radius, shape.start_angle, shape.end_angle)
        )
    return LineString(shape.points)


def _arc_band(arc: StrokedArc, start: float, end: float) -> BaseGeometry:
    """Annulus sector of a stroked arc between two angles.

    Butt caps end radially, as SVG draws them on arcs; round caps add a
    disc at each end.
    """
    half = arc.width / 2
    band = _sector_polygon(
        arc.cx, arc.cy, arc.radius + half, max(arc.radius - half, 0.0), start, end
    )
    if arc.cap != "round":
        return band
    ends = [
        Point(
            arc.cx + arc.radius * math.cos(a), arc.cy + arc.radius * math.sin(a)
        ).buffer(half, quad_segs=BUFFER_RESOLUTION)
        for a in (start, end)
    ]
    return unary_union([band, *ends])


def arc_outline(arc: StrokedArc) -> BaseGeometry:
    if arc.dash is None:
        return _arc_band(arc, arc.start_angle, arc.end_angle)
    direction = 1.0 if arc.end_angle >= arc.start_angle else -1.0
    total = arc.length
    bands = []
    for start, end in arc.dash.intervals(total):
        end = min(end, total)
        if end <= start:
            continue
        bands.append(_arc_band(
            arc,
            arc.start_angle + direction * start / arc.radius,
            arc.start_angle + direction * end / arc.radius,
        ))
    return unary_union(bands)


def stroke_outline(shape: StrokedPolyline | StrokedArc) -> BaseGeometry:
    """Buffer a stroked path (split into dashes when it has a pattern)."""
    if isinstance(shape, StrokedArc):
        return arc_outline(shape)
    line = centerline(shape)
    join = _JOIN_STYLES[shape.join]
    cap = _CAP_STYLES[shape.cap]

    pieces = [line]
    if shape.dash is not None:
        # Dashes are measured on the true path length and mapped
        # proportionally onto the flattened line
        total = shape.length
        pieces = [
            substring(line, start / total, min(end, total) / total, normalized=True)
            for start, end in shape.dash.intervals(total)
        ]

    outlines = [
        piece.buffer(
            shape.width / 2,
            cap_style=cap,
            join_style=join,
            quad_segs=BUFFER_RESOLUTION,
        )
        for piece in pieces
        if piece.length > 0
    ]
    return unary_union(outlines)


def shape_outline(shape: Shape) -> BaseGeometry:
    """Outline of one primitive in the cell-local frame."""
    if isinstance(shape, FilledRect):
        return rect_outline(shape)
    if isinstance(shape, FilledSector):
        return sector_outline(shape)
    return stroke_outline(shape)


def module_outline(module: ModuleShapes) -> BaseGeometry:
    """Union of a module's primitives, placed in world coordinates."""
    local = unary_union([shape_outline(s) for s in module.shapes])
    placement = module.placement
    rotated = affinity.rotate(local, placement.degrees, origin=(0, 0))
    return affinity.translate(rotated, placement.cx, placement.cy)


def outline(modules) -> BaseGeometry:
    """Union of many placed modules."""
    return unary_union([module_outline(m) for m in modules])
