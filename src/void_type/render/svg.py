"""SVG generation for Void scenes using drawsvg."""

from __future__ import annotations

import math

import drawsvg as draw

from void_type.geometry.engine import RenderStyle
from void_type.geometry.primitives import (
    FilledRect,
    FilledSector,
    ModuleShapes,
    Shape,
    StrokedArc,
    StrokedPolyline,
)
from void_type.render.constants import GRID_STROKE_WIDTH
from void_type.render.params import RenderParams
from void_type.render.scene import Scene


def render_svg(
    scene: Scene,
    params: RenderParams,
    background: bool = True,
    grid: bool = False,
) -> str:
    """Render a scene to an SVG string."""
    return build_drawing(scene, params, background=background, grid=grid).as_svg()


def build_drawing(
    scene: Scene,
    params: RenderParams,
    background: bool = True,
    grid: bool = False,
) -> draw.Drawing:
    """Build the drawsvg document for a scene.

    Layers: ``back`` (background rect and optional ``grid``), then ``typo``
    holding one group per letter and one transformed group per module.
    """
    d = draw.Drawing(scene.width, scene.height)

    back = draw.Group(id="back")
    if background:
        back.append(draw.Rectangle(
            0, 0, scene.width, scene.height, fill=params.background_color,
        ))
    if grid:
        back.append(_grid_group(scene, params))
    d.append(back)

    d.append(_typo_group(scene, params))
    return d


def _grid_group(scene: Scene, params: RenderParams) -> draw.Group:
    m = scene.module_size
    offset_x, offset_y = scene.grid_offset
    g = draw.Group(
        id="grid", stroke=params.grid_color, stroke_width=GRID_STROKE_WIDTH,
    )
    x = offset_x
    while x <= scene.width:
        g.append(draw.Line(x, 0, x, scene.height))
        x += m
    y = offset_y
    while y <= scene.height:
        g.append(draw.Line(0, y, scene.width, y))
        y += m
    return g


def _typo_group(scene: Scene, params: RenderParams) -> draw.Group:
    # Filled styles colour through fill; every stroked style suppresses
    # fill and paints with the stroke only
    if params.render_style is RenderStyle.FILL:
        typo = draw.Group(id="typo", fill=params.color)
    else:
        typo = draw.Group(id="typo", fill="none", stroke=params.color)

    for letter in scene.letters:
        if not letter.modules:
            continue
        letter_group = draw.Group()
        for module in letter.modules:
            letter_group.append(_module_group(module))
        typo.append(letter_group)
    return typo


def _module_group(module: ModuleShapes) -> draw.Group:
    p = module.placement
    g = draw.Group(transform=f"translate({p.cx}, {p.cy}) rotate({p.degrees})")
    for shape in module.shapes:
        g.append(_shape_element(shape))
    return g


def _shape_element(shape: Shape):
    if isinstance(shape, FilledRect):
        return _rect_element(shape)
    if isinstance(shape, FilledSector):
        return _sector_path(shape)
    if isinstance(shape, StrokedArc):
        return _arc_path(shape)
    return _polyline_path(shape)


def _rect_element(rect: FilledRect):
    r = rect.radius
    if r <= 0:
        return draw.Rectangle(rect.x, rect.y, rect.width, rect.height)
    x, y, w, h = rect.x, rect.y, rect.width, rect.height
    p = draw.Path()
    p.M(x + r, y).L(x + w - r, y)
    p.Q(x + w, y, x + w, y + r).L(x + w, y + h - r)
    p.Q(x + w, y + h, x + w - r, y + h).L(x + r, y + h)
    p.Q(x, y + h, x, y + h - r).L(x, y + r)
    p.Q(x, y, x + r, y).Z()
    return p


def _polar(cx: float, cy: float, r: float, angle: float) -> tuple[float, float]:
    return (cx + r * math.cos(angle), cy + r * math.sin(angle))


def _sweep_flags(start: float, end: float) -> tuple[int, int]:
    large = 1 if abs(end - start) > math.pi else 0
    sweep = 1 if end > start else 0
    return large, sweep


def _sector_path(sector: FilledSector) -> draw.Path:
    cx, cy = sector.cx, sector.cy
    large, sweep = _sweep_flags(sector.start_angle, sector.end_angle)
    ro, ri = sector.outer_radius, sector.inner_radius

    p = draw.Path()
    p.M(*_polar(cx, cy, ro, sector.start_angle))
    p.A(ro, ro, 0, large, sweep, *_polar(cx, cy, ro, sector.end_angle))
    if ri > 0:
        p.L(*_polar(cx, cy, ri, sector.end_angle))
        p.A(ri, ri, 0, large, 1 - sweep, *_polar(cx, cy, ri, sector.start_angle))
    else:
        p.L(cx, cy)
    p.Z()
    return p


def _stroke_attrs(shape: StrokedPolyline | StrokedArc) -> dict:
    attrs = {
        "stroke_width": shape.width,
        "stroke_linecap": shape.cap,
    }
    if isinstance(shape, StrokedPolyline):
        attrs["stroke_linejoin"] = shape.join
    if shape.dash is not None:
        attrs["stroke_dasharray"] = f"{shape.dash.dash} {shape.dash.gap}"
        if shape.dash.offset:
            period = shape.dash.period
            attrs["stroke_dashoffset"] = (period - shape.dash.offset % period) % period
    return attrs


def _arc_path(arc: StrokedArc) -> draw.Path:
    large, sweep = _sweep_flags(arc.start_angle, arc.end_angle)
    p = draw.Path(**_stroke_attrs(arc))
    p.M(*arc.point_at(arc.start_angle))
    p.A(arc.radius, arc.radius, 0, large, sweep, *arc.point_at(arc.end_angle))
    return p


def _polyline_path(line: StrokedPolyline) -> draw.Path:
    p = draw.Path(**_stroke_attrs(line))
    first, *rest = line.points
    p.M(*first)
    for point in rest:
        p.L(*point)
    return p
