"""Tests for the module geometry engine."""

import math

import pytest

from void_type.geometry import (
    HANDLERS,
    FilledRect,
    FilledSector,
    RenderStyle,
    Side,
    StrokedArc,
    StrokedPolyline,
    StyleParams,
    module_outline,
    module_shapes,
)
from void_type.geometry.primitives import Placement
from void_type.glyphs import Module, ModuleType

DRAWN_TYPES = [t for t in ModuleType if t is not ModuleType.EMPTY]

# Module size 24, stem multiplier 0.5: stem 24, shapes 12 thick
W = H = 24.0
STEM = 24.0
T = STEM / 2


def _shapes(module_type, style=RenderStyle.FILL, rotation=0, **kwargs):
    params = StyleParams(style=style, stem=STEM, **kwargs)
    return module_shapes(Module(module_type, rotation), 0, 0, W, H, params)


def test_empty_module_has_no_shapes():
    params = StyleParams()
    for rotation in range(4):
        assert module_shapes(Module(ModuleType.EMPTY, rotation), 0, 0, W, H, params) is None


def test_every_type_and_style_has_a_handler():
    for module_type in DRAWN_TYPES:
        for style in RenderStyle:
            assert (module_type, style) in HANDLERS
            assert _shapes(module_type, style).shapes


def test_placement_centres_cell_and_rotates():
    result = _shapes(ModuleType.STRAIGHT, rotation=3)
    assert result.placement == Placement(12, 12, 3)
    assert result.placement.degrees == 270


def test_placement_quarter_turn_maps_x_to_y():
    placement = Placement(0, 0, 1)
    assert placement.apply(1, 0) == (0, 1)
    assert placement.apply(0, 1) == (-1, 0)


# --- Fill ---


def test_fill_straight_hugs_left_edge():
    (rect,) = _shapes(ModuleType.STRAIGHT).shapes
    assert rect == FilledRect(-12, -12, T, H)


def test_fill_central_is_centred():
    (rect,) = _shapes(ModuleType.CENTRAL).shapes
    assert rect == FilledRect(-T / 2, -12, T, H)


def test_fill_joint_adds_arm_to_right_edge():
    stem, arm = _shapes(ModuleType.JOINT).shapes
    assert stem == FilledRect(-12, -12, T, H)
    assert arm == FilledRect(-12 + T, -T / 2, W - T, T)


def test_fill_link_adds_bottom_bar():
    _, bar = _shapes(ModuleType.LINK).shapes
    assert bar == FilledRect(-12, 12 - T, W, T)


def test_fill_round_pivots_on_right_top_corner():
    (sector,) = _shapes(ModuleType.ROUND).shapes
    assert sector == FilledSector(12, -12, W, W - T, math.pi / 2, math.pi)


def test_fill_bend_is_pie():
    (sector,) = _shapes(ModuleType.BEND).shapes
    assert sector == FilledSector(12, -12, T, 0, math.pi / 2, math.pi)


def test_fill_corner_radius_is_capped():
    (rect,) = _shapes(ModuleType.STRAIGHT, corner_radius=100).shapes
    assert rect.radius == T / 2


# --- Stroke and dash ---


def test_stroke_straight_runs_on_stem_centre():
    (line,) = _shapes(ModuleType.STRAIGHT, RenderStyle.STROKE).shapes
    assert line.points == ((-12 + T / 2, -12), (-12 + T / 2, 12))
    assert line.width == T
    assert line.cap == "butt"
    assert line.join == "miter"


def test_stroke_rounded_caps():
    (line,) = _shapes(ModuleType.LINK, RenderStyle.STROKE, rounded_caps=True).shapes
    assert line.cap == "round"
    assert line.join == "round"


def test_stroke_round_arc_radius():
    (arc,) = _shapes(ModuleType.ROUND, RenderStyle.STROKE).shapes
    assert isinstance(arc, StrokedArc)
    assert arc.radius == W - T / 2
    assert arc.width == T


def test_dash_uses_stem_multiples():
    (line,) = _shapes(
        ModuleType.CENTRAL, RenderStyle.DASH, dash_length=0.1, gap_length=0.3
    ).shapes
    # 24 px path, nominal dash 2.4 and gap 7.2
    assert line.dash.count == 3
    assert line.dash.dash == pytest.approx(2.4)
    assert line.dash.gap == pytest.approx(8.4)


@pytest.mark.parametrize("module_type", DRAWN_TYPES)
def test_dash_has_pattern_on_every_path(module_type):
    for shape in _shapes(module_type, RenderStyle.DASH).shapes:
        assert shape.dash is not None
        assert shape.dash.count >= 2


# --- Stripes ---


def test_stripes_straight_positions():
    lines = _shapes(ModuleType.STRAIGHT, RenderStyle.STRIPES, stroke_count=2).shapes
    # 12 px split into stripe, gap, stripe of 4 px each
    assert [line.points[0][0] for line in lines] == pytest.approx([-10, -2])
    assert all(line.width == pytest.approx(4) for line in lines)


def test_stripes_count():
    for n in (1, 3, 7):
        lines = _shapes(ModuleType.LINK, RenderStyle.STRIPES, stroke_count=n).shapes
        assert len(lines) == n


def test_stripes_joint_arm_starts_at_last_stem_stripe():
    shapes = _shapes(ModuleType.JOINT, RenderStyle.STRIPES, stroke_count=2).shapes
    verticals, arms = shapes[:2], shapes[2:]
    for arm in arms:
        assert arm.points[0][0] == pytest.approx(verticals[-1].points[0][0])
        assert arm.points[-1][0] == 12


def test_stripes_link_corners_nest():
    outer, inner = _shapes(ModuleType.LINK, RenderStyle.STRIPES, stroke_count=2).shapes
    assert outer.points[1] == pytest.approx((-10, 10))
    assert inner.points[1] == pytest.approx((-2, 2))


def test_stripes_arc_radii_step_inward():
    arcs = _shapes(ModuleType.ROUND, RenderStyle.STRIPES, stroke_count=3).shapes
    radii = [arc.radius for arc in arcs]
    assert radii == sorted(radii, reverse=True)
    assert radii[0] == pytest.approx(W - arcs[0].width / 2)


def test_stripes_bend_radius_stays_positive():
    arcs = _shapes(ModuleType.BEND, RenderStyle.STRIPES, stroke_count=8, stroke_gap_ratio=0.05).shapes
    assert all(arc.radius >= arc.width / 2 for arc in arcs)


def test_dashed_stripes_use_stripe_width():
    params = dict(stroke_count=2, dashed_stripes=True, dash_length=1.0, gap_length=1.0)
    lines = _shapes(ModuleType.CENTRAL, RenderStyle.STRIPES, **params).shapes
    for line in lines:
        # stripe width 4: nominal 4 on, 4 off along 24 px
        assert line.dash.count == 4
        assert line.dash.dash == pytest.approx(4)
        assert line.dash.gap == pytest.approx(8 / 3)


def test_random_style_draws_stripes():
    stripes = _shapes(ModuleType.ROUND, RenderStyle.STRIPES, stroke_count=3).shapes
    random = _shapes(ModuleType.ROUND, RenderStyle.RANDOM, stroke_count=3).shapes
    assert random == stripes


# --- Shared footprint ---


def _bounds(module_type, style, rotation=0, **kwargs):
    return module_outline(_shapes(module_type, style, rotation, **kwargs)).bounds


@pytest.mark.parametrize("module_type", DRAWN_TYPES)
@pytest.mark.parametrize("rotation", [0, 1, 2, 3])
def test_stroke_footprint_matches_fill(module_type, rotation):
    fill = _bounds(module_type, RenderStyle.FILL, rotation)
    stroke = _bounds(module_type, RenderStyle.STROKE, rotation)
    assert stroke == pytest.approx(fill, abs=1e-6)


@pytest.mark.parametrize("module_type", DRAWN_TYPES)
@pytest.mark.parametrize("count", [1, 2, 3, 5, 8])
@pytest.mark.parametrize("ratio", [0.25, 1.0, 4.0])
def test_stripes_footprint_matches_fill(module_type, count, ratio):
    fill = _bounds(module_type, RenderStyle.FILL)
    stripes = _bounds(
        module_type, RenderStyle.STRIPES, stroke_count=count, stroke_gap_ratio=ratio
    )
    assert stripes == pytest.approx(fill, abs=1e-6)


@pytest.mark.parametrize("module_type", DRAWN_TYPES)
def test_stripes_stay_inside_fill(module_type):
    fill = module_outline(_shapes(module_type, RenderStyle.FILL))
    stripes = module_outline(_shapes(module_type, RenderStyle.STRIPES, stroke_count=4))
    assert fill.buffer(1e-6).contains(stripes)
    assert stripes.area < fill.area


def test_outline_is_placed_in_world():
    result = module_shapes(
        Module(ModuleType.STRAIGHT, 1), 100, 50, W, H, StyleParams(stem=STEM)
    )
    # A quarter turn moves the stem from the left edge to the top edge
    assert module_outline(result).bounds == pytest.approx((100, 50, 124, 62))


def test_stroked_shapes_are_paths():
    for module_type in DRAWN_TYPES:
        for shape in _shapes(module_type, RenderStyle.STROKE).shapes:
            assert isinstance(shape, (StrokedPolyline, StrokedArc))


# --- Free ends ---

ALL_SIDES = frozenset(Side)


def test_free_ends_ignored_without_caps_or_bars():
    (line,) = _shapes(ModuleType.STRAIGHT, RenderStyle.STROKE, free_ends=ALL_SIDES).shapes
    assert line.points == ((-6, -12), (-6, 12))


def test_rounded_stroke_stops_short_of_free_end():
    (line,) = _shapes(
        ModuleType.STRAIGHT, RenderStyle.STROKE,
        rounded_caps=True, free_ends=frozenset({Side.TOP}),
    ).shapes
    assert line.points == ((-6, -6), (-6, 12))
    assert line.cap == "round"


def test_close_ends_trims_stroke_with_butt_caps():
    (line,) = _shapes(
        ModuleType.LINK, RenderStyle.STROKE,
        close_ends=True, free_ends=frozenset({Side.TOP, Side.RIGHT}),
    ).shapes
    assert line.points == ((-6, -6), (-6, 6), (6, 6))
    assert line.cap == "butt"


def test_free_end_arc_ends_inside_cell():
    (arc,) = _shapes(
        ModuleType.ROUND, RenderStyle.STROKE,
        rounded_caps=True, free_ends=frozenset({Side.RIGHT}),
    ).shapes
    assert arc.start_angle == pytest.approx(math.pi / 2 + math.asin(1 / 3))
    assert arc.end_angle == pytest.approx(math.pi)
    # End point sits half a stroke inside the right edge
    x, _ = arc.point_at(arc.start_angle)
    assert x == pytest.approx(W / 2 - T / 2)


def test_short_arc_trim_is_limited():
    (arc,) = _shapes(
        ModuleType.BEND, RenderStyle.STROKE,
        rounded_caps=True, free_ends=ALL_SIDES,
    ).shapes
    assert arc.start_angle == pytest.approx(math.pi / 2 + math.pi / 8)
    assert arc.end_angle == pytest.approx(math.pi - math.pi / 8)


def test_close_ends_adds_bar_across_stripes():
    shapes = _shapes(
        ModuleType.STRAIGHT, RenderStyle.STRIPES, stroke_count=2,
        close_ends=True, free_ends=frozenset({Side.TOP}),
    ).shapes
    *stripes, bar = shapes
    assert [s.points for s in stripes] == [((-10, -10), (-10, 12)), ((-2, -10), (-2, 12))]
    assert bar.points == ((-10, -10), (-2, -10))
    assert bar.width == pytest.approx(4)
    assert bar.cap == "square"


def test_single_stripe_gets_no_bar():
    shapes = _shapes(
        ModuleType.STRAIGHT, RenderStyle.STRIPES, stroke_count=1,
        close_ends=True, free_ends=ALL_SIDES,
    ).shapes
    assert len(shapes) == 1


def test_closing_bars_on_joint_and_link():
    joint = _shapes(
        ModuleType.JOINT, RenderStyle.STRIPES, stroke_count=2,
        close_ends=True, free_ends=frozenset({Side.RIGHT}),
    ).shapes
    assert joint[-1].points == ((10, -4), (10, 4))
    link = _shapes(
        ModuleType.LINK, RenderStyle.STRIPES, stroke_count=2,
        close_ends=True, free_ends=frozenset({Side.TOP, Side.RIGHT}),
    ).shapes
    assert [s.points for s in link[-2:]] == [((-10, -10), (-2, -10)), ((10, 2), (10, 10))]


@pytest.mark.parametrize("module_type", [
    ModuleType.STRAIGHT, ModuleType.CENTRAL, ModuleType.JOINT, ModuleType.LINK,
])
def test_closed_stripes_keep_fill_footprint(module_type):
    fill = module_outline(_shapes(module_type, RenderStyle.FILL))
    closed = module_outline(_shapes(
        module_type, RenderStyle.STRIPES, stroke_count=2,
        close_ends=True, free_ends=ALL_SIDES,
    ))
    assert closed.bounds == pytest.approx(fill.bounds, abs=1e-6)
    assert fill.buffer(1e-6).contains(closed)


# Short Bend arcs cannot trim far enough for their caps to clear the edge
@pytest.mark.parametrize("module_type", [
    t for t in DRAWN_TYPES if t is not ModuleType.BEND
])
def test_closed_round_caps_stay_inside_fill(module_type):
    fill = module_outline(_shapes(module_type, RenderStyle.FILL))
    closed = module_outline(_shapes(
        module_type, RenderStyle.STROKE, rounded_caps=True, free_ends=ALL_SIDES,
    ))
    assert fill.buffer(0.01).contains(closed)


def test_round_stripes_bar_stays_inside_fill():
    fill = module_outline(_shapes(ModuleType.ROUND, RenderStyle.FILL))
    closed = module_outline(_shapes(
        ModuleType.ROUND, RenderStyle.STRIPES, stroke_count=2,
        close_ends=True, free_ends=ALL_SIDES,
    ))
    assert fill.buffer(0.01).contains(closed)


# --- Stripes-dash ---


def test_stripes_dash_style_dashes_every_stripe():
    lines = _shapes(
        ModuleType.CENTRAL, RenderStyle.STRIPES_DASH,
        stroke_count=2, dash_length=1.0, gap_length=1.0,
    ).shapes
    assert len(lines) == 2
    assert all(line.dash.count == 4 for line in lines)
    assert all(line.dash.offset == 0 for line in lines)


def test_dash_chess_shifts_every_other_stripe():
    lines = _shapes(
        ModuleType.STRAIGHT, RenderStyle.STRIPES_DASH,
        stroke_count=3, dash_length=1.0, gap_length=1.0, dash_chess=True,
    ).shapes
    offsets = [line.dash.offset for line in lines]
    dash = lines[0].dash.dash
    assert offsets == [0, pytest.approx(dash / 2), 0]


def test_dash_chess_restarts_on_joint_arm():
    lines = _shapes(
        ModuleType.JOINT, RenderStyle.STRIPES_DASH, stroke_count=3, dash_chess=True,
    ).shapes
    shifted = [bool(line.dash.offset) for line in lines]
    assert shifted == [False, True, False, False, True, False]


def test_stripes_dash_dashes_closing_bars():
    shapes = _shapes(
        ModuleType.STRAIGHT, RenderStyle.STRIPES_DASH, stroke_count=3,
        close_ends=True, free_ends=frozenset({Side.BOTTOM}), dash_chess=True,
    ).shapes
    bar = shapes[-1]
    assert bar.points[0][1] == bar.points[1][1]
    assert bar.dash is not None
    assert bar.dash.offset == 0


def test_is_dashed():
    assert StyleParams(style=RenderStyle.DASH).is_dashed
    assert StyleParams(style=RenderStyle.STRIPES_DASH).is_dashed
    assert StyleParams(style=RenderStyle.RANDOM, dashed_stripes=True).is_dashed
    assert not StyleParams(style=RenderStyle.STRIPES).is_dashed
    assert not StyleParams(style=RenderStyle.FILL, dashed_stripes=True).is_dashed
