"""Tests for free-end analysis."""

import pytest

from void_type.geometry import Side, free_ends, local_sides
from void_type.geometry.endpoints import module_exits
from void_type.glyphs import GlyphCode, Module, ModuleType
from void_type.glyphs.alphabet import BASE_GLYPHS


def _glyph(*cells):
    glyph = GlyphCode.empty()
    for row, col, module_type, rotation in cells:
        glyph = glyph.with_cell(row, col, Module(module_type, rotation))
    return glyph


@pytest.mark.parametrize("module_type,rotation,exits", [
    (ModuleType.STRAIGHT, 0, {Side.TOP, Side.BOTTOM}),
    (ModuleType.STRAIGHT, 1, {Side.RIGHT, Side.LEFT}),
    (ModuleType.LINK, 1, {Side.RIGHT, Side.BOTTOM}),
    (ModuleType.JOINT, 2, {Side.BOTTOM, Side.TOP, Side.LEFT}),
    (ModuleType.ROUND, 3, {Side.LEFT, Side.TOP}),
    (ModuleType.EMPTY, 2, set()),
])
def test_module_exits_follow_rotation(module_type, rotation, exits):
    assert module_exits(Module(module_type, rotation)) == exits


def test_letter_l_has_two_free_ends():
    ends = free_ends(GlyphCode.parse(BASE_GLYPHS["L"]))
    assert ends == {(0, 0): {Side.TOP}, (4, 4): {Side.RIGHT}}


def test_isolated_module_is_free_on_every_exit():
    ends = free_ends(_glyph((2, 2, ModuleType.JOINT, 0)))
    assert ends == {(2, 2): {Side.TOP, Side.BOTTOM, Side.RIGHT}}


def test_unjoined_neighbour_leaves_end_free():
    # A horizontal bar above a vertical stem does not continue it
    glyph = _glyph((1, 2, ModuleType.CENTRAL, 1), (2, 2, ModuleType.STRAIGHT, 0))
    ends = free_ends(glyph)
    assert ends[(2, 2)] == {Side.TOP, Side.BOTTOM}
    assert ends[(1, 2)] == {Side.LEFT, Side.RIGHT}


def test_curves_join_each_other():
    glyph = _glyph((2, 2, ModuleType.ROUND, 0), (2, 3, ModuleType.BEND, 0))
    ends = free_ends(glyph)
    assert ends[(2, 2)] == {Side.TOP}
    assert ends[(2, 3)] == {Side.TOP, Side.RIGHT}


def test_columns_limit_the_grid():
    glyph = _glyph((2, 1, ModuleType.STRAIGHT, 1), (2, 2, ModuleType.STRAIGHT, 1))
    assert free_ends(glyph)[(2, 1)] == {Side.LEFT}
    clipped = free_ends(glyph, columns=2)
    assert clipped == {(2, 1): {Side.LEFT, Side.RIGHT}}


def test_closed_loop_has_no_free_ends():
    assert free_ends(GlyphCode.parse(BASE_GLYPHS["O"])) == {}


@pytest.mark.parametrize("sides,rotation,local", [
    ({Side.RIGHT}, 3, {Side.BOTTOM}),
    ({Side.TOP}, 1, {Side.LEFT}),
    ({Side.TOP, Side.RIGHT}, 0, {Side.TOP, Side.RIGHT}),
    ({Side.LEFT}, 2, {Side.RIGHT}),
])
def test_local_sides_undo_rotation(sides, rotation, local):
    assert local_sides(frozenset(sides), rotation) == local
