"""Free-end analysis for glyphs.

Every module leaves its cell through a fixed set of sides (its exits). An
exit that runs into the grid border, into an empty cell, or into a module
it does not join is a free end: the place where a stroke visibly stops.
Round caps and closing bars are only drawn there.
"""

from __future__ import annotations

from enum import Enum

from void_type.glyphs.model import GRID_SIZE, GlyphCode, Module, ModuleType


class Side(Enum):
    """Cell side, numbered clockwise from the top."""

    TOP = 0
    RIGHT = 1
    BOTTOM = 2
    LEFT = 3

    @property
    def opposite(self) -> Side:
        return Side((self.value + 2) % 4)

    def turned(self, quarter_turns: int) -> Side:
        return Side((self.value + quarter_turns) % 4)


BASE_EXITS: dict[ModuleType, frozenset[Side]] = {
    ModuleType.STRAIGHT: frozenset({Side.TOP, Side.BOTTOM}),
    ModuleType.CENTRAL: frozenset({Side.TOP, Side.BOTTOM}),
    ModuleType.JOINT: frozenset({Side.TOP, Side.BOTTOM, Side.RIGHT}),
    ModuleType.LINK: frozenset({Side.TOP, Side.RIGHT}),
    ModuleType.ROUND: frozenset({Side.TOP, Side.RIGHT}),
    ModuleType.BEND: frozenset({Side.TOP, Side.RIGHT}),
}
"""Exits of each module type at rotation 0."""

CURVES = frozenset({ModuleType.ROUND, ModuleType.BEND})

_STEPS = {
    Side.TOP: (-1, 0),
    Side.RIGHT: (0, 1),
    Side.BOTTOM: (1, 0),
    Side.LEFT: (0, -1),
}

FreeEnds = dict[tuple[int, int], frozenset[Side]]


def module_exits(module: Module) -> frozenset[Side]:
    """Sides a module leaves through, after its rotation."""
    if module.is_empty:
        return frozenset()
    return frozenset(side.turned(module.rotation) for side in BASE_EXITS[module.type])


def _joined(module: Module, neighbour: Module, side: Side) -> bool:
    here = module_exits(module)
    there = module_exits(neighbour)
    if side.opposite in there:
        return True
    # Parallel runs leaving the same way read as one stroke
    if (here & there) - {side.opposite}:
        return True
    return module.type in CURVES and neighbour.type in CURVES


def free_ends(glyph: GlyphCode, columns: int = GRID_SIZE) -> FreeEnds:
    """Map (row, col) to the sides where that module's stroke ends freely.

    Only the first ``columns`` columns take part; anything beyond them is
    treated as outside the grid. A curve whose exit meets a non-empty module
    it does not join keeps that end open, so no cap is drawn over the
    neighbour.
    """
    ends: FreeEnds = {}
    for row, col, module in glyph.cells():
        if module.is_empty or col >= columns:
            continue
        sides = set()
        for side in module_exits(module):
            dr, dc = _STEPS[side]
            r, c = row + dr, col + dc
            if not (0 <= r < GRID_SIZE and 0 <= c < columns):
                sides.add(side)
                continue
            neighbour = glyph.cell(r, c)
            if neighbour.is_empty:
                sides.add(side)
            elif module.type not in CURVES and not _joined(module, neighbour, side):
                sides.add(side)
        if sides:
            ends[(row, col)] = frozenset(sides)
    return ends


def local_sides(sides: frozenset[Side], rotation: int) -> frozenset[Side]:
    """Express grid-frame sides in a module's own unrotated frame."""
    return frozenset(side.turned(-rotation) for side in sides)
