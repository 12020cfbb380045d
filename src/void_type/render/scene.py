"""Scene building shared by the raster and vector backends.

A Scene is the fully resolved geometry of one render pass: layout,
glyph lookup, alternate selection and random draws all happen here, once.
Both backends only translate the resulting primitives, which is what keeps
the raster preview and the SVG export geometrically identical.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field, replace

from void_type.geometry.endpoints import Side, free_ends, local_sides
from void_type.geometry.engine import StyleParams, module_shapes
from void_type.geometry.primitives import ModuleShapes
from void_type.glyphs.model import GlyphCode
from void_type.glyphs.table import EditorOverlay, GlyphTable, default_table
from void_type.layout.constants import GLYPH_COLUMNS
from void_type.layout.text import LetterPlacement, TextLayout, layout_text
from void_type.random_cache import PositionKey, RandomCache, RandomMode
from void_type.render.params import RenderParams, clamp_params

logger = logging.getLogger(__name__)


class AlternateChoices:
    """Which alternate form each character position uses.

    Manual choices cycle base -> 1 -> 2 ... -> base. Random choices (used
    with the random style) are drawn once per position and kept until
    ``clear_random`` is called at the start of a fresh pass.
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng or random.Random()
        self._chosen: dict[tuple[int, int], int] = {}
        self._random: dict[tuple[int, int], int] = {}

    def get(self, line: int, index: int) -> int | None:
        return self._chosen.get((line, index))

    def toggle(
        self,
        line: int,
        index: int,
        char: str,
        table: GlyphTable,
        overlay: EditorOverlay | None = None,
    ) -> int | None:
        """Advance the alternate at a position; returns the new index."""
        count = table.alternate_count(char, overlay)
        if count == 0:
            return None
        current = self._chosen.get((line, index), 0)
        nxt = (current + 1) % (count + 1)
        if nxt == 0:
            self._chosen.pop((line, index), None)
            return None
        self._chosen[(line, index)] = nxt
        return nxt

    def choose_random(
        self,
        line: int,
        index: int,
        char: str,
        table: GlyphTable,
        overlay: EditorOverlay | None = None,
    ) -> int | None:
        key = (line, index)
        if key not in self._random:
            count = table.alternate_count(char, overlay)
            self._random[key] = self._rng.randint(0, count) if count else 0
        return self._random[key] or None

    def clear_random(self) -> None:
        self._random.clear()

    def reset(self) -> None:
        self._chosen.clear()
        self._random.clear()


@dataclass
class SceneLetter:
    """Resolved geometry for one character."""

    placement: LetterPlacement
    glyph: GlyphCode
    alternate_index: int | None = None
    modules: list[ModuleShapes] = field(default_factory=list)


@dataclass
class Scene:
    """Everything a backend needs to paint one pass."""

    width: float
    height: float
    module_size: float
    layout: TextLayout
    letters: list[SceneLetter] = field(default_factory=list)

    @property
    def modules(self) -> list[ModuleShapes]:
        return [m for letter in self.letters for m in letter.modules]

    @property
    def grid_offset(self) -> tuple[float, float]:
        """Grid phase so that grid lines coincide with module edges."""
        m = self.module_size
        return (self.layout.origin_x % m, self.layout.origin_y % m)


def start_preview_pass(
    cache: RandomCache, alternates: AlternateChoices | None = None
) -> None:
    """Forget random draws before a fresh preview. Export must not call this."""
    cache.clear()
    if alternates is not None:
        alternates.clear_random()


def _with_free_ends(
    style: StyleParams, sides: frozenset[Side], rotation: int
) -> StyleParams:
    rounded = style.rounded_caps and (bool(sides) or style.is_dashed)
    return replace(style, free_ends=local_sides(sides, rotation), rounded_caps=rounded)


def glyph_modules(
    glyph: GlyphCode,
    x: float,
    y: float,
    params: RenderParams,
    cache: RandomCache | None = None,
    line: int = 0,
    char_index: int = 0,
    columns: int = GLYPH_COLUMNS,
) -> list[ModuleShapes]:
    """Run the geometry engine over every visible cell of a glyph.

    With round caps or closed ends, each module also learns its free ends.
    Round caps are then kept only on modules that have a free end, or whose
    strokes are dashed.
    """
    m = params.module_size
    base_style = params.style_params()
    end_aware = params.rounded_caps or params.close_ends
    ends = free_ends(glyph, columns) if end_aware else {}
    modules: list[ModuleShapes] = []
    for row, col, module in glyph.cells():
        if module.is_empty or col >= columns:
            continue
        style = base_style
        if params.is_random:
            if cache is None:
                cache = RandomCache()
            key = (
                module.type
                if params.random_mode is RandomMode.BY_TYPE
                else PositionKey(line, char_index, row, col)
            )
            values = cache.values_for(
                key, m, params.random_ranges, params.random_dash
            )
            style = params.style_params(values)
        if end_aware:
            style = _with_free_ends(style, ends.get((row, col), frozenset()), module.rotation)
        shapes = module_shapes(module, x + col * m, y + row * m, m, m, style)
        if shapes is not None:
            modules.append(shapes)
    return modules


def build_scene(
    text: str,
    params: RenderParams,
    canvas_width: float,
    canvas_height: float,
    table: GlyphTable | None = None,
    overlay: EditorOverlay | None = None,
    cache: RandomCache | None = None,
    alternates: AlternateChoices | None = None,
) -> Scene:
    """Lay out ``text`` and resolve the geometry of every module."""
    params = clamp_params(params)
    table = table or default_table()
    if cache is None:
        cache = RandomCache()
    layout = layout_text(text, params, canvas_width, canvas_height)
    scene = Scene(
        width=canvas_width,
        height=canvas_height,
        module_size=params.module_size,
        layout=layout,
    )

    for placement in layout.letters:
        alt = None
        if alternates is not None:
            if params.is_random and params.use_alternates_in_random:
                alt = alternates.choose_random(
                    placement.line, placement.index, placement.char, table, overlay
                )
            else:
                alt = alternates.get(placement.line, placement.index)
        glyph = table.lookup(placement.char, alt, overlay)
        scene.letters.append(
            SceneLetter(
                placement=placement,
                glyph=glyph,
                alternate_index=alt,
                modules=glyph_modules(
                    glyph,
                    placement.x,
                    placement.y,
                    params,
                    cache,
                    line=placement.line,
                    char_index=placement.index,
                    columns=min(placement.columns, GLYPH_COLUMNS),
                ),
            )
        )

    logger.debug(
        "Built scene for %d letters, %d modules", len(scene.letters), len(scene.modules)
    )
    return scene
