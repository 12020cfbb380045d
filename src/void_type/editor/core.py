"""Glyph editor core.

Hand-authoring of 5x5 glyph codes. Clicking an empty cell places the
current brush (module type and rotation); clicking an occupied cell clears
it. Keys cycle the brush, and also restyle the hovered cell when it holds
a module. Edits land in the editor overlay after a short debounce.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import replace

from void_type.editor.store import OverlayRepository
from void_type.glyphs.model import (
    CELL_COUNT,
    EMPTY_MODULE,
    GRID_SIZE,
    GlyphCode,
    Module,
    ModuleType,
)
from void_type.glyphs.source import (
    export_glyph_source,
    overlay_from_source,
    parse_glyph_source,
)
from void_type.glyphs.table import BASE_KEY, GlyphTable, overlay_key
from void_type.layout.text import LetterPlacement, TextLayout
from void_type.random_cache import RandomCache
from void_type.render.params import RenderParams
from void_type.render.scene import Scene, SceneLetter, glyph_modules

logger = logging.getLogger(__name__)

TYPE_CYCLE = (
    ModuleType.STRAIGHT,
    ModuleType.CENTRAL,
    ModuleType.JOINT,
    ModuleType.LINK,
    ModuleType.ROUND,
    ModuleType.BEND,
)

AUTOSAVE_DELAY = 0.3
"""Seconds between the last edit and the automatic save."""

_PREV_TYPE = {"arrowup", "up", "w", "ц"}
_NEXT_TYPE = {"arrowdown", "down", "s", "ы"}
_ROTATE_LEFT = {"arrowleft", "left", "a", "ф"}
_ROTATE_RIGHT = {"arrowright", "right", "d", "в"}


class GlyphEditor:
    """Editable 5x5 grid bound to one character (and alternate) at a time."""

    def __init__(
        self,
        repository: OverlayRepository,
        table: GlyphTable,
        autosave_delay: float = AUTOSAVE_DELAY,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.repository = repository
        self.table = table
        self.autosave_delay = autosave_delay
        self.clock = clock

        self.overlay, self.known_chars = repository.load()
        self.char: str | None = None
        self.alternate_index: int | None = None
        self.cells: list[Module] = [EMPTY_MODULE] * CELL_COUNT
        self.selected_type = ModuleType.STRAIGHT
        self.selected_rotation = 0
        self.hovered: tuple[int, int] | None = None
        self._save_due: float | None = None

    # -----------------------------------------------------------------
    # Selection
    # -----------------------------------------------------------------

    @property
    def glyph(self) -> GlyphCode:
        return GlyphCode(tuple(self.cells))

    @property
    def brush(self) -> Module:
        return Module(self.selected_type, self.selected_rotation)

    @property
    def has_pending_save(self) -> bool:
        return self._save_due is not None

    def select(self, char: str, alternate_index: int | None = None) -> GlyphCode:
        """Start editing a character's base form or one of its alternates."""
        self.flush()
        self.char = char.upper()
        self.alternate_index = alternate_index or None
        self.cells = list(self._stored_glyph().modules)
        return self.glyph

    def _stored_glyph(self) -> GlyphCode:
        entry = self.overlay.get(self.char, {})
        code = entry.get(overlay_key(self.alternate_index))
        if code:
            return GlyphCode.parse_lenient(code)
        if self.alternate_index is None:
            return self.table.base(self.char) or GlyphCode.empty()
        alternates = self.table.alternates(self.char)
        if self.alternate_index <= len(alternates):
            return alternates[self.alternate_index - 1]
        return GlyphCode.empty()

    # -----------------------------------------------------------------
    # Editing
    # -----------------------------------------------------------------

    def _index(self, row: int, col: int) -> int:
        if not (0 <= row < GRID_SIZE and 0 <= col < GRID_SIZE):
            raise IndexError(f"Cell ({row}, {col}) is outside the {GRID_SIZE}x{GRID_SIZE} grid")
        return row * GRID_SIZE + col

    def click_cell(self, row: int, col: int) -> Module:
        """Place the brush in an empty cell, or clear an occupied one."""
        index = self._index(row, col)
        if self.char is None:
            return self.cells[index]
        self.cells[index] = self.brush if self.cells[index].is_empty else EMPTY_MODULE
        self._schedule_save()
        return self.cells[index]

    def hover(self, row: int, col: int) -> None:
        self._index(row, col)
        self.hovered = (row, col)

    def leave(self) -> None:
        self.hovered = None

    def press_key(self, key: str) -> bool:
        """Handle a key press; returns False when the key is not bound."""
        name = key.lower()
        if name in _PREV_TYPE:
            self._step_type(-1)
        elif name in _NEXT_TYPE:
            self._step_type(1)
        elif name in _ROTATE_LEFT:
            self.selected_rotation = (self.selected_rotation - 1) % 4
        elif name in _ROTATE_RIGHT:
            self.selected_rotation = (self.selected_rotation + 1) % 4
        else:
            return False

        if self.hovered is not None and self.char is not None:
            index = self._index(*self.hovered)
            if not self.cells[index].is_empty:
                self.cells[index] = self.brush
                self._schedule_save()
        return True

    def _step_type(self, step: int) -> None:
        i = TYPE_CYCLE.index(self.selected_type)
        self.selected_type = TYPE_CYCLE[(i + step) % len(TYPE_CYCLE)]

    def clear_cells(self) -> None:
        if self.char is None:
            return
        self.cells = [EMPTY_MODULE] * CELL_COUNT
        self._schedule_save()

    # -----------------------------------------------------------------
    # Autosave
    # -----------------------------------------------------------------

    def _schedule_save(self) -> None:
        self._save_due = self.clock() + self.autosave_delay

    def tick(self) -> bool:
        """Save if the debounce delay has elapsed; returns True on save."""
        if self._save_due is None or self.clock() < self._save_due:
            return False
        self.save()
        return True

    def flush(self) -> None:
        """Save a pending edit immediately."""
        if self._save_due is not None:
            self.save()

    def save(self) -> None:
        """Write the current cells into the overlay and persist it."""
        self._save_due = None
        if self.char is None:
            return
        key = overlay_key(self.alternate_index)
        glyph = self.glyph
        if glyph.is_empty:
            entry = self.overlay.get(self.char)
            if entry is not None:
                entry.pop(key, None)
                if not entry:
                    self._forget(self.char)
        else:
            self.overlay.setdefault(self.char, {})[key] = glyph.to_string()
            if self.char not in self.known_chars:
                self.known_chars.append(self.char)
        self.repository.save(self.overlay, self.known_chars)

    def _forget(self, char: str) -> None:
        self.overlay.pop(char, None)
        if char in self.known_chars:
            self.known_chars.remove(char)

    # -----------------------------------------------------------------
    # Alternates and bulk operations
    # -----------------------------------------------------------------

    def add_alternate(self) -> int:
        """Start a new, empty alternate for the current character."""
        if self.char is None:
            raise ValueError("Select a character before adding an alternate")
        self.flush()
        index = self.table.alternate_count(self.char, self.overlay) + 1
        self.alternate_index = index
        self.cells = [EMPTY_MODULE] * CELL_COUNT
        return index

    def delete_alternate(self, index: int) -> None:
        if self.char is None:
            return
        self.flush()
        entry = self.overlay.get(self.char)
        if entry is not None:
            entry.pop(str(index), None)
            if not entry:
                self._forget(self.char)
        if self.alternate_index == index:
            self.alternate_index = None
            self.cells = list(self._stored_glyph().modules)
        self.repository.save(self.overlay, self.known_chars)

    def clear_all(self) -> None:
        """Drop every edit, in memory and in the store."""
        self._save_due = None
        self.overlay = {}
        self.known_chars = []
        self.char = None
        self.alternate_index = None
        self.cells = [EMPTY_MODULE] * CELL_COUNT
        self.repository.clear()

    def import_source(self, text: str) -> list[str]:
        """Replace all edits with the contents of an alphabet source file.

        Raises GlyphSourceError without touching the current state when the
        file is malformed. Returns the imported characters.
        """
        parsed = parse_glyph_source(text)
        self._save_due = None
        self.overlay = overlay_from_source(parsed)
        self.known_chars = parsed.characters()
        self.repository.save(self.overlay, self.known_chars)
        logger.info("Imported %d characters", len(self.known_chars))

        self.char = None
        self.alternate_index = None
        chars = sorted(self.known_chars)
        if chars:
            self.select("A" if "A" in chars else chars[0])
        return list(self.known_chars)

    def export_source(self) -> str:
        self.flush()
        return export_glyph_source(self.overlay)

    def entry(self, char: str) -> dict[str, str]:
        return dict(self.overlay.get(char.upper(), {}))

    def has_base(self, char: str) -> bool:
        return BASE_KEY in self.overlay.get(char.upper(), {})

    # -----------------------------------------------------------------
    # Preview
    # -----------------------------------------------------------------

    def preview_scene(
        self,
        cell_size: float,
        params: RenderParams | None = None,
        cache: RandomCache | None = None,
    ) -> Scene:
        """The current cells as a one-glyph scene for either backend."""
        params = params or RenderParams()
        if params.module_size != cell_size:
            params = replace(params, module_size=cell_size)
        size = GRID_SIZE * cell_size
        placement = LetterPlacement(
            line=0, index=0, char=self.char or "", x=0.0, y=0.0,
            advance=size, columns=GRID_SIZE,
        )
        layout = TextLayout(
            lines=[], module_size=cell_size, content_width=size,
            content_height=size, origin_x=0.0, origin_y=0.0,
        )
        glyph = self.glyph
        letter = SceneLetter(
            placement=placement,
            glyph=glyph,
            alternate_index=self.alternate_index,
            modules=glyph_modules(glyph, 0.0, 0.0, params, cache),
        )
        return Scene(
            width=size, height=size, module_size=cell_size,
            layout=layout, letters=[letter],
        )
