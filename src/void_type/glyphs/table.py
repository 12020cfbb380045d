"""Glyph table and character lookup.

The table holds the bundled alphabet and never changes at render time. Hand
edits live in a separate overlay (char -> {"base" | "1" | "2" ...: code})
which takes precedence over the table whenever it holds a non-empty code.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType

from void_type.glyphs.alphabet import ALTERNATE_GLYPHS, BASE_GLYPHS, SPACE_CODE
from void_type.glyphs.model import GlyphCode

logger = logging.getLogger(__name__)

BASE_KEY = "base"

EditorOverlay = dict[str, dict[str, str]]


def overlay_key(alternate_index: int | None) -> str:
    """Overlay key for a base form (None or 0) or a 1-based alternate."""
    if not alternate_index:
        return BASE_KEY
    return str(alternate_index)


class GlyphTable:
    """Read-only mapping of characters to base and alternate glyph codes."""

    def __init__(
        self,
        base: Mapping[str, str],
        alternates: Mapping[str, list[str] | tuple[str, ...]] | None = None,
    ) -> None:
        self._base = MappingProxyType(
            {char: GlyphCode.parse_lenient(code) for char, code in base.items()}
        )
        self._alternates = MappingProxyType(
            {
                char: tuple(GlyphCode.parse_lenient(code) for code in codes)
                for char, codes in (alternates or {}).items()
            }
        )
        self._space = self._base.get(" ", GlyphCode.parse(SPACE_CODE))

    @property
    def space(self) -> GlyphCode:
        return self._space

    def base(self, char: str) -> GlyphCode | None:
        return self._base.get(char)

    def alternates(self, char: str) -> tuple[GlyphCode, ...]:
        return self._alternates.get(char, ())

    def characters(self) -> list[str]:
        """Characters with a base form, in table order."""
        return list(self._base)

    def __contains__(self, char: str) -> bool:
        return char in self._base

    def __len__(self) -> int:
        return len(self._base)

    def lookup(
        self,
        char: str,
        alternate_index: int | None = None,
        overlay: EditorOverlay | None = None,
    ) -> GlyphCode:
        """Resolve the glyph for a character and optional alternate index.

        Resolution order: a non-empty overlay entry, then the table's base
        or alternate form, then the space glyph. Never raises.
        """
        char = char.upper()
        if overlay:
            entry = overlay.get(char)
            if isinstance(entry, dict):
                code = entry.get(overlay_key(alternate_index))
                if isinstance(code, str) and code:
                    glyph = GlyphCode.parse_lenient(code)
                    if not glyph.is_empty:
                        return glyph

        if not alternate_index:
            glyph = self._base.get(char)
            if glyph is None:
                logger.debug("No glyph for %r, rendering as space", char)
                return self._space
            return glyph

        alternates = self._alternates.get(char, ())
        if 0 < alternate_index <= len(alternates):
            return alternates[alternate_index - 1]
        logger.debug(
            "No alternate %d for %r, rendering as space", alternate_index, char
        )
        return self._space

    def alternate_count(self, char: str, overlay: EditorOverlay | None = None) -> int:
        """Highest alternate index available from the table or overlay."""
        char = char.upper()
        count = len(self._alternates.get(char, ()))
        entry = overlay.get(char) if overlay else None
        if isinstance(entry, dict):
            indices = [
                int(k) for k in entry
                if isinstance(k, str) and k != BASE_KEY and k.isdecimal()
            ]
            if indices:
                count = max(count, max(indices))
        return count


def default_table() -> GlyphTable:
    """Build the table for the bundled Void alphabet."""
    return GlyphTable(BASE_GLYPHS, ALTERNATE_GLYPHS)
