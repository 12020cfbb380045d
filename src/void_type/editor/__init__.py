from void_type.editor.core import AUTOSAVE_DELAY, TYPE_CYCLE, GlyphEditor
from void_type.editor.store import (
    EDITED_GLYPHS_KEY,
    KNOWN_CHARS_KEY,
    JsonFileStore,
    KeyValueStore,
    MemoryStore,
    OverlayRepository,
)

__all__ = [
    "AUTOSAVE_DELAY",
    "EDITED_GLYPHS_KEY",
    "GlyphEditor",
    "JsonFileStore",
    "KNOWN_CHARS_KEY",
    "KeyValueStore",
    "MemoryStore",
    "OverlayRepository",
    "TYPE_CYCLE",
]
