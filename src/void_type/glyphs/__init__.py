from void_type.glyphs.model import (
    CODE_LENGTH,
    EMPTY_CODE,
    EMPTY_GLYPH,
    GRID_SIZE,
    GlyphCode,
    GlyphCodeError,
    Module,
    ModuleType,
)
from void_type.glyphs.source import (
    GlyphSourceError,
    ParsedSource,
    export_glyph_source,
    overlay_from_source,
    parse_glyph_source,
)
from void_type.glyphs.table import (
    BASE_KEY,
    EditorOverlay,
    GlyphTable,
    default_table,
    overlay_key,
)

__all__ = [
    "BASE_KEY",
    "CODE_LENGTH",
    "EMPTY_CODE",
    "EMPTY_GLYPH",
    "EditorOverlay",
    "GRID_SIZE",
    "GlyphCode",
    "GlyphCodeError",
    "GlyphSourceError",
    "GlyphTable",
    "Module",
    "ModuleType",
    "ParsedSource",
    "default_table",
    "export_glyph_source",
    "overlay_from_source",
    "overlay_key",
    "parse_glyph_source",
]
