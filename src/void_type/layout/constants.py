"""Layout constants, all expressed in module widths."""

# ---------------------------------------------------------------------------
# Glyph grid
# ---------------------------------------------------------------------------
GLYPH_COLUMNS: int = 5
"""Module columns in a glyph, and its advance."""

GLYPH_ROWS: int = 5
"""Module rows in a glyph."""

# ---------------------------------------------------------------------------
# Spaces
# ---------------------------------------------------------------------------
SPACE_COLUMNS: int = 3
"""Advance of a space that follows a non-space character."""

SPACE_RUN_COLUMNS: int = 2
"""Advance of a space that follows another space."""

# ---------------------------------------------------------------------------
# Spacing defaults
# ---------------------------------------------------------------------------
LETTER_SPACING: float = 1.0
"""Default gap between neighbouring characters."""

LINE_HEIGHT: float = 2.0
"""Default leading between lines."""
