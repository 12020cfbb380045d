"""Render constants and parameter limits.

Centralizes the defaults used by params.py, svg.py, raster.py and export.py.
Colours live in the themes.
"""

# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------
MODULE_SIZE: float = 24.0
"""Default edge length of one module cell, in pixels."""

STEM_MULTIPLIER: float = 0.5
"""Default stem multiplier; the stem weight is module_size * multiplier * 2."""

STROKE_COUNT: int = 2
"""Default number of stripes."""

STROKE_GAP_RATIO: float = 1.0
"""Default stripe-to-gap width ratio (contrast)."""

DASH_LENGTH: float = 0.10
"""Default nominal dash length, as a multiple of the stem weight."""

GAP_LENGTH: float = 0.30
"""Default nominal gap length, as a multiple of the stem weight."""

# ---------------------------------------------------------------------------
# Limits applied at the input boundary
# ---------------------------------------------------------------------------
MODULE_SIZE_RANGE: tuple[float, float] = (1.0, 512.0)
"""Accepted module sizes."""

STEM_MULTIPLIER_RANGE: tuple[float, float] = (0.01, 1.0)
"""Stems wider than two module widths would spill out of their cell."""

STROKE_COUNT_RANGE: tuple[int, int] = (1, 32)
"""Accepted stripe counts."""

STROKE_GAP_RATIO_RANGE: tuple[float, float] = (0.05, 20.0)
"""Accepted contrast ratios."""

SPACING_RANGE: tuple[float, float] = (0.0, 20.0)
"""Accepted letter spacing and line height, in module widths."""

DASH_RANGE: tuple[float, float] = (0.01, 10.0)
"""Accepted dash and gap multipliers."""

CORNER_RADIUS_RANGE: tuple[float, float] = (0.0, 512.0)
"""Accepted corner radii, in pixels."""

# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------
EXPORT_MARGIN: float = 1.0
"""Margin around exported content, in module widths."""

GRID_STROKE_WIDTH: float = 0.5
"""Stroke width of grid lines."""

RASTER_SUPERSAMPLE: int = 2
"""Supersampling factor for anti-aliased raster previews."""

EXPORT_SLUG_LENGTH: int = 12
"""Characters of text kept in export filenames."""
