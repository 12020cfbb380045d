"""Render parameters and their validation at the input boundary."""

from __future__ import annotations

import dataclasses
import logging
import math
from dataclasses import dataclass, field

from void_type.geometry.engine import RenderStyle, StyleParams
from void_type.layout.constants import LETTER_SPACING, LINE_HEIGHT
from void_type.layout.text import Alignment
from void_type.random_cache import RandomMode, RandomRanges, RandomValues
from void_type.render.constants import (
    CORNER_RADIUS_RANGE,
    DASH_LENGTH,
    DASH_RANGE,
    GAP_LENGTH,
    MODULE_SIZE,
    MODULE_SIZE_RANGE,
    SPACING_RANGE,
    STEM_MULTIPLIER,
    STEM_MULTIPLIER_RANGE,
    STROKE_COUNT,
    STROKE_COUNT_RANGE,
    STROKE_GAP_RATIO,
    STROKE_GAP_RATIO_RANGE,
)
from void_type.render.style import Theme

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderParams:
    """Parameters for one render pass. Read-only for the whole pass.

    Letter spacing and line height are in module widths; the corner radius
    is in pixels.
    """

    module_size: float = MODULE_SIZE
    stem_multiplier: float = STEM_MULTIPLIER
    letter_spacing: float = LETTER_SPACING
    line_height: float = LINE_HEIGHT
    render_style: RenderStyle = RenderStyle.FILL
    stroke_count: int = STROKE_COUNT
    stroke_gap_ratio: float = STROKE_GAP_RATIO
    corner_radius: float = 0.0
    rounded_caps: bool = False
    close_ends: bool = False
    dash_chess: bool = False
    dash_length: float = DASH_LENGTH
    gap_length: float = GAP_LENGTH
    color: str = "#ffffff"
    background_color: str = "#000000"
    grid_color: str = "#333333"
    random_ranges: RandomRanges = field(default_factory=RandomRanges)
    random_mode: RandomMode = RandomMode.BY_TYPE
    random_dash: bool = False
    use_alternates_in_random: bool = False
    alignment: Alignment = Alignment.CENTER

    @property
    def stem(self) -> float:
        """Nominal stem weight in pixels."""
        return self.module_size * self.stem_multiplier * 2

    @property
    def letter_gap(self) -> float:
        return self.letter_spacing * self.module_size

    @property
    def line_gap(self) -> float:
        return self.line_height * self.module_size

    @property
    def is_random(self) -> bool:
        return self.render_style is RenderStyle.RANDOM

    def with_theme(self, theme: Theme) -> RenderParams:
        return dataclasses.replace(
            self,
            color=theme.color,
            background_color=theme.background_color,
            grid_color=theme.grid_color,
        )

    def style_params(self, random_values: RandomValues | None = None) -> StyleParams:
        """Engine parameters, optionally overridden by a random draw."""
        if random_values is None:
            return StyleParams(
                style=self.render_style,
                stem=self.stem,
                stroke_count=self.stroke_count,
                stroke_gap_ratio=self.stroke_gap_ratio,
                corner_radius=self.corner_radius,
                rounded_caps=self.rounded_caps,
                dash_length=self.dash_length,
                gap_length=self.gap_length,
                close_ends=self.close_ends,
                dash_chess=self.dash_chess,
            )
        return StyleParams(
            style=RenderStyle.STRIPES,
            stem=random_values.stem,
            stroke_count=random_values.stroke_count,
            stroke_gap_ratio=random_values.stroke_gap_ratio,
            corner_radius=self.corner_radius,
            rounded_caps=self.rounded_caps,
            dash_length=random_values.dash_length,
            gap_length=random_values.gap_length,
            dashed_stripes=random_values.dashed,
            close_ends=self.close_ends,
            dash_chess=self.dash_chess,
        )


_LIMITS = {
    "module_size": MODULE_SIZE_RANGE,
    "stem_multiplier": STEM_MULTIPLIER_RANGE,
    "letter_spacing": SPACING_RANGE,
    "line_height": SPACING_RANGE,
    "stroke_count": STROKE_COUNT_RANGE,
    "stroke_gap_ratio": STROKE_GAP_RATIO_RANGE,
    "corner_radius": CORNER_RADIUS_RANGE,
    "dash_length": DASH_RANGE,
    "gap_length": DASH_RANGE,
}

_DEFAULTS = {f.name: f.default for f in dataclasses.fields(RenderParams)}


def _clamp(name: str, value, lo, hi):
    if value is None or (isinstance(value, float) and math.isnan(value)):
        default = _DEFAULTS[name]
        logger.warning("Invalid %s %r, reverting to %r", name, value, default)
        return default
    clamped = min(max(value, lo), hi)
    if isinstance(lo, int) and isinstance(hi, int):
        clamped = int(round(clamped))
    if clamped != value:
        logger.warning("Clamped %s from %r to %r", name, value, clamped)
    return clamped


def clamp_params(params: RenderParams) -> RenderParams:
    """Return params with every numeric field inside its accepted range.

    NaN and missing values fall back to the field default; out-of-range
    values are clamped. Invalid numbers never reach the geometry engine.
    """
    changes = {
        name: _clamp(name, getattr(params, name), lo, hi)
        for name, (lo, hi) in _LIMITS.items()
    }
    changes = {k: v for k, v in changes.items() if v != getattr(params, k)}
    if not changes:
        return params
    return dataclasses.replace(params, **changes)
