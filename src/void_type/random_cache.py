"""Randomization cache for the random render style.

Random values are drawn once per key and then reused, so that a preview
pass and the export that follows it paint exactly the same choices. The
cache is cleared explicitly when a fresh preview pass starts; export never
clears it.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple, Union

from void_type.glyphs.model import ModuleType

logger = logging.getLogger(__name__)


class RandomMode(Enum):
    """Granularity of random draws."""

    BY_TYPE = "byType"
    FULL = "full"


@dataclass(frozen=True)
class RandomRanges:
    """Inclusive bounds for every randomized value.

    The stem range is a multiplier of the module size (the drawn stem is
    ``module_size * multiplier * 2``); stroke counts are integers.
    """

    stem_min: float = 0.5
    stem_max: float = 1.0
    strokes_min: int = 1
    strokes_max: int = 8
    contrast_min: float = 0.5
    contrast_max: float = 1.0
    dash_min: float = 1.0
    dash_max: float = 1.5
    gap_min: float = 1.0
    gap_max: float = 1.5


class PositionKey(NamedTuple):
    """Key for one module instance: its line, character and cell."""

    line: int
    char: int
    row: int
    col: int


CacheKey = Union[ModuleType, PositionKey]


@dataclass(frozen=True)
class RandomValues:
    """One random draw for a module (or a module type)."""

    stem: float
    stroke_count: int
    stroke_gap_ratio: float
    dashed: bool = False
    dash_length: float = 1.0
    gap_length: float = 1.0


def _ordered(lo, hi):
    return (lo, hi) if lo <= hi else (hi, lo)


class RandomCache:
    """Per-pass cache of random style values."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng or random.Random()
        self._values: dict[CacheKey, RandomValues] = {}

    def __len__(self) -> int:
        return len(self._values)

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def clear(self) -> None:
        """Forget every draw; call at the start of a fresh preview pass."""
        self._values.clear()

    def get(self, key: CacheKey) -> RandomValues | None:
        return self._values.get(key)

    def values_for(
        self,
        key: CacheKey,
        module_size: float,
        ranges: RandomRanges,
        random_dash: bool = False,
    ) -> RandomValues:
        """Return the cached draw for ``key``, sampling it on first use."""
        cached = self._values.get(key)
        if cached is not None:
            return cached
        values = self._sample(module_size, ranges, random_dash)
        logger.debug("Sampled random values for %s: %s", key, values)
        self._values[key] = values
        return values

    def _sample(
        self, module_size: float, ranges: RandomRanges, random_dash: bool
    ) -> RandomValues:
        rng = self._rng
        stem = module_size * rng.uniform(*_ordered(ranges.stem_min, ranges.stem_max)) * 2
        count = rng.randint(*_ordered(int(ranges.strokes_min), int(ranges.strokes_max)))
        count = max(1, count)
        contrast = rng.uniform(*_ordered(ranges.contrast_min, ranges.contrast_max))
        if random_dash and count > 1 and rng.random() < 0.5:
            return RandomValues(
                stem,
                count,
                contrast,
                dashed=True,
                dash_length=rng.uniform(*_ordered(ranges.dash_min, ranges.dash_max)),
                gap_length=rng.uniform(*_ordered(ranges.gap_min, ranges.gap_max)),
            )
        return RandomValues(stem, count, contrast)
