"""Adaptive dash patterns.

A nominal dash/gap pair rarely divides a path evenly. Rather than letting
the pattern end on a truncated gap, the gap is stretched or squeezed so
that the path starts and ends on a full dash.
"""

from __future__ import annotations

import math

from void_type.geometry.primitives import DashPattern

MIN_DASHES = 2


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def adaptive_dash(length: float, dash: float, gap: float) -> DashPattern | None:
    """Fit a dash pattern exactly onto a path of the given length.

    The dash count is ``round((L + g0) / (d0 + g0))`` with a minimum of two,
    and the gap is then solved from ``L = n * d0 + (n - 1) * g``. When that
    gap would be negative the count drops to ``floor(L / d0)``. If even two
    nominal dashes do not fit, the whole pattern is scaled down so that
    exactly two dashes and one gap span the path.

    Returns None for a path with no length.
    """
    if length <= 0:
        return None
    dash = max(dash, 1e-6)
    gap = max(gap, 0.0)

    count = max(MIN_DASHES, _round_half_up((length + gap) / (dash + gap)))
    actual_gap = (length - count * dash) / (count - 1)

    if actual_gap < 0:
        count = math.floor(length / dash)
        if count < MIN_DASHES:
            scale = length / (MIN_DASHES * dash + gap)
            return DashPattern(dash * scale, gap * scale, MIN_DASHES)
        actual_gap = max(0.0, (length - count * dash) / (count - 1))

    return DashPattern(dash, actual_gap, count)
