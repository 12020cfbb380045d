"""Stripe distribution maths.

N stripes of width ``sw`` separated by N-1 gaps ``g`` always cover the same
total width, whatever the count or contrast::

    N * sw + (N - 1) * g = total,  sw = g * ratio
"""

from __future__ import annotations

MIN_RADIUS = 0.1
"""Smallest radius a stripe arc may collapse to."""


def stripe_metrics(total_width: float, count: int, ratio: float) -> tuple[float, float]:
    """Return (stroke_width, gap) for ``count`` stripes spanning total_width."""
    count = max(1, int(count))
    if count == 1:
        return (total_width, 0.0)
    ratio = max(ratio, 1e-6)
    gap = total_width / (count * (ratio + 1) - 1)
    return (gap * ratio, gap)


def stripe_centers(start: float, count: int, stroke_width: float, gap: float) -> list[float]:
    """Centerline positions stepping by stroke_width + gap from ``start``."""
    step = stroke_width + gap
    return [start + i * step for i in range(max(1, int(count)))]


def clamp_radius(radius: float, stroke_width: float) -> float:
    """Keep an offset arc radius positive so the stripe never vanishes."""
    return max(radius, stroke_width / 2, MIN_RADIUS)
