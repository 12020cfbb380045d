"""Module geometry engine.

Public API:
- module_shapes: primitives for one module cell
- StyleParams / RenderStyle: per-module style description
- adaptive_dash / stripe_metrics: the two stroke-distribution algorithms
- outline: shapely footprint of placed modules
- free_ends: sides where a glyph's strokes stop
"""

from void_type.geometry.dash import adaptive_dash
from void_type.geometry.endpoints import Side, free_ends, local_sides
from void_type.geometry.engine import HANDLERS, RenderStyle, StyleParams, module_shapes
from void_type.geometry.outline import module_outline, outline
from void_type.geometry.primitives import (
    DashPattern,
    FilledRect,
    FilledSector,
    ModuleShapes,
    Placement,
    Shape,
    StrokedArc,
    StrokedPolyline,
    is_filled,
    path_length,
)
from void_type.geometry.stripes import stripe_metrics

__all__ = [
    "DashPattern",
    "FilledRect",
    "FilledSector",
    "HANDLERS",
    "ModuleShapes",
    "Placement",
    "RenderStyle",
    "Shape",
    "Side",
    "StrokedArc",
    "StrokedPolyline",
    "StyleParams",
    "adaptive_dash",
    "free_ends",
    "is_filled",
    "local_sides",
    "module_outline",
    "module_shapes",
    "outline",
    "path_length",
    "stripe_metrics",
]
