"""Raster preview rendering with Pillow.

Shapes are converted to shapely outlines (the same geometry the SVG backend
emits as paths and strokes) and painted as polygons on a supersampled
canvas, which is then downsampled for anti-aliasing.
"""

from __future__ import annotations

import logging

from PIL import Image, ImageDraw
from shapely.geometry import MultiPolygon, Polygon
from shapely.geometry.base import BaseGeometry

from void_type.geometry.outline import outline
from void_type.render.constants import GRID_STROKE_WIDTH, RASTER_SUPERSAMPLE
from void_type.render.params import RenderParams
from void_type.render.scene import Scene

logger = logging.getLogger(__name__)


def _polygons(geom: BaseGeometry) -> list[Polygon]:
    if geom.is_empty:
        return []
    if isinstance(geom, Polygon):
        return [geom]
    if isinstance(geom, MultiPolygon):
        return list(geom.geoms)
    # GeometryCollection: keep the areal parts only
    return [g for part in getattr(geom, "geoms", []) for g in _polygons(part)]


def _scaled(coords, scale: float) -> list[tuple[float, float]]:
    return [(x * scale, y * scale) for x, y in coords]


def paint_mask(geom: BaseGeometry, size: tuple[int, int], scale: float) -> Image.Image:
    """Rasterize a geometry into an 8-bit coverage mask."""
    mask = Image.new("L", size, 0)
    draw = ImageDraw.Draw(mask)
    # Containers first, so islands inside holes are painted after the hole
    for poly in sorted(_polygons(geom), key=lambda p: p.area, reverse=True):
        draw.polygon(_scaled(poly.exterior.coords, scale), fill=255)
        for interior in poly.interiors:
            draw.polygon(_scaled(interior.coords, scale), fill=0)
    return mask


def render_raster(
    scene: Scene,
    params: RenderParams,
    supersample: int = RASTER_SUPERSAMPLE,
    background: bool = True,
    grid: bool = False,
) -> Image.Image:
    """Render a scene to an RGBA image the size of the scene canvas."""
    supersample = max(1, int(supersample))
    width = max(1, round(scene.width))
    height = max(1, round(scene.height))
    big = (width * supersample, height * supersample)

    bg = params.background_color if background else (0, 0, 0, 0)
    image = Image.new("RGBA", big, bg)
    draw = ImageDraw.Draw(image)

    if grid:
        _paint_grid(draw, scene, params, supersample)

    geom = outline(scene.modules)
    mask = paint_mask(geom, big, supersample)
    image.paste(Image.new("RGBA", big, params.color), (0, 0), mask)

    if supersample > 1:
        image = image.resize((width, height), resample=Image.Resampling.LANCZOS)
    logger.debug("Rasterized %d modules at %dx%d", len(scene.modules), width, height)
    return image


def _paint_grid(draw: ImageDraw.ImageDraw, scene: Scene, params: RenderParams, scale: int) -> None:
    m = scene.module_size
    offset_x, offset_y = scene.grid_offset
    line_width = max(1, round(GRID_STROKE_WIDTH * scale))
    x = offset_x
    while x <= scene.width:
        draw.line([(x * scale, 0), (x * scale, scene.height * scale)],
                  fill=params.grid_color, width=line_width)
        x += m
    y = offset_y
    while y <= scene.height:
        draw.line([(0, y * scale), (scene.width * scale, y * scale)],
                  fill=params.grid_color, width=line_width)
        y += m
