"""Live raster preview pass."""

from __future__ import annotations

from PIL import Image

from void_type.glyphs.table import EditorOverlay, GlyphTable
from void_type.random_cache import RandomCache
from void_type.render.params import RenderParams
from void_type.render.raster import render_raster
from void_type.render.scene import AlternateChoices, build_scene, start_preview_pass


def render_preview(
    text: str,
    params: RenderParams,
    width: int,
    height: int,
    cache: RandomCache,
    table: GlyphTable | None = None,
    overlay: EditorOverlay | None = None,
    alternates: AlternateChoices | None = None,
    grid: bool = False,
    fresh: bool = True,
) -> Image.Image:
    """Paint ``text`` centred on a viewport-sized raster.

    A fresh pass clears the random cache first; pass ``fresh=False`` to
    redraw with the draws already cached (e.g. after a resize).
    """
    if fresh:
        start_preview_pass(cache, alternates)
    scene = build_scene(
        text, params, width, height,
        table=table, overlay=overlay, cache=cache, alternates=alternates,
    )
    return render_raster(scene, params, grid=grid)
