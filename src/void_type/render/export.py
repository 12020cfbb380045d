"""Static SVG export.

The export document is sized tightly to the text block plus a one-module
margin on every side. It reuses the random cache and alternate choices of
the preview pass that preceded it, so both show the same draws.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from void_type.glyphs.table import EditorOverlay, GlyphTable
from void_type.layout.text import measure_text
from void_type.random_cache import RandomCache
from void_type.render.constants import EXPORT_MARGIN, EXPORT_SLUG_LENGTH
from void_type.render.params import RenderParams, clamp_params
from void_type.render.scene import AlternateChoices, Scene, build_scene
from void_type.render.svg import render_svg

logger = logging.getLogger(__name__)

_SLUG_INVALID = re.compile(r"[^a-z0-9]")
_SLUG_RUNS = re.compile(r"_+")


@dataclass
class ExportDocument:
    """A finished SVG export and its suggested filename."""

    svg: str
    width: float
    height: float
    filename: str
    scene: Scene

    def write(self, directory: Path | str = ".") -> Path:
        path = Path(directory) / self.filename
        path.write_text(self.svg, encoding="utf-8")
        logger.info("Wrote %s (%gx%g)", path, self.width, self.height)
        return path


def export_filename(text: str, now: datetime | None = None, suffix: str = ".svg") -> str:
    """``void_<slug>_<YYMMDD>_<HHMMSS>.svg`` for a piece of text."""
    now = now or datetime.now()
    slug = _SLUG_INVALID.sub("_", text[:EXPORT_SLUG_LENGTH].lower())
    slug = _SLUG_RUNS.sub("_", slug).strip("_") or "text"
    return f"void_{slug}_{now:%y%m%d}_{now:%H%M%S}{suffix}"


def export_size(text: str, params: RenderParams) -> tuple[float, float]:
    """Document size: content plus a one-module margin on each side."""
    width, height = measure_text(text, params)
    margin = EXPORT_MARGIN * params.module_size * 2
    return (width + margin, height + margin)


def export_svg(
    text: str,
    params: RenderParams,
    table: GlyphTable | None = None,
    overlay: EditorOverlay | None = None,
    cache: RandomCache | None = None,
    alternates: AlternateChoices | None = None,
    background: bool = True,
    grid: bool = False,
    now: datetime | None = None,
) -> ExportDocument:
    """Export ``text`` as a tightly sized SVG document.

    Pass the cache used by the preview; it is read, never cleared.
    """
    params = clamp_params(params)
    width, height = export_size(text, params)
    scene = build_scene(
        text, params, width, height,
        table=table, overlay=overlay, cache=cache, alternates=alternates,
    )
    svg = render_svg(scene, params, background=background, grid=grid)
    return ExportDocument(
        svg=svg,
        width=width,
        height=height,
        filename=export_filename(text, now),
        scene=scene,
    )
