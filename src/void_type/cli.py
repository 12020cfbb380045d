"""CLI for void-type."""

from __future__ import annotations

import logging
import random
from pathlib import Path

import click

from void_type import __version__
from void_type.editor import GlyphEditor, JsonFileStore, OverlayRepository
from void_type.geometry import RenderStyle
from void_type.glyphs import GRID_SIZE, GlyphSourceError, default_table
from void_type.layout import Alignment
from void_type.random_cache import RandomCache, RandomMode
from void_type.render import RenderParams, build_scene, clamp_params, export_svg, render_raster
from void_type.render.export import export_filename, export_size
from void_type.themes import THEMES


def _load_overlay(store: Path | None) -> dict:
    if store is None:
        return {}
    overlay, _ = OverlayRepository(JsonFileStore(store)).load()
    return overlay


@click.group()
@click.version_option(version=__version__)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """void-type: render text in the Void modular typeface."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@click.argument("text")
@click.option("-o", "--output", type=click.Path(path_type=Path), default=None,
              help="Output .svg or .png path. Defaults to a timestamped SVG name")
@click.option("--style", type=click.Choice([s.value for s in RenderStyle]), default="fill",
              help="Render style (default: fill)")
@click.option("--theme", type=click.Choice(list(THEMES.keys())), default="void",
              help="Colour theme (default: void)")
@click.option("--module-size", type=float, default=24.0,
              help="Module cell size in pixels (default: 24)")
@click.option("--stem", type=float, default=0.5,
              help="Stem multiplier; stem weight = module size * stem * 2 (default: 0.5)")
@click.option("--stroke-count", type=int, default=2, help="Stripe count (default: 2)")
@click.option("--contrast", type=float, default=1.0,
              help="Stripe to gap width ratio (default: 1.0)")
@click.option("--corner-radius", type=float, default=0.0,
              help="Fill corner radius in pixels (default: 0)")
@click.option("--rounded-caps", is_flag=True, help="Round stroke caps and joins")
@click.option("--close-ends", is_flag=True, help="Close stripe runs with a bar at free ends")
@click.option("--dash-chess", is_flag=True,
              help="Offset every other dashed stripe by half a dash")
@click.option("--dash", type=float, default=0.10,
              help="Nominal dash length relative to the stem (default: 0.1)")
@click.option("--gap", type=float, default=0.30,
              help="Nominal gap length relative to the stem (default: 0.3)")
@click.option("--letter-spacing", type=float, default=1.0,
              help="Letter spacing in modules (default: 1)")
@click.option("--line-height", type=float, default=2.0,
              help="Line leading in modules (default: 2)")
@click.option("--align", type=click.Choice([a.value for a in Alignment]), default="center",
              help="Line alignment (default: center)")
@click.option("--random-mode", type=click.Choice([m.value for m in RandomMode]),
              default="byType", help="Random style granularity (default: byType)")
@click.option("--random-dash", is_flag=True, help="Let random stripes be dashed")
@click.option("--seed", type=int, default=None, help="Seed for the random style")
@click.option("--grid/--no-grid", default=False, help="Draw the module grid")
@click.option("--store", type=click.Path(path_type=Path), default=None,
              help="JSON store holding edited glyphs to overlay on the alphabet")
def render(
    text: str,
    output: Path | None,
    style: str,
    theme: str,
    module_size: float,
    stem: float,
    stroke_count: int,
    contrast: float,
    corner_radius: float,
    rounded_caps: bool,
    close_ends: bool,
    dash_chess: bool,
    dash: float,
    gap: float,
    letter_spacing: float,
    line_height: float,
    align: str,
    random_mode: str,
    random_dash: bool,
    seed: int | None,
    grid: bool,
    store: Path | None,
) -> None:
    """Render TEXT to SVG or PNG. Use \\n in TEXT for line breaks."""
    text = text.replace("\\n", "\n")
    params = clamp_params(RenderParams(
        module_size=module_size,
        stem_multiplier=stem,
        letter_spacing=letter_spacing,
        line_height=line_height,
        render_style=RenderStyle(style),
        stroke_count=stroke_count,
        stroke_gap_ratio=contrast,
        corner_radius=corner_radius,
        rounded_caps=rounded_caps,
        close_ends=close_ends,
        dash_chess=dash_chess,
        dash_length=dash,
        gap_length=gap,
        random_mode=RandomMode(random_mode),
        random_dash=random_dash,
        alignment=Alignment(align),
    ).with_theme(THEMES[theme]))

    cache = RandomCache(random.Random(seed))
    overlay = _load_overlay(store)
    table = default_table()

    if output is None:
        output = Path(export_filename(text))

    if output.suffix.lower() == ".png":
        width, height = export_size(text, params)
        scene = build_scene(text, params, width, height,
                            table=table, overlay=overlay, cache=cache)
        render_raster(scene, params, grid=grid).save(output)
        modules = len(scene.modules)
    else:
        doc = export_svg(text, params, table=table, overlay=overlay,
                         cache=cache, grid=grid)
        output.write_text(doc.svg, encoding="utf-8")
        width, height = doc.width, doc.height
        modules = len(doc.scene.modules)

    click.echo(f"Rendered {len(text.replace(chr(10), ''))} characters, "
               f"{modules} modules ({width:g}x{height:g}) -> {output}")


@cli.command()
@click.option("--store", type=click.Path(path_type=Path), default=None,
              help="JSON store holding edited glyphs")
def info(store: Path | None) -> None:
    """List the characters the alphabet knows."""
    table = default_table()
    overlay = _load_overlay(store)

    chars = table.characters()
    chars += [c for c in overlay if c not in table]
    click.echo(f"Characters: {len(chars)}")
    for char in chars:
        alternates = table.alternate_count(char, overlay)
        edited = " (edited)" if char in overlay else ""
        label = "space" if char == " " else char
        click.echo(f"  {label}: {alternates} alternates{edited}")


@cli.command()
@click.argument("char")
@click.option("--alt", type=int, default=None, help="Alternate index (1-based)")
@click.option("--store", type=click.Path(path_type=Path), default=None,
              help="JSON store holding edited glyphs")
def glyph(char: str, alt: int | None, store: Path | None) -> None:
    """Print the module grid of CHAR."""
    code = default_table().lookup(char, alt, _load_overlay(store))
    click.echo(code.to_string())
    for row in range(GRID_SIZE):
        click.echo(" ".join(code.cell(row, col).to_string() for col in range(GRID_SIZE)))


@cli.command("import")
@click.argument("source", type=click.Path(exists=True, path_type=Path))
@click.option("--store", type=click.Path(path_type=Path), required=True,
              help="JSON store to import into")
def import_(source: Path, store: Path) -> None:
    """Import an alphabet source file, replacing all edited glyphs."""
    editor = GlyphEditor(OverlayRepository(JsonFileStore(store)), default_table())
    try:
        chars = editor.import_source(source.read_text(encoding="utf-8"))
    except GlyphSourceError as e:
        click.echo(f"Import error: {e}", err=True)
        raise SystemExit(1)
    click.echo(f"Imported {len(chars)} characters -> {store}")


@cli.command()
@click.option("--store", type=click.Path(exists=True, path_type=Path), required=True,
              help="JSON store to export from")
@click.option("-o", "--output", type=click.Path(path_type=Path), default=None,
              help="Output file. Defaults to stdout")
def export(store: Path, output: Path | None) -> None:
    """Export edited glyphs in the alphabet source format."""
    editor = GlyphEditor(OverlayRepository(JsonFileStore(store)), default_table())
    source = editor.export_source()
    if output is None:
        click.echo(source, nl=False)
        return
    output.write_text(source, encoding="utf-8")
    click.echo(f"Exported {len(editor.overlay)} characters -> {output}")
