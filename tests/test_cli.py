"""Tests for the CLI entry points."""

import json

from click.testing import CliRunner
from PIL import Image

from void_type import __version__
from void_type.cli import cli
from void_type.editor.store import EDITED_GLYPHS_KEY
from void_type.glyphs import export_glyph_source
from void_type.glyphs.alphabet import BASE_GLYPHS


def test_version():
    result = CliRunner().invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_render_produces_svg(tmp_path):
    """render command writes a tightly sized SVG."""
    out = tmp_path / "void.svg"
    runner = CliRunner()
    result = runner.invoke(cli, ["render", "AB", "-o", str(out), "--module-size", "12"])
    assert result.exit_code == 0, result.output
    content = out.read_text()
    assert "<svg" in content
    assert "Rendered 2 characters" in result.output
    assert "(156x84)" in result.output


def test_render_default_output(tmp_path):
    """render command names the file after the text when no -o given."""
    runner = CliRunner()
    with runner.isolated_filesystem(temp_dir=tmp_path):
        result = runner.invoke(cli, ["render", "Hi"])
        assert result.exit_code == 0, result.output
        names = [p.name for p in tmp_path.rglob("void_hi_*.svg")]
    assert len(names) == 1


def test_render_png(tmp_path):
    out = tmp_path / "void.png"
    result = CliRunner().invoke(
        cli, ["render", "VOID", "-o", str(out), "--style", "stripes", "--stroke-count", "3"]
    )
    assert result.exit_code == 0, result.output
    with Image.open(out) as image:
        # Four glyphs, three gaps, one-module margins at 24 px
        assert image.size == (4 * 120 + 3 * 24 + 48, 120 + 48)


def test_render_stripes_dash_with_closed_ends(tmp_path):
    out = tmp_path / "dash.svg"
    result = CliRunner().invoke(cli, [
        "render", "LT", "-o", str(out),
        "--style", "stripes-dash", "--close-ends", "--dash-chess",
    ])
    assert result.exit_code == 0, result.output
    content = out.read_text()
    assert "stroke-dasharray" in content
    assert "stroke-dashoffset" in content
    assert 'stroke-linecap="square"' in content


def test_render_multiline(tmp_path):
    out = tmp_path / "two.svg"
    result = CliRunner().invoke(
        cli, ["render", "A\\nB", "-o", str(out), "--module-size", "10"]
    )
    assert result.exit_code == 0, result.output
    # Two rows of 50 px with 20 px leading, plus margins
    assert "(70x140)" in result.output


def test_render_random_seed_is_reproducible(tmp_path):
    args = ["render", "VOID", "--style", "random", "--random-mode", "full", "--seed", "3"]
    first = tmp_path / "a.svg"
    second = tmp_path / "b.svg"
    runner = CliRunner()
    runner.invoke(cli, args + ["-o", str(first)])
    runner.invoke(cli, args + ["-o", str(second)])
    assert first.read_text() == second.read_text()


def test_render_clamps_bad_values(tmp_path):
    out = tmp_path / "clamped.svg"
    result = CliRunner().invoke(
        cli, ["render", "L", "-o", str(out), "--stroke-count", "500", "--style", "stripes"]
    )
    assert result.exit_code == 0, result.output
    assert out.exists()


def test_render_rejects_unknown_style():
    result = CliRunner().invoke(cli, ["render", "A", "--style", "neon"])
    assert result.exit_code != 0


def test_info_output():
    """info command lists the alphabet."""
    result = CliRunner().invoke(cli, ["info"])
    assert result.exit_code == 0
    assert f"Characters: {len(BASE_GLYPHS)}" in result.output
    assert "  A: 1 alternates" in result.output
    assert "  space: 0 alternates" in result.output


def test_glyph_output():
    result = CliRunner().invoke(cli, ["glyph", "l"])
    assert result.exit_code == 0
    lines = result.output.splitlines()
    assert lines[0] == BASE_GLYPHS["L"]
    assert lines[1] == "S0 E0 E0 E0 E0"
    assert lines[5] == "L0 S3 S3 S3 S3"


def test_import_export_round_trip(tmp_path):
    store = tmp_path / "store.json"
    source = tmp_path / "alphabet.js"
    source.write_text(
        export_glyph_source({"L": {"base": BASE_GLYPHS["I"]}}), encoding="utf-8"
    )
    runner = CliRunner()

    result = runner.invoke(cli, ["import", str(source), "--store", str(store)])
    assert result.exit_code == 0, result.output
    assert "Imported 1 characters" in result.output
    saved = json.loads(json.loads(store.read_text(encoding="utf-8"))[EDITED_GLYPHS_KEY])
    assert saved == {"L": {"base": BASE_GLYPHS["I"]}}

    result = runner.invoke(cli, ["info", "--store", str(store)])
    assert "  L: 0 alternates (edited)" in result.output

    result = runner.invoke(cli, ["glyph", "L", "--store", str(store)])
    assert result.output.splitlines()[0] == BASE_GLYPHS["I"]

    result = runner.invoke(cli, ["export", "--store", str(store)])
    assert result.exit_code == 0
    assert result.output == source.read_text(encoding="utf-8")


def test_import_bad_source(tmp_path):
    source = tmp_path / "bad.js"
    source.write_text('export const VOID_ALPHABET = {\n    "A": "S0"\n};\n')
    store = tmp_path / "store.json"
    result = CliRunner().invoke(cli, ["import", str(source), "--store", str(store)])
    assert result.exit_code == 1
    assert "Import error" in result.output
    assert not store.exists()
