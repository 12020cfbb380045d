"""Text layout: placing glyph cells into centred lines.

Each line is trimmed and laid out left to right. A glyph advances by five
module widths. A space advances by three, or by two when it follows
another space, and no letter spacing is inserted before such a trailing
space, so long runs of spaces grow proportionately instead of in full steps.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from void_type.layout.constants import (
    GLYPH_COLUMNS,
    GLYPH_ROWS,
    SPACE_COLUMNS,
    SPACE_RUN_COLUMNS,
)

if TYPE_CHECKING:
    from void_type.render.params import RenderParams


class Alignment(Enum):
    """Horizontal alignment of lines within the text block."""

    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


@dataclass
class LetterPlacement:
    """Where one character of the text lands."""

    line: int
    index: int
    char: str
    x: float
    y: float
    advance: float
    columns: int

    @property
    def is_space(self) -> bool:
        return self.char == " "


@dataclass
class LineLayout:
    """One laid-out line of text."""

    text: str
    x: float
    y: float
    width: float
    letters: list[LetterPlacement] = field(default_factory=list)


@dataclass
class TextLayout:
    """Result of laying out a block of text on a canvas."""

    lines: list[LineLayout]
    module_size: float
    content_width: float
    content_height: float
    origin_x: float
    origin_y: float

    @property
    def letters(self) -> list[LetterPlacement]:
        return [letter for line in self.lines for letter in line.letters]


def split_lines(text: str) -> list[str]:
    """Split on newlines and trim each line."""
    return [line.strip() for line in text.split("\n")]


def _columns(line: str, index: int) -> int:
    if line[index] != " ":
        return GLYPH_COLUMNS
    if index > 0 and line[index - 1] == " ":
        return SPACE_RUN_COLUMNS
    return SPACE_COLUMNS


def _spacing_before(line: str, index: int, letter_gap: float) -> float:
    if index == 0:
        return 0.0
    if line[index] == " " and line[index - 1] == " ":
        return 0.0
    return letter_gap


def line_width(line: str, module_size: float, letter_gap: float) -> float:
    """Sum of advances plus the letter spacing between characters."""
    return sum(
        _columns(line, i) * module_size + _spacing_before(line, i, letter_gap)
        for i in range(len(line))
    )


def measure_text(text: str, params: RenderParams) -> tuple[float, float]:
    """Width and height of the laid-out text block."""
    m = params.module_size
    lines = split_lines(text)
    width = max((line_width(line, m, params.letter_gap) for line in lines), default=0.0)
    height = len(lines) * (GLYPH_ROWS * m + params.line_gap) - params.line_gap
    return (width, height)


def layout_text(
    text: str,
    params: RenderParams,
    canvas_width: float,
    canvas_height: float,
) -> TextLayout:
    """Lay out ``text`` centred on a canvas of the given size."""
    m = params.module_size
    letter_gap = params.letter_gap
    alignment = Alignment(params.alignment)
    lines = split_lines(text)

    block_width, block_height = measure_text(text, params)
    origin_x = (canvas_width - block_width) / 2
    origin_y = (canvas_height - block_height) / 2

    result: list[LineLayout] = []
    for line_index, line in enumerate(lines):
        width = line_width(line, m, letter_gap)
        if alignment is Alignment.LEFT:
            x = origin_x
        elif alignment is Alignment.RIGHT:
            x = origin_x + block_width - width
        else:
            x = (canvas_width - width) / 2
        y = origin_y + line_index * (GLYPH_ROWS * m + params.line_gap)

        layout_line = LineLayout(text=line, x=x, y=y, width=width)
        cursor = x
        for i, char in enumerate(line):
            cursor += _spacing_before(line, i, letter_gap)
            columns = _columns(line, i)
            layout_line.letters.append(
                LetterPlacement(
                    line=line_index,
                    index=i,
                    char=char,
                    x=cursor,
                    y=y,
                    advance=columns * m,
                    columns=columns,
                )
            )
            cursor += columns * m
        result.append(layout_line)

    return TextLayout(
        lines=result,
        module_size=m,
        content_width=block_width,
        content_height=block_height,
        origin_x=origin_x,
        origin_y=origin_y,
    )


def letter_at(layout: TextLayout, x: float, y: float) -> LetterPlacement | None:
    """Return the glyph under a point, ignoring spaces and gaps."""
    glyph_height = GLYPH_ROWS * layout.module_size
    for letter in layout.letters:
        if letter.is_space:
            continue
        if letter.x <= x < letter.x + letter.advance and letter.y <= y < letter.y + glyph_height:
            return letter
    return None
