from void_type.layout.text import (
    Alignment,
    LetterPlacement,
    LineLayout,
    TextLayout,
    layout_text,
    letter_at,
    line_width,
    measure_text,
    split_lines,
)

__all__ = [
    "Alignment",
    "LetterPlacement",
    "LineLayout",
    "TextLayout",
    "layout_text",
    "letter_at",
    "line_width",
    "measure_text",
    "split_lines",
]
