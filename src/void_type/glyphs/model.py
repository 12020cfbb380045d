"""Data model for glyph codes.

A glyph is a 5x5 grid of modules. Each module has a shape type and a
quarter-turn rotation. The text form spends two characters per cell (type
letter plus rotation digit), row-major, so every code is 50 characters long.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger(__name__)

GRID_SIZE = 5
CELL_COUNT = GRID_SIZE * GRID_SIZE
CODE_LENGTH = CELL_COUNT * 2


class GlyphCodeError(ValueError):
    """Raised when a glyph code string cannot be parsed."""


class ModuleType(Enum):
    """Shape drawn inside one grid cell."""

    EMPTY = "E"
    STRAIGHT = "S"
    CENTRAL = "C"
    JOINT = "J"
    LINK = "L"
    ROUND = "R"
    BEND = "B"


@dataclass(frozen=True)
class Module:
    """One cell of a glyph: a shape type and a rotation in quarter turns."""

    type: ModuleType = ModuleType.EMPTY
    rotation: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "rotation", self.rotation % 4)

    @property
    def is_empty(self) -> bool:
        return self.type is ModuleType.EMPTY

    def to_string(self) -> str:
        return f"{self.type.value}{self.rotation}"


EMPTY_MODULE = Module()


@dataclass(frozen=True)
class GlyphCode:
    """An immutable 5x5 module grid."""

    modules: tuple[Module, ...]

    def __post_init__(self) -> None:
        if len(self.modules) != CELL_COUNT:
            raise GlyphCodeError(
                f"A glyph needs exactly {CELL_COUNT} modules, got {len(self.modules)}"
            )

    @classmethod
    def parse(cls, text: str) -> GlyphCode:
        """Parse a 50-character code, raising GlyphCodeError on bad input."""
        if len(text) != CODE_LENGTH:
            raise GlyphCodeError(
                f"Glyph code must be {CODE_LENGTH} characters long, got {len(text)}"
            )
        modules = []
        for offset in range(0, CODE_LENGTH, 2):
            letter, digit = text[offset], text[offset + 1]
            try:
                module_type = ModuleType(letter)
            except ValueError:
                raise GlyphCodeError(
                    f"Unknown module type {letter!r} at position {offset}"
                ) from None
            if digit not in "0123":
                raise GlyphCodeError(
                    f"Rotation must be 0-3, got {digit!r} at position {offset + 1}"
                )
            modules.append(Module(module_type, int(digit)))
        return cls(tuple(modules))

    @classmethod
    def parse_lenient(cls, text: str) -> GlyphCode:
        """Parse a code, degrading to the empty glyph when it is malformed."""
        try:
            return cls.parse(text)
        except GlyphCodeError as e:
            logger.debug("Treating malformed glyph code as empty: %s", e)
            return EMPTY_GLYPH

    @classmethod
    def empty(cls) -> GlyphCode:
        return cls((EMPTY_MODULE,) * CELL_COUNT)

    def to_string(self) -> str:
        return "".join(m.to_string() for m in self.modules)

    def cell(self, row: int, col: int) -> Module:
        return self.modules[row * GRID_SIZE + col]

    def with_cell(self, row: int, col: int, module: Module) -> GlyphCode:
        """Return a copy with one cell replaced."""
        modules = list(self.modules)
        modules[row * GRID_SIZE + col] = module
        return GlyphCode(tuple(modules))

    @property
    def is_empty(self) -> bool:
        return all(m.is_empty for m in self.modules)

    def cells(self):
        """Yield (row, col, module) for every cell, row-major."""
        for index, module in enumerate(self.modules):
            row, col = divmod(index, GRID_SIZE)
            yield row, col, module


EMPTY_GLYPH = GlyphCode.empty()
EMPTY_CODE = EMPTY_GLYPH.to_string()


def is_empty_code(text: str) -> bool:
    """True when a code string encodes no visible module (or is malformed)."""
    return GlyphCode.parse_lenient(text).is_empty
