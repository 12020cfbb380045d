"""Reader and writer for the alphabet source format.

The format is a pair of JavaScript-style object literals::

    export const VOID_ALPHABET = {
        // Latin
        "A": "E0R1...",
    };

    export const VOID_ALPHABET_ALTERNATIVES = {
        // Latin
        "A": [
            "L1S1..."
        ]
    };

Uses pattern matching rather than evaluating the file, since only string
literals are ever present.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from void_type.glyphs.model import CODE_LENGTH, EMPTY_CODE, GlyphCode, GlyphCodeError
from void_type.glyphs.table import BASE_KEY, EditorOverlay

_BASE_BLOCK_PATTERN = re.compile(
    r"export\s+const\s+VOID_ALPHABET\s*=\s*\{(.*?)\};", re.DOTALL
)
_ALTERNATES_BLOCK_PATTERN = re.compile(
    r"export\s+const\s+VOID_ALPHABET_ALTERNATIVES\s*=\s*\{(.*?)\};", re.DOTALL
)
_BASE_ENTRY_PATTERN = re.compile(r'"([^"]+)":\s*"([^"]+)"')
_ALTERNATES_ENTRY_PATTERN = re.compile(r'"([^"]+)":\s*\[([\s\S]*?)\]')
_STRING_PATTERN = re.compile(r'"([^"]+)"')

_LATIN_PATTERN = re.compile(r"[A-Z]")
_CYRILLIC_PATTERN = re.compile(r"[А-ЯЁ]")
_DIGIT_PATTERN = re.compile(r"[0-9]")

GROUPS = ("Latin", "Cyrillic", "Digits", "Symbols")


class GlyphSourceError(ValueError):
    """Raised when an alphabet source file cannot be imported."""


@dataclass
class ParsedSource:
    """Base and alternate codes read from an alphabet source file."""

    base: dict[str, str] = field(default_factory=dict)
    alternates: dict[str, list[str]] = field(default_factory=dict)

    def characters(self) -> list[str]:
        chars = list(self.base)
        chars.extend(c for c in self.alternates if c not in self.base)
        return chars


def _check_code(char: str, code: str, label: str) -> None:
    if len(code) != CODE_LENGTH:
        raise GlyphSourceError(
            f"{label} glyph for {char!r} is {len(code)} characters long, "
            f"expected {CODE_LENGTH}"
        )
    try:
        GlyphCode.parse(code)
    except GlyphCodeError as e:
        raise GlyphSourceError(f"{label} glyph for {char!r} is malformed: {e}") from e


def parse_glyph_source(text: str) -> ParsedSource:
    """Parse an alphabet source file.

    All-or-nothing: any malformed entry raises GlyphSourceError and nothing
    is returned, so callers can keep their current state untouched.
    """
    base_m = _BASE_BLOCK_PATTERN.search(text)
    if not base_m:
        raise GlyphSourceError(
            "No 'export const VOID_ALPHABET = {...};' block found"
        )

    parsed = ParsedSource()
    for char, code in _BASE_ENTRY_PATTERN.findall(base_m.group(1)):
        _check_code(char, code, "Base")
        parsed.base[char] = code

    alt_m = _ALTERNATES_BLOCK_PATTERN.search(text)
    if alt_m:
        for char, body in _ALTERNATES_ENTRY_PATTERN.findall(alt_m.group(1)):
            codes = _STRING_PATTERN.findall(body)
            for code in codes:
                _check_code(char, code, "Alternate")
            if codes:
                parsed.alternates[char] = codes

    if not parsed.base and not parsed.alternates:
        raise GlyphSourceError("Alphabet source contains no glyphs")
    return parsed


def overlay_from_source(parsed: ParsedSource) -> EditorOverlay:
    """Build a fresh editor overlay from parsed source data."""
    overlay: EditorOverlay = {}
    for char, code in parsed.base.items():
        overlay.setdefault(char, {})[BASE_KEY] = code
    for char, codes in parsed.alternates.items():
        entry = overlay.setdefault(char, {})
        for i, code in enumerate(codes):
            entry[str(i + 1)] = code
    return overlay


def char_group(char: str) -> str:
    """Classify a character into one of the export groups."""
    if _LATIN_PATTERN.fullmatch(char):
        return "Latin"
    if _CYRILLIC_PATTERN.fullmatch(char):
        return "Cyrillic"
    if _DIGIT_PATTERN.fullmatch(char):
        return "Digits"
    return "Symbols"


def _sort_key(char: str) -> tuple[float, str]:
    # Ё sorts right after Е, as in Russian collation
    if char == "Ё":
        return (ord("Е") + 0.5, char)
    return (float(ord(char[0])), char)


def _grouped(chars) -> list[tuple[str, list[str]]]:
    buckets: dict[str, list[str]] = {g: [] for g in GROUPS}
    for char in chars:
        buckets[char_group(char)].append(char)
    return [(g, sorted(buckets[g], key=_sort_key)) for g in GROUPS if buckets[g]]


def _dense_alternates(entry: dict[str, str]) -> list[str]:
    indices = sorted(int(k) for k in entry if k != BASE_KEY and k.isdecimal())
    codes: list[str] = []
    for index in indices:
        while len(codes) < index - 1:
            codes.append(EMPTY_CODE)
        codes.append(entry[str(index)])
    return codes


def _is_blank(code: str) -> bool:
    return GlyphCode.parse_lenient(code).is_empty


def export_glyph_source(overlay: EditorOverlay) -> str:
    """Serialize an editor overlay into the alphabet source format."""
    base = {
        char: entry[BASE_KEY]
        for char, entry in overlay.items()
        if entry.get(BASE_KEY) and (char == " " or not _is_blank(entry[BASE_KEY]))
    }
    alternates = {
        char: codes
        for char, codes in ((c, _dense_alternates(e)) for c, e in overlay.items())
        if codes
    }

    out: list[str] = ["export const VOID_ALPHABET = {"]
    groups = _grouped(base)
    for gi, (title, chars) in enumerate(groups):
        out.append(f"    // {title}")
        for ci, char in enumerate(chars):
            last = gi == len(groups) - 1 and ci == len(chars) - 1
            out.append(f'    "{char}": "{base[char]}"{"" if last else ","}')
        if gi < len(groups) - 1:
            out.append("    ")
    out.append("};")
    out.append("")

    out.append("export const VOID_ALPHABET_ALTERNATIVES = {")
    groups = _grouped(alternates)
    for gi, (title, chars) in enumerate(groups):
        out.append(f"    // {title}")
        for ci, char in enumerate(chars):
            last = gi == len(groups) - 1 and ci == len(chars) - 1
            out.append(f'    "{char}": [')
            codes = alternates[char]
            for k, code in enumerate(codes):
                out.append(f'        "{code}"{"," if k < len(codes) - 1 else ""}')
            out.append(f'    ]{"" if last else ","}')
        if gi < len(groups) - 1:
            out.append("    ")
    out.append("};")
    return "\n".join(out) + "\n"
