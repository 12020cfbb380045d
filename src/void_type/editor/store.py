"""Persistence port for editor state.

The editor only needs get/set/remove on string values. MemoryStore backs
tests and throwaway sessions; JsonFileStore keeps every key in one JSON
object on disk and is read and written synchronously.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Protocol

from void_type.glyphs.table import EditorOverlay

logger = logging.getLogger(__name__)

EDITED_GLYPHS_KEY = "voidEditor_editedGlyphs"
KNOWN_CHARS_KEY = "voidEditor_importedChars"


class KeyValueStore(Protocol):
    """Durable string key-value storage."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class MemoryStore:
    """In-memory store; nothing survives the process."""

    def __init__(self, data: dict[str, str] | None = None) -> None:
        self.data: dict[str, str] = dict(data or {})

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value

    def remove(self, key: str) -> None:
        self.data.pop(key, None)


class JsonFileStore:
    """Store every key as a member of one JSON object in a file."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def _read(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        data = json.loads(self.path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError(f"{self.path} does not hold a JSON object")
        return data

    def _write(self, data: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(
            json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8"
        )

    def get(self, key: str) -> str | None:
        return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def remove(self, key: str) -> None:
        data = self._read()
        if data.pop(key, None) is not None:
            self._write(data)


def _valid_entries(overlay: dict) -> EditorOverlay:
    """Keep only entries shaped like {"base" | "<n>": code}."""
    valid: EditorOverlay = {}
    for char, entry in overlay.items():
        if isinstance(entry, dict) and all(
            isinstance(k, str) and isinstance(v, str) for k, v in entry.items()
        ):
            valid[char] = entry
        else:
            logger.error("Ignoring malformed stored glyph entry for %r", char)
    return valid


class OverlayRepository:
    """Loads and saves the editor overlay and known-character list.

    Store failures are logged and otherwise ignored: the session carries on
    with whatever is in memory.
    """

    def __init__(self, store: KeyValueStore) -> None:
        self.store = store

    def load(self) -> tuple[EditorOverlay, list[str]]:
        try:
            raw_overlay = self.store.get(EDITED_GLYPHS_KEY)
            raw_chars = self.store.get(KNOWN_CHARS_KEY)
            overlay = json.loads(raw_overlay) if raw_overlay else {}
            chars = json.loads(raw_chars) if raw_chars else []
        except (OSError, ValueError) as e:
            logger.error("Could not load edited glyphs, starting empty: %s", e)
            return {}, []
        if not isinstance(overlay, dict) or not isinstance(chars, list):
            logger.error("Stored editor state has an unexpected shape, ignoring it")
            return {}, []
        overlay = _valid_entries(overlay)
        return overlay, [str(c) for c in chars]

    def save(self, overlay: EditorOverlay, known_chars: list[str]) -> bool:
        """Persist both values; returns False when the store failed."""
        try:
            self.store.set(EDITED_GLYPHS_KEY, json.dumps(overlay, ensure_ascii=False))
            self.store.set(KNOWN_CHARS_KEY, json.dumps(known_chars, ensure_ascii=False))
        except (OSError, ValueError) as e:
            logger.error("Could not save edited glyphs: %s", e)
            return False
        return True

    def clear(self) -> None:
        try:
            self.store.remove(EDITED_GLYPHS_KEY)
            self.store.remove(KNOWN_CHARS_KEY)
        except (OSError, ValueError) as e:
            logger.error("Could not clear edited glyphs: %s", e)
