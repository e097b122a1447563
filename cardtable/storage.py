"""Key-value persistence for the match history."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Final, Protocol, Sequence

from .results import HistoryEntry

__all__ = [
    "HISTORY_KEY",
    "KeyValueStorage",
    "MemoryStorage",
    "JsonFileStorage",
    "load_history",
    "persist_history",
]

logger = logging.getLogger(__name__)

HISTORY_KEY: Final[str] = "history"


class KeyValueStorage(Protocol):
    """Opaque string storage addressed by key."""

    def get_string(self, key: str) -> str | None: ...

    def set_string(self, key: str, value: str) -> None: ...


@dataclass(slots=True)
class MemoryStorage:
    """In-process storage, used by the tests."""

    values: dict[str, str] = field(default_factory=dict)

    def get_string(self, key: str) -> str | None:
        return self.values.get(key)

    def set_string(self, key: str, value: str) -> None:
        self.values[key] = value


@dataclass(slots=True)
class JsonFileStorage:
    """All keys kept as one JSON object in a single file."""

    path: Path

    def _read(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("could not read %s: %s", self.path, exc)
            return {}
        if not isinstance(data, dict):
            logger.warning("ignoring %s: expected a JSON object", self.path)
            return {}
        return {str(key): value for key, value in data.items() if isinstance(value, str)}

    def get_string(self, key: str) -> str | None:
        return self._read().get(key)

    def set_string(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        staging = self.path.with_name(f"{self.path.name}.tmp")
        staging.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
        staging.replace(self.path)


def load_history(storage: KeyValueStorage) -> list[HistoryEntry]:
    """Return saved entries; entries that do not decode are skipped with a warning."""

    raw = storage.get_string(HISTORY_KEY)
    if not raw:
        return []
    try:
        parsed = json.loads(raw)
    except ValueError as exc:
        logger.warning("failed to parse history: %s", exc)
        return []
    if not isinstance(parsed, list):
        logger.warning("failed to parse history: expected a list, got %s", type(parsed).__name__)
        return []
    entries: list[HistoryEntry] = []
    for index, item in enumerate(parsed):
        try:
            entries.append(HistoryEntry.from_dict(item))
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            logger.warning("skipping history entry %d: %s", index, exc)
    return entries


def persist_history(storage: KeyValueStorage, entries: Sequence[HistoryEntry]) -> None:
    storage.set_string(HISTORY_KEY, json.dumps([entry.to_dict() for entry in entries], ensure_ascii=False))
