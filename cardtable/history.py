"""Match history store backed by :mod:`cardtable.storage`."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Final

from .cards import RandomSource, resolve_rng
from .results import GameSimulation, HistoryEntry
from .storage import KeyValueStorage, load_history, persist_history

__all__ = ["HISTORY_LIMIT", "HistoryStore", "build_entry_id"]

logger = logging.getLogger(__name__)

HISTORY_LIMIT: Final[int] = 200
_BASE36: Final[str] = "0123456789abcdefghijklmnopqrstuvwxyz"


def _now_ms() -> int:
    return int(time.time() * 1000)


def build_entry_id(timestamp: int, rng: RandomSource | None = None) -> str:
    """Return ``"<timestamp>-<six base36 characters>"``."""

    source = resolve_rng(rng)
    suffix = "".join(_BASE36[int(source.random() * len(_BASE36))] for _ in range(6))
    return f"{timestamp}-{suffix}"


@dataclass(slots=True)
class HistoryStore:
    """Newest-first list of finished rounds, persisted after every change."""

    storage: KeyValueStorage
    limit: int = HISTORY_LIMIT
    clock: Callable[[], int] = _now_ms
    rng: RandomSource | None = None
    entries: list[HistoryEntry] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.limit <= 0:
            raise ValueError("limit must be positive")

    def hydrate(self) -> list[HistoryEntry]:
        """Reload entries from storage, replacing whatever is in memory."""

        self.entries = load_history(self.storage)[: self.limit]
        return self.entries

    def add_entry(self, simulation: GameSimulation) -> HistoryEntry:
        """Record ``simulation`` at the front of the history and persist it."""

        timestamp = self.clock()
        entry = HistoryEntry(id=build_entry_id(timestamp, self.rng), timestamp=timestamp, simulation=simulation)
        self.entries = [entry, *self.entries][: self.limit]
        persist_history(self.storage, self.entries)
        logger.debug("recorded %s %s as %s", simulation.game.value, simulation.outcome.value, entry.id)
        return entry

    def clear(self) -> None:
        self.entries = []
        persist_history(self.storage, self.entries)
