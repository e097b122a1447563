"""Win/lose/draw totals aggregated from the match history."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from .results import GameType, HistoryEntry, Outcome

__all__ = ["GameTotals", "Scoreboard"]


@dataclass(frozen=True, slots=True)
class GameTotals:
    """Aggregate results recorded for one game (or all games when ``game`` is ``None``)."""

    game: GameType | None
    played: int
    wins: int
    losses: int
    draws: int

    @property
    def win_rate(self) -> float:
        if self.played == 0:
            return 0.0
        return self.wins / self.played


@dataclass(slots=True)
class Scoreboard:
    """Mutable tracker that accumulates outcomes per game."""

    _counts: dict[GameType, dict[Outcome, int]] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._counts = {game: {outcome: 0 for outcome in Outcome} for game in GameType}

    @classmethod
    def from_entries(cls, entries: Iterable[HistoryEntry]) -> "Scoreboard":
        board = cls()
        for entry in entries:
            board.record(entry.game, entry.outcome)
        return board

    def record(self, game: GameType, outcome: Outcome) -> None:
        self._counts[game][outcome] += 1

    def totals_for(self, game: GameType) -> GameTotals:
        counts = self._counts[game]
        return GameTotals(
            game=game,
            played=sum(counts.values()),
            wins=counts[Outcome.WIN],
            losses=counts[Outcome.LOSE],
            draws=counts[Outcome.DRAW],
        )

    def totals(self) -> list[GameTotals]:
        """Return totals for every game in table order."""

        return [self.totals_for(game) for game in GameType]

    def overall(self) -> GameTotals:
        per_game = self.totals()
        return GameTotals(
            game=None,
            played=sum(total.played for total in per_game),
            wins=sum(total.wins for total in per_game),
            losses=sum(total.losses for total in per_game),
            draws=sum(total.draws for total in per_game),
        )
