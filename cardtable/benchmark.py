"""Benchmark harness measuring outcome rates across difficulty levels."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Final, Iterable, Sequence

import numpy as np
from numpy.typing import NDArray

from .games import simulate_game
from .results import GameSimulation, GameType, Outcome, clamp_difficulty
from .sevens import build_sevens_simulation_summary, play_sevens_game

__all__ = ["OUTCOME_COLUMNS", "DifficultyBreakdown", "BenchmarkReport", "simulate_round", "run_outcome_benchmark"]

OUTCOME_COLUMNS: Final[tuple[Outcome, ...]] = (Outcome.WIN, Outcome.LOSE, Outcome.DRAW)


@dataclass(frozen=True, slots=True)
class DifficultyBreakdown:
    """Outcome counts collected at a single difficulty."""

    difficulty: int
    wins: int
    losses: int
    draws: int

    @property
    def rounds(self) -> int:
        return self.wins + self.losses + self.draws

    @property
    def win_rate(self) -> float:
        return self.wins / self.rounds if self.rounds else 0.0


@dataclass(frozen=True, slots=True, eq=False)
class BenchmarkReport:
    """Outcome matrix for one game: rows are difficulties, columns win/lose/draw."""

    game: GameType
    difficulties: tuple[int, ...]
    outcomes: NDArray[np.int64]

    def rows(self) -> list[DifficultyBreakdown]:
        return [
            DifficultyBreakdown(
                difficulty=difficulty,
                wins=int(counts[0]),
                losses=int(counts[1]),
                draws=int(counts[2]),
            )
            for difficulty, counts in zip(self.difficulties, self.outcomes)
        ]

    def rates(self) -> NDArray[np.float64]:
        """Return per-difficulty outcome frequencies (each row sums to 1)."""

        totals = self.outcomes.sum(axis=1, keepdims=True)
        return np.divide(self.outcomes, totals, out=np.zeros(self.outcomes.shape), where=totals > 0)

    def overall_win_rate(self) -> float:
        total = int(self.outcomes.sum())
        return float(self.outcomes[:, 0].sum() / total) if total else 0.0


def simulate_round(game: GameType, difficulty: int, rng: random.Random) -> GameSimulation:
    """Play one round; Sevens is played out on the interactive engine."""

    if game is GameType.SEVENS:
        final_state = play_sevens_game(difficulty, rng=rng)
        return build_sevens_simulation_summary(final_state)
    return simulate_game(game, difficulty, rng=rng)


def run_outcome_benchmark(
    game: GameType | str,
    rounds: int,
    *,
    difficulties: Iterable[int] = range(1, 11),
    seed: int = 123,
) -> BenchmarkReport:
    """Simulate ``rounds`` games per difficulty and tally the outcomes."""

    if rounds <= 0:
        raise ValueError("rounds must be positive")

    selected = GameType.parse(game)
    levels: Sequence[int] = tuple(clamp_difficulty(level) for level in difficulties)
    if not levels:
        raise ValueError("at least one difficulty is required")

    rng = random.Random(seed)
    column = {outcome: idx for idx, outcome in enumerate(OUTCOME_COLUMNS)}
    outcomes = np.zeros((len(levels), len(OUTCOME_COLUMNS)), dtype=np.int64)

    for row, difficulty in enumerate(levels):
        for _ in range(rounds):
            result = simulate_round(selected, difficulty, rng)
            outcomes[row, column[result.outcome]] += 1

    return BenchmarkReport(game=selected, difficulties=tuple(levels), outcomes=outcomes)
