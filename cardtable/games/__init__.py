"""Batch outcome simulators for every game at the table."""

from __future__ import annotations

from typing import Callable, Final, Mapping

from ..cards import RandomSource
from ..results import GameSimulation, GameType, clamp_difficulty
from .blackjack import simulate_blackjack
from .daifugo import simulate_daifugo
from .old_maid import simulate_old_maid
from .poker import simulate_poker
from .sevens import simulate_sevens

__all__ = [
    "Simulator",
    "SIMULATORS",
    "simulate_game",
    "simulate_blackjack",
    "simulate_daifugo",
    "simulate_old_maid",
    "simulate_poker",
    "simulate_sevens",
]

Simulator = Callable[..., GameSimulation]

SIMULATORS: Final[Mapping[GameType, Simulator]] = {
    GameType.DAIFUGO: simulate_daifugo,
    GameType.OLD_MAID: simulate_old_maid,
    GameType.SEVENS: simulate_sevens,
    GameType.BLACKJACK: simulate_blackjack,
    GameType.POKER: simulate_poker,
}


def simulate_game(game: GameType | str, difficulty: float, *, rng: RandomSource | None = None) -> GameSimulation:
    """Simulate one round of ``game`` with ``difficulty`` clamped to 1-10."""

    simulator = SIMULATORS[GameType.parse(game)]
    return simulator(clamp_difficulty(difficulty), rng=rng)
