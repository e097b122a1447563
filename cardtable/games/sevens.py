"""One-shot Sevens outcome simulator.

The interactive rules live in :mod:`cardtable.sevens`; this module only
estimates a result from the opening hands for batch simulation.
"""

from __future__ import annotations

import logging
from typing import Final, Sequence

from ..cards import Card, RandomSource, Rank, build_deck, resolve_rng, round_half_up, shuffle_deck
from ..evaluation import card_list_label
from ..results import GameSimulation, GameType, Outcome

__all__ = ["middle_control", "pass_allowances", "simulate_sevens"]

logger = logging.getLogger(__name__)

HAND_SIZE = 9
TABLE_SIZE = 4
DRAW_BAND = 0.5
SEVENS_TURNS = 7
_MIDDLE_RANKS: Final[frozenset[Rank]] = frozenset({Rank.SIX, Rank.SEVEN, Rank.EIGHT})


def middle_control(hand: Sequence[Card]) -> int:
    """Count the 6s, 7s and 8s in ``hand``."""

    return sum(1 for card in hand if card.rank in _MIDDLE_RANKS)


def pass_allowances(difficulty: int) -> tuple[int, int]:
    """Return ``(player_passes, cpu_pass_reserve)`` used by the estimate."""

    allowance = max(1, round_half_up((11 - difficulty) / 2))
    reserve = max(1, allowance + round_half_up(difficulty / 3))
    return allowance, reserve


def _notes(difficulty: int) -> str:
    if difficulty >= 8:
        return "The CPU favours placements that keep it from getting stuck and saves its passes."
    if difficulty >= 5:
        return "The CPU guards its middle cards and spreads out evenly."
    return "The CPU burns passes quickly and blocks itself easily."


def simulate_sevens(difficulty: int, *, rng: RandomSource | None = None) -> GameSimulation:
    source = resolve_rng(rng)
    deck = shuffle_deck(build_deck(include_jokers=False), source)
    player_hand = deck[:HAND_SIZE]
    cpu_hand = deck[HAND_SIZE:HAND_SIZE * 2]
    table_cards = deck[HAND_SIZE * 2:HAND_SIZE * 2 + TABLE_SIZE]

    allowance, reserve = pass_allowances(difficulty)
    control_diff = middle_control(cpu_hand) - middle_control(player_hand)
    patience = difficulty * 0.3
    luck = (source.random() - 0.5) * 1.2

    cpu_score = reserve * 0.7 + control_diff * 1.4 + patience + luck
    player_score = allowance * 0.9 - control_diff * 1.1 + (source.random() - 0.5)

    if player_score > cpu_score:
        outcome = Outcome.WIN
    elif abs(player_score - cpu_score) < DRAW_BAND:
        outcome = Outcome.DRAW
    else:
        outcome = Outcome.LOSE
    logger.debug(
        "sevens estimate difficulty=%d player=%.2f cpu=%.2f outcome=%s",
        difficulty,
        player_score,
        cpu_score,
        outcome.value,
    )

    breakdown = (
        f"Passes: player {allowance} / CPU {reserve}",
        f"Middle cards (6-8) held: player {middle_control(player_hand)} / CPU {middle_control(cpu_hand)}",
        f"Luck: {luck:.2f}",
        f"Opening table: {card_list_label(table_cards) or 'none'}",
    )
    return GameSimulation(
        game=GameType.SEVENS,
        difficulty=difficulty,
        outcome=outcome,
        turns=SEVENS_TURNS,
        notes=_notes(difficulty),
        player_hand=tuple(player_hand),
        cpu_hand=tuple(cpu_hand),
        table_cards=tuple(table_cards),
        score_breakdown=breakdown,
    )
