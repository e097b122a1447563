"""Old Maid outcome simulator."""

from __future__ import annotations

import logging
from collections import Counter
from typing import Sequence

from ..cards import Card, RandomSource, build_deck, resolve_rng, round_half_up, shuffle_deck
from ..evaluation import card_list_label
from ..results import GameSimulation, GameType, Outcome

__all__ = ["strip_pairs", "simulate_old_maid"]

logger = logging.getLogger(__name__)

PLAYER_BASE_CARDS = 8
CPU_CARDS = 12
TABLE_CARDS = 4
SCORE_DEAD_ZONE = 0.2
OLD_MAID_TURNS = 6


def strip_pairs(hand: Sequence[Card]) -> list[Card]:
    """Discard every rank held an even number of times; jokers always stay."""

    counts = Counter(card.rank for card in hand if not card.is_joker)
    return [card for card in hand if card.is_joker or counts[card.rank] % 2 == 1]


def _holds_joker(hand: Sequence[Card]) -> bool:
    return any(card.is_joker for card in hand)


def _notes(difficulty: int) -> str:
    if difficulty >= 7:
        return "The CPU remembers where it drew from and steers clear of the joker."
    if difficulty >= 4:
        return "The CPU clears pairs first and picks its draws with some care."
    return "The CPU draws on luck and tends to hang on to the joker."


def simulate_old_maid(difficulty: int, *, rng: RandomSource | None = None) -> GameSimulation:
    source = resolve_rng(rng)
    deck = shuffle_deck(build_deck(include_jokers=True), source)
    player_count = PLAYER_BASE_CARDS + round_half_up(difficulty / 2)
    cpu_start = max(PLAYER_BASE_CARDS + 4, player_count)
    player_hand = strip_pairs(deck[:player_count])
    cpu_hand = strip_pairs(deck[cpu_start:cpu_start + CPU_CARDS])
    table_cards = deck[cpu_start + CPU_CARDS:cpu_start + CPU_CARDS + TABLE_CARDS]

    cpu_keeps_joker = source.random() < (11 - difficulty) * 0.08
    cpu_reads_player = source.random() < difficulty * 0.07
    luck_swing = (source.random() - 0.5) * 2.5

    player_risk = 2 if _holds_joker(player_hand) else 0
    cpu_risk = 1 if _holds_joker(cpu_hand) and not cpu_keeps_joker else 3

    player_score = len(player_hand) - player_risk + luck_swing + (-0.5 if cpu_reads_player else 0.5)
    cpu_score = len(cpu_hand) - cpu_risk + difficulty * 0.6

    if player_score < cpu_score - SCORE_DEAD_ZONE:
        outcome = Outcome.WIN
    elif player_score > cpu_score + SCORE_DEAD_ZONE:
        outcome = Outcome.LOSE
    else:
        outcome = Outcome.DRAW
    logger.debug(
        "old maid difficulty=%d player=%.2f cpu=%.2f outcome=%s",
        difficulty,
        player_score,
        cpu_score,
        outcome.value,
    )

    breakdown = (
        f"CPU read: {'infers from your hand' if cpu_reads_player else 'random pick'}",
        f"Joker handling: {'kept' if cpu_keeps_joker else 'released early'}",
        f"Cards left: player {len(player_hand)} / CPU {len(cpu_hand)}",
        f"Cards on the table: {card_list_label(table_cards) or 'none'}",
    )
    return GameSimulation(
        game=GameType.OLD_MAID,
        difficulty=difficulty,
        outcome=outcome,
        turns=OLD_MAID_TURNS,
        notes=_notes(difficulty),
        player_hand=tuple(player_hand),
        cpu_hand=tuple(cpu_hand),
        table_cards=tuple(table_cards),
        score_breakdown=breakdown,
    )
