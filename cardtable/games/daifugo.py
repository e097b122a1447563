"""Daifugo outcome simulator."""

from __future__ import annotations

import logging
from typing import Sequence

from ..cards import Card, RandomSource, build_deck, hand_average, resolve_rng, round_half_up, shuffle_deck
from ..evaluation import card_list_label, pair_score, sequence_score
from ..results import GameSimulation, GameType, Outcome

__all__ = ["evaluate_daifugo_hand", "player_heuristic_difficulty", "simulate_daifugo"]

logger = logging.getLogger(__name__)

HAND_SIZE = 13
TABLE_SIZE = 6
DECISIVE_MARGIN = 2.0
DAIFUGO_TURNS = 8


def evaluate_daifugo_hand(hand: Sequence[Card], difficulty: int, rng: RandomSource | None = None) -> float:
    """Score a hand by value, combo richness and a noise term that shrinks with difficulty."""

    source = resolve_rng(rng)
    pairs = pair_score(hand)
    combo = pairs.pairs * 2 + pairs.triples * 3 + pairs.quads * 5 + sequence_score(hand) * 1.4
    safety_bias = (11 - difficulty) * 0.3
    swing = (source.random() - 0.5) * (8 - min(difficulty, 8))
    return hand_average(hand) * 0.5 + combo * (0.6 + difficulty * 0.05) - safety_bias + swing


def player_heuristic_difficulty(difficulty: int) -> int:
    return min(8, round_half_up(difficulty * 0.7) + 2)


def _outcome(margin: float) -> Outcome:
    if margin > DECISIVE_MARGIN:
        return Outcome.WIN
    if margin < -DECISIVE_MARGIN:
        return Outcome.LOSE
    if margin > 0:
        return Outcome.WIN
    if margin < 0:
        return Outcome.LOSE
    return Outcome.DRAW


def _notes(difficulty: int) -> str:
    if difficulty >= 9:
        return "The CPU optimises with revolutions and holds strong cards back."
    if difficulty >= 5:
        return "A cautious CPU that clears the table while avoiding risky cards."
    return "A CPU that plays its weakest legal cards first."


def simulate_daifugo(difficulty: int, *, rng: RandomSource | None = None) -> GameSimulation:
    deck = shuffle_deck(build_deck(include_jokers=False), rng)
    player_hand = deck[:HAND_SIZE]
    cpu_hand = deck[HAND_SIZE:HAND_SIZE * 2]
    table_cards = deck[HAND_SIZE * 2:HAND_SIZE * 2 + TABLE_SIZE]

    cpu_score = evaluate_daifugo_hand(cpu_hand, difficulty, rng)
    player_score = evaluate_daifugo_hand(player_hand, player_heuristic_difficulty(difficulty), rng)
    margin = player_score - cpu_score
    outcome = _outcome(margin)
    logger.debug("daifugo difficulty=%d margin=%.2f outcome=%s", difficulty, margin, outcome.value)

    breakdown = (
        f"CPU strategy: LV{difficulty} / pairs {pair_score(cpu_hand).pairs}, run {sequence_score(cpu_hand)}",
        f"Hand average: player {hand_average(player_hand):.1f} vs CPU {hand_average(cpu_hand):.1f}",
        f"Cards on the table: {card_list_label(table_cards) or 'none'}",
    )
    return GameSimulation(
        game=GameType.DAIFUGO,
        difficulty=difficulty,
        outcome=outcome,
        turns=DAIFUGO_TURNS,
        notes=_notes(difficulty),
        player_hand=tuple(player_hand),
        cpu_hand=tuple(cpu_hand),
        table_cards=tuple(table_cards),
        score_breakdown=breakdown,
    )
