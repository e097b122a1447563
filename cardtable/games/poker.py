"""Five-card draw poker outcome simulator."""

from __future__ import annotations

import logging
from collections import Counter
from typing import Final, Sequence

from ..cards import Card, RandomSource, build_deck, describe_card, round_half_up, shuffle_deck
from ..evaluation import HandRank, evaluate_poker_hand
from ..results import GameSimulation, GameType, Outcome

__all__ = ["pick_discards", "exchange_cards", "player_discard_difficulty", "simulate_poker"]

logger = logging.getLogger(__name__)

HAND_SIZE = 5
POKER_TURNS = 2
_MADE_HANDS: Final[frozenset[HandRank]] = frozenset(
    {HandRank.STRAIGHT_FLUSH, HandRank.FULL_HOUSE, HandRank.FOUR_KIND}
)
_RUN_OR_SUIT_HANDS: Final[frozenset[HandRank]] = frozenset({HandRank.FLUSH, HandRank.STRAIGHT})


def pick_discards(hand: Sequence[Card], difficulty: int) -> list[int]:
    """Return the hand indices to exchange, at most three.

    Made hands are kept whole. Flushes and straights are kept from difficulty
    7 upwards; below that the first card is thrown back. Otherwise singleton
    values are discarded, except cards in the majority suit when a flush is
    being built (difficulty 6+, three or more suited cards).
    """

    label = evaluate_poker_hand(hand).label
    if label in _MADE_HANDS:
        return []
    if label in _RUN_OR_SUIT_HANDS:
        return [] if difficulty >= 7 else [0]

    suit_counts = Counter(card.suit for card in hand)
    target_suit = suit_counts.most_common(1)[0][0] if suit_counts else None
    value_counts = Counter(card.value for card in hand)
    limit = 2 if difficulty >= 8 else 3

    discards: list[int] = []
    for index, card in enumerate(hand):
        keep_for_flush = difficulty >= 6 and card.suit == target_suit and suit_counts[card.suit] >= 3
        if value_counts[card.value] == 1 and not keep_for_flush and len(discards) < limit:
            discards.append(index)
    return discards


def exchange_cards(
    hand: Sequence[Card],
    deck: Sequence[Card],
    discards: Sequence[int],
) -> tuple[list[Card], list[Card]]:
    """Replace the cards at ``discards`` from the top of ``deck``.

    Returns the new hand and the cards left in the deck. A discard is kept
    when the deck runs dry.
    """

    remaining = list(deck)
    selected = set(discards)
    new_hand: list[Card] = []
    for index, card in enumerate(hand):
        if index in selected and remaining:
            new_hand.append(remaining.pop(0))
        else:
            new_hand.append(card)
    return new_hand, remaining


def player_discard_difficulty(difficulty: int) -> int:
    return max(4, round_half_up(difficulty * 0.7))


def _notes(difficulty: int) -> str:
    if difficulty >= 8:
        return "The CPU narrows its draw to at most two cards and chases made hands."
    if difficulty >= 5:
        return "The CPU exchanges with pairs and flushes in mind."
    return "The CPU exchanges almost at random."


def simulate_poker(difficulty: int, *, rng: RandomSource | None = None) -> GameSimulation:
    deck = shuffle_deck(build_deck(include_jokers=False), rng)
    player_hand = deck[:HAND_SIZE]
    cpu_hand = deck[HAND_SIZE:HAND_SIZE * 2]
    remaining = deck[HAND_SIZE * 2:]

    player_discards = pick_discards(player_hand, player_discard_difficulty(difficulty))
    cpu_discards = pick_discards(cpu_hand, difficulty)

    player_hand, remaining = exchange_cards(player_hand, remaining, player_discards)
    cpu_hand, remaining = exchange_cards(cpu_hand, remaining, cpu_discards)

    player_eval = evaluate_poker_hand(player_hand)
    cpu_eval = evaluate_poker_hand(cpu_hand)
    if player_eval.score > cpu_eval.score:
        outcome = Outcome.WIN
    elif player_eval.score < cpu_eval.score:
        outcome = Outcome.LOSE
    else:
        outcome = Outcome.DRAW
    logger.debug(
        "poker difficulty=%d player=%s cpu=%s outcome=%s",
        difficulty,
        player_eval.label.value,
        cpu_eval.label.value,
        outcome.value,
    )

    return GameSimulation(
        game=GameType.POKER,
        difficulty=difficulty,
        outcome=outcome,
        turns=POKER_TURNS,
        notes=_notes(difficulty),
        player_hand=tuple(player_hand),
        cpu_hand=tuple(cpu_hand),
        table_cards=tuple(remaining[:3]),
        score_breakdown=(
            f"Player hand: {player_eval.label.value} ({describe_card(player_hand[0])}...)",
            f"CPU hand: {cpu_eval.label.value} ({describe_card(cpu_hand[0])}...)",
            f"Cards exchanged: player {len(player_discards)} / CPU {len(cpu_discards)}",
        ),
    )
