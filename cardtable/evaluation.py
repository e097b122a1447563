"""Hand evaluation helpers used by the outcome heuristics."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Final, Iterable, Sequence

from .cards import Card, count_sequences, describe_card, split_by_rank

__all__ = [
    "PairScore",
    "HandRank",
    "PokerEvaluation",
    "pair_score",
    "sequence_score",
    "count_sequences",
    "is_straight",
    "evaluate_poker_hand",
    "card_list_label",
]


@dataclass(frozen=True, slots=True)
class PairScore:
    """Number of ranks held exactly twice, three times, and four or more times."""

    pairs: int
    triples: int
    quads: int


class HandRank(str, Enum):
    """Poker hand categories from weakest to strongest."""

    HIGH_CARD = "high-card"
    ONE_PAIR = "one-pair"
    TWO_PAIR = "two-pair"
    THREE_KIND = "three-kind"
    STRAIGHT = "straight"
    FLUSH = "flush"
    FULL_HOUSE = "full-house"
    FOUR_KIND = "four-kind"
    STRAIGHT_FLUSH = "straight-flush"

    @property
    def weight(self) -> int:
        return _RANK_WEIGHTS[self]


_RANK_WEIGHTS: Final[dict[HandRank, int]] = {rank: idx for idx, rank in enumerate(HandRank, start=1)}


@dataclass(frozen=True, slots=True)
class PokerEvaluation:
    """Category and ordering score of a five-card hand."""

    score: int
    label: HandRank


def pair_score(hand: Iterable[Card]) -> PairScore:
    """Count same-rank groups of size 2, 3 and 4+."""

    pairs = triples = quads = 0
    for cards in split_by_rank(hand).values():
        if len(cards) == 2:
            pairs += 1
        elif len(cards) == 3:
            triples += 1
        elif len(cards) >= 4:
            quads += 1
    return PairScore(pairs=pairs, triples=triples, quads=quads)


def sequence_score(hand: Iterable[Card]) -> int:
    return count_sequences(hand)


def is_straight(values: Iterable[int]) -> bool:
    """Return ``True`` when sorted values step up by exactly one (ace is always high)."""

    ordered = sorted(values)
    return all(value == previous + 1 for previous, value in zip(ordered, ordered[1:]))


def evaluate_poker_hand(hand: Sequence[Card]) -> PokerEvaluation:
    """Classify a five-card hand and return ``weight * 100 + high card``.

    The score only orders hands evaluated by the same rules; kickers beyond
    the highest card are not considered.
    """

    values = sorted((card.value for card in hand), reverse=True)
    counts = sorted(Counter(values).values(), reverse=True)
    counts.extend([0, 0])
    flush = len({card.suit for card in hand}) == 1
    straight = is_straight(values)

    if straight and flush:
        label = HandRank.STRAIGHT_FLUSH
    elif counts[0] == 4:
        label = HandRank.FOUR_KIND
    elif counts[0] == 3 and counts[1] == 2:
        label = HandRank.FULL_HOUSE
    elif flush:
        label = HandRank.FLUSH
    elif straight:
        label = HandRank.STRAIGHT
    elif counts[0] == 3:
        label = HandRank.THREE_KIND
    elif counts[0] == 2 and counts[1] == 2:
        label = HandRank.TWO_PAIR
    elif counts[0] == 2:
        label = HandRank.ONE_PAIR
    else:
        label = HandRank.HIGH_CARD

    high = values[0] if values else 0
    return PokerEvaluation(score=label.weight * 100 + high, label=label)


def card_list_label(cards: Iterable[Card]) -> str:
    return ", ".join(describe_card(card) for card in cards)
