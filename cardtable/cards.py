"""Card abstractions and deck helpers shared by every game."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from enum import Enum
from typing import Final, Iterable, Protocol, Sequence

__all__ = [
    "Suit",
    "Rank",
    "Card",
    "RandomSource",
    "STANDARD_SUITS",
    "RANK_VALUES",
    "rank_index",
    "round_half_up",
    "resolve_rng",
    "build_deck",
    "shuffle_deck",
    "draw_cards",
    "describe_card",
    "hand_average",
    "split_by_rank",
    "count_sequences",
    "has_flush",
]


class Suit(str, Enum):
    """Card suits; jokers carry their own pseudo-suit."""

    HEARTS = "hearts"
    DIAMONDS = "diamonds"
    CLUBS = "clubs"
    SPADES = "spades"
    JOKER = "joker"


class Rank(str, Enum):
    """Card ranks, with ``JOKER`` outside the regular ordering."""

    ACE = "A"
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "10"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"
    JOKER = "JOKER"

    @classmethod
    def ordered(cls) -> tuple["Rank", ...]:
        """Return the 13 regular ranks in board order (ace low)."""

        return _ORDERED_RANKS


_ORDERED_RANKS: Final[tuple[Rank, ...]] = (
    Rank.ACE,
    Rank.TWO,
    Rank.THREE,
    Rank.FOUR,
    Rank.FIVE,
    Rank.SIX,
    Rank.SEVEN,
    Rank.EIGHT,
    Rank.NINE,
    Rank.TEN,
    Rank.JACK,
    Rank.QUEEN,
    Rank.KING,
)
_RANK_TO_IDX: Final[dict[Rank, int]] = {rank: idx for idx, rank in enumerate(_ORDERED_RANKS)}

STANDARD_SUITS: Final[tuple[Suit, ...]] = (Suit.HEARTS, Suit.DIAMONDS, Suit.CLUBS, Suit.SPADES)

RANK_VALUES: Final[dict[Rank, int]] = {
    Rank.ACE: 14,
    Rank.TWO: 2,
    Rank.THREE: 3,
    Rank.FOUR: 4,
    Rank.FIVE: 5,
    Rank.SIX: 6,
    Rank.SEVEN: 7,
    Rank.EIGHT: 8,
    Rank.NINE: 9,
    Rank.TEN: 10,
    Rank.JACK: 11,
    Rank.QUEEN: 12,
    Rank.KING: 13,
    Rank.JOKER: 15,
}

_SUIT_LABELS: Final[dict[Suit, str]] = {
    Suit.HEARTS: "H",
    Suit.DIAMONDS: "D",
    Suit.CLUBS: "C",
    Suit.SPADES: "S",
    Suit.JOKER: "JOKER",
}


class RandomSource(Protocol):
    """Anything exposing ``random()`` returning a uniform float in [0, 1)."""

    def random(self) -> float: ...


@dataclass(frozen=True, slots=True)
class Card:
    """Value object describing a physical card."""

    id: str
    suit: Suit
    rank: Rank
    value: int

    @classmethod
    def of(cls, rank: Rank, suit: Suit) -> "Card":
        """Build the standard card for ``rank`` of ``suit``."""

        return cls(id=f"{rank.value}-{suit.value}", suit=suit, rank=rank, value=RANK_VALUES[rank])

    @classmethod
    def joker(cls, copy_index: int) -> "Card":
        return cls(id=f"joker-{copy_index}", suit=Suit.JOKER, rank=Rank.JOKER, value=RANK_VALUES[Rank.JOKER])

    @property
    def is_joker(self) -> bool:
        return self.suit is Suit.JOKER

    def label(self) -> str:
        return describe_card(self)


def rank_index(rank: Rank) -> int:
    """Return the board position of ``rank`` (ace 0 through king 12)."""

    return _RANK_TO_IDX[rank]


def round_half_up(value: float) -> int:
    """Round halves away from zero for positive inputs, as the heuristics expect."""

    return math.floor(value + 0.5)


def resolve_rng(rng: RandomSource | None) -> RandomSource:
    """Return ``rng`` or the process-wide random module when omitted."""

    if rng is None:
        return random
    return rng


def build_deck(include_jokers: bool = True) -> list[Card]:
    """Return a fresh deck ordered suit-major, rank-minor, jokers last."""

    deck = [Card.of(rank, suit) for suit in STANDARD_SUITS for rank in Rank.ordered()]
    if include_jokers:
        deck.append(Card.joker(1))
        deck.append(Card.joker(2))
    return deck


def shuffle_deck(deck: Sequence[Card], rng: RandomSource | None = None) -> list[Card]:
    """Return a uniformly shuffled copy of ``deck`` using Fisher-Yates."""

    source = resolve_rng(rng)
    shuffled = list(deck)
    for i in range(len(shuffled) - 1, 0, -1):
        j = math.floor(source.random() * (i + 1))
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def draw_cards(deck: Sequence[Card], count: int) -> tuple[list[Card], list[Card]]:
    """Split ``deck`` into the first ``count`` cards and the remainder."""

    count = max(0, count)
    return list(deck[:count]), list(deck[count:])


def describe_card(card: Card) -> str:
    if card.is_joker:
        return card.rank.value
    return f"{card.rank.value}{_SUIT_LABELS[card.suit]}"


def hand_average(hand: Sequence[Card]) -> float:
    if not hand:
        return 0.0
    return sum(card.value for card in hand) / len(hand)


def split_by_rank(hand: Iterable[Card]) -> dict[Rank, list[Card]]:
    """Group cards by rank, preserving first-seen order."""

    groups: dict[Rank, list[Card]] = {}
    for card in hand:
        groups.setdefault(card.rank, []).append(card)
    return groups


def count_sequences(hand: Iterable[Card]) -> int:
    """Return the longest run of consecutive values, ignoring jokers.

    Duplicate values neither extend nor break a run. The result is at least 1.
    """

    values = sorted(card.value for card in hand if not card.is_joker)
    longest = 1
    current = 1
    for previous, value in zip(values, values[1:]):
        if value == previous + 1:
            current += 1
            longest = max(longest, current)
        elif value != previous:
            current = 1
    return longest


def has_flush(hand: Iterable[Card]) -> bool:
    """Return ``True`` when five or more non-joker cards share a suit."""

    regular = [card for card in hand if not card.is_joker]
    if len(regular) < 5:
        return False
    return any(sum(1 for card in regular if card.suit is suit) >= 5 for suit in STANDARD_SUITS)
