"""Immutable game state for interactive Sevens."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Final

from ..cards import STANDARD_SUITS, Card, RandomSource, Rank, Suit, build_deck, rank_index, shuffle_deck

__all__ = [
    "Turn",
    "Status",
    "Board",
    "SevensState",
    "PLAYER_PASS_LIMIT",
    "LOG_LIMIT",
    "cpu_pass_limit",
    "create_sevens_game",
]

PLAYER_PASS_LIMIT: Final[int] = 4
LOG_LIMIT: Final[int] = 50
RANKS_PER_SUIT: Final[int] = 13
SEVEN_INDEX: Final[int] = rank_index(Rank.SEVEN)


class Turn(str, Enum):
    """Side expected to act next."""

    PLAYER = "player"
    CPU = "cpu"

    @property
    def other(self) -> "Turn":
        return Turn.CPU if self is Turn.PLAYER else Turn.PLAYER

    @property
    def label(self) -> str:
        return "You" if self is Turn.PLAYER else "CPU"


class Status(str, Enum):
    """Lifecycle of a Sevens game; everything except ``PLAYING`` is terminal."""

    PLAYING = "playing"
    PLAYER_WON = "playerWon"
    CPU_WON = "cpuWon"
    STUCK = "stuck"

    @property
    def is_terminal(self) -> bool:
        return self is not Status.PLAYING


@dataclass(frozen=True, slots=True)
class Board:
    """Placed ranks per suit, one row of 13 flags per standard suit."""

    rows: tuple[tuple[bool, ...], ...]

    @classmethod
    def empty(cls) -> "Board":
        return cls(rows=tuple((False,) * RANKS_PER_SUIT for _ in STANDARD_SUITS))

    def row(self, suit: Suit) -> tuple[bool, ...]:
        """Return the flags for ``suit``; jokers map to an all-empty row."""

        if suit is Suit.JOKER:
            return (False,) * RANKS_PER_SUIT
        return self.rows[STANDARD_SUITS.index(suit)]

    def is_placed(self, suit: Suit, index: int) -> bool:
        return self.row(suit)[index]

    def place(self, suit: Suit, index: int) -> "Board":
        """Return a new board with ``index`` of ``suit`` marked as placed."""

        suit_idx = STANDARD_SUITS.index(suit)
        row = list(self.rows[suit_idx])
        row[index] = True
        rows = list(self.rows)
        rows[suit_idx] = tuple(row)
        return Board(rows=tuple(rows))

    def placed_count(self) -> int:
        return sum(flag for row in self.rows for flag in row)


@dataclass(frozen=True, slots=True)
class SevensState:
    """Snapshot of a Sevens game. Transitions return new snapshots."""

    board: Board
    table_cards: tuple[Card, ...]
    player_hand: tuple[Card, ...]
    cpu_hand: tuple[Card, ...]
    turn: Turn
    player_passes: int
    cpu_passes: int
    player_passes_max: int
    cpu_passes_max: int
    status: Status
    log: tuple[str, ...]
    difficulty: int
    turn_count: int

    def hand_for(self, side: Turn) -> tuple[Card, ...]:
        return self.player_hand if side is Turn.PLAYER else self.cpu_hand

    def passes_for(self, side: Turn) -> tuple[int, int]:
        """Return ``(used, ceiling)`` for ``side``."""

        if side is Turn.PLAYER:
            return self.player_passes, self.player_passes_max
        return self.cpu_passes, self.cpu_passes_max

    def can_pass(self, side: Turn) -> bool:
        used, ceiling = self.passes_for(side)
        return used < ceiling

    def with_log(self, *lines: str) -> "SevensState":
        return replace(self, log=(*self.log, *lines)[-LOG_LIMIT:])


def cpu_pass_limit(difficulty: int) -> int:
    """Stronger CPUs tolerate fewer stalls."""

    if difficulty >= 9:
        return 2
    if difficulty >= 7:
        return 3
    if difficulty >= 4:
        return 4
    return 5


def create_sevens_game(difficulty: int, *, rng: RandomSource | None = None) -> SevensState:
    """Deal 26 cards to each side and seed the board with the four sevens."""

    deck = shuffle_deck(build_deck(include_jokers=False), rng)
    player_hand = deck[:26]
    cpu_hand = deck[26:52]
    board = Board.empty()
    table: list[Card] = []

    for suit in STANDARD_SUITS:
        seven = Card.of(Rank.SEVEN, suit)
        player_hand = [card for card in player_hand if card.id != seven.id]
        cpu_hand = [card for card in cpu_hand if card.id != seven.id]
        board = board.place(suit, SEVEN_INDEX)
        table.append(seven)

    return SevensState(
        board=board,
        table_cards=tuple(table),
        player_hand=tuple(player_hand),
        cpu_hand=tuple(cpu_hand),
        turn=Turn.PLAYER,
        player_passes=0,
        cpu_passes=0,
        player_passes_max=PLAYER_PASS_LIMIT,
        cpu_passes_max=cpu_pass_limit(difficulty),
        status=Status.PLAYING,
        log=("Game started. Your turn.",),
        difficulty=difficulty,
        turn_count=1,
    )
