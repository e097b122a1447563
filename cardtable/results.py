"""Finished-round records shared by the simulators, history and CLI."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Final, Mapping

from .cards import Card, Rank, Suit, round_half_up

__all__ = [
    "GameType",
    "Outcome",
    "GameSimulation",
    "HistoryEntry",
    "MIN_DIFFICULTY",
    "MAX_DIFFICULTY",
    "clamp_difficulty",
    "card_to_dict",
    "card_from_dict",
]

MIN_DIFFICULTY: Final[int] = 1
MAX_DIFFICULTY: Final[int] = 10


class GameType(str, Enum):
    """Games offered at the table."""

    DAIFUGO = "daifugo"
    OLD_MAID = "oldMaid"
    SEVENS = "sevens"
    BLACKJACK = "blackjack"
    POKER = "poker"

    @classmethod
    def parse(cls, value: "GameType | str") -> "GameType":
        """Accept enum members, their values, or case-insensitive member names."""

        if isinstance(value, GameType):
            return value
        for member in cls:
            if value == member.value or value.replace("-", "_").upper() == member.name:
                return member
        raise ValueError(f"unknown game '{value}'")

    @property
    def display_name(self) -> str:
        return _GAME_TITLES[self]


_GAME_TITLES: Final[dict[GameType, str]] = {
    GameType.DAIFUGO: "Daifugo",
    GameType.OLD_MAID: "Old Maid",
    GameType.SEVENS: "Sevens",
    GameType.BLACKJACK: "Blackjack",
    GameType.POKER: "Poker",
}


class Outcome(str, Enum):
    """Round result from the player's perspective."""

    WIN = "win"
    LOSE = "lose"
    DRAW = "draw"


def clamp_difficulty(value: float) -> int:
    """Round ``value`` half-up and clamp it into the supported 1-10 band."""

    return min(MAX_DIFFICULTY, max(MIN_DIFFICULTY, round_half_up(value)))


def card_to_dict(card: Card) -> dict[str, Any]:
    return {"id": card.id, "suit": card.suit.value, "rank": card.rank.value, "value": card.value}


def card_from_dict(data: Mapping[str, Any]) -> Card:
    return Card(
        id=str(data["id"]),
        suit=Suit(data["suit"]),
        rank=Rank(data["rank"]),
        value=int(data["value"]),
    )


def _cards(data: Any) -> tuple[Card, ...]:
    if not isinstance(data, list):
        raise ValueError("card list expected")
    return tuple(card_from_dict(item) for item in data)


@dataclass(frozen=True, slots=True)
class GameSimulation:
    """Complete summary of one finished round."""

    game: GameType
    difficulty: int
    outcome: Outcome
    turns: int
    notes: str
    player_hand: tuple[Card, ...]
    cpu_hand: tuple[Card, ...]
    table_cards: tuple[Card, ...]
    score_breakdown: tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        return {
            "game": self.game.value,
            "difficulty": self.difficulty,
            "outcome": self.outcome.value,
            "turns": self.turns,
            "notes": self.notes,
            "playerHand": [card_to_dict(card) for card in self.player_hand],
            "cpuHand": [card_to_dict(card) for card in self.cpu_hand],
            "tableCards": [card_to_dict(card) for card in self.table_cards],
            "scoreBreakdown": list(self.score_breakdown),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "GameSimulation":
        """Rebuild a simulation from :meth:`to_dict` output; raises on malformed input."""

        breakdown = data.get("scoreBreakdown") or []
        if not isinstance(breakdown, list):
            raise ValueError("scoreBreakdown must be a list")
        return cls(
            game=GameType.parse(data["game"]),
            difficulty=int(data["difficulty"]),
            outcome=Outcome(data["outcome"]),
            turns=int(data["turns"]),
            notes=str(data.get("notes", "")),
            player_hand=_cards(data["playerHand"]),
            cpu_hand=_cards(data["cpuHand"]),
            table_cards=_cards(data["tableCards"]),
            score_breakdown=tuple(str(line) for line in breakdown),
        )


@dataclass(frozen=True, slots=True)
class HistoryEntry:
    """A recorded simulation with the identifier and timestamp assigned on save."""

    id: str
    timestamp: int
    simulation: GameSimulation

    @property
    def game(self) -> GameType:
        return self.simulation.game

    @property
    def outcome(self) -> Outcome:
        return self.simulation.outcome

    def to_dict(self) -> dict[str, Any]:
        payload = self.simulation.to_dict()
        payload["id"] = self.id
        payload["timestamp"] = self.timestamp
        return payload

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "HistoryEntry":
        return cls(
            id=str(data["id"]),
            timestamp=int(data["timestamp"]),
            simulation=GameSimulation.from_dict(data),
        )
