"""CPU decision policy for Sevens."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from ..cards import Card, RandomSource, rank_index, resolve_rng
from .rules import apply_move, apply_pass, playable_cards, with_evaluated_status
from .state import SEVEN_INDEX, SevensState, Status, Turn

__all__ = ["ScoredCard", "card_risk", "score_candidates", "choose_card", "pass_threshold", "cpu_turn"]


@dataclass(frozen=True, slots=True)
class ScoredCard:
    card: Card
    score: float


def card_risk(card: Card) -> int:
    """Edge ranks (A, 2, Q, K) are riskiest to release, then 3, 4, 10, J."""

    idx = rank_index(card.rank)
    if idx <= 1 or idx >= 11:
        return 3
    if idx <= 3 or idx >= 9:
        return 2
    return 1


def score_candidates(
    options: Sequence[Card],
    difficulty: int,
    rng: RandomSource | None = None,
) -> list[ScoredCard]:
    """Score each option, lower is better; noise fades as difficulty rises."""

    source = resolve_rng(rng)
    scored = []
    for card in options:
        positional = abs(rank_index(card.rank) - SEVEN_INDEX)
        score = (
            card_risk(card) * 1.4
            + positional * 0.7
            - difficulty * 0.1
            + source.random() * (8 - difficulty)
        )
        scored.append(ScoredCard(card=card, score=score))
    scored.sort(key=lambda entry: entry.score)
    return scored


def choose_card(options: Sequence[Card], difficulty: int, rng: RandomSource | None = None) -> Card:
    return score_candidates(options, difficulty, rng)[0].card


def pass_threshold(difficulty: int) -> float:
    """Highest card risk the CPU accepts before preferring to pass."""

    if difficulty >= 8:
        return 1.2
    if difficulty >= 5:
        return 2.0
    return 2.5


def cpu_turn(state: SevensState, *, rng: RandomSource | None = None) -> SevensState:
    """Let the CPU act once; returns ``state`` untouched when it is not the CPU's move."""

    if state.status is not Status.PLAYING or state.turn is not Turn.CPU:
        return state

    options = playable_cards(state.cpu_hand, state.board)
    if not options:
        return with_evaluated_status(apply_pass(state))

    choice = choose_card(options, state.difficulty, rng)
    if card_risk(choice) > pass_threshold(state.difficulty) and state.can_pass(Turn.CPU):
        working = apply_pass(state)
    else:
        working = apply_move(state, choice)
    return with_evaluated_status(working)
