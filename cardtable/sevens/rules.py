"""Rule transitions for Sevens.

Illegal requests are not errors: every transition hands back the very same
state object when it has nothing to do, so callers can detect a rejected
move with ``new_state is state``.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Final, Iterable

from ..cards import Card, rank_index
from ..results import GameSimulation, GameType, Outcome
from .state import Board, SevensState, Status, Turn

__all__ = [
    "GameNotFinished",
    "SUMMARY_LOG_LINES",
    "is_playable",
    "playable_cards",
    "evaluate_status",
    "with_evaluated_status",
    "apply_move",
    "apply_pass",
    "build_sevens_simulation_summary",
]

logger = logging.getLogger(__name__)

SUMMARY_LOG_LINES: Final[int] = 5
LAST_RANK_INDEX: Final[int] = 12


class GameNotFinished(RuntimeError):
    """Raised when a summary is requested for a game still in progress."""


def is_playable(card: Card, board: Board) -> bool:
    """Return ``True`` when ``card`` is unplaced and touches a placed rank of its suit."""

    if card.is_joker:
        return False
    idx = rank_index(card.rank)
    row = board.row(card.suit)
    if row[idx]:
        return False
    has_lower = idx > 0 and row[idx - 1]
    has_upper = idx < LAST_RANK_INDEX and row[idx + 1]
    return has_lower or has_upper


def playable_cards(hand: Iterable[Card], board: Board) -> list[Card]:
    return [card for card in hand if is_playable(card, board)]


def evaluate_status(state: SevensState) -> Status:
    """Detect pass exhaustion and deadlock; terminal states are left alone."""

    if state.status.is_terminal:
        return state.status

    player_playable = len(playable_cards(state.player_hand, state.board))
    cpu_playable = len(playable_cards(state.cpu_hand, state.board))
    player_exhausted = not state.can_pass(Turn.PLAYER)
    cpu_exhausted = not state.can_pass(Turn.CPU)

    player_blocked = player_exhausted and player_playable == 0
    cpu_blocked = cpu_exhausted and cpu_playable == 0

    if player_blocked and cpu_blocked:
        if len(state.player_hand) == len(state.cpu_hand):
            return Status.STUCK
        return Status.PLAYER_WON if len(state.player_hand) < len(state.cpu_hand) else Status.CPU_WON
    if player_blocked:
        return Status.CPU_WON
    if cpu_blocked:
        return Status.PLAYER_WON
    return state.status


def with_evaluated_status(state: SevensState) -> SevensState:
    status = evaluate_status(state)
    if status is state.status:
        return state
    logger.debug("sevens status %s -> %s at turn %d", state.status.value, status.value, state.turn_count)
    return replace(state, status=status)


def apply_move(state: SevensState, card: Card) -> SevensState:
    """Place ``card`` for the side whose turn it is."""

    if state.status is not Status.PLAYING:
        return state
    mover = state.turn
    if card not in state.hand_for(mover) or not is_playable(card, state.board):
        return state

    board = state.board.place(card.suit, rank_index(card.rank))
    player_hand = state.player_hand
    cpu_hand = state.cpu_hand
    if mover is Turn.PLAYER:
        player_hand = tuple(c for c in player_hand if c.id != card.id)
    else:
        cpu_hand = tuple(c for c in cpu_hand if c.id != card.id)

    if not player_hand:
        status = Status.PLAYER_WON
    elif not cpu_hand:
        status = Status.CPU_WON
    else:
        status = state.status

    moved = replace(
        state,
        board=board,
        table_cards=(*state.table_cards, card),
        player_hand=player_hand,
        cpu_hand=cpu_hand,
        turn=mover.other,
        status=status,
        turn_count=state.turn_count + 1,
    ).with_log(f"{mover.label}: placed {card.rank.value} on {card.suit.value}")
    return with_evaluated_status(moved)


def apply_pass(state: SevensState) -> SevensState:
    """Spend one pass for the side whose turn it is.

    A side that uses its last pass while holding no legal card loses at once.
    """

    if state.status is not Status.PLAYING:
        return state
    mover = state.turn
    used, ceiling = state.passes_for(mover)
    if used >= ceiling:
        return state

    passed = replace(
        state,
        player_passes=used + 1 if mover is Turn.PLAYER else state.player_passes,
        cpu_passes=used + 1 if mover is Turn.CPU else state.cpu_passes,
        turn=mover.other,
        turn_count=state.turn_count + 1,
    ).with_log(f"{mover.label}: pass ({used + 1}/{ceiling})")
    passed = with_evaluated_status(passed)

    if used + 1 >= ceiling and not playable_cards(state.hand_for(mover), state.board):
        winner = Status.PLAYER_WON if mover is Turn.CPU else Status.CPU_WON
        passed = replace(passed, status=winner).with_log(f"{mover.label}: out of passes, game lost")
    return passed


def build_sevens_simulation_summary(state: SevensState) -> GameSimulation:
    """Convert a finished game into a history-ready :class:`GameSimulation`."""

    if not state.status.is_terminal:
        raise GameNotFinished("Sevens game is still in progress")

    if state.status is Status.PLAYER_WON:
        outcome = Outcome.WIN
    elif state.status is Status.CPU_WON:
        outcome = Outcome.LOSE
    else:
        outcome = Outcome.DRAW

    return GameSimulation(
        game=GameType.SEVENS,
        difficulty=state.difficulty,
        outcome=outcome,
        turns=state.turn_count,
        notes=(
            f"Passes used: you {state.player_passes}/{state.player_passes_max}"
            f" / CPU {state.cpu_passes}/{state.cpu_passes_max}"
        ),
        player_hand=state.player_hand,
        cpu_hand=state.cpu_hand,
        table_cards=state.table_cards,
        score_breakdown=state.log[-SUMMARY_LOG_LINES:],
    )
