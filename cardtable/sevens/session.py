"""Reference turn loop that drives a Sevens game to completion."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Callable, Final, Optional

from ..cards import Card, RandomSource
from .cpu import cpu_turn
from .rules import apply_move, apply_pass, playable_cards
from .state import SevensState, Status, Turn, create_sevens_game

__all__ = ["PlayerPolicy", "MAX_STEPS", "auto_player_action", "player_step", "run_to_completion", "play_sevens_game"]

logger = logging.getLogger(__name__)

MAX_STEPS: Final[int] = 500

PlayerPolicy = Callable[[SevensState], Optional[Card]]


def auto_player_action(state: SevensState) -> SevensState:
    """Play the first legal card for the player, or pass when there is none."""

    options = playable_cards(state.player_hand, state.board)
    if options:
        return apply_move(state, options[0])
    return apply_pass(state)


def player_step(state: SevensState, choice: Card | None) -> SevensState:
    """Apply the player's choice (``None`` passes), falling back to :func:`auto_player_action`."""

    if state.status is not Status.PLAYING or state.turn is not Turn.PLAYER:
        return state
    updated = apply_pass(state) if choice is None else apply_move(state, choice)
    if updated is state:
        logger.debug("player choice %r rejected, using automatic action", choice)
        updated = auto_player_action(state)
    return updated


def run_to_completion(
    state: SevensState,
    choose_player_action: PlayerPolicy | None = None,
    *,
    rng: RandomSource | None = None,
    max_steps: int = MAX_STEPS,
) -> SevensState:
    """Alternate player and CPU actions until the game reaches a terminal status."""

    for _ in range(max_steps):
        if state.status is not Status.PLAYING:
            return state
        if state.turn is Turn.PLAYER:
            if choose_player_action is None:
                state = auto_player_action(state)
            else:
                state = player_step(state, choose_player_action(state))
        else:
            state = cpu_turn(state, rng=rng)

    if state.status is Status.PLAYING:
        logger.warning("sevens game hit the %d step limit; marking as stuck", max_steps)
        state = replace(state, status=Status.STUCK).with_log("Step limit reached, game stuck")
    return state


def play_sevens_game(
    difficulty: int,
    choose_player_action: PlayerPolicy | None = None,
    *,
    rng: RandomSource | None = None,
    max_steps: int = MAX_STEPS,
) -> SevensState:
    """Deal a new game and play it out; ``None`` policy plays automatically."""

    state = create_sevens_game(difficulty, rng=rng)
    return run_to_completion(state, choose_player_action, rng=rng, max_steps=max_steps)
