"""Blackjack outcome simulator."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from ..cards import Card, RandomSource, Rank, build_deck, round_half_up, shuffle_deck
from ..results import GameSimulation, GameType, Outcome

__all__ = ["HandTotal", "hand_total", "draw_until", "blackjack_targets", "simulate_blackjack"]

logger = logging.getLogger(__name__)

BUST_LIMIT = 21
_FACE_RANKS = frozenset({Rank.KING, Rank.QUEEN, Rank.JACK})


@dataclass(frozen=True, slots=True)
class HandTotal:
    """Best blackjack total and whether an ace had to be demoted to reach it."""

    total: int
    soft: bool

    @property
    def bust(self) -> bool:
        return self.total > BUST_LIMIT


def hand_total(hand: Sequence[Card]) -> HandTotal:
    """Count aces as 11, then demote them one at a time while the hand busts."""

    total = 0
    aces = 0
    for card in hand:
        if card.rank is Rank.ACE:
            aces += 1
            total += 11
        elif card.rank in _FACE_RANKS:
            total += 10
        else:
            total += int(card.rank.value)
    soft = False
    while total > BUST_LIMIT and aces > 0:
        total -= 10
        aces -= 1
        soft = True
    return HandTotal(total=total, soft=soft)


def draw_until(hand: Sequence[Card], deck: Sequence[Card], limit: int, flex: int = 0) -> list[Card]:
    """Draw from the top of ``deck`` until the total reaches ``limit``.

    With a positive ``flex`` one more card is taken if the total is still
    below ``limit + flex``.
    """

    working = list(hand)
    pool = list(deck)
    while hand_total(working).total < limit and pool:
        working.append(pool.pop(0))
    if flex > 0 and hand_total(working).total < limit + flex and pool:
        working.append(pool.pop(0))
    return working


def blackjack_targets(difficulty: int) -> tuple[int, int, int]:
    """Return ``(player_target, dealer_target, dealer_flex)`` for ``difficulty``."""

    player_target = 15 + round_half_up(difficulty / 2)
    dealer_target = 16 + round_half_up(difficulty / 3)
    dealer_flex = 2 if difficulty >= 8 else 0
    return player_target, dealer_target, dealer_flex


def _outcome(player: HandTotal, dealer: HandTotal) -> Outcome:
    if player.bust and dealer.bust:
        return Outcome.DRAW
    if player.bust:
        return Outcome.LOSE
    if dealer.bust:
        return Outcome.WIN
    if player.total > dealer.total:
        return Outcome.WIN
    if player.total < dealer.total:
        return Outcome.LOSE
    return Outcome.DRAW


def _notes(difficulty: int) -> str:
    if difficulty >= 8:
        return "The dealer hits even on soft 17 and keeps a deeper shoe in reserve."
    if difficulty >= 5:
        return "The dealer stands on 16 and weighs an extra hit depending on the table."
    return "At low difficulty the shoe runs thin and the dealer stands early."


def simulate_blackjack(difficulty: int, *, rng: RandomSource | None = None) -> GameSimulation:
    """Deal one round of blackjack and play both hands to their stand totals."""

    deck = shuffle_deck(build_deck(include_jokers=False), rng)
    player_hand = deck[0:2]
    cpu_hand = deck[2:4]
    remaining = deck[4:]

    player_target, dealer_target, dealer_flex = blackjack_targets(difficulty)

    player_final = draw_until(player_hand, remaining, player_target)
    dealer_deck = remaining[len(player_final) - len(player_hand):]
    cpu_final = draw_until(cpu_hand, dealer_deck, dealer_target, dealer_flex)

    player_total = hand_total(player_final)
    cpu_total = hand_total(cpu_final)
    outcome = _outcome(player_total, cpu_total)
    logger.debug(
        "blackjack difficulty=%d player=%d dealer=%d outcome=%s",
        difficulty,
        player_total.total,
        cpu_total.total,
        outcome.value,
    )

    flex_note = f" (+{dealer_flex} flex)" if dealer_flex else ""
    return GameSimulation(
        game=GameType.BLACKJACK,
        difficulty=difficulty,
        outcome=outcome,
        turns=len(player_final) + len(cpu_final),
        notes=_notes(difficulty),
        player_hand=tuple(player_final),
        cpu_hand=tuple(cpu_final),
        table_cards=tuple(deck[0:1]),
        score_breakdown=(
            f"Player total: {player_total.total}",
            f"Dealer total: {cpu_total.total}",
            f"Hit thresholds: player {player_target} / CPU {dealer_target}{flex_note}",
        ),
    )
