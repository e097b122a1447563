from __future__ import annotations

import pytest

from cardtable import evaluation
from cardtable.cards import Card, Rank, Suit
from cardtable.evaluation import HandRank, PairScore


def _hand(*specs: tuple[Rank, Suit]) -> list[Card]:
    return [Card.of(rank, suit) for rank, suit in specs]


H, D, C, S = Suit.HEARTS, Suit.DIAMONDS, Suit.CLUBS, Suit.SPADES


def test_pair_score_counts_each_group_once() -> None:
    hand = _hand(
        (Rank.NINE, H), (Rank.NINE, D), (Rank.NINE, C), (Rank.NINE, S),
        (Rank.FIVE, H), (Rank.FIVE, D), (Rank.FIVE, C),
        (Rank.TWO, H), (Rank.TWO, S),
        (Rank.KING, H),
    )

    assert evaluation.pair_score(hand) == PairScore(pairs=1, triples=1, quads=1)


def test_pair_score_on_quad_only() -> None:
    hand = _hand((Rank.ACE, H), (Rank.ACE, D), (Rank.ACE, C), (Rank.ACE, S))

    assert evaluation.pair_score(hand) == PairScore(pairs=0, triples=0, quads=1)


def test_jokers_pair_up_as_their_own_rank() -> None:
    assert evaluation.pair_score([Card.joker(1), Card.joker(2)]) == PairScore(pairs=1, triples=0, quads=0)


@pytest.mark.parametrize(
    ("hand", "label"),
    [
        (_hand((Rank.FIVE, H), (Rank.SIX, H), (Rank.SEVEN, H), (Rank.EIGHT, H), (Rank.NINE, H)), HandRank.STRAIGHT_FLUSH),
        (_hand((Rank.NINE, H), (Rank.NINE, D), (Rank.NINE, C), (Rank.NINE, S), (Rank.TWO, H)), HandRank.FOUR_KIND),
        (_hand((Rank.NINE, H), (Rank.NINE, D), (Rank.NINE, C), (Rank.TWO, S), (Rank.TWO, H)), HandRank.FULL_HOUSE),
        (_hand((Rank.TWO, C), (Rank.SIX, C), (Rank.NINE, C), (Rank.JACK, C), (Rank.KING, C)), HandRank.FLUSH),
        (_hand((Rank.TEN, H), (Rank.JACK, D), (Rank.QUEEN, C), (Rank.KING, S), (Rank.ACE, H)), HandRank.STRAIGHT),
        (_hand((Rank.NINE, H), (Rank.NINE, D), (Rank.NINE, C), (Rank.TWO, S), (Rank.FOUR, H)), HandRank.THREE_KIND),
        (_hand((Rank.NINE, H), (Rank.NINE, D), (Rank.FOUR, C), (Rank.FOUR, S), (Rank.KING, H)), HandRank.TWO_PAIR),
        (_hand((Rank.NINE, H), (Rank.NINE, D), (Rank.FOUR, C), (Rank.SIX, S), (Rank.KING, H)), HandRank.ONE_PAIR),
        (_hand((Rank.TWO, H), (Rank.NINE, D), (Rank.FOUR, C), (Rank.SIX, S), (Rank.KING, H)), HandRank.HIGH_CARD),
    ],
)
def test_evaluate_poker_hand_categories(hand: list[Card], label: HandRank) -> None:
    assert evaluation.evaluate_poker_hand(hand).label is label


def test_evaluate_poker_hand_has_no_wheel() -> None:
    hand = _hand((Rank.ACE, H), (Rank.TWO, D), (Rank.THREE, C), (Rank.FOUR, S), (Rank.FIVE, H))

    result = evaluation.evaluate_poker_hand(hand)

    assert result.label is HandRank.HIGH_CARD
    assert result.score == 114


def test_poker_score_is_weight_times_hundred_plus_high_card() -> None:
    pair = _hand((Rank.NINE, H), (Rank.NINE, D), (Rank.FOUR, C), (Rank.SIX, S), (Rank.KING, H))
    flush = _hand((Rank.TWO, C), (Rank.SIX, C), (Rank.NINE, C), (Rank.JACK, C), (Rank.QUEEN, C))

    assert evaluation.evaluate_poker_hand(pair).score == 213
    assert evaluation.evaluate_poker_hand(flush).score == 612
    assert HandRank.HIGH_CARD.weight == 1
    assert HandRank.STRAIGHT_FLUSH.weight == 9


def test_card_list_label() -> None:
    hand = _hand((Rank.ACE, S), (Rank.TEN, D))

    assert evaluation.card_list_label(hand) == "AS, 10D"
    assert evaluation.card_list_label([]) == ""
