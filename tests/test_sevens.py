from __future__ import annotations

import random
from dataclasses import replace

import pytest

from cardtable.cards import STANDARD_SUITS, Card, Rank, Suit, rank_index
from cardtable.results import GameType, Outcome
from cardtable.sevens import (
    LOG_LIMIT,
    Board,
    GameNotFinished,
    SevensState,
    Status,
    Turn,
    apply_move,
    apply_pass,
    build_sevens_simulation_summary,
    card_risk,
    cpu_pass_limit,
    cpu_turn,
    create_sevens_game,
    evaluate_status,
    is_playable,
    play_sevens_game,
    player_step,
    run_to_completion,
)

H, D, C, S = Suit.HEARTS, Suit.DIAMONDS, Suit.CLUBS, Suit.SPADES


class FixedSource:
    def __init__(self, value: float) -> None:
        self.value = value

    def random(self) -> float:
        return self.value


def _c(rank: Rank, suit: Suit) -> Card:
    return Card.of(rank, suit)


def _board(*extra: tuple[Rank, Suit]) -> Board:
    board = Board.empty()
    for suit in STANDARD_SUITS:
        board = board.place(suit, rank_index(Rank.SEVEN))
    for rank, suit in extra:
        board = board.place(suit, rank_index(rank))
    return board


def _state(
    player: list[Card],
    cpu: list[Card],
    *,
    board: Board | None = None,
    turn: Turn = Turn.PLAYER,
    player_passes: int = 0,
    cpu_passes: int = 0,
    cpu_passes_max: int = 4,
    difficulty: int = 5,
) -> SevensState:
    return SevensState(
        board=board or _board(),
        table_cards=tuple(_c(Rank.SEVEN, suit) for suit in STANDARD_SUITS),
        player_hand=tuple(player),
        cpu_hand=tuple(cpu),
        turn=turn,
        player_passes=player_passes,
        cpu_passes=cpu_passes,
        player_passes_max=4,
        cpu_passes_max=cpu_passes_max,
        status=Status.PLAYING,
        log=("Game started. Your turn.",),
        difficulty=difficulty,
        turn_count=1,
    )


def test_create_sevens_game_seeds_the_sevens() -> None:
    state = create_sevens_game(7, rng=random.Random(4))

    assert state.board.placed_count() == 4
    assert all(state.board.is_placed(suit, 6) for suit in STANDARD_SUITS)
    assert [card.rank for card in state.table_cards] == [Rank.SEVEN] * 4
    assert len(state.player_hand) + len(state.cpu_hand) == 48
    assert not any(card.rank is Rank.SEVEN for card in state.player_hand + state.cpu_hand)
    assert state.turn is Turn.PLAYER
    assert state.status is Status.PLAYING
    assert state.log == ("Game started. Your turn.",)
    assert state.turn_count == 1
    assert (state.player_passes_max, state.cpu_passes_max) == (4, 3)


@pytest.mark.parametrize(("difficulty", "expected"), [(1, 5), (3, 5), (4, 4), (7, 3), (8, 3), (9, 2), (10, 2)])
def test_cpu_pass_limit(difficulty: int, expected: int) -> None:
    assert cpu_pass_limit(difficulty) == expected


def test_is_playable_needs_a_placed_neighbour() -> None:
    board = _board()

    assert is_playable(_c(Rank.SIX, H), board)
    assert is_playable(_c(Rank.EIGHT, H), board)
    assert not is_playable(_c(Rank.FIVE, H), board)
    assert not is_playable(_c(Rank.SEVEN, H), board)
    assert not is_playable(Card.joker(1), board)
    assert board.row(Suit.JOKER) == (False,) * 13


def test_illegal_move_returns_the_same_state() -> None:
    state = _state([_c(Rank.FIVE, H), _c(Rank.SIX, H)], [_c(Rank.TWO, C)])

    assert apply_move(state, _c(Rank.FIVE, H)) is state
    assert apply_move(state, _c(Rank.EIGHT, H)) is state
    assert apply_move(state, Card.joker(1)) is state


def test_legal_move_places_card_and_hands_over_the_turn() -> None:
    six = _c(Rank.SIX, H)
    state = _state([six, _c(Rank.TWO, D)], [_c(Rank.TWO, C)])

    moved = apply_move(state, six)

    assert moved is not state
    assert moved.board.is_placed(H, rank_index(Rank.SIX))
    assert six not in moved.player_hand
    assert moved.table_cards[-1] == six
    assert moved.turn is Turn.CPU
    assert moved.turn_count == 2
    assert moved.log[-1] == "You: placed 6 on hearts"
    assert moved.status is Status.PLAYING
    assert state.player_hand == (six, _c(Rank.TWO, D))


def test_emptying_the_hand_wins() -> None:
    state = _state([_c(Rank.SIX, H)], [_c(Rank.TWO, C), _c(Rank.THREE, C)])

    assert apply_move(state, _c(Rank.SIX, H)).status is Status.PLAYER_WON


def test_pass_spends_one_allowance() -> None:
    state = _state([_c(Rank.TWO, H)], [_c(Rank.TWO, C)])

    passed = apply_pass(state)

    assert passed.player_passes == 1
    assert passed.turn is Turn.CPU
    assert passed.log[-1] == "You: pass (1/4)"
    assert passed.status is Status.PLAYING


def test_pass_at_the_ceiling_is_rejected() -> None:
    state = _state([_c(Rank.SIX, H)], [_c(Rank.TWO, C)], player_passes=4)

    assert apply_pass(state) is state


def test_last_pass_without_legal_cards_loses() -> None:
    state = _state([_c(Rank.TWO, H)], [_c(Rank.SIX, C), _c(Rank.TWO, C)], player_passes=3)

    passed = apply_pass(state)

    assert passed.status is Status.CPU_WON
    assert passed.player_passes == 4
    assert passed.log[-1] == "You: out of passes, game lost"


def test_cpu_running_out_of_passes_hands_the_player_the_win() -> None:
    state = _state(
        [_c(Rank.SIX, H), _c(Rank.TWO, D)],
        [_c(Rank.TWO, C)],
        turn=Turn.CPU,
        cpu_passes=3,
    )

    passed = apply_pass(state)

    assert passed.status is Status.PLAYER_WON
    assert passed.log[-1] == "CPU: out of passes, game lost"


def test_both_sides_blocked_favours_the_shorter_hand() -> None:
    state = _state(
        [_c(Rank.TWO, H)],
        [_c(Rank.TWO, C), _c(Rank.THREE, C)],
        player_passes=4,
        cpu_passes=4,
    )

    assert evaluate_status(state) is Status.PLAYER_WON
    assert evaluate_status(replace(state, cpu_hand=(_c(Rank.TWO, C),))) is Status.STUCK


def test_evaluate_status_leaves_terminal_states_alone() -> None:
    state = replace(_state([_c(Rank.TWO, H)], [_c(Rank.TWO, C)], player_passes=4), status=Status.PLAYER_WON)

    assert evaluate_status(state) is Status.PLAYER_WON
    assert apply_move(state, _c(Rank.TWO, H)) is state
    assert apply_pass(state) is state


@pytest.mark.parametrize(
    ("rank", "risk"),
    [(Rank.ACE, 3), (Rank.TWO, 3), (Rank.QUEEN, 3), (Rank.KING, 3), (Rank.THREE, 2), (Rank.JACK, 2), (Rank.SIX, 1)],
)
def test_card_risk(rank: Rank, risk: int) -> None:
    assert card_risk(_c(rank, S)) == risk


def test_cpu_turn_ignores_the_players_turn_and_finished_games() -> None:
    state = _state([_c(Rank.SIX, H)], [_c(Rank.SIX, C)])

    assert cpu_turn(state) is state
    finished = replace(state, turn=Turn.CPU, status=Status.CPU_WON)
    assert cpu_turn(finished) is finished


def test_cpu_turn_passes_without_options() -> None:
    state = _state([_c(Rank.TWO, D)], [_c(Rank.TWO, C)], turn=Turn.CPU)

    after = cpu_turn(state, rng=FixedSource(0.5))

    assert after.cpu_passes == 1
    assert after.turn is Turn.PLAYER
    assert after.log[-1] == "CPU: pass (1/4)"


def test_cpu_turn_plays_a_safe_card() -> None:
    state = _state([_c(Rank.TWO, D)], [_c(Rank.SIX, C), _c(Rank.TWO, C)], turn=Turn.CPU)

    after = cpu_turn(state, rng=FixedSource(0.5))

    assert after.board.is_placed(C, rank_index(Rank.SIX))
    assert after.cpu_hand == (_c(Rank.TWO, C),)
    assert after.turn is Turn.PLAYER


def test_cpu_turn_holds_back_risky_cards_while_passes_remain() -> None:
    board = _board((Rank.QUEEN, C))
    risky = _state([_c(Rank.TWO, D)], [_c(Rank.KING, C), _c(Rank.TWO, C)], board=board, turn=Turn.CPU, difficulty=1)

    held = cpu_turn(risky, rng=FixedSource(0.5))
    assert held.cpu_passes == 1
    assert _c(Rank.KING, C) in held.cpu_hand

    forced = cpu_turn(replace(risky, cpu_passes=4), rng=FixedSource(0.5))
    assert forced.board.is_placed(C, rank_index(Rank.KING))
    assert _c(Rank.KING, C) not in forced.cpu_hand


def test_player_step_falls_back_to_the_first_legal_card() -> None:
    state = _state([_c(Rank.FIVE, H), _c(Rank.EIGHT, D)], [_c(Rank.TWO, C)])

    after = player_step(state, _c(Rank.FIVE, H))

    assert after.board.is_placed(D, rank_index(Rank.EIGHT))
    assert after.log[-1] == "You: placed 8 on diamonds"


def test_log_keeps_the_latest_fifty_lines() -> None:
    state = _state([_c(Rank.TWO, H)], [_c(Rank.TWO, C)])

    for idx in range(60):
        state = state.with_log(f"line {idx}")

    assert len(state.log) == LOG_LIMIT
    assert state.log[-1] == "line 59"
    assert state.log[0] == "line 10"


def test_summary_requires_a_finished_game() -> None:
    state = _state([_c(Rank.TWO, H)], [_c(Rank.TWO, C)])

    with pytest.raises(GameNotFinished):
        build_sevens_simulation_summary(state)


@pytest.mark.parametrize(
    ("status", "outcome"),
    [(Status.PLAYER_WON, Outcome.WIN), (Status.CPU_WON, Outcome.LOSE), (Status.STUCK, Outcome.DRAW)],
)
def test_summary_maps_status_to_outcome(status: Status, outcome: Outcome) -> None:
    state = _state([_c(Rank.TWO, H)], [_c(Rank.TWO, C)], cpu_passes=2)
    for idx in range(8):
        state = state.with_log(f"line {idx}")
    state = replace(state, status=status)

    summary = build_sevens_simulation_summary(state)

    assert summary.game is GameType.SEVENS
    assert summary.outcome is outcome
    assert summary.difficulty == 5
    assert summary.turns == 1
    assert summary.notes == "Passes used: you 0/4 / CPU 2/4"
    assert summary.score_breakdown == tuple(f"line {idx}" for idx in range(3, 8))


@pytest.mark.parametrize("difficulty", [1, 5, 10])
def test_automatic_games_always_finish(difficulty: int) -> None:
    for seed in range(10):
        final = play_sevens_game(difficulty, rng=random.Random(seed))
        assert final.status.is_terminal
        build_sevens_simulation_summary(final)


def test_seeded_games_are_reproducible() -> None:
    first = play_sevens_game(7, rng=random.Random(99))
    second = play_sevens_game(7, rng=random.Random(99))

    assert first == second


def test_always_passing_player_still_finishes() -> None:
    final = play_sevens_game(5, lambda state: None, rng=random.Random(3))

    assert final.status.is_terminal


def test_step_limit_marks_game_stuck() -> None:
    state = create_sevens_game(5, rng=random.Random(1))

    final = run_to_completion(state, rng=random.Random(1), max_steps=0)

    assert final.status is Status.STUCK
    assert final.log[-1] == "Step limit reached, game stuck"
