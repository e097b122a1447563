from __future__ import annotations

import numpy as np
import pytest

from cardtable.benchmark import run_outcome_benchmark
from cardtable.results import GameType


def test_run_outcome_benchmark_returns_report() -> None:
    report = run_outcome_benchmark("blackjack", rounds=5, difficulties=[1, 5, 10], seed=7)

    assert report.game is GameType.BLACKJACK
    assert report.difficulties == (1, 5, 10)
    assert report.outcomes.shape == (3, 3)
    assert report.outcomes.sum(axis=1).tolist() == [5, 5, 5]
    assert [row.rounds for row in report.rows()] == [5, 5, 5]
    assert np.allclose(report.rates().sum(axis=1), 1.0)
    assert 0.0 <= report.overall_win_rate() <= 1.0


def test_run_outcome_benchmark_is_seeded() -> None:
    first = run_outcome_benchmark(GameType.POKER, rounds=10, difficulties=[3, 8], seed=11)
    second = run_outcome_benchmark(GameType.POKER, rounds=10, difficulties=[3, 8], seed=11)

    assert np.array_equal(first.outcomes, second.outcomes)


def test_sevens_benchmark_plays_full_games() -> None:
    report = run_outcome_benchmark(GameType.SEVENS, rounds=2, difficulties=[2], seed=5)

    assert int(report.outcomes.sum()) == 2


def test_run_outcome_benchmark_validates_arguments() -> None:
    with pytest.raises(ValueError):
        run_outcome_benchmark("poker", rounds=0)
    with pytest.raises(ValueError):
        run_outcome_benchmark("poker", rounds=1, difficulties=[])
    with pytest.raises(ValueError):
        run_outcome_benchmark("mahjong", rounds=1)
