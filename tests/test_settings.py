from __future__ import annotations

from pathlib import Path

import pytest

from cardtable.results import GameType, clamp_difficulty
from cardtable.settings import DEFAULT_HISTORY_PATH, HISTORY_ENV_VAR, Settings, resolve_history_path


def test_default_settings() -> None:
    settings = Settings()

    assert settings.game is GameType.DAIFUGO
    assert settings.difficulty == 3


@pytest.mark.parametrize(("value", "expected"), [(-4, 1), (0, 1), (1, 1), (4.5, 5), (7.2, 7), (10, 10), (99, 10)])
def test_difficulty_is_rounded_and_clamped(value: float, expected: int) -> None:
    assert clamp_difficulty(value) == expected
    assert Settings().with_difficulty(value).difficulty == expected


def test_constructor_clamps_difficulty() -> None:
    assert Settings(difficulty=25).difficulty == 10


def test_with_game_parses_names() -> None:
    settings = Settings().with_game("old-maid")

    assert settings.game is GameType.OLD_MAID
    assert Settings().with_game("oldMaid").game is GameType.OLD_MAID
    assert Settings().with_game(GameType.POKER).game is GameType.POKER
    with pytest.raises(ValueError):
        Settings().with_game("bridge")


def test_game_display_names() -> None:
    assert GameType.OLD_MAID.display_name == "Old Maid"
    assert GameType.BLACKJACK.display_name == "Blackjack"


def test_resolve_history_path_precedence(tmp_path: Path) -> None:
    explicit = tmp_path / "explicit.json"
    from_env = tmp_path / "env.json"

    assert resolve_history_path(explicit, {HISTORY_ENV_VAR: str(from_env)}) == explicit
    assert resolve_history_path(None, {HISTORY_ENV_VAR: str(from_env)}) == from_env
    assert resolve_history_path(None, {}) == DEFAULT_HISTORY_PATH
