"""Player-facing settings and runtime configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Final, Mapping

from .results import GameType, clamp_difficulty

__all__ = ["HISTORY_ENV_VAR", "DEFAULT_HISTORY_PATH", "Settings", "resolve_history_path"]

HISTORY_ENV_VAR: Final[str] = "CARDTABLE_HISTORY"
DEFAULT_HISTORY_PATH: Final[Path] = Path.home() / ".cardtable" / "history.json"


@dataclass(frozen=True, slots=True)
class Settings:
    """Selected game and CPU difficulty."""

    game: GameType = GameType.DAIFUGO
    difficulty: int = 3

    def __post_init__(self) -> None:
        object.__setattr__(self, "difficulty", clamp_difficulty(self.difficulty))

    def with_game(self, game: GameType | str) -> "Settings":
        return replace(self, game=GameType.parse(game))

    def with_difficulty(self, value: float) -> "Settings":
        return replace(self, difficulty=clamp_difficulty(value))


def resolve_history_path(explicit: Path | None = None, environ: Mapping[str, str] | None = None) -> Path:
    """Pick the history file: explicit path, then the environment, then the default."""

    if explicit is not None:
        return explicit
    env = os.environ if environ is None else environ
    value = env.get(HISTORY_ENV_VAR)
    if value:
        return Path(value).expanduser()
    return DEFAULT_HISTORY_PATH
