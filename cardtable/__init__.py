"""Top-level package for the card table game engine."""

from . import cards, evaluation, games, history, results, sevens, storage

__all__ = [
    "cards",
    "evaluation",
    "games",
    "history",
    "results",
    "sevens",
    "storage",
]
