"""Interactive Sevens engine: state, rules, CPU policy and a turn loop."""

from .cpu import card_risk, choose_card, cpu_turn, pass_threshold, score_candidates
from .rules import (
    GameNotFinished,
    apply_move,
    apply_pass,
    build_sevens_simulation_summary,
    evaluate_status,
    is_playable,
    playable_cards,
)
from .session import auto_player_action, play_sevens_game, player_step, run_to_completion
from .state import (
    LOG_LIMIT,
    PLAYER_PASS_LIMIT,
    Board,
    SevensState,
    Status,
    Turn,
    cpu_pass_limit,
    create_sevens_game,
)

__all__ = [
    "Board",
    "GameNotFinished",
    "LOG_LIMIT",
    "PLAYER_PASS_LIMIT",
    "SevensState",
    "Status",
    "Turn",
    "apply_move",
    "apply_pass",
    "auto_player_action",
    "build_sevens_simulation_summary",
    "card_risk",
    "choose_card",
    "cpu_pass_limit",
    "cpu_turn",
    "create_sevens_game",
    "evaluate_status",
    "is_playable",
    "pass_threshold",
    "play_sevens_game",
    "playable_cards",
    "player_step",
    "run_to_completion",
    "score_candidates",
]
