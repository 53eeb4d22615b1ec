"""Core game logic for Tengen: board, groups, legality and history."""

from .state import (
    BOARD_SIZE,
    BoardArray,
    GamePhase,
    MoveResult,
    Point,
    Rejection,
    Snapshot,
    Stone,
    empty_board,
    format_board,
    in_bounds,
    stone_at,
)
from .groups import (
    candidate_mask,
    candidate_moves,
    captured_by,
    count_liberties,
    empty_region,
    find_group,
    group_liberties,
    is_not_suicide,
    is_true_eye,
    neighbors,
    stones_in_atari,
    territory_owner,
)
from .rules import (
    HANDICAP_KOMI,
    HANDICAP_LEVELS,
    HANDICAP_STONES,
    KOMI,
    attempt_move,
    komi_for,
    new_game,
    next_handicap_level,
)
from .history import EmptyHistoryError, History

__all__ = [
    "BOARD_SIZE",
    "BoardArray",
    "GamePhase",
    "MoveResult",
    "Point",
    "Rejection",
    "Snapshot",
    "Stone",
    "empty_board",
    "format_board",
    "in_bounds",
    "stone_at",
    "candidate_mask",
    "candidate_moves",
    "captured_by",
    "count_liberties",
    "empty_region",
    "find_group",
    "group_liberties",
    "is_not_suicide",
    "is_true_eye",
    "neighbors",
    "stones_in_atari",
    "territory_owner",
    "HANDICAP_KOMI",
    "HANDICAP_LEVELS",
    "HANDICAP_STONES",
    "KOMI",
    "attempt_move",
    "komi_for",
    "new_game",
    "next_handicap_level",
    "EmptyHistoryError",
    "History",
]
