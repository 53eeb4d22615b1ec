from __future__ import annotations

from typing import Dict, Optional, Tuple

import numpy as np

from .groups import captured_by, count_liberties, find_group
from .state import (
    BoardArray,
    MoveResult,
    Point,
    Rejection,
    Stone,
    check_bounds,
    empty_board,
)

HANDICAP_LEVELS: Tuple[int, ...] = (0, 2, 3, 4)
HANDICAP_STONES: Dict[int, Tuple[Point, ...]] = {
    0: (),
    2: ((6, 2), (2, 6)),
    3: ((6, 2), (2, 6), (4, 4)),
    4: ((6, 2), (2, 6), (6, 6), (2, 2)),
}

KOMI = 3.75
HANDICAP_KOMI = 0.5


def komi_for(handicap_active: bool, *, komi: float = KOMI, handicap_komi: float = HANDICAP_KOMI) -> float:
    return handicap_komi if handicap_active else komi


def next_handicap_level(level: int) -> int:
    if level not in HANDICAP_LEVELS:
        raise ValueError(f"Unsupported handicap level {level}; expected one of {HANDICAP_LEVELS}.")
    return HANDICAP_LEVELS[(HANDICAP_LEVELS.index(level) + 1) % len(HANDICAP_LEVELS)]


def new_game(handicap: int = 0) -> Tuple[BoardArray, Stone]:
    """Initial board and side to move for ``handicap``.

    Handicap stones are Black; any handicap hands the first move to White.
    """
    if handicap not in HANDICAP_STONES:
        raise ValueError(f"Unsupported handicap level {handicap}; expected one of {HANDICAP_LEVELS}.")
    board = empty_board()
    for x, y in HANDICAP_STONES[handicap]:
        board[y, x] = Stone.BLACK
    turn = Stone.WHITE if handicap > 0 else Stone.BLACK
    return board, turn


def attempt_move(
    board: BoardArray,
    x: int,
    y: int,
    color: Stone,
    previous_board: Optional[BoardArray] = None,
) -> MoveResult:
    """Play ``color`` at ``(x, y)`` on a copy of ``board``.

    ``previous_board`` is the position recorded by the most recent snapshot;
    recreating it is rejected as ko. Only that single position is compared,
    so longer repetition cycles are not detected. ``board`` is never modified.
    """
    check_bounds(x, y)
    if color == Stone.EMPTY:
        raise ValueError("Only black or white stones can be played.")
    if board[y, x] != Stone.EMPTY:
        return MoveResult(accepted=False, rejection=Rejection.OCCUPIED)

    work = board.copy()
    work[y, x] = color
    captured = captured_by(work, x, y, color)
    for cx, cy in captured:
        work[cy, cx] = Stone.EMPTY

    if not captured and count_liberties(work, find_group(work, x, y)) == 0:
        return MoveResult(accepted=False, rejection=Rejection.SUICIDE)

    if previous_board is not None and np.array_equal(work, previous_board):
        return MoveResult(accepted=False, rejection=Rejection.KO)

    return MoveResult(accepted=True, board=work, captured=tuple(sorted(captured)))
