from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np

from tengen.core import BoardArray, Stone, candidate_moves, captured_by, count_liberties, find_group

logger = logging.getLogger(__name__)

MAX_PLAYOUT_MOVES = 100


@dataclass
class PlayoutResult:
    board: BoardArray
    moves: int
    budget_exceeded: bool


def simulate_move(board: BoardArray, x: int, y: int, color: Stone) -> bool:
    """Play ``color`` at ``(x, y)`` in place, without history or ko.

    Captured opponent stones are removed. A move that captures nothing and
    leaves its own group without liberties is undone; returns whether the
    stone stayed on the board.
    """
    board[y, x] = color
    captured = captured_by(board, x, y, color)
    for cx, cy in captured:
        board[cy, cx] = Stone.EMPTY
    if not captured and count_liberties(board, find_group(board, x, y)) == 0:
        board[y, x] = Stone.EMPTY
        return False
    return True


def run_playout(
    board: BoardArray,
    turn: Stone,
    *,
    rng: Optional[np.random.Generator] = None,
    max_moves: int = MAX_PLAYOUT_MOVES,
) -> PlayoutResult:
    """Play random eye-avoiding moves on a copy of ``board`` until two passes in a row or ``max_moves``."""
    rng = rng or np.random.default_rng()
    work = board.copy()
    color = turn
    passes_in_row = 0
    moves = 0
    while passes_in_row < 2 and moves < max_moves:
        candidates = candidate_moves(work, color)
        if candidates:
            x, y = candidates[int(rng.integers(len(candidates)))]
            simulate_move(work, x, y, color)
            passes_in_row = 0
        else:
            passes_in_row += 1
        color = color.opponent
        moves += 1

    budget_exceeded = passes_in_row < 2
    if budget_exceeded:
        logger.debug("Playout stopped at the %d move ceiling.", max_moves)
    return PlayoutResult(board=work, moves=moves, budget_exceeded=budget_exceeded)
