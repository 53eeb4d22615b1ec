from __future__ import annotations

from typing import Optional

import numpy as np

from tengen.core import BoardArray, Point, Stone, candidate_moves

from .base import Player


class RandomPlayer(Player):
    """Uniform choice among eye-avoiding, non-suicidal moves; passes when none remain."""

    def __init__(self, rng: Optional[np.random.Generator] = None) -> None:
        self.rng = rng or np.random.default_rng()

    def select_move(self, board: BoardArray, color: Stone) -> Optional[Point]:
        candidates = candidate_moves(board, color)
        if not candidates:
            return None
        return candidates[int(self.rng.integers(len(candidates)))]

    def spawn(self, seed: Optional[int] = None) -> "RandomPlayer":
        return RandomPlayer(np.random.default_rng(seed))
