from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Dict, List, Optional

import numpy as np

from tengen.core import (
    BOARD_SIZE,
    BoardArray,
    Point,
    Stone,
    candidate_moves,
    captured_by,
    count_liberties,
    find_group,
    neighbors,
)

from .base import Player

logger = logging.getLogger(__name__)

CENTER: Point = (BOARD_SIZE // 2, BOARD_SIZE // 2)
STAR_POINTS = frozenset({(2, 2), (2, 6), (6, 2), (6, 6)})


@dataclass
class HeuristicWeights:
    capture: float = 10000.0
    save: float = 5000.0
    threaten: float = 500.0
    center: float = 50.0
    star: float = 30.0
    central: float = 10.0
    edge: float = -5.0
    friend: float = 5.0
    enemy: float = 5.0
    jitter: float = 3.0


def positional_score(x: int, y: int, weights: HeuristicWeights) -> float:
    if (x, y) == CENTER:
        return weights.center
    if (x, y) in STAR_POINTS:
        return weights.star
    if 2 <= x <= 6 and 2 <= y <= 6:
        return weights.central
    if x in (0, BOARD_SIZE - 1) or y in (0, BOARD_SIZE - 1):
        return weights.edge
    return 0.0


def score_breakdown(
    board: BoardArray,
    x: int,
    y: int,
    color: Stone,
    weights: Optional[HeuristicWeights] = None,
) -> Dict[str, float]:
    """Deterministic score components for playing ``color`` at ``(x, y)``."""
    weights = weights or HeuristicWeights()
    opponent = color.opponent
    adjacent = neighbors(x, y)

    after = board.copy()
    after[y, x] = color
    captured = captured_by(after, x, y, color)
    # Threats are read before captured stones leave the board.
    threatened = False
    if not captured:
        for nx, ny in adjacent:
            if after[ny, nx] == opponent and count_liberties(after, find_group(after, nx, ny)) == 1:
                threatened = True
                break
    for cx, cy in captured:
        after[cy, cx] = Stone.EMPTY

    saved = False
    own_after = count_liberties(after, find_group(after, x, y))
    for nx, ny in adjacent:
        if board[ny, nx] == color and count_liberties(board, find_group(board, nx, ny)) == 1:
            if own_after > 1:
                saved = True
                break

    has_friend = any(board[ny, nx] == color for nx, ny in adjacent)
    has_enemy = any(board[ny, nx] == opponent for nx, ny in adjacent)

    return {
        "capture": weights.capture * len(captured),
        "save": weights.save if saved else 0.0,
        "threaten": weights.threaten if threatened else 0.0,
        "position": positional_score(x, y, weights),
        "friend": weights.friend if has_friend else 0.0,
        "enemy": weights.enemy if has_enemy else 0.0,
    }


def score_move(
    board: BoardArray,
    x: int,
    y: int,
    color: Stone,
    weights: Optional[HeuristicWeights] = None,
) -> float:
    return sum(score_breakdown(board, x, y, color, weights).values())


class HeuristicPlayer(Player):
    """Greedy one-ply evaluator: weighted tactical and positional features plus jitter.

    Every candidate that survives the eye and suicide filters is scored; the
    move is drawn uniformly from the candidates sharing the top score. Ko is
    not foreseen here, so callers must be ready for the board to reject the
    chosen point.
    """

    def __init__(
        self,
        weights: Optional[HeuristicWeights] = None,
        *,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        self.weights = weights or HeuristicWeights()
        self.rng = rng or np.random.default_rng()

    def select_move(self, board: BoardArray, color: Stone) -> Optional[Point]:
        best_score = -math.inf
        best_moves: List[Point] = []
        for x, y in candidate_moves(board, color):
            score = score_move(board, x, y, color, self.weights)
            score += self.rng.random() * self.weights.jitter
            if score > best_score:
                best_score = score
                best_moves = [(x, y)]
            elif score == best_score:
                best_moves.append((x, y))

        if not best_moves:
            logger.debug("No candidate move for %s; passing.", color.name)
            return None
        move = best_moves[int(self.rng.integers(len(best_moves)))]
        logger.debug("%s selects %s with score %.2f", color.name, move, best_score)
        return move

    def spawn(self, seed: Optional[int] = None) -> "HeuristicPlayer":
        return HeuristicPlayer(self.weights, rng=np.random.default_rng(seed))
