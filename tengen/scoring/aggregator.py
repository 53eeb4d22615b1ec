from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import List, Optional, Set, Tuple

import numpy as np

from tengen.core import (
    BOARD_SIZE,
    HANDICAP_KOMI,
    KOMI,
    BoardArray,
    Point,
    Stone,
    empty_region,
    komi_for,
)

from .playout import MAX_PLAYOUT_MOVES, run_playout

logger = logging.getLogger(__name__)


@dataclass
class ScoringConfig:
    num_trials: int = 200
    max_moves: int = MAX_PLAYOUT_MOVES
    ownership_threshold: float = 0.2
    workers: int = 1
    komi: float = KOMI
    handicap_komi: float = HANDICAP_KOMI

    def __post_init__(self) -> None:
        if self.num_trials < 1:
            raise ValueError("num_trials must be at least 1.")
        if self.workers < 1:
            raise ValueError("workers must be at least 1.")
        if self.max_moves < 0:
            raise ValueError("max_moves must be non-negative.")
        if not 0.0 <= self.ownership_threshold < 1.0:
            raise ValueError("ownership_threshold must be in [0, 1).")


@dataclass(frozen=True)
class ScoreResult:
    territory: BoardArray  # final owner per cell: 0 neutral, 1 black, 2 white
    votes: np.ndarray  # signed per-cell vote totals, positive leans black
    dead_stones: Tuple[Point, ...]
    black_count: int
    white_count: int
    komi: float
    white_score: float
    winner: Stone
    trials: int

    @property
    def neutral_count(self) -> int:
        return BOARD_SIZE * BOARD_SIZE - self.black_count - self.white_count

    @property
    def margin(self) -> float:
        return abs(self.black_count - self.white_score)


def ownership_votes(board: BoardArray) -> np.ndarray:
    """One trial's vote: stones vote for their colour, empty regions for their sole bordering colour."""
    votes = np.zeros((BOARD_SIZE, BOARD_SIZE), dtype=np.int32)
    votes[board == Stone.BLACK] = 1
    votes[board == Stone.WHITE] = -1

    seen: Set[Point] = set()
    for y, x in np.argwhere(board == Stone.EMPTY):
        point = (int(x), int(y))
        if point in seen:
            continue
        region, borders = empty_region(board, *point)
        seen.update(region)
        if len(borders) != 1:
            continue
        sign = 1 if Stone.BLACK in borders else -1
        for rx, ry in region:
            votes[ry, rx] = sign
    return votes


def classify_ownership(
    votes: np.ndarray,
    original: BoardArray,
    trials: int,
    threshold: float,
) -> Tuple[BoardArray, Tuple[Point, ...]]:
    """Threshold vote totals into owners; undecided cells keep their original occupant."""
    limit = trials * threshold
    territory = original.astype(np.int8, copy=True)
    territory[votes > limit] = Stone.BLACK
    territory[votes < -limit] = Stone.WHITE

    dead = (original != Stone.EMPTY) & (territory != original)
    dead_stones = tuple(sorted((int(x), int(y)) for y, x in np.argwhere(dead)))
    return territory, dead_stones


def _split_trials(trials: int, workers: int) -> List[int]:
    counts = [trials // workers] * workers
    for i in range(trials % workers):
        counts[i] += 1
    return [count for count in counts if count > 0]


class MonteCarloScorer:
    """Area scoring by majority ownership over random playouts.

    Trials are independent; with ``workers > 1`` they are spread over a
    thread pool, each worker drawing from its own generator, and the
    per-worker vote arrays are summed.
    """

    def __init__(
        self,
        config: Optional[ScoringConfig] = None,
        *,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        self.config = config or ScoringConfig()
        self.rng = rng or np.random.default_rng()

    def accumulate_votes(self, board: BoardArray, turn: Stone) -> np.ndarray:
        counts = _split_trials(self.config.num_trials, self.config.workers)
        if len(counts) == 1:
            return self._run_trials(board, turn, counts[0], self.rng)

        totals = np.zeros((BOARD_SIZE, BOARD_SIZE), dtype=np.int32)
        with ThreadPoolExecutor(max_workers=len(counts)) as executor:
            futures = []
            for count in counts:
                seed = int(self.rng.integers(2**32))
                futures.append(
                    executor.submit(self._run_trials, board, turn, count, np.random.default_rng(seed))
                )
            for future in futures:
                totals += future.result()
        return totals

    def score(self, board: BoardArray, turn: Stone, handicap_active: bool) -> ScoreResult:
        original = board.copy()
        votes = self.accumulate_votes(original, turn)
        territory, dead_stones = classify_ownership(
            votes,
            original,
            self.config.num_trials,
            self.config.ownership_threshold,
        )

        black_count = int(np.count_nonzero(territory == Stone.BLACK))
        white_count = int(np.count_nonzero(territory == Stone.WHITE))
        komi = komi_for(
            handicap_active,
            komi=self.config.komi,
            handicap_komi=self.config.handicap_komi,
        )
        white_score = white_count + komi
        winner = Stone.BLACK if black_count > white_score else Stone.WHITE
        logger.info(
            "Scored %d trials: black %d, white %.2f (komi %.2f), %d dead stones",
            self.config.num_trials,
            black_count,
            white_score,
            komi,
            len(dead_stones),
        )
        return ScoreResult(
            territory=territory,
            votes=votes,
            dead_stones=dead_stones,
            black_count=black_count,
            white_count=white_count,
            komi=komi,
            white_score=white_score,
            winner=winner,
            trials=self.config.num_trials,
        )

    # ------------------------------------------------------------------
    def _run_trials(
        self,
        board: BoardArray,
        turn: Stone,
        count: int,
        rng: np.random.Generator,
    ) -> np.ndarray:
        votes = np.zeros((BOARD_SIZE, BOARD_SIZE), dtype=np.int32)
        budget_hits = 0
        for _ in range(count):
            result = run_playout(board, turn, rng=rng, max_moves=self.config.max_moves)
            budget_hits += int(result.budget_exceeded)
            votes += ownership_votes(result.board)
        if budget_hits:
            logger.debug("%d of %d playouts hit the move ceiling.", budget_hits, count)
        return votes


def score(
    board: BoardArray,
    turn: Stone,
    handicap_active: bool,
    *,
    config: Optional[ScoringConfig] = None,
    rng: Optional[np.random.Generator] = None,
) -> ScoreResult:
    return MonteCarloScorer(config, rng=rng).score(board, turn, handicap_active)
