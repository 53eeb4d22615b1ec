"""Monte Carlo playouts and area scoring."""

from .playout import MAX_PLAYOUT_MOVES, PlayoutResult, run_playout, simulate_move
from .aggregator import (
    MonteCarloScorer,
    ScoreResult,
    ScoringConfig,
    classify_ownership,
    ownership_votes,
    score,
)

__all__ = [
    "MAX_PLAYOUT_MOVES",
    "PlayoutResult",
    "run_playout",
    "simulate_move",
    "MonteCarloScorer",
    "ScoreResult",
    "ScoringConfig",
    "classify_ownership",
    "ownership_votes",
    "score",
]
