"""Automated players."""

from .base import Player
from .heuristic import HeuristicPlayer, HeuristicWeights, positional_score, score_breakdown, score_move
from .random_player import RandomPlayer

__all__ = [
    "Player",
    "HeuristicPlayer",
    "HeuristicWeights",
    "positional_score",
    "score_breakdown",
    "score_move",
    "RandomPlayer",
]
