"""Tengen: 9x9 Go rules engine, heuristic player and Monte Carlo scoring."""

from . import ai, core, env, evaluation, scoring, session
from .ai import HeuristicPlayer, HeuristicWeights, Player, RandomPlayer
from .config import EngineConfig, load_config
from .core import (
    BOARD_SIZE,
    GamePhase,
    MoveResult,
    Rejection,
    Stone,
    attempt_move,
    count_liberties,
    find_group,
    new_game,
)
from .env import TengenEnv
from .evaluation import EvaluationResult, evaluate_players
from .scoring import MonteCarloScorer, ScoreResult, ScoringConfig, score
from .session import GameSession, SessionConfig, TurnOutcome, UndoOutcome

__all__ = [
    "ai",
    "core",
    "env",
    "evaluation",
    "scoring",
    "session",
    "HeuristicPlayer",
    "HeuristicWeights",
    "Player",
    "RandomPlayer",
    "EngineConfig",
    "load_config",
    "BOARD_SIZE",
    "GamePhase",
    "MoveResult",
    "Rejection",
    "Stone",
    "attempt_move",
    "count_liberties",
    "find_group",
    "new_game",
    "TengenEnv",
    "EvaluationResult",
    "evaluate_players",
    "MonteCarloScorer",
    "ScoreResult",
    "ScoringConfig",
    "score",
    "GameSession",
    "SessionConfig",
    "TurnOutcome",
    "UndoOutcome",
]
