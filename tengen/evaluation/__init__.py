"""Evaluation helpers for automated players."""

from .match import EvaluationResult, evaluate_players, play_game

__all__ = ["EvaluationResult", "evaluate_players", "play_game"]
