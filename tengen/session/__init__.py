"""Game session API consumed by front-ends."""

from .game import GameSession, SessionConfig, TurnOutcome, UndoOutcome

__all__ = ["GameSession", "SessionConfig", "TurnOutcome", "UndoOutcome"]
