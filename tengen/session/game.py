from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Optional, Set, Tuple

import numpy as np

from tengen.ai import HeuristicPlayer, Player
from tengen.core import (
    HANDICAP_LEVELS,
    BoardArray,
    GamePhase,
    History,
    Point,
    Rejection,
    Snapshot,
    Stone,
    attempt_move,
    find_group,
    new_game,
    next_handicap_level,
    stone_at,
    stones_in_atari,
)
from tengen.scoring import MonteCarloScorer, ScoreResult

logger = logging.getLogger(__name__)

_COLOR_NAMES = {"black": Stone.BLACK, "white": Stone.WHITE}


@dataclass
class SessionConfig:
    handicap: int = 0
    ai_enabled: bool = True
    ai_color: str = "white"

    def __post_init__(self) -> None:
        if self.handicap not in HANDICAP_LEVELS:
            raise ValueError(f"handicap must be one of {HANDICAP_LEVELS}.")
        if self.ai_color not in _COLOR_NAMES:
            raise ValueError("ai_color must be 'black' or 'white'.")

    @property
    def ai_stone(self) -> Stone:
        return _COLOR_NAMES[self.ai_color]


@dataclass(frozen=True)
class TurnOutcome:
    accepted: bool
    move: Optional[Point]  # None for a pass
    captured: Tuple[Point, ...]
    turn: Stone  # side to move next
    phase: GamePhase
    rejection: Optional[Rejection] = None

    @property
    def is_pass(self) -> bool:
        return self.accepted and self.move is None


@dataclass(frozen=True)
class UndoOutcome:
    undone: int
    turn: Stone


class GameSession:
    """One game in progress: the committed board plus everything needed to undo it.

    Only one move may be in flight at a time; callers drive the automated
    player explicitly through :meth:`request_automated_move`.
    """

    def __init__(
        self,
        config: Optional[SessionConfig] = None,
        *,
        player: Optional[Player] = None,
        scorer: Optional[MonteCarloScorer] = None,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        self.config = config or SessionConfig()
        self.rng = rng or np.random.default_rng()
        self.player = player or HeuristicPlayer(rng=self.rng)
        self.scorer = scorer or MonteCarloScorer(rng=self.rng)
        self.ai_enabled = self.config.ai_enabled
        self.ai_color = self.config.ai_stone
        self.history = History()
        self.handicap = self.config.handicap
        self.new_game()

    # ------------------------------------------------------------------
    # Game lifecycle
    # ------------------------------------------------------------------
    def new_game(self, handicap: Optional[int] = None) -> Tuple[BoardArray, Stone]:
        level = self.handicap if handicap is None else handicap
        self.board, self.turn = new_game(level)
        self.handicap = level
        self.captures: Dict[Stone, int] = {Stone.BLACK: 0, Stone.WHITE: 0}
        self.pass_count = 0
        self.phase = GamePhase.PLAYING
        self.dead_stones: Tuple[Point, ...] = ()
        self.last_score: Optional[ScoreResult] = None
        self.history.clear()
        logger.info("New game, handicap %d, %s to move", self.handicap, self.turn.name)
        return self.board.copy(), self.turn

    def cycle_handicap(self) -> int:
        self.new_game(next_handicap_level(self.handicap))
        return self.handicap

    def set_ai_enabled(self, enabled: bool) -> None:
        self.ai_enabled = enabled

    @property
    def human_color(self) -> Stone:
        return self.ai_color.opponent

    @property
    def is_ai_turn(self) -> bool:
        return self.ai_enabled and self.phase == GamePhase.PLAYING and self.turn == self.ai_color

    # ------------------------------------------------------------------
    # Player-facing mutators
    # ------------------------------------------------------------------
    def attempt_move(self, x: int, y: int) -> TurnOutcome:
        if self.phase != GamePhase.PLAYING:
            return self._rejected((x, y), Rejection.NOT_PLAYING)

        previous = self.history.peek()
        result = attempt_move(
            self.board,
            x,
            y,
            self.turn,
            previous.board if previous is not None else None,
        )
        if not result.accepted:
            logger.debug("%s at (%d, %d) rejected: %s", self.turn.name, x, y, result.rejection.value)
            return self._rejected((x, y), result.rejection)

        self.history.push(self.snapshot())
        self.board = result.board
        self.captures[self.turn] += result.captured_count
        self.pass_count = 0
        self.turn = self.turn.opponent
        return TurnOutcome(
            accepted=True,
            move=(x, y),
            captured=result.captured,
            turn=self.turn,
            phase=self.phase,
        )

    def pass_turn(self) -> TurnOutcome:
        if self.phase != GamePhase.PLAYING:
            return self._rejected(None, Rejection.NOT_PLAYING)

        self.history.push(self.snapshot())
        self.pass_count += 1
        if self.pass_count >= 2:
            self.phase = GamePhase.SCORING
            logger.info("Both players passed; game moves to scoring.")
        else:
            self.turn = self.turn.opponent
        return TurnOutcome(accepted=True, move=None, captured=(), turn=self.turn, phase=self.phase)

    def undo(self) -> UndoOutcome:
        """Step back one snapshot, or two when that returns the move to the human.

        Any phase is reset to playing. Empty history is a no-op.
        """
        if not len(self.history):
            return UndoOutcome(undone=0, turn=self.turn)

        steps = 1
        if self.ai_enabled and self.turn == self.human_color and len(self.history) >= 2:
            steps = 2
        undone = min(steps, len(self.history))
        self._restore(self.history.undo(steps))
        return UndoOutcome(undone=undone, turn=self.turn)

    def request_automated_move(self) -> TurnOutcome:
        """Let the automated player move for the side to play.

        A point the board refuses (typically ko) turns into a pass instead of
        a second search.
        """
        if self.phase != GamePhase.PLAYING:
            return self._rejected(None, Rejection.NOT_PLAYING)

        move = self.player.select_move(self.board, self.turn)
        if move is None:
            return self.pass_turn()
        outcome = self.attempt_move(*move)
        if not outcome.accepted:
            logger.info("Automated move %s rejected (%s); passing.", move, outcome.rejection.value)
            return self.pass_turn()
        return outcome

    def request_scoring(self) -> ScoreResult:
        if self.phase == GamePhase.PLAYING:
            raise ValueError("Scoring requires both players to pass first.")
        if self.phase == GamePhase.ENDED and self.last_score is not None:
            return self.last_score

        result = self.scorer.score(self.board, self.turn, self.handicap > 0)
        self.phase = GamePhase.ENDED
        self.dead_stones = result.dead_stones
        self.last_score = result
        return result

    # ------------------------------------------------------------------
    # Read-only queries
    # ------------------------------------------------------------------
    def snapshot(self) -> Snapshot:
        return Snapshot.capture(
            self.board,
            self.turn,
            (self.captures[Stone.BLACK], self.captures[Stone.WHITE]),
            self.pass_count,
        )

    def group_at(self, x: int, y: int) -> Set[Point]:
        if stone_at(self.board, x, y) == Stone.EMPTY:
            return set()
        return find_group(self.board, x, y)

    def stones_in_atari(self) -> Set[Point]:
        return stones_in_atari(self.board)

    # ------------------------------------------------------------------
    def _restore(self, snapshot: Snapshot) -> None:
        self.board = snapshot.board.copy()
        self.turn = snapshot.turn
        self.captures = {Stone.BLACK: snapshot.captures[0], Stone.WHITE: snapshot.captures[1]}
        self.pass_count = snapshot.pass_count
        self.phase = GamePhase.PLAYING
        self.dead_stones = ()
        self.last_score = None

    def _rejected(self, move: Optional[Point], rejection: Rejection) -> TurnOutcome:
        return TurnOutcome(
            accepted=False,
            move=move,
            captured=(),
            turn=self.turn,
            phase=self.phase,
            rejection=rejection,
        )
