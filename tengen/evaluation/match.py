from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np

from tengen.ai import Player
from tengen.core import GamePhase, Stone
from tengen.scoring import MonteCarloScorer, ScoringConfig
from tengen.session import GameSession, SessionConfig

logger = logging.getLogger(__name__)


@dataclass
class EvaluationResult:
    games_played: int
    black_wins: int
    white_wins: int
    average_length: float
    average_margin: float

    def winrate_black(self) -> float:
        return self.black_wins / max(1, self.games_played)

    def winrate_white(self) -> float:
        return self.white_wins / max(1, self.games_played)


def play_game(
    session: GameSession,
    black: Player,
    white: Player,
    *,
    max_moves: int = 200,
) -> int:
    """Alternate the two players until both pass or ``max_moves`` plies; return the ply count."""
    plies = 0
    while session.phase == GamePhase.PLAYING and plies < max_moves:
        player = black if session.turn == Stone.BLACK else white
        move = player.select_move(session.board, session.turn)
        if move is None:
            session.pass_turn()
        else:
            outcome = session.attempt_move(*move)
            if not outcome.accepted:
                session.pass_turn()
        plies += 1

    # A game cut off by the move cap is scored from where it stands.
    while session.phase == GamePhase.PLAYING:
        session.pass_turn()
    return plies


def evaluate_players(
    black: Player,
    white: Player,
    *,
    episodes: int,
    handicap: int = 0,
    max_moves: int = 200,
    scoring_config: Optional[ScoringConfig] = None,
    seed: Optional[int] = None,
) -> EvaluationResult:
    rng = np.random.default_rng(seed)
    scoring_config = scoring_config or ScoringConfig()

    black_wins = 0
    white_wins = 0
    total_plies = 0
    total_margin = 0.0

    for episode in range(episodes):
        # Players are reseeded from `seed` for every episode.
        episode_black = black.spawn(int(rng.integers(2**32)))
        episode_white = white.spawn(int(rng.integers(2**32)))
        session = GameSession(
            SessionConfig(handicap=handicap, ai_enabled=False),
            player=episode_white,
            scorer=MonteCarloScorer(scoring_config, rng=rng),
            rng=rng,
        )
        total_plies += play_game(session, episode_black, episode_white, max_moves=max_moves)
        result = session.request_scoring()
        total_margin += result.margin
        if result.winner == Stone.BLACK:
            black_wins += 1
        else:
            white_wins += 1
        logger.debug("Game %d won by %s by %.2f", episode + 1, result.winner.name, result.margin)

    return EvaluationResult(
        games_played=episodes,
        black_wins=black_wins,
        white_wins=white_wins,
        average_length=total_plies / max(1, episodes),
        average_margin=total_margin / max(1, episodes),
    )
