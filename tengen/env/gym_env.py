from __future__ import annotations

from typing import Dict, Optional

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from tengen.ai import HeuristicPlayer, HeuristicWeights, Player
from tengen.core import BOARD_SIZE, GamePhase, Point, Stone, attempt_move, format_board
from tengen.scoring import MonteCarloScorer, ScoringConfig
from tengen.session import GameSession, SessionConfig

PASS_ACTION = BOARD_SIZE * BOARD_SIZE
ACTION_SIZE = PASS_ACTION + 1
OBSERVATION_CHANNELS = 3


def encode_point(point: Optional[Point]) -> int:
    if point is None:
        return PASS_ACTION
    x, y = point
    return y * BOARD_SIZE + x


def decode_action(index: int) -> Optional[Point]:
    if not 0 <= index < ACTION_SIZE:
        raise ValueError(f"Action index {index} out of range.")
    if index == PASS_ACTION:
        return None
    return index % BOARD_SIZE, index // BOARD_SIZE


def build_board_planes(board: np.ndarray, color: Stone) -> np.ndarray:
    planes = np.zeros((OBSERVATION_CHANNELS, BOARD_SIZE, BOARD_SIZE), dtype=np.float32)
    planes[0] = board == color
    planes[1] = board == color.opponent
    planes[2] = board == Stone.EMPTY
    return planes


class TengenEnv(gym.Env):
    """Single-agent environment: the agent plays one colour against an automated opponent.

    The opponent replies inside :meth:`step`. The episode terminates once both
    sides pass; the final position is then scored by Monte Carlo playouts and
    the reward is +1 for an agent win, -1 otherwise.
    """

    metadata = {"render_modes": ["ansi"], "render_fps": 4}

    def __init__(
        self,
        *,
        agent_color: str = "black",
        handicap: int = 0,
        max_ply: int = 200,
        scoring_config: Optional[ScoringConfig] = None,
        opponent_weights: Optional[HeuristicWeights] = None,
        opponent: Optional[Player] = None,
        enforce_legal_actions: bool = True,
        render_mode: Optional[str] = None,
    ) -> None:
        super().__init__()
        if agent_color not in ("black", "white"):
            raise ValueError("agent_color must be 'black' or 'white'.")
        self._agent_color = Stone.BLACK if agent_color == "black" else Stone.WHITE
        self._handicap = handicap
        self._max_ply = max_ply
        self._scoring_config = scoring_config or ScoringConfig()
        self._opponent_weights = opponent_weights
        self._opponent = opponent
        self._enforce_legal = enforce_legal_actions
        self.render_mode = render_mode

        self.observation_space = spaces.Box(
            low=0.0,
            high=1.0,
            shape=(OBSERVATION_CHANNELS, BOARD_SIZE, BOARD_SIZE),
            dtype=np.float32,
        )
        self.action_space = spaces.Discrete(ACTION_SIZE)

        self._session = self._make_session(np.random.default_rng())
        self._ply = 0

    @property
    def session(self) -> GameSession:
        return self._session

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict] = None):
        super().reset(seed=seed)
        self._session = self._make_session(self.np_random)
        self._ply = 0
        self._advance_opponent()
        return self._build_observation(), self._build_info()

    def step(self, action_index: int):
        if not self.action_space.contains(action_index):
            raise ValueError(f"Action index {action_index} out of bounds.")
        if self._session.phase != GamePhase.PLAYING:
            raise ValueError("Episode has finished; call reset().")

        legal_mask = self.legal_action_mask()
        if self._enforce_legal and not legal_mask[action_index]:
            raise ValueError("Illegal action provided and enforce_legal_actions=True.")

        point = decode_action(int(action_index))
        if point is None or not legal_mask[action_index]:
            self._session.pass_turn()
        else:
            self._session.attempt_move(*point)
        self._ply += 1
        self._advance_opponent()

        terminated = self._session.phase != GamePhase.PLAYING
        truncated = not terminated and self._ply >= self._max_ply
        reward = 0.0
        info = self._build_info()
        if terminated:
            result = self._session.request_scoring()
            reward = 1.0 if result.winner == self._agent_color else -1.0
            info["score"] = result
        return self._build_observation(), reward, terminated, truncated, info

    def legal_action_mask(self) -> np.ndarray:
        mask = np.zeros(self.action_space.n, dtype=np.int8)
        session = self._session
        if session.phase != GamePhase.PLAYING:
            return mask
        previous = session.history.peek()
        previous_board = previous.board if previous is not None else None
        for y, x in np.argwhere(session.board == Stone.EMPTY):
            result = attempt_move(session.board, int(x), int(y), session.turn, previous_board)
            if result.accepted:
                mask[encode_point((int(x), int(y)))] = 1
        mask[PASS_ACTION] = 1
        return mask

    def render(self):
        if self.render_mode != "ansi":
            raise NotImplementedError("Only 'ansi' render mode is supported.")
        return format_board(self._session.board)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _make_session(self, rng: np.random.Generator) -> GameSession:
        opponent = self._opponent or HeuristicPlayer(self._opponent_weights, rng=rng)
        config = SessionConfig(
            handicap=self._handicap,
            ai_enabled=True,
            ai_color=self._agent_color.opponent.name.lower(),
        )
        return GameSession(
            config,
            player=opponent,
            scorer=MonteCarloScorer(self._scoring_config, rng=rng),
            rng=rng,
        )

    def _advance_opponent(self) -> None:
        if self._session.is_ai_turn:
            self._session.request_automated_move()

    def _build_observation(self) -> np.ndarray:
        return build_board_planes(self._session.board, self._agent_color)

    def _build_info(self) -> Dict[str, object]:
        return {
            "legal_action_mask": self.legal_action_mask(),
            "turn": self._session.turn,
            "captures": dict(self._session.captures),
        }
