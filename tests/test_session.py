import numpy as np
import pytest

from tengen.ai import Player
from tengen.core import GamePhase, Rejection, Stone
from tengen.scoring import MonteCarloScorer, ScoringConfig
from tengen.session import GameSession, SessionConfig


class FixedPlayer(Player):
    def __init__(self, move):
        self.move = move

    def select_move(self, board, color):
        return self.move


def quick_scorer(seed: int = 0) -> MonteCarloScorer:
    return MonteCarloScorer(ScoringConfig(num_trials=4, max_moves=20), rng=np.random.default_rng(seed))


def human_session(**kwargs) -> GameSession:
    return GameSession(
        SessionConfig(ai_enabled=False, **kwargs),
        scorer=quick_scorer(),
        rng=np.random.default_rng(0),
    )


def play(session: GameSession, *moves):
    outcomes = [session.attempt_move(x, y) for x, y in moves]
    assert all(outcome.accepted for outcome in outcomes)
    return outcomes


def setup_ko(session: GameSession) -> None:
    board = session.board
    for x, y in [(1, 0), (0, 1), (1, 2)]:
        board[y, x] = Stone.BLACK
    for x, y in [(2, 0), (1, 1), (3, 1), (2, 2)]:
        board[y, x] = Stone.WHITE


def test_new_game_defaults() -> None:
    session = human_session()

    assert session.turn == Stone.BLACK
    assert session.phase == GamePhase.PLAYING
    assert not session.board.any()
    assert len(session.history) == 0


def test_centre_move_end_to_end() -> None:
    session = human_session()

    outcome = session.attempt_move(4, 4)

    assert outcome.accepted
    assert outcome.captured == ()
    assert outcome.turn == Stone.WHITE
    assert np.count_nonzero(session.board) == 1
    assert session.captures == {Stone.BLACK: 0, Stone.WHITE: 0}


def test_surrounded_white_stone_is_captured() -> None:
    session = human_session()
    play(session, (0, 1), (1, 1), (2, 1), (8, 8), (1, 0), (8, 7))

    outcome = session.attempt_move(1, 2)

    assert outcome.captured == ((1, 1),)
    assert session.board[1, 1] == Stone.EMPTY
    assert session.captures[Stone.BLACK] == 1


def test_rejected_move_changes_nothing() -> None:
    session = human_session()
    play(session, (1, 0), (8, 8), (0, 1))
    before = session.board.copy()

    outcome = session.attempt_move(0, 0)

    assert outcome.rejection == Rejection.SUICIDE
    assert outcome.turn == Stone.WHITE
    assert np.array_equal(session.board, before)
    assert len(session.history) == 3


def test_ko_is_rejected_until_another_move_is_played() -> None:
    session = human_session()
    setup_ko(session)
    play(session, (2, 1))

    assert session.attempt_move(1, 1).rejection == Rejection.KO

    play(session, (8, 8), (8, 0))
    outcome = session.attempt_move(1, 1)
    assert outcome.accepted
    assert outcome.captured == ((2, 1),)


def test_handicap_session_starts_with_white() -> None:
    session = human_session(handicap=3)

    assert session.turn == Stone.WHITE
    assert {(x, y) for y, x in np.argwhere(session.board == Stone.BLACK)} == {(6, 2), (2, 6), (4, 4)}


def test_cycle_handicap() -> None:
    session = human_session()

    levels = [session.cycle_handicap() for _ in range(4)]

    assert levels == [2, 3, 4, 0]
    assert session.turn == Stone.BLACK


def test_unknown_handicap_keeps_current_game() -> None:
    session = human_session(handicap=2)
    session.attempt_move(4, 4)
    board = session.board.copy()

    with pytest.raises(ValueError):
        session.new_game(5)

    assert session.handicap == 2
    assert np.array_equal(session.board, board)
    assert session.cycle_handicap() == 3


def test_two_passes_move_to_scoring() -> None:
    session = human_session()

    first = session.pass_turn()
    second = session.pass_turn()

    assert first.is_pass and first.phase == GamePhase.PLAYING
    assert second.phase == GamePhase.SCORING
    assert session.attempt_move(4, 4).rejection == Rejection.NOT_PLAYING


def test_move_resets_pass_counter() -> None:
    session = human_session()
    session.pass_turn()
    play(session, (4, 4))
    session.pass_turn()

    assert session.phase == GamePhase.PLAYING
    assert session.pass_count == 1


def test_scoring_requires_two_passes() -> None:
    session = human_session()

    with pytest.raises(ValueError):
        session.request_scoring()


def test_scoring_ends_game() -> None:
    session = human_session()
    session.board[:, :] = Stone.BLACK
    session.board[0, 0] = Stone.EMPTY
    session.board[4, 4] = Stone.EMPTY
    session.pass_turn()
    session.pass_turn()

    result = session.request_scoring()

    assert session.phase == GamePhase.ENDED
    assert result.winner == Stone.BLACK
    assert session.request_scoring() is result
    assert session.request_automated_move().rejection == Rejection.NOT_PLAYING


def test_undo_after_scoring_resumes_play() -> None:
    session = human_session()
    session.pass_turn()
    session.pass_turn()
    session.request_scoring()

    undone = session.undo()

    assert undone.undone == 1
    assert session.phase == GamePhase.PLAYING
    assert session.last_score is None


def test_undo_restores_captures() -> None:
    session = human_session()
    play(session, (0, 1), (1, 1), (2, 1), (8, 8), (1, 0), (8, 7), (1, 2))

    outcome = session.undo()

    assert outcome.undone == 1
    assert session.board[1, 1] == Stone.WHITE
    assert session.captures[Stone.BLACK] == 0
    assert session.turn == Stone.BLACK


def test_undo_on_empty_history_is_noop() -> None:
    session = human_session()

    outcome = session.undo()

    assert outcome.undone == 0
    assert outcome.turn == Stone.BLACK


def test_undo_returns_turn_to_human_against_ai() -> None:
    session = GameSession(rng=np.random.default_rng(0), scorer=quick_scorer())
    play(session, (4, 4))
    assert session.is_ai_turn
    assert session.request_automated_move().accepted

    outcome = session.undo()

    assert outcome.undone == 2
    assert session.turn == Stone.BLACK
    assert not session.board.any()


def test_undo_single_step_when_ai_to_move() -> None:
    session = GameSession(rng=np.random.default_rng(0), scorer=quick_scorer())
    play(session, (4, 4))

    outcome = session.undo()

    assert outcome.undone == 1
    assert session.turn == Stone.BLACK


def test_automated_move_falls_back_to_pass_on_ko() -> None:
    session = GameSession(
        SessionConfig(ai_enabled=True),
        player=FixedPlayer((1, 1)),
        scorer=quick_scorer(),
    )
    setup_ko(session)
    play(session, (2, 1))

    outcome = session.request_automated_move()

    assert outcome.is_pass
    assert session.pass_count == 1
    assert session.turn == Stone.BLACK


def test_automated_pass_when_player_has_no_move() -> None:
    session = GameSession(player=FixedPlayer(None), scorer=quick_scorer())
    play(session, (4, 4))

    outcome = session.request_automated_move()

    assert outcome.is_pass
    assert outcome.turn == Stone.BLACK


def test_group_and_atari_queries() -> None:
    session = human_session()
    play(session, (0, 0), (1, 0), (4, 4), (5, 5))

    assert session.group_at(0, 0) == {(0, 0)}
    assert session.group_at(3, 3) == set()
    assert session.stones_in_atari() == {(0, 0)}


def test_invalid_session_config() -> None:
    with pytest.raises(ValueError):
        SessionConfig(handicap=1)
    with pytest.raises(ValueError):
        SessionConfig(ai_color="red")
