import numpy as np

from tengen import GameSession, SessionConfig
from tengen.core import Rejection

from scripts.play_vs_ai import describe_outcome, parse_command, render


def test_parse_command():
    assert parse_command("3 4") == ("move", (3, 4))
    assert parse_command(" 0,8 ") == ("move", (0, 8))
    assert parse_command("PASS") == ("pass", None)
    assert parse_command("u") == ("undo", None)
    assert parse_command("quit") == ("quit", None)
    assert parse_command("a b") == ("invalid", None)
    assert parse_command("1 2 3") == ("invalid", None)


def test_describe_outcomes():
    session = GameSession(SessionConfig(ai_enabled=False), rng=np.random.default_rng(0))

    assert describe_outcome(session.attempt_move(4, 4)) == "Played (4, 4)"
    assert describe_outcome(session.attempt_move(4, 4)) == f"Rejected: {Rejection.OCCUPIED.value}"
    assert describe_outcome(session.pass_turn()) == "Pass"


def test_render_reports_turn_and_atari():
    session = GameSession(SessionConfig(ai_enabled=False), rng=np.random.default_rng(0))
    session.attempt_move(0, 0)
    session.attempt_move(1, 0)

    text = render(session)

    assert "To move: BLACK" in text
    assert "In atari: [(0, 0)]" in text
