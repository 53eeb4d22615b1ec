#!/usr/bin/env python3
"""Play 9x9 Go against the heuristic player in the console."""

import argparse
import logging
from typing import Optional, Tuple

import numpy as np

from tengen import GameSession, HeuristicPlayer, MonteCarloScorer, load_config
from tengen.core import GamePhase, Stone, format_board
from tengen.session import TurnOutcome

Command = Tuple[str, Optional[Tuple[int, int]]]


def parse_command(raw: str) -> Command:
    """Turn console input into ``("move", (x, y))``, ``("pass", None)`` and friends.

    Unrecognised input comes back as ``("invalid", None)``.
    """
    text = raw.strip().lower()
    if text in {"q", "quit", "exit"}:
        return "quit", None
    if text in {"p", "pass"}:
        return "pass", None
    if text in {"u", "undo"}:
        return "undo", None
    parts = text.replace(",", " ").split()
    if len(parts) == 2 and all(part.isdigit() for part in parts):
        return "move", (int(parts[0]), int(parts[1]))
    return "invalid", None


def describe_outcome(outcome: TurnOutcome) -> str:
    if not outcome.accepted:
        return f"Rejected: {outcome.rejection.value}"
    if outcome.move is None:
        return "Pass"
    x, y = outcome.move
    text = f"Played ({x}, {y})"
    if outcome.captured:
        text += f", captured {len(outcome.captured)}"
    return text


def render(session: GameSession) -> str:
    lines = [format_board(session.board)]
    lines.append(
        f"Captures  black: {session.captures[Stone.BLACK]}  white: {session.captures[Stone.WHITE]}"
    )
    atari = sorted(session.stones_in_atari())
    if atari:
        lines.append(f"In atari: {atari}")
    lines.append(f"To move: {session.turn.name}")
    return "\n".join(lines)


def play_interactive(args: argparse.Namespace) -> None:
    config = load_config(args.config)
    if args.handicap is not None:
        config.session.handicap = args.handicap
    if args.trials is not None:
        config.scoring.num_trials = args.trials
    rng = np.random.default_rng(args.seed)

    session = GameSession(
        config.session,
        player=HeuristicPlayer(config.heuristic, rng=rng),
        scorer=MonteCarloScorer(config.scoring, rng=rng),
        rng=rng,
    )

    while session.phase == GamePhase.PLAYING:
        print()
        print(render(session))
        if session.is_ai_turn:
            outcome = session.request_automated_move()
            print(f"AI: {describe_outcome(outcome)}")
            continue

        command, point = parse_command(input("x y / pass / undo / quit: "))
        if command == "quit":
            print("Bye.")
            return
        if command == "invalid":
            print("Enter two numbers, 'pass', 'undo' or 'quit'.")
            continue
        if command == "undo":
            undone = session.undo()
            print(f"Undid {undone.undone} move(s).")
            continue
        if command == "pass":
            outcome = session.pass_turn()
        else:
            outcome = session.attempt_move(*point)
        print(describe_outcome(outcome))

    print("\nScoring...")
    result = session.request_scoring()
    print(format_board(result.territory))
    print(f"Black (stones + territory): {result.black_count}")
    print(f"White (stones + territory + komi {result.komi}): {result.white_score}")
    if result.dead_stones:
        print(f"Dead stones: {list(result.dead_stones)}")
    print(f"{result.winner.name} wins by {result.margin}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Play 9x9 Go in the console against the heuristic player.")
    parser.add_argument("--config", type=str, default="configs/engine.yaml")
    parser.add_argument("--handicap", type=int, choices=[0, 2, 3, 4])
    parser.add_argument("--trials", type=int, help="Monte Carlo trials used for scoring")
    parser.add_argument("--seed", type=int)
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)
    play_interactive(args)


if __name__ == "__main__":
    main()
