#!/usr/bin/env python3
"""Pit the heuristic player against a random baseline and report the results."""

import argparse
import json
import logging

import numpy as np

from tengen import HeuristicPlayer, RandomPlayer, evaluate_players, load_config


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--config", type=str, default="configs/engine.yaml")
    parser.add_argument("--episodes", type=int, default=10)
    parser.add_argument("--max-moves", type=int, default=200)
    parser.add_argument("--trials", type=int)
    parser.add_argument("--workers", type=int)
    parser.add_argument("--heuristic-color", choices=["black", "white"], default="white")
    parser.add_argument("--seed", type=int, default=0)
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.INFO)

    config = load_config(args.config)
    if args.trials is not None:
        config.scoring.num_trials = args.trials
    if args.workers is not None:
        config.scoring.workers = args.workers

    rng = np.random.default_rng(args.seed)
    heuristic = HeuristicPlayer(config.heuristic, rng=rng)
    baseline = RandomPlayer(rng)
    if args.heuristic_color == "black":
        black, white = heuristic, baseline
    else:
        black, white = baseline, heuristic

    result = evaluate_players(
        black,
        white,
        episodes=args.episodes,
        handicap=config.session.handicap,
        max_moves=args.max_moves,
        scoring_config=config.scoring,
        seed=args.seed,
    )

    output = {
        "games": result.games_played,
        "heuristic_color": args.heuristic_color,
        "black_wins": result.black_wins,
        "white_wins": result.white_wins,
        "black_winrate": result.winrate_black(),
        "white_winrate": result.winrate_white(),
        "average_length": result.average_length,
        "average_margin": result.average_margin,
    }
    print(json.dumps(output, indent=2))


if __name__ == "__main__":
    main()
