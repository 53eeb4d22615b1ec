import numpy as np
import pytest

from tengen.core import Stone, empty_board
from tengen.scoring import (
    MonteCarloScorer,
    ScoringConfig,
    classify_ownership,
    ownership_votes,
    score,
)


def place(board, color, *points):
    for x, y in points:
        board[y, x] = color
    return board


def solid_board(color: Stone) -> np.ndarray:
    board = np.full((9, 9), color, dtype=np.int8)
    board[0, 0] = Stone.EMPTY
    board[4, 4] = Stone.EMPTY
    return board


def test_ownership_votes_for_stones_and_regions() -> None:
    board = place(empty_board(), Stone.BLACK, *[(2, y) for y in range(9)])
    place(board, Stone.WHITE, (6, 6))

    votes = ownership_votes(board)

    assert votes.dtype == np.int32
    assert votes[0, 0] == 1  # left region only touches black
    assert votes[3, 2] == 1
    assert votes[6, 6] == -1
    assert votes[5, 5] == 0  # right region touches both colours


def test_classify_uses_strict_threshold_and_keeps_undecided_cells() -> None:
    original = empty_board()
    place(original, Stone.WHITE, (0, 0), (1, 0))
    place(original, Stone.BLACK, (2, 0))
    votes = np.zeros((9, 9), dtype=np.int32)
    votes[0, 0] = 3  # white stone overturned by black votes
    votes[0, 1] = 2  # exactly at the limit: undecided
    votes[0, 2] = -5  # black stone overturned by white votes
    votes[5, 5] = -3

    territory, dead = classify_ownership(votes, original, trials=10, threshold=0.2)

    assert territory[0, 0] == Stone.BLACK
    assert territory[0, 1] == Stone.WHITE
    assert territory[0, 2] == Stone.WHITE
    assert territory[5, 5] == Stone.WHITE
    assert territory[8, 8] == Stone.EMPTY
    assert dead == ((0, 0), (2, 0))


def test_decided_position_scores_all_black() -> None:
    result = score(
        solid_board(Stone.BLACK),
        Stone.WHITE,
        False,
        config=ScoringConfig(num_trials=10),
        rng=np.random.default_rng(0),
    )

    assert result.black_count == 81
    assert result.white_count == 0
    assert result.white_score == 3.75
    assert result.winner == Stone.BLACK
    assert result.dead_stones == ()
    assert np.all(result.votes == 10)


def test_winner_is_stable_across_runs() -> None:
    board = solid_board(Stone.WHITE)
    scorer = MonteCarloScorer(ScoringConfig(num_trials=20), rng=np.random.default_rng(4))

    first = scorer.score(board, Stone.BLACK, False)
    second = scorer.score(board, Stone.BLACK, False)

    assert first.winner == second.winner == Stone.WHITE


def test_handicap_komi_is_applied() -> None:
    result = score(
        solid_board(Stone.WHITE),
        Stone.BLACK,
        True,
        config=ScoringConfig(num_trials=5),
        rng=np.random.default_rng(0),
    )

    assert result.komi == 0.5
    assert result.white_score == 81.5
    assert result.margin == 81.5


def test_lone_stone_in_enemy_territory_is_dead() -> None:
    board = solid_board(Stone.BLACK)
    board[8, 8] = Stone.WHITE
    board[7, 8] = Stone.EMPTY

    result = score(board, Stone.WHITE, False, config=ScoringConfig(num_trials=10), rng=np.random.default_rng(0))

    assert result.dead_stones == ((8, 8),)
    assert result.territory[8, 8] == Stone.BLACK
    assert result.black_count == 81


def test_counts_cover_the_board() -> None:
    board = empty_board()
    place(board, Stone.BLACK, (2, 2), (2, 3), (3, 2), (6, 6))
    place(board, Stone.WHITE, (6, 2), (5, 2), (2, 6))

    result = score(board, Stone.BLACK, False, config=ScoringConfig(num_trials=8, max_moves=40), rng=np.random.default_rng(1))

    assert result.black_count + result.white_count + result.neutral_count == 81
    assert result.trials == 8
    for x, y in result.dead_stones:
        assert board[y, x] != Stone.EMPTY
        assert result.territory[y, x] != board[y, x]


def test_parallel_workers_sum_all_trials() -> None:
    config = ScoringConfig(num_trials=7, workers=3)
    scorer = MonteCarloScorer(config, rng=np.random.default_rng(0))

    votes = scorer.accumulate_votes(solid_board(Stone.BLACK), Stone.WHITE)

    assert np.all(votes == 7)


def test_more_workers_than_trials() -> None:
    scorer = MonteCarloScorer(ScoringConfig(num_trials=2, workers=4), rng=np.random.default_rng(0))

    votes = scorer.accumulate_votes(solid_board(Stone.WHITE), Stone.BLACK)

    assert np.all(votes == -2)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"num_trials": 0},
        {"workers": 0},
        {"max_moves": -1},
        {"ownership_threshold": 1.0},
    ],
)
def test_invalid_scoring_config(kwargs) -> None:
    with pytest.raises(ValueError):
        ScoringConfig(**kwargs)
