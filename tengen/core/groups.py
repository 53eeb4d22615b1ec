"""Group, liberty and territory analysis over a board snapshot.

Every function here is a pure function of its arguments: boards are read,
never written, and any working copy is private to the call.
"""

from __future__ import annotations

from collections import deque
from typing import Dict, FrozenSet, List, Set, Tuple

import numpy as np

from .state import BOARD_SIZE, BoardArray, Point, Stone, check_bounds

DIRECTIONS: Tuple[Tuple[int, int], ...] = ((0, 1), (0, -1), (1, 0), (-1, 0))


def _build_neighbor_table() -> Dict[Point, Tuple[Point, ...]]:
    table: Dict[Point, Tuple[Point, ...]] = {}
    for y in range(BOARD_SIZE):
        for x in range(BOARD_SIZE):
            table[(x, y)] = tuple(
                (x + dx, y + dy)
                for dx, dy in DIRECTIONS
                if 0 <= x + dx < BOARD_SIZE and 0 <= y + dy < BOARD_SIZE
            )
    return table


NEIGHBORS = _build_neighbor_table()


def neighbors(x: int, y: int) -> Tuple[Point, ...]:
    check_bounds(x, y)
    return NEIGHBORS[(x, y)]


def find_group(board: BoardArray, x: int, y: int) -> Set[Point]:
    """Return the 4-connected set of same-coloured stones containing ``(x, y)``."""
    check_bounds(x, y)
    color = board[y, x]
    if color == Stone.EMPTY:
        raise ValueError(f"No stone at ({x}, {y}); an empty cell has no group.")

    group: Set[Point] = {(x, y)}
    queue = deque([(x, y)])
    while queue:
        cx, cy = queue.popleft()
        for nx, ny in NEIGHBORS[(cx, cy)]:
            if board[ny, nx] == color and (nx, ny) not in group:
                group.add((nx, ny))
                queue.append((nx, ny))
    return group


def group_liberties(board: BoardArray, group: Set[Point]) -> Set[Point]:
    liberties: Set[Point] = set()
    for x, y in group:
        for nx, ny in NEIGHBORS[(x, y)]:
            if board[ny, nx] == Stone.EMPTY:
                liberties.add((nx, ny))
    return liberties


def count_liberties(board: BoardArray, group: Set[Point]) -> int:
    return len(group_liberties(board, group))


def stones_in_atari(board: BoardArray) -> Set[Point]:
    """Every stone whose group is down to a single liberty."""
    in_atari: Set[Point] = set()
    seen: Set[Point] = set()
    for y, x in np.argwhere(board != Stone.EMPTY):
        point = (int(x), int(y))
        if point in seen:
            continue
        group = find_group(board, *point)
        seen.update(group)
        if count_liberties(board, group) == 1:
            in_atari.update(group)
    return in_atari


def captured_by(board: BoardArray, x: int, y: int, color: Stone) -> Set[Point]:
    """Opponent stones adjacent to ``(x, y)`` left without liberties.

    ``board`` must already hold ``color`` at ``(x, y)``.
    """
    opponent = color.opponent
    captured: Set[Point] = set()
    for nx, ny in NEIGHBORS[(x, y)]:
        if board[ny, nx] != opponent or (nx, ny) in captured:
            continue
        group = find_group(board, nx, ny)
        if count_liberties(board, group) == 0:
            captured.update(group)
    return captured


def empty_region(board: BoardArray, x: int, y: int) -> Tuple[Set[Point], FrozenSet[Stone]]:
    """Flood-fill the empty region at ``(x, y)``; return it with the colours it touches."""
    check_bounds(x, y)
    if board[y, x] != Stone.EMPTY:
        raise ValueError(f"({x}, {y}) is occupied; territory needs an empty cell.")

    region: Set[Point] = {(x, y)}
    borders: Set[Stone] = set()
    queue = deque([(x, y)])
    while queue:
        cx, cy = queue.popleft()
        for nx, ny in NEIGHBORS[(cx, cy)]:
            value = board[ny, nx]
            if value != Stone.EMPTY:
                borders.add(Stone(int(value)))
            elif (nx, ny) not in region:
                region.add((nx, ny))
                queue.append((nx, ny))
    return region, frozenset(borders)


def territory_owner(board: BoardArray, x: int, y: int) -> Stone:
    """Owner of the empty region at ``(x, y)``, or ``Stone.EMPTY`` when it borders both colours or none.

    Single-point query; :func:`empty_region` returns the whole region with its borders.
    """
    _, borders = empty_region(board, x, y)
    if len(borders) == 1:
        return next(iter(borders))
    return Stone.EMPTY


def is_true_eye(board: BoardArray, x: int, y: int, color: Stone) -> bool:
    """Single-point form of :func:`true_eye_mask`, which the players use in bulk."""
    # Diagonals are not inspected, so some false eyes count as eyes.
    return all(board[ny, nx] == color for nx, ny in NEIGHBORS[(x, y)])


def is_not_suicide(board: BoardArray, x: int, y: int, color: Stone) -> bool:
    """Cheap legality approximation used by the automated players.

    Accepts the move when it has an empty neighbour or captures something;
    otherwise falls back to counting the liberties of the group it joins.
    """
    if any(board[ny, nx] == Stone.EMPTY for nx, ny in NEIGHBORS[(x, y)]):
        return True
    work = board.copy()
    work[y, x] = color
    if captured_by(work, x, y, color):
        return True
    return count_liberties(work, find_group(work, x, y)) > 0


def _shifted_planes(board: BoardArray, fill: int) -> Tuple[np.ndarray, ...]:
    padded = np.pad(board, 1, constant_values=fill)
    return (
        padded[:-2, 1:-1],  # north
        padded[2:, 1:-1],  # south
        padded[1:-1, :-2],  # west
        padded[1:-1, 2:],  # east
    )


def true_eye_mask(board: BoardArray, color: Stone) -> np.ndarray:
    mask = board == Stone.EMPTY
    # Off-board neighbours are padded with ``color`` so edges never break an eye.
    for plane in _shifted_planes(board, int(color)):
        mask &= plane == int(color)
    return mask


def candidate_mask(board: BoardArray, color: Stone) -> np.ndarray:
    """Boolean mask of empty cells that are neither own true eyes nor suicidal."""
    mask = (board == Stone.EMPTY) & ~true_eye_mask(board, color)
    has_liberty = np.zeros_like(mask)
    for plane in _shifted_planes(board, -1):
        has_liberty |= plane == Stone.EMPTY
    for y, x in np.argwhere(mask & ~has_liberty):
        if not is_not_suicide(board, int(x), int(y), color):
            mask[y, x] = False
    return mask


def candidate_moves(board: BoardArray, color: Stone) -> List[Point]:
    """Candidates from :func:`candidate_mask` in row-major scan order."""
    return [(int(x), int(y)) for y, x in np.argwhere(candidate_mask(board, color))]
