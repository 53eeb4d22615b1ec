from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Optional, Tuple

import numpy as np
from numpy.typing import NDArray

BOARD_SIZE = 9

BoardArray = NDArray[np.int8]

# (x, y) == (column, row)
Point = Tuple[int, int]


class Stone(IntEnum):
    EMPTY = 0
    BLACK = 1
    WHITE = 2

    @property
    def opponent(self) -> "Stone":
        if self == Stone.BLACK:
            return Stone.WHITE
        if self == Stone.WHITE:
            return Stone.BLACK
        raise ValueError("Empty cells have no opponent.")


class GamePhase(Enum):
    PLAYING = "playing"
    SCORING = "scoring"
    ENDED = "ended"


class Rejection(Enum):
    OCCUPIED = "occupied"
    SUICIDE = "suicide"
    KO = "ko"
    NOT_PLAYING = "not_playing"


def empty_board() -> BoardArray:
    return np.zeros((BOARD_SIZE, BOARD_SIZE), dtype=np.int8)


def in_bounds(x: int, y: int) -> bool:
    return 0 <= x < BOARD_SIZE and 0 <= y < BOARD_SIZE


def check_bounds(x: int, y: int) -> None:
    if not in_bounds(x, y):
        raise ValueError(f"Coordinate ({x}, {y}) is off the board.")


def stone_at(board: BoardArray, x: int, y: int) -> Stone:
    check_bounds(x, y)
    return Stone(int(board[y, x]))


def frozen_copy(board: BoardArray) -> BoardArray:
    copy = board.copy()
    copy.flags.writeable = False
    return copy


@dataclass(frozen=True)
class MoveResult:
    accepted: bool
    board: Optional[BoardArray] = None
    captured: Tuple[Point, ...] = ()
    rejection: Optional[Rejection] = None

    @property
    def captured_count(self) -> int:
        return len(self.captured)


@dataclass(frozen=True)
class Snapshot:
    board: BoardArray  # read-only copy, shape (9, 9)
    turn: Stone
    captures: Tuple[int, int]  # (black, white)
    pass_count: int

    @classmethod
    def capture(cls, board: BoardArray, turn: Stone, captures: Tuple[int, int], pass_count: int) -> "Snapshot":
        return cls(board=frozen_copy(board), turn=turn, captures=tuple(captures), pass_count=pass_count)


def format_board(board: BoardArray) -> str:
    symbols = {0: ".", 1: "X", 2: "O"}
    header = "  " + " ".join(str(x) for x in range(BOARD_SIZE))
    rows = [header]
    for y in range(BOARD_SIZE):
        rows.append(f"{y} " + " ".join(symbols[int(cell)] for cell in board[y]))
    return "\n".join(rows)
