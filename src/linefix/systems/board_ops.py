from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple

from esper import World

from linefix.components.board import Board
from linefix.constants import BOARD_SIZE

Position = Tuple[int, int]
Grid = List[List[int]]


def make_empty_board(size: int = BOARD_SIZE) -> Grid:
    return [[0] * size for _ in range(size)]


def clone_board(board: Sequence[Sequence[int]]) -> Grid:
    """Return a deep copy of ``board``; rows never alias the original."""
    return [list(row) for row in board]


def list_empties(board: Sequence[Sequence[int]]) -> List[Position]:
    """Enumerate empty cells in row-major order.

    The order feeds randomized spawn selection, so it must stay stable for
    seeded replays.
    """
    empties: List[Position] = []
    for r, row in enumerate(board):
        for c, value in enumerate(row):
            if value == 0:
                empties.append((r, c))
    return empties


def validate_board(board: Iterable[Iterable[int]], size: int = BOARD_SIZE) -> Grid:
    """Copy ``board`` after checking it is a ``size`` x ``size`` grid of non-negative ints."""
    grid = [list(row) for row in board]
    if len(grid) != size or any(len(row) != size for row in grid):
        raise ValueError(f"Board must be {size}x{size}")
    for row in grid:
        for value in row:
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ValueError(f"Invalid tile rank {value!r}")
    return grid


def highest_rank(board: Sequence[Sequence[int]]) -> int:
    return max((value for row in board for value in row), default=0)


def get_board(world: World) -> Board:
    for _, board in world.get_component(Board):
        return board
    raise RuntimeError("Board component not found")


def board_dimensions(world: World) -> Tuple[int, int] | None:
    for _, board in world.get_component(Board):
        return board.size, board.size
    return None
