from __future__ import annotations

from typing import Iterable, List


class ScriptedRng:
    """Stand-in generator returning queued draws, for pinning spawn cells and ranks."""

    def __init__(self, values: Iterable[float]):
        self.values = list(values)

    def random(self) -> float:
        if not self.values:
            return 0.0
        return self.values.pop(0)


def blank_board(size: int = 5) -> List[List[int]]:
    return [[0] * size for _ in range(size)]


def row_board(row_index: int, values: Iterable[int], size: int = 5) -> List[List[int]]:
    board = blank_board(size)
    board[row_index] = list(values)
    return board
