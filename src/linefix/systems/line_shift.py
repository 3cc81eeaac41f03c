"""Rigid one-step shift of a single row or column."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence

from linefix.components.selected_line import Direction, LineType, LINE_DIRECTIONS
from linefix.systems.board_ops import Grid, Position, clone_board


@dataclass(slots=True)
class ShiftMove:
    source: Position
    target: Position
    rank: int


@dataclass(slots=True)
class ShiftResult:
    board: Grid
    moves: List[ShiftMove] = field(default_factory=list)
    # Every destination cell of the line, in shift order (presentation highlight).
    shifted_cells: List[Position] = field(default_factory=list)


def shift_line(
    board: Sequence[Sequence[int]],
    line_type: LineType,
    index: int,
    direction: Direction,
) -> ShiftResult | None:
    """Move every cell of the line one step toward ``direction``.

    The cell at the leading edge is overwritten, the trailing edge becomes
    empty and nothing wraps around. Returns ``None`` when ``direction`` does
    not apply to the line's orientation. The input board is never mutated.
    """
    if direction not in LINE_DIRECTIONS[line_type]:
        return None
    size = len(board)
    if not 0 <= index < size:
        raise ValueError(f"Line index {index} out of range for size {size}")
    next_board = clone_board(board)
    result = ShiftResult(board=next_board)

    if line_type is LineType.ROW:
        if direction is Direction.LEFT:
            pairs = [((index, c + 1), (index, c)) for c in range(size - 1)]
            vacated = (index, size - 1)
        else:
            pairs = [((index, c - 1), (index, c)) for c in range(size - 1, 0, -1)]
            vacated = (index, 0)
    else:
        if direction is Direction.UP:
            pairs = [((r + 1, index), (r, index)) for r in range(size - 1)]
            vacated = (size - 1, index)
        else:
            pairs = [((r - 1, index), (r, index)) for r in range(size - 1, 0, -1)]
            vacated = (0, index)

    for (src_r, src_c), (dst_r, dst_c) in pairs:
        rank = board[src_r][src_c]
        next_board[dst_r][dst_c] = rank
        result.shifted_cells.append((dst_r, dst_c))
        if rank:
            result.moves.append(ShiftMove(source=(src_r, src_c), target=(dst_r, dst_c), rank=rank))
    next_board[vacated[0]][vacated[1]] = 0
    return result
