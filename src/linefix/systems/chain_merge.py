"""Chain-merge resolution.

Merges are found in rounds. Each round scans the board in row-major order
and pairs every non-empty cell with an equal neighbour, preferring the cell
below over the cell to the right. A cell takes part in at most one merge per
round, and merges found in a round are applied together once the scan ends.
Rounds repeat on the updated board until one finds nothing; merge gains are
weighted by ``round + 1``.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence

from linefix.systems.board_ops import Grid, Position, clone_board


@dataclass(slots=True)
class MergeEvent:
    source: Position
    target: Position
    rank: int
    chain: int
    gain: int


@dataclass(slots=True)
class MergeResult:
    board: Grid
    chain_count: int = 0
    gain: int = 0
    merged_cells: List[Position] = field(default_factory=list)
    events: List[MergeEvent] = field(default_factory=list)
    max_rank: int = 0


def chain_multiplier(chain: int) -> int:
    return chain + 1


def find_round_merges(board: Sequence[Sequence[int]]) -> List[tuple[Position, Position, int]]:
    """Return ``(source, target, new_rank)`` for every merge available this round."""
    size = len(board)
    merged = [[False] * size for _ in range(size)]
    ops: List[tuple[Position, Position, int]] = []
    for r in range(size):
        for c in range(size):
            value = board[r][c]
            if value == 0 or merged[r][c]:
                continue
            down = r + 1
            if down < size and board[down][c] == value and not merged[down][c]:
                ops.append(((down, c), (r, c), value + 1))
                merged[r][c] = True
                merged[down][c] = True
                continue
            right = c + 1
            if right < size and board[r][right] == value and not merged[r][right]:
                ops.append(((r, right), (r, c), value + 1))
                merged[r][c] = True
                merged[r][right] = True
    return ops


def resolve_chain_merges(board: Sequence[Sequence[int]]) -> MergeResult:
    """Run merge rounds until the board settles. ``board`` itself is left untouched."""
    grid = clone_board(board)
    result = MergeResult(board=grid)
    while True:
        ops = find_round_merges(grid)
        if not ops:
            break
        result.chain_count += 1
        multiplier = chain_multiplier(result.chain_count)
        for (src_r, src_c), (dst_r, dst_c), rank in ops:
            grid[src_r][src_c] = 0
            grid[dst_r][dst_c] = rank
            gain = rank * multiplier
            result.gain += gain
            if (dst_r, dst_c) not in result.merged_cells:
                result.merged_cells.append((dst_r, dst_c))
            result.events.append(
                MergeEvent(
                    source=(src_r, src_c),
                    target=(dst_r, dst_c),
                    rank=rank,
                    chain=result.chain_count,
                    gain=gain,
                )
            )
            result.max_rank = max(result.max_rank, rank)
    return result
