"""Engine inspection helpers.

Run the shift and merge operators on arbitrary boards without touching a
live session, and read or replace the live board directly.
"""
from __future__ import annotations

from typing import Any, Dict, Iterable, Sequence

from esper import World

from linefix.components.selected_line import parse_direction, parse_line_type
from linefix.systems.board_ops import Grid, clone_board, get_board, highest_rank, validate_board
from linefix.systems.chain_merge import MergeResult, resolve_chain_merges
from linefix.systems.line_shift import ShiftResult, shift_line
from linefix.systems.session_utils import get_or_create_selected_line, get_or_create_session
from linefix.systems.spawn import pick_spawn_rank


def debug_shift_line(line_type, index: int, direction, board: Sequence[Sequence[int]]) -> ShiftResult | None:
    parsed_type = parse_line_type(line_type)
    if parsed_type is None:
        raise ValueError(f"Unknown line type '{line_type}'")
    parsed_direction = parse_direction(direction)
    if parsed_direction is None:
        raise ValueError(f"Unknown direction '{direction}'")
    grid = validate_board(board, len(board))
    return shift_line(grid, parsed_type, index, parsed_direction)


def debug_merge(board: Sequence[Sequence[int]]) -> MergeResult:
    return resolve_chain_merges(validate_board(board, len(board)))


def spawn_rank(empty_count: int, roll: float) -> int:
    """Rank the spawn policy would pick for a given empty-cell count and roll."""
    return pick_spawn_rank(empty_count, lambda: roll)


def set_board(world: World, board: Iterable[Iterable[int]]) -> None:
    """Replace the live board; the running max tile follows the new contents."""
    live = get_board(world)
    live.cells = validate_board(board, live.size)
    get_or_create_session(world).note_tile(highest_rank(live.cells))


def get_board_copy(world: World) -> Grid:
    return clone_board(get_board(world).cells)


def get_state(world: World) -> Dict[str, Any]:
    session = get_or_create_session(world)
    selected = get_or_create_selected_line(world)
    return {
        "board": get_board_copy(world),
        "score": session.score,
        "max_tile": session.max_tile,
        "best_score": session.best_score,
        "best_tile": session.best_tile,
        "turn": session.turn,
        "game_over": session.game_over,
        "status": session.status,
        "selected_line": {"type": selected.line_type.value, "index": selected.index},
    }
