import pytest

from linefix.events.bus import EventBus
from linefix.systems.turn_system import TurnSystem
from linefix.utils.inspection import (
    debug_merge,
    debug_shift_line,
    get_board_copy,
    get_state,
    set_board,
    spawn_rank,
)
from linefix.world import create_world

from tests.helpers import blank_board, row_board


def test_debug_shift_line_accepts_names():
    board = row_board(2, [1, 2, 3, 0, 0])
    result = debug_shift_line("row", 2, "right", board)
    assert result.board[2] == [0, 1, 2, 3, 0]
    col = debug_shift_line("col", 0, "up", board)
    assert [col.board[r][0] for r in range(5)] == [0, 1, 0, 0, 0]
    assert board[2] == [1, 2, 3, 0, 0]


def test_debug_shift_line_reports_inapplicable_direction():
    assert debug_shift_line("column", 1, "left", blank_board()) is None


@pytest.mark.parametrize("line_type, direction", [("diagonal", "left"), ("row", "back")])
def test_debug_shift_line_rejects_unknown_names(line_type, direction):
    with pytest.raises(ValueError):
        debug_shift_line(line_type, 0, direction, blank_board())


def test_debug_merge_reports_totals():
    result = debug_merge(row_board(0, [2, 1, 1, 0, 0]))
    assert result.chain_count == 2
    assert result.gain == 13


def test_spawn_rank_helper():
    assert spawn_rank(7, 0.99) == 3
    assert spawn_rank(8, 0.99) == 2
    assert spawn_rank(20, 0.1) == 1


def test_set_board_replaces_live_board_and_tracks_max_tile():
    world = create_world(seed=3)
    TurnSystem(world, EventBus())
    board = row_board(1, [0, 0, 6, 0, 0])
    set_board(world, board)
    assert get_board_copy(world) == board
    assert get_state(world)["max_tile"] >= 6


def test_set_board_rejects_bad_grids():
    world = create_world(seed=3)
    with pytest.raises(ValueError):
        set_board(world, [[0] * 5 for _ in range(3)])
    with pytest.raises(ValueError):
        set_board(world, [[0, 0, 0, 0, -2]] + [[0] * 5 for _ in range(4)])


def test_snapshots_are_copies():
    world = create_world(seed=3)
    TurnSystem(world, EventBus())
    state = get_state(world)
    state["board"][0][0] = 42
    copy = get_board_copy(world)
    copy[1][1] = 42
    assert 42 not in [value for row in get_board_copy(world) for value in row]
