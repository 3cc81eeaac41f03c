import pytest

from linefix.components.selected_line import Direction, LineType
from linefix.components.turn_state import TurnPhase
from linefix.constants import STATUS_GAME_OVER, STATUS_NEUTRAL
from linefix.events.bus import (
    EVENT_GAME_OVER,
    EVENT_GAME_RESET,
    EVENT_LINE_SELECT_REQUEST,
    EVENT_LINE_SHIFTED,
    EVENT_MERGE_RESOLVED,
    EVENT_RECORDS_UPDATED,
    EVENT_STATUS_CHANGED,
    EVENT_TILE_SPAWNED,
    EVENT_TURN_COMPLETED,
    EVENT_TURN_REJECTED,
    EVENT_TURN_REQUEST,
    EventBus,
)
from linefix.systems import line_shift
from linefix.systems.line_shift import ShiftResult
from linefix.systems.session_utils import (
    get_or_create_selected_line,
    get_or_create_session,
    get_or_create_turn_state,
)
from linefix.systems.turn_system import TurnSystem, chain_status
from linefix.utils.inspection import get_board_copy, get_state, set_board
from linefix.world import create_world

from tests.helpers import ScriptedRng, blank_board, row_board


def _record(bus, *names):
    seen = []
    for name in names:
        bus.subscribe(name, lambda sender, _name=name, **kw: seen.append((_name, kw)))
    return seen


def _count_tiles(board):
    return sum(1 for row in board for value in row if value)


def test_new_game_places_two_tiles(world, bus):
    TurnSystem(world, bus)
    state = get_state(world)
    assert _count_tiles(state["board"]) == 2
    assert state["score"] == 0
    assert state["turn"] == 0
    assert state["game_over"] is False
    assert state["status"] == STATUS_NEUTRAL
    assert state["max_tile"] in (1, 2)
    assert state["selected_line"] == {"type": "row", "index": 2}


def test_select_line_validates_input(world, bus):
    turns = TurnSystem(world, bus)
    turns.set_selected_line("col", 4)
    selected = get_or_create_selected_line(world)
    assert selected.line_type is LineType.COLUMN
    assert selected.index == 4
    with pytest.raises(ValueError):
        turns.set_selected_line("diagonal", 1)
    with pytest.raises(ValueError):
        turns.set_selected_line(LineType.ROW, 5)
    with pytest.raises(ValueError):
        turns.set_selected_line(LineType.ROW, True)
    assert (selected.line_type, selected.index) == (LineType.COLUMN, 4)


def test_select_request_ignores_invalid_lines(world, bus):
    TurnSystem(world, bus)
    bus.emit(EVENT_LINE_SELECT_REQUEST, line_type="row", index=-1)
    bus.emit(EVENT_LINE_SELECT_REQUEST, line_type="ring", index=0)
    selected = get_or_create_selected_line(world)
    assert (selected.line_type, selected.index) == (LineType.ROW, 2)
    bus.emit(EVENT_LINE_SELECT_REQUEST, line_type="column", index=0)
    assert (selected.line_type, selected.index) == (LineType.COLUMN, 0)


def test_incompatible_direction_changes_nothing(world, bus):
    turns = TurnSystem(world, bus)
    rejected = _record(bus, EVENT_TURN_REJECTED)
    before = get_state(world)
    assert turns.execute_turn(Direction.UP) is None
    assert get_state(world) == before
    assert rejected == [(EVENT_TURN_REJECTED, {"direction": Direction.UP, "reason": "not_applicable"})]


def test_unknown_direction_is_rejected(world, bus):
    turns = TurnSystem(world, bus)
    rejected = _record(bus, EVENT_TURN_REJECTED)
    assert turns.execute_turn("sideways") is None
    assert rejected[0][1]["reason"] == "unknown_direction"


def test_turn_shifts_merges_scores_and_spawns():
    world = create_world()
    bus = EventBus()
    turns = TurnSystem(world, bus, rng=ScriptedRng([0.0, 0.0]), start_new_game=False)
    set_board(world, row_board(2, [0, 1, 1, 2, 2]))
    result = turns.execute_turn("left")
    board = get_board_copy(world)
    assert board[2] == [2, 0, 3, 0, 0]
    assert board[0][0] == 1
    assert result.spawn.position == (0, 0)
    assert result.spawn.rank == 1
    assert result.merge.chain_count == 1
    assert result.score == 10
    assert result.max_tile == 3
    assert result.status == STATUS_NEUTRAL
    session = get_or_create_session(world)
    assert session.turn == 1
    assert session.best_score == 10
    assert session.best_tile == 3


def test_chained_turn_reports_chain_status():
    world = create_world()
    bus = EventBus()
    turns = TurnSystem(world, bus, rng=ScriptedRng([0.0, 0.0]), start_new_game=False)
    statuses = _record(bus, EVENT_STATUS_CHANGED)
    set_board(world, row_board(2, [0, 2, 1, 1, 0]))
    result = turns.execute_turn(Direction.LEFT)
    assert result.merge.chain_count == 2
    assert result.score == 13
    assert result.status == chain_status(2)
    assert result.status.startswith("Chain 2")
    assert statuses[-1][1] == {"text": result.status, "game_over": False}


def test_chain_status_is_neutral_below_two():
    assert chain_status(0) == STATUS_NEUTRAL
    assert chain_status(1) == STATUS_NEUTRAL
    assert "Chain 3" in chain_status(3)


def test_turn_events_arrive_in_order():
    world = create_world()
    bus = EventBus()
    turns = TurnSystem(world, bus, rng=ScriptedRng([0.0, 0.0]), start_new_game=False)
    set_board(world, row_board(2, [0, 1, 1, 0, 0]))
    seen = _record(
        bus,
        EVENT_LINE_SHIFTED,
        EVENT_MERGE_RESOLVED,
        EVENT_TILE_SPAWNED,
        EVENT_STATUS_CHANGED,
        EVENT_RECORDS_UPDATED,
        EVENT_TURN_COMPLETED,
    )
    turns.execute_turn(Direction.LEFT)
    assert [name for name, _ in seen] == [
        EVENT_LINE_SHIFTED,
        EVENT_MERGE_RESOLVED,
        EVENT_TILE_SPAWNED,
        EVENT_STATUS_CHANGED,
        EVENT_RECORDS_UPDATED,
        EVENT_TURN_COMPLETED,
    ]
    assert seen[1][1]["gain"] == 4
    assert seen[4][1] == {"best_score": 4, "best_tile": 2}


def test_turn_request_event_runs_a_turn(world, bus):
    TurnSystem(world, bus)
    completed = _record(bus, EVENT_TURN_COMPLETED)
    bus.emit(EVENT_TURN_REQUEST, direction="right")
    assert len(completed) == 1
    assert get_or_create_session(world).turn == 1


def test_turn_in_flight_is_refused(world, bus):
    turns = TurnSystem(world, bus)
    rejected = _record(bus, EVENT_TURN_REJECTED)
    get_or_create_turn_state(world).in_flight = True
    before = get_state(world)
    assert turns.execute_turn(Direction.LEFT) is None
    assert get_state(world) == before
    assert rejected[0][1]["reason"] == "in_flight"


def _force_full_board(monkeypatch):
    # A rigid shift always empties a cell, so a full board after the shift has to be forced.
    full = [[(r + c) % 2 + 1 for c in range(5)] for r in range(5)]

    def fake_shift(board, line_type, index, direction):
        return ShiftResult(board=[list(row) for row in full])

    monkeypatch.setattr(line_shift, "shift_line", fake_shift)
    return full


def test_failed_spawn_ends_the_game(world, bus, monkeypatch):
    turns = TurnSystem(world, bus)
    full = _force_full_board(monkeypatch)
    seen = _record(bus, EVENT_GAME_OVER, EVENT_TILE_SPAWNED)
    result = turns.execute_turn(Direction.LEFT)
    assert result.game_over is True
    assert result.spawn is None
    assert result.status == STATUS_GAME_OVER
    assert get_board_copy(world) == full
    assert get_or_create_turn_state(world).phase is TurnPhase.GAME_OVER
    assert [name for name, _ in seen] == [EVENT_GAME_OVER]


def test_game_over_refuses_turns_until_reset(world, bus, monkeypatch):
    turns = TurnSystem(world, bus)
    _force_full_board(monkeypatch)
    turns.execute_turn(Direction.LEFT)
    rejected = _record(bus, EVENT_TURN_REJECTED)
    frozen = get_state(world)
    assert turns.execute_turn(Direction.RIGHT) is None
    assert get_state(world) == frozen
    assert rejected[0][1]["reason"] == "game_over"

    resets = _record(bus, EVENT_GAME_RESET)
    turns.reset_game()
    state = get_state(world)
    assert state["game_over"] is False
    assert state["status"] == STATUS_NEUTRAL
    assert _count_tiles(state["board"]) == 2
    assert len(resets) == 1
    assert get_or_create_turn_state(world).phase is TurnPhase.IDLE


def test_reset_keeps_bests_and_clears_session():
    world = create_world()
    bus = EventBus()
    turns = TurnSystem(world, bus, rng=ScriptedRng([0.0, 0.0]), start_new_game=False)
    set_board(world, row_board(2, [0, 1, 1, 2, 2]))
    turns.execute_turn(Direction.LEFT)
    turns.reset_game()
    session = get_or_create_session(world)
    assert session.score == 0
    assert session.turn == 0
    assert session.best_score == 10
    assert session.best_tile == 3
    assert session.max_tile <= 2


def test_same_seed_replays_the_same_game():
    def play(seed):
        world = create_world(seed=seed)
        bus = EventBus()
        turns = TurnSystem(world, bus)
        boards = [get_board_copy(world)]
        for line_type, index, direction in [
            ("row", 2, "left"), ("column", 0, "down"), ("row", 0, "right"),
            ("column", 3, "up"), ("row", 4, "left"), ("row", 1, "right"),
        ]:
            turns.set_selected_line(line_type, index)
            turns.execute_turn(direction)
            boards.append(get_board_copy(world))
        return boards, get_state(world)["score"]

    assert play("daily-42") == play("daily-42")
    assert play(1234) == play("1234")


def test_board_stays_well_formed_over_many_turns():
    world = create_world(seed=99)
    bus = EventBus()
    turns = TurnSystem(world, bus)
    directions = {LineType.ROW: (Direction.LEFT, Direction.RIGHT),
                  LineType.COLUMN: (Direction.UP, Direction.DOWN)}
    score = 0
    for step in range(200):
        line_type = LineType.ROW if step % 2 == 0 else LineType.COLUMN
        turns.set_selected_line(line_type, step % 5)
        result = turns.execute_turn(directions[line_type][step % 3 % 2])
        assert result is not None
        assert result.score >= score
        score = result.score
        board = get_board_copy(world)
        assert len(board) == 5 and all(len(row) == 5 for row in board)
        assert all(value >= 0 for row in board for value in row)
        assert result.max_tile >= max(value for row in board for value in row)
