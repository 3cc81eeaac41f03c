from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import List

from esper import World

from linefix.components.selected_line import (
    Direction,
    LineType,
    SelectedLine,
    parse_direction,
    parse_line_type,
)
from linefix.components.session_state import SessionState
from linefix.components.turn_state import TurnPhase, TurnState
from linefix.constants import (
    INITIAL_TILE_COUNT,
    MULTIPLIER_RULE_LABEL,
    STATUS_GAME_OVER,
    STATUS_NEUTRAL,
)
from linefix.events.bus import (
    EVENT_GAME_OVER,
    EVENT_GAME_RESET,
    EVENT_GAME_RESET_REQUEST,
    EVENT_LINE_SELECT_REQUEST,
    EVENT_LINE_SELECTED,
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
from linefix.systems.board_ops import get_board, make_empty_board
from linefix.systems.chain_merge import MergeResult, resolve_chain_merges
from linefix.systems.line_shift import ShiftResult
from linefix.systems.session_utils import (
    get_or_create_selected_line,
    get_or_create_session,
    get_or_create_turn_state,
)
from linefix.systems.spawn import SpawnResult, spawn_tile

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class TurnResult:
    line_type: LineType
    index: int
    direction: Direction
    shift: ShiftResult
    merge: MergeResult
    spawn: SpawnResult | None
    score: int
    max_tile: int
    game_over: bool
    status: str


def chain_status(chain_count: int) -> str:
    if chain_count > 1:
        return f"Chain {chain_count} / multiplier rule: {MULTIPLIER_RULE_LABEL}"
    return STATUS_NEUTRAL


class TurnSystem:
    """Owns the session state machine and runs one turn per directional command.

    Flow of a turn:
      - shift the selected line one step (incompatible directions are ignored)
      - resolve chain merges on the shifted board and bank the gain
      - spawn one tile; a failed spawn ends the game
      - update best records and announce them for persistence
    """

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        *,
        rng: random.Random | None = None,
        start_new_game: bool = True,
    ) -> None:
        self.world = world
        self.event_bus = event_bus
        self._rng = rng or getattr(world, "random", None) or random.Random()
        self.event_bus.subscribe(EVENT_TURN_REQUEST, self.on_turn_request)
        self.event_bus.subscribe(EVENT_LINE_SELECT_REQUEST, self.on_line_select_request)
        self.event_bus.subscribe(EVENT_GAME_RESET_REQUEST, self.on_reset_request)
        if start_new_game:
            self.reset_game()

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------

    def on_turn_request(self, sender, **kwargs):
        direction = kwargs.get('direction')
        if direction is None:
            return
        self.execute_turn(direction)

    def on_line_select_request(self, sender, **kwargs):
        line_type = parse_line_type(kwargs.get('line_type'))
        index = kwargs.get('index')
        if line_type is None or not self._valid_index(index):
            return
        self.set_selected_line(line_type, index)

    def on_reset_request(self, sender, **kwargs):
        self.reset_game()

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def set_selected_line(self, line_type: LineType | str, index: int) -> SelectedLine:
        parsed = parse_line_type(line_type)
        if parsed is None:
            raise ValueError(f"Unknown line type '{line_type}'")
        if not self._valid_index(index):
            raise ValueError(f"Line index {index!r} out of range")
        selected = get_or_create_selected_line(self.world)
        selected.line_type = parsed
        selected.index = index
        self.event_bus.emit(EVENT_LINE_SELECTED, line_type=parsed, index=index)
        return selected

    def execute_turn(self, direction: Direction | str) -> TurnResult | None:
        """Run one full turn, or return ``None`` if the command is rejected."""
        state = self._turn_state()
        parsed = parse_direction(direction)
        if parsed is None:
            self._reject(direction, "unknown_direction")
            return None
        if state.phase is TurnPhase.GAME_OVER:
            self._reject(parsed, "game_over")
            return None
        if state.phase is TurnPhase.TURN_IN_PROGRESS or state.in_flight:
            self._reject(parsed, "in_flight")
            return None
        selected = get_or_create_selected_line(self.world)
        board = get_board(self.world)
        shift = line_shift.shift_line(board.cells, selected.line_type, selected.index, parsed)
        if shift is None:
            self._reject(parsed, "not_applicable")
            return None

        state.phase = TurnPhase.TURN_IN_PROGRESS
        session = self._session()
        self.event_bus.emit(
            EVENT_LINE_SHIFTED,
            line_type=selected.line_type,
            index=selected.index,
            direction=parsed,
            moves=shift.moves,
            shifted_cells=shift.shifted_cells,
        )

        merge = resolve_chain_merges(shift.board)
        board.cells = merge.board
        session.score += merge.gain
        session.note_tile(merge.max_rank)
        self.event_bus.emit(
            EVENT_MERGE_RESOLVED,
            chain_count=merge.chain_count,
            gain=merge.gain,
            merged_cells=merge.merged_cells,
            events=merge.events,
        )

        spawned = spawn_tile(board.cells, self._rng)
        session.turn += 1
        if spawned is None:
            state.phase = TurnPhase.GAME_OVER
            session.game_over = True
            session.status = STATUS_GAME_OVER
            logger.info("Game over after %d turns with score %d", session.turn, session.score)
            self.event_bus.emit(EVENT_GAME_OVER, score=session.score, max_tile=session.max_tile)
        else:
            state.phase = TurnPhase.IDLE
            session.note_tile(spawned.rank)
            session.status = chain_status(merge.chain_count)
            self.event_bus.emit(EVENT_TILE_SPAWNED, position=spawned.position, rank=spawned.rank)
        self.event_bus.emit(EVENT_STATUS_CHANGED, text=session.status, game_over=session.game_over)

        best_score, best_tile = session.record_bests()
        self.event_bus.emit(EVENT_RECORDS_UPDATED, best_score=best_score, best_tile=best_tile)

        result = TurnResult(
            line_type=selected.line_type,
            index=selected.index,
            direction=parsed,
            shift=shift,
            merge=merge,
            spawn=spawned,
            score=session.score,
            max_tile=session.max_tile,
            game_over=session.game_over,
            status=session.status,
        )
        logger.debug(
            "Turn %d: %s %s[%d] chain=%d gain=%d score=%d",
            session.turn, parsed.value, selected.line_type.value, selected.index,
            merge.chain_count, merge.gain, session.score,
        )
        self.event_bus.emit(EVENT_TURN_COMPLETED, result=result)
        return result

    def reset_game(self) -> List[SpawnResult]:
        """Start a fresh session on an empty board with two spawned tiles.

        Best records and the selected line are kept.
        """
        board = get_board(self.world)
        board.cells = make_empty_board(board.size)
        session = self._session()
        session.score = 0
        session.max_tile = 0
        session.turn = 0
        session.game_over = False
        session.status = STATUS_NEUTRAL
        state = self._turn_state()
        state.phase = TurnPhase.IDLE
        state.in_flight = False
        spawned: List[SpawnResult] = []
        for _ in range(INITIAL_TILE_COUNT):
            result = spawn_tile(board.cells, self._rng)
            if result is None:
                break
            session.note_tile(result.rank)
            spawned.append(result)
        self.event_bus.emit(EVENT_GAME_RESET, spawned=spawned)
        self.event_bus.emit(EVENT_STATUS_CHANGED, text=session.status, game_over=False)
        return spawned

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _reject(self, direction, reason: str) -> None:
        self.event_bus.emit(EVENT_TURN_REJECTED, direction=direction, reason=reason)

    def _valid_index(self, index) -> bool:
        if isinstance(index, bool) or not isinstance(index, int):
            return False
        return 0 <= index < get_board(self.world).size

    def _session(self) -> SessionState:
        return get_or_create_session(self.world)

    def _turn_state(self) -> TurnState:
        return get_or_create_turn_state(self.world)
