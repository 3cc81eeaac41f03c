from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # Strong references so systems that are not kept in a variable still receive events.
        sig.connect(fn, weak=False)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# SYSTEM & TIMING
# ============================================================================
EVENT_TICK = "tick"                        # payload: dt=float


# ============================================================================
# INPUT
# ============================================================================
EVENT_KEY_PRESS = "key_press"              # payload: symbol=int, modifiers=int


# ============================================================================
# LINE SELECTION & TURNS
# ============================================================================
EVENT_LINE_SELECT_REQUEST = "line_select_request"  # payload: line_type=str|LineType, index=int
EVENT_LINE_SELECTED = "line_selected"              # payload: line_type=LineType, index=int
EVENT_TURN_REQUEST = "turn_request"                # payload: direction=str|Direction
EVENT_TURN_REJECTED = "turn_rejected"              # payload: direction=str|Direction|None, reason=str
EVENT_TURN_COMPLETED = "turn_completed"            # payload: result=TurnResult


# ============================================================================
# BOARD MECHANICS
# ============================================================================
EVENT_LINE_SHIFTED = "line_shifted"        # payload: line_type=LineType, index=int, direction=Direction, moves=list[ShiftMove], shifted_cells=list[(r,c)]
EVENT_MERGE_RESOLVED = "merge_resolved"    # payload: chain_count=int, gain=int, merged_cells=list[(r,c)], events=list[MergeEvent]
EVENT_TILE_SPAWNED = "tile_spawned"        # payload: position=(r,c), rank=int


# ============================================================================
# SESSION & RECORDS
# ============================================================================
EVENT_STATUS_CHANGED = "status_changed"        # payload: text=str, game_over=bool
EVENT_GAME_OVER = "game_over"                  # payload: score=int, max_tile=int
EVENT_GAME_RESET_REQUEST = "game_reset_request"  # payload: None
EVENT_GAME_RESET = "game_reset"                # payload: spawned=list[SpawnResult]
EVENT_RECORDS_UPDATED = "records_updated"      # payload: best_score=int, best_tile=int
EVENT_RECORDS_LOADED = "records_loaded"        # payload: best_score=int, best_tile=int


# ============================================================================
# ANIMATION
# ============================================================================
EVENT_ANIMATION_START = "animation_start"        # payload: kind=str, items=list
EVENT_ANIMATION_COMPLETE = "animation_complete"  # payload: kind=str, items=list
