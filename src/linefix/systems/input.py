from __future__ import annotations

from typing import Dict, Tuple

from linefix.components.selected_line import Direction, LineType
from linefix.constants import BOARD_SIZE
from linefix.events.bus import (
    EventBus,
    EVENT_KEY_PRESS,
    EVENT_LINE_SELECT_REQUEST,
    EVENT_TURN_REQUEST,
    EVENT_GAME_RESET_REQUEST,
)

# Binding actions: ("select", (LineType, index)), ("turn", Direction) or ("reset", None).
KeyBindings = Dict[int, Tuple[str, object]]


def default_key_bindings() -> KeyBindings:
    """Keyboard layout: 1-5 pick a row, Z-B pick a column, arrows/WASD shift, N restarts."""
    # Local import keeps tests headless without loading arcade.
    import arcade

    key = arcade.key
    bindings: KeyBindings = {}
    row_keys = (key.KEY_1, key.KEY_2, key.KEY_3, key.KEY_4, key.KEY_5)
    column_keys = (key.Z, key.X, key.C, key.V, key.B)
    for index in range(BOARD_SIZE):
        bindings[row_keys[index]] = ("select", (LineType.ROW, index))
        bindings[column_keys[index]] = ("select", (LineType.COLUMN, index))
    for symbols, direction in (
        ((key.LEFT, key.A), Direction.LEFT),
        ((key.RIGHT, key.D), Direction.RIGHT),
        ((key.UP, key.W), Direction.UP),
        ((key.DOWN, key.S), Direction.DOWN),
    ):
        for symbol in symbols:
            bindings[symbol] = ("turn", direction)
    bindings[key.N] = ("reset", None)
    return bindings


class InputSystem:
    """Translates key presses into line selection, turn and reset requests."""

    def __init__(self, event_bus: EventBus, bindings: KeyBindings | None = None):
        self.event_bus = event_bus
        self.bindings = bindings if bindings is not None else default_key_bindings()
        self.event_bus.subscribe(EVENT_KEY_PRESS, self.on_key_press)

    def on_key_press(self, sender, **kwargs):
        symbol = kwargs.get('symbol')
        binding = self.bindings.get(symbol)
        if binding is None:
            return
        action, value = binding
        if action == "select":
            line_type, index = value
            self.event_bus.emit(EVENT_LINE_SELECT_REQUEST, line_type=line_type, index=index)
        elif action == "turn":
            self.event_bus.emit(EVENT_TURN_REQUEST, direction=value)
        elif action == "reset":
            self.event_bus.emit(EVENT_GAME_RESET_REQUEST)
