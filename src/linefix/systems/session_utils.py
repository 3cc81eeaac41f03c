from esper import World

from linefix.components.selected_line import SelectedLine
from linefix.components.session_state import SessionState
from linefix.components.turn_state import TurnState


def get_or_create_turn_state(world: World) -> TurnState:
    """Return the shared TurnState component, creating it if absent."""
    existing = list(world.get_component(TurnState))
    if existing:
        return existing[0][1]
    world.create_entity(TurnState())
    return list(world.get_component(TurnState))[0][1]


def get_or_create_session(world: World) -> SessionState:
    existing = list(world.get_component(SessionState))
    if existing:
        return existing[0][1]
    world.create_entity(SessionState())
    return list(world.get_component(SessionState))[0][1]


def get_or_create_selected_line(world: World) -> SelectedLine:
    existing = list(world.get_component(SelectedLine))
    if existing:
        return existing[0][1]
    world.create_entity(SelectedLine())
    return list(world.get_component(SelectedLine))[0][1]
