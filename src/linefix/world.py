import random

from esper import World

from linefix.components.board import Board
from linefix.components.selected_line import LineType, SelectedLine
from linefix.components.session_state import SessionState
from linefix.components.turn_state import TurnState
from linefix.constants import BOARD_SIZE, DEFAULT_LINE_INDEX, DEFAULT_LINE_TYPE
from linefix.utils.seeded_rng import SeedToken, make_rng


def create_world(
    *,
    seed: SeedToken | None = None,
    rng: random.Random | None = None,
    size: int = BOARD_SIZE,
) -> World:
    """Build a world holding one empty session.

    ``rng`` wins over ``seed``; with neither, spawns are nondeterministic.
    Tiles are placed by ``TurnSystem.reset_game``.
    """
    world = World()
    setattr(world, "random", rng or make_rng(seed))

    # Single session entity carrying every engine singleton.
    world.create_entity(
        Board(size=size),
        SessionState(),
        SelectedLine(line_type=LineType(DEFAULT_LINE_TYPE), index=DEFAULT_LINE_INDEX),
        TurnState(),
    )
    return world
