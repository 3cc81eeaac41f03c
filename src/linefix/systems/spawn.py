from __future__ import annotations

import math
import random
from dataclasses import dataclass
from typing import Callable, List

from linefix.constants import (
    CROWDED_EMPTY_THRESHOLD,
    CROWDED_SPAWN_TABLE,
    OPEN_SPAWN_TABLE,
)
from linefix.systems.board_ops import Grid, Position, list_empties

Roll = Callable[[], float]


@dataclass(slots=True)
class SpawnResult:
    position: Position
    rank: int


def pick_spawn_rank(empty_count: int, roll: Roll) -> int:
    """Choose the rank of a new tile from one draw.

    Crowded boards (``empty_count`` <= 7) spawn 1/2/3 at 80/18/2 percent,
    otherwise 1/2 at 90/10 percent.
    """
    table = CROWDED_SPAWN_TABLE if empty_count <= CROWDED_EMPTY_THRESHOLD else OPEN_SPAWN_TABLE
    value = roll()
    for bound, rank in table:
        if value < bound:
            return rank
    return table[-1][1]


def pick_spawn_cell(empties: List[Position], roll: Roll) -> Position:
    return empties[math.floor(roll() * len(empties))]


def spawn_tile(board: Grid, rng: random.Random) -> SpawnResult | None:
    """Place one new tile on ``board`` in place.

    The cell is drawn before the rank. Returns ``None`` when no cell is empty.
    """
    empties = list_empties(board)
    if not empties:
        return None
    r, c = pick_spawn_cell(empties, rng.random)
    rank = pick_spawn_rank(len(empties), rng.random)
    board[r][c] = rank
    return SpawnResult(position=(r, c), rank=rank)
