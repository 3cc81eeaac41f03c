from dataclasses import dataclass
from enum import Enum, auto


class TurnPhase(Enum):
    IDLE = auto()
    TURN_IN_PROGRESS = auto()
    GAME_OVER = auto()


@dataclass(slots=True)
class TurnState:
    """Tracks the turn state machine shared across systems.

    ``in_flight`` is raised by the presentation layer while the previous
    turn's animations are still settling; new turns are refused until it drops.
    """

    phase: TurnPhase = TurnPhase.IDLE
    in_flight: bool = False
