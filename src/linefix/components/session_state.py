from dataclasses import dataclass
from typing import Tuple

from linefix.constants import STATUS_NEUTRAL


@dataclass(slots=True)
class SessionState:
    """Running score and best-ever records for the active session.

    ``best_score`` and ``best_tile`` survive resets; everything else is
    cleared when a new game starts.
    """

    score: int = 0
    max_tile: int = 0
    best_score: int = 0
    best_tile: int = 0
    turn: int = 0
    game_over: bool = False
    status: str = STATUS_NEUTRAL

    def note_tile(self, rank: int) -> None:
        if rank > self.max_tile:
            self.max_tile = rank

    def record_bests(self) -> Tuple[int, int]:
        self.best_score = max(self.best_score, self.score)
        self.best_tile = max(self.best_tile, self.max_tile)
        return self.best_score, self.best_tile
