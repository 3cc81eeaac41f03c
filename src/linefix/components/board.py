from dataclasses import dataclass, field
from typing import List

from linefix.constants import BOARD_SIZE


@dataclass(slots=True)
class Board:
    """Square grid of tile ranks (0 = empty).

    ``cells`` is indexed ``cells[row][col]``; the size never changes for the
    lifetime of a session.
    """
    size: int = BOARD_SIZE
    cells: List[List[int]] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.cells:
            self.cells = [[0] * self.size for _ in range(self.size)]
