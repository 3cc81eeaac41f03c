"""Line selection: which row or column the next directional command acts on."""
from dataclasses import dataclass
from enum import Enum

from linefix.constants import DEFAULT_LINE_INDEX


class LineType(Enum):
    ROW = "row"
    COLUMN = "column"


class Direction(Enum):
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"


# Directions a line can be shifted in, keyed by its orientation.
LINE_DIRECTIONS = {
    LineType.ROW: (Direction.LEFT, Direction.RIGHT),
    LineType.COLUMN: (Direction.UP, Direction.DOWN),
}


@dataclass(slots=True)
class SelectedLine:
    """Singleton component naming the currently selected line."""
    line_type: LineType = LineType.ROW
    index: int = DEFAULT_LINE_INDEX


def parse_line_type(value) -> LineType | None:
    """Accept a LineType or its name (``"row"``, ``"column"`` or ``"col"``)."""
    if isinstance(value, LineType):
        return value
    if value == "col":
        return LineType.COLUMN
    try:
        return LineType(value)
    except ValueError:
        return None


def parse_direction(value) -> Direction | None:
    if isinstance(value, Direction):
        return value
    try:
        return Direction(value)
    except ValueError:
        return None
