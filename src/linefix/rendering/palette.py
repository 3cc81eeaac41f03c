import colorsys
from typing import Tuple

BOARD_BACKGROUND = (30, 34, 46)
EMPTY_CELL = (48, 54, 70)
SELECTED_LINE = (250, 214, 92)
TEXT_LIGHT = (236, 240, 246)
TEXT_DIM = (150, 158, 176)
GAME_OVER_TEXT = (240, 96, 96)


def tile_color(rank: int) -> Tuple[int, int, int]:
    """Fill colour for a tile: hue walks with rank, higher ranks get darker."""
    hue = 190 + (rank * 18) % 150
    light = max(32, 54 - rank * 2)
    r, g, b = colorsys.hls_to_rgb(hue / 360.0, light / 100.0, 0.70)
    return int(round(r * 255)), int(round(g * 255)), int(round(b * 255))
