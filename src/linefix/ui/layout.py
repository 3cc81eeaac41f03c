from linefix.constants import (BOARD_SIZE, BOTTOM_MARGIN, HEADER_HEIGHT,
                               BOARD_MAX_WIDTH_PCT, BOARD_MAX_HEIGHT_PCT)

def compute_board_geometry(window_width: int, window_height: int, size: int = BOARD_SIZE):
    """Return (tile_size, start_x, start_y) for a board centred under the header.

    start_x/start_y locate the bottom-left corner of the board in window coordinates.
    """
    max_board_w = window_width * BOARD_MAX_WIDTH_PCT
    max_board_h = (window_height - BOTTOM_MARGIN - HEADER_HEIGHT) * BOARD_MAX_HEIGHT_PCT
    tile_size = int(min(max_board_w / size, max_board_h / size))
    if tile_size < 20:
        tile_size = 20  # safety minimum
    total_width = size * tile_size
    start_x = (window_width - total_width) / 2
    start_y = BOTTOM_MARGIN
    return tile_size, start_x, start_y


def cell_center(row: float, col: float, tile_size: int, start_x: float, start_y: float, size: int = BOARD_SIZE):
    """Window coordinates of a cell centre; row 0 is the top row. Accepts fractional rows/cols."""
    x = start_x + col * tile_size + tile_size / 2
    y = start_y + (size - 1 - row) * tile_size + tile_size / 2
    return x, y
