from typing import Any

from linefix.rendering.board_renderer import BoardRenderer
from linefix.rendering.hud_renderer import HudRenderer
from linefix.systems.board_ops import get_board
from linefix.systems.session_utils import get_or_create_selected_line, get_or_create_session
from linefix.ui.layout import compute_board_geometry
from esper import World

PADDING = 6

class RenderSystem:
    """Draws the board, animations and score panel from world state.

    Purely a reader: it never mutates engine components.
    """
    def __init__(self, world: World, window):
        self.world = world
        self.window = window
        self._last_tile_layout: dict[tuple[int, int], dict[str, Any]] = {}
        self._board_renderer = BoardRenderer(self, padding=PADDING)
        self._hud_renderer = HudRenderer()

    def geometry(self):
        board = get_board(self.world)
        return compute_board_geometry(self.window.width, self.window.height, board.size)

    def tile_layout(self) -> dict[tuple[int, int], dict[str, Any]]:
        return dict(self._last_tile_layout)

    def process(self):
        # Local import keeps tests headless without creating a window.
        import arcade
        # Headless safeguard: without an active window only the layout cache is built.
        headless = False
        try:
            arcade.get_window()
        except Exception:
            headless = True
        board = get_board(self.world)
        selected = get_or_create_selected_line(self.world)
        self._board_renderer.render(arcade, board.cells, selected, self.geometry(), headless)
        if headless:
            return
        session = get_or_create_session(self.world)
        self._hud_renderer.render(arcade, session, selected, self.window.width, self.window.height)
