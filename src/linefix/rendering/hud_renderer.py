from __future__ import annotations

from typing import TYPE_CHECKING

from linefix.components.selected_line import LineType
from linefix.rendering.palette import GAME_OVER_TEXT, TEXT_DIM, TEXT_LIGHT

if TYPE_CHECKING:
    from linefix.components.selected_line import SelectedLine
    from linefix.components.session_state import SessionState

KEY_HINTS = "1-5 row  Z-B column  arrows/WASD shift  N new game"


def line_label(selected: SelectedLine) -> str:
    prefix = "R" if selected.line_type is LineType.ROW else "C"
    return f"{prefix}{selected.index + 1}"


def hud_lines(session: SessionState, selected: SelectedLine) -> list[str]:
    return [
        f"Score {session.score}   Best {session.best_score}",
        f"Max tile {session.max_tile}   Best tile {session.best_tile}",
        f"Line {line_label(selected)}   Turn {session.turn}",
    ]


class HudRenderer:
    """Score panel, selected line label, status text and key hints above the board."""

    def render(self, arcade, session: SessionState, selected: SelectedLine, width: int, height: int) -> None:
        y = height - 30
        for text in hud_lines(session, selected):
            arcade.draw_text(text, width / 2, y, TEXT_LIGHT, 18, anchor_x="center", anchor_y="center")
            y -= 28
        status_color = GAME_OVER_TEXT if session.game_over else TEXT_LIGHT
        arcade.draw_text(session.status, width / 2, y, status_color, 14, anchor_x="center", anchor_y="center", bold=session.game_over)
        arcade.draw_text(KEY_HINTS, width / 2, 14, TEXT_DIM, 11, anchor_x="center", anchor_y="center")
