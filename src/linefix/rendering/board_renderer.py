from __future__ import annotations

from typing import TYPE_CHECKING, Dict, Tuple

from linefix.components.animation_merge import MergeAnimation
from linefix.components.animation_shift import ShiftAnimation
from linefix.components.animation_spawn import SpawnAnimation
from linefix.components.floating_score import FloatingScore
from linefix.components.duration import Duration
from linefix.components.selected_line import LineType
from linefix.rendering.palette import (BOARD_BACKGROUND, EMPTY_CELL, SELECTED_LINE,
                                       TEXT_LIGHT, tile_color)
from linefix.systems.board_ops import Position
from linefix.ui.layout import cell_center

if TYPE_CHECKING:
    from linefix.systems.render import RenderSystem


def ease_in_out(p: float) -> float:
    if p < 0.5:
        return 2 * p * p
    return -2 * p * p + 4 * p - 1


class BoardRenderer:
    def __init__(self, render_system: RenderSystem, padding: int = 6):
        self._rs = render_system
        self._padding = padding

    def _animation_maps(self):
        world = self._rs.world
        shift_by_dst: Dict[Position, ShiftAnimation] = {}
        for _, anim in world.get_component(ShiftAnimation):
            shift_by_dst[anim.dst] = anim
        merge_by_dst: Dict[Position, MergeAnimation] = {}
        for _, anim in world.get_component(MergeAnimation):
            current = merge_by_dst.get(anim.dst)
            # Show the earliest unfinished round for a cell.
            if current is None or anim.chain < current.chain:
                merge_by_dst[anim.dst] = anim
        spawn_by_pos: Dict[Position, SpawnAnimation] = {}
        for _, anim in world.get_component(SpawnAnimation):
            spawn_by_pos[anim.pos] = anim
        return shift_by_dst, merge_by_dst, spawn_by_pos

    def render(self, arcade, cells, selected, geometry: Tuple[int, float, float], headless: bool) -> None:
        rs = self._rs
        tile_size, start_x, start_y = geometry
        size = len(cells)
        shift_by_dst, merge_by_dst, spawn_by_pos = self._animation_maps()
        rs._last_tile_layout = {}

        if not headless:
            arcade.draw_lbwh_rectangle_filled(start_x - 4, start_y - 4, tile_size * size + 8, tile_size * size + 8, BOARD_BACKGROUND)
            for r in range(size):
                for c in range(size):
                    x, y = cell_center(r, c, tile_size, start_x, start_y, size)
                    half = (tile_size - self._padding) / 2
                    arcade.draw_lrbt_rectangle_filled(x - half, x + half, y - half, y + half, EMPTY_CELL)

        for r in range(size):
            for c in range(size):
                rank = cells[r][c]
                if rank == 0:
                    continue
                draw_x, draw_y = cell_center(r, c, tile_size, start_x, start_y, size)
                scale = 1.0
                shown_rank = rank
                shift_anim = shift_by_dst.get((r, c))
                if shift_anim is not None and shift_anim.linear < 1.0:
                    p = ease_in_out(shift_anim.linear)
                    src_x, src_y = cell_center(*shift_anim.src, tile_size, start_x, start_y, size)
                    draw_x = src_x + (draw_x - src_x) * p
                    draw_y = src_y + (draw_y - src_y) * p
                merge_anim = merge_by_dst.get((r, c))
                if merge_anim is not None and merge_anim.linear < 1.0:
                    # Pulse while the merged tile settles into its new rank.
                    scale = 1.0 + 0.15 * (1.0 - abs(2 * merge_anim.linear - 1.0))
                    if merge_anim.linear == 0.0:
                        shown_rank = merge_anim.rank - 1
                spawn_anim = spawn_by_pos.get((r, c))
                if spawn_anim is not None and spawn_anim.scale < 1.0:
                    scale = spawn_anim.scale
                draw_size = max((tile_size - self._padding) * scale, 0)
                rs._last_tile_layout[(r, c)] = {"center": (draw_x, draw_y), "size": draw_size, "rank": shown_rank}
                if headless or draw_size <= 0:
                    continue
                half = draw_size / 2
                arcade.draw_lrbt_rectangle_filled(draw_x - half, draw_x + half, draw_y - half, draw_y + half, tile_color(shown_rank))
                arcade.draw_text(
                    str(shown_rank), draw_x, draw_y, TEXT_LIGHT, max(10, int(draw_size * 0.4)),
                    anchor_x="center", anchor_y="center", bold=True,
                )

        if headless:
            return
        self._draw_selection(arcade, selected, tile_size, start_x, start_y, size)
        self._draw_floating_scores(arcade, tile_size, start_x, start_y, size)

    def _draw_selection(self, arcade, selected, tile_size, start_x, start_y, size) -> None:
        if selected.line_type is LineType.ROW:
            left = start_x
            right = start_x + tile_size * size
            bottom = start_y + (size - 1 - selected.index) * tile_size
            top = bottom + tile_size
        else:
            left = start_x + selected.index * tile_size
            right = left + tile_size
            bottom = start_y
            top = start_y + tile_size * size
        arcade.draw_lrbt_rectangle_outline(left, right, bottom, top, SELECTED_LINE, border_width=3)

    def _draw_floating_scores(self, arcade, tile_size, start_x, start_y, size) -> None:
        world = self._rs.world
        for ent, marker in world.get_component(FloatingScore):
            lifetime = world.component_for_entity(ent, Duration).value
            progress = min(1.0, marker.age / lifetime) if lifetime > 0 else 1.0
            x, y = cell_center(*marker.pos, tile_size, start_x, start_y, size)
            alpha = int(255 * (1.0 - progress))
            arcade.draw_text(
                f"+{marker.amount}", x, y + tile_size * (0.25 + 0.4 * progress),
                (*SELECTED_LINE, alpha), max(10, int(tile_size * 0.22)),
                anchor_x="center", anchor_y="center", bold=True,
            )
