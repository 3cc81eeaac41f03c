"""Entry point for the Line Shift Merge puzzle.

Sets up the ECS world, event bus, systems, and Arcade window.
"""
import argparse
import logging
from pathlib import Path

from arcade import Window, run, set_background_color, color
from linefix.world import create_world
from linefix.constants import WINDOW_WIDTH, WINDOW_HEIGHT
from linefix.events.bus import EventBus, EVENT_TICK, EVENT_KEY_PRESS
from linefix.systems.animation import AnimationSystem
from linefix.systems.input import InputSystem
from linefix.systems.records_system import RecordsSystem
from linefix.systems.render import RenderSystem
from linefix.systems.turn_system import TurnSystem


class LineShiftWindow(Window):
    def __init__(self, seed=None, save_path: Path | None = None):
        super().__init__(WINDOW_WIDTH, WINDOW_HEIGHT, "Line Shift Merge", resizable=True)
        self.set_update_rate(1/60)
        self.event_bus = EventBus()
        self.world = create_world(seed=seed)
        # Records load before the first game so the panel shows stored bests.
        self.records_system = RecordsSystem(self.world, self.event_bus, save_path=save_path)
        self.animation_system = AnimationSystem(self.world, self.event_bus)
        self.turn_system = TurnSystem(self.world, self.event_bus)
        self.input_system = InputSystem(self.event_bus)
        self.render_system = RenderSystem(self.world, self)
        set_background_color(color.BLACK)

    def on_draw(self):
        self.clear()
        self.render_system.process()

    def on_update(self, delta_time: float):
        self.event_bus.emit(EVENT_TICK, dt=delta_time)

    def on_key_press(self, symbol: int, modifiers: int):
        self.event_bus.emit(EVENT_KEY_PRESS, symbol=symbol, modifiers=modifiers)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Line Shift Merge puzzle")
    parser.add_argument("--seed", default=None, help="numeric or text token for a reproducible game")
    parser.add_argument("--save-path", type=Path, default=None, help="where best score and best tile are stored")
    parser.add_argument("--verbose", action="store_true", help="log every turn")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    LineShiftWindow(seed=args.seed, save_path=args.save_path)
    run()


if __name__ == "__main__":
    main()
