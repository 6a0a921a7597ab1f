"""Entry point for the Orbchain hot-seat chain reaction game.

Sets up ECS world, event bus, systems, and Arcade window.
"""
import argparse
import logging

from arcade import Window, run, set_background_color, color
import arcade

from orbchain.constants import MAX_PLAYERS, MIN_PLAYERS
from orbchain.events.bus import EVENT_TICK, EventBus, EVENT_MOUSE_PRESS, EVENT_NEW_GAME_REQUEST
from orbchain.systems.animation import AnimationSystem
from orbchain.systems.input import InputSystem
from orbchain.systems.move_system import MoveSystem
from orbchain.systems.outcome_system import OutcomeSystem
from orbchain.systems.render import RenderSystem
from orbchain.systems.turn_system import TurnSystem
from orbchain.world import create_world


class OrbchainWindow(Window):
    def __init__(self, player_count: int = MIN_PLAYERS):
        super().__init__(800, 600, "Orbchain", resizable=True)
        self.set_update_rate(1/60)
        self.event_bus = EventBus()
        self.world = create_world(player_count=player_count)

        # Interface systems
        self.render_system = RenderSystem(self.world, self.event_bus, self)
        self.input_system = InputSystem(self.event_bus, self, self.world)

        # Board and animation systems
        self.animation_system = AnimationSystem(self.world, self.event_bus)
        self.move_system = MoveSystem(self.world, self.event_bus)

        # Turn and outcome systems
        self.turn_system = TurnSystem(self.world, self.event_bus)
        self.outcome_system = OutcomeSystem(self.world, self.event_bus)

        set_background_color(color.BLACK)

    def on_draw(self):
        self.clear()
        self.render_system.process()

    def on_update(self, delta_time: float):
        self.event_bus.emit(EVENT_TICK, dt=delta_time)

    def on_mouse_press(self, x: float, y: float, button: int, modifiers: int):
        self.event_bus.emit(EVENT_MOUSE_PRESS, x=x, y=y, button=button)

    def on_key_press(self, symbol: int, modifiers: int):
        if symbol == arcade.key.R:
            self.event_bus.emit(EVENT_NEW_GAME_REQUEST)
        elif symbol == arcade.key.ESCAPE:
            self.close()


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Hot-seat chain reaction game.")
    parser.add_argument(
        "--players", type=int, default=MIN_PLAYERS, choices=range(MIN_PLAYERS, MAX_PLAYERS + 1),
        help="number of players sharing this screen",
    )
    parser.add_argument("--log-level", default="INFO", help="logging level (DEBUG, INFO, ...)")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    window = OrbchainWindow(player_count=args.players)
    run()

if __name__ == "__main__":
    main()
