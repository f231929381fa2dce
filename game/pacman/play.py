"""
Play the maze chase game with the keyboard.

    python -m game.pacman.play [--seed N] [--verbose]

Arrow keys queue a turn that is taken at the next cell centre. When the
game ends a menu offers "Play Again" and "Exit".
"""

import argparse
import logging
from typing import Optional

import arcade

from .config import EngineConfig
from .engine import EngineState, initialize, request_quit, reset, tick
from .entities import Direction
from .maze import DEFAULT_MAP, MazeConfigError
from .menu import EXIT, PLAY_AGAIN, menu_box, menu_buttons, hit_test
from .rendering import BG_C, draw_hud, draw_state

KEY_DIRECTIONS = {
    arcade.key.UP: Direction.UP,
    arcade.key.DOWN: Direction.DOWN,
    arcade.key.LEFT: Direction.LEFT,
    arcade.key.RIGHT: Direction.RIGHT,
}


class PacmanWindow(arcade.Window):
    """Presentation layer: ticks the engine every frame and draws it"""

    def __init__(self, state: EngineState):
        super().__init__(
            int(state.maze.pixel_width), int(state.maze.pixel_height), "Pac-Man"
        )
        self.state = state
        self.background_color = BG_C
        # Latest key press, handed to the engine on the next tick
        self._pending: Optional[Direction] = None

    def on_update(self, delta_time: float):
        tick(self.state, delta_time, self._pending)
        self._pending = None

    def on_key_press(self, key, modifiers):
        if self.state.game_over:
            return
        if key in KEY_DIRECTIONS:
            self._pending = KEY_DIRECTIONS[key]

    def on_mouse_press(self, x, y, button, modifiers):
        if not self.state.game_over or button != arcade.MOUSE_BUTTON_LEFT:
            return
        action = hit_test(self.width, self.height, x, y)
        if action == PLAY_AGAIN:
            reset(self.state)
        elif action == EXIT:
            request_quit(self.state)
            self.close()

    def on_draw(self):
        self.clear()
        draw_state(self.state)
        draw_hud(self.state, self.height)
        if self.state.game_over:
            self._draw_menu()

    def _draw_menu(self):
        w, h = self.width, self.height
        arcade.draw_lrbt_rectangle_filled(0, w, 0, h, (0, 0, 0, 178))

        left, right, bottom, top = menu_box(w, h)
        arcade.draw_lrbt_rectangle_filled(left, right, bottom, top, (51, 51, 51))

        title = "YOU WIN!" if self.state.won else "GAME OVER!"
        arcade.draw_text(title, w / 2, top - 50, arcade.color.RED, 24, anchor_x="center")
        arcade.draw_text(f"Final Score: {self.state.score}", w / 2, top - 90,
                         arcade.color.WHITE, 14, anchor_x="center")

        play_again, exit_button = menu_buttons(w, h)
        for button, fill, ink in ((play_again, arcade.color.GREEN, arcade.color.BLACK),
                                  (exit_button, arcade.color.RED, arcade.color.WHITE)):
            arcade.draw_lrbt_rectangle_filled(button.left, button.right, button.bottom, button.top, fill)
            arcade.draw_text(button.label, button.left + button.width / 2, button.bottom + 12,
                             ink, 14, anchor_x="center")


def main():
    parser = argparse.ArgumentParser(description="Play Pac-Man")
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for pursuer behaviour (default: random)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log engine events",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        state = initialize(DEFAULT_MAP, EngineConfig(seed=args.seed))
    except MazeConfigError as e:
        parser.exit(1, f"Bad maze: {e}\n")

    PacmanWindow(state)
    arcade.run()


if __name__ == "__main__":
    main()
