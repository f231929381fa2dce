"""
Arcade drawing for engine state. The engine works top-down (y grows
downwards, like the maze text); Arcade draws bottom-up, so every y is
flipped against the maze height here.
"""

import arcade

from .engine import EngineState

BG_C = (0, 0, 0)
WALL_C = (33, 33, 222)
PICKUP_C = (255, 255, 255)
POWER_C = (255, 255, 255)
PLAYER_C = (255, 255, 0)
VULNERABLE_C = (0, 0, 255)
HUD_C = (255, 255, 255)


def draw_state(state: EngineState):
    """Draw walls, pickups, player and pursuers"""
    cfg = state.config
    h = state.maze.pixel_height

    for wall in state.maze.walls:
        arcade.draw_lrbt_rectangle_filled(
            wall.x, wall.x + wall.w, h - (wall.y + wall.h), h - wall.y, WALL_C
        )

    for x, y in state.pickups:
        arcade.draw_circle_filled(x, h - y, cfg.pickup_size / 2, PICKUP_C)

    for x, y in state.power_pickups:
        arcade.draw_circle_filled(x, h - y, cfg.power_pickup_size / 2, POWER_C)

    px, py = state.player.center
    arcade.draw_circle_filled(px, h - py, state.player.size / 2, PLAYER_C)

    # Respawning pursuers are hidden until their timer runs out
    for p in state.pursuers:
        if p.is_respawning:
            continue
        gx, gy = p.center
        color = VULNERABLE_C if p.vulnerable else p.color
        arcade.draw_circle_filled(gx, h - gy, p.size / 2, color)


def draw_hud(state: EngineState, window_h: float):
    arcade.draw_text(f"Score: {state.score}", 10, window_h - 24, HUD_C, 14)
    arcade.draw_text(f"Lives: {state.lives}", 10, window_h - 44, HUD_C, 14)


class EnvWindow(arcade.Window):
    """Arcade window for rendering the Gym environment"""

    def __init__(self, env, width: int, height: int):
        super().__init__(width, height, "PacmanEnv - Arcade")
        self.env = env
        self.background_color = BG_C

    def on_draw(self):
        self.clear()
        state = self.env.state
        draw_state(state)
        draw_hud(state, self.height)
        arcade.draw_text(f"Step: {self.env._step_count}", 10, self.height - 64, HUD_C, 14)
