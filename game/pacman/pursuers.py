"""
Pursuer behaviour: loose, stochastic chasing on the maze grid.

Each tick a pursuer may pick a new target (a random point or the player),
lists the cardinal directions it can move in without hitting a wall, heads
the way that brings it closest to its target and takes one step. Confused
pursuers wander instead, and vulnerable ones move at half speed.
"""

from __future__ import annotations

import random
from typing import List, Tuple

from .config import EngineConfig
from .entities import CARDINALS, Direction, Pursuer
from .maze import Maze
from .movement import step_offset, try_move
from .utils import distance


def pursuer_speed(pursuer: Pursuer, config: EngineConfig) -> float:
    return config.vulnerable_speed if pursuer.vulnerable else config.pursuer_speed


def _random_point(maze: Maze, rng: random.Random) -> Tuple[float, float]:
    return rng.uniform(0.0, maze.pixel_width), rng.uniform(0.0, maze.pixel_height)


def flee_point(pursuer: Pursuer, player_pos: Tuple[float, float]) -> Tuple[float, float]:
    """The player's position mirrored through the pursuer"""
    px, py = player_pos
    return 2 * pursuer.x - px, 2 * pursuer.y - py


def select_target(
    pursuer: Pursuer,
    player_pos: Tuple[float, float],
    maze: Maze,
    rng: random.Random,
    config: EngineConfig,
):
    """Maybe re-aim the pursuer at a random point, at the player, or away from it"""
    if pursuer.is_confused:
        if rng.random() < config.confused_retarget_chance:
            pursuer.target_x, pursuer.target_y = _random_point(maze, rng)
        return

    if rng.random() < config.retarget_chance:
        if rng.random() < config.wander_share:
            pursuer.target_x, pursuer.target_y = _random_point(maze, rng)
        elif pursuer.vulnerable and config.flee_when_vulnerable:
            pursuer.target_x, pursuer.target_y = flee_point(pursuer, player_pos)
        else:
            pursuer.target_x, pursuer.target_y = player_pos


def valid_directions(pursuer: Pursuer, maze: Maze, speed: float) -> List[Direction]:
    rect = pursuer.rect
    return [d for d in CARDINALS if try_move(maze, rect, d, speed) is not None]


def choose_direction(pursuer: Pursuer, valid: List[Direction], rng: random.Random) -> Direction:
    """Pick a heading among `valid`; keep the current one if nothing is open"""
    if not valid:
        return pursuer.direction
    if pursuer.is_confused:
        return rng.choice(valid)

    def dist_after_unit_step(d: Direction) -> float:
        dx, dy = step_offset(d, 1.0)
        return distance(pursuer.x + dx, pursuer.y + dy, pursuer.target_x, pursuer.target_y)

    # min() keeps the first of equal keys, i.e. Up, Down, Left, Right order
    return min(valid, key=dist_after_unit_step)


def update_pursuer(
    pursuer: Pursuer,
    player_pos: Tuple[float, float],
    maze: Maze,
    rng: random.Random,
    config: EngineConfig,
):
    """Run one tick of behaviour for a single pursuer"""
    select_target(pursuer, player_pos, maze, rng, config)

    speed = pursuer_speed(pursuer, config)
    pursuer.direction = choose_direction(pursuer, valid_directions(pursuer, maze, speed), rng)

    if pursuer.direction is Direction.NONE:
        return
    moved = try_move(maze, pursuer.rect, pursuer.direction, speed)
    if moved is not None:
        pursuer.x, pursuer.y = moved.x, moved.y
