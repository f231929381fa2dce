"""
Grid-constrained movement and wall collision.

Entities carry a square hitbox smaller than a cell, centred in the cell they
occupy, so they can slide along a corridor without grazing its walls. They
may only change direction when their hitbox is centred in a cell.
"""

from __future__ import annotations

from typing import Optional, Tuple

from .entities import Direction, Rect
from .maze import Maze

# How close (in pixels) an entity must be to a cell centre to count as centred
GRID_EPSILON = 1.0


def step_offset(direction: Direction, speed: float) -> Tuple[float, float]:
    return direction.dx * speed, direction.dy * speed


def try_move(maze: Maze, rect: Rect, direction: Direction, speed: float) -> Optional[Rect]:
    """Return `rect` moved `speed` pixels along `direction`, or None if a wall is in the way"""
    dx, dy = step_offset(direction, speed)
    candidate = rect.offset(dx, dy)
    if maze.is_blocked(candidate):
        return None
    return candidate


def _cell_pad(size: float, cell_size: float) -> float:
    return (cell_size - size) / 2.0


def snap_to_grid(x: float, y: float, size: float, cell_size: float) -> Tuple[float, float]:
    """Round a hitbox origin to the nearest cell-centred origin"""
    pad = _cell_pad(size, cell_size)
    sx = round((x - pad) / cell_size) * cell_size + pad
    sy = round((y - pad) / cell_size) * cell_size + pad
    return sx, sy


def is_at_grid_center(x: float, y: float, size: float, cell_size: float) -> bool:
    sx, sy = snap_to_grid(x, y, size, cell_size)
    return abs(x - sx) < GRID_EPSILON and abs(y - sy) < GRID_EPSILON


def can_turn(maze: Maze, x: float, y: float, size: float, direction: Direction) -> bool:
    """True if the cell next to the entity's snapped cell in `direction` is open"""
    if direction is Direction.NONE:
        return False
    sx, sy = snap_to_grid(x, y, size, maze.cell_size)
    return try_move(maze, Rect(sx, sy, size, size), direction, maze.cell_size) is not None
