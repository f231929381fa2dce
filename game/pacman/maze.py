"""
Maze model: parses a character grid into walls, pickups and spawn points.

Character roles:
    W   wall
    .   pickup
    o   power-pickup
    P   player spawn (first one wins)
    G   pursuer spawn, one pursuer per marker
    anything else, and cells missing from short rows, is empty floor
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import FrozenSet, List, Sequence, Tuple

from .entities import Rect

logger = logging.getLogger(__name__)

WALL = "W"
PICKUP = "."
POWER_PICKUP = "o"
PLAYER_SPAWN = "P"
PURSUER_SPAWN = "G"

CELL_SIZE = 30.0

Cell = Tuple[int, int]  # (col, row)
Point = Tuple[float, float]

DEFAULT_MAP = (
    "WWWWWWWWWWWWWWWWWWWW",
    "Wo.......W........oW",
    "W.WW.WWW.W.WWW.WW.WW",
    "W..................W",
    "W.WW.W.WWWWW.W.WW.WW",
    "W....W...W...W....WW",
    "WWWW.WWW.W.WWW.WWWWW",
    "   W.W.......W.W   W",
    "WWWW.W.WW WW.W.WWWWW",
    "W....... GG ......W",
    "WWWW.W.WWWWW.W.WWWWW",
    "   W.W.......W.....W",
    "WWWW.W.WWWWW.W.WWWWW",
    "W........W........WW",
    "W.WW.WWW.W.WWW.WW.WW",
    "W..W.....P.....W..WW",
    "WW.W.W.WWWWW.W.W.WWW",
    "W....W...W...W....WW",
    "WoWWWWWW.W.WWWWWW.oW",
    "WWWWWWWWWWWWWWWWWWWW",
)


class MazeConfigError(ValueError):
    """Raised when a maze definition cannot be turned into a playable game"""


@dataclass(frozen=True)
class Maze:
    """Immutable maze geometry; built once by load_maze"""
    cols: int
    rows: int
    cell_size: float
    walls: Tuple[Rect, ...]
    pickups: Tuple[Point, ...]
    power_pickups: Tuple[Point, ...]
    player_spawn: Cell
    pursuer_spawns: Tuple[Cell, ...]
    wall_cells: FrozenSet[Cell]

    @property
    def pixel_width(self) -> float:
        return self.cols * self.cell_size

    @property
    def pixel_height(self) -> float:
        return self.rows * self.cell_size

    def cell_center(self, cell: Cell) -> Point:
        col, row = cell
        return (col + 0.5) * self.cell_size, (row + 0.5) * self.cell_size

    def spawn_origin(self, cell: Cell, size: float) -> Point:
        """Top-left corner of a hitbox of `size` centred in `cell`"""
        col, row = cell
        pad = (self.cell_size - size) / 2.0
        return col * self.cell_size + pad, row * self.cell_size + pad

    def is_wall(self, cell: Cell) -> bool:
        return cell in self.wall_cells

    def nearest_open_cell(self, cell: Cell) -> Cell:
        """Closest non-wall cell to `cell` by grid steps, ties going to the lower row, then column"""
        col, row = cell
        open_cells = [
            (c, r) for r in range(self.rows) for c in range(self.cols) if (c, r) not in self.wall_cells
        ]
        if not open_cells:
            return cell
        return min(open_cells, key=lambda cr: (abs(cr[0] - col) + abs(cr[1] - row), cr[1], cr[0]))

    def is_blocked(self, rect: Rect) -> bool:
        """True iff `rect` overlaps any wall rectangle"""
        c = self.cell_size
        first_col = math.floor(rect.x / c)
        last_col = math.ceil((rect.x + rect.w) / c) - 1
        first_row = math.floor(rect.y / c)
        last_row = math.ceil((rect.y + rect.h) / c) - 1
        for row in range(first_row, last_row + 1):
            for col in range(first_col, last_col + 1):
                if (col, row) in self.wall_cells:
                    return True
        return False


def load_maze(grid: Sequence[str], cell_size: float = CELL_SIZE) -> Maze:
    """Parse a character grid into a Maze.

    Raises MazeConfigError if the grid is empty or has no player spawn.
    """
    if not grid or not any(grid):
        raise MazeConfigError("maze grid is empty")

    walls: List[Rect] = []
    wall_cells = set()
    pickups: List[Point] = []
    power_pickups: List[Point] = []
    pursuer_spawns: List[Cell] = []
    player_spawn = None

    for row, line in enumerate(grid):
        for col, ch in enumerate(line):
            x = col * cell_size
            y = row * cell_size
            if ch == WALL:
                walls.append(Rect(x, y, cell_size, cell_size))
                wall_cells.add((col, row))
            elif ch == PICKUP:
                pickups.append((x + cell_size / 2.0, y + cell_size / 2.0))
            elif ch == POWER_PICKUP:
                power_pickups.append((x + cell_size / 2.0, y + cell_size / 2.0))
            elif ch == PLAYER_SPAWN:
                if player_spawn is None:
                    player_spawn = (col, row)
            elif ch == PURSUER_SPAWN:
                pursuer_spawns.append((col, row))

    if player_spawn is None:
        raise MazeConfigError(f"maze has no player spawn marker '{PLAYER_SPAWN}'")

    maze = Maze(
        cols=max(len(line) for line in grid),
        rows=len(grid),
        cell_size=cell_size,
        walls=tuple(walls),
        pickups=tuple(pickups),
        power_pickups=tuple(power_pickups),
        player_spawn=player_spawn,
        pursuer_spawns=tuple(pursuer_spawns),
        wall_cells=frozenset(wall_cells),
    )
    logger.info(
        "Loaded %dx%d maze: %d walls, %d pickups, %d power-pickups, %d pursuer spawns",
        maze.cols, maze.rows, len(walls), len(pickups), len(power_pickups), len(pursuer_spawns),
    )
    return maze

