"""
Maze entity dataclasses
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from .utils import rects_overlap


class Direction(Enum):
    """Cardinal movement directions; NONE means standing still"""
    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)
    NONE = (0, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]


# Enumeration order doubles as the tie-break order for pursuer steering
CARDINALS = (Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT)


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle, (x, y) is the top-left corner"""
    x: float
    y: float
    w: float
    h: float

    def overlaps(self, other: "Rect") -> bool:
        return rects_overlap(self.x, self.y, self.w, self.h,
                             other.x, other.y, other.w, other.h)

    def offset(self, dx: float, dy: float) -> "Rect":
        return Rect(self.x + dx, self.y + dy, self.w, self.h)

    @property
    def center(self) -> Tuple[float, float]:
        return self.x + self.w / 2.0, self.y + self.h / 2.0


@dataclass
class Player:
    """Player-controlled agent; (x, y) is the hitbox top-left corner"""
    x: float
    y: float
    size: float = 25.0
    direction: Direction = Direction.NONE
    requested: Direction = Direction.NONE
    lives: int = 3
    score: int = 0

    @property
    def rect(self) -> Rect:
        return Rect(self.x, self.y, self.size, self.size)

    @property
    def center(self) -> Tuple[float, float]:
        return self.x + self.size / 2.0, self.y + self.size / 2.0


@dataclass
class Pursuer:
    """Autonomous ghost that chases, wanders, or flees from the player"""
    x: float
    y: float
    color: Tuple[int, int, int]
    spawn: Optional[Tuple[float, float]] = None
    size: float = 25.0
    direction: Direction = Direction.LEFT
    target_x: Optional[float] = None
    target_y: Optional[float] = None
    vulnerable: bool = False
    confused_timer: float = 0.0  # seconds left
    respawn_timer: float = 0.0  # seconds left

    def __post_init__(self):
        if self.spawn is None:
            self.spawn = (self.x, self.y)
        if self.target_x is None:
            self.target_x = self.x
        if self.target_y is None:
            self.target_y = self.y

    @property
    def rect(self) -> Rect:
        return Rect(self.x, self.y, self.size, self.size)

    @property
    def center(self) -> Tuple[float, float]:
        return self.x + self.size / 2.0, self.y + self.size / 2.0

    @property
    def is_confused(self) -> bool:
        return self.confused_timer > 0.0

    @property
    def is_respawning(self) -> bool:
        return self.respawn_timer > 0.0

    def send_home(self, confused_time: float, respawn_time: float = 0.0):
        """Return to the spawn point, dazed for a while"""
        self.x, self.y = self.spawn
        self.direction = Direction.LEFT
        self.vulnerable = False
        self.confused_timer = confused_time
        self.respawn_timer = respawn_time
