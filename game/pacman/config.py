"""
Engine tunables. Defaults reproduce the classic arcade timings on a 30px grid.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

Color = Tuple[int, int, int]

RED = (255, 0, 0)
CYAN = (0, 255, 255)
MAGENTA = (255, 0, 255)
PINK = (255, 184, 255)
ORANGE = (255, 184, 82)


@dataclass(frozen=True)
class EngineConfig:
    # Sizes (px)
    cell_size: float = 30.0
    player_size: float = 25.0
    pursuer_size: float = 25.0
    pickup_size: float = 6.0
    power_pickup_size: float = 15.0

    # Movement, px per tick (never scaled by dt)
    player_speed: float = 1.0
    pursuer_speed: float = 0.5
    vulnerable_speed: float = 0.25

    # Timers, seconds
    power_duration: float = 5.0
    confused_duration: float = 3.0
    respawn_duration: float = 1.0

    # Scoring
    pickup_points: int = 10
    power_pickup_points: int = 0
    capture_points: int = 200
    starting_lives: int = 3

    # Pursuer steering odds, per tick
    retarget_chance: float = 0.05
    wander_share: float = 0.6  # of retargets that pick a random point instead of the player
    flee_when_vulnerable: bool = True  # vulnerable pursuers aim away from the player
    confused_retarget_chance: float = 0.1

    # Pursuer colours; cycled over the maze's spawn markers
    palette: Tuple[Color, ...] = (RED, CYAN, MAGENTA, PINK, ORANGE)
    default_pursuers: int = 3  # when the maze has no spawn markers

    seed: Optional[int] = None
