"""Pac-Man module - maze chase engine, Gym environment and Arcade front-end"""

from .config import EngineConfig
from .engine import EngineState, GamePhase, initialize, reset, tick, resolve_pursuer_collisions
from .entities import Direction, Player, Pursuer, Rect
from .maze import DEFAULT_MAP, Maze, MazeConfigError, load_maze
from .pacman_env import PacmanEnv, run_random_episode

__all__ = [
    'EngineConfig', 'EngineState', 'GamePhase', 'initialize', 'reset', 'tick',
    'resolve_pursuer_collisions', 'Direction', 'Player', 'Pursuer', 'Rect',
    'DEFAULT_MAP', 'Maze', 'MazeConfigError', 'load_maze',
    'PacmanEnv', 'run_random_episode',
]
