"""
Game state machine: one call to tick() advances the whole simulation by one
discrete step.

Movement advances a fixed distance per tick so entities stay aligned with the
grid; timers (power-up window, confusion, respawn) count down by the delta
time handed in by the caller so they are independent of the frame rate.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import List, NamedTuple, Optional, Sequence, Tuple, Union

from .config import EngineConfig
from .entities import Direction, Player, Pursuer
from .maze import Maze, load_maze
from .movement import can_turn, is_at_grid_center, snap_to_grid, try_move
from .pursuers import update_pursuer
from .utils import centers_touch

logger = logging.getLogger(__name__)

Point = Tuple[float, float]


class GamePhase(Enum):
    PLAYING = "playing"
    GAME_OVER_MENU = "game_over_menu"


class PursuerView(NamedTuple):
    x: float
    y: float
    color: Tuple[int, int, int]
    vulnerable: bool
    respawning: bool


@dataclass
class EngineState:
    """Everything the simulation needs between ticks"""
    maze: Maze
    config: EngineConfig
    rng: random.Random
    player: Player
    pursuers: List[Pursuer]
    pickups: List[Point]
    power_pickups: List[Point]
    phase: GamePhase = GamePhase.PLAYING
    power_active: bool = False
    power_timer: float = 0.0
    won: bool = False
    quit_requested: bool = False
    ticks: int = 0

    # Running totals for the current game
    pickups_eaten: int = 0
    power_pickups_eaten: int = 0
    captures: int = 0
    lives_lost: int = 0

    # Read-only views for the presentation layer

    @property
    def player_position(self) -> Point:
        return self.player.x, self.player.y

    @property
    def player_direction(self) -> Direction:
        return self.player.direction

    @property
    def score(self) -> int:
        return self.player.score

    @property
    def lives(self) -> int:
        return self.player.lives

    @property
    def game_over(self) -> bool:
        return self.phase is GamePhase.GAME_OVER_MENU

    @property
    def cleared(self) -> bool:
        """Every pickup the maze started with has been eaten"""
        had_any = bool(self.maze.pickups or self.maze.power_pickups)
        return had_any and not self.pickups and not self.power_pickups

    def pursuer_views(self) -> Tuple[PursuerView, ...]:
        return tuple(
            PursuerView(p.x, p.y, p.color, p.vulnerable, p.is_respawning)
            for p in self.pursuers
        )

    def remaining_pickups(self) -> Tuple[Point, ...]:
        return tuple(self.pickups)

    def remaining_power_pickups(self) -> Tuple[Point, ...]:
        return tuple(self.power_pickups)


# ----------------------------
# Construction
# ----------------------------

def spawn_player(maze: Maze, config: EngineConfig, lives: int, score: int = 0) -> Player:
    x, y = maze.spawn_origin(maze.player_spawn, config.player_size)
    return Player(x=x, y=y, size=config.player_size, lives=lives, score=score)


def spawn_pursuers(maze: Maze, config: EngineConfig) -> List[Pursuer]:
    """One pursuer per spawn marker, or a default pack in the middle of the maze"""
    if maze.pursuer_spawns:
        cells = list(maze.pursuer_spawns)
    else:
        cells = [maze.nearest_open_cell((maze.cols // 2, maze.rows // 2))] * config.default_pursuers

    palette = config.palette
    pursuers = []
    for i, cell in enumerate(cells):
        x, y = maze.spawn_origin(cell, config.pursuer_size)
        pursuers.append(Pursuer(x=x, y=y, color=palette[i % len(palette)], size=config.pursuer_size))
    return pursuers


def initialize(
    maze_definition: Union[Maze, Sequence[str]],
    config: Optional[EngineConfig] = None,
    rng: Optional[random.Random] = None,
) -> EngineState:
    """Build a fresh game. Raises MazeConfigError for an unusable maze."""
    config = config or EngineConfig()
    if isinstance(maze_definition, Maze):
        maze = maze_definition
    else:
        maze = load_maze(maze_definition, cell_size=config.cell_size)
    if rng is None:
        rng = random.Random(config.seed)

    return EngineState(
        maze=maze,
        config=config,
        rng=rng,
        player=spawn_player(maze, config, lives=config.starting_lives),
        pursuers=spawn_pursuers(maze, config),
        pickups=list(maze.pickups),
        power_pickups=list(maze.power_pickups),
    )


def reset(state: EngineState, seed: Optional[int] = None) -> EngineState:
    """Start a new game on the same maze"""
    maze, config = state.maze, state.config
    if seed is not None:
        state.rng.seed(seed)

    state.player = spawn_player(maze, config, lives=config.starting_lives)
    state.pursuers = spawn_pursuers(maze, config)
    state.pickups = list(maze.pickups)
    state.power_pickups = list(maze.power_pickups)
    state.phase = GamePhase.PLAYING
    state.power_active = False
    state.power_timer = 0.0
    state.won = False
    state.quit_requested = False
    state.ticks = 0
    state.pickups_eaten = 0
    state.power_pickups_eaten = 0
    state.captures = 0
    state.lives_lost = 0

    logger.info("New game started")
    return state


def request_quit(state: EngineState) -> EngineState:
    state.quit_requested = True
    return state


# ----------------------------
# Per-tick steps
# ----------------------------

def _tick_power_window(state: EngineState, dt: float):
    if not state.power_active:
        return
    state.power_timer -= dt
    if state.power_timer <= 0.0:
        state.power_active = False
        state.power_timer = 0.0
        for p in state.pursuers:
            p.vulnerable = False
        logger.debug("Power-up window expired")


def _tick_pursuer_timers(state: EngineState, dt: float):
    for p in state.pursuers:
        p.confused_timer = max(0.0, p.confused_timer - dt)
        p.respawn_timer = max(0.0, p.respawn_timer - dt)


def _collect_power_pickups(state: EngineState):
    cfg = state.config
    px, py = state.player.center
    remaining = []
    for pellet in state.power_pickups:
        if centers_touch(px, py, cfg.player_size, pellet[0], pellet[1], cfg.power_pickup_size):
            state.power_active = True
            state.power_timer = cfg.power_duration
            for p in state.pursuers:
                p.vulnerable = True
            state.player.score += cfg.power_pickup_points
            state.power_pickups_eaten += 1
            logger.debug("Power-up active for %.1fs", cfg.power_duration)
        else:
            remaining.append(pellet)
    state.power_pickups = remaining


def _reset_positions(state: EngineState):
    """Put everyone back on their spawn points after the player loses a life"""
    cfg = state.config
    state.player.x, state.player.y = state.maze.spawn_origin(state.maze.player_spawn, cfg.player_size)
    state.player.direction = Direction.NONE
    state.player.requested = Direction.NONE
    for p in state.pursuers:
        p.send_home(cfg.confused_duration)


def resolve_pursuer_collisions(state: EngineState) -> bool:
    """Settle player/pursuer contact for this tick.

    A vulnerable pursuer is captured and sent home; any other pursuer costs
    the player a life. Returns True if the game ended.
    """
    cfg = state.config
    px, py = state.player.center
    for p in state.pursuers:
        if p.is_respawning:
            continue
        gx, gy = p.center
        if not centers_touch(px, py, cfg.player_size, gx, gy, p.size):
            continue

        if p.vulnerable:
            p.send_home(cfg.confused_duration, cfg.respawn_duration)
            state.player.score += cfg.capture_points
            state.captures += 1
            logger.debug("Captured pursuer %s (+%d)", p.color, cfg.capture_points)
            continue

        state.player.lives -= 1
        state.lives_lost += 1
        if state.player.lives <= 0:
            state.player.lives = 0
            state.phase = GamePhase.GAME_OVER_MENU
            logger.info("Game over, final score %d", state.player.score)
            return True
        logger.debug("Life lost, %d left", state.player.lives)
        _reset_positions(state)
        break
    return False


def _steer_player(state: EngineState):
    player, maze = state.player, state.maze
    if player.requested is Direction.NONE or player.requested is player.direction:
        return
    if is_at_grid_center(player.x, player.y, player.size, maze.cell_size) and \
            can_turn(maze, player.x, player.y, player.size, player.requested):
        player.direction = player.requested


def _move_player(state: EngineState):
    player, maze = state.player, state.maze
    if player.direction is Direction.NONE:
        return
    moved = try_move(maze, player.rect, player.direction, state.config.player_speed)
    if moved is not None:
        player.x, player.y = moved.x, moved.y
    else:
        player.x, player.y = snap_to_grid(player.x, player.y, player.size, maze.cell_size)
        player.direction = Direction.NONE


def _move_pursuers(state: EngineState):
    player_pos = state.player_position
    for p in state.pursuers:
        if p.is_respawning:
            continue
        update_pursuer(p, player_pos, state.maze, state.rng, state.config)


def _collect_pickups(state: EngineState):
    cfg = state.config
    px, py = state.player.center
    remaining = []
    for dot in state.pickups:
        if centers_touch(px, py, cfg.player_size, dot[0], dot[1], cfg.pickup_size):
            state.player.score += cfg.pickup_points
            state.pickups_eaten += 1
        else:
            remaining.append(dot)
    state.pickups = remaining


def tick(state: EngineState, dt: float, requested_direction: Optional[Direction] = None) -> EngineState:
    """Advance the game by one step, mutating and returning `state`.

    `requested_direction` replaces the player's queued turn when given; pass
    None to keep the previous request. Nothing happens while the game-over
    menu is up.
    """
    if state.phase is GamePhase.GAME_OVER_MENU:
        return state
    if requested_direction is not None:
        state.player.requested = requested_direction

    state.ticks += 1
    _tick_power_window(state, dt)
    _tick_pursuer_timers(state, dt)
    _collect_power_pickups(state)

    if resolve_pursuer_collisions(state):
        return state

    _steer_player(state)
    _move_player(state)
    _move_pursuers(state)
    _collect_pickups(state)

    if state.cleared:
        state.won = True
        state.phase = GamePhase.GAME_OVER_MENU
        logger.info("Maze cleared, final score %d", state.player.score)
    return state
