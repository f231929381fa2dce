import random

import pytest

from game.pacman.config import CYAN, MAGENTA, RED, EngineConfig
from game.pacman.engine import GamePhase, initialize, request_quit, reset, resolve_pursuer_collisions, tick
from game.pacman.entities import Direction
from game.pacman.maze import DEFAULT_MAP, MazeConfigError

from conftest import CORRIDOR, POWER_ROOM, T_JUNCTION, origin

DT = 1 / 60


def test_initialize_rejects_maze_without_player():
    with pytest.raises(MazeConfigError):
        initialize(("WWW", "W.W", "WWW"))


def test_initial_state():
    state = initialize(DEFAULT_MAP)

    assert state.phase is GamePhase.PLAYING
    assert state.lives == 3
    assert state.score == 0
    assert state.player_position == origin(9, 15)
    assert state.player_direction is Direction.NONE
    assert len(state.remaining_pickups()) == len(state.maze.pickups)
    assert len(state.remaining_power_pickups()) == 4


def test_one_pursuer_per_spawn_marker():
    state = initialize(DEFAULT_MAP)
    views = state.pursuer_views()

    assert [(v.x, v.y) for v in views] == [origin(9, 9), origin(10, 9)]
    assert [v.color for v in views] == [RED, CYAN]
    assert not any(v.vulnerable or v.respawning for v in views)


def test_default_pursuers_without_markers():
    state = initialize((
        "WWWWWWW",
        "WP....W",
        "W.....W",
        "WWWWWWW",
    ))

    assert len(state.pursuers) == 3
    assert [p.color for p in state.pursuers] == [RED, CYAN, MAGENTA]
    assert all((p.x, p.y) == origin(3, 2) for p in state.pursuers)


def test_default_pursuers_avoid_a_walled_centre():
    state = initialize((
        "WWWWWWW",
        "WP....W",
        "W..W..W",
        "W.....W",
        "WWWWWWW",
    ))

    assert all((p.x, p.y) == origin(3, 1) for p in state.pursuers)
    assert not any(state.maze.is_blocked(p.rect) for p in state.pursuers)


def test_default_pursuers_roam_the_default_maze():
    state = initialize([row.replace("G", " ") for row in DEFAULT_MAP], EngineConfig(seed=4))
    assert state.maze.is_wall((state.maze.cols // 2, state.maze.rows // 2))
    assert all((p.x, p.y) == origin(10, 9) for p in state.pursuers)
    moved = False

    for _ in range(300):
        if state.game_over:
            reset(state)
        tick(state, DT)
        assert not any(state.maze.is_blocked(p.rect) for p in state.pursuers)
        moved = moved or any((p.x, p.y) != origin(10, 9) for p in state.pursuers)

    assert moved


# ----------------------------
# Player movement
# ----------------------------

def test_turn_applies_at_cell_centre(no_pursuers):
    state = initialize(("WWWWW", "WP..W", "WWWWW"), no_pursuers)
    state.player.direction = Direction.UP

    tick(state, DT, Direction.RIGHT)

    assert state.player_direction is Direction.RIGHT
    assert state.player_position == (33.5, 32.5)


def test_turn_waits_for_cell_centre(no_pursuers):
    state = initialize(T_JUNCTION, no_pursuers)
    tick(state, DT, Direction.RIGHT)
    assert state.player_position == (33.5, 32.5)

    # Mid-cell the down request is remembered but not taken
    for _ in range(29):
        tick(state, DT, Direction.DOWN)
        assert state.player_direction is Direction.RIGHT
    assert state.player_position == (62.5, 32.5)

    tick(state, DT)
    assert state.player_direction is Direction.DOWN
    assert state.player_position == (62.5, 33.5)


def test_blocked_turn_is_not_taken(no_pursuers):
    state = initialize(("WWWWW", "WP..W", "WWWWW"), no_pursuers)
    tick(state, DT, Direction.UP)
    assert state.player_direction is Direction.NONE
    assert state.player_position == origin(1, 1)


def test_hitting_a_wall_snaps_and_stops(no_pursuers):
    state = initialize(("WWWWW", "WP  W", "WWWWW"), no_pursuers)
    state.player.direction = Direction.LEFT

    tick(state, DT)
    tick(state, DT)
    assert state.player_position == (30.5, 32.5)

    tick(state, DT)
    assert state.player_position == origin(1, 1)
    assert state.player_direction is Direction.NONE


def test_movement_ignores_delta_time(no_pursuers):
    state = initialize(("WWWWW", "WP..W", "WWWWW"), no_pursuers)
    tick(state, 0.5, Direction.RIGHT)
    assert state.player_position == (33.5, 32.5)


# ----------------------------
# Pickups
# ----------------------------

def test_pickup_is_collected_once(no_pursuers):
    state = initialize(("WWWWWW", "WP...W", "WWWWWW"), no_pursuers)
    state.player.x, state.player.y = origin(2, 1)

    tick(state, DT)
    assert state.score == 10
    assert len(state.pickups) == 2

    tick(state, DT)
    assert state.score == 10
    assert len(state.pickups) == 2


def test_clearing_the_maze_wins(no_pursuers):
    state = initialize(("WWWW", "WP.W", "WWWW"), no_pursuers)
    state.player.x, state.player.y = origin(2, 1)

    tick(state, DT)

    assert state.cleared
    assert state.won
    assert state.phase is GamePhase.GAME_OVER_MENU


def test_maze_without_pickups_never_clears(no_pursuers):
    state = initialize(("WWWW", "WP W", "WWWW"), no_pursuers)
    tick(state, DT)
    assert not state.cleared
    assert state.phase is GamePhase.PLAYING


# ----------------------------
# Power-up window
# ----------------------------

def test_power_up_window_is_shared():
    state = initialize(POWER_ROOM, EngineConfig(seed=3))
    state.player.x, state.player.y = origin(2, 1)

    tick(state, 1.0)
    assert state.power_active
    assert state.power_timer == 5.0
    assert state.remaining_power_pickups() == ()
    assert all(p.vulnerable for p in state.pursuers)

    for _ in range(2):
        tick(state, 2.0)
        assert state.power_active
        assert all(p.vulnerable for p in state.pursuers)

    tick(state, 1.0)
    assert not state.power_active
    assert state.power_timer == 0.0
    assert not any(p.vulnerable for p in state.pursuers)


def test_timers_floor_at_zero(corridor_game):
    p = corridor_game.pursuers[0]
    p.confused_timer = 0.01
    p.respawn_timer = 0.02

    tick(corridor_game, 1.0)

    assert p.confused_timer == 0.0
    assert p.respawn_timer == 0.0


# ----------------------------
# Pursuer contact
# ----------------------------

def test_capturing_vulnerable_pursuer(corridor_game):
    state = corridor_game
    p = state.pursuers[0]
    p.x, p.y = state.player.x, state.player.y
    p.vulnerable = True

    tick(state, DT)

    assert (p.x, p.y) == p.spawn == origin(6, 1)
    assert not p.vulnerable
    assert p.confused_timer == state.config.confused_duration
    assert p.is_respawning
    assert state.score == 200
    assert state.lives == 3
    assert state.captures == 1


def test_respawning_pursuer_is_harmless(corridor_game):
    state = corridor_game
    p = state.pursuers[0]
    p.respawn_timer = 1.0
    p.x, p.y = state.player.x, state.player.y

    assert resolve_pursuer_collisions(state) is False
    assert state.lives == 3


def test_losing_a_life_resets_positions(corridor_game):
    state = corridor_game
    state.player.x, state.player.y = origin(3, 1)
    state.player.direction = Direction.RIGHT
    p = state.pursuers[0]
    p.x, p.y = origin(3, 1)

    tick(state, DT)

    assert state.lives == 2
    assert state.phase is GamePhase.PLAYING
    assert state.player_position == origin(1, 1)
    assert state.player_direction is Direction.NONE
    assert p.confused_timer == state.config.confused_duration
    assert abs(p.x - p.spawn[0]) <= state.config.pursuer_speed
    assert abs(p.y - p.spawn[1]) <= state.config.pursuer_speed


def test_last_life_ends_the_game_without_moving_anyone(corridor_game):
    state = corridor_game
    state.player.lives = 1
    state.player.x, state.player.y = origin(3, 1)
    state.player.direction = Direction.RIGHT
    p = state.pursuers[0]
    p.x, p.y = 94.0, 32.5

    tick(state, DT)

    assert state.lives == 0
    assert state.phase is GamePhase.GAME_OVER_MENU
    assert state.game_over
    assert state.player_position == origin(3, 1)
    assert (p.x, p.y) == (94.0, 32.5)


def test_game_over_freezes_ticks(corridor_game):
    state = corridor_game
    state.phase = GamePhase.GAME_OVER_MENU
    before = (state.player_position, state.pursuer_views(), state.ticks)

    for _ in range(10):
        tick(state, DT, Direction.RIGHT)

    assert (state.player_position, state.pursuer_views(), state.ticks) == before
    assert state.player.requested is Direction.NONE


# ----------------------------
# Reset and quit
# ----------------------------

def test_reset_restores_a_new_game():
    state = initialize(POWER_ROOM, EngineConfig(seed=5))
    state.player.x, state.player.y = origin(2, 1)
    tick(state, DT)
    state.player.score = 1234
    state.player.lives = 0
    state.phase = GamePhase.GAME_OVER_MENU
    state.pickups.clear()

    reset(state)

    assert state.phase is GamePhase.PLAYING
    assert state.score == 0
    assert state.lives == 3
    assert state.player_position == origin(1, 1)
    assert len(state.pickups) == len(state.maze.pickups)
    assert len(state.power_pickups) == 1
    assert not state.power_active
    assert state.power_timer == 0.0
    assert all(not p.vulnerable and not p.is_confused and not p.is_respawning for p in state.pursuers)
    assert [(p.x, p.y) for p in state.pursuers] == [origin(7, 1), origin(7, 2)]


def test_quit_request_is_recorded(corridor_game):
    request_quit(corridor_game)
    assert corridor_game.quit_requested
    reset(corridor_game)
    assert not corridor_game.quit_requested


# ----------------------------
# Whole-game properties
# ----------------------------

def _play(seed, n_ticks=600):
    state = initialize(DEFAULT_MAP, EngineConfig(seed=seed))
    inputs = random.Random(seed)
    trace = []
    for _ in range(n_ticks):
        tick(state, DT, inputs.choice([None, Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT]))
        trace.append((state.player_position, tuple((v.x, v.y) for v in state.pursuer_views())))
    return state, trace


def test_same_seed_same_game():
    _, a = _play(11)
    _, b = _play(11)
    assert a == b


def test_nothing_ever_enters_a_wall():
    state = initialize(DEFAULT_MAP, EngineConfig(seed=2))
    inputs = random.Random(2)
    for _ in range(3000):
        if state.game_over:
            reset(state)
        tick(state, DT, inputs.choice([None, Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT]))
        assert not state.maze.is_blocked(state.player.rect)
        for p in state.pursuers:
            assert not state.maze.is_blocked(p.rect)
