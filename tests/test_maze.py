import pytest

from game.pacman.entities import Rect
from game.pacman.maze import DEFAULT_MAP, MazeConfigError, load_maze


def test_default_map_layout():
    maze = load_maze(DEFAULT_MAP)

    assert (maze.cols, maze.rows) == (20, 20)
    assert (maze.pixel_width, maze.pixel_height) == (600.0, 600.0)
    assert maze.player_spawn == (9, 15)
    assert maze.pursuer_spawns == ((9, 9), (10, 9))
    assert sorted(maze.power_pickups) == [(45.0, 45.0), (45.0, 555.0), (555.0, 45.0), (555.0, 555.0)]
    assert len(maze.pickups) > 100


def test_pickups_are_centred_in_their_cells():
    maze = load_maze(("WWWW", "WP.W", "WWWW"))
    assert maze.pickups == ((75.0, 45.0),)


def test_walls_never_cover_pickups():
    maze = load_maze(DEFAULT_MAP)
    for x, y in maze.pickups + maze.power_pickups:
        assert not maze.is_wall((int(x // 30), int(y // 30)))


def test_missing_player_spawn_is_a_config_error():
    with pytest.raises(MazeConfigError):
        load_maze(("WWW", "W.W", "WWW"))


def test_config_error_is_a_value_error():
    assert issubclass(MazeConfigError, ValueError)


@pytest.mark.parametrize("grid", [(), ("",), ("", "")])
def test_empty_grid_is_rejected(grid):
    with pytest.raises(MazeConfigError):
        load_maze(grid)


def test_first_player_marker_wins():
    maze = load_maze(("WWWWW", "WP.PW", "WWWWW"))
    assert maze.player_spawn == (1, 1)


def test_short_rows_are_open_floor():
    maze = load_maze(("WWWW", "WP", "WWWW"))

    assert maze.cols == 4
    assert not maze.is_wall((2, 1))
    assert not maze.is_wall((3, 1))
    assert not maze.is_blocked(Rect(62.5, 32.5, 25, 25))


def test_is_blocked_counts_overlap_but_not_touching():
    maze = load_maze(("WWW", "WPW", "WWW"))

    # Exactly filling the open cell touches all four walls
    assert not maze.is_blocked(Rect(30, 30, 30, 30))
    assert maze.is_blocked(Rect(29, 30, 30, 30))
    assert maze.is_blocked(Rect(30, 30.5, 30, 30))


def test_is_blocked_matches_wall_rectangles():
    maze = load_maze(DEFAULT_MAP)
    probes = [Rect(x * 7.5, y * 7.5, 25, 25) for x in range(0, 76, 3) for y in range(0, 76, 3)]
    for rect in probes:
        expected = any(rect.overlaps(wall) for wall in maze.walls)
        assert maze.is_blocked(rect) == expected


def test_spawn_origin_centres_hitbox():
    maze = load_maze(DEFAULT_MAP)
    assert maze.spawn_origin((9, 15), 25) == (272.5, 452.5)
    assert maze.cell_center((9, 15)) == (285.0, 465.0)
