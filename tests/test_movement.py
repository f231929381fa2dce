import pytest

from game.pacman.entities import Direction, Rect
from game.pacman.maze import load_maze
from game.pacman.movement import can_turn, is_at_grid_center, snap_to_grid, step_offset, try_move

from conftest import CORRIDOR


@pytest.fixture
def maze():
    return load_maze(CORRIDOR)


def test_step_offset():
    assert step_offset(Direction.UP, 2.0) == (0.0, -2.0)
    assert step_offset(Direction.RIGHT, 0.5) == (0.5, 0.0)
    assert step_offset(Direction.NONE, 3.0) == (0.0, 0.0)


def test_try_move_returns_shifted_rect(maze):
    moved = try_move(maze, Rect(32.5, 32.5, 25, 25), Direction.RIGHT, 1.0)
    assert moved == Rect(33.5, 32.5, 25, 25)


def test_try_move_into_wall_returns_none(maze):
    rect = Rect(32.5, 32.5, 25, 25)
    # 2.5px of slack on each side of a centred hitbox
    assert try_move(maze, rect, Direction.LEFT, 2.5) is not None
    assert try_move(maze, rect, Direction.LEFT, 3.0) is None
    assert try_move(maze, rect, Direction.UP, 3.0) is None


@pytest.mark.parametrize("x,y,expected", [
    (32.5, 32.5, True),
    (33.0, 32.5, True),
    (33.5, 32.5, False),
    (62.5, 62.5, True),
    (47.5, 32.5, False),
])
def test_is_at_grid_center(x, y, expected):
    assert is_at_grid_center(x, y, 25, 30) is expected


def test_snap_to_grid_picks_nearest_cell():
    assert snap_to_grid(34.5, 33.0, 25, 30) == (32.5, 32.5)
    assert snap_to_grid(48.5, 32.5, 25, 30) == (62.5, 32.5)
    assert snap_to_grid(30.5, 31.0, 25, 30) == (32.5, 32.5)


def test_can_turn_looks_one_cell_ahead(maze):
    assert can_turn(maze, 32.5, 32.5, 25, Direction.RIGHT)
    assert not can_turn(maze, 32.5, 32.5, 25, Direction.UP)
    assert not can_turn(maze, 32.5, 32.5, 25, Direction.LEFT)


def test_can_turn_never_accepts_none(maze):
    assert not can_turn(maze, 32.5, 32.5, 25, Direction.NONE)
