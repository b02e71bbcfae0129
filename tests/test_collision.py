# tests/test_collision.py
import os
import random
import sys

import pytest

CURRENT_DIR = os.path.dirname(os.path.abspath(__file__))
PROJECT_ROOT = os.path.dirname(CURRENT_DIR)
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from maze import Direction, Maze, can_move, cell_of, generate_maze

CELL = 5.0


def _point_toward(x, z, direction, overshoot=0.1):
    """
    World point just past the wall of cell (x, z) in the given direction
    """
    cx = (x + 0.5) * CELL + direction.dx * (CELL / 2 + overshoot)
    cz = (z + 0.5) * CELL + direction.dz * (CELL / 2 + overshoot)
    return cx, cz


def _open_maze_3x3():
    """
    3x3 maze with only two openings: (1,1) East and (1,1) South
    """
    maze = Maze(3, 3)
    maze._carve(1, 1, Direction.EAST)
    maze._carve(1, 1, Direction.SOUTH)
    return maze


def test_cell_of_floors_world_coordinates():
    assert cell_of(0.0, 0.0, CELL) == (0, 0)
    assert cell_of(4.99, 9.99, CELL) == (0, 1)
    assert cell_of(5.0, 10.0, CELL) == (1, 2)
    assert cell_of(-0.01, 2.0, CELL) == (-1, 0)


def test_closed_wall_blocks_and_open_wall_allows():
    maze = generate_maze(8, 8, random.Random(9))

    for z in range(maze.height):
        for x in range(maze.width):
            for direction in Direction:
                if maze.neighbor(x, z, direction) is None:
                    continue
                allowed = can_move(maze, (x, z), _point_toward(x, z, direction), CELL)
                assert allowed == (not maze.cell(x, z).has_wall(direction))


def test_outside_grid_is_blocked():
    maze = _open_maze_3x3()

    assert not can_move(maze, (0, 0), (-0.1, 2.5), CELL)
    assert not can_move(maze, (0, 0), (2.5, -0.1), CELL)
    assert not can_move(maze, (2, 2), (15.1, 12.0), CELL)
    assert not can_move(maze, (2, 2), (12.0, 15.1), CELL)


def test_motion_inside_a_cell_ignores_walls():
    maze = Maze(2, 2)  # every wall closed

    assert can_move(maze, (0, 0), (0.1, 0.1), CELL)
    assert can_move(maze, (0, 0), (4.99, 4.99), CELL)


def test_wall_on_current_cell_decides_cardinal_moves():
    maze = _open_maze_3x3()

    assert can_move(maze, (1, 1), _point_toward(1, 1, Direction.EAST), CELL)
    assert can_move(maze, (1, 1), _point_toward(1, 1, Direction.SOUTH), CELL)
    assert not can_move(maze, (1, 1), _point_toward(1, 1, Direction.WEST), CELL)
    assert not can_move(maze, (1, 1), _point_toward(1, 1, Direction.NORTH), CELL)
    # and back the other way through the same openings
    assert can_move(maze, (2, 1), _point_toward(2, 1, Direction.WEST), CELL)
    assert can_move(maze, (1, 2), _point_toward(1, 2, Direction.NORTH), CELL)


def test_diagonal_needs_an_open_l_route():
    maze = Maze(2, 2)
    target = (7.5, 7.5)  # center of (1, 1)

    assert not can_move(maze, (0, 0), target, CELL)

    # Only the first leg open: still blocked at the corner
    maze._carve(0, 0, Direction.EAST)
    assert not can_move(maze, (0, 0), target, CELL)

    # East then South open: allowed
    maze._carve(1, 0, Direction.SOUTH)
    assert can_move(maze, (0, 0), target, CELL)


def test_diagonal_through_south_then_east():
    maze = Maze(2, 2)
    maze._carve(0, 0, Direction.SOUTH)
    maze._carve(0, 1, Direction.EAST)

    assert can_move(maze, (0, 0), (7.5, 7.5), CELL)
    assert can_move(maze, (1, 1), (2.5, 2.5), CELL)


@pytest.mark.parametrize("target", [(12.5, 2.5), (2.5, 12.5), (12.5, 12.5)])
def test_jumping_over_a_cell_is_blocked(target):
    maze = Maze(3, 3)
    for x, z, direction in [(0, 0, Direction.EAST), (1, 0, Direction.EAST),
                            (0, 0, Direction.SOUTH), (0, 1, Direction.SOUTH)]:
        maze._carve(x, z, direction)

    assert not can_move(maze, (0, 0), target, CELL)
