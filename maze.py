# -*- coding: utf-8 -*-
"""
Project: Maze Escape

Brief Description:
    - Maze grid data structure (cells + wall flags)
    - Perfect-maze generation (iterative DFS backtracker)
    - Cell/wall collision model for continuous movement
"""

import logging
import math
from enum import IntEnum


logger = logging.getLogger(__name__)


class MazeConfigError(ValueError):
    """Raised when a maze is requested with unusable dimensions."""


# -----------------------------
# Directions
# -----------------------------
class Direction(IntEnum):
    """
    Cardinal directions, also used as indices into Cell.walls
    - x grows to the East, z grows to the South
    """

    EAST = 0
    SOUTH = 1
    WEST = 2
    NORTH = 3

    @property
    def dx(self):
        return _STEPS[self][0]

    @property
    def dz(self):
        return _STEPS[self][1]

    def opposite(self):
        return Direction((self + 2) % 4)


_STEPS = {
    Direction.EAST: (1, 0),
    Direction.SOUTH: (0, 1),
    Direction.WEST: (-1, 0),
    Direction.NORTH: (0, -1),
}


# -----------------------------
# Maze data structure
# -----------------------------
class Cell:
    """
    One unit square of the grid
    - walls[Direction] is True while that wall is closed
    - visited is only meaningful during generation
    """

    __slots__ = ("x", "z", "walls", "visited")

    def __init__(self, x, z):
        self.x = x
        self.z = z
        self.walls = [True, True, True, True]
        self.visited = False

    def has_wall(self, direction):
        return self.walls[direction]

    def __repr__(self):
        open_dirs = "".join(d.name[0] for d in Direction if not self.walls[d])
        return f"Cell({self.x}, {self.z}, open={open_dirs or '-'})"


class Maze:
    """
    Maze holds the logical grid
    - width x height cells, addressed as (x, z)
    - cells[z][x] so each row is one line of constant z
    - walls are only carved by generate_maze(); treat them as read-only afterwards
    """

    def __init__(self, width, height):
        _check_dimensions(width, height)
        self.width = width
        self.height = height
        self.cells = [[Cell(x, z) for x in range(width)] for z in range(height)]

    # ---------- Coordinate helpers ----------

    def cell(self, x, z):
        return self.cells[z][x]

    def in_bounds(self, x, z):
        """
        Check if (x, z) is inside the maze grid
        """
        return 0 <= x < self.width and 0 <= z < self.height

    def neighbor(self, x, z, direction):
        """
        Coordinates one step from (x, z), or None when that leaves the grid
        """
        nx = x + direction.dx
        nz = z + direction.dz
        if not self.in_bounds(nx, nz):
            return None
        return nx, nz

    def open_directions(self, x, z):
        cell = self.cell(x, z)
        return [d for d in Direction if not cell.walls[d]]

    def open_wall_count(self):
        """
        Number of open wall pairs (each shared opening counted once)
        """
        count = 0
        for row in self.cells:
            for cell in row:
                # East and South only, so every pair is seen from one side
                if not cell.walls[Direction.EAST] and cell.x + 1 < self.width:
                    count += 1
                if not cell.walls[Direction.SOUTH] and cell.z + 1 < self.height:
                    count += 1
        return count

    def corners(self):
        return [
            (0, 0),
            (self.width - 1, 0),
            (0, self.height - 1),
            (self.width - 1, self.height - 1),
        ]

    def entry_direction(self, x=0, z=0):
        """
        Choose a reasonable direction to face from (x, z), based on which
        neighboring directions are open. Defaults to NORTH for a closed cell.
        """
        open_dirs = self.open_directions(x, z)
        for direction in (Direction.SOUTH, Direction.EAST, Direction.NORTH, Direction.WEST):
            if direction in open_dirs:
                return direction
        return Direction.NORTH

    # ---------- World-space helpers ----------

    def cell_center(self, x, z, cell_size):
        """
        World (x, z) center of cell (x, z); the grid origin is the maze corner
        """
        return (x + 0.5) * cell_size, (z + 0.5) * cell_size

    def wall_segments(self, cell_size):
        """
        Closed walls as world-space segments (direction, (x0, z0, x1, z1))
        To avoid yielding shared walls twice:
        - for every cell, N and W walls if present
        - for the last row, also S walls
        - for the last column, also E walls
        """
        for row in self.cells:
            for cell in row:
                x_left = cell.x * cell_size
                x_right = x_left + cell_size
                z_top = cell.z * cell_size
                z_bottom = z_top + cell_size

                if cell.walls[Direction.NORTH]:
                    yield Direction.NORTH, (x_left, z_top, x_right, z_top)
                if cell.walls[Direction.WEST]:
                    yield Direction.WEST, (x_left, z_top, x_left, z_bottom)
                if cell.z == self.height - 1 and cell.walls[Direction.SOUTH]:
                    yield Direction.SOUTH, (x_left, z_bottom, x_right, z_bottom)
                if cell.x == self.width - 1 and cell.walls[Direction.EAST]:
                    yield Direction.EAST, (x_right, z_top, x_right, z_bottom)

    def get_center_world(self, cell_size):
        """
        World-space centroid of the maze
        """
        return self.width * cell_size / 2.0, self.height * cell_size / 2.0

    def _open_between(self, x, z, direction):
        return self.neighbor(x, z, direction) is not None and not self.cell(x, z).walls[direction]

    def _carve(self, x, z, direction):
        nx, nz = self.neighbor(x, z, direction)
        self.cell(x, z).walls[direction] = False
        self.cell(nx, nz).walls[direction.opposite()] = False


def _check_dimensions(width, height):
    for name, value in (("width", width), ("height", height)):
        if isinstance(value, bool) or not isinstance(value, int):
            raise MazeConfigError(f"maze {name} must be an integer, got {value!r}")
        if value < 1:
            raise MazeConfigError(f"maze {name} must be >= 1, got {value}")


# -----------------------------
# Generation
# -----------------------------
def generate_maze(width, height, rng):
    """
    Generate a perfect maze using an iterative depth-first backtracker.
    - start from (0, 0) with every wall closed
    - step to a random unvisited neighbor, opening the wall on both sides
    - backtrack through the explicit stack when the current cell is a dead end
    - rng: random.Random (or anything with .choice) so callers can seed it
    """
    maze = Maze(width, height)

    current = maze.cell(0, 0)
    current.visited = True
    stack = []

    while current is not None:
        candidates = []
        for direction in Direction:
            coords = maze.neighbor(current.x, current.z, direction)
            if coords is not None and not maze.cell(*coords).visited:
                candidates.append(direction)

        if candidates:
            direction = rng.choice(candidates)
            maze._carve(current.x, current.z, direction)
            stack.append(current)
            current = maze.cell(current.x + direction.dx, current.z + direction.dz)
            current.visited = True
        elif stack:
            current = stack.pop()
        else:
            current = None

    # visited is generation-only state
    for row in maze.cells:
        for cell in row:
            cell.visited = False

    logger.debug("Generated %dx%d maze with %d openings", width, height, maze.open_wall_count())
    return maze


# -----------------------------
# Collision model
# -----------------------------
def cell_of(x, z, cell_size):
    """
    Convert world (x, z) to integer cell indices
    """
    return int(math.floor(x / cell_size)), int(math.floor(z / cell_size))


def can_move(maze, from_cell, to_position, cell_size):
    """
    Decide whether a move from from_cell to the world point to_position is allowed
    - target outside the grid: blocked (outer boundary is a wall)
    - same cell: allowed, walls only matter when crossing a boundary
    - cardinal neighbor: allowed if the current cell's wall that way is open
    - diagonal neighbor: allowed only through an L-shaped route whose two
      crossings are both open, so corners can't be cut through a wall
    - anything farther: blocked
    """
    x0, z0 = from_cell
    x1, z1 = cell_of(to_position[0], to_position[1], cell_size)

    if not maze.in_bounds(x1, z1):
        return False

    dx = x1 - x0
    dz = z1 - z0

    if dx == 0 and dz == 0:
        return True

    if abs(dx) > 1 or abs(dz) > 1:
        return False

    step_x = Direction.EAST if dx > 0 else Direction.WEST
    step_z = Direction.SOUTH if dz > 0 else Direction.NORTH

    if dz == 0:
        return maze._open_between(x0, z0, step_x)
    if dx == 0:
        return maze._open_between(x0, z0, step_z)

    # Diagonal: x first then z, or z first then x
    if maze._open_between(x0, z0, step_x) and maze._open_between(x1, z0, step_z):
        return True
    return maze._open_between(x0, z0, step_z) and maze._open_between(x0, z1, step_x)
