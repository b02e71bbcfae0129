# -*- coding: utf-8 -*-
"""
Project: Maze Escape

Brief Description:
    - Player state and first-person navigation over the maze
    - Goal placement, top-view zones
    - Session state machine (menu -> playing -> top view / victory -> menu)
"""

import logging
import math
import random
import time
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from maze import Direction, Maze, can_move, cell_of, generate_maze
from settings import (
    CELL_SIZE,
    DIFFICULTY_SIZES,
    GOAL_RADIUS,
    MOVE_SPEED,
    TOP_VIEW_ZONE_COUNT,
)


logger = logging.getLogger(__name__)


class SessionError(Exception):
    """Base class for session state machine errors."""


class InvalidTransitionError(SessionError):
    """Raised when an operation is not legal in the current state."""


class Difficulty(Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @property
    def maze_size(self):
        return DIFFICULTY_SIZES[self.value]


class SessionState(Enum):
    MENU = "menu"
    PLAYING = "playing"
    TOP_VIEW = "top_view"
    VICTORY = "victory"


# -----------------------------
# Player (position + orientation)
# -----------------------------
# Yaw (degrees) that faces each direction; yaw 0 looks toward -z
DIRECTION_YAW = {
    Direction.NORTH: 0.0,
    Direction.EAST: 90.0,
    Direction.SOUTH: 180.0,
    Direction.WEST: 270.0,
}


class PlayerState:
    """
    PlayerState holds position and viewing direction
    - x, z: continuous world position
    - yaw: rotation around Y axis in degrees, 0 looks toward -z
    """

    def __init__(self, x, z, yaw=0.0):
        self.x = x
        self.z = z
        self.yaw = yaw

    @property
    def position(self):
        return self.x, self.z

    def cell(self, cell_size):
        return cell_of(self.x, self.z, cell_size)

    def forward_vector(self):
        """
        Forward direction projected onto the XZ plane
        """
        yaw_rad = math.radians(self.yaw)
        return math.sin(yaw_rad), -math.cos(yaw_rad)

    def right_vector(self):
        """
        Right direction (forward x up) projected onto the XZ plane
        """
        yaw_rad = math.radians(self.yaw)
        return math.cos(yaw_rad), math.sin(yaw_rad)

    def set_position(self, x, z):
        self.x = x
        self.z = z

    def __repr__(self):
        return f"PlayerState(x={self.x:.2f}, z={self.z:.2f}, yaw={self.yaw:.1f})"


@dataclass(frozen=True)
class MoveResult:
    moved: bool
    cell_changed: bool


def _clamp_unit(value):
    return max(-1.0, min(1.0, float(value)))


class NavigationController:
    """
    Turns normalized forward/strafe input into movement
    - displacement = speed * delta * (forward * fwd + strafe * right)
    - all-or-nothing: a blocked move leaves the player where it was
    """

    def __init__(self, maze, cell_size=CELL_SIZE, speed=MOVE_SPEED):
        self.maze = maze
        self.cell_size = cell_size
        self.speed = speed

    def turn(self, player, yaw_delta):
        player.yaw = (player.yaw + yaw_delta) % 360.0

    def step(self, player, forward, strafe, delta):
        forward = _clamp_unit(forward)
        strafe = _clamp_unit(strafe)
        if forward == 0.0 and strafe == 0.0:
            return MoveResult(False, False)

        fx, fz = player.forward_vector()
        rx, rz = player.right_vector()
        distance = self.speed * delta
        next_x = player.x + (fx * forward + rx * strafe) * distance
        next_z = player.z + (fz * forward + rz * strafe) * distance

        old_cell = player.cell(self.cell_size)
        if not can_move(self.maze, old_cell, (next_x, next_z), self.cell_size):
            return MoveResult(False, False)

        player.set_position(next_x, next_z)
        return MoveResult(True, player.cell(self.cell_size) != old_cell)


# -----------------------------
# Goal + top-view zones
# -----------------------------
def place_goal(maze, rng, exclude=None):
    """
    Pick one of the four corners of maze uniformly.
    exclude drops that cell from the draw as long as another corner is left
    (a 1x1 maze only has the one cell).
    """
    corners = maze.corners()
    if exclude is not None:
        remaining = [corner for corner in corners if corner != tuple(exclude)]
        if remaining:
            corners = remaining
    return rng.choice(corners)


class TopViewZoneTracker:
    """
    Cells from which the overhead view may be used.
    - easy: anywhere, hard: nowhere
    - medium: only inside one of the sampled zone cells
    Zones are sampled with replacement, so there may be fewer distinct cells
    than TOP_VIEW_ZONE_COUNT.
    """

    def __init__(self, difficulty, zones=()):
        self.difficulty = difficulty
        self.zones = list(zones)

    @classmethod
    def for_difficulty(cls, difficulty, width, height, rng, count=TOP_VIEW_ZONE_COUNT):
        zones = []
        if difficulty is Difficulty.MEDIUM:
            for _ in range(count):
                zones.append((rng.randrange(width), rng.randrange(height)))
        return cls(difficulty, zones)

    def contains(self, cell):
        return tuple(cell) in self.zones

    def allows_top_view(self, cell):
        if self.difficulty is Difficulty.EASY:
            return True
        if self.difficulty is Difficulty.MEDIUM:
            return self.contains(cell)
        return False


# -----------------------------
# Session (state machine + glue)
# -----------------------------
@dataclass
class SessionContext:
    """Everything that lives for exactly one play-through"""
    difficulty: Difficulty
    maze: Maze
    player: PlayerState
    goal: tuple
    zones: TopViewZoneTracker
    navigation: NavigationController
    started_at: float
    final_time: Optional[float] = None


def format_elapsed(seconds):
    """
    Format seconds as MM:SS for the HUD
    """
    total_seconds = int(seconds)
    minutes = total_seconds // 60
    secs = total_seconds % 60
    return f"{minutes:02d}:{secs:02d}"


class Session:
    """
    Session ties together:
        - Maze, PlayerState, goal and top-view zones for the active run
        - State transitions, elapsed time and score submission
    The host owns the frame loop and calls tick(delta) once per frame.
    """

    def __init__(self, rng=None, clock=time.monotonic, leaderboard=None,
                 cell_size=CELL_SIZE, speed=MOVE_SPEED, goal_radius=GOAL_RADIUS):
        self.rng = rng if rng is not None else random.Random()
        self.clock = clock
        self.leaderboard = leaderboard
        self.cell_size = cell_size
        self.speed = speed
        self.goal_radius = goal_radius

        self.state = SessionState.MENU
        self.context = None

    # ---------- Accessors ----------

    @property
    def maze(self):
        return self.context.maze if self.context else None

    @property
    def player(self):
        return self.context.player if self.context else None

    @property
    def goal(self):
        return self.context.goal if self.context else None

    @property
    def difficulty(self):
        return self.context.difficulty if self.context else None

    @property
    def player_cell(self):
        if self.context is None:
            return None
        return self.context.player.cell(self.cell_size)

    @property
    def top_view_available(self):
        if self.state is not SessionState.PLAYING:
            return False
        return self.context.zones.allows_top_view(self.player_cell)

    @property
    def elapsed(self):
        """
        Seconds since start; frozen once the goal is reached, 0.0 in the menu
        """
        if self.context is None:
            return 0.0
        if self.context.final_time is not None:
            return self.context.final_time
        return self.clock() - self.context.started_at

    def goal_position(self):
        if self.context is None:
            return None
        return self.context.maze.cell_center(*self.context.goal, self.cell_size)

    def top_view_camera(self):
        """
        Eye and look-at points for the overhead view: above the maze
        centroid, looking straight down
        """
        maze = self.context.maze
        cx, cz = maze.get_center_world(self.cell_size)
        height = max(maze.width, maze.height) * self.cell_size
        return (cx, height, cz), (cx, 0.0, cz)

    # ---------- Transitions ----------

    def _set_state(self, new_state):
        if new_state is not self.state:
            logger.info("Session %s -> %s", self.state.value, new_state.value)
        self.state = new_state

    def start(self, difficulty):
        """
        Menu -> Playing: build a fresh maze and reset the run
        """
        if self.state is not SessionState.MENU:
            raise InvalidTransitionError(f"cannot start a session from {self.state.value}")
        difficulty = Difficulty(getattr(difficulty, "value", difficulty))

        size = difficulty.maze_size
        maze = generate_maze(size, size, self.rng)
        logger.info("New %s maze %dx%d", difficulty.value, size, size)

        spawn_x, spawn_z = maze.cell_center(0, 0, self.cell_size)
        yaw = DIRECTION_YAW[maze.entry_direction()]
        player = PlayerState(spawn_x, spawn_z, yaw)

        goal = place_goal(maze, self.rng, exclude=(0, 0))
        zones = TopViewZoneTracker.for_difficulty(difficulty, size, size, self.rng)

        self.context = SessionContext(
            difficulty=difficulty,
            maze=maze,
            player=player,
            goal=goal,
            zones=zones,
            navigation=NavigationController(maze, self.cell_size, self.speed),
            started_at=self.clock(),
        )
        self._set_state(SessionState.PLAYING)

    def tick(self, delta, forward=0.0, strafe=0.0, yaw_delta=0.0):
        """
        One fixed simulation step. Input is ignored outside PLAYING.
        """
        if self.state is not SessionState.PLAYING:
            return self.state

        ctx = self.context
        if yaw_delta:
            ctx.navigation.turn(ctx.player, yaw_delta)

        result = ctx.navigation.step(ctx.player, forward, strafe, delta)
        if result.moved:
            if result.cell_changed:
                logger.debug("Player entered cell %s", self.player_cell)
            self.check_goal()
        return self.state

    def check_goal(self):
        """
        Playing -> Victory when the player is within goal_radius of the goal
        cell center. Returns True if the goal was reached.
        """
        if self.state is not SessionState.PLAYING:
            return False

        gx, gz = self.goal_position()
        player = self.context.player
        if math.hypot(player.x - gx, player.z - gz) < self.goal_radius:
            self.context.final_time = self.clock() - self.context.started_at
            self._set_state(SessionState.VICTORY)
            logger.info("Goal reached in %s", format_elapsed(self.context.final_time))
            return True
        return False

    def enter_top_view(self):
        if not self.top_view_available:
            return False
        self._set_state(SessionState.TOP_VIEW)
        return True

    def return_from_top_view(self):
        if self.state is not SessionState.TOP_VIEW:
            return False
        # Back at the player's last position, facing forward
        self.context.player.yaw = 0.0
        self._set_state(SessionState.PLAYING)
        return True

    def submit_score(self, name):
        """
        Victory -> Menu, recording the run. A blank name does nothing.
        """
        if self.state is not SessionState.VICTORY:
            return False
        name = (name or "").strip()
        if not name:
            return False
        if self.leaderboard is not None:
            self.leaderboard.submit(self.context.difficulty, name, self.context.final_time)
        self.exit()
        return True

    def skip(self):
        if self.state is not SessionState.VICTORY:
            return False
        self.exit()
        return True

    def exit(self):
        """
        Back to the menu from anywhere, discarding the run
        """
        self.context = None
        self._set_state(SessionState.MENU)
