# -*- coding: utf-8 -*-
"""
Project: Maze Escape

Brief Description:
    - Configuration constants shared by the core and the pygame host
    - Plain module constants, no flags or environment variables
"""

import os


# -----------------------------
# Window / rendering
# -----------------------------
WINDOW_WIDTH = 1000
WINDOW_HEIGHT = 700

FOV_Y = 75.0
NEAR_PLANE = 0.1
FAR_PLANE = 1000.0

TARGET_FPS = 60

# Fixed logical step handed to Session.tick() every frame
TICK_DELTA = 1.0 / TARGET_FPS


# -----------------------------
# Maze geometry
# -----------------------------
DIFFICULTY_SIZES = {
    "easy": 10,
    "medium": 20,
    "hard": 30,
}

CELL_SIZE = 5.0
WALL_HEIGHT = 3.0
EYE_HEIGHT = 1.6


# -----------------------------
# Player / gameplay
# -----------------------------
MOVE_SPEED = 6.0            # world units per second
MOUSE_SENSITIVITY = 0.1     # degrees of yaw per pixel of mouse motion

GOAL_RADIUS = 1.0
TOP_VIEW_ZONE_COUNT = 3     # medium only


# -----------------------------
# Leaderboard
# -----------------------------
LEADERBOARD_SIZE = 10
LEADERBOARD_PATH = os.path.join("~", ".maze_escape", "scores.json")
