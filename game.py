# -*- coding: utf-8 -*-
"""
Project: Maze Escape

Brief Description:
    - Language: Python
    - Stack: pygame, PyOpenGL
    - Host for the Session core: window, input, fixed-step loop, rendering
"""

# Pylint notes:
# - We intentionally use wildcard imports from pygame.locals and PyOpenGL
#   for convenience in a real-time graphics script.
# - These modules are C extensions / dynamic, so pylint cannot reliably
#   see the symbols and reports them as undefined.
# For THIS file, we disable those specific checks.
# pylint: disable=wildcard-import, unused-wildcard-import, no-member, undefined-variable

import logging
import sys

import pygame
from pygame.locals import *

from OpenGL.GL import *
from OpenGL.GLU import *

from leaderboard import Leaderboard
from maze import Direction
from session import Difficulty, Session, SessionState, format_elapsed
from settings import (
    EYE_HEIGHT,
    FAR_PLANE,
    FOV_Y,
    LEADERBOARD_PATH,
    MOUSE_SENSITIVITY,
    NEAR_PLANE,
    TARGET_FPS,
    TICK_DELTA,
    WALL_HEIGHT,
    WINDOW_HEIGHT,
    WINDOW_WIDTH,
)


logger = logging.getLogger(__name__)

DIFFICULTY_KEYS = {
    K_1: Difficulty.EASY,
    K_2: Difficulty.MEDIUM,
    K_3: Difficulty.HARD,
}

MAX_NAME_LENGTH = 16


# -----------------------------
# Maze rendering
# -----------------------------
class MazeRenderer:
    """
    Draws the static maze geometry for one session
    - floor quads per cell
    - closed walls from Maze.wall_segments(), each shared wall once
    - goal marker cube and medium-difficulty zone markers
    """

    def __init__(self, session):
        self.session = session
        self.cell_size = session.cell_size

    def draw(self):
        maze = self.session.maze
        glColor3f(0.13, 0.13, 0.13)
        for z in range(maze.height):
            for x in range(maze.width):
                self._draw_floor_cell(x, z, 0.0)

        self._draw_all_walls(maze)

        glColor3f(0.2, 0.8, 0.3)
        for zx, zz in self.session.context.zones.zones:
            self._draw_floor_cell(zx, zz, 0.01, inset=0.25)

        gx, gz = self.session.goal_position()
        glColor3f(1.0, 0.0, 0.0)
        self._draw_unit_cube_at(gx, 1.0, gz)

    def _draw_floor_cell(self, x, z, y, inset=0.0):
        """
        Draw a single floor quad for cell (x, z)
        """
        x0 = x * self.cell_size + inset * self.cell_size
        x1 = (x + 1) * self.cell_size - inset * self.cell_size
        z0 = z * self.cell_size + inset * self.cell_size
        z1 = (z + 1) * self.cell_size - inset * self.cell_size

        glBegin(GL_QUADS)
        glVertex3f(x0, y, z0)
        glVertex3f(x1, y, z0)
        glVertex3f(x1, y, z1)
        glVertex3f(x0, y, z1)
        glEnd()

    def _draw_all_walls(self, maze):
        for direction, (x0, z0, x1, z1) in maze.wall_segments(self.cell_size):
            # Walls along z get a darker shade so corners read without lighting
            if direction in (Direction.NORTH, Direction.SOUTH):
                glColor3f(0.27, 0.27, 1.0)
            else:
                glColor3f(0.18, 0.18, 0.7)
            self._draw_wall_segment(x0, z0, x1, z1)

    def _draw_wall_segment(self, x0, z0, x1, z1):
        """
        Draw a vertical wall quad along the segment from (x0, z0) to (x1, z1)
        """
        glBegin(GL_QUADS)
        glVertex3f(x0, 0.0, z0)
        glVertex3f(x1, 0.0, z1)
        glVertex3f(x1, WALL_HEIGHT, z1)
        glVertex3f(x0, WALL_HEIGHT, z0)
        glEnd()

    def _draw_unit_cube_at(self, x, y, z):
        """
        Draw a 1x1x1 cube centered at (x, y, z).
        """
        s = 0.5
        vertices = [
            [-s, -s, -s],
            [ s, -s, -s],
            [ s,  s, -s],
            [-s,  s, -s],
            [-s, -s,  s],
            [ s, -s,  s],
            [ s,  s,  s],
            [-s,  s,  s],
        ]
        faces = [
            [0, 1, 2, 3],
            [3, 2, 6, 7],
            [7, 6, 5, 4],
            [4, 5, 1, 0],
            [1, 5, 6, 2],
            [4, 0, 3, 7],
        ]
        glPushMatrix()
        glTranslatef(x, y, z)
        glBegin(GL_QUADS)
        for face in faces:
            for idx in face:
                glVertex3fv(vertices[idx])
        glEnd()
        glPopMatrix()


# -----------------------------
# Game (main loop + glue)
# -----------------------------
class Game:
    """
    Game ties together:
        - Window + OpenGL setup
        - Session (core state machine) and Leaderboard
        - Event handling, fixed-step update, render loop
        - Menu / HUD / victory overlays
    """

    def __init__(self, width=WINDOW_WIDTH, height=WINDOW_HEIGHT, leaderboard_path=LEADERBOARD_PATH):
        pygame.init()
        pygame.display.set_caption("Maze Escape")

        self.font = pygame.font.SysFont("consolas", 20)
        self.big_font = pygame.font.SysFont("consolas", 36)

        flags = DOUBLEBUF | OPENGL  # pylint: disable=unsupported-binary-operation
        pygame.display.set_mode((width, height), flags)
        self.width = width
        self.height = height
        self.running = True

        self.init_opengl()

        self.leaderboard = Leaderboard(leaderboard_path)
        self.session = Session(leaderboard=self.leaderboard)
        self.renderer = None

        # Leaderboard shown in the menu follows the last chosen difficulty
        self.menu_difficulty = Difficulty.EASY
        self.player_name = ""

        self.clock = pygame.time.Clock()
        self._set_mouse_grab(False)

    def init_opengl(self):
        """
        Configure basic OpenGL state.
        """
        glViewport(0, 0, self.width, self.height)
        glEnable(GL_DEPTH_TEST)

        glMatrixMode(GL_PROJECTION)
        glLoadIdentity()
        gluPerspective(FOV_Y, self.width / float(self.height), NEAR_PLANE, FAR_PLANE)

        glMatrixMode(GL_MODELVIEW)
        glLoadIdentity()

    def _set_mouse_grab(self, grabbed):
        pygame.event.set_grab(grabbed)
        pygame.mouse.set_visible(not grabbed)

    # ---------- Session control ----------

    def start_session(self, difficulty):
        self.menu_difficulty = difficulty
        self.session.start(difficulty)
        self.renderer = MazeRenderer(self.session)
        self._set_mouse_grab(True)

    def back_to_menu(self):
        self.session.exit()
        self.renderer = None
        self.player_name = ""
        self._set_mouse_grab(False)

    # ---------- Events ----------

    def handle_events(self):
        """
        Handle pygame events and return the accumulated mouse x delta.
        """
        mouse_dx = 0

        for event in pygame.event.get():
            if event.type == QUIT:
                self.running = False

            elif event.type == KEYDOWN:
                self._handle_key(event)

            elif event.type == MOUSEMOTION:
                mouse_dx += event.rel[0]

        return mouse_dx

    def _handle_key(self, event):
        state = self.session.state

        if state is SessionState.MENU:
            if event.key == K_ESCAPE:
                self.running = False
            elif event.key in DIFFICULTY_KEYS:
                self.start_session(DIFFICULTY_KEYS[event.key])

        elif state is SessionState.PLAYING:
            if event.key == K_ESCAPE:
                self.back_to_menu()
            elif event.key == K_t and self.session.enter_top_view():
                self._set_mouse_grab(False)
                logger.info("Camera mode: top view")

        elif state is SessionState.TOP_VIEW:
            if event.key == K_ESCAPE:
                self.back_to_menu()
            elif event.key in (K_t, K_RETURN):
                self.session.return_from_top_view()
                self._set_mouse_grab(True)
                logger.info("Camera mode: first person")

        elif state is SessionState.VICTORY:
            if event.key == K_ESCAPE:
                self.session.skip()
                self.back_to_menu()
            elif event.key == K_RETURN:
                try:
                    submitted = self.session.submit_score(self.player_name)
                except OSError as e:
                    # Stay on the victory screen so the player can retry or skip
                    logger.error("Could not save score to %s: %s", self.leaderboard.path, e)
                    submitted = False
                if submitted:
                    self.back_to_menu()
            elif event.key == K_BACKSPACE:
                self.player_name = self.player_name[:-1]
            elif event.unicode and event.unicode.isprintable():
                if len(self.player_name) < MAX_NAME_LENGTH:
                    self.player_name += event.unicode

    # ---------- Update ----------

    def read_movement(self):
        """
        Keyboard -> normalized (forward, strafe)
        """
        keys = pygame.key.get_pressed()
        forward = 0.0
        strafe = 0.0
        if keys[K_w] or keys[K_UP]:
            forward += 1.0
        if keys[K_s] or keys[K_DOWN]:
            forward -= 1.0
        if keys[K_d] or keys[K_RIGHT]:
            strafe += 1.0
        if keys[K_a] or keys[K_LEFT]:
            strafe -= 1.0
        return forward, strafe

    def update(self, mouse_dx):
        if self.session.state is not SessionState.PLAYING:
            return

        forward, strafe = self.read_movement()
        state = self.session.tick(TICK_DELTA, forward, strafe, mouse_dx * MOUSE_SENSITIVITY)
        if state is SessionState.VICTORY:
            self._set_mouse_grab(False)

    # ---------- Drawing ----------

    def apply_camera(self):
        glLoadIdentity()
        if self.session.state is SessionState.TOP_VIEW:
            (ex, ey, ez), (cx, cy, cz) = self.session.top_view_camera()
            gluLookAt(ex, ey, ez,
                      cx, cy, cz,
                      0.0, 0.0, -1.0)
            return

        player = self.session.player
        fx, fz = player.forward_vector()
        gluLookAt(player.x, EYE_HEIGHT, player.z,             # eye
                  player.x + fx, EYE_HEIGHT, player.z + fz,   # center
                  0.0, 1.0, 0.0)                              # up

    def draw_scene(self):
        """
        Render the 3D world (when a session is active) and the 2D overlay.
        """
        glClearColor(0.0, 0.0, 0.0, 1.0)
        glClear(GL_COLOR_BUFFER_BIT | GL_DEPTH_BUFFER_BIT)

        state = self.session.state
        if state in (SessionState.PLAYING, SessionState.TOP_VIEW):
            self.apply_camera()
            self.renderer.draw()

        self._start_2d()
        if state is SessionState.MENU:
            self.draw_menu()
        elif state is SessionState.VICTORY:
            self.draw_victory()
        else:
            self.draw_hud()
        self._end_2d()

    def _start_2d(self):
        """
        Switch to 2D orthographic projection for HUD drawing
        """
        glMatrixMode(GL_PROJECTION)
        glPushMatrix()
        glLoadIdentity()
        glOrtho(0, self.width, self.height, 0, -1, 1)

        glMatrixMode(GL_MODELVIEW)
        glPushMatrix()
        glLoadIdentity()

        glDisable(GL_DEPTH_TEST)

    def _end_2d(self):
        """
        Restore 3D projection/modelview after HUD drawing.
        """
        glEnable(GL_DEPTH_TEST)

        glMatrixMode(GL_MODELVIEW)
        glPopMatrix()

        glMatrixMode(GL_PROJECTION)
        glPopMatrix()

        glMatrixMode(GL_MODELVIEW)

    def _draw_text_2d(self, x, y, text, color=(255, 255, 255), font=None):
        """
        Draw text at screen coordinates (x, y) using a temporary texture.
        (0,0) is top-left of the window.
        """
        if not text:
            return

        surface = (font or self.font).render(text, True, color)
        text_data = pygame.image.tobytes(surface, "RGBA", False)
        w, h = surface.get_size()

        tex_id = glGenTextures(1)
        glBindTexture(GL_TEXTURE_2D, tex_id)
        glTexParameteri(GL_TEXTURE_2D, GL_TEXTURE_MIN_FILTER, GL_LINEAR)
        glTexParameteri(GL_TEXTURE_2D, GL_TEXTURE_MAG_FILTER, GL_LINEAR)
        glTexImage2D(GL_TEXTURE_2D, 0, GL_RGBA, w, h, 0,
                     GL_RGBA, GL_UNSIGNED_BYTE, text_data)

        glEnable(GL_TEXTURE_2D)
        glEnable(GL_BLEND)
        glBlendFunc(GL_SRC_ALPHA, GL_ONE_MINUS_SRC_ALPHA)
        glColor4f(1.0, 1.0, 1.0, 1.0)

        glBegin(GL_QUADS)
        glTexCoord2f(0.0, 0.0)
        glVertex2f(x, y)
        glTexCoord2f(1.0, 0.0)
        glVertex2f(x + w, y)
        glTexCoord2f(1.0, 1.0)
        glVertex2f(x + w, y + h)
        glTexCoord2f(0.0, 1.0)
        glVertex2f(x, y + h)
        glEnd()

        glDisable(GL_BLEND)
        glDisable(GL_TEXTURE_2D)
        glBindTexture(GL_TEXTURE_2D, 0)
        glDeleteTextures([tex_id])

    def _draw_leaderboard(self, x, y, difficulty):
        self._draw_text_2d(x, y, f"Best times ({difficulty.value})", (255, 215, 0))
        scores = self.leaderboard.load(difficulty)
        if not scores:
            self._draw_text_2d(x, y + 30, "no scores yet", (160, 160, 160))
        for i, entry in enumerate(scores):
            self._draw_text_2d(x, y + 30 + i * 25, f"{i + 1:2d}. {entry.name:<16} {entry.time:7.2f}")

    def draw_menu(self):
        self._draw_text_2d(40, 40, "MAZE ESCAPE", font=self.big_font)
        self._draw_text_2d(40, 100, "1 - easy (10x10, top view anywhere)")
        self._draw_text_2d(40, 125, "2 - medium (20x20, top view in green zones)")
        self._draw_text_2d(40, 150, "3 - hard (30x30, no top view)")
        self._draw_text_2d(40, 175, "Esc - quit")
        self._draw_leaderboard(40, 230, self.menu_difficulty)

    def draw_hud(self):
        """
        Draw HUD with elapsed time, player cell and the top-view hint.
        """
        cell_x, cell_z = self.session.player_cell
        self._draw_text_2d(10, 10, f"Time: {format_elapsed(self.session.elapsed)}")
        self._draw_text_2d(10, 35, f"Cell: ({cell_x}, {cell_z})")
        self._draw_text_2d(10, 60, f"Difficulty: {self.session.difficulty.value}")

        if self.session.state is SessionState.TOP_VIEW:
            self._draw_text_2d(10, 85, "T / Enter - return", (120, 255, 120))
        elif self.session.top_view_available:
            self._draw_text_2d(10, 85, "T - top view", (120, 255, 120))

    def draw_victory(self):
        self._draw_text_2d(40, 40, "You escaped!", font=self.big_font)
        self._draw_text_2d(40, 100, f"Time: {format_elapsed(self.session.elapsed)}")
        self._draw_text_2d(40, 135, f"Name: {self.player_name}_")
        self._draw_text_2d(40, 160, "Enter - submit, Esc - back to menu", (160, 160, 160))
        self._draw_leaderboard(40, 215, self.session.difficulty)

    def run(self):
        """
        Main game loop
        """
        while self.running:
            self.clock.tick(TARGET_FPS)

            mouse_dx = self.handle_events()
            self.update(mouse_dx)
            self.draw_scene()

            pygame.display.flip()

        pygame.quit()


# -----------------------------
# Entry point
# -----------------------------
def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    Game().run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
