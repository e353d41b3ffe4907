"""
view.py — pygame window frontend.

Same Renderer / InputSource contract as the curses frontend, drawn into a
window instead of a terminal:
  - Pre-rendered board surface (border + grid lines, drawn once at start)
  - Snake segments with a gradient tail fade and eyes on the head
  - Food as a dot with a specular highlight

Public API:
    WindowSession()          — context manager owning the pygame display
    WindowRenderer(screen)   — draw GameState snapshots
    WindowInput()            — poll key events with a timeout
"""

from __future__ import annotations

import logging
from typing import Optional

import pygame

from .config import BG, BORDER_COL, CELL, FOOD_COL, SNAKE_COL, SNAKE_DIM
from .errors import FrontendError
from .keymap import KEY_DOWN, KEY_LEFT, KEY_RIGHT, KEY_UP, QUIT_EVENT, KeyEvent
from .model import GameState, Grid

logger = logging.getLogger(__name__)

GRID_COL = (15, 20, 32)
BLACK    = (0, 0, 0)

_PYGAME_KEYS = {
    pygame.K_UP:    KEY_UP,
    pygame.K_DOWN:  KEY_DOWN,
    pygame.K_LEFT:  KEY_LEFT,
    pygame.K_RIGHT: KEY_RIGHT,
}


# ─────────────────────── colour helpers ──────────────────────────
def _lerp_color(c1: tuple, c2: tuple, t: float) -> tuple:
    t = max(0.0, min(1.0, t))
    return tuple(int(c1[i] + (c2[i] - c1[i]) * t) for i in range(3))


def _brighten(color: tuple, factor: float) -> tuple:
    return tuple(min(255, int(c * factor)) for c in color[:3])


# ───────────────────────── WindowSession ─────────────────────────
class WindowSession:
    """Opens the pygame display sized for a grid; always calls pygame.quit()."""

    def __init__(self, grid: Grid, caption: str = "termsnake"):
        self.grid = grid
        self.caption = caption
        self.screen: Optional[pygame.Surface] = None

    def __enter__(self) -> pygame.Surface:
        try:
            pygame.init()
            self.screen = pygame.display.set_mode(
                (self.grid.width * CELL, self.grid.height * CELL)
            )
            pygame.display.set_caption(self.caption)
        except pygame.error as exc:
            pygame.quit()
            raise FrontendError(f"Could not open game window: {exc}") from exc
        return self.screen

    def __exit__(self, exc_type, exc, tb):
        pygame.quit()
        self.screen = None
        return False


# ───────────────────────── WindowRenderer ────────────────────────
class WindowRenderer:
    """Renders the complete frame from a GameState snapshot."""

    def __init__(self, screen: pygame.Surface):
        self.screen = screen
        self._board: Optional[pygame.Surface] = None

    def start(self, grid: Grid) -> None:
        self._board = self._build_board(grid)
        try:
            self.screen.blit(self._board, (0, 0))
            pygame.display.flip()
        except pygame.error as exc:
            raise FrontendError(f"Could not draw the board: {exc}") from exc

    def render(self, state: GameState) -> None:
        try:
            self.screen.blit(self._board, (0, 0))
            self._draw_food(state.food)
            self._draw_snake(state)
            pygame.display.flip()
        except pygame.error as exc:
            raise FrontendError(f"Could not draw frame: {exc}") from exc

    def close(self) -> None:
        try:
            self.screen.fill(BG)
            pygame.display.flip()
        except pygame.error as exc:
            raise FrontendError(f"Could not clear the window: {exc}") from exc

    # ── Static surface pre-build ──────────────────────────────────
    @staticmethod
    def _build_board(grid: Grid) -> pygame.Surface:
        w, h = grid.width * CELL, grid.height * CELL
        board = pygame.Surface((w, h))
        board.fill(BG)
        for x in range(1, grid.width):
            pygame.draw.line(board, GRID_COL, (x * CELL, CELL), (x * CELL, h - CELL))
        for y in range(1, grid.height):
            pygame.draw.line(board, GRID_COL, (CELL, y * CELL), (w - CELL, y * CELL))
        # The wall is the outer ring of cells
        pygame.draw.rect(board, BORDER_COL, (0, 0, w, h), CELL)
        return board

    # ── Food ─────────────────────────────────────────────────────
    def _draw_food(self, food: tuple[int, int]) -> None:
        r = max(2, CELL // 2 - 1)
        x = food[0] * CELL + CELL // 2
        y = food[1] * CELL + CELL // 2
        pygame.draw.circle(self.screen, FOOD_COL, (x, y), r)
        pygame.draw.circle(self.screen, (255, 255, 220),
                           (x - max(1, r // 3), y - max(1, r // 3)),
                           max(1, r // 3))

    # ── Snake body ───────────────────────────────────────────────
    def _draw_snake(self, state: GameState) -> None:
        length = state.length
        for i, (sx, sy) in enumerate(state.body):
            # Colour fades from bright head to dim tail
            t = 1.0 - (i / max(length - 1, 1)) * 0.72
            color = _lerp_color(SNAKE_DIM, SNAKE_COL, t)
            shrink = 0 if i == 0 else 1
            rect = pygame.Rect(sx * CELL + shrink, sy * CELL + shrink,
                               CELL - shrink * 2, CELL - shrink * 2)
            radius = max(1, rect.width // 2 - 1) if i == 0 else max(1, rect.width // 4)
            pygame.draw.rect(self.screen, color, rect, border_radius=radius)
            if i == 0:
                hi = pygame.Rect(rect.x + 2, rect.y + 2, max(1, rect.w - 4), max(2, rect.h // 3))
                pygame.draw.rect(self.screen, _brighten(color, 1.6), hi, border_radius=2)
        self._draw_eyes(state)

    def _draw_eyes(self, state: GameState) -> None:
        hx, hy = state.head
        cx = hx * CELL + CELL // 2
        cy = hy * CELL + CELL // 2
        dx, dy = state.heading.x, state.heading.y
        px, py = -dy, dx  # perpendicular

        for sign in (+1, -1):
            ex = int(cx + dx * 3 + sign * px * 3)
            ey = int(cy + dy * 3 + sign * py * 3)
            pygame.draw.rect(self.screen, (220, 220, 220), (ex - 1, ey - 1, 3, 3))  # sclera
            pygame.draw.rect(self.screen, BLACK,           (ex,     ey,     1, 1))  # pupil


# ───────────────────────── WindowInput ───────────────────────────
def translate_event(event: pygame.event.Event) -> Optional[KeyEvent]:
    """Map a pygame event to a KeyEvent. Closing the window counts as quit."""
    if event.type == pygame.QUIT:
        return QUIT_EVENT
    if event.type != pygame.KEYDOWN:
        return None
    if event.key in _PYGAME_KEYS:
        return KeyEvent(_PYGAME_KEYS[event.key])
    ctrl = bool(event.mod & pygame.KMOD_CTRL)
    if pygame.K_a <= event.key <= pygame.K_z:
        return KeyEvent(chr(event.key), ctrl=ctrl)
    return None


class WindowInput:
    """Waits up to the poll timeout for the next relevant window event."""

    def poll(self, timeout: float) -> Optional[KeyEvent]:
        try:
            event = pygame.event.wait(max(1, int(timeout * 1000)))
        except pygame.error as exc:
            raise FrontendError(f"Could not read window events: {exc}") from exc
        if event.type == pygame.NOEVENT:
            return None
        return translate_event(event)
