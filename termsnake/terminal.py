"""
terminal.py — curses frontend.

CursesSession puts the terminal in raw mode and guarantees it is restored
on every exit path (normal return, exception, SIGTERM). CursesRenderer
draws the border once and then only redraws cells whose glyph changed.
CursesInput turns getch() codes into KeyEvents.

Any curses failure is re-raised as FrontendError and ends the game.
"""

from __future__ import annotations

import curses
import locale
import logging
import signal
from functools import partial
from typing import Optional

from .board import border_cells, diff_frames, frame_cells
from .config import WALL_GLYPH
from .errors import FrontendError
from .keymap import KEY_DOWN, KEY_LEFT, KEY_RIGHT, KEY_UP, KeyEvent
from .model import Cell, GameState, Grid

logger = logging.getLogger(__name__)

_CURSES_KEYS = {
    curses.KEY_UP:    KEY_UP,
    curses.KEY_DOWN:  KEY_DOWN,
    curses.KEY_LEFT:  KEY_LEFT,
    curses.KEY_RIGHT: KEY_RIGHT,
}


def _raise_exit(signum, frame):
    raise SystemExit(128 + signum)


class CursesSession:
    """Context manager owning raw terminal mode."""

    def __init__(self):
        self.stdscr = None
        self._previous_sigterm = None

    def __enter__(self):
        try:
            locale.setlocale(locale.LC_ALL, "")
        except locale.Error as exc:
            logger.debug("Keeping the default locale: %s", exc)
        self._previous_sigterm = signal.signal(signal.SIGTERM, _raise_exit)
        try:
            self.stdscr = curses.initscr()
            curses.noecho()
            curses.raw()
            self.stdscr.keypad(True)
            try:
                curses.curs_set(0)
            except curses.error:
                logger.debug("Terminal cannot hide the cursor")
        except curses.error as exc:
            self.__exit__(type(exc), exc, exc.__traceback__)
            raise FrontendError(f"Could not enter raw terminal mode: {exc}") from exc
        logger.debug("Entered raw terminal mode")
        return self.stdscr

    def __exit__(self, exc_type, exc, tb):
        try:
            self._restore()
        except curses.error as restore_exc:
            if exc is None:
                raise FrontendError(f"Could not restore the terminal: {restore_exc}") from restore_exc
            # the exception already unwinding is the one worth reporting
            logger.debug("Terminal restore failed while unwinding: %s", restore_exc)
        return False

    def _restore(self) -> None:
        try:
            if self.stdscr is not None:
                for step in (partial(self.stdscr.keypad, False), curses.noraw, curses.echo):
                    try:
                        step()
                    except curses.error as exc:
                        logger.debug("Terminal teardown step failed: %s", exc)
                curses.endwin()
        finally:
            self.stdscr = None
            if self._previous_sigterm is not None:
                signal.signal(signal.SIGTERM, self._previous_sigterm)
                self._previous_sigterm = None
        logger.debug("Restored terminal mode")


class CursesRenderer:
    """Draws a GameState onto a curses window, one character per cell."""

    def __init__(self, window):
        self.window = window
        self._previous: dict[Cell, str] = {}

    def start(self, grid: Grid) -> None:
        rows, cols = self.window.getmaxyx()
        # curses cannot write the bottom-right character without erroring
        if rows < grid.height or cols < grid.width + 1:
            raise FrontendError(
                f"Terminal is {cols}x{rows}, need at least {grid.width + 1}x{grid.height}"
            )
        try:
            self.window.clear()
            for x, y in border_cells(grid):
                self.window.addstr(y, x, WALL_GLYPH)
            self.window.refresh()
        except curses.error as exc:
            raise FrontendError(f"Could not draw the board: {exc}") from exc
        self._previous = {}

    def render(self, state: GameState) -> None:
        current = frame_cells(state)
        try:
            for (x, y), glyph in diff_frames(self._previous, current).items():
                self.window.addstr(y, x, glyph)
            self.window.refresh()
        except curses.error as exc:
            raise FrontendError(f"Could not draw frame: {exc}") from exc
        self._previous = current

    def close(self) -> None:
        try:
            self.window.erase()
            self.window.refresh()
        except curses.error as exc:
            raise FrontendError(f"Could not clear the screen: {exc}") from exc
        self._previous = {}


def translate_key(code: int) -> Optional[KeyEvent]:
    """Map a getch() code to a KeyEvent; None for timeouts and unknown keys."""
    if code == -1:
        return None
    if code in _CURSES_KEYS:
        return KeyEvent(_CURSES_KEYS[code])
    if 1 <= code <= 26 and code not in (9, 10, 13):
        # raw mode delivers Ctrl+letter as its control code
        return KeyEvent(chr(code + ord("a") - 1), ctrl=True)
    if 32 <= code < 127:
        return KeyEvent(chr(code))
    return None


class CursesInput:
    """Non-blocking-with-timeout key source."""

    def __init__(self, window):
        self.window = window
        self._timeout_ms: Optional[int] = None

    def poll(self, timeout: float) -> Optional[KeyEvent]:
        timeout_ms = max(0, int(timeout * 1000))
        if timeout_ms != self._timeout_ms:
            self.window.timeout(timeout_ms)
            self._timeout_ms = timeout_ms
        try:
            code = self.window.getch()
        except curses.error as exc:
            raise FrontendError(f"Could not read from terminal: {exc}") from exc
        return translate_key(code)
