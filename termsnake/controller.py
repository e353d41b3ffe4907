"""
controller.py — Controller layer.

Responsibilities:
  - Load settings and configure logging.
  - Build the engine and pick a frontend (curses terminal or pygame window).
  - Run the game loop inside the frontend's session so the terminal or
    window is always released, whatever ends the game.
  - Turn the outcome into a process exit code.

The controller knows nothing about game rules (model) or drawing (frontends).
"""

from __future__ import annotations

import logging
import random
import sys
from typing import Callable

from .board import render_text
from .config import FRONTEND_WINDOW, Settings, load_settings
from .errors import BoardFullError, ConfigError, FrontendError
from .logging_setup import attach_stderr, setup_logging
from .loop import GameLoop, LoopResult
from .model import GameEngine, Grid

logger = logging.getLogger(__name__)


class GameController:
    """
    Owns one game from start to exit.
    Glues Engine <-> Loop <-> Frontend without them knowing about each other.
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        self.engine = GameEngine(
            grid=Grid(),
            rng=random.Random(settings.seed),
            strict_food=settings.strict_food,
        )

    # ── Public entry point ────────────────────────────────────────
    def run(self) -> LoopResult:
        if self.settings.frontend == FRONTEND_WINDOW:
            result = self._run_window()
        else:
            result = self._run_terminal()
        if result is LoopResult.GAME_OVER:
            # The screen is released by now; leave the final board behind
            print(render_text(self.engine.snapshot()))
        return result

    # ── Frontends ─────────────────────────────────────────────────
    def _build_loop(self, renderer, input_source) -> GameLoop:
        return GameLoop(
            self.engine,
            renderer,
            input_source,
            tick_interval=self.settings.tick_interval,
            poll_interval=self.settings.poll_interval,
            apply_heading=self.settings.heading_apply,
        )

    def _run_terminal(self) -> LoopResult:
        from .terminal import CursesInput, CursesRenderer, CursesSession

        with CursesSession() as stdscr:
            renderer = CursesRenderer(stdscr)
            result = self._build_loop(renderer, CursesInput(stdscr)).run()
            if result is LoopResult.QUIT:
                renderer.close()
        return result

    def _run_window(self) -> LoopResult:
        # pygame is only imported when the window frontend is chosen
        from .view import WindowInput, WindowRenderer, WindowSession

        with WindowSession(self.engine.grid) as screen:
            renderer = WindowRenderer(screen)
            result = self._build_loop(renderer, WindowInput()).run()
            if result is LoopResult.QUIT:
                renderer.close()
        return result


def run(settings_loader: Callable[[], Settings] = load_settings) -> int:
    try:
        settings = settings_loader()
    except ConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2

    setup_logging(settings.log_level, settings.log_file)
    controller = GameController(settings)
    try:
        result = controller.run()
    except FrontendError as exc:
        attach_stderr()
        logger.exception("Terminal failure, giving up")
        print(f"Fatal terminal error: {exc}", file=sys.stderr)
        return 1
    except BoardFullError:
        attach_stderr()
        logger.info("Board filled after %d ticks", controller.engine.ticks)
        print(render_text(controller.engine.snapshot()))
        return 0
    except KeyboardInterrupt:
        return 130
    attach_stderr()
    if result is LoopResult.GAME_OVER:
        logger.info("Game over (%s), length %d",
                    controller.engine.death_cause, len(controller.engine.snake))
    return 0
