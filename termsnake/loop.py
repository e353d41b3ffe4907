"""
loop.py — Fixed-tick game loop.

Two cadences run in one thread: input is polled every pass (bounded by
poll_interval), the engine advances only when a whole tick_interval has
elapsed. Rendering happens once per successful tick, never per poll.
"""

from __future__ import annotations

import enum
import logging
import time
from typing import Callable, Optional, Protocol

from .config import APPLY_AFTER, APPLY_BEFORE, HEADING_APPLY_MODES, POLL_INTERVAL, TICK_INTERVAL, validate_timing
from .keymap import KeyEvent, is_quit, map_key_to_heading
from .model import GameEngine, GameState, Grid

logger = logging.getLogger(__name__)


class Renderer(Protocol):
    def start(self, grid: Grid) -> None: ...

    def render(self, state: GameState) -> None: ...

    def close(self) -> None: ...


class InputSource(Protocol):
    def poll(self, timeout: float) -> Optional[KeyEvent]: ...


class LoopResult(enum.Enum):
    QUIT = "quit"
    GAME_OVER = "game_over"


class GameLoop:
    """Drives a GameEngine against a renderer and an input source."""

    def __init__(
        self,
        engine: GameEngine,
        renderer: Renderer,
        input_source: InputSource,
        tick_interval: float = TICK_INTERVAL,
        poll_interval: float = POLL_INTERVAL,
        clock: Callable[[], float] = time.monotonic,
        apply_heading: str = APPLY_BEFORE,
    ):
        validate_timing(tick_interval, poll_interval)
        if apply_heading not in HEADING_APPLY_MODES:
            raise ValueError(f"Unknown heading apply mode: {apply_heading!r}")
        self.engine = engine
        self.renderer = renderer
        self.input_source = input_source
        self.tick_interval = tick_interval
        self.poll_interval = poll_interval
        self.clock = clock
        self.apply_heading = apply_heading
        self.ticks = 0
        self.renders = 0

    def run(self) -> LoopResult:
        """Run until the player quits or the snake dies."""
        self.renderer.start(self.engine.grid)
        self._render()
        last_tick = self.clock()
        logger.info("Game started: %dx%d grid, tick %.3fs, poll %.3fs",
                    self.engine.grid.width, self.engine.grid.height,
                    self.tick_interval, self.poll_interval)

        while True:
            event = self.input_source.poll(self.poll_interval)
            if event is not None:
                if is_quit(event):
                    logger.info("Quit requested after %d ticks", self.ticks)
                    return LoopResult.QUIT
                heading = map_key_to_heading(event)
                if heading is not None:
                    self.engine.snake.request_heading(heading)

            now = self.clock()
            if now - last_tick >= self.tick_interval:
                last_tick = now
                if not self.step():
                    return LoopResult.GAME_OVER

    def step(self) -> bool:
        """One tick: apply the pending heading, advance, render on survival."""
        snake = self.engine.snake
        if self.apply_heading == APPLY_BEFORE:
            snake.apply_pending_heading()
        alive = self.engine.advance()
        if not alive:
            return False
        if self.apply_heading == APPLY_AFTER:
            snake.apply_pending_heading()
        self.ticks += 1
        self._render()
        return True

    def _render(self) -> None:
        self.renderer.render(self.engine.snapshot())
        self.renders += 1
