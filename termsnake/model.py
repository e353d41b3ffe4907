"""
model.py — Model layer.

Owns ALL game state and rules. Zero rendering, zero input handling.
Exposes a clean API for the loop driver to read/write.

Classes:
    Heading     — immutable (dx, dy) unit direction
    Grid        — board bounds and the playable interior
    Snake       — body, current and pending heading
    Food        — the single active pellet
    GameState   — read-only snapshot handed to renderers
    GameEngine  — per-tick collision & update state machine
"""

from __future__ import annotations

import logging
import random
from collections import deque
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional

from .config import HEIGHT, START_CELL, START_FOOD, START_HEADING, WIDTH
from .errors import BoardFullError, GameOverError

logger = logging.getLogger(__name__)

Cell = tuple[int, int]

STATE_RUNNING   = "running"
STATE_GAME_OVER = "game_over"


# ─────────────────────────── Heading ─────────────────────────────
class Heading:
    """Immutable 2-D unit direction. y grows downward, like the screen."""
    UP    = None  # filled below after class definition
    DOWN  = None
    LEFT  = None
    RIGHT = None

    def __init__(self, name: str, x: int, y: int):
        self.name = name
        self.x = x
        self.y = y

    def opposite(self) -> "Heading":
        return _BY_NAME[_OPPOSITES[self.name]]

    def is_opposite(self, other: "Heading") -> bool:
        return self.x == -other.x and self.y == -other.y

    def offset(self, cell: Cell) -> Cell:
        return cell[0] + self.x, cell[1] + self.y

    @staticmethod
    def from_name(name: str) -> "Heading":
        try:
            return _BY_NAME[name.lower()]
        except KeyError:
            raise ValueError(f"Unknown heading: {name!r}") from None

    def __eq__(self, other):
        return isinstance(other, Heading) and self.x == other.x and self.y == other.y

    def __hash__(self):
        return hash((self.x, self.y))

    def __repr__(self):
        return f"Heading.{self.name.upper()}"


Heading.UP    = Heading("up",     0, -1)
Heading.DOWN  = Heading("down",   0,  1)
Heading.LEFT  = Heading("left",  -1,  0)
Heading.RIGHT = Heading("right",  1,  0)
ALL_HEADINGS = [Heading.UP, Heading.DOWN, Heading.LEFT, Heading.RIGHT]
_BY_NAME = {h.name: h for h in ALL_HEADINGS}
_OPPOSITES = {"up": "down", "down": "up", "left": "right", "right": "left"}


# ──────────────────────────── Grid ───────────────────────────────
@dataclass(frozen=True)
class Grid:
    """A width x height board whose outer ring of cells is the wall."""
    width: int = WIDTH
    height: int = HEIGHT

    def __post_init__(self):
        if self.width < 3 or self.height < 3:
            raise ValueError(f"Grid {self.width}x{self.height} has no interior")

    @property
    def x_range(self) -> tuple[int, int]:
        return 1, self.width - 2

    @property
    def y_range(self) -> tuple[int, int]:
        return 1, self.height - 2

    @property
    def interior_size(self) -> int:
        return (self.width - 2) * (self.height - 2)

    def in_interior(self, cell: Cell) -> bool:
        x, y = cell
        return 0 < x < self.width - 1 and 0 < y < self.height - 1

    def is_wall(self, cell: Cell) -> bool:
        """True for the border ring and for anything beyond it."""
        return not self.in_interior(cell)

    def interior_cells(self) -> Iterator[Cell]:
        for y in range(1, self.height - 1):
            for x in range(1, self.width - 1):
                yield x, y


# ──────────────────────────── Snake ──────────────────────────────
class Snake:
    """
    Pure game data for the snake.
    No rendering, no input handling and no validation: the engine decides
    whether a head is legal before calling advance().
    """

    def __init__(self, start: Cell = START_CELL, heading: Optional[Heading] = None,
                 body: Optional[Iterable[Cell]] = None):
        heading = heading or Heading.from_name(START_HEADING)
        self.body: deque[Cell] = deque(body) if body is not None else deque([start])
        if not self.body:
            raise ValueError("A snake needs at least one segment")
        self._heading: Heading = heading
        self._pending: Heading = heading

    # ── Accessors ────────────────────────────────────────────────
    @property
    def head(self) -> Cell:
        return self.body[0]

    @property
    def heading(self) -> Heading:
        return self._heading

    @property
    def pending_heading(self) -> Heading:
        return self._pending

    def __len__(self) -> int:
        return len(self.body)

    # ── Commands ─────────────────────────────────────────────────
    def request_heading(self, heading: Heading) -> None:
        """Queue a heading change (ignored if it would reverse the snake)."""
        if not heading.is_opposite(self._heading):
            self._pending = heading

    def apply_pending_heading(self) -> None:
        self._heading = self._pending

    def advance(self, new_head: Cell, grow: bool) -> None:
        self.body.appendleft(new_head)
        if not grow:
            self.body.pop()

    # ── Queries ──────────────────────────────────────────────────
    def peek_next_head(self) -> Cell:
        return self._heading.offset(self.head)

    def contains_cell(self, cell: Cell) -> bool:
        return cell in self.body


# ──────────────────────────── Food ───────────────────────────────
class Food:
    """The single active pellet."""

    def __init__(self, position: Cell = START_FOOD):
        self._position: Cell = position

    @property
    def position(self) -> Cell:
        return self._position

    def respawn(self, grid: Grid, rng: random.Random,
                occupied: Optional[Iterable[Cell]] = None) -> Cell:
        """
        Move to a uniformly random interior cell, each axis drawn independently.

        Without ``occupied`` the draw is unchecked and may land on the snake.
        With it, draws repeat until the cell is clear of every occupied cell.
        """
        blocked = set(occupied) if occupied is not None else set()
        if blocked:
            covered = sum(1 for c in blocked if grid.in_interior(c))
            if covered >= grid.interior_size:
                raise BoardFullError("No free interior cell left for food")
        lo_x, hi_x = grid.x_range
        lo_y, hi_y = grid.y_range
        while True:
            cell = (rng.randint(lo_x, hi_x), rng.randint(lo_y, hi_y))
            if cell not in blocked:
                self._position = cell
                return cell


# ────────────────────────── GameState ────────────────────────────
@dataclass(frozen=True)
class GameState:
    body: tuple[Cell, ...]
    food: Cell
    heading: Heading
    alive: bool
    grid: Grid

    @property
    def head(self) -> Cell:
        return self.body[0]

    @property
    def length(self) -> int:
        return len(self.body)


# ────────────────────────── GameEngine ───────────────────────────
class GameEngine:
    """
    Top-level model. Owns the snake and the food.
    The loop driver calls advance() once per game tick.
    """

    def __init__(self, grid: Optional[Grid] = None, snake: Optional[Snake] = None,
                 food: Optional[Food] = None, rng: Optional[random.Random] = None,
                 strict_food: bool = False):
        self.grid: Grid = grid or Grid()
        self.snake: Snake = snake or Snake()
        self.food: Food = food or Food()
        self.rng: random.Random = rng or random.Random()
        self.strict_food: bool = strict_food
        self.state: str = STATE_RUNNING
        self.death_cause: Optional[str] = None
        self.ticks: int = 0
        self.eaten: int = 0

    @property
    def alive(self) -> bool:
        return self.state == STATE_RUNNING

    # ── Public API ───────────────────────────────────────────────
    def advance(self) -> bool:
        """
        Resolve one tick. Returns True if the snake survived.
        On a fatal step nothing is mutated except the engine state.
        """
        if self.state == STATE_GAME_OVER:
            raise GameOverError("advance() called after game over")

        new_head = self.snake.peek_next_head()
        if self.grid.is_wall(new_head):
            return self._game_over("wall", new_head)
        if self.snake.contains_cell(new_head):
            return self._game_over("self", new_head)

        grow = new_head == self.food.position
        self.snake.advance(new_head, grow)
        self.ticks += 1
        if grow:
            self.eaten += 1
            self._respawn_food(new_head)
        return True

    def snapshot(self) -> GameState:
        return GameState(
            body=tuple(self.snake.body),
            food=self.food.position,
            heading=self.snake.heading,
            alive=self.alive,
            grid=self.grid,
        )

    # ── Private helpers ──────────────────────────────────────────
    def _respawn_food(self, eaten_at: Cell) -> None:
        # The eaten cell is always excluded so the pellet visibly moves.
        occupied = self.snake.body if self.strict_food else (eaten_at,)
        position = self.food.respawn(self.grid, self.rng, occupied)
        logger.debug("Food eaten at %s, respawned at %s (length %d)",
                     eaten_at, position, len(self.snake))

    def _game_over(self, cause: str, at: Cell) -> bool:
        self.state = STATE_GAME_OVER
        self.death_cause = cause
        logger.info("Game over: %s collision at %s after %d ticks, %d eaten",
                    cause, at, self.ticks, self.eaten)
        return False
