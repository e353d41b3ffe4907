"""
board.py — Character-grid rendering of a GameState.

Pure functions shared by the curses renderer (which diffs frames) and the
plain-text board printed after the terminal has been restored.
"""

from __future__ import annotations

from .config import EMPTY_GLYPH, FOOD_GLYPH, SNAKE_GLYPH, WALL_GLYPH
from .model import Cell, GameState, Grid


def border_cells(grid: Grid) -> list[Cell]:
    cells = [(x, y) for x in range(grid.width) for y in (0, grid.height - 1)]
    cells += [(x, y) for y in range(1, grid.height - 1) for x in (0, grid.width - 1)]
    return cells


def frame_cells(state: GameState) -> dict[Cell, str]:
    """Glyph for every non-empty interior cell. Food drawn under the snake."""
    cells = {state.food: FOOD_GLYPH}
    for cell in state.body:
        cells[cell] = SNAKE_GLYPH
    return cells


def diff_frames(previous: dict[Cell, str], current: dict[Cell, str]) -> dict[Cell, str]:
    """Cells to redraw: changed glyphs plus vacated cells blanked."""
    changes = {cell: glyph for cell, glyph in current.items() if previous.get(cell) != glyph}
    for cell in previous:
        if cell not in current:
            changes[cell] = EMPTY_GLYPH
    return changes


def render_lines(state: GameState) -> list[str]:
    grid = state.grid
    rows = [[EMPTY_GLYPH] * grid.width for _ in range(grid.height)]
    for x, y in border_cells(grid):
        rows[y][x] = WALL_GLYPH
    for (x, y), glyph in frame_cells(state).items():
        rows[y][x] = glyph
    return ["".join(row) for row in rows]


def render_text(state: GameState) -> str:
    return "\n".join(render_lines(state))
