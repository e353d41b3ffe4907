"""
config.py — Shared constants and runtime settings.

Constants are fixed for every run; Settings are the few knobs read from
the environment at startup. No imports from internal modules except errors.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from .errors import ConfigError

# ── Grid ──────────────────────────────────────────────────────────
WIDTH, HEIGHT   = 40, 20          # outer ring is the wall
START_CELL      = (2, 2)
START_HEADING   = "right"
START_FOOD      = (20, 10)

# ── Timing (seconds) ──────────────────────────────────────────────
TICK_INTERVAL   = 0.10
POLL_INTERVAL   = 0.02

# ── Terminal glyphs ───────────────────────────────────────────────
SNAKE_GLYPH     = "█"
FOOD_GLYPH      = "@"
WALL_GLYPH      = "#"
EMPTY_GLYPH     = " "

# ── Window frontend ───────────────────────────────────────────────
CELL            = 16
BG          = (10,  10,  15)
BORDER_COL  = (26,  26,  62)
SNAKE_COL   = (0,   255, 136)
SNAKE_DIM   = (0,   140, 80)
FOOD_COL    = (255, 228, 77)

# ── Runtime choices ───────────────────────────────────────────────
FRONTEND_TERMINAL = "terminal"
FRONTEND_WINDOW   = "window"
FRONTENDS         = {FRONTEND_TERMINAL, FRONTEND_WINDOW}

APPLY_BEFORE = "before"
APPLY_AFTER  = "after"
HEADING_APPLY_MODES = {APPLY_BEFORE, APPLY_AFTER}


@dataclass(frozen=True)
class Settings:
    frontend: str = FRONTEND_TERMINAL
    strict_food: bool = False
    heading_apply: str = APPLY_BEFORE
    log_level: str = "WARNING"
    log_file: str | None = None
    seed: int | None = None
    tick_interval: float = TICK_INTERVAL
    poll_interval: float = POLL_INTERVAL


def _get_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "on"}:
        return True
    if normalized in {"0", "false", "no", "off"}:
        return False
    raise ConfigError(f"Invalid boolean value for {name}: {value}")


def _get_choice(name: str, default: str, allowed: set[str]) -> str:
    value = os.getenv(name, default).strip().lower()
    if value not in allowed:
        allowed_values = ", ".join(sorted(allowed))
        raise ConfigError(f"Invalid value for {name}: {value}. Allowed: {allowed_values}")
    return value


def _get_optional_int(name: str) -> int | None:
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    try:
        return int(value)
    except ValueError:
        raise ConfigError(f"Invalid integer value for {name}: {value}") from None


def _get_log_level(name: str, default: str) -> str:
    value = os.getenv(name, default).strip().upper()
    if value not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
        raise ConfigError(f"Invalid log level for {name}: {value}")
    return value


def validate_timing(tick_interval: float, poll_interval: float) -> None:
    """Input must be sampled strictly more often than the game ticks."""
    if tick_interval <= 0 or poll_interval <= 0:
        raise ConfigError("Tick and poll intervals must be positive")
    if poll_interval >= tick_interval:
        raise ConfigError(
            f"Poll interval ({poll_interval}s) must be shorter than tick interval ({tick_interval}s)"
        )


def load_settings() -> Settings:
    settings = Settings(
        frontend=_get_choice("SNAKE_FRONTEND", FRONTEND_TERMINAL, FRONTENDS),
        strict_food=_get_bool("SNAKE_STRICT_FOOD", False),
        heading_apply=_get_choice("SNAKE_HEADING_APPLY", APPLY_BEFORE, HEADING_APPLY_MODES),
        log_level=_get_log_level("SNAKE_LOG_LEVEL", "WARNING"),
        log_file=os.getenv("SNAKE_LOG_FILE") or None,
        seed=_get_optional_int("SNAKE_SEED"),
    )
    validate_timing(settings.tick_interval, settings.poll_interval)
    return settings
