"""
errors.py — Exception hierarchy.

Collisions are not errors: the engine reports them by returning False.
"""


class SnakeError(Exception):
    """Base class for everything this package raises on purpose."""


class ConfigError(SnakeError):
    """Raised when a runtime setting is missing or invalid."""


class FrontendError(SnakeError):
    """Raised when the terminal/window boundary fails. Never retried."""


class GameOverError(SnakeError):
    """Raised when the engine is advanced after the game has ended."""


class BoardFullError(SnakeError):
    """Raised when strict food placement finds no free interior cell."""
