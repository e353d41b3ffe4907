"""
main.py — Entry point.

Run with:
    python main.py

Controls: arrow keys (or WASD) steer, Ctrl+Q quits.
Set SNAKE_FRONTEND=window to play in a pygame window instead of the terminal.

Requires:
    pip install -e .
"""

from termsnake.controller import run


def main() -> int:
    return run()


if __name__ == "__main__":
    raise SystemExit(main())
