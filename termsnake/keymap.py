"""
keymap.py — Input mapper.

Frontends translate their native key codes into KeyEvent; everything
below is a pure lookup with no knowledge of curses or pygame.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .model import Heading

KEY_UP    = "up"
KEY_DOWN  = "down"
KEY_LEFT  = "left"
KEY_RIGHT = "right"


@dataclass(frozen=True)
class KeyEvent:
    key: str
    ctrl: bool = False


QUIT_EVENT = KeyEvent("q", ctrl=True)

_HEADINGS = {
    KEY_UP:    Heading.UP,
    KEY_DOWN:  Heading.DOWN,
    KEY_LEFT:  Heading.LEFT,
    KEY_RIGHT: Heading.RIGHT,
    "w": Heading.UP,
    "s": Heading.DOWN,
    "a": Heading.LEFT,
    "d": Heading.RIGHT,
}


def map_key_to_heading(event: KeyEvent) -> Optional[Heading]:
    if event.ctrl:
        return None
    return _HEADINGS.get(event.key.lower() if len(event.key) == 1 else event.key)


def is_quit(event: KeyEvent) -> bool:
    return event.ctrl and event.key.lower() == "q"
