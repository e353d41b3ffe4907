import os

import pytest

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
pygame = pytest.importorskip("pygame")

from termsnake.config import BG, BORDER_COL, CELL  # noqa: E402
from termsnake.keymap import QUIT_EVENT, KeyEvent  # noqa: E402
from termsnake.model import GameState, Grid, Heading  # noqa: E402
from termsnake.view import WindowRenderer, WindowSession, translate_event  # noqa: E402


def test_translate_event_maps_arrows_and_ctrl_q() -> None:
    up = pygame.event.Event(pygame.KEYDOWN, key=pygame.K_UP, mod=0)
    ctrl_q = pygame.event.Event(pygame.KEYDOWN, key=pygame.K_q, mod=pygame.KMOD_LCTRL)
    plain_d = pygame.event.Event(pygame.KEYDOWN, key=pygame.K_d, mod=0)

    assert translate_event(up) == KeyEvent("up")
    assert translate_event(ctrl_q) == QUIT_EVENT
    assert translate_event(plain_d) == KeyEvent("d")


def test_window_close_is_quit_and_other_events_are_ignored() -> None:
    assert translate_event(pygame.event.Event(pygame.QUIT)) == QUIT_EVENT
    assert translate_event(pygame.event.Event(pygame.KEYUP, key=pygame.K_UP, mod=0)) is None
    assert translate_event(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_F1, mod=0)) is None


def test_renderer_draws_wall_and_snake() -> None:
    grid = Grid(10, 8)
    state = GameState(body=((3, 3), (2, 3)), food=(6, 5), heading=Heading.RIGHT, alive=True, grid=grid)

    with WindowSession(grid) as screen:
        renderer = WindowRenderer(screen)
        renderer.start(grid)
        renderer.render(state)

        assert tuple(screen.get_at((0, 0)))[:3] == BORDER_COL
        tail_center = (2 * CELL + CELL // 2, 3 * CELL + CELL // 2)
        assert tuple(screen.get_at(tail_center))[:3] != BG

        renderer.close()
        assert tuple(screen.get_at(tail_center))[:3] == BG
