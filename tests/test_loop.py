import random

import pytest

from termsnake.config import APPLY_AFTER
from termsnake.errors import ConfigError
from termsnake.keymap import QUIT_EVENT, KeyEvent
from termsnake.loop import GameLoop, LoopResult
from termsnake.model import Food, GameEngine, Grid, Heading, Snake

TICK = 1.0
POLL = 0.25  # four polls per tick, exact in binary floating point


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


class ScriptedInput:
    """Returns scripted events, one per poll, and quits when the script runs out."""

    def __init__(self, clock: FakeClock, events) -> None:
        self.clock = clock
        self.events = list(events)
        self.timeouts = []

    def poll(self, timeout):
        self.timeouts.append(timeout)
        self.clock.now += timeout
        if self.events:
            return self.events.pop(0)
        return QUIT_EVENT


class RecordingRenderer:
    def __init__(self) -> None:
        self.started = []
        self.frames = []
        self.closed = False

    def start(self, grid) -> None:
        self.started.append(grid)

    def render(self, state) -> None:
        self.frames.append(state)

    def close(self) -> None:
        self.closed = True


def make_loop(events, start=(5, 5), heading=Heading.RIGHT, **kwargs):
    clock = FakeClock()
    engine = GameEngine(
        grid=Grid(40, 20),
        snake=Snake(start=start, heading=heading),
        food=Food((30, 15)),
        rng=random.Random(0),
    )
    renderer = RecordingRenderer()
    source = ScriptedInput(clock, events)
    loop = GameLoop(engine, renderer, source, tick_interval=TICK, poll_interval=POLL, clock=clock, **kwargs)
    return loop, engine, renderer, source


def test_quit_returns_before_any_tick() -> None:
    loop, engine, renderer, source = make_loop([None, QUIT_EVENT, KeyEvent("up")])

    assert loop.run() is LoopResult.QUIT
    assert loop.ticks == 0
    assert len(source.timeouts) == 2
    assert len(renderer.started) == 1
    assert len(renderer.frames) == 1
    assert engine.snake.head == (5, 5)


def test_one_render_per_tick_never_per_poll() -> None:
    loop, engine, renderer, source = make_loop([None] * 8)

    assert loop.run() is LoopResult.QUIT
    assert loop.ticks == 2
    assert len(source.timeouts) == 9
    assert loop.renders == len(renderer.frames) == 3  # startup + two ticks
    assert [f.head for f in renderer.frames] == [(5, 5), (6, 5), (7, 5)]
    assert all(t == POLL for t in source.timeouts)


def test_last_direction_in_a_tick_wins() -> None:
    loop, engine, renderer, _ = make_loop([KeyEvent("up"), KeyEvent("down"), None, None])

    loop.run()
    assert engine.snake.heading == Heading.DOWN
    assert engine.snake.head == (5, 6)


def test_reversal_within_a_tick_is_dropped() -> None:
    loop, engine, renderer, _ = make_loop([KeyEvent("up"), KeyEvent("left"), None, None])

    loop.run()
    assert engine.snake.heading == Heading.UP
    assert engine.snake.head == (5, 4)


def test_apply_before_advance_turns_on_the_next_tick() -> None:
    loop, engine, renderer, _ = make_loop([KeyEvent("up"), None, None, None])

    loop.run()
    assert renderer.frames[-1].head == (5, 4)
    assert renderer.frames[-1].heading == Heading.UP


def test_apply_after_advance_delays_the_turn_by_one_tick() -> None:
    loop, engine, renderer, _ = make_loop(
        [KeyEvent("up"), None, None, None, None, None, None, None],
        apply_heading=APPLY_AFTER,
    )

    loop.run()
    assert [f.head for f in renderer.frames] == [(5, 5), (6, 5), (6, 4)]


def test_game_over_ends_loop_without_extra_render() -> None:
    loop, engine, renderer, _ = make_loop([None] * 4, start=(38, 10))

    assert loop.run() is LoopResult.GAME_OVER
    assert loop.renders == len(renderer.frames) == 1
    assert list(engine.snake.body) == [(38, 10)]
    assert not engine.alive


def test_ignored_keys_do_not_change_heading() -> None:
    loop, engine, _, _ = make_loop([KeyEvent("x"), KeyEvent("c", ctrl=True), None, None])

    loop.run()
    assert engine.snake.heading == Heading.RIGHT
    assert engine.snake.head == (6, 5)


def test_poll_interval_must_be_shorter_than_tick() -> None:
    engine = GameEngine()
    with pytest.raises(ConfigError):
        GameLoop(engine, RecordingRenderer(), ScriptedInput(FakeClock(), []), tick_interval=0.1, poll_interval=0.1)


def test_unknown_apply_mode_is_rejected() -> None:
    engine = GameEngine()
    with pytest.raises(ValueError):
        GameLoop(engine, RecordingRenderer(), ScriptedInput(FakeClock(), []), apply_heading="sometimes")


class StallingInput(ScriptedInput):
    """First poll blocks for a long time, as after a suspended process."""

    def __init__(self, clock: FakeClock, stall: float) -> None:
        super().__init__(clock, [None])
        self.stall = stall

    def poll(self, timeout):
        if self.stall:
            self.clock.now += self.stall - timeout
            self.stall = 0.0
        return super().poll(timeout)


def test_stall_does_not_replay_missed_ticks() -> None:
    loop, engine, renderer, _ = make_loop([])
    loop.input_source = StallingInput(loop.clock, 3.5 * TICK)

    assert loop.run() is LoopResult.QUIT
    assert loop.ticks == 1
    assert engine.snake.head == (6, 5)
    assert loop.renders == 2
