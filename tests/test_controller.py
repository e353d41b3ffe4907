import pytest

import termsnake.controller as controller_module
from termsnake.config import Settings
from termsnake.errors import BoardFullError, ConfigError, FrontendError
from termsnake.loop import LoopResult


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(controller_module, "setup_logging", lambda level, log_file: None)
    monkeypatch.setattr(controller_module, "attach_stderr", lambda: None)


def test_config_error_exits_with_2(capsys: pytest.CaptureFixture[str]) -> None:
    def _boom() -> Settings:
        raise ConfigError("Invalid value for SNAKE_FRONTEND: web")

    code = controller_module.run(_boom)

    captured = capsys.readouterr()
    assert code == 2
    assert "Configuration error" in captured.err
    assert "SNAKE_FRONTEND" in captured.err


def test_frontend_error_exits_with_1(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    def _fail(self):
        raise FrontendError("Terminal is 20x10, need at least 41x20")

    monkeypatch.setattr(controller_module.GameController, "run", _fail)

    code = controller_module.run(Settings)

    assert code == 1
    assert "41x20" in capsys.readouterr().err


@pytest.mark.parametrize("result", [LoopResult.QUIT, LoopResult.GAME_OVER])
def test_quit_and_game_over_exit_cleanly(monkeypatch: pytest.MonkeyPatch, result: LoopResult) -> None:
    monkeypatch.setattr(controller_module.GameController, "run", lambda self: result)
    assert controller_module.run(Settings) == 0


def test_full_board_exits_cleanly(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    def _full(self):
        raise BoardFullError("No free interior cell left for food")

    monkeypatch.setattr(controller_module.GameController, "run", _full)

    assert controller_module.run(Settings) == 0
    assert "#" in capsys.readouterr().out


def test_keyboard_interrupt_exits_with_130(monkeypatch: pytest.MonkeyPatch) -> None:
    def _interrupt(self):
        raise KeyboardInterrupt

    monkeypatch.setattr(controller_module.GameController, "run", _interrupt)
    assert controller_module.run(Settings) == 130


def test_game_over_prints_final_board(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    controller = controller_module.GameController(Settings(seed=1))
    monkeypatch.setattr(controller, "_run_terminal", lambda: LoopResult.GAME_OVER)

    assert controller.run() is LoopResult.GAME_OVER

    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 20
    assert lines[0] == "#" * 40
    assert lines[2][2] == "█"
    assert lines[10][20] == "@"


def test_quit_prints_nothing(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    controller = controller_module.GameController(Settings())
    monkeypatch.setattr(controller, "_run_terminal", lambda: LoopResult.QUIT)

    assert controller.run() is LoopResult.QUIT
    assert capsys.readouterr().out == ""


def test_controller_seeds_food_placement() -> None:
    a = controller_module.GameController(Settings(seed=9)).engine.rng.random()
    b = controller_module.GameController(Settings(seed=9)).engine.rng.random()
    assert a == b
