"""
logging_setup.py — Root logger configuration.

Log records never reach a terminal that curses is driving: they go to a
file, or wait for the screen to be released before stderr is attached.
"""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(level: str = "WARNING", log_file: str | None = None) -> None:
    """
    Configure the root logger once.

    With a log file, records go there for the whole run. Without one the
    handler list stays empty until attach_stderr() is called, so nothing is
    written into a raw-mode terminal.
    """
    root = logging.getLogger()
    root.setLevel(level.upper())
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    if log_file:
        handler = logging.FileHandler(log_file, encoding="utf-8")
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
    else:
        root.addHandler(logging.NullHandler())


def attach_stderr() -> None:
    """Route records to stderr once the terminal belongs to the shell again."""
    root = logging.getLogger()
    if any(isinstance(h, logging.FileHandler) for h in root.handlers):
        return
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
