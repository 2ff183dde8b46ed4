"""Rich console logging for applications embedding the editor core."""

from __future__ import annotations

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

__all__ = ["configure_logging", "console"]

LOG_LEVEL_ENV = "DOCYLIT_LOG_LEVEL"

console = Console(stderr=True)


class DocylitHandler(RichHandler):
    """The one handler :func:`configure_logging` owns on the root logger."""


def _level_from_env() -> int:
    name = os.getenv(LOG_LEVEL_ENV, "INFO").upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def configure_logging() -> None:
    """Route all logging through a Rich handler on stderr.

    Safe to call more than once: the handler is installed on the first call
    and only the level is refreshed afterwards.
    """
    root = logging.getLogger()
    if not any(isinstance(handler, DocylitHandler) for handler in root.handlers):
        root.handlers.clear()
        handler = DocylitHandler(console=console, rich_tracebacks=True, show_path=False, markup=False)
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
        root.addHandler(handler)
    root.setLevel(_level_from_env())
    logging.captureWarnings(True)
