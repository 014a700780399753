"""Logging setup shared by the console entry point."""

from __future__ import annotations

import logging
from pathlib import Path

from restaurant_console.config import LOG_LEVEL, LOG_PATH

LOG_FORMAT = "%(asctime)s - %(levelname)s - [%(name)s] %(message)s"


def init_log(log_name: str = "restaurant_console", log_path: str | None = LOG_PATH) -> logging.Logger:
    """
    Configure root logging once and return a named logger.

    A Textual app owns the terminal, so when ``log_path`` is set records go to
    that file instead of stderr.
    """
    handlers: list[logging.Handler] = []
    if log_path:
        Path(log_path).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))
    else:
        handlers.append(logging.NullHandler())

    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT, handlers=handlers)
    return logging.getLogger(log_name)
