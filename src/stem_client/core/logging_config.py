"""Logging setup for the CLI.

The library itself only creates module loggers (`logging.getLogger(__name__)`)
and never installs handlers; applications decide where records go.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "stem_client"


def configure_logging(level: str | int = logging.WARNING, *, console: Console | None = None) -> logging.Logger:
    """Attach a single RichHandler to the package logger (idempotent)."""

    if isinstance(level, str):
        level = logging.getLevelName(level.strip().upper())
        if not isinstance(level, int):
            level = logging.WARNING

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(
            console=console or Console(stderr=True),
            show_path=False,
            rich_tracebacks=False,
        )
        handler.setFormatter(logging.Formatter("%(name)s | %(message)s"))
        logger.addHandler(handler)
    return logger
