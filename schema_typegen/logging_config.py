"""Logging setup for schema-typegen.

Modules obtain their logger with ``get_logger(__name__)``; the CLI calls
``setup_logging`` once to route records through rich.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER_NAME = "schema_typegen"
DEFAULT_FORMAT = "%(message)s"

_configured = False


def setup_logging(level: int | str = logging.WARNING, console: Console | None = None) -> None:
    """Configure the package logger with a rich handler.

    Args:
        level: Logging level name or number.
        console: Console to log to. Defaults to stderr.
    """
    global _configured

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel(level)

    if not _configured:
        handler = RichHandler(
            console=console or Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter(DEFAULT_FORMAT))
        root.addHandler(handler)
        _configured = True


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the package namespace."""
    if not name.startswith(ROOT_LOGGER_NAME):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)
