"""Logging setup for the CLI.

Library modules only create `logging.getLogger(__name__)` loggers; handlers
are installed here so that embedding applications keep control of logging.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "uffio"


def setup_logging(verbose: bool = False, console: Console | None = None) -> logging.Logger:
    """Route uffio log records through rich; debug level when verbose."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)

    # repeated CLI invocations in one process must not stack handlers
    logger.handlers.clear()
    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=verbose,
        rich_tracebacks=True,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    logger.addHandler(handler)
    return logger
