"""Logging setup for the command line."""

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "src"


def configure_logging(level: str = "INFO", console: Console | None = None) -> logging.Logger:
    """
    Route the package logger through a Rich handler.

    Calling this more than once replaces the previous handler rather than
    stacking a second one.

    Args:
        level: Level name such as "INFO" or "DEBUG"
        console: Console to write to (stderr console if omitted)

    Returns:
        The configured package logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)

    numeric = logging.getLevelName(level.upper())
    logger.setLevel(numeric if isinstance(numeric, int) else logging.INFO)
    logger.propagate = False
    return logger
