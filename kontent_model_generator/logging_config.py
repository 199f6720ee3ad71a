"""Logging setup shared by all modules.

Modules call ``get_logger(__name__)``; the CLI calls ``setup_logging`` once
to route records through a rich handler.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER_NAME = "kontent_model_generator"
DEFAULT_FORMAT = "%(message)s"


def get_logger(name: str) -> logging.Logger:
    """Return a logger below the package's root logger."""
    if name == ROOT_LOGGER_NAME or name.startswith(f"{ROOT_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def setup_logging(level: int | str = logging.WARNING, console: Console | None = None) -> logging.Logger:
    """Configure the package logger.

    Args:
        level: Log level for the package logger.
        console: Console to log to; defaults to stderr.

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)

    # Replace handlers from an earlier call instead of stacking them
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter(DEFAULT_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False

    return logger
