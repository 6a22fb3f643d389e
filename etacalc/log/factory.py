"""
Factory helpers for creating console loggers.
"""

import logging
import sys
from typing import IO, cast

from ..exceptions import InvalidLogLevelError
from .constants import LogConstants
from .logger import Logger, LogFormatter


def resolve_level(level: str | int) -> int:
    """
    Resolve log level from a name or numeric value.

    Args:
        level: Level name ("trace", "debug", ...) or numeric level

    Returns:
        Numeric log level

    Raises:
        InvalidLogLevelError: If the log level is unknown
    """
    if isinstance(level, bool):
        raise InvalidLogLevelError(level)
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        if level.isnumeric():
            return int(level)
        if level.lower() in LogConstants.LEVEL_NAMES:
            return LogConstants.LEVEL_NAMES[level.lower()]
    raise InvalidLogLevelError(level)


def create_logger(
    name: str, level: str | int = "info", stream: IO[str] | None = None
) -> Logger:
    """
    Create (or reconfigure) a console logger.

    Calling this again for the same name replaces the handler instead of
    stacking a second one.

    Args:
        name: Logger name
        level: Log level name or number
        stream: Output stream (default: sys.stderr)

    Returns:
        Configured Logger instance

    Example:
        >>> lg = create_logger("/eta", level="trace")
        >>> lg.trace("period closed", extra={"closed": 42})
        [12:34:56] [T] period closed [closed:42]
    """
    resolved = resolve_level(level)

    original_class = logging.getLoggerClass()
    logging.setLoggerClass(Logger)
    try:
        lg = logging.getLogger(name)
    finally:
        logging.setLoggerClass(original_class)

    if not isinstance(lg, Logger):
        # Created earlier as a plain logger; swap in our class
        lg.__class__ = Logger

    for handler in list(lg.handlers):
        lg.removeHandler(handler)

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(
        LogFormatter(LogConstants.DEFAULT_FORMAT, LogConstants.DEFAULT_DATEFMT)
    )
    lg.addHandler(handler)
    lg.setLevel(resolved)
    lg.propagate = False
    return cast(Logger, lg)
