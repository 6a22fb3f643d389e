"""
Logging helpers for etacalc.

Adds a TRACE level below DEBUG, a Logger with trace(), a formatter that
renders structured extra fields, and a console logger factory.

Log Level Control:
- Standard levels: critical, error, warning, info, debug
- Custom level: trace
"""

import logging

from .constants import LogConstants
from .factory import create_logger, resolve_level
from .logger import Logger, LogFormatter

logging.TRACE = LogConstants.CUSTOM_LEVELS["TRACE"]  # type: ignore[attr-defined]
logging.addLevelName(logging.TRACE, "TRACE")  # type: ignore[attr-defined]

LogConstants.LEVEL_NAMES["trace"] = logging.TRACE  # type: ignore[attr-defined]

__all__ = [
    "LogConstants",
    "Logger",
    "LogFormatter",
    "create_logger",
    "resolve_level",
]
