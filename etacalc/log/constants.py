"""
Constants for the etacalc logging helpers.

Format strings, default values and the custom TRACE level.
"""

import logging


class LogConstants:
    """Constants for the logging system."""

    # Default format strings
    DEFAULT_FORMAT: str = "[%(asctime)s] [%(levelname).1s] %(message)s"
    DEFAULT_DATEFMT: str = "%H:%M:%S"

    # Custom log levels
    CUSTOM_LEVELS: dict[str, int] = {"TRACE": 5}

    # Log level names for resolution (trace added by the package __init__)
    LEVEL_NAMES: dict[str, int] = {
        "critical": logging.CRITICAL,
        "error": logging.ERROR,
        "warning": logging.WARNING,
        "info": logging.INFO,
        "debug": logging.DEBUG,
    }
