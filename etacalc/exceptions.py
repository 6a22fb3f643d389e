"""
Exception hierarchy for etacalc.

The calculator itself never raises: degenerate states surface as the UNKNOWN
timestamp. These exceptions belong to the layers around it (configuration,
logging setup, duration parsing), so callers can catch every etacalc error
with a single except clause.
"""

from typing import Any


class EtaError(Exception):
    """
    Base exception for all etacalc errors.

    Example:
        try:
            cfg = load_config("eta.yaml")
        except EtaError as e:
            lg.error(f"cannot set up progress tracking: {e}")
    """

    def __init__(self, message: str, **context: Any) -> None:
        """
        Initialize the exception with a message and optional context.

        Args:
            message: Human-readable error message
            **context: Additional context information (stored in self.context)
        """
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        """String representation with context if available."""
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


class ConfigError(EtaError):
    """
    Configuration-related errors.

    Examples:
        - Config file not found or not valid YAML
        - Missing total_count
        - Non-positive period_duration or period_count
    """

    pass


class LoggingError(EtaError):
    """Logging setup errors."""

    pass


class InvalidLogLevelError(LoggingError):
    """Raised when an invalid log level is specified."""

    def __init__(self, level: Any) -> None:
        self.level = level
        super().__init__(f"Invalid log level: {level}")


__all__ = ["EtaError", "ConfigError", "LoggingError", "InvalidLogLevelError"]
