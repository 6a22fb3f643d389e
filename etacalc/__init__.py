from importlib.metadata import PackageNotFoundError, version

from .calculator import (
    DEFAULT_PERIOD_COUNT,
    DEFAULT_PERIOD_DURATION,
    UNKNOWN,
    Calculator,
    EstimateKind,
    Estimates,
    is_unknown,
)
from .clock import ZERO_TIME, truncate, utc_now
from .config import EtaConfig, load_config
from .delta import InvalidDurationError, delta_str, delta_to_secs, td_str
from .exceptions import ConfigError, EtaError, InvalidLogLevelError, LoggingError
from .rwlock import RWLock

# Version is read from package metadata (pyproject.toml)
try:
    __version__ = version("etacalc")
except PackageNotFoundError:
    # Package not installed, use fallback (development mode)
    __version__ = "0.1.0-dev"

# Explicit public API
__all__ = [
    # Version
    "__version__",
    # Calculator
    "Calculator",
    "Estimates",
    "EstimateKind",
    "UNKNOWN",
    "is_unknown",
    "DEFAULT_PERIOD_DURATION",
    "DEFAULT_PERIOD_COUNT",
    # Clock
    "ZERO_TIME",
    "truncate",
    "utc_now",
    # Config
    "EtaConfig",
    "load_config",
    # Duration formatting
    "delta_str",
    "td_str",
    "delta_to_secs",
    "InvalidDurationError",
    # Concurrency
    "RWLock",
    # Exceptions
    "EtaError",
    "ConfigError",
    "LoggingError",
    "InvalidLogLevelError",
]
