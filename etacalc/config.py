"""
Calculator configuration from dicts and YAML files.

Example YAML:
    eta:
      total_count: 25000
      period_duration: 500ms
      period_count: 120
      log_level: debug

Example:
    >>> from etacalc import Calculator, load_config
    >>> cfg = load_config("etc/eta.yaml")
    >>> calc = Calculator.from_config(cfg)
"""

import datetime
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml  # type: ignore[import-untyped]

from .calculator import DEFAULT_PERIOD_COUNT, DEFAULT_PERIOD_DURATION
from .delta import InvalidDurationError, delta_to_secs
from .exceptions import ConfigError, InvalidLogLevelError
from .log import resolve_level

DEFAULT_SECTION = "eta"
DEFAULT_LOG_LEVEL = "info"

_KNOWN_KEYS = {"total_count", "period_duration", "period_count", "log_level"}


def _int_value(data: dict[str, Any], key: str, default: int | None = None) -> int:
    """Get an integer value, rejecting bools, floats and strings."""
    if key not in data:
        if default is None:
            raise ConfigError(f"missing required key '{key}'", key=key)
        return default

    value = data[key]
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(
            f"'{key}' must be an integer, got {type(value).__name__}",
            key=key,
            value=value,
        )
    return value


def _duration_value(value: Any) -> datetime.timedelta:
    """Convert seconds or a duration string like '500ms' to a timedelta."""
    if isinstance(value, datetime.timedelta):
        return value
    if isinstance(value, str):
        try:
            secs = delta_to_secs(value)
        except InvalidDurationError as e:
            raise ConfigError(
                f"invalid 'period_duration': {e}", key="period_duration", value=value
            ) from e
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        secs = value
    else:
        raise ConfigError(
            "'period_duration' must be a number or duration string",
            key="period_duration",
            value=value,
        )

    # NaN, infinities and anything past timedelta.max
    try:
        return datetime.timedelta(seconds=secs)
    except (ValueError, OverflowError) as e:
        raise ConfigError(
            f"'period_duration' out of range: {e}", key="period_duration", value=value
        ) from e


@dataclass(frozen=True)
class EtaConfig:
    """Validated calculator settings."""

    total_count: int
    period_duration: datetime.timedelta = DEFAULT_PERIOD_DURATION
    period_count: int = DEFAULT_PERIOD_COUNT
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "EtaConfig":
        """
        Build a config from a plain dict.

        Args:
            data: Mapping with total_count (required) and optional
                  period_duration, period_count, log_level

        Returns:
            Validated EtaConfig

        Raises:
            ConfigError: If a key is unknown, missing, or has an invalid value
        """
        if not isinstance(data, dict):
            raise ConfigError(
                f"config must be a mapping, got {type(data).__name__}"
            )

        unknown = sorted(set(data) - _KNOWN_KEYS)
        if unknown:
            raise ConfigError(f"unknown config keys: {', '.join(unknown)}", key=unknown[0])

        total_count = _int_value(data, "total_count")
        period_count = _int_value(data, "period_count", DEFAULT_PERIOD_COUNT)
        if period_count < 1:
            raise ConfigError(
                "'period_count' must be at least 1", key="period_count", value=period_count
            )

        period_duration = _duration_value(
            data.get("period_duration", DEFAULT_PERIOD_DURATION)
        )
        if period_duration <= datetime.timedelta(0):
            raise ConfigError(
                "'period_duration' must be positive",
                key="period_duration",
                value=period_duration,
            )

        log_level = str(data.get("log_level", DEFAULT_LOG_LEVEL))
        try:
            resolve_level(log_level)
        except InvalidLogLevelError as e:
            raise ConfigError(str(e), key="log_level", value=log_level) from e

        return cls(
            total_count=total_count,
            period_duration=period_duration,
            period_count=period_count,
            log_level=log_level,
        )


def load_config(path: str | Path, section: str | None = DEFAULT_SECTION) -> EtaConfig:
    """
    Load calculator settings from a YAML file.

    Args:
        path: YAML file path
        section: Top-level key holding the settings (None = whole document)

    Returns:
        Validated EtaConfig

    Raises:
        ConfigError: If the file is missing, not valid YAML, lacks the section,
                     or holds invalid settings
    """
    path = Path(path)
    try:
        with path.open(encoding="utf-8") as f:
            document = yaml.safe_load(f)
    except FileNotFoundError as e:
        raise ConfigError("config file not found", path=str(path)) from e
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML: {e}", path=str(path)) from e

    if section is not None:
        if not isinstance(document, dict) or section not in document:
            raise ConfigError(f"missing '{section}' section", path=str(path))
        document = document[section]

    return EtaConfig.from_dict(document)


__all__ = ["EtaConfig", "load_config", "DEFAULT_SECTION"]
