"""Terminal display helpers for calculator estimates."""

from .progress import UNKNOWN_TEXT, EtaColumn

__all__ = ["EtaColumn", "UNKNOWN_TEXT"]
