"""
Logger class with a TRACE level and structured extra fields.
"""

import logging
from typing import Any

from .constants import LogConstants

# Record attribute holding the caller's extra dict, read by LogFormatter
EXTRA_ATTR = "_etacalc_extra"


class Logger(logging.Logger):
    """
    Standard logger plus a trace() method.

    Extra fields passed with ``extra={...}`` are also kept together on the
    record so the formatter can render them as ``[key:value]`` suffixes.
    """

    def makeRecord(  # type: ignore[override]
        self,
        name: str,
        level: int,
        fn: str,
        lno: int,
        msg: object,
        args: Any,
        exc_info: Any,
        func: str | None = None,
        extra: dict[str, Any] | None = None,
        sinfo: str | None = None,
    ) -> logging.LogRecord:
        """Create log record, remembering which attributes came from extra."""
        record = super().makeRecord(
            name, level, fn, lno, msg, args, exc_info, func, extra, sinfo
        )
        setattr(record, EXTRA_ATTR, dict(extra) if extra else {})
        return record

    def trace(self, msg: str, *args: Any, **kwargs: Any) -> None:
        """
        Log a TRACE level message.

        Args:
            msg: Log message
            *args: Message format arguments
            **kwargs: Additional keyword arguments including 'extra' for structured data
        """
        trace_level = LogConstants.CUSTOM_LEVELS["TRACE"]
        if self.isEnabledFor(trace_level):
            self._log(trace_level, msg, args, **kwargs)


class LogFormatter(logging.Formatter):
    """Formatter appending extra fields as ``[key:value]`` after the message."""

    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        extra = getattr(record, EXTRA_ATTR, None)
        if not extra:
            return text

        fields = " ".join(f"[{key}:{value}]" for key, value in extra.items())
        # Keep tracebacks on the lines after the fields
        head, sep, tail = text.partition("\n")
        return f"{head} {fields}{sep}{tail}"
