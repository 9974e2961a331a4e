"""Leveled logger wrapping a sink."""

import logging
from typing import Any

from logerr.core.exceptions import LogerrError
from logerr.core.ports import LogSinkPort

# Last-resort diagnostics. Unconfigured, stdlib logging prints these to stderr.
diagnostics = logging.getLogger("logerr")


class Logger:
    """Leveled logger bound to a sink.

    The logger's level is relative: v() returns a logger whose level is the
    sum of this logger's level and the argument, so V values are additive.
    Higher levels mean less important messages.

    Encoding and write failures raised by the sink are reported to the
    ``logerr`` stdlib logger and never reach the caller.

    Args:
        sink: The sink records are sent to.
        level: Verbosity level used by info().
    """

    def __init__(self, sink: LogSinkPort, level: int = 0) -> None:
        self._sink = sink
        self._level = max(level, 0)

    @property
    def level(self) -> int:
        return self._level

    def get_sink(self) -> LogSinkPort:
        return self._sink

    def enabled(self) -> bool:
        """Return True if info() at this logger's level would be emitted."""
        return self._sink.enabled(self._level)

    def v(self, level: int) -> "Logger":
        """Return a logger for a verbosity level relative to this one.

        Negative levels have the same effect as V(0).
        """
        return Logger(self._sink, self._level + max(level, 0))

    def info(self, msg: str, *keys_and_values: Any, **fields: Any) -> None:
        """Log a non-error message with key/value context."""
        if not self._sink.enabled(self._level):
            return
        try:
            self._sink.info(self._level, msg, *keys_and_values, **fields)
        except LogerrError:
            diagnostics.warning("dropped log record %r", msg, exc_info=True)

    def error(
        self, err: BaseException | None, msg: str, *keys_and_values: Any, **fields: Any
    ) -> None:
        """Log an error with a message and key/value context."""
        try:
            self._sink.error(err, msg, *keys_and_values, **fields)
        except LogerrError:
            diagnostics.warning("dropped error record %r", msg, exc_info=True)

    def with_values(self, *keys_and_values: Any, **fields: Any) -> "Logger":
        """Return a logger whose sink carries additional base fields."""
        return Logger(self._sink.with_values(*keys_and_values, **fields), self._level)

    def with_name(self, name: str) -> "Logger":
        """Return a logger with name appended to the sink's name."""
        return Logger(self._sink.with_name(name), self._level)

    def __repr__(self) -> str:
        return f"Logger(sink={self._sink!r}, level={self._level})"
