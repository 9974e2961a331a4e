"""Exceptions raised by logerr itself."""


class LogerrError(Exception):
    """Base class for failures raised by the library."""


class OddKeyValuesError(LogerrError, ValueError):
    """Raised when a key/value list is malformed (odd length or non-str key)."""


class EncodingError(LogerrError):
    """Raised when a log record contains a value the encoder cannot render."""

    def __init__(self, message: str, key: str | None = None) -> None:
        super().__init__(message)
        self.key = key


class WriteError(LogerrError):
    """Raised when the output destination fails to accept a log line."""
