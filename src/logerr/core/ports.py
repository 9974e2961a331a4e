"""Port interfaces for sinks and encoders.

These protocols define the contracts that adapters must implement.
The Logger and the facade depend only on these interfaces, not on
concrete implementations.
"""

from typing import Any, Protocol, Self, TextIO, runtime_checkable

from logerr.core.models import LogRecord


@runtime_checkable
class EncoderPort(Protocol):
    """Port for turning a log record into one output line.

    Examples: JSONEncoder, TextEncoder.
    """

    def encode(self, record: LogRecord) -> str:
        """Encode a record into a newline-terminated line.

        Raises:
            EncodingError: If a field value cannot be represented.
        """
        ...


@runtime_checkable
class LogSinkPort(Protocol):
    """Port for the leveled-logger sink contract.

    A sink decides whether a record is emitted and renders it. Derivation
    methods return a new sink and never modify the receiver.
    """

    def enabled(self, level: int) -> bool:
        """Return True if records at level would be emitted."""
        ...

    def info(self, level: int, msg: str, *keys_and_values: Any, **fields: Any) -> None:
        """Emit a non-error record at the given level."""
        ...

    def error(
        self, err: BaseException | None, msg: str, *keys_and_values: Any, **fields: Any
    ) -> None:
        """Emit an error record regardless of verbosity."""
        ...

    def with_values(self, *keys_and_values: Any, **fields: Any) -> Self:
        """Return a new sink with additional base fields."""
        ...

    def with_name(self, name: str) -> Self:
        """Return a new sink with name appended to its name."""
        ...


@runtime_checkable
class MutableSinkPort(Protocol):
    """Capability for sinks whose verbosity and output can change in place."""

    def set_verbosity(self, level: int) -> None:
        """Set the verbosity threshold."""
        ...

    def set_output(self, output: TextIO | None) -> None:
        """Set the output destination."""
        ...
