"""Level-filtering sink writing encoded records to a text stream."""

import sys
import time
from collections.abc import Callable
from typing import Any, TextIO

from logerr.core.encoding.ndjson import JSONEncoder
from logerr.core.exceptions import EncodingError, LogerrError, WriteError
from logerr.core.models import KeyValues, LogRecord, lenient_pairs
from logerr.core.ports import EncoderPort

NAME_SEPARATOR = "."


class LogSink:
    """Sink implementing LogSinkPort and MutableSinkPort.

    Derivation (with_name, with_values) returns a new sink sharing the
    output and encoder, leaving the receiver untouched. The mutators
    (set_verbosity, set_output) change the sink in place and are not
    locked; callers sharing a sink across threads must serialize them.

    Key/value arguments with an odd length are padded: the dangling key is
    paired with "<no-value>". Non-string keys are converted with str().

    Args:
        name: Component name, the root of the logger name.
        output: Text stream written to. None writes to the current sys.stdout.
        verbosity: Records with a level above this are dropped.
        encoder: Encoder used to render records (default JSONEncoder).
        *keys_and_values: Alternating base field keys and values.
        **fields: Additional base fields.
    """

    def __init__(
        self,
        name: str = "",
        output: TextIO | None = None,
        verbosity: int = 0,
        encoder: EncoderPort | None = None,
        *keys_and_values: Any,
        **fields: Any,
    ) -> None:
        self._name = name
        self._output = output
        self._verbosity = verbosity
        self._encoder: EncoderPort = encoder if encoder is not None else JSONEncoder()
        self._base_fields: KeyValues = lenient_pairs(*keys_and_values, **fields)

    def _derive(self, name: str, base_fields: KeyValues) -> "LogSink":
        child = LogSink(name, self._output, self._verbosity, self._encoder)
        child._base_fields = base_fields
        return child

    @property
    def name(self) -> str:
        return self._name

    @property
    def base_fields(self) -> KeyValues:
        return self._base_fields

    def enabled(self, level: int) -> bool:
        """Return True if level is at or below the verbosity threshold."""
        return level <= self._verbosity

    def info(self, level: int, msg: str, *keys_and_values: Any, **fields: Any) -> None:
        """Write a record at level if it is enabled.

        Raises:
            EncodingError: If a field value cannot be encoded.
            WriteError: If the output rejects the line.
        """
        if not self.enabled(level):
            return
        self._emit(level, msg, lenient_pairs(*keys_and_values, **fields), None)

    def error(
        self, err: BaseException | None, msg: str, *keys_and_values: Any, **fields: Any
    ) -> None:
        """Write an error record. Errors are not filtered by verbosity.

        Raises:
            EncodingError: If a field value cannot be encoded.
            WriteError: If the output rejects the line.
        """
        self._emit(0, msg, lenient_pairs(*keys_and_values, **fields), err)

    def _emit(
        self,
        level: int,
        msg: str,
        call_fields: KeyValues,
        err: BaseException | None,
    ) -> None:
        record = LogRecord(
            level=level,
            message=msg,
            name=self._name,
            timestamp=time.time(),
            base_fields=self._base_fields,
            call_fields=call_fields,
            error=err,
        )
        try:
            line = self._encoder.encode(record)
        except LogerrError:
            raise
        except Exception as e:
            raise EncodingError(f"cannot encode record {msg!r}: {e!r}") from e
        output = self.get_output()
        try:
            output.write(line)
            flush = getattr(output, "flush", None)
            if flush is not None:
                flush()
        except (OSError, ValueError, TypeError) as e:
            raise WriteError(f"failed to write log record: {e}") from e

    def with_name(self, name: str) -> "LogSink":
        """Return a new sink with name appended to this sink's name."""
        if self._name:
            name = f"{self._name}{NAME_SEPARATOR}{name}"
        return self._derive(name, self._base_fields)

    def with_values(self, *keys_and_values: Any, **fields: Any) -> "LogSink":
        """Return a new sink with additional base fields appended."""
        return self._derive(
            self._name, self._base_fields + lenient_pairs(*keys_and_values, **fields)
        )

    def set_verbosity(self, level: int) -> None:
        self._verbosity = level

    def set_output(self, output: TextIO | None) -> None:
        self._output = output

    def set_encoder(self, encoder: EncoderPort) -> None:
        self._encoder = encoder

    def get_verbosity(self) -> int:
        return self._verbosity

    def get_output(self) -> TextIO:
        """Return the output stream, resolving None to the current sys.stdout."""
        return self._output if self._output is not None else sys.stdout

    def get_encoder(self) -> EncoderPort:
        return self._encoder

    def __repr__(self) -> str:
        return f"LogSink(name={self._name!r}, verbosity={self._verbosity})"


# Functional option applied to a sink before use
Option = Callable[[LogSink], None]


def with_output(output: TextIO | None) -> Option:
    """Option setting the sink output stream."""

    def apply(sink: LogSink) -> None:
        sink.set_output(output)

    return apply


def with_verbosity(level: int) -> Option:
    """Option setting the sink verbosity threshold."""

    def apply(sink: LogSink) -> None:
        sink.set_verbosity(level)

    return apply


def with_encoder(encoder: EncoderPort) -> Option:
    """Option replacing the sink encoder."""

    def apply(sink: LogSink) -> None:
        sink.set_encoder(encoder)

    return apply
