"""Tests for port interfaces."""

from typing import Any, TextIO

import pytest

from logerr.core.encoding import JSONEncoder, TextEncoder
from logerr.core.models import LogRecord
from logerr.core.ports import EncoderPort, LogSinkPort, MutableSinkPort


class TestEncoderPort:
    """Tests for EncoderPort protocol."""

    @pytest.mark.core
    def test_protocol_has_encode_method(self) -> None:
        """EncoderPort must define encode(record: LogRecord) -> str."""
        assert hasattr(EncoderPort, "encode")

    @pytest.mark.core
    def test_builtin_encoders_are_recognized(self) -> None:
        """Both bundled encoders satisfy EncoderPort."""
        assert isinstance(JSONEncoder(), EncoderPort)
        assert isinstance(TextEncoder(), EncoderPort)

    @pytest.mark.core
    def test_custom_encoder_is_recognized(self) -> None:
        """A class with an encode method satisfies EncoderPort."""

        class UpperEncoder:
            def encode(self, record: LogRecord) -> str:
                return record.message.upper() + "\n"

        assert isinstance(UpperEncoder(), EncoderPort)


class TestSinkPorts:
    """Tests for LogSinkPort and MutableSinkPort."""

    @pytest.mark.core
    def test_read_only_sink_lacks_mutable_capability(self) -> None:
        """A sink without mutators is a LogSinkPort but not a MutableSinkPort."""

        class ReadOnlySink:
            def enabled(self, level: int) -> bool:
                return True

            def info(self, level: int, msg: str, *kv: Any, **fields: Any) -> None:
                pass

            def error(self, err: Any, msg: str, *kv: Any, **fields: Any) -> None:
                pass

            def with_values(self, *kv: Any, **fields: Any) -> "ReadOnlySink":
                return self

            def with_name(self, name: str) -> "ReadOnlySink":
                return self

        sink = ReadOnlySink()
        assert isinstance(sink, LogSinkPort)
        assert not isinstance(sink, MutableSinkPort)

    @pytest.mark.core
    def test_mutable_capability(self) -> None:
        """A class with set_verbosity and set_output is a MutableSinkPort."""

        class Mutable:
            def set_verbosity(self, level: int) -> None:
                pass

            def set_output(self, output: TextIO | None) -> None:
                pass

        assert isinstance(Mutable(), MutableSinkPort)
