"""Shared test fixtures for all test modules."""

import io
import json
import time
from collections.abc import Callable, Iterator
from typing import Any

import pytest

from logerr import LogSink, Logger, LoggerContext, default_context

FIXED_TIMESTAMP = 1702300000.0
FIXED_TS = "2023-12-11T13:06:40.000000+00:00"


@pytest.fixture
def stream() -> io.StringIO:
    """Provide an in-memory text stream to log into."""
    return io.StringIO()


@pytest.fixture
def fixed_time(monkeypatch: pytest.MonkeyPatch) -> float:
    """Freeze time.time() so record timestamps are predictable."""
    monkeypatch.setattr(time, "time", lambda: FIXED_TIMESTAMP)
    return FIXED_TIMESTAMP


@pytest.fixture
def read_lines() -> Callable[[io.StringIO], list[dict[str, Any]]]:
    """Return a helper parsing every NDJSON line written to a stream."""

    def _read(buffer: io.StringIO) -> list[dict[str, Any]]:
        return [json.loads(line) for line in buffer.getvalue().splitlines()]

    return _read


@pytest.fixture
def context(stream: io.StringIO) -> LoggerContext:
    """A fresh LoggerContext writing JSON to the stream fixture."""
    return LoggerContext(Logger(LogSink("", stream)))


@pytest.fixture
def default_logger(stream: io.StringIO) -> Iterator[LoggerContext]:
    """Point the process-wide context at the stream fixture, restoring it afterwards."""
    ctx = default_context()
    saved = ctx.get_logger()
    ctx.use_logger(Logger(LogSink("", stream)))
    yield ctx
    ctx.use_logger(saved)
