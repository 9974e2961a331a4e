"""Process-wide logger facade.

A LoggerContext owns one Logger behind a read/write lock. Logging and
derivation take the read lock and may run concurrently; replacing the
logger or changing its verbosity/output takes the write lock, so such a
change never lands in the middle of a log write.

Most programs use the module-level default context through the functions
exported from ``logerr``. Code that prefers explicit wiring can construct
its own LoggerContext and pass it around.
"""

import threading
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from typing import Any, TextIO

from logerr.adapters.sink import LogSink, Option
from logerr.core.encoding.ndjson import JSONEncoder
from logerr.core.errors import UnknownLoggerTypeError
from logerr.core.logger import Logger
from logerr.core.ports import MutableSinkPort


class ReadWriteLock:
    """Lock allowing many concurrent readers or a single writer.

    Writers are preferred: once a writer is waiting, new readers block
    until it has finished.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @contextmanager
    def read(self) -> Iterator[None]:
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if not self._readers:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


def _default_logger() -> Logger:
    return Logger(LogSink("", None, 0, JSONEncoder()))


class LoggerContext:
    """Owner of the current logger and the lock guarding it.

    Before init() or use_logger() is called, a JSON sink writing to
    standard output at verbosity 0 is installed.
    """

    def __init__(self, logger: Logger | None = None) -> None:
        self._lock = ReadWriteLock()
        self._logger = logger if logger is not None else _default_logger()

    def init(
        self,
        component: str,
        *keys_and_values: Any,
        options: Sequence[Option] | None = None,
        **fields: Any,
    ) -> None:
        """Install a new JSON sink for component.

        Args:
            component: Name of the component logging, typically the application.
            *keys_and_values: Alternating keys and values added to every record.
            options: Options applied to the sink before it is installed.
            **fields: Additional base fields.
        """
        self.init_with_options(component, options, *keys_and_values, **fields)

    def init_with_options(
        self,
        component: str,
        options: Sequence[Option] | None,
        *keys_and_values: Any,
        **fields: Any,
    ) -> None:
        """Install a new JSON sink for component, applying options to it first."""
        sink = LogSink(component, None, 0, JSONEncoder(), *keys_and_values, **fields)
        for option in options or ():
            option(sink)
        with self._lock.write():
            self._logger = Logger(sink)

    def use_logger(self, logger: Logger) -> None:
        """Replace the current logger, bypassing init()."""
        with self._lock.write():
            self._logger = logger

    def get_logger(self) -> Logger:
        with self._lock.read():
            return self._logger

    def v(self, level: int) -> Logger:
        """Return a logger for a verbosity level relative to the current one."""
        with self._lock.read():
            return self._logger.v(level)

    def info(self, msg: str, *keys_and_values: Any, **fields: Any) -> None:
        """Log a non-error message with key/value context."""
        with self._lock.read():
            self._logger.info(msg, *keys_and_values, **fields)

    def error(
        self, err: BaseException | None, msg: str, *keys_and_values: Any, **fields: Any
    ) -> None:
        """Log an error with a message and key/value context."""
        with self._lock.read():
            self._logger.error(err, msg, *keys_and_values, **fields)

    def with_values(self, *keys_and_values: Any, **fields: Any) -> Logger:
        with self._lock.read():
            return self._logger.with_values(*keys_and_values, **fields)

    def with_name(self, name: str) -> Logger:
        with self._lock.read():
            return self._logger.with_name(name)

    def _mutable_sink(self) -> MutableSinkPort:
        sink = self._logger.get_sink()
        if not isinstance(sink, MutableSinkPort):
            raise UnknownLoggerTypeError(
                logger_type=type(sink).__qualname__,
                expected_type=MutableSinkPort.__qualname__,
            )
        return sink

    def set_log_level(self, level: int) -> None:
        """Set the verbosity of the current sink.

        Raises:
            UnknownLoggerTypeError: If the current sink cannot change verbosity.
        """
        with self._lock.write():
            self._mutable_sink().set_verbosity(level)

    def set_output(self, output: TextIO | None) -> None:
        """Set the output stream of the current sink.

        Raises:
            UnknownLoggerTypeError: If the current sink cannot change output.
        """
        with self._lock.write():
            self._mutable_sink().set_output(output)


_default_context = LoggerContext()


def default_context() -> LoggerContext:
    """Return the process-wide LoggerContext used by the module functions."""
    return _default_context


def init(
    component: str,
    *keys_and_values: Any,
    options: Sequence[Option] | None = None,
    **fields: Any,
) -> None:
    _default_context.init(component, *keys_and_values, options=options, **fields)


def init_with_options(
    component: str,
    options: Sequence[Option] | None,
    *keys_and_values: Any,
    **fields: Any,
) -> None:
    _default_context.init_with_options(component, options, *keys_and_values, **fields)


def use_logger(logger: Logger) -> None:
    _default_context.use_logger(logger)


def get_logger() -> Logger:
    return _default_context.get_logger()


def v(level: int) -> Logger:
    return _default_context.v(level)


def info(msg: str, *keys_and_values: Any, **fields: Any) -> None:
    _default_context.info(msg, *keys_and_values, **fields)


def error(
    err: BaseException | None, msg: str, *keys_and_values: Any, **fields: Any
) -> None:
    _default_context.error(err, msg, *keys_and_values, **fields)


def with_values(*keys_and_values: Any, **fields: Any) -> Logger:
    return _default_context.with_values(*keys_and_values, **fields)


def with_name(name: str) -> Logger:
    return _default_context.with_name(name)


def set_log_level(level: int) -> None:
    _default_context.set_log_level(level)


def set_output(output: TextIO | None) -> None:
    _default_context.set_output(output)
