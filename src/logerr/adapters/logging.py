"""Python logging handler adapter for logerr.

This adapter bridges Python's standard library logging module to a logerr
Logger, so records from third-party libraries end up in the same JSON
stream as the application's own logs.
"""

import itertools
import logging

from logerr.core.errors import new
from logerr.core.logger import Logger, diagnostics

# Standard LogRecord attributes that should not be treated as extra fields
_STANDARD_LOGRECORD_ATTRS = frozenset(
    {
        "args",
        "asctime",
        "created",
        "exc_info",
        "exc_text",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "message",
        "module",
        "msecs",
        "msg",
        "name",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "taskName",
        "thread",
        "threadName",
    }
)


class LogerrHandler(logging.Handler):
    """Logging handler that forwards log records to a logerr Logger.

    ERROR and above go through Logger.error, carrying the exception from
    exc_info when present. INFO and WARNING are logged at V(0) and DEBUG at
    V(1). The stdlib logger name becomes a name segment and attributes
    passed with ``extra`` become fields.

    Example:
        ```python
        import logging
        import logerr
        from logerr.adapters.logging import LogerrHandler

        logerr.init("myapp")
        logging.getLogger().addHandler(LogerrHandler())
        ```
    """

    def __init__(self, logger: Logger | None = None, level: int = logging.NOTSET) -> None:
        """Initialize the handler.

        Args:
            logger: Logger records are sent to. Defaults to the facade's
                current logger, looked up on every record.
            level: Minimum stdlib level handled.
        """
        super().__init__(level)
        self._logger = logger

    def _target(self) -> Logger:
        if self._logger is not None:
            return self._logger
        from logerr.facade import get_logger

        return get_logger()

    def emit(self, record: logging.LogRecord) -> None:
        """Forward a log record to the logerr logger.

        Args:
            record: The log record to emit.
        """
        if record.name == diagnostics.name or record.name.startswith(
            diagnostics.name + "."
        ):
            return
        try:
            logger = self._target()
            if record.name and record.name != "root":
                logger = logger.with_name(record.name)

            # Flat key/value pairs: extra keys may match parameter names such as err
            fields = tuple(
                itertools.chain.from_iterable(
                    (key, value)
                    for key, value in record.__dict__.items()
                    if key not in _STANDARD_LOGRECORD_ATTRS and not key.startswith("_")
                )
            )
            msg = record.getMessage()

            if record.levelno >= logging.ERROR:
                err: BaseException | None = None
                if record.exc_info and record.exc_info[1] is not None:
                    err = record.exc_info[1]
                else:
                    err = new(msg)
                logger.error(err, msg, *fields)
            elif record.levelno >= logging.INFO:
                logger.info(msg, *fields)
            else:
                logger.v(1).info(msg, *fields)
        except Exception:
            self.handleError(record)
