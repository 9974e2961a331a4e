"""Structured JSON logging with key/value errors.

Example:
    ```python
    import logerr
    from logerr import kverrors

    logerr.init("myapp", "version", "1.2.0")
    log = logerr.with_name("db")
    log.info("connected", host="db-1")

    err = kverrors.new("connection refused", host="db-1", port=5432)
    logerr.error(kverrors.wrap(err, "query failed"), "request failed")
    ```
"""

from logerr.adapters.logging import LogerrHandler
from logerr.adapters.sink import (
    LogSink,
    Option,
    with_encoder,
    with_output,
    with_verbosity,
)
from logerr.core import errors as kverrors
from logerr.core.encoding import JSONEncoder, TextEncoder
from logerr.core.errors import ErrUnknownLoggerType, KVError, UnknownLoggerTypeError
from logerr.core.exceptions import (
    EncodingError,
    LogerrError,
    OddKeyValuesError,
    WriteError,
)
from logerr.core.logger import Logger
from logerr.core.models import KeyValues, LogRecord
from logerr.core.ports import EncoderPort, LogSinkPort, MutableSinkPort
from logerr.facade import (
    LoggerContext,
    default_context,
    error,
    get_logger,
    info,
    init,
    init_with_options,
    set_log_level,
    set_output,
    use_logger,
    v,
    with_name,
    with_values,
)

__all__ = [
    "EncoderPort",
    "EncodingError",
    "ErrUnknownLoggerType",
    "JSONEncoder",
    "KVError",
    "KeyValues",
    "LogRecord",
    "LogSink",
    "LogSinkPort",
    "LogerrError",
    "LogerrHandler",
    "Logger",
    "LoggerContext",
    "MutableSinkPort",
    "OddKeyValuesError",
    "Option",
    "TextEncoder",
    "UnknownLoggerTypeError",
    "WriteError",
    "default_context",
    "error",
    "get_logger",
    "info",
    "init",
    "init_with_options",
    "kverrors",
    "set_log_level",
    "set_output",
    "use_logger",
    "v",
    "with_encoder",
    "with_name",
    "with_output",
    "with_values",
    "with_verbosity",
]
