"""Adapters implementing core ports."""

from logerr.adapters.logging import LogerrHandler
from logerr.adapters.sink import (
    LogSink,
    Option,
    with_encoder,
    with_output,
    with_verbosity,
)

__all__ = [
    "LogSink",
    "LogerrHandler",
    "Option",
    "with_encoder",
    "with_output",
    "with_verbosity",
]
