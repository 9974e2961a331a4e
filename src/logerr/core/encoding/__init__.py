"""Encoders turning log records into output lines."""

from logerr.core.encoding.ndjson import JSONEncoder
from logerr.core.encoding.text import TextEncoder

__all__ = [
    "JSONEncoder",
    "TextEncoder",
]
