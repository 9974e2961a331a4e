"""Plain text (logfmt-style) encoder for log records."""

import json
from typing import Any

from logerr.core.encoding.common import error_fields, format_timestamp, to_json_value
from logerr.core.exceptions import EncodingError, LogerrError
from logerr.core.models import LogRecord


def _quote(text: str) -> str:
    if not text or any(c in text for c in ' "=\n\t'):
        return json.dumps(text, ensure_ascii=False)
    return text


class TextEncoder:
    """Encode each record as a single human-readable line.

    Example:
        2023-12-11T13:06:40.000000+00:00 level=0 logger=app msg="user created" id=7
    """

    def _render(self, key: str, value: Any) -> str:
        converted = to_json_value(key, value)
        if isinstance(converted, str):
            return _quote(converted)
        try:
            return json.dumps(
                converted, ensure_ascii=False, allow_nan=False, separators=(",", ":")
            )
        except ValueError as e:
            raise EncodingError(f"field {key!r}: {e}", key=key) from e

    def encode(self, record: LogRecord) -> str:
        """Encode a record to one text line.

        Raises:
            EncodingError: If any field value cannot be rendered.
        """
        try:
            return self._encode(record)
        except LogerrError:
            raise
        except Exception as e:
            raise EncodingError(f"cannot encode record {record.message!r}: {e!r}") from e

    def _encode(self, record: LogRecord) -> str:
        fields = record.fields
        if record.error is not None:
            fields += error_fields(record.error)
        parts = [
            format_timestamp(record.timestamp),
            f"level={record.level}",
            f"logger={_quote(record.name)}",
            f"msg={_quote(record.message)}",
        ]
        parts.extend(f"{_quote(key)}={self._render(key, value)}" for key, value in fields)
        return " ".join(parts) + "\n"
