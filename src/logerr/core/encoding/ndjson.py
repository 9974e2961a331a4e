"""NDJSON encoder for log records."""

import json
from typing import Any

from logerr.core.encoding.common import error_fields, format_timestamp, to_json_value
from logerr.core.exceptions import EncodingError, LogerrError
from logerr.core.models import LogRecord


class JSONEncoder:
    """Encode each record as one JSON object terminated by a newline.

    Output shape:
        {"ts": "...", "level": 0, "logger": "app.db", "msg": "...",
         "fields": {"key": "value", ...}}

    The fields object is written pair by pair in order, base fields first,
    then call-site fields, then error context. Repeated keys are kept in the
    output; readers that enforce unique keys keep the last one.

    Args:
        ensure_ascii: Escape non-ASCII characters (default False).
    """

    def __init__(self, ensure_ascii: bool = False) -> None:
        self._ensure_ascii = ensure_ascii

    def _dumps(self, key: str, value: Any) -> str:
        try:
            return json.dumps(
                to_json_value(key, value),
                ensure_ascii=self._ensure_ascii,
                allow_nan=False,
                separators=(",", ":"),
            )
        except ValueError as e:
            raise EncodingError(f"field {key!r}: {e}", key=key) from e

    def encode(self, record: LogRecord) -> str:
        """Encode a record to a single NDJSON line.

        Raises:
            EncodingError: If any field value cannot be serialized.
        """
        try:
            return self._encode(record)
        except LogerrError:
            raise
        except Exception as e:
            raise EncodingError(f"cannot encode record {record.message!r}: {e!r}") from e

    def _encode(self, record: LogRecord) -> str:
        header = json.dumps(
            {
                "ts": format_timestamp(record.timestamp),
                "level": record.level,
                "logger": record.name,
                "msg": record.message,
            },
            ensure_ascii=self._ensure_ascii,
            separators=(",", ":"),
        )
        fields = record.fields
        if record.error is not None:
            fields += error_fields(record.error)
        body = ",".join(
            f"{json.dumps(key, ensure_ascii=self._ensure_ascii)}:{self._dumps(key, value)}"
            for key, value in fields
        )
        return f'{header[:-1]},"fields":{{{body}}}}}\n'
