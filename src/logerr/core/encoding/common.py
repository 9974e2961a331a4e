"""Helpers shared by the encoders."""

import enum
from collections.abc import Mapping
from datetime import date, datetime, time, timezone
from typing import Any

from logerr.core.errors import KVError, chain, message
from logerr.core.exceptions import EncodingError, LogerrError
from logerr.core.models import KeyValues

# Reserved field keys for error records
ERROR_KEY = "error"
ERROR_CHAIN_KEY = "error_chain"


def format_timestamp(timestamp: float) -> str:
    """Format a Unix timestamp as ISO-8601 UTC with microseconds."""
    return datetime.fromtimestamp(timestamp, tz=timezone.utc).isoformat(
        timespec="microseconds"
    )


def to_json_value(key: str, value: Any, _seen: frozenset[int] = frozenset()) -> Any:
    """Convert a field value into something json.dumps accepts.

    Args:
        key: The field key, used in the error message.
        value: The value to convert.

    Returns:
        A str, int, float, bool, None, or a list/dict of those.

    Raises:
        EncodingError: If the value (or a nested value) has no representation,
            or if a container holds itself.
    """
    if value is None or isinstance(value, (str, bool, int, float)):
        return value
    if isinstance(value, enum.Enum):
        return to_json_value(key, value.value, _seen)
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, BaseException):
        return str(value)
    if isinstance(value, (Mapping, list, tuple, set, frozenset)):
        if id(value) in _seen:
            raise EncodingError(f"field {key!r}: circular reference", key=key)
        seen = _seen | {id(value)}
        if isinstance(value, Mapping):
            return {str(k): to_json_value(key, v, seen) for k, v in value.items()}
        return [to_json_value(key, v, seen) for v in value]
    raise EncodingError(
        f"field {key!r}: value of type {type(value).__name__} is not serializable",
        key=key,
    )


def error_fields(err: BaseException) -> KeyValues:
    """Flatten an error chain into record fields.

    Pairs of every KVError link are appended outermost first, followed by
    the terminal error's message under ERROR_KEY. When the chain carries
    more than one distinct message, the messages are listed under
    ERROR_CHAIN_KEY, outermost first.

    Raises:
        EncodingError: If a link's message cannot be rendered.
    """
    try:
        return _error_fields(err)
    except LogerrError:
        raise
    except Exception as e:
        raise EncodingError(
            f"field {ERROR_KEY!r}: cannot render {type(err).__name__}: {e!r}",
            key=ERROR_KEY,
        ) from e


def _error_fields(err: BaseException) -> KeyValues:
    links = list(chain(err))
    result: list[tuple[str, Any]] = []
    for link in links:
        if isinstance(link, KVError):
            result.extend(link.key_values)
    result.append((ERROR_KEY, message(links[-1])))

    messages: list[str] = []
    for link in links:
        text = message(link)
        if not messages or messages[-1] != text:
            messages.append(text)
    if len(messages) > 1:
        result.append((ERROR_CHAIN_KEY, messages))
    return tuple(result)
