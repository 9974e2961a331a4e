"""Core domain models for structured log records."""

from dataclasses import dataclass, field
from typing import Any

from logerr.core.exceptions import OddKeyValuesError

# Ordered (key, value) pairs. Duplicate keys are kept.
KeyValues = tuple[tuple[str, Any], ...]

# Value written for a trailing key that has no value.
MISSING_VALUE = "<no-value>"


def pairs(*keys_and_values: Any, **fields: Any) -> KeyValues:
    """Build key/value pairs from an alternating list, rejecting malformed input.

    Args:
        *keys_and_values: Alternating string keys and arbitrary values.
        **fields: Additional pairs, appended after the positional ones.

    Returns:
        Ordered tuple of (key, value) pairs.

    Raises:
        OddKeyValuesError: If the positional list has an odd length or a key
            is not a string.
    """
    if len(keys_and_values) % 2:
        raise OddKeyValuesError(
            f"odd number of key/value arguments: {len(keys_and_values)}"
        )
    result: list[tuple[str, Any]] = []
    for i in range(0, len(keys_and_values), 2):
        key = keys_and_values[i]
        if not isinstance(key, str):
            raise OddKeyValuesError(
                f"key at position {i} must be str, got {type(key).__name__}"
            )
        result.append((key, keys_and_values[i + 1]))
    result.extend(fields.items())
    return tuple(result)


def lenient_pairs(*keys_and_values: Any, **fields: Any) -> KeyValues:
    """Build key/value pairs without ever raising.

    A dangling trailing key is paired with MISSING_VALUE and non-string keys
    are converted with str().
    """
    items = list(keys_and_values)
    if len(items) % 2:
        items.append(MISSING_VALUE)
    result = [
        (key if isinstance(key, str) else str(key), value)
        for key, value in zip(items[::2], items[1::2], strict=True)
    ]
    result.extend(fields.items())
    return tuple(result)


@dataclass(frozen=True)
class LogRecord:
    """A single log call, ready to be encoded.

    Attributes:
        level: Verbosity level, 0 is the most important.
        message: The log message.
        name: Dot-joined logger name, empty for the root logger.
        timestamp: Unix timestamp in seconds.
        base_fields: Pairs fixed on the sink that produced the record.
        call_fields: Pairs passed to this particular call.
        error: The error attached to an error record.
    """

    level: int
    message: str
    name: str = ""
    timestamp: float = 0.0
    base_fields: KeyValues = field(default_factory=tuple)
    call_fields: KeyValues = field(default_factory=tuple)
    error: BaseException | None = None

    @property
    def fields(self) -> KeyValues:
        """Base fields followed by call-site fields."""
        return self.base_fields + self.call_fields
