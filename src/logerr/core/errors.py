"""Structured errors carrying ordered key/value context.

A KVError holds a message, an ordered list of key/value pairs and an
optional cause. Errors are immutable: add() and wrap() return a new KVError
that wraps the original as its cause, so context accumulates as an error is
passed up the call stack:

    err = new("connection refused", host="db", port=5432)
    err = wrap(err, "failed to load user", user_id=42)
    logger.error(err, "request failed")

The module-level helpers (unwrap, root, chain, is_, kvs) work on any
exception, following KVError causes and the standard ``__cause__`` link.
"""

from collections.abc import Iterator
from typing import Any

from logerr.core.exceptions import OddKeyValuesError
from logerr.core.models import KeyValues, pairs


def _check_key_values(key_values: KeyValues) -> KeyValues:
    checked = tuple(key_values)
    for i, item in enumerate(checked):
        if not isinstance(item, tuple) or len(item) != 2:
            raise OddKeyValuesError(f"item {i} is not a (key, value) pair")
        if not isinstance(item[0], str):
            raise OddKeyValuesError(
                f"key at pair {i} must be str, got {type(item[0]).__name__}"
            )
    return checked


def _causes_equal(a: BaseException | None, b: BaseException | None) -> bool:
    if a is None or b is None:
        return a is b
    if isinstance(a, KVError) and isinstance(b, KVError):
        return a == b
    return type(a) is type(b) and a.args == b.args


def _format_value(value: Any) -> str:
    text = str(value)
    if isinstance(value, str) and (not text or any(c in text for c in ' "=')):
        return '"' + text.replace('"', '\\"') + '"'
    return text


class KVError(Exception):
    """An error with a message, ordered key/value context and an optional cause.

    Prefer the new(), add() and wrap() helpers over calling the constructor
    directly; they accept alternating key/value arguments and keyword fields.

    Args:
        message: Human readable description of the failure.
        key_values: Ordered (key, value) pairs. Keys must be strings.
        cause: The wrapped error, if any.

    Raises:
        OddKeyValuesError: If key_values contains anything but (str, value) pairs.
    """

    def __init__(
        self,
        message: str,
        key_values: KeyValues = (),
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self._message = message
        self._key_values = _check_key_values(key_values)
        self._cause = cause
        if cause is not None:
            self.__cause__ = cause

    @property
    def message(self) -> str:
        return self._message

    @property
    def key_values(self) -> KeyValues:
        """The pairs attached at this link only."""
        return self._key_values

    @property
    def cause(self) -> BaseException | None:
        return self._cause

    def __str__(self) -> str:
        parts = [self._message]
        parts.extend(f"{k}={_format_value(v)}" for k, v in self._key_values)
        text = " ".join(parts)
        if self._cause is not None:
            text = f"{text}: {self._cause}"
        return text

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}({self._message!r}, {self._key_values!r}, "
            f"cause={self._cause!r})"
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, KVError):
            return NotImplemented
        return (
            self._message == other._message
            and self._key_values == other._key_values
            and _causes_equal(self._cause, other._cause)
        )

    def __hash__(self) -> int:
        return hash((self._message, tuple(k for k, _ in self._key_values)))

    def __reduce__(self) -> tuple[Any, ...]:
        # Subclasses with a different constructor signature override this
        return (type(self), (self._message, self._key_values, self._cause))


def new(message: str, *keys_and_values: Any, **fields: Any) -> KVError:
    """Create a KVError with no cause.

    Raises:
        OddKeyValuesError: If keys_and_values has an odd length.
    """
    return KVError(message, pairs(*keys_and_values, **fields))


def add(err: BaseException, *keys_and_values: Any, **fields: Any) -> KVError:
    """Attach key/value context to err, keeping its message.

    Returns a new KVError whose cause is err; err itself is not modified.

    Raises:
        OddKeyValuesError: If keys_and_values has an odd length.
    """
    return KVError(message(err), pairs(*keys_and_values, **fields), cause=err)


def wrap(err: BaseException, msg: str, *keys_and_values: Any, **fields: Any) -> KVError:
    """Wrap err with a new message and optional key/value context.

    Raises:
        OddKeyValuesError: If keys_and_values has an odd length.
    """
    return KVError(msg, pairs(*keys_and_values, **fields), cause=err)


def unwrap(err: BaseException) -> BaseException | None:
    """Return the immediate cause of err, or None at the end of the chain."""
    if isinstance(err, KVError):
        return err.cause
    return err.__cause__


def chain(err: BaseException) -> Iterator[BaseException]:
    """Yield err and each of its causes, outermost first."""
    seen: set[int] = set()
    current: BaseException | None = err
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        current = unwrap(current)


def root(err: BaseException) -> BaseException:
    """Return the innermost error of the chain."""
    last = err
    for last in chain(err):
        pass
    return last


def is_(err: BaseException, target: BaseException | type[BaseException]) -> bool:
    """Report whether any error in the chain matches target.

    A class target matches by isinstance, an instance target matches by
    identity or equality.
    """
    for link in chain(err):
        if isinstance(target, type):
            if isinstance(link, target):
                return True
        elif link is target or link == target:
            return True
    return False


def message(err: BaseException) -> str:
    """Return the message of err without its context or causes."""
    if isinstance(err, KVError):
        return err.message
    return str(err)


def kvs(err: BaseException) -> dict[str, Any]:
    """Reduce every key/value pair in the chain into a dict.

    Inner links are applied first, so the outermost value of a repeated key wins.
    """
    result: dict[str, Any] = {}
    for link in reversed(list(chain(err))):
        if isinstance(link, KVError):
            result.update(link.key_values)
    return result


# Sentinel matched with is_(err, ErrUnknownLoggerType).
ErrUnknownLoggerType = new("unknown logger type")


class UnknownLoggerTypeError(KVError):
    """Raised when a sink-specific operation targets a sink that lacks it."""

    def __init__(self, logger_type: str, expected_type: str) -> None:
        super().__init__(
            ErrUnknownLoggerType.message,
            (("logger_type", logger_type), ("expected_type", expected_type)),
            cause=ErrUnknownLoggerType,
        )
        self.logger_type = logger_type
        self.expected_type = expected_type

    def __reduce__(self) -> tuple[Any, ...]:
        return (UnknownLoggerTypeError, (self.logger_type, self.expected_type))
