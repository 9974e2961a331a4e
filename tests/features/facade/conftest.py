"""BDD step definitions for facade features."""

import io
import json
from dataclasses import dataclass, field
from typing import Any

import pytest
from pytest_bdd import given, parsers, then, when

from logerr import kverrors
from logerr.adapters.sink import LogSink, with_output
from logerr.core.errors import ErrUnknownLoggerType, UnknownLoggerTypeError
from logerr.core.logger import Logger
from logerr.facade import LoggerContext


class ReadOnlySink:
    """Sink without set_verbosity/set_output."""

    def enabled(self, level: int) -> bool:
        return True

    def info(self, level: int, msg: str, *kv: Any, **fields: Any) -> None:
        pass

    def error(self, err: Any, msg: str, *kv: Any, **fields: Any) -> None:
        pass

    def with_values(self, *kv: Any, **fields: Any) -> "ReadOnlySink":
        return self

    def with_name(self, name: str) -> "ReadOnlySink":
        return self


@dataclass
class FacadeScenarioContext:
    buffer: io.StringIO = field(default_factory=io.StringIO)
    context: LoggerContext | None = None
    logger: Logger | None = None
    exception_raised: Exception | None = None

    def lines(self) -> list[dict[str, Any]]:
        return [json.loads(line) for line in self.buffer.getvalue().splitlines()]


@pytest.fixture
def ctx() -> FacadeScenarioContext:
    """Fresh scenario context for each test."""
    return FacadeScenarioContext()


# === Background / setup ===
@given("a logger context writing to a buffer")
def step_context(ctx: FacadeScenarioContext) -> None:
    ctx.context = LoggerContext(Logger(LogSink("", ctx.buffer)))


@given(
    parsers.parse(
        'the context is initialised for component "{component}" '
        'with field "{key}" = "{value}"'
    )
)
def step_init(ctx: FacadeScenarioContext, component: str, key: str, value: str) -> None:
    assert ctx.context is not None
    ctx.context.init(component, key, value, options=[with_output(ctx.buffer)])


@given("the context uses a logger without mutable sink support")
def step_read_only(ctx: FacadeScenarioContext) -> None:
    ctx.logger = Logger(ReadOnlySink())
    ctx.context = LoggerContext(ctx.logger)


# === Actions ===
LEVEL_STEP = parsers.re(r"the log level is set to (?P<level>-?\d+)")


@given(LEVEL_STEP, converters={"level": int})
@when(LEVEL_STEP, converters={"level": int})
def step_set_level(ctx: FacadeScenarioContext, level: int) -> None:
    assert ctx.context is not None
    ctx.context.set_log_level(level)


@when(parsers.parse('I log info "{msg}" with field "{key}" = "{value}"'))
def step_info_with_field(
    ctx: FacadeScenarioContext, msg: str, key: str, value: str
) -> None:
    assert ctx.context is not None
    ctx.context.info(msg, key, value)


@when(parsers.parse('I log info "{msg}" at verbosity {level:d}'))
def step_info_at_level(ctx: FacadeScenarioContext, msg: str, level: int) -> None:
    assert ctx.context is not None
    ctx.context.v(level).info(msg)


@when(
    parsers.parse(
        'I log an error "{msg}" wrapping "{cause}" with field "{key}" = "{value}"'
    )
)
def step_error(
    ctx: FacadeScenarioContext, msg: str, cause: str, key: str, value: str
) -> None:
    assert ctx.context is not None
    err = kverrors.add(kverrors.new(cause), key, value)
    ctx.context.error(kverrors.wrap(err, msg), msg)


@when(parsers.parse("I try to set the log level to {level:d}"))
def step_try_set_level(ctx: FacadeScenarioContext, level: int) -> None:
    assert ctx.context is not None
    try:
        ctx.context.set_log_level(level)
    except UnknownLoggerTypeError as e:
        ctx.exception_raised = e


# === Assertions ===
@then(parsers.parse("{count:d} line is written"))
@then(parsers.parse("{count:d} lines are written"))
def step_line_count(ctx: FacadeScenarioContext, count: int) -> None:
    assert len(ctx.lines()) == count


@then(parsers.parse('the last line has logger "{name}" and message "{msg}"'))
def step_last_line(ctx: FacadeScenarioContext, name: str, msg: str) -> None:
    last = ctx.lines()[-1]
    assert last["logger"] == name
    assert last["msg"] == msg


@then(parsers.parse('the last line has field "{key}" = "{value}"'))
def step_last_field(ctx: FacadeScenarioContext, key: str, value: str) -> None:
    assert ctx.lines()[-1]["fields"][key] == value


@then("an unknown logger type error is raised")
def step_unknown_type(ctx: FacadeScenarioContext) -> None:
    assert ctx.exception_raised is not None
    assert kverrors.is_(ctx.exception_raised, ErrUnknownLoggerType)


@then("the context still uses the same logger")
def step_same_logger(ctx: FacadeScenarioContext) -> None:
    assert ctx.context is not None
    assert ctx.context.get_logger() is ctx.logger
