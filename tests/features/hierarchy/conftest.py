"""BDD step definitions for logger hierarchy features."""

import re
from dataclasses import dataclass, field

import pytest
from pytest_bdd import given, parsers, then, when

from logtree import Level, LoggerRegistry, LogRecord, UnsupportedOperationError
from tests.helpers import DeliveryLog

_QUOTED = re.compile(r'"([^"]*)"')


@dataclass
class HierarchyScenarioContext:
    """State shared between the steps of one scenario."""

    registry: LoggerRegistry = field(default_factory=LoggerRegistry)
    received: dict[str, list[LogRecord]] = field(default_factory=dict)
    deliveries: DeliveryLog = field(default_factory=DeliveryLog)
    lazy_calls: int = 0
    error: Exception | None = None

    def attach(self, name: str) -> None:
        records: list[LogRecord] = []
        logger = self.registry.get_logger(name)
        logger.subscribe().listen(records.append, synchronous=True)
        self.received[name] = records


@pytest.fixture
def ctx() -> HierarchyScenarioContext:
    """Fresh scenario context for each test."""
    return HierarchyScenarioContext()


# === Background Steps ===
@given("a fresh logger registry")
def step_fresh_registry(ctx: HierarchyScenarioContext) -> None:
    ctx.registry = LoggerRegistry()


# === Configuration Steps ===
@given(parsers.parse("hierarchical logging is {state}"))
def step_hierarchical_mode(ctx: HierarchyScenarioContext, state: str) -> None:
    ctx.registry.hierarchical_logging_enabled = state == "enabled"


@given(parsers.parse("the root level is {level}"))
def step_root_level(ctx: HierarchyScenarioContext, level: str) -> None:
    ctx.registry.root.level = Level.parse(level)


@given(parsers.parse('the level of "{name}" is {level}'))
def step_logger_level(ctx: HierarchyScenarioContext, name: str, level: str) -> None:
    ctx.registry.get_logger(name).level = Level.parse(level)


@when(parsers.parse('the level of "{name}" is set to {level}'))
def step_try_logger_level(
    ctx: HierarchyScenarioContext, name: str, level: str
) -> None:
    try:
        ctx.registry.get_logger(name).level = Level.parse(level)
    except UnsupportedOperationError as exc:
        ctx.error = exc


# === Subscription Steps ===
@given("a subscriber on the root logger")
def step_root_subscriber(ctx: HierarchyScenarioContext) -> None:
    ctx.attach("")


@given(parsers.parse('a subscriber on "{name}"'))
def step_named_subscriber(ctx: HierarchyScenarioContext, name: str) -> None:
    ctx.attach(name)


@given(parsers.parse("subscribers on {names}"))
def step_tagged_subscribers(ctx: HierarchyScenarioContext, names: str) -> None:
    for name in _QUOTED.findall(names):
        ctx.deliveries.attach(ctx.registry.get_logger(name), name)


# === Logging Steps ===
@when(parsers.parse('"{name}" logs "{message}" at {level}'))
def step_log(ctx: HierarchyScenarioContext, name: str, message: str, level: str) -> None:
    ctx.registry.get_logger(name).log(Level.parse(level), message)


@when(parsers.parse('"{name}" logs a lazy message at {level}'))
def step_log_lazy(ctx: HierarchyScenarioContext, name: str, level: str) -> None:
    def probe() -> str:
        ctx.lazy_calls += 1
        return "lazy"

    ctx.registry.get_logger(name).log(Level.parse(level), probe)


# === Assertion Steps ===
@then(parsers.parse("the root subscriber received {count:d} record"))
def step_root_received(ctx: HierarchyScenarioContext, count: int) -> None:
    assert len(ctx.received[""]) == count


@then(parsers.parse('the last record has level "{level}" and logger name "{name}"'))
def step_last_record(ctx: HierarchyScenarioContext, level: str, name: str) -> None:
    record = ctx.received[""][-1]
    assert record.level.name == level
    assert record.logger_name == name


@then("an unsupported operation error is raised")
def step_unsupported(ctx: HierarchyScenarioContext) -> None:
    assert isinstance(ctx.error, UnsupportedOperationError)


@then(parsers.parse('the subscribers on "{name}" and the root received the same records'))
def step_same_records(ctx: HierarchyScenarioContext, name: str) -> None:
    assert ctx.received[name]
    assert ctx.received[name] == ctx.received[""]


@then(parsers.parse("the deliveries were {names}"))
def step_deliveries(ctx: HierarchyScenarioContext, names: str) -> None:
    expected = _QUOTED.findall(names)
    assert [label for label, _ in ctx.deliveries.entries] == expected


@then(parsers.parse("the lazy message was evaluated {count:d} times"))
def step_lazy_count(ctx: HierarchyScenarioContext, count: int) -> None:
    assert ctx.lazy_calls == count
