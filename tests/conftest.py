"""Shared test fixtures for all test modules."""

from collections.abc import Callable, Generator

import pytest

import logtree
from logtree import Logger, LoggerRegistry, LogRecord, Settings
from tests.helpers import DeliveryLog


@pytest.fixture(autouse=True)
def _reset_default_registry() -> Generator[None, None, None]:
    """Restore the process-wide registry after every test."""
    yield
    logtree.reset()


@pytest.fixture
def registry() -> LoggerRegistry:
    """Provide a fresh registry in flat mode with default settings."""
    return LoggerRegistry()


@pytest.fixture
def hierarchical_registry() -> LoggerRegistry:
    """Provide a fresh registry with hierarchical logging enabled."""
    return LoggerRegistry(Settings(hierarchical_logging_enabled=True))


# === Record capture fixtures ===


@pytest.fixture
def collect() -> Callable[[Logger], list[LogRecord]]:
    """Factory fixture that captures records published to a logger's stream.

    Returns a callable that attaches a synchronous listener to
    ``logger.subscribe()`` and returns the list the records are appended to.

    Usage:
        def test_something(registry, collect):
            records = collect(registry.root)
            registry.get_logger("a").warning("x")
            assert len(records) == 1
    """

    def _collect(logger: Logger) -> list[LogRecord]:
        records: list[LogRecord] = []
        logger.subscribe().listen(records.append, synchronous=True)
        return records

    return _collect


@pytest.fixture
def delivery_log() -> DeliveryLog:
    """Provide an empty DeliveryLog."""
    return DeliveryLog()
