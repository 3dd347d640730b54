"""Port interfaces for record consumers.

The core publishes records and depends only on these protocols. Sinks that
print, store, or forward records implement them outside the core.
"""

from typing import Protocol, runtime_checkable

from logtree.core.models import LogRecord


@runtime_checkable
class RecordHandler(Protocol):
    """Port for anything that consumes published log records.

    Plain functions qualify as well as objects with __call__.
    Examples: list.append, StdlibLoggingBridge.
    """

    def __call__(self, record: LogRecord) -> object:
        """Handle one published record."""
        ...


@runtime_checkable
class RecordPublisher(Protocol):
    """Port for a channel that records are published to."""

    def publish(self, record: LogRecord) -> None:
        """Hand a record to every current subscriber without waiting."""
        ...

    def close(self) -> None:
        """End every current subscription."""
        ...
