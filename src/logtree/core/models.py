"""Core domain model for emitted log records."""

import contextvars
import itertools
import threading
import time
import traceback
from dataclasses import dataclass, field
from types import TracebackType

from logtree.core.levels import Level

StackTrace = traceback.StackSummary | TracebackType

_sequence = itertools.count()
_sequence_lock = threading.Lock()


def _now() -> float:
    return time.time()


def next_sequence_number() -> int:
    """Return the next process-wide record sequence number."""
    with _sequence_lock:
        return next(_sequence)


@dataclass(frozen=True)
class LogRecord:
    """An immutable snapshot of one accepted logging call.

    Attributes:
        level: Severity the record was logged at.
        message: Display text of the message.
        logger_name: Full name of the logger the call was made on.
        error: Associated error, or the note written when a stack trace
            was captured automatically.
        stack_trace: Stack captured for the call, if any.
        context: Snapshot of the caller's context variables.
        original_object: The message object when it was not a string.
        timestamp: Unix timestamp in seconds.
        sequence_number: Strictly increasing across the whole process.
    """

    level: Level
    message: str
    logger_name: str
    error: object | None = None
    stack_trace: StackTrace | None = None
    context: contextvars.Context | None = None
    original_object: object | None = None
    timestamp: float = field(default_factory=_now)
    sequence_number: int = field(default_factory=next_sequence_number)

    def __str__(self) -> str:
        return f"[{self.level.name}] {self.logger_name}: {self.message}"
