"""Python logging bridge for logtree.

This adapter forwards published LogRecords to the standard library logging
module, so existing logging handlers and formatters can act as sinks.
"""

import logging
import traceback

from logtree.core.levels import Level
from logtree.core.models import LogRecord

# Lower bound of each stdlib level, highest first
_LEVEL_MAPPING = (
    (Level.SHOUT, logging.CRITICAL),
    (Level.SEVERE, logging.ERROR),
    (Level.WARNING, logging.WARNING),
    (Level.CONFIG, logging.INFO),
)


def to_stdlib_level(level: Level) -> int:
    """Map a logtree level to a standard library level number.

    Maps by value:
    - SHOUT and above → CRITICAL
    - SEVERE → ERROR
    - WARNING → WARNING
    - CONFIG, INFO → INFO
    - below CONFIG → DEBUG
    """
    for lower_bound, stdlib_level in _LEVEL_MAPPING:
        if level >= lower_bound:
            return stdlib_level
    return logging.DEBUG


class StdlibLoggingBridge:
    """Record handler that re-emits LogRecords through stdlib logging.

    Example:
        ```python
        import logging
        from logtree import StdlibLoggingBridge, root_logger

        logging.basicConfig(level=logging.DEBUG)
        root_logger().subscribe().listen(StdlibLoggingBridge())
        ```
    """

    def __init__(self, prefix: str = "logtree") -> None:
        """Initialize the bridge.

        Args:
            prefix: Name of the stdlib logger that receives root records.
                Records from "a.b" go to "<prefix>.a.b".
        """
        self._prefix = prefix

    def target_for(self, record: LogRecord) -> logging.Logger:
        """Return the stdlib logger a record is forwarded to."""
        if not record.logger_name:
            return logging.getLogger(self._prefix)
        return logging.getLogger(f"{self._prefix}.{record.logger_name}")

    def __call__(self, record: LogRecord) -> None:
        """Forward one record.

        Args:
            record: The record to forward.
        """
        target = self.target_for(record)
        levelno = to_stdlib_level(record.level)
        if not target.isEnabledFor(levelno):
            return

        extra: dict[str, object] = {
            "sequence_number": record.sequence_number,
            "logtree_level": record.level.name,
        }
        exc_info = None
        if isinstance(record.error, BaseException):
            error = record.error
            exc_info = (type(error), error, error.__traceback__)
        elif record.error is not None:
            extra["logtree_error"] = str(record.error)
        if isinstance(record.stack_trace, traceback.StackSummary):
            extra["logtree_stack"] = "".join(record.stack_trace.format())
        elif record.stack_trace is not None:
            extra["logtree_stack"] = "".join(traceback.format_tb(record.stack_trace))

        stdlib_record = target.makeRecord(
            target.name,
            levelno,
            fn="",
            lno=0,
            msg=record.message,
            args=(),
            exc_info=exc_info,
            extra=extra,
        )
        stdlib_record.created = record.timestamp
        target.handle(stdlib_record)
