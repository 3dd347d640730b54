"""Named loggers arranged in a dot-separated hierarchy.

Loggers are created through a LoggerRegistry (or the module-level
get_logger helper), which guarantees one instance per name and links each
logger to its parent.
"""

import contextvars
import inspect
import threading
import traceback
from collections.abc import Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from logtree.core.errors import UnsupportedOperationError
from logtree.core.levels import Level
from logtree.core.models import LogRecord, StackTrace
from logtree.core.streams import RecordStream

if TYPE_CHECKING:
    from logtree.core.registry import LoggerRegistry

# Held while a record is numbered and published so every channel sees
# sequence numbers in increasing order. Re-entrant for synchronous handlers
# that log.
_dispatch_lock = threading.RLock()


def _capture_stack() -> traceback.StackSummary:
    """Return the caller's stack without this module's frames."""
    frame = inspect.currentframe()
    while frame is not None and frame.f_code.co_filename == __file__:
        frame = frame.f_back
    return traceback.extract_stack(frame)


class Logger:
    """A node in the logger hierarchy.

    Example:
        ```python
        log = get_logger("app.db")
        log.subscribe().listen(print)
        log.info("connected")
        log.fine(lambda: expensive_dump())  # evaluated only if loggable
        ```
    """

    def __init__(
        self,
        name: str,
        parent: "Logger | None",
        hierarchy: "LoggerRegistry",
        *,
        detached: bool = False,
    ) -> None:
        self._name = name
        self._parent = parent
        self._hierarchy = hierarchy
        self._detached = detached
        self._children: dict[str, Logger] = {}
        self._level: Level | None = None
        self._stream: RecordStream | None = None
        self._stream_lock = threading.Lock()
        if parent is None or parent.is_root:
            self._full_name = name
        else:
            self._full_name = f"{parent.full_name}.{name}"
        if parent is not None:
            parent._children[name] = self

    @property
    def name(self) -> str:
        """Simple name of this logger (the last dot-separated segment)."""
        return self._name

    @property
    def full_name(self) -> str:
        """Dot-joined names from the top of the hierarchy to this logger."""
        return self._full_name

    @property
    def parent(self) -> "Logger | None":
        return self._parent

    @property
    def children(self) -> Mapping[str, "Logger"]:
        """Read-only snapshot of the children, keyed by simple name.

        Children created afterwards do not appear in the returned mapping.
        """
        with self._hierarchy._lock:
            return MappingProxyType(dict(self._children))

    @property
    def is_root(self) -> bool:
        return self._parent is None and not self._detached

    @property
    def detached(self) -> bool:
        return self._detached

    @property
    def level(self) -> Level | None:
        """Level override of this logger; the root level for the root."""
        if self.is_root:
            return self._hierarchy.root_level
        return self._level

    @level.setter
    def level(self, value: Level | None) -> None:
        if value is not None and not isinstance(value, Level):
            raise TypeError(f"level must be a Level, got {type(value).__name__}")
        if self.is_root:
            if value is None:
                raise ValueError("root level cannot be None")
            self._hierarchy.root_level = value
            return
        if not self._hierarchy.hierarchical_logging_enabled:
            raise UnsupportedOperationError(
                'Set "hierarchical_logging_enabled" to True to change the level '
                "of a non-root logger."
            )
        self._level = value

    @property
    def effective_level(self) -> Level:
        """Level that decides which calls on this logger are emitted."""
        hierarchy = self._hierarchy
        if not hierarchy.hierarchical_logging_enabled:
            return hierarchy.root_level
        node: Logger | None = self
        while node is not None:
            if node._level is not None:
                return node._level
            node = node._parent
        return hierarchy.root_level

    def is_loggable(self, level: Level) -> bool:
        """Return True if a call at level would be emitted."""
        return level >= self.effective_level

    def log(
        self,
        level: Level,
        message: Any,
        error: object | None = None,
        stack_trace: StackTrace | None = None,
        context: contextvars.Context | None = None,
    ) -> None:
        """Emit a record at level if it is loggable.

        Args:
            level: Severity of the call.
            message: Message text or any object. A callable other than a
                class is invoked without arguments, and only when the record
                is emitted. Non-string results are converted with str() and
                kept as original_object.
            error: Associated error, if any.
            stack_trace: Associated stack. Captured automatically at or above
                the hierarchy's record_stack_trace_at_level when omitted.
            context: Context snapshot to attach. Defaults to the caller's
                current contextvars context.
        """
        if not self.is_loggable(level):
            return
        if callable(message) and not isinstance(message, type):
            message = message()
        original_object = None
        if isinstance(message, str):
            text = message
        else:
            text = str(message)
            original_object = message
        if (
            stack_trace is None
            and level >= self._hierarchy.record_stack_trace_at_level
        ):
            stack_trace = _capture_stack()
            if error is None:
                error = f"autogenerated stack trace for {level} {text}"
        if context is None:
            context = contextvars.copy_context()

        with _dispatch_lock:
            record = LogRecord(
                level=level,
                message=text,
                logger_name=self._full_name,
                error=error,
                stack_trace=stack_trace,
                context=context,
                original_object=original_object,
            )
            self._dispatch(record)

    def finest(
        self,
        message: Any,
        error: object | None = None,
        stack_trace: StackTrace | None = None,
    ) -> None:
        """Log message at Level.FINEST."""
        self.log(Level.FINEST, message, error, stack_trace)

    def finer(
        self,
        message: Any,
        error: object | None = None,
        stack_trace: StackTrace | None = None,
    ) -> None:
        """Log message at Level.FINER."""
        self.log(Level.FINER, message, error, stack_trace)

    def fine(
        self,
        message: Any,
        error: object | None = None,
        stack_trace: StackTrace | None = None,
    ) -> None:
        """Log message at Level.FINE."""
        self.log(Level.FINE, message, error, stack_trace)

    def config(
        self,
        message: Any,
        error: object | None = None,
        stack_trace: StackTrace | None = None,
    ) -> None:
        """Log message at Level.CONFIG."""
        self.log(Level.CONFIG, message, error, stack_trace)

    def info(
        self,
        message: Any,
        error: object | None = None,
        stack_trace: StackTrace | None = None,
    ) -> None:
        """Log message at Level.INFO."""
        self.log(Level.INFO, message, error, stack_trace)

    def warning(
        self,
        message: Any,
        error: object | None = None,
        stack_trace: StackTrace | None = None,
    ) -> None:
        """Log message at Level.WARNING."""
        self.log(Level.WARNING, message, error, stack_trace)

    def severe(
        self,
        message: Any,
        error: object | None = None,
        stack_trace: StackTrace | None = None,
    ) -> None:
        """Log message at Level.SEVERE."""
        self.log(Level.SEVERE, message, error, stack_trace)

    def shout(
        self,
        message: Any,
        error: object | None = None,
        stack_trace: StackTrace | None = None,
    ) -> None:
        """Log message at Level.SHOUT."""
        self.log(Level.SHOUT, message, error, stack_trace)

    def subscribe(self) -> RecordStream:
        """Return the stream that records logged here are published to.

        In flat mode every non-root logger hands out the root's stream.
        """
        if not self._owns_stream():
            return self._hierarchy.root.subscribe()
        with self._stream_lock:
            if self._stream is None:
                self._stream = RecordStream(self._full_name)
            return self._stream

    def unsubscribe_all(self) -> None:
        """Close the stream returned by subscribe(), ending its subscriptions.

        The next subscribe() call creates a fresh stream.
        """
        if not self._owns_stream():
            self._hierarchy.root.unsubscribe_all()
            return
        self._close_stream()

    def _owns_stream(self) -> bool:
        return self.is_root or self._hierarchy.hierarchical_logging_enabled

    def _close_stream(self) -> None:
        with self._stream_lock:
            stream, self._stream = self._stream, None
        if stream is not None:
            stream.close()

    def _dispatch(self, record: LogRecord) -> None:
        if self._hierarchy.hierarchical_logging_enabled:
            node: Logger | None = self
            while node is not None:
                node._publish(record)
                node = node._parent
        else:
            self._hierarchy.root._publish(record)

    def _publish(self, record: LogRecord) -> None:
        stream = self._stream
        if stream is not None:
            stream.publish(record)

    def __repr__(self) -> str:
        kind = "detached " if self._detached else ""
        return f"<{kind}Logger {self._full_name!r}>"
