"""Registry that owns a logger hierarchy and its global settings.

Each LoggerRegistry holds one tree of loggers rooted at the logger named
"" and guarantees a single Logger instance per name. The module-level
helpers operate on a process-wide default registry configured from the
environment.
"""

import dataclasses
import threading
from collections.abc import Iterator

from logtree.core.config import Settings
from logtree.core.errors import InvalidNameError
from logtree.core.levels import Level
from logtree.core.logger import Logger

SEPARATOR = "."


class LoggerRegistry:
    """Map from dot-separated names to Logger instances.

    Example:
        ```python
        registry = LoggerRegistry(Settings(hierarchical_logging_enabled=True))
        db = registry.get_logger("app.db")
        assert db.parent is registry.get_logger("app")
        ```
    """

    def __init__(self, settings: Settings | None = None) -> None:
        """Initialize an empty hierarchy.

        Args:
            settings: Initial settings, also restored by reset(). Defaults
                to Settings().
        """
        self._initial_settings = settings or Settings()
        self._lock = threading.Lock()
        self._settings = self._initial_settings
        self._loggers: dict[str, Logger] = {}
        self._root = self._new_root()

    def _new_root(self) -> Logger:
        root = Logger("", None, self)
        self._loggers[""] = root
        return root

    @property
    def root(self) -> Logger:
        """The logger named ""."""
        return self._root

    @property
    def settings(self) -> Settings:
        """Snapshot of the current settings."""
        return self._settings

    @property
    def hierarchical_logging_enabled(self) -> bool:
        return self._settings.hierarchical_logging_enabled

    @hierarchical_logging_enabled.setter
    def hierarchical_logging_enabled(self, enabled: bool) -> None:
        self._update(hierarchical_logging_enabled=bool(enabled))

    @property
    def record_stack_trace_at_level(self) -> Level:
        return self._settings.record_stack_trace_at_level

    @record_stack_trace_at_level.setter
    def record_stack_trace_at_level(self, level: Level) -> None:
        self._update(record_stack_trace_at_level=_require_level(level))

    @property
    def root_level(self) -> Level:
        return self._settings.root_level

    @root_level.setter
    def root_level(self, level: Level) -> None:
        self._update(root_level=_require_level(level))

    def _update(self, **changes: object) -> None:
        with self._lock:
            self._settings = dataclasses.replace(self._settings, **changes)

    def get_logger(self, name: str) -> Logger:
        """Return the logger for name, creating it and its ancestors if needed.

        Args:
            name: Dot-separated logger name. "" is the root.

        Returns:
            The single Logger registered under name.

        Raises:
            InvalidNameError: If name starts with ".".
        """
        if name.startswith(SEPARATOR):
            raise InvalidNameError(f"Logger name must not start with '.': {name!r}")
        with self._lock:
            existing = self._loggers.get(name)
            if existing is not None:
                return existing
            segments = name.split(SEPARATOR)
            node = self._root
            for depth in range(1, len(segments) + 1):
                prefix = SEPARATOR.join(segments[:depth])
                child = self._loggers.get(prefix)
                if child is None:
                    child = Logger(segments[depth - 1], node, self)
                    self._loggers[prefix] = child
                node = child
            return node

    def get_detached_logger(self, name: str) -> Logger:
        """Create a logger outside the tree.

        The logger has no parent or children, is not registered, and is
        garbage collected once the caller drops it.
        """
        return Logger(name, None, self, detached=True)

    def get(self, name: str) -> Logger | None:
        """Return the registered logger for name without creating it."""
        with self._lock:
            return self._loggers.get(name)

    def names(self) -> list[str]:
        """Return the registered names in creation order."""
        with self._lock:
            return list(self._loggers)

    def reset(self) -> None:
        """Drop every logger and restore the initial settings.

        Streams of the dropped loggers are closed. Loggers handed out before
        the reset are no longer part of the tree.
        """
        with self._lock:
            dropped = list(self._loggers.values())
            self._loggers.clear()
            self._settings = self._initial_settings
            self._root = self._new_root()
        for logger in dropped:
            logger._close_stream()

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._loggers

    def __len__(self) -> int:
        with self._lock:
            return len(self._loggers)

    def __iter__(self) -> Iterator[Logger]:
        with self._lock:
            return iter(list(self._loggers.values()))


def _require_level(level: object) -> Level:
    if not isinstance(level, Level):
        raise TypeError(f"level must be a Level, got {type(level).__name__}")
    return level


_default_registry = LoggerRegistry(Settings.from_env())


def default_registry() -> LoggerRegistry:
    """Return the process-wide registry used by the module-level helpers."""
    return _default_registry


def get_logger(name: str) -> Logger:
    """Return the logger for name from the default registry."""
    return _default_registry.get_logger(name)


def get_detached_logger(name: str) -> Logger:
    """Create a detached logger bound to the default registry's settings."""
    return _default_registry.get_detached_logger(name)


def root_logger() -> Logger:
    """Return the root logger of the default registry."""
    return _default_registry.root


def reset() -> None:
    """Reset the default registry (for tests)."""
    _default_registry.reset()
