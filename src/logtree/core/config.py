"""Configuration for logger hierarchies.

Settings can be built directly or read from the environment:

    LOGTREE_LEVEL              Root level name or value (default INFO).
    LOGTREE_HIERARCHICAL       Enable per-logger levels and dispatch
                               ("1", "true", "yes", "on"; default off).
    LOGTREE_STACK_TRACE_LEVEL  Capture stack traces at or above this level
                               (default OFF, i.e. never).
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass

from logtree.core.levels import Level

ENV_ROOT_LEVEL = "LOGTREE_LEVEL"
ENV_HIERARCHICAL = "LOGTREE_HIERARCHICAL"
ENV_STACK_TRACE_LEVEL = "LOGTREE_STACK_TRACE_LEVEL"

_TRUTHY = frozenset({"1", "true", "yes", "on"})


def _env_flag(environ: Mapping[str, str], name: str, default: bool) -> bool:
    raw = environ.get(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in _TRUTHY


def _env_level(environ: Mapping[str, str], name: str, default: Level) -> Level:
    raw = environ.get(name)
    if raw is None or not raw.strip():
        return default
    return Level.parse(raw)


@dataclass(frozen=True)
class Settings:
    """Process-wide options of a logger hierarchy.

    Attributes:
        root_level: Effective level of every logger in flat mode, and the
            root's own level in hierarchical mode.
        hierarchical_logging_enabled: Whether levels and dispatch are
            resolved per logger instead of being merged into the root.
        record_stack_trace_at_level: Records at or above this level capture
            a stack trace when none was supplied.
    """

    root_level: Level = Level.INFO
    hierarchical_logging_enabled: bool = False
    record_stack_trace_at_level: Level = Level.OFF

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        """Build settings from environment variables.

        Args:
            environ: Mapping to read from. Defaults to os.environ.

        Returns:
            Settings with defaults for every unset variable.

        Raises:
            ValueError: If a level variable holds an unknown level.
        """
        env = os.environ if environ is None else environ
        defaults = cls()
        return cls(
            root_level=_env_level(env, ENV_ROOT_LEVEL, defaults.root_level),
            hierarchical_logging_enabled=_env_flag(
                env, ENV_HIERARCHICAL, defaults.hierarchical_logging_enabled
            ),
            record_stack_trace_at_level=_env_level(
                env, ENV_STACK_TRACE_LEVEL, defaults.record_stack_trace_at_level
            ),
        )
