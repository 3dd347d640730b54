"""Hierarchical loggers that publish structured records to subscribers."""

from logtree.adapters.logging import StdlibLoggingBridge
from logtree.core.config import Settings
from logtree.core.errors import (
    InvalidNameError,
    LogTreeError,
    UnsupportedOperationError,
)
from logtree.core.levels import Level
from logtree.core.logger import Logger
from logtree.core.models import LogRecord
from logtree.core.registry import (
    LoggerRegistry,
    default_registry,
    get_detached_logger,
    get_logger,
    reset,
    root_logger,
)
from logtree.core.streams import AsyncSubscription, RecordStream, Subscription

__version__ = "0.1.0"

__all__ = [
    "AsyncSubscription",
    "InvalidNameError",
    "Level",
    "LogRecord",
    "LogTreeError",
    "Logger",
    "LoggerRegistry",
    "RecordStream",
    "Settings",
    "StdlibLoggingBridge",
    "Subscription",
    "UnsupportedOperationError",
    "default_registry",
    "get_detached_logger",
    "get_logger",
    "reset",
    "root_logger",
]
