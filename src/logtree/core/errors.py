"""Exceptions raised by the logger hierarchy."""


class LogTreeError(Exception):
    """Base class for logtree errors."""


class InvalidNameError(LogTreeError, ValueError):
    """Raised when a logger name starts with the hierarchy separator."""


class UnsupportedOperationError(LogTreeError, RuntimeError):
    """Raised when an operation is not allowed in the current logging mode."""
