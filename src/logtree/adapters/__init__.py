"""Adapters connecting published records to external sinks."""
