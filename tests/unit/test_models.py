"""Tests for the LogRecord model."""

import dataclasses
import time

import pytest

from logtree import Level, LogRecord


class TestLogRecord:
    """Tests for LogRecord construction."""

    @pytest.mark.core
    def test_record_is_frozen(self) -> None:
        """Records cannot be mutated after construction."""
        record = LogRecord(level=Level.INFO, message="hi", logger_name="a")
        with pytest.raises(dataclasses.FrozenInstanceError):
            record.message = "changed"  # type: ignore[misc]

    @pytest.mark.core
    def test_optional_fields_default_to_none(self) -> None:
        """error, stack_trace, context and original_object default to None."""
        record = LogRecord(level=Level.INFO, message="hi", logger_name="a")
        assert record.error is None
        assert record.stack_trace is None
        assert record.context is None
        assert record.original_object is None

    @pytest.mark.core
    def test_record_captures_timestamp(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """The timestamp is taken at construction."""
        monkeypatch.setattr(time, "time", lambda: 1702300000.0)
        record = LogRecord(level=Level.INFO, message="hi", logger_name="a")
        assert record.timestamp == 1702300000.0

    @pytest.mark.core
    def test_sequence_numbers_strictly_increase(self) -> None:
        """Each record gets a larger sequence number than the one before."""
        records = [
            LogRecord(level=Level.INFO, message=str(i), logger_name="a")
            for i in range(5)
        ]
        numbers = [record.sequence_number for record in records]
        assert numbers == sorted(set(numbers))
        assert numbers[-1] - numbers[0] == 4

    @pytest.mark.core
    def test_str_format(self) -> None:
        """str() shows level, logger name and message."""
        record = LogRecord(level=Level.WARNING, message="uh oh", logger_name="a.b")
        assert str(record) == "[WARNING] a.b: uh oh"
