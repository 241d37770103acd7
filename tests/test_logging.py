"""Tests for the event log."""

from proc_manager.logging import LogEntry, Logger, LogLevel


class TestLogLevel:
    """Verify log level ordering."""

    def test_levels_are_ordered(self) -> None:
        """DEBUG < INFO < WARNING < ERROR."""
        assert LogLevel.DEBUG < LogLevel.INFO < LogLevel.WARNING < LogLevel.ERROR


class TestLogEntry:
    """Verify log entry structure."""

    def test_entry_str(self) -> None:
        """String form is ``[LEVEL] source: message``."""
        entry = LogEntry(level=LogLevel.WARNING, message="queue empty", source="scheduler")
        assert str(entry) == "[WARNING] scheduler: queue empty"


class TestLogger:
    """Verify the logger."""

    def test_log_stores_entries_in_order(self) -> None:
        """Entries are kept chronologically."""
        logger = Logger()
        logger.log(LogLevel.INFO, "first", source="registry")
        logger.log(LogLevel.INFO, "second", source="registry")
        assert [e.message for e in logger.entries] == ["first", "second"]

    def test_filter_by_min_level(self) -> None:
        """Only entries at or above the level are returned."""
        logger = Logger()
        logger.log(LogLevel.DEBUG, "noise", source="stack")
        logger.log(LogLevel.WARNING, "problem", source="registry")
        result = logger.filter(min_level=LogLevel.INFO)
        assert [e.message for e in result] == ["problem"]

    def test_filter_by_source(self) -> None:
        """Only entries from the source are returned."""
        logger = Logger()
        logger.log(LogLevel.INFO, "a", source="registry")
        logger.log(LogLevel.INFO, "b", source="scheduler")
        assert [e.message for e in logger.filter(source="scheduler")] == ["b"]

    def test_entries_is_a_copy(self) -> None:
        """Mutating the returned list should not affect the log."""
        logger = Logger()
        logger.log(LogLevel.INFO, "a", source="registry")
        logger.entries.clear()
        assert len(logger.entries) == 1

    def test_clear(self) -> None:
        """Clearing removes every entry."""
        logger = Logger()
        logger.log(LogLevel.INFO, "a", source="registry")
        logger.clear()
        assert logger.entries == []

    def test_filter_combines_criteria(self) -> None:
        """Level and source filters apply together."""
        logger = Logger()
        logger.log(LogLevel.DEBUG, "push", source="stack")
        logger.log(LogLevel.WARNING, "empty pop", source="stack")
        logger.log(LogLevel.WARNING, "missing", source="registry")
        result = logger.filter(min_level=LogLevel.WARNING, source="stack")
        assert [e.message for e in result] == ["empty pop"]
