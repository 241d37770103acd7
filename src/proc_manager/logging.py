"""Session event log.

The manager records what happened to each process (creation, queue
moves, call-stack pushes and pops, terminations, refused requests) in
an in-memory buffer that the shell's ``log`` command reads back.  The
buffer is discarded when the session ends.

Sources used by the manager:

- ``registry``: processes entering or leaving the table.
- ``scheduler``: moves between the ready and I/O queues.
- ``stack``: call-stack pushes and pops.
"""

from dataclasses import dataclass
from enum import IntEnum


class LogLevel(IntEnum):
    """How serious an event is.  Higher values are more serious."""

    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3


@dataclass(frozen=True)
class LogEntry:
    """One recorded event.

    Attributes:
        level: How serious the event is.
        message: What happened, e.g. "Process 2 moved from ready to I/O queue".
        source: Which part of the manager recorded it.

    """

    level: LogLevel
    message: str
    source: str

    def __str__(self) -> str:
        """Render as ``[LEVEL] source: message``."""
        return f"[{self.level.name}] {self.source}: {self.message}"


class Logger:
    """Buffer of ``LogEntry`` records, oldest first."""

    def __init__(self) -> None:
        """Start with no events."""
        self._entries: list[LogEntry] = []

    @property
    def entries(self) -> list[LogEntry]:
        """Return a copy of every recorded event, oldest first."""
        return list(self._entries)

    def log(self, level: LogLevel, message: str, *, source: str) -> None:
        """Record one event at the end of the buffer."""
        self._entries.append(LogEntry(level=level, message=message, source=source))

    def filter(
        self,
        *,
        min_level: LogLevel | None = None,
        source: str | None = None,
    ) -> list[LogEntry]:
        """Return the events at or above *min_level* and from *source*.

        Either criterion may be omitted; omitting both returns a copy of
        the whole buffer.
        """
        return [
            entry
            for entry in self._entries
            if (min_level is None or entry.level >= min_level)
            and (source is None or entry.source == source)
        ]

    def clear(self) -> None:
        """Drop every recorded event."""
        self._entries.clear()
