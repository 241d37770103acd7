"""FIFO scheduling queues.

A ``ProcessQueue`` is a plain deque of PIDs.  New arrivals go to the
back; iteration runs front to back.  The one operation a plain deque
lacks is "pull this PID out from the middle and keep everyone else in
order", which both the ready queue and the I/O queue need whenever a
process changes queue or terminates.
"""

from collections import deque
from collections.abc import Iterator


class ProcessQueue:
    """An ordered queue of PIDs with filtered removal."""

    def __init__(self, name: str) -> None:
        """Create an empty queue.

        Args:
            name: Label used in log messages (e.g. "ready", "I/O").

        """
        self._name = name
        self._pids: deque[int] = deque()

    @property
    def name(self) -> str:
        """Return the queue label."""
        return self._name

    def enqueue(self, pid: int) -> None:
        """Append a PID at the tail."""
        self._pids.append(pid)

    def remove(self, pid: int) -> bool:
        """Remove every occurrence of *pid*, preserving the order of the rest.

        Returns:
            True if the PID was present.

        """
        kept = deque(p for p in self._pids if p != pid)
        found = len(kept) != len(self._pids)
        self._pids = kept
        return found

    def snapshot(self) -> list[int]:
        """Return the PIDs head first, without mutating the queue."""
        return list(self._pids)

    def __contains__(self, pid: object) -> bool:
        """Return True if *pid* is queued."""
        return pid in self._pids

    def __iter__(self) -> Iterator[int]:
        """Iterate PIDs from head to tail."""
        return iter(list(self._pids))

    def __len__(self) -> int:
        """Return the number of queued PIDs."""
        return len(self._pids)
