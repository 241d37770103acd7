"""The process record.

A process here is a simulacrum: it never runs.  The record holds what
the manager needs to draw a hierarchy and to show what the process is
"doing": its PID, its name, its place in the parent/child tree, and a
call stack of function labels.

The record never holds references to other records.  The parent and
the children are stored as PIDs and resolved through the registry that
owns every process, so a terminated process can never be reached
through a stale pointer.
"""

from enum import StrEnum


class QueueState(StrEnum):
    """Which scheduling queue a process currently sits in.

    - READY: eligible to run next.
    - IO: blocked, waiting for an I/O completion.
    - NONE: in neither queue.
    """

    READY = "ready"
    IO = "io"
    NONE = "none"


class Process:
    """A simulated process owned by a ``ProcessManager``.

    PIDs are handed out by the manager, not by the record itself, so two
    independent managers each start counting from 1.
    """

    def __init__(self, *, pid: int, name: str, parent_pid: int | None = None) -> None:
        """Create a process record.

        Args:
            pid: Identifier assigned by the owning manager.
            name: Free-form label (e.g. "init", "editor").
            parent_pid: PID of the parent process, or None for a root.

        """
        self._pid = pid
        self._name = name
        self._parent_pid = parent_pid
        self._children: list[int] = []
        self._call_stack: list[str] = []

    @property
    def pid(self) -> int:
        """Return the unique process identifier."""
        return self._pid

    @property
    def name(self) -> str:
        """Return the process name."""
        return self._name

    @property
    def parent_pid(self) -> int | None:
        """Return the parent's PID, or None for root processes."""
        return self._parent_pid

    @property
    def children(self) -> list[int]:
        """Return child PIDs in creation order (a copy)."""
        return list(self._children)

    @property
    def call_stack(self) -> list[str]:
        """Return call-stack frames, bottom first (a copy)."""
        return list(self._call_stack)

    @property
    def is_root(self) -> bool:
        """Return True if this process has no parent."""
        return self._parent_pid is None

    def add_child(self, pid: int) -> None:
        """Record a child at the end of the children list."""
        self._children.append(pid)

    def remove_child(self, pid: int) -> None:
        """Forget a child.  Unknown PIDs are ignored."""
        if pid in self._children:
            self._children.remove(pid)

    def orphan(self) -> None:
        """Detach from the parent, making this process a root."""
        self._parent_pid = None

    def push_frame(self, function_name: str) -> None:
        """Push a function label onto the call stack."""
        self._call_stack.append(function_name)

    def pop_frame(self) -> str:
        """Pop and return the most recent call-stack frame.

        Raises:
            IndexError: If the call stack is empty.

        """
        return self._call_stack.pop()

    def __repr__(self) -> str:
        """Return a debug representation."""
        return f"Process(pid={self._pid}, name={self._name!r}, parent_pid={self._parent_pid})"
