"""Process registry and scheduling queues.

The ``ProcessManager`` is the whole core of the simulator.  It owns:

- **the process table**: a PID-keyed dict, the only place a
  ``Process`` record lives;
- **the hierarchy**: parent/child edges stored as PIDs on each record,
  plus a *primary root* used as the default starting point for display;
- **two FIFO queues**: ready and waiting-for-I/O.  A live process sits
  in at most one of them.  Queue membership is read from the queues
  themselves, never cached on the record.

Lifecycle::

    create ──► READY ──request_io──► IO
                 ▲                   │
                 └────complete_io────┘
    terminate: removed from whichever queue, the tree, and the table

Every operation validates first and mutates second, so a failure leaves
the registry exactly as it was.  Failures raise a subclass of
``ProcessManagerError`` carrying the offending PID.

Terminating a parent does not touch its children beyond detaching them:
each child becomes a root of its own subtree (``parent_pid`` is cleared)
and keeps its own children.  Nothing is re-parented or cascaded.
"""

from dataclasses import asdict, dataclass, field
from itertools import count
from typing import Any

from proc_manager.logging import Logger, LogLevel
from proc_manager.process import Process, QueueState
from proc_manager.queues import ProcessQueue

# Console convention for "no parent".
NO_PARENT = -1


class ProcessManagerError(Exception):
    """Base class for recoverable registry failures."""

    def __init__(self, message: str, *, pid: int) -> None:
        """Store the message and the PID the failure refers to."""
        super().__init__(message)
        self.pid = pid


class ProcessNotFoundError(ProcessManagerError):
    """The PID does not exist in the registry."""

    def __init__(self, pid: int) -> None:
        """Build the error for *pid*."""
        super().__init__(f"Process {pid} not found", pid=pid)


class NotInReadyQueueError(ProcessManagerError):
    """The process exists but is not in the ready queue."""

    def __init__(self, pid: int) -> None:
        """Build the error for *pid*."""
        super().__init__(f"Process {pid} is not in the ready queue", pid=pid)


class NotInIOQueueError(ProcessManagerError):
    """No process with this PID is in the I/O queue."""

    def __init__(self, pid: int) -> None:
        """Build the error for *pid*."""
        super().__init__(f"Process {pid} is not in the I/O queue", pid=pid)


class EmptyCallStackError(ProcessManagerError):
    """A frame was popped from an empty call stack."""

    def __init__(self, pid: int) -> None:
        """Build the error for *pid*."""
        super().__init__(f"Process {pid} has an empty call stack", pid=pid)


class InvalidParentError(ProcessManagerError):
    """The requested parent PID does not resolve (strict mode only)."""

    def __init__(self, pid: int) -> None:
        """Build the error for the missing parent *pid*."""
        super().__init__(f"Parent process {pid} does not exist", pid=pid)


@dataclass(frozen=True)
class QueueEntry:
    """One queued process, as shown to the user."""

    pid: int
    name: str


@dataclass(frozen=True)
class TreeNode:
    """One line of a pre-order hierarchy walk."""

    pid: int
    name: str
    depth: int


@dataclass(frozen=True)
class StateSnapshot:
    """Read-only view of the queues and the hierarchy.

    Attributes:
        ready: Ready queue, head first.
        io: I/O queue, head first.
        tree: Pre-order walk of the hierarchy.
        primary_root: PID of the primary root, or None when unset.

    """

    ready: list[QueueEntry] = field(default_factory=list)
    io: list[QueueEntry] = field(default_factory=list)
    tree: list[TreeNode] = field(default_factory=list)
    primary_root: int | None = None

    @property
    def tree_is_empty(self) -> bool:
        """Return True when there is no hierarchy to display."""
        return not self.tree

    def as_dict(self) -> dict[str, Any]:
        """Return a JSON-friendly dict."""
        return asdict(self)


class ProcessManager:
    """Registry of live processes plus the ready and I/O queues.

    The PID counter belongs to the instance and starts at 1.  It is
    never reset or rewound, so PIDs are not reused after termination;
    constructing a new manager is the only way to start over.
    """

    def __init__(self, *, strict_parents: bool = False, logger: Logger | None = None) -> None:
        """Create an empty manager.

        Args:
            strict_parents: If True, an unresolvable parent PID raises
                ``InvalidParentError`` instead of creating a root.
            logger: Log buffer to write events to.  A fresh one is
                created when omitted.

        """
        self._strict_parents = strict_parents
        self._logger = logger if logger is not None else Logger()
        self._next_pid = count(start=1)
        self._processes: dict[int, Process] = {}
        self._primary_root: int | None = None
        self._ready = ProcessQueue("ready")
        self._io = ProcessQueue("I/O")

    # -- Queries ---------------------------------------------------------

    @property
    def logger(self) -> Logger:
        """Return the event log."""
        return self._logger

    @property
    def strict_parents(self) -> bool:
        """Return True if unresolvable parents are rejected."""
        return self._strict_parents

    @property
    def primary_root(self) -> int | None:
        """Return the primary root PID, or None if cleared or never set."""
        return self._primary_root

    @property
    def ready_queue(self) -> list[int]:
        """Return ready-queue PIDs, head first."""
        return self._ready.snapshot()

    @property
    def io_queue(self) -> list[int]:
        """Return I/O-queue PIDs, head first."""
        return self._io.snapshot()

    def __len__(self) -> int:
        """Return the number of live processes."""
        return len(self._processes)

    def __contains__(self, pid: object) -> bool:
        """Return True if *pid* is a live process."""
        return pid in self._processes

    def get_process(self, pid: int) -> Process:
        """Return the live process with this PID.

        Raises:
            ProcessNotFoundError: If no such process exists.

        """
        process = self._processes.get(pid)
        if process is None:
            raise ProcessNotFoundError(pid)
        return process

    def list_processes(self) -> list[Process]:
        """Return every live process in PID order."""
        return [self._processes[pid] for pid in sorted(self._processes)]

    def roots(self) -> list[int]:
        """Return the PIDs of every parentless process, in PID order."""
        return [p.pid for p in self.list_processes() if p.is_root]

    def queue_state(self, pid: int) -> QueueState:
        """Return which queue the process occupies.

        Raises:
            ProcessNotFoundError: If no such process exists.

        """
        self.get_process(pid)
        if pid in self._ready:
            return QueueState.READY
        if pid in self._io:
            return QueueState.IO
        return QueueState.NONE

    # -- Operations ------------------------------------------------------

    def create_process(self, name: str, parent_pid: int | None = None) -> Process:
        """Create a process and append it to the ready queue.

        A ``parent_pid`` of None or ``NO_PARENT`` means "no parent".  A
        PID that does not resolve is treated the same way unless the
        manager is strict.  A parentless process becomes the primary
        root when no primary root is set.

        Args:
            name: Free-form label.
            parent_pid: PID of an existing process to attach to.

        Returns:
            The new process.

        Raises:
            InvalidParentError: In strict mode, if ``parent_pid`` is given
                but does not exist.

        """
        parent: Process | None = None
        if parent_pid is not None and parent_pid != NO_PARENT:
            parent = self._processes.get(parent_pid)
            if parent is None:
                if self._strict_parents:
                    self._warn(f"Rejected parent {parent_pid} for {name!r}", source="registry")
                    raise InvalidParentError(parent_pid)
                self._logger.log(
                    LogLevel.DEBUG,
                    f"Parent {parent_pid} not found, creating {name!r} as a root",
                    source="registry",
                )

        process = Process(
            pid=next(self._next_pid),
            name=name,
            parent_pid=parent.pid if parent is not None else None,
        )
        if parent is not None:
            parent.add_child(process.pid)
        elif self._primary_root is None:
            self._primary_root = process.pid

        self._processes[process.pid] = process
        self._ready.enqueue(process.pid)
        self._logger.log(
            LogLevel.INFO,
            f"Created process {process.pid} ({name})",
            source="registry",
        )
        return process

    def call_function(self, pid: int, function_name: str) -> None:
        """Push *function_name* onto the process's call stack.

        Raises:
            ProcessNotFoundError: If no such process exists.

        """
        process = self._lookup(pid, action="call")
        process.push_frame(function_name)
        self._logger.log(
            LogLevel.DEBUG,
            f"Process {pid} called {function_name}",
            source="stack",
        )

    def return_from_function(self, pid: int) -> str:
        """Pop the most recent frame off the process's call stack.

        Returns:
            The popped function name.

        Raises:
            ProcessNotFoundError: If no such process exists.
            EmptyCallStackError: If the call stack has no frames.

        """
        process = self._lookup(pid, action="return")
        if not process.call_stack:
            self._warn(f"Return from empty call stack in process {pid}", source="stack")
            raise EmptyCallStackError(pid)
        frame = process.pop_frame()
        self._logger.log(LogLevel.DEBUG, f"Process {pid} returned from {frame}", source="stack")
        return frame

    def request_io(self, pid: int) -> None:
        """Move a process from the ready queue to the tail of the I/O queue.

        Raises:
            ProcessNotFoundError: If no such process exists.
            NotInReadyQueueError: If the process is not in the ready queue.

        """
        self._lookup(pid, action="request I/O for")
        if not self._transfer(pid, self._ready, self._io):
            raise NotInReadyQueueError(pid)

    def complete_io(self, pid: int) -> None:
        """Move a process from the I/O queue to the tail of the ready queue.

        Only the I/O queue is consulted.  An unknown PID is reported as
        not being in the I/O queue.

        Raises:
            NotInIOQueueError: If the PID is not in the I/O queue.

        """
        if not self._transfer(pid, self._io, self._ready):
            raise NotInIOQueueError(pid)

    def terminate_process(self, pid: int) -> None:
        """Remove a process from the queues, the hierarchy, and the table.

        Children are orphaned: each loses its parent link and keeps its
        own subtree.  If the process was the primary root, the primary
        root is cleared.

        Raises:
            ProcessNotFoundError: If no such process exists.

        """
        process = self._lookup(pid, action="terminate")

        self._ready.remove(pid)
        self._io.remove(pid)

        if process.parent_pid is not None:
            parent = self._processes.get(process.parent_pid)
            if parent is not None:
                parent.remove_child(pid)

        for child_pid in process.children:
            child = self._processes.get(child_pid)
            if child is not None:
                child.orphan()

        if self._primary_root == pid:
            self._primary_root = None

        del self._processes[pid]
        self._logger.log(LogLevel.INFO, f"Terminated process {pid}", source="registry")

    def show_state(self, *, all_roots: bool = False) -> StateSnapshot:
        """Return the queues and a pre-order hierarchy walk.

        Args:
            all_roots: Walk every parentless process instead of only the
                primary root.

        """
        if all_roots:
            starts = self.roots()
        else:
            starts = [self._primary_root] if self._primary_root is not None else []

        tree: list[TreeNode] = []
        for root_pid in starts:
            self._walk(root_pid, tree)

        return StateSnapshot(
            ready=[self._entry(pid) for pid in self._ready],
            io=[self._entry(pid) for pid in self._io],
            tree=tree,
            primary_root=self._primary_root,
        )

    # -- Helpers ---------------------------------------------------------

    def _lookup(self, pid: int, *, action: str) -> Process:
        process = self._processes.get(pid)
        if process is None:
            self._warn(f"Cannot {action} process {pid}: not found", source="registry")
            raise ProcessNotFoundError(pid)
        return process

    def _warn(self, message: str, *, source: str) -> None:
        self._logger.log(LogLevel.WARNING, message, source=source)

    def _entry(self, pid: int) -> QueueEntry:
        return QueueEntry(pid=pid, name=self._processes[pid].name)

    def _walk(self, root_pid: int, out: list[TreeNode]) -> None:
        # Explicit stack; children pushed in reverse so they pop in creation order.
        stack = [(root_pid, 0)]
        while stack:
            pid, depth = stack.pop()
            process = self._processes[pid]
            out.append(TreeNode(pid=pid, name=process.name, depth=depth))
            stack.extend((child_pid, depth + 1) for child_pid in reversed(process.children))

    def _transfer(self, pid: int, source: ProcessQueue, target: ProcessQueue) -> bool:
        if not source.remove(pid):
            self._warn(f"Process {pid} not in {source.name} queue", source="scheduler")
            return False
        target.enqueue(pid)
        self._logger.log(
            LogLevel.INFO,
            f"Process {pid} moved from {source.name} to {target.name} queue",
            source="scheduler",
        )
        return True
