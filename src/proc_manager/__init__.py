"""A didactic process manager.

Models process creation, the parent/child hierarchy, a call stack per
process, and movement between a ready queue and an I/O-wait queue.
Nothing is ever executed; the model is queue membership and hierarchy
only.

Re-exports public symbols so callers can write::

    from proc_manager import ProcessManager, ProcessNotFoundError
"""

from proc_manager.logging import LogEntry, Logger, LogLevel
from proc_manager.manager import (
    NO_PARENT,
    EmptyCallStackError,
    InvalidParentError,
    NotInIOQueueError,
    NotInReadyQueueError,
    ProcessManager,
    ProcessManagerError,
    ProcessNotFoundError,
    QueueEntry,
    StateSnapshot,
    TreeNode,
)
from proc_manager.process import Process, QueueState
from proc_manager.queues import ProcessQueue

__all__ = [
    "NO_PARENT",
    "EmptyCallStackError",
    "InvalidParentError",
    "LogEntry",
    "LogLevel",
    "Logger",
    "NotInIOQueueError",
    "NotInReadyQueueError",
    "Process",
    "ProcessManager",
    "ProcessManagerError",
    "ProcessNotFoundError",
    "ProcessQueue",
    "QueueEntry",
    "QueueState",
    "StateSnapshot",
    "TreeNode",
]
