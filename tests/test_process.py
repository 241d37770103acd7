"""Tests for the process record.

The record stores a PID, a name, a parent link, child PIDs in creation
order, and a LIFO call stack.  It holds no references to other records.
"""

import pytest

from proc_manager.process import Process, QueueState


class TestProcessCreation:
    """Verify a new record's defaults."""

    def test_stores_pid_and_name(self) -> None:
        """PID and name should be readable after creation."""
        process = Process(pid=7, name="editor")
        assert process.pid == 7  # noqa: PLR2004
        assert process.name == "editor"

    def test_root_by_default(self) -> None:
        """Without a parent, the record is a root."""
        process = Process(pid=1, name="init")
        assert process.parent_pid is None
        assert process.is_root

    def test_accepts_parent_pid(self) -> None:
        """A child stores its parent's PID."""
        process = Process(pid=2, name="shell", parent_pid=1)
        assert process.parent_pid == 1
        assert not process.is_root

    def test_starts_without_children_or_frames(self) -> None:
        """Children and call stack should start empty."""
        process = Process(pid=1, name="init")
        assert process.children == []
        assert process.call_stack == []


class TestChildren:
    """Verify child bookkeeping."""

    def test_children_keep_creation_order(self) -> None:
        """Children are listed in the order they were added."""
        process = Process(pid=1, name="init")
        process.add_child(3)
        process.add_child(2)
        assert process.children == [3, 2]

    def test_remove_child(self) -> None:
        """Removing a child drops only that PID."""
        process = Process(pid=1, name="init")
        for pid in (2, 3, 4):
            process.add_child(pid)
        process.remove_child(3)
        assert process.children == [2, 4]

    def test_remove_unknown_child_is_ignored(self) -> None:
        """Removing a PID that is not a child changes nothing."""
        process = Process(pid=1, name="init")
        process.add_child(2)
        process.remove_child(99)
        assert process.children == [2]

    def test_children_property_is_a_copy(self) -> None:
        """Mutating the returned list should not affect the record."""
        process = Process(pid=1, name="init")
        process.add_child(2)
        process.children.append(5)
        assert process.children == [2]

    def test_orphan_clears_parent(self) -> None:
        """Orphaning makes the record a root."""
        process = Process(pid=2, name="shell", parent_pid=1)
        process.orphan()
        assert process.is_root


class TestCallStack:
    """Verify LIFO call-stack behaviour."""

    def test_push_then_pop_is_lifo(self) -> None:
        """The last frame pushed is the first popped."""
        process = Process(pid=1, name="init")
        process.push_frame("main")
        process.push_frame("read")
        assert process.pop_frame() == "read"
        assert process.call_stack == ["main"]

    def test_pop_empty_raises(self) -> None:
        """Popping an empty stack raises IndexError."""
        process = Process(pid=1, name="init")
        with pytest.raises(IndexError):
            process.pop_frame()


class TestQueueState:
    """Verify the queue-state enum."""

    def test_values(self) -> None:
        """String values should be short lowercase labels."""
        assert QueueState.READY == "ready"
        assert QueueState.IO == "io"
        assert QueueState.NONE == "none"
