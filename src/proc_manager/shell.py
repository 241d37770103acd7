"""The shell: a text command interpreter for the process manager.

The shell reads a command string, splits it into a command name and
arguments, dispatches to a handler, and returns a string result.  It
never prints: the REPL and the web API decide how to display output.

Commands map onto manager operations one to one::

    create <name> [parent_pid]   call <pid> <function>   ret <pid>
    io <pid>                     done <pid>              kill <pid>
    state [--all]                ps                      stack <pid>
    log [level]                  help                    exit

Design choices:
    - **Command dispatch via a dict.**  Adding a command means writing
      a method and adding one dict entry.
    - **Errors become text.**  A ``ProcessManagerError`` is rendered as
      ``Error: ...``; the manager keeps running after any failure.
"""

import shlex
from collections.abc import Callable
from typing import TypeAlias

from proc_manager.logging import LogLevel
from proc_manager.manager import NO_PARENT, ProcessManager, ProcessManagerError, StateSnapshot

# Type alias for a command handler: takes a list of args, returns output.
_Handler: TypeAlias = Callable[[list[str]], str]


def format_state(snapshot: StateSnapshot) -> str:
    """Render a state snapshot as the three-section console report."""
    lines = ["--- Ready Queue ---"]
    lines.extend(f"PID: {e.pid}, Name: {e.name}" for e in snapshot.ready)
    lines.append("")
    lines.append("--- I/O Queue ---")
    lines.extend(f"PID: {e.pid}, Name: {e.name}" for e in snapshot.io)
    lines.append("")
    lines.append("--- Process Tree ---")
    if snapshot.tree_is_empty:
        lines.append("(No processes created yet)")
    else:
        lines.extend(f"{'  ' * n.depth}PID: {n.pid}, Name: {n.name}" for n in snapshot.tree)
    lines.append("--------------------")
    return "\n".join(lines)


def _parse_pid(text: str) -> int | None:
    try:
        return int(text)
    except ValueError:
        return None


class Shell:
    """Command interpreter bound to one ``ProcessManager``."""

    EXIT_SENTINEL = "__EXIT__"

    def __init__(self, *, manager: ProcessManager) -> None:
        """Create a shell attached to a manager.

        Args:
            manager: The registry every command operates on.

        """
        self._manager = manager
        self._commands: dict[str, _Handler] = {
            "help": self._cmd_help,
            "create": self._cmd_create,
            "call": self._cmd_call,
            "ret": self._cmd_ret,
            "io": self._cmd_io,
            "done": self._cmd_done,
            "kill": self._cmd_kill,
            "state": self._cmd_state,
            "ps": self._cmd_ps,
            "stack": self._cmd_stack,
            "log": self._cmd_log,
            "exit": self._cmd_exit,
        }

    @property
    def manager(self) -> ProcessManager:
        """Return the manager this shell drives."""
        return self._manager

    @property
    def commands(self) -> list[str]:
        """Return the available command names, sorted."""
        return sorted(self._commands)

    def execute(self, command: str) -> str:
        """Parse and execute a single command.

        Args:
            command: The raw command string (e.g. "create editor 1").

        Returns:
            The command output, an ``Error:`` line, or ``Unknown command:``.

        """
        try:
            parts = shlex.split(command)
        except ValueError as e:
            return f"Error: {e}"
        if not parts:
            return ""

        name, args = parts[0], parts[1:]
        handler = self._commands.get(name)
        if handler is None:
            return f"Unknown command: {name}"

        try:
            return handler(args)
        except ProcessManagerError as e:
            return f"Error: {e}"

    # -- Command handlers ------------------------------------------------

    def _cmd_help(self, _args: list[str]) -> str:
        """List available commands."""
        return "Available commands: " + ", ".join(self.commands)

    def _cmd_create(self, args: list[str]) -> str:
        """Create a process, optionally under a parent."""
        if not args or len(args) > 2:  # noqa: PLR2004
            return "Usage: create <name> [parent_pid]"
        parent_pid = NO_PARENT
        if len(args) == 2:  # noqa: PLR2004
            parsed = _parse_pid(args[1])
            if parsed is None:
                return "Usage: create <name> [parent_pid]"
            parent_pid = parsed
        process = self._manager.create_process(args[0], parent_pid)
        return f"Created process: PID={process.pid}"

    def _cmd_call(self, args: list[str]) -> str:
        """Push a function onto a process's call stack."""
        pid = _parse_pid(args[0]) if len(args) == 2 else None  # noqa: PLR2004
        if pid is None:
            return "Usage: call <pid> <function>"
        self._manager.call_function(pid, args[1])
        return f"Process {pid} called function: {args[1]}"

    def _cmd_ret(self, args: list[str]) -> str:
        """Pop the top frame off a process's call stack."""
        pid = self._single_pid(args)
        if pid is None:
            return "Usage: ret <pid>"
        frame = self._manager.return_from_function(pid)
        return f"Process {pid} returned from function: {frame}"

    def _cmd_io(self, args: list[str]) -> str:
        """Move a process from the ready queue to the I/O queue."""
        pid = self._single_pid(args)
        if pid is None:
            return "Usage: io <pid>"
        self._manager.request_io(pid)
        return f"Process {pid} moved to I/O queue."

    def _cmd_done(self, args: list[str]) -> str:
        """Complete a process's I/O, returning it to the ready queue."""
        pid = self._single_pid(args)
        if pid is None:
            return "Usage: done <pid>"
        self._manager.complete_io(pid)
        return f"Process {pid} completed I/O and returned to ready queue."

    def _cmd_kill(self, args: list[str]) -> str:
        """Terminate a process."""
        pid = self._single_pid(args)
        if pid is None:
            return "Usage: kill <pid>"
        self._manager.terminate_process(pid)
        return f"Process {pid} terminated."

    def _cmd_state(self, args: list[str]) -> str:
        """Show both queues and the process tree."""
        if args not in ([], ["--all"]):
            return "Usage: state [--all]"
        return format_state(self._manager.show_state(all_roots=bool(args)))

    def _cmd_ps(self, _args: list[str]) -> str:
        """List live processes with their parent and queue."""
        lines = ["PID    PPID   QUEUE  NAME"]
        for p in self._manager.list_processes():
            ppid = "-" if p.parent_pid is None else str(p.parent_pid)
            queue = self._manager.queue_state(p.pid)
            lines.append(f"{p.pid:<6} {ppid:<6} {queue!s:<6} {p.name}")
        return "\n".join(lines)

    def _cmd_stack(self, args: list[str]) -> str:
        """Show a process's call stack, most recent frame first."""
        pid = self._single_pid(args)
        if pid is None:
            return "Usage: stack <pid>"
        frames = self._manager.get_process(pid).call_stack
        if not frames:
            return f"Process {pid} call stack is empty."
        return "\n".join(reversed(frames))

    def _cmd_log(self, args: list[str]) -> str:
        """Show the event log, optionally from a minimum level up."""
        min_level: LogLevel | None = None
        if args:
            try:
                min_level = LogLevel[args[0].upper()]
            except KeyError:
                return "Usage: log [debug|info|warning|error]"
        entries = self._manager.logger.filter(min_level=min_level)
        return "\n".join(str(e) for e in entries)

    def _cmd_exit(self, _args: list[str]) -> str:
        """Signal the caller to end the session."""
        return self.EXIT_SENTINEL

    @staticmethod
    def _single_pid(args: list[str]) -> int | None:
        if len(args) != 1:
            return None
        return _parse_pid(args[0])
