"""Interactive menu console.

The console is the numbered menu a user drives from the terminal::

    1. Create Process      4. Complete I/O
    2. Call Function       5. Terminate Process
    3. Request I/O         6. Show State
                           0. Exit

Each choice prompts for its inputs (name, parent PID with ``-1`` for
"none", target PID, function name) and prints the reply.  Names are
passed to the manager exactly as typed; PID-only choices and Show State
go through the shell.  This module only collects input and prints output.

``MenuSession`` takes its input and output functions as arguments so
the loop can be driven from tests without touching ``stdin``.
"""

from collections.abc import Callable

from proc_manager.manager import NO_PARENT, ProcessManager, ProcessManagerError
from proc_manager.shell import Shell

MENU = """
--- OS Process Manager (Console) ---
1. Create Process
2. Call Function
3. Request I/O
4. Complete I/O
5. Terminate Process
6. Show State
0. Exit"""


class MenuSession:
    """One run of the menu loop over a shell."""

    def __init__(
        self,
        *,
        shell: Shell,
        read: Callable[[str], str] = input,
        write: Callable[[str], None] = print,
    ) -> None:
        """Create a session.

        Args:
            shell: The shell that executes each choice.
            read: Prompt-and-read function (``input`` by default).
            write: Output function (``print`` by default).

        """
        self._shell = shell
        self._read = read
        self._write = write
        self._actions: dict[str, Callable[[], str | None]] = {
            "1": self._create,
            "2": self._call,
            "3": lambda: self._pid_command("io"),
            "4": lambda: self._pid_command("done"),
            "5": lambda: self._pid_command("kill"),
            "6": lambda: self._shell.execute("state"),
        }

    def step(self) -> bool:
        """Show the menu, run one choice, and print the result.

        Returns:
            False when the user chose to exit, True otherwise.

        """
        self._write(MENU)
        choice = self._read("Enter choice: ").strip()
        if choice == "0":
            self._write("Exiting...")
            return False

        action = self._actions.get(choice)
        if action is None:
            self._write("Invalid choice.")
            return True

        result = action()
        if result:
            self._write(result)
        return True

    def run(self) -> None:
        """Loop until the user exits or input ends."""
        try:
            while self.step():
                pass
        except EOFError:
            self._write("")

    # -- Prompts ---------------------------------------------------------

    def _create(self) -> str | None:
        name = self._read("Enter process name: ").strip()
        if not name:
            return "Invalid process name."
        parent = self._read_int(f"Enter parent PID ({NO_PARENT} if none): ")
        if parent is None:
            return "Invalid PID."
        try:
            process = self._shell.manager.create_process(name, parent)
        except ProcessManagerError as e:
            return f"Error: {e}"
        return f"Created process: PID={process.pid}"

    def _call(self) -> str | None:
        pid = self._read_int("Enter PID: ")
        if pid is None:
            return "Invalid PID."
        func = self._read("Enter function name: ").strip()
        if not func:
            return "Invalid function name."
        try:
            self._shell.manager.call_function(pid, func)
        except ProcessManagerError as e:
            return f"Error: {e}"
        return f"Process {pid} called function: {func}"

    def _pid_command(self, command: str) -> str | None:
        pid = self._read_int("Enter PID: ")
        if pid is None:
            return "Invalid PID."
        return self._shell.execute(f"{command} {pid}")

    def _read_int(self, prompt: str) -> int | None:
        try:
            return int(self._read(prompt).strip())
        except ValueError:
            return None


def run() -> None:
    """Run the interactive console.

    This is the ``proc-manager`` console entry point.  Ctrl+D ends the
    session like choosing 0; Ctrl+C interrupts it.
    """
    session = MenuSession(shell=Shell(manager=ProcessManager()))
    try:
        session.run()
    except KeyboardInterrupt:
        print("\nInterrupted.")  # noqa: T201
