"""The shell — command interpreter for the paging simulator.

The shell reads a command string, splits it into a command name and
arguments, dispatches to a handler, and returns a string result.  It is
the only place where memory errors become text.

Design choices:
    - **Returns strings, not prints.**  The shell is fully testable and
      the caller decides how to display output.
    - **Command dispatch via a dict.**  Adding a command means writing a
      method and adding one dict entry.
    - **Never raises on user input.**  Bad arguments and rejected memory
      operations both come back as ``Error: ...`` lines.
"""

from collections.abc import Callable
from typing import TypeAlias

from paging_sim.display import format_memory_map, format_processes, format_stats
from paging_sim.logging import LogLevel
from paging_sim.memory.errors import PagingError
from paging_sim.memory.manager import MemoryManager

# Type alias for a command handler: takes a list of args, returns output.
_Handler: TypeAlias = Callable[[list[str]], str]

_USAGE = {
    "alloc": "alloc <pages>",
    "free": "free <pid>",
    "translate": "translate <pid> <address>",
    "map": "map [width]",
    "log": "log [debug|info|warning|error]",
}


class Shell:
    """Command interpreter bound to one memory manager."""

    EXIT_SENTINEL = "__EXIT__"

    def __init__(self, *, manager: MemoryManager) -> None:
        """Create a shell that drives the given manager.

        Args:
            manager: The memory manager to operate on.

        """
        self._manager = manager
        self._commands: dict[str, _Handler] = {
            "help": self._cmd_help,
            "alloc": self._cmd_alloc,
            "free": self._cmd_free,
            "translate": self._cmd_translate,
            "map": self._cmd_map,
            "ps": self._cmd_ps,
            "stats": self._cmd_stats,
            "log": self._cmd_log,
            "exit": self._cmd_exit,
        }

    @property
    def manager(self) -> MemoryManager:
        """Return the memory manager this shell drives."""
        return self._manager

    def command_names(self) -> list[str]:
        """Return all registered command names, sorted."""
        return sorted(self._commands)

    def execute(self, command: str) -> str:
        """Parse and execute one command line.

        Args:
            command: The raw command string (e.g. "alloc 3").

        Returns:
            The command output, or an error message.

        """
        parts = command.split()
        if not parts:
            return ""
        name, args = parts[0].lower(), parts[1:]
        handler = self._commands.get(name)
        if handler is None:
            return f"Unknown command: {name}"
        return handler(args)

    def _cmd_help(self, _args: list[str]) -> str:
        """List available commands."""
        lines = ["Available commands:"]
        lines.extend(f"  {_USAGE.get(name, name)}" for name in sorted(self._commands))
        return "\n".join(lines)

    def _cmd_alloc(self, args: list[str]) -> str:
        """Allocate pages to a new process."""
        if len(args) != 1:
            return f"Usage: {_USAGE['alloc']}"
        num_pages = _parse_int(args[0])
        if num_pages is None:
            return f"Error: invalid page count '{args[0]}'"
        try:
            pid = self._manager.allocate(num_pages)
        except PagingError as e:
            return f"Error: {e}"
        frames = self._manager.frames_for(pid)
        return f"Allocated {num_pages} pages in physical memory for process {pid} (frames {frames})"

    def _cmd_free(self, args: list[str]) -> str:
        """Deallocate a process."""
        if len(args) != 1:
            return f"Usage: {_USAGE['free']}"
        pid = _parse_int(args[0])
        if pid is None:
            return f"Error: invalid PID '{args[0]}'"
        try:
            self._manager.deallocate(pid)
        except PagingError as e:
            return f"Error: {e}"
        return f"Deallocated process {pid}"

    def _cmd_translate(self, args: list[str]) -> str:
        """Translate a logical address of a process."""
        if len(args) != 2:  # noqa: PLR2004
            return f"Usage: {_USAGE['translate']}"
        pid = _parse_int(args[0])
        if pid is None:
            return f"Error: invalid PID '{args[0]}'"
        address = _parse_int(args[1])
        if address is None:
            return f"Error: invalid address '{args[1]}'"
        try:
            physical = self._manager.translate(pid, address)
        except PagingError as e:
            return f"Error: {e}"
        return (
            f"Accessing logical address {address} for process {pid}. "
            f"Physical address: {physical}"
        )

    def _cmd_map(self, args: list[str]) -> str:
        """Show the physical memory map."""
        width: int | None = None
        if args:
            width = _parse_int(args[0])
            if width is None or width < 1:
                return f"Error: invalid width '{args[0]}'"
        return format_memory_map(self._manager.frame_map(), width=width)

    def _cmd_ps(self, _args: list[str]) -> str:
        """List processes holding memory."""
        processes = self._manager.processes()
        frames = {pid: self._manager.frames_for(pid) for pid in processes}
        return format_processes(processes, frames)

    def _cmd_stats(self, _args: list[str]) -> str:
        """Show a memory usage summary."""
        return format_stats(self._manager.stats())

    def _cmd_log(self, args: list[str]) -> str:
        """Show log entries, optionally filtered by minimum level."""
        min_level = LogLevel.INFO
        if args:
            try:
                min_level = LogLevel[args[0].upper()]
            except KeyError:
                return f"Usage: {_USAGE['log']}"
        entries = self._manager.logger.filter(min_level=min_level)
        return "\n".join(str(e) for e in entries) if entries else "No log entries."

    def _cmd_exit(self, _args: list[str]) -> str:
        """Signal the REPL to stop."""
        return self.EXIT_SENTINEL


def _parse_int(text: str) -> int | None:
    """Parse a decimal integer, returning None when it is not one."""
    try:
        return int(text)
    except ValueError:
        return None
