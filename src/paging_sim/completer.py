"""Tab completer for the paging simulator shell.

The completer separates **what to complete** (pure logic, testable) from
**how to wire it** (readline integration in the REPL).  The first word
completes to a command name; the argument of ``free`` and ``translate``
completes to a live process id; the argument of ``log`` completes to a
level name.
"""

from __future__ import annotations

import readline
from typing import TYPE_CHECKING

from paging_sim.logging import LogLevel

if TYPE_CHECKING:
    from paging_sim.shell import Shell

# Commands whose first argument is a process id.
_PID_COMMANDS: frozenset[str] = frozenset(["free", "translate"])


class Completer:
    """Command and argument completer for a shell."""

    def __init__(self, shell: Shell) -> None:
        """Create a completer attached to a shell instance."""
        self._shell = shell

    def complete(self, text: str, state: int) -> str | None:
        """Readline callback — return the *state*-th candidate for *text*."""
        candidates = self.completions(text, readline.get_line_buffer())
        return candidates[state] if state < len(candidates) else None

    def completions(self, text: str, line: str) -> list[str]:
        """Return candidates for the word being typed.

        Args:
            text: The partial word being completed.
            line: The whole input line so far.

        Returns:
            Sorted candidates that start with ``text``.

        """
        words = line.split()
        completing_first = not words or (len(words) == 1 and not line.endswith(" "))
        if completing_first:
            pool = self._shell.command_names()
        else:
            pool = self._argument_pool(words[0].lower(), words, line)
        return sorted(c for c in pool if c.startswith(text))

    def _argument_pool(self, command: str, words: list[str], line: str) -> list[str]:
        """Return every candidate for an argument of ``command``."""
        arg_index = len(words) - 1 if not line.endswith(" ") else len(words)
        if arg_index != 1:
            return []
        if command in _PID_COMMANDS:
            return [str(pid) for pid in self._shell.manager.processes()]
        if command == "log":
            return [level.name.lower() for level in LogLevel]
        return []
