"""Interactive REPL (Read-Eval-Print Loop) for the paging simulator.

The REPL builds a memory manager from three sizes, then enters the
classic loop:

    1. **Read** — display a prompt and read a command.
    2. **Eval** — pass the command to ``shell.execute()``.
    3. **Print** — display the result.
    4. **Loop** — repeat until the shell returns the exit sentinel.

Sizes come from the command line (``paging-sim 1024 256 1024``) or, when
absent, are prompted for one at a time.  The helpers here are pure and
testable; ``run()`` is the I/O entrypoint.
"""

import readline
import sys
from collections.abc import Callable, Sequence

from paging_sim import __version__
from paging_sim.completer import Completer
from paging_sim.config import MemoryConfig
from paging_sim.display import format_stats
from paging_sim.memory.errors import ConfigError
from paging_sim.memory.manager import MemoryManager
from paging_sim.shell import Shell

PROMPT = "paging $ "
_BANNER_WIDTH = 38
_SIZE_PROMPTS = (
    "Enter logical memory size: ",
    "Enter page size: ",
    "Enter physical memory size: ",
)


def format_banner(manager: MemoryManager) -> str:
    """Format the start-up banner for a freshly built manager."""
    border = "=" * _BANNER_WIDTH
    header = f"\n  {border}\n          paging-sim v{__version__}\n    A paged memory simulator\n  {border}\n\n"
    body = f"  {format_stats(manager.stats())}\n"
    footer = "\nType 'help' for commands, 'exit' to quit.\n"
    return header + body + footer


def read_config(argv: Sequence[str], ask: Callable[[str], str] = input) -> MemoryConfig:
    """Build a config from ``argv``, prompting for the sizes if none are given.

    Args:
        argv: Command-line arguments after the program name.
        ask: Prompt function (``input`` by default; replaced in tests).

    Returns:
        The validated memory configuration.

    Raises:
        ConfigError: If the sizes are missing, malformed or non-positive.

    """
    args = list(argv) if argv else [ask(prompt).strip() for prompt in _SIZE_PROMPTS]
    return MemoryConfig.from_args(args)


def run(argv: Sequence[str] | None = None) -> int:
    """Build a manager and run the interactive REPL.

    Handles Ctrl+C and Ctrl+D as a graceful exit.

    Returns:
        The process exit status: 0 on a normal exit, 2 on a bad config.

    """
    args = sys.argv[1:] if argv is None else argv
    try:
        config = read_config(args)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)  # noqa: T201
        return 2
    except (EOFError, KeyboardInterrupt):
        print()  # noqa: T201
        return 0

    manager = MemoryManager(config)
    shell = Shell(manager=manager)

    completer = Completer(shell)
    readline.set_completer(completer.complete)
    readline.set_completer_delims(" \t")
    readline.parse_and_bind("tab: complete")

    print(format_banner(manager))  # noqa: T201

    try:
        while True:
            try:
                command = input(PROMPT)
            except EOFError:
                # Ctrl+D — graceful exit
                print()  # noqa: T201
                break

            result = shell.execute(command)
            if result == Shell.EXIT_SENTINEL:
                break
            if result:
                print(result)  # noqa: T201

    except KeyboardInterrupt:
        print("\nInterrupted.")  # noqa: T201

    print("Simulation ended.")  # noqa: T201
    return 0


def main() -> None:
    """Console entry point for ``paging-sim``."""
    sys.exit(run())
