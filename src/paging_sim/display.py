"""Text rendering of memory state.

These helpers are pure: they take snapshots from the manager and return
strings, so the shell, the REPL and the web UI all show the same thing.

A memory map looks like this (4 frames, width 4)::

    frame  0    1    2    3
        0  P1:0 P1:1 .    .
"""

from collections.abc import Sequence

from paging_sim.memory.frames import FrameState
from paging_sim.memory.manager import MemoryStats

FREE_MARKER = "."
_HEADER_LABEL = "frame"


def format_cell(state: FrameState) -> str:
    """Return ``.`` for a free frame or ``P<pid>:<page>`` for an owned one."""
    return FREE_MARKER if state is None else str(state)


def format_memory_map(snapshot: Sequence[FrameState], *, width: int | None = None) -> str:
    """Render frames as rows of fixed-width cells.

    Args:
        snapshot: Frame states in index order.
        width: Cells per row.  Defaults to the total frame count, which
            puts all of memory on a single row.

    Returns:
        A header line of frame offsets followed by one line per row,
        each prefixed with the index of its first frame.

    Raises:
        ValueError: If width is less than 1.

    """
    if not snapshot:
        return "(no physical frames)"
    row_width = len(snapshot) if width is None else width
    if row_width < 1:
        msg = f"Row width must be at least 1, got {row_width}"
        raise ValueError(msg)

    cells = [format_cell(state) for state in snapshot]
    cell_width = max(len(cell) for cell in [*cells, str(row_width - 1)])
    label_width = max(len(_HEADER_LABEL), len(str(len(cells) - 1)))

    header = " ".join(str(col).ljust(cell_width) for col in range(min(row_width, len(cells))))
    lines = [f"{_HEADER_LABEL.rjust(label_width)}  {header}".rstrip()]
    for start in range(0, len(cells), row_width):
        row = " ".join(cell.ljust(cell_width) for cell in cells[start : start + row_width])
        lines.append(f"{str(start).rjust(label_width)}  {row}".rstrip())
    return "\n".join(lines)


def format_stats(stats: MemoryStats) -> str:
    """Render a one-line usage summary."""
    line = (
        f"frames: {stats.used_frames}/{stats.total_frames} used, "
        f"{stats.free_frames} free | processes: {stats.processes} | "
        f"page size: {stats.page_size}"
    )
    if stats.unaddressable_bytes:
        line += f" | unaddressable: {stats.unaddressable_bytes} bytes"
    return line


def format_processes(processes: dict[int, int], frames: dict[int, list[int]]) -> str:
    """Render a process table: pid, page count and frames."""
    if not processes:
        return "No processes."
    lines = ["PID  PAGES  FRAMES"]
    for pid, pages in processes.items():
        frame_list = ", ".join(str(f) for f in frames.get(pid, []))
        lines.append(f"{str(pid).ljust(4)} {str(pages).ljust(6)} {frame_list}")
    return "\n".join(lines)
