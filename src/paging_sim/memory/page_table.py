"""Page table — map each process to its ordered list of frames.

Logical page ``k`` of a process lives in ``table[pid][k]``.  The order
is the whole point: translation indexes straight into it.

A process has either no entry or one entry covering all of its pages.
There is no way to grow or shrink an entry in place; the manager removes
it wholesale on deallocation.
"""

from collections.abc import Iterable

from paging_sim.memory.errors import DuplicateProcessError, UnknownProcessError


class PageTable:
    """Map process ids to the frame indices holding their pages."""

    def __init__(self) -> None:
        """Create an empty page table."""
        self._entries: dict[int, tuple[int, ...]] = {}

    def insert(self, pid: int, frame_indices: Iterable[int]) -> None:
        """Record the frames for a new process.

        Args:
            pid: The process identifier.
            frame_indices: Frame index per logical page, in page order.

        Raises:
            DuplicateProcessError: If ``pid`` already has an entry.

        """
        if pid in self._entries:
            msg = f"Process {pid} already has a page table entry"
            raise DuplicateProcessError(msg)
        self._entries[pid] = tuple(frame_indices)

    def remove(self, pid: int) -> tuple[int, ...]:
        """Delete a process's entry and return its frames.

        Raises:
            UnknownProcessError: If ``pid`` has no entry.

        """
        try:
            return self._entries.pop(pid)
        except KeyError:
            msg = f"Process {pid} not found in page table"
            raise UnknownProcessError(msg) from None

    def lookup(self, pid: int) -> tuple[int, ...]:
        """Return the frames of a process without removing them.

        Raises:
            UnknownProcessError: If ``pid`` has no entry.

        """
        frames = self._entries.get(pid)
        if frames is None:
            msg = f"Process {pid} not found in page table"
            raise UnknownProcessError(msg)
        return frames

    def contains(self, pid: int) -> bool:
        """Return True if ``pid`` has an entry."""
        return pid in self._entries

    def pids(self) -> list[int]:
        """Return every process id, oldest entry first."""
        return list(self._entries)

    def __contains__(self, pid: object) -> bool:
        """Support ``pid in table``."""
        return pid in self._entries

    def __len__(self) -> int:
        """Return the number of processes with an entry."""
        return len(self._entries)
