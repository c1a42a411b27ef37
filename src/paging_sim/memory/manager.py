"""Memory manager — allocation, deallocation and address translation.

The manager owns the two data structures of paged memory:

- A **frame store** recording which physical frames are free and, for
  owned frames, which (process, page) holds them.
- A **page table** mapping each process id to its ordered frame list.

Allocation validates everything before touching either structure, so a
rejected request leaves no trace (not even a consumed process id)::

    1. pages * page_size <= logical memory size
    2. pages <= frames in physical memory
    3. a contiguous run of free frames exists (first-fit)
    4. issue the next process id
    5. commit to page table and frame store

Translation is plain arithmetic over the page table::

    page          = logical_address // page_size
    offset        = logical_address %  page_size
    physical addr = frames[page] * page_size + offset

Process ids come from a counter that starts at 1 and only goes up.  An
id is never handed out twice, even after its process is deallocated.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from paging_sim.logging import Logger, LogLevel
from paging_sim.memory.errors import (
    ExceedsLogicalMemoryError,
    ExceedsPhysicalMemoryError,
    InsufficientContiguousSpaceError,
    InvalidAddressError,
    InvalidPageCountError,
    UnknownProcessError,
)
from paging_sim.memory.frames import FrameState, FrameStore
from paging_sim.memory.page_table import PageTable

if TYPE_CHECKING:
    from paging_sim.config import MemoryConfig

_LOG_SOURCE = "memory"


@dataclass(frozen=True)
class MemoryStats:
    """Point-in-time summary of memory usage."""

    total_frames: int
    free_frames: int
    used_frames: int
    processes: int
    page_size: int
    unaddressable_bytes: int


class MemoryManager:
    """Allocate contiguous frames to processes and translate their addresses."""

    def __init__(self, config: MemoryConfig, *, logger: Logger | None = None) -> None:
        """Create a manager with all of physical memory free.

        Args:
            config: The memory geometry for this run.
            logger: Where to record events.  A private logger is created
                when none is given.

        """
        self._config = config
        self._logger = logger if logger is not None else Logger()
        self._frames = FrameStore(capacity=config.frame_count)
        self._page_table = PageTable()
        self._next_pid = 1
        if config.unaddressable_bytes:
            self._logger.log(
                LogLevel.WARNING,
                f"Physical memory is not a multiple of the page size; "
                f"{config.unaddressable_bytes} trailing bytes are unaddressable",
                source=_LOG_SOURCE,
            )

    @property
    def config(self) -> MemoryConfig:
        """Return the memory geometry."""
        return self._config

    @property
    def logger(self) -> Logger:
        """Return the event log."""
        return self._logger

    @property
    def page_size(self) -> int:
        """Return the page (and frame) size in bytes."""
        return self._config.page_size

    @property
    def capacity_frames(self) -> int:
        """Return the number of frames in physical memory."""
        return self._frames.capacity_frames

    def allocate(self, num_pages: int) -> int:
        """Give a new process ``num_pages`` contiguous frames.

        Args:
            num_pages: Size of the new process in pages.

        Returns:
            The id of the new process.

        Raises:
            InvalidPageCountError: If fewer than one page is requested.
            ExceedsLogicalMemoryError: If the request is larger than the
                logical address space.
            ExceedsPhysicalMemoryError: If the request has more pages than
                physical memory has frames.
            InsufficientContiguousSpaceError: If no run of free frames is
                long enough.

        """
        if num_pages < 1:
            msg = f"Cannot allocate {num_pages} pages: at least one page is required"
            self._reject(msg)
            raise InvalidPageCountError(msg)

        if num_pages * self.page_size > self._config.logical_memory_size:
            msg = (
                f"Cannot allocate {num_pages} pages: not enough logical memory "
                f"({num_pages * self.page_size} > {self._config.logical_memory_size} bytes)"
            )
            self._reject(msg)
            raise ExceedsLogicalMemoryError(msg)

        if num_pages > self.capacity_frames:
            msg = (
                f"Cannot allocate {num_pages} pages: not enough physical memory "
                f"({self.capacity_frames} frames)"
            )
            self._reject(msg)
            raise ExceedsPhysicalMemoryError(msg)

        frames = self._frames.find_contiguous_free(num_pages)
        if frames is None:
            msg = (
                f"Cannot allocate {num_pages} pages: not enough contiguous free "
                f"frames in physical memory"
            )
            self._reject(msg)
            raise InsufficientContiguousSpaceError(msg)

        pid = self._next_pid
        self._page_table.insert(pid, frames)
        self._frames.mark_owned(frames, pid)
        self._next_pid += 1
        self._logger.log(
            LogLevel.INFO,
            f"Allocated {num_pages} pages for process {pid} in frames {frames}",
            source=_LOG_SOURCE,
            pid=pid,
        )
        return pid

    def deallocate(self, pid: int) -> None:
        """Release every frame held by a process and drop its page table entry.

        Raises:
            UnknownProcessError: If the process has no entry.

        """
        try:
            frames = self._page_table.remove(pid)
        except UnknownProcessError as exc:
            self._reject(str(exc), pid=pid)
            raise
        self._frames.mark_free(frames)
        self._logger.log(
            LogLevel.INFO,
            f"Deallocated process {pid}, freed frames {list(frames)}",
            source=_LOG_SOURCE,
            pid=pid,
        )

    def translate(self, pid: int, logical_address: int) -> int:
        """Translate a process's logical address to a physical address.

        Args:
            pid: The process whose address space to use.
            logical_address: Byte offset within that address space.

        Returns:
            The physical byte address.

        Raises:
            UnknownProcessError: If the process has no entry.
            InvalidAddressError: If the address is negative or beyond the
                process's last page.

        """
        try:
            frames = self._page_table.lookup(pid)
        except UnknownProcessError as exc:
            self._reject(str(exc), pid=pid)
            raise

        # Floor division of a negative address would index from the end.
        page = logical_address // self.page_size
        if logical_address < 0 or page >= len(frames):
            msg = f"Invalid logical address {logical_address} for process {pid}"
            self._reject(msg, pid=pid)
            raise InvalidAddressError(msg)

        physical = frames[page] * self.page_size + logical_address % self.page_size
        self._logger.log(
            LogLevel.DEBUG,
            f"Process {pid}: logical {logical_address} -> physical {physical}",
            source=_LOG_SOURCE,
            pid=pid,
        )
        return physical

    def contains(self, pid: int) -> bool:
        """Return True if the process currently holds memory."""
        return self._page_table.contains(pid)

    def frames_for(self, pid: int) -> list[int]:
        """Return the frames of a process in logical page order.

        Raises:
            UnknownProcessError: If the process has no entry.

        """
        return list(self._page_table.lookup(pid))

    def processes(self) -> dict[int, int]:
        """Return a mapping of every live process id to its page count."""
        return {pid: len(self._page_table.lookup(pid)) for pid in self._page_table.pids()}

    def frame_map(self) -> tuple[FrameState, ...]:
        """Return the state of every physical frame in index order."""
        return self._frames.snapshot()

    def stats(self) -> MemoryStats:
        """Return a summary of current memory usage."""
        free = self._frames.free_count
        return MemoryStats(
            total_frames=self.capacity_frames,
            free_frames=free,
            used_frames=self.capacity_frames - free,
            processes=len(self._page_table),
            page_size=self.page_size,
            unaddressable_bytes=self._config.unaddressable_bytes,
        )

    def _reject(self, message: str, *, pid: int | None = None) -> None:
        """Record a rejected operation."""
        self._logger.log(LogLevel.WARNING, message, source=_LOG_SOURCE, pid=pid)
