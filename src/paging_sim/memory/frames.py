"""Frame store — the physical side of paged memory.

Physical memory is a flat array of fixed-size **frames**.  Each frame
is either free or owned by exactly one (process, page) pair.  The store
knows nothing about processes beyond the owner tag written into each
frame; the page table is what maps a process back to its frames.

Allocation policy is **contiguous first-fit**: scan from frame 0 and
take the first run of adjacent free frames that is long enough.  Frames
are never scattered across gaps, so a request can fail even when the
total number of free frames would be enough (external fragmentation).

Design choices:
    - **Frame state is a frozen dataclass or None.**  ``None`` is free;
      an ``OwnedFrame`` records who holds it.  Immutable records mean a
      snapshot can hand out the states directly.
    - **Mutation only through ``mark_owned`` / ``mark_free``.**  Callers
      search first, then commit, so a batch never half-applies.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TypeAlias


@dataclass(frozen=True)
class OwnedFrame:
    """Owner tag for an allocated frame.

    Attributes:
        pid: The process that holds the frame.
        page: The logical page of that process stored in the frame.

    """

    pid: int
    page: int

    def __str__(self) -> str:
        """Format as ``P<pid>:<page>``."""
        return f"P{self.pid}:{self.page}"


# A frame is either free (None) or owned.
FrameState: TypeAlias = OwnedFrame | None


class FrameStore:
    """Fixed array of physical frames with a contiguous first-fit search."""

    def __init__(self, *, capacity: int) -> None:
        """Create a store with every frame free.

        Args:
            capacity: Number of frames in physical memory.

        Raises:
            ValueError: If capacity is negative.

        """
        if capacity < 0:
            msg = f"Frame capacity must be non-negative, got {capacity}"
            raise ValueError(msg)
        self._frames: list[FrameState] = [None] * capacity

    @property
    def capacity_frames(self) -> int:
        """Return the total number of frames."""
        return len(self._frames)

    @property
    def free_count(self) -> int:
        """Return the number of free frames."""
        return sum(1 for state in self._frames if state is None)

    @property
    def owned_count(self) -> int:
        """Return the number of owned frames."""
        return self.capacity_frames - self.free_count

    def state(self, index: int) -> FrameState:
        """Return the state of a single frame (None when free)."""
        return self._frames[index]

    def find_contiguous_free(self, num_pages: int) -> list[int] | None:
        """Find the lowest-indexed run of ``num_pages`` free frames.

        The scan walks frames in order, growing a run on each free frame
        and discarding it on each owned one.  The first run to reach the
        requested length wins.

        Args:
            num_pages: How many adjacent frames are needed.

        Returns:
            The frame indices of the run, or None if no run exists.

        """
        if num_pages < 1:
            return None
        run: list[int] = []
        for index, state in enumerate(self._frames):
            if state is not None:
                run = []
                continue
            run.append(index)
            if len(run) == num_pages:
                return run
        return None

    def mark_owned(self, frame_indices: Sequence[int], pid: int) -> None:
        """Tag each listed frame as owned by ``pid``.

        The page number of each frame is its position in ``frame_indices``.

        Args:
            frame_indices: Frames to claim, in logical page order.
            pid: The owning process.

        """
        for page, index in enumerate(frame_indices):
            self._frames[index] = OwnedFrame(pid=pid, page=page)

    def mark_free(self, frame_indices: Sequence[int]) -> None:
        """Return each listed frame to the free state."""
        for index in frame_indices:
            self._frames[index] = None

    def snapshot(self) -> tuple[FrameState, ...]:
        """Return the state of every frame in index order."""
        return tuple(self._frames)

    def __len__(self) -> int:
        """Return the total number of frames."""
        return len(self._frames)
