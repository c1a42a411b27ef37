"""Tests for the page table.

The page table maps each process id to the ordered list of frames that
hold its logical pages.  Entries are created and removed wholesale.
"""

import pytest

from paging_sim.memory.errors import DuplicateProcessError, UnknownProcessError
from paging_sim.memory.page_table import PageTable

PID = 1
FRAMES = [4, 5, 6]


class TestInsertAndLookup:
    """Verify recording and reading entries."""

    def test_lookup_returns_frames_in_order(self) -> None:
        """Lookup should return the frames exactly as inserted."""
        table = PageTable()
        table.insert(PID, FRAMES)
        assert table.lookup(PID) == tuple(FRAMES)

    def test_lookup_is_immutable(self) -> None:
        """Mutating the inserted list should not change the entry."""
        frames = list(FRAMES)
        table = PageTable()
        table.insert(PID, frames)
        frames.append(99)
        assert table.lookup(PID) == tuple(FRAMES)

    def test_contains(self) -> None:
        """Contains should reflect whether an entry exists."""
        table = PageTable()
        assert not table.contains(PID)
        table.insert(PID, FRAMES)
        assert table.contains(PID)
        assert PID in table

    def test_duplicate_insert_raises(self) -> None:
        """A second entry for the same process is an invariant violation."""
        table = PageTable()
        table.insert(PID, FRAMES)
        with pytest.raises(DuplicateProcessError, match="already has"):
            table.insert(PID, [0])
        assert table.lookup(PID) == tuple(FRAMES)

    def test_lookup_unknown_raises(self) -> None:
        """Looking up an absent process should raise."""
        table = PageTable()
        with pytest.raises(UnknownProcessError, match="not found"):
            table.lookup(PID)

    def test_pids_in_insertion_order(self) -> None:
        """Process ids should come back oldest first."""
        table = PageTable()
        table.insert(3, [0])
        table.insert(1, [1])
        assert table.pids() == [3, 1]
        assert len(table) == 2


class TestRemove:
    """Verify removing entries."""

    def test_remove_returns_frames(self) -> None:
        """Remove should hand back the frames it deleted."""
        table = PageTable()
        table.insert(PID, FRAMES)
        assert table.remove(PID) == tuple(FRAMES)
        assert not table.contains(PID)

    def test_remove_unknown_raises(self) -> None:
        """Removing an absent process should raise."""
        table = PageTable()
        with pytest.raises(UnknownProcessError):
            table.remove(PID)

    def test_remove_twice_raises(self) -> None:
        """The second remove of the same process should raise."""
        table = PageTable()
        table.insert(PID, FRAMES)
        table.remove(PID)
        with pytest.raises(UnknownProcessError):
            table.remove(PID)

    def test_reinsert_after_remove(self) -> None:
        """Once removed, the id may be recorded again."""
        table = PageTable()
        table.insert(PID, FRAMES)
        table.remove(PID)
        table.insert(PID, [0])
        assert table.lookup(PID) == (0,)
