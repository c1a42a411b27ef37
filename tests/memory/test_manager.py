"""Tests for the memory manager.

The manager hands each new process a contiguous run of frames, records
it in the page table, and translates logical addresses through that
table.  Every rejected request must leave memory exactly as it was.
"""

import pytest

from paging_sim.config import MemoryConfig
from paging_sim.logging import Logger, LogLevel
from paging_sim.memory import (
    AllocationError,
    ExceedsLogicalMemoryError,
    ExceedsPhysicalMemoryError,
    InsufficientContiguousSpaceError,
    InvalidAddressError,
    InvalidPageCountError,
    MemoryManager,
    OwnedFrame,
    PagingError,
    UnknownProcessError,
)

PAGE_SIZE = 256
LOGICAL_SIZE = 1024
PHYSICAL_SIZE = 1024
TOTAL_FRAMES = 4


def _manager(
    logical: int = LOGICAL_SIZE,
    page: int = PAGE_SIZE,
    physical: int = PHYSICAL_SIZE,
) -> MemoryManager:
    """Create a manager with the given geometry."""
    return MemoryManager(MemoryConfig(logical, page, physical))


class TestManagerCreation:
    """Verify initial state of the manager."""

    def test_capacity_is_frame_count(self) -> None:
        """Physical memory should hold size // page_size frames."""
        mm = _manager()
        assert mm.capacity_frames == TOTAL_FRAMES

    def test_capacity_truncates(self) -> None:
        """A trailing partial frame should simply not exist."""
        mm = _manager(physical=PHYSICAL_SIZE + PAGE_SIZE // 2)
        assert mm.capacity_frames == TOTAL_FRAMES
        assert mm.stats().unaddressable_bytes == PAGE_SIZE // 2

    def test_truncation_is_logged(self) -> None:
        """Unaddressable bytes should leave a warning behind."""
        mm = _manager(physical=PHYSICAL_SIZE + 1)
        warnings = mm.logger.filter(min_level=LogLevel.WARNING)
        assert len(warnings) == 1
        assert "unaddressable" in warnings[0].message

    def test_even_geometry_logs_nothing(self) -> None:
        """A clean geometry should start with an empty log."""
        mm = _manager()
        assert mm.logger.entries == []

    def test_all_frames_free(self) -> None:
        """Every frame should start free."""
        mm = _manager()
        assert mm.frame_map() == (None,) * TOTAL_FRAMES
        assert mm.processes() == {}

    def test_shared_logger_is_used(self) -> None:
        """A logger passed in should receive the manager's events."""
        logger = Logger()
        mm = MemoryManager(MemoryConfig(LOGICAL_SIZE, PAGE_SIZE, PHYSICAL_SIZE), logger=logger)
        mm.allocate(1)
        assert mm.logger is logger
        assert len(logger) == 1


class TestAllocate:
    """Verify successful allocations."""

    def test_first_pid_is_one(self) -> None:
        """Process ids should start at 1."""
        mm = _manager()
        assert mm.allocate(2) == 1

    def test_pids_strictly_increase(self) -> None:
        """Each successful allocation should get a larger id."""
        mm = _manager()
        pids = [mm.allocate(1) for _ in range(TOTAL_FRAMES)]
        assert pids == [1, 2, 3, 4]

    def test_pids_never_reused(self) -> None:
        """A freed id should not be handed out again."""
        mm = _manager()
        first = mm.allocate(1)
        mm.deallocate(first)
        second = mm.allocate(1)
        assert second > first

    def test_frames_are_first_fit(self) -> None:
        """Allocations should pack from frame 0 upwards."""
        mm = _manager()
        a = mm.allocate(2)
        b = mm.allocate(1)
        assert mm.frames_for(a) == [0, 1]
        assert mm.frames_for(b) == [2]

    def test_frames_are_tagged(self) -> None:
        """Each frame should record its process and page."""
        mm = _manager()
        pid = mm.allocate(2)
        frame_map = mm.frame_map()
        assert frame_map[0] == OwnedFrame(pid=pid, page=0)
        assert frame_map[1] == OwnedFrame(pid=pid, page=1)
        assert frame_map[2] is None

    def test_exactly_logical_limit(self) -> None:
        """A request that exactly fills the logical space is accepted."""
        mm = _manager()
        pid = mm.allocate(LOGICAL_SIZE // PAGE_SIZE)
        assert mm.frames_for(pid) == [0, 1, 2, 3]

    def test_processes_reports_page_counts(self) -> None:
        """The process listing should show each process's size."""
        mm = _manager()
        a = mm.allocate(2)
        b = mm.allocate(1)
        assert mm.processes() == {a: 2, b: 1}

    def test_allocation_is_logged(self) -> None:
        """A successful allocation should be logged at INFO."""
        mm = _manager()
        pid = mm.allocate(2)
        entries = mm.logger.filter(pid=pid)
        assert len(entries) == 1
        assert entries[0].level is LogLevel.INFO
        assert "Allocated 2 pages" in entries[0].message


class TestAllocateRejections:
    """Verify that rejected allocations change nothing."""

    def test_exceeds_logical_memory(self) -> None:
        """A request larger than the logical space should be rejected."""
        mm = _manager(logical=512)
        with pytest.raises(ExceedsLogicalMemoryError, match="logical memory"):
            mm.allocate(3)

    def test_logical_check_comes_first(self) -> None:
        """Too big for both spaces reports the logical limit."""
        mm = _manager(logical=512, physical=512)
        with pytest.raises(ExceedsLogicalMemoryError):
            mm.allocate(5)

    def test_exceeds_physical_memory(self) -> None:
        """More pages than frames should be rejected."""
        mm = _manager(logical=4096)
        with pytest.raises(ExceedsPhysicalMemoryError, match="physical memory"):
            mm.allocate(TOTAL_FRAMES + 1)

    def test_insufficient_contiguous_space(self) -> None:
        """Enough free frames but no adjacent run should be rejected."""
        mm = _manager()
        mm.allocate(1)
        middle = mm.allocate(1)
        mm.allocate(1)
        # Frames now [P, P, P, free]; freeing the middle leaves two
        # free frames that are not adjacent.
        mm.deallocate(middle)
        with pytest.raises(InsufficientContiguousSpaceError, match="contiguous"):
            mm.allocate(2)

    @pytest.mark.parametrize("num_pages", [0, -1])
    def test_invalid_page_count(self, num_pages: int) -> None:
        """Fewer than one page is never a valid request."""
        mm = _manager()
        with pytest.raises(InvalidPageCountError):
            mm.allocate(num_pages)

    def test_rejections_share_a_base(self) -> None:
        """Every allocation failure should be an AllocationError."""
        mm = _manager()
        with pytest.raises(AllocationError):
            mm.allocate(TOTAL_FRAMES + 1)
        with pytest.raises(PagingError):
            mm.allocate(0)

    def test_rejection_leaves_state_untouched(self) -> None:
        """Frames, page table and stats should be unchanged after a rejection."""
        mm = _manager()
        pid = mm.allocate(2)
        before_map = mm.frame_map()
        before_stats = mm.stats()
        for num_pages in (0, 3, TOTAL_FRAMES + 1):
            with pytest.raises(AllocationError):
                mm.allocate(num_pages)
        assert mm.frame_map() == before_map
        assert mm.stats() == before_stats
        assert mm.processes() == {pid: 2}

    def test_rejection_does_not_consume_pid(self) -> None:
        """A failed allocation should not burn a process id."""
        mm = _manager()
        with pytest.raises(AllocationError):
            mm.allocate(TOTAL_FRAMES + 1)
        assert mm.allocate(1) == 1

    def test_rejection_is_logged(self) -> None:
        """A rejected allocation should be logged as a warning."""
        mm = _manager()
        with pytest.raises(AllocationError):
            mm.allocate(TOTAL_FRAMES + 1)
        warnings = mm.logger.filter(min_level=LogLevel.WARNING)
        assert len(warnings) == 1


class TestDeallocate:
    """Verify freeing processes."""

    def test_deallocate_frees_frames(self) -> None:
        """Freed frames should become free again."""
        mm = _manager()
        pid = mm.allocate(3)
        mm.deallocate(pid)
        assert mm.frame_map() == (None,) * TOTAL_FRAMES
        assert not mm.contains(pid)

    def test_deallocate_only_affects_target(self) -> None:
        """Other processes should keep their frames."""
        mm = _manager()
        a = mm.allocate(1)
        b = mm.allocate(2)
        mm.deallocate(a)
        assert mm.frames_for(b) == [1, 2]
        assert mm.frame_map()[1] == OwnedFrame(pid=b, page=0)

    def test_deallocate_unknown_raises(self) -> None:
        """Freeing an id that was never allocated should raise."""
        mm = _manager()
        with pytest.raises(UnknownProcessError, match="not found"):
            mm.deallocate(99)

    def test_double_deallocate_raises_without_corruption(self) -> None:
        """The second free should fail and leave frames free."""
        mm = _manager()
        pid = mm.allocate(2)
        other = mm.allocate(1)
        mm.deallocate(pid)
        with pytest.raises(UnknownProcessError):
            mm.deallocate(pid)
        assert mm.frame_map()[:2] == (None, None)
        assert mm.frames_for(other) == [2]

    def test_frames_for_after_deallocate_raises(self) -> None:
        """A freed process has no frames to report."""
        mm = _manager()
        pid = mm.allocate(1)
        mm.deallocate(pid)
        with pytest.raises(UnknownProcessError):
            mm.frames_for(pid)


class TestTranslate:
    """Verify logical to physical address translation."""

    def test_round_trip_every_address(self) -> None:
        """Each address should map to frame * page_size + offset."""
        mm = _manager()
        mm.allocate(1)
        pid = mm.allocate(2)
        frames = mm.frames_for(pid)
        for address in range(2 * PAGE_SIZE):
            expected = frames[address // PAGE_SIZE] * PAGE_SIZE + address % PAGE_SIZE
            assert mm.translate(pid, address) == expected

    def test_translate_known_values(self) -> None:
        """Spot-check a process that does not start at frame 0."""
        mm = _manager()
        mm.allocate(1)
        pid = mm.allocate(2)  # frames [1, 2]
        assert mm.translate(pid, 0) == PAGE_SIZE
        assert mm.translate(pid, 300) == 2 * PAGE_SIZE + 44

    def test_last_byte_is_valid(self) -> None:
        """The final byte of the last page should translate."""
        mm = _manager()
        pid = mm.allocate(2)
        assert mm.translate(pid, 2 * PAGE_SIZE - 1) == 2 * PAGE_SIZE - 1

    def test_one_past_the_end_is_invalid(self) -> None:
        """The first byte after the last page should be rejected."""
        mm = _manager()
        pid = mm.allocate(2)
        with pytest.raises(InvalidAddressError, match="Invalid logical address"):
            mm.translate(pid, 2 * PAGE_SIZE)

    @pytest.mark.parametrize("address", [-1, -PAGE_SIZE, -(10 * PAGE_SIZE)])
    def test_negative_address_is_invalid(self, address: int) -> None:
        """Negative addresses should never wrap around to a real frame."""
        mm = _manager()
        pid = mm.allocate(2)
        with pytest.raises(InvalidAddressError):
            mm.translate(pid, address)

    def test_unknown_process(self) -> None:
        """Translating for an absent process should raise."""
        mm = _manager()
        with pytest.raises(UnknownProcessError):
            mm.translate(1, 0)

    def test_after_deallocate(self) -> None:
        """A freed process can no longer translate."""
        mm = _manager()
        pid = mm.allocate(1)
        mm.deallocate(pid)
        with pytest.raises(UnknownProcessError):
            mm.translate(pid, 0)

    def test_translation_logged_at_debug(self) -> None:
        """Successful translations should only appear at DEBUG."""
        mm = _manager()
        pid = mm.allocate(1)
        mm.translate(pid, 5)
        debug = [e for e in mm.logger.entries if e.level is LogLevel.DEBUG]
        assert len(debug) == 1
        assert "physical 5" in debug[0].message


class TestStats:
    """Verify the usage summary."""

    def test_stats_track_usage(self) -> None:
        """Stats should reflect allocations and frees."""
        mm = _manager()
        pid = mm.allocate(3)
        stats = mm.stats()
        assert stats.total_frames == TOTAL_FRAMES
        assert stats.used_frames == 3
        assert stats.free_frames == 1
        assert stats.processes == 1
        mm.deallocate(pid)
        assert mm.stats().used_frames == 0


class TestScenario:
    """Walk through a complete allocate / free / reallocate sequence."""

    def test_fragmentation_then_reuse(self) -> None:
        """Four frames: 2 pages fit, 3 more do not, freeing makes room."""
        mm = _manager()

        first = mm.allocate(2)
        assert first == 1
        assert mm.frames_for(first) == [0, 1]

        with pytest.raises(InsufficientContiguousSpaceError):
            mm.allocate(3)

        mm.deallocate(first)
        second = mm.allocate(3)
        assert second == 2
        assert mm.frames_for(second) == [0, 1, 2]
