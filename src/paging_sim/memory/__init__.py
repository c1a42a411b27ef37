"""Memory subsystem — frame store, page table, and manager.

Re-exports public symbols so callers can write::

    from paging_sim.memory import MemoryManager, UnknownProcessError
"""

from paging_sim.memory.errors import (
    AllocationError,
    ConfigError,
    DuplicateProcessError,
    ExceedsLogicalMemoryError,
    ExceedsPhysicalMemoryError,
    InsufficientContiguousSpaceError,
    InvalidAddressError,
    InvalidPageCountError,
    PagingError,
    UnknownProcessError,
)
from paging_sim.memory.frames import FrameState, FrameStore, OwnedFrame
from paging_sim.memory.manager import MemoryManager, MemoryStats
from paging_sim.memory.page_table import PageTable

__all__ = [
    "AllocationError",
    "ConfigError",
    "DuplicateProcessError",
    "ExceedsLogicalMemoryError",
    "ExceedsPhysicalMemoryError",
    "FrameState",
    "FrameStore",
    "InsufficientContiguousSpaceError",
    "InvalidAddressError",
    "InvalidPageCountError",
    "MemoryManager",
    "MemoryStats",
    "OwnedFrame",
    "PageTable",
    "PagingError",
    "UnknownProcessError",
]
