"""Errors raised by the paging subsystem.

Every error here is local and recoverable: the operation that raised it
left the frame store and page table exactly as they were.  Drivers catch
``PagingError`` and turn it into something a human can read.
"""


class PagingError(Exception):
    """Base class for every error raised by the paging subsystem."""


class ConfigError(PagingError, ValueError):
    """Raise when a memory geometry is not usable."""


class AllocationError(PagingError):
    """Raise when an allocation request is rejected."""


class InvalidPageCountError(AllocationError):
    """Raise when fewer than one page is requested."""


class ExceedsLogicalMemoryError(AllocationError):
    """Raise when a request is larger than the logical address space."""


class ExceedsPhysicalMemoryError(AllocationError):
    """Raise when a request needs more frames than physical memory has."""


class InsufficientContiguousSpaceError(AllocationError):
    """Raise when no run of adjacent free frames is long enough."""


class UnknownProcessError(PagingError):
    """Raise when a process id has no page table entry."""


class DuplicateProcessError(PagingError):
    """Raise when a page table entry already exists for a process.

    The manager issues fresh ids, so seeing this means a bug, not bad
    input.
    """


class InvalidAddressError(PagingError):
    """Raise when a logical address falls outside a process's pages."""
