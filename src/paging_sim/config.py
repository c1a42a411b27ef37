"""Memory geometry for a simulation run.

A simulation is described by three sizes, all in bytes:

- **logical_memory_size** — the largest address space one process may
  ask for.
- **page_size** — the size of a page and of a frame.
- **physical_memory_size** — the size of the shared frame array.

The geometry is fixed when the manager is built.  Physical memory that
is not a whole number of pages is truncated: the trailing partial frame
simply does not exist, and ``unaddressable_bytes`` reports how much was
lost.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from paging_sim.memory.errors import ConfigError

_FIELD_NAMES = ("logical_memory_size", "page_size", "physical_memory_size")


@dataclass(frozen=True)
class MemoryConfig:
    """Immutable sizes describing logical and physical memory."""

    logical_memory_size: int
    page_size: int
    physical_memory_size: int

    def __post_init__(self) -> None:
        """Reject sizes that cannot describe a paged memory.

        Raises:
            ConfigError: If any size is not a positive integer.

        """
        for name in _FIELD_NAMES:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                msg = f"{name} must be an integer, got {value!r}"
                raise ConfigError(msg)
            if value <= 0:
                msg = f"{name} must be positive, got {value}"
                raise ConfigError(msg)

    @property
    def frame_count(self) -> int:
        """Return how many whole frames fit in physical memory."""
        return self.physical_memory_size // self.page_size

    @property
    def max_pages(self) -> int:
        """Return how many pages fit in one logical address space."""
        return self.logical_memory_size // self.page_size

    @property
    def unaddressable_bytes(self) -> int:
        """Return the physical bytes lost to truncation."""
        return self.physical_memory_size % self.page_size

    @classmethod
    def from_args(cls, args: Sequence[str]) -> MemoryConfig:
        """Build a config from three command-line strings.

        Args:
            args: ``[logical_memory_size, page_size, physical_memory_size]``.

        Returns:
            The parsed configuration.

        Raises:
            ConfigError: If there are not exactly three integer arguments.

        """
        if len(args) != len(_FIELD_NAMES):
            msg = f"Expected {len(_FIELD_NAMES)} sizes ({', '.join(_FIELD_NAMES)}), got {len(args)}"
            raise ConfigError(msg)
        try:
            values = [int(arg) for arg in args]
        except ValueError:
            msg = f"Sizes must be integers, got {' '.join(args)}"
            raise ConfigError(msg) from None
        return cls(*values)
