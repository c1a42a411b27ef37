"""paging-sim — a paged virtual-memory simulator.

Several processes share one fixed pool of physical frames.  The
simulator allocates contiguous frames to new processes, frees them
again, and translates each process's logical addresses to physical
ones.
"""

__version__ = "0.1.0"
