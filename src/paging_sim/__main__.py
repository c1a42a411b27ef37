"""Allow ``python -m paging_sim``."""

from paging_sim.repl import main

main()
