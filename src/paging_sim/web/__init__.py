"""Browser-based web UI for paging-sim.

This package provides a Flask application exposing one memory manager
over HTTP.  It is an **optional** extra — install with::

    pip install paging-sim[web]

The ``create_app`` factory in ``app.py`` builds a manager and serves:

- ``GET /`` — HTML page with the memory map.
- ``POST /api/allocate`` — allocate pages to a new process.
- ``POST /api/deallocate`` — free a process.
- ``POST /api/translate`` — translate a logical address.
- ``GET /api/status`` — usage summary and process table.
- ``GET /api/map`` — per-frame state.
"""
