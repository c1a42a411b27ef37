"""Flask application factory for the paging-sim web UI.

Every request operates on the single ``MemoryManager`` created by the
factory.  Memory errors map onto HTTP status codes:

- unknown process → 404
- rejected allocation → 409
- invalid address or malformed request → 400

Error bodies carry ``error`` (the message) and ``kind`` (the exception
class name) so a client can branch without parsing text.
"""

from __future__ import annotations

from dataclasses import asdict

from flask import Flask, Response, jsonify, render_template, request

from paging_sim.config import MemoryConfig
from paging_sim.display import format_cell, format_memory_map, format_stats
from paging_sim.memory.errors import AllocationError, PagingError, UnknownProcessError
from paging_sim.memory.manager import MemoryManager

_HTTP_BAD_REQUEST = 400
_HTTP_NOT_FOUND = 404
_HTTP_CONFLICT = 409

DEFAULT_CONFIG = MemoryConfig(logical_memory_size=4096, page_size=256, physical_memory_size=4096)


def _error(exc: PagingError) -> tuple[Response, int]:
    """Turn a memory error into a JSON response with a matching status."""
    if isinstance(exc, UnknownProcessError):
        status = _HTTP_NOT_FOUND
    elif isinstance(exc, AllocationError):
        status = _HTTP_CONFLICT
    else:
        status = _HTTP_BAD_REQUEST
    return jsonify({"error": str(exc), "kind": type(exc).__name__}), status


def _int_fields(*names: str) -> list[int] | None:
    """Read integer fields from the JSON body, or None if any is missing."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return None
    values: list[int] = []
    for name in names:
        value = data.get(name)
        if isinstance(value, bool) or not isinstance(value, int):
            return None
        values.append(value)
    return values


def _bad_request(*names: str) -> tuple[Response, int]:
    """Describe which integer fields were expected."""
    fields = ", ".join(f"'{n}'" for n in names)
    return jsonify({"error": f"Expected integer field(s) {fields}"}), _HTTP_BAD_REQUEST


def create_app(config: MemoryConfig | None = None) -> Flask:
    """Create and configure the Flask application.

    Args:
        config: Memory geometry for the manager (``DEFAULT_CONFIG`` if None).

    Returns:
        A configured Flask application ready to serve.

    """
    manager = MemoryManager(config if config is not None else DEFAULT_CONFIG)

    app = Flask(__name__)
    app.extensions["paging_sim.manager"] = manager

    @app.route("/")
    def index() -> str:  # pyright: ignore[reportUnusedFunction]
        """Render the memory map page."""
        return render_template(
            "index.html",
            status=format_stats(manager.stats()),
            memory_map=format_memory_map(manager.frame_map()),
        )

    @app.route("/api/allocate", methods=["POST"])
    def allocate() -> tuple[Response, int] | Response:  # pyright: ignore[reportUnusedFunction]
        """Allocate pages to a new process.

        Expects JSON body: ``{"pages": n}``
        """
        fields = _int_fields("pages")
        if fields is None:
            return _bad_request("pages")
        try:
            pid = manager.allocate(fields[0])
        except PagingError as e:
            return _error(e)
        return jsonify({"pid": pid, "frames": manager.frames_for(pid)})

    @app.route("/api/deallocate", methods=["POST"])
    def deallocate() -> tuple[Response, int] | Response:  # pyright: ignore[reportUnusedFunction]
        """Free a process.

        Expects JSON body: ``{"pid": n}``
        """
        fields = _int_fields("pid")
        if fields is None:
            return _bad_request("pid")
        try:
            manager.deallocate(fields[0])
        except PagingError as e:
            return _error(e)
        return jsonify({"pid": fields[0], "deallocated": True})

    @app.route("/api/translate", methods=["POST"])
    def translate() -> tuple[Response, int] | Response:  # pyright: ignore[reportUnusedFunction]
        """Translate a logical address.

        Expects JSON body: ``{"pid": n, "address": a}``
        """
        fields = _int_fields("pid", "address")
        if fields is None:
            return _bad_request("pid", "address")
        pid, address = fields
        try:
            physical = manager.translate(pid, address)
        except PagingError as e:
            return _error(e)
        return jsonify({"pid": pid, "logical_address": address, "physical_address": physical})

    @app.route("/api/status")
    def status() -> Response:  # pyright: ignore[reportUnusedFunction]
        """Return the usage summary and process table."""
        processes = manager.processes()
        return jsonify(
            {
                "stats": asdict(manager.stats()),
                "summary": format_stats(manager.stats()),
                "processes": [
                    {"pid": pid, "pages": pages, "frames": manager.frames_for(pid)}
                    for pid, pages in processes.items()
                ],
            }
        )

    @app.route("/api/map")
    def memory_map() -> Response:  # pyright: ignore[reportUnusedFunction]
        """Return the state of every frame."""
        frames = [
            {
                "frame": index,
                "pid": None if state is None else state.pid,
                "page": None if state is None else state.page,
                "label": format_cell(state),
            }
            for index, state in enumerate(manager.frame_map())
        ]
        return jsonify({"frames": frames, "text": format_memory_map(manager.frame_map())})

    return app


def main() -> None:
    """Run the web UI development server.

    This is the ``paging-sim-web`` console entry point.
    """
    app = create_app()
    app.run(debug=True, port=8080)
