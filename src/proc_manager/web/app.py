"""Flask application factory for the process manager API.

The manager assumes one caller at a time.  Flask may serve requests on
several threads, so every request that touches the manager holds a
single lock for its whole duration.
"""

from __future__ import annotations

import threading

from flask import Flask, Response, jsonify, request

from proc_manager.manager import ProcessManager
from proc_manager.shell import Shell

_HTTP_BAD_REQUEST = 400


def create_app(manager: ProcessManager | None = None) -> Flask:
    """Create and configure the Flask application.

    Args:
        manager: Registry to serve.  A fresh one is created when omitted.

    Returns:
        A configured Flask application ready to serve.

    """
    shell = Shell(manager=manager if manager is not None else ProcessManager())
    lock = threading.Lock()

    app = Flask(__name__)

    @app.route("/api/execute", methods=["POST"])
    def execute() -> tuple[Response, int] | Response:  # pyright: ignore[reportUnusedFunction]
        """Execute a shell command and return JSON output.

        Expects JSON body: ``{"command": "..."}``

        """
        data = request.get_json(silent=True)
        if not isinstance(data, dict) or not isinstance(data.get("command"), str):
            return jsonify({"error": "Missing or non-string 'command' field"}), _HTTP_BAD_REQUEST

        command: str = data["command"]
        with lock:
            result = shell.execute(command)
        if result == Shell.EXIT_SENTINEL:
            result = ""
        return jsonify({"output": result})

    @app.route("/api/state")
    def state() -> Response:  # pyright: ignore[reportUnusedFunction]
        """Return the queues and the primary-root tree.

        ``?all=1`` walks every root instead of only the primary one.
        """
        all_roots = request.args.get("all", "") in {"1", "true", "yes"}
        with lock:
            snapshot = shell.manager.show_state(all_roots=all_roots)
        return jsonify(snapshot.as_dict())

    return app


def main() -> None:
    """Run the development server.

    This is the ``proc-manager-web`` console entry point.
    """
    app = create_app()
    app.run(debug=True, port=8080)
