"""Tests for the Flask JSON API.

Tests use ``pytest.importorskip`` so they are skipped gracefully when
Flask is not installed.
"""

from __future__ import annotations

from typing import Any

import pytest

flask = pytest.importorskip("flask")

from proc_manager.manager import ProcessManager  # noqa: E402
from proc_manager.web.app import create_app  # noqa: E402

HTTP_OK = 200
HTTP_BAD_REQUEST = 400


def _create_client(manager: ProcessManager | None = None) -> Any:
    """Create a test client from a fresh app."""
    app = create_app(manager)
    app.config["TESTING"] = True
    return app.test_client()


class TestAppCreation:
    """Verify the app factory."""

    def test_create_app_returns_flask(self) -> None:
        """create_app should return a Flask application."""
        assert isinstance(create_app(), flask.Flask)


class TestExecuteEndpoint:
    """Verify the /api/execute POST endpoint."""

    def test_create_returns_output(self) -> None:
        """A command's output comes back as JSON."""
        client = _create_client()
        response = client.post("/api/execute", json={"command": "create init"})
        assert response.status_code == HTTP_OK
        assert response.get_json() == {"output": "Created process: PID=1"}

    def test_missing_command(self) -> None:
        """A body without 'command' is rejected."""
        client = _create_client()
        response = client.post("/api/execute", json={})
        assert response.status_code == HTTP_BAD_REQUEST
        assert "error" in response.get_json()

    def test_errors_are_output(self) -> None:
        """Manager failures are reported in the output field."""
        client = _create_client()
        response = client.post("/api/execute", json={"command": "io 5"})
        assert response.get_json()["output"] == "Error: Process 5 not found"

    @pytest.mark.parametrize(
        "body",
        [{"command": 5}, {"command": None}, ["command"], "create init"],
    )
    def test_malformed_body_is_bad_request(self, body: object) -> None:
        """Non-object bodies and non-string commands are rejected with 400."""
        client = _create_client()
        response = client.post("/api/execute", json=body)
        assert response.status_code == HTTP_BAD_REQUEST
        assert "error" in response.get_json()

    def test_exit_is_ignored(self) -> None:
        """The exit sentinel is not leaked to HTTP clients."""
        client = _create_client()
        response = client.post("/api/execute", json={"command": "exit"})
        assert response.get_json() == {"output": ""}


class TestStateEndpoint:
    """Verify the /api/state GET endpoint."""

    def test_state_json(self) -> None:
        """The snapshot is returned as JSON."""
        manager = ProcessManager()
        manager.create_process("init")
        manager.create_process("shell", 1)
        manager.request_io(2)
        data = _create_client(manager).get("/api/state").get_json()
        assert data["ready"] == [{"pid": 1, "name": "init"}]
        assert data["io"] == [{"pid": 2, "name": "shell"}]
        assert [n["depth"] for n in data["tree"]] == [0, 1]

    def test_state_all_roots(self) -> None:
        """?all=1 includes orphaned roots."""
        manager = ProcessManager()
        manager.create_process("init")
        manager.create_process("shell", 1)
        manager.terminate_process(1)
        client = _create_client(manager)
        assert client.get("/api/state").get_json()["tree"] == []
        tree = client.get("/api/state?all=1").get_json()["tree"]
        assert tree == [{"pid": 2, "name": "shell", "depth": 0}]
