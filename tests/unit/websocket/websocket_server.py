"""End-to-end tests for the FastAPI app using the test client."""

from __future__ import annotations

import time

import pytest
from fastapi import WebSocketDisconnect
from fastapi.testclient import TestClient

from groupchat import server
from groupchat.config.websocket import WS_CLOSE_POLICY_CODE
from groupchat.runtime import build_runtime_deps


@pytest.fixture
def client(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(server, "build_runtime_deps", lambda: build_runtime_deps(socket_enabled=False))
    with TestClient(server.app) as test_client:
        yield test_client


def _wait_for_sessions(client: TestClient, count: int, timeout: float = 2.0) -> None:
    deadline = time.monotonic() + timeout
    while client.get("/healthz").json()["sessions"] != count:
        if time.monotonic() >= deadline:
            raise AssertionError(f"expected {count} sessions")
        time.sleep(0.01)


def _user_records(ws, count: int) -> list[dict]:
    records: list[dict] = []
    while len(records) < count:
        record = ws.receive_json()
        if not record["isSystem"]:
            records.append(record)
    return records


def _next_system_record(ws, text: str) -> dict:
    while True:
        record = ws.receive_json()
        if record["isSystem"] and record["message"] == text:
            return record


def test_health_endpoints_report_status(client: TestClient) -> None:
    body = client.get("/healthz").json()

    assert body["status"] == "ok"
    assert body["sessions"] == 0
    assert body["connections"]["active"] == 0
    assert client.get("/").json()["status"] == "ok"
    assert client.get("/favicon.ico").status_code == 204


def test_two_clients_chat_over_websocket(client: TestClient) -> None:
    with client.websocket_connect("/ws") as alice, client.websocket_connect("/ws") as bob:
        alice.send_json({"username": "alice", "color": "#ff0000"})
        bob.send_json({"username": "bob", "color": "#0000ff"})
        _wait_for_sessions(client, 2)

        alice.send_json({"username": "alice", "message": "hello <b>", "color": "#ff0000", "isSystem": False})

        expected = {"username": "alice", "message": "hello &lt;b>", "color": "#ff0000", "isSystem": False}
        assert _user_records(bob, 1) == [expected]
        assert _user_records(alice, 1) == [expected]


def test_duplicate_username_is_refused_with_policy_close(client: TestClient) -> None:
    with client.websocket_connect("/ws") as alice:
        alice.send_json({"username": "alice"})
        _wait_for_sessions(client, 1)

        with client.websocket_connect("/ws") as impostor:
            impostor.send_json({"username": "alice", "color": "#000000"})
            notice = impostor.receive_json()
            assert notice["isSystem"]
            assert notice["message"] == "Username 'alice' is already taken."
            with pytest.raises(WebSocketDisconnect) as exc_info:
                impostor.receive_json()
            assert exc_info.value.code == WS_CLOSE_POLICY_CODE

        assert client.get("/healthz").json()["sessions"] == 1


def test_invalid_frame_keeps_session_open(client: TestClient) -> None:
    with client.websocket_connect("/ws") as alice:
        alice.send_json({"username": "alice"})
        _wait_for_sessions(client, 1)

        alice.send_text("not json")
        notice = _next_system_record(alice, "Message must be valid JSON.")
        assert notice == {
            "username": "System",
            "message": "Message must be valid JSON.",
            "color": "#00FF00",
            "isSystem": True,
        }

        alice.send_json({"message": "still here"})
        assert _user_records(alice, 1)[0]["message"] == "still here"


def test_disconnect_removes_session(client: TestClient) -> None:
    with client.websocket_connect("/ws") as alice:
        alice.send_json({"username": "alice"})
        _wait_for_sessions(client, 1)

    _wait_for_sessions(client, 0)
