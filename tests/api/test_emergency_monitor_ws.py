"""Live emergency monitor over WebSocket (TestClient drives the socket)."""

from datetime import UTC, datetime

import pytest
from fastapi import FastAPI
from starlette.testclient import TestClient
from starlette.websockets import WebSocketDisconnect

from tests.fakes import FakeFirestore

CREATED = datetime(2024, 3, 1, 9, 0, tzinfo=UTC)
MONITOR = "/api/v1/ws/emergencies"


def _pending(minute: int) -> dict:
    return {
        "userId": "u1",
        "status": "pending",
        "type": "flatTyre",
        "createdAt": CREATED.replace(minute=minute),
    }


def _receive_type(ws, frame_type: str) -> dict:
    """Skip frames until one of ``frame_type`` arrives."""
    for _ in range(50):
        frame = ws.receive_json()
        if frame["type"] == frame_type:
            return frame
    raise AssertionError(f"No {frame_type!r} frame received")


def test_monitor_requires_token(app: FastAPI) -> None:
    client = TestClient(app)
    with pytest.raises(WebSocketDisconnect) as exc:
        with client.websocket_connect(MONITOR) as ws:
            ws.receive_json()
    assert exc.value.code == 1008


def test_monitor_rejects_invalid_token(app: FastAPI) -> None:
    client = TestClient(app)
    with pytest.raises(WebSocketDisconnect) as exc:
        with client.websocket_connect(f"{MONITOR}?token=garbage") as ws:
            ws.receive_json()
    assert exc.value.code == 1008


def test_monitor_rejects_signed_out_session(app: FastAPI, admin_token: str) -> None:
    app.state.app_state.end_session("session-1")
    client = TestClient(app)
    with pytest.raises(WebSocketDisconnect) as exc:
        with client.websocket_connect(f"{MONITOR}?token={admin_token}") as ws:
            ws.receive_json()
    assert exc.value.code == 1008


def test_monitor_without_store_closes(app: FastAPI, admin_token: str) -> None:
    app.state.document_store = None
    client = TestClient(app)
    with pytest.raises(WebSocketDisconnect) as exc:
        with client.websocket_connect(f"{MONITOR}?token={admin_token}") as ws:
            ws.receive_json()
    assert exc.value.code == 1011


def test_monitor_pushes_list_then_alerts_on_new_pending(
    app: FastAPI, fake_db: FakeFirestore, admin_token: str
) -> None:
    fake_db.seed("emergency_requests", "e1", _pending(1))
    fake_db.seed(
        "emergency_requests",
        "e0",
        {**_pending(0), "status": "completed"},
    )
    fake_db.seed("users", "u1", {"name": "Siti", "phoneNumber": "+60123456789"})
    client = TestClient(app)

    with client.websocket_connect(f"{MONITOR}?token={admin_token}") as ws:
        first = ws.receive_json()
        assert first["type"] == "emergencies"
        assert [e["id"] for e in first["items"]] == ["e1"]
        assert first["items"][0]["user_name"] == "Siti"

        fake_db.seed("emergency_requests", "e2", _pending(2))

        listing = _receive_type(ws, "emergencies")
        assert [e["id"] for e in listing["items"]] == ["e2", "e1"]
        alert = ws.receive_json()
        assert alert["type"] == "emergency_alert"
        assert alert["pending_count"] == 2
        assert alert["notification"]["type"] == "error"
        assert alert["notification"]["message"] == "NEW EMERGENCY!"
        assert ws.receive_json() == {
            "type": "play_sound",
            "url": "/sounds/emergency-alert.mp3",
        }

    messages = [n.message for n in app.state.app_state.state.ui.notifications]
    assert messages == ["NEW EMERGENCY!"]


def test_monitor_does_not_alert_when_pending_drops(
    app: FastAPI, fake_db: FakeFirestore, admin_token: str
) -> None:
    fake_db.seed("emergency_requests", "e1", _pending(1))
    fake_db.seed("emergency_requests", "e2", _pending(2))
    client = TestClient(app)

    with client.websocket_connect(f"{MONITOR}?token={admin_token}") as ws:
        assert len(ws.receive_json()["items"]) == 2

        fake_db.docs("emergency_requests")["e2"]["status"] = "arrived"

        listing = _receive_type(ws, "emergencies")
        assert [e["status"] for e in listing["items"]] == ["arrived", "pending"]

    assert app.state.app_state.state.ui.notifications == ()


def test_monitor_reports_query_errors(
    app: FastAPI, fake_db: FakeFirestore, admin_token: str
) -> None:
    fake_db.fail_ordered_queries = True
    client = TestClient(app)

    with client.websocket_connect(f"{MONITOR}?token={admin_token}") as ws:
        frame = ws.receive_json()
        assert frame == {"type": "error", "message": "Live emergency query failed"}


def test_status_counts_open_monitors(
    app: FastAPI, fake_db: FakeFirestore, admin_token: str
) -> None:
    client = TestClient(app)
    headers = {"Authorization": f"Bearer {admin_token}"}

    with client.websocket_connect(f"{MONITOR}?token={admin_token}") as ws:
        ws.receive_json()
        response = client.get("/api/v1/ws/status", headers=headers)
        assert response.json() == {"total_connections": 1, "admins": 1}
