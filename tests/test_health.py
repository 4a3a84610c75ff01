"""Smoke tests for health and app wiring."""

from fastapi import FastAPI
from httpx import AsyncClient


async def test_health_returns_ok(client: AsyncClient) -> None:
    """GET /api/v1/health returns 200 and status ok."""
    response = await client.get("/api/v1/health")
    assert response.status_code == 200
    data = response.json()
    assert data.get("status") == "ok"


async def test_ready_reports_configured_services(client: AsyncClient) -> None:
    response = await client.get("/api/v1/health/ready")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "firestore": True, "storage": False}


async def test_ready_without_firestore(client: AsyncClient, app: FastAPI) -> None:
    app.state.document_store = None
    response = await client.get("/api/v1/health/ready")
    assert response.json()["firestore"] is False


async def test_root_returns_html(client: AsyncClient) -> None:
    """GET / returns HTML landing page."""
    response = await client.get("/")
    assert response.status_code == 200
    assert "text/html" in response.headers.get("content-type", "")
    assert "byki-admin" in response.text


async def test_request_id_is_generated(client: AsyncClient) -> None:
    response = await client.get("/api/v1/health")
    assert len(response.headers["X-Request-ID"]) == 36


async def test_request_id_is_echoed_when_well_formed(client: AsyncClient) -> None:
    response = await client.get(
        "/api/v1/health", headers={"X-Request-ID": "dash-req_42"}
    )
    assert response.headers["X-Request-ID"] == "dash-req_42"


async def test_malformed_request_id_is_replaced(client: AsyncClient) -> None:
    response = await client.get(
        "/api/v1/health", headers={"X-Request-ID": "bad id with spaces"}
    )
    assert response.headers["X-Request-ID"] != "bad id with spaces"
