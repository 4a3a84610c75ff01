"""Pytest configuration and fixtures for byki-admin.

HTTP tests run the real FastAPI app against an in-memory Firestore fake
(tests.fakes). Lifespan is not run by ASGITransport, so the app.state
wiring it would do is set up here instead.
"""

import os

os.environ.setdefault("SECRET_KEY", "test-secret-key-for-pytest-only-0123456789")
os.environ.setdefault("BUSINESS_TIMEZONE", "Asia/Kuala_Lumpur")

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from byki_admin.api.websocket.manager import ConnectionManager
from byki_admin.core.config import get_settings
from byki_admin.core.limiter import limiter
from byki_admin.core.state import AppStateStore, AuthState
from byki_admin.domain.entities import AdminUser
from byki_admin.domain.enums import UserRole
from byki_admin.infrastructure.firebase.realtime import SubscriptionHub
from byki_admin.infrastructure.firebase.store import DocumentStore
from byki_admin.infrastructure.security.jwt import create_session_token
from byki_admin.main import create_app
from tests.fakes import FakeFirestore

get_settings.cache_clear()
limiter.enabled = False


@pytest.fixture
def fake_db() -> FakeFirestore:
    return FakeFirestore()


@pytest.fixture
def store(fake_db: FakeFirestore) -> DocumentStore:
    return DocumentStore(fake_db, SubscriptionHub(poll_interval=0.01))


@pytest.fixture
def app(store: DocumentStore) -> FastAPI:
    """Fresh app per test with the fake store wired the way lifespan would."""
    application = create_app()
    application.state.document_store = store
    application.state.storage = None
    application.state.auth_client = None
    application.state.app_state = AppStateStore()
    application.state.ws_manager = ConnectionManager()
    return application


@pytest.fixture
async def client(app: FastAPI) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def admin() -> AdminUser:
    return AdminUser(
        uid="admin-1", email="ops@byki.my", name="Ops Admin", role=UserRole.ADMIN
    )


@pytest.fixture
def admin_token(app: FastAPI, admin: AdminUser) -> str:
    """Token of a signed-in session registered in the app's state store."""
    app.state.app_state.set_session("session-1", AuthState().signed_in(admin))
    return create_session_token(admin, "session-1")


@pytest.fixture
def auth_headers(admin_token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {admin_token}"}
