"""Application lifespan: startup and shutdown.

Single place for all startup/shutdown logic. Used by main.py; no business
logic here, only wiring of infrastructure (Firestore client, document
store and its live-query hub, storage and auth boundaries, app state).
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from byki_admin.api.websocket.manager import ConnectionManager
from byki_admin.core.config import get_settings
from byki_admin.core.state import AppStateStore
from byki_admin.infrastructure.firebase._rest_client import _get_credentials
from byki_admin.infrastructure.firebase.auth import FirebaseAuthClient
from byki_admin.infrastructure.firebase.client import (
    close_firebase,
    get_firestore_client,
    get_service_account,
    init_firebase,
)
from byki_admin.infrastructure.firebase.realtime import SubscriptionHub
from byki_admin.infrastructure.firebase.storage import (
    STORAGE_SCOPE,
    FirebaseStorageClient,
)
from byki_admin.infrastructure.firebase.store import DocumentStore
from byki_admin.shared.telemetry.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup order: logging, Firestore client and document store (if
    credentials are set), storage client (if a bucket is set), auth client
    (if a web API key is set), app state. Shutdown runs in reverse.
    """
    settings = get_settings()
    setup_logging()

    # ---- Startup ----
    app.state.document_store = None
    app.state.storage = None
    app.state.auth_client = None

    if init_firebase():
        hub = SubscriptionHub(poll_interval=settings.realtime_poll_interval_seconds)
        app.state.document_store = DocumentStore(get_firestore_client(), hub)
        service_account = get_service_account()
        if settings.firebase_storage_bucket and service_account:
            app.state.storage = FirebaseStorageClient(
                settings.firebase_storage_bucket,
                _get_credentials(service_account, scopes=(STORAGE_SCOPE,)),
            )
            logger.info("Storage bucket %s configured", settings.firebase_storage_bucket)
    else:
        logger.warning("Firestore not configured; data routes will return 503")

    if settings.firebase_web_api_key:
        app.state.auth_client = FirebaseAuthClient(
            settings.firebase_web_api_key.get_secret_value()
        )

    app.state.app_state = AppStateStore()
    app.state.ws_manager = ConnectionManager()
    logger.info("%s %s started", settings.app_name, settings.app_version)

    yield

    # ---- Shutdown ----
    app.state.app_state.close()

    if app.state.auth_client is not None:
        await app.state.auth_client.aclose()
        app.state.auth_client = None

    if app.state.storage is not None:
        await app.state.storage.aclose()
        app.state.storage = None

    if app.state.document_store is not None:
        await app.state.document_store.close()
        app.state.document_store = None
        logger.info("Live subscriptions stopped")

    await close_firebase()
