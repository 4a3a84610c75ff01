"""WebSocket endpoint for the live emergency monitor.

Requires the JWT of a signed-in admin session via query param ?token=...
before registering the connection. Each connection owns one live
subscription to the monitored emergency requests and its own alert
watcher; both end with the connection.

Frames sent to the client:
    {"type": "emergencies", "items": [...]}  on every change of the list
    {"type": "emergency_alert", "pending_count": n, "notification": {...}}
    {"type": "play_sound", "url": "..."}
    {"type": "error", "message": "..."}      when a refresh fails
"""

import logging

from fastapi import APIRouter, Request, WebSocket, WebSocketDisconnect
from fastapi.encoders import jsonable_encoder

from byki_admin.api.v1.dependencies import CurrentAdmin, session_for_token
from byki_admin.application.services import EmergencyAlertWatcher
from byki_admin.core.config import get_settings
from byki_admin.core.constants import (
    EMERGENCY_ALERT_DESCRIPTION,
    EMERGENCY_ALERT_MESSAGE,
)
from byki_admin.domain.entities import EmergencyRequest
from byki_admin.domain.enums import EmergencyStatus
from byki_admin.infrastructure.firebase.services import FirestoreEmergencyService
from byki_admin.schemas.websocket import WebSocketStatusResponse

logger = logging.getLogger(__name__)

router = APIRouter()


async def _reject_websocket(websocket: WebSocket, reason: str, code: int = 1008) -> None:
    """Accept then immediately close with code/reason so client gets a proper close frame."""
    await websocket.accept()
    await websocket.close(code=code, reason=reason)


@router.get("/status", response_model=WebSocketStatusResponse)
async def websocket_status(request: Request, admin: CurrentAdmin):
    """Number of open emergency monitors."""
    manager = request.app.state.ws_manager
    return WebSocketStatusResponse(
        total_connections=await manager.get_connection_count(),
        admins=await manager.get_admin_count(),
    )


@router.websocket("/emergencies")
async def emergency_monitor(websocket: WebSocket):
    """Stream monitored emergency requests and alert on new pending ones."""
    token = websocket.query_params.get("token")
    if not token:
        await _reject_websocket(websocket, "Missing token")
        return
    app_state = websocket.app.state.app_state
    session = session_for_token(app_state, token)
    if session is None:
        await _reject_websocket(websocket, "Invalid token")
        return
    admin = session.admin
    store = getattr(websocket.app.state, "document_store", None)
    if store is None:
        await _reject_websocket(websocket, "Firestore not configured", code=1011)
        return

    settings = get_settings()
    manager = websocket.app.state.ws_manager
    emergency_svc = FirestoreEmergencyService(store, settings.tz)

    async def raise_alert(pending_count: int) -> None:
        notification = app_state.notify(
            "error",
            EMERGENCY_ALERT_MESSAGE,
            EMERGENCY_ALERT_DESCRIPTION,
            duration=0,
        )
        await websocket.send_json(
            {
                "type": "emergency_alert",
                "pending_count": pending_count,
                "notification": jsonable_encoder(notification),
            }
        )

    async def play_sound() -> None:
        await websocket.send_json(
            {"type": "play_sound", "url": settings.emergency_alert_sound_url}
        )

    watcher = EmergencyAlertWatcher(raise_alert, play_sound)

    async def on_push(items: list[EmergencyRequest]) -> None:
        await websocket.send_json(
            {"type": "emergencies", "items": jsonable_encoder(items)}
        )
        await watcher.observe(
            sum(item.status == EmergencyStatus.PENDING for item in items)
        )

    async def on_error(error: Exception) -> None:
        await websocket.send_json(
            {"type": "error", "message": "Live emergency query failed"}
        )

    await manager.connect(websocket, admin.uid)
    subscription = emergency_svc.subscribe_to_active_emergencies(
        on_push, on_error=on_error
    )
    logger.info("Emergency monitor opened by %s", admin.uid)
    try:
        while True:
            # Client messages are ignored; receiving detects the disconnect.
            await websocket.receive_text()
    except WebSocketDisconnect:
        pass
    finally:
        subscription.unsubscribe()
        await manager.disconnect(websocket)
        logger.info("Emergency monitor closed by %s", admin.uid)
