"""Dashboard UI state: sidebar, current page and persistent notifications."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response

from byki_admin.api.v1.dependencies import get_app_state_store
from byki_admin.core.state import AppStateStore
from byki_admin.schemas.notifications import (
    CurrentPageUpdate,
    UINotificationResponse,
    UIStateResponse,
)

router = APIRouter()

AppStateDep = Annotated[AppStateStore, Depends(get_app_state_store)]


@router.get("", response_model=UIStateResponse)
async def ui_state(app_state: AppStateDep):
    return UIStateResponse.model_validate(app_state.state.ui)


@router.post("/sidebar/toggle", response_model=UIStateResponse)
async def toggle_sidebar(app_state: AppStateDep):
    return UIStateResponse.model_validate(
        app_state.set_ui(app_state.state.ui.toggle_sidebar())
    )


@router.put("/page", response_model=UIStateResponse)
async def set_current_page(body: CurrentPageUpdate, app_state: AppStateDep):
    return UIStateResponse.model_validate(
        app_state.set_ui(app_state.state.ui.set_current_page(body.page))
    )


@router.get("/notifications", response_model=list[UINotificationResponse])
async def list_ui_notifications(app_state: AppStateDep):
    """Notifications waiting to be dismissed, oldest first (emergency alerts included)."""
    return [
        UINotificationResponse.model_validate(n)
        for n in app_state.state.ui.notifications
    ]


@router.delete("/notifications/{notification_id}", status_code=204)
async def dismiss_ui_notification(
    notification_id: str, app_state: AppStateDep
) -> Response:
    app_state.set_ui(app_state.state.ui.remove_notification(notification_id))
    return Response(status_code=204)


@router.delete("/notifications", status_code=204)
async def clear_ui_notifications(app_state: AppStateDep) -> Response:
    app_state.set_ui(app_state.state.ui.clear_notifications())
    return Response(status_code=204)
