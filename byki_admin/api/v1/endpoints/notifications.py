"""Notification API: per-user inbox, sending and delivery stats."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from byki_admin.api.v1.dependencies import get_notification_service
from byki_admin.application.dtos import NotificationStats
from byki_admin.core.limiter import limit_broadcast
from byki_admin.domain.entities import Notification
from byki_admin.infrastructure.firebase.services import FirestoreNotificationService
from byki_admin.infrastructure.firebase.services.notification_service_firestore import (
    create_push_payload,
)
from byki_admin.schemas.notifications import (
    NotificationSendRequest,
    NotificationSendResponse,
)

router = APIRouter()

NotificationServiceDep = Annotated[
    FirestoreNotificationService, Depends(get_notification_service)
]


@router.post("", response_model=NotificationSendResponse, status_code=201)
@limit_broadcast
async def send_notification(
    request: Request,
    body: NotificationSendRequest,
    notification_svc: NotificationServiceDep,
):
    """Send to the listed users, or to everyone when ``user_ids`` is omitted."""
    draft = body.to_draft()
    if body.user_ids is None:
        ids = await notification_svc.send_to_all(draft)
    else:
        ids = await notification_svc.send_to_users(body.user_ids, draft)
    return NotificationSendResponse(ids=ids, push_payload=create_push_payload(draft))


@router.get("/stats", response_model=NotificationStats)
async def notification_stats(notification_svc: NotificationServiceDep):
    return await notification_svc.get_notification_stats()


@router.get("/users/{user_id}", response_model=list[Notification])
async def user_notifications(user_id: str, notification_svc: NotificationServiceDep):
    return await notification_svc.get_user_notifications(user_id)
