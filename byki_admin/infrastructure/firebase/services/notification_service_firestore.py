"""Firestore-backed in-app notification service (notifications collection).

Notifications are written per user; delivery to devices is done by the
mobile backend from the push payload built by ``create_push_payload``.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import UTC, tzinfo
from typing import Any

from byki_admin.application.dtos.commands import NotificationDraft
from byki_admin.application.dtos.stats import NotificationStats
from byki_admin.domain.entities import Notification
from byki_admin.domain.enums import NotificationType
from byki_admin.infrastructure.firebase.collections import (
    COLLECTION_NOTIFICATIONS,
    COLLECTION_USERS,
)
from byki_admin.infrastructure.firebase.normalization import as_bool, as_str
from byki_admin.infrastructure.firebase.services._base import Match, list_with_fallback
from byki_admin.infrastructure.firebase.store import DocumentStore, OrderBy
from byki_admin.shared.utils.datetime import (
    parse_firestore_date,
    start_of_day,
    start_of_month,
    start_of_week,
    utc_now,
)

logger = logging.getLogger(__name__)


def transform_notification(doc_id: str, data: dict[str, Any]) -> Notification:
    extra = data.get("data")
    return Notification(
        id=doc_id,
        user_id=as_str(data.get("userId")),
        title=as_str(data.get("title")),
        body=as_str(data.get("body")),
        type=NotificationType.parse(data.get("type"), NotificationType.SYSTEM),
        data=extra if isinstance(extra, dict) else None,
        is_read=as_bool(data.get("isRead"), False),
        created_at=parse_firestore_date(data.get("createdAt")),
    )


def create_push_payload(draft: NotificationDraft) -> dict[str, Any]:
    """Build the outbound push message for a notification."""
    return {
        "notification": {"title": draft.title, "body": draft.body},
        "data": {"type": draft.type.value, **(draft.data or {})},
    }


class FirestoreNotificationService:
    def __init__(self, store: DocumentStore, tz: tzinfo = UTC) -> None:
        self._store = store
        self._tz = tz

    async def get_user_notifications(self, user_id: str) -> list[Notification]:
        """Newest first."""
        return await list_with_fallback(
            self._store,
            COLLECTION_NOTIFICATIONS,
            transform_notification,
            order_by=OrderBy("createdAt", "desc"),
            sort_key=lambda n: n.created_at,
            matches=[Match("userId", user_id)],
        )

    async def send_to_user(self, user_id: str, draft: NotificationDraft) -> str:
        """Create an unread notification for one user and return its id."""
        data: dict[str, Any] = {
            "title": draft.title,
            "body": draft.body,
            "type": draft.type.value,
            "userId": user_id,
            "isRead": False,
            "createdAt": utc_now(),
        }
        if draft.data is not None:
            data["data"] = draft.data
        return await self._store.create(COLLECTION_NOTIFICATIONS, data)

    async def send_to_users(
        self, user_ids: list[str], draft: NotificationDraft
    ) -> list[str]:
        """Notify several users concurrently. Any failure fails the whole call."""
        return list(
            await asyncio.gather(*(self.send_to_user(uid, draft) for uid in user_ids))
        )

    async def send_to_all(self, draft: NotificationDraft) -> list[str]:
        users = await self._store.list_all(COLLECTION_USERS)
        ids = await self.send_to_users([u.id for u in users], draft)
        logger.info("Broadcast notification %r to %s users", draft.title, len(ids))
        return ids

    async def get_notification_stats(self) -> NotificationStats:
        now = utc_now()
        day = start_of_day(now, self._tz)
        week = start_of_week(now, self._tz)
        month = start_of_month(now, self._tz)
        created = [
            parse_firestore_date(d.data.get("createdAt"))
            for d in await self._store.list_all(COLLECTION_NOTIFICATIONS)
        ]
        return NotificationStats(
            sent_today=sum(c >= day for c in created),
            sent_this_week=sum(c >= week for c in created),
            sent_this_month=sum(c >= month for c in created),
        )
