"""In-app notification entity."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from byki_admin.domain.enums import NotificationType


@dataclass(frozen=True)
class Notification:
    id: str
    user_id: str
    created_at: datetime
    title: str = ""
    body: str = ""
    type: NotificationType = NotificationType.SYSTEM
    data: dict[str, Any] | None = None
    is_read: bool = False
