"""Notification and UI-state API schemas."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from byki_admin.application.dtos import NotificationDraft
from byki_admin.domain.enums import NotificationType


class NotificationSendRequest(BaseModel):
    """Notification content plus its audience.

    With ``user_ids`` omitted the notification goes to every user.
    """

    title: str = Field(..., min_length=1)
    body: str = Field(..., min_length=1)
    type: NotificationType = NotificationType.SYSTEM
    data: dict[str, Any] | None = None
    user_ids: list[str] | None = None

    def to_draft(self) -> NotificationDraft:
        return NotificationDraft(
            title=self.title, body=self.body, type=self.type, data=self.data
        )


class NotificationSendResponse(BaseModel):
    ids: list[str]
    push_payload: dict[str, Any]


class UINotificationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    type: Literal["success", "error", "warning", "info"]
    message: str
    description: str | None = None
    duration: float | None = None


class UIStateResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    sidebar_collapsed: bool
    current_page: str
    notifications: list[UINotificationResponse]


class CurrentPageUpdate(BaseModel):
    page: str = Field(..., min_length=1)
