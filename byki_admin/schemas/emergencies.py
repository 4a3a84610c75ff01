"""Emergency and support API schemas."""

from typing import Any

from pydantic import BaseModel, Field

from byki_admin.domain.enums import (
    EmergencyStatus,
    SenderType,
    TicketStatus,
)


class EmergencyStatusUpdate(BaseModel):
    """New status plus extra stored fields (camelCase keys, written as given)."""

    status: EmergencyStatus
    additional: dict[str, Any] | None = None


class MechanicAssignment(BaseModel):
    mechanic_id: str = Field(..., min_length=1)
    mechanic_name: str = Field(..., min_length=1)


class TicketStatusUpdate(BaseModel):
    status: TicketStatus


class TicketAssignment(BaseModel):
    staff_id: str = Field(..., min_length=1)


class TicketReplyRequest(BaseModel):
    """Reply body. Sender defaults to the signed-in admin."""

    message: str = Field(..., min_length=1)
    attachments: list[str] = Field(default_factory=list)
    sender_type: SenderType = SenderType.ADMIN
