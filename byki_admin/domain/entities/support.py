"""Support ticket entity and its embedded conversation."""

from dataclasses import dataclass, field
from datetime import datetime

from byki_admin.domain.enums import SenderType, TicketPriority, TicketStatus


@dataclass(frozen=True)
class TicketMessage:
    """One reply in a ticket thread. Messages are append-only."""

    id: str
    sender_id: str
    sender_name: str
    sender_type: SenderType
    message: str
    created_at: datetime
    attachments: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class SupportTicket:
    """Normalized support ticket."""

    id: str
    user_id: str
    created_at: datetime
    user_name: str | None = None
    user_email: str | None = None
    subject: str = ""
    message: str = ""
    status: TicketStatus = TicketStatus.OPEN
    priority: TicketPriority = TicketPriority.MEDIUM
    category: str | None = None
    assigned_to: str | None = None
    messages: list[TicketMessage] = field(default_factory=list)
    updated_at: datetime | None = None
    resolved_at: datetime | None = None
