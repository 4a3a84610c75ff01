"""Firestore-backed support ticket service (support_tickets collection)."""

from __future__ import annotations

from typing import Any

from byki_admin.application.dtos.commands import TicketReply
from byki_admin.application.dtos.stats import TicketStats
from byki_admin.domain.entities import SupportTicket, TicketMessage
from byki_admin.domain.enums import SenderType, TicketPriority, TicketStatus
from byki_admin.infrastructure.firebase._rest_client import ArrayUnion
from byki_admin.infrastructure.firebase.collections import COLLECTION_SUPPORT_TICKETS
from byki_admin.infrastructure.firebase.enrichment import enrich_tickets
from byki_admin.infrastructure.firebase.normalization import (
    as_list,
    as_optional_str,
    as_str,
    as_str_list,
)
from byki_admin.infrastructure.firebase.services._base import Match, list_with_fallback
from byki_admin.infrastructure.firebase.store import DocumentStore, OrderBy
from byki_admin.shared.utils.datetime import (
    parse_firestore_date,
    parse_optional_date,
    utc_now,
)
from byki_admin.shared.utils.generators import generate_message_id
from byki_admin.shared.utils.numbers import round_half_up


def transform_message(raw: Any) -> TicketMessage:
    message = raw if isinstance(raw, dict) else {}
    return TicketMessage(
        id=as_str(message.get("id")),
        sender_id=as_str(message.get("senderId")),
        sender_name=as_str(message.get("senderName")),
        sender_type=SenderType.parse(message.get("senderType"), SenderType.USER),
        message=as_str(message.get("message")),
        attachments=as_str_list(message.get("attachments")),
        created_at=parse_firestore_date(message.get("createdAt")),
    )


def transform_ticket(doc_id: str, data: dict[str, Any]) -> SupportTicket:
    """Normalize a raw ticket document. Never raises."""
    return SupportTicket(
        id=doc_id,
        user_id=as_str(data.get("userId")),
        user_name=as_optional_str(data.get("userName")),
        user_email=as_optional_str(data.get("userEmail")),
        subject=as_str(data.get("subject")),
        message=as_str(data.get("message")),
        status=TicketStatus.parse(data.get("status"), TicketStatus.OPEN),
        priority=TicketPriority.parse(data.get("priority"), TicketPriority.MEDIUM),
        category=as_optional_str(data.get("category")),
        assigned_to=as_optional_str(data.get("assignedTo")),
        messages=[transform_message(m) for m in as_list(data.get("messages"))],
        created_at=parse_firestore_date(data.get("createdAt")),
        updated_at=parse_optional_date(data.get("updatedAt")),
        resolved_at=parse_optional_date(data.get("resolvedAt")),
    )


class FirestoreSupportService:
    """Support tickets: triage, assignment, replies and resolution stats."""

    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    async def get_tickets(
        self,
        status: TicketStatus | None = None,
        user_id: str | None = None,
        assigned_to: str | None = None,
    ) -> list[SupportTicket]:
        """Newest first, enriched with user name/email where both are missing."""
        tickets = await list_with_fallback(
            self._store,
            COLLECTION_SUPPORT_TICKETS,
            transform_ticket,
            order_by=OrderBy("createdAt", "desc"),
            sort_key=lambda t: t.created_at,
            matches=[
                Match("status", status),
                Match("userId", user_id),
                Match("assignedTo", assigned_to),
            ],
        )
        return await self.enrich_with_user_data(tickets)

    async def get_ticket(self, ticket_id: str) -> SupportTicket | None:
        doc = await self._store.get(COLLECTION_SUPPORT_TICKETS, ticket_id)
        if doc is None:
            return None
        return transform_ticket(doc.id, doc.data)

    async def update_ticket_status(self, ticket_id: str, status: TicketStatus) -> None:
        """Set status; entering resolved stamps resolvedAt."""
        now = utc_now()
        data: dict[str, Any] = {"status": status.value, "updatedAt": now}
        if status == TicketStatus.RESOLVED:
            data["resolvedAt"] = now
        await self._store.update(COLLECTION_SUPPORT_TICKETS, ticket_id, data)

    async def assign_ticket(self, ticket_id: str, staff_id: str) -> None:
        """Assign to staff and move the ticket to inProgress."""
        await self._store.update(
            COLLECTION_SUPPORT_TICKETS,
            ticket_id,
            {
                "assignedTo": staff_id,
                "status": TicketStatus.IN_PROGRESS.value,
                "updatedAt": utc_now(),
            },
        )

    async def add_reply(self, ticket_id: str, reply: TicketReply) -> TicketMessage:
        """Append a message to the thread and return it as stored."""
        now = utc_now()
        message = TicketMessage(
            id=generate_message_id(),
            sender_id=reply.sender_id,
            sender_name=reply.sender_name,
            sender_type=reply.sender_type,
            message=reply.message,
            attachments=list(reply.attachments),
            created_at=now,
        )
        stored = {
            "id": message.id,
            "senderId": message.sender_id,
            "senderName": message.sender_name,
            "senderType": message.sender_type.value,
            "message": message.message,
            "createdAt": now,
        }
        if message.attachments:
            stored["attachments"] = message.attachments
        await self._store.update(
            COLLECTION_SUPPORT_TICKETS,
            ticket_id,
            {"messages": ArrayUnion([stored]), "updatedAt": now},
        )
        return message

    async def get_ticket_stats(self) -> TicketStats:
        docs = await self._store.list_all(COLLECTION_SUPPORT_TICKETS)
        resolution_hours = [
            (
                parse_firestore_date(d.data["resolvedAt"])
                - parse_firestore_date(d.data["createdAt"])
            ).total_seconds()
            / 3600
            for d in docs
            if d.data.get("resolvedAt") and d.data.get("createdAt")
        ]
        average = (
            sum(resolution_hours) / len(resolution_hours) if resolution_hours else 0
        )
        statuses = [d.data.get("status") for d in docs]
        return TicketStats(
            total=len(docs),
            open=statuses.count(TicketStatus.OPEN.value),
            in_progress=statuses.count(TicketStatus.IN_PROGRESS.value),
            resolved=sum(
                s in (TicketStatus.RESOLVED.value, TicketStatus.CLOSED.value)
                for s in statuses
            ),
            average_resolution_time=int(round_half_up(average)),
        )

    async def enrich_with_user_data(
        self, tickets: list[SupportTicket]
    ) -> list[SupportTicket]:
        return await enrich_tickets(self._store, tickets)
