"""Support API: ticket triage, assignment and replies."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from byki_admin.api.v1.dependencies import (
    CurrentAdmin,
    get_support_service,
    require_found,
)
from byki_admin.application.dtos import TicketReply, TicketStats
from byki_admin.core.limiter import limit_writes
from byki_admin.domain.entities import SupportTicket, TicketMessage
from byki_admin.domain.enums import TicketStatus
from byki_admin.infrastructure.firebase.services import FirestoreSupportService
from byki_admin.schemas.emergencies import (
    TicketAssignment,
    TicketReplyRequest,
    TicketStatusUpdate,
)

router = APIRouter()

SupportServiceDep = Annotated[FirestoreSupportService, Depends(get_support_service)]


@router.get("/tickets", response_model=list[SupportTicket])
async def list_tickets(
    support_svc: SupportServiceDep,
    status: TicketStatus | None = None,
    user_id: str | None = None,
    assigned_to: str | None = None,
):
    return await support_svc.get_tickets(
        status=status, user_id=user_id, assigned_to=assigned_to
    )


@router.get("/tickets/stats", response_model=TicketStats)
async def ticket_stats(support_svc: SupportServiceDep):
    return await support_svc.get_ticket_stats()


@router.get("/tickets/{ticket_id}", response_model=SupportTicket)
async def get_ticket(ticket_id: str, support_svc: SupportServiceDep):
    return require_found(await support_svc.get_ticket(ticket_id), "ticket", ticket_id)


@router.patch("/tickets/{ticket_id}/status", response_model=SupportTicket)
@limit_writes
async def update_ticket_status(
    request: Request,
    ticket_id: str,
    body: TicketStatusUpdate,
    support_svc: SupportServiceDep,
):
    require_found(await support_svc.get_ticket(ticket_id), "ticket", ticket_id)
    await support_svc.update_ticket_status(ticket_id, body.status)
    return await support_svc.get_ticket(ticket_id)


@router.post("/tickets/{ticket_id}/assign", response_model=SupportTicket)
@limit_writes
async def assign_ticket(
    request: Request,
    ticket_id: str,
    body: TicketAssignment,
    support_svc: SupportServiceDep,
):
    require_found(await support_svc.get_ticket(ticket_id), "ticket", ticket_id)
    await support_svc.assign_ticket(ticket_id, body.staff_id)
    return await support_svc.get_ticket(ticket_id)


@router.post(
    "/tickets/{ticket_id}/replies", response_model=TicketMessage, status_code=201
)
@limit_writes
async def add_reply(
    request: Request,
    ticket_id: str,
    body: TicketReplyRequest,
    admin: CurrentAdmin,
    support_svc: SupportServiceDep,
):
    """Append a reply signed by the current admin."""
    require_found(await support_svc.get_ticket(ticket_id), "ticket", ticket_id)
    return await support_svc.add_reply(
        ticket_id,
        TicketReply(
            sender_id=admin.uid,
            sender_name=admin.name,
            sender_type=body.sender_type,
            message=body.message,
            attachments=body.attachments,
        ),
    )
