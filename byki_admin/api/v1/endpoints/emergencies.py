"""Emergency API: roadside requests, dispatch and monitor stats."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from byki_admin.api.v1.dependencies import get_emergency_service, require_found
from byki_admin.application.dtos import EmergencyStats
from byki_admin.core.limiter import limit_writes
from byki_admin.domain.entities import EmergencyRequest
from byki_admin.domain.enums import EmergencyStatus
from byki_admin.infrastructure.firebase.services import FirestoreEmergencyService
from byki_admin.schemas.emergencies import EmergencyStatusUpdate, MechanicAssignment

router = APIRouter()

EmergencyServiceDep = Annotated[
    FirestoreEmergencyService, Depends(get_emergency_service)
]


@router.get("", response_model=list[EmergencyRequest])
async def list_emergencies(
    emergency_svc: EmergencyServiceDep,
    status: EmergencyStatus | None = None,
    user_id: str | None = None,
):
    return await emergency_svc.get_emergency_requests(status=status, user_id=user_id)


@router.get("/active", response_model=list[EmergencyRequest])
async def active_emergencies(emergency_svc: EmergencyServiceDep):
    """Pending, dispatched and en-route requests, with user name and phone filled in."""
    return await emergency_svc.get_active_emergencies()


@router.get("/stats", response_model=EmergencyStats)
async def emergency_stats(emergency_svc: EmergencyServiceDep):
    return await emergency_svc.get_emergency_stats()


@router.get("/{request_id}", response_model=EmergencyRequest)
async def get_emergency(request_id: str, emergency_svc: EmergencyServiceDep):
    return require_found(
        await emergency_svc.get_emergency_request(request_id),
        "emergency_request",
        request_id,
    )


@router.patch("/{request_id}/status", response_model=EmergencyRequest)
@limit_writes
async def update_emergency_status(
    request: Request,
    request_id: str,
    body: EmergencyStatusUpdate,
    emergency_svc: EmergencyServiceDep,
):
    require_found(
        await emergency_svc.get_emergency_request(request_id),
        "emergency_request",
        request_id,
    )
    await emergency_svc.update_emergency_status(request_id, body.status, body.additional)
    return await emergency_svc.get_emergency_request(request_id)


@router.post("/{request_id}/assign", response_model=EmergencyRequest)
@limit_writes
async def assign_mechanic(
    request: Request,
    request_id: str,
    body: MechanicAssignment,
    emergency_svc: EmergencyServiceDep,
):
    """Assign a mechanic; the request becomes dispatched."""
    require_found(
        await emergency_svc.get_emergency_request(request_id),
        "emergency_request",
        request_id,
    )
    await emergency_svc.assign_mechanic(request_id, body.mechanic_id, body.mechanic_name)
    return await emergency_svc.get_emergency_request(request_id)
