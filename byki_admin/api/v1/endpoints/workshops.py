"""Workshop API: thin routes delegating to FirestoreWorkshopService."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response

from byki_admin.api.v1.dependencies import get_workshop_service, require_found
from byki_admin.core.limiter import limit_writes
from byki_admin.domain.entities import Workshop
from byki_admin.infrastructure.firebase.services import FirestoreWorkshopService
from byki_admin.schemas.catalog import WorkshopCreate, WorkshopUpdate
from byki_admin.schemas.common import ActiveToggle, CreatedResponse

router = APIRouter()

WorkshopServiceDep = Annotated[FirestoreWorkshopService, Depends(get_workshop_service)]


@router.get("", response_model=list[Workshop])
async def list_workshops(workshop_svc: WorkshopServiceDep):
    return await workshop_svc.get_workshops()


@router.post("", response_model=CreatedResponse, status_code=201)
@limit_writes
async def create_workshop(
    request: Request, body: WorkshopCreate, workshop_svc: WorkshopServiceDep
):
    return CreatedResponse(id=await workshop_svc.create_workshop(body.to_document()))


@router.get("/{workshop_id}", response_model=Workshop)
async def get_workshop(workshop_id: str, workshop_svc: WorkshopServiceDep):
    return require_found(await workshop_svc.get_workshop(workshop_id), "workshop", workshop_id)


@router.patch("/{workshop_id}", response_model=Workshop)
@limit_writes
async def update_workshop(
    request: Request,
    workshop_id: str,
    body: WorkshopUpdate,
    workshop_svc: WorkshopServiceDep,
):
    require_found(await workshop_svc.get_workshop(workshop_id), "workshop", workshop_id)
    await workshop_svc.update_workshop(workshop_id, body.to_document())
    return await workshop_svc.get_workshop(workshop_id)


@router.patch("/{workshop_id}/active", response_model=Workshop)
@limit_writes
async def toggle_workshop(
    request: Request,
    workshop_id: str,
    body: ActiveToggle,
    workshop_svc: WorkshopServiceDep,
):
    require_found(await workshop_svc.get_workshop(workshop_id), "workshop", workshop_id)
    await workshop_svc.toggle_workshop_status(workshop_id, body.is_active)
    return await workshop_svc.get_workshop(workshop_id)


@router.delete("/{workshop_id}", status_code=204)
@limit_writes
async def delete_workshop(
    request: Request, workshop_id: str, workshop_svc: WorkshopServiceDep
) -> Response:
    await workshop_svc.delete_workshop(workshop_id)
    return Response(status_code=204)
