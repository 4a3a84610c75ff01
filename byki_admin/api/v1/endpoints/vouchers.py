"""Voucher API: thin routes delegating to FirestoreVoucherService."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response

from byki_admin.api.v1.dependencies import get_voucher_service, require_found
from byki_admin.application.dtos import VoucherStats
from byki_admin.core.limiter import limit_writes
from byki_admin.domain.entities import Voucher
from byki_admin.infrastructure.firebase.services import FirestoreVoucherService
from byki_admin.schemas.catalog import VoucherCreate, VoucherUpdate
from byki_admin.schemas.common import ActiveToggle, CreatedResponse

router = APIRouter()

VoucherServiceDep = Annotated[FirestoreVoucherService, Depends(get_voucher_service)]


@router.get("", response_model=list[Voucher])
async def list_vouchers(voucher_svc: VoucherServiceDep):
    return await voucher_svc.get_vouchers()


@router.post("", response_model=CreatedResponse, status_code=201)
@limit_writes
async def create_voucher(
    request: Request, body: VoucherCreate, voucher_svc: VoucherServiceDep
):
    return CreatedResponse(id=await voucher_svc.create_voucher(body.to_document()))


@router.get("/stats", response_model=VoucherStats)
async def voucher_stats(voucher_svc: VoucherServiceDep):
    return await voucher_svc.get_voucher_stats()


@router.get("/{voucher_id}", response_model=Voucher)
async def get_voucher(voucher_id: str, voucher_svc: VoucherServiceDep):
    return require_found(await voucher_svc.get_voucher(voucher_id), "voucher", voucher_id)


@router.patch("/{voucher_id}", response_model=Voucher)
@limit_writes
async def update_voucher(
    request: Request,
    voucher_id: str,
    body: VoucherUpdate,
    voucher_svc: VoucherServiceDep,
):
    require_found(await voucher_svc.get_voucher(voucher_id), "voucher", voucher_id)
    await voucher_svc.update_voucher(voucher_id, body.to_document())
    return await voucher_svc.get_voucher(voucher_id)


@router.patch("/{voucher_id}/active", response_model=Voucher)
@limit_writes
async def toggle_voucher(
    request: Request,
    voucher_id: str,
    body: ActiveToggle,
    voucher_svc: VoucherServiceDep,
):
    require_found(await voucher_svc.get_voucher(voucher_id), "voucher", voucher_id)
    await voucher_svc.toggle_voucher_status(voucher_id, body.is_active)
    return await voucher_svc.get_voucher(voucher_id)


@router.delete("/{voucher_id}", status_code=204)
@limit_writes
async def delete_voucher(
    request: Request, voucher_id: str, voucher_svc: VoucherServiceDep
) -> Response:
    await voucher_svc.delete_voucher(voucher_id)
    return Response(status_code=204)
