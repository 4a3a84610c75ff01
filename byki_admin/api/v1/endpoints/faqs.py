"""FAQ API: entries, ordering and categories."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response

from byki_admin.api.v1.dependencies import get_faq_service, require_found
from byki_admin.application.dtos import FAQStats
from byki_admin.core.limiter import limit_writes
from byki_admin.domain.entities import FAQ, FAQCategory
from byki_admin.infrastructure.firebase.services import FirestoreFAQService
from byki_admin.schemas.common import ActiveToggle, CreatedResponse
from byki_admin.schemas.users import (
    FAQCategoryCreate,
    FAQCategoryUpdate,
    FAQCreate,
    FAQReorderRequest,
    FAQUpdate,
)

router = APIRouter()

FAQServiceDep = Annotated[FirestoreFAQService, Depends(get_faq_service)]


@router.get("", response_model=list[FAQ])
async def list_faqs(
    faq_svc: FAQServiceDep,
    category: str | None = None,
    is_active: bool | None = None,
):
    return await faq_svc.get_faqs(category=category, is_active=is_active)


@router.post("", response_model=CreatedResponse, status_code=201)
@limit_writes
async def create_faq(request: Request, body: FAQCreate, faq_svc: FAQServiceDep):
    return CreatedResponse(id=await faq_svc.create_faq(body.to_document()))


@router.get("/stats", response_model=FAQStats)
async def faq_stats(faq_svc: FAQServiceDep):
    return await faq_svc.get_faq_stats()


@router.put("/reorder", status_code=204)
@limit_writes
async def reorder_faqs(
    request: Request, body: FAQReorderRequest, faq_svc: FAQServiceDep
) -> Response:
    """Write each FAQ's sortOrder. Writes are independent, not one batch."""
    await faq_svc.reorder_faqs([(item.id, item.sort_order) for item in body.items])
    return Response(status_code=204)


# ---- Categories ----


@router.get("/categories", response_model=list[FAQCategory])
async def list_faq_categories(faq_svc: FAQServiceDep):
    return await faq_svc.get_faq_categories()


@router.post("/categories", response_model=CreatedResponse, status_code=201)
@limit_writes
async def create_faq_category(
    request: Request, body: FAQCategoryCreate, faq_svc: FAQServiceDep
):
    return CreatedResponse(id=await faq_svc.create_faq_category(body.to_document()))


@router.patch("/categories/{category_id}", status_code=204)
@limit_writes
async def update_faq_category(
    request: Request,
    category_id: str,
    body: FAQCategoryUpdate,
    faq_svc: FAQServiceDep,
) -> Response:
    await faq_svc.update_faq_category(category_id, body.to_document())
    return Response(status_code=204)


@router.delete("/categories/{category_id}", status_code=204)
@limit_writes
async def delete_faq_category(
    request: Request, category_id: str, faq_svc: FAQServiceDep
) -> Response:
    await faq_svc.delete_faq_category(category_id)
    return Response(status_code=204)


# ---- Single FAQ ----


@router.get("/{faq_id}", response_model=FAQ)
async def get_faq(faq_id: str, faq_svc: FAQServiceDep):
    return require_found(await faq_svc.get_faq(faq_id), "faq", faq_id)


@router.patch("/{faq_id}", response_model=FAQ)
@limit_writes
async def update_faq(
    request: Request, faq_id: str, body: FAQUpdate, faq_svc: FAQServiceDep
):
    require_found(await faq_svc.get_faq(faq_id), "faq", faq_id)
    await faq_svc.update_faq(faq_id, body.to_document())
    return await faq_svc.get_faq(faq_id)


@router.patch("/{faq_id}/active", response_model=FAQ)
@limit_writes
async def toggle_faq(
    request: Request, faq_id: str, body: ActiveToggle, faq_svc: FAQServiceDep
):
    require_found(await faq_svc.get_faq(faq_id), "faq", faq_id)
    await faq_svc.toggle_faq_status(faq_id, body.is_active)
    return await faq_svc.get_faq(faq_id)


@router.delete("/{faq_id}", status_code=204)
@limit_writes
async def delete_faq(request: Request, faq_id: str, faq_svc: FAQServiceDep) -> Response:
    await faq_svc.delete_faq(faq_id)
    return Response(status_code=204)
