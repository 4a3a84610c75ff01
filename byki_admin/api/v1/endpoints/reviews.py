"""Review API: listing and moderation."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, Response

from byki_admin.api.v1.dependencies import get_review_service, require_found
from byki_admin.application.dtos import ReviewStats
from byki_admin.core.limiter import limit_writes
from byki_admin.domain.entities import Review
from byki_admin.domain.enums import ReviewTargetType
from byki_admin.domain.exceptions import ResourceNotFoundException
from byki_admin.infrastructure.firebase.services import FirestoreReviewService
from byki_admin.schemas.users import ReviewHideRequest

router = APIRouter()

ReviewServiceDep = Annotated[FirestoreReviewService, Depends(get_review_service)]


@router.get("", response_model=list[Review])
async def list_reviews(
    review_svc: ReviewServiceDep,
    target_type: ReviewTargetType | None = None,
    target_id: str | None = None,
    user_id: str | None = None,
    min_rating: float | None = Query(default=None, ge=0, le=5),
    max_rating: float | None = Query(default=None, ge=0, le=5),
    is_approved: bool | None = None,
    is_hidden: bool | None = None,
):
    return await review_svc.get_reviews(
        target_type=target_type,
        target_id=target_id,
        user_id=user_id,
        min_rating=min_rating,
        max_rating=max_rating,
        is_approved=is_approved,
        is_hidden=is_hidden,
    )


@router.get("/stats", response_model=ReviewStats)
async def review_stats(
    review_svc: ReviewServiceDep, target_type: ReviewTargetType | None = None
):
    return await review_svc.get_review_stats(target_type)


@router.get("/recent", response_model=list[Review])
async def recent_reviews(
    review_svc: ReviewServiceDep, limit: int = Query(default=10, ge=1, le=100)
):
    return await review_svc.get_recent_reviews(limit)


@router.get("/pending", response_model=list[Review])
async def pending_reviews(review_svc: ReviewServiceDep):
    return await review_svc.get_pending_reviews()


@router.get("/targets/{target_type}/{target_id}", response_model=list[Review])
async def target_reviews(
    target_type: ReviewTargetType, target_id: str, review_svc: ReviewServiceDep
):
    return await review_svc.get_target_reviews(target_id, target_type)


@router.get("/{review_id}", response_model=Review)
async def get_review(review_id: str, review_svc: ReviewServiceDep):
    return require_found(await review_svc.get_review(review_id), "review", review_id)


@router.post("/{review_id}/approve", response_model=Review)
@limit_writes
async def approve_review(
    request: Request, review_id: str, review_svc: ReviewServiceDep
):
    require_found(await review_svc.get_review(review_id), "review", review_id)
    await review_svc.approve_review(review_id)
    return await review_svc.get_review(review_id)


@router.post("/{review_id}/hide", response_model=Review)
@limit_writes
async def hide_review(
    request: Request,
    review_id: str,
    body: ReviewHideRequest,
    review_svc: ReviewServiceDep,
):
    require_found(await review_svc.get_review(review_id), "review", review_id)
    await review_svc.hide_review(review_id, body.hide)
    return await review_svc.get_review(review_id)


@router.delete("/{review_id}", status_code=204)
@limit_writes
async def delete_review(
    request: Request, review_id: str, review_svc: ReviewServiceDep
) -> Response:
    """Delete a review and refresh the reviewed item's rating."""
    if not await review_svc.delete_review(review_id):
        raise ResourceNotFoundException("review", review_id)
    return Response(status_code=204)
