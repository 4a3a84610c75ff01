"""User API: paging, profile edits, moderation and related records."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from byki_admin.api.v1.dependencies import (
    CurrentAdmin,
    get_user_service,
    require_found,
)
from byki_admin.application.dtos import UserStats
from byki_admin.core.config import get_settings
from byki_admin.core.limiter import limit_writes
from byki_admin.domain.entities import Address, LoyaltyAccount, User, Vehicle
from byki_admin.domain.enums import UserRole
from byki_admin.infrastructure.firebase.services import FirestoreUserService
from byki_admin.schemas.users import ModerationRequest, UserPageResponse, UserUpdate

logger = logging.getLogger(__name__)

router = APIRouter()

UserServiceDep = Annotated[FirestoreUserService, Depends(get_user_service)]


@router.get("", response_model=UserPageResponse)
async def list_users(
    user_svc: UserServiceDep,
    page_size: int | None = Query(default=None, ge=1, le=500),
    start_after: str | None = None,
    search: str | None = None,
    role: UserRole | None = None,
):
    """Newest first, one page at a time. ``search`` filters the returned page only."""
    page = await user_svc.get_users(
        page_size=page_size or get_settings().default_page_size,
        start_after_id=start_after,
        search_term=search,
        role=role,
    )
    return UserPageResponse(users=page.users, last_doc_id=page.last_doc_id)


@router.get("/stats", response_model=UserStats)
async def user_stats(user_svc: UserServiceDep):
    return await user_svc.get_user_stats()


@router.get("/{user_id}", response_model=User)
async def get_user(user_id: str, user_svc: UserServiceDep):
    return require_found(await user_svc.get_user(user_id), "user", user_id)


@router.patch("/{user_id}", response_model=User)
@limit_writes
async def update_user(
    request: Request,
    user_id: str,
    body: UserUpdate,
    user_svc: UserServiceDep,
):
    require_found(await user_svc.get_user(user_id), "user", user_id)
    await user_svc.update_user(user_id, body.to_document())
    return await user_svc.get_user(user_id)


@router.post("/{user_id}/suspend", response_model=User)
@limit_writes
async def suspend_user(
    request: Request,
    user_id: str,
    body: ModerationRequest,
    admin: CurrentAdmin,
    user_svc: UserServiceDep,
):
    require_found(await user_svc.get_user(user_id), "user", user_id)
    await user_svc.suspend_user(user_id, body.reason)
    logger.info("User %s suspended by %s", user_id, admin.uid)
    return await user_svc.get_user(user_id)


@router.post("/{user_id}/ban", response_model=User)
@limit_writes
async def ban_user(
    request: Request,
    user_id: str,
    body: ModerationRequest,
    admin: CurrentAdmin,
    user_svc: UserServiceDep,
):
    require_found(await user_svc.get_user(user_id), "user", user_id)
    await user_svc.ban_user(user_id, body.reason)
    logger.info("User %s banned by %s", user_id, admin.uid)
    return await user_svc.get_user(user_id)


@router.post("/{user_id}/reactivate", response_model=User)
@limit_writes
async def reactivate_user(
    request: Request,
    user_id: str,
    admin: CurrentAdmin,
    user_svc: UserServiceDep,
):
    require_found(await user_svc.get_user(user_id), "user", user_id)
    await user_svc.reactivate_user(user_id)
    logger.info("User %s reactivated by %s", user_id, admin.uid)
    return await user_svc.get_user(user_id)


@router.get("/{user_id}/vehicles", response_model=list[Vehicle])
async def user_vehicles(user_id: str, user_svc: UserServiceDep):
    return await user_svc.get_user_vehicles(user_id)


@router.get("/{user_id}/addresses", response_model=list[Address])
async def user_addresses(user_id: str, user_svc: UserServiceDep):
    return await user_svc.get_user_addresses(user_id)


@router.get("/{user_id}/loyalty", response_model=LoyaltyAccount)
async def loyalty_account(user_id: str, user_svc: UserServiceDep):
    return require_found(
        await user_svc.get_loyalty_account(user_id), "loyalty_account", user_id
    )
