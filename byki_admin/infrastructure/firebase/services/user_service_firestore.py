"""Firestore-backed user service (users, their sub-collections, loyalty_accounts)."""

from __future__ import annotations

import logging
from collections import Counter
from datetime import UTC, tzinfo
from typing import Any

import httpx

from byki_admin.application.dtos.stats import UserStats
from byki_admin.domain.entities import (
    Address,
    LoyaltyAccount,
    User,
    UserPage,
    Vehicle,
    tier_for_points,
)
from byki_admin.domain.enums import LoyaltyTier, UserRole, UserStatus
from byki_admin.infrastructure.firebase._rest_client import QueryFailedError
from byki_admin.infrastructure.firebase.collections import (
    COLLECTION_LOYALTY_ACCOUNTS,
    COLLECTION_USERS,
    SUBCOLLECTION_ADDRESSES,
    SUBCOLLECTION_VEHICLES,
    user_subcollection,
)
from byki_admin.infrastructure.firebase.normalization import (
    as_bool,
    as_dict,
    as_float,
    as_int,
    as_optional_str,
    as_str,
    as_str_list,
    resolve_aliases,
)
from byki_admin.infrastructure.firebase.store import DocumentStore, FieldFilter, OrderBy
from byki_admin.shared.utils.datetime import (
    parse_firestore_date,
    parse_optional_date,
    start_of_month,
    utc_now,
)

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 50


def transform_user(doc_id: str, data: dict[str, Any]) -> User:
    """Normalize a raw user document, accepting legacy field names. Never raises."""
    aliased = resolve_aliases("user", data)
    status = data.get("status")
    return User(
        id=doc_id,
        email=as_str(data.get("email")),
        name=as_str(aliased["name"]),
        phone=as_optional_str(aliased["phone"]),
        profile_image_url=as_optional_str(aliased["profileImageUrl"]),
        role=UserRole.parse(data.get("role"), UserRole.USER),
        device_tokens=as_str_list(data.get("deviceTokens")),
        created_at=parse_firestore_date(data.get("createdAt")),
        updated_at=parse_firestore_date(data.get("updatedAt")),
        status=UserStatus.parse(status, UserStatus.ACTIVE) if status else None,
        suspended_at=parse_optional_date(data.get("suspendedAt")),
        suspension_reason=as_optional_str(data.get("suspensionReason")),
        banned_at=parse_optional_date(data.get("bannedAt")),
        ban_reason=as_optional_str(data.get("banReason")),
    )


def transform_vehicle(doc_id: str, user_id: str, data: dict[str, Any]) -> Vehicle:
    return Vehicle(
        id=doc_id,
        user_id=user_id,
        brand=as_str(data.get("brand")),
        model=as_str(data.get("model")),
        year=as_int(data.get("year")),
        variant=as_str(data.get("variant")),
        license_plate=as_optional_str(data.get("licensePlate")),
        is_primary=as_bool(data.get("isPrimary"), False),
        specs=as_dict(data.get("specs")),
        created_at=parse_optional_date(data.get("createdAt")),
        updated_at=parse_optional_date(data.get("updatedAt")),
    )


def transform_address(doc_id: str, user_id: str, data: dict[str, Any]) -> Address:
    return Address(
        id=doc_id,
        user_id=user_id,
        label=as_str(data.get("label")),
        full_address=as_str(data.get("fullAddress")),
        latitude=as_float(data.get("latitude")),
        longitude=as_float(data.get("longitude")),
        is_default=as_bool(data.get("isDefault"), False),
    )


def transform_loyalty_account(user_id: str, data: dict[str, Any]) -> LoyaltyAccount:
    """Stored tier wins; accounts without one get the tier their lifetime points earn."""
    lifetime = as_int(data.get("lifetimePoints"))
    return LoyaltyAccount(
        user_id=user_id,
        total_points=as_int(data.get("totalPoints")),
        lifetime_points=lifetime,
        tier=LoyaltyTier.parse(data.get("tier"), tier_for_points(lifetime)),
        created_at=parse_optional_date(data.get("createdAt")),
        updated_at=parse_optional_date(data.get("updatedAt")),
    )


def _matches_search(user: User, term: str) -> bool:
    return (
        term in user.name.lower()
        or term in user.email.lower()
        or (user.phone is not None and term in user.phone)
    )


class FirestoreUserService:
    """App users: paging, profile edits, moderation and related records."""

    def __init__(self, store: DocumentStore, tz: tzinfo = UTC) -> None:
        self._store = store
        self._tz = tz

    async def get_users(
        self,
        page_size: int = DEFAULT_PAGE_SIZE,
        start_after_id: str | None = None,
        search_term: str | None = None,
        role: UserRole | None = None,
    ) -> UserPage:
        """One page of users, newest first.

        The search term (name, email or phone) only filters the fetched
        page. ``last_doc_id`` is the cursor for the next page; it is None
        when the ordered query was rejected and the page was built from a
        full fetch.
        """
        page_size = page_size or DEFAULT_PAGE_SIZE
        term = search_term.lower() if search_term else None
        filters = [FieldFilter("role", "==", role.value)] if role else []
        try:
            docs = await self._store.list(
                COLLECTION_USERS,
                filters,
                OrderBy("createdAt", "desc"),
                limit=page_size,
                start_after_id=start_after_id,
            )
        except (QueryFailedError, httpx.HTTPError) as e:
            logger.warning("Users query failed, falling back to full fetch: %s", e)
        else:
            users = [transform_user(d.id, d.data) for d in docs]
            if term:
                users = [u for u in users if _matches_search(u, term)]
            return UserPage(users=users, last_doc_id=docs[-1].id if docs else None)

        users = [
            transform_user(d.id, d.data)
            for d in await self._store.list_all(COLLECTION_USERS)
        ]
        users.sort(key=lambda u: (u.created_at, u.id), reverse=True)
        if role:
            users = [u for u in users if u.role == role]
        if term:
            users = [u for u in users if _matches_search(u, term)]
        return UserPage(users=users[:page_size], last_doc_id=None)

    async def get_user(self, user_id: str) -> User | None:
        doc = await self._store.get(COLLECTION_USERS, user_id)
        if doc is None:
            return None
        return transform_user(doc.id, doc.data)

    async def update_user(self, user_id: str, updates: dict[str, Any]) -> None:
        await self._store.update(
            COLLECTION_USERS, user_id, {**updates, "updatedAt": utc_now()}
        )

    async def suspend_user(self, user_id: str, reason: str) -> None:
        await self.update_user(
            user_id,
            {
                "status": UserStatus.SUSPENDED.value,
                "suspendedAt": utc_now(),
                "suspensionReason": reason,
            },
        )

    async def ban_user(self, user_id: str, reason: str) -> None:
        await self.update_user(
            user_id,
            {
                "status": UserStatus.BANNED.value,
                "bannedAt": utc_now(),
                "banReason": reason,
            },
        )

    async def reactivate_user(self, user_id: str) -> None:
        """Mark active again. Suspension and ban history stay on the record."""
        await self.update_user(user_id, {"status": UserStatus.ACTIVE.value})

    async def get_user_vehicles(self, user_id: str) -> list[Vehicle]:
        docs = await self._store.list_all(
            user_subcollection(user_id, SUBCOLLECTION_VEHICLES)
        )
        return [transform_vehicle(d.id, user_id, d.data) for d in docs]

    async def get_user_addresses(self, user_id: str) -> list[Address]:
        docs = await self._store.list_all(
            user_subcollection(user_id, SUBCOLLECTION_ADDRESSES)
        )
        return [transform_address(d.id, user_id, d.data) for d in docs]

    async def get_loyalty_account(self, user_id: str) -> LoyaltyAccount | None:
        doc = await self._store.get(COLLECTION_LOYALTY_ACCOUNTS, user_id)
        if doc is None:
            return None
        return transform_loyalty_account(user_id, doc.data)

    async def get_user_stats(self) -> UserStats:
        docs = await self._store.list_all(COLLECTION_USERS)
        month_start = start_of_month(utc_now(), self._tz)
        return UserStats(
            total=len(docs),
            new_this_month=sum(
                parse_firestore_date(d.data.get("createdAt")) >= month_start
                for d in docs
            ),
            by_role=dict(
                Counter(as_str(d.data.get("role"), UserRole.USER.value) for d in docs)
            ),
        )
