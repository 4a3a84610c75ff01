"""Firestore-backed voucher service (vouchers collection)."""

from __future__ import annotations

from typing import Any

from byki_admin.application.dtos.stats import VoucherStats
from byki_admin.domain.entities import Voucher
from byki_admin.infrastructure.firebase.collections import COLLECTION_VOUCHERS
from byki_admin.infrastructure.firebase.normalization import (
    as_bool,
    as_float,
    as_int,
    as_optional_float,
    as_str,
    as_str_list,
    resolve_aliases,
)
from byki_admin.infrastructure.firebase.services._base import list_with_fallback
from byki_admin.infrastructure.firebase.store import DocumentStore, OrderBy
from byki_admin.shared.utils.datetime import (
    parse_firestore_date,
    parse_optional_date,
    utc_now,
)


def transform_voucher(doc_id: str, data: dict[str, Any]) -> Voucher:
    """Normalize a raw voucher document, accepting legacy field names. Never raises."""
    aliased = resolve_aliases("voucher", data)
    is_percentage = data.get("isPercentage")
    if is_percentage is None:
        is_percentage = data.get("discountType") == "percentage"
    categories = data.get("applicableCategories")
    return Voucher(
        id=doc_id,
        code=as_str(data.get("code")),
        title=as_str(aliased["title"]),
        description=as_str(data.get("description")),
        discount_value=as_float(data.get("discountValue")),
        is_percentage=bool(is_percentage),
        min_spend=as_optional_float(aliased["minSpend"]),
        max_discount=as_optional_float(data.get("maxDiscount")),
        applicable_categories=(
            as_str_list(categories) if isinstance(categories, list) else None
        ),
        valid_from=parse_firestore_date(data.get("validFrom")),
        valid_until=parse_firestore_date(data.get("validUntil")),
        is_active=as_bool(data.get("isActive"), True),
        points_cost=as_int(data.get("pointsCost")),
        created_at=parse_optional_date(data.get("createdAt")),
    )


class FirestoreVoucherService:
    """Voucher CRUD and activity stats."""

    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    async def get_vouchers(self) -> list[Voucher]:
        """Newest first by creation time."""
        return await list_with_fallback(
            self._store,
            COLLECTION_VOUCHERS,
            transform_voucher,
            order_by=OrderBy("createdAt", "desc"),
            sort_key=lambda v: v.created_at,
        )

    async def get_voucher(self, voucher_id: str) -> Voucher | None:
        doc = await self._store.get(COLLECTION_VOUCHERS, voucher_id)
        if doc is None:
            return None
        return transform_voucher(doc.id, doc.data)

    async def create_voucher(self, data: dict[str, Any]) -> str:
        return await self._store.create(
            COLLECTION_VOUCHERS, {**data, "createdAt": utc_now()}
        )

    async def update_voucher(self, voucher_id: str, updates: dict[str, Any]) -> None:
        await self._store.update(COLLECTION_VOUCHERS, voucher_id, updates)

    async def delete_voucher(self, voucher_id: str) -> None:
        await self._store.delete(COLLECTION_VOUCHERS, voucher_id)

    async def toggle_voucher_status(self, voucher_id: str, is_active: bool) -> None:
        await self._store.update(COLLECTION_VOUCHERS, voucher_id, {"isActive": is_active})

    async def get_voucher_stats(self) -> VoucherStats:
        vouchers = await self.get_vouchers()
        now = utc_now()
        return VoucherStats(
            total=len(vouchers),
            active=sum(v.is_active and v.valid_until > now for v in vouchers),
            expired=sum(v.valid_until <= now for v in vouchers),
        )
