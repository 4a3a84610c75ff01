"""Firestore-backed FAQ service (faqs, faq_categories)."""

from __future__ import annotations

import asyncio
from collections import Counter
from typing import Any

from byki_admin.application.dtos.stats import FAQStats
from byki_admin.domain.entities import FAQ, FAQCategory
from byki_admin.infrastructure.firebase.collections import (
    COLLECTION_FAQ_CATEGORIES,
    COLLECTION_FAQS,
)
from byki_admin.infrastructure.firebase.normalization import as_bool, as_int, as_str
from byki_admin.infrastructure.firebase.services._base import Match, list_with_fallback
from byki_admin.infrastructure.firebase.store import DocumentStore, OrderBy
from byki_admin.shared.utils.datetime import parse_firestore_date, utc_now

_BY_SORT_ORDER = OrderBy("sortOrder", "asc")


def transform_faq(doc_id: str, data: dict[str, Any]) -> FAQ:
    return FAQ(
        id=doc_id,
        question=as_str(data.get("question")),
        answer=as_str(data.get("answer")),
        category=as_str(data.get("category")) or "General",
        sort_order=as_int(data.get("sortOrder")),
        is_active=as_bool(data.get("isActive"), True),
        created_at=parse_firestore_date(data.get("createdAt")),
        updated_at=parse_firestore_date(data.get("updatedAt")),
    )


def transform_faq_category(doc_id: str, data: dict[str, Any]) -> FAQCategory:
    return FAQCategory(
        id=doc_id,
        name=as_str(data.get("name")),
        sort_order=as_int(data.get("sortOrder")),
        is_active=as_bool(data.get("isActive"), True),
    )


class FirestoreFAQService:
    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    async def get_faqs(
        self, category: str | None = None, is_active: bool | None = None
    ) -> list[FAQ]:
        return await list_with_fallback(
            self._store,
            COLLECTION_FAQS,
            transform_faq,
            order_by=_BY_SORT_ORDER,
            sort_key=lambda f: f.sort_order,
            matches=[Match("category", category), Match("isActive", is_active)],
        )

    async def get_faq(self, faq_id: str) -> FAQ | None:
        doc = await self._store.get(COLLECTION_FAQS, faq_id)
        if doc is None:
            return None
        return transform_faq(doc.id, doc.data)

    async def create_faq(self, data: dict[str, Any]) -> str:
        now = utc_now()
        return await self._store.create(
            COLLECTION_FAQS, {**data, "createdAt": now, "updatedAt": now}
        )

    async def update_faq(self, faq_id: str, updates: dict[str, Any]) -> None:
        await self._store.update(
            COLLECTION_FAQS, faq_id, {**updates, "updatedAt": utc_now()}
        )

    async def delete_faq(self, faq_id: str) -> None:
        await self._store.delete(COLLECTION_FAQS, faq_id)

    async def toggle_faq_status(self, faq_id: str, is_active: bool) -> None:
        await self.update_faq(faq_id, {"isActive": is_active})

    async def reorder_faqs(self, order: list[tuple[str, int]]) -> None:
        """Write each (faq id, sortOrder) pair.

        The writes are independent: if one fails the others may already
        have been applied.
        """
        await asyncio.gather(
            *(
                self._store.update(COLLECTION_FAQS, faq_id, {"sortOrder": sort_order})
                for faq_id, sort_order in order
            )
        )

    # Categories

    async def get_faq_categories(self) -> list[FAQCategory]:
        return await list_with_fallback(
            self._store,
            COLLECTION_FAQ_CATEGORIES,
            transform_faq_category,
            order_by=_BY_SORT_ORDER,
            sort_key=lambda c: c.sort_order,
        )

    async def create_faq_category(self, data: dict[str, Any]) -> str:
        return await self._store.create(COLLECTION_FAQ_CATEGORIES, data)

    async def update_faq_category(
        self, category_id: str, updates: dict[str, Any]
    ) -> None:
        await self._store.update(COLLECTION_FAQ_CATEGORIES, category_id, updates)

    async def delete_faq_category(self, category_id: str) -> None:
        await self._store.delete(COLLECTION_FAQ_CATEGORIES, category_id)

    async def get_faq_stats(self) -> FAQStats:
        faqs = [
            transform_faq(d.id, d.data)
            for d in await self._store.list_all(COLLECTION_FAQS)
        ]
        return FAQStats(
            total=len(faqs),
            active=sum(f.is_active for f in faqs),
            by_category=dict(Counter(f.category for f in faqs)),
        )
