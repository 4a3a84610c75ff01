"""Firestore-backed review moderation service (reviews collection).

Approving, hiding or deleting a review changes which reviews are visible,
so ``update_aggregate_rating`` recomputes the rating and review count
stored on the reviewed workshop or product.
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import Any

from byki_admin.application.dtos.stats import ReviewStats
from byki_admin.domain.entities import Review
from byki_admin.domain.enums import ReviewTargetType
from byki_admin.infrastructure.firebase.collections import (
    COLLECTION_PRODUCTS,
    COLLECTION_REVIEWS,
    COLLECTION_WORKSHOPS,
)
from byki_admin.infrastructure.firebase.normalization import (
    as_bool,
    as_float,
    as_optional_str,
    as_str,
    as_str_list,
)
from byki_admin.infrastructure.firebase.services._base import Match, list_with_fallback
from byki_admin.infrastructure.firebase.store import DocumentStore, OrderBy
from byki_admin.shared.utils.datetime import parse_firestore_date, utc_now
from byki_admin.shared.utils.numbers import round_half_up

logger = logging.getLogger(__name__)

_NEWEST_FIRST = OrderBy("createdAt", "desc")

_TARGET_COLLECTIONS: dict[ReviewTargetType, str] = {
    ReviewTargetType.WORKSHOP: COLLECTION_WORKSHOPS,
    ReviewTargetType.PRODUCT: COLLECTION_PRODUCTS,
}


def transform_review(doc_id: str, data: dict[str, Any]) -> Review:
    """Normalize a raw review document. Never raises."""
    return Review(
        id=doc_id,
        user_id=as_str(data.get("userId")),
        user_name=as_str(data.get("userName")) or "Anonymous",
        user_photo_url=as_optional_str(data.get("userPhotoUrl")),
        target_id=as_str(data.get("targetId")),
        target_type=ReviewTargetType.parse(
            data.get("targetType"), ReviewTargetType.PRODUCT
        ),
        rating=as_float(data.get("rating")),
        comment=as_optional_str(data.get("comment")),
        image_urls=as_str_list(data.get("imageUrls")),
        is_approved=as_bool(data.get("isApproved"), True),
        is_hidden=as_bool(data.get("isHidden"), False),
        created_at=parse_firestore_date(data.get("createdAt")),
        updated_at=parse_firestore_date(data.get("updatedAt")),
    )


class FirestoreReviewService:
    """Review listing, moderation and target rating maintenance."""

    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    async def get_reviews(
        self,
        target_type: ReviewTargetType | None = None,
        target_id: str | None = None,
        user_id: str | None = None,
        min_rating: float | None = None,
        max_rating: float | None = None,
        is_approved: bool | None = None,
        is_hidden: bool | None = None,
    ) -> list[Review]:
        """Newest first. Target and author are queried; the rest filtered locally."""
        reviews = await list_with_fallback(
            self._store,
            COLLECTION_REVIEWS,
            transform_review,
            order_by=_NEWEST_FIRST,
            sort_key=lambda r: r.created_at,
            matches=[
                Match("targetType", target_type),
                Match("targetId", target_id),
                Match("userId", user_id),
            ],
        )
        if min_rating is not None:
            reviews = [r for r in reviews if r.rating >= min_rating]
        if max_rating is not None:
            reviews = [r for r in reviews if r.rating <= max_rating]
        if is_approved is not None:
            reviews = [r for r in reviews if r.is_approved == is_approved]
        if is_hidden is not None:
            reviews = [r for r in reviews if r.is_hidden == is_hidden]
        return reviews

    async def get_review(self, review_id: str) -> Review | None:
        doc = await self._store.get(COLLECTION_REVIEWS, review_id)
        if doc is None:
            return None
        return transform_review(doc.id, doc.data)

    async def get_target_reviews(
        self, target_id: str, target_type: ReviewTargetType
    ) -> list[Review]:
        return await list_with_fallback(
            self._store,
            COLLECTION_REVIEWS,
            transform_review,
            order_by=_NEWEST_FIRST,
            sort_key=lambda r: r.created_at,
            matches=[Match("targetId", target_id), Match("targetType", target_type)],
        )

    async def approve_review(self, review_id: str) -> None:
        await self._store.update(
            COLLECTION_REVIEWS,
            review_id,
            {"isApproved": True, "updatedAt": utc_now()},
        )

    async def hide_review(self, review_id: str, hide: bool = True) -> None:
        await self._store.update(
            COLLECTION_REVIEWS,
            review_id,
            {"isHidden": hide, "updatedAt": utc_now()},
        )

    async def delete_review(self, review_id: str) -> bool:
        """Delete a review and refresh its target's rating.

        Returns False when the review does not exist. The delete and the
        recompute are separate writes.
        """
        review = await self.get_review(review_id)
        if review is None:
            return False
        await self._store.delete(COLLECTION_REVIEWS, review_id)
        await self.update_aggregate_rating(review.target_id, review.target_type)
        return True

    async def update_aggregate_rating(
        self, target_id: str, target_type: ReviewTargetType
    ) -> None:
        """Store the mean visible rating (1 decimal) and count on the target.

        With no visible reviews left the target keeps its previous values.
        """
        visible = [
            r
            for r in await self.get_target_reviews(target_id, target_type)
            if r.is_visible
        ]
        if not visible:
            logger.info(
                "No visible reviews for %s %s; aggregate left unchanged",
                target_type.value,
                target_id,
            )
            return
        average = sum(r.rating for r in visible) / len(visible)
        await self._store.update(
            _TARGET_COLLECTIONS[target_type],
            target_id,
            {
                "rating": round_half_up(average, 1),
                "reviewCount": len(visible),
            },
        )

    async def get_review_stats(
        self, target_type: ReviewTargetType | None = None
    ) -> ReviewStats:
        reviews = await self.get_reviews(target_type=target_type)
        counts = Counter(int(round_half_up(r.rating)) for r in reviews)
        average = (
            round_half_up(sum(r.rating for r in reviews) / len(reviews), 1)
            if reviews
            else 0
        )
        return ReviewStats(
            total=len(reviews),
            average_rating=average,
            pending=sum(not r.is_approved and not r.is_hidden for r in reviews),
            approved=sum(r.is_approved for r in reviews),
            hidden=sum(r.is_hidden for r in reviews),
            by_rating={star: counts.get(star, 0) for star in range(1, 6)},
        )

    async def get_recent_reviews(self, limit: int = 10) -> list[Review]:
        return await list_with_fallback(
            self._store,
            COLLECTION_REVIEWS,
            transform_review,
            order_by=_NEWEST_FIRST,
            sort_key=lambda r: r.created_at,
            limit=limit,
        )

    async def get_pending_reviews(self) -> list[Review]:
        """Reviews awaiting moderation: not approved and not hidden."""
        return await list_with_fallback(
            self._store,
            COLLECTION_REVIEWS,
            transform_review,
            order_by=_NEWEST_FIRST,
            sort_key=lambda r: r.created_at,
            matches=[Match("isApproved", False), Match("isHidden", False)],
        )
