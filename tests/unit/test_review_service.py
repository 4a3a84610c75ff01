"""Tests for review moderation and target rating maintenance."""

from datetime import UTC, datetime, timedelta

import pytest

from byki_admin.domain.enums import ReviewTargetType
from byki_admin.infrastructure.firebase.services import FirestoreReviewService
from byki_admin.infrastructure.firebase.store import DocumentStore
from tests.fakes import FakeFirestore

CREATED = datetime(2024, 3, 1, tzinfo=UTC)


def _review(db: FakeFirestore, doc_id: str, rating: float, hours: int = 0, **fields) -> None:
    db.seed(
        "reviews",
        doc_id,
        {
            "userId": "u1",
            "targetId": "w1",
            "targetType": "workshop",
            "rating": rating,
            "createdAt": CREATED + timedelta(hours=hours),
            **fields,
        },
    )


async def test_delete_recomputes_visible_average(
    fake_db: FakeFirestore, store: DocumentStore
) -> None:
    """After a delete the target stores the rounded mean of visible reviews."""
    fake_db.seed("workshops", "w1", {"name": "Ampang", "rating": 0, "reviewCount": 0})
    for i, rating in enumerate([4, 5, 3, 5]):
        _review(fake_db, f"r{i}", rating, hours=i)
    _review(fake_db, "hidden", 1, isHidden=True)
    _review(fake_db, "unapproved", 1, isApproved=False)
    _review(fake_db, "gone", 1)
    service = FirestoreReviewService(store)

    assert await service.delete_review("gone") is True

    workshop = fake_db.docs("workshops")["w1"]
    assert workshop["rating"] == pytest.approx(4.3)
    assert workshop["reviewCount"] == 4
    assert "gone" not in fake_db.docs("reviews")


async def test_deleting_the_low_rating_raises_the_average(
    fake_db: FakeFirestore, store: DocumentStore
) -> None:
    """Ratings 4, 5, 3, 5 minus the 3 leave 4.7 over three reviews."""
    fake_db.seed("workshops", "w1", {"name": "Ampang", "rating": 4.3, "reviewCount": 4})
    for i, rating in enumerate([4, 5, 3, 5]):
        _review(fake_db, f"r{i}", rating, hours=i, isApproved=True, isHidden=False)
    service = FirestoreReviewService(store)

    assert await service.delete_review("r2") is True

    assert fake_db.docs("workshops")["w1"] == {
        "name": "Ampang",
        "rating": 4.7,
        "reviewCount": 3,
    }


async def test_delete_unknown_review_returns_false(store: DocumentStore) -> None:
    assert await FirestoreReviewService(store).delete_review("missing") is False


async def test_no_visible_reviews_leaves_target_unchanged(
    fake_db: FakeFirestore, store: DocumentStore
) -> None:
    """Removing the last visible review keeps the previous aggregate."""
    fake_db.seed("products", "p1", {"name": "Oil", "rating": 4.0, "reviewCount": 1})
    _review(fake_db, "r1", 4, targetId="p1", targetType="product")
    service = FirestoreReviewService(store)

    await service.delete_review("r1")

    assert fake_db.docs("products")["p1"]["rating"] == 4.0
    assert fake_db.docs("products")["p1"]["reviewCount"] == 1


async def test_pending_reviews(fake_db: FakeFirestore, store: DocumentStore) -> None:
    """Pending means neither approved nor hidden."""
    _review(fake_db, "r1", 5, isApproved=False, isHidden=False)
    _review(fake_db, "r2", 5, isApproved=False, isHidden=True)
    _review(fake_db, "r3", 5)

    pending = await FirestoreReviewService(store).get_pending_reviews()

    assert [r.id for r in pending] == ["r1"]


async def test_approve_and_hide(fake_db: FakeFirestore, store: DocumentStore) -> None:
    _review(fake_db, "r1", 5, isApproved=False)
    service = FirestoreReviewService(store)

    await service.approve_review("r1")
    await service.hide_review("r1")
    review = await service.get_review("r1")

    assert review is not None
    assert review.is_approved is True
    assert review.is_hidden is True
    assert review.is_visible is False


async def test_review_stats(fake_db: FakeFirestore, store: DocumentStore) -> None:
    """Histogram has every star 1-5; ratings round half-up into buckets."""
    _review(fake_db, "r1", 4.5, hours=1)
    _review(fake_db, "r2", 2, hours=2, isApproved=False)
    _review(fake_db, "r3", 5, hours=3, isHidden=True)
    _review(fake_db, "r4", 4, hours=4, targetType="product", targetId="p1")

    stats = await FirestoreReviewService(store).get_review_stats(ReviewTargetType.WORKSHOP)

    assert stats.total == 3
    assert stats.by_rating == {1: 0, 2: 1, 3: 0, 4: 0, 5: 2}
    assert stats.average_rating == pytest.approx(3.8)
    assert stats.pending == 1
    assert stats.approved == 2
    assert stats.hidden == 1


async def test_defaults_for_sparse_review(fake_db: FakeFirestore, store: DocumentStore) -> None:
    """Missing author and flags take their defaults."""
    fake_db.seed("reviews", "r1", {"rating": 3})
    review = await FirestoreReviewService(store).get_review("r1")
    assert review is not None
    assert review.user_name == "Anonymous"
    assert review.target_type == ReviewTargetType.PRODUCT
    assert review.is_approved is True
    assert review.is_hidden is False
