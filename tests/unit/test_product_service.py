"""Tests for stock, bulk repricing, images and inventory stats."""

from datetime import UTC, datetime

import pytest

from byki_admin.application.dtos.commands import PriceChange
from byki_admin.domain.enums import PriceChangeType
from byki_admin.domain.exceptions import (
    StorageNotConfiguredException,
    ValidationException,
)
from byki_admin.infrastructure.firebase._rest_client import BatchWriteError
from byki_admin.infrastructure.firebase.services import FirestoreProductService
from byki_admin.infrastructure.firebase.store import DocumentStore
from tests.fakes import FakeFirestore

CREATED = datetime(2024, 3, 1, tzinfo=UTC)


class _FakeStorage:
    def __init__(self, fail_delete: bool = False) -> None:
        self.uploaded: list[tuple[str, bytes, str]] = []
        self.deleted: list[str] = []
        self.fail_delete = fail_delete

    async def upload(self, path: str, content: bytes, content_type: str) -> str:
        self.uploaded.append((path, content, content_type))
        return f"https://cdn.example/{path}"

    async def delete(self, url: str) -> None:
        if self.fail_delete:
            raise RuntimeError("bucket unavailable")
        self.deleted.append(url)


@pytest.mark.parametrize(
    ("change_type", "value", "price", "expected"),
    [
        (PriceChangeType.PERCENTAGE, 10, 19.99, 21.99),
        (PriceChangeType.PERCENTAGE, -15, 100, 85.0),
        (PriceChangeType.FIXED, 5, 20.5, 25.5),
        (PriceChangeType.FIXED, -2.5, 10, 7.5),
    ],
)
def test_price_change_rounds_to_cents(
    change_type: PriceChangeType, value: float, price: float, expected: float
) -> None:
    """Percentage and fixed changes round half-up to two decimals."""
    assert PriceChange(change_type, value).apply(price) == pytest.approx(expected)


async def test_update_stock_sets_in_stock_flag(
    fake_db: FakeFirestore, store: DocumentStore
) -> None:
    """inStock follows the quantity."""
    fake_db.seed("products", "p1", {"name": "Oil", "stockQuantity": 5, "inStock": True})
    service = FirestoreProductService(store)

    await service.update_stock("p1", 0)

    product = await service.get_product("p1")
    assert product is not None
    assert product.stock_quantity == 0
    assert product.in_stock is False


async def test_bulk_update_prices_is_one_batch(
    fake_db: FakeFirestore, store: DocumentStore
) -> None:
    """Existing products are repriced in a single batch; unknown ids are skipped."""
    fake_db.seed("products", "p1", {"name": "Oil", "price": 100.0})
    fake_db.seed("products", "p2", {"name": "Filter", "price": 20.0})
    service = FirestoreProductService(store)

    repriced = await service.bulk_update_prices(
        ["p1", "p2", "missing"], PriceChange(PriceChangeType.PERCENTAGE, 10)
    )

    assert repriced == 2
    assert len(fake_db.batches) == 1
    assert fake_db.docs("products")["p1"]["price"] == pytest.approx(110.0)
    assert fake_db.docs("products")["p2"]["price"] == pytest.approx(22.0)


async def test_bulk_update_prices_all_or_nothing(
    fake_db: FakeFirestore, store: DocumentStore
) -> None:
    """When the commit fails no product is repriced."""
    fake_db.seed("products", "p1", {"name": "Oil", "price": 100.0})
    fake_db.seed("products", "p2", {"name": "Filter", "price": 20.0})
    fake_db.failing_doc_ids.add("p2")
    service = FirestoreProductService(store)

    with pytest.raises(BatchWriteError):
        await service.bulk_update_prices(
            ["p1", "p2"], PriceChange(PriceChangeType.FIXED, 1)
        )

    assert fake_db.docs("products")["p1"]["price"] == 100.0
    assert fake_db.docs("products")["p2"]["price"] == 20.0


async def test_inventory_stats_and_low_stock(
    fake_db: FakeFirestore, store: DocumentStore
) -> None:
    """Low stock means some stock left but at most the threshold."""
    fake_db.seed(
        "products",
        "p1",
        {"category": "oil", "price": 10.0, "stockQuantity": 3, "createdAt": CREATED},
    )
    fake_db.seed(
        "products",
        "p2",
        {"category": "oil", "price": 5.0, "stockQuantity": 0, "createdAt": CREATED},
    )
    fake_db.seed(
        "products",
        "p3",
        {"category": "tyre", "price": 200.0, "stockQuantity": 50, "createdAt": CREATED},
    )
    service = FirestoreProductService(store, low_stock_threshold=10)

    stats = await service.get_inventory_stats()
    low = await service.get_low_stock_products()

    assert stats.total_products == 3
    assert stats.in_stock == 2
    assert stats.out_of_stock == 1
    assert stats.low_stock == 1
    assert stats.total_value == pytest.approx(10_030.0)
    assert stats.by_category == {"oil": 2, "tyre": 1}
    assert [p.id for p in low] == ["p1"]
    wider = await service.get_low_stock_products(threshold=60)
    assert sorted(p.id for p in wider) == ["p1", "p3"]


async def test_upload_requires_storage(store: DocumentStore) -> None:
    """Uploading without a configured bucket raises StorageNotConfigured."""
    service = FirestoreProductService(store)
    with pytest.raises(StorageNotConfiguredException):
        await service.upload_product_image("p1", "a.png", b"x", "image/png")


async def test_upload_validates_type_and_size(store: DocumentStore) -> None:
    """Only images up to 5 MB are accepted."""
    service = FirestoreProductService(store, _FakeStorage())
    with pytest.raises(ValidationException):
        await service.upload_product_image("p1", "a.txt", b"x", "text/plain")
    with pytest.raises(ValidationException):
        await service.upload_product_image(
            "p1", "a.png", b"x" * (5 * 1024 * 1024 + 1), "image/png"
        )


async def test_upload_stores_under_product_folder(store: DocumentStore) -> None:
    storage = _FakeStorage()
    service = FirestoreProductService(store, storage)

    url = await service.upload_product_image("p1", "front.jpg", b"img", "image/jpeg")

    [(path, content, content_type)] = storage.uploaded
    assert path.startswith("products/p1/")
    assert path.endswith("_front.jpg")
    assert url == f"https://cdn.example/{path}"
    assert content_type == "image/jpeg"


async def test_delete_image_failures_are_logged_not_raised(store: DocumentStore) -> None:
    service = FirestoreProductService(store, _FakeStorage(fail_delete=True))
    await service.delete_product_image("https://cdn.example/products/p1/a.png")
