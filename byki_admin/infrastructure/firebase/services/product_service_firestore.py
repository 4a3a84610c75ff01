"""Firestore-backed product catalog service (products, product_categories)."""

from __future__ import annotations

import logging
from collections import Counter
from typing import Any

from byki_admin.application.dtos.commands import PriceChange
from byki_admin.application.dtos.stats import InventoryStats
from byki_admin.core.constants import ALLOWED_IMAGE_TYPES, MAX_IMAGE_SIZE_BYTES
from byki_admin.domain.entities import Product, ProductCategory
from byki_admin.domain.exceptions import (
    StorageNotConfiguredException,
    ValidationException,
)
from byki_admin.infrastructure.firebase.collections import (
    COLLECTION_PRODUCT_CATEGORIES,
    COLLECTION_PRODUCTS,
)
from byki_admin.infrastructure.firebase.normalization import (
    as_bool,
    as_dict,
    as_float,
    as_int,
    as_list,
    as_optional_float,
    as_optional_str,
    as_str,
    as_str_list,
    resolve_aliases,
)
from byki_admin.infrastructure.firebase.services._base import Match, list_with_fallback
from byki_admin.infrastructure.firebase.storage import FirebaseStorageClient
from byki_admin.infrastructure.firebase.store import DocumentStore, OrderBy
from byki_admin.shared.utils.datetime import parse_firestore_date, utc_now

logger = logging.getLogger(__name__)

DEFAULT_LOW_STOCK_THRESHOLD = 10


def transform_product(doc_id: str, data: dict[str, Any]) -> Product:
    """Normalize a raw product document, accepting legacy field names. Never raises."""
    aliased = resolve_aliases("product", data)
    stock = as_int(aliased["stockQuantity"])
    in_stock = data.get("inStock")
    return Product(
        id=doc_id,
        name=as_str(data.get("name")),
        description=as_str(data.get("description")),
        category=as_str(data.get("category")),
        brand=as_str(data.get("brand")),
        price=as_float(data.get("price")),
        original_price=as_optional_float(data.get("originalPrice")),
        image_urls=as_str_list(aliased["imageUrls"]),
        specifications=as_dict(aliased["specifications"]),
        compatible_with=as_str_list(aliased["compatibleWith"]),
        in_stock=bool(in_stock) if in_stock is not None else stock > 0,
        stock_quantity=stock,
        rating=as_float(data.get("rating")),
        review_count=as_int(data.get("reviewCount")),
        created_at=parse_firestore_date(data.get("createdAt")),
        updated_at=parse_firestore_date(data.get("updatedAt")),
    )


def transform_category(doc_id: str, data: dict[str, Any]) -> ProductCategory:
    return ProductCategory(
        id=doc_id,
        name=as_str(data.get("name")),
        description=as_optional_str(data.get("description")),
        icon=as_optional_str(data.get("icon")),
        sort_order=as_int(data.get("sortOrder")),
        is_active=as_bool(data.get("isActive"), True),
        specification_fields=[
            f for f in as_list(data.get("specificationFields")) if isinstance(f, dict)
        ],
    )


class FirestoreProductService:
    """Catalog CRUD, stock and price maintenance, images and inventory stats."""

    def __init__(
        self,
        store: DocumentStore,
        storage: FirebaseStorageClient | None = None,
        low_stock_threshold: int = DEFAULT_LOW_STOCK_THRESHOLD,
    ) -> None:
        self._store = store
        self._storage = storage
        self._low_stock_threshold = low_stock_threshold

    # Products

    async def get_products(
        self,
        category: str | None = None,
        brand: str | None = None,
        in_stock: bool | None = None,
        min_price: float | None = None,
        max_price: float | None = None,
    ) -> list[Product]:
        """Newest first. Only category is filtered by the store; the rest locally."""
        products = await list_with_fallback(
            self._store,
            COLLECTION_PRODUCTS,
            transform_product,
            order_by=OrderBy("createdAt", "desc"),
            sort_key=lambda p: p.created_at,
            matches=[Match("category", category)],
        )
        if brand:
            products = [p for p in products if p.brand == brand]
        if in_stock is not None:
            products = [p for p in products if p.in_stock == in_stock]
        if min_price:
            products = [p for p in products if p.price >= min_price]
        if max_price:
            products = [p for p in products if p.price <= max_price]
        return products

    async def get_product(self, product_id: str) -> Product | None:
        doc = await self._store.get(COLLECTION_PRODUCTS, product_id)
        if doc is None:
            return None
        return transform_product(doc.id, doc.data)

    async def create_product(self, data: dict[str, Any]) -> str:
        now = utc_now()
        return await self._store.create(
            COLLECTION_PRODUCTS, {**data, "createdAt": now, "updatedAt": now}
        )

    async def update_product(self, product_id: str, updates: dict[str, Any]) -> None:
        await self._store.update(
            COLLECTION_PRODUCTS, product_id, {**updates, "updatedAt": utc_now()}
        )

    async def delete_product(self, product_id: str) -> None:
        await self._store.delete(COLLECTION_PRODUCTS, product_id)

    async def update_stock(self, product_id: str, quantity: int) -> None:
        """Set stockQuantity; inStock follows (quantity > 0)."""
        await self._store.update(
            COLLECTION_PRODUCTS,
            product_id,
            {
                "stockQuantity": quantity,
                "inStock": quantity > 0,
                "updatedAt": utc_now(),
            },
        )

    async def bulk_update_prices(
        self, product_ids: list[str], change: PriceChange
    ) -> int:
        """Reprice products in one atomic batch. Unknown ids are skipped.

        Returns the number of products repriced.
        """
        now = utc_now()
        updates = []
        for product_id in product_ids:
            product = await self.get_product(product_id)
            if product is None:
                continue
            updates.append(
                (
                    COLLECTION_PRODUCTS,
                    product_id,
                    {"price": change.apply(product.price), "updatedAt": now},
                )
            )
        await self._store.batch_update(updates)
        logger.info("Repriced %s of %s products", len(updates), len(product_ids))
        return len(updates)

    # Images

    async def upload_product_image(
        self, product_id: str, filename: str, content: bytes, content_type: str
    ) -> str:
        """Store an image under products/{id}/ and return its download URL."""
        if self._storage is None:
            raise StorageNotConfiguredException()
        if content_type not in ALLOWED_IMAGE_TYPES:
            raise ValidationException(
                f"Unsupported image type: {content_type}", field="file"
            )
        if len(content) > MAX_IMAGE_SIZE_BYTES:
            raise ValidationException("Image exceeds 5 MB", field="file")
        millis = int(utc_now().timestamp() * 1000)
        return await self._storage.upload(
            f"products/{product_id}/{millis}_{filename}", content, content_type
        )

    async def delete_product_image(self, image_url: str) -> None:
        """Delete an image by URL. Storage failures are logged, not raised."""
        if self._storage is None:
            raise StorageNotConfiguredException()
        try:
            await self._storage.delete(image_url)
        except Exception:
            logger.exception("Error deleting image %s", image_url)

    # Categories

    async def get_categories(self) -> list[ProductCategory]:
        return await list_with_fallback(
            self._store,
            COLLECTION_PRODUCT_CATEGORIES,
            transform_category,
            order_by=OrderBy("sortOrder", "asc"),
            sort_key=lambda c: c.sort_order,
        )

    async def create_category(self, data: dict[str, Any]) -> str:
        return await self._store.create(COLLECTION_PRODUCT_CATEGORIES, data)

    async def update_category(self, category_id: str, updates: dict[str, Any]) -> None:
        await self._store.update(COLLECTION_PRODUCT_CATEGORIES, category_id, updates)

    async def delete_category(self, category_id: str) -> None:
        await self._store.delete(COLLECTION_PRODUCT_CATEGORIES, category_id)

    # Inventory

    def _is_low_stock(self, product: Product, threshold: int) -> bool:
        return 0 < product.stock_quantity <= threshold

    async def get_inventory_stats(self) -> InventoryStats:
        products = await self.get_products()
        return InventoryStats(
            total_products=len(products),
            in_stock=sum(p.in_stock for p in products),
            out_of_stock=sum(not p.in_stock for p in products),
            low_stock=sum(
                self._is_low_stock(p, self._low_stock_threshold) for p in products
            ),
            total_value=sum(p.price * p.stock_quantity for p in products),
            by_category=dict(Counter(p.category for p in products)),
        )

    async def get_low_stock_products(self, threshold: int | None = None) -> list[Product]:
        """Products with some stock left but at most ``threshold`` units."""
        limit = self._low_stock_threshold if threshold is None else threshold
        return [p for p in await self.get_products() if self._is_low_stock(p, limit)]
