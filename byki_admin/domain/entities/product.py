"""Catalog entities: products and their categories."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class Product:
    """Normalized product (legacy field names resolved by the transform)."""

    id: str
    created_at: datetime
    updated_at: datetime
    name: str = ""
    description: str = ""
    category: str = ""
    brand: str = ""
    price: float = 0
    original_price: float | None = None
    image_urls: list[str] = field(default_factory=list)
    specifications: dict[str, Any] = field(default_factory=dict)
    compatible_with: list[str] = field(default_factory=list)
    in_stock: bool = False
    stock_quantity: int = 0
    rating: float = 0
    review_count: int = 0


@dataclass(frozen=True)
class ProductCategory:
    id: str
    name: str = ""
    description: str | None = None
    icon: str | None = None
    sort_order: int = 0
    is_active: bool = True
    specification_fields: list[dict[str, Any]] = field(default_factory=list)
