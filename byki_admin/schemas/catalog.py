"""Product, category, voucher and workshop API schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, field_validator

from byki_admin.core.constants import VOUCHER_CODE_PATTERN
from byki_admin.domain.enums import PriceChangeType, ServiceRegion, WorkshopPartnerType
from byki_admin.schemas.common import DocumentModel


class ProductCreate(DocumentModel):
    name: str = Field(..., min_length=1)
    description: str = ""
    category: str = Field(..., min_length=1)
    brand: str = ""
    price: float = Field(..., ge=0)
    original_price: float | None = Field(default=None, ge=0)
    image_urls: list[str] = Field(default_factory=list)
    specifications: dict[str, Any] = Field(default_factory=dict)
    compatible_with: list[str] = Field(default_factory=list)
    in_stock: bool = True
    stock_quantity: int = Field(default=0, ge=0)

    is_create = True

    def to_document(self) -> dict[str, Any]:
        return {**super().to_document(), "rating": 0, "reviewCount": 0}


class ProductUpdate(DocumentModel):
    name: str | None = Field(default=None, min_length=1)
    description: str | None = None
    category: str | None = None
    brand: str | None = None
    price: float | None = Field(default=None, ge=0)
    original_price: float | None = Field(default=None, ge=0)
    image_urls: list[str] | None = None
    specifications: dict[str, Any] | None = None
    compatible_with: list[str] | None = None
    in_stock: bool | None = None


class StockUpdate(BaseModel):
    quantity: int = Field(..., ge=0)


class BulkPriceUpdate(BaseModel):
    product_ids: list[str] = Field(..., min_length=1)
    type: PriceChangeType
    value: float


class ProductCategoryCreate(DocumentModel):
    is_create = True

    name: str = Field(..., min_length=1)
    description: str | None = None
    icon: str | None = None
    sort_order: int = 0
    is_active: bool = True
    specification_fields: list[dict[str, Any]] = Field(default_factory=list)


class ProductCategoryUpdate(DocumentModel):
    name: str | None = Field(default=None, min_length=1)
    description: str | None = None
    icon: str | None = None
    sort_order: int | None = None
    is_active: bool | None = None
    specification_fields: list[dict[str, Any]] | None = None


class ImageUploadResponse(BaseModel):
    url: str


class VoucherCreate(DocumentModel):
    """New voucher. Codes are stored upper-case."""

    code: str = Field(..., pattern=VOUCHER_CODE_PATTERN)
    title: str = Field(..., min_length=1)
    description: str = ""
    discount_value: float = Field(..., gt=0)
    is_percentage: bool = False
    min_spend: float | None = Field(default=None, ge=0)
    max_discount: float | None = Field(default=None, ge=0)
    applicable_categories: list[str] | None = None
    valid_from: datetime
    valid_until: datetime
    is_active: bool = True
    points_cost: int = Field(default=0, ge=0)

    @field_validator("code", mode="before")
    @classmethod
    def upper_code(cls, v: str) -> str:
        return v.strip().upper() if isinstance(v, str) else v

    is_create = True


class VoucherUpdate(DocumentModel):
    title: str | None = Field(default=None, min_length=1)
    description: str | None = None
    discount_value: float | None = Field(default=None, gt=0)
    is_percentage: bool | None = None
    min_spend: float | None = Field(default=None, ge=0)
    max_discount: float | None = Field(default=None, ge=0)
    applicable_categories: list[str] | None = None
    valid_from: datetime | None = None
    valid_until: datetime | None = None
    points_cost: int | None = Field(default=None, ge=0)


class WorkshopCreate(DocumentModel):
    is_create = True

    name: str = Field(..., min_length=1)
    address: str = Field(..., min_length=1)
    city: str | None = None
    state: str | None = None
    postcode: str | None = None
    latitude: float = 0
    longitude: float = 0
    phone: str = ""
    whatsapp: str | None = None
    email: str | None = None
    website: str | None = None
    amenities: list[str] = Field(default_factory=list)
    working_hours: dict[str, str] | None = None
    services: list[str] = Field(default_factory=list)
    specializations: list[str] = Field(default_factory=list)
    image_url: str | None = None
    gallery_images: list[str] | None = None
    is_active: bool = True
    partner_type: WorkshopPartnerType = WorkshopPartnerType.PARTNER
    region: ServiceRegion = ServiceRegion.KLANG_VALLEY
    is_hq: bool = False
    google_maps_url: str | None = None
    google_place_id: str | None = None
    coverage_areas: list[str] = Field(default_factory=list)
    max_daily_bookings: int = Field(default=10, ge=1)
    supported_categories: list[str] | None = None


class WorkshopUpdate(DocumentModel):
    name: str | None = Field(default=None, min_length=1)
    address: str | None = None
    city: str | None = None
    state: str | None = None
    postcode: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    phone: str | None = None
    whatsapp: str | None = None
    email: str | None = None
    website: str | None = None
    amenities: list[str] | None = None
    working_hours: dict[str, str] | None = None
    services: list[str] | None = None
    specializations: list[str] | None = None
    image_url: str | None = None
    gallery_images: list[str] | None = None
    partner_type: WorkshopPartnerType | None = None
    region: ServiceRegion | None = None
    is_hq: bool | None = None
    google_maps_url: str | None = None
    google_place_id: str | None = None
    coverage_areas: list[str] | None = None
    max_daily_bookings: int | None = Field(default=None, ge=1)
    supported_categories: list[str] | None = None
