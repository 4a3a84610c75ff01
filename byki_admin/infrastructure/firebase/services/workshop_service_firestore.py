"""Firestore-backed workshop service (workshops collection)."""

from __future__ import annotations

from typing import Any

from byki_admin.domain.entities import Workshop
from byki_admin.domain.entities.workshop import (
    DEFAULT_SUPPORTED_CATEGORIES,
    default_working_hours,
)
from byki_admin.domain.enums import ServiceRegion, WorkshopPartnerType
from byki_admin.infrastructure.firebase.collections import COLLECTION_WORKSHOPS
from byki_admin.infrastructure.firebase.normalization import (
    as_bool,
    as_dict,
    as_float,
    as_int,
    as_optional_str,
    as_str,
    as_str_list,
)
from byki_admin.infrastructure.firebase.services._base import list_with_fallback
from byki_admin.infrastructure.firebase.store import DocumentStore, OrderBy
from byki_admin.shared.utils.datetime import parse_firestore_date, utc_now


def transform_workshop(doc_id: str, data: dict[str, Any]) -> Workshop:
    """Normalize a raw workshop document, filling partner-program defaults. Never raises."""
    hours = as_dict(data.get("workingHours"))
    gallery = data.get("galleryImages")
    return Workshop(
        id=doc_id,
        name=as_str(data.get("name")),
        address=as_str(data.get("address")),
        city=as_optional_str(data.get("city")),
        state=as_optional_str(data.get("state")),
        postcode=as_optional_str(data.get("postcode")),
        latitude=as_float(data.get("latitude")),
        longitude=as_float(data.get("longitude")),
        phone=as_str(data.get("phone")),
        whatsapp=as_optional_str(data.get("whatsapp")),
        email=as_optional_str(data.get("email")),
        website=as_optional_str(data.get("website")),
        rating=as_float(data.get("rating")),
        review_count=as_int(data.get("reviewCount")),
        amenities=as_str_list(data.get("amenities")),
        working_hours=(
            {str(k): str(v) for k, v in hours.items()}
            if hours
            else default_working_hours()
        ),
        services=as_str_list(data.get("services")),
        specializations=as_str_list(data.get("specializations")),
        image_url=as_optional_str(data.get("imageUrl")),
        gallery_images=as_str_list(gallery) if isinstance(gallery, list) else None,
        is_active=as_bool(data.get("isActive"), True),
        created_at=parse_firestore_date(data.get("createdAt")),
        partner_type=WorkshopPartnerType.parse(
            data.get("partnerType"), WorkshopPartnerType.PARTNER
        ),
        region=ServiceRegion.parse(data.get("region"), ServiceRegion.KLANG_VALLEY),
        is_hq=as_bool(data.get("isHQ"), False),
        google_maps_url=as_optional_str(data.get("googleMapsUrl")),
        google_place_id=as_optional_str(data.get("googlePlaceId")),
        coverage_areas=as_str_list(data.get("coverageAreas")),
        max_daily_bookings=as_int(data.get("maxDailyBookings"), 10) or 10,
        supported_categories=(
            as_str_list(data.get("supportedCategories"))
            or list(DEFAULT_SUPPORTED_CATEGORIES)
        ),
    )


class FirestoreWorkshopService:
    """Partner workshop CRUD."""

    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    async def get_workshops(self) -> list[Workshop]:
        """All workshops by name."""
        return await list_with_fallback(
            self._store,
            COLLECTION_WORKSHOPS,
            transform_workshop,
            order_by=OrderBy("name", "asc"),
            sort_key=lambda w: w.name,
        )

    async def get_workshop(self, workshop_id: str) -> Workshop | None:
        doc = await self._store.get(COLLECTION_WORKSHOPS, workshop_id)
        if doc is None:
            return None
        return transform_workshop(doc.id, doc.data)

    async def create_workshop(self, data: dict[str, Any]) -> str:
        now = utc_now()
        return await self._store.create(
            COLLECTION_WORKSHOPS, {**data, "createdAt": now, "updatedAt": now}
        )

    async def update_workshop(self, workshop_id: str, updates: dict[str, Any]) -> None:
        await self._store.update(
            COLLECTION_WORKSHOPS, workshop_id, {**updates, "updatedAt": utc_now()}
        )

    async def delete_workshop(self, workshop_id: str) -> None:
        await self._store.delete(COLLECTION_WORKSHOPS, workshop_id)

    async def toggle_workshop_status(self, workshop_id: str, is_active: bool) -> None:
        await self._store.update(
            COLLECTION_WORKSHOPS,
            workshop_id,
            {"isActive": is_active, "updatedAt": utc_now()},
        )
