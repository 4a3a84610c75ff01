"""Firestore-backed bookings service (bookings collection)."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta, tzinfo
from typing import Any

from byki_admin.application.dtos.stats import BookingStats
from byki_admin.domain.entities import Booking
from byki_admin.domain.enums import BookingStatus
from byki_admin.infrastructure.firebase.collections import COLLECTION_BOOKINGS
from byki_admin.infrastructure.firebase.normalization import (
    as_optional_float,
    as_optional_str,
    as_str,
    as_str_list,
)
from byki_admin.infrastructure.firebase.services._base import Match, list_with_fallback
from byki_admin.infrastructure.firebase.store import (
    DocumentStore,
    FieldFilter,
    OrderBy,
    StoredDocument,
)
from byki_admin.shared.utils.datetime import parse_firestore_date, start_of_day, utc_now


def transform_booking(doc_id: str, data: dict[str, Any]) -> Booking:
    """Normalize a raw booking document. Never raises."""
    return Booking(
        id=doc_id,
        user_id=as_str(data.get("userId")),
        workshop_id=as_str(data.get("workshopId")),
        workshop_name=as_optional_str(data.get("workshopName")),
        order_id=as_optional_str(data.get("orderId")),
        appointment_date=parse_firestore_date(data.get("appointmentDate")),
        time_slot=as_str(data.get("timeSlot")),
        status=BookingStatus.parse(data.get("status"), BookingStatus.PENDING),
        vehicle_id=as_optional_str(data.get("vehicleId")),
        services=as_str_list(data.get("services")),
        notes=as_optional_str(data.get("notes")),
        cancellation_fee=as_optional_float(data.get("cancellationFee")),
        created_at=parse_firestore_date(data.get("createdAt")),
        updated_at=parse_firestore_date(data.get("updatedAt")),
    )


class FirestoreBookingService:
    """Workshop bookings: listing, status changes, rescheduling and stats."""

    def __init__(self, store: DocumentStore, tz: tzinfo = UTC) -> None:
        self._store = store
        self._tz = tz

    def _today_window(self) -> list[FieldFilter]:
        today = start_of_day(utc_now(), self._tz)
        return [
            FieldFilter("appointmentDate", ">=", today),
            FieldFilter("appointmentDate", "<", today + timedelta(days=1)),
        ]

    async def get_bookings(
        self,
        status: BookingStatus | None = None,
        user_id: str | None = None,
        workshop_id: str | None = None,
        start_date: datetime | None = None,
        end_date: datetime | None = None,
    ) -> list[Booking]:
        """Latest appointment first; the date range applies to appointment_date."""
        bookings = await list_with_fallback(
            self._store,
            COLLECTION_BOOKINGS,
            transform_booking,
            order_by=OrderBy("appointmentDate", "desc"),
            sort_key=lambda b: b.appointment_date,
            matches=[
                Match("status", status),
                Match("workshopId", workshop_id),
                Match("userId", user_id),
            ],
        )
        if start_date is not None:
            bookings = [b for b in bookings if b.appointment_date >= start_date]
        if end_date is not None:
            bookings = [b for b in bookings if b.appointment_date <= end_date]
        return bookings

    async def get_booking(self, booking_id: str) -> Booking | None:
        doc = await self._store.get(COLLECTION_BOOKINGS, booking_id)
        if doc is None:
            return None
        return transform_booking(doc.id, doc.data)

    async def update_booking_status(
        self, booking_id: str, status: BookingStatus
    ) -> None:
        await self._store.update(
            COLLECTION_BOOKINGS,
            booking_id,
            {"status": status.value, "updatedAt": utc_now()},
        )

    async def reschedule_booking(
        self, booking_id: str, new_date: datetime, new_time_slot: str
    ) -> None:
        """Move the appointment. Only offered for pending bookings, not enforced here."""
        await self._store.update(
            COLLECTION_BOOKINGS,
            booking_id,
            {
                "appointmentDate": new_date,
                "timeSlot": new_time_slot,
                "updatedAt": utc_now(),
            },
        )

    async def get_today_bookings(self) -> list[Booking]:
        """Appointments on the current business day, earliest first."""
        docs = await self._store.list(
            COLLECTION_BOOKINGS,
            self._today_window(),
            OrderBy("appointmentDate", "asc"),
        )
        return [transform_booking(d.id, d.data) for d in docs]

    async def get_booking_stats(self) -> BookingStats:
        all_docs = await self._store.list_all(COLLECTION_BOOKINGS)
        today: list[StoredDocument] = await self._store.list(
            COLLECTION_BOOKINGS, self._today_window()
        )
        statuses = [d.data.get("status") for d in all_docs]
        return BookingStats(
            total=len(all_docs),
            pending=statuses.count(BookingStatus.PENDING.value),
            confirmed=statuses.count(BookingStatus.CONFIRMED.value),
            completed=statuses.count(BookingStatus.COMPLETED.value),
            today_bookings=len(today),
        )
