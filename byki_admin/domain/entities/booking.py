"""Booking entity: a workshop appointment."""

from dataclasses import dataclass, field
from datetime import datetime

from byki_admin.domain.enums import BookingStatus


@dataclass(frozen=True)
class Booking:
    """Normalized booking. ``time_slot`` is free text chosen in the app."""

    id: str
    user_id: str
    workshop_id: str
    appointment_date: datetime
    created_at: datetime
    updated_at: datetime
    workshop_name: str | None = None
    order_id: str | None = None
    time_slot: str = ""
    status: BookingStatus = BookingStatus.PENDING
    vehicle_id: str | None = None
    services: list[str] = field(default_factory=list)
    notes: str | None = None
    cancellation_fee: float | None = None
