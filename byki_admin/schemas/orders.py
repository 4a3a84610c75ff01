"""Order and booking API schemas."""

from datetime import datetime

from pydantic import BaseModel, Field

from byki_admin.domain.enums import BookingStatus, OrderStatus
from byki_admin.schemas.common import DocumentModel


class OrderStatusUpdate(BaseModel):
    status: OrderStatus


class OrderUpdate(DocumentModel):
    """Partial order edit (admin notes and links)."""

    notes: str | None = None
    workshop_id: str | None = None
    booking_id: str | None = None
    payment_id: str | None = None


class BookingStatusUpdate(BaseModel):
    status: BookingStatus


class BookingReschedule(BaseModel):
    new_date: datetime
    new_time_slot: str = Field(..., min_length=1)
