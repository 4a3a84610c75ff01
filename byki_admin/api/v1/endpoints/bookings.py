"""Booking API: thin routes delegating to FirestoreBookingService."""

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Request

from byki_admin.api.v1.dependencies import get_booking_service, require_found
from byki_admin.application.dtos import BookingStats
from byki_admin.core.limiter import limit_writes
from byki_admin.domain.entities import Booking
from byki_admin.domain.enums import BookingStatus
from byki_admin.infrastructure.firebase.services import FirestoreBookingService
from byki_admin.schemas.orders import BookingReschedule, BookingStatusUpdate
from byki_admin.shared.utils.datetime import ensure_utc

router = APIRouter()

BookingServiceDep = Annotated[FirestoreBookingService, Depends(get_booking_service)]


@router.get("", response_model=list[Booking])
async def list_bookings(
    booking_svc: BookingServiceDep,
    status: BookingStatus | None = None,
    user_id: str | None = None,
    workshop_id: str | None = None,
    start_date: datetime | None = None,
    end_date: datetime | None = None,
):
    """Latest appointment first; the date range applies to the appointment date."""
    return await booking_svc.get_bookings(
        status=status,
        user_id=user_id,
        workshop_id=workshop_id,
        start_date=ensure_utc(start_date),
        end_date=ensure_utc(end_date),
    )


@router.get("/today", response_model=list[Booking])
async def today_bookings(booking_svc: BookingServiceDep):
    return await booking_svc.get_today_bookings()


@router.get("/stats", response_model=BookingStats)
async def booking_stats(booking_svc: BookingServiceDep):
    return await booking_svc.get_booking_stats()


@router.get("/{booking_id}", response_model=Booking)
async def get_booking(booking_id: str, booking_svc: BookingServiceDep):
    return require_found(await booking_svc.get_booking(booking_id), "booking", booking_id)


@router.patch("/{booking_id}/status", response_model=Booking)
@limit_writes
async def update_booking_status(
    request: Request,
    booking_id: str,
    body: BookingStatusUpdate,
    booking_svc: BookingServiceDep,
):
    require_found(await booking_svc.get_booking(booking_id), "booking", booking_id)
    await booking_svc.update_booking_status(booking_id, body.status)
    return await booking_svc.get_booking(booking_id)


@router.patch("/{booking_id}/reschedule", response_model=Booking)
@limit_writes
async def reschedule_booking(
    request: Request,
    booking_id: str,
    body: BookingReschedule,
    booking_svc: BookingServiceDep,
):
    require_found(await booking_svc.get_booking(booking_id), "booking", booking_id)
    await booking_svc.reschedule_booking(
        booking_id, ensure_utc(body.new_date), body.new_time_slot
    )
    return await booking_svc.get_booking(booking_id)
