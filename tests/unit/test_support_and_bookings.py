"""Tests for support ticket workflow and booking queries."""

from dataclasses import asdict
from datetime import UTC, datetime, timedelta

from byki_admin.application.dtos.commands import TicketReply
from byki_admin.domain.enums import BookingStatus, SenderType, TicketStatus
from byki_admin.infrastructure.firebase.services import (
    FirestoreBookingService,
    FirestoreSupportService,
)
from byki_admin.infrastructure.firebase.store import DocumentStore
from byki_admin.shared.utils.datetime import start_of_day, utc_now
from tests.fakes import FakeFirestore

CREATED = datetime(2024, 3, 1, 9, 0, tzinfo=UTC)


async def test_assign_ticket_moves_to_in_progress(
    fake_db: FakeFirestore, store: DocumentStore
) -> None:
    fake_db.seed("support_tickets", "t1", {"userId": "u1", "status": "open", "createdAt": CREATED})
    service = FirestoreSupportService(store)

    await service.assign_ticket("t1", "staff-9")
    ticket = await service.get_ticket("t1")

    assert ticket is not None
    assert ticket.assigned_to == "staff-9"
    assert ticket.status == TicketStatus.IN_PROGRESS


async def test_resolving_stamps_resolved_at(
    fake_db: FakeFirestore, store: DocumentStore
) -> None:
    fake_db.seed("support_tickets", "t1", {"status": "inProgress", "createdAt": CREATED})
    service = FirestoreSupportService(store)

    await service.update_ticket_status("t1", TicketStatus.CLOSED)
    assert "resolvedAt" not in fake_db.docs("support_tickets")["t1"]

    await service.update_ticket_status("t1", TicketStatus.RESOLVED)
    assert fake_db.docs("support_tickets")["t1"]["resolvedAt"] is not None


async def test_replies_are_appended(fake_db: FakeFirestore, store: DocumentStore) -> None:
    """Each reply is appended to the thread with a msg_ id."""
    fake_db.seed("support_tickets", "t1", {"status": "open", "createdAt": CREATED})
    service = FirestoreSupportService(store)
    reply = TicketReply(
        sender_id="admin-1",
        sender_name="Ops",
        sender_type=SenderType.ADMIN,
        message="We are on it",
    )

    message = await service.add_reply("t1", reply)
    await service.add_reply("t1", TicketReply("admin-1", "Ops", SenderType.ADMIN, "Done", ["a.png"]))
    ticket = await service.get_ticket("t1")

    assert message.id.startswith("msg_")
    assert ticket is not None
    assert [m.message for m in ticket.messages] == ["We are on it", "Done"]
    assert ticket.messages[1].attachments == ["a.png"]
    assert "attachments" not in fake_db.docs("support_tickets")["t1"]["messages"][0]


async def test_ticket_stats(fake_db: FakeFirestore, store: DocumentStore) -> None:
    """Resolved counts resolved and closed; resolution time is mean hours."""
    fake_db.seed("support_tickets", "t1", {"status": "open", "createdAt": CREATED})
    fake_db.seed("support_tickets", "t2", {"status": "inProgress", "createdAt": CREATED})
    fake_db.seed(
        "support_tickets",
        "t3",
        {"status": "resolved", "createdAt": CREATED, "resolvedAt": CREATED + timedelta(hours=2)},
    )
    fake_db.seed(
        "support_tickets",
        "t4",
        {"status": "closed", "createdAt": CREATED, "resolvedAt": CREATED + timedelta(hours=5)},
    )

    stats = await FirestoreSupportService(store).get_ticket_stats()

    assert (stats.total, stats.open, stats.in_progress, stats.resolved) == (4, 1, 1, 2)
    assert stats.average_resolution_time == 4


async def test_today_bookings_and_stats(
    fake_db: FakeFirestore, store: DocumentStore
) -> None:
    """Today's window is the current business day; stats count by status."""
    today = start_of_day(utc_now(), UTC)
    fake_db.seed(
        "bookings",
        "b1",
        {"status": "pending", "appointmentDate": today + timedelta(hours=15), "createdAt": CREATED},
    )
    fake_db.seed(
        "bookings",
        "b2",
        {"status": "confirmed", "appointmentDate": today + timedelta(hours=9), "createdAt": CREATED},
    )
    fake_db.seed(
        "bookings",
        "b3",
        {"status": "completed", "appointmentDate": today - timedelta(days=2), "createdAt": CREATED},
    )
    service = FirestoreBookingService(store)

    todays = await service.get_today_bookings()
    stats = await service.get_booking_stats()

    assert [b.id for b in todays] == ["b2", "b1"]
    assert stats.total == 3
    assert (stats.pending, stats.confirmed, stats.completed) == (1, 1, 1)
    assert stats.today_bookings == 2


async def test_reschedule_booking(fake_db: FakeFirestore, store: DocumentStore) -> None:
    fake_db.seed("bookings", "b1", {"status": "pending", "appointmentDate": CREATED, "timeSlot": "09:00"})
    service = FirestoreBookingService(store)
    new_date = CREATED + timedelta(days=3)

    await service.reschedule_booking("b1", new_date, "14:00")
    await service.update_booking_status("b1", BookingStatus.CONFIRMED)
    booking = await service.get_booking("b1")

    assert booking is not None
    assert booking.appointment_date == new_date
    assert booking.time_slot == "14:00"
    assert booking.status == BookingStatus.CONFIRMED


async def test_booking_stats_for_ten_bookings(
    fake_db: FakeFirestore, store: DocumentStore
) -> None:
    """Ten bookings, three of them today: counts by status plus today's count."""
    today = start_of_day(utc_now(), UTC)
    rows = [
        ("pending", today + timedelta(hours=1)),
        ("pending", today + timedelta(hours=12)),
        ("pending", today - timedelta(days=1)),
        ("pending", today + timedelta(days=3)),
        ("confirmed", today + timedelta(hours=23)),
        ("confirmed", today + timedelta(days=1)),
        ("confirmed", today - timedelta(hours=1)),
        ("completed", today - timedelta(days=7)),
        ("completed", today - timedelta(days=2)),
        ("completed", today - timedelta(days=30)),
    ]
    for i, (status, appointment) in enumerate(rows):
        fake_db.seed(
            "bookings",
            f"b{i}",
            {"status": status, "appointmentDate": appointment, "createdAt": CREATED},
        )

    stats = await FirestoreBookingService(store).get_booking_stats()

    assert asdict(stats) == {
        "total": 10,
        "pending": 4,
        "confirmed": 3,
        "completed": 3,
        "today_bookings": 3,
    }
