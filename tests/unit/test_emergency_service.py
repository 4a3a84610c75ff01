"""Tests for emergency status transitions, monitor feeds and response-time stats."""

from datetime import UTC, datetime, timedelta

from byki_admin.domain.enums import EmergencyStatus
from byki_admin.infrastructure.firebase.services import FirestoreEmergencyService
from byki_admin.infrastructure.firebase.store import DocumentStore
from byki_admin.shared.utils.datetime import utc_now
from tests.fakes import FakeFirestore

CREATED = datetime(2024, 3, 1, 9, 0, tzinfo=UTC)


def _seed(db: FakeFirestore, doc_id: str, **fields) -> None:
    db.seed(
        "emergency_requests",
        doc_id,
        {"userId": "u1", "status": "pending", "createdAt": CREATED, **fields},
    )


async def test_dispatch_stamps_dispatched_at_only(
    fake_db: FakeFirestore, store: DocumentStore
) -> None:
    """Entering dispatched sets dispatchedAt and leaves other phase stamps alone."""
    _seed(fake_db, "e1")
    service = FirestoreEmergencyService(store)

    await service.update_emergency_status("e1", EmergencyStatus.DISPATCHED)

    doc = fake_db.docs("emergency_requests")["e1"]
    assert doc["status"] == "dispatched"
    assert doc["dispatchedAt"] == doc["updatedAt"]
    assert "arrivedAt" not in doc
    assert "completedAt" not in doc


async def test_en_route_has_no_phase_timestamp(
    fake_db: FakeFirestore, store: DocumentStore
) -> None:
    """Statuses without a phase only update status and updatedAt."""
    _seed(fake_db, "e1", status="dispatched", dispatchedAt=CREATED)
    service = FirestoreEmergencyService(store)

    await service.update_emergency_status("e1", EmergencyStatus.EN_ROUTE)

    doc = fake_db.docs("emergency_requests")["e1"]
    assert doc["status"] == "enRoute"
    assert doc["dispatchedAt"] == CREATED


async def test_completion_writes_additional_fields(
    fake_db: FakeFirestore, store: DocumentStore
) -> None:
    """Additional stored fields are written in the same update as the status."""
    _seed(fake_db, "e1", status="arrived")
    service = FirestoreEmergencyService(store)

    await service.update_emergency_status(
        "e1", EmergencyStatus.COMPLETED, {"notes": "Battery replaced"}
    )

    doc = fake_db.docs("emergency_requests")["e1"]
    assert doc["status"] == "completed"
    assert doc["notes"] == "Battery replaced"
    assert doc["completedAt"] is not None
    assert len(fake_db.updates) == 1


async def test_assign_mechanic_forces_dispatched(
    fake_db: FakeFirestore, store: DocumentStore
) -> None:
    """Assigning a mechanic sets the mechanic fields and dispatches the request."""
    _seed(fake_db, "e1", status="arrived")
    service = FirestoreEmergencyService(store)

    await service.assign_mechanic("e1", "m7", "Ravi")

    request = await service.get_emergency_request("e1")
    assert request is not None
    assert request.status == EmergencyStatus.DISPATCHED
    assert request.mechanic_id == "m7"
    assert request.mechanic_name == "Ravi"
    assert request.dispatched_at is not None


async def test_active_and_monitored_lists(
    fake_db: FakeFirestore, store: DocumentStore
) -> None:
    """Active excludes arrived; the monitored list includes it. Newest first."""
    statuses = ["pending", "dispatched", "enRoute", "arrived", "completed"]
    for hours, status in enumerate(statuses):
        doc_id = f"e{hours + 1}"
        _seed(
            fake_db,
            doc_id,
            status=status,
            userName="Driver",
            createdAt=CREATED + timedelta(hours=hours),
        )
    service = FirestoreEmergencyService(store)

    active = await service.get_active_emergencies()
    monitored = await service.get_monitored_emergencies()

    assert [e.id for e in active] == ["e3", "e2", "e1"]
    assert [e.id for e in monitored] == ["e4", "e3", "e2", "e1"]


async def test_emergency_stats(fake_db: FakeFirestore, store: DocumentStore) -> None:
    """Average response time is the mean created-to-dispatched minutes, rounded."""
    now = utc_now()
    _seed(fake_db, "e1")
    _seed(fake_db, "e2", status="dispatched", dispatchedAt=CREATED + timedelta(minutes=10))
    _seed(fake_db, "e3", status="arrived", dispatchedAt=CREATED + timedelta(minutes=15))
    _seed(
        fake_db,
        "e4",
        status="completed",
        dispatchedAt=CREATED + timedelta(minutes=20),
        completedAt=now,
    )
    _seed(
        fake_db,
        "e5",
        status="completed",
        completedAt=now - timedelta(days=3),
    )
    service = FirestoreEmergencyService(store)

    stats = await service.get_emergency_stats()

    assert stats.total == 5
    assert stats.pending == 1
    assert stats.active == 2
    assert stats.completed_today == 1
    assert stats.average_response_time == 15


async def test_emergency_stats_without_dispatches(
    fake_db: FakeFirestore, store: DocumentStore
) -> None:
    """No dispatched requests means an average of zero."""
    _seed(fake_db, "e1")
    stats = await FirestoreEmergencyService(store).get_emergency_stats()
    assert stats.average_response_time == 0
