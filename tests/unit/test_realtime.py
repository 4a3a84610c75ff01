"""Tests for polling live queries and the subscription hub."""

import asyncio
from datetime import UTC, datetime

import pytest

from byki_admin.infrastructure.firebase.realtime import QueryWatch, SubscriptionHub
from byki_admin.infrastructure.firebase.services import FirestoreEmergencyService
from byki_admin.infrastructure.firebase.store import DocumentStore, FieldFilter
from tests.fakes import FakeFirestore


async def _wait_for(predicate, timeout: float = 1.0) -> None:
    deadline = asyncio.get_running_loop().time() + timeout
    while not predicate():
        if asyncio.get_running_loop().time() > deadline:
            raise AssertionError("condition not reached in time")
        await asyncio.sleep(0.005)


async def test_pushes_initial_result_then_only_changes() -> None:
    """The first fetch always pushes; identical results are not re-pushed."""
    hub = SubscriptionHub(poll_interval=0.01)
    value = {"n": 1}
    received: list[int] = []

    async def fetch() -> int:
        return value["n"]

    sub = hub.subscribe("k", fetch, received.append)
    await _wait_for(lambda: received == [1])
    await asyncio.sleep(0.05)
    assert received == [1]

    value["n"] = 2
    await _wait_for(lambda: received == [1, 2])

    sub.unsubscribe()
    await hub.close()


async def test_subscribers_share_one_watch() -> None:
    """Two subscribers of the same key share a watch; it stops with the last one."""
    hub = SubscriptionHub(poll_interval=0.01)
    first: list[int] = []
    second: list[int] = []

    async def fetch() -> int:
        return 7

    sub1 = hub.subscribe("k", fetch, first.append)
    await _wait_for(lambda: first == [7])
    sub2 = hub.subscribe("k", fetch, second.append)
    await _wait_for(lambda: second == [7])

    assert hub.watch_count == 1
    sub1.unsubscribe()
    assert hub.watch_count == 1
    sub2.unsubscribe()
    sub2.unsubscribe()
    assert hub.watch_count == 0
    await hub.close()


async def test_fetch_errors_go_to_error_listener() -> None:
    """A failing fetch is reported and polling continues."""
    hub = SubscriptionHub(poll_interval=0.01)
    errors: list[Exception] = []
    calls = {"n": 0}
    received: list[str] = []

    async def fetch() -> str:
        calls["n"] += 1
        if calls["n"] == 1:
            raise RuntimeError("network down")
        return "ok"

    hub.subscribe("k", fetch, received.append, on_error=errors.append)
    await _wait_for(lambda: received == ["ok"])

    assert len(errors) == 1
    await hub.close()


async def test_closed_hub_rejects_subscriptions() -> None:
    hub = SubscriptionHub()
    await hub.close()
    with pytest.raises(RuntimeError):
        hub.subscribe("k", lambda: None, lambda _: None)


async def test_pending_count_follows_the_store() -> None:
    """The pending-count live query pushes new counts as documents change."""
    db = FakeFirestore()
    db.seed("emergency_requests", "e1", {"status": "pending"})
    store = DocumentStore(db, SubscriptionHub(poll_interval=0.01))
    counts: list[int] = []

    sub = FirestoreEmergencyService(store).subscribe_to_pending_count(counts.append)
    await _wait_for(lambda: counts == [1])
    db.seed("emergency_requests", "e2", {"status": "pending"})
    await _wait_for(lambda: counts == [1, 2])

    sub.unsubscribe()
    await store.close()


async def test_query_subscription_pushes_documents() -> None:
    """DocumentStore.subscribe pushes the current matching documents."""
    db = FakeFirestore()
    db.seed("orders", "o1", {"status": "confirmed"})
    store = DocumentStore(db, SubscriptionHub(poll_interval=0.01))
    pushes: list[list[str]] = []

    store.subscribe(
        "orders",
        lambda docs: pushes.append([d.id for d in docs]),
        [FieldFilter("status", "==", "confirmed")],
    )
    await _wait_for(lambda: pushes == [["o1"]])
    await store.close()


async def test_late_listener_never_sees_an_older_result() -> None:
    """A poll that lands before the joining snapshot replaces it."""
    value = {"n": 1}
    first: list[int] = []
    second: list[int] = []

    async def fetch() -> int:
        return value["n"]

    watch = QueryWatch("k", fetch, poll_interval=60)
    watch.add_listener(first.append)
    await _wait_for(lambda: first == [1])

    value["n"] = 2
    watch.add_listener(second.append)
    await watch._poll_once()
    await asyncio.sleep(0.02)

    assert first == [1, 2]
    assert second == [2]
    await watch.stop()


async def test_unchanged_emergencies_push_once() -> None:
    """Requests without updatedAt do not look new on every poll."""
    db = FakeFirestore()
    db.seed(
        "emergency_requests",
        "e1",
        {
            "userId": "u1",
            "status": "pending",
            "createdAt": datetime(2024, 3, 1, 9, 0, tzinfo=UTC),
        },
    )
    db.seed("users", "u1", {"name": "Siti"})
    store = DocumentStore(db, SubscriptionHub(poll_interval=0.01))
    pushes: list[list[str | None]] = []

    FirestoreEmergencyService(store).subscribe_to_active_emergencies(
        lambda items: pushes.append([e.user_name for e in items])
    )
    await _wait_for(lambda: len(pushes) == 1)
    await asyncio.sleep(0.2)

    assert pushes == [["Siti"]]

    db.docs("emergency_requests")["e1"]["status"] = "dispatched"
    await _wait_for(lambda: len(pushes) == 2)
    await store.close()
