"""Firestore-backed emergency (roadside assistance) service.

Besides list/get/update it exposes the two live queries used by the
emergency monitor: the active requests (enriched with user data) and the
number of pending requests.
"""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable
from datetime import UTC, tzinfo
from typing import Any

from byki_admin.application.dtos.stats import EmergencyStats
from byki_admin.domain.entities import EmergencyRequest
from byki_admin.domain.enums import EmergencyStatus, EmergencyType
from byki_admin.infrastructure.firebase.collections import (
    COLLECTION_EMERGENCY_REQUESTS,
)
from byki_admin.infrastructure.firebase.enrichment import enrich_emergencies
from byki_admin.infrastructure.firebase.normalization import (
    as_float,
    as_optional_str,
    as_str,
)
from byki_admin.infrastructure.firebase.realtime import ErrorListener, Subscription
from byki_admin.infrastructure.firebase.services._base import Match, list_with_fallback
from byki_admin.infrastructure.firebase.store import (
    DocumentStore,
    FieldFilter,
    OrderBy,
    StoredDocument,
)
from byki_admin.shared.utils.datetime import (
    parse_firestore_date,
    parse_optional_date,
    start_of_day,
    utc_now,
)
from byki_admin.shared.utils.numbers import round_half_up

# Shown on the active list.
ACTIVE_STATUSES = (
    EmergencyStatus.PENDING,
    EmergencyStatus.DISPATCHED,
    EmergencyStatus.EN_ROUTE,
)
# Watched live by the monitor; includes mechanics already on site.
MONITORED_STATUSES = (*ACTIVE_STATUSES, EmergencyStatus.ARRIVED)
# Requests with a mechanic assigned but not finished.
IN_PROGRESS_STATUSES = (
    EmergencyStatus.DISPATCHED,
    EmergencyStatus.EN_ROUTE,
    EmergencyStatus.ARRIVED,
)

# Lifecycle timestamp stamped when a request enters a status.
_PHASE_TIMESTAMPS: dict[EmergencyStatus, str] = {
    EmergencyStatus.DISPATCHED: "dispatchedAt",
    EmergencyStatus.ARRIVED: "arrivedAt",
    EmergencyStatus.COMPLETED: "completedAt",
}


def transform_emergency(doc_id: str, data: dict[str, Any]) -> EmergencyRequest:
    """Normalize a raw emergency request document. Never raises."""
    return EmergencyRequest(
        id=doc_id,
        user_id=as_str(data.get("userId")),
        user_name=as_optional_str(data.get("userName")),
        user_phone=as_optional_str(data.get("userPhone")),
        vehicle_id=as_optional_str(data.get("vehicleId")),
        vehicle_info=as_optional_str(data.get("vehicleInfo")),
        type=EmergencyType.parse(data.get("type"), EmergencyType.OTHER),
        status=EmergencyStatus.parse(data.get("status"), EmergencyStatus.PENDING),
        latitude=as_float(data.get("latitude")),
        longitude=as_float(data.get("longitude")),
        address=as_str(data.get("address")),
        description=as_optional_str(data.get("description")),
        mechanic_id=as_optional_str(data.get("mechanicId")),
        mechanic_name=as_optional_str(data.get("mechanicName")),
        estimated_arrival=parse_optional_date(data.get("estimatedArrival")),
        dispatched_at=parse_optional_date(data.get("dispatchedAt")),
        arrived_at=parse_optional_date(data.get("arrivedAt")),
        completed_at=parse_optional_date(data.get("completedAt")),
        created_at=parse_firestore_date(data.get("createdAt")),
        updated_at=parse_firestore_date(data.get("updatedAt")),
    )


def status_update(
    status: EmergencyStatus, additional: dict[str, Any] | None = None
) -> dict[str, Any]:
    """Fields written for a status change, including the phase timestamp."""
    now = utc_now()
    data: dict[str, Any] = {"status": status.value, "updatedAt": now}
    phase_field = _PHASE_TIMESTAMPS.get(status)
    if phase_field:
        data[phase_field] = now
    if additional:
        data.update(additional)
    return data


class FirestoreEmergencyService:
    """Emergency requests: monitor feeds, dispatching and response-time stats."""

    def __init__(self, store: DocumentStore, tz: tzinfo = UTC) -> None:
        self._store = store
        self._tz = tz

    async def get_emergency_requests(
        self,
        status: EmergencyStatus | None = None,
        user_id: str | None = None,
    ) -> list[EmergencyRequest]:
        return await list_with_fallback(
            self._store,
            COLLECTION_EMERGENCY_REQUESTS,
            transform_emergency,
            order_by=OrderBy("createdAt", "desc"),
            sort_key=lambda e: e.created_at,
            matches=[Match("status", status), Match("userId", user_id)],
        )

    async def _list_in_statuses(
        self, statuses: tuple[EmergencyStatus, ...]
    ) -> list[EmergencyRequest]:
        docs = await self._store.list(
            COLLECTION_EMERGENCY_REQUESTS,
            [FieldFilter("status", "in", [s.value for s in statuses])],
            OrderBy("createdAt", "desc"),
        )
        emergencies = [transform_emergency(d.id, d.data) for d in docs]
        return await self.enrich_with_user_data(emergencies)

    async def get_active_emergencies(self) -> list[EmergencyRequest]:
        """Pending, dispatched and en-route requests, newest first, enriched."""
        return await self._list_in_statuses(ACTIVE_STATUSES)

    async def get_monitored_emergencies(self) -> list[EmergencyRequest]:
        """Active requests plus those whose mechanic has arrived, enriched."""
        return await self._list_in_statuses(MONITORED_STATUSES)

    def subscribe_to_active_emergencies(
        self,
        listener: Callable[[list[EmergencyRequest]], Awaitable[None] | None],
        *,
        on_error: ErrorListener | None = None,
    ) -> Subscription:
        """Push the monitored requests now and whenever their documents change.

        The live query compares the stored documents, so defaulted fields
        such as a missing ``updatedAt`` never count as a change. Each push
        is normalized and enriched before it reaches ``listener``.
        """

        async def push(docs: list[StoredDocument]) -> None:
            emergencies = await self.enrich_with_user_data(
                [transform_emergency(d.id, d.data) for d in docs]
            )
            result = listener(emergencies)
            if inspect.isawaitable(result):
                await result

        return self._store.subscribe(
            COLLECTION_EMERGENCY_REQUESTS,
            push,
            [FieldFilter("status", "in", [s.value for s in MONITORED_STATUSES])],
            OrderBy("createdAt", "desc"),
            on_error=on_error,
        )

    def subscribe_to_pending_count(
        self,
        listener: Callable[[int], Awaitable[None] | None],
        *,
        on_error: ErrorListener | None = None,
    ) -> Subscription:
        """Push the number of pending requests now and whenever it changes."""

        async def count_pending() -> int:
            docs = await self._store.list(
                COLLECTION_EMERGENCY_REQUESTS,
                [FieldFilter("status", "==", EmergencyStatus.PENDING.value)],
            )
            return len(docs)

        return self._store.subscribe_to(
            ("emergencies", "pending-count"),
            count_pending,
            listener,
            on_error=on_error,
        )

    async def get_emergency_request(self, request_id: str) -> EmergencyRequest | None:
        doc = await self._store.get(COLLECTION_EMERGENCY_REQUESTS, request_id)
        if doc is None:
            return None
        return transform_emergency(doc.id, doc.data)

    async def update_emergency_status(
        self,
        request_id: str,
        status: EmergencyStatus,
        additional: dict[str, Any] | None = None,
    ) -> None:
        """Set status and stamp dispatchedAt, arrivedAt or completedAt on entry.

        Other phase timestamps are left untouched. ``additional`` stored
        fields are written in the same update.
        """
        await self._store.update(
            COLLECTION_EMERGENCY_REQUESTS, request_id, status_update(status, additional)
        )

    async def assign_mechanic(
        self, request_id: str, mechanic_id: str, mechanic_name: str
    ) -> None:
        """Assign a mechanic and force the request to dispatched, whatever its status."""
        await self.update_emergency_status(
            request_id,
            EmergencyStatus.DISPATCHED,
            {"mechanicId": mechanic_id, "mechanicName": mechanic_name},
        )

    async def get_emergency_stats(self) -> EmergencyStats:
        docs = await self._store.list_all(COLLECTION_EMERGENCY_REQUESTS)
        today = start_of_day(utc_now(), self._tz)

        response_minutes = [
            (
                parse_firestore_date(d.data["dispatchedAt"])
                - parse_firestore_date(d.data["createdAt"])
            ).total_seconds()
            / 60
            for d in docs
            if d.data.get("dispatchedAt") and d.data.get("createdAt")
        ]
        average = (
            sum(response_minutes) / len(response_minutes) if response_minutes else 0
        )

        statuses = [d.data.get("status") for d in docs]
        in_progress = {s.value for s in IN_PROGRESS_STATUSES}
        completed_today = sum(
            1
            for d in docs
            if d.data.get("status") == EmergencyStatus.COMPLETED.value
            and d.data.get("completedAt")
            and parse_firestore_date(d.data["completedAt"]) >= today
        )
        return EmergencyStats(
            total=len(docs),
            pending=statuses.count(EmergencyStatus.PENDING.value),
            active=sum(s in in_progress for s in statuses),
            completed_today=completed_today,
            average_response_time=int(round_half_up(average)),
        )

    async def enrich_with_user_data(
        self, emergencies: list[EmergencyRequest]
    ) -> list[EmergencyRequest]:
        return await enrich_emergencies(self._store, emergencies)
