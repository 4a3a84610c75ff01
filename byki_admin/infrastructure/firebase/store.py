"""Document store facade shared by every domain service.

Wraps the fluent Firestore client (REST client in production, an in-memory
fake in tests) behind a small contract: get, list, create, update, delete,
batch update and live subscriptions. Results are plain ``StoredDocument``
values so services never touch transport types.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, Literal

from byki_admin.infrastructure.firebase.realtime import (
    ErrorListener,
    Listener,
    Subscription,
    SubscriptionHub,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FieldFilter:
    """One predicate of a query, e.g. ``FieldFilter("status", "==", "pending")``."""

    field: str
    op: str
    value: Any


@dataclass(frozen=True)
class OrderBy:
    field: str
    direction: Literal["asc", "desc"] = "asc"

    @property
    def descending(self) -> bool:
        return self.direction == "desc"


@dataclass(frozen=True)
class StoredDocument:
    """A document id plus its decoded fields."""

    id: str
    data: dict[str, Any]


def _to_stored(snapshot: Any) -> StoredDocument:
    return StoredDocument(id=snapshot.id, data=dict(snapshot.to_dict() or {}))


class DocumentStore:
    """Read/write access to named collections and sub-collections.

    ``client`` is anything exposing the FirestoreRESTClient fluent API:
    ``collection(path)`` with ``document``, ``add``, ``where``, ``order_by``,
    ``limit`` and ``stream``, plus ``batch_write`` for atomic batches.
    """

    def __init__(self, client: Any, hub: SubscriptionHub | None = None) -> None:
        self._client = client
        self._hub = hub if hub is not None else SubscriptionHub()

    @property
    def hub(self) -> SubscriptionHub:
        return self._hub

    async def get(self, collection: str, doc_id: str) -> StoredDocument | None:
        """Return the document or None when it does not exist."""
        snapshot = await self._client.collection(collection).document(doc_id).get()
        if not snapshot:
            return None
        return _to_stored(snapshot)

    async def list(
        self,
        collection: str,
        filters: Sequence[FieldFilter] = (),
        order_by: OrderBy | None = None,
        limit: int | None = None,
        start_after_id: str | None = None,
    ) -> list[StoredDocument]:
        """Run a query. Without filters, ordering or limit this is a full fetch.

        ``start_after_id`` resumes after that document and needs ``order_by``.
        Raises QueryFailedError when the store rejects the query (for
        example a missing composite index).
        """
        coll = self._client.collection(collection)
        if not filters and order_by is None and not limit:
            return [_to_stored(s) async for s in coll.stream()]

        query: Any = coll
        for f in filters:
            query = query.where(f.field, f.op, f.value)
        if order_by is not None:
            query = query.order_by(
                order_by.field, "DESCENDING" if order_by.descending else "ASCENDING"
            )
        if limit:
            query = query.limit(limit)
        if start_after_id and order_by is not None:
            cursor = await coll.document(start_after_id).get()
            if cursor:
                query = query.start_after(cursor)
        return [_to_stored(s) async for s in query.stream()]

    async def list_all(self, collection: str) -> list[StoredDocument]:
        """Unordered, unfiltered fetch of every document in the collection."""
        return await self.list(collection)

    async def create(self, collection: str, data: dict[str, Any]) -> str:
        """Create a document with a generated id and return the id."""
        return await self._client.collection(collection).add(data)

    async def set(self, collection: str, doc_id: str, data: dict[str, Any]) -> None:
        """Create or fully replace the document with the given id."""
        await self._client.collection(collection).document(doc_id).set(data)

    async def update(self, collection: str, doc_id: str, data: dict[str, Any]) -> None:
        """Write only the given fields of an existing document."""
        await self._client.collection(collection).document(doc_id).update(data)

    async def delete(self, collection: str, doc_id: str) -> None:
        await self._client.collection(collection).document(doc_id).delete()

    async def batch_update(
        self, updates: Sequence[tuple[str, str, dict[str, Any]]]
    ) -> None:
        """Apply (collection, id, fields) updates as one all-or-nothing commit.

        Clients without ``batch_write`` get sequential best-effort updates.
        """
        if not updates:
            return
        batch_write = getattr(self._client, "batch_write", None)
        if batch_write is None:
            logger.warning(
                "Store client has no batch_write; applying %s updates one by one",
                len(updates),
            )
            for collection, doc_id, data in updates:
                await self.update(collection, doc_id, data)
            return
        await batch_write([
            {"path": f"{collection}/{doc_id}", "data": data, "merge": True}
            for collection, doc_id, data in updates
        ])

    def subscribe(
        self,
        collection: str,
        listener: Listener,
        filters: Sequence[FieldFilter] = (),
        order_by: OrderBy | None = None,
        *,
        on_error: ErrorListener | None = None,
    ) -> Subscription:
        """Push the matching documents to ``listener`` now and on every change."""
        key = ("query", collection, repr(tuple(filters)), repr(order_by))
        return self.subscribe_to(
            key,
            lambda: self.list(collection, filters, order_by),
            listener,
            on_error=on_error,
        )

    def subscribe_to(
        self,
        key: Any,
        fetch: Callable[[], Any],
        listener: Listener,
        *,
        on_error: ErrorListener | None = None,
    ) -> Subscription:
        """Subscribe to an arbitrary async ``fetch`` shared under ``key``."""
        return self._hub.subscribe(key, fetch, listener, on_error=on_error)

    async def close(self) -> None:
        """Stop every live subscription."""
        await self._hub.close()
