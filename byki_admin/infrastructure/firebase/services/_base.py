"""Shared list-with-fallback query used by the Firestore domain services."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, TypeVar

import httpx

from byki_admin.infrastructure.firebase._rest_client import QueryFailedError
from byki_admin.infrastructure.firebase.store import (
    DocumentStore,
    FieldFilter,
    OrderBy,
    StoredDocument,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

Transform = Callable[[str, dict[str, Any]], T]


@dataclass(frozen=True)
class Match:
    """Equality filter on a stored field; ``None`` means "not filtered"."""

    field: str
    value: Any

    @property
    def active(self) -> bool:
        return self.value is not None


def _stored_value(value: Any) -> Any:
    return getattr(value, "value", value)


def _matches(doc: StoredDocument, matches: Sequence[Match]) -> bool:
    return all(doc.data.get(m.field) == _stored_value(m.value) for m in matches)


async def list_with_fallback(
    store: DocumentStore,
    collection: str,
    transform: Transform[T],
    *,
    order_by: OrderBy,
    sort_key: Callable[[T], Any],
    matches: Sequence[Match] = (),
    limit: int | None = None,
) -> list[T]:
    """Ordered query with every equality filter; on rejection, filter and sort locally.

    The fallback reproduces the indexed result: documents without a value
    for the order field are dropped, ties are broken by document id in the
    same direction, and the limit is applied last.
    """
    active = [m for m in matches if m.active]
    filters = [FieldFilter(m.field, "==", _stored_value(m.value)) for m in active]
    try:
        docs = await store.list(collection, filters, order_by, limit)
        return [transform(doc.id, doc.data) for doc in docs]
    except (QueryFailedError, httpx.HTTPError) as e:
        logger.warning(
            "Ordered query on %s failed, falling back to client-side filtering: %s",
            collection,
            e,
        )

    docs = [
        doc
        for doc in await store.list_all(collection)
        if doc.data.get(order_by.field) is not None and _matches(doc, active)
    ]
    items = [transform(doc.id, doc.data) for doc in docs]
    items.sort(key=lambda item: (sort_key(item), item.id), reverse=order_by.descending)
    if limit:
        items = items[:limit]
    return items
