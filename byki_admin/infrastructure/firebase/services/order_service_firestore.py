"""Firestore-backed orders service (orders collection)."""

from __future__ import annotations

from collections import defaultdict
from datetime import UTC, datetime, timedelta, tzinfo
from typing import Any

from byki_admin.application.dtos.stats import OrderStats, RevenuePoint
from byki_admin.domain.entities import Order, OrderItem
from byki_admin.domain.enums import OrderStatus
from byki_admin.infrastructure.firebase.collections import COLLECTION_ORDERS
from byki_admin.infrastructure.firebase.normalization import (
    as_float,
    as_int,
    as_list,
    as_optional_str,
    as_str,
    resolve_aliases,
)
from byki_admin.infrastructure.firebase.services._base import Match, list_with_fallback
from byki_admin.infrastructure.firebase.store import DocumentStore, FieldFilter, OrderBy
from byki_admin.shared.utils.datetime import (
    end_of_day,
    parse_firestore_date,
    start_of_day,
    utc_now,
)

# Orders that count toward revenue.
REVENUE_STATUSES = (
    OrderStatus.COMPLETED,
    OrderStatus.CONFIRMED,
    OrderStatus.IN_PROGRESS,
)


def transform_order_item(raw: Any) -> OrderItem:
    item = raw if isinstance(raw, dict) else {}
    prices = resolve_aliases("order_item", item)
    return OrderItem(
        product_id=as_str(item.get("productId")),
        product_name=as_str(item.get("productName")),
        quantity=as_int(item.get("quantity")),
        unit_price=as_float(prices["unitPrice"]),
        total_price=as_float(prices["totalPrice"]),
        image_url=as_optional_str(item.get("imageUrl")),
    )


def transform_order(doc_id: str, data: dict[str, Any]) -> Order:
    """Normalize a raw order document. Never raises."""
    return Order(
        id=doc_id,
        user_id=as_str(data.get("userId")),
        order_number=as_str(data.get("orderNumber")) or doc_id[:8].upper(),
        items=[transform_order_item(i) for i in as_list(data.get("items"))],
        subtotal=as_float(data.get("subtotal")),
        discount=as_float(data.get("discount")),
        tax=as_float(data.get("tax")),
        total=as_float(data.get("total")),
        status=OrderStatus.parse(data.get("status"), OrderStatus.PENDING_PAYMENT),
        payment_method=as_optional_str(data.get("paymentMethod")),
        payment_id=as_optional_str(data.get("paymentId")),
        workshop_id=as_optional_str(data.get("workshopId")),
        booking_id=as_optional_str(data.get("bookingId")),
        voucher_id=as_optional_str(data.get("voucherId")),
        notes=as_optional_str(data.get("notes")),
        created_at=parse_firestore_date(data.get("createdAt")),
        updated_at=parse_firestore_date(data.get("updatedAt")),
    )


class FirestoreOrderService:
    """Order listing, status updates and order/revenue statistics."""

    def __init__(self, store: DocumentStore, tz: tzinfo = UTC) -> None:
        self._store = store
        self._tz = tz

    async def get_orders(
        self,
        status: OrderStatus | None = None,
        user_id: str | None = None,
        start_date: datetime | None = None,
        end_date: datetime | None = None,
        limit: int | None = None,
    ) -> list[Order]:
        """Newest first. The date range is applied after the query, on created_at."""
        orders = await list_with_fallback(
            self._store,
            COLLECTION_ORDERS,
            transform_order,
            order_by=OrderBy("createdAt", "desc"),
            sort_key=lambda o: o.created_at,
            matches=[Match("status", status), Match("userId", user_id)],
            limit=limit,
        )
        if start_date is not None:
            orders = [o for o in orders if o.created_at >= start_date]
        if end_date is not None:
            orders = [o for o in orders if o.created_at <= end_date]
        return orders

    async def get_order(self, order_id: str) -> Order | None:
        doc = await self._store.get(COLLECTION_ORDERS, order_id)
        if doc is None:
            return None
        return transform_order(doc.id, doc.data)

    async def update_order_status(self, order_id: str, status: OrderStatus) -> None:
        """Write any status; transitions are not validated."""
        await self._store.update(
            COLLECTION_ORDERS,
            order_id,
            {"status": status.value, "updatedAt": utc_now()},
        )

    async def update_order(self, order_id: str, updates: dict[str, Any]) -> None:
        """Write the given stored fields plus updatedAt."""
        await self._store.update(
            COLLECTION_ORDERS, order_id, {**updates, "updatedAt": utc_now()}
        )

    async def get_order_stats(self, day: datetime | None = None) -> OrderStats:
        """Counts and revenue of orders created on the business day containing ``day``."""
        moment = day or utc_now()
        docs = await self._store.list(
            COLLECTION_ORDERS,
            [
                FieldFilter("createdAt", ">=", start_of_day(moment, self._tz)),
                FieldFilter("createdAt", "<=", end_of_day(moment, self._tz)),
            ],
        )
        statuses = [d.data.get("status") for d in docs]
        return OrderStats(
            total=len(docs),
            pending=sum(
                s in (OrderStatus.PENDING_PAYMENT.value, OrderStatus.CONFIRMED.value)
                for s in statuses
            ),
            completed=sum(s == OrderStatus.COMPLETED.value for s in statuses),
            revenue=sum(as_float(d.data.get("total")) for d in docs),
        )

    async def get_revenue_stats(self, days: int = 30) -> list[RevenuePoint]:
        """Revenue per UTC calendar date for the last ``days`` days, oldest first."""
        since = utc_now() - timedelta(days=days)
        docs = await self._store.list(
            COLLECTION_ORDERS,
            [
                FieldFilter("createdAt", ">=", since),
                FieldFilter("status", "in", [s.value for s in REVENUE_STATUSES]),
            ],
            OrderBy("createdAt", "asc"),
        )
        revenue: dict[str, float] = defaultdict(float)
        counts: dict[str, int] = defaultdict(int)
        for doc in docs:
            created = doc.data.get("createdAt")
            if not isinstance(created, datetime):
                continue
            key = created.astimezone(UTC).date().isoformat()
            revenue[key] += as_float(doc.data.get("total"))
            counts[key] += 1
        return [
            RevenuePoint(date=key, revenue=revenue[key], orders=counts[key])
            for key in revenue
        ]
