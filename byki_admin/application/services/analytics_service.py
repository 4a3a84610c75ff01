"""Analytics: dashboard landing-page stats and the revenue chart."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from byki_admin.application.dtos.stats import DashboardStats, RevenuePoint
from byki_admin.shared.utils.datetime import utc_now

if TYPE_CHECKING:
    from byki_admin.infrastructure.firebase.services import (
        FirestoreBookingService,
        FirestoreEmergencyService,
        FirestoreOrderService,
        FirestoreProductService,
        FirestoreSupportService,
        FirestoreUserService,
    )


class AnalyticsService:
    """Joins the per-domain stats into one dashboard snapshot."""

    def __init__(
        self,
        orders: "FirestoreOrderService",
        bookings: "FirestoreBookingService",
        users: "FirestoreUserService",
        emergencies: "FirestoreEmergencyService",
        support: "FirestoreSupportService",
        products: "FirestoreProductService",
    ) -> None:
        self.orders = orders
        self.bookings = bookings
        self.users = users
        self.emergencies = emergencies
        self.support = support
        self.products = products

    async def get_dashboard_stats(self) -> DashboardStats:
        """Fetch every domain's stats concurrently. Any failure fails the snapshot."""
        orders, bookings, users, emergencies, support, inventory = await asyncio.gather(
            self.orders.get_order_stats(utc_now()),
            self.bookings.get_booking_stats(),
            self.users.get_user_stats(),
            self.emergencies.get_emergency_stats(),
            self.support.get_ticket_stats(),
            self.products.get_inventory_stats(),
        )
        return DashboardStats(
            orders=orders,
            bookings=bookings,
            users=users,
            emergencies=emergencies,
            support=support,
            inventory=inventory,
        )

    async def get_revenue_chart_data(self, days: int = 30) -> list[RevenuePoint]:
        return await self.orders.get_revenue_stats(days)
