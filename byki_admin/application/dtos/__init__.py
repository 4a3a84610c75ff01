"""Application DTOs (no transport dependency)."""

from byki_admin.application.dtos.commands import (
    NotificationDraft,
    PriceChange,
    TicketReply,
)
from byki_admin.application.dtos.stats import (
    BookingStats,
    DashboardStats,
    EmergencyStats,
    FAQStats,
    InventoryStats,
    NotificationStats,
    OrderStats,
    RevenuePoint,
    ReviewStats,
    TicketStats,
    UserStats,
    VoucherStats,
)

__all__ = [
    "BookingStats",
    "DashboardStats",
    "EmergencyStats",
    "FAQStats",
    "InventoryStats",
    "NotificationDraft",
    "NotificationStats",
    "OrderStats",
    "PriceChange",
    "RevenuePoint",
    "ReviewStats",
    "TicketReply",
    "TicketStats",
    "UserStats",
    "VoucherStats",
]
