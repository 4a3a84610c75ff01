"""Aggregate statistics returned by the domain services (always a fresh full scan)."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class OrderStats:
    """Orders created on one business day. ``pending`` counts pendingPayment and confirmed."""

    total: int
    pending: int
    completed: int
    revenue: float


@dataclass(frozen=True)
class RevenuePoint:
    """Revenue of one UTC calendar date (``YYYY-MM-DD``)."""

    date: str
    revenue: float
    orders: int


@dataclass(frozen=True)
class BookingStats:
    total: int
    pending: int
    confirmed: int
    completed: int
    today_bookings: int


@dataclass(frozen=True)
class EmergencyStats:
    """``average_response_time`` is whole minutes from creation to dispatch."""

    total: int
    pending: int
    active: int
    completed_today: int
    average_response_time: int


@dataclass(frozen=True)
class TicketStats:
    """``resolved`` counts resolved and closed; ``average_resolution_time`` is whole hours."""

    total: int
    open: int
    in_progress: int
    resolved: int
    average_resolution_time: int


@dataclass(frozen=True)
class InventoryStats:
    total_products: int
    in_stock: int
    out_of_stock: int
    low_stock: int
    total_value: float
    by_category: dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class VoucherStats:
    total: int
    active: int
    expired: int


@dataclass(frozen=True)
class UserStats:
    total: int
    new_this_month: int
    by_role: dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class ReviewStats:
    total: int
    average_rating: float
    pending: int
    approved: int
    hidden: int
    by_rating: dict[int, int] = field(default_factory=dict)


@dataclass(frozen=True)
class FAQStats:
    total: int
    active: int
    by_category: dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class NotificationStats:
    """Notifications created since local midnight, Sunday, and the 1st of the month."""

    sent_today: int
    sent_this_week: int
    sent_this_month: int


@dataclass(frozen=True)
class DashboardStats:
    """Snapshot of every domain shown on the dashboard landing page."""

    orders: OrderStats
    bookings: BookingStats
    users: UserStats
    emergencies: EmergencyStats
    support: TicketStats
    inventory: InventoryStats
