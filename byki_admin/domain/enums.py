"""Domain enumerations for the BYKI admin dashboard.

Values are the exact strings stored by the mobile app; never rename them.
"""

from enum import Enum


class _StoredEnum(str, Enum):
    """String enum whose values are persisted verbatim in Firestore."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings.

        Returns:
            List of enum value strings (e.g. for validation or serialization).
        """
        return [member.value for member in cls]

    @classmethod
    def parse(cls, raw: object, default: "_StoredEnum") -> "_StoredEnum":
        """Return the member for ``raw`` or ``default`` when it is unknown or absent."""
        try:
            return cls(raw)
        except ValueError:
            return default


class OrderStatus(_StoredEnum):
    """Order lifecycle. Terminal: completed, cancelled, refunded."""

    PENDING_PAYMENT = "pendingPayment"
    CONFIRMED = "confirmed"
    IN_PROGRESS = "inProgress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    REFUNDED = "refunded"


class BookingStatus(_StoredEnum):
    """Workshop booking lifecycle."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    IN_PROGRESS = "inProgress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    NO_SHOW = "noShow"


class EmergencyStatus(_StoredEnum):
    """Roadside assistance lifecycle."""

    PENDING = "pending"
    DISPATCHED = "dispatched"
    EN_ROUTE = "enRoute"
    ARRIVED = "arrived"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class EmergencyType(_StoredEnum):
    BREAKDOWN = "breakdown"
    ACCIDENT = "accident"
    FLAT_TIRE = "flatTire"
    BATTERY = "battery"
    FUEL = "fuel"
    LOCKOUT = "lockout"
    OTHER = "other"


class TicketStatus(_StoredEnum):
    """Support ticket lifecycle."""

    OPEN = "open"
    IN_PROGRESS = "inProgress"
    RESOLVED = "resolved"
    CLOSED = "closed"


class TicketPriority(_StoredEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class SenderType(_StoredEnum):
    USER = "user"
    ADMIN = "admin"


class UserRole(_StoredEnum):
    USER = "user"
    STAFF = "staff"
    ADMIN = "admin"
    SUPER_ADMIN = "superAdmin"


class UserStatus(_StoredEnum):
    """Admin moderation state of an account (absent means active)."""

    ACTIVE = "active"
    SUSPENDED = "suspended"
    BANNED = "banned"


class LoyaltyTier(_StoredEnum):
    BRONZE = "bronze"
    SILVER = "silver"
    GOLD = "gold"
    PLATINUM = "platinum"


class ReviewTargetType(_StoredEnum):
    WORKSHOP = "workshop"
    PRODUCT = "product"


class NotificationType(_StoredEnum):
    BOOKING = "booking"
    ORDER = "order"
    PROMO = "promo"
    SYSTEM = "system"
    EMERGENCY = "emergency"


class WorkshopPartnerType(_StoredEnum):
    HQ = "hq"
    PARTNER = "partner"
    AFFILIATE = "affiliate"


class ServiceRegion(_StoredEnum):
    KLANG_VALLEY = "klangValley"
    NORTHERN = "northern"
    SOUTHERN = "southern"
    EAST_COAST = "eastCoast"
    EAST_MALAYSIA = "eastMalaysia"


class PriceChangeType(_StoredEnum):
    PERCENTAGE = "percentage"
    FIXED = "fixed"


ADMIN_ROLES: frozenset[UserRole] = frozenset(
    {UserRole.STAFF, UserRole.ADMIN, UserRole.SUPER_ADMIN}
)
