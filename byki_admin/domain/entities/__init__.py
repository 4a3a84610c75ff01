"""Domain entities: normalized read shapes of every Firestore collection."""

from byki_admin.domain.entities.booking import Booking
from byki_admin.domain.entities.emergency import EmergencyRequest
from byki_admin.domain.entities.notification import Notification
from byki_admin.domain.entities.order import Order, OrderItem
from byki_admin.domain.entities.product import Product, ProductCategory
from byki_admin.domain.entities.review import FAQ, FAQCategory, Review
from byki_admin.domain.entities.support import SupportTicket, TicketMessage
from byki_admin.domain.entities.user import (
    Address,
    AdminUser,
    LoyaltyAccount,
    User,
    UserPage,
    Vehicle,
    tier_for_points,
)
from byki_admin.domain.entities.voucher import Voucher
from byki_admin.domain.entities.workshop import Workshop

__all__ = [
    "Address",
    "AdminUser",
    "Booking",
    "EmergencyRequest",
    "FAQ",
    "FAQCategory",
    "LoyaltyAccount",
    "Notification",
    "Order",
    "OrderItem",
    "Product",
    "ProductCategory",
    "Review",
    "SupportTicket",
    "TicketMessage",
    "User",
    "UserPage",
    "Vehicle",
    "Voucher",
    "Workshop",
    "tier_for_points",
]
