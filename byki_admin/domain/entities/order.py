"""Order entity: a purchase placed through the mobile app."""

from dataclasses import dataclass, field
from datetime import datetime

from byki_admin.domain.enums import OrderStatus


@dataclass(frozen=True)
class OrderItem:
    """One line of an order. unit/total prices are copied at checkout time."""

    product_id: str
    product_name: str
    quantity: int
    unit_price: float
    total_price: float
    image_url: str | None = None


@dataclass(frozen=True)
class Order:
    """Normalized order.

    ``total`` is expected to equal ``subtotal - discount + tax`` but this is
    never checked; writers are trusted.
    """

    id: str
    user_id: str
    order_number: str
    created_at: datetime
    updated_at: datetime
    items: list[OrderItem] = field(default_factory=list)
    subtotal: float = 0
    discount: float = 0
    tax: float = 0
    total: float = 0
    status: OrderStatus = OrderStatus.PENDING_PAYMENT
    payment_method: str | None = None
    payment_id: str | None = None
    workshop_id: str | None = None
    booking_id: str | None = None
    voucher_id: str | None = None
    notes: str | None = None
