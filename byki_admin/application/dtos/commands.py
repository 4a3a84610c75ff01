"""Input DTOs for write operations that carry more than a few fields."""

from dataclasses import dataclass, field
from typing import Any

from byki_admin.domain.enums import NotificationType, PriceChangeType, SenderType
from byki_admin.shared.utils.numbers import round_half_up


@dataclass(frozen=True)
class PriceChange:
    """Bulk price adjustment: ``value`` percent, or an absolute amount for fixed."""

    type: PriceChangeType
    value: float

    def apply(self, price: float) -> float:
        """Return the adjusted price rounded to cents."""
        if self.type == PriceChangeType.PERCENTAGE:
            new_price = price * (1 + self.value / 100)
        else:
            new_price = price + self.value
        return round_half_up(new_price, 2)


@dataclass(frozen=True)
class TicketReply:
    """A reply to append to a ticket thread (id and timestamp are assigned on write)."""

    sender_id: str
    sender_name: str
    sender_type: SenderType
    message: str
    attachments: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class NotificationDraft:
    """Content of an in-app notification before it is addressed to users."""

    title: str
    body: str
    type: NotificationType = NotificationType.SYSTEM
    data: dict[str, Any] | None = None
