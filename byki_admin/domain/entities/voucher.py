"""Voucher entity: a redeemable discount."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Voucher:
    """Normalized voucher. ``discount_value`` is a percent when ``is_percentage``."""

    id: str
    valid_from: datetime
    valid_until: datetime
    code: str = ""
    title: str = ""
    description: str = ""
    discount_value: float = 0
    is_percentage: bool = False
    min_spend: float | None = None
    max_discount: float | None = None
    applicable_categories: list[str] | None = None
    is_active: bool = True
    points_cost: int = 0
    created_at: datetime | None = None
