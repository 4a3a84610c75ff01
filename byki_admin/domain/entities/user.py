"""User entities: app accounts, their sub-collections and loyalty account."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from byki_admin.domain.enums import LoyaltyTier, UserRole, UserStatus

# Minimum lifetime points per tier, highest first.
LOYALTY_TIER_THRESHOLDS: tuple[tuple[LoyaltyTier, int], ...] = (
    (LoyaltyTier.PLATINUM, 10_000),
    (LoyaltyTier.GOLD, 5_000),
    (LoyaltyTier.SILVER, 1_000),
    (LoyaltyTier.BRONZE, 0),
)


def tier_for_points(points: int) -> LoyaltyTier:
    """Return the loyalty tier earned by ``points``."""
    for tier, minimum in LOYALTY_TIER_THRESHOLDS:
        if points >= minimum:
            return tier
    return LoyaltyTier.BRONZE


@dataclass(frozen=True)
class User:
    """Normalized app user. Moderation fields are only set by admins."""

    id: str
    created_at: datetime
    updated_at: datetime
    email: str = ""
    name: str = ""
    phone: str | None = None
    profile_image_url: str | None = None
    role: UserRole = UserRole.USER
    device_tokens: list[str] = field(default_factory=list)
    status: UserStatus | None = None
    suspended_at: datetime | None = None
    suspension_reason: str | None = None
    banned_at: datetime | None = None
    ban_reason: str | None = None


@dataclass(frozen=True)
class AdminUser:
    """Identity of a signed-in dashboard operator."""

    uid: str
    email: str
    name: str
    role: UserRole


@dataclass(frozen=True)
class UserPage:
    """One page of users plus the cursor for the next page (None on the last/fallback page)."""

    users: list[User]
    last_doc_id: str | None


@dataclass(frozen=True)
class Vehicle:
    id: str
    user_id: str
    brand: str = ""
    model: str = ""
    year: int = 0
    variant: str = ""
    license_plate: str | None = None
    is_primary: bool = False
    specs: dict[str, Any] = field(default_factory=dict)
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class Address:
    id: str
    user_id: str
    label: str = ""
    full_address: str = ""
    latitude: float = 0
    longitude: float = 0
    is_default: bool = False


@dataclass(frozen=True)
class LoyaltyAccount:
    """Points balance keyed 1:1 by user id."""

    user_id: str
    total_points: int = 0
    lifetime_points: int = 0
    tier: LoyaltyTier = LoyaltyTier.BRONZE
    created_at: datetime | None = None
    updated_at: datetime | None = None
