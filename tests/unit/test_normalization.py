"""Tests for document normalization (legacy field aliases, coercion, defaults)."""

from byki_admin.domain.enums import (
    EmergencyStatus,
    EmergencyType,
    LoyaltyTier,
    OrderStatus,
    UserRole,
)
from byki_admin.infrastructure.firebase.normalization import (
    as_bool,
    as_float,
    as_int,
    resolve_aliases,
)
from byki_admin.infrastructure.firebase.services.emergency_service_firestore import (
    transform_emergency,
)
from byki_admin.infrastructure.firebase.services.order_service_firestore import (
    transform_order,
)
from byki_admin.infrastructure.firebase.services.product_service_firestore import (
    transform_product,
)
from byki_admin.infrastructure.firebase.services.user_service_firestore import (
    transform_loyalty_account,
    transform_user,
)
from byki_admin.infrastructure.firebase.services.voucher_service_firestore import (
    transform_voucher,
)


def test_canonical_name_wins_over_legacy_alias() -> None:
    """When both names are present the canonical one is used."""
    resolved = resolve_aliases("user", {"name": "Aisyah", "displayName": "Old"})
    assert resolved["name"] == "Aisyah"


def test_legacy_alias_used_when_canonical_missing() -> None:
    """Legacy names fill in for missing canonical fields."""
    user = transform_user(
        "u1",
        {
            "displayName": "Aisyah",
            "phoneNumber": "+60123456789",
            "photoURL": "https://img/a.png",
        },
    )
    assert user.name == "Aisyah"
    assert user.phone == "+60123456789"
    assert user.profile_image_url == "https://img/a.png"
    assert user.role == UserRole.USER


def test_product_stock_alias_keeps_zero() -> None:
    """A stored stockQuantity of 0 is not replaced by the legacy stock field."""
    product = transform_product("p1", {"name": "Oil", "stockQuantity": 0, "stock": 7})
    assert product.stock_quantity == 0
    legacy = transform_product("p2", {"name": "Oil", "stock": 7, "images": ["a.png"]})
    assert legacy.stock_quantity == 7
    assert legacy.image_urls == ["a.png"]


def test_order_items_accept_legacy_price_names() -> None:
    """Order items written with price/subtotal map to unit/total price."""
    order = transform_order(
        "abcdefghij",
        {"items": [{"productId": "p1", "quantity": 2, "price": 10, "subtotal": 20}]},
    )
    assert order.items[0].unit_price == 10
    assert order.items[0].total_price == 20


def test_order_defaults() -> None:
    """Missing order number derives from the id; unknown status falls back."""
    order = transform_order("abcdefghij", {"status": "mystery"})
    assert order.order_number == "ABCDEFGH"
    assert order.status == OrderStatus.PENDING_PAYMENT
    assert order.total == 0
    assert order.items == []


def test_voucher_title_alias() -> None:
    """Vouchers written with name map to title."""
    voucher = transform_voucher("v1", {"code": "SAVE10", "name": "Ten off"})
    assert voucher.title == "Ten off"


def test_emergency_unknown_enums_fall_back() -> None:
    """Unknown type and status values take the documented defaults."""
    emergency = transform_emergency("e1", {"type": "meteor", "status": None})
    assert emergency.type == EmergencyType.OTHER
    assert emergency.status == EmergencyStatus.PENDING
    assert emergency.dispatched_at is None


def test_loyalty_tier_derived_when_not_stored() -> None:
    """Stored tier wins; otherwise lifetime points decide it."""
    stored = transform_loyalty_account("u1", {"lifetimePoints": 50, "tier": "gold"})
    assert stored.tier == LoyaltyTier.GOLD
    derived = transform_loyalty_account("u1", {"lifetimePoints": 0})
    assert derived.tier == LoyaltyTier.BRONZE


def test_coercion_helpers_never_raise() -> None:
    """Malformed values degrade to defaults."""
    assert as_float("12.5") == 12.5
    assert as_float("abc") == 0
    assert as_float(True) == 0
    assert as_int("7.9") == 7
    assert as_int(None, 3) == 3
    assert as_bool(None, True) is True
    assert as_bool(0, True) is False
