"""Field-level normalization of raw Firestore documents.

Older mobile app versions wrote some fields under different names. The
alias table below lists, per entity, the canonical field and the legacy
names accepted in priority order. The canonical name always wins when both
are present.

The coercion helpers never raise: malformed values degrade to the default.
"""

import copy
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class FieldAlias:
    """Canonical field, its legacy names, and the fallback when all are absent.

    With ``skip_falsy`` a present but falsy value (``""``, ``0``, ``[]``)
    also falls through to the next name; otherwise only missing or null
    values do.
    """

    canonical: str
    aliases: tuple[str, ...]
    default: Any = None
    skip_falsy: bool = True


FIELD_ALIASES: dict[str, tuple[FieldAlias, ...]] = {
    "order_item": (
        FieldAlias("unitPrice", ("price",), 0, skip_falsy=False),
        FieldAlias("totalPrice", ("subtotal",), 0, skip_falsy=False),
    ),
    "product": (
        FieldAlias("stockQuantity", ("stock",), 0, skip_falsy=False),
        FieldAlias("imageUrls", ("images",), []),
        FieldAlias("specifications", ("specs",), {}),
        FieldAlias("compatibleWith", ("compatibility",), []),
    ),
    "voucher": (
        FieldAlias("title", ("name",), ""),
        FieldAlias("minSpend", ("minPurchase",), None, skip_falsy=False),
    ),
    "user": (
        FieldAlias("name", ("displayName",), ""),
        FieldAlias("phone", ("phoneNumber",), None),
        FieldAlias("profileImageUrl", ("photoURL",), None),
    ),
}


def resolve_field(data: Mapping[str, Any], alias: FieldAlias) -> Any:
    """Return the first usable value of the canonical name, then each alias."""
    for name in (alias.canonical, *alias.aliases):
        value = data.get(name)
        if value is None:
            continue
        if alias.skip_falsy and not value:
            continue
        return value
    return copy.copy(alias.default)


def resolve_aliases(entity: str, data: Mapping[str, Any]) -> dict[str, Any]:
    """Resolve every aliased field of ``entity``; keys are canonical names."""
    return {
        alias.canonical: resolve_field(data, alias)
        for alias in FIELD_ALIASES.get(entity, ())
    }


def as_str(value: Any, default: str = "") -> str:
    if isinstance(value, str) and value:
        return value
    return default


def as_optional_str(value: Any) -> str | None:
    return value if isinstance(value, str) and value else None


def as_float(value: Any, default: float = 0) -> float:
    if isinstance(value, bool) or not value:
        return default
    if isinstance(value, int | float):
        return value
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def as_optional_float(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        return value
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def as_int(value: Any, default: int = 0) -> int:
    number = as_float(value, default)
    try:
        return int(number)
    except (OverflowError, ValueError):
        return default


def as_bool(value: Any, default: bool) -> bool:
    """Stored flag or ``default`` when absent (null counts as absent)."""
    if value is None:
        return default
    return bool(value)


def as_list(value: Any) -> list:
    return list(value) if isinstance(value, list | tuple) else []


def as_str_list(value: Any) -> list[str]:
    return [v for v in as_list(value) if isinstance(v, str)]


def as_dict(value: Any) -> dict[str, Any]:
    return dict(value) if isinstance(value, Mapping) else {}
