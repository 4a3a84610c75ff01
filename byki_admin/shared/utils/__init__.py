"""Shared utilities: datetime parsing, id generators, rounding."""

from byki_admin.shared.utils.datetime import (
    end_of_day,
    ensure_utc,
    from_timestamp_ms_utc,
    parse_firestore_date,
    parse_optional_date,
    start_of_day,
    start_of_month,
    start_of_week,
    utc_now,
)
from byki_admin.shared.utils.generators import generate_cuid, generate_message_id
from byki_admin.shared.utils.numbers import round_half_up

__all__ = [
    "generate_cuid",
    "generate_message_id",
    "round_half_up",
    "utc_now",
    "ensure_utc",
    "from_timestamp_ms_utc",
    "parse_firestore_date",
    "parse_optional_date",
    "start_of_day",
    "end_of_day",
    "start_of_week",
    "start_of_month",
]
