"""
UTC datetime utilities for consistent timezone handling.

All datetime values in the system should be timezone-aware UTC.
Use these helpers instead of datetime.now() or datetime.utcnow().

Documents written by the mobile app carry dates in several shapes
(Firestore timestamps, ISO strings, epoch seconds or milliseconds,
``{"seconds": ...}`` maps). parse_firestore_date turns any of them into
one aware datetime.
"""

from collections.abc import Mapping
from datetime import UTC, date, datetime, timedelta, tzinfo
from email.utils import parsedate_to_datetime
from typing import Any

# Numbers below this are epoch seconds, not milliseconds.
EPOCH_SECONDS_CUTOFF = 10_000_000_000

# Written dates tried after ISO 8601 and RFC 2822; read as UTC.
TEXT_DATE_FORMATS = (
    "%B %d, %Y",
    "%b %d, %Y",
    "%d %B %Y",
    "%d %b %Y",
    "%Y/%m/%d",
    "%m/%d/%Y",
    "%Y/%m/%d %H:%M:%S",
    "%m/%d/%Y %H:%M:%S",
)


def utc_now() -> datetime:
    """
    Return the current UTC datetime with timezone info.

    Use this instead of:
        - datetime.now() - naive, uses local timezone
        - datetime.utcnow() - naive, deprecated in Python 3.12
        - datetime.now(UTC) - correct but verbose

    Returns:
        Timezone-aware datetime in UTC
    """
    return datetime.now(UTC)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """
    Ensure a datetime is UTC-aware.

    - If None, returns None
    - If naive, assumes UTC and attaches timezone
    - If aware, converts to UTC

    Use at repository/persistence boundaries to normalize datetimes.

    Args:
        dt: A datetime that may be naive or aware

    Returns:
        UTC-aware datetime or None
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)

    return dt.astimezone(UTC)


def from_timestamp_ms_utc(timestamp_ms: float) -> datetime:
    """
    Create a UTC-aware datetime from a millisecond Unix timestamp.
    Common in JavaScript/APIs that use milliseconds.

    Args:
        timestamp_ms: Unix timestamp in milliseconds

    Returns:
        UTC-aware datetime
    """
    return datetime.fromtimestamp(timestamp_ms / 1000, tz=UTC)


def _parse_text(value: str) -> datetime | None:
    """ISO 8601, then RFC 2822 (``Fri, 01 Mar 2024 09:00:00 GMT``), then TEXT_DATE_FORMATS."""
    text = value.strip()
    if not text:
        return None
    try:
        return ensure_utc(datetime.fromisoformat(text.replace("Z", "+00:00")))
    except ValueError:
        pass
    try:
        return ensure_utc(parsedate_to_datetime(text))
    except (TypeError, ValueError, IndexError):
        pass
    for fmt in TEXT_DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).replace(tzinfo=UTC)
        except ValueError:
            continue
    return None


def _from_millis(millis: float) -> datetime | None:
    try:
        return from_timestamp_ms_utc(millis)
    except (OverflowError, OSError, ValueError):
        return None


def _seconds_of(value: Any) -> Any:
    if isinstance(value, Mapping):
        return value.get("seconds")
    return getattr(value, "seconds", None)


def parse_firestore_date(value: Any) -> datetime:
    """Return an aware UTC datetime for any date-like value read from Firestore.

    Resolution order: objects with a ``to_date``/``toDate`` accessor, datetime
    and date values, date strings (see _parse_text), epoch numbers (values under
    EPOCH_SECONDS_CUTOFF are seconds), and objects or maps exposing
    ``seconds``. Anything else, falsy input, or input that cannot be
    converted yields the current time. Never raises.
    """
    if not value or isinstance(value, bool):
        return utc_now()

    for accessor in ("to_date", "toDate"):
        convert = getattr(value, accessor, None)
        if callable(convert):
            try:
                converted = convert()
            except Exception:
                return utc_now()
            if isinstance(converted, datetime):
                return ensure_utc(converted)
            return utc_now()

    if isinstance(value, datetime):
        return ensure_utc(value)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=UTC)
    if isinstance(value, str):
        return _parse_text(value) or utc_now()
    if isinstance(value, int | float):
        millis = value * 1000 if value < EPOCH_SECONDS_CUTOFF else value
        return _from_millis(millis) or utc_now()

    seconds = _seconds_of(value)
    if isinstance(seconds, int | float) and not isinstance(seconds, bool):
        return _from_millis(seconds * 1000) or utc_now()
    return utc_now()


def parse_optional_date(value: Any) -> datetime | None:
    """Like parse_firestore_date but keeps absent values absent."""
    if not value:
        return None
    return parse_firestore_date(value)


def start_of_day(moment: datetime, tz: tzinfo) -> datetime:
    """Return local midnight (in ``tz``) of the day containing ``moment``."""
    local = moment.astimezone(tz)
    return local.replace(hour=0, minute=0, second=0, microsecond=0)


def end_of_day(moment: datetime, tz: tzinfo) -> datetime:
    """Return the last microsecond of the local day containing ``moment``."""
    return start_of_day(moment, tz) + timedelta(days=1) - timedelta(microseconds=1)


def start_of_week(moment: datetime, tz: tzinfo) -> datetime:
    """Return local midnight of the Sunday that starts the week of ``moment``."""
    midnight = start_of_day(moment, tz)
    days_since_sunday = (midnight.weekday() + 1) % 7
    return midnight - timedelta(days=days_since_sunday)


def start_of_month(moment: datetime, tz: tzinfo) -> datetime:
    """Return local midnight of the first day of the month of ``moment``."""
    return start_of_day(moment, tz).replace(day=1)
