"""Tests for parse_firestore_date and the business-day window helpers."""

from datetime import UTC, date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from byki_admin.shared.utils.datetime import (
    end_of_day,
    parse_firestore_date,
    parse_optional_date,
    start_of_day,
    start_of_month,
    start_of_week,
)

KL = ZoneInfo("Asia/Kuala_Lumpur")


class _Timestamp:
    def __init__(self, moment: datetime) -> None:
        self._moment = moment

    def to_date(self) -> datetime:
        return self._moment


class _Seconds:
    seconds = 1_700_000_000


def _is_now(value: datetime) -> bool:
    return abs(datetime.now(UTC) - value) < timedelta(seconds=5)


def test_timestamp_object_uses_its_accessor() -> None:
    """Objects with to_date() are converted through it."""
    moment = datetime(2024, 3, 1, 8, 30, tzinfo=UTC)
    assert parse_firestore_date(_Timestamp(moment)) == moment


def test_naive_datetime_is_taken_as_utc() -> None:
    """Naive datetimes are treated as UTC and made aware."""
    parsed = parse_firestore_date(datetime(2024, 3, 1, 8, 30))
    assert parsed == datetime(2024, 3, 1, 8, 30, tzinfo=UTC)
    assert parsed.tzinfo is not None


def test_aware_datetime_is_converted_to_utc() -> None:
    """Aware datetimes in another zone come back as the same instant in UTC."""
    plus8 = datetime(2024, 3, 1, 16, 0, tzinfo=timezone(timedelta(hours=8)))
    assert parse_firestore_date(plus8) == datetime(2024, 3, 1, 8, 0, tzinfo=UTC)


def test_iso_string() -> None:
    """ISO strings with Z or an offset are parsed."""
    assert parse_firestore_date("2024-03-01T08:30:00Z") == datetime(
        2024, 3, 1, 8, 30, tzinfo=UTC
    )
    assert parse_firestore_date("2024-03-01T16:30:00+08:00") == datetime(
        2024, 3, 1, 8, 30, tzinfo=UTC
    )


def test_date_only_value() -> None:
    """A plain date becomes UTC midnight."""
    assert parse_firestore_date(date(2024, 3, 1)) == datetime(2024, 3, 1, tzinfo=UTC)


def test_epoch_seconds_and_milliseconds() -> None:
    """Small numbers are seconds, large numbers are milliseconds."""
    expected = datetime(2023, 11, 14, 22, 13, 20, tzinfo=UTC)
    assert parse_firestore_date(1_700_000_000) == expected
    assert parse_firestore_date(1_700_000_000_000) == expected


def test_seconds_map_and_attribute() -> None:
    """Serialized timestamps exposing seconds are accepted."""
    expected = datetime(2023, 11, 14, 22, 13, 20, tzinfo=UTC)
    assert parse_firestore_date({"seconds": 1_700_000_000, "nanoseconds": 0}) == expected
    assert parse_firestore_date(_Seconds()) == expected


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("Fri, 01 Mar 2024 09:30:00 GMT", datetime(2024, 3, 1, 9, 30, tzinfo=UTC)),
        ("Fri, 01 Mar 2024 17:30:00 +0800", datetime(2024, 3, 1, 9, 30, tzinfo=UTC)),
        ("March 1, 2024", datetime(2024, 3, 1, tzinfo=UTC)),
        ("1 Mar 2024", datetime(2024, 3, 1, tzinfo=UTC)),
        ("2024/03/01", datetime(2024, 3, 1, tzinfo=UTC)),
        ("03/01/2024 09:30:00", datetime(2024, 3, 1, 9, 30, tzinfo=UTC)),
    ],
)
def test_written_date_strings(text: str, expected: datetime) -> None:
    """Non-ISO text such as HTTP dates and written dates is still understood."""
    assert parse_firestore_date(text) == expected


@pytest.mark.parametrize("value", [None, "", 0, False, "not a date", object(), {"x": 1}])
def test_unusable_values_fall_back_to_now(value: object) -> None:
    """Absent or unparseable values yield the current time and never raise."""
    assert _is_now(parse_firestore_date(value))


def test_parse_optional_date_keeps_absent_values_absent() -> None:
    """parse_optional_date returns None for missing values."""
    assert parse_optional_date(None) is None
    assert parse_optional_date("") is None
    assert parse_optional_date("2024-03-01T00:00:00Z") == datetime(2024, 3, 1, tzinfo=UTC)


def test_business_day_window_uses_local_midnight() -> None:
    """Start and end of day are local midnights in the business timezone."""
    # 2024-03-01 20:00 UTC is already 2024-03-02 04:00 in Kuala Lumpur.
    moment = datetime(2024, 3, 1, 20, 0, tzinfo=UTC)
    start = start_of_day(moment, KL)
    assert start == datetime(2024, 3, 2, tzinfo=KL)
    assert end_of_day(moment, KL) == start + timedelta(days=1) - timedelta(microseconds=1)


def test_week_starts_on_sunday_and_month_on_the_first() -> None:
    """Week windows begin on Sunday; month windows on day 1."""
    wednesday = datetime(2024, 3, 6, 12, 0, tzinfo=KL)
    assert start_of_week(wednesday, KL) == datetime(2024, 3, 3, tzinfo=KL)
    sunday = datetime(2024, 3, 3, 9, 0, tzinfo=KL)
    assert start_of_week(sunday, KL) == datetime(2024, 3, 3, tzinfo=KL)
    assert start_of_month(wednesday, KL) == datetime(2024, 3, 1, tzinfo=KL)
