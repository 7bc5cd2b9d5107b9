"""Tests for stay duration resolution."""

from __future__ import annotations

import datetime

import pytest

from booking_pricing.services.duration_service import (
    BookingType,
    build_window,
    parse_date,
    parse_time,
    resolve_duration,
    resolve_stay,
)


def test_overnight_counts_days_and_nights() -> None:
    duration = resolve_stay("2024-06-01", "2024-06-04")
    assert duration is not None
    assert duration.booking_type is BookingType.OVERNIGHT
    assert (duration.days, duration.nights, duration.hours) == (3, 2, 0)
    assert duration.stay_dates() == [
        datetime.date(2024, 6, 1),
        datetime.date(2024, 6, 2),
        datetime.date(2024, 6, 3),
    ]


def test_single_night_has_no_extra_nights() -> None:
    duration = resolve_stay(datetime.date(2024, 6, 1), datetime.date(2024, 6, 2))
    assert duration is not None
    assert (duration.days, duration.nights) == (1, 0)


@pytest.mark.parametrize("days", [1, 2, 5, 14, 31])
def test_overnight_nights_trail_days_by_one(days: int) -> None:
    start = datetime.date(2024, 2, 20)
    duration = resolve_stay(start, start + datetime.timedelta(days=days))
    assert duration is not None
    assert duration.days == days
    assert duration.nights == max(days - 1, 0)


@pytest.mark.parametrize(
    ("check_in", "check_out"),
    [("2024-06-04", "2024-06-04"), ("2024-06-05", "2024-06-04")],
)
def test_overnight_without_positive_days_is_unpriced(
    check_in: str, check_out: str
) -> None:
    assert resolve_stay(check_in, check_out) is None


def test_overnight_ignores_time_of_day() -> None:
    window = build_window(
        datetime.datetime(2024, 6, 1, 23, 30),
        "2024-06-02",
        check_in_time="23:30",
        check_out_time="01:00",
    )
    assert window is not None
    assert window.check_in == datetime.datetime(2024, 6, 1)
    assert window.check_out == datetime.datetime(2024, 6, 2)
    duration = resolve_duration(window)
    assert duration is not None and duration.days == 1


def test_short_stay_rounds_to_nearest_hour() -> None:
    duration = resolve_stay(
        "2024-06-01",
        "2024-06-01",
        booking_type="short-stay",
        check_in_time="14:00",
        check_out_time="16:30",
    )
    assert duration is not None
    assert duration.is_short_stay
    assert duration.hours == 3
    assert duration.days == 0


@pytest.mark.parametrize(
    ("check_out_time", "expected"),
    [("14:20", 1), ("15:29", 1), ("15:30", 2), ("18:00:00", 4)],
)
def test_short_stay_hours(check_out_time: str, expected: int) -> None:
    duration = resolve_stay(
        "2024-06-01",
        "2024-06-01",
        booking_type=BookingType.SHORT_STAY,
        check_in_time="14:00",
        check_out_time=check_out_time,
    )
    assert duration is not None
    assert duration.hours == expected
    assert duration.hours >= 1


def test_short_stay_across_midnight() -> None:
    duration = resolve_stay(
        "2024-06-01",
        "2024-06-02",
        booking_type="short-stay",
        check_in_time=datetime.time(22, 0),
        check_out_time=datetime.time(2, 0),
    )
    assert duration is not None
    assert duration.hours == 4


def test_short_stay_ending_before_start_is_unpriced() -> None:
    assert (
        resolve_stay(
            "2024-06-01",
            "2024-06-01",
            booking_type="short-stay",
            check_in_time="16:00",
            check_out_time="14:00",
        )
        is None
    )


@pytest.mark.parametrize("bad", ["not-a-date", "", "2024-13-40", None])
def test_unparseable_dates_do_not_raise(bad: str | None) -> None:
    assert resolve_stay(bad, "2024-06-04") is None
    assert build_window("2024-06-01", bad) is None


def test_parse_date_accepts_iso_datetimes() -> None:
    assert parse_date("2024-06-01T10:15:00") == datetime.date(2024, 6, 1)
    assert parse_date(datetime.datetime(2024, 6, 1, 8)) == datetime.date(2024, 6, 1)


def test_parse_time_is_lenient_with_components() -> None:
    assert parse_time("14") == datetime.time(14, 0)
    assert parse_time("14:xx") == datetime.time(14, 0)
    assert parse_time("09:05:07") == datetime.time(9, 5, 7)
    assert parse_time(None) == datetime.time()
    assert parse_time("25:00") is None


def test_booking_type_coercion() -> None:
    assert BookingType.coerce("short_stay") is BookingType.SHORT_STAY
    assert BookingType.coerce("Short-Stay") is BookingType.SHORT_STAY
    assert BookingType.coerce(None) is BookingType.OVERNIGHT
    assert BookingType.coerce("weekly") is BookingType.OVERNIGHT
