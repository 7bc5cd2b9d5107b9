"""Tests for room cost computation."""

from __future__ import annotations

import datetime
from decimal import Decimal

import pytest

from booking_pricing.services.duration_service import resolve_stay
from booking_pricing.services.room_rate_service import (
    MAX_RANGE_NIGHTS,
    SOURCE_FLAT,
    SOURCE_SEASONAL,
    PricingBand,
    RoomRate,
    base_room_price,
    nightly_rates_for_range,
    price_range,
)

FLAT = RoomRate(flat_nightly_rate=Decimal("1000"), hourly_rate=Decimal("200"))
JUNE_STAY = resolve_stay("2024-06-01", "2024-06-04")


def _band(start: str, end: str, price: str) -> PricingBand:
    return PricingBand(
        start_date=datetime.date.fromisoformat(start),
        end_date=datetime.date.fromisoformat(end),
        price=Decimal(price),
    )


def test_flat_rate_multiplies_days() -> None:
    assert base_room_price(JUNE_STAY, FLAT) == Decimal("3000.00")


def test_short_stay_uses_hourly_rate() -> None:
    duration = resolve_stay(
        "2024-06-01",
        "2024-06-01",
        booking_type="short-stay",
        check_in_time="14:00",
        check_out_time="16:30",
    )
    assert base_room_price(duration, FLAT) == Decimal("600.00")


@pytest.mark.parametrize("hourly", [None, Decimal("0")])
def test_short_stay_without_hourly_rate_bills_one_night(hourly) -> None:
    duration = resolve_stay(
        "2024-06-01",
        "2024-06-01",
        booking_type="short-stay",
        check_in_time="10:00",
        check_out_time="13:00",
    )
    rate = RoomRate(flat_nightly_rate=Decimal("1000"), hourly_rate=hourly)
    assert base_room_price(duration, rate) == Decimal("1000.00")


def test_unpriceable_inputs_yield_zero() -> None:
    assert base_room_price(None, FLAT) == Decimal("0")
    assert base_room_price(JUNE_STAY, None) == Decimal("0")
    assert base_room_price(
        JUNE_STAY,
        RoomRate(flat_nightly_rate=None),
        [_band("2024-06-01", "2024-06-30", "1500")],
    ) == Decimal("0")


def test_seasonal_band_covering_stay_overrides_flat_rate() -> None:
    bands = [_band("2024-06-01", "2024-06-30", "1500")]
    assert base_room_price(JUNE_STAY, FLAT, bands) == Decimal("4500.00")


def test_adjacent_bands_are_summed_per_day() -> None:
    bands = [
        _band("2024-06-01", "2024-06-02", "1200"),
        _band("2024-06-03", "2024-06-10", "1500"),
    ]
    assert base_room_price(JUNE_STAY, FLAT, bands) == Decimal("3900.00")


def test_checkout_day_is_not_billed_against_bands() -> None:
    # Band ends on the last stay night; the checkout day needs no cover.
    bands = [_band("2024-06-01", "2024-06-03", "1500")]
    assert base_room_price(JUNE_STAY, FLAT, bands) == Decimal("4500.00")


def test_partial_band_coverage_falls_back_to_flat_rate() -> None:
    bands = [_band("2024-06-02", "2024-06-30", "1500")]
    assert base_room_price(JUNE_STAY, FLAT, bands) == Decimal("3000.00")


def test_zero_seasonal_total_falls_back_to_flat_rate() -> None:
    bands = [_band("2024-06-01", "2024-06-30", "0")]
    assert base_room_price(JUNE_STAY, FLAT, bands) == Decimal("3000.00")


def test_nightly_rates_for_range_reports_sources() -> None:
    seasonal = nightly_rates_for_range(
        FLAT,
        [_band("2024-12-20", "2025-01-05", "1500")],
        datetime.date(2024, 12, 30),
        datetime.date(2025, 1, 2),
    )
    assert [line.date.isoformat() for line in seasonal] == [
        "2024-12-30",
        "2024-12-31",
        "2025-01-01",
    ]
    assert {line.source for line in seasonal} == {SOURCE_SEASONAL}
    assert seasonal[0].to_dict() == {
        "date": "2024-12-30",
        "price": "1500.00",
        "source": "seasonal",
    }

    flat = nightly_rates_for_range(
        FLAT, [], datetime.date(2024, 6, 1), datetime.date(2024, 6, 3)
    )
    assert [(line.price, line.source) for line in flat] == [
        (Decimal("1000.00"), SOURCE_FLAT),
        (Decimal("1000.00"), SOURCE_FLAT),
    ]


def test_nightly_rates_for_range_rejects_empty_range() -> None:
    with pytest.raises(ValueError):
        nightly_rates_for_range(
            FLAT, [], datetime.date(2024, 6, 3), datetime.date(2024, 6, 3)
        )


def test_price_range_spans_flat_and_seasonal_prices() -> None:
    result = price_range(
        FLAT,
        [_band("2024-06-01", "2024-06-30", "1500"), _band("2024-09-01", "2024-09-30", "800")],
    )
    assert result is not None
    assert (result.lowest, result.highest) == (Decimal("800.00"), Decimal("1500.00"))


def test_price_range_without_prices() -> None:
    assert price_range(RoomRate(flat_nightly_rate=None)) is None
    assert price_range(None) is None


def test_nightly_rates_for_range_caps_range_length() -> None:
    start = datetime.date(2024, 1, 1)
    lines = nightly_rates_for_range(
        FLAT, [], start, start + datetime.timedelta(days=MAX_RANGE_NIGHTS)
    )
    assert len(lines) == MAX_RANGE_NIGHTS
    with pytest.raises(ValueError, match="cannot exceed"):
        nightly_rates_for_range(
            FLAT, [], start, start + datetime.timedelta(days=MAX_RANGE_NIGHTS + 1)
        )
