"""Room cost computation from flat, hourly, and seasonal rates."""

from __future__ import annotations

import datetime
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Iterable, Sequence

from booking_pricing.services.duration_service import StayDuration

MONEY_PLACES = Decimal("0.01")
ZERO = Decimal("0.00")

SOURCE_SEASONAL = "seasonal"
SOURCE_FLAT = "flat"
MAX_RANGE_NIGHTS = 366


@dataclass(frozen=True, slots=True)
class RoomRate:
    """Rates configured on a room."""

    flat_nightly_rate: Decimal | None
    hourly_rate: Decimal | None = None


@dataclass(frozen=True, slots=True)
class PricingBand:
    """Seasonal nightly price for an inclusive date range."""

    start_date: datetime.date
    end_date: datetime.date
    price: Decimal

    def covers(self, day: datetime.date) -> bool:
        return self.start_date <= day <= self.end_date


@dataclass(frozen=True, slots=True)
class NightlyRate:
    """Price billed for a single stay date."""

    date: datetime.date
    price: Decimal
    source: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "price": _to_str(self.price),
            "source": self.source,
        }


@dataclass(frozen=True, slots=True)
class PriceRange:
    """Cheapest and most expensive nightly price a room can be billed at."""

    lowest: Decimal
    highest: Decimal


def _to_money(value: Decimal | float | str | int) -> Decimal:
    return Decimal(value).quantize(MONEY_PLACES, rounding=ROUND_HALF_UP)


def _to_str(value: Decimal) -> str:
    return f"{value.quantize(MONEY_PLACES, rounding=ROUND_HALF_UP):.2f}"


def _positive(value: Decimal | None) -> Decimal | None:
    if value is None:
        return None
    amount = Decimal(value)
    return amount if amount > 0 else None


def band_for(day: datetime.date, bands: Iterable[PricingBand]) -> PricingBand | None:
    """Return the first band covering ``day``."""

    for band in bands:
        if band.covers(day):
            return band
    return None


def nightly_rates(
    rate: RoomRate | None,
    bands: Sequence[PricingBand],
    stay_dates: Sequence[datetime.date],
) -> list[NightlyRate]:
    """Price each stay date.

    Seasonal prices are used only when every date falls inside a band and
    the seasonal total is positive; otherwise every date is billed at the
    flat nightly rate.
    """

    if not stay_dates:
        return []

    seasonal: list[NightlyRate] = []
    for day in stay_dates:
        band = band_for(day, bands)
        if band is None:
            seasonal = []
            break
        seasonal.append(NightlyRate(day, _to_money(band.price), SOURCE_SEASONAL))
    if seasonal and sum((line.price for line in seasonal), ZERO) > 0:
        return seasonal

    flat = _positive(rate.flat_nightly_rate) if rate else None
    flat_price = _to_money(flat) if flat is not None else ZERO
    return [NightlyRate(day, flat_price, SOURCE_FLAT) for day in stay_dates]


def nightly_rates_for_range(
    rate: RoomRate | None,
    bands: Sequence[PricingBand],
    start_date: datetime.date,
    end_date: datetime.date,
) -> list[NightlyRate]:
    """Price the nights from ``start_date`` up to but excluding ``end_date``."""

    if end_date <= start_date:
        raise ValueError("end_date must be after start_date")
    days = (end_date - start_date).days
    if days > MAX_RANGE_NIGHTS:
        raise ValueError(f"Date range cannot exceed {MAX_RANGE_NIGHTS} nights")
    stay_dates = [start_date + datetime.timedelta(days=offset) for offset in range(days)]
    return nightly_rates(rate, bands, stay_dates)


def base_room_price(
    duration: StayDuration | None,
    rate: RoomRate | None,
    bands: Sequence[PricingBand] = (),
) -> Decimal:
    """Room cost for the resolved duration; zero when it cannot be priced."""

    if duration is None or rate is None:
        return ZERO

    flat = _positive(rate.flat_nightly_rate)
    if duration.is_short_stay:
        hourly = _positive(rate.hourly_rate)
        if hourly is not None:
            return _to_money(hourly * duration.hours)
        # Rooms without an hourly rate bill a short stay as one night.
        return _to_money(flat) if flat is not None else ZERO

    if flat is None:
        return ZERO
    lines = nightly_rates(rate, bands, duration.stay_dates())
    return _to_money(sum((line.price for line in lines), ZERO))


def price_range(
    rate: RoomRate | None, bands: Sequence[PricingBand] = ()
) -> PriceRange | None:
    """Lowest and highest positive nightly price across flat and seasonal rates."""

    candidates = [
        price
        for price in [rate.flat_nightly_rate if rate else None]
        + [band.price for band in bands]
        if price is not None and price > 0
    ]
    if not candidates:
        return None
    return PriceRange(
        lowest=_to_money(min(candidates)), highest=_to_money(max(candidates))
    )
