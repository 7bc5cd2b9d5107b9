"""Stay duration resolution for overnight and short-stay bookings."""

from __future__ import annotations

import datetime
import enum
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP

DateInput = datetime.date | datetime.datetime | str | None
TimeInput = datetime.time | datetime.datetime | str | None

_SECONDS_PER_HOUR = Decimal(3600)


class BookingType(str, enum.Enum):
    """How a booking is charged."""

    OVERNIGHT = "overnight"
    SHORT_STAY = "short-stay"

    @classmethod
    def coerce(cls, value: "str | BookingType | None") -> "BookingType":
        """Anything that is not a short-stay marker is an overnight booking."""

        if isinstance(value, cls):
            return value
        normalized = (value or "").strip().lower().replace("_", "-")
        if normalized == cls.SHORT_STAY.value:
            return cls.SHORT_STAY
        return cls.OVERNIGHT


@dataclass(frozen=True, slots=True)
class BookingWindow:
    """Check-in/check-out instants selected for a booking."""

    check_in: datetime.datetime
    check_out: datetime.datetime
    booking_type: BookingType = BookingType.OVERNIGHT

    @property
    def is_short_stay(self) -> bool:
        return self.booking_type is BookingType.SHORT_STAY


@dataclass(frozen=True, slots=True)
class StayDuration:
    """Resolved length of a stay."""

    booking_type: BookingType
    check_in_date: datetime.date
    days: int = 0
    nights: int = 0
    hours: int = 0

    @property
    def is_short_stay(self) -> bool:
        return self.booking_type is BookingType.SHORT_STAY

    def stay_dates(self) -> list[datetime.date]:
        """Dates billed for an overnight stay, starting at check-in."""

        return [
            self.check_in_date + datetime.timedelta(days=offset)
            for offset in range(self.days)
        ]


def parse_date(value: DateInput) -> datetime.date | None:
    """Parse a calendar date, returning ``None`` when it cannot be read."""

    if value is None:
        return None
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    text = str(value).strip()
    if not text:
        return None
    try:
        return datetime.date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.datetime.fromisoformat(text).date()
    except ValueError:
        return None


def parse_time(value: TimeInput) -> datetime.time | None:
    """Parse a time of day; missing values mean midnight.

    String components that are not numbers count as zero, so ``"14"`` and
    ``"14:xx"`` both read as 14:00. Out-of-range components make the value
    unreadable.
    """

    if value is None:
        return datetime.time()
    if isinstance(value, datetime.datetime):
        return value.time().replace(microsecond=0)
    if isinstance(value, datetime.time):
        return value.replace(microsecond=0, tzinfo=None)
    text = str(value).strip()
    if not text:
        return datetime.time()
    parts = [_int_or_zero(part) for part in text.split(":")[:3]]
    parts.extend([0] * (3 - len(parts)))
    try:
        return datetime.time(*parts)
    except ValueError:
        return None


def _int_or_zero(raw: str) -> int:
    try:
        return int(raw.strip())
    except ValueError:
        return 0


def build_window(
    check_in_date: DateInput,
    check_out_date: DateInput,
    *,
    booking_type: str | BookingType | None = None,
    check_in_time: TimeInput = None,
    check_out_time: TimeInput = None,
) -> BookingWindow | None:
    """Assemble a booking window from form values.

    Overnight bookings ignore times and are pinned to midnight so the day
    count never depends on the hour the guest picked.
    """

    kind = BookingType.coerce(booking_type)
    start = parse_date(check_in_date)
    end = parse_date(check_out_date)
    if start is None or end is None:
        return None

    if kind is BookingType.SHORT_STAY:
        start_time = parse_time(check_in_time)
        end_time = parse_time(check_out_time)
        if start_time is None or end_time is None:
            return None
    else:
        start_time = end_time = datetime.time()

    return BookingWindow(
        check_in=datetime.datetime.combine(start, start_time),
        check_out=datetime.datetime.combine(end, end_time),
        booking_type=kind,
    )


def resolve_duration(window: BookingWindow | None) -> StayDuration | None:
    """Return the billed duration, or ``None`` while no price can be shown."""

    if window is None:
        return None

    check_in_date = window.check_in.date()
    if window.is_short_stay:
        elapsed = window.check_out - window.check_in
        if elapsed <= datetime.timedelta(0):
            return None
        total_hours = Decimal(int(elapsed.total_seconds())) / _SECONDS_PER_HOUR
        hours = int(total_hours.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
        return StayDuration(
            booking_type=window.booking_type,
            check_in_date=check_in_date,
            hours=max(1, hours),
        )

    days = (window.check_out.date() - check_in_date).days
    if days <= 0:
        return None
    return StayDuration(
        booking_type=window.booking_type,
        check_in_date=check_in_date,
        days=days,
        nights=max(days - 1, 0),
    )


def resolve_stay(
    check_in_date: DateInput,
    check_out_date: DateInput,
    *,
    booking_type: str | BookingType | None = None,
    check_in_time: TimeInput = None,
    check_out_time: TimeInput = None,
) -> StayDuration | None:
    """Shortcut for ``resolve_duration(build_window(...))``."""

    return resolve_duration(
        build_window(
            check_in_date,
            check_out_date,
            booking_type=booking_type,
            check_in_time=check_in_time,
            check_out_time=check_out_time,
        )
    )
