"""Booking price pipeline: fees, discounts, and payment split."""

from __future__ import annotations

import enum
import logging
import uuid
from dataclasses import dataclass, field
from datetime import UTC, datetime
from decimal import Decimal, ROUND_HALF_UP
from functools import lru_cache
from typing import Any, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from booking_pricing.core.settings import PricingSettings, get_pricing_settings
from booking_pricing.services import promotion_service, room_service
from booking_pricing.services.discount_service import (
    AppliedDiscount,
    CodeRejection,
    PromotionOffer,
    discount_total,
    resolve_discounts,
)
from booking_pricing.services.duration_service import (
    BookingType,
    DateInput,
    TimeInput,
    resolve_stay,
)
from booking_pricing.services.room_rate_service import (
    NightlyRate,
    PricingBand,
    RoomRate,
    base_room_price,
    nightly_rates,
)

logger = logging.getLogger(__name__)

MONEY_PLACES = Decimal("0.01")
ZERO = Decimal("0.00")
_WHOLE = Decimal("1")


class RoomNotFoundError(ValueError):
    """Raised when a quote names a room that does not exist."""


class PaymentMethod(str, enum.Enum):
    """Payment methods offered at checkout."""

    GCASH = "Gcash"
    PAYMAYA = "Paymaya"
    CREDIT_CARD = "Credit Card"
    CASH = "Cash"


class PaymentType(str, enum.Enum):
    """Whether the guest pays everything now or a deposit."""

    FULL = "Full Payment"
    PARTIAL = "Partial Payment"

    @classmethod
    def coerce(cls, value: "str | PaymentType | None") -> "PaymentType":
        if isinstance(value, cls):
            return value
        return cls.PARTIAL if is_partial_payment(value) else cls.FULL


@dataclass(frozen=True, slots=True)
class FeeSchedule:
    """Fee and deposit constants applied to every booking."""

    booking_fee: Decimal = Decimal("50")
    transaction_fee_rate: Decimal = Decimal("0.03")
    partial_payment_rate: Decimal = Decimal("0.5")
    currency_symbol: str = "₱"

    @classmethod
    def from_settings(cls, settings: PricingSettings | None = None) -> "FeeSchedule":
        settings = settings or get_pricing_settings()
        return cls(
            booking_fee=settings.booking_fee,
            transaction_fee_rate=settings.transaction_fee_rate,
            partial_payment_rate=settings.partial_payment_rate,
            currency_symbol=settings.currency_symbol,
        )


@dataclass(frozen=True, slots=True)
class PaymentSelection:
    """Payment method and type chosen by the guest."""

    payment_method: PaymentMethod | None
    payment_type: PaymentType = PaymentType.FULL


@dataclass(frozen=True, slots=True)
class PaymentSplit:
    """Totals after discounts, split into what is due now and later."""

    subtotal: Decimal
    discount_total: Decimal
    total_payable: Decimal
    amount_due: Decimal
    balance: Decimal


@dataclass(frozen=True, slots=True)
class PricingInputs:
    """Everything the pipeline reads; hashable so results can be memoized."""

    check_in_date: DateInput
    check_out_date: DateInput
    booking_type: BookingType = BookingType.OVERNIGHT
    check_in_time: TimeInput = None
    check_out_time: TimeInput = None
    room_rate: RoomRate | None = None
    bands: tuple[PricingBand, ...] = ()
    promotions: tuple[PromotionOffer, ...] = ()
    promo_codes: tuple[str, ...] = ()
    payment_method: PaymentMethod | None = None
    payment_type: PaymentType = PaymentType.FULL
    now: datetime = field(default_factory=lambda: datetime.now(UTC))
    fees: FeeSchedule = field(default_factory=FeeSchedule)

    def __post_init__(self) -> None:
        object.__setattr__(self, "booking_type", BookingType.coerce(self.booking_type))
        object.__setattr__(self, "bands", tuple(self.bands))
        object.__setattr__(self, "promotions", tuple(self.promotions))
        object.__setattr__(self, "promo_codes", tuple(self.promo_codes))
        if self.payment_method is not None:
            object.__setattr__(
                self, "payment_method", PaymentMethod(self.payment_method)
            )
        object.__setattr__(self, "payment_type", PaymentType.coerce(self.payment_type))


@dataclass(frozen=True, slots=True)
class PriceBreakdown:
    """Derived pricing output for one set of booking inputs."""

    booking_type: BookingType
    days: int
    nights: int
    hours: int
    nightly_rates: tuple[NightlyRate, ...]
    base_room_price: Decimal
    booking_fee: Decimal
    transaction_fee: Decimal
    subtotal: Decimal
    discounts: tuple[AppliedDiscount, ...]
    discount_total: Decimal
    total_payable: Decimal
    payment_method: PaymentMethod | None
    payment_type: PaymentType
    amount_due: Decimal
    balance: Decimal
    rejections: tuple[CodeRejection, ...] = ()

    @property
    def is_pending(self) -> bool:
        """No price yet: the stay cannot be priced from the given inputs."""

        return self.base_room_price <= 0

    @property
    def is_payable(self) -> bool:
        return self.payment_method is not None and self.amount_due > 0

    @property
    def applied_promotion_ids(self) -> list[str]:
        return [str(item.promotion_id) for item in self.discounts]

    def to_dict(self) -> dict[str, Any]:
        """Serialize the breakdown to plain types for responses."""

        return {
            "booking_type": self.booking_type.value,
            "days": self.days,
            "nights": self.nights,
            "hours": self.hours,
            "nightly_rates": [line.to_dict() for line in self.nightly_rates],
            "base_room_price": _to_str(self.base_room_price),
            "booking_fee": _to_str(self.booking_fee),
            "transaction_fee": _to_str(self.transaction_fee),
            "subtotal": _to_str(self.subtotal),
            "discounts": [item.to_dict() for item in self.discounts],
            "discount_total": _to_str(self.discount_total),
            "total_payable": _to_str(self.total_payable),
            "payment_method": (
                self.payment_method.value if self.payment_method else None
            ),
            "payment_type": self.payment_type.value,
            "amount_due": _to_str(self.amount_due),
            "balance": _to_str(self.balance),
            "rejections": [item.to_dict() for item in self.rejections],
            "applied_promotions": self.applied_promotion_ids,
            "is_pending": self.is_pending,
            "is_payable": self.is_payable,
        }


def _to_money(value: Decimal | float | str | int) -> Decimal:
    return Decimal(value).quantize(MONEY_PLACES, rounding=ROUND_HALF_UP)


def _to_str(value: Decimal) -> str:
    return f"{value.quantize(MONEY_PLACES, rounding=ROUND_HALF_UP):.2f}"


def _round_whole(value: Decimal) -> Decimal:
    return _to_money(value.quantize(_WHOLE, rounding=ROUND_HALF_UP))


def is_partial_payment(payment_type: "str | PaymentType | None") -> bool:
    value = payment_type.value if isinstance(payment_type, PaymentType) else payment_type
    return "partial" in (value or "").lower()


def select_payment_method(
    payment_method: PaymentMethod | str | None,
    payment_type: PaymentType | str | None = PaymentType.FULL,
) -> PaymentSelection:
    """Record a payment method choice; cash is always paid in full."""

    method = PaymentMethod(payment_method) if payment_method else None
    kind = PaymentType.coerce(payment_type)
    if method is PaymentMethod.CASH:
        kind = PaymentType.FULL
    return PaymentSelection(payment_method=method, payment_type=kind)


def calculate_booking_fee(base_price: Decimal, fees: FeeSchedule) -> Decimal:
    return _to_money(fees.booking_fee) if base_price > 0 else ZERO


def calculate_transaction_fee(
    base_price: Decimal, payment_method: PaymentMethod | None, fees: FeeSchedule
) -> Decimal:
    """Gateway fee for online methods; cash and unset methods are free."""

    if base_price <= 0 or payment_method in (None, PaymentMethod.CASH):
        return ZERO
    return _round_whole(base_price * fees.transaction_fee_rate)


def split_payment(
    subtotal: Decimal,
    discounts: Decimal,
    payment_type: PaymentType | str | None,
    fees: FeeSchedule,
) -> PaymentSplit:
    """Apply discounts and split the payable total into due-now and balance."""

    total_payable = max(_to_money(subtotal - discounts), ZERO)
    if is_partial_payment(payment_type):
        amount_due = _round_whole(total_payable * fees.partial_payment_rate)
    else:
        amount_due = total_payable
    balance = max(total_payable - amount_due, ZERO)
    return PaymentSplit(
        subtotal=_to_money(subtotal),
        discount_total=_to_money(discounts),
        total_payable=total_payable,
        amount_due=amount_due,
        balance=balance,
    )


@lru_cache(maxsize=512)
def compute_price_breakdown(inputs: PricingInputs) -> PriceBreakdown:
    """Price a booking from scratch. Identical inputs give identical output."""

    duration = resolve_stay(
        inputs.check_in_date,
        inputs.check_out_date,
        booking_type=inputs.booking_type,
        check_in_time=inputs.check_in_time,
        check_out_time=inputs.check_out_time,
    )
    base_price = base_room_price(duration, inputs.room_rate, inputs.bands)

    lines: tuple[NightlyRate, ...] = ()
    if duration is not None and not duration.is_short_stay and base_price > 0:
        lines = tuple(
            nightly_rates(inputs.room_rate, inputs.bands, duration.stay_dates())
        )

    selection = select_payment_method(inputs.payment_method, inputs.payment_type)
    booking_fee = calculate_booking_fee(base_price, inputs.fees)
    transaction_fee = calculate_transaction_fee(
        base_price, selection.payment_method, inputs.fees
    )

    resolution = resolve_discounts(
        inputs.promotions,
        inputs.promo_codes,
        base_room_price=base_price,
        booking_fee=booking_fee,
        now=inputs.now,
        currency_symbol=inputs.fees.currency_symbol,
    )
    split = split_payment(
        base_price + booking_fee + transaction_fee,
        discount_total(resolution.applied),
        selection.payment_type,
        inputs.fees,
    )

    return PriceBreakdown(
        booking_type=inputs.booking_type,
        days=duration.days if duration else 0,
        nights=duration.nights if duration else 0,
        hours=duration.hours if duration else 0,
        nightly_rates=lines,
        base_room_price=base_price,
        booking_fee=booking_fee,
        transaction_fee=transaction_fee,
        subtotal=split.subtotal,
        discounts=resolution.applied,
        discount_total=split.discount_total,
        total_payable=split.total_payable,
        payment_method=selection.payment_method,
        payment_type=selection.payment_type,
        amount_due=split.amount_due,
        balance=split.balance,
        rejections=resolution.rejections,
    )


async def quote_booking(
    session: AsyncSession,
    *,
    room_id: uuid.UUID,
    check_in_date: DateInput,
    check_out_date: DateInput,
    booking_type: BookingType | str | None = None,
    check_in_time: TimeInput = None,
    check_out_time: TimeInput = None,
    payment_method: PaymentMethod | str | None = None,
    payment_type: PaymentType | str | None = PaymentType.FULL,
    promo_codes: Sequence[str] = (),
    now: datetime | None = None,
    fees: FeeSchedule | None = None,
) -> PriceBreakdown:
    """Load a room and its business's promotions, then price the booking."""

    room = await room_service.get_room(session, room_id)
    if room is None:
        raise RoomNotFoundError("Room not found")

    offers = await promotion_service.list_offers(session, business_id=room.business_id)
    inputs = PricingInputs(
        check_in_date=check_in_date,
        check_out_date=check_out_date,
        booking_type=BookingType.coerce(booking_type),
        check_in_time=check_in_time,
        check_out_time=check_out_time,
        room_rate=room_service.room_rate(room),
        bands=tuple(room_service.pricing_bands(room)),
        promotions=tuple(offers),
        promo_codes=tuple(promo_codes),
        payment_method=PaymentMethod(payment_method) if payment_method else None,
        payment_type=PaymentType.coerce(payment_type),
        now=now or datetime.now(UTC),
        fees=fees or FeeSchedule.from_settings(),
    )
    breakdown = compute_price_breakdown(inputs)

    for rejection in breakdown.rejections:
        logger.info(
            "Rejected promo code %s for room %s: %s",
            rejection.code,
            room_id,
            rejection.reason.value,
        )
    if breakdown.is_pending:
        logger.debug("Room %s has no price yet for the requested stay", room_id)
    return breakdown
