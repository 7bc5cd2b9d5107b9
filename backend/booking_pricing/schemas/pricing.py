"""Pricing schema definitions."""

from __future__ import annotations

import datetime
import uuid
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from booking_pricing.models.promotion import PromotionType
from booking_pricing.services.discount_service import DiscountRejection
from booking_pricing.services.duration_service import BookingType
from booking_pricing.services.pricing_service import PaymentMethod, PaymentType


class PricingQuoteRequest(BaseModel):
    """Input payload for pricing a booking."""

    room_id: uuid.UUID
    booking_type: BookingType = BookingType.OVERNIGHT
    check_in_date: datetime.date
    check_out_date: datetime.date
    check_in_time: datetime.time | None = None
    check_out_time: datetime.time | None = None
    payment_method: PaymentMethod | None = None
    payment_type: PaymentType = PaymentType.FULL
    promo_codes: list[str] = Field(default_factory=list, max_length=10)


class NightlyRateRead(BaseModel):
    """Price billed for one stay date."""

    date: datetime.date
    price: Decimal
    source: str

    model_config = ConfigDict(from_attributes=True)


class AppliedDiscountRead(BaseModel):
    """Discount applied to a quote."""

    label: str
    amount: Decimal
    kind: PromotionType
    promotion_id: uuid.UUID | str
    code: str | None = None

    model_config = ConfigDict(from_attributes=True)


class CodeRejectionRead(BaseModel):
    """Promo code that could not be applied."""

    code: str
    reason: DiscountRejection
    message: str

    model_config = ConfigDict(from_attributes=True)


class PriceBreakdownRead(BaseModel):
    """Full price breakdown for a booking."""

    booking_type: BookingType
    days: int
    nights: int
    hours: int
    nightly_rates: list[NightlyRateRead]
    base_room_price: Decimal
    booking_fee: Decimal
    transaction_fee: Decimal
    subtotal: Decimal
    discounts: list[AppliedDiscountRead]
    discount_total: Decimal
    total_payable: Decimal
    payment_method: PaymentMethod | None
    payment_type: PaymentType
    amount_due: Decimal
    balance: Decimal
    rejections: list[CodeRejectionRead]
    applied_promotion_ids: list[str]
    is_pending: bool
    is_payable: bool

    model_config = ConfigDict(from_attributes=True)


class NightlyRatesRead(BaseModel):
    """Per-date breakdown for a date range."""

    room_id: uuid.UUID
    start_date: datetime.date
    end_date: datetime.date
    nights: list[NightlyRateRead]
    total: Decimal


class PriceRangeRead(BaseModel):
    """Lowest and highest nightly price for a room."""

    room_id: uuid.UUID
    lowest: Decimal | None = None
    highest: Decimal | None = None


class PaymentSelectionRequest(BaseModel):
    """Payment method change submitted by the booking form."""

    payment_method: PaymentMethod | None = None
    payment_type: PaymentType = PaymentType.FULL


class PaymentSelectionRead(BaseModel):
    """Payment selection after business rules are applied."""

    payment_method: PaymentMethod | None
    payment_type: PaymentType

    model_config = ConfigDict(from_attributes=True)


class RedemptionRequest(BaseModel):
    """Promotions applied to a placed booking."""

    business_id: uuid.UUID
    promotion_ids: list[uuid.UUID] = Field(min_length=1)


class RedeemedPromotionRead(BaseModel):
    """Promotion usage after redemption."""

    id: uuid.UUID
    title: str
    used_count: int
    usage_limit: int | None = None

    model_config = ConfigDict(from_attributes=True)
