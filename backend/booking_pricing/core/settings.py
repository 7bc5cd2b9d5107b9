"""Specialized settings adapters for the pricing engine."""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel

from booking_pricing.core.config import get_settings


class PricingSettings(BaseModel):
    """Slim view of fee and payment configuration."""

    booking_fee: Decimal = Decimal("50")
    transaction_fee_rate: Decimal = Decimal("0.03")
    partial_payment_rate: Decimal = Decimal("0.5")
    currency_symbol: str = "₱"


def get_pricing_settings() -> PricingSettings:
    """Return pricing-specific configuration."""

    settings = get_settings()
    return PricingSettings(
        booking_fee=settings.booking_fee,
        transaction_fee_rate=settings.transaction_fee_rate,
        partial_payment_rate=settings.partial_payment_rate,
        currency_symbol=settings.currency_symbol or "₱",
    )
