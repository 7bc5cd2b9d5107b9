"""Schema exports."""

from booking_pricing.schemas.pricing import (
    AppliedDiscountRead,
    CodeRejectionRead,
    NightlyRateRead,
    NightlyRatesRead,
    PaymentSelectionRead,
    PaymentSelectionRequest,
    PriceBreakdownRead,
    PriceRangeRead,
    PricingQuoteRequest,
    RedeemedPromotionRead,
    RedemptionRequest,
)

__all__ = [
    "AppliedDiscountRead",
    "CodeRejectionRead",
    "NightlyRateRead",
    "NightlyRatesRead",
    "PaymentSelectionRead",
    "PaymentSelectionRequest",
    "PriceBreakdownRead",
    "PriceRangeRead",
    "PricingQuoteRequest",
    "RedeemedPromotionRead",
    "RedemptionRequest",
]
