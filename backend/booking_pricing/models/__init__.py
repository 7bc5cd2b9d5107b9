"""ORM models package export."""

from booking_pricing.models.business import Business
from booking_pricing.models.promotion import Promotion, PromotionType
from booking_pricing.models.room import Room, SeasonalPricing

__all__ = [
    "Business",
    "Promotion",
    "PromotionType",
    "Room",
    "SeasonalPricing",
]
