"""Service layer exports."""
from booking_pricing.services import (
    duration_service,
    room_rate_service,
    discount_service,
    room_service,
    promotion_service,
    pricing_service,
)

__all__ = [
    "discount_service",
    "duration_service",
    "pricing_service",
    "promotion_service",
    "room_rate_service",
    "room_service",
]
