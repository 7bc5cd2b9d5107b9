"""Common API dependencies."""

from __future__ import annotations

from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession

from booking_pricing.core.settings import get_pricing_settings
from booking_pricing.db.session import get_session
from booking_pricing.services.pricing_service import FeeSchedule


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Provide an async database session."""
    async for session in get_session():
        yield session


def get_fee_schedule() -> FeeSchedule:
    """Fee constants for the current configuration."""
    return FeeSchedule.from_settings(get_pricing_settings())
