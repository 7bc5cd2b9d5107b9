"""Room lookups feeding the pricing engine."""

from __future__ import annotations

import uuid

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from booking_pricing.models import Room
from booking_pricing.services.room_rate_service import PricingBand, RoomRate


async def get_room(session: AsyncSession, room_id: uuid.UUID) -> Room | None:
    """Return the room with its seasonal pricing bands loaded."""

    stmt: Select[tuple[Room]] = (
        select(Room)
        .options(selectinload(Room.seasonal_pricing))
        .where(Room.id == room_id)
    )
    result = await session.execute(stmt)
    return result.scalars().unique().one_or_none()


def room_rate(room: Room) -> RoomRate:
    return RoomRate(
        flat_nightly_rate=room.room_price,
        hourly_rate=room.per_hour_rate,
    )


def pricing_bands(room: Room) -> list[PricingBand]:
    return [
        PricingBand(start_date=band.start_date, end_date=band.end_date, price=band.price)
        for band in room.seasonal_pricing
    ]
