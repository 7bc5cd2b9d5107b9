"""Seed a demo business with a priced room, seasonal bands, and promotions."""

from __future__ import annotations

import asyncio
from datetime import UTC, date, datetime, timedelta
from decimal import Decimal

from sqlalchemy import select

from booking_pricing.db.session import get_sessionmaker, init_models
from booking_pricing.models import (
    Business,
    Promotion,
    PromotionType,
    Room,
    SeasonalPricing,
)

BUSINESS_NAME = "Seed Demo Inn"
ROOM_NUMBER = "101"
COUPON_CODE = "WELCOME10"
FIXED_CODE = "LESS200"


def _holiday_band(today: date | None = None) -> tuple[date, date]:
    today = today or date.today()
    start = date(today.year, 12, 20)
    if start < today:
        start = start.replace(year=today.year + 1)
    return start, date(start.year + 1, 1, 5)


async def seed_pricing() -> None:
    await init_models()
    sessionmaker = get_sessionmaker()
    async with sessionmaker() as session:
        existing = (
            await session.execute(select(Business).where(Business.name == BUSINESS_NAME))
        ).scalar_one_or_none()
        if existing is not None:
            print(f"{BUSINESS_NAME} already seeded; nothing to do.")
            return

        business = Business(name=BUSINESS_NAME)
        session.add(business)
        await session.flush()

        room = Room(
            business_id=business.id,
            room_number=ROOM_NUMBER,
            room_price=Decimal("1000.00"),
            per_hour_rate=Decimal("200.00"),
        )
        session.add(room)
        await session.flush()

        band_start, band_end = _holiday_band()
        session.add(
            SeasonalPricing(
                room_id=room.id,
                start_date=band_start,
                end_date=band_end,
                price=Decimal("1500.00"),
            )
        )

        now = datetime.now(UTC)
        session.add_all(
            [
                Promotion(
                    business_id=business.id,
                    title="Early Bird",
                    promo_type=PromotionType.ROOM_DISCOUNT,
                    discount_percentage=Decimal("10"),
                    start_date=now,
                    end_date=now + timedelta(days=90),
                ),
                Promotion(
                    business_id=business.id,
                    title="Welcome Coupon",
                    promo_type=PromotionType.COUPON,
                    promo_code=COUPON_CODE,
                    discount_percentage=Decimal("10"),
                    usage_limit=100,
                    start_date=now,
                ),
                Promotion(
                    business_id=business.id,
                    title="Two Hundred Off",
                    promo_type=PromotionType.CODE,
                    promo_code=FIXED_CODE,
                    fixed_discount_amount=Decimal("200"),
                    start_date=now,
                    end_date=now + timedelta(days=365),
                ),
            ]
        )
        await session.commit()

        print(f"Seeded {BUSINESS_NAME} with room {ROOM_NUMBER} ({room.id}).")


def main() -> None:
    asyncio.run(seed_pricing())


if __name__ == "__main__":
    main()
