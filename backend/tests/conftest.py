"""Test fixtures for the booking pricing backend."""
from __future__ import annotations

import os
from collections.abc import AsyncIterator
from datetime import UTC, date, datetime, timedelta
from decimal import Decimal

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test.db")

from booking_pricing.core.config import get_settings
from booking_pricing.db.base import Base
from booking_pricing.db.session import dispose_engine, get_sessionmaker
from booking_pricing.main import app
from booking_pricing.models import (
    Business,
    Promotion,
    PromotionType,
    Room,
    SeasonalPricing,
)


@pytest.fixture(scope="session")
def db_url(tmp_path_factory: pytest.TempPathFactory) -> str:
    """Provide a temporary SQLite database URL for the test session."""
    db_path = tmp_path_factory.mktemp("db") / "test.db"
    return f"sqlite+aiosqlite:///{db_path}"


@pytest_asyncio.fixture()
async def reset_database(db_url: str) -> AsyncIterator[None]:
    """Drop and recreate the database schema for an isolated test."""
    os.environ["DATABASE_URL"] = db_url
    get_settings.cache_clear()
    get_settings()

    await dispose_engine(db_url)
    engine = create_async_engine(db_url, future=True)
    async with engine.begin() as connection:
        await connection.run_sync(Base.metadata.drop_all)
        await connection.run_sync(Base.metadata.create_all)
    await engine.dispose()
    yield
    await dispose_engine(db_url)


@pytest_asyncio.fixture()
async def app_context(
    reset_database: AsyncIterator[None], db_url: str
) -> AsyncIterator[dict[str, object]]:
    """Yield an async client plus a seeded business, room, and promotions."""
    sessionmaker = get_sessionmaker(db_url)
    now = datetime.now(UTC)

    async with sessionmaker() as session:
        business = Business(name="Naga Riverside Inn")
        session.add(business)
        await session.flush()

        room = Room(
            business_id=business.id,
            room_number="101",
            room_price=Decimal("1000.00"),
            per_hour_rate=Decimal("200.00"),
        )
        session.add(room)
        await session.flush()

        session.add(
            SeasonalPricing(
                room_id=room.id,
                start_date=date(2024, 12, 20),
                end_date=date(2025, 1, 5),
                price=Decimal("1500.00"),
            )
        )

        room_discount = Promotion(
            business_id=business.id,
            title="Early Bird",
            promo_type=PromotionType.ROOM_DISCOUNT,
            discount_percentage=Decimal("10"),
            used_count=0,
            is_active=True,
            start_date=now - timedelta(days=1),
            end_date=now + timedelta(days=30),
        )
        coupon = Promotion(
            business_id=business.id,
            title="Summer Saver",
            promo_type=PromotionType.COUPON,
            promo_code="SAVE20",
            discount_percentage=Decimal("20"),
            usage_limit=100,
            used_count=0,
            is_active=True,
            start_date=now - timedelta(days=1),
        )
        exhausted = Promotion(
            business_id=business.id,
            title="Launch Code",
            promo_type=PromotionType.CODE,
            promo_code="LAUNCH",
            fixed_discount_amount=Decimal("500"),
            usage_limit=100,
            used_count=100,
            is_active=True,
            start_date=now - timedelta(days=1),
        )
        session.add_all([room_discount, coupon, exhausted])
        await session.commit()

        context: dict[str, object] = {
            "business_id": business.id,
            "room_id": room.id,
            "room_discount_id": room_discount.id,
            "coupon_id": coupon.id,
            "exhausted_id": exhausted.id,
        }

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        context["client"] = client
        yield context
