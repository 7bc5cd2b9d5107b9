"""Room and seasonal pricing models."""

from __future__ import annotations

import datetime
import uuid
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, ForeignKey, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from booking_pricing.db.base import Base
from booking_pricing.models.mixins import TimestampMixin

if TYPE_CHECKING:  # pragma: no cover - typing helpers
    from booking_pricing.models.business import Business


class Room(TimestampMixin, Base):
    """Bookable room with its flat nightly and optional hourly rate."""

    __tablename__ = "rooms"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    business_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("businesses.id", ondelete="CASCADE"), nullable=False
    )
    room_number: Mapped[str] = mapped_column(String(64), nullable=False)
    room_price: Mapped[Decimal | None] = mapped_column(Numeric(12, 2), nullable=True)
    per_hour_rate: Mapped[Decimal | None] = mapped_column(
        Numeric(12, 2), nullable=True
    )

    business: Mapped["Business"] = relationship("Business", back_populates="rooms")
    seasonal_pricing: Mapped[list["SeasonalPricing"]] = relationship(
        "SeasonalPricing",
        back_populates="room",
        cascade="all, delete-orphan",
        order_by="SeasonalPricing.start_date",
    )


class SeasonalPricing(TimestampMixin, Base):
    """Date band overriding a room's nightly price."""

    __tablename__ = "seasonal_pricing"
    __table_args__ = (
        CheckConstraint("end_date >= start_date", name="band_dates_ordered"),
    )

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    room_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("rooms.id", ondelete="CASCADE"), nullable=False
    )
    start_date: Mapped[datetime.date] = mapped_column(nullable=False)
    end_date: Mapped[datetime.date] = mapped_column(nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)

    room: Mapped["Room"] = relationship("Room", back_populates="seasonal_pricing")
