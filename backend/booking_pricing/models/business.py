"""Business model owning rooms and promotions."""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from booking_pricing.db.base import Base
from booking_pricing.models.mixins import TimestampMixin

if TYPE_CHECKING:  # pragma: no cover - typing helpers
    from booking_pricing.models.promotion import Promotion
    from booking_pricing.models.room import Room


class Business(TimestampMixin, Base):
    """Accommodation business listed on the platform."""

    __tablename__ = "businesses"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    rooms: Mapped[list["Room"]] = relationship(
        "Room", back_populates="business", cascade="all, delete-orphan"
    )
    promotions: Mapped[list["Promotion"]] = relationship(
        "Promotion", back_populates="business", cascade="all, delete-orphan"
    )
