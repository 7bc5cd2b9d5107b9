"""Promotion models."""

from __future__ import annotations

import datetime
import enum
import uuid
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, DateTime, Enum, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from booking_pricing.db.base import Base
from booking_pricing.models.mixins import TimestampMixin

if TYPE_CHECKING:  # pragma: no cover - typing helpers
    from booking_pricing.models.business import Business


class PromotionType(str, enum.Enum):
    """Kinds of promotions supported by the discount engine."""

    COUPON = "coupon"
    ROOM_DISCOUNT = "room_discount"
    CODE = "code"

    @classmethod
    def from_legacy(cls, value: "int | str | PromotionType") -> "PromotionType":
        """Map the dashboard's integer encoding (1/2/3) onto the enum."""

        if isinstance(value, cls):
            return value
        legacy = {1: cls.COUPON, 2: cls.ROOM_DISCOUNT, 3: cls.CODE}
        if isinstance(value, int) or (isinstance(value, str) and value.isdigit()):
            try:
                return legacy[int(value)]
            except KeyError as exc:
                raise ValueError(f"Unknown promotion type {value!r}") from exc
        return cls(value)

    @property
    def is_code_based(self) -> bool:
        return self in (PromotionType.COUPON, PromotionType.CODE)


class Promotion(TimestampMixin, Base):
    """Promotion definitions scoped to a business."""

    __tablename__ = "promotions"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    business_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("businesses.id", ondelete="CASCADE"), nullable=False
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    promo_type: Mapped[PromotionType] = mapped_column(
        Enum(PromotionType), nullable=False
    )
    promo_code: Mapped[str | None] = mapped_column(String(64), nullable=True)
    discount_percentage: Mapped[Decimal | None] = mapped_column(
        Numeric(5, 2), nullable=True
    )
    fixed_discount_amount: Mapped[Decimal | None] = mapped_column(
        Numeric(12, 2), nullable=True
    )
    usage_limit: Mapped[int | None] = mapped_column(Integer, nullable=True)
    used_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    start_date: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )
    end_date: Mapped[datetime.datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    business: Mapped["Business"] = relationship(
        "Business", back_populates="promotions"
    )
