"""Promotion lookups and redemption bookkeeping."""

from __future__ import annotations

import logging
import uuid
from typing import Sequence

from sqlalchemy import or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from booking_pricing.models import Promotion
from booking_pricing.services.discount_service import PromotionOffer

logger = logging.getLogger(__name__)


async def list_promotions(
    session: AsyncSession, *, business_id: uuid.UUID
) -> list[Promotion]:
    stmt = (
        select(Promotion)
        .where(Promotion.business_id == business_id)
        .order_by(Promotion.created_at, Promotion.id)
    )
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def list_offers(
    session: AsyncSession, *, business_id: uuid.UUID
) -> list[PromotionOffer]:
    """Snapshot a business's promotions for the discount engine."""

    promotions = await list_promotions(session, business_id=business_id)
    return [PromotionOffer.from_model(promotion) for promotion in promotions]


async def redeem_promotions(
    session: AsyncSession,
    *,
    business_id: uuid.UUID,
    promotion_ids: Sequence[uuid.UUID],
) -> list[Promotion]:
    """Count one use of each promotion applied to a placed booking.

    Nothing is written unless every promotion can be redeemed.
    """

    unique_ids = list(dict.fromkeys(promotion_ids))
    if not unique_ids:
        return []

    for promotion_id in unique_ids:
        # Guarded increment: the limit check and the write are one statement.
        stmt = (
            update(Promotion)
            .where(
                Promotion.id == promotion_id,
                Promotion.business_id == business_id,
                or_(
                    Promotion.usage_limit.is_(None),
                    Promotion.usage_limit == 0,
                    Promotion.used_count < Promotion.usage_limit,
                ),
            )
            .values(used_count=Promotion.used_count + 1)
            .execution_options(synchronize_session=False)
        )
        result = await session.execute(stmt)
        if result.rowcount != 1:
            await session.rollback()
            await _raise_refusal(session, business_id, promotion_id)
    await session.commit()

    stmt = (
        select(Promotion)
        .where(Promotion.id.in_(unique_ids))
        .execution_options(populate_existing=True)
    )
    result = await session.execute(stmt)
    promotions = {promotion.id: promotion for promotion in result.scalars().all()}
    redeemed = [promotions[promotion_id] for promotion_id in unique_ids]

    logger.info(
        "Redeemed %d promotion(s) for business %s", len(redeemed), business_id
    )
    return redeemed


async def _raise_refusal(
    session: AsyncSession, business_id: uuid.UUID, promotion_id: uuid.UUID
) -> None:
    promotion = await session.get(Promotion, promotion_id, populate_existing=True)
    if promotion is None or promotion.business_id != business_id:
        raise ValueError(f"Promotion {promotion_id} not found for business")
    logger.warning(
        "Promotion %s reached its usage limit of %s",
        promotion.id,
        promotion.usage_limit,
    )
    raise ValueError(f"Promotion {promotion_id} has reached its usage limit")
