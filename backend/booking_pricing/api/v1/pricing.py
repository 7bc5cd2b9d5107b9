"""Pricing-related API endpoints."""

from __future__ import annotations

import datetime
from decimal import Decimal
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from booking_pricing.api import deps
from booking_pricing.models import Room
from booking_pricing.schemas.pricing import (
    NightlyRateRead,
    NightlyRatesRead,
    PaymentSelectionRead,
    PaymentSelectionRequest,
    PriceBreakdownRead,
    PriceRangeRead,
    PricingQuoteRequest,
    RedeemedPromotionRead,
    RedemptionRequest,
)
from booking_pricing.services import (
    pricing_service,
    promotion_service,
    room_rate_service,
    room_service,
)
from booking_pricing.services.pricing_service import FeeSchedule

router = APIRouter(prefix="/pricing", tags=["pricing"])


async def _require_room(session: AsyncSession, room_id: UUID) -> Room:
    room = await room_service.get_room(session, room_id)
    if room is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Room not found"
        )
    return room


@router.post(
    "/quote", response_model=PriceBreakdownRead, summary="Quote booking pricing"
)
async def quote_booking_pricing(
    payload: PricingQuoteRequest,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    fees: Annotated[FeeSchedule, Depends(deps.get_fee_schedule)],
) -> PriceBreakdownRead:
    try:
        breakdown = await pricing_service.quote_booking(
            session,
            room_id=payload.room_id,
            check_in_date=payload.check_in_date,
            check_out_date=payload.check_out_date,
            booking_type=payload.booking_type,
            check_in_time=payload.check_in_time,
            check_out_time=payload.check_out_time,
            payment_method=payload.payment_method,
            payment_type=payload.payment_type,
            promo_codes=payload.promo_codes,
            fees=fees,
        )
    except pricing_service.RoomNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)
        ) from exc
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    return PriceBreakdownRead.model_validate(breakdown)


@router.get(
    "/rooms/{room_id}/nightly-rates",
    response_model=NightlyRatesRead,
    summary="Per-night price breakdown for a date range",
)
async def room_nightly_rates(
    room_id: UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    start_date: Annotated[datetime.date, Query()],
    end_date: Annotated[datetime.date, Query()],
) -> NightlyRatesRead:
    room = await _require_room(session, room_id)
    try:
        lines = room_rate_service.nightly_rates_for_range(
            room_service.room_rate(room),
            room_service.pricing_bands(room),
            start_date,
            end_date,
        )
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    return NightlyRatesRead(
        room_id=room_id,
        start_date=start_date,
        end_date=end_date,
        nights=[NightlyRateRead.model_validate(line) for line in lines],
        total=sum((line.price for line in lines), Decimal("0.00")),
    )


@router.get(
    "/rooms/{room_id}/price-range",
    response_model=PriceRangeRead,
    summary="Lowest and highest nightly price for a room",
)
async def room_price_range(
    room_id: UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> PriceRangeRead:
    room = await _require_room(session, room_id)
    price_range = room_rate_service.price_range(
        room_service.room_rate(room), room_service.pricing_bands(room)
    )
    if price_range is None:
        return PriceRangeRead(room_id=room_id)
    return PriceRangeRead(
        room_id=room_id, lowest=price_range.lowest, highest=price_range.highest
    )


@router.post(
    "/payment-selection",
    response_model=PaymentSelectionRead,
    summary="Apply payment method rules to a selection",
)
async def payment_selection(payload: PaymentSelectionRequest) -> PaymentSelectionRead:
    selection = pricing_service.select_payment_method(
        payload.payment_method, payload.payment_type
    )
    return PaymentSelectionRead.model_validate(selection)


@router.post(
    "/redemptions",
    response_model=list[RedeemedPromotionRead],
    summary="Record promotion usage for a placed booking",
)
async def redeem_promotions(
    payload: RedemptionRequest,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> list[RedeemedPromotionRead]:
    try:
        promotions = await promotion_service.redeem_promotions(
            session,
            business_id=payload.business_id,
            promotion_ids=payload.promotion_ids,
        )
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    return [RedeemedPromotionRead.model_validate(promotion) for promotion in promotions]
