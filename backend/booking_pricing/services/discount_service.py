"""Discount engine for room discounts, coupons, and promo codes.

Room discounts are applied automatically: the best live one wins and it can
not be removed by the guest. Coupons (percentage) and codes (fixed amount)
are entered by the guest, and only one of them may be applied at a time.
Every function here is pure; callers hold the applied list and pass it back
in on the next change.
"""

from __future__ import annotations

import enum
import uuid
from dataclasses import dataclass
from datetime import UTC, datetime
from decimal import Decimal, ROUND_FLOOR
from typing import TYPE_CHECKING, Any, Iterable, Sequence

from booking_pricing.models.promotion import PromotionType

if TYPE_CHECKING:  # pragma: no cover - typing helpers
    from booking_pricing.models.promotion import Promotion

ZERO = Decimal("0")
_WHOLE = Decimal("1")
_HUNDRED = Decimal("100")


class DiscountRejection(str, enum.Enum):
    """Reasons a discount request is refused."""

    EMPTY_CODE = "empty_code"
    ALREADY_APPLIED = "already_applied"
    ONE_CODE_ONLY = "one_code_only"
    INVALID_CODE = "invalid_code"
    LIMIT_REACHED = "limit_reached"
    INVALID_VALUE = "invalid_value"
    CANNOT_REMOVE_ROOM_DISCOUNT = "cannot_remove_room_discount"
    NOT_APPLIED = "not_applied"

    @property
    def message(self) -> str:
        return _REJECTION_MESSAGES[self]


_REJECTION_MESSAGES: dict[DiscountRejection, str] = {
    DiscountRejection.EMPTY_CODE: "Please enter a code.",
    DiscountRejection.ALREADY_APPLIED: "Code already applied.",
    DiscountRejection.ONE_CODE_ONLY: (
        "Only one discount coupon or promo code can be used."
    ),
    DiscountRejection.INVALID_CODE: "Invalid or expired code.",
    DiscountRejection.LIMIT_REACHED: "This code has reached its usage limit.",
    DiscountRejection.INVALID_VALUE: "Invalid discount value.",
    DiscountRejection.CANNOT_REMOVE_ROOM_DISCOUNT: (
        "Room discounts are applied automatically and cannot be removed."
    ),
    DiscountRejection.NOT_APPLIED: "Discount is not applied.",
}


@dataclass(frozen=True, slots=True)
class PromotionOffer:
    """Read-only snapshot of a promotion used for pricing."""

    id: uuid.UUID | str
    title: str
    promo_type: PromotionType
    promo_code: str | None = None
    discount_percentage: Decimal | None = None
    fixed_amount: Decimal | None = None
    usage_limit: int | None = None
    used_count: int = 0
    is_active: bool = True
    start_date: datetime | None = None
    end_date: datetime | None = None

    @classmethod
    def from_model(cls, promotion: "Promotion") -> "PromotionOffer":
        return cls(
            id=promotion.id,
            title=promotion.title,
            promo_type=PromotionType.from_legacy(promotion.promo_type),
            promo_code=promotion.promo_code,
            discount_percentage=promotion.discount_percentage,
            fixed_amount=promotion.fixed_discount_amount,
            usage_limit=promotion.usage_limit,
            used_count=promotion.used_count or 0,
            is_active=bool(promotion.is_active),
            start_date=promotion.start_date,
            end_date=promotion.end_date,
        )

    @property
    def normalized_code(self) -> str:
        return normalize_code(self.promo_code)

    @property
    def usage_exhausted(self) -> bool:
        return bool(self.usage_limit) and self.used_count >= (self.usage_limit or 0)

    def is_live(self, now: datetime) -> bool:
        """Active and inside its start/end window at ``now``."""

        if not self.is_active:
            return False
        moment = _aware(now)
        if self.start_date is not None and _aware(self.start_date) > moment:
            return False
        if self.end_date is not None and _aware(self.end_date) < moment:
            return False
        return True


@dataclass(frozen=True, slots=True)
class AppliedDiscount:
    """Discount currently reducing a booking's subtotal."""

    label: str
    amount: Decimal
    kind: PromotionType
    promotion_id: uuid.UUID | str
    code: str | None = None

    @property
    def removable(self) -> bool:
        return self.kind is not PromotionType.ROOM_DISCOUNT

    def to_dict(self) -> dict[str, Any]:
        return {
            "label": self.label,
            "amount": f"{self.amount:.2f}",
            "kind": self.kind.value,
            "promotion_id": str(self.promotion_id),
            "code": self.code,
        }


@dataclass(frozen=True, slots=True)
class DiscountOutcome:
    """Result of applying or removing a single discount."""

    applied: tuple[AppliedDiscount, ...]
    rejection: DiscountRejection | None = None

    @property
    def accepted(self) -> bool:
        return self.rejection is None


@dataclass(frozen=True, slots=True)
class CodeRejection:
    """A guest-entered code that was refused."""

    code: str
    reason: DiscountRejection

    @property
    def message(self) -> str:
        return self.reason.message

    def to_dict(self) -> dict[str, str]:
        return {
            "code": self.code,
            "reason": self.reason.value,
            "message": self.message,
        }


@dataclass(frozen=True, slots=True)
class DiscountResolution:
    """All discounts for a set of inputs, plus refused codes."""

    applied: tuple[AppliedDiscount, ...]
    rejections: tuple[CodeRejection, ...] = ()


def normalize_code(code: str | None) -> str:
    return (code or "").strip().upper()


def _aware(value: datetime) -> datetime:
    return value if value.tzinfo is not None else value.replace(tzinfo=UTC)


def _floor(value: Decimal) -> Decimal:
    return value.quantize(_WHOLE, rounding=ROUND_FLOOR)


def _format_number(value: Decimal) -> str:
    return format(Decimal(value).normalize(), "f")


def eligible_room_discounts(
    promotions: Iterable[PromotionOffer], now: datetime
) -> list[PromotionOffer]:
    """Live room discounts carrying a positive percentage."""

    return [
        promotion
        for promotion in promotions
        if promotion.promo_type is PromotionType.ROOM_DISCOUNT
        and promotion.is_live(now)
        and (promotion.discount_percentage or ZERO) > 0
    ]


def best_room_discount(
    promotions: Iterable[PromotionOffer], now: datetime
) -> PromotionOffer | None:
    """Highest-percentage live room discount; the first one wins ties."""

    best: PromotionOffer | None = None
    for promotion in eligible_room_discounts(promotions, now):
        if best is None or (promotion.discount_percentage or ZERO) > (
            best.discount_percentage or ZERO
        ):
            best = promotion
    return best


def auto_apply_room_discount(
    promotions: Sequence[PromotionOffer],
    applied: Sequence[AppliedDiscount],
    *,
    base_room_price: Decimal,
    now: datetime,
) -> tuple[AppliedDiscount, ...]:
    """Add the best room discount unless one is already applied."""

    current = tuple(applied)
    if base_room_price <= 0:
        return current
    if any(item.kind is PromotionType.ROOM_DISCOUNT for item in current):
        return current

    best = best_room_discount(promotions, now)
    if best is None:
        return current

    percentage = best.discount_percentage or ZERO
    discount = AppliedDiscount(
        label=f"{best.title} ({_format_number(percentage)}% OFF)",
        amount=_floor(base_room_price * percentage / _HUNDRED),
        kind=PromotionType.ROOM_DISCOUNT,
        promotion_id=best.id,
    )
    return current + (discount,)


def apply_code(
    code: str | None,
    promotions: Sequence[PromotionOffer],
    applied: Sequence[AppliedDiscount],
    *,
    base_room_price: Decimal,
    booking_fee: Decimal,
    now: datetime,
    currency_symbol: str = "₱",
) -> DiscountOutcome:
    """Apply a guest-entered coupon or promo code."""

    current = tuple(applied)
    normalized = normalize_code(code)
    if not normalized:
        return DiscountOutcome(current, DiscountRejection.EMPTY_CODE)
    if any(item.code == normalized for item in current):
        return DiscountOutcome(current, DiscountRejection.ALREADY_APPLIED)
    if any(item.kind.is_code_based for item in current):
        return DiscountOutcome(current, DiscountRejection.ONE_CODE_ONLY)

    match = next(
        (
            promotion
            for promotion in promotions
            if promotion.promo_type.is_code_based
            and promotion.normalized_code == normalized
            and promotion.is_live(now)
        ),
        None,
    )
    if match is None:
        return DiscountOutcome(current, DiscountRejection.INVALID_CODE)
    if match.usage_exhausted:
        return DiscountOutcome(current, DiscountRejection.LIMIT_REACHED)

    if match.promo_type is PromotionType.COUPON:
        percentage = match.discount_percentage or ZERO
        amount = _floor((base_room_price + booking_fee) * percentage / _HUNDRED)
        label = f"{match.title} ({_format_number(percentage)}% OFF)"
    else:
        amount = Decimal(match.fixed_amount or ZERO)
        label = f"{match.title} ({currency_symbol}{_format_number(amount)} OFF)"

    if amount <= 0:
        return DiscountOutcome(current, DiscountRejection.INVALID_VALUE)
    if any(item.label == label for item in current):
        return DiscountOutcome(current, DiscountRejection.ALREADY_APPLIED)

    discount = AppliedDiscount(
        label=label,
        amount=amount,
        kind=match.promo_type,
        promotion_id=match.id,
        code=normalized,
    )
    return DiscountOutcome(current + (discount,))


def remove_discount(
    applied: Sequence[AppliedDiscount], promotion_id: uuid.UUID | str
) -> DiscountOutcome:
    """Remove a coupon or code; room discounts stay applied."""

    current = tuple(applied)
    target = next(
        (item for item in current if str(item.promotion_id) == str(promotion_id)),
        None,
    )
    if target is None:
        return DiscountOutcome(current, DiscountRejection.NOT_APPLIED)
    if not target.removable:
        return DiscountOutcome(current, DiscountRejection.CANNOT_REMOVE_ROOM_DISCOUNT)
    return DiscountOutcome(tuple(item for item in current if item is not target))


def discount_total(applied: Iterable[AppliedDiscount]) -> Decimal:
    """Sum of the positive discount amounts."""

    return sum((item.amount for item in applied if item.amount > 0), ZERO)


def resolve_discounts(
    promotions: Sequence[PromotionOffer],
    codes: Sequence[str],
    *,
    base_room_price: Decimal,
    booking_fee: Decimal,
    now: datetime,
    currency_symbol: str = "₱",
) -> DiscountResolution:
    """Derive the applied discounts from scratch for the given inputs.

    The room discount is applied first, then each entered code in order.
    """

    applied = auto_apply_room_discount(
        promotions, (), base_room_price=base_room_price, now=now
    )
    rejections: list[CodeRejection] = []
    for code in codes:
        outcome = apply_code(
            code,
            promotions,
            applied,
            base_room_price=base_room_price,
            booking_fee=booking_fee,
            now=now,
            currency_symbol=currency_symbol,
        )
        if outcome.rejection is not None:
            rejections.append(CodeRejection(normalize_code(code), outcome.rejection))
        applied = outcome.applied
    return DiscountResolution(applied=applied, rejections=tuple(rejections))
