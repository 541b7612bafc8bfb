"""Promo code discount computation.

Validity (existence, expiry, usage caps) is checked upstream; this module
only turns a validated promo code into an amount and a stacking candidate.
"""

import structlog

from .models import DiscountCandidate, DiscountSource, DiscountType, PromoCode
from .money import clamp_non_negative, percentage_of
from .validation import require_money

log = structlog.get_logger(__name__)


def promo_rank(promo: PromoCode, subtotal: int) -> int:
    """Amount a promo code is worth on `subtotal`, before the subtotal cap.

    Percentage codes round with round_minor_units(); the result is capped at
    max_discount when set. A subtotal under the minimum order amount
    yields 0.
    """
    require_money(subtotal, "subtotal")
    if subtotal < promo.min_order_amount:
        log.debug(
            "promo_below_minimum",
            code=promo.code,
            subtotal=subtotal,
            min_order_amount=promo.min_order_amount,
        )
        return 0

    if promo.discount_type == DiscountType.PERCENTAGE:
        amount = percentage_of(subtotal, promo.discount_value)
    else:
        amount = promo.discount_value

    amount = clamp_non_negative(amount)
    if promo.max_discount is not None:
        amount = min(amount, promo.max_discount)
    return amount


def promo_discount(promo: PromoCode, subtotal: int) -> int:
    """Amount a promo code takes off `subtotal`, never more than the subtotal."""
    return min(promo_rank(promo, subtotal), subtotal)


def promo_candidate(promo: PromoCode, subtotal: int, stackable: bool | None = None) -> DiscountCandidate:
    """Wrap a promo code as a stacking candidate."""
    ranked = promo_rank(promo, subtotal)
    return DiscountCandidate(
        source=DiscountSource.PROMO_CODE,
        source_id=promo.promo_code_id,
        name=promo.code,
        amount=min(ranked, subtotal),
        stackable=promo.stackable if stackable is None else stackable,
        reward_type=promo.discount_type.value,
        rank_amount=ranked,
    )
