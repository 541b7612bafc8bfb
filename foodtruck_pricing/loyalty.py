"""Loyalty redemption and point accrual.

Redemption is applied last, against the subtotal left after deals and promo
codes. Points are earned on the final total, so a redemption also lowers
the points earned on that order.
"""

import math
from dataclasses import dataclass
from fractions import Fraction
from typing import Optional

import structlog

from .errors import ContractViolationError
from .models import AppliedDiscount, CustomerLoyaltyInfo, DiscountSource
from .money import Exact
from .validation import require_money

log = structlog.get_logger(__name__)

DEFAULT_POINTS_PER_EURO = 1
DEFAULT_THRESHOLD = 50


def is_redeemable(info: Optional[CustomerLoyaltyInfo]) -> bool:
    """True when the customer may redeem: flagged and enough points."""
    if info is None:
        return False
    if info.can_redeem and info.loyalty_points < info.loyalty_threshold:
        log.debug(
            "loyalty_flag_inconsistent",
            customer_id=info.customer_id,
            points=info.loyalty_points,
            threshold=info.loyalty_threshold,
        )
        return False
    return info.can_redeem


def loyalty_discount(
    info: Optional[CustomerLoyaltyInfo],
    subtotal_after_promo: int,
    use_reward: bool = True,
    opt_in: bool = True,
) -> tuple[int, int]:
    """Return (discount, reward_count) for a redemption on this order."""
    require_money(subtotal_after_promo, "subtotal_after_promo")
    if not opt_in or not use_reward or not is_redeemable(info):
        return 0, 0
    discount = min(info.max_discount, subtotal_after_promo)
    if discount <= 0:
        return 0, 0
    return discount, info.redeemable_count


def points_to_earn(total: int, points_per_euro: Optional[Exact] = DEFAULT_POINTS_PER_EURO) -> int:
    """Whole points earned on `total` minor units, truncated.

    Fractional rates (e.g. Fraction(3, 2)) are applied exactly.
    """
    require_money(total, "total")
    rate = points_per_euro or DEFAULT_POINTS_PER_EURO
    if isinstance(rate, bool) or not isinstance(rate, (int, Fraction)) or rate < 0:
        raise ContractViolationError(f"points_per_euro must be a non-negative int or Fraction, got {rate!r}")
    return math.floor(Fraction(total) * rate / 100)


def loyalty_record(info: CustomerLoyaltyInfo, amount: int) -> AppliedDiscount:
    return AppliedDiscount(
        source=DiscountSource.LOYALTY,
        source_id=info.customer_id or "",
        name="loyalty_reward",
        amount=amount,
    )


@dataclass(frozen=True)
class LoyaltyProgress:
    current_points: int
    points_to_earn: int
    future_points: int
    threshold: int
    current_progress_percent: int
    future_progress_percent: int
    will_reach_reward: bool
    points_remaining: int


def _percent(points: int, threshold: int) -> int:
    return min(100, points * 100 // threshold)


def loyalty_progress(info: CustomerLoyaltyInfo, order_total: int) -> LoyaltyProgress:
    """Project the customer's points after this order, for the progress bar."""
    current = info.loyalty_points or 0
    threshold = info.loyalty_threshold or DEFAULT_THRESHOLD
    earned = points_to_earn(order_total, info.loyalty_points_per_euro)
    future = current + earned
    return LoyaltyProgress(
        current_points=current,
        points_to_earn=earned,
        future_points=future,
        threshold=threshold,
        current_progress_percent=_percent(current, threshold),
        future_progress_percent=_percent(future, threshold),
        will_reach_reward=future >= threshold and not info.can_redeem,
        points_remaining=max(0, threshold - future),
    )
