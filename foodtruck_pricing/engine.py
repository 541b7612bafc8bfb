"""Cart discount engine.

Application order:
1. Candidates: every applicable deal plus the validated promo code.
2. Stacking: all stackable candidates plus the best non-stackable one.
3. promo_discount: sum of survivors, computed on the original subtotal.
4. subtotal_after_promo = max(0, subtotal - promo_discount)
5. Loyalty redemption, against subtotal_after_promo.
6. total = max(0, subtotal_after_promo - loyalty_discount)
7. points_to_earn on the final total.

Each call is a pure recomputation from its inputs.
"""

from collections.abc import Sequence
from typing import Optional

import structlog

from .config import PricingSettings
from .deals import deal_candidates, deal_progress
from .loyalty import loyalty_discount, loyalty_record, points_to_earn
from .models import (
    AppliedDiscount,
    ApplicableDeal,
    CartBreakdown,
    CartLineItem,
    CustomerLoyaltyInfo,
    DiscountCandidate,
    PromoCode,
    cart_subtotal,
)
from .money import clamp_non_negative
from .promo import promo_candidate
from .rewards import RewardRouter, default_router
from .stacking import resolve_stacking
from .validation import require_money, require_positive_quantity

log = structlog.get_logger(__name__)


def _validate_lines(lines: Sequence[CartLineItem]) -> None:
    for index, line in enumerate(lines):
        require_money(line.unit_price, f"line_items[{index}].unit_price")
        require_positive_quantity(line.quantity, f"line_items[{index}].quantity")


def _allocate(survivors: Sequence[DiscountCandidate], subtotal: int) -> list[AppliedDiscount]:
    """Record survivors in order, trimming so the records never exceed the subtotal."""
    applied = []
    remaining = subtotal
    for candidate in survivors:
        amount = min(candidate.amount, remaining)
        if amount <= 0:
            continue
        applied.append(AppliedDiscount.from_candidate(candidate, amount))
        remaining -= amount
    return applied


class DiscountEngine:
    """Applies deals, promo codes and loyalty redemption to a cart."""

    def __init__(
        self,
        settings: Optional[PricingSettings] = None,
        router: Optional[RewardRouter] = None,
    ) -> None:
        self.settings = settings or PricingSettings()
        self.router = router or default_router()

    def candidates(
        self,
        subtotal: int,
        lines: Sequence[CartLineItem],
        deals: Sequence[ApplicableDeal],
        promo: Optional[PromoCode] = None,
    ) -> list[DiscountCandidate]:
        """Build the uniform candidate set: deals first, then the promo code."""
        result = deal_candidates(
            deals,
            lines,
            subtotal,
            self.router,
            force_stackable=self.settings.offers_stackable,
        )
        if promo is not None:
            result.append(
                promo_candidate(promo, subtotal, stackable=promo.stackable and self.settings.promo_codes_stackable)
            )
        return result

    def apply(
        self,
        subtotal: int,
        lines: Sequence[CartLineItem],
        deals: Sequence[ApplicableDeal] = (),
        promo: Optional[PromoCode] = None,
        loyalty: Optional[CustomerLoyaltyInfo] = None,
        use_loyalty_reward: bool = True,
        loyalty_opt_in: bool = True,
    ) -> CartBreakdown:
        require_money(subtotal, "cart_subtotal")
        _validate_lines(lines)
        if lines and cart_subtotal(lines) != subtotal:
            log.debug("subtotal_mismatch", cart_subtotal=subtotal, lines_subtotal=cart_subtotal(lines))

        survivors = resolve_stacking(self.candidates(subtotal, lines, deals, promo))
        raw_promo_discount = sum(c.amount for c in survivors)
        subtotal_after_promo = clamp_non_negative(subtotal - raw_promo_discount)
        discounts = _allocate(survivors, subtotal)

        loyalty_amount, reward_count = 0, 0
        if self.settings.loyalty_enabled:
            loyalty_amount, reward_count = loyalty_discount(
                loyalty, subtotal_after_promo, use_reward=use_loyalty_reward, opt_in=loyalty_opt_in
            )
        if loyalty_amount > 0:
            discounts.append(loyalty_record(loyalty, loyalty_amount))

        total = clamp_non_negative(subtotal_after_promo - loyalty_amount)
        rate = loyalty.loyalty_points_per_euro if loyalty else None
        earned = points_to_earn(total, rate or self.settings.default_points_per_euro)

        log.debug(
            "discounts_applied",
            subtotal=subtotal,
            candidates=len(survivors),
            promo_discount=subtotal - subtotal_after_promo,
            loyalty_discount=loyalty_amount,
            total=total,
        )

        return CartBreakdown(
            subtotal=subtotal,
            discounts=tuple(discounts),
            promo_discount=subtotal - subtotal_after_promo,
            subtotal_after_promo=subtotal_after_promo,
            loyalty_discount=loyalty_amount,
            loyalty_reward_count=reward_count,
            total=total,
            points_to_earn=earned,
            progress=tuple(deal_progress(deals)),
        )


def apply_discounts(
    cart_subtotal: int,
    line_items: Sequence[CartLineItem],
    applicable_deals: Sequence[ApplicableDeal] = (),
    promo_code: Optional[PromoCode] = None,
    loyalty: Optional[CustomerLoyaltyInfo] = None,
    *,
    use_loyalty_reward: bool = True,
    loyalty_opt_in: bool = True,
    settings: Optional[PricingSettings] = None,
) -> CartBreakdown:
    """Compute the final price of a cart. See DiscountEngine.apply."""
    return DiscountEngine(settings).apply(
        cart_subtotal,
        line_items,
        applicable_deals,
        promo_code,
        loyalty,
        use_loyalty_reward=use_loyalty_reward,
        loyalty_opt_in=loyalty_opt_in,
    )
