"""Reward resolution via a router.

RewardRouter replaces if/elif chains over a deal's reward_type. Each
resolver turns an applicable deal into a discount amount for the current
cart. rank() returns the amount before the subtotal cap, for choosing
between exclusive deals; resolve() caps it at the subtotal. Neither is
ever negative.

Resolver signature:
    resolver(deal: ApplicableDeal, lines: Sequence[CartLineItem], subtotal: int) -> int

Example::

    router = (RewardRouter()
        .on(RewardType.FREE_ITEM, resolve_free_item)
        .on(RewardType.FIXED, resolve_fixed))

    amount = router.resolve(deal, lines, subtotal)
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Callable, Optional

import structlog

from .errors import UnknownRewardTypeError
from .models import ApplicableDeal, CartLineItem, RewardType
from .money import clamp_non_negative, percentage_of

log = structlog.get_logger(__name__)

Resolver = Callable[[ApplicableDeal, Sequence[CartLineItem], int], int]


def _cap_at_price(deal: ApplicableDeal, price: int) -> int:
    if deal.calculated_discount is None:
        return price
    return min(deal.calculated_discount, price)


def find_line(lines: Sequence[CartLineItem], item_id: Optional[str]) -> Optional[CartLineItem]:
    """First cart line holding the item, or None."""
    if not item_id:
        return None
    for line in lines:
        if line.item_id == item_id:
            return line
    return None


def cheapest_line(lines: Sequence[CartLineItem]) -> Optional[CartLineItem]:
    """Line with the lowest unit price; ties go to the earliest line."""
    cheapest = None
    for line in lines:
        if cheapest is None or line.unit_price < cheapest.unit_price:
            cheapest = line
    return cheapest


def resolve_free_item(deal: ApplicableDeal, lines: Sequence[CartLineItem], subtotal: int) -> int:
    line = find_line(lines, deal.reward_item_id)
    if line is None:
        log.debug("reward_item_missing", deal_id=deal.deal_id, reward_item_id=deal.reward_item_id)
        return 0
    return _cap_at_price(deal, line.unit_price)


def resolve_cheapest_in_cart(deal: ApplicableDeal, lines: Sequence[CartLineItem], subtotal: int) -> int:
    line = cheapest_line(lines)
    if line is None:
        return 0
    return _cap_at_price(deal, line.unit_price)


def resolve_percentage(deal: ApplicableDeal, lines: Sequence[CartLineItem], subtotal: int) -> int:
    # A pre-computed amount means the evaluator already scoped the basis.
    if deal.calculated_discount is not None:
        return deal.calculated_discount
    return percentage_of(subtotal, deal.reward_value or 0)


def resolve_fixed(deal: ApplicableDeal, lines: Sequence[CartLineItem], subtotal: int) -> int:
    if deal.calculated_discount is not None:
        return deal.calculated_discount
    return deal.reward_value or 0


class RewardRouter:
    """Dispatches deals to the resolver registered for their reward type."""

    def __init__(self) -> None:
        self._resolvers: dict[str, Resolver] = {}

    def on(self, reward_type: RewardType | str, resolver: Resolver) -> "RewardRouter":
        """Register a resolver. Returns self for chaining."""
        self._resolvers[RewardType(reward_type).value] = resolver
        return self

    def reward_types(self) -> list[str]:
        return list(self._resolvers)

    def rank(self, deal: ApplicableDeal, lines: Sequence[CartLineItem], subtotal: int) -> int:
        """Non-negative discount amount for the deal, before the subtotal cap.

        Raises:
            UnknownRewardTypeError: if no resolver is registered.
        """
        key = deal.reward_type.value if isinstance(deal.reward_type, RewardType) else str(deal.reward_type)
        resolver = self._resolvers.get(key)
        if resolver is None:
            raise UnknownRewardTypeError(key)
        return clamp_non_negative(resolver(deal, lines, subtotal))

    def resolve(self, deal: ApplicableDeal, lines: Sequence[CartLineItem], subtotal: int) -> int:
        """Resolve a deal's discount amount for the cart, capped at the subtotal."""
        return min(self.rank(deal, lines, subtotal), subtotal)


def default_router() -> RewardRouter:
    return (
        RewardRouter()
        .on(RewardType.FREE_ITEM, resolve_free_item)
        .on(RewardType.CHEAPEST_IN_CART, resolve_cheapest_in_cart)
        .on(RewardType.PERCENTAGE, resolve_percentage)
        .on(RewardType.FIXED, resolve_fixed)
    )
