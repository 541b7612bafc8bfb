"""Shared test fixtures: typed builders and in-memory collaborators."""

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Optional

from foodtruck_pricing import (
    ApplicableDeal,
    BundlePriceInput,
    CartLineItem,
    CustomerLoyaltyInfo,
    PromoCode,
    PromoCodeRejectedError,
    RewardType,
)


def make_line(item_id: str, unit_price: int, quantity: int = 1, **kwargs) -> CartLineItem:
    """Create a cart line named after its id."""
    return CartLineItem(
        item_id=item_id,
        name=kwargs.pop("name", item_id.title()),
        unit_price=unit_price,
        quantity=quantity,
        **kwargs,
    )


def make_deal(
    deal_id: str,
    reward_type: RewardType = RewardType.FIXED,
    calculated_discount: Optional[int] = None,
    stackable: bool = False,
    is_applicable: bool = True,
    **kwargs,
) -> ApplicableDeal:
    """Create an applicable deal named after its id."""
    return ApplicableDeal(
        deal_id=deal_id,
        deal_name=kwargs.pop("deal_name", f"Deal {deal_id}"),
        reward_type=reward_type,
        is_applicable=is_applicable,
        calculated_discount=calculated_discount,
        stackable=stackable,
        **kwargs,
    )


def make_loyalty(max_discount: int = 500, can_redeem: bool = True, **kwargs) -> CustomerLoyaltyInfo:
    """Create a loyalty snapshot; redeemable by default."""
    defaults = dict(
        customer_id="cust-1",
        loyalty_points=60 if can_redeem else 10,
        loyalty_threshold=50,
        loyalty_points_per_euro=1,
        loyalty_reward=max_discount,
        redeemable_count=1 if can_redeem else 0,
    )
    defaults.update(kwargs)
    return CustomerLoyaltyInfo(can_redeem=can_redeem, max_discount=max_discount, **defaults)


# =============================================================================
# In-memory collaborators
# =============================================================================


@dataclass
class InMemoryOfferEvaluator:
    deals: list[ApplicableDeal] = field(default_factory=list)
    calls: list[tuple[str, int]] = field(default_factory=list)

    def applicable_deals(self, foodtruck_id: str, lines: Sequence[CartLineItem]) -> list[ApplicableDeal]:
        self.calls.append((foodtruck_id, len(lines)))
        return list(self.deals)


@dataclass
class InMemoryPromoCodeValidator:
    codes: dict[str, PromoCode] = field(default_factory=dict)

    def validate(self, foodtruck_id: str, code: str, customer_email: str, order_amount: int) -> PromoCode:
        promo = self.codes.get(code)
        if promo is None:
            raise PromoCodeRejectedError(code, "Code promo invalide")
        if order_amount < promo.min_order_amount:
            raise PromoCodeRejectedError(code, "minimum order amount not reached")
        return promo


@dataclass
class InMemoryLoyaltyStore:
    customers: dict[str, CustomerLoyaltyInfo] = field(default_factory=dict)

    def customer_loyalty(self, foodtruck_id: str, email: str) -> Optional[CustomerLoyaltyInfo]:
        return self.customers.get(email)


@dataclass
class InMemoryCatalogStore:
    bundles: dict[str, BundlePriceInput] = field(default_factory=dict)
    prices: dict[str, int] = field(default_factory=dict)

    def bundle_config(self, bundle_id: str) -> Optional[BundlePriceInput]:
        return self.bundles.get(bundle_id)

    def item_base_price(self, item_id: str) -> Optional[int]:
        return self.prices.get(item_id)
