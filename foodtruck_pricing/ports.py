"""Interfaces of the collaborators the pricing core reads from.

The core never performs I/O itself; these protocols describe what the
surrounding application provides (catalog, offer evaluation, promo code
validation, loyalty snapshot).
"""

from collections.abc import Sequence
from typing import Optional, Protocol

from .models import ApplicableDeal, BundlePriceInput, CartLineItem, CustomerLoyaltyInfo, PromoCode


class CatalogStore(Protocol):
    def bundle_config(self, bundle_id: str) -> Optional[BundlePriceInput]:
        """Fixed price, free_options flag and slot supplements of a bundle."""
        ...

    def item_base_price(self, item_id: str) -> Optional[int]:
        ...


class OfferEvaluator(Protocol):
    def applicable_deals(self, foodtruck_id: str, lines: Sequence[CartLineItem]) -> list[ApplicableDeal]:
        """Deals annotated with is_applicable / calculated_discount for the cart."""
        ...


class PromoCodeValidator(Protocol):
    def validate(self, foodtruck_id: str, code: str, customer_email: str, order_amount: int) -> PromoCode:
        """Return the validated code or raise PromoCodeRejectedError."""
        ...


class LoyaltyStore(Protocol):
    def customer_loyalty(self, foodtruck_id: str, email: str) -> Optional[CustomerLoyaltyInfo]:
        ...
