"""Checkout quote: fetch the offer snapshot through the ports, then price.

Each quote is a fresh, stateless pricing pass over the current cart.
"""

import dataclasses
from collections.abc import Sequence
from typing import Optional

import structlog

from .config import PricingSettings
from .engine import DiscountEngine
from .errors import ContractViolationError, PromoCodeRejectedError
from .line_items import BundleLine, PricingContext, StandaloneItem, to_cart_line
from .models import CartBreakdown, CartLineItem, PromoCode, cart_subtotal
from .ports import CatalogStore, LoyaltyStore, OfferEvaluator, PromoCodeValidator

log = structlog.get_logger(__name__)

ANONYMOUS_EMAIL = "anonymous@temp.com"


def catalog_context(catalog: CatalogStore, context: PricingContext) -> PricingContext:
    """Replace client-supplied base prices with the catalog's.

    Standalone items take the catalog base price. Bundles take the catalog
    fixed price and free_options flag; the customer's slot choices are kept.

    Raises:
        ContractViolationError: if the catalog does not know the item or bundle.
    """
    if isinstance(context, StandaloneItem):
        price = catalog.item_base_price(context.item_id)
        if price is None:
            raise ContractViolationError(f"menu item {context.item_id} not found")
        return dataclasses.replace(context, base_price=price)
    if isinstance(context, BundleLine):
        config = catalog.bundle_config(context.bundle_id)
        if config is None:
            raise ContractViolationError(f"bundle {context.bundle_id} not found")
        bundle = dataclasses.replace(
            context.bundle, fixed_price=config.fixed_price, free_options=config.free_options
        )
        return dataclasses.replace(context, bundle=bundle)
    raise ContractViolationError(f"unsupported pricing context: {type(context).__name__}")


class CheckoutPricer:
    """Prices a cart against the offers, promo code and loyalty state of a customer."""

    def __init__(
        self,
        offers: OfferEvaluator,
        promos: Optional[PromoCodeValidator] = None,
        loyalty: Optional[LoyaltyStore] = None,
        settings: Optional[PricingSettings] = None,
        engine: Optional[DiscountEngine] = None,
        catalog: Optional[CatalogStore] = None,
    ) -> None:
        self.offers = offers
        self.promos = promos
        self.loyalty = loyalty
        self.settings = settings or PricingSettings()
        self.engine = engine or DiscountEngine(self.settings)
        self.catalog = catalog

    def cart_lines(self, items: Sequence[tuple[PricingContext, int]]) -> list[CartLineItem]:
        """Price (context, quantity) pairs into cart lines, using catalog prices when available."""
        lines = []
        for context, quantity in items:
            if self.catalog is not None:
                context = catalog_context(self.catalog, context)
            lines.append(to_cart_line(context, quantity))
        return lines

    def _validated_promo(
        self, foodtruck_id: str, code: Optional[str], email: str, subtotal: int
    ) -> Optional[PromoCode]:
        if not code or not code.strip() or self.promos is None:
            return None
        try:
            return self.promos.validate(foodtruck_id, code.strip().upper(), email or ANONYMOUS_EMAIL, subtotal)
        except PromoCodeRejectedError as e:
            log.info("promo_code_ignored", foodtruck_id=foodtruck_id, code=e.code, reason=e.reason)
            return None

    def quote(
        self,
        foodtruck_id: str,
        lines: Sequence[CartLineItem],
        email: str = "",
        promo_code: Optional[str] = None,
        use_loyalty_reward: bool = True,
        loyalty_opt_in: bool = True,
    ) -> CartBreakdown:
        subtotal = cart_subtotal(lines)
        deals = self.offers.applicable_deals(foodtruck_id, lines) if lines else []
        promo = self._validated_promo(foodtruck_id, promo_code, email, subtotal)
        loyalty = None
        if email and self.loyalty is not None and self.settings.loyalty_enabled:
            loyalty = self.loyalty.customer_loyalty(foodtruck_id, email)

        breakdown = self.engine.apply(
            subtotal,
            lines,
            deals,
            promo,
            loyalty,
            use_loyalty_reward=use_loyalty_reward,
            loyalty_opt_in=loyalty_opt_in,
        )
        log.info(
            "checkout_quoted",
            foodtruck_id=foodtruck_id,
            subtotal=breakdown.subtotal,
            total=breakdown.total,
            discounts=len(breakdown.discounts),
        )
        return breakdown
