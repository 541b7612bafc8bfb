"""Order pricing and discount engine for food-truck ordering."""

from .errors import (
    PricingError,
    ContractViolationError,
    UnknownRewardTypeError,
    PromoCodeRejectedError,
)
from .models import (
    RewardType,
    DiscountType,
    DiscountSource,
    OptionChoice,
    BundleSelection,
    BundlePriceInput,
    BundlePriceBreakdown,
    LinePriceBreakdown,
    CartLineItem,
    ApplicableDeal,
    PromoCode,
    CustomerLoyaltyInfo,
    DiscountCandidate,
    AppliedDiscount,
    DealProgress,
    CartBreakdown,
    cart_subtotal,
)
from .money import round_minor_units, percentage_of, clamp_non_negative, format_price
from .bundle import calculate_bundle_price, price_bundle_slot
from .line_items import (
    StandaloneItem,
    BundleLine,
    PricingContext,
    price_standalone_item,
    price_bundle_line,
    price_line,
    to_cart_line,
)
from .rewards import RewardRouter, default_router
from .stacking import resolve_stacking
from .promo import promo_discount, promo_candidate, promo_rank
from .loyalty import (
    LoyaltyProgress,
    is_redeemable,
    loyalty_discount,
    loyalty_progress,
    points_to_earn,
)
from .deals import deal_candidates, deal_progress
from .engine import DiscountEngine, apply_discounts
from .config import PricingSettings, configure_logging
from .ports import CatalogStore, OfferEvaluator, PromoCodeValidator, LoyaltyStore
from .checkout import CheckoutPricer, catalog_context
from .records import deal_cart_items, order_discount_payload
from .receipt import format_receipt

__all__ = [
    # Errors
    "PricingError",
    "ContractViolationError",
    "UnknownRewardTypeError",
    "PromoCodeRejectedError",
    # Models
    "RewardType",
    "DiscountType",
    "DiscountSource",
    "OptionChoice",
    "BundleSelection",
    "BundlePriceInput",
    "BundlePriceBreakdown",
    "LinePriceBreakdown",
    "CartLineItem",
    "ApplicableDeal",
    "PromoCode",
    "CustomerLoyaltyInfo",
    "DiscountCandidate",
    "AppliedDiscount",
    "DealProgress",
    "CartBreakdown",
    "cart_subtotal",
    # Money
    "round_minor_units",
    "percentage_of",
    "clamp_non_negative",
    "format_price",
    # Line pricing
    "calculate_bundle_price",
    "price_bundle_slot",
    "StandaloneItem",
    "BundleLine",
    "PricingContext",
    "price_standalone_item",
    "price_bundle_line",
    "price_line",
    "to_cart_line",
    # Discounts
    "RewardRouter",
    "default_router",
    "resolve_stacking",
    "promo_discount",
    "promo_candidate",
    "promo_rank",
    "LoyaltyProgress",
    "is_redeemable",
    "loyalty_discount",
    "loyalty_progress",
    "points_to_earn",
    "deal_candidates",
    "deal_progress",
    "DiscountEngine",
    "apply_discounts",
    # Config
    "PricingSettings",
    "configure_logging",
    # Collaborators
    "CatalogStore",
    "OfferEvaluator",
    "PromoCodeValidator",
    "LoyaltyStore",
    "CheckoutPricer",
    "catalog_context",
    # Records
    "deal_cart_items",
    "order_discount_payload",
    "format_receipt",
]
