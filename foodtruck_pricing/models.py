"""Pricing data models.

All monetary fields are integer minor units (cents). Records fetched from
storage arrive as plain mappings and are converted with from_record().
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from fractions import Fraction
from typing import Any, Optional, Union

from .errors import ContractViolationError
from .validation import require_money


class RewardType(str, Enum):
    FREE_ITEM = "free_item"
    CHEAPEST_IN_CART = "cheapest_in_cart"
    PERCENTAGE = "percentage"
    FIXED = "fixed"


class DiscountType(str, Enum):
    PERCENTAGE = "percentage"
    FIXED = "fixed"


class DiscountSource(str, Enum):
    DEAL = "deal"
    PROMO_CODE = "promo_code"
    LOYALTY = "loyalty"


def _int_field(record: Mapping[str, Any], key: str, default: Optional[int] = 0) -> Optional[int]:
    """Read an integer field, accepting integral floats from numeric columns."""
    value = record.get(key)
    if value is None:
        return default
    if isinstance(value, float):
        if not value.is_integer():
            raise ContractViolationError(f"{key} must be a whole number, got {value}")
        value = int(value)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ContractViolationError(f"{key} must be an integer, got {value!r}")
    return value


def _money_field(record: Mapping[str, Any], key: str, default: Optional[int] = 0) -> Optional[int]:
    value = _int_field(record, key, default)
    if value is None:
        return None
    return require_money(value, key)


def _rate_field(record: Mapping[str, Any], key: str, default: int) -> Union[int, Fraction]:
    """Read a non-negative rate; fractional values are kept exact (1.5 -> 3/2)."""
    value = record.get(key)
    if value is None:
        return default
    if isinstance(value, float):
        value = Fraction(str(value))
        if value.denominator == 1:
            value = value.numerator
    if isinstance(value, bool) or not isinstance(value, (int, Fraction)):
        raise ContractViolationError(f"{key} must be a number, got {value!r}")
    if value < 0:
        raise ContractViolationError(f"{key} cannot be negative, got {value}")
    return value


def _enum_field(enum_type, record: Mapping[str, Any], key: str):
    try:
        return enum_type(record.get(key))
    except ValueError as e:
        raise ContractViolationError(f"{key} has unsupported value {record.get(key)!r}", e) from e


# ============================================================================
# Menu and bundle configuration
# ============================================================================


@dataclass(frozen=True)
class OptionChoice:
    """A single option chosen within an option group."""

    price_modifier: int = 0
    option_id: str = ""
    option_group_id: str = ""
    name: str = ""
    group_name: str = ""
    is_size_option: bool = False

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "OptionChoice":
        return cls(
            price_modifier=_int_field(record, "priceModifier", 0),
            option_id=record.get("optionId", ""),
            option_group_id=record.get("optionGroupId", ""),
            name=record.get("name", ""),
            group_name=record.get("groupName", ""),
            is_size_option=bool(record.get("isSizeOption", False)),
        )


@dataclass(frozen=True)
class BundleSelection:
    """One slot of a bundle, e.g. one pizza in a 2-pizza formula."""

    supplement: int = 0
    selected_options: tuple[OptionChoice, ...] = ()
    category_id: str = ""
    category_name: str = ""
    menu_item_id: str = ""

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "BundleSelection":
        menu_item = record.get("menuItem") or {}
        return cls(
            supplement=_money_field(record, "supplement", 0),
            selected_options=tuple(
                OptionChoice.from_record(o) for o in record.get("selectedOptions") or ()
            ),
            category_id=record.get("categoryId", ""),
            category_name=record.get("categoryName", ""),
            menu_item_id=menu_item.get("id", ""),
        )


@dataclass(frozen=True)
class BundlePriceInput:
    fixed_price: int
    free_options: bool = False
    selections: tuple[BundleSelection, ...] = ()

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "BundlePriceInput":
        return cls(
            fixed_price=_money_field(record, "fixedPrice", None),
            free_options=bool(record.get("freeOptions", False)),
            selections=tuple(BundleSelection.from_record(s) for s in record.get("selections") or ()),
        )


@dataclass(frozen=True)
class BundlePriceBreakdown:
    fixed_price: int
    supplements_total: int
    options_total: int
    unit_price: int
    total: int


@dataclass(frozen=True)
class LinePriceBreakdown:
    """Price of a standalone (non-bundle) menu item line."""

    base_price: int
    options_total: int
    unit_price: int
    total: int


# ============================================================================
# Cart and offers
# ============================================================================


@dataclass(frozen=True)
class CartLineItem:
    """A priced line of the cart, as handed to the discount engine."""

    item_id: str
    name: str
    unit_price: int
    quantity: int = 1
    category_id: Optional[str] = None
    selected_option_ids: tuple[str, ...] = ()

    @property
    def line_total(self) -> int:
        return self.unit_price * self.quantity


def cart_subtotal(lines) -> int:
    """Sum of unit price times quantity over the cart lines."""
    return sum(line.line_total for line in lines)


@dataclass(frozen=True)
class ApplicableDeal:
    """A candidate deal, pre-evaluated against the cart by the offer evaluator."""

    deal_id: str
    deal_name: str
    reward_type: RewardType
    is_applicable: bool
    calculated_discount: Optional[int] = None
    stackable: bool = False
    trigger_quantity: int = 0
    trigger_category_name: Optional[str] = None
    items_in_cart: int = 0
    items_needed: int = 0
    reward_item_id: Optional[str] = None
    reward_item_name: Optional[str] = None
    reward_item_price: Optional[int] = None
    reward_value: Optional[int] = None
    cheapest_item_name: Optional[str] = None
    offer_type: Optional[str] = None

    def __post_init__(self):
        if not isinstance(self.reward_type, RewardType):
            try:
                object.__setattr__(self, "reward_type", RewardType(self.reward_type))
            except ValueError as e:
                raise ContractViolationError(f"reward_type has unsupported value {self.reward_type!r}", e) from e

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "ApplicableDeal":
        return cls(
            deal_id=record.get("deal_id") or record.get("offer_id") or "",
            deal_name=record.get("deal_name") or record.get("offer_name") or "",
            reward_type=_enum_field(RewardType, record, "reward_type"),
            is_applicable=bool(record.get("is_applicable", False)),
            calculated_discount=_money_field(record, "calculated_discount", None),
            stackable=bool(record.get("stackable") or False),
            trigger_quantity=_int_field(record, "trigger_quantity", 0),
            trigger_category_name=record.get("trigger_category_name"),
            items_in_cart=_int_field(record, "items_in_cart", 0),
            items_needed=_int_field(record, "items_needed", 0),
            reward_item_id=record.get("reward_item_id"),
            reward_item_name=record.get("reward_item_name"),
            reward_item_price=_money_field(record, "reward_item_price", None),
            reward_value=_int_field(record, "reward_value", None),
            cheapest_item_name=record.get("cheapest_item_name"),
            offer_type=record.get("offer_type"),
        )


@dataclass(frozen=True)
class PromoCode:
    """A promo code that already passed external validation."""

    promo_code_id: str
    code: str
    discount_type: DiscountType
    discount_value: int
    min_order_amount: int = 0
    max_discount: Optional[int] = None
    max_uses_per_customer: Optional[int] = None
    stackable: bool = True

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "PromoCode":
        return cls(
            promo_code_id=record.get("promo_code_id") or record.get("offer_id") or record.get("id") or "",
            code=(record.get("code") or "").strip().upper(),
            discount_type=_enum_field(DiscountType, record, "discount_type"),
            discount_value=_int_field(record, "discount_value", 0),
            min_order_amount=_money_field(record, "min_order_amount", 0),
            max_discount=_money_field(record, "max_discount", None),
            max_uses_per_customer=_int_field(record, "max_uses_per_customer", None),
        )


@dataclass(frozen=True)
class CustomerLoyaltyInfo:
    customer_id: Optional[str] = None
    loyalty_points: int = 0
    loyalty_threshold: int = 0
    loyalty_points_per_euro: Union[int, Fraction] = 1
    loyalty_reward: int = 0
    loyalty_allow_multiple: bool = False
    loyalty_opt_in: Optional[bool] = None
    can_redeem: bool = False
    max_discount: int = 0
    redeemable_count: int = 0

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "CustomerLoyaltyInfo":
        return cls(
            customer_id=record.get("customer_id"),
            loyalty_points=_int_field(record, "loyalty_points", 0),
            loyalty_threshold=_int_field(record, "loyalty_threshold", 0),
            loyalty_points_per_euro=_rate_field(record, "loyalty_points_per_euro", 1),
            loyalty_reward=_money_field(record, "loyalty_reward", 0),
            loyalty_allow_multiple=bool(record.get("loyalty_allow_multiple", False)),
            loyalty_opt_in=record.get("loyalty_opt_in"),
            can_redeem=bool(record.get("can_redeem", False)),
            max_discount=_money_field(record, "max_discount", 0),
            redeemable_count=_int_field(record, "redeemable_count", 0),
        )


# ============================================================================
# Engine output
# ============================================================================


@dataclass(frozen=True)
class DiscountCandidate:
    """A deal or promo code competing in the stacking step."""

    source: DiscountSource
    source_id: str
    name: str
    amount: int
    stackable: bool
    reward_type: Optional[str] = None
    free_item_name: Optional[str] = None
    rank_amount: Optional[int] = None

    @property
    def ranking(self) -> int:
        """Amount compared between exclusive candidates, before the subtotal cap."""
        return self.amount if self.rank_amount is None else self.rank_amount


@dataclass(frozen=True)
class AppliedDiscount:
    """A discount actually applied, for persistence and display."""

    source: DiscountSource
    source_id: str
    name: str
    amount: int
    reward_type: Optional[str] = None
    free_item_name: Optional[str] = None

    @classmethod
    def from_candidate(cls, candidate: DiscountCandidate, amount: int) -> "AppliedDiscount":
        return cls(
            source=candidate.source,
            source_id=candidate.source_id,
            name=candidate.name,
            amount=amount,
            reward_type=candidate.reward_type,
            free_item_name=candidate.free_item_name,
        )


@dataclass(frozen=True)
class DealProgress:
    """How far the cart is from unlocking a deal."""

    deal_id: str
    deal_name: str
    trigger_quantity: int
    items_in_cart: int
    items_needed: int
    trigger_category_name: Optional[str] = None


@dataclass(frozen=True)
class CartBreakdown:
    subtotal: int
    discounts: tuple[AppliedDiscount, ...] = ()
    promo_discount: int = 0
    subtotal_after_promo: int = 0
    loyalty_discount: int = 0
    loyalty_reward_count: int = 0
    total: int = 0
    points_to_earn: int = 0
    progress: tuple[DealProgress, ...] = field(default_factory=tuple)

    @property
    def discount_total(self) -> int:
        return self.subtotal - self.total
