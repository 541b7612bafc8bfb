"""Line pricing for the two cart line contexts.

A cart line is either a standalone menu item or a bundle. The two read
option modifiers differently:

- StandaloneItem: a size option's modifier IS the price for that size and
  replaces base_price; every other option adds its modifier.
- BundleLine: every option modifier is a delta on top of the bundle's
  fixed price (see bundle.calculate_bundle_price).
"""

from dataclasses import dataclass
from typing import Optional, Union

from .bundle import calculate_bundle_price
from .errors import ContractViolationError
from .models import (
    BundlePriceBreakdown,
    BundlePriceInput,
    CartLineItem,
    LinePriceBreakdown,
    OptionChoice,
)
from .validation import require_int, require_money, require_positive_quantity


@dataclass(frozen=True)
class StandaloneItem:
    item_id: str
    name: str
    base_price: int
    selected_options: tuple[OptionChoice, ...] = ()
    category_id: Optional[str] = None


@dataclass(frozen=True)
class BundleLine:
    bundle_id: str
    name: str
    bundle: BundlePriceInput
    category_id: Optional[str] = None


PricingContext = Union[StandaloneItem, BundleLine]


def price_standalone_item(item: StandaloneItem, quantity: int = 1) -> LinePriceBreakdown:
    """Price a regular menu item; the first size option replaces the base price."""
    require_money(item.base_price, "base_price")
    require_positive_quantity(quantity)

    base_price = item.base_price
    options_total = 0
    size_applied = False
    for index, option in enumerate(item.selected_options):
        require_int(option.price_modifier, f"options[{index}].price_modifier")
        if option.is_size_option:
            if not size_applied:
                base_price = require_money(option.price_modifier, f"options[{index}].price_modifier")
                size_applied = True
            continue
        options_total += option.price_modifier

    unit_price = base_price + options_total
    return LinePriceBreakdown(
        base_price=base_price,
        options_total=options_total,
        unit_price=unit_price,
        total=unit_price * quantity,
    )


def price_bundle_line(line: BundleLine, quantity: int = 1) -> BundlePriceBreakdown:
    return calculate_bundle_price(line.bundle, quantity)


def price_line(
    context: PricingContext, quantity: int = 1
) -> Union[LinePriceBreakdown, BundlePriceBreakdown]:
    """Price a line according to its context."""
    if isinstance(context, StandaloneItem):
        return price_standalone_item(context, quantity)
    if isinstance(context, BundleLine):
        return price_bundle_line(context, quantity)
    raise ContractViolationError(f"unsupported pricing context: {type(context).__name__}")


def to_cart_line(context: PricingContext, quantity: int = 1) -> CartLineItem:
    """Price a context and turn it into a cart line for the discount engine."""
    breakdown = price_line(context, quantity)
    if isinstance(context, StandaloneItem):
        return CartLineItem(
            item_id=context.item_id,
            name=context.name,
            unit_price=breakdown.unit_price,
            quantity=quantity,
            category_id=context.category_id,
            selected_option_ids=tuple(o.option_id for o in context.selected_options if o.option_id),
        )
    option_ids = tuple(
        o.option_id
        for selection in context.bundle.selections
        for o in selection.selected_options
        if o.option_id
    )
    return CartLineItem(
        item_id=context.bundle_id,
        name=context.name,
        unit_price=breakdown.unit_price,
        quantity=quantity,
        category_id=context.category_id,
        selected_option_ids=option_ids,
    )
