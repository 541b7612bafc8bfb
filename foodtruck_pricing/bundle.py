"""Bundle pricing.

Formula: (fixed_price + supplements_total + options_total) * quantity

- fixed_price: base bundle price from the offer config
- supplements_total: per-slot surcharges from the bundle config
- options_total: sum of option price modifiers, zero when free_options is set

Bundle option modifiers are deltas added on top of fixed_price
(e.g. S/M/L = 0/300/600). This is unlike standalone items, where a size
option's modifier replaces the base price (see line_items).
"""

import structlog

from .errors import ContractViolationError
from .models import BundlePriceBreakdown, BundlePriceInput, BundleSelection
from .validation import require_int, require_money, require_positive_quantity

log = structlog.get_logger(__name__)


def _validate_selection(selection: BundleSelection, index: int) -> None:
    require_money(selection.supplement, f"selections[{index}].supplement")
    for opt_index, option in enumerate(selection.selected_options or ()):
        require_int(option.price_modifier, f"selections[{index}].options[{opt_index}].price_modifier")
        if option.is_size_option:
            raise ContractViolationError(
                f"selections[{index}].options[{opt_index}] is a size option; "
                "bundle options are deltas and must not replace the price"
            )


def price_bundle_slot(selection: BundleSelection, free_options: bool) -> tuple[int, int]:
    """Return a slot's (supplement, options) contribution."""
    if free_options:
        return selection.supplement, 0
    options = sum(option.price_modifier for option in selection.selected_options or ())
    return selection.supplement, options


def calculate_bundle_price(bundle: BundlePriceInput, quantity: int = 1) -> BundlePriceBreakdown:
    """Calculate the price of a bundle line item.

    free_options suppresses only the option modifiers. Supplements are a
    bundle-config surcharge and stay chargeable.

    Raises:
        ContractViolationError: on negative prices, a bad quantity, or a
            size-flagged option inside a slot.
    """
    require_money(bundle.fixed_price, "fixed_price")
    require_positive_quantity(quantity)

    supplements_total = 0
    options_total = 0
    for index, selection in enumerate(bundle.selections):
        _validate_selection(selection, index)
        supplement, options = price_bundle_slot(selection, bundle.free_options)
        supplements_total += supplement
        options_total += options

    unit_price = bundle.fixed_price + supplements_total + options_total

    log.debug(
        "bundle_priced",
        fixed_price=bundle.fixed_price,
        supplements_total=supplements_total,
        options_total=options_total,
        quantity=quantity,
    )

    return BundlePriceBreakdown(
        fixed_price=bundle.fixed_price,
        supplements_total=supplements_total,
        options_total=options_total,
        unit_price=unit_price,
        total=unit_price * quantity,
    )
