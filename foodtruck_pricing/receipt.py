"""Receipt formatting."""

from collections.abc import Sequence

from .models import CartBreakdown, CartLineItem
from .money import DEFAULT_CURRENCY, format_price

WIDTH = 40


def format_receipt(
    lines: Sequence[CartLineItem],
    breakdown: CartBreakdown,
    currency: str = DEFAULT_CURRENCY,
) -> str:
    """Format a human-readable receipt."""
    out = []

    out.append("=" * WIDTH)
    out.append("RECEIPT".center(WIDTH).rstrip())
    out.append("=" * WIDTH)

    for line in lines:
        out.append(
            f"{line.quantity} x {line.name} @ {format_price(line.unit_price, currency)}"
            f" = {format_price(line.line_total, currency)}"
        )

    out.append("-" * WIDTH)
    out.append(f"Subtotal: {format_price(breakdown.subtotal, currency)}")

    for discount in breakdown.discounts:
        label = discount.name
        if discount.free_item_name:
            label = f"{label} ({discount.free_item_name})"
        out.append(f"Discount {label}: -{format_price(discount.amount, currency)}")

    out.append("-" * WIDTH)
    out.append(f"TOTAL: {format_price(breakdown.total, currency)}")
    out.append(f"Loyalty Points Earned: {breakdown.points_to_earn}")
    out.append("=" * WIDTH)

    return "\n".join(out)
