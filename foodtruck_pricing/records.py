"""Plain-dict payloads exchanged with the surrounding application."""

from collections.abc import Sequence
from typing import Any, Optional

from .models import CartBreakdown, CartLineItem, CustomerLoyaltyInfo, DiscountSource, PromoCode


def deal_cart_items(lines: Sequence[CartLineItem]) -> list[dict[str, Any]]:
    """Cart as sent to the offer evaluator."""
    return [
        {
            "menu_item_id": line.item_id,
            "category_id": line.category_id,
            "quantity": line.quantity,
            "price": line.unit_price,
            "name": line.name,
            "selected_option_ids": list(line.selected_option_ids),
        }
        for line in lines
    ]


def order_discount_payload(
    breakdown: CartBreakdown,
    promo_code: Optional[PromoCode] = None,
    loyalty: Optional[CustomerLoyaltyInfo] = None,
) -> dict[str, Any]:
    """Discount fields of the order-creation request."""
    promo_applied = any(d.source == DiscountSource.PROMO_CODE for d in breakdown.discounts)
    redeemed = breakdown.loyalty_discount > 0

    payload: dict[str, Any] = {
        "discount_amount": breakdown.discount_total,
        "promo_code_id": promo_code.promo_code_id if promo_code and promo_applied else None,
        "use_loyalty_reward": redeemed,
        "loyalty_customer_id": loyalty.customer_id if loyalty and redeemed else None,
        "loyalty_reward_count": breakdown.loyalty_reward_count,
    }
    offers = [
        {
            "offer_id": d.source_id,
            "times_applied": 1,
            "discount_amount": d.amount,
            "free_item_name": d.free_item_name,
        }
        for d in breakdown.discounts
        if d.source == DiscountSource.DEAL
    ]
    if offers:
        payload["applied_offers"] = offers
    return payload
