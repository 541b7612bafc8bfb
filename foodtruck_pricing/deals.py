"""Deal candidates and unlock progress."""

from collections.abc import Sequence

from .models import ApplicableDeal, CartLineItem, DealProgress, DiscountCandidate, DiscountSource, RewardType
from .rewards import RewardRouter, cheapest_line, find_line


def deal_progress(deals: Sequence[ApplicableDeal]) -> list[DealProgress]:
    """Progress toward each deal that is not yet applicable ("add N more")."""
    return [
        DealProgress(
            deal_id=deal.deal_id,
            deal_name=deal.deal_name,
            trigger_quantity=deal.trigger_quantity,
            items_in_cart=deal.items_in_cart,
            items_needed=max(0, deal.trigger_quantity - deal.items_in_cart),
            trigger_category_name=deal.trigger_category_name,
        )
        for deal in deals
        if not deal.is_applicable
    ]


def _free_item_name(deal: ApplicableDeal, lines: Sequence[CartLineItem]) -> str | None:
    if deal.reward_type == RewardType.FREE_ITEM:
        line = find_line(lines, deal.reward_item_id)
        return deal.reward_item_name or (line.name if line else None)
    if deal.reward_type == RewardType.CHEAPEST_IN_CART:
        line = cheapest_line(lines)
        return deal.cheapest_item_name or (line.name if line else None)
    return None


def deal_candidates(
    deals: Sequence[ApplicableDeal],
    lines: Sequence[CartLineItem],
    subtotal: int,
    router: RewardRouter,
    force_stackable: bool = False,
) -> list[DiscountCandidate]:
    """Resolve every applicable deal into a stacking candidate, in input order."""
    candidates = []
    for deal in deals:
        if not deal.is_applicable:
            continue
        ranked = router.rank(deal, lines, subtotal)
        candidates.append(
            DiscountCandidate(
                source=DiscountSource.DEAL,
                source_id=deal.deal_id,
                name=deal.deal_name,
                amount=min(ranked, subtotal),
                stackable=deal.stackable or force_stackable,
                reward_type=deal.reward_type.value,
                free_item_name=_free_item_name(deal, lines),
                rank_amount=ranked,
            )
        )
    return candidates
