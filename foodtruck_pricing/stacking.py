"""Stacking resolution between discount candidates.

Deals, promo codes and threshold discounts all compete here as plain
candidates; only the stackable flag distinguishes them.
"""

from collections.abc import Sequence

import structlog

from .models import DiscountCandidate

log = structlog.get_logger(__name__)


def best_exclusive(candidates: Sequence[DiscountCandidate]) -> DiscountCandidate | None:
    """Non-stackable candidate with the largest ranking; ties go to the first listed."""
    best = None
    for candidate in candidates:
        if candidate.stackable:
            continue
        if best is None or candidate.ranking > best.ranking:
            best = candidate
    return best


def resolve_stacking(candidates: Sequence[DiscountCandidate]) -> list[DiscountCandidate]:
    """Keep every stackable candidate plus at most one non-stackable winner.

    Zero-amount candidates are dropped. Survivors keep their input order.
    """
    live = [c for c in candidates if c.amount > 0]
    winner = best_exclusive(live)
    survivors = [c for c in live if c.stackable or c is winner]

    dropped = [c.source_id for c in live if not (c.stackable or c is winner)]
    if dropped:
        log.debug("exclusive_candidates_dropped", winner=winner.source_id, dropped=dropped)
    return survivors
