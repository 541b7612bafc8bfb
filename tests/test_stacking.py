"""Tests for stacking resolution."""

from foodtruck_pricing.models import DiscountCandidate, DiscountSource
from foodtruck_pricing.stacking import best_exclusive, resolve_stacking


def candidate(source_id: str, amount: int, stackable: bool = False, rank_amount=None) -> DiscountCandidate:
    return DiscountCandidate(
        source=DiscountSource.DEAL,
        source_id=source_id,
        name=source_id,
        amount=amount,
        stackable=stackable,
        rank_amount=rank_amount,
    )


class TestResolveStacking:
    def test_largest_exclusive_wins(self) -> None:
        """Two non-stackable candidates: the larger one survives."""
        survivors = resolve_stacking([candidate("a", 500), candidate("b", 800)])
        assert [c.source_id for c in survivors] == ["b"]

    def test_tie_goes_to_first(self) -> None:
        """Equal amounts: the first listed survives."""
        survivors = resolve_stacking([candidate("a", 500), candidate("b", 500)])
        assert [c.source_id for c in survivors] == ["a"]

    def test_identical_exclusive_candidates(self) -> None:
        """Field-equal candidates still yield one survivor."""
        survivors = resolve_stacking([candidate("a", 500), candidate("a", 500)])
        assert len(survivors) == 1

    def test_stackables_accumulate(self) -> None:
        """Stackable candidates all survive alongside one exclusive winner, in input order."""
        survivors = resolve_stacking(
            [
                candidate("s1", 100, stackable=True),
                candidate("a", 300),
                candidate("b", 200),
                candidate("s2", 50, stackable=True),
            ]
        )
        assert [c.source_id for c in survivors] == ["s1", "a", "s2"]

    def test_zero_amounts_dropped(self) -> None:
        """A zero-amount exclusive candidate cannot block another."""
        survivors = resolve_stacking([candidate("zero", 0), candidate("a", 1)])
        assert [c.source_id for c in survivors] == ["a"]

    def test_empty(self) -> None:
        """No candidates, no survivors."""
        assert resolve_stacking([]) == []
        assert best_exclusive([]) is None

    def test_ranking_uses_uncapped_amount(self) -> None:
        """Candidates capped to the same amount are ordered by their uncapped value."""
        survivors = resolve_stacking(
            [candidate("small", 5000, rank_amount=6000), candidate("large", 5000, rank_amount=9000)]
        )
        assert [c.source_id for c in survivors] == ["large"]

    def test_ranking_defaults_to_amount(self) -> None:
        assert candidate("a", 700).ranking == 700
        assert candidate("a", 700, rank_amount=900).ranking == 900
