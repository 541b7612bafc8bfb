"""Tests for bundle pricing."""

import pytest

from foodtruck_pricing.bundle import calculate_bundle_price, price_bundle_slot
from foodtruck_pricing.errors import ContractViolationError
from foodtruck_pricing.models import BundlePriceInput, BundleSelection, OptionChoice


def size(name: str, modifier: int) -> OptionChoice:
    return OptionChoice(
        price_modifier=modifier,
        option_id=name.lower(),
        option_group_id="size",
        name=name,
        group_name="Taille",
    )


def extra(name: str, modifier: int) -> OptionChoice:
    return OptionChoice(price_modifier=modifier, option_id=name.lower(), option_group_id="extras", name=name)


def bundle(*selections: BundleSelection, fixed_price: int = 1200, free_options: bool = False) -> BundlePriceInput:
    return BundlePriceInput(fixed_price=fixed_price, free_options=free_options, selections=tuple(selections))


class TestBaseCases:
    """Fixed price and quantity."""

    def test_fixed_price_only(self) -> None:
        """No options and no supplements price at the fixed price."""
        result = calculate_bundle_price(bundle(BundleSelection(), BundleSelection()))
        assert result.fixed_price == 1200
        assert result.supplements_total == 0
        assert result.options_total == 0
        assert result.unit_price == 1200
        assert result.total == 1200

    def test_multiplies_by_quantity(self) -> None:
        """Total is unit price times quantity."""
        result = calculate_bundle_price(bundle(BundleSelection()), 3)
        assert result.unit_price == 1200
        assert result.total == 3600

    def test_empty_selections(self) -> None:
        """An empty selection list prices at the fixed price."""
        result = calculate_bundle_price(bundle())
        assert result.unit_price == 1200


class TestOptions:
    """Option modifiers are deltas on top of the fixed price."""

    @pytest.mark.parametrize("name,modifier,expected", [("S", 0, 1200), ("M", 300, 1500), ("L", 600, 1800)])
    def test_size_deltas(self, name, modifier, expected) -> None:
        """Size options add their delta."""
        result = calculate_bundle_price(bundle(BundleSelection(selected_options=(size(name, modifier),))))
        assert result.unit_price == expected

    def test_sums_across_slots(self) -> None:
        """Options from every slot are summed."""
        result = calculate_bundle_price(
            bundle(
                BundleSelection(selected_options=(size("M", 300), extra("Cheese", 150))),
                BundleSelection(selected_options=(size("L", 600),)),
            )
        )
        assert result.options_total == 1050
        assert result.unit_price == 2250

    def test_negative_modifier_summed(self) -> None:
        """Negative modifiers are summed algebraically."""
        result = calculate_bundle_price(
            bundle(BundleSelection(selected_options=(extra("No sauce", -50), extra("Bacon", 200))))
        )
        assert result.options_total == 150
        assert result.unit_price == 1350


class TestSupplements:
    """Supplements come from the bundle config."""

    def test_adds_supplements(self) -> None:
        """Per-slot supplements are summed."""
        result = calculate_bundle_price(bundle(BundleSelection(supplement=300), BundleSelection(supplement=200)))
        assert result.supplements_total == 500
        assert result.unit_price == 1700

    def test_free_options_keeps_supplements(self) -> None:
        """free_options zeroes options but keeps supplements."""
        selections = (
            BundleSelection(supplement=300, selected_options=(size("L", 600), extra("Cheese", 150))),
            BundleSelection(supplement=0, selected_options=(size("M", 300),)),
        )
        free = calculate_bundle_price(bundle(*selections, free_options=True))
        paid = calculate_bundle_price(bundle(*selections, free_options=False))

        assert free.options_total == 0
        assert free.supplements_total == paid.supplements_total == 300
        assert free.unit_price == 1500
        assert paid.unit_price == 2550

    def test_price_bundle_slot(self) -> None:
        """Slot contribution is (supplement, options)."""
        selection = BundleSelection(supplement=100, selected_options=(extra("Egg", 80),))
        assert price_bundle_slot(selection, free_options=False) == (100, 80)
        assert price_bundle_slot(selection, free_options=True) == (100, 0)


class TestContractViolations:
    """Malformed input is rejected, not clamped."""

    def test_negative_fixed_price(self) -> None:
        """Negative fixed price."""
        with pytest.raises(ContractViolationError, match="fixed_price"):
            calculate_bundle_price(bundle(fixed_price=-1))

    @pytest.mark.parametrize("quantity", [0, -1, 1.5])
    def test_bad_quantity(self, quantity) -> None:
        """Quantity must be a positive integer."""
        with pytest.raises(ContractViolationError, match="quantity"):
            calculate_bundle_price(bundle(), quantity)

    def test_negative_supplement(self) -> None:
        """Supplements are non-negative surcharges."""
        with pytest.raises(ContractViolationError, match="supplement"):
            calculate_bundle_price(bundle(BundleSelection(supplement=-100)))

    def test_size_replacing_option_in_bundle(self) -> None:
        """Bundle options must never be flagged as size-replacing."""
        replacing = OptionChoice(price_modifier=1500, name="XL", is_size_option=True)
        with pytest.raises(ContractViolationError, match="size option"):
            calculate_bundle_price(bundle(BundleSelection(selected_options=(replacing,))))

    def test_float_modifier(self) -> None:
        """Floats never enter price math."""
        with pytest.raises(ContractViolationError):
            calculate_bundle_price(bundle(BundleSelection(selected_options=(extra("Cheese", 1.5),))))


class TestFromRecord:
    """Bundle input from a stored cart record."""

    def test_camel_case_record(self) -> None:
        """Cart records use camelCase keys; missing fields default to zero."""
        record = {
            "fixedPrice": 1200,
            "freeOptions": False,
            "selections": [
                {"supplement": 300, "selectedOptions": [{"optionId": "m", "priceModifier": 300}]},
                {"categoryId": "drinks"},
            ],
        }
        result = calculate_bundle_price(BundlePriceInput.from_record(record), 2)
        assert result.unit_price == 1800
        assert result.total == 3600

    def test_missing_fixed_price(self) -> None:
        """A record without fixedPrice is rejected at pricing time."""
        with pytest.raises(ContractViolationError, match="fixed_price"):
            calculate_bundle_price(BundlePriceInput.from_record({"selections": []}))
