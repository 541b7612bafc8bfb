"""Shared pytest fixtures for pricing tests."""

import pytest

from foodtruck_pricing import CartLineItem

from .fixtures import make_line


@pytest.fixture
def lines() -> list[CartLineItem]:
    """Three-line cart totalling 5000."""
    return [
        make_line("burger", 1500, 2, category_id="mains"),
        make_line("fries", 400, 3, category_id="sides"),
        make_line("soda", 400, 2, category_id="drinks"),
    ]


@pytest.fixture
def subtotal(lines) -> int:
    return sum(line.unit_price * line.quantity for line in lines)
