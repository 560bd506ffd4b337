"""
Pricing normalization & display helpers
"""
from types import SimpleNamespace

import pytest

from app.core.price_utils import (
    format_price,
    format_price_range,
    get_unit_label,
    price_bounds,
)


def slabs(*prices):
    return [SimpleNamespace(price=p) for p in prices]


def test_price_bounds():
    assert price_bounds(slabs(900, 250, 1800)) == (250, 1800)


def test_price_bounds_empty_list():
    assert price_bounds([]) == (0, 0)


@pytest.mark.parametrize(
    "prices",
    [(500,), (500, 500), (1200, 300, 750), (99.5, 100, 0.5)],
)
def test_every_price_within_bounds(prices):
    low, high = price_bounds(slabs(*prices))
    assert all(low <= p <= high for p in prices)


@pytest.mark.parametrize(
    "amount, expected",
    [
        (0, "₹0"),
        (500, "₹500"),
        (1500, "₹1,500"),
        (125000, "₹1,25,000"),
        (12500000, "₹1,25,00,000"),
        (499.5, "₹500"),
        (1499.4, "₹1,499"),
    ],
)
def test_format_price(amount, expected):
    assert format_price(amount) == expected


def test_format_price_range_single_slab():
    assert format_price_range(slabs(1500)) == "₹1,500"


def test_format_price_range_same_price():
    assert format_price_range(slabs(800, 800)) == "₹800"


def test_format_price_range_spread():
    assert format_price_range(slabs(2200, 500, 1000)) == "₹500 – ₹2,200"


@pytest.mark.parametrize(
    "unit, quantity, expected",
    [
        ("g", 250, "250g"),
        ("kg", 1, "1kg"),
        ("G", 100, "100G"),
        ("g", 0.5, "0.5g"),
        ("piece", 1, "1 piece"),
        ("piece", 6, "6 pieces"),
        ("dozen", 2, "2 dozens"),
        ("pack", 1, "1 pack"),
        ("jar", 3, "3 jar"),
        (None, 4, "4"),
        ("", 2.0, "2"),
    ],
)
def test_get_unit_label(unit, quantity, expected):
    assert get_unit_label(unit, quantity) == expected
