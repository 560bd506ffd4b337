# app/core/price_utils.py
"""
Pricing helpers shared by the catalog API and the storefront payloads.

A product owns an ordered list of price slabs (quantity + unit + price).
These helpers turn such a list into the numbers and labels shown to
shoppers. They accept anything with `.price` / `.quantity` / `.unit`
attributes (ORM rows or schemas) and never touch the database.
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Protocol

CURRENCY_SYMBOL = "₹"  # INR
CURRENCY_CODE = "INR"

WEIGHT_UNITS = {"g", "kg"}

# unit code -> (singular, plural)
UNIT_NAMES: dict[str, tuple[str, str]] = {
    "g": ("gram", "grams"),
    "kg": ("kg", "kg"),
    "piece": ("piece", "pieces"),
    "dozen": ("dozen", "dozens"),
    "pack": ("pack", "packs"),
}


class Priced(Protocol):
    price: float


def price_bounds(slabs: Iterable[Priced]) -> tuple[float, float]:
    """
    Return (min_price, max_price) across all slabs.

    An empty list yields (0, 0).
    """
    prices = [slab.price for slab in slabs]
    if not prices:
        return 0, 0
    return min(prices), max(prices)


def _group_indian(digits: str) -> str:
    """'1250000' -> '12,50,000' (last three digits, then pairs)."""
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    pairs = []
    while len(head) > 2:
        pairs.insert(0, head[-2:])
        head = head[:-2]
    if head:
        pairs.insert(0, head)
    return ",".join(pairs) + "," + tail


def format_price(amount: float) -> str:
    """
    Format an amount as whole rupees with Indian digit grouping.

        format_price(1500)     -> '₹1,500'
        format_price(125000)   -> '₹1,25,000'
        format_price(499.5)    -> '₹500'
    """
    rounded = Decimal(str(amount)).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    sign = "-" if rounded < 0 else ""
    return f"{sign}{CURRENCY_SYMBOL}{_group_indian(str(abs(int(rounded))))}"


def format_price_range(slabs: Iterable[Priced]) -> str:
    """
    Human price label: a single price when every slab costs the same,
    otherwise 'min – max'.
    """
    low, high = price_bounds(slabs)
    if low == high:
        return format_price(low)
    return f"{format_price(low)} – {format_price(high)}"


def format_quantity(quantity: float) -> str:
    """250.0 -> '250', 0.5 -> '0.5'."""
    if float(quantity).is_integer():
        return str(int(quantity))
    return str(quantity)


def get_unit_label(unit: str | None, quantity: float) -> str:
    """
    Render a slab size for display.

      - weight units: '250g', '1kg'
      - countable units: '1 piece', '6 pieces', '2 dozens'
      - unknown units are echoed as-is: '3 jars'
      - no unit: just the quantity
    """
    qty = format_quantity(quantity)
    if not unit:
        return qty

    key = unit.lower()
    if key in WEIGHT_UNITS:
        return f"{qty}{unit}"

    singular, plural = UNIT_NAMES.get(key, (unit, unit))
    return f"{qty} {singular if quantity == 1 else plural}"
