# app/schemas/storefront.py
from typing import Any

from app.schemas.common import CamelModel
from app.schemas.product import ProductRead


class SlabOption(CamelModel):
    """One size the shopper can pick, e.g. '250g' for ₹1,500."""

    label: str
    price: float
    price_label: str


class ProductPage(CamelModel):
    product: ProductRead
    related_products: list[ProductRead]
    price_range: str
    options: list[SlabOption]
    json_ld: dict[str, Any]
