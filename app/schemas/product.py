# app/schemas/product.py
import uuid
from datetime import datetime
from typing import Literal

from pydantic import Field

from app.schemas.common import CamelModel

PricingType = Literal["WEIGHT", "UNIT"]


class SeoData(CamelModel):
    title: str
    description: str
    keywords: list[str] | None = None


class PriceSlabIn(CamelModel):
    """
    Price slab as sent by the admin UI.

    Any client-side slab id is dropped here; slabs are always stored as
    fresh rows. Values are checked by the service so that every problem in
    a payload can be reported at once.
    """

    quantity: float | None = None
    unit: str | None = None
    price: float | None = None


class PriceSlabRead(CamelModel):
    id: uuid.UUID
    quantity: float
    unit: str | None = None
    price: float


class ProductCreate(CamelModel):
    """
    Payload for creating a product.

    Core fields are declared optional on purpose: the service checks
    `name, slug, category, description, pricingType, prices` together and
    answers with one "Missing required fields" message.

    - slug is required (never derived from `name`).
    - image / seo fall back to defaults when omitted.
    """

    name: str | None = Field(default=None, max_length=200)
    slug: str | None = None
    category: str | None = None
    description: str | None = None
    short_description: str | None = Field(default=None, max_length=300)
    image: str | None = None
    images: list[str] | None = None
    pricing_type: PricingType | None = None
    prices: list[PriceSlabIn] | None = None
    origin: str | None = None
    aroma: str | None = None
    texture: str | None = None
    usage_tips: str | None = None
    seo: SeoData | None = None
    featured: bool = False
    is_active: bool = True


class ProductUpdate(CamelModel):
    """
    Partial update payload for products.
    All fields are optional; omitted fields are left untouched.
    """

    name: str | None = Field(default=None, max_length=200)
    slug: str | None = None
    category: str | None = None
    description: str | None = None
    short_description: str | None = Field(default=None, max_length=300)
    image: str | None = None
    images: list[str] | None = None
    pricing_type: PricingType | None = None
    prices: list[PriceSlabIn] | None = None
    origin: str | None = None
    aroma: str | None = None
    texture: str | None = None
    usage_tips: str | None = None
    seo: SeoData | None = None
    featured: bool | None = None
    is_active: bool | None = None


class ProductRead(CamelModel):
    """
    Product representation for clients.

    minPrice / maxPrice are derived from the slabs.
    """

    id: uuid.UUID
    name: str
    slug: str
    category: str
    description: str
    short_description: str | None = None
    image: str
    images: list[str] | None = None
    pricing_type: PricingType
    prices: list[PriceSlabRead]
    min_price: float
    max_price: float
    origin: str | None = None
    aroma: str | None = None
    texture: str | None = None
    usage_tips: str | None = None
    seo: SeoData
    featured: bool
    is_active: bool
    created_at: datetime
    updated_at: datetime
