# app/models/product.py
import uuid
from datetime import datetime, timezone

from sqlalchemy import JSON, Column
from sqlmodel import SQLModel, Field, Relationship


class Product(SQLModel, table=True):
    """
    Product catalog entry.

    - category: denormalized category *name* (soft reference, no FK)
    - prices: ordered price slabs, see PriceSlab
    - images: ordered gallery URLs (JSON list)
    - seo_*: flattened SEO block, exposed as `seo` by the API
    """

    __tablename__ = "products"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    name: str = Field(
        max_length=200,
        index=True,
        description="Display name of the product",
    )

    slug: str = Field(
        max_length=255,
        unique=True,
        index=True,
        description="URL-friendly identifier (unique)",
    )

    category: str = Field(
        index=True,
        description="Name of the category this product is listed under",
    )

    description: str = Field(
        description="Long description",
    )

    short_description: str | None = Field(
        default=None,
        max_length=300,
    )

    image: str = Field(
        description="Main image URL",
    )

    images: list[str] | None = Field(
        default=None,
        sa_column=Column(JSON),
        description="Additional gallery image URLs",
    )

    # WEIGHT | UNIT
    pricing_type: str = Field(
        description="Whether the product is sold by weight or by unit",
    )

    origin: str | None = None
    aroma: str | None = None
    texture: str | None = None
    usage_tips: str | None = None

    seo_title: str
    seo_description: str
    seo_keywords: list[str] | None = Field(
        default=None,
        sa_column=Column(JSON),
    )

    featured: bool = Field(
        default=False,
        index=True,
        description="Show in featured sections and first in listings",
    )

    is_active: bool = Field(
        default=True,
        index=True,
        description="Whether this product is visible on the storefront",
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        index=True,
        description="Creation timestamp (UTC)",
    )

    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Last modification timestamp (UTC)",
    )

    prices: list["PriceSlab"] = Relationship(
        back_populates="product",
        sa_relationship_kwargs={
            "order_by": "PriceSlab.position",
            "cascade": "all, delete-orphan",
            "lazy": "selectin",
        },
    )


class PriceSlab(SQLModel, table=True):
    """
    One purchasable size of a product (e.g. 250g for ₹1,500).

    Rows are rewritten, with fresh ids, whenever a product's prices are
    updated. `position` keeps the admin-defined order; position 0 is the
    slab used by the price sorts.
    """

    __tablename__ = "product_price_slabs"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    product_id: uuid.UUID = Field(
        foreign_key="products.id",
        index=True,
        description="FK to products.id",
    )

    position: int = Field(
        default=0,
        ge=0,
        description="Ordering index within the product's price list",
    )

    quantity: float = Field(
        gt=0,
        description="Size of the slab, in `unit`",
    )

    # g | kg | piece | dozen | pack | free text
    unit: str | None = Field(default=None)

    price: float = Field(
        gt=0,
        description="Price of the slab (INR)",
    )

    product: Product | None = Relationship(back_populates="prices")
