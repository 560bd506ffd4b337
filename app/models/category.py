# app/models/category.py
import uuid
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class Category(SQLModel, table=True):
    """
    Storefront category.

    Products point at a category by its *name* (Product.category), not by
    id, so renaming a category must also rewrite those products.
    """

    __tablename__ = "categories"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    name: str = Field(
        max_length=100,
        unique=True,
        index=True,
        description="Display name, also the value stored on products",
    )

    slug: str = Field(
        max_length=255,
        unique=True,
        index=True,
        description="URL-friendly identifier (unique)",
    )

    description: str | None = Field(
        default=None,
        max_length=500,
    )

    image: str | None = Field(
        default=None,
        description="Category image URL",
    )

    display_order: int = Field(
        default=0,
        description="Sort key for menus (ascending)",
    )

    is_active: bool = Field(
        default=True,
        index=True,
        description="Whether this category is visible on the storefront",
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation timestamp (UTC)",
    )

    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Last modification timestamp (UTC)",
    )
