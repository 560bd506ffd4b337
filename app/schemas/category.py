# app/schemas/category.py
import uuid
from datetime import datetime

from pydantic import Field

from app.schemas.common import CamelModel


class CategoryCreate(CamelModel):
    """
    Payload for creating a category.

    - slug is optional: if omitted, generated from `name`.
    """

    name: str | None = Field(default=None, max_length=100)
    slug: str | None = None
    description: str | None = Field(default=None, max_length=500)
    image: str | None = None
    display_order: int = 0
    is_active: bool = True


class CategoryUpdate(CamelModel):
    """
    Partial update payload for categories.
    All fields are optional.
    """

    name: str | None = Field(default=None, max_length=100)
    slug: str | None = None
    description: str | None = Field(default=None, max_length=500)
    image: str | None = None
    display_order: int | None = None
    is_active: bool | None = None


class CategoryRead(CamelModel):
    id: uuid.UUID
    name: str
    slug: str
    description: str | None = None
    image: str | None = None
    display_order: int
    is_active: bool
    created_at: datetime
    updated_at: datetime
