# app/schemas/common.py
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """
    Base for API payloads.

    Clients speak camelCase (`pricingType`, `isActive`); Python code uses
    snake_case. Both spellings are accepted on input, camelCase is emitted.
    Unknown keys (e.g. `_id`, `createdAt` echoed back by the admin UI) are
    ignored.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        extra="ignore",
    )


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    pages: int


class ApiResponse(BaseModel, Generic[T]):
    """
    Uniform response envelope:

        {success, data?, error?, message?, pagination?}

    Routes are declared with `response_model_exclude_none=True` so unset
    members are left out of the JSON.
    """

    success: bool = True
    data: T | None = None
    error: str | None = None
    message: str | None = None
    pagination: Pagination | None = None
