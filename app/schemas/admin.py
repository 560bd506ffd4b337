# app/schemas/admin.py
import uuid
from datetime import datetime

from pydantic import EmailStr, Field, field_validator

from app.schemas.common import CamelModel


class AdminCreate(CamelModel):
    """
    Bootstrap admin credentials (from settings).

    Validation rules:
      - email must be a valid EmailStr, stored lowercased
      - password at least 8 characters
      - name cannot be empty or whitespace
    """

    email: EmailStr
    password: str = Field(min_length=8)
    name: str = Field(max_length=100)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()

    @field_validator("name")
    @classmethod
    def normalize_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty")
        return v


class AdminRead(CamelModel):
    """Admin as returned to clients; never includes the password."""

    id: uuid.UUID
    email: str
    name: str
    created_at: datetime


class LoginRequest(CamelModel):
    email: str | None = None
    password: str | None = None


class TokenRead(CamelModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int
    admin: AdminRead


class AdminStatus(CamelModel):
    """Result of the check-admin diagnostic."""

    exists: bool
    email: str | None = None
    name: str | None = None


class SeedResult(CamelModel):
    email: str | None = None
    db_status: str
    db_name: str | None = None
    hint: str | None = None
