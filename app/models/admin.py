# app/models/admin.py
import uuid
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class Admin(SQLModel, table=True):
    """
    Back-office account.

    Created once by the seed operation (GET /api/seed or seed_admin.py)
    and used only for credential-based login. The password is stored as a
    bcrypt hash and never leaves the service.
    """

    __tablename__ = "admins"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    email: str = Field(
        unique=True,
        index=True,
        description="Login email, stored lowercased",
    )

    password_hash: str = Field(
        description="bcrypt hash of the admin password",
    )

    name: str = Field(
        max_length=100,
        description="Display name shown in the admin header",
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation timestamp (UTC)",
    )
