# shopfront/models/user.py
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class User(SQLModel, table=True):
    """
    Persistent user account.

    Role:
      - "customer" | "seller" | "admin"
      - a guest is represented by a missing token, not by a row.

    This table is *not* responsible for password hashes; credential
    verification lives outside this service.
    """

    __tablename__ = "users"

    id: int | None = Field(default=None, primary_key=True)

    username: str = Field(
        unique=True,
        index=True,
        max_length=50,
    )

    email: str = Field(
        unique=True,
        index=True,
    )

    full_name: str | None = Field(default=None, max_length=100)

    role: str = Field(
        default="customer",
        index=True,
        description="Application role: customer | seller | admin",
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )
