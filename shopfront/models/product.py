# shopfront/models/product.py
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class Product(SQLModel, table=True):
    """
    Catalog entry owned by a seller.

    `stock` is the authoritative available quantity. Only the stock ledger
    (checkout / cancellation) and the owning seller's edits change it.

    Products are never hard-deleted because historical order items point
    at them; deleting from the storefront clears `is_active`.
    """

    __tablename__ = "products"

    id: int | None = Field(default=None, primary_key=True)

    name: str = Field(
        max_length=255,
        index=True,
    )

    description: str | None = None

    price: float = Field(
        ge=0,
        description="Unit price",
    )

    image_url: str | None = None

    category: str = Field(
        max_length=50,
        index=True,
    )

    stock: int = Field(
        default=0,
        ge=0,
        description="Units currently available",
    )

    seller_id: int = Field(
        foreign_key="users.id",
        index=True,
    )

    is_active: bool = Field(
        default=True,
        index=True,
        description="False once the seller removed it from the storefront",
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )
