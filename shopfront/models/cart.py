# shopfront/models/cart.py
from datetime import datetime, timezone

from sqlalchemy import UniqueConstraint
from sqlmodel import SQLModel, Field


class Cart(SQLModel, table=True):
    """
    One cart per user, created on the first add-to-cart.
    Emptied (not deleted) when an order is placed.
    """

    __tablename__ = "carts"

    id: int | None = Field(default=None, primary_key=True)

    user_id: int = Field(
        foreign_key="users.id",
        unique=True,
        index=True,
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )


class CartItem(SQLModel, table=True):
    """
    A product line inside a cart.

    References the product by id only; price is read from the product at
    display and checkout time. One line per product per cart.
    """

    __tablename__ = "cart_items"
    __table_args__ = (
        UniqueConstraint("cart_id", "product_id", name="uq_cart_items_cart_product"),
    )

    id: int | None = Field(default=None, primary_key=True)

    cart_id: int = Field(
        foreign_key="carts.id",
        index=True,
    )

    product_id: int = Field(
        foreign_key="products.id",
        index=True,
    )

    quantity: int = Field(
        default=1,
        gt=0,
        description="Must be >= 1",
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )
