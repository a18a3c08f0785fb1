# shopfront/models/order.py
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class Order(SQLModel, table=True):
    """
    Customer order, created from a cart snapshot.

    Append-only: after creation only `status` (through the status machine),
    `stock_released` and `updated_at` change.
    """

    __tablename__ = "orders"

    id: int | None = Field(default=None, primary_key=True)

    user_id: int = Field(
        foreign_key="users.id",
        index=True,
    )

    # pending | processing | shipped | delivered | cancelled
    status: str = Field(
        default="pending",
        index=True,
        description="Order status lifecycle",
    )

    total_amount: float = Field(
        description="Sum of price * quantity over the order items",
    )

    shipping_address: str
    payment_method: str
    note: str | None = None

    # Set once when a cancellation returned the items to stock
    stock_released: bool = Field(default=False)

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation timestamp (UTC)",
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )


class OrderItem(SQLModel, table=True):
    """
    Line item inside an order.

    `price` is the unit price captured when the order was placed.
    """

    __tablename__ = "order_items"

    id: int | None = Field(default=None, primary_key=True)

    order_id: int = Field(
        foreign_key="orders.id",
        index=True,
    )

    product_id: int = Field(
        foreign_key="products.id",
        index=True,
    )

    product_name: str | None = None

    quantity: int = Field(
        gt=0,
        description="Quantity ordered (>=1)",
    )

    price: float = Field(
        description="Unit price at time of order",
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )
