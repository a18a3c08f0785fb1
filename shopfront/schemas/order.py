# shopfront/schemas/order.py
from datetime import datetime
from typing import Any, Literal

from pydantic import field_validator

from shopfront.schemas.base import ApiModel

OrderStatus = Literal["pending", "processing", "shipped", "delivered", "cancelled"]


class OrderCreate(ApiModel):
    """
    Payload for creating an order from the current cart.

    User provides:
      - shipping_address
      - payment_method
      - note (optional)

    Backend derives:
      - user_id from token
      - status = 'pending'
      - items, prices and total_amount from the server-side cart

    `items` is accepted for compatibility with older clients and ignored.
    """

    shipping_address: str
    payment_method: str
    note: str | None = None
    items: list[Any] | None = None

    @field_validator("shipping_address", "payment_method")
    @classmethod
    def not_empty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("field cannot be empty")
        return v

    @field_validator("note")
    @classmethod
    def normalize_note(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        return v or None


class OrderItemRead(ApiModel):
    """
    Representation of a single order line item.
    """

    id: int
    product_id: int
    name: str | None = None
    quantity: int
    price: float
    line_total: float


class OrderRead(ApiModel):
    """
    Full order view including items.
    """

    id: int
    user_id: int
    status: OrderStatus
    total_amount: float
    shipping_address: str
    payment_method: str
    note: str | None = None
    created_at: datetime
    updated_at: datetime
    items: list[OrderItemRead]


class OrderPlacedRead(ApiModel):
    message: str
    order: OrderRead


class OrderStatusUpdate(ApiModel):
    """
    Seller/admin payload to change order status.
    """

    status: OrderStatus


class OrderStatusRead(ApiModel):
    order_id: int
    status: OrderStatus
