# shopfront/schemas/cart.py
from sqlmodel import Field

from shopfront.schemas.base import ApiModel


class CartItemCreate(ApiModel):
    """
    Payload for adding to cart.
    """

    product_id: int
    quantity: int = Field(default=1, ge=1)


class CartItemUpdate(ApiModel):
    """
    Payload for updating quantity of a cart item.
    Zero or negative quantities are rejected, not floored.
    """

    quantity: int = Field(ge=1)


class CartItemRead(ApiModel):
    """
    Cart line denormalized with the product's current name, price and stock.
    """

    id: int
    product_id: int
    quantity: int
    name: str
    price: float
    stock: int
    image_url: str | None = None
    line_total: float
