# shopfront/schemas/product.py
from datetime import datetime

from pydantic import field_validator
from sqlmodel import Field

from shopfront.schemas.base import ApiModel


class ProductRead(ApiModel):
    """
    Product representation for clients.
    """

    id: int
    name: str
    description: str | None = None
    price: float
    image_url: str | None = None
    category: str
    stock: int
    seller_id: int
    is_active: bool
    created_at: datetime
    updated_at: datetime


class ProductCreate(ApiModel):
    """
    Payload for creating a product.

    The owning seller is taken from the token, never from the body.
    """

    name: str = Field(max_length=255)
    description: str | None = None
    price: float = Field(ge=0)
    image_url: str | None = None
    category: str = Field(max_length=50)
    stock: int = Field(default=0, ge=0)

    @field_validator("name", "category")
    @classmethod
    def not_empty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("field cannot be empty")
        return v


class ProductUpdate(ApiModel):
    """
    Partial update payload for products.
    All fields are optional; `stock` is a direct set.
    """

    name: str | None = Field(default=None, max_length=255)
    description: str | None = None
    price: float | None = Field(default=None, ge=0)
    image_url: str | None = None
    category: str | None = Field(default=None, max_length=50)
    stock: int | None = Field(default=None, ge=0)
    is_active: bool | None = None

    @field_validator("name", "category")
    @classmethod
    def not_empty(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("field cannot be empty")
        return v
