# shopfront/core/errors.py
"""
Error taxonomy shared by repositories, services and routers.

Every error is an HTTPException subclass, so a service can raise it and
FastAPI renders the right status code without any translation layer.
Errors that the client needs to react to (stock conflicts, bad status
transitions) carry a structured `detail` dict instead of a plain message.
"""
from typing import Any

from fastapi import HTTPException, status


class ShopError(HTTPException):
    """Base class; subclasses pin the status code."""

    default_status: int = status.HTTP_400_BAD_REQUEST
    default_message: str = "Request failed"

    def __init__(self, detail: Any = None):
        super().__init__(
            status_code=self.default_status,
            detail=detail if detail is not None else self.default_message,
        )


class ValidationError(ShopError):
    default_status = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class AuthenticationRequired(ShopError):
    default_status = status.HTTP_401_UNAUTHORIZED
    default_message = "Authentication required"


class AuthorizationDenied(ShopError):
    default_status = status.HTTP_403_FORBIDDEN
    default_message = "Not allowed"


class NotFound(ShopError):
    default_status = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class ConflictError(ShopError):
    default_status = status.HTTP_409_CONFLICT
    default_message = "Conflict"


class InsufficientStock(ConflictError):
    """
    Requested quantity exceeds what is available.

    Carries the offending product id and the quantity still available so
    the client can re-prompt without another round trip.
    """

    def __init__(self, product_id: int, available: int):
        self.product_id = product_id
        self.available = max(available, 0)
        super().__init__(
            {
                "message": "Insufficient stock",
                "productId": product_id,
                "available": self.available,
            }
        )


class EmptyCart(ShopError):
    default_status = status.HTTP_400_BAD_REQUEST
    default_message = "Cart is empty"


class InvalidTransition(ShopError):
    default_status = status.HTTP_400_BAD_REQUEST

    def __init__(self, current: str, new: str):
        self.current = current
        self.new = new
        super().__init__(
            {
                "message": f"Invalid status transition: {current} -> {new}",
                "from": current,
                "to": new,
            }
        )
