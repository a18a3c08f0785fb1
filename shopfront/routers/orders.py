# shopfront/routers/orders.py
from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from shopfront.core.auth import require_auth
from shopfront.database import get_session
from shopfront.models.user import User
from shopfront.repositories.cart_repo import CartRepository
from shopfront.repositories.order_repo import OrderRepository
from shopfront.repositories.product_repo import ProductRepository
from shopfront.repositories.stock_ledger import StockLedger
from shopfront.schemas.order import (
    OrderCreate,
    OrderPlacedRead,
    OrderRead,
    OrderStatusRead,
    OrderStatusUpdate,
)
from shopfront.services.order_service import OrderService
from shopfront.services.order_status import OrderStatusMachine

router = APIRouter(prefix="/orders", tags=["Orders"])

order_repo = OrderRepository()
cart_repo = CartRepository()
product_repo = ProductRepository()
ledger = StockLedger()
service = OrderService(order_repo, cart_repo, product_repo, ledger)
status_machine = OrderStatusMachine(order_repo, ledger)


@router.post(
    "",
    response_model=OrderPlacedRead,
    status_code=status.HTTP_201_CREATED,
)
def place_order(
    payload: OrderCreate,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
):
    """
    Create an order from the current user's cart.

    Items and prices come from the server-side cart; any `items` in the
    body are ignored.

      - 400 when the cart is empty
      - 409 with productId/available when stock ran out
    """
    order = service.place_order(session, current_user.id, payload)
    return OrderPlacedRead(message="Order placed", order=order)


@router.get("", response_model=list[OrderRead])
def list_orders(
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
    skip: int = 0,
    limit: int = 50,
):
    """
    Customers get their own orders; sellers and admins get all orders.
    """
    return service.list_orders(session, current_user, skip, limit)


@router.get("/{order_id}", response_model=OrderRead)
def get_order(
    order_id: int,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
):
    return service.get_order(session, current_user, order_id)


@router.put("/{order_id}/status", response_model=OrderStatusRead)
def update_order_status(
    order_id: int,
    payload: OrderStatusUpdate,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
):
    """
    Update order status (seller/admin only).

      pending    -> processing, cancelled

      processing -> shipped, cancelled

      shipped    -> delivered

    Cancelling returns the ordered quantities to stock.
    """
    order = status_machine.transition(
        session, order_id, payload.status, current_user.role
    )
    return OrderStatusRead(order_id=order.id, status=order.status)
