# shopfront/routers/cart.py
from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from shopfront.core.auth import require_auth
from shopfront.database import get_session
from shopfront.models.user import User
from shopfront.repositories.cart_repo import CartRepository
from shopfront.repositories.product_repo import ProductRepository
from shopfront.repositories.stock_ledger import StockLedger
from shopfront.schemas.base import MessageRead
from shopfront.schemas.cart import CartItemCreate, CartItemRead, CartItemUpdate
from shopfront.services.cart_service import CartService

router = APIRouter(prefix="/cart", tags=["Cart"])

cart_repo = CartRepository()
product_repo = ProductRepository()
ledger = StockLedger()
service = CartService(cart_repo, product_repo, ledger)


@router.get("", response_model=list[CartItemRead])
def get_my_cart(
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
):
    """
    Current user's cart lines with product name, price and stock.
    """
    return service.list_items(session, current_user.id)


@router.post(
    "",
    response_model=CartItemRead,
    status_code=status.HTTP_201_CREATED,
)
def add_to_cart(
    payload: CartItemCreate,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
):
    """
    Add product to the current user's cart.

    409 when the requested quantity exceeds current stock.
    """
    return service.add_item(
        session, current_user.id, payload.product_id, payload.quantity
    )


@router.put("/{item_id}", response_model=CartItemRead)
def update_cart_item(
    item_id: int,
    payload: CartItemUpdate,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
):
    """
    Set the quantity of a cart line.
    """
    return service.update_quantity(
        session=session,
        user_id=current_user.id,
        item_id=item_id,
        quantity=payload.quantity,
    )


@router.delete("/{item_id}", response_model=MessageRead)
def remove_cart_item(
    item_id: int,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
):
    service.remove_item(session, current_user.id, item_id)
    return MessageRead(message="Item removed from cart")
