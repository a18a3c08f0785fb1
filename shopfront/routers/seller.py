# shopfront/routers/seller.py
from fastapi import APIRouter, Depends
from sqlmodel import Session

from shopfront.core.auth import require_seller
from shopfront.database import get_session
from shopfront.models.user import User
from shopfront.repositories.cart_repo import CartRepository
from shopfront.repositories.order_repo import OrderRepository
from shopfront.repositories.product_repo import ProductRepository
from shopfront.repositories.stock_ledger import StockLedger
from shopfront.schemas.order import OrderRead
from shopfront.schemas.product import ProductRead
from shopfront.services.order_service import OrderService
from shopfront.services.product_service import ProductService

router = APIRouter(prefix="/seller", tags=["Seller"])

product_repo = ProductRepository()
product_service = ProductService(product_repo)
order_service = OrderService(
    OrderRepository(), CartRepository(), product_repo, StockLedger()
)


@router.get("/products", response_model=list[ProductRead])
def list_my_products(
    session: Session = Depends(get_session),
    seller: User = Depends(require_seller),
):
    """
    The calling seller's products, including ones removed from the storefront.
    """
    return product_service.list_seller_products(session, seller)


@router.get("/orders", response_model=list[OrderRead])
def list_my_orders(
    session: Session = Depends(get_session),
    seller: User = Depends(require_seller),
    skip: int = 0,
    limit: int = 50,
):
    """
    Orders that include at least one of the calling seller's products.
    """
    return order_service.list_seller_orders(session, seller, skip, limit)
