# shopfront/routers/products.py
from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from shopfront.core.auth import require_seller
from shopfront.database import get_session
from shopfront.models.user import User
from shopfront.repositories.product_repo import ProductRepository
from shopfront.schemas.base import MessageRead
from shopfront.schemas.product import ProductCreate, ProductRead, ProductUpdate
from shopfront.services.product_service import ProductService

router = APIRouter(prefix="/products", tags=["Products"])

repo = ProductRepository()
service = ProductService(repo)


# -------- Public endpoints --------


@router.get("", response_model=list[ProductRead])
def list_products(
    session: Session = Depends(get_session),
    skip: int = 0,
    limit: int = 50,
    category: str | None = None,
):
    """
    List products visible on the storefront.

    - Public endpoint.
    - Optional `category` filter.
    """
    return service.list_products(session, skip=skip, limit=limit, category=category)


@router.get("/category/{category_name}", response_model=list[ProductRead])
def list_products_by_category(
    category_name: str,
    session: Session = Depends(get_session),
    skip: int = 0,
    limit: int = 50,
):
    return service.list_products(
        session, skip=skip, limit=limit, category=category_name
    )


@router.get("/{product_id}", response_model=ProductRead)
def get_product(
    product_id: int,
    session: Session = Depends(get_session),
):
    """
    Get a single product by id.

    - Public endpoint.
    """
    return service.get_product(session, product_id)


# -------- Seller endpoints --------


@router.post(
    "",
    response_model=ProductRead,
    status_code=status.HTTP_201_CREATED,
)
def create_product(
    payload: ProductCreate,
    session: Session = Depends(get_session),
    seller: User = Depends(require_seller),
):
    """
    Create a product owned by the calling seller.
    """
    return service.create_product(session, seller, payload)


@router.put("/{product_id}", response_model=ProductRead)
def update_product(
    product_id: int,
    payload: ProductUpdate,
    session: Session = Depends(get_session),
    seller: User = Depends(require_seller),
):
    """
    Partially update a product (owner or admin).
    """
    return service.update_product(session, seller, product_id, payload)


@router.delete("/{product_id}", response_model=MessageRead)
def delete_product(
    product_id: int,
    session: Session = Depends(get_session),
    seller: User = Depends(require_seller),
):
    """
    Remove a product from the storefront (soft delete).
    """
    service.delete_product(session, seller, product_id)
    return MessageRead(message=f"Product {product_id} removed")
