# shopfront/services/product_service.py
import logging
from datetime import datetime, timezone

from sqlmodel import Session

from shopfront.core.errors import AuthorizationDenied, NotFound
from shopfront.models.product import Product
from shopfront.models.user import User
from shopfront.repositories.product_repo import ProductRepository
from shopfront.schemas.product import ProductCreate, ProductUpdate

logger = logging.getLogger(__name__)


class ProductService:
    """
    Business logic for the product catalog.

    Responsibilities:
      - public browsing (active products only)
      - seller-owned create / update / soft delete
      - ownership checks (admins may edit any product)
    """

    def __init__(self, repo: ProductRepository):
        self.repo = repo

    # ----- Helpers -----

    @staticmethod
    def _ensure_owner(product: Product, user: User) -> None:
        if user.role != "admin" and product.seller_id != user.id:
            raise AuthorizationDenied("You do not own this product")

    # ----- Public -----

    def list_products(
        self,
        session: Session,
        skip: int = 0,
        limit: int = 50,
        category: str | None = None,
    ) -> list[Product]:
        return self.repo.list_products(
            session, skip=skip, limit=limit, only_active=True, category=category
        )

    def get_product(self, session: Session, product_id: int) -> Product:
        product = self.repo.get_by_id(session, product_id)
        if not product or not product.is_active:
            raise NotFound("Product not found")
        return product

    # ----- Seller -----

    def list_seller_products(self, session: Session, seller: User) -> list[Product]:
        """All of the seller's products, including removed ones."""
        return self.repo.list_for_seller(session, seller.id)

    def create_product(
        self,
        session: Session,
        seller: User,
        payload: ProductCreate,
    ) -> Product:
        product = Product(
            name=payload.name,
            description=payload.description,
            price=payload.price,
            image_url=payload.image_url,
            category=payload.category,
            stock=payload.stock,
            seller_id=seller.id,
        )
        product = self.repo.create(session, product)
        logger.info("Seller %s created product %s", seller.id, product.id)
        return product

    def update_product(
        self,
        session: Session,
        seller: User,
        product_id: int,
        payload: ProductUpdate,
    ) -> Product:
        """
        Partial update of a product.

        `stock` is a direct set by the seller (restock / correction); it is
        the only stock write outside the stock ledger.
        """
        product = self.repo.get_by_id(session, product_id)
        if not product:
            raise NotFound("Product not found")
        self._ensure_owner(product, seller)

        for field, value in payload.model_dump(exclude_unset=True).items():
            if value is not None:
                setattr(product, field, value)
        product.updated_at = datetime.now(timezone.utc)

        return self.repo.update(session, product)

    def delete_product(
        self,
        session: Session,
        seller: User,
        product_id: int,
    ) -> None:
        """
        Remove a product from the storefront.

        Order history references products, so the row is kept and only
        `is_active` is cleared.
        """
        product = self.repo.get_by_id(session, product_id)
        if not product or not product.is_active:
            raise NotFound("Product not found")
        self._ensure_owner(product, seller)

        product.is_active = False
        product.updated_at = datetime.now(timezone.utc)
        self.repo.update(session, product)
        logger.info("Seller %s removed product %s", seller.id, product.id)
