# shopfront/repositories/product_repo.py
from sqlmodel import Session, select

from shopfront.models.product import Product


class ProductRepository:
    """
    Data access layer for Product.

    - Pure DB operations (CRUD + queries).
    - No FastAPI, no business logic.
    - Stock decrements/increments go through StockLedger, not update().
    """

    def get_by_id(self, session: Session, product_id: int) -> Product | None:
        return session.get(Product, product_id)

    def get_many(self, session: Session, product_ids: list[int]) -> dict[int, Product]:
        """Load several products at once, keyed by id."""
        if not product_ids:
            return {}
        stmt = select(Product).where(Product.id.in_(product_ids))
        return {p.id: p for p in session.exec(stmt).all()}

    def list_products(
        self,
        session: Session,
        skip: int = 0,
        limit: int = 50,
        only_active: bool = True,
        category: str | None = None,
    ) -> list[Product]:
        stmt = select(Product)
        if only_active:
            stmt = stmt.where(Product.is_active == True)  # noqa: E712
        if category is not None:
            stmt = stmt.where(Product.category == category)
        stmt = stmt.order_by(Product.id).offset(skip).limit(limit)
        return session.exec(stmt).all()

    def list_for_seller(self, session: Session, seller_id: int) -> list[Product]:
        stmt = (
            select(Product)
            .where(Product.seller_id == seller_id)
            .order_by(Product.id)
        )
        return session.exec(stmt).all()

    def create(self, session: Session, product: Product) -> Product:
        session.add(product)
        session.commit()
        session.refresh(product)
        return product

    def update(self, session: Session, product: Product) -> Product:
        session.add(product)
        session.commit()
        session.refresh(product)
        return product
