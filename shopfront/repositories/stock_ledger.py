# shopfront/repositories/stock_ledger.py
from datetime import datetime, timezone

from sqlalchemy import update
from sqlmodel import Session, select

from shopfront.core.errors import InsufficientStock, NotFound, ValidationError
from shopfront.models.product import Product


class StockLedger:
    """
    Authoritative available-quantity counter per product.

    Every mutation is one conditional UPDATE, so the check and the
    decrement happen in the same statement. Two concurrent reservations
    for the last unit cannot both see stock=1: the database serializes
    the row update and the loser matches zero rows.

    NOTE:
      - No commits here; reservations belong to the caller's transaction.
        Rolling that transaction back undoes them.
    """

    def current_stock(self, session: Session, product_id: int) -> int:
        stmt = select(Product.stock).where(Product.id == product_id)
        stock = session.exec(stmt).first()
        if stock is None:
            raise NotFound("Product not found")
        return stock

    def reserve(self, session: Session, product_id: int, quantity: int) -> int:
        """
        Decrement stock by `quantity` if at least that much is available.

        Returns:
            Remaining stock after the reservation.

        Raises:
            ValidationError: quantity < 1.
            InsufficientStock: fewer than `quantity` units available
                (or the product does not exist, reported as 0 available).
        """
        if quantity < 1:
            raise ValidationError("Quantity must be at least 1")

        stmt = (
            update(Product)
            .where(Product.id == product_id, Product.stock >= quantity)
            .values(
                stock=Product.stock - quantity,
                updated_at=datetime.now(timezone.utc),
            )
            .execution_options(synchronize_session=False)
        )
        result = session.exec(stmt)  # type: ignore[call-overload]

        if result.rowcount != 1:
            available = session.exec(
                select(Product.stock).where(Product.id == product_id)
            ).first()
            raise InsufficientStock(product_id, available or 0)

        return self.current_stock(session, product_id)

    def release(self, session: Session, product_id: int, quantity: int) -> int:
        """
        Return `quantity` units to stock (order cancellation).

        Guarding against releasing the same cancellation twice is the
        caller's job; see OrderStatusMachine.

        Returns:
            New stock level.
        """
        if quantity < 1:
            raise ValidationError("Quantity must be at least 1")

        stmt = (
            update(Product)
            .where(Product.id == product_id)
            .values(
                stock=Product.stock + quantity,
                updated_at=datetime.now(timezone.utc),
            )
            .execution_options(synchronize_session=False)
        )
        result = session.exec(stmt)  # type: ignore[call-overload]
        if result.rowcount != 1:
            raise NotFound("Product not found")

        return self.current_stock(session, product_id)
