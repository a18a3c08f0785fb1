# shopfront/repositories/order_repo.py
from datetime import datetime, timezone

from sqlalchemy import update
from sqlmodel import Session, select

from shopfront.models.order import Order, OrderItem
from shopfront.models.product import Product


class OrderRepository:
    """
    Data access layer for orders and order_items.

    NOTE:
      - No commits here; order creation and cancellation are multi-step
        transactions. The service is responsible for calling session.commit().
    """

    # ---- Orders ----

    def list_for_user(
        self,
        session: Session,
        user_id: int,
        skip: int = 0,
        limit: int = 50,
    ) -> list[Order]:
        stmt = (
            select(Order)
            .where(Order.user_id == user_id)
            .order_by(Order.id.desc())
            .offset(skip)
            .limit(limit)
        )
        return session.exec(stmt).all()

    def list_all(
        self,
        session: Session,
        skip: int = 0,
        limit: int = 50,
    ) -> list[Order]:
        stmt = select(Order).order_by(Order.id.desc()).offset(skip).limit(limit)
        return session.exec(stmt).all()

    def list_for_seller(
        self,
        session: Session,
        seller_id: int,
        skip: int = 0,
        limit: int = 50,
    ) -> list[Order]:
        """Orders that contain at least one product owned by the seller."""
        seller_order_ids = (
            select(OrderItem.order_id)
            .join(Product, Product.id == OrderItem.product_id)
            .where(Product.seller_id == seller_id)
        )
        stmt = (
            select(Order)
            .where(Order.id.in_(seller_order_ids))
            .order_by(Order.id.desc())
            .offset(skip)
            .limit(limit)
        )
        return session.exec(stmt).all()

    def get_by_id(self, session: Session, order_id: int) -> Order | None:
        return session.get(Order, order_id)

    def create_order(self, session: Session, order: Order) -> Order:
        """
        Insert an Order without committing, but ensure id is populated.
        """
        session.add(order)
        session.flush()  # Assign PK
        return order

    def compare_and_set_status(
        self,
        session: Session,
        order_id: int,
        current: str,
        new: str,
    ) -> bool:
        """
        Move an order from `current` to `new` only if nobody changed it since
        it was read. Returns False when the status no longer matches.
        """
        stmt = (
            update(Order)
            .where(Order.id == order_id, Order.status == current)
            .values(status=new, updated_at=datetime.now(timezone.utc))
            .execution_options(synchronize_session=False)
        )
        result = session.exec(stmt)  # type: ignore[call-overload]
        return result.rowcount == 1

    def mark_stock_released(self, session: Session, order_id: int) -> bool:
        """Flip stock_released once; False if it was already set."""
        stmt = (
            update(Order)
            .where(Order.id == order_id, Order.stock_released == False)  # noqa: E712
            .values(stock_released=True)
            .execution_options(synchronize_session=False)
        )
        result = session.exec(stmt)  # type: ignore[call-overload]
        return result.rowcount == 1

    # ---- Order items ----

    def list_items_for_order(
        self,
        session: Session,
        order_id: int,
    ) -> list[OrderItem]:
        stmt = (
            select(OrderItem)
            .where(OrderItem.order_id == order_id)
            .order_by(OrderItem.id)
        )
        return session.exec(stmt).all()

    def create_items(
        self,
        session: Session,
        items: list[OrderItem],
    ) -> list[OrderItem]:
        session.add_all(items)
        session.flush()
        return items
