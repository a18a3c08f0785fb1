# shopfront/services/order_service.py
import logging

from sqlmodel import Session

from shopfront.core.auth import STAFF_ROLES
from shopfront.core.errors import (
    AuthorizationDenied,
    EmptyCart,
    InsufficientStock,
    NotFound,
)
from shopfront.models.order import Order, OrderItem
from shopfront.models.user import User
from shopfront.repositories.cart_repo import CartRepository
from shopfront.repositories.order_repo import OrderRepository
from shopfront.repositories.product_repo import ProductRepository
from shopfront.repositories.stock_ledger import StockLedger
from shopfront.schemas.order import OrderCreate, OrderItemRead, OrderRead
from shopfront.services.cart_service import CartService

logger = logging.getLogger(__name__)


class OrderService:
    """
    Business logic for orders.

    Responsibilities:
      - Create order from the server-side cart snapshot (all-or-nothing)
      - Reserve stock through the stock ledger
      - Compute totals from current product prices
      - Remove the ordered cart lines after success
      - Order reads scoped by role
    """

    def __init__(
        self,
        order_repo: OrderRepository,
        cart_repo: CartRepository,
        product_repo: ProductRepository,
        ledger: StockLedger,
    ):
        self.order_repo = order_repo
        self.cart_repo = cart_repo
        self.product_repo = product_repo
        self.ledger = ledger
        self.carts = CartService(cart_repo, product_repo, ledger)

    # -------- Checkout --------

    def place_order(
        self,
        session: Session,
        user_id: int,
        payload: OrderCreate,
    ) -> OrderRead:
        """
        Convert the current user's cart into an Order.

        Steps:
          1. Take the cart snapshot; error if empty.
          2. Load current product rows; missing/inactive => 0 available.
          3. Reserve stock line by line in ascending product id order.
          4. Compute total_amount from current prices.
          5. Create Order row (status='pending') and its OrderItem rows.
          6. Delete the snapshot lines (the cart row and any line added
             meanwhile stay).
          7. Commit once.

        Any failure rolls the whole transaction back, which also undoes
        reservations already applied. `payload.items` is never read.
        """
        # 1) Snapshot
        lines = self.carts.snapshot(session, user_id)
        if not lines:
            raise EmptyCart("Cart is empty")

        # 2) Current product rows
        products = self.product_repo.get_many(
            session, [ln.product_id for ln in lines]
        )

        try:
            # 3) Reservations, fixed lock order
            captured: list[OrderItem] = []
            total_amount = 0.0
            for ln in sorted(lines, key=lambda it: it.product_id):
                product = products.get(ln.product_id)
                if product is None or not product.is_active:
                    raise InsufficientStock(ln.product_id, 0)

                self.ledger.reserve(session, ln.product_id, ln.quantity)

                # 4) Server-side pricing
                total_amount += product.price * ln.quantity
                captured.append(
                    OrderItem(
                        product_id=ln.product_id,
                        product_name=product.name,
                        quantity=ln.quantity,
                        price=product.price,
                    )
                )

            # 5) Order + items
            order = self.order_repo.create_order(
                session,
                Order(
                    user_id=user_id,
                    status="pending",
                    total_amount=total_amount,
                    shipping_address=payload.shipping_address,
                    payment_method=payload.payment_method,
                    note=payload.note,
                ),
            )
            for item in captured:
                item.order_id = order.id
            self.order_repo.create_items(session, captured)

            # 6) Drop the ordered lines only
            self.carts.discard_lines(session, lines)

            # 7) Commit
            session.commit()
        except InsufficientStock as exc:
            session.rollback()
            logger.info(
                "Checkout rejected for user %s: product %s has %s available",
                user_id,
                exc.product_id,
                exc.available,
            )
            raise
        except Exception:
            session.rollback()
            logger.exception("Checkout failed for user %s; rolled back", user_id)
            raise

        logger.info(
            "Order %s placed by user %s (%d lines, total %.2f)",
            order.id,
            user_id,
            len(captured),
            order.total_amount,
        )
        return self._build_order_read(order, captured)

    # -------- Reads --------

    def list_orders(
        self,
        session: Session,
        user: User,
        skip: int = 0,
        limit: int = 50,
    ) -> list[OrderRead]:
        """
        Customers see their own orders; sellers and admins see all.
        """
        if user.role in STAFF_ROLES:
            orders = self.order_repo.list_all(session, skip, limit)
        else:
            orders = self.order_repo.list_for_user(session, user.id, skip, limit)
        return [self._load_order_read(session, o) for o in orders]

    def list_seller_orders(
        self,
        session: Session,
        seller: User,
        skip: int = 0,
        limit: int = 50,
    ) -> list[OrderRead]:
        """Orders containing at least one of the seller's products."""
        orders = self.order_repo.list_for_seller(session, seller.id, skip, limit)
        return [self._load_order_read(session, o) for o in orders]

    def get_order(
        self,
        session: Session,
        user: User,
        order_id: int,
    ) -> OrderRead:
        """
        Get a single order, including items.

        - 404 if order not found.
        - 403 if a customer asks for someone else's order.
        """
        order = self.order_repo.get_by_id(session, order_id)
        if not order:
            raise NotFound("Order not found")
        if order.user_id != user.id and user.role not in STAFF_ROLES:
            raise AuthorizationDenied("You cannot access this order")
        return self._load_order_read(session, order)

    # -------- Helper DTO builder --------

    def _load_order_read(self, session: Session, order: Order) -> OrderRead:
        items = self.order_repo.list_items_for_order(session, order.id)
        return self._build_order_read(order, items)

    @staticmethod
    def _build_order_read(order: Order, items: list[OrderItem]) -> OrderRead:
        return OrderRead(
            id=order.id,
            user_id=order.user_id,
            status=order.status,
            total_amount=order.total_amount,
            shipping_address=order.shipping_address,
            payment_method=order.payment_method,
            note=order.note,
            created_at=order.created_at,
            updated_at=order.updated_at,
            items=[
                OrderItemRead(
                    id=it.id,
                    product_id=it.product_id,
                    name=it.product_name,
                    quantity=it.quantity,
                    price=it.price,
                    line_total=it.price * it.quantity,
                )
                for it in items
            ],
        )
