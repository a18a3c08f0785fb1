# shopfront/services/order_status.py
import logging

from sqlmodel import Session

from shopfront.core.auth import STAFF_ROLES
from shopfront.core.errors import AuthorizationDenied, InvalidTransition, NotFound
from shopfront.models.order import Order
from shopfront.repositories.order_repo import OrderRepository
from shopfront.repositories.stock_ledger import StockLedger

logger = logging.getLogger(__name__)

# delivered and cancelled are terminal
ALLOWED_TRANSITIONS: dict[str, frozenset[str]] = {
    "pending": frozenset({"processing", "cancelled"}),
    "processing": frozenset({"shipped", "cancelled"}),
    "shipped": frozenset({"delivered"}),
    "delivered": frozenset(),
    "cancelled": frozenset(),
}


def can_transition(current: str, new: str) -> bool:
    return new in ALLOWED_TRANSITIONS.get(current, frozenset())


class OrderStatusMachine:
    """
    Seller/admin driven order lifecycle:

      pending    -> processing, cancelled
      processing -> shipped, cancelled
      shipped    -> delivered
      delivered  -> (terminal)
      cancelled  -> (terminal)

    Entering `cancelled` returns every item to stock exactly once. No other
    edge touches stock.
    """

    def __init__(self, order_repo: OrderRepository, ledger: StockLedger):
        self.order_repo = order_repo
        self.ledger = ledger

    def transition(
        self,
        session: Session,
        order_id: int,
        new_status: str,
        actor_role: str,
    ) -> Order:
        """
        Move order `order_id` to `new_status`.

        Raises:
            AuthorizationDenied(403): actor is not a seller or admin.
            NotFound(404): unknown order.
            InvalidTransition(400): edge not allowed, including a repeated
                status and a status changed by a concurrent request.
        """
        if actor_role not in STAFF_ROLES:
            raise AuthorizationDenied("Only sellers or admins can update order status")

        order = self.order_repo.get_by_id(session, order_id)
        if not order:
            raise NotFound("Order not found")

        current = order.status
        if not can_transition(current, new_status):
            raise InvalidTransition(current, new_status)

        try:
            if not self.order_repo.compare_and_set_status(
                session, order_id, current, new_status
            ):
                session.refresh(order)
                raise InvalidTransition(order.status, new_status)

            if new_status == "cancelled":
                self._restock(session, order_id)

            session.commit()
        except Exception:
            session.rollback()
            raise

        session.refresh(order)
        logger.info("Order %s: %s -> %s", order_id, current, new_status)
        return order

    def _restock(self, session: Session, order_id: int) -> None:
        """
        Release every order line back to the stock ledger.

        The stock_released flag is flipped first with a conditional update,
        so a second cancellation path can never release the same items again.
        """
        if not self.order_repo.mark_stock_released(session, order_id):
            raise InvalidTransition("cancelled", "cancelled")

        items = self.order_repo.list_items_for_order(session, order_id)
        for item in sorted(items, key=lambda it: it.product_id):
            self.ledger.release(session, item.product_id, item.quantity)

        logger.info("Order %s cancelled; %d lines returned to stock", order_id, len(items))
