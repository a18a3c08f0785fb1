# shopfront/repositories/cart_repo.py
from datetime import datetime, timezone

from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from shopfront.models.cart import Cart, CartItem


class CartRepository:
    """
    Data access layer for carts and cart_items.

    Single-row edits commit immediately (cart edits are last-write-wins).
    `delete_items` does not commit: checkout removes the ordered lines
    inside its own transaction.
    """

    # ---- Carts ----

    def get_cart(self, session: Session, user_id: int) -> Cart | None:
        stmt = select(Cart).where(Cart.user_id == user_id)
        return session.exec(stmt).first()

    def get_or_create_cart(self, session: Session, user_id: int) -> Cart:
        """
        Return the user's cart, creating it on first use.

        Two concurrent first adds race on the unique user_id; the loser
        rolls back and reads the winner's row.
        """
        cart = self.get_cart(session, user_id)
        if cart is not None:
            return cart

        cart = Cart(user_id=user_id)
        session.add(cart)
        try:
            session.commit()
        except IntegrityError:
            session.rollback()
            existing = self.get_cart(session, user_id)
            if existing is None:
                raise
            return existing
        session.refresh(cart)
        return cart

    # ---- Items ----

    def list_items(self, session: Session, cart_id: int) -> list[CartItem]:
        stmt = (
            select(CartItem)
            .where(CartItem.cart_id == cart_id)
            .order_by(CartItem.id)
        )
        return session.exec(stmt).all()

    def get_item(self, session: Session, item_id: int) -> CartItem | None:
        return session.get(CartItem, item_id)

    def get_item_for_product(
        self, session: Session, cart_id: int, product_id: int
    ) -> CartItem | None:
        stmt = select(CartItem).where(
            CartItem.cart_id == cart_id, CartItem.product_id == product_id
        )
        return session.exec(stmt).first()

    def insert_item(self, session: Session, item: CartItem) -> tuple[CartItem, bool]:
        """
        Insert a new line; returns (row, created).

        A concurrent add of the same product trips the unique
        (cart_id, product_id) constraint; the loser rolls back and gets
        the winner's row with created=False.
        """
        cart_id, product_id = item.cart_id, item.product_id
        session.add(item)
        try:
            session.commit()
        except IntegrityError:
            session.rollback()
            existing = self.get_item_for_product(session, cart_id, product_id)
            if existing is None:
                raise
            return existing, False
        session.refresh(item)
        return item, True

    def save_item(self, session: Session, item: CartItem) -> CartItem:
        item.updated_at = datetime.now(timezone.utc)
        session.add(item)
        session.commit()
        session.refresh(item)
        return item

    def delete_item(self, session: Session, item_id: int) -> bool:
        """Delete one line; False if it was already gone."""
        stmt = delete(CartItem).where(CartItem.id == item_id)
        result = session.exec(stmt)  # type: ignore[call-overload]
        session.commit()
        return result.rowcount == 1

    def delete_items(self, session: Session, item_ids: list[int]) -> int:
        """Remove exactly these lines without committing; returns row count."""
        if not item_ids:
            return 0
        stmt = delete(CartItem).where(CartItem.id.in_(item_ids))
        result = session.exec(stmt)  # type: ignore[call-overload]
        return result.rowcount
