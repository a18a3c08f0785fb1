# shopfront/services/cart_service.py
from sqlalchemy.orm.exc import StaleDataError
from sqlmodel import Session

from shopfront.core.errors import InsufficientStock, NotFound, ValidationError
from shopfront.models.cart import CartItem
from shopfront.models.product import Product
from shopfront.repositories.cart_repo import CartRepository
from shopfront.repositories.product_repo import ProductRepository
from shopfront.repositories.stock_ledger import StockLedger
from shopfront.schemas.cart import CartItemRead


class CartService:
    """
    Business logic for cart operations.

    Responsibilities:
      - validate product existence and active flag
      - check quantity <= current stock when a line changes
        (informational only; checkout re-checks through the stock ledger)
      - scope every item lookup to the caller's own cart
      - expose `snapshot`, the only cart view checkout trusts
    """

    def __init__(
        self,
        cart_repo: CartRepository,
        product_repo: ProductRepository,
        ledger: StockLedger,
    ):
        self.cart_repo = cart_repo
        self.product_repo = product_repo
        self.ledger = ledger

    # ---- internal helpers ----

    @staticmethod
    def _validate_quantity(quantity: int) -> None:
        if quantity < 1:
            raise ValidationError("Quantity must be at least 1")

    def _get_valid_product(self, session: Session, product_id: int) -> Product:
        product = self.product_repo.get_by_id(session, product_id)
        if not product or not product.is_active:
            raise NotFound("Product not found")
        return product

    def _check_stock(self, session: Session, product_id: int, quantity: int) -> None:
        available = self.ledger.current_stock(session, product_id)
        if quantity > available:
            raise InsufficientStock(product_id, available)

    def _get_own_item(self, session: Session, user_id: int, item_id: int) -> CartItem:
        cart = self.cart_repo.get_cart(session, user_id)
        item = self.cart_repo.get_item(session, item_id)
        if cart is None or item is None or item.cart_id != cart.id:
            raise NotFound("Item not found in cart")
        return item

    def _merge_into(self, session: Session, item: CartItem, quantity: int) -> CartItem:
        new_qty = item.quantity + quantity
        self._check_stock(session, item.product_id, new_qty)
        item.quantity = new_qty
        return self.cart_repo.save_item(session, item)

    @staticmethod
    def _to_read(item: CartItem, product: Product) -> CartItemRead:
        return CartItemRead(
            id=item.id,
            product_id=item.product_id,
            quantity=item.quantity,
            name=product.name,
            price=product.price,
            stock=product.stock,
            image_url=product.image_url,
            line_total=product.price * item.quantity,
        )

    # ---- public operations ----

    def snapshot(self, session: Session, user_id: int) -> list[CartItem]:
        """
        Committed cart lines for `user_id`, ordered by item id.
        Empty list when the user has no cart yet.
        """
        cart = self.cart_repo.get_cart(session, user_id)
        if cart is None:
            return []
        return self.cart_repo.list_items(session, cart.id)

    def list_items(self, session: Session, user_id: int) -> list[CartItemRead]:
        """
        Cart lines denormalized with product name, price and stock.
        """
        items = self.snapshot(session, user_id)
        products = self.product_repo.get_many(
            session, [it.product_id for it in items]
        )
        return [
            self._to_read(it, products[it.product_id])
            for it in items
            if it.product_id in products
        ]

    def add_item(
        self,
        session: Session,
        user_id: int,
        product_id: int,
        quantity: int,
    ) -> CartItemRead:
        """
        Add a product to the user's cart.

        Rules:
          - product must exist and be active
          - adding a product already in the cart merges into that line
          - merged quantity <= current stock
        """
        self._validate_quantity(quantity)
        product = self._get_valid_product(session, product_id)
        cart = self.cart_repo.get_or_create_cart(session, user_id)

        existing = self.cart_repo.get_item_for_product(session, cart.id, product_id)
        if existing is None:
            self._check_stock(session, product_id, quantity)
            item, created = self.cart_repo.insert_item(
                session,
                CartItem(cart_id=cart.id, product_id=product_id, quantity=quantity),
            )
            if not created:
                # a concurrent add created the line first
                item = self._merge_into(session, item, quantity)
        else:
            item = self._merge_into(session, existing, quantity)

        session.refresh(product)
        return self._to_read(item, product)

    def update_quantity(
        self,
        session: Session,
        user_id: int,
        item_id: int,
        quantity: int,
    ) -> CartItemRead:
        """
        Set the quantity of one of the caller's cart lines.

        quantity < 1 => 400 (use remove_item to drop a line).
        quantity > stock => 409.
        """
        self._validate_quantity(quantity)
        item = self._get_own_item(session, user_id, item_id)
        product = self._get_valid_product(session, item.product_id)
        self._check_stock(session, item.product_id, quantity)

        item.quantity = quantity
        try:
            item = self.cart_repo.save_item(session, item)
        except StaleDataError:
            # removed by a concurrent request
            session.rollback()
            raise NotFound("Item not found in cart")
        session.refresh(product)
        return self._to_read(item, product)

    def remove_item(
        self,
        session: Session,
        user_id: int,
        item_id: int,
    ) -> None:
        item = self._get_own_item(session, user_id, item_id)
        if not self.cart_repo.delete_item(session, item.id):
            raise NotFound("Item not found in cart")

    def clear(self, session: Session, user_id: int) -> None:
        """Remove every line; the cart row itself is kept."""
        self.discard_lines(session, self.snapshot(session, user_id))
        session.commit()

    def discard_lines(self, session: Session, lines: list[CartItem]) -> int:
        """
        Delete exactly `lines` without committing.

        Lines added after `lines` was read stay in the cart.
        """
        return self.cart_repo.delete_items(session, [it.id for it in lines])
