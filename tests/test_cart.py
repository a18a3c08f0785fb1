"""Cart store: informational stock checks, ownership and snapshot."""
import pytest
from sqlmodel import Session

from shopfront.core.errors import InsufficientStock, NotFound, ValidationError
from shopfront.repositories.cart_repo import CartRepository
from shopfront.repositories.product_repo import ProductRepository
from shopfront.services.cart_service import CartService


def test_first_add_creates_cart_lazily(session, cart_service, users, make_product):
    alice = users["alice"]
    product = make_product(name="Lamp", price=25.0, stock=4)
    assert CartRepository().get_cart(session, alice.id) is None

    line = cart_service.add_item(session, alice.id, product.id, 2)

    assert CartRepository().get_cart(session, alice.id) is not None
    assert line.product_id == product.id
    assert line.quantity == 2
    assert line.name == "Lamp"
    assert line.price == 25.0
    assert line.stock == 4
    assert line.line_total == 50.0


def test_adding_same_product_merges_lines(session, cart_service, users, make_product):
    alice = users["alice"]
    product = make_product(stock=5)

    first = cart_service.add_item(session, alice.id, product.id, 1)
    second = cart_service.add_item(session, alice.id, product.id, 2)

    assert second.id == first.id
    assert second.quantity == 3
    assert len(cart_service.snapshot(session, alice.id)) == 1


def test_add_beyond_stock_is_rejected(session, cart_service, users, make_product):
    alice = users["alice"]
    product = make_product(stock=3)
    cart_service.add_item(session, alice.id, product.id, 2)

    with pytest.raises(InsufficientStock) as exc_info:
        cart_service.add_item(session, alice.id, product.id, 2)

    assert exc_info.value.available == 3
    assert cart_service.snapshot(session, alice.id)[0].quantity == 2


def test_add_does_not_reserve_stock(session, cart_service, ledger, users, make_product):
    product = make_product(stock=3)

    cart_service.add_item(session, users["alice"].id, product.id, 3)

    assert ledger.current_stock(session, product.id) == 3


def test_add_inactive_product_is_not_found(session, cart_service, users, make_product):
    product = make_product()
    product.is_active = False
    session.add(product)
    session.commit()

    with pytest.raises(NotFound):
        cart_service.add_item(session, users["alice"].id, product.id, 1)


def test_update_quantity(session, cart_service, users, make_product):
    alice = users["alice"]
    product = make_product(price=4.0, stock=10)
    line = cart_service.add_item(session, alice.id, product.id, 1)

    updated = cart_service.update_quantity(session, alice.id, line.id, 7)

    assert updated.quantity == 7
    assert updated.line_total == 28.0


@pytest.mark.parametrize("quantity", [0, -1])
def test_update_below_one_is_rejected(session, cart_service, users, make_product, quantity):
    alice = users["alice"]
    product = make_product(stock=10)
    line = cart_service.add_item(session, alice.id, product.id, 2)

    with pytest.raises(ValidationError):
        cart_service.update_quantity(session, alice.id, line.id, quantity)

    assert cart_service.snapshot(session, alice.id)[0].quantity == 2


def test_update_beyond_stock_is_rejected(session, cart_service, users, make_product):
    alice = users["alice"]
    product = make_product(stock=2)
    line = cart_service.add_item(session, alice.id, product.id, 1)

    with pytest.raises(InsufficientStock):
        cart_service.update_quantity(session, alice.id, line.id, 3)


def test_cannot_touch_another_users_item(session, cart_service, users, make_product):
    product = make_product(stock=5)
    line = cart_service.add_item(session, users["alice"].id, product.id, 1)
    bob_id = users["bob"].id

    with pytest.raises(NotFound):
        cart_service.update_quantity(session, bob_id, line.id, 2)
    with pytest.raises(NotFound):
        cart_service.remove_item(session, bob_id, line.id)

    assert len(cart_service.snapshot(session, users["alice"].id)) == 1


def test_remove_item_twice(session, cart_service, users, make_product):
    alice = users["alice"]
    product = make_product(stock=5)
    line = cart_service.add_item(session, alice.id, product.id, 1)

    cart_service.remove_item(session, alice.id, line.id)
    assert cart_service.snapshot(session, alice.id) == []

    with pytest.raises(NotFound):
        cart_service.remove_item(session, alice.id, line.id)


def test_clear_keeps_cart_row(session, cart_service, users, make_product):
    alice = users["alice"]
    cart_service.add_item(session, alice.id, make_product(name="A").id, 1)
    cart_service.add_item(session, alice.id, make_product(name="B").id, 1)

    cart_service.clear(session, alice.id)

    assert cart_service.snapshot(session, alice.id) == []
    assert CartRepository().get_cart(session, alice.id) is not None


def test_snapshot_is_ordered_and_list_items_denormalizes(session, cart_service, users, make_product):
    alice = users["alice"]
    lamp = make_product(name="Lamp", price=25.0)
    desk = make_product(name="Desk", price=120.0)
    cart_service.add_item(session, alice.id, desk.id, 1)
    cart_service.add_item(session, alice.id, lamp.id, 2)

    snapshot = cart_service.snapshot(session, alice.id)
    listed = cart_service.list_items(session, alice.id)

    assert [it.product_id for it in snapshot] == [desk.id, lamp.id]
    assert [(it.name, it.price, it.quantity) for it in listed] == [
        ("Desk", 120.0, 1),
        ("Lamp", 25.0, 2),
    ]


def test_snapshot_without_cart_is_empty(session, cart_service, users):
    assert cart_service.snapshot(session, users["bob"].id) == []


@pytest.fixture
def racing_add(engine, cart_service, ledger, monkeypatch):
    """Commit an add of the same product from another session right after
    `cart_service` finds no existing line."""
    other_service = CartService(CartRepository(), ProductRepository(), ledger)
    find_line = cart_service.cart_repo.get_item_for_product
    pending = []

    def find_line_then_race(session, cart_id, product_id):
        found = find_line(session, cart_id, product_id)
        if pending:
            user_id, quantity = pending.pop()
            with Session(engine) as other:
                other_service.add_item(other, user_id, product_id, quantity)
        return found

    monkeypatch.setattr(cart_service.cart_repo, "get_item_for_product", find_line_then_race)

    def _arm(user_id, quantity):
        pending.append((user_id, quantity))

    return _arm


def test_concurrent_adds_merge_into_one_line(session, cart_service, racing_add, users, make_product):
    alice_id = users["alice"].id
    product_id = make_product(stock=5).id
    racing_add(alice_id, 1)

    line = cart_service.add_item(session, alice_id, product_id, 2)

    assert line.quantity == 3
    lines = [it for it in cart_service.snapshot(session, alice_id) if it.product_id == product_id]
    assert [(it.id, it.quantity) for it in lines] == [(line.id, 3)]


def test_concurrent_adds_check_the_combined_quantity(session, cart_service, racing_add, users, make_product):
    alice_id = users["alice"].id
    product_id = make_product(stock=3).id
    racing_add(alice_id, 2)

    with pytest.raises(InsufficientStock) as exc_info:
        cart_service.add_item(session, alice_id, product_id, 2)

    assert exc_info.value.available == 3
    lines = [it for it in cart_service.snapshot(session, alice_id) if it.product_id == product_id]
    assert [it.quantity for it in lines] == [2]
