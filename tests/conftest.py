import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session

from shopfront.core.auth import create_access_token
from shopfront.database import build_engine, create_db_and_tables, get_session
from shopfront.main import app
from shopfront.models.product import Product
from shopfront.models.user import User
from shopfront.repositories.cart_repo import CartRepository
from shopfront.repositories.order_repo import OrderRepository
from shopfront.repositories.product_repo import ProductRepository
from shopfront.repositories.stock_ledger import StockLedger
from shopfront.schemas.order import OrderCreate
from shopfront.services.cart_service import CartService
from shopfront.services.order_service import OrderService
from shopfront.services.order_status import OrderStatusMachine


@pytest.fixture
def engine(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'shop.db'}")
    create_db_and_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def users(session):
    accounts = {
        "alice": User(username="alice", email="alice@example.com", role="customer"),
        "bob": User(username="bob", email="bob@example.com", role="customer"),
        "seller": User(username="sam", email="sam@example.com", role="seller"),
        "admin": User(username="root", email="root@example.com", role="admin"),
    }
    session.add_all(accounts.values())
    session.commit()
    for user in accounts.values():
        session.refresh(user)
    return accounts


@pytest.fixture
def make_product(session, users):
    def _make(name="Widget", price=10.0, stock=5, category="gadgets", seller=None):
        product = Product(
            name=name,
            price=price,
            stock=stock,
            category=category,
            seller_id=(seller or users["seller"]).id,
        )
        session.add(product)
        session.commit()
        session.refresh(product)
        return product

    return _make


@pytest.fixture
def ledger():
    return StockLedger()


@pytest.fixture
def cart_service(ledger):
    return CartService(CartRepository(), ProductRepository(), ledger)


@pytest.fixture
def order_service(ledger):
    return OrderService(OrderRepository(), CartRepository(), ProductRepository(), ledger)


@pytest.fixture
def status_machine(ledger):
    return OrderStatusMachine(OrderRepository(), ledger)


@pytest.fixture
def checkout_payload():
    return OrderCreate(shipping_address="1 Main St", payment_method="COD")


@pytest.fixture
def client(engine):
    def _session_override():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = _session_override
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(users):
    def _headers(name):
        token = create_access_token(users[name])
        return {"Authorization": f"Bearer {token}"}

    return _headers
