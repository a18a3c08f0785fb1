# shopfront/seed.py
import logging

from sqlmodel import Session

from shopfront.models.product import Product
from shopfront.models.user import User
from shopfront.repositories.user_repo import UserRepository

logger = logging.getLogger(__name__)

DEMO_USERS = [
    {
        "username": "customer",
        "email": "customer@example.com",
        "full_name": "Demo Customer",
        "role": "customer",
    },
    {
        "username": "seller",
        "email": "seller@example.com",
        "full_name": "Demo Seller",
        "role": "seller",
    },
]

DEMO_PRODUCTS = [
    {
        "name": "iPhone 15 Pro Max",
        "description": "Flagship Apple phone with the A17 Pro chip",
        "price": 1299.0,
        "image_url": "/images/iphone15promax.jpg",
        "category": "smartphones",
        "stock": 50,
    },
    {
        "name": "Samsung Galaxy S24 Ultra",
        "description": "Premium Android phone with S Pen",
        "price": 1199.0,
        "image_url": "/images/s24ultra.jpg",
        "category": "smartphones",
        "stock": 45,
    },
    {
        "name": "Xiaomi 14 Ultra",
        "description": "Camera phone co-engineered with Leica",
        "price": 1099.0,
        "image_url": "/images/xiaomi14.jpg",
        "category": "smartphones",
        "stock": 30,
    },
    {
        "name": "Apple Watch Series 9",
        "description": "Smartwatch with health tracking",
        "price": 399.0,
        "image_url": "/images/applewatchs9.jpg",
        "category": "wearables",
        "stock": 60,
    },
]


def seed_demo_data(session: Session) -> bool:
    """
    Insert the demo accounts and catalog into an empty database.

    Returns:
        True if data was inserted, False if users already existed.
    """
    if UserRepository().count(session) > 0:
        return False

    users = [User(**data) for data in DEMO_USERS]
    session.add_all(users)
    session.flush()

    seller = next(u for u in users if u.role == "seller")
    session.add_all(Product(seller_id=seller.id, **data) for data in DEMO_PRODUCTS)
    session.commit()

    logger.info(
        "Seeded %d demo users and %d products", len(DEMO_USERS), len(DEMO_PRODUCTS)
    )
    return True
