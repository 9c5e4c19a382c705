import os

# Must be set before storefront.config is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["CATALOG_SOURCE"] = "database"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from storefront import crud, models, schemas  # noqa: F401  (registers tables)
from storefront.database import Base, build_engine, get_db
from storefront.main import app


@pytest.fixture
def engine():
    engine = build_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db):
    counter = {"n": 0}

    def _make_user(**overrides):
        counter["n"] += 1
        data = {
            "email": f"user{counter['n']}@example.com",
            "password": "password123",
            "first_name": "Test",
            "last_name": "User",
        }
        data.update(overrides)
        return crud.create_user(db, schemas.UserCreate(**data))

    return _make_user


@pytest.fixture
def make_product(db):
    def _make_product(**overrides):
        data = {
            "name": "Test GPU",
            "brand": "TestBrand",
            "description": "A test GPU",
            "price": 299.99,
            "stock_quantity": 10,
            "low_stock_threshold": 2,
            "specs": {"category": "gpu", "chipset": "AD104", "memory": 12, "memory_type": "GDDR6X"},
        }
        data.update(overrides)
        return crud.create_product(db, schemas.ProductCreate(**data))

    return _make_product


@pytest.fixture
def make_purchase(db):
    """Create an order for the user containing one unit of the product."""
    def _make_purchase(user_id, product_id, price=299.99):
        order = crud.create_order(db, schemas.OrderCreate(
            user_id=user_id,
            total_amount=price,
            shipping_address="1 Main St",
            billing_address="1 Main St",
        ))
        crud.create_order_item(db, schemas.OrderItemCreate(
            order_id=order.id,
            product_id=product_id,
            quantity=1,
            price_at_time=price,
        ))
        return order

    return _make_purchase
