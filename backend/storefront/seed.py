"""
Demo data: a handful of users and PC parts.

Run once against an empty database:

    storefront-seed            (or: python -m storefront.seed)

The same catalog backs the in-memory "demo" catalog source.
"""

import logging

from sqlalchemy.orm import Session

from storefront import crud, models, schemas
from storefront.database import Base, SessionLocal, engine

logger = logging.getLogger(__name__)

DEMO_USERS = [
    {"email": "john.doe@example.com", "password": "demo-password", "first_name": "John", "last_name": "Doe", "role": "customer"},
    {"email": "admin@example.com", "password": "admin-password", "first_name": "Admin", "last_name": "User", "role": "admin"},
]

DEMO_PRODUCTS = [
    {
        "name": "NVIDIA GeForce RTX 4090",
        "brand": "NVIDIA",
        "description": "The ultimate gaming GPU with uncompromising performance",
        "price": 1599.99,
        "stock_quantity": 15,
        "low_stock_threshold": 5,
        "specs": {"category": "gpu", "chipset": "AD102", "memory": 24, "memory_type": "GDDR6X"},
    },
    {
        "name": "AMD Ryzen 9 7950X",
        "brand": "AMD",
        "description": "16-core, 32-thread powerhouse for gaming and content creation",
        "price": 699.99,
        "stock_quantity": 8,
        "low_stock_threshold": 10,
        "specs": {"category": "cpu", "socket": "AM5", "cores": 16, "threads": 32, "base_clock": 4.5, "boost_clock": 5.7},
    },
    {
        "name": "Corsair Dominator Platinum RGB 32GB",
        "brand": "Corsair",
        "description": "Premium DDR5 memory with stunning RGB lighting",
        "price": 299.99,
        "stock_quantity": 25,
        "low_stock_threshold": 10,
        "specs": {"category": "ram", "capacity": 32, "speed": 6000, "type": "DDR5"},
    },
    {
        "name": "Samsung 990 PRO 2TB",
        "brand": "Samsung",
        "description": "Blazing fast NVMe SSD for ultimate performance",
        "price": 199.99,
        "stock_quantity": 30,
        "low_stock_threshold": 15,
        "specs": {"category": "ssd", "capacity": 2000, "interface": "NVMe", "read_speed": 7000, "write_speed": 6900},
    },
    {
        "name": "ASUS ROG Strix X670E-E",
        "brand": "ASUS",
        "description": "Feature-packed AM5 board with PCIe 5.0",
        "price": 479.99,
        "stock_quantity": 0,
        "low_stock_threshold": 3,
        "specs": {"category": "motherboard", "socket": "AM5", "chipset": "X670E", "form_factor": "ATX"},
    },
]


def seed_demo_data(db: Session) -> bool:
    """
    Insert demo users and products. Does nothing if any product exists.

    Returns:
        True if data was inserted
    """
    if db.query(models.Product).first() is not None:
        logger.info("Products already present, skipping seed")
        return False

    for user in DEMO_USERS:
        if db.query(models.User).filter(models.User.email == user["email"]).first() is None:
            crud.create_user(db, schemas.UserCreate(**user))

    for product in DEMO_PRODUCTS:
        crud.create_product(db, schemas.ProductCreate(**product))

    logger.info("Seeded %s users and %s products", len(DEMO_USERS), len(DEMO_PRODUCTS))
    return True


def main():
    logging.basicConfig(level=logging.INFO)
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        seed_demo_data(db)
    finally:
        db.close()


if __name__ == "__main__":
    main()
