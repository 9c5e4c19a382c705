"""
Database Models
===============

Defines the database schema using SQLAlchemy ORM.

Tables:
- users: Customers and admins
- products: PC components for sale (one wide row type for every category)
- product_images: Gallery images for a product
- cart_items: Products a user intends to buy
- orders: Customer orders
- order_items: Products in each order (with price snapshot)
- wishlist_items: Products a user saved for later
- reviews: Ratings left by users who bought the product

Money and clock speeds are stored as fixed-point NUMERIC columns; SQLAlchemy
hands them back as Decimal and the API schemas turn them into floats.
"""

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from storefront.database import Base

# Category -> attribute names. Each attribute lives in a column named
# "<category>_<attribute>" on the products table.
CATEGORY_ATTRIBUTES = {
    "gpu": ("chipset", "memory", "memory_type"),
    "cpu": ("socket", "cores", "threads", "base_clock", "boost_clock"),
    "motherboard": ("socket", "chipset", "form_factor"),
    "ram": ("capacity", "speed", "type"),
    "ssd": ("capacity", "interface", "read_speed", "write_speed"),
}

SPEC_COLUMNS = tuple(
    f"{category}_{attribute}"
    for category, attributes in CATEGORY_ATTRIBUTES.items()
    for attribute in attributes
)


# ============================================================================
# USER MODEL
# ============================================================================

class User(Base):
    """
    Shop accounts.

    Attributes:
        email: Unique login address
        password_hash: Salted hash, never returned by the API
        role: "customer" or "admin"
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    role = Column(String(20), nullable=False, default="customer")

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    cart_items = relationship("CartItem", back_populates="user")
    orders = relationship("Order", back_populates="user")
    wishlist_items = relationship("WishlistItem", back_populates="user")
    reviews = relationship("Review", back_populates="user")


# ============================================================================
# PRODUCT MODEL
# ============================================================================

class Product(Base):
    """
    PC components available for purchase.

    Only the columns prefixed with the product's category are expected to
    be populated; the crud layer clears the rest on every write. The
    ``specs`` property gives the populated block as a dict.

    Attributes:
        price: Price in USD, NUMERIC(10, 2)
        stock_quantity: Units available
        low_stock_threshold: At or below this stock the product needs restocking
        is_active: False once soft-deleted
    """
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)

    name = Column(String(200), nullable=False, index=True)
    brand = Column(String(100), nullable=False, index=True)
    category = Column(String(20), nullable=False, index=True)
    description = Column(Text, nullable=True)
    price = Column(Numeric(10, 2), nullable=False)
    stock_quantity = Column(Integer, nullable=False)
    low_stock_threshold = Column(Integer, nullable=False, default=10)
    is_active = Column(Boolean, nullable=False, default=True)

    # GPU
    gpu_chipset = Column(String(100), nullable=True)
    gpu_memory = Column(Integer, nullable=True)
    gpu_memory_type = Column(String(50), nullable=True)

    # CPU
    cpu_socket = Column(String(50), nullable=True)
    cpu_cores = Column(Integer, nullable=True)
    cpu_threads = Column(Integer, nullable=True)
    cpu_base_clock = Column(Numeric(5, 2), nullable=True)
    cpu_boost_clock = Column(Numeric(5, 2), nullable=True)

    # Motherboard
    motherboard_socket = Column(String(50), nullable=True)
    motherboard_chipset = Column(String(50), nullable=True)
    motherboard_form_factor = Column(String(50), nullable=True)

    # RAM
    ram_capacity = Column(Integer, nullable=True)
    ram_speed = Column(Integer, nullable=True)
    ram_type = Column(String(10), nullable=True)

    # SSD
    ssd_capacity = Column(Integer, nullable=True)
    ssd_interface = Column(String(10), nullable=True)
    ssd_read_speed = Column(Integer, nullable=True)
    ssd_write_speed = Column(Integer, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    images = relationship("ProductImage", back_populates="product", order_by="ProductImage.display_order")
    order_items = relationship("OrderItem", back_populates="product")

    @property
    def specs(self) -> dict:
        attributes = CATEGORY_ATTRIBUTES.get(self.category, ())
        specs = {"category": self.category}
        for attribute in attributes:
            specs[attribute] = getattr(self, f"{self.category}_{attribute}")
        return specs


# ============================================================================
# PRODUCT IMAGE MODEL
# ============================================================================

class ProductImage(Base):
    __tablename__ = "product_images"

    id = Column(Integer, primary_key=True, index=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False, index=True)
    image_url = Column(Text, nullable=False)
    alt_text = Column(Text, nullable=True)
    # Sort key only; gaps are allowed and duplicates are not rejected
    display_order = Column(Integer, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    product = relationship("Product", back_populates="images")


# ============================================================================
# CART ITEM MODEL
# ============================================================================

class CartItem(Base):
    """
    One row per (user, product). Adding the same product again increases
    quantity on the existing row.
    """
    __tablename__ = "cart_items"
    __table_args__ = (
        UniqueConstraint("user_id", "product_id", name="uq_cart_items_user_product"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False)
    quantity = Column(Integer, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    user = relationship("User", back_populates="cart_items")
    product = relationship("Product")


# ============================================================================
# ORDER MODEL
# ============================================================================

class Order(Base):
    """
    Customer orders.

    Attributes:
        status: pending, processing, shipped, delivered or cancelled
        total_amount: Caller supplied total, NUMERIC(10, 2)
        shipping_address / billing_address: Free text
    """
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    status = Column(String(20), nullable=False, default="pending")
    total_amount = Column(Numeric(10, 2), nullable=False)
    shipping_address = Column(Text, nullable=False)
    billing_address = Column(Text, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    user = relationship("User", back_populates="orders")
    items = relationship("OrderItem", back_populates="order", cascade="all, delete-orphan")


# ============================================================================
# ORDER ITEM MODEL (Junction Table)
# ============================================================================

class OrderItem(Base):
    """
    Individual items within an order.

    price_at_time is the unit price when the order was placed; it does not
    follow later catalog price changes.
    """
    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False, index=True)
    quantity = Column(Integer, nullable=False)
    price_at_time = Column(Numeric(10, 2), nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    order = relationship("Order", back_populates="items")
    product = relationship("Product", back_populates="order_items")


# ============================================================================
# WISHLIST ITEM MODEL
# ============================================================================

class WishlistItem(Base):
    __tablename__ = "wishlist_items"
    __table_args__ = (
        UniqueConstraint("user_id", "product_id", name="uq_wishlist_items_user_product"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    user = relationship("User", back_populates="wishlist_items")
    product = relationship("Product")


# ============================================================================
# REVIEW MODEL
# ============================================================================

class Review(Base):
    """
    A 1-5 star rating. At most one per (user, product), and only after the
    user has ordered the product.
    """
    __tablename__ = "reviews"
    __table_args__ = (
        UniqueConstraint("user_id", "product_id", name="uq_reviews_user_product"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False, index=True)
    rating = Column(Integer, nullable=False)
    comment = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    user = relationship("User", back_populates="reviews")
    product = relationship("Product")


# ============================================================================
# RELATIONSHIP EXPLANATION
# ============================================================================
#
# User ──< CartItem >── Product
# User ──< Order ──< OrderItem >── Product
# User ──< WishlistItem >── Product
# User ──< Review >── Product
# Product ──< ProductImage
#
# A product that appears in any OrderItem is never hard-deleted; it is
# flagged is_active=False so past orders keep pointing at it.
#
# ============================================================================
