"""
CRUD Operations
===============

Business logic layer for database operations.

Every function takes the request's Session as its first argument and
either returns ORM objects / plain values or raises a StoreError subclass
(see storefront.errors) when a precondition fails. Nothing here knows about
HTTP.

"Not found" is reported two ways, matching what callers have always seen:
lookups and updates return None, while operations that need a referenced
row to exist (wishlist, reviews, images, cart adds) raise NotFoundError.
"""

import logging
from decimal import Decimal
from typing import Dict, List, Optional, Union

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy.sql import func
from werkzeug.security import generate_password_hash

from storefront import models, schemas
from storefront.config import settings
from storefront.errors import (
    DuplicateEntryError,
    InactiveProductError,
    InsufficientStockError,
    InvalidTransitionError,
    NotEligibleError,
    NotFoundError,
)

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")


def _fixed(value: Optional[float]) -> Optional[Decimal]:
    """Convert an API float into the two-decimal fixed-point value we store."""
    if value is None:
        return None
    return Decimal(str(value)).quantize(CENTS)


def _commit_or_rollback(db: Session) -> None:
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise


# ============================================================================
# USER CRUD OPERATIONS
# ============================================================================

def get_user(db: Session, user_id: int) -> Optional[models.User]:
    """
    Retrieve a single user by ID.

    Returns:
        User object if found, None otherwise
    """
    return db.query(models.User).filter(models.User.id == user_id).first()


def create_user(db: Session, user: schemas.UserCreate) -> models.User:
    """
    Create a user account with a salted password hash.

    Raises:
        DuplicateEntryError: the email is already registered
    """
    existing = db.query(models.User).filter(models.User.email == user.email).first()
    if existing is not None:
        logger.warning("create_user rejected: email %s already registered", user.email)
        raise DuplicateEntryError(f"Email {user.email} is already registered")

    db_user = models.User(
        email=user.email,
        password_hash=generate_password_hash(user.password),
        first_name=user.first_name,
        last_name=user.last_name,
        role=user.role.value,
    )
    db.add(db_user)

    try:
        db.commit()
    except IntegrityError:
        # Lost a race with a concurrent signup for the same address
        db.rollback()
        raise DuplicateEntryError(f"Email {user.email} is already registered")

    db.refresh(db_user)
    return db_user


# ============================================================================
# PRODUCT CRUD OPERATIONS
# ============================================================================

def _spec_values(specs) -> Dict[str, object]:
    """
    Column values for a specs block.

    Every category column is included: the chosen category's attributes
    get their values, all other categories' columns are set to None.
    """
    values = {column: None for column in models.SPEC_COLUMNS}
    category = specs.category
    for attribute, value in specs.model_dump(mode="json", exclude={"category"}).items():
        values[f"{category}_{attribute}"] = value

    values["cpu_base_clock"] = _fixed(values["cpu_base_clock"])
    values["cpu_boost_clock"] = _fixed(values["cpu_boost_clock"])
    return values


def get_product(db: Session, product_id: int) -> Optional[models.Product]:
    """
    Retrieve a single product by ID.

    Returns:
        Product object if found, None otherwise
    """
    return db.query(models.Product).filter(models.Product.id == product_id).first()


def get_products(
    db: Session,
    filters: Optional[schemas.ProductFilters] = None,
) -> List[models.Product]:
    """
    Retrieve products matching every filter that is set.

    Args:
        db: Database session
        filters: Optional ProductFilters; unset fields are ignored

    Returns:
        List of Product objects (unsorted, unpaginated). Soft-deleted
        products are included; filter on is_active client-side if needed.

    SQL generated (example: category + max_price):
        SELECT * FROM products WHERE category = ? AND price <= ?
    """
    query = db.query(models.Product)
    if filters is None:
        return query.all()

    if filters.category is not None:
        query = query.filter(models.Product.category == filters.category.value)
    if filters.brand:
        query = query.filter(models.Product.brand == filters.brand)
    if filters.min_price is not None:
        query = query.filter(models.Product.price >= filters.min_price)
    if filters.max_price is not None:
        query = query.filter(models.Product.price <= filters.max_price)
    if filters.gpu_chipset:
        query = query.filter(models.Product.gpu_chipset == filters.gpu_chipset)
    if filters.cpu_socket:
        query = query.filter(models.Product.cpu_socket == filters.cpu_socket)
    if filters.ram_capacity is not None:
        query = query.filter(models.Product.ram_capacity == filters.ram_capacity)
    if filters.ram_type is not None:
        query = query.filter(models.Product.ram_type == filters.ram_type.value)
    if filters.ssd_interface is not None:
        query = query.filter(models.Product.ssd_interface == filters.ssd_interface.value)
    if filters.motherboard_form_factor:
        query = query.filter(models.Product.motherboard_form_factor == filters.motherboard_form_factor)
    if filters.in_stock_only:
        query = query.filter(models.Product.stock_quantity >= 1)

    return query.all()


def get_low_stock_products(db: Session) -> List[models.Product]:
    """
    Products whose stock is at or below their own threshold (zero included).

    SQL generated:
        SELECT * FROM products WHERE stock_quantity <= low_stock_threshold
    """
    return (
        db.query(models.Product)
        .filter(models.Product.stock_quantity <= models.Product.low_stock_threshold)
        .all()
    )


def create_product(db: Session, product: schemas.ProductCreate) -> models.Product:
    """
    Create a new product.

    Process:
        1. Flatten the specs block into its category columns (others NULL)
        2. Add to session and commit
        3. Refresh to get DB-generated fields (id, timestamps)
    """
    threshold = product.low_stock_threshold
    if threshold is None:
        threshold = settings.DEFAULT_LOW_STOCK_THRESHOLD

    db_product = models.Product(
        name=product.name,
        brand=product.brand,
        category=product.specs.category,
        description=product.description,
        price=_fixed(product.price),
        stock_quantity=product.stock_quantity,
        low_stock_threshold=threshold,
        is_active=product.is_active,
        **_spec_values(product.specs),
    )

    db.add(db_product)
    _commit_or_rollback(db)
    db.refresh(db_product)

    logger.info("Created product %s (%s, %s)", db_product.id, db_product.category, db_product.name)
    return db_product


def update_product(
    db: Session,
    product_id: int,
    product_update: schemas.ProductUpdate,
) -> Optional[models.Product]:
    """
    Update an existing product (partial update).

    Only fields explicitly sent by the client are applied. A ``specs``
    patch switches the category and clears the previous category's
    columns.

    Returns:
        Updated Product object if found, None otherwise
    """
    db_product = get_product(db, product_id)
    if db_product is None:
        return None

    for field in product_update.model_fields_set:
        value = getattr(product_update, field)
        if field == "specs":
            db_product.category = value.category
            for column, column_value in _spec_values(value).items():
                setattr(db_product, column, column_value)
        elif field == "price":
            db_product.price = _fixed(value)
        else:
            setattr(db_product, field, value)

    db_product.updated_at = func.now()
    _commit_or_rollback(db)
    db.refresh(db_product)

    return db_product


def update_product_stock(db: Session, product_id: int, new_stock: int) -> Optional[models.Product]:
    """
    Overwrite a product's stock quantity (restock or manual correction).

    Returns:
        Updated Product object if found, None otherwise
    """
    db_product = get_product(db, product_id)
    if db_product is None:
        return None

    db_product.stock_quantity = new_stock
    db_product.updated_at = func.now()
    _commit_or_rollback(db)
    db.refresh(db_product)

    return db_product


def is_product_ordered(db: Session, product_id: int) -> bool:
    """True if at least one order item references the product."""
    return (
        db.query(models.OrderItem.id)
        .filter(models.OrderItem.product_id == product_id)
        .first()
        is not None
    )


def delete_product(db: Session, product_id: int) -> bool:
    """
    Delete a product by ID.

    If any order item references the product, the row is kept and flagged
    is_active=False (soft delete) so order history stays intact.
    Otherwise the product is removed together with its images, cart rows,
    wishlist rows and reviews (hard delete).

    Returns:
        True if a product was soft- or hard-deleted, False if not found
    """
    db_product = get_product(db, product_id)
    if db_product is None:
        return False

    if is_product_ordered(db, product_id):
        db_product.is_active = False
        db_product.updated_at = func.now()
        _commit_or_rollback(db)
        logger.info("Soft-deleted product %s (referenced by orders)", product_id)
        return True

    for model in (models.ProductImage, models.CartItem, models.WishlistItem, models.Review):
        db.query(model).filter(model.product_id == product_id).delete()
    db.query(models.Product).filter(models.Product.id == product_id).delete()
    _commit_or_rollback(db)

    logger.info("Hard-deleted product %s", product_id)
    return True


# ============================================================================
# PRODUCT IMAGE CRUD OPERATIONS
# ============================================================================

def add_product_image(db: Session, image: schemas.ProductImageCreate) -> models.ProductImage:
    """
    Attach an image to a product.

    Raises:
        NotFoundError: the product does not exist
    """
    if get_product(db, image.product_id) is None:
        logger.warning("add_product_image rejected: product %s not found", image.product_id)
        raise NotFoundError(f"Product with id {image.product_id} does not exist")

    db_image = models.ProductImage(
        product_id=image.product_id,
        image_url=image.image_url,
        alt_text=image.alt_text,
        display_order=image.display_order,
    )
    db.add(db_image)
    _commit_or_rollback(db)
    db.refresh(db_image)

    return db_image


def get_product_images(db: Session, product_id: int) -> List[models.ProductImage]:
    """
    Images of one product, in display order.

    Args:
        db: Database session
        product_id: Product whose images to list

    Returns:
        List of ProductImage objects sorted by display_order, then id.
        Empty if the product has no images or does not exist.

    SQL generated:
        SELECT * FROM product_images WHERE product_id = ?
        ORDER BY display_order ASC, id ASC
    """
    return (
        db.query(models.ProductImage)
        .filter(models.ProductImage.product_id == product_id)
        .order_by(models.ProductImage.display_order.asc(), models.ProductImage.id.asc())
        .all()
    )


def delete_product_image(db: Session, image_id: int) -> bool:
    """Remaining images keep their display_order; gaps are left as they are."""
    db_image = db.query(models.ProductImage).filter(models.ProductImage.id == image_id).first()
    if db_image is None:
        return False

    db.delete(db_image)
    _commit_or_rollback(db)
    return True


# ============================================================================
# CART CRUD OPERATIONS
# ============================================================================

def _find_cart_item(db: Session, user_id: int, product_id: int) -> Optional[models.CartItem]:
    return (
        db.query(models.CartItem)
        .filter(
            models.CartItem.user_id == user_id,
            models.CartItem.product_id == product_id,
        )
        .first()
    )


def _merge_into_cart_item(
    db: Session,
    cart_item: models.CartItem,
    product: models.Product,
    quantity: int,
) -> models.CartItem:
    new_quantity = cart_item.quantity + quantity
    if new_quantity > product.stock_quantity:
        logger.warning(
            "add_to_cart rejected: product %s has %s in stock, cart would hold %s",
            product.id, product.stock_quantity, new_quantity,
        )
        raise InsufficientStockError(product.id, new_quantity, product.stock_quantity)

    cart_item.quantity = new_quantity
    cart_item.updated_at = func.now()
    _commit_or_rollback(db)
    db.refresh(cart_item)
    return cart_item


def add_to_cart(db: Session, item: schemas.CartItemCreate) -> models.CartItem:
    """
    Add a product to a user's cart.

    If the user already has the product in the cart, its quantity is
    increased instead of inserting a second row. The resulting quantity
    may never exceed the product's stock.

    Example (stock = 10):
        add 8 -> row quantity 8
        add 5 -> InsufficientStockError (13 > 10), row unchanged
        add 2 -> row quantity 10

    Raises:
        NotFoundError: the product or the user does not exist
        InsufficientStockError: not enough stock for the requested total
    """
    product = get_product(db, item.product_id)
    if product is None:
        logger.warning("add_to_cart rejected: product %s not found", item.product_id)
        raise NotFoundError("Product not found")

    if get_user(db, item.user_id) is None:
        logger.warning("add_to_cart rejected: user %s not found", item.user_id)
        raise NotFoundError("User not found")

    if product.stock_quantity < item.quantity:
        logger.warning(
            "add_to_cart rejected: product %s has %s in stock, %s requested",
            product.id, product.stock_quantity, item.quantity,
        )
        raise InsufficientStockError(product.id, item.quantity, product.stock_quantity)

    existing = _find_cart_item(db, item.user_id, item.product_id)
    if existing is not None:
        return _merge_into_cart_item(db, existing, product, item.quantity)

    db_item = models.CartItem(
        user_id=item.user_id,
        product_id=item.product_id,
        quantity=item.quantity,
    )
    db.add(db_item)

    try:
        db.commit()
    except IntegrityError:
        # A concurrent request inserted the same (user, product) row first;
        # the unique constraint rejected ours, so merge into theirs.
        db.rollback()
        existing = _find_cart_item(db, item.user_id, item.product_id)
        product = get_product(db, item.product_id)
        if existing is None or product is None:
            # Not a duplicate: the user or product vanished since the checks
            logger.warning(
                "add_to_cart rejected: user %s or product %s no longer exists",
                item.user_id, item.product_id,
            )
            raise NotFoundError("User or product not found")
        return _merge_into_cart_item(db, existing, product, item.quantity)

    db.refresh(db_item)
    return db_item


def update_cart_item(db: Session, cart_item_id: int, quantity: int) -> Optional[models.CartItem]:
    """
    Overwrite the quantity of a cart row.

    Returns:
        Updated CartItem, or None if the row does not exist

    Raises:
        NotFoundError: the row's product no longer exists
        InsufficientStockError: quantity exceeds current stock
    """
    cart_item = db.query(models.CartItem).filter(models.CartItem.id == cart_item_id).first()
    if cart_item is None:
        return None

    product = get_product(db, cart_item.product_id)
    if product is None:
        raise NotFoundError("Product not found")

    if product.stock_quantity < quantity:
        logger.warning(
            "update_cart_item rejected: product %s has %s in stock, %s requested",
            product.id, product.stock_quantity, quantity,
        )
        raise InsufficientStockError(product.id, quantity, product.stock_quantity)

    cart_item.quantity = quantity
    cart_item.updated_at = func.now()
    _commit_or_rollback(db)
    db.refresh(cart_item)

    return cart_item


def get_cart_items(db: Session, user_id: int) -> List[models.CartItem]:
    """
    Cart rows of one user, oldest first.

    Returns:
        List of CartItem objects; empty for an unknown user

    SQL generated:
        SELECT * FROM cart_items WHERE user_id = ? ORDER BY id ASC
    """
    return (
        db.query(models.CartItem)
        .filter(models.CartItem.user_id == user_id)
        .order_by(models.CartItem.id.asc())
        .all()
    )


def remove_from_cart(db: Session, cart_item_id: int) -> bool:
    """
    Delete one cart row by ID.

    Returns:
        True if the row was deleted, False if it did not exist
    """
    deleted = (
        db.query(models.CartItem)
        .filter(models.CartItem.id == cart_item_id)
        .delete()
    )
    _commit_or_rollback(db)
    return deleted > 0


def clear_cart(db: Session, user_id: int) -> bool:
    """Remove every cart row of a user. True if at least one row was removed."""
    deleted = (
        db.query(models.CartItem)
        .filter(models.CartItem.user_id == user_id)
        .delete()
    )
    _commit_or_rollback(db)
    return deleted > 0


# ============================================================================
# ORDER CRUD OPERATIONS
# ============================================================================

# Legal status changes. Re-applying the current status is always allowed.
ORDER_TRANSITIONS = {
    schemas.OrderStatus.pending: {schemas.OrderStatus.processing, schemas.OrderStatus.cancelled},
    schemas.OrderStatus.processing: {schemas.OrderStatus.shipped, schemas.OrderStatus.cancelled},
    schemas.OrderStatus.shipped: {schemas.OrderStatus.delivered},
    schemas.OrderStatus.delivered: set(),
    schemas.OrderStatus.cancelled: set(),
}


def can_transition(current: schemas.OrderStatus, new: schemas.OrderStatus) -> bool:
    return current == new or new in ORDER_TRANSITIONS[current]


def get_order(db: Session, order_id: int) -> Optional[models.Order]:
    """
    Retrieve a single order by ID (items load lazily via order.items).
    """
    return db.query(models.Order).filter(models.Order.id == order_id).first()


def get_orders_by_user(db: Session, user_id: int) -> List[models.Order]:
    """Orders placed by one user, newest first."""
    return (
        db.query(models.Order)
        .filter(models.Order.user_id == user_id)
        .order_by(models.Order.created_at.desc(), models.Order.id.desc())
        .all()
    )


def get_all_orders(db: Session) -> List[models.Order]:
    """Every order, newest first."""
    return (
        db.query(models.Order)
        .order_by(models.Order.created_at.desc(), models.Order.id.desc())
        .all()
    )


def create_order(db: Session, order: schemas.OrderCreate) -> models.Order:
    """
    Create a new order in "pending" status.

    The caller supplies total_amount; it is stored as-is and not checked
    against the order's items. Line items are added separately with
    create_order_item.

    Raises:
        NotFoundError: the user does not exist
    """
    if get_user(db, order.user_id) is None:
        logger.warning("create_order rejected: user %s not found", order.user_id)
        raise NotFoundError("User not found")

    db_order = models.Order(
        user_id=order.user_id,
        status=schemas.OrderStatus.pending.value,
        total_amount=_fixed(order.total_amount),
        shipping_address=order.shipping_address,
        billing_address=order.billing_address,
    )

    db.add(db_order)
    _commit_or_rollback(db)
    db.refresh(db_order)

    logger.info("Created order %s for user %s", db_order.id, db_order.user_id)
    return db_order


def create_order_item(db: Session, item: schemas.OrderItemCreate) -> models.OrderItem:
    """
    Add a line item to an order.

    price_at_time is the unit price snapshot for this purchase. Product
    stock is not decremented here.

    Raises:
        NotFoundError: the order or the product does not exist
    """
    if get_order(db, item.order_id) is None:
        logger.warning("create_order_item rejected: order %s not found", item.order_id)
        raise NotFoundError("Order not found")
    if get_product(db, item.product_id) is None:
        logger.warning("create_order_item rejected: product %s not found", item.product_id)
        raise NotFoundError("Product not found")

    db_item = models.OrderItem(
        order_id=item.order_id,
        product_id=item.product_id,
        quantity=item.quantity,
        price_at_time=_fixed(item.price_at_time),
    )

    db.add(db_item)
    _commit_or_rollback(db)
    db.refresh(db_item)

    return db_item


def update_order_status(
    db: Session,
    order_id: int,
    status: Union[schemas.OrderStatus, str],
) -> Optional[models.Order]:
    """
    Move an order to a new status.

    With settings.STRICT_ORDER_STATUS enabled, only the edges in
    ORDER_TRANSITIONS are accepted:

        pending -> processing -> shipped -> delivered
        pending / processing -> cancelled

    With it disabled, any status may overwrite any other.

    Returns:
        Updated Order object if found, None otherwise

    Raises:
        InvalidTransitionError: strict mode and the edge is not allowed
    """
    status = schemas.OrderStatus(status)

    db_order = get_order(db, order_id)
    if db_order is None:
        return None

    current = schemas.OrderStatus(db_order.status)
    if settings.STRICT_ORDER_STATUS and not can_transition(current, status):
        logger.warning("Order %s: refused status change %s -> %s", order_id, current.value, status.value)
        raise InvalidTransitionError(current.value, status.value)

    db_order.status = status.value
    db_order.updated_at = func.now()
    _commit_or_rollback(db)
    db.refresh(db_order)

    return db_order


# ============================================================================
# WISHLIST CRUD OPERATIONS
# ============================================================================

def add_to_wishlist(db: Session, item: schemas.WishlistItemCreate) -> models.WishlistItem:
    """
    Save a product to a user's wishlist.

    Raises:
        NotFoundError: user or product does not exist
        InactiveProductError: the product has been soft-deleted
        DuplicateEntryError: the product is already on the wishlist
    """
    if get_user(db, item.user_id) is None:
        logger.warning("add_to_wishlist rejected: user %s not found", item.user_id)
        raise NotFoundError("User not found")

    product = get_product(db, item.product_id)
    if product is None:
        logger.warning("add_to_wishlist rejected: product %s not found", item.product_id)
        raise NotFoundError("Product not found")
    if not product.is_active:
        raise InactiveProductError("Product is not active")

    existing = (
        db.query(models.WishlistItem)
        .filter(
            models.WishlistItem.user_id == item.user_id,
            models.WishlistItem.product_id == item.product_id,
        )
        .first()
    )
    if existing is not None:
        raise DuplicateEntryError("Product already in wishlist")

    db_item = models.WishlistItem(user_id=item.user_id, product_id=item.product_id)
    db.add(db_item)

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise DuplicateEntryError("Product already in wishlist")

    db.refresh(db_item)
    return db_item


def get_wishlist_items(db: Session, user_id: int) -> List[models.WishlistItem]:
    """
    Raises:
        NotFoundError: the user does not exist
    """
    if get_user(db, user_id) is None:
        raise NotFoundError("User not found")

    return (
        db.query(models.WishlistItem)
        .filter(models.WishlistItem.user_id == user_id)
        .order_by(models.WishlistItem.id.asc())
        .all()
    )


def remove_from_wishlist(db: Session, wishlist_item_id: int) -> bool:
    """
    Raises:
        NotFoundError: no wishlist row with this id
    """
    db_item = db.query(models.WishlistItem).filter(models.WishlistItem.id == wishlist_item_id).first()
    if db_item is None:
        raise NotFoundError("Wishlist item not found")

    db.delete(db_item)
    _commit_or_rollback(db)
    return True


# ============================================================================
# REVIEW CRUD OPERATIONS
# ============================================================================

def has_purchased(db: Session, user_id: int, product_id: int) -> bool:
    """
    True if any order owned by the user contains the product.

    SQL generated:
        SELECT order_items.id FROM order_items
        JOIN orders ON order_items.order_id = orders.id
        WHERE orders.user_id = ? AND order_items.product_id = ?
        LIMIT 1
    """
    return (
        db.query(models.OrderItem.id)
        .join(models.Order, models.OrderItem.order_id == models.Order.id)
        .filter(
            models.Order.user_id == user_id,
            models.OrderItem.product_id == product_id,
        )
        .first()
        is not None
    )


def create_review(db: Session, review: schemas.ReviewCreate) -> models.Review:
    """
    Create a review for a product the user has ordered.

    Raises:
        NotEligibleError: the user never ordered the product
        DuplicateEntryError: the user already reviewed the product
    """
    if not has_purchased(db, review.user_id, review.product_id):
        logger.warning(
            "create_review rejected: user %s has not purchased product %s",
            review.user_id, review.product_id,
        )
        raise NotEligibleError("User must purchase product before reviewing")

    existing = (
        db.query(models.Review)
        .filter(
            models.Review.user_id == review.user_id,
            models.Review.product_id == review.product_id,
        )
        .first()
    )
    if existing is not None:
        raise DuplicateEntryError("User has already reviewed this product")

    db_review = models.Review(
        user_id=review.user_id,
        product_id=review.product_id,
        rating=review.rating,
        comment=review.comment,
    )
    db.add(db_review)

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise DuplicateEntryError("User has already reviewed this product")

    db.refresh(db_review)
    return db_review


def get_product_reviews(db: Session, product_id: int) -> List[models.Review]:
    """
    Reviews of one product, oldest first.

    SQL generated:
        SELECT * FROM reviews WHERE product_id = ? ORDER BY id ASC
    """
    return (
        db.query(models.Review)
        .filter(models.Review.product_id == product_id)
        .order_by(models.Review.id.asc())
        .all()
    )


def get_user_reviews(db: Session, user_id: int) -> List[models.Review]:
    """Reviews written by one user, oldest first."""
    return (
        db.query(models.Review)
        .filter(models.Review.user_id == user_id)
        .order_by(models.Review.id.asc())
        .all()
    )


def update_review(
    db: Session,
    review_id: int,
    rating: int,
    comment: Optional[str],
) -> Optional[models.Review]:
    """
    Replace rating and comment. Ownership is the caller's concern.

    Returns:
        Updated Review, or None if the review does not exist
    """
    db_review = db.query(models.Review).filter(models.Review.id == review_id).first()
    if db_review is None:
        return None

    db_review.rating = rating
    db_review.comment = comment
    db_review.updated_at = func.now()
    _commit_or_rollback(db)
    db.refresh(db_review)

    return db_review


def delete_review(db: Session, review_id: int) -> bool:
    """
    Delete a review by ID.

    Returns:
        True if the review was deleted, False if it did not exist
    """
    deleted = (
        db.query(models.Review)
        .filter(models.Review.id == review_id)
        .delete()
    )
    _commit_or_rollback(db)
    return deleted > 0
