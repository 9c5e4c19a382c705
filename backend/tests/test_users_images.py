import pytest
from werkzeug.security import check_password_hash

from storefront import crud, schemas
from storefront.errors import DuplicateEntryError, NotFoundError


# ============================================================================
# Users
# ============================================================================

def test_create_user_defaults_to_customer(db, make_user):
    user = make_user(email="jane@example.com", first_name="Jane", last_name="Doe")

    assert user.id is not None
    assert user.email == "jane@example.com"
    assert user.first_name == "Jane"
    assert user.role == "customer"


def test_create_admin(db, make_user):
    assert make_user(role="admin").role == "admin"


def test_password_is_hashed(db, make_user):
    user = make_user(password="s3cret-pass")

    assert user.password_hash != "s3cret-pass"
    assert check_password_hash(user.password_hash, "s3cret-pass")


def test_duplicate_email_rejected(db, make_user):
    make_user(email="dup@example.com")

    with pytest.raises(DuplicateEntryError):
        make_user(email="dup@example.com")


def test_user_input_validation():
    with pytest.raises(ValueError):
        schemas.UserCreate(email="not-an-email", password="password123", first_name="a", last_name="b")
    with pytest.raises(ValueError):
        schemas.UserCreate(email="ok@example.com", password="short", first_name="a", last_name="b")


def test_password_hash_not_serialized(db, make_user):
    data = schemas.User.model_validate(make_user()).model_dump()

    assert "password_hash" not in data
    assert "password" not in data


# ============================================================================
# Product images
# ============================================================================

def add_image(db, product_id, order, url=None, alt_text=None):
    return crud.add_product_image(db, schemas.ProductImageCreate(
        product_id=product_id,
        image_url=url or f"https://img.example.com/{product_id}/{order}.jpg",
        alt_text=alt_text,
        display_order=order,
    ))


def test_add_product_image(db, make_product):
    product = make_product()

    image = add_image(db, product.id, 0, url="https://img.example.com/front.jpg", alt_text="Front view")

    assert image.product_id == product.id
    assert image.image_url == "https://img.example.com/front.jpg"
    assert image.alt_text == "Front view"
    assert image.display_order == 0


def test_add_image_for_missing_product(db):
    with pytest.raises(NotFoundError):
        add_image(db, 999, 0)


def test_image_url_kept_verbatim(db, make_product):
    image = add_image(db, make_product().id, 0, url="https://cdn.example.com")

    assert image.image_url == "https://cdn.example.com"


def test_image_url_must_be_url():
    with pytest.raises(ValueError):
        schemas.ProductImageCreate(product_id=1, image_url="not a url", display_order=0)


def test_images_sorted_by_display_order(db, make_product):
    product = make_product()
    other = make_product(name="Other")
    add_image(db, product.id, 2)
    add_image(db, product.id, 0)
    add_image(db, product.id, 1)
    add_image(db, other.id, 0)

    images = crud.get_product_images(db, product.id)

    assert [i.display_order for i in images] == [0, 1, 2]
    assert crud.get_product_images(db, 999) == []


def test_delete_image_leaves_gap(db, make_product):
    product = make_product()
    first = add_image(db, product.id, 0)
    middle = add_image(db, product.id, 1)
    last = add_image(db, product.id, 2)

    assert crud.delete_product_image(db, middle.id) is True
    assert crud.delete_product_image(db, middle.id) is False

    remaining = crud.get_product_images(db, product.id)
    assert [(i.id, i.display_order) for i in remaining] == [(first.id, 0), (last.id, 2)]
