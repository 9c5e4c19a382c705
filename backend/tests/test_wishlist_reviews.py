import pytest

from storefront import crud, schemas
from storefront.errors import (
    DuplicateEntryError,
    InactiveProductError,
    NotEligibleError,
    NotFoundError,
)


# ============================================================================
# Wishlist
# ============================================================================

def wish(db, user_id, product_id):
    return crud.add_to_wishlist(db, schemas.WishlistItemCreate(user_id=user_id, product_id=product_id))


def test_add_to_wishlist(db, make_user, make_product):
    user = make_user()
    product = make_product()

    item = wish(db, user.id, product.id)

    assert item.user_id == user.id
    assert item.product_id == product.id
    assert [i.id for i in crud.get_wishlist_items(db, user.id)] == [item.id]


def test_wishlist_missing_user(db, make_product):
    with pytest.raises(NotFoundError, match="User not found"):
        wish(db, 999, make_product().id)


def test_wishlist_missing_product(db, make_user):
    with pytest.raises(NotFoundError, match="Product not found"):
        wish(db, make_user().id, 999)


def test_wishlist_inactive_product(db, make_user, make_product):
    product = make_product(is_active=False)

    with pytest.raises(InactiveProductError):
        wish(db, make_user().id, product.id)


def test_wishlist_duplicate(db, make_user, make_product):
    user = make_user()
    product = make_product()
    wish(db, user.id, product.id)

    with pytest.raises(DuplicateEntryError):
        wish(db, user.id, product.id)
    assert len(crud.get_wishlist_items(db, user.id)) == 1


def test_get_wishlist_for_missing_user(db):
    with pytest.raises(NotFoundError):
        crud.get_wishlist_items(db, 999)


def test_get_empty_wishlist(db, make_user):
    assert crud.get_wishlist_items(db, make_user().id) == []


def test_remove_from_wishlist(db, make_user, make_product):
    user = make_user()
    item = wish(db, user.id, make_product().id)

    assert crud.remove_from_wishlist(db, item.id) is True
    assert crud.get_wishlist_items(db, user.id) == []
    with pytest.raises(NotFoundError):
        crud.remove_from_wishlist(db, item.id)


# ============================================================================
# Reviews
# ============================================================================

def review(db, user_id, product_id, rating=5, comment="Great card"):
    return crud.create_review(db, schemas.ReviewCreate(
        user_id=user_id, product_id=product_id, rating=rating, comment=comment,
    ))


def test_create_review_after_purchase(db, make_user, make_product, make_purchase):
    user = make_user()
    product = make_product()
    make_purchase(user.id, product.id)

    created = review(db, user.id, product.id, rating=4)

    assert created.rating == 4
    assert created.comment == "Great card"
    assert [r.id for r in crud.get_product_reviews(db, product.id)] == [created.id]


def test_review_with_null_comment(db, make_user, make_product, make_purchase):
    user = make_user()
    product = make_product()
    make_purchase(user.id, product.id)

    assert review(db, user.id, product.id, comment=None).comment is None


def test_review_requires_purchase(db, make_user, make_product):
    with pytest.raises(NotEligibleError):
        review(db, make_user().id, make_product().id)


def test_review_requires_purchase_by_same_user(db, make_user, make_product, make_purchase):
    buyer = make_user()
    bystander = make_user()
    product = make_product()
    make_purchase(buyer.id, product.id)

    with pytest.raises(NotEligibleError):
        review(db, bystander.id, product.id)


def test_second_review_rejected(db, make_user, make_product, make_purchase):
    user = make_user()
    product = make_product()
    make_purchase(user.id, product.id)
    review(db, user.id, product.id)

    with pytest.raises(DuplicateEntryError):
        review(db, user.id, product.id, rating=1)
    assert len(crud.get_user_reviews(db, user.id)) == 1


def test_rating_bounds():
    with pytest.raises(ValueError):
        schemas.ReviewCreate(user_id=1, product_id=1, rating=6)
    with pytest.raises(ValueError):
        schemas.ReviewCreate(user_id=1, product_id=1, rating=0)


def test_get_user_and_product_reviews(db, make_user, make_product, make_purchase):
    user = make_user()
    other = make_user()
    gpu = make_product(name="GPU")
    cpu = make_product(name="CPU", specs={"category": "cpu", "socket": "AM5"})
    for buyer in (user, other):
        make_purchase(buyer.id, gpu.id)
    make_purchase(user.id, cpu.id)

    review(db, user.id, gpu.id)
    review(db, user.id, cpu.id)
    review(db, other.id, gpu.id)

    assert len(crud.get_user_reviews(db, user.id)) == 2
    assert len(crud.get_product_reviews(db, gpu.id)) == 2
    assert crud.get_product_reviews(db, 999) == []


def test_update_review(db, make_user, make_product, make_purchase):
    user = make_user()
    product = make_product()
    make_purchase(user.id, product.id)
    created = review(db, user.id, product.id)

    updated = crud.update_review(db, created.id, 2, None)

    assert updated.rating == 2
    assert updated.comment is None
    assert crud.update_review(db, 999, 3, "x") is None


def test_delete_review(db, make_user, make_product, make_purchase):
    user = make_user()
    product = make_product()
    make_purchase(user.id, product.id)
    created = review(db, user.id, product.id)

    assert crud.delete_review(db, created.id) is True
    assert crud.delete_review(db, created.id) is False
    # Deleting frees the slot for a new review
    assert review(db, user.id, product.id).id is not None
