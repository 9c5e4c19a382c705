import pytest
from sqlalchemy.exc import IntegrityError

from storefront import crud, models, schemas
from storefront.errors import InsufficientStockError, NotFoundError


@pytest.fixture
def user(make_user):
    return make_user()


@pytest.fixture
def product(make_product):
    return make_product(stock_quantity=10)


def add(db, user_id, product_id, quantity):
    return crud.add_to_cart(db, schemas.CartItemCreate(user_id=user_id, product_id=product_id, quantity=quantity))


def test_add_new_item(db, user, product):
    item = add(db, user.id, product.id, 2)

    assert item.id is not None
    assert item.user_id == user.id
    assert item.product_id == product.id
    assert item.quantity == 2
    assert item.created_at is not None


def test_adding_same_product_merges_quantity(db, user, product):
    add(db, user.id, product.id, 2)
    item = add(db, user.id, product.id, 3)

    assert item.quantity == 5
    assert len(crud.get_cart_items(db, user.id)) == 1


def test_add_missing_product(db, user):
    with pytest.raises(NotFoundError, match="Product not found"):
        add(db, user.id, 999, 1)


def test_add_more_than_stock(db, user, product):
    with pytest.raises(InsufficientStockError):
        add(db, user.id, product.id, 15)


def test_stock_limit_scenario(db, user, product):
    add(db, user.id, product.id, 8)

    with pytest.raises(InsufficientStockError) as excinfo:
        add(db, user.id, product.id, 5)
    assert excinfo.value.requested == 13
    assert excinfo.value.available == 10

    item = add(db, user.id, product.id, 2)

    assert item.quantity == 10
    rows = crud.get_cart_items(db, user.id)
    assert [(r.product_id, r.quantity) for r in rows] == [(product.id, 10)]


def test_unique_constraint_rejects_second_row(db, user, product):
    add(db, user.id, product.id, 1)

    db.add(models.CartItem(user_id=user.id, product_id=product.id, quantity=1))
    with pytest.raises(IntegrityError):
        db.commit()
    db.rollback()


def test_concurrent_insert_is_merged(db, user, product, monkeypatch):
    # Another request already inserted the row, but our existence check
    # ran before it committed.
    add(db, user.id, product.id, 3)
    real_find = crud._find_cart_item
    calls = []

    def stale_then_real(session, user_id, product_id):
        calls.append(1)
        if len(calls) == 1:
            return None
        return real_find(session, user_id, product_id)

    monkeypatch.setattr(crud, "_find_cart_item", stale_then_real)

    item = add(db, user.id, product.id, 4)

    assert item.quantity == 7
    assert len(crud.get_cart_items(db, user.id)) == 1


def test_update_cart_item(db, user, product):
    item = add(db, user.id, product.id, 3)

    updated = crud.update_cart_item(db, item.id, 5)

    assert updated.id == item.id
    assert updated.quantity == 5


def test_update_missing_cart_item(db):
    assert crud.update_cart_item(db, 999, 2) is None


def test_update_cart_item_beyond_stock(db, user, product):
    item = add(db, user.id, product.id, 3)

    with pytest.raises(InsufficientStockError):
        crud.update_cart_item(db, item.id, 15)
    assert crud.get_cart_items(db, user.id)[0].quantity == 3


def test_get_cart_items_only_for_user(db, make_user, user, product, make_product):
    other = make_user()
    second = make_product(name="Second")
    add(db, user.id, product.id, 1)
    add(db, user.id, second.id, 2)
    add(db, other.id, product.id, 4)

    assert crud.get_cart_items(db, 12345) == []
    mine = crud.get_cart_items(db, user.id)
    assert sorted(i.product_id for i in mine) == sorted([product.id, second.id])


def test_remove_from_cart(db, user, product, make_product):
    keep = add(db, user.id, make_product(name="Keep").id, 1)
    item = add(db, user.id, product.id, 1)

    assert crud.remove_from_cart(db, item.id) is True
    assert crud.remove_from_cart(db, item.id) is False
    assert [i.id for i in crud.get_cart_items(db, user.id)] == [keep.id]


def test_clear_cart(db, make_user, user, product, make_product):
    other = make_user()
    add(db, user.id, product.id, 1)
    add(db, user.id, make_product(name="Another").id, 1)
    add(db, other.id, product.id, 1)

    assert crud.clear_cart(db, user.id) is True
    assert crud.get_cart_items(db, user.id) == []
    assert len(crud.get_cart_items(db, other.id)) == 1
    assert crud.clear_cart(db, user.id) is False


def test_add_for_missing_user(db, product):
    with pytest.raises(NotFoundError, match="User not found"):
        add(db, 999, product.id, 1)
    assert crud.get_cart_items(db, 999) == []


def test_foreign_keys_are_enforced(db, product):
    db.add(models.CartItem(user_id=999, product_id=product.id, quantity=1))
    with pytest.raises(IntegrityError):
        db.commit()
    db.rollback()


def test_insert_rejected_by_foreign_key_is_not_found(db, user, product, monkeypatch):
    # The user check passes, but the user is gone by the time the row is inserted
    monkeypatch.setattr(crud, "get_user", lambda session, user_id: user)

    with pytest.raises(NotFoundError, match="User or product not found"):
        add(db, 999, product.id, 1)
    assert crud.get_cart_items(db, 999) == []
