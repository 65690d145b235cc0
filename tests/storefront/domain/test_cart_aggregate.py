"""Tests for the ShoppingCart aggregate."""

import pytest
from storefront.cart.cart import ShoppingCart
from storefront.cart.events import CartCleared, CartItemAdded, CartItemRemoved, CartQuantityUpdated
from storefront.product.product import Product
from storefront.shared.errors import InsufficientStock, InvalidArgument, NotFound


def _make_cart():
    return ShoppingCart.create(customer_id="cust-001")


def _make_product(stock=5, name="Widget"):
    return Product.add(name=name, price="10.00", stock=stock)


class TestAddItem:
    def test_add_item(self):
        cart = _make_cart()
        cart.add_item(_make_product(), 2)
        assert len(cart.items) == 1
        assert cart.items[0].quantity == 2

    def test_adding_again_tops_up_the_line(self):
        cart = _make_cart()
        product = _make_product()
        cart.add_item(product, 1)
        cart.add_item(product, 2)
        assert len(cart.items) == 1
        assert cart.items[0].quantity == 3

    def test_raises_event(self):
        cart = _make_cart()
        product = _make_product()
        cart.add_item(product, 1)
        cart.add_item(product, 1)
        events = [e for e in cart._events if isinstance(e, CartItemAdded)]
        assert [e.new_quantity for e in events] == [1, 2]

    @pytest.mark.parametrize("quantity", [0, -1])
    def test_rejects_non_positive_quantity(self, quantity):
        with pytest.raises(InvalidArgument):
            _make_cart().add_item(_make_product(), quantity)

    def test_total_cannot_exceed_stock(self):
        cart = _make_cart()
        product = _make_product(stock=3)
        cart.add_item(product, 2)
        with pytest.raises(InsufficientStock) as exc:
            cart.add_item(product, 2)
        assert exc.value.requested == 4
        assert exc.value.available == 3
        assert cart.items[0].quantity == 2


class TestSetQuantity:
    def test_overwrites_quantity(self):
        cart = _make_cart()
        product = _make_product()
        cart.add_item(product, 1)
        cart.set_quantity(product, 4)
        assert cart.items[0].quantity == 4
        event = next(e for e in cart._events if isinstance(e, CartQuantityUpdated))
        assert (event.previous_quantity, event.new_quantity) == (1, 4)

    def test_over_stock(self):
        cart = _make_cart()
        product = _make_product(stock=2)
        cart.add_item(product, 1)
        with pytest.raises(InsufficientStock):
            cart.set_quantity(product, 3)

    def test_missing_line(self):
        with pytest.raises(NotFound):
            _make_cart().set_quantity(_make_product(), 1)


class TestRemoveItem:
    def test_remove(self):
        cart = _make_cart()
        product = _make_product()
        cart.add_item(product, 1)
        cart.remove_item(product.id)
        assert len(cart.items) == 0
        assert any(isinstance(e, CartItemRemoved) for e in cart._events)

    def test_missing_line(self):
        with pytest.raises(NotFound):
            _make_cart().remove_item("prod-missing")


class TestClear:
    def test_clear_empties_cart(self):
        cart = _make_cart()
        cart.add_item(_make_product(name="A"), 1)
        cart.add_item(_make_product(name="B"), 1)
        cart.clear(order_id="ord-1")
        assert len(cart.items) == 0
        event = next(e for e in cart._events if isinstance(e, CartCleared))
        assert event.items_cleared == 2

    def test_clear_on_empty_cart_raises_nothing(self):
        cart = _make_cart()
        cart.clear(order_id="ord-1")
        assert not any(isinstance(e, CartCleared) for e in cart._events)


class TestListingOrder:
    def test_newest_first(self):
        cart = _make_cart()
        first, second = _make_product(name="A"), _make_product(name="B")
        cart.add_item(first, 1)
        cart.add_item(second, 1)
        assert [str(i.product_id) for i in cart.lines_newest_first()] == [str(second.id), str(first.id)]
