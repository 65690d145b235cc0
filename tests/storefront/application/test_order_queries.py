"""Application tests for order history, admin listing and order detail."""

import pytest
from storefront.checkout.placement import place_order
from storefront.order.access import load_order_for
from storefront.order.cancellation import cancel_order
from storefront.order.queries import all_orders, order_history
from storefront.order.status import set_order_status
from storefront.shared.errors import Forbidden, InvalidArgument, NotFound


def _checkout(product, quantity=1, customer_id="cust-001"):
    return place_order(
        customer_id=customer_id,
        shipping_address="12 Nile St, Cairo",
        phone_number="+201001234567",
        notes=None,
        lines=[{"product_id": str(product.id), "quantity": quantity}],
    )


class TestOrderHistory:
    def test_newest_first_and_own_orders_only(self, make_product):
        product = make_product(price="10.00", stock=20)
        first = _checkout(product, 1)
        second = _checkout(product, 2)
        _checkout(product, 1, customer_id="cust-002")

        history = order_history("cust-001")
        assert [str(s.order_id) for s in history] == [second, first]
        assert history[0].item_count == 2
        assert history[0].total_cents == 2500

    def test_summary_follows_status(self, make_product):
        order_id = _checkout(make_product())
        cancel_order(order_id, requested_by="cust-001")
        assert order_history("cust-001")[0].status == "CANCELLED"

    def test_empty(self):
        assert order_history("nobody") == []


class TestAllOrders:
    def test_lists_everyone(self, make_product):
        product = make_product(stock=20)
        _checkout(product, customer_id="cust-001")
        _checkout(product, customer_id="cust-002")
        assert len(all_orders()) == 2

    def test_filter_by_status(self, make_product):
        product = make_product(stock=20)
        shipped = _checkout(product)
        _checkout(product)
        set_order_status(shipped, "SHIPPED", requested_by="admin-1", is_admin=True)

        result = all_orders("shipped")
        assert [str(s.order_id) for s in result] == [shipped]
        assert result[0].status == "SHIPPED"

    def test_unknown_status_filter(self):
        with pytest.raises(InvalidArgument):
            all_orders("MISPLACED")


class TestLoadOrderFor:
    def test_owner(self, make_product):
        order_id = _checkout(make_product())
        assert str(load_order_for(order_id, "cust-001").id) == order_id

    def test_admin(self, make_product):
        order_id = _checkout(make_product())
        assert str(load_order_for(order_id, "admin-1", is_admin=True).id) == order_id

    def test_stranger(self, make_product):
        order_id = _checkout(make_product())
        with pytest.raises(Forbidden):
            load_order_for(order_id, "cust-002")

    def test_missing(self):
        with pytest.raises(NotFound):
            load_order_for("nope", "cust-001")


@pytest.mark.slow
class TestLongListings:
    def test_listings_are_not_truncated(self, make_product):
        product = make_product(price="1.00", stock=200)
        order_ids = [_checkout(product) for _ in range(101)]

        history = order_history("cust-001")
        assert len(history) == 101
        assert str(history[0].order_id) == order_ids[-1]

        everyone = all_orders()
        assert len(everyone) == 101
        assert str(everyone[0].order_id) == order_ids[-1]
        assert len(all_orders("PENDING")) == 101
