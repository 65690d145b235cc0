"""Application tests for admin status transitions."""

import pytest
from storefront.checkout.placement import place_order
from storefront.order.status import set_order_status
from storefront.shared.errors import Forbidden, InvalidArgument, InvalidState, NotFound


@pytest.fixture()
def order_and_product(make_product):
    product = make_product(stock=10)
    order_id = place_order(
        customer_id="cust-001",
        shipping_address="12 Nile St, Cairo",
        phone_number="+201001234567",
        notes=None,
        lines=[{"product_id": str(product.id), "quantity": 4}],
    )
    return order_id, product


def _as_admin(order_id, status, **kwargs):
    return set_order_status(order_id, status, requested_by="admin-1", is_admin=True, **kwargs)


class TestSetOrderStatus:
    def test_forward_moves_leave_stock_alone(self, order_and_product, stock_of):
        order_id, product = order_and_product
        for status in ("PROCESSING", "SHIPPED", "DELIVERED"):
            order = _as_admin(order_id, status)
            assert order.status == status
        assert stock_of(product.id) == 6

    def test_status_is_case_insensitive(self, order_and_product):
        order_id, _ = order_and_product
        assert _as_admin(order_id, "shipped").status == "SHIPPED"

    def test_mark_paid(self, order_and_product):
        order_id, _ = order_and_product
        order = _as_admin(order_id, "DELIVERED", payment_status="PAID")
        assert order.payment_status == "PAID"

    def test_backward_move_allowed(self, order_and_product):
        order_id, _ = order_and_product
        _as_admin(order_id, "SHIPPED")
        assert _as_admin(order_id, "PROCESSING").status == "PROCESSING"

    def test_cancelled_restores_stock(self, order_and_product, stock_of):
        order_id, product = order_and_product
        order = _as_admin(order_id, "CANCELLED")
        assert order.status == "CANCELLED"
        assert stock_of(product.id) == 10

    def test_cancelled_twice(self, order_and_product, stock_of):
        order_id, product = order_and_product
        _as_admin(order_id, "CANCELLED")
        with pytest.raises(InvalidState):
            _as_admin(order_id, "CANCELLED")
        assert stock_of(product.id) == 10

    def test_cannot_leave_cancelled(self, order_and_product, stock_of):
        order_id, product = order_and_product
        _as_admin(order_id, "CANCELLED")
        with pytest.raises(InvalidState):
            _as_admin(order_id, "PENDING")
        assert stock_of(product.id) == 10

    def test_non_admin(self, order_and_product):
        order_id, _ = order_and_product
        with pytest.raises(Forbidden):
            set_order_status(order_id, "SHIPPED", requested_by="cust-001", is_admin=False)

    def test_unknown_status(self, order_and_product):
        order_id, _ = order_and_product
        with pytest.raises(InvalidArgument):
            _as_admin(order_id, "LOST_IN_TRANSIT")

    def test_unknown_payment_status(self, order_and_product):
        order_id, _ = order_and_product
        with pytest.raises(InvalidArgument):
            _as_admin(order_id, "SHIPPED", payment_status="MAYBE")

    def test_unknown_order(self):
        with pytest.raises(NotFound):
            _as_admin("no-such-order", "SHIPPED")
