"""Competing checkouts that read the same stock before either commits."""

import threading

import pytest
from protean import current_domain
from protean.exceptions import ExpectedVersionError
from storefront.checkout.placement import place_order
from storefront.domain import storefront
from storefront.order.order import Order
from storefront.product.product import Product
from storefront.shared.errors import InsufficientStock


def _checkout(customer_id, product_id, quantity):
    return place_order(
        customer_id=customer_id,
        shipping_address="12 Nile St, Cairo",
        phone_number="+201001234567",
        notes=None,
        lines=[{"product_id": str(product_id), "quantity": quantity}],
    )


@pytest.fixture()
def stock_checks_in_lockstep(monkeypatch):
    """Hold each thread's first stock check until both threads have read the product."""
    barrier = threading.Barrier(2, timeout=10)
    waited = set()
    original = Product.ensure_stock_for

    def gated(self, quantity):
        ident = threading.get_ident()
        if ident not in waited:
            waited.add(ident)
            barrier.wait()
        return original(self, quantity)

    monkeypatch.setattr(Product, "ensure_stock_for", gated)
    return barrier


class TestConcurrentCheckout:
    def test_one_checkout_wins_the_last_units(self, make_product, stock_of, stock_checks_in_lockstep):
        product = make_product(stock=5)
        outcomes = {}

        def shopper(customer_id):
            with storefront.domain_context():
                try:
                    outcomes[customer_id] = _checkout(customer_id, product.id, 3)
                except InsufficientStock as exc:
                    outcomes[customer_id] = exc

        threads = [threading.Thread(target=shopper, args=(c,)) for c in ("cust-a", "cust-b")]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=30)

        assert sorted(type(o).__name__ for o in outcomes.values()) == ["InsufficientStock", "str"]
        assert stock_of(product.id) == 2
        assert len(current_domain.repository_for(Order)._dao.query.limit(None).all().items) == 1


class TestStaleProductWrite:
    def test_write_from_a_stale_read_is_rejected(self, make_product, stock_of):
        product = make_product(stock=5)
        repo = current_domain.repository_for(Product)
        stale = repo.get(product.id)
        fresh = repo.get(product.id)

        fresh.withdraw_stock(3, order_id="ord-1")
        repo.add(fresh)

        stale.withdraw_stock(3, order_id="ord-2")
        with pytest.raises(ExpectedVersionError):
            repo.add(stale)

        assert stock_of(product.id) == 2
