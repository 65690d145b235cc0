"""Shared BDD fixtures and step definitions for the Storefront."""

import pytest
from protean import current_domain
from pytest_bdd import given, parsers, then
from storefront.order.order import Order
from storefront.product.management import AddProduct
from storefront.product.product import Product
from storefront.shared.errors import Forbidden, InsufficientStock, InvalidArgument, InvalidState

_ERROR_CLASSES = {
    "insufficient stock": InsufficientStock,
    "invalid argument": InvalidArgument,
    "invalid state": InvalidState,
    "forbidden": Forbidden,
}


@pytest.fixture()
def products():
    """Product name → product id."""
    return {}


@pytest.fixture()
def outcomes():
    """Customer → order id or the exception their last attempt raised."""
    return {}


@pytest.fixture()
def error_class():
    return _ERROR_CLASSES.__getitem__


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a product "{name}" priced "{price}" with {stock:d} in stock'))
def _(products, name, price, stock):
    products[name] = current_domain.process(AddProduct(name=name, price=price, stock=stock), asynchronous=False)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('"{name}" has {stock:d} in stock'))
def _(products, name, stock):
    assert current_domain.repository_for(Product).get(products[name]).stock == stock


@then("there are no orders")
def _():
    assert current_domain.repository_for(Order)._dao.query.all().items == []
