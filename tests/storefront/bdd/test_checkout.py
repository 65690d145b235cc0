"""BDD tests for checkout."""

from decimal import Decimal

from protean import current_domain
from pytest_bdd import parsers, scenarios, then, when
from storefront.checkout.placement import place_order
from storefront.order.order import Order
from storefront.product.management import UpdateProduct
from storefront.shared.errors import InsufficientStock, InvalidArgument

scenarios("features/checkout.feature")


def _attempt(outcomes, customer, lines, client_total=None):
    try:
        outcomes[customer] = place_order(
            customer_id=customer,
            shipping_address="12 Nile St, Cairo",
            phone_number="+201001234567",
            notes=None,
            lines=lines,
            client_total=client_total,
        )
    except (InsufficientStock, InvalidArgument) as exc:
        outcomes[customer] = exc


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.cfparse('customer "{customer}" checks out {quantity:d} of "{name}"'))
def _(outcomes, products, customer, quantity, name):
    _attempt(outcomes, customer, [{"product_id": products[name], "quantity": quantity}])


@when(parsers.cfparse('customer "{customer}" claims a total of "{total}" for {quantity:d} of "{name}"'))
def _(outcomes, products, customer, quantity, name, total):
    _attempt(outcomes, customer, [{"product_id": products[name], "quantity": quantity}], client_total=total)


@when(parsers.cfparse('customer "{customer}" checks out nothing'))
def _(outcomes, customer):
    _attempt(outcomes, customer, [])


@when(parsers.cfparse('the price of "{name}" changes to "{price}"'))
def _(products, name, price):
    current_domain.process(
        UpdateProduct(product_id=products[name], name=name, price=price, stock=4),
        asynchronous=False,
    )


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the checkout of "{customer}" succeeds'))
def _(outcomes, customer):
    assert isinstance(outcomes[customer], str)


@then(parsers.cfparse('the checkout of "{customer}" fails with {error}'))
def _(outcomes, error_class, customer, error):
    assert isinstance(outcomes[customer], error_class(error))


@then(parsers.cfparse('the order of "{customer}" totals "{total}"'))
def _(outcomes, customer, total):
    order = current_domain.repository_for(Order).get(outcomes[customer])
    assert order.pricing.total == Decimal(total)


@then(parsers.cfparse('the order of "{customer}" has "{name}" at "{price}"'))
def _(outcomes, customer, name, price):
    order = current_domain.repository_for(Order).get(outcomes[customer])
    item = next(i for i in order.items if i.product_name == name)
    assert item.unit_price == Decimal(price)
