"""Checkout — turn a list of lines into a placed order.

Everything the customer sent is re-validated against the live inventory.
The order, every stock withdrawal and the cart clear are written in the
handler's single unit of work, so a failure at any step leaves no order,
no stock change and the cart as it was.
"""

import json
from collections import OrderedDict

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.cart.cart import ShoppingCart
from storefront.checkout.pricing import price_lines
from storefront.domain import storefront
from storefront.order.order import Order
from storefront.product.product import Product
from storefront.shared.errors import InvalidArgument, ProductUnavailable
from storefront.shared.money import format_amount, to_decimal
from storefront.shared.phone import PhoneNumber
from storefront.shared.retry import process_with_retry

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Order")
class PlaceOrder:
    customer_id = Identifier(required=True)
    shipping_address = Text()
    phone_number = String(max_length=20)
    notes = Text()
    items = Text(required=True)  # JSON: list of {product_id, quantity}
    client_total = String(max_length=20)  # informational only


def normalize_lines(lines) -> "OrderedDict[str, int]":
    """Validate raw ``{product_id, quantity}`` lines and merge duplicates.

    Returns product id → total quantity, in first-seen order.
    """
    if not lines:
        raise InvalidArgument("items", "Cart is empty")

    merged = OrderedDict()
    for line in lines:
        if not isinstance(line, dict):
            raise InvalidArgument("items", f"Malformed line: {line!r}")
        product_id = line.get("product_id")
        quantity = line.get("quantity")
        if product_id is None or not str(product_id).strip():
            raise InvalidArgument("product_id", "Product id is required")
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
            raise InvalidArgument("quantity", f"Invalid quantity for product {product_id}: {quantity!r}")
        product_id = str(product_id).strip()
        merged[product_id] = merged.get(product_id, 0) + quantity
    return merged


def _validate_contact(shipping_address, phone_number):
    if not shipping_address or not shipping_address.strip():
        raise InvalidArgument("shipping_address", "Shipping address is required")
    if not phone_number or not phone_number.strip():
        raise InvalidArgument("phone_number", "Phone number is required")
    try:
        PhoneNumber(number=phone_number)
    except ValidationError:
        raise InvalidArgument("phone_number", f"Invalid phone number: {phone_number}") from None


def _warn_on_client_total(client_total, total, customer_id):
    if client_total in (None, ""):
        return
    try:
        claimed = to_decimal(client_total)
    except (TypeError, ValueError):
        claimed = None
    if claimed != total:
        logger.warning(
            "Client total ignored",
            customer_id=str(customer_id),
            client_total=str(client_total),
            server_total=format_amount(total),
        )


@storefront.command_handler(part_of=Order)
class CheckoutHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        raw_lines = json.loads(command.items) if isinstance(command.items, str) else command.items
        requested = normalize_lines(raw_lines)
        _validate_contact(command.shipping_address, command.phone_number)

        product_repo = current_domain.repository_for(Product)
        products = {str(p.id): p for p in product_repo.find_available(list(requested))}
        missing = [pid for pid in requested if pid not in products]
        if missing:
            raise ProductUnavailable(missing)

        lines = [(products[pid], quantity) for pid, quantity in requested.items()]
        for product, quantity in lines:
            product.ensure_stock_for(quantity)

        breakdown = price_lines((product.price, quantity) for product, quantity in lines)
        _warn_on_client_total(command.client_total, breakdown.total, command.customer_id)

        order = Order.place(
            customer_id=command.customer_id,
            shipping_address=command.shipping_address,
            phone_number=command.phone_number.strip(),
            notes=command.notes,
            lines=lines,
            breakdown=breakdown,
        )
        current_domain.repository_for(Order).add(order)

        for product, quantity in lines:
            product.withdraw_stock(quantity, order_id=order.id)
            product_repo.add(product)

        cart_repo = current_domain.repository_for(ShoppingCart)
        cart = cart_repo.for_customer(command.customer_id)
        if cart is not None and cart.items:
            cart.clear(order_id=order.id)
            cart_repo.add(cart)

        logger.info(
            "Order placed",
            order_id=str(order.id),
            customer_id=str(command.customer_id),
            total=format_amount(breakdown.total),
            lines=len(lines),
        )
        return str(order.id)


def place_order(customer_id, shipping_address, phone_number, notes, lines, client_total=None) -> str:
    """Check out ``lines`` for ``customer_id`` and return the new order id."""
    lines = list(lines or [])
    if not lines:
        raise InvalidArgument("items", "Cart is empty")
    return process_with_retry(
        PlaceOrder(
            customer_id=customer_id,
            shipping_address=shipping_address,
            phone_number=phone_number,
            notes=notes,
            items=json.dumps(lines),
            client_total=None if client_total is None else str(client_total),
        )
    )
