"""Cart listing — the customer's lines joined with live product data."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from protean.utils.globals import current_domain

from storefront.cart.cart import ShoppingCart
from storefront.checkout.pricing import PriceBreakdown, price_lines
from storefront.product.product import Product
from storefront.shared.money import ZERO


@dataclass(frozen=True)
class CartLine:
    product_id: str
    product_name: str | None
    unit_price: Decimal | None
    quantity: int
    stock: int
    available: bool
    added_at: datetime | None


@dataclass(frozen=True)
class CartListing:
    lines: list[CartLine]
    summary: PriceBreakdown


def list_cart(customer_id) -> CartListing:
    """Return the customer's cart, newest line first, with a price preview.

    Lines whose product was discontinued are still listed, flagged as
    unavailable, and left out of the preview.
    """
    cart = current_domain.repository_for(ShoppingCart).for_customer(customer_id)
    items = cart.lines_newest_first() if cart else []

    products = {
        str(p.id): p
        for p in current_domain.repository_for(Product).find_available([i.product_id for i in items])
    }

    lines = []
    for item in items:
        product = products.get(str(item.product_id))
        lines.append(
            CartLine(
                product_id=str(item.product_id),
                product_name=product.name if product else None,
                unit_price=product.price if product else None,
                quantity=item.quantity,
                stock=product.stock if product else 0,
                available=product is not None and product.stock >= item.quantity,
                added_at=item.added_at,
            )
        )

    priced = [(line.unit_price, line.quantity) for line in lines if line.unit_price is not None]
    summary = price_lines(priced) if priced else PriceBreakdown(subtotal=ZERO, shipping=ZERO, total=ZERO)
    return CartListing(lines=lines, summary=summary)


def checkout_lines(customer_id) -> list[dict]:
    """The customer's cart as raw checkout lines, oldest first."""
    cart = current_domain.repository_for(ShoppingCart).for_customer(customer_id)
    if cart is None:
        return []
    items = sorted(cart.items, key=lambda i: i.added_at)
    return [{"product_id": str(i.product_id), "quantity": i.quantity} for i in items]
