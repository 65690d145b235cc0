"""Order pricing — subtotal, shipping and total from frozen line prices."""

import os
from dataclasses import dataclass
from decimal import Decimal

from storefront.shared.money import CURRENCY, ZERO, to_decimal


def free_shipping_threshold() -> Decimal:
    return to_decimal(os.getenv("STOREFRONT_FREE_SHIPPING_THRESHOLD", "50"))


def flat_shipping_fee() -> Decimal:
    return to_decimal(os.getenv("STOREFRONT_FLAT_SHIPPING_FEE", "5"))


@dataclass(frozen=True)
class PriceBreakdown:
    subtotal: Decimal
    shipping: Decimal
    total: Decimal
    currency: str = CURRENCY


def shipping_for(subtotal: Decimal) -> Decimal:
    """Flat fee below the free-shipping threshold, nothing at or above it."""
    if subtotal >= free_shipping_threshold():
        return ZERO
    return flat_shipping_fee()


def price_lines(lines) -> PriceBreakdown:
    """Price ``(unit_price, quantity)`` pairs.

    Unit prices are Decimals already frozen from the products; nothing here
    reads the live catalog.
    """
    subtotal = sum((to_decimal(price) * quantity for price, quantity in lines), ZERO)
    subtotal = to_decimal(subtotal)
    shipping = shipping_for(subtotal)
    return PriceBreakdown(subtotal=subtotal, shipping=shipping, total=subtotal + shipping)
