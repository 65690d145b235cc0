"""Fixed-point money helpers.

Amounts are persisted as integer minor units (cents) and handled in code as
``Decimal`` quantized to two places. Floats never touch money.
"""

import os
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

CURRENCY = os.getenv("STOREFRONT_CURRENCY", "EGP")

CENT = Decimal("0.01")
ZERO = Decimal("0.00")


def to_decimal(value) -> Decimal:
    """Parse a price-like value into a two-place Decimal.

    Accepts Decimal, int and numeric strings. Floats are rejected.
    """
    if isinstance(value, bool) or isinstance(value, float):
        raise TypeError(f"Money must not be a {type(value).__name__}: {value!r}")
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except InvalidOperation:
        raise ValueError(f"Not a monetary amount: {value!r}") from None
    if not amount.is_finite():
        raise ValueError(f"Not a monetary amount: {value!r}")
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def to_cents(value) -> int:
    return int(to_decimal(value) * 100)


def from_cents(cents: int) -> Decimal:
    return (Decimal(cents) / 100).quantize(CENT)


def format_amount(amount: Decimal) -> str:
    """Render an amount the way the API exposes it, e.g. ``"45.00"``."""
    return str(to_decimal(amount))
