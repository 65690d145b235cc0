"""Storefront bounded context — catalog stock, shopping carts, orders and reviews.

Handles the order lifecycle (checkout, cancellation, admin status changes)
and keeps per-product stock consistent across concurrent checkouts. Product
reviews are flagged as verified purchases from delivered orders.
"""

import structlog
from protean.domain import Domain

storefront = Domain(name="storefront")

logger = structlog.get_logger(__name__)
