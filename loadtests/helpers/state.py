"""Per-user state tracking for Locust load test scenarios.

Each Locust user instance maintains its own state — no cross-user sharing.
"""

from dataclasses import dataclass, field


@dataclass
class ShopperState:
    """Tracks one simulated shopper's cart and orders."""

    user_id: str | None = None
    cart_product_ids: list[str] = field(default_factory=list)
    order_ids: list[str] = field(default_factory=list)


@dataclass
class ContentionStats:
    """Outcome counts for checkouts racing on one hot product."""

    placed: int = 0
    insufficient: int = 0
    conflicts: int = 0
