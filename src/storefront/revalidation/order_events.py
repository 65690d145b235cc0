"""Order events → stale view hints for the customer and for admins."""

import structlog
from protean.utils.mixins import handle

from storefront.domain import storefront
from storefront.order.events import OrderCancelled, OrderPlaced, OrderStatusChanged
from storefront.order.order import Order
from storefront.revalidation import get_invalidator

logger = structlog.get_logger(__name__)


def order_view_paths(order_id) -> list[str]:
    return ["/orders", f"/orders/{order_id}", "/admin/orders"]


@storefront.event_handler(part_of=Order)
class OrderViewsRevalidationHandler:
    def _invalidate(self, event, reason):
        customer_id = str(event.customer_id)
        logger.debug(
            "Invalidating order views",
            order_id=str(event.order_id),
            customer_id=customer_id,
            reason=reason,
        )
        get_invalidator().invalidate(order_view_paths(event.order_id), reason=reason, customer_id=customer_id)

    @handle(OrderPlaced)
    def on_order_placed(self, event: OrderPlaced) -> None:
        self._invalidate(event, "order_placed")

    @handle(OrderCancelled)
    def on_order_cancelled(self, event: OrderCancelled) -> None:
        self._invalidate(event, "order_cancelled")

    @handle(OrderStatusChanged)
    def on_order_status_changed(self, event: OrderStatusChanged) -> None:
        self._invalidate(event, "order_status_changed")
