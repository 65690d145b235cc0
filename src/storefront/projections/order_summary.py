"""Order summary — lightweight listing/history view."""

from protean.core.projector import on
from protean.fields import DateTime, Identifier, Integer, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.order.events import OrderCancelled, OrderPlaced, OrderStatusChanged
from storefront.order.order import Order
from storefront.shared.money import CURRENCY, to_cents


@storefront.projection
class OrderSummary:
    order_id = Identifier(identifier=True, required=True)
    customer_id = Identifier(required=True)
    status = String(required=True)
    payment_status = String(required=True)
    item_count = Integer(default=0)
    total_cents = Integer(default=0)
    currency = String(default=CURRENCY)
    created_at = DateTime()
    updated_at = DateTime()


@storefront.projector(projector_for=OrderSummary, aggregates=[Order])
class OrderSummaryProjector:
    @on(OrderPlaced)
    def on_order_placed(self, event):
        current_domain.repository_for(OrderSummary).add(
            OrderSummary(
                order_id=event.order_id,
                customer_id=event.customer_id,
                status="PENDING",
                payment_status="PENDING",
                item_count=event.item_count,
                total_cents=to_cents(event.total),
                currency=event.currency,
                created_at=event.placed_at,
                updated_at=event.placed_at,
            )
        )

    @on(OrderCancelled)
    def on_order_cancelled(self, event):
        repo = current_domain.repository_for(OrderSummary)
        summary = repo.get(event.order_id)
        summary.status = "CANCELLED"
        summary.updated_at = event.cancelled_at
        repo.add(summary)

    @on(OrderStatusChanged)
    def on_order_status_changed(self, event):
        repo = current_domain.repository_for(OrderSummary)
        summary = repo.get(event.order_id)
        summary.status = event.new_status
        summary.payment_status = event.payment_status
        summary.updated_at = event.changed_at
        repo.add(summary)
