"""VerifiedPurchases — which customer received which product, per delivered order.

Rows exist only while the order sits in DELIVERED. An admin moving an order
back out of DELIVERED withdraws them again.
"""

from protean.core.projector import on
from protean.fields import DateTime, Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.order.events import OrderStatusChanged
from storefront.order.order import Order, OrderStatus


@storefront.projection
class VerifiedPurchases:
    vp_id = Identifier(identifier=True, required=True)
    customer_id = String(required=True)
    product_id = String(required=True)
    order_id = String(required=True)
    delivered_at = DateTime(required=True)


def has_verified_purchase(customer_id, product_id) -> bool:
    repo = current_domain.repository_for(VerifiedPurchases)
    rows = repo._dao.query.filter(customer_id=str(customer_id), product_id=str(product_id)).limit(1).all()
    return bool(rows.items)


@storefront.projector(projector_for=VerifiedPurchases, aggregates=[Order])
class VerifiedPurchasesProjector:
    @on(OrderStatusChanged)
    def on_order_status_changed(self, event):
        delivered = OrderStatus.DELIVERED.value
        if event.new_status == delivered and event.previous_status != delivered:
            self._record_delivery(event)
        elif event.previous_status == delivered and event.new_status != delivered:
            self._withdraw_delivery(event)

    def _record_delivery(self, event):
        repo = current_domain.repository_for(VerifiedPurchases)
        order = current_domain.repository_for(Order).get(event.order_id)
        for product_id in {str(item.product_id) for item in order.items}:
            repo.add(
                VerifiedPurchases(
                    vp_id=f"{event.order_id}:{product_id}",
                    customer_id=str(event.customer_id),
                    product_id=product_id,
                    order_id=str(event.order_id),
                    delivered_at=event.changed_at,
                )
            )

    def _withdraw_delivery(self, event):
        repo = current_domain.repository_for(VerifiedPurchases)
        for record in repo._dao.query.filter(order_id=str(event.order_id)).limit(None).all().items:
            repo._dao.delete(record)
