"""Order cancellation — command, handler and the stock reversal it implies."""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Boolean, Identifier
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.order.access import ensure_access, load_order
from storefront.order.order import Order
from storefront.product.product import Product
from storefront.shared.retry import process_with_retry

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Order")
class CancelOrder:
    order_id = Identifier(required=True)
    requested_by = Identifier(required=True)
    is_admin = Boolean(default=False)


def cancel_and_restock(order: Order, cancelled_by) -> None:
    """Cancel ``order`` and put every line's quantity back on its product.

    Must run inside the caller's unit of work so the status change and the
    stock restoration commit together.
    """
    order.cancel(cancelled_by=cancelled_by)
    current_domain.repository_for(Order).add(order)

    product_repo = current_domain.repository_for(Product)
    for item in order.items:
        try:
            product = product_repo.get(item.product_id)
        except ObjectNotFoundError:
            logger.warning(
                "Product gone, stock not restored",
                order_id=str(order.id),
                product_id=str(item.product_id),
                quantity=item.quantity,
            )
            continue
        product.restore_stock(item.quantity, order_id=order.id)
        product_repo.add(product)

    logger.info(
        "Order cancelled",
        order_id=str(order.id),
        customer_id=str(order.customer_id),
        cancelled_by=str(cancelled_by),
    )


@storefront.command_handler(part_of=Order)
class CancelOrderHandler:
    @handle(CancelOrder)
    def cancel_order(self, command):
        order = load_order(command.order_id)
        ensure_access(order, command.requested_by, command.is_admin)
        cancel_and_restock(order, cancelled_by=command.requested_by)
        return order


def cancel_order(order_id, requested_by, is_admin=False) -> Order:
    """Cancel an order as ``requested_by`` and return it."""
    return process_with_retry(
        CancelOrder(order_id=order_id, requested_by=requested_by, is_admin=is_admin)
    )
