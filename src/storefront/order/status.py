"""Admin status transitions for orders."""

import structlog
from protean import handle
from protean.fields import Boolean, Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.order.access import load_order
from storefront.order.cancellation import cancel_and_restock
from storefront.order.order import Order, OrderStatus, PaymentStatus
from storefront.shared.errors import Forbidden, InvalidArgument
from storefront.shared.retry import process_with_retry

logger = structlog.get_logger(__name__)

_STATUSES = {s.value for s in OrderStatus}
_PAYMENT_STATUSES = {s.value for s in PaymentStatus}


@storefront.command(part_of="Order")
class SetOrderStatus:
    order_id = Identifier(required=True)
    status = String(required=True, max_length=20)
    payment_status = String(max_length=20)
    requested_by = Identifier(required=True)
    is_admin = Boolean(default=False)


@storefront.command_handler(part_of=Order)
class OrderStatusHandler:
    @handle(SetOrderStatus)
    def set_order_status(self, command):
        if not command.is_admin:
            raise Forbidden("Only admins can change order status")

        status = command.status.strip().upper()
        if status not in _STATUSES:
            raise InvalidArgument("status", f"Unknown order status: {command.status}")
        payment_status = command.payment_status.strip().upper() if command.payment_status else None
        if payment_status is not None and payment_status not in _PAYMENT_STATUSES:
            raise InvalidArgument("payment_status", f"Unknown payment status: {command.payment_status}")

        order = load_order(command.order_id)

        if status == OrderStatus.CANCELLED.value:
            cancel_and_restock(order, cancelled_by=command.requested_by)
            return order

        order.change_status(status, payment_status=payment_status)
        current_domain.repository_for(Order).add(order)
        logger.info(
            "Order status changed",
            order_id=str(order.id),
            status=order.status,
            payment_status=order.payment_status,
        )
        return order


def set_order_status(order_id, status, requested_by, is_admin=False, payment_status=None) -> Order:
    """Move an order to ``status`` as an admin and return it."""
    return process_with_retry(
        SetOrderStatus(
            order_id=order_id,
            status=status,
            payment_status=payment_status,
            requested_by=requested_by,
            is_admin=is_admin,
        )
    )
