"""Loading orders on behalf of a caller."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.order.order import Order
from storefront.shared.errors import Forbidden, NotFound


def load_order(order_id) -> Order:
    try:
        return current_domain.repository_for(Order).get(order_id)
    except ObjectNotFoundError:
        raise NotFound("order", f"Order {order_id} not found") from None


def ensure_access(order: Order, requested_by, is_admin: bool) -> None:
    """Admins see every order, customers only their own."""
    if not is_admin and not order.is_owned_by(requested_by):
        raise Forbidden("You do not have access to this order")


def load_order_for(order_id, requested_by, is_admin=False) -> Order:
    order = load_order(order_id)
    ensure_access(order, requested_by, is_admin)
    return order
