"""Read-side queries over the order summary view."""

from protean.utils.globals import current_domain

from storefront.order.order import OrderStatus
from storefront.projections.order_summary import OrderSummary
from storefront.shared.errors import InvalidArgument


def _summaries():
    repo = current_domain.repository_for(OrderSummary)
    return repo._dao.query.order_by("-created_at").limit(None)


def order_history(customer_id) -> list[OrderSummary]:
    """The customer's orders, newest first."""
    return _summaries().filter(customer_id=str(customer_id)).all().items


def all_orders(status=None) -> list[OrderSummary]:
    """Every order for the admin listing, optionally narrowed to one status."""
    if status is None:
        return _summaries().all().items

    status = status.strip().upper()
    if status not in {s.value for s in OrderStatus}:
        raise InvalidArgument("status", f"Unknown order status: {status}")
    return _summaries().filter(status=status).all().items
