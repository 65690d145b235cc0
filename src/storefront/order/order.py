"""Order aggregate (CQRS) — a placed order and its frozen lines.

Orders are created once per checkout and never deleted. Lines are snapshots:
product name and unit price are copied at checkout and never recomputed.

Lifecycle:
    PENDING → PROCESSING → SHIPPED → DELIVERED   (admin driven)
    PENDING | PROCESSING → CANCELLED              (customer or admin)
"""

import json
from datetime import UTC, datetime
from enum import Enum

import structlog
from protean.fields import DateTime, HasMany, Identifier, Integer, String, Text, ValueObject

from storefront.domain import storefront
from storefront.order.events import OrderCancelled, OrderPlaced, OrderStatusChanged
from storefront.shared.errors import InvalidState
from storefront.shared.money import CURRENCY, format_amount, from_cents, to_cents
from storefront.shared.phone import PhoneNumber

logger = structlog.get_logger(__name__)


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"


class PaymentStatus(Enum):
    PENDING = "PENDING"
    PAID = "PAID"


_CANCELLABLE_STATES = {OrderStatus.PENDING.value, OrderStatus.PROCESSING.value}

_LIFECYCLE = [
    OrderStatus.PENDING.value,
    OrderStatus.PROCESSING.value,
    OrderStatus.SHIPPED.value,
    OrderStatus.DELIVERED.value,
]


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@storefront.value_object(part_of="Order")
class OrderPricing:
    """Server-computed money summary, locked at checkout."""

    subtotal_cents = Integer(required=True, min_value=0)
    shipping_cents = Integer(required=True, min_value=0)
    total_cents = Integer(required=True, min_value=0)
    currency = String(max_length=3, default=CURRENCY)

    @property
    def subtotal(self):
        return from_cents(self.subtotal_cents)

    @property
    def shipping(self):
        return from_cents(self.shipping_cents)

    @property
    def total(self):
        return from_cents(self.total_cents)


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@storefront.entity(part_of="Order", limit=-1)
class OrderItem:
    product_id = Identifier(required=True)
    product_name = String(required=True, max_length=255)
    quantity = Integer(required=True, min_value=1)
    unit_price_cents = Integer(required=True, min_value=0)

    @property
    def unit_price(self):
        return from_cents(self.unit_price_cents)

    @property
    def line_total(self):
        return self.unit_price * self.quantity


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@storefront.aggregate
class Order:
    customer_id = Identifier(required=True)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    payment_status = String(choices=PaymentStatus, default=PaymentStatus.PENDING.value)
    items = HasMany(OrderItem)
    pricing = ValueObject(OrderPricing)
    shipping_address = Text(required=True)
    contact_phone = ValueObject(PhoneNumber)
    notes = Text()
    cancelled_by = Identifier()
    cancelled_at = DateTime()
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def place(cls, customer_id, shipping_address, phone_number, notes, lines, breakdown):
        """Create a PENDING order from priced checkout lines.

        Args:
            lines: ``(product, quantity)`` pairs; each line freezes the
                product's current name and price.
            breakdown: the ``PriceBreakdown`` computed from those lines.
        """
        now = datetime.now(UTC)
        order = cls(
            customer_id=customer_id,
            status=OrderStatus.PENDING.value,
            payment_status=PaymentStatus.PENDING.value,
            shipping_address=shipping_address.strip(),
            contact_phone=PhoneNumber(number=phone_number),
            notes=notes,
            pricing=OrderPricing(
                subtotal_cents=to_cents(breakdown.subtotal),
                shipping_cents=to_cents(breakdown.shipping),
                total_cents=to_cents(breakdown.total),
                currency=breakdown.currency,
            ),
            created_at=now,
            updated_at=now,
        )
        for product, quantity in lines:
            order.add_items(
                OrderItem(
                    product_id=product.id,
                    product_name=product.name,
                    quantity=quantity,
                    unit_price_cents=product.price_cents,
                )
            )

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                customer_id=str(customer_id),
                items=json.dumps(
                    [
                        {
                            "product_id": str(item.product_id),
                            "product_name": item.product_name,
                            "quantity": item.quantity,
                            "unit_price": format_amount(item.unit_price),
                        }
                        for item in order.items
                    ]
                ),
                item_count=sum(item.quantity for item in order.items),
                subtotal=format_amount(breakdown.subtotal),
                shipping=format_amount(breakdown.shipping),
                total=format_amount(breakdown.total),
                currency=breakdown.currency,
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    def is_owned_by(self, user_id) -> bool:
        return str(self.customer_id) == str(user_id)

    @property
    def is_cancellable(self) -> bool:
        return self.status in _CANCELLABLE_STATES

    # -------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------
    def cancel(self, cancelled_by):
        """Mark the order CANCELLED. Restoring stock is the caller's job."""
        if not self.is_cancellable:
            raise InvalidState(self.status)

        previous_status = self.status
        now = datetime.now(UTC)
        self.status = OrderStatus.CANCELLED.value
        self.cancelled_by = cancelled_by
        self.cancelled_at = now
        self.updated_at = now

        self.raise_(
            OrderCancelled(
                order_id=str(self.id),
                customer_id=str(self.customer_id),
                previous_status=previous_status,
                cancelled_by=str(cancelled_by),
                cancelled_at=now,
            )
        )

    def change_status(self, new_status, payment_status=None):
        """Admin transition that never touches inventory.

        CANCELLED is not reachable from here, and a cancelled order cannot be
        revived since its stock has already gone back on the shelf.
        """
        if new_status == OrderStatus.CANCELLED.value:
            raise InvalidState(self.status, "Use cancellation to cancel an order")
        if self.status == OrderStatus.CANCELLED.value:
            raise InvalidState(self.status, f"Cannot change status of a cancelled order to {new_status}")

        previous_status = self.status
        if _LIFECYCLE.index(new_status) < _LIFECYCLE.index(previous_status):
            logger.warning(
                "Order moved backwards",
                order_id=str(self.id),
                previous_status=previous_status,
                new_status=new_status,
            )

        now = datetime.now(UTC)
        self.status = new_status
        if payment_status is not None:
            self.payment_status = payment_status
        self.updated_at = now

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                customer_id=str(self.customer_id),
                previous_status=previous_status,
                new_status=new_status,
                payment_status=self.payment_status,
                changed_at=now,
            )
        )
