"""Product aggregate (CQRS) — the inventory store.

Each product carries its price in minor units and a non-negative stock count.
Stock only moves through ``withdraw_stock`` (checkout) and ``restore_stock``
(cancellation), or through an explicit admin edit. A withdrawal is
conditional: it refuses to take more than is on hand, and the repository's
version check refuses to persist a withdrawal computed from a stale read.
"""

from datetime import UTC, datetime

from protean.fields import Boolean, DateTime, Integer, String, Text

from storefront.domain import storefront
from storefront.product.events import (
    ProductAdded,
    ProductDiscontinued,
    ProductUpdated,
    StockRestored,
    StockWithdrawn,
)
from storefront.shared.errors import InsufficientStock, InvalidArgument
from storefront.shared.money import format_amount, from_cents, to_cents


def _validated_stock(stock):
    if isinstance(stock, bool) or not isinstance(stock, int) or stock < 0:
        raise InvalidArgument("stock", "Stock must be a non-negative integer")
    return stock


def _validated_price_cents(price):
    try:
        cents = to_cents(price)
    except (TypeError, ValueError) as exc:
        raise InvalidArgument("price", str(exc)) from None
    if cents < 0:
        raise InvalidArgument("price", "Price must not be negative")
    return cents


@storefront.aggregate
class Product:
    name = String(required=True, max_length=255)
    description = Text()
    category = String(max_length=100)
    price_cents = Integer(required=True, min_value=0)
    stock = Integer(required=True, min_value=0, default=0)
    is_active = Boolean(default=True)
    created_at = DateTime()
    updated_at = DateTime()

    @property
    def price(self):
        return from_cents(self.price_cents)

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def add(cls, name, price, stock=0, description=None, category=None):
        now = datetime.now(UTC)
        product = cls(
            name=name,
            description=description,
            category=category,
            price_cents=_validated_price_cents(price),
            stock=_validated_stock(stock),
            is_active=True,
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductAdded(
                product_id=str(product.id),
                name=name,
                price=format_amount(product.price),
                stock=product.stock,
                added_at=now,
            )
        )
        return product

    # -------------------------------------------------------------------
    # Admin edits
    # -------------------------------------------------------------------
    def update_details(self, name, price, stock, description=None, category=None):
        """Overwrite the editable fields. Order lines already placed keep their frozen price."""
        previous_price = format_amount(self.price)
        previous_stock = self.stock

        self.name = name
        self.description = description
        self.category = category
        self.price_cents = _validated_price_cents(price)
        self.stock = _validated_stock(stock)
        now = datetime.now(UTC)
        self.updated_at = now

        self.raise_(
            ProductUpdated(
                product_id=str(self.id),
                name=name,
                previous_price=previous_price,
                price=format_amount(self.price),
                previous_stock=previous_stock,
                stock=self.stock,
                updated_at=now,
            )
        )

    def discontinue(self):
        if not self.is_active:
            return
        self.is_active = False
        now = datetime.now(UTC)
        self.updated_at = now
        self.raise_(ProductDiscontinued(product_id=str(self.id), discontinued_at=now))

    # -------------------------------------------------------------------
    # Stock movements
    # -------------------------------------------------------------------
    def ensure_stock_for(self, quantity):
        """Raise InsufficientStock unless ``quantity`` units are on hand."""
        if self.stock < quantity:
            raise InsufficientStock(
                product_id=self.id,
                product_name=self.name,
                requested=quantity,
                available=self.stock,
            )

    def withdraw_stock(self, quantity, order_id):
        if quantity < 1:
            raise InvalidArgument("quantity", "Quantity must be at least 1")
        self.ensure_stock_for(quantity)

        self.stock -= quantity
        self.updated_at = datetime.now(UTC)
        self.raise_(
            StockWithdrawn(
                product_id=str(self.id),
                order_id=str(order_id),
                quantity=quantity,
                remaining=self.stock,
            )
        )

    def restore_stock(self, quantity, order_id):
        if quantity < 1:
            raise InvalidArgument("quantity", "Quantity must be at least 1")

        self.stock += quantity
        self.updated_at = datetime.now(UTC)
        self.raise_(
            StockRestored(
                product_id=str(self.id),
                order_id=str(order_id),
                quantity=quantity,
                remaining=self.stock,
            )
        )
