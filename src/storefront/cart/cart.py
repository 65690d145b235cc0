"""Shopping Cart aggregate (CQRS) — the per-customer cart ledger.

One cart per customer, holding at most one line per product. Stock checks
made here are advisory: they compare against the product's stock at the
moment of the change, and checkout re-validates everything.
"""

from datetime import UTC, datetime

from protean.fields import DateTime, HasMany, Identifier, Integer

from storefront.cart.events import CartCleared, CartItemAdded, CartItemRemoved, CartQuantityUpdated
from storefront.domain import storefront
from storefront.shared.errors import InsufficientStock, InvalidArgument, NotFound


@storefront.entity(part_of="ShoppingCart", limit=-1)
class CartItem:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    added_at = DateTime()


def validate_quantity(quantity):
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
        raise InvalidArgument("quantity", "Quantity must be at least 1")


@storefront.aggregate
class ShoppingCart:
    customer_id = Identifier(required=True)
    items = HasMany(CartItem)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def create(cls, customer_id):
        now = datetime.now(UTC)
        return cls(customer_id=customer_id, created_at=now, updated_at=now)

    def line_for(self, product_id):
        return next((i for i in self.items if str(i.product_id) == str(product_id)), None)

    def lines_newest_first(self):
        ranked = sorted(enumerate(self.items), key=lambda pair: (pair[1].added_at, pair[0]), reverse=True)
        return [item for _, item in ranked]

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def add_item(self, product, quantity):
        """Add ``quantity`` of ``product``, topping up an existing line."""
        validate_quantity(quantity)

        existing = self.line_for(product.id)
        new_quantity = (existing.quantity if existing else 0) + quantity
        if new_quantity > product.stock:
            raise InsufficientStock(
                product_id=product.id,
                product_name=product.name,
                requested=new_quantity,
                available=product.stock,
            )

        now = datetime.now(UTC)
        if existing:
            existing.quantity = new_quantity
        else:
            self.add_items(CartItem(product_id=product.id, quantity=quantity, added_at=now))
        self.updated_at = now

        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                customer_id=str(self.customer_id),
                product_id=str(product.id),
                quantity_added=quantity,
                new_quantity=new_quantity,
            )
        )

    def set_quantity(self, product, quantity):
        validate_quantity(quantity)
        if quantity > product.stock:
            raise InsufficientStock(
                product_id=product.id,
                product_name=product.name,
                requested=quantity,
                available=product.stock,
            )

        item = self.line_for(product.id)
        if item is None:
            raise NotFound("cart_item", "Cart item not found")

        previous_quantity = item.quantity
        item.quantity = quantity
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartQuantityUpdated(
                cart_id=str(self.id),
                customer_id=str(self.customer_id),
                product_id=str(product.id),
                previous_quantity=previous_quantity,
                new_quantity=quantity,
            )
        )

    def remove_item(self, product_id):
        item = self.line_for(product_id)
        if item is None:
            raise NotFound("cart_item", "Cart item not found")

        self.remove_items(item)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartItemRemoved(
                cart_id=str(self.id),
                customer_id=str(self.customer_id),
                product_id=str(product_id),
            )
        )

    def clear(self, order_id):
        """Empty the cart after its contents became an order."""
        cleared = len(self.items)
        if not cleared:
            return

        for item in list(self.items):
            self.remove_items(item)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartCleared(
                cart_id=str(self.id),
                customer_id=str(self.customer_id),
                order_id=str(order_id),
                items_cleared=cleared,
            )
        )
