"""Repository for the ShoppingCart aggregate."""

from storefront.cart.cart import ShoppingCart
from storefront.domain import storefront


@storefront.repository(part_of=ShoppingCart)
class ShoppingCartRepository:
    def for_customer(self, customer_id) -> ShoppingCart | None:
        carts = self._dao.query.filter(customer_id=str(customer_id)).all().items
        return carts[0] if carts else None
