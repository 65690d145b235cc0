"""Cart item management — commands and handler.

Quantity and stock checks here are advisory: checkout re-validates against
the live inventory before anything is withdrawn.
"""

import structlog
from protean import handle
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from storefront.cart.cart import ShoppingCart, validate_quantity
from storefront.domain import storefront
from storefront.product.product import Product
from storefront.shared.errors import NotFound

logger = structlog.get_logger(__name__)


@storefront.command(part_of="ShoppingCart")
class AddToCart:
    customer_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)


@storefront.command(part_of="ShoppingCart")
class UpdateCartQuantity:
    customer_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)


@storefront.command(part_of="ShoppingCart")
class RemoveFromCart:
    customer_id = Identifier(required=True)
    product_id = Identifier(required=True)


def _available_product(product_id):
    product = current_domain.repository_for(Product).get_available(product_id)
    if product is None:
        raise NotFound("product", f"Product {product_id} not found")
    return product


@storefront.command_handler(part_of=ShoppingCart)
class ManageCartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        validate_quantity(command.quantity)
        product = _available_product(command.product_id)

        cart = repo.for_customer(command.customer_id) or ShoppingCart.create(command.customer_id)
        cart.add_item(product, command.quantity)
        repo.add(cart)

        logger.info(
            "Cart item added",
            customer_id=str(command.customer_id),
            product_id=str(product.id),
            quantity=command.quantity,
        )

    @handle(UpdateCartQuantity)
    def update_cart_quantity(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        validate_quantity(command.quantity)
        product = _available_product(command.product_id)

        cart = repo.for_customer(command.customer_id)
        if cart is None:
            raise NotFound("cart_item", "Cart item not found")
        cart.set_quantity(product, command.quantity)
        repo.add(cart)

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.for_customer(command.customer_id)
        if cart is None:
            raise NotFound("cart_item", "Cart item not found")
        cart.remove_item(command.product_id)
        repo.add(cart)
