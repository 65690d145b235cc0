"""Product administration — commands and handler."""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.product.product import Product
from storefront.shared.errors import NotFound

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Product")
class AddProduct:
    name = String(required=True, max_length=255)
    description = Text()
    category = String(max_length=100)
    price = String(required=True, max_length=20)  # decimal text
    stock = Integer(required=True, min_value=0)


@storefront.command(part_of="Product")
class UpdateProduct:
    product_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    description = Text()
    category = String(max_length=100)
    price = String(required=True, max_length=20)
    stock = Integer(required=True, min_value=0)


@storefront.command(part_of="Product")
class DiscontinueProduct:
    product_id = Identifier(required=True)


def _get_product(repo, product_id):
    try:
        return repo.get(product_id)
    except ObjectNotFoundError:
        raise NotFound("product", f"Product {product_id} not found") from None


@storefront.command_handler(part_of=Product)
class ProductManagementHandler:
    @handle(AddProduct)
    def add_product(self, command):
        product = Product.add(
            name=command.name,
            price=command.price,
            stock=command.stock,
            description=command.description,
            category=command.category,
        )
        current_domain.repository_for(Product).add(product)
        logger.info("Product added", product_id=str(product.id), stock=product.stock)
        return str(product.id)

    @handle(UpdateProduct)
    def update_product(self, command):
        repo = current_domain.repository_for(Product)
        product = _get_product(repo, command.product_id)
        product.update_details(
            name=command.name,
            price=command.price,
            stock=command.stock,
            description=command.description,
            category=command.category,
        )
        repo.add(product)
        return product

    @handle(DiscontinueProduct)
    def discontinue_product(self, command):
        repo = current_domain.repository_for(Product)
        product = _get_product(repo, command.product_id)
        product.discontinue()
        repo.add(product)
        logger.info("Product discontinued", product_id=str(product.id))
