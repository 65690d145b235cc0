"""Catalog reads."""

from protean.utils.globals import current_domain

from storefront.product.product import Product


def list_products() -> list[Product]:
    """Active products, newest first."""
    return current_domain.repository_for(Product).list_active()
