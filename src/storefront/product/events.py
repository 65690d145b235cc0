"""Domain events for the Product aggregate."""

from protean.fields import DateTime, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Product")
class ProductAdded:
    """A product was added to the catalog."""

    __version__ = 1

    product_id = Identifier(required=True)
    name = String(required=True)
    price = String(required=True)  # decimal text
    stock = Integer(required=True)
    added_at = DateTime(required=True)


@storefront.event(part_of="Product")
class ProductUpdated:
    """An admin edited a product's details, price or stock count."""

    __version__ = 1

    product_id = Identifier(required=True)
    name = String(required=True)
    previous_price = String(required=True)
    price = String(required=True)
    previous_stock = Integer(required=True)
    stock = Integer(required=True)
    updated_at = DateTime(required=True)


@storefront.event(part_of="Product")
class ProductDiscontinued:
    """A product was taken off sale. Existing order lines keep referencing it."""

    __version__ = 1

    product_id = Identifier(required=True)
    discontinued_at = DateTime(required=True)


@storefront.event(part_of="Product")
class StockWithdrawn:
    """Stock was taken for a checkout."""

    __version__ = 1

    product_id = Identifier(required=True)
    order_id = Identifier(required=True)
    quantity = Integer(required=True)
    remaining = Integer(required=True)


@storefront.event(part_of="Product")
class StockRestored:
    """Stock was returned by a cancelled order."""

    __version__ = 1

    product_id = Identifier(required=True)
    order_id = Identifier(required=True)
    quantity = Integer(required=True)
    remaining = Integer(required=True)
