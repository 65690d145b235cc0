"""Repository for the Product aggregate."""

from storefront.domain import storefront
from storefront.product.product import Product


@storefront.repository(part_of=Product)
class ProductRepository:
    def find_available(self, product_ids) -> list[Product]:
        """Fetch the active products among ``product_ids`` in a single read."""
        if not product_ids:
            return []
        return self._dao.query.filter(id__in=list(product_ids), is_active=True).limit(None).all().items

    def get_available(self, product_id) -> Product | None:
        products = self.find_available([product_id])
        return products[0] if products else None

    def list_active(self) -> list[Product]:
        return self._dao.query.filter(is_active=True).order_by("-created_at").limit(None).all().items
