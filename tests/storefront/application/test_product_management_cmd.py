"""Application tests for product administration commands."""

from decimal import Decimal

import pytest
from protean import current_domain
from storefront.product.listing import list_products
from storefront.product.management import AddProduct, DiscontinueProduct, UpdateProduct
from storefront.product.product import Product
from storefront.shared.errors import InvalidArgument, NotFound


class TestAddProductCommand:
    def test_add_persists(self):
        product_id = current_domain.process(
            AddProduct(name="Mug", price="12.50", stock=7, category="Kitchen"),
            asynchronous=False,
        )
        product = current_domain.repository_for(Product).get(product_id)
        assert product.price == Decimal("12.50")
        assert product.stock == 7
        assert product.category == "Kitchen"

    def test_bad_price(self):
        with pytest.raises(InvalidArgument):
            current_domain.process(AddProduct(name="Mug", price="twelve", stock=1), asynchronous=False)


class TestUpdateProductCommand:
    def test_update_persists(self, make_product):
        product = make_product(price="10.00", stock=3)
        current_domain.process(
            UpdateProduct(product_id=product.id, name="Big Mug", price="11.00", stock=9),
            asynchronous=False,
        )
        product = current_domain.repository_for(Product).get(product.id)
        assert product.name == "Big Mug"
        assert product.price == Decimal("11.00")
        assert product.stock == 9

    def test_unknown_product(self):
        with pytest.raises(NotFound):
            current_domain.process(
                UpdateProduct(product_id="missing", name="X", price="1.00", stock=1),
                asynchronous=False,
            )


class TestDiscontinueProductCommand:
    def test_discontinued_product_leaves_catalog(self, make_product):
        keep = make_product(name="Keep")
        gone = make_product(name="Gone")
        current_domain.process(DiscontinueProduct(product_id=gone.id), asynchronous=False)

        assert [p.name for p in list_products()] == ["Keep"]
        assert current_domain.repository_for(Product).get(gone.id).is_active is False
        assert current_domain.repository_for(Product).get(keep.id).is_active is True
