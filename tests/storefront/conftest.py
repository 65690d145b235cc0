import pytest
from protean import current_domain
from protean.integrations.pytest import DomainFixture
from storefront.revalidation import reset_invalidator, set_invalidator
from storefront.revalidation.fake_adapter import RecordingInvalidator


@pytest.fixture(scope="session")
def storefront_bed():
    from storefront.domain import storefront

    bed = DomainFixture(storefront)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(storefront_bed):
    with storefront_bed.domain_context():
        yield


@pytest.fixture(autouse=True)
def invalidator():
    """Record view invalidations instead of logging them."""
    recorder = RecordingInvalidator()
    set_invalidator(recorder)
    yield recorder
    reset_invalidator()


@pytest.fixture()
def make_product():
    """Persist a product through the admin command and return it."""
    from storefront.product.management import AddProduct
    from storefront.product.product import Product

    def _make(name="Widget", price="10.00", stock=10, **kwargs):
        product_id = current_domain.process(
            AddProduct(name=name, price=price, stock=stock, **kwargs),
            asynchronous=False,
        )
        return current_domain.repository_for(Product).get(product_id)

    return _make


@pytest.fixture()
def stock_of():
    from storefront.product.product import Product

    def _stock(product_id):
        return current_domain.repository_for(Product).get(product_id).stock

    return _stock
