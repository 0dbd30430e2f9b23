import pytest
from protean.integrations.pytest import DomainFixture

from storefront.cart.pricing import reset_pricing_policy
from storefront.catalog import StaticCatalog, reset_catalog, set_catalog
from storefront.config import reset_settings
from storefront.gateway import FakeCheckoutGateway, reset_gateway, set_gateway

# Small fixed catalog so stock arithmetic in tests is explicit
TEST_CATALOG = [
    {"product_id": "prod-ten", "name": "Ten In Stock", "unit_price": 100.0, "declared_stock": 10},
    {"product_id": "prod-three", "name": "Three In Stock", "unit_price": 250.0, "declared_stock": 3},
    {"product_id": "prod-empty", "name": "Sold Out", "unit_price": 50.0, "declared_stock": 0},
    {"product_id": "prod-open", "name": "Untracked Stock", "unit_price": 20.0},
    {"product_id": "prod-grand", "name": "Thousand Piece", "unit_price": 1000.0, "declared_stock": 20},
]


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

        from protean import current_domain

        for _, provider in current_domain.providers.items():
            provider._data_reset()
        current_domain.event_store.store._data_reset()


@pytest.fixture()
def catalog():
    catalog = StaticCatalog.from_records(TEST_CATALOG)
    set_catalog(catalog)
    return catalog


@pytest.fixture()
def gateway():
    gateway = FakeCheckoutGateway()
    set_gateway(gateway)
    return gateway


@pytest.fixture(autouse=True)
def _ports(catalog, gateway):
    """Every test starts with the fixed catalog, a succeeding gateway and default pricing."""
    reset_settings()
    reset_pricing_policy()
    yield
    reset_catalog()
    reset_gateway()
    reset_pricing_policy()
    reset_settings()
