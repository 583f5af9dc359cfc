from datetime import UTC, datetime, timedelta

import pytest
from protean.integrations.pytest import DomainFixture
from protean.utils.globals import current_domain

from storefront.persistence.fake_adapter import FakeStore
from storefront.reconciliation.core import OrderReconciliation
from storefront.reconciliation.pricing import TotalPricePolicy

SHOP_ID = "shop-1"
OTHER_SHOP_ID = "shop-2"
SHARE_TOKEN = "share-abc"


class TickingClock:
    """Deterministic clock: every reading is one minute after the previous one."""

    def __init__(self, start=datetime(2024, 1, 15, 10, 30, tzinfo=UTC), step=timedelta(minutes=1)):
        self.current = start
        self.step = step

    def __call__(self):
        now = self.current
        self.current += self.step
        return now

    def set(self, moment):
        self.current = moment


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

        # Clear all databases
        for _, provider in current_domain.providers.items():
            provider._data_reset()


@pytest.fixture()
def clock():
    return TickingClock()


@pytest.fixture()
def store(clock):
    store = FakeStore(clock=clock)
    store.add_shop(SHOP_ID, SHARE_TOKEN)
    store.add_shop(OTHER_SHOP_ID, "share-other")
    return store


@pytest.fixture()
def core(store):
    return OrderReconciliation(store.persistence(), total_price_policy=TotalPricePolicy.AS_OBSERVED)


@pytest.fixture()
def customer(store):
    return store.add_customer(SHOP_ID, "John Doe", phone="+62 811 1111", customer_id="customer-5")


@pytest.fixture()
def coffee(store):
    return store.add_product(SHOP_ID, "Coffee", 1000, product_id="product-10")


@pytest.fixture()
def tea(store):
    return store.add_product(SHOP_ID, "Tea", 500, product_id="product-20")
