import pytest
from protean.exceptions import InvalidOperationError, ObjectNotFoundError

from storefront.persistence.records import OrderFilterOptions
from storefront.reconciliation.temp_orders import TempOrderLine


@pytest.fixture
def temp_order(core, coffee):
    return core.create_temp_order("Jane Roe", "+62 812 3456", "share-abc", [TempOrderLine(coffee.id, 2)])


class TestRetrieval:
    def test_by_id_with_items(self, core, temp_order):
        found = core.get_temp_order_by_id(temp_order.id, shop_id="shop-1")

        assert found.total_price == 2000
        assert [item.quantity for item in found.items] == [2]

    def test_by_id_of_another_shop(self, core, temp_order):
        with pytest.raises(ObjectNotFoundError):
            core.get_temp_order_by_id(temp_order.id, shop_id="shop-2")

    def test_list_by_shop(self, core, temp_order):
        listed = core.get_temp_orders_by_shop("shop-1")

        assert [found.id for found in listed] == [temp_order.id]
        assert listed[0].items is None
        assert core.get_temp_orders_by_shop("shop-2") == []

    def test_list_by_phone(self, core, store, temp_order):
        core.create_temp_order("Ann Poe", "+62 900", "share-abc")

        listed = core.get_temp_orders_by_shop("shop-1", OrderFilterOptions(search="3456"))

        assert [found.customer_name for found in listed] == ["Jane Roe"]


class TestRejection:
    def test_rejects_pending_temp_order(self, core, store, temp_order):
        rejected = core.reject_temp_order(temp_order.id, "shop-1")

        assert rejected.status == "rejected"
        assert store.temp_orders[temp_order.id].status == "rejected"
        assert store.calls_to("begin") == 1  # only the creation

    def test_rejected_temp_order_stays_rejected(self, core, temp_order):
        core.reject_temp_order(temp_order.id, "shop-1")

        with pytest.raises(InvalidOperationError):
            core.reject_temp_order(temp_order.id, "shop-1")

    def test_accepted_temp_order_cannot_be_rejected(self, core, customer, temp_order):
        core.merge_temp_order(temp_order.id, customer.id, "shop-1")

        with pytest.raises(InvalidOperationError):
            core.reject_temp_order(temp_order.id, "shop-1")

    def test_other_shop(self, core, temp_order):
        with pytest.raises(ObjectNotFoundError):
            core.reject_temp_order(temp_order.id, "shop-2")
