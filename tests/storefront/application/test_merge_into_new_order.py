import pytest
from protean.exceptions import InvalidOperationError, ObjectNotFoundError

from storefront.errors import StorageError
from storefront.reconciliation.temp_orders import TempOrderLine


@pytest.fixture
def temp_order(core, coffee, tea):
    return core.create_temp_order(
        "Jane", "+62 812", "share-abc", [TempOrderLine(coffee.id, 5), TempOrderLine(tea.id, 1)]
    )


def test_opens_order_with_temp_order_lines(core, store, customer, temp_order):
    order = core.merge_temp_order(temp_order.id, customer.id, "shop-1")

    assert order.status == "created"
    assert order.customer_id == customer.id
    assert [(item.product_name, item.price, item.quantity) for item in order.items] == [
        ("Coffee", 1000, 5),
        ("Tea", 500, 1),
    ]
    assert store.temp_orders[temp_order.id].status == "accepted"
    assert core.get_active_order(customer.id, "shop-1").id == order.id


def test_reports_stored_total_of_the_new_order(core, store, customer, temp_order):
    order = core.merge_temp_order(temp_order.id, customer.id, "shop-1")

    assert order.total_price == 0
    assert store.orders[order.id].total_price == 0


def test_all_writes_share_one_transaction(core, store, customer, temp_order):
    begins = store.calls_to("begin")

    core.merge_temp_order(temp_order.id, customer.id, "shop-1")

    assert store.calls_to("begin") == begins + 1
    assert store.committed == 2


def test_empty_temp_order_creates_empty_order(core, store, customer):
    temp_order = core.create_temp_order("Jane", "+62 812", "share-abc")

    order = core.merge_temp_order(temp_order.id, customer.id, "shop-1")

    assert order.items == ()
    assert store.calls_to("create_order_item") == 0
    assert store.temp_orders[temp_order.id].status == "accepted"


def test_failing_acceptance_rolls_everything_back(core, store, customer, temp_order):
    store.fail_on("update_temp_order_status")

    with pytest.raises(StorageError):
        core.merge_temp_order(temp_order.id, customer.id, "shop-1")

    assert store.orders == {}
    assert store.items == {}
    assert store.temp_orders[temp_order.id].status == "pending"
    assert core.get_active_order(customer.id, "shop-1") is None


def test_failing_item_write_rolls_back_the_order(core, store, customer, temp_order):
    store.fail_on("create_order_item", after=1)

    with pytest.raises(StorageError):
        core.merge_temp_order(temp_order.id, customer.id, "shop-1")

    assert store.orders == {}
    assert store.items == {}


def test_temp_order_is_merged_at_most_once(core, store, customer, temp_order):
    core.merge_temp_order(temp_order.id, customer.id, "shop-1")
    begins = store.calls_to("begin")

    with pytest.raises(InvalidOperationError):
        core.merge_temp_order(temp_order.id, customer.id, "shop-1")

    assert store.calls_to("begin") == begins
    assert len(store.orders) == 1


def test_rejected_temp_order_cannot_be_merged(core, customer, temp_order):
    core.reject_temp_order(temp_order.id, "shop-1")

    with pytest.raises(InvalidOperationError):
        core.merge_temp_order(temp_order.id, customer.id, "shop-1")


def test_temp_order_of_another_shop(core, customer, temp_order):
    with pytest.raises(ObjectNotFoundError):
        core.merge_temp_order(temp_order.id, customer.id, "shop-2")
