import pytest
from protean.exceptions import ObjectNotFoundError, ValidationError


@pytest.fixture
def order(core, customer):
    return core.create_order(customer.id, "shop-1", "first note")


class TestUpdateOrder:
    def test_sparse_patch(self, core, order):
        updated = core.update_order(order.id, status="in_progress")

        assert updated.status == "in_progress"
        assert updated.notes == "first note"
        assert updated.total_price == 0
        assert updated.updated_at is not None

    def test_all_fields(self, core, order):
        updated = core.update_order(order.id, total_price=7000, status="in_delivery", notes="")

        assert (updated.total_price, updated.status, updated.notes) == (7000, "in_delivery", "")

    def test_unknown_status_is_rejected_before_writing(self, core, store, order):
        with pytest.raises(ValidationError):
            core.update_order(order.id, status="shipped")

        assert store.calls_to("update_order") == 0

    def test_missing_order(self, core):
        with pytest.raises(ObjectNotFoundError):
            core.update_order("order-404", status="done")

    def test_order_of_another_shop(self, core, order):
        with pytest.raises(ObjectNotFoundError):
            core.update_order(order.id, shop_id="shop-2", status="done")


class TestOrderItems:
    def test_create_snapshots_product(self, core, order, coffee):
        item = core.create_order_item(order.id, coffee.id, 2)

        assert (item.order_id, item.product_name, item.price, item.quantity) == (order.id, "Coffee", 1000, 2)

    def test_create_on_missing_order(self, core, coffee):
        with pytest.raises(ObjectNotFoundError):
            core.create_order_item("order-404", coffee.id, 1)

    def test_create_with_unknown_product(self, core, order):
        with pytest.raises(ObjectNotFoundError):
            core.create_order_item(order.id, "product-404", 1)

    @pytest.mark.parametrize("quantity", [0, -1])
    def test_quantity_must_be_positive(self, core, store, order, coffee, quantity):
        with pytest.raises(ValidationError):
            core.create_order_item(order.id, coffee.id, quantity)

        assert store.calls_to("create_order_item") == 0

    def test_get_items(self, core, order, coffee, tea):
        core.create_order_item(order.id, coffee.id, 2)
        core.create_order_item(order.id, tea.id, 1)

        assert [item.product_name for item in core.get_order_items(order.id)] == ["Coffee", "Tea"]

    def test_get_item_is_scoped_to_order(self, core, store, order, coffee):
        other_customer = store.add_customer("shop-1", "Jane Roe")
        other_order = core.create_order(other_customer.id, "shop-1")
        item = core.create_order_item(other_order.id, coffee.id, 1)

        assert core.get_order_item(other_order.id, item.id).id == item.id
        with pytest.raises(ObjectNotFoundError):
            core.get_order_item(order.id, item.id)

    def test_update_quantity(self, core, order, coffee):
        item = core.create_order_item(order.id, coffee.id, 2)

        updated = core.update_order_item(order.id, item.id, quantity=4)

        assert updated.quantity == 4
        assert updated.price == 1000

    def test_changing_product_retakes_name_and_price(self, core, order, coffee, tea):
        item = core.create_order_item(order.id, coffee.id, 2)

        updated = core.update_order_item(order.id, item.id, product_id=tea.id)

        assert (updated.product_id, updated.product_name, updated.price, updated.quantity) == (tea.id, "Tea", 500, 2)

    def test_update_item_of_another_order(self, core, store, order, coffee):
        other_customer = store.add_customer("shop-1", "Jane Roe")
        other_order = core.create_order(other_customer.id, "shop-1")
        item = core.create_order_item(other_order.id, coffee.id, 1)

        with pytest.raises(ObjectNotFoundError):
            core.update_order_item(order.id, item.id, quantity=9)

        assert store.items[item.id].quantity == 1

    def test_update_with_non_positive_quantity(self, core, order, coffee):
        item = core.create_order_item(order.id, coffee.id, 2)

        with pytest.raises(ValidationError):
            core.update_order_item(order.id, item.id, quantity=0)

    def test_delete_item(self, core, store, order, coffee):
        item = core.create_order_item(order.id, coffee.id, 2)

        core.delete_order_item(order.id, item.id)

        assert item.id not in store.items

    def test_delete_missing_item(self, core, order):
        with pytest.raises(ObjectNotFoundError):
            core.delete_order_item(order.id, "item-404")

    def test_delete_item_of_another_order(self, core, store, order, coffee):
        other_customer = store.add_customer("shop-1", "Jane Roe")
        other_order = core.create_order(other_customer.id, "shop-1")
        item = core.create_order_item(other_order.id, coffee.id, 1)

        with pytest.raises(ObjectNotFoundError):
            core.delete_order_item(order.id, item.id)

        assert item.id in store.items
