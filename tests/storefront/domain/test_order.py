import pytest
from protean.exceptions import ValidationError

from storefront.order.order import ACTIVE_ORDER_STATUSES, Order, OrderStatus, validate_order_status


def _order(**overrides):
    values = dict(shop_id="shop-1", customer_id="customer-5", customer_name="John Doe")
    values.update(overrides)
    return Order.create(**values)


class TestOrderCreation:
    def test_new_order_is_created_with_zero_total(self):
        order = _order(notes="ring the bell")

        assert order.status == OrderStatus.CREATED.value
        assert order.total_price == 0
        assert order.notes == "ring the bell"
        assert order.created_at is not None
        assert order.updated_at is None

    def test_missing_notes_are_blank(self):
        assert not _order().notes

    def test_new_order_is_active(self):
        assert _order().is_active


class TestActiveStatuses:
    def test_active_set(self):
        assert ACTIVE_ORDER_STATUSES == {"created", "in_progress", "in_delivery"}

    @pytest.mark.parametrize("status", ["done", "cancelled"])
    def test_terminal_statuses_are_not_active(self, status):
        order = _order()
        order.revise(status=status)
        assert not order.is_active


class TestRevise:
    def test_sparse_update_leaves_other_fields(self):
        order = _order(notes="keep me")
        order.revise(status="in_progress")

        assert order.status == "in_progress"
        assert order.notes == "keep me"
        assert order.total_price == 0
        assert order.updated_at is not None

    def test_total_price_and_notes(self):
        order = _order()
        order.revise(total_price=4500, notes="")

        assert order.total_price == 4500
        assert not order.notes

    def test_unknown_status_is_rejected(self):
        with pytest.raises(ValidationError) as exc:
            _order().revise(status="shipped")
        assert "status" in exc.value.messages

    def test_negative_total_is_rejected(self):
        with pytest.raises(ValidationError):
            _order().revise(total_price=-1)


def test_validate_order_status_accepts_known_values():
    assert validate_order_status("in_delivery") == "in_delivery"
