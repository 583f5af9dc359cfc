import pytest
from protean.exceptions import InvalidOperationError, ObjectNotFoundError, ValidationError

from storefront.errors import ActiveOrderConflict, StorageError, error_kind, require, require_positive


@pytest.mark.parametrize(
    "exc, kind",
    [
        (ObjectNotFoundError({"_entity": ["missing"]}), "not_found"),
        (ActiveOrderConflict("customer-5", "shop-1"), "conflict"),
        (ValidationError({"quantity": ["must be a positive integer"]}), "validation"),
        (InvalidOperationError("Temp order is already accepted"), "invalid_state"),
        (StorageError("disk full"), "storage_failure"),
        (RuntimeError("anything else"), "storage_failure"),
    ],
)
def test_error_kind(exc, kind):
    assert error_kind(exc) == kind


def test_conflict_is_an_invalid_operation():
    assert isinstance(ActiveOrderConflict("customer-5", "shop-1"), InvalidOperationError)


def test_conflict_carries_field_messages():
    conflict = ActiveOrderConflict("customer-5", "shop-1")

    assert conflict.messages == {"customer_id": ["customer already has an active order"]}
    assert (conflict.customer_id, conflict.shop_id) == ("customer-5", "shop-1")


def test_require_reports_every_blank_field():
    with pytest.raises(ValidationError) as exc:
        require(order_id="order-1", customer_id="", shop_id=None)

    assert set(exc.value.messages) == {"customer_id", "shop_id"}


@pytest.mark.parametrize("quantity", [0, -1, 1.5, True, None])
def test_require_positive(quantity):
    with pytest.raises(ValidationError):
        require_positive(quantity=quantity)
