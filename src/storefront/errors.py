"""Error taxonomy for order reconciliation.

Reconciliation failures are expressed with Protean's exception hierarchy so the
HTTP layer and the rest of the domain treat them uniformly:

- ``ObjectNotFoundError``: a referenced order, item, temp order or share token
  does not exist (or belongs to another shop).
- ``ActiveOrderConflict``: the customer already has an active order.
- ``ValidationError``: malformed input, e.g. blank identifiers or
  non-positive quantities.
- ``InvalidOperationError``: the operation is not allowed in the record's
  current state, e.g. merging a temp order that was already accepted.

Anything else raised by storage is a storage failure and propagates unchanged.
"""

from protean.exceptions import InvalidOperationError, ObjectNotFoundError, ValidationError

NOT_FOUND = "not_found"
CONFLICT = "conflict"
VALIDATION = "validation"
INVALID_STATE = "invalid_state"
STORAGE_FAILURE = "storage_failure"


class ActiveOrderConflict(InvalidOperationError):
    """Raised when a customer already has an order in an active status."""

    def __init__(self, customer_id: str, shop_id: str):
        self.messages = {"customer_id": ["customer already has an active order"]}
        super().__init__(self.messages)
        self.customer_id = customer_id
        self.shop_id = shop_id


class StorageError(Exception):
    """Failure reported by a storage backend."""


def error_kind(exc: BaseException) -> str:
    """Classify an exception into the reconciliation error taxonomy."""
    if isinstance(exc, ObjectNotFoundError):
        return NOT_FOUND
    if isinstance(exc, ActiveOrderConflict):
        return CONFLICT
    if isinstance(exc, ValidationError):
        return VALIDATION
    if isinstance(exc, InvalidOperationError):
        return INVALID_STATE
    return STORAGE_FAILURE


def not_found(entity: str, identifier: str) -> ObjectNotFoundError:
    return ObjectNotFoundError({"_entity": [f"{entity} `{identifier}` does not exist"]})


def require(**values: str | None) -> None:
    """Raise ``ValidationError`` for every blank identifier passed in."""
    errors = {name: ["is required"] for name, value in values.items() if not value or not str(value).strip()}
    if errors:
        raise ValidationError(errors)


def require_positive(**values: int | None) -> None:
    """Raise ``ValidationError`` for every quantity that is not a positive integer."""
    errors = {
        name: ["must be a positive integer"]
        for name, value in values.items()
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0
    }
    if errors:
        raise ValidationError(errors)
