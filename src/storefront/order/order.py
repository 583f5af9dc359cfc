"""Order aggregate: a staff-managed order for one customer of one shop.

An order is *active* while its status is `created`, `in_progress` or
`in_delivery`; `done` and `cancelled` are terminal. A customer may hold at most
one active order per shop. That rule spans orders, so it is enforced by the
reconciliation services rather than by the aggregate itself.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, Integer, String, Text

from storefront.domain import storefront


class OrderStatus(Enum):
    CREATED = "created"
    IN_PROGRESS = "in_progress"
    IN_DELIVERY = "in_delivery"
    DONE = "done"
    CANCELLED = "cancelled"


ACTIVE_ORDER_STATUSES = frozenset(
    {
        OrderStatus.CREATED.value,
        OrderStatus.IN_PROGRESS.value,
        OrderStatus.IN_DELIVERY.value,
    }
)


def validate_order_status(status: str) -> str:
    """Return `status` when it names an order status, else raise ``ValidationError``."""
    try:
        return OrderStatus(status).value
    except ValueError:
        raise ValidationError({"status": [f"`{status}` is not a valid order status"]}) from None


@storefront.aggregate(limit=None)
class Order:
    shop_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    customer_name = String(max_length=255, default="")
    total_price = Integer(min_value=0, default=0)
    status = String(choices=OrderStatus, default=OrderStatus.CREATED.value)
    notes = Text(default="")
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def create(cls, shop_id, customer_id, customer_name, notes=None):
        return cls(
            shop_id=shop_id,
            customer_id=customer_id,
            customer_name=customer_name or "",
            total_price=0,
            status=OrderStatus.CREATED.value,
            notes=notes or "",
            created_at=datetime.now(UTC),
        )

    @property
    def is_active(self) -> bool:
        return self.status in ACTIVE_ORDER_STATUSES

    def revise(self, total_price=None, status=None, notes=None):
        """Apply a sparse update; `None` leaves a field unchanged."""
        if total_price is not None:
            if total_price < 0:
                raise ValidationError({"total_price": ["must not be negative"]})
            self.total_price = total_price
        if status is not None:
            self.status = validate_order_status(status)
        if notes is not None:
            self.notes = notes

        self.updated_at = datetime.now(UTC)
