"""TempOrder aggregate: an order a customer submitted through a shop's public link.

A temp order waits as `pending` until staff either merge it into a real order
(`accepted`) or dismiss it (`rejected`). Both outcomes are final.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import InvalidOperationError, ValidationError
from protean.fields import DateTime, Identifier, Integer, String

from storefront.domain import storefront


class TempOrderStatus(Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


@storefront.aggregate(limit=None)
class TempOrder:
    shop_id = Identifier(required=True)
    customer_name = String(required=True, max_length=255)
    customer_phone = String(required=True, max_length=50)
    total_price = Integer(min_value=0, default=0)
    status = String(choices=TempOrderStatus, default=TempOrderStatus.PENDING.value)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def create(cls, shop_id, customer_name, customer_phone):
        return cls(
            shop_id=shop_id,
            customer_name=customer_name,
            customer_phone=customer_phone,
            total_price=0,
            status=TempOrderStatus.PENDING.value,
            created_at=datetime.now(UTC),
        )

    @property
    def is_pending(self) -> bool:
        return self.status == TempOrderStatus.PENDING.value

    def settle(self, status):
        """Move a pending temp order to `accepted` or `rejected`."""
        try:
            target = TempOrderStatus(status)
        except ValueError:
            raise ValidationError({"status": [f"`{status}` is not a valid temp order status"]}) from None

        if target == TempOrderStatus.PENDING:
            raise ValidationError({"status": ["a temp order cannot be moved back to pending"]})
        if not self.is_pending:
            raise InvalidOperationError(f"Temp order is already {self.status}")

        self.status = target.value
        self.updated_at = datetime.now(UTC)

    def set_total_price(self, total_price):
        if total_price < 0:
            raise ValidationError({"total_price": ["must not be negative"]})
        self.total_price = total_price
        self.updated_at = datetime.now(UTC)
