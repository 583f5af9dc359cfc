"""Query helpers for orders and order items.

The aggregates are declared with ``limit=None``, so these queries return every
matching row rather than the framework's default page of 100.
"""

from datetime import datetime

from storefront.domain import storefront
from storefront.order.order import ACTIVE_ORDER_STATUSES, Order
from storefront.order.order_item import OrderItem


def created_between(created_from: datetime | None = None, created_before: datetime | None = None) -> dict:
    """Lookup kwargs for a half-open `[created_from, created_before)` window."""
    criteria = {}
    if created_from is not None:
        criteria["created_at__gte"] = created_from
    if created_before is not None:
        criteria["created_at__lt"] = created_before
    return criteria


@storefront.repository(part_of=Order)
class Orders:
    def find(self, order_id: str) -> Order | None:
        return self._dao.query.filter(id=order_id).all().first

    def find_by_shop(
        self, shop_id: str, created_from: datetime | None = None, created_before: datetime | None = None
    ) -> list[Order]:
        return (
            self._dao.query.filter(shop_id=shop_id, **created_between(created_from, created_before))
            .order_by("-created_at")
            .all()
            .items
        )

    def find_active_for_customer(self, customer_id: str, shop_id: str) -> Order | None:
        return (
            self._dao.query.filter(
                customer_id=customer_id,
                shop_id=shop_id,
                status__in=sorted(ACTIVE_ORDER_STATUSES),
            )
            .order_by("created_at")
            .all()
            .first
        )

    def discard(self, order: Order) -> None:
        self._dao.delete(order)


@storefront.repository(part_of=OrderItem)
class OrderItems:
    def find(self, item_id: str) -> OrderItem | None:
        return self._dao.query.filter(id=item_id).all().first

    def for_order(self, order_id: str) -> list[OrderItem]:
        return self._dao.query.filter(order_id=order_id).order_by("created_at").all().items

    def find_by_product(self, product_id: str, order_id: str) -> OrderItem | None:
        return self._dao.query.filter(order_id=order_id, product_id=product_id).all().first

    def discard(self, item: OrderItem) -> None:
        self._dao.delete(item)
