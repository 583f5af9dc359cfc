from datetime import datetime

from storefront.domain import storefront
from storefront.order.repository import created_between
from storefront.temp_order.temp_order import TempOrder
from storefront.temp_order.temp_order_item import TempOrderItem


@storefront.repository(part_of=TempOrder)
class TempOrders:
    def find(self, temp_order_id: str) -> TempOrder | None:
        return self._dao.query.filter(id=temp_order_id).all().first

    def find_by_shop(
        self, shop_id: str, created_from: datetime | None = None, created_before: datetime | None = None
    ) -> list[TempOrder]:
        return (
            self._dao.query.filter(shop_id=shop_id, **created_between(created_from, created_before))
            .order_by("-created_at")
            .all()
            .items
        )


@storefront.repository(part_of=TempOrderItem)
class TempOrderItems:
    def for_temp_order(self, temp_order_id: str) -> list[TempOrderItem]:
        return self._dao.query.filter(temp_order_id=temp_order_id).order_by("created_at").all().items
