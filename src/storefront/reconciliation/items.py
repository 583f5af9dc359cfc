"""Order line operations, always scoped to the order they belong to."""

from storefront.errors import not_found, require, require_positive
from storefront.persistence.port import OrderItemRepository, OrderRepository
from storefront.persistence.records import OrderItemPatch
from storefront.reconciliation.views import OrderItemView
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class OrderItemService:
    def __init__(self, orders: OrderRepository, items: OrderItemRepository):
        self.orders = orders
        self.items = items

    def _require_order(self, order_id: str, shop_id: str | None) -> None:
        if self.orders.get_order_by_id(order_id, shop_id=shop_id) is None:
            raise not_found("Order", order_id)

    def create_order_item(
        self, order_id: str, product_id: str, quantity: int, shop_id: str | None = None
    ) -> OrderItemView:
        require(order_id=order_id, product_id=product_id)
        require_positive(quantity=quantity)
        self._require_order(order_id, shop_id)

        item = self.items.create_order_item(order_id, product_id, quantity)
        logger.info("order_item_created", order_id=order_id, item_id=item.id, product_id=product_id)
        return OrderItemView.from_record(item)

    def get_order_item(self, order_id: str, item_id: str, shop_id: str | None = None) -> OrderItemView:
        require(order_id=order_id, item_id=item_id)
        self._require_order(order_id, shop_id)

        item = self.items.get_order_item_by_id(item_id)
        if item is None or item.order_id != order_id:
            raise not_found("OrderItem", item_id)
        return OrderItemView.from_record(item)

    def get_order_items(self, order_id: str, shop_id: str | None = None) -> list[OrderItemView]:
        require(order_id=order_id)
        self._require_order(order_id, shop_id)
        return [OrderItemView.from_record(item) for item in self.items.get_order_items_by_order(order_id)]

    def update_order_item(
        self,
        order_id: str,
        item_id: str,
        product_id: str | None = None,
        quantity: int | None = None,
        shop_id: str | None = None,
    ) -> OrderItemView:
        require(order_id=order_id, item_id=item_id)
        if product_id is not None:
            require(product_id=product_id)
        if quantity is not None:
            require_positive(quantity=quantity)
        self._require_order(order_id, shop_id)

        item = self.items.update_order_item(item_id, order_id, OrderItemPatch(product_id=product_id, quantity=quantity))
        if item is None:
            raise not_found("OrderItem", item_id)

        logger.info("order_item_updated", order_id=order_id, item_id=item_id, quantity=item.quantity)
        return OrderItemView.from_record(item)

    def delete_order_item(self, order_id: str, item_id: str, shop_id: str | None = None) -> None:
        require(order_id=order_id, item_id=item_id)
        self._require_order(order_id, shop_id)

        if not self.items.delete_order_item(item_id, order_id):
            raise not_found("OrderItem", item_id)

        logger.info("order_item_deleted", order_id=order_id, item_id=item_id)
