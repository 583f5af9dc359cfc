"""Single entry point to order reconciliation for the HTTP layer, the CLI and tests."""

from storefront.persistence.port import Persistence
from storefront.persistence.records import OrderFilterOptions
from storefront.reconciliation.items import OrderItemService
from storefront.reconciliation.merge import TempOrderMerger
from storefront.reconciliation.orders import OrderService
from storefront.reconciliation.pricing import TotalPricePolicy
from storefront.reconciliation.temp_orders import TempOrderLine, TempOrderService
from storefront.reconciliation.views import OrderItemView, OrderView, TempOrderView


class OrderReconciliation:
    def __init__(self, persistence: Persistence, total_price_policy: TotalPricePolicy | None = None):
        self.persistence = persistence
        self.order_service = OrderService(persistence.orders, persistence.items, persistence.transactions)
        self.item_service = OrderItemService(persistence.orders, persistence.items)
        self.temp_order_service = TempOrderService(
            persistence.orders, persistence.items, persistence.transactions, persistence.shops
        )
        self.merger = TempOrderMerger(
            persistence.orders,
            persistence.items,
            persistence.transactions,
            total_price_policy or TotalPricePolicy.from_env(),
        )

    # Orders
    def create_order(self, customer_id: str, shop_id: str, notes: str | None = None) -> OrderView:
        return self.order_service.create_order(customer_id, shop_id, notes)

    def get_order_by_id(self, order_id: str, shop_id: str | None = None) -> OrderView:
        return self.order_service.get_order_by_id(order_id, shop_id=shop_id)

    def get_orders_by_shop(self, shop_id: str, filters: OrderFilterOptions | None = None) -> list[OrderView]:
        return self.order_service.get_orders_by_shop(shop_id, filters)

    def update_order(self, order_id: str, shop_id: str | None = None, **changes) -> OrderView:
        return self.order_service.update_order(order_id, shop_id=shop_id, **changes)

    def delete_order(self, order_id: str, shop_id: str | None = None) -> None:
        self.order_service.delete_order(order_id, shop_id=shop_id)

    def get_active_order(self, customer_id: str, shop_id: str) -> OrderView | None:
        return self.order_service.get_active_order(customer_id, shop_id)

    # Order items
    def create_order_item(
        self, order_id: str, product_id: str, quantity: int, shop_id: str | None = None
    ) -> OrderItemView:
        return self.item_service.create_order_item(order_id, product_id, quantity, shop_id=shop_id)

    def update_order_item(self, order_id: str, item_id: str, shop_id: str | None = None, **changes) -> OrderItemView:
        return self.item_service.update_order_item(order_id, item_id, shop_id=shop_id, **changes)

    def delete_order_item(self, order_id: str, item_id: str, shop_id: str | None = None) -> None:
        self.item_service.delete_order_item(order_id, item_id, shop_id=shop_id)

    def get_order_item(self, order_id: str, item_id: str, shop_id: str | None = None) -> OrderItemView:
        return self.item_service.get_order_item(order_id, item_id, shop_id=shop_id)

    def get_order_items(self, order_id: str, shop_id: str | None = None) -> list[OrderItemView]:
        return self.item_service.get_order_items(order_id, shop_id=shop_id)

    # Temp orders
    def create_temp_order(
        self,
        customer_name: str,
        customer_phone: str,
        share_token: str,
        lines: list[TempOrderLine] | None = None,
    ) -> TempOrderView:
        return self.temp_order_service.create_temp_order(customer_name, customer_phone, share_token, lines)

    def get_temp_orders_by_shop(self, shop_id: str, filters: OrderFilterOptions | None = None) -> list[TempOrderView]:
        return self.temp_order_service.get_temp_orders_by_shop(shop_id, filters)

    def get_temp_order_by_id(self, temp_order_id: str, shop_id: str | None = None) -> TempOrderView:
        return self.temp_order_service.get_temp_order_by_id(temp_order_id, shop_id=shop_id)

    def reject_temp_order(self, temp_order_id: str, shop_id: str) -> TempOrderView:
        return self.temp_order_service.reject_temp_order(temp_order_id, shop_id)

    def merge_temp_order(
        self, temp_order_id: str, customer_id: str, shop_id: str, active_order_id: str | None = None
    ) -> OrderView:
        return self.merger.merge(temp_order_id, customer_id, shop_id, active_order_id=active_order_id)
