"""Temp orders: what customers submit through a shop's public share link."""

from dataclasses import dataclass

from protean.exceptions import InvalidOperationError

from storefront.errors import not_found, require, require_positive
from storefront.persistence.port import OrderItemRepository, OrderRepository, ShopDirectory, TransactionSource
from storefront.persistence.records import OrderFilterOptions
from storefront.reconciliation.pricing import total_of
from storefront.reconciliation.transaction import transaction
from storefront.reconciliation.views import TempOrderView
from storefront.temp_order.temp_order import TempOrderStatus
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class TempOrderLine:
    product_id: str
    quantity: int


class TempOrderService:
    def __init__(
        self,
        orders: OrderRepository,
        items: OrderItemRepository,
        transactions: TransactionSource,
        shops: ShopDirectory,
    ):
        self.orders = orders
        self.items = items
        self.transactions = transactions
        self.shops = shops

    def create_temp_order(
        self,
        customer_name: str,
        customer_phone: str,
        share_token: str,
        lines: list[TempOrderLine] | None = None,
    ) -> TempOrderView:
        """Record a customer's submission as a pending temp order, priced from the catalogue."""
        require(customer_name=customer_name, customer_phone=customer_phone, share_token=share_token)
        lines = list(lines or [])
        for line in lines:
            require(product_id=line.product_id)
            require_positive(quantity=line.quantity)

        shop_id = self.shops.get_shop_id_by_share_token(share_token)
        if shop_id is None:
            raise not_found("Shop", share_token)

        with transaction(self.transactions, "create_temp_order", shop_id=shop_id) as tx:
            temp_order = self.orders.create_temp_order(tx, customer_name, customer_phone, shop_id)
            items = [
                self.items.create_temp_order_item(tx, temp_order.id, line.product_id, line.quantity) for line in lines
            ]
            total_price = total_of(items)
            self.orders.update_temp_order_total_price(tx, temp_order.id, total_price)

        logger.info(
            "temp_order_created",
            temp_order_id=temp_order.id,
            shop_id=shop_id,
            item_count=len(items),
            total_price=total_price,
        )
        return TempOrderView.from_record(temp_order, items=items, total_price=total_price)

    def get_temp_order_by_id(self, temp_order_id: str, shop_id: str | None = None) -> TempOrderView:
        require(temp_order_id=temp_order_id)

        temp_order = self.orders.get_temp_order_by_id(temp_order_id, shop_id=shop_id)
        if temp_order is None:
            raise not_found("TempOrder", temp_order_id)

        items = self.items.get_temp_order_items_by_temp_order(temp_order_id)
        return TempOrderView.from_record(temp_order, items=list(items or []))

    def get_temp_orders_by_shop(self, shop_id: str, filters: OrderFilterOptions | None = None) -> list[TempOrderView]:
        require(shop_id=shop_id)
        temp_orders = self.orders.get_temp_orders_by_shop(shop_id, filters or OrderFilterOptions())
        return [TempOrderView.from_record(temp_order) for temp_order in temp_orders]

    def reject_temp_order(self, temp_order_id: str, shop_id: str) -> TempOrderView:
        """Dismiss a pending temp order without creating anything from it."""
        require(temp_order_id=temp_order_id, shop_id=shop_id)

        temp_order = self.orders.get_temp_order_by_id(temp_order_id, shop_id=shop_id)
        if temp_order is None:
            raise not_found("TempOrder", temp_order_id)
        if temp_order.status != TempOrderStatus.PENDING.value:
            raise InvalidOperationError(f"Temp order is already {temp_order.status}")

        self.orders.update_temp_order_status(None, temp_order_id, TempOrderStatus.REJECTED.value)
        logger.info("temp_order_rejected", temp_order_id=temp_order_id, shop_id=shop_id)

        return TempOrderView.from_record(self.orders.get_temp_order_by_id(temp_order_id, shop_id=shop_id))
