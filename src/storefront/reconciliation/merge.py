"""Turning a pending temp order into order lines.

A temp order is merged exactly once, either into a brand-new order for the
customer or into the customer's current active order. Everything a merge
writes, the order lines and the temp order's new `accepted` status, commits
together or not at all.
"""

from protean.exceptions import InvalidOperationError

from storefront.errors import not_found, require
from storefront.persistence.port import OrderItemRepository, OrderRepository, Transaction, TransactionSource
from storefront.persistence.records import OrderItemPatch, OrderItemRecord, OrderPatch, TempOrderItemRecord
from storefront.reconciliation.pricing import TotalPricePolicy, total_of
from storefront.reconciliation.transaction import transaction
from storefront.reconciliation.views import OrderView
from storefront.temp_order.temp_order import TempOrderStatus
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class TempOrderMerger:
    def __init__(
        self,
        orders: OrderRepository,
        items: OrderItemRepository,
        transactions: TransactionSource,
        total_price_policy: TotalPricePolicy = TotalPricePolicy.AS_OBSERVED,
    ):
        self.orders = orders
        self.items = items
        self.transactions = transactions
        self.total_price_policy = total_price_policy

    def merge(
        self,
        temp_order_id: str,
        customer_id: str,
        shop_id: str,
        active_order_id: str | None = None,
    ) -> OrderView:
        """Merge a pending temp order for `customer_id`.

        Without `active_order_id` a new order is opened for the customer. With
        it, the temp order's lines are folded into that order, adding
        quantities for products it already contains.
        """
        require(temp_order_id=temp_order_id, customer_id=customer_id, shop_id=shop_id)
        if active_order_id is not None:
            require(active_order_id=active_order_id)

        temp_order = self.orders.get_temp_order_by_id(temp_order_id, shop_id=shop_id)
        if temp_order is None:
            raise not_found("TempOrder", temp_order_id)

        temp_items = list(self.items.get_temp_order_items_by_temp_order(temp_order_id) or [])

        if temp_order.status != TempOrderStatus.PENDING.value:
            raise InvalidOperationError(f"Temp order is already {temp_order.status}")

        if active_order_id is None:
            return self._merge_into_new_order(temp_order_id, temp_items, customer_id, shop_id)
        return self._merge_into_active_order(temp_order_id, temp_items, active_order_id, shop_id)

    def _merge_into_new_order(
        self,
        temp_order_id: str,
        temp_items: list[TempOrderItemRecord],
        customer_id: str,
        shop_id: str,
    ) -> OrderView:
        with transaction(self.transactions, "merge_temp_order", temp_order_id=temp_order_id) as tx:
            order = self.orders.create_order(customer_id, shop_id, None, tx=tx)
            created = [
                self.items.create_order_item(order.id, item.product_id, item.quantity, tx=tx) for item in temp_items
            ]
            if self.total_price_policy is TotalPricePolicy.PERSIST_COMPUTED:
                order = self.orders.update_order(order.id, OrderPatch(total_price=total_of(created)), tx=tx)
            self.orders.update_temp_order_status(tx, temp_order_id, TempOrderStatus.ACCEPTED.value)

        logger.info(
            "temp_order_merged",
            temp_order_id=temp_order_id,
            order_id=order.id,
            new_order=True,
            item_count=len(created),
        )
        return OrderView.from_record(order, items=created)

    def _merge_into_active_order(
        self,
        temp_order_id: str,
        temp_items: list[TempOrderItemRecord],
        active_order_id: str,
        shop_id: str,
    ) -> OrderView:
        with transaction(
            self.transactions, "merge_temp_order", temp_order_id=temp_order_id, order_id=active_order_id
        ) as tx:
            order = self.orders.get_order_by_id(active_order_id, shop_id=shop_id)
            if order is None:
                raise not_found("Order", active_order_id)

            existing = {item.product_id: item for item in self.items.get_order_items_by_order(order.id) or []}
            inserted = 0
            for temp_item in temp_items:
                _, was_inserted = self.aggregate_item(tx, order.id, temp_item.product_id, temp_item.quantity)
                inserted += was_inserted

            items = list(self.items.get_order_items_by_order(order.id) or [])
            total_price = total_of(items)
            if self.total_price_policy is TotalPricePolicy.PERSIST_COMPUTED:
                order = self.orders.update_order(order.id, OrderPatch(total_price=total_price), tx=tx)
            self.orders.update_temp_order_status(tx, temp_order_id, TempOrderStatus.ACCEPTED.value)

        logger.info(
            "temp_order_merged",
            temp_order_id=temp_order_id,
            order_id=order.id,
            new_order=False,
            items_before=len(existing),
            items_inserted=inserted,
            items_increased=len(temp_items) - inserted,
        )
        return OrderView.from_record(order, items=items, total_price=total_price)

    def aggregate_item(
        self, tx: Transaction, order_id: str, product_id: str, quantity: int
    ) -> tuple[OrderItemRecord, bool]:
        """Add `quantity` of `product_id` to the order: bump the existing line or insert a new one.

        Exactly one write either way; the unit price of an existing line is kept.
        Returns the written line and whether it was inserted.
        """
        existing = self.items.get_order_item_by_product(product_id, order_id)
        if existing is None:
            return self.items.create_order_item(order_id, product_id, quantity, tx=tx), True

        updated = self.items.update_order_item(
            existing.id, order_id, OrderItemPatch(quantity=existing.quantity + quantity), tx=tx
        )
        if updated is None:
            raise not_found("OrderItem", existing.id)
        return updated, False
