"""Staff-facing order operations and the one-active-order-per-customer rule."""

from storefront.errors import ActiveOrderConflict, not_found, require
from storefront.order.order import validate_order_status
from storefront.persistence.port import OrderItemRepository, OrderRepository, TransactionSource
from storefront.persistence.records import OrderFilterOptions, OrderPatch
from storefront.reconciliation.transaction import transaction
from storefront.reconciliation.views import OrderView
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class OrderService:
    def __init__(self, orders: OrderRepository, items: OrderItemRepository, transactions: TransactionSource):
        self.orders = orders
        self.items = items
        self.transactions = transactions

    def create_order(self, customer_id: str, shop_id: str, notes: str | None = None) -> OrderView:
        """Open a new order unless the customer already has an active one in this shop.

        The check and the insert are separate storage calls; two concurrent
        requests for the same customer can both pass the check.
        """
        require(customer_id=customer_id, shop_id=shop_id)

        if self.orders.get_active_order_by_customer(customer_id, shop_id) is not None:
            raise ActiveOrderConflict(customer_id, shop_id)

        order = self.orders.create_order(customer_id, shop_id, notes)
        logger.info("order_created", order_id=order.id, customer_id=customer_id, shop_id=shop_id)
        return OrderView.from_record(order)

    def get_order_by_id(self, order_id: str, shop_id: str | None = None) -> OrderView:
        require(order_id=order_id)

        order = self.orders.get_order_by_id(order_id, shop_id=shop_id)
        if order is None:
            raise not_found("Order", order_id)

        items = self.items.get_order_items_by_order(order_id)
        return OrderView.from_record(order, items=list(items or []))

    def get_orders_by_shop(self, shop_id: str, filters: OrderFilterOptions | None = None) -> list[OrderView]:
        require(shop_id=shop_id)
        orders = self.orders.get_orders_by_shop(shop_id, filters or OrderFilterOptions())
        return [OrderView.from_record(order) for order in orders]

    def get_active_order(self, customer_id: str, shop_id: str) -> OrderView | None:
        require(customer_id=customer_id, shop_id=shop_id)
        order = self.orders.get_active_order_by_customer(customer_id, shop_id)
        return OrderView.from_record(order) if order is not None else None

    def update_order(
        self,
        order_id: str,
        total_price: int | None = None,
        status: str | None = None,
        notes: str | None = None,
        shop_id: str | None = None,
    ) -> OrderView:
        require(order_id=order_id)
        if status is not None:
            status = validate_order_status(status)

        if self.orders.get_order_by_id(order_id, shop_id=shop_id) is None:
            raise not_found("Order", order_id)

        order = self.orders.update_order(order_id, OrderPatch(total_price=total_price, status=status, notes=notes))
        if order is None:
            raise not_found("Order", order_id)

        logger.info("order_updated", order_id=order_id, status=order.status)
        return OrderView.from_record(order)

    def delete_order(self, order_id: str, shop_id: str | None = None) -> None:
        """Delete an order together with all of its items, atomically."""
        require(order_id=order_id)

        if self.orders.get_order_by_id(order_id, shop_id=shop_id) is None:
            raise not_found("Order", order_id)

        with transaction(self.transactions, "delete_order", order_id=order_id) as tx:
            self.items.delete_order_items_by_order(tx, order_id)
            self.orders.delete_order(tx, order_id)

        logger.info("order_deleted", order_id=order_id)
