"""Storage ports for order reconciliation.

The reconciliation core only ever talks to these interfaces. Two adapters
implement them: `ProteanOrderRepository` & co. on top of the Protean domain
(production), and `FakeStore` (tests and local runs).

Lookups return `None` when there is no record. Any other failure is raised as
is; the core never retries.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from storefront.persistence.records import (
    OrderFilterOptions,
    OrderItemPatch,
    OrderItemRecord,
    OrderPatch,
    OrderRecord,
    TempOrderItemRecord,
    TempOrderRecord,
)


class Transaction(ABC):
    """An open storage transaction. Writes made with it become visible on `commit`."""

    @abstractmethod
    def commit(self) -> None: ...

    @abstractmethod
    def rollback(self) -> None: ...


class TransactionSource(ABC):
    @abstractmethod
    def begin(self) -> Transaction:
        """Open a new transaction."""
        ...


class OrderRepository(ABC):
    """Orders and temp orders.

    Methods taking `tx` write inside that transaction; where `tx` is optional,
    `None` means the write stands on its own.
    """

    @abstractmethod
    def create_order(
        self, customer_id: str, shop_id: str, notes: str | None, tx: Transaction | None = None
    ) -> OrderRecord:
        """Insert an order with status `created` and total 0, snapshotting the customer's name."""
        ...

    @abstractmethod
    def get_order_by_id(self, order_id: str, shop_id: str | None = None) -> OrderRecord | None: ...

    @abstractmethod
    def get_orders_by_shop(self, shop_id: str, filters: OrderFilterOptions) -> list[OrderRecord]: ...

    @abstractmethod
    def update_order(self, order_id: str, patch: OrderPatch, tx: Transaction | None = None) -> OrderRecord | None:
        """Apply `patch` and return the stored result, or `None` when the order does not exist."""
        ...

    @abstractmethod
    def delete_order(self, tx: Transaction, order_id: str) -> None: ...

    @abstractmethod
    def get_active_order_by_customer(self, customer_id: str, shop_id: str) -> OrderRecord | None: ...

    @abstractmethod
    def create_temp_order(
        self, tx: Transaction, customer_name: str, customer_phone: str, shop_id: str
    ) -> TempOrderRecord:
        """Insert a `pending` temp order with total 0."""
        ...

    @abstractmethod
    def get_temp_order_by_id(self, temp_order_id: str, shop_id: str | None = None) -> TempOrderRecord | None: ...

    @abstractmethod
    def get_temp_orders_by_shop(self, shop_id: str, filters: OrderFilterOptions) -> list[TempOrderRecord]: ...

    @abstractmethod
    def update_temp_order_status(self, tx: Transaction | None, temp_order_id: str, status: str) -> None: ...

    @abstractmethod
    def update_temp_order_total_price(self, tx: Transaction, temp_order_id: str, total_price: int) -> None: ...


class OrderItemRepository(ABC):
    """Order items and temp order items."""

    @abstractmethod
    def create_order_item(
        self, order_id: str, product_id: str, quantity: int, tx: Transaction | None = None
    ) -> OrderItemRecord:
        """Insert an item, snapshotting the product's name and price."""
        ...

    @abstractmethod
    def get_order_item_by_id(self, item_id: str) -> OrderItemRecord | None: ...

    @abstractmethod
    def get_order_items_by_order(self, order_id: str) -> list[OrderItemRecord]: ...

    @abstractmethod
    def get_order_item_by_product(self, product_id: str, order_id: str) -> OrderItemRecord | None: ...

    @abstractmethod
    def update_order_item(
        self, item_id: str, order_id: str, patch: OrderItemPatch, tx: Transaction | None = None
    ) -> OrderItemRecord | None:
        """Apply `patch` to the item if it belongs to `order_id`; `None` otherwise."""
        ...

    @abstractmethod
    def delete_order_item(self, item_id: str, order_id: str) -> bool:
        """Delete the item if it belongs to `order_id`; return whether anything was deleted."""
        ...

    @abstractmethod
    def delete_order_items_by_order(self, tx: Transaction, order_id: str) -> None: ...

    @abstractmethod
    def create_temp_order_item(
        self, tx: Transaction, temp_order_id: str, product_id: str, quantity: int
    ) -> TempOrderItemRecord: ...

    @abstractmethod
    def get_temp_order_items_by_temp_order(self, temp_order_id: str) -> list[TempOrderItemRecord]: ...


class ShopDirectory(ABC):
    @abstractmethod
    def get_shop_id_by_share_token(self, share_token: str) -> str | None: ...


@dataclass(frozen=True)
class Persistence:
    """One adapter's implementations of every storage port."""

    orders: OrderRepository
    items: OrderItemRepository
    transactions: TransactionSource
    shops: ShopDirectory
