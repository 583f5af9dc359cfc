"""Fake storage adapter: in-memory implementation of every storage port.

Used by the test suite and for local runs without a database. Writes apply
immediately; an open transaction snapshots the whole store when it begins and
restores that snapshot on rollback, so partial writes are never observable
after a failed operation.

Failures can be injected per operation name to exercise rollback paths:

    store = FakeStore()
    store.fail_on("update_temp_order_status")          # every call fails
    store.fail_on("create_order_item", after=1)        # second call onwards
"""

import itertools
from collections.abc import Callable
from dataclasses import dataclass, replace
from datetime import UTC, datetime

from protean.exceptions import ObjectNotFoundError

from storefront.errors import StorageError
from storefront.order.order import ACTIVE_ORDER_STATUSES, OrderStatus
from storefront.persistence.port import (
    OrderItemRepository,
    OrderRepository,
    Persistence,
    ShopDirectory,
    Transaction,
    TransactionSource,
)
from storefront.persistence.records import (
    OrderFilterOptions,
    OrderItemPatch,
    OrderItemRecord,
    OrderPatch,
    OrderRecord,
    TempOrderItemRecord,
    TempOrderRecord,
)
from storefront.temp_order.temp_order import TempOrderStatus


@dataclass(frozen=True)
class FakeProduct:
    id: str
    shop_id: str
    name: str
    price: int


@dataclass(frozen=True)
class FakeCustomer:
    id: str
    shop_id: str
    name: str
    phone: str = ""


@dataclass
class _Failure:
    error: Exception
    after: int
    seen: int = 0


class FakeTransaction(Transaction):
    def __init__(self, store: "FakeStore"):
        self._store = store
        self._snapshot = store._snapshot()
        self.state = "open"

    def commit(self) -> None:
        self._ensure_open()
        try:
            self._store._record("commit")
        except Exception:
            self._store._restore(self._snapshot)
            self.state = "rolled_back"
            raise
        self.state = "committed"
        self._store.committed += 1

    def rollback(self) -> None:
        self._ensure_open()
        self._store._restore(self._snapshot)
        self.state = "rolled_back"
        self._store.rolled_back += 1

    def _ensure_open(self):
        if self.state != "open":
            raise StorageError(f"Transaction already {self.state}")


class FakeStore(OrderRepository, OrderItemRepository, TransactionSource, ShopDirectory):
    """In-memory orders, items, temp orders and the catalogue data they snapshot."""

    def __init__(self, clock: Callable[[], datetime] | None = None):
        self.clock = clock or (lambda: datetime.now(UTC))
        self.orders: dict[str, OrderRecord] = {}
        self.items: dict[str, OrderItemRecord] = {}
        self.temp_orders: dict[str, TempOrderRecord] = {}
        self.temp_items: dict[str, TempOrderItemRecord] = {}
        self.products: dict[str, FakeProduct] = {}
        self.customers: dict[str, FakeCustomer] = {}
        self.shops: dict[str, str] = {}

        self.calls: list[str] = []
        self.committed = 0
        self.rolled_back = 0
        self.last_filters: OrderFilterOptions | None = None
        self._failures: dict[str, _Failure] = {}
        self._ids = itertools.count(1)

    def persistence(self) -> Persistence:
        return Persistence(orders=self, items=self, transactions=self, shops=self)

    # -------------------------------------------------------------------
    # Seeding & failure injection
    # -------------------------------------------------------------------
    def add_shop(self, shop_id: str, share_token: str) -> str:
        self.shops[share_token] = shop_id
        return shop_id

    def add_product(self, shop_id: str, name: str, price: int, product_id: str | None = None) -> FakeProduct:
        product = FakeProduct(id=product_id or self._next_id("product"), shop_id=shop_id, name=name, price=price)
        self.products[product.id] = product
        return product

    def add_customer(self, shop_id: str, name: str, phone: str = "", customer_id: str | None = None) -> FakeCustomer:
        customer = FakeCustomer(id=customer_id or self._next_id("customer"), shop_id=shop_id, name=name, phone=phone)
        self.customers[customer.id] = customer
        return customer

    def fail_on(self, operation: str, error: Exception | None = None, after: int = 0) -> None:
        """Make `operation` raise `error` once it has succeeded `after` times."""
        self._failures[operation] = _Failure(error=error or StorageError(f"{operation} failed"), after=after)

    def clear_failures(self) -> None:
        self._failures.clear()

    def calls_to(self, operation: str) -> int:
        return self.calls.count(operation)

    # -------------------------------------------------------------------
    # TransactionSource / ShopDirectory
    # -------------------------------------------------------------------
    def begin(self) -> FakeTransaction:
        self._record("begin")
        return FakeTransaction(self)

    def get_shop_id_by_share_token(self, share_token: str) -> str | None:
        self._record("get_shop_id_by_share_token")
        return self.shops.get(share_token)

    # -------------------------------------------------------------------
    # OrderRepository
    # -------------------------------------------------------------------
    def create_order(self, customer_id, shop_id, notes, tx=None):
        self._record("create_order")
        customer = self.customers.get(customer_id)
        if customer is None:
            raise ObjectNotFoundError({"_entity": [f"Customer `{customer_id}` does not exist"]})

        order = OrderRecord(
            id=self._next_id("order"),
            shop_id=shop_id,
            customer_id=customer_id,
            customer_name=customer.name,
            total_price=0,
            status=OrderStatus.CREATED.value,
            notes=notes or "",
            created_at=self.clock(),
        )
        self.orders[order.id] = order
        return order

    def get_order_by_id(self, order_id, shop_id=None):
        self._record("get_order_by_id")
        order = self.orders.get(order_id)
        if order is None or (shop_id is not None and order.shop_id != shop_id):
            return None
        return order

    def get_orders_by_shop(self, shop_id, filters):
        self._record("get_orders_by_shop")
        self.last_filters = filters
        orders = [
            order
            for order in self.orders.values()
            if order.shop_id == shop_id
            and filters.matches(order.created_at, order.customer_name, self._customer_phone(order.customer_id))
        ]
        return sorted(orders, key=lambda order: order.created_at, reverse=True)

    def update_order(self, order_id, patch: OrderPatch, tx=None):
        self._record("update_order")
        order = self.orders.get(order_id)
        if order is None:
            return None

        changes = {field: value for field, value in vars(patch).items() if value is not None}
        order = replace(order, **changes, updated_at=self.clock())
        self.orders[order_id] = order
        return order

    def delete_order(self, tx, order_id):
        self._record("delete_order")
        self.orders.pop(order_id, None)

    def get_active_order_by_customer(self, customer_id, shop_id):
        self._record("get_active_order_by_customer")
        active = [
            order
            for order in self.orders.values()
            if order.customer_id == customer_id and order.shop_id == shop_id and order.status in ACTIVE_ORDER_STATUSES
        ]
        return min(active, key=lambda order: order.created_at) if active else None

    def create_temp_order(self, tx, customer_name, customer_phone, shop_id):
        self._record("create_temp_order")
        temp_order = TempOrderRecord(
            id=self._next_id("temp-order"),
            shop_id=shop_id,
            customer_name=customer_name,
            customer_phone=customer_phone,
            total_price=0,
            status=TempOrderStatus.PENDING.value,
            created_at=self.clock(),
        )
        self.temp_orders[temp_order.id] = temp_order
        return temp_order

    def get_temp_order_by_id(self, temp_order_id, shop_id=None):
        self._record("get_temp_order_by_id")
        temp_order = self.temp_orders.get(temp_order_id)
        if temp_order is None or (shop_id is not None and temp_order.shop_id != shop_id):
            return None
        return temp_order

    def get_temp_orders_by_shop(self, shop_id, filters: OrderFilterOptions):
        self._record("get_temp_orders_by_shop")
        self.last_filters = filters
        temp_orders = [
            temp_order
            for temp_order in self.temp_orders.values()
            if temp_order.shop_id == shop_id
            and filters.matches(temp_order.created_at, temp_order.customer_name, temp_order.customer_phone)
        ]
        return sorted(temp_orders, key=lambda temp_order: temp_order.created_at, reverse=True)

    def update_temp_order_status(self, tx, temp_order_id, status):
        self._record("update_temp_order_status")
        temp_order = self._require(self.temp_orders, "TempOrder", temp_order_id)
        self.temp_orders[temp_order_id] = replace(temp_order, status=status, updated_at=self.clock())

    def update_temp_order_total_price(self, tx, temp_order_id, total_price):
        self._record("update_temp_order_total_price")
        temp_order = self._require(self.temp_orders, "TempOrder", temp_order_id)
        self.temp_orders[temp_order_id] = replace(temp_order, total_price=total_price, updated_at=self.clock())

    # -------------------------------------------------------------------
    # OrderItemRepository
    # -------------------------------------------------------------------
    def create_order_item(self, order_id, product_id, quantity, tx=None):
        self._record("create_order_item")
        product = self._require(self.products, "Product", product_id)
        item = OrderItemRecord(
            id=self._next_id("item"),
            order_id=order_id,
            product_id=product.id,
            product_name=product.name,
            price=product.price,
            quantity=quantity,
            created_at=self.clock(),
        )
        self.items[item.id] = item
        return item

    def get_order_item_by_id(self, item_id):
        self._record("get_order_item_by_id")
        return self.items.get(item_id)

    def get_order_items_by_order(self, order_id):
        self._record("get_order_items_by_order")
        return [item for item in self.items.values() if item.order_id == order_id]

    def get_order_item_by_product(self, product_id, order_id):
        self._record("get_order_item_by_product")
        return next(
            (item for item in self.items.values() if item.order_id == order_id and item.product_id == product_id),
            None,
        )

    def update_order_item(self, item_id, order_id, patch: OrderItemPatch, tx=None):
        self._record("update_order_item")
        item = self.items.get(item_id)
        if item is None or item.order_id != order_id:
            return None

        changes = {}
        if patch.product_id is not None:
            product = self._require(self.products, "Product", patch.product_id)
            changes.update(product_id=product.id, product_name=product.name, price=product.price)
        if patch.quantity is not None:
            changes["quantity"] = patch.quantity

        item = replace(item, **changes, updated_at=self.clock())
        self.items[item_id] = item
        return item

    def delete_order_item(self, item_id, order_id):
        self._record("delete_order_item")
        item = self.items.get(item_id)
        if item is None or item.order_id != order_id:
            return False
        del self.items[item_id]
        return True

    def delete_order_items_by_order(self, tx, order_id):
        self._record("delete_order_items_by_order")
        for item_id in [item.id for item in self.items.values() if item.order_id == order_id]:
            del self.items[item_id]

    def create_temp_order_item(self, tx, temp_order_id, product_id, quantity):
        self._record("create_temp_order_item")
        product = self._require(self.products, "Product", product_id)
        item = TempOrderItemRecord(
            id=self._next_id("temp-item"),
            temp_order_id=temp_order_id,
            product_id=product.id,
            product_name=product.name,
            price=product.price,
            quantity=quantity,
            created_at=self.clock(),
        )
        self.temp_items[item.id] = item
        return item

    def get_temp_order_items_by_temp_order(self, temp_order_id):
        self._record("get_temp_order_items_by_temp_order")
        return [item for item in self.temp_items.values() if item.temp_order_id == temp_order_id]

    # -------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------
    def _record(self, operation: str) -> None:
        self.calls.append(operation)
        failure = self._failures.get(operation)
        if failure is None:
            return
        if failure.seen < failure.after:
            failure.seen += 1
            return
        raise failure.error

    def _next_id(self, prefix: str) -> str:
        return f"{prefix}-{next(self._ids)}"

    def _customer_phone(self, customer_id: str) -> str:
        customer = self.customers.get(customer_id)
        return customer.phone if customer else ""

    def _require(self, table: dict, entity: str, identifier: str):
        record = table.get(identifier)
        if record is None:
            raise ObjectNotFoundError({"_entity": [f"{entity} `{identifier}` does not exist"]})
        return record

    def _snapshot(self):
        return tuple(dict(table) for table in (self.orders, self.items, self.temp_orders, self.temp_items))

    def _restore(self, snapshot) -> None:
        orders, items, temp_orders, temp_items = snapshot
        self.orders, self.items, self.temp_orders, self.temp_items = orders, items, temp_orders, temp_items
