"""Protean storage adapter: the storage ports on top of the storefront domain.

A transaction is a Protean `UnitOfWork`. While one is open it is the ambient
unit of work, so every repository call made before `commit`/`rollback` joins
it; the `tx` arguments of the port methods therefore only mark intent here.
All methods expect an active `storefront` domain context.
"""

from protean.core.unit_of_work import UnitOfWork
from protean.domain import Domain

from storefront.catalogue.customer import Customer
from storefront.catalogue.product import Product
from storefront.catalogue.shop import Shop
from storefront.order.order import Order
from storefront.order.order_item import OrderItem
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
from storefront.temp_order.temp_order import TempOrder
from storefront.temp_order.temp_order_item import TempOrderItem
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def to_order_record(order: Order) -> OrderRecord:
    return OrderRecord(
        id=str(order.id),
        shop_id=str(order.shop_id),
        customer_id=str(order.customer_id),
        customer_name=order.customer_name or "",
        total_price=order.total_price or 0,
        status=order.status,
        notes=order.notes or "",
        created_at=order.created_at,
        updated_at=order.updated_at,
    )


def to_order_item_record(item: OrderItem) -> OrderItemRecord:
    return OrderItemRecord(
        id=str(item.id),
        order_id=str(item.order_id),
        product_id=str(item.product_id),
        product_name=item.product_name or "",
        price=item.price or 0,
        quantity=item.quantity,
        created_at=item.created_at,
        updated_at=item.updated_at,
    )


def to_temp_order_record(temp_order: TempOrder) -> TempOrderRecord:
    return TempOrderRecord(
        id=str(temp_order.id),
        shop_id=str(temp_order.shop_id),
        customer_name=temp_order.customer_name,
        customer_phone=temp_order.customer_phone,
        total_price=temp_order.total_price or 0,
        status=temp_order.status,
        created_at=temp_order.created_at,
        updated_at=temp_order.updated_at,
    )


def to_temp_order_item_record(item: TempOrderItem) -> TempOrderItemRecord:
    return TempOrderItemRecord(
        id=str(item.id),
        temp_order_id=str(item.temp_order_id),
        product_id=str(item.product_id),
        product_name=item.product_name or "",
        price=item.price or 0,
        quantity=item.quantity,
        created_at=item.created_at,
    )


class ProteanTransaction(Transaction):
    def __init__(self):
        self.uow = UnitOfWork()
        self.uow.start()

    def commit(self) -> None:
        self.uow.commit()

    def rollback(self) -> None:
        self.uow.rollback()


class ProteanTransactionSource(TransactionSource):
    def begin(self) -> ProteanTransaction:
        return ProteanTransaction()


class ProteanOrderRepository(OrderRepository):
    def __init__(self, domain: Domain):
        self.domain = domain

    @property
    def _orders(self):
        return self.domain.repository_for(Order)

    @property
    def _temp_orders(self):
        return self.domain.repository_for(TempOrder)

    def create_order(self, customer_id, shop_id, notes, tx=None):
        customer = self.domain.repository_for(Customer).get(customer_id)
        order = Order.create(shop_id=shop_id, customer_id=customer_id, customer_name=customer.name, notes=notes)
        self._orders.add(order)
        return to_order_record(order)

    def get_order_by_id(self, order_id, shop_id=None):
        order = self._orders.find(order_id)
        if order is None or (shop_id is not None and str(order.shop_id) != str(shop_id)):
            return None
        return to_order_record(order)

    def get_orders_by_shop(self, shop_id, filters: OrderFilterOptions):
        created_from, created_before = filters.created_at_bounds()
        orders = self._orders.find_by_shop(shop_id, created_from, created_before)
        phones = {}
        if filters.search_term():
            customers = self.domain.repository_for(Customer).find_by_ids({str(order.customer_id) for order in orders})
            phones = {customer_id: customer.phone for customer_id, customer in customers.items()}

        matching = [
            order
            for order in orders
            if filters.matches(order.created_at, order.customer_name, phones.get(str(order.customer_id)))
        ]
        return [to_order_record(order) for order in matching]

    def update_order(self, order_id, patch: OrderPatch, tx=None):
        order = self._orders.find(order_id)
        if order is None:
            return None

        order.revise(total_price=patch.total_price, status=patch.status, notes=patch.notes)
        self._orders.add(order)
        return to_order_record(order)

    def delete_order(self, tx, order_id):
        order = self._orders.find(order_id)
        if order is not None:
            self._orders.discard(order)

    def get_active_order_by_customer(self, customer_id, shop_id):
        order = self._orders.find_active_for_customer(customer_id, shop_id)
        return to_order_record(order) if order is not None else None

    def create_temp_order(self, tx, customer_name, customer_phone, shop_id):
        temp_order = TempOrder.create(shop_id=shop_id, customer_name=customer_name, customer_phone=customer_phone)
        self._temp_orders.add(temp_order)
        return to_temp_order_record(temp_order)

    def get_temp_order_by_id(self, temp_order_id, shop_id=None):
        temp_order = self._temp_orders.find(temp_order_id)
        if temp_order is None or (shop_id is not None and str(temp_order.shop_id) != str(shop_id)):
            return None
        return to_temp_order_record(temp_order)

    def get_temp_orders_by_shop(self, shop_id, filters: OrderFilterOptions):
        created_from, created_before = filters.created_at_bounds()
        temp_orders = [
            temp_order
            for temp_order in self._temp_orders.find_by_shop(shop_id, created_from, created_before)
            if filters.matches(temp_order.created_at, temp_order.customer_name, temp_order.customer_phone)
        ]
        return [to_temp_order_record(temp_order) for temp_order in temp_orders]

    def update_temp_order_status(self, tx, temp_order_id, status):
        temp_order = self._temp_orders.get(temp_order_id)
        temp_order.settle(status)
        self._temp_orders.add(temp_order)

    def update_temp_order_total_price(self, tx, temp_order_id, total_price):
        temp_order = self._temp_orders.get(temp_order_id)
        temp_order.set_total_price(total_price)
        self._temp_orders.add(temp_order)


class ProteanOrderItemRepository(OrderItemRepository):
    def __init__(self, domain: Domain):
        self.domain = domain

    @property
    def _items(self):
        return self.domain.repository_for(OrderItem)

    @property
    def _temp_items(self):
        return self.domain.repository_for(TempOrderItem)

    def _product(self, product_id) -> Product:
        return self.domain.repository_for(Product).get(product_id)

    def create_order_item(self, order_id, product_id, quantity, tx=None):
        item = OrderItem.create(order_id=order_id, product=self._product(product_id), quantity=quantity)
        self._items.add(item)
        return to_order_item_record(item)

    def get_order_item_by_id(self, item_id):
        item = self._items.find(item_id)
        return to_order_item_record(item) if item is not None else None

    def get_order_items_by_order(self, order_id):
        return [to_order_item_record(item) for item in self._items.for_order(order_id)]

    def get_order_item_by_product(self, product_id, order_id):
        item = self._items.find_by_product(product_id, order_id)
        return to_order_item_record(item) if item is not None else None

    def update_order_item(self, item_id, order_id, patch: OrderItemPatch, tx=None):
        item = self._items.find(item_id)
        if item is None or str(item.order_id) != str(order_id):
            return None

        if patch.product_id is not None:
            item.change_product(self._product(patch.product_id))
        if patch.quantity is not None:
            item.change_quantity(patch.quantity)

        self._items.add(item)
        return to_order_item_record(item)

    def delete_order_item(self, item_id, order_id):
        item = self._items.find(item_id)
        if item is None or str(item.order_id) != str(order_id):
            return False
        self._items.discard(item)
        return True

    def delete_order_items_by_order(self, tx, order_id):
        items = self._items.for_order(order_id)
        for item in items:
            self._items.discard(item)
        logger.debug("order_items_deleted", order_id=order_id, count=len(items))

    def create_temp_order_item(self, tx, temp_order_id, product_id, quantity):
        item = TempOrderItem.create(temp_order_id=temp_order_id, product=self._product(product_id), quantity=quantity)
        self._temp_items.add(item)
        return to_temp_order_item_record(item)

    def get_temp_order_items_by_temp_order(self, temp_order_id):
        return [to_temp_order_item_record(item) for item in self._temp_items.for_temp_order(temp_order_id)]


class ProteanShopDirectory(ShopDirectory):
    def __init__(self, domain: Domain):
        self.domain = domain

    def get_shop_id_by_share_token(self, share_token):
        shop = self.domain.repository_for(Shop).find_by_share_token(share_token)
        return str(shop.id) if shop is not None else None


def protean_persistence(domain: Domain) -> Persistence:
    return Persistence(
        orders=ProteanOrderRepository(domain),
        items=ProteanOrderItemRepository(domain),
        transactions=ProteanTransactionSource(),
        shops=ProteanShopDirectory(domain),
    )
