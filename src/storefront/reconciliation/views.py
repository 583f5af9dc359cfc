"""Read models returned by the reconciliation API."""

from dataclasses import dataclass
from datetime import datetime

from storefront.persistence.records import (
    OrderItemRecord,
    OrderRecord,
    TempOrderItemRecord,
    TempOrderRecord,
)


@dataclass(frozen=True)
class OrderItemView:
    id: str
    order_id: str
    product_id: str
    product_name: str
    price: int
    quantity: int
    created_at: datetime
    updated_at: datetime | None = None

    @classmethod
    def from_record(cls, record: OrderItemRecord) -> "OrderItemView":
        return cls(
            id=record.id,
            order_id=record.order_id,
            product_id=record.product_id,
            product_name=record.product_name,
            price=record.price,
            quantity=record.quantity,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )


@dataclass(frozen=True)
class OrderView:
    """An order as shown to staff. `items` is `None` when the items were not loaded."""

    id: str
    shop_id: str
    customer_id: str
    customer_name: str
    total_price: int
    status: str
    notes: str
    created_at: datetime
    updated_at: datetime | None = None
    items: tuple[OrderItemView, ...] | None = None

    @classmethod
    def from_record(
        cls,
        record: OrderRecord,
        items: list[OrderItemRecord] | None = None,
        total_price: int | None = None,
    ) -> "OrderView":
        return cls(
            id=record.id,
            shop_id=record.shop_id,
            customer_id=record.customer_id,
            customer_name=record.customer_name,
            total_price=record.total_price if total_price is None else total_price,
            status=record.status,
            notes=record.notes,
            created_at=record.created_at,
            updated_at=record.updated_at,
            items=None if items is None else tuple(OrderItemView.from_record(item) for item in items),
        )


@dataclass(frozen=True)
class TempOrderItemView:
    id: str
    temp_order_id: str
    product_id: str
    product_name: str
    price: int
    quantity: int
    created_at: datetime

    @classmethod
    def from_record(cls, record: TempOrderItemRecord) -> "TempOrderItemView":
        return cls(
            id=record.id,
            temp_order_id=record.temp_order_id,
            product_id=record.product_id,
            product_name=record.product_name,
            price=record.price,
            quantity=record.quantity,
            created_at=record.created_at,
        )


@dataclass(frozen=True)
class TempOrderView:
    id: str
    shop_id: str
    customer_name: str
    customer_phone: str
    total_price: int
    status: str
    created_at: datetime
    updated_at: datetime | None = None
    items: tuple[TempOrderItemView, ...] | None = None

    @classmethod
    def from_record(
        cls,
        record: TempOrderRecord,
        items: list[TempOrderItemRecord] | None = None,
        total_price: int | None = None,
    ) -> "TempOrderView":
        return cls(
            id=record.id,
            shop_id=record.shop_id,
            customer_name=record.customer_name,
            customer_phone=record.customer_phone,
            total_price=record.total_price if total_price is None else total_price,
            status=record.status,
            created_at=record.created_at,
            updated_at=record.updated_at,
            items=None if items is None else tuple(TempOrderItemView.from_record(item) for item in items),
        )
