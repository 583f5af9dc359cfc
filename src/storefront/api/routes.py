"""FastAPI routes for the Storefront domain: orders, order items and temp orders."""

from datetime import date

from fastapi import APIRouter, Depends, Response

from storefront.api.dependencies import get_reconciliation, get_shop_id
from storefront.api.schemas import (
    ActiveOrderRequest,
    ActiveOrderResponse,
    CreateOrderItemRequest,
    CreateOrderRequest,
    MergeTempOrderRequest,
    OrderItemResponse,
    OrderResponse,
    SubmitTempOrderRequest,
    TempOrderResponse,
    UpdateOrderItemRequest,
    UpdateOrderRequest,
)
from storefront.persistence.records import OrderFilterOptions
from storefront.reconciliation.core import OrderReconciliation
from storefront.reconciliation.temp_orders import TempOrderLine

# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.post("", status_code=201, response_model=OrderResponse)
async def create_order(
    body: CreateOrderRequest,
    shop_id: str = Depends(get_shop_id),
    core: OrderReconciliation = Depends(get_reconciliation),
) -> OrderResponse:
    order = core.create_order(body.customer_id, shop_id, body.notes)
    return OrderResponse.model_validate(order)


@order_router.get("", response_model=list[OrderResponse])
async def list_orders(
    search: str | None = None,
    date_from: date | None = None,
    date_to: date | None = None,
    shop_id: str = Depends(get_shop_id),
    core: OrderReconciliation = Depends(get_reconciliation),
) -> list[OrderResponse]:
    filters = OrderFilterOptions(search=search, date_from=date_from, date_to=date_to)
    return [OrderResponse.model_validate(order) for order in core.get_orders_by_shop(shop_id, filters)]


@order_router.post("/active", response_model=ActiveOrderResponse)
async def get_active_order(
    body: ActiveOrderRequest,
    shop_id: str = Depends(get_shop_id),
    core: OrderReconciliation = Depends(get_reconciliation),
) -> ActiveOrderResponse:
    order = core.get_active_order(body.customer_id, shop_id)
    return ActiveOrderResponse(order=OrderResponse.model_validate(order) if order else None)


@order_router.get("/{order_id}", response_model=OrderResponse)
async def get_order(
    order_id: str,
    shop_id: str = Depends(get_shop_id),
    core: OrderReconciliation = Depends(get_reconciliation),
) -> OrderResponse:
    return OrderResponse.model_validate(core.get_order_by_id(order_id, shop_id=shop_id))


@order_router.patch("/{order_id}", response_model=OrderResponse)
async def update_order(
    order_id: str,
    body: UpdateOrderRequest,
    shop_id: str = Depends(get_shop_id),
    core: OrderReconciliation = Depends(get_reconciliation),
) -> OrderResponse:
    order = core.update_order(
        order_id,
        shop_id=shop_id,
        total_price=body.total_price,
        status=body.status,
        notes=body.notes,
    )
    return OrderResponse.model_validate(order)


@order_router.delete("/{order_id}", status_code=204)
async def delete_order(
    order_id: str,
    shop_id: str = Depends(get_shop_id),
    core: OrderReconciliation = Depends(get_reconciliation),
) -> Response:
    core.delete_order(order_id, shop_id=shop_id)
    return Response(status_code=204)


# ---------------------------------------------------------------------------
# Order items (nested under orders)
# ---------------------------------------------------------------------------
@order_router.post("/{order_id}/items", status_code=201, response_model=OrderItemResponse)
async def create_order_item(
    order_id: str,
    body: CreateOrderItemRequest,
    shop_id: str = Depends(get_shop_id),
    core: OrderReconciliation = Depends(get_reconciliation),
) -> OrderItemResponse:
    item = core.create_order_item(order_id, body.product_id, body.quantity, shop_id=shop_id)
    return OrderItemResponse.model_validate(item)


@order_router.get("/{order_id}/items", response_model=list[OrderItemResponse])
async def list_order_items(
    order_id: str,
    shop_id: str = Depends(get_shop_id),
    core: OrderReconciliation = Depends(get_reconciliation),
) -> list[OrderItemResponse]:
    return [OrderItemResponse.model_validate(item) for item in core.get_order_items(order_id, shop_id=shop_id)]


@order_router.get("/{order_id}/items/{item_id}", response_model=OrderItemResponse)
async def get_order_item(
    order_id: str,
    item_id: str,
    shop_id: str = Depends(get_shop_id),
    core: OrderReconciliation = Depends(get_reconciliation),
) -> OrderItemResponse:
    return OrderItemResponse.model_validate(core.get_order_item(order_id, item_id, shop_id=shop_id))


@order_router.patch("/{order_id}/items/{item_id}", response_model=OrderItemResponse)
async def update_order_item(
    order_id: str,
    item_id: str,
    body: UpdateOrderItemRequest,
    shop_id: str = Depends(get_shop_id),
    core: OrderReconciliation = Depends(get_reconciliation),
) -> OrderItemResponse:
    item = core.update_order_item(
        order_id,
        item_id,
        shop_id=shop_id,
        product_id=body.product_id,
        quantity=body.quantity,
    )
    return OrderItemResponse.model_validate(item)


@order_router.delete("/{order_id}/items/{item_id}", status_code=204)
async def delete_order_item(
    order_id: str,
    item_id: str,
    shop_id: str = Depends(get_shop_id),
    core: OrderReconciliation = Depends(get_reconciliation),
) -> Response:
    core.delete_order_item(order_id, item_id, shop_id=shop_id)
    return Response(status_code=204)


# ---------------------------------------------------------------------------
# Temp Order Router
# ---------------------------------------------------------------------------
temp_order_router = APIRouter(prefix="/temp-orders", tags=["temp-orders"])


@temp_order_router.get("", response_model=list[TempOrderResponse])
async def list_temp_orders(
    search: str | None = None,
    date_from: date | None = None,
    date_to: date | None = None,
    shop_id: str = Depends(get_shop_id),
    core: OrderReconciliation = Depends(get_reconciliation),
) -> list[TempOrderResponse]:
    filters = OrderFilterOptions(search=search, date_from=date_from, date_to=date_to)
    return [TempOrderResponse.model_validate(temp) for temp in core.get_temp_orders_by_shop(shop_id, filters)]


@temp_order_router.post("/merge", response_model=OrderResponse)
async def merge_temp_order(
    body: MergeTempOrderRequest,
    shop_id: str = Depends(get_shop_id),
    core: OrderReconciliation = Depends(get_reconciliation),
) -> OrderResponse:
    order = core.merge_temp_order(
        body.temp_order_id,
        body.customer_id,
        shop_id,
        active_order_id=body.active_order_id,
    )
    return OrderResponse.model_validate(order)


@temp_order_router.get("/{temp_order_id}", response_model=TempOrderResponse)
async def get_temp_order(
    temp_order_id: str,
    shop_id: str = Depends(get_shop_id),
    core: OrderReconciliation = Depends(get_reconciliation),
) -> TempOrderResponse:
    return TempOrderResponse.model_validate(core.get_temp_order_by_id(temp_order_id, shop_id=shop_id))


@temp_order_router.patch("/{temp_order_id}/reject", response_model=TempOrderResponse)
async def reject_temp_order(
    temp_order_id: str,
    shop_id: str = Depends(get_shop_id),
    core: OrderReconciliation = Depends(get_reconciliation),
) -> TempOrderResponse:
    return TempOrderResponse.model_validate(core.reject_temp_order(temp_order_id, shop_id))


# ---------------------------------------------------------------------------
# Public storefront (no shop header; the share token identifies the shop)
# ---------------------------------------------------------------------------
public_router = APIRouter(prefix="/public", tags=["public"])


@public_router.post("/shops/{share_token}/orders", status_code=201, response_model=TempOrderResponse)
async def submit_temp_order(
    share_token: str,
    body: SubmitTempOrderRequest,
    core: OrderReconciliation = Depends(get_reconciliation),
) -> TempOrderResponse:
    lines = [TempOrderLine(product_id=line.product_id, quantity=line.quantity) for line in body.items]
    temp_order = core.create_temp_order(body.customer_name, body.customer_phone, share_token, lines)
    return TempOrderResponse.model_validate(temp_order)
