"""Pydantic request/response schemas for the Storefront API.

These are external contracts, kept separate from the reconciliation views.
"""

from datetime import datetime

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Order Request Schemas
# ---------------------------------------------------------------------------
class CreateOrderRequest(BaseModel):
    customer_id: str
    notes: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "customer_id": "cust-001",
                    "notes": "Deliver after 5pm",
                }
            ]
        }
    }


class UpdateOrderRequest(BaseModel):
    total_price: int | None = Field(default=None, ge=0)
    status: str | None = None
    notes: str | None = None


class ActiveOrderRequest(BaseModel):
    customer_id: str


class CreateOrderItemRequest(BaseModel):
    product_id: str
    quantity: int = Field(ge=1, default=1)


class UpdateOrderItemRequest(BaseModel):
    product_id: str | None = None
    quantity: int | None = Field(default=None, ge=1)


# ---------------------------------------------------------------------------
# Temp Order Request Schemas
# ---------------------------------------------------------------------------
class TempOrderLineSchema(BaseModel):
    product_id: str
    quantity: int = Field(ge=1)


class SubmitTempOrderRequest(BaseModel):
    customer_name: str
    customer_phone: str
    items: list[TempOrderLineSchema] = Field(default_factory=list)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "customer_name": "Jane Doe",
                    "customer_phone": "+62 812 0000 0000",
                    "items": [{"product_id": "prod-001", "quantity": 2}],
                }
            ]
        }
    }


class MergeTempOrderRequest(BaseModel):
    temp_order_id: str
    customer_id: str
    active_order_id: str | None = None


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class OrderItemResponse(BaseModel):
    id: str
    order_id: str
    product_id: str
    product_name: str
    price: int
    quantity: int
    created_at: datetime
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}


class OrderResponse(BaseModel):
    id: str
    shop_id: str
    customer_id: str
    customer_name: str
    total_price: int
    status: str
    notes: str
    created_at: datetime
    updated_at: datetime | None = None
    items: list[OrderItemResponse] | None = None

    model_config = {"from_attributes": True}


class ActiveOrderResponse(BaseModel):
    order: OrderResponse | None = None


class TempOrderItemResponse(BaseModel):
    id: str
    temp_order_id: str
    product_id: str
    product_name: str
    price: int
    quantity: int
    created_at: datetime

    model_config = {"from_attributes": True}


class TempOrderResponse(BaseModel):
    id: str
    shop_id: str
    customer_name: str
    customer_phone: str
    total_price: int
    status: str
    created_at: datetime
    updated_at: datetime | None = None
    items: list[TempOrderItemResponse] | None = None

    model_config = {"from_attributes": True}
