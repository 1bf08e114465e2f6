"""Pydantic request/response schemas for the Ordering API."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from ordering.order.order import Order

# --- Request Schemas ---


class OrderLineRequest(BaseModel):
    product_id: str
    quantity: int = Field(..., ge=1)


class ShippingAddressSchema(BaseModel):
    street: str = Field(..., min_length=1, max_length=255)
    city: str = Field(..., min_length=1, max_length=100)
    state: str = Field(..., min_length=1, max_length=100)
    zip_code: str = Field(..., min_length=1, max_length=20)
    country: str = Field(..., min_length=1, max_length=100)


class PlaceOrderRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "items": [{"product_id": "9f0e2d7c-3a5b-4c1e-8f6d-2b7a9c4e1d30", "quantity": 2}],
                    "shipping_address": {
                        "street": "221B Baker Street",
                        "city": "London",
                        "state": "Greater London",
                        "zip_code": "NW1 6XE",
                        "country": "United Kingdom",
                    },
                    "payment_method": "credit_card",
                    "notes": "Leave at the door",
                }
            ]
        }
    }

    items: list[OrderLineRequest] = Field(..., min_length=1)
    shipping_address: ShippingAddressSchema
    payment_method: str
    notes: str | None = Field(None, max_length=500)


class UpdateOrderStatusRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"order_status": "shipped", "payment_status": "paid"}]}}

    order_status: str | None = None
    payment_status: str | None = None


# --- Response Schemas ---


class OrderItemResponse(BaseModel):
    product_id: str
    name: str
    image: str | None = None
    quantity: int
    price: float
    line_total: float


class OrderResponse(BaseModel):
    id: str
    order_number: str
    user_id: str
    items: list[OrderItemResponse]
    shipping_address: ShippingAddressSchema
    payment_method: str
    payment_status: str
    order_status: str
    subtotal: float
    tax: float
    shipping_cost: float
    total: float
    notes: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_order(cls, order: Order) -> OrderResponse:
        address = order.shipping_address
        return cls(
            id=str(order.id),
            order_number=order.order_number,
            user_id=str(order.user_id),
            items=[
                OrderItemResponse(
                    product_id=str(item.product_id),
                    name=item.name,
                    image=item.image,
                    quantity=item.quantity,
                    price=item.price,
                    line_total=item.line_total,
                )
                for item in order.items
            ],
            shipping_address=ShippingAddressSchema(
                street=address.street,
                city=address.city,
                state=address.state,
                zip_code=address.zip_code,
                country=address.country,
            ),
            payment_method=order.payment_method,
            payment_status=order.payment_status,
            order_status=order.order_status,
            subtotal=order.subtotal,
            tax=order.tax,
            shipping_cost=order.shipping_cost,
            total=order.total,
            notes=order.notes,
            created_at=order.created_at,
            updated_at=order.updated_at,
        )


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int


class OrderListResponse(BaseModel):
    items: list[OrderResponse]
    pagination: Pagination


class StatusCount(BaseModel):
    status: str
    count: int


class SalesTrendPoint(BaseModel):
    date: str
    sales: float
    orders: int


class OrderStatisticsResponse(BaseModel):
    total_orders: int
    pending_orders: int
    processing_orders: int
    delivered_orders: int
    cancelled_orders: int
    total_sales: float
    recent_orders: list[OrderResponse]
    status_distribution: list[StatusCount]
    sales_trend: list[SalesTrendPoint]
