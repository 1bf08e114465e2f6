"""FastAPI routes for the Ordering domain."""

from fastapi import APIRouter, Depends, Query, Request

from identity.api.dependencies import current_principal, require_admin
from identity.user.credentials import Principal
from ordering.api.schemas import (
    OrderListResponse,
    OrderResponse,
    OrderStatisticsResponse,
    PlaceOrderRequest,
    UpdateOrderStatusRequest,
)
from ordering.order.ports import Requester
from ordering.order.queries import OrderFilter
from ordering.order.workflow import OrderWorkflow

order_router = APIRouter(prefix="/orders", tags=["orders"])


def get_workflow(request: Request) -> OrderWorkflow:
    return request.app.state.workflow


def _requester(principal: Principal) -> Requester:
    return Requester(user_id=principal.user_id, is_admin=principal.is_admin)


def _order_list(result) -> OrderListResponse:
    return OrderListResponse(
        items=[OrderResponse.from_order(order) for order in result.items],
        pagination=result.meta(),
    )


@order_router.post("", status_code=201, response_model=OrderResponse)
async def place_order(
    body: PlaceOrderRequest,
    principal: Principal = Depends(current_principal),
    workflow: OrderWorkflow = Depends(get_workflow),
) -> OrderResponse:
    order = workflow.place_order(
        user_id=principal.user_id,
        items=[line.model_dump() for line in body.items],
        shipping_address=body.shipping_address.model_dump(),
        payment_method=body.payment_method,
        notes=body.notes,
    )
    return OrderResponse.from_order(order)


@order_router.get("/my-orders", response_model=OrderListResponse)
async def get_my_orders(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    principal: Principal = Depends(current_principal),
    workflow: OrderWorkflow = Depends(get_workflow),
) -> OrderListResponse:
    result = workflow.list_orders(OrderFilter(user_id=principal.user_id), page=page, limit=limit)
    return _order_list(result)


@order_router.get("/admin/all", response_model=OrderListResponse)
async def get_all_orders(
    status: str | None = None,
    search: str | None = None,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    _: Principal = Depends(require_admin),
    workflow: OrderWorkflow = Depends(get_workflow),
) -> OrderListResponse:
    result = workflow.list_orders(OrderFilter(status=status, search=search), page=page, limit=limit)
    return _order_list(result)


@order_router.get("/admin/stats", response_model=OrderStatisticsResponse)
async def get_order_statistics(
    _: Principal = Depends(require_admin),
    workflow: OrderWorkflow = Depends(get_workflow),
) -> OrderStatisticsResponse:
    stats = workflow.order_statistics()
    stats["recent_orders"] = [OrderResponse.from_order(order) for order in stats["recent_orders"]]
    return OrderStatisticsResponse(**stats)


@order_router.get("/{order_id}", response_model=OrderResponse)
async def get_order(
    order_id: str,
    principal: Principal = Depends(current_principal),
    workflow: OrderWorkflow = Depends(get_workflow),
) -> OrderResponse:
    return OrderResponse.from_order(workflow.get_order(order_id, _requester(principal)))


@order_router.put("/{order_id}/cancel", response_model=OrderResponse)
async def cancel_order(
    order_id: str,
    principal: Principal = Depends(current_principal),
    workflow: OrderWorkflow = Depends(get_workflow),
) -> OrderResponse:
    return OrderResponse.from_order(workflow.cancel_order(order_id, _requester(principal)))


@order_router.put("/{order_id}/status", response_model=OrderResponse)
async def update_order_status(
    order_id: str,
    body: UpdateOrderStatusRequest,
    _: Principal = Depends(require_admin),
    workflow: OrderWorkflow = Depends(get_workflow),
) -> OrderResponse:
    order = workflow.update_order_status(
        order_id,
        order_status=body.order_status,
        payment_status=body.payment_status,
    )
    return OrderResponse.from_order(order)
