"""
Work order (OS) endpoints.

Authorization and stock/total rules live in the work order services; these
handlers only authenticate, delegate and project the result for the
caller's role.
"""

from typing import Any

from fastapi import APIRouter, Depends, status

from oficina.api.dependencies import (
    get_current_user,
    get_policy,
    get_work_order_lines,
    get_work_orders,
)
from oficina.application.dto.requests import AddWorkOrderLineRequest, CreateWorkOrderRequest
from oficina.application.dto.responses import ErrorResponse, RemoveLineResponse
from oficina.core.entities.user import Caller
from oficina.core.services import RolePolicy, WorkOrderLineService, WorkOrderService

router = APIRouter(prefix="/api/os", tags=["work-orders"])


@router.get("")
async def list_work_orders(
    caller: Caller = Depends(get_current_user),
    service: WorkOrderService = Depends(get_work_orders),
    policy: RolePolicy = Depends(get_policy),
) -> list[dict[str, Any]]:
    """Newest first. Staff only see open orders, without totals."""
    orders = await service.list_orders(caller.role)
    return policy.project_all(caller.role, orders)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def open_work_order(
    request: CreateWorkOrderRequest,
    caller: Caller = Depends(get_current_user),
    service: WorkOrderService = Depends(get_work_orders),
    policy: RolePolicy = Depends(get_policy),
) -> dict[str, Any]:
    order = await service.open_order(
        customer_id=request.customer_id,
        plate=request.plate,
        role=caller.role,
        vehicle_description=request.vehicle_description,
        problem_description=request.problem_description,
    )
    return policy.project(caller.role, order)


@router.get(
    "/{work_order_id}/itens",
    responses={403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def list_work_order_lines(
    work_order_id: int,
    caller: Caller = Depends(get_current_user),
    service: WorkOrderLineService = Depends(get_work_order_lines),
    policy: RolePolicy = Depends(get_policy),
) -> list[dict[str, Any]]:
    lines = await service.list_lines(work_order_id, caller.role)
    return policy.project_all(caller.role, lines)


@router.post(
    "/{work_order_id}/itens",
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
)
async def add_work_order_line(
    work_order_id: int,
    request: AddWorkOrderLineRequest,
    caller: Caller = Depends(get_current_user),
    service: WorkOrderLineService = Depends(get_work_order_lines),
    policy: RolePolicy = Depends(get_policy),
) -> dict[str, Any]:
    """
    Add a part or labor line.

    Parts consume stock; staff always bill the product's reference price.
    """
    line = await service.add_line(
        work_order_id=work_order_id,
        kind=request.kind,
        quantity=request.quantity,
        role=caller.role,
        product_id=request.product_id,
        description=request.description,
        price=request.price,
    )
    return policy.project(caller.role, line)


@router.delete(
    "/itens/{line_id}",
    response_model=RemoveLineResponse,
    responses={403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def remove_work_order_line(
    line_id: int,
    caller: Caller = Depends(get_current_user),
    service: WorkOrderLineService = Depends(get_work_order_lines),
) -> RemoveLineResponse:
    """Delete a line, returning part units to stock."""
    total = await service.remove_line(line_id, caller.role)
    return RemoveLineResponse(line_id=line_id, work_order_total=total)


@router.put(
    "/{work_order_id}/finalizar",
    responses={403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def close_work_order(
    work_order_id: int,
    caller: Caller = Depends(get_current_user),
    service: WorkOrderService = Depends(get_work_orders),
    policy: RolePolicy = Depends(get_policy),
) -> dict[str, Any]:
    order = await service.close_order(work_order_id, caller.role)
    return policy.project(caller.role, order)
