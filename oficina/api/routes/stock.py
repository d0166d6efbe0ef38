"""
Stock ledger report endpoints.
"""

from fastapi import APIRouter, Depends, Query

from oficina.api.dependencies import get_stock_ledger, require
from oficina.application.dto.responses import (
    ErrorResponse,
    StockHistoryResponse,
    StockMovementResponse,
    StockSummaryResponse,
)
from oficina.core.entities.inventory import StockMovement
from oficina.core.entities.user import Caller
from oficina.core.services import Action, StockLedgerService

router = APIRouter(prefix="/api/estoque", tags=["stock"])

MONTH_QUERY = Query(default=None, description="YYYY-MM (defaults to current UTC month)")


def _movement_to_response(movement: StockMovement) -> StockMovementResponse:
    return StockMovementResponse(
        id=movement.id,
        product_id=movement.product_id,
        product_code=movement.product_code,
        product_description=movement.product_description,
        movement_type=movement.movement_type.value,
        quantity=movement.quantity,
        unit_cost=movement.unit_cost,
        total_cost=round(movement.total_cost, 2),
        created_at=movement.created_at,
    )


@router.get(
    "/resumo",
    response_model=StockSummaryResponse,
    responses={400: {"model": ErrorResponse}, 403: {"model": ErrorResponse}},
)
async def stock_summary(
    month: str | None = MONTH_QUERY,
    caller: Caller = Depends(require(Action.VIEW_STOCK_SUMMARY)),
    service: StockLedgerService = Depends(get_stock_ledger),
) -> StockSummaryResponse:
    """Entry count, units and cost of stock received in a month."""
    total = await service.resolve_monthly_entry_total(month)
    return StockSummaryResponse(**total.model_dump())


@router.get(
    "/historico",
    response_model=StockHistoryResponse,
    responses={400: {"model": ErrorResponse}, 403: {"model": ErrorResponse}},
)
async def stock_history(
    month: str | None = MONTH_QUERY,
    caller: Caller = Depends(require(Action.VIEW_STOCK_HISTORY)),
    service: StockLedgerService = Depends(get_stock_ledger),
) -> StockHistoryResponse:
    """Entries received in a month, newest first."""
    period, entries = await service.resolve_monthly_entry_history(month)
    return StockHistoryResponse(
        month=period.label,
        start=period.start,
        end=period.end,
        entries=[_movement_to_response(m) for m in entries],
        total=len(entries),
    )
