"""
Dashboard endpoint.
"""

from fastapi import APIRouter, Depends, Query

from oficina.api.dependencies import get_reporting, require
from oficina.application.dto.responses import DashboardResponse, ErrorResponse
from oficina.core.entities.user import Caller
from oficina.core.services import Action, ReportingService

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


@router.get(
    "/resumo",
    response_model=DashboardResponse,
    responses={400: {"model": ErrorResponse}, 403: {"model": ErrorResponse}},
)
async def dashboard_summary(
    month: str | None = Query(default=None, description="YYYY-MM"),
    caller: Caller = Depends(require(Action.VIEW_DASHBOARD)),
    service: ReportingService = Depends(get_reporting),
) -> DashboardResponse:
    """Received, pending, expenses, stock entries and profit for a month."""
    summary = await service.summarize(month)
    return DashboardResponse(**summary.model_dump())
