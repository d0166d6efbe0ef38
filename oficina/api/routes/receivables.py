"""
Receivable installment (faturamento) endpoints.
"""

from fastapi import APIRouter, Depends, status

from oficina.api.dependencies import get_receivables, require
from oficina.application.dto.requests import IssueInstallmentsRequest
from oficina.application.dto.responses import DeleteResponse, ErrorResponse, InstallmentResponse
from oficina.core.entities.receivable import Installment
from oficina.core.entities.user import Caller
from oficina.core.services import Action, ReceivablesService

router = APIRouter(
    prefix="/api/faturamentos",
    tags=["receivables"],
    responses={403: {"model": ErrorResponse}},
)


def _entity_to_response(installment: Installment) -> InstallmentResponse:
    return InstallmentResponse(
        id=installment.id,
        customer_id=installment.customer_id,
        customer_name=installment.customer_name,
        customer_tax_id=installment.customer_tax_id,
        document_number=installment.document_number,
        installment_amount=installment.installment_amount,
        installment_number=installment.installment_number,
        total_installments=installment.total_installments,
        status=installment.status.value,
        issued_at=installment.issued_at,
        due_date=installment.due_date,
    )


@router.get("", response_model=list[InstallmentResponse])
async def list_installments(
    caller: Caller = Depends(require(Action.MANAGE_RECEIVABLES)),
    service: ReceivablesService = Depends(get_receivables),
) -> list[InstallmentResponse]:
    """All installments ordered by due date."""
    installments = await service.list_installments()
    return [_entity_to_response(i) for i in installments]


@router.post(
    "/lancar",
    response_model=list[InstallmentResponse],
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def issue_installments(
    request: IssueInstallmentsRequest,
    caller: Caller = Depends(require(Action.MANAGE_RECEIVABLES)),
    service: ReceivablesService = Depends(get_receivables),
) -> list[InstallmentResponse]:
    """Split a total into `count` monthly installments."""
    installments = await service.issue_installments(
        customer_id=request.customer_id,
        total_amount=request.total_amount,
        count=request.count,
        document_number=request.document_number,
        first_due_date=request.first_due_date,
    )
    return [_entity_to_response(i) for i in installments]


@router.put(
    "/{installment_id}/pagar",
    response_model=InstallmentResponse,
    responses={404: {"model": ErrorResponse}},
)
async def pay_installment(
    installment_id: int,
    caller: Caller = Depends(require(Action.MANAGE_RECEIVABLES)),
    service: ReceivablesService = Depends(get_receivables),
) -> InstallmentResponse:
    installment = await service.mark_paid(installment_id)
    return _entity_to_response(installment)


@router.delete(
    "/{installment_id}",
    response_model=DeleteResponse,
    responses={404: {"model": ErrorResponse}},
)
async def delete_installment(
    installment_id: int,
    caller: Caller = Depends(require(Action.MANAGE_RECEIVABLES)),
    service: ReceivablesService = Depends(get_receivables),
) -> DeleteResponse:
    await service.delete_installment(installment_id)
    return DeleteResponse(id=installment_id)
