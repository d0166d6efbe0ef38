"""
Operational expense (despesa) endpoints.
"""

from fastapi import APIRouter, Depends, status

from oficina.api.dependencies import get_expenses_store, require
from oficina.application.dto.requests import CreateExpenseRequest
from oficina.application.dto.responses import DeleteResponse, ErrorResponse, ExpenseResponse
from oficina.core.entities.expense import Expense
from oficina.core.entities.user import Caller
from oficina.core.exceptions import ExpenseNotFoundError
from oficina.core.interfaces import IExpenseStore
from oficina.core.services import Action
from oficina.core.services.periods import parse_date

router = APIRouter(
    prefix="/api/despesas",
    tags=["expenses"],
    responses={403: {"model": ErrorResponse}},
)


def _entity_to_response(expense: Expense) -> ExpenseResponse:
    return ExpenseResponse(
        id=expense.id,
        expense_date=expense.expense_date,
        invoice_number=expense.invoice_number,
        invoice_type=expense.invoice_type,
        amount=expense.amount,
        supplier=expense.supplier,
        department=expense.department,
        notes=expense.notes,
        created_at=expense.created_at,
    )


@router.get("", response_model=list[ExpenseResponse])
async def list_expenses(
    caller: Caller = Depends(require(Action.MANAGE_EXPENSES)),
    store: IExpenseStore = Depends(get_expenses_store),
) -> list[ExpenseResponse]:
    """Newest expense date first."""
    expenses = await store.list_expenses()
    return [_entity_to_response(e) for e in expenses]


@router.post(
    "",
    response_model=ExpenseResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
async def create_expense(
    request: CreateExpenseRequest,
    caller: Caller = Depends(require(Action.MANAGE_EXPENSES)),
    store: IExpenseStore = Depends(get_expenses_store),
) -> ExpenseResponse:
    expense = Expense(
        expense_date=parse_date(request.expense_date, "expense_date"),
        invoice_number=request.invoice_number,
        invoice_type=request.invoice_type,
        amount=request.amount,
        supplier=request.supplier,
        department=request.department,
        notes=request.notes,
    )
    expense = await store.create(expense)
    return _entity_to_response(expense)


@router.delete(
    "/{expense_id}",
    response_model=DeleteResponse,
    responses={404: {"model": ErrorResponse}},
)
async def delete_expense(
    expense_id: int,
    caller: Caller = Depends(require(Action.MANAGE_EXPENSES)),
    store: IExpenseStore = Depends(get_expenses_store),
) -> DeleteResponse:
    if not await store.delete(expense_id):
        raise ExpenseNotFoundError(expense_id)
    return DeleteResponse(id=expense_id)
