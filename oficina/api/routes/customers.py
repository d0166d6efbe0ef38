"""
Customer endpoints.
"""

from fastapi import APIRouter, Depends, status

from oficina.api.dependencies import get_customers_store, require
from oficina.application.dto.requests import CreateCustomerRequest, UpdateCustomerRequest
from oficina.application.dto.responses import CustomerResponse, DeleteResponse, ErrorResponse
from oficina.core.entities.customer import Customer
from oficina.core.entities.user import Caller
from oficina.core.exceptions import CustomerNotFoundError, ValidationError
from oficina.core.interfaces import ICustomerStore
from oficina.core.services import Action

router = APIRouter(
    prefix="/api/clientes",
    tags=["customers"],
    responses={403: {"model": ErrorResponse}},
)


def _entity_to_response(customer: Customer) -> CustomerResponse:
    return CustomerResponse(
        id=customer.id,
        name=customer.name,
        tax_id=customer.tax_id,
        phone=customer.phone,
        created_at=customer.created_at,
    )


@router.get("", response_model=list[CustomerResponse])
async def list_customers(
    caller: Caller = Depends(require(Action.MANAGE_CUSTOMERS)),
    store: ICustomerStore = Depends(get_customers_store),
) -> list[CustomerResponse]:
    customers = await store.list_customers()
    return [_entity_to_response(c) for c in customers]


@router.post(
    "",
    response_model=CustomerResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
async def create_customer(
    request: CreateCustomerRequest,
    caller: Caller = Depends(require(Action.MANAGE_CUSTOMERS)),
    store: ICustomerStore = Depends(get_customers_store),
) -> CustomerResponse:
    if not request.name.strip():
        raise ValidationError("name", "name is required", request.name)
    customer = await store.create(
        Customer(name=request.name, tax_id=request.tax_id, phone=request.phone)
    )
    return _entity_to_response(customer)


@router.put(
    "/{customer_id}",
    response_model=CustomerResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def update_customer(
    customer_id: int,
    request: UpdateCustomerRequest,
    caller: Caller = Depends(require(Action.MANAGE_CUSTOMERS)),
    store: ICustomerStore = Depends(get_customers_store),
) -> CustomerResponse:
    """Partial update; the name is re-normalized to upper case."""
    existing = await store.get(customer_id)
    if existing is None:
        raise CustomerNotFoundError(customer_id)

    changes = request.model_dump(exclude_unset=True, exclude_none=True)
    if "name" in changes and not changes["name"].strip():
        raise ValidationError("name", "name is required", changes["name"])

    customer = Customer(**{**existing.model_dump(), **changes})
    customer = await store.update(customer)
    return _entity_to_response(customer)


@router.delete(
    "/{customer_id}",
    response_model=DeleteResponse,
    responses={404: {"model": ErrorResponse}},
)
async def delete_customer(
    customer_id: int,
    caller: Caller = Depends(require(Action.MANAGE_CUSTOMERS)),
    store: ICustomerStore = Depends(get_customers_store),
) -> DeleteResponse:
    """Delete a customer and its installments. Refused while it has work orders."""
    if not await store.delete(customer_id):
        raise CustomerNotFoundError(customer_id)
    return DeleteResponse(id=customer_id)
