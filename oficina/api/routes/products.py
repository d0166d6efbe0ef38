"""
Product (parts inventory) endpoints.

Product payloads always go through the role policy projection: staff never
see sale prices and get cost prices zeroed.
"""

from typing import Any

from fastapi import APIRouter, Depends, status

from oficina.api.dependencies import (
    get_current_user,
    get_policy,
    get_products_store,
    get_register_product_use_case,
    get_update_product_use_case,
    require,
)
from oficina.application.dto.requests import CreateProductRequest, UpdateProductRequest
from oficina.application.dto.responses import DeleteResponse, ErrorResponse
from oficina.application.use_cases import RegisterProductUseCase, UpdateProductUseCase
from oficina.core.entities.user import Caller
from oficina.core.exceptions import ProductNotFoundError
from oficina.core.interfaces import IProductStore
from oficina.core.services import Action, RolePolicy

router = APIRouter(prefix="/api/produtos", tags=["products"])


@router.get("")
async def list_products(
    caller: Caller = Depends(require(Action.VIEW_PRODUCTS)),
    store: IProductStore = Depends(get_products_store),
    policy: RolePolicy = Depends(get_policy),
) -> list[dict[str, Any]]:
    """List products ordered by description."""
    products = await store.list_products()
    return policy.project_all(caller.role, products)


@router.get(
    "/codigo/{code}/lancamento",
    responses={403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def lookup_product_for_entry(
    code: str,
    caller: Caller = Depends(require(Action.LOOKUP_PRODUCT_BY_CODE)),
    store: IProductStore = Depends(get_products_store),
    policy: RolePolicy = Depends(get_policy),
) -> dict[str, Any]:
    """Find a product by code for quick stock entry (staff only)."""
    product = await store.get_by_code(code)
    if product is None:
        raise ProductNotFoundError(code.strip().upper())
    return policy.project(caller.role, product)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 403: {"model": ErrorResponse}},
)
async def create_product(
    request: CreateProductRequest,
    caller: Caller = Depends(get_current_user),
    use_case: RegisterProductUseCase = Depends(get_register_product_use_case),
    policy: RolePolicy = Depends(get_policy),
) -> dict[str, Any]:
    """Register a product; a positive quantity becomes its first stock entry."""
    product = await use_case.execute(request, caller.role)
    return policy.project(caller.role, product)


@router.put(
    "/{product_id}",
    responses={
        400: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
)
async def update_product(
    product_id: int,
    request: UpdateProductRequest,
    caller: Caller = Depends(get_current_user),
    use_case: UpdateProductUseCase = Depends(get_update_product_use_case),
    policy: RolePolicy = Depends(get_policy),
) -> dict[str, Any]:
    """Staff record received units; other roles may also edit details and counts."""
    product = await use_case.execute(product_id, request, caller.role)
    return policy.project(caller.role, product)


@router.delete(
    "/{product_id}",
    response_model=DeleteResponse,
    responses={403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def delete_product(
    product_id: int,
    caller: Caller = Depends(require(Action.DELETE_PRODUCT)),
    store: IProductStore = Depends(get_products_store),
) -> DeleteResponse:
    """Unlink work order lines from the product, then delete it."""
    if not await store.delete(product_id):
        raise ProductNotFoundError(product_id)
    return DeleteResponse(id=product_id)
