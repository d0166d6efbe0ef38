"""
Dependency injection container for FastAPI.

Provides the authenticated caller, role gates, stores, services and use
cases to route handlers. Tests swap any of these through
`app.dependency_overrides`.
"""

from collections.abc import Awaitable, Callable

import structlog
from fastapi import Depends, Header, Request

from oficina.application.services import (
    get_account_service,
    get_auth_service,
    get_receivables_service,
    get_reporting_service,
    get_role_policy,
    get_stock_ledger_service,
    get_work_order_line_service,
    get_work_order_service,
)
from oficina.application.use_cases import RegisterProductUseCase, UpdateProductUseCase
from oficina.config import Settings, get_settings
from oficina.core.entities.user import Caller
from oficina.core.interfaces import (
    ICustomerStore,
    IExpenseStore,
    IProductStore,
    IWorkOrderStore,
)
from oficina.core.services import (
    AccountService,
    Action,
    AuthService,
    ReceivablesService,
    ReportingService,
    RolePolicy,
    StockLedgerService,
    WorkOrderLineService,
    WorkOrderService,
)
from oficina.infrastructure.storage.sqlite import (
    get_customer_store,
    get_expense_store,
    get_product_store,
    get_work_order_store,
)


def get_app_settings() -> Settings:
    """Get application settings."""
    return get_settings()


def get_policy() -> RolePolicy:
    """Get the role policy."""
    return get_role_policy()


# Service dependencies
async def get_auth() -> AuthService:
    """Get credential verifier."""
    return await get_auth_service()


async def get_accounts() -> AccountService:
    """Get account service."""
    return await get_account_service()


async def get_stock_ledger() -> StockLedgerService:
    """Get stock ledger service."""
    return await get_stock_ledger_service()


async def get_work_orders() -> WorkOrderService:
    """Get work order service."""
    return await get_work_order_service()


async def get_work_order_lines() -> WorkOrderLineService:
    """Get work order line engine."""
    return await get_work_order_line_service()


async def get_receivables() -> ReceivablesService:
    """Get receivables engine."""
    return await get_receivables_service()


async def get_reporting() -> ReportingService:
    """Get reporting aggregator."""
    return await get_reporting_service()


# Store dependencies
async def get_products_store() -> IProductStore:
    """Get product store."""
    return await get_product_store()


async def get_orders_store() -> IWorkOrderStore:
    """Get work order store."""
    return await get_work_order_store()


async def get_customers_store() -> ICustomerStore:
    """Get customer store."""
    return await get_customer_store()


async def get_expenses_store() -> IExpenseStore:
    """Get expense store."""
    return await get_expense_store()


# Use case dependencies
def get_register_product_use_case(
    policy: RolePolicy = Depends(get_policy),
) -> RegisterProductUseCase:
    """Get register product use case."""
    return RegisterProductUseCase(policy=policy)


def get_update_product_use_case(
    policy: RolePolicy = Depends(get_policy),
) -> UpdateProductUseCase:
    """Get update product use case."""
    return UpdateProductUseCase(policy=policy)


# Authentication
async def get_current_user(
    request: Request,
    authorization: str | None = Header(default=None),
    auth: AuthService = Depends(get_auth),
) -> Caller:
    """
    Verify the bearer credential and attach the caller to the request.

    Raises:
        UnauthenticatedError: no Authorization header (401)
        InvalidCredentialError: bad, unsigned or expired token (403)
    """
    caller = auth.verify_credential(authorization)
    request.state.user = caller
    structlog.contextvars.bind_contextvars(user_id=caller.id, role=caller.role)
    return caller


def require(action: Action) -> Callable[..., Awaitable[Caller]]:
    """
    Route-level gate: authenticate, then check `action` against the role policy.

    Usage:
        caller: Caller = Depends(require(Action.VIEW_DASHBOARD))
    """

    async def dependency(
        caller: Caller = Depends(get_current_user),
        policy: RolePolicy = Depends(get_policy),
    ) -> Caller:
        policy.ensure(caller.role, action)
        return caller

    return dependency
