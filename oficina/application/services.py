"""
Service factory functions for dependency injection.

This module wires the SQLite store implementations to the core services.
API dependencies import from here; tests either pass stores explicitly or
override the FastAPI dependencies.

Clean Architecture: Application layer orchestrates DI, not core layer.
"""

from typing import TYPE_CHECKING

from oficina.config import get_settings
from oficina.core.services import (
    AccountService,
    AuthService,
    ReceivablesService,
    ReportingService,
    RolePolicy,
    StockLedgerService,
    WorkOrderLineService,
    WorkOrderService,
)

if TYPE_CHECKING:
    from oficina.core.interfaces import (
        ICustomerStore,
        IExpenseStore,
        IProductStore,
        IReceivableStore,
        IStockLedgerStore,
        IUserStore,
        IWorkOrderStore,
    )


# Singleton service instances
_role_policy: RolePolicy | None = None
_auth_service: AuthService | None = None
_account_service: AccountService | None = None
_stock_ledger_service: StockLedgerService | None = None
_work_order_service: WorkOrderService | None = None
_work_order_line_service: WorkOrderLineService | None = None
_receivables_service: ReceivablesService | None = None
_reporting_service: ReportingService | None = None


def get_role_policy() -> RolePolicy:
    """Get the process-wide role policy."""
    global _role_policy
    if _role_policy is None:
        _role_policy = RolePolicy()
    return _role_policy


async def get_auth_service(user_store: "IUserStore | None" = None) -> AuthService:
    """
    Get or create AuthService, signing with the configured secret.

    Args:
        user_store: Optional account store override

    Returns:
        Configured AuthService
    """
    global _auth_service

    if _auth_service is not None and user_store is None:
        return _auth_service

    from oficina.infrastructure.storage.sqlite import get_user_store

    security = get_settings().security
    service = AuthService(
        user_store=user_store or await get_user_store(),
        secret_key=security.secret_key,
        token_ttl_hours=security.token_ttl_hours,
        algorithm=security.algorithm,
    )

    if user_store is None:
        _auth_service = service
    return service


async def get_account_service(user_store: "IUserStore | None" = None) -> AccountService:
    """Get or create AccountService."""
    global _account_service

    if _account_service is not None and user_store is None:
        return _account_service

    from oficina.infrastructure.storage.sqlite import get_user_store

    service = AccountService(
        user_store=user_store or await get_user_store(),
        bcrypt_rounds=get_settings().security.bcrypt_rounds,
    )

    if user_store is None:
        _account_service = service
    return service


async def get_stock_ledger_service(
    ledger_store: "IStockLedgerStore | None" = None,
) -> StockLedgerService:
    """Get or create StockLedgerService."""
    global _stock_ledger_service

    if _stock_ledger_service is not None and ledger_store is None:
        return _stock_ledger_service

    from oficina.infrastructure.storage.sqlite import get_ledger_store

    service = StockLedgerService(ledger_store or await get_ledger_store())

    if ledger_store is None:
        _stock_ledger_service = service
    return service


async def get_work_order_service(
    work_order_store: "IWorkOrderStore | None" = None,
    customer_store: "ICustomerStore | None" = None,
) -> WorkOrderService:
    """Get or create WorkOrderService."""
    global _work_order_service

    if _work_order_service is not None and work_order_store is None:
        return _work_order_service

    from oficina.infrastructure.storage.sqlite import (
        get_customer_store,
        get_work_order_store,
    )

    service = WorkOrderService(
        work_order_store=work_order_store or await get_work_order_store(),
        customer_store=customer_store or await get_customer_store(),
        policy=get_role_policy(),
    )

    if work_order_store is None:
        _work_order_service = service
    return service


async def get_work_order_line_service(
    work_order_store: "IWorkOrderStore | None" = None,
    product_store: "IProductStore | None" = None,
) -> WorkOrderLineService:
    """Get or create WorkOrderLineService."""
    global _work_order_line_service

    if _work_order_line_service is not None and work_order_store is None:
        return _work_order_line_service

    from oficina.infrastructure.storage.sqlite import (
        get_product_store,
        get_work_order_store,
    )

    service = WorkOrderLineService(
        work_order_store=work_order_store or await get_work_order_store(),
        product_store=product_store or await get_product_store(),
        policy=get_role_policy(),
    )

    if work_order_store is None:
        _work_order_line_service = service
    return service


async def get_receivables_service(
    receivable_store: "IReceivableStore | None" = None,
    customer_store: "ICustomerStore | None" = None,
) -> ReceivablesService:
    """Get or create ReceivablesService."""
    global _receivables_service

    if _receivables_service is not None and receivable_store is None:
        return _receivables_service

    from oficina.infrastructure.storage.sqlite import (
        get_customer_store,
        get_receivable_store,
    )

    service = ReceivablesService(
        receivable_store=receivable_store or await get_receivable_store(),
        customer_store=customer_store or await get_customer_store(),
    )

    if receivable_store is None:
        _receivables_service = service
    return service


async def get_reporting_service(
    receivable_store: "IReceivableStore | None" = None,
    expense_store: "IExpenseStore | None" = None,
    ledger_store: "IStockLedgerStore | None" = None,
    work_order_store: "IWorkOrderStore | None" = None,
) -> ReportingService:
    """Get or create ReportingService."""
    global _reporting_service

    overridden = any(
        s is not None for s in (receivable_store, expense_store, ledger_store, work_order_store)
    )
    if _reporting_service is not None and not overridden:
        return _reporting_service

    from oficina.infrastructure.storage.sqlite import (
        get_expense_store,
        get_ledger_store,
        get_receivable_store,
        get_work_order_store,
    )

    service = ReportingService(
        receivable_store=receivable_store or await get_receivable_store(),
        expense_store=expense_store or await get_expense_store(),
        ledger_store=ledger_store or await get_ledger_store(),
        work_order_store=work_order_store or await get_work_order_store(),
    )

    if not overridden:
        _reporting_service = service
    return service


def reset_services() -> None:
    """
    Reset all singleton service instances.

    Useful for testing or when configuration changes.
    """
    global _role_policy
    global _auth_service
    global _account_service
    global _stock_ledger_service
    global _work_order_service
    global _work_order_line_service
    global _receivables_service
    global _reporting_service

    _role_policy = None
    _auth_service = None
    _account_service = None
    _stock_ledger_service = None
    _work_order_service = None
    _work_order_line_service = None
    _receivables_service = None
    _reporting_service = None


__all__ = [
    "get_role_policy",
    "get_auth_service",
    "get_account_service",
    "get_stock_ledger_service",
    "get_work_order_service",
    "get_work_order_line_service",
    "get_receivables_service",
    "get_reporting_service",
    "reset_services",
]
