"""SQLite storage implementations."""

from oficina.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
)
from oficina.infrastructure.storage.sqlite.customer_store import SQLiteCustomerStore
from oficina.infrastructure.storage.sqlite.expense_store import SQLiteExpenseStore
from oficina.infrastructure.storage.sqlite.inventory_store import SQLiteStockLedgerStore
from oficina.infrastructure.storage.sqlite.product_store import SQLiteProductStore
from oficina.infrastructure.storage.sqlite.receivable_store import SQLiteReceivableStore
from oficina.infrastructure.storage.sqlite.user_store import SQLiteUserStore
from oficina.infrastructure.storage.sqlite.work_order_store import SQLiteWorkOrderStore

# Singleton instances
_product_store: SQLiteProductStore | None = None
_ledger_store: SQLiteStockLedgerStore | None = None
_work_order_store: SQLiteWorkOrderStore | None = None
_customer_store: SQLiteCustomerStore | None = None
_receivable_store: SQLiteReceivableStore | None = None
_expense_store: SQLiteExpenseStore | None = None
_user_store: SQLiteUserStore | None = None


async def get_product_store() -> SQLiteProductStore:
    """Get singleton product store instance."""
    global _product_store
    if _product_store is None:
        _product_store = SQLiteProductStore()
    return _product_store


async def get_ledger_store() -> SQLiteStockLedgerStore:
    """Get singleton stock ledger store instance."""
    global _ledger_store
    if _ledger_store is None:
        _ledger_store = SQLiteStockLedgerStore()
    return _ledger_store


async def get_work_order_store() -> SQLiteWorkOrderStore:
    """Get singleton work order store instance."""
    global _work_order_store
    if _work_order_store is None:
        _work_order_store = SQLiteWorkOrderStore()
    return _work_order_store


async def get_customer_store() -> SQLiteCustomerStore:
    """Get singleton customer store instance."""
    global _customer_store
    if _customer_store is None:
        _customer_store = SQLiteCustomerStore()
    return _customer_store


async def get_receivable_store() -> SQLiteReceivableStore:
    """Get singleton receivable store instance."""
    global _receivable_store
    if _receivable_store is None:
        _receivable_store = SQLiteReceivableStore()
    return _receivable_store


async def get_expense_store() -> SQLiteExpenseStore:
    """Get singleton expense store instance."""
    global _expense_store
    if _expense_store is None:
        _expense_store = SQLiteExpenseStore()
    return _expense_store


async def get_user_store() -> SQLiteUserStore:
    """Get singleton account store instance."""
    global _user_store
    if _user_store is None:
        _user_store = SQLiteUserStore()
    return _user_store


__all__ = [
    # Connection
    "ConnectionPool",
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
    # Store classes
    "SQLiteProductStore",
    "SQLiteStockLedgerStore",
    "SQLiteWorkOrderStore",
    "SQLiteCustomerStore",
    "SQLiteReceivableStore",
    "SQLiteExpenseStore",
    "SQLiteUserStore",
    # Factory functions
    "get_product_store",
    "get_ledger_store",
    "get_work_order_store",
    "get_customer_store",
    "get_receivable_store",
    "get_expense_store",
    "get_user_store",
]
