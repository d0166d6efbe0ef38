"""Storage infrastructure implementations."""

from oficina.infrastructure.storage.sqlite import (
    SQLiteCustomerStore,
    SQLiteExpenseStore,
    SQLiteProductStore,
    SQLiteReceivableStore,
    SQLiteStockLedgerStore,
    SQLiteUserStore,
    SQLiteWorkOrderStore,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
)

__all__ = [
    # SQLite stores
    "SQLiteProductStore",
    "SQLiteStockLedgerStore",
    "SQLiteWorkOrderStore",
    "SQLiteCustomerStore",
    "SQLiteReceivableStore",
    "SQLiteExpenseStore",
    "SQLiteUserStore",
    # Connection pool
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
]
