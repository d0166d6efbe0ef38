"""Core interfaces (ports) for dependency injection."""

from oficina.core.interfaces.customer_store import ICustomerStore
from oficina.core.interfaces.expense_store import IExpenseStore
from oficina.core.interfaces.inventory_store import EntryTotals, IStockLedgerStore
from oficina.core.interfaces.product_store import IProductStore
from oficina.core.interfaces.receivable_store import IReceivableStore
from oficina.core.interfaces.user_store import IUserStore
from oficina.core.interfaces.work_order_store import IWorkOrderStore

__all__ = [
    "IProductStore",
    "IStockLedgerStore",
    "EntryTotals",
    "IWorkOrderStore",
    "ICustomerStore",
    "IReceivableStore",
    "IExpenseStore",
    "IUserStore",
]
