"""Core domain entities."""

from oficina.core.entities.customer import Customer
from oficina.core.entities.expense import Expense
from oficina.core.entities.inventory import MovementType, StockMovement
from oficina.core.entities.product import Product
from oficina.core.entities.receivable import Installment, InstallmentStatus
from oficina.core.entities.reporting import DashboardSummary, MonthlyEntryTotal
from oficina.core.entities.user import Caller, Role, User
from oficina.core.entities.work_order import (
    LineKind,
    WorkOrder,
    WorkOrderLine,
    WorkOrderStatus,
)

__all__ = [
    # Inventory
    "Product",
    "StockMovement",
    "MovementType",
    # Work orders
    "WorkOrder",
    "WorkOrderLine",
    "WorkOrderStatus",
    "LineKind",
    # Billing
    "Customer",
    "Installment",
    "InstallmentStatus",
    "Expense",
    # Accounts
    "User",
    "Caller",
    "Role",
    # Reports
    "MonthlyEntryTotal",
    "DashboardSummary",
]
