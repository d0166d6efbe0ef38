"""
Core business logic services.

Layer-pure services that depend only on:
- oficina/core/entities/*
- oficina/core/interfaces/*
- oficina/core/exceptions.py

NO infrastructure imports. All dependencies injected via constructor.
"""

from oficina.core.services.accounts import AccountService
from oficina.core.services.auth import AuthService
from oficina.core.services.periods import Period, add_months, day_window, month_window
from oficina.core.services.receivables import ReceivablesService
from oficina.core.services.reporting import ReportingService
from oficina.core.services.role_policy import Action, RolePolicy
from oficina.core.services.stock_ledger import StockLedgerService
from oficina.core.services.work_order_lines import WorkOrderLineService
from oficina.core.services.work_orders import WorkOrderService

__all__ = [
    # Access
    "RolePolicy",
    "Action",
    "AuthService",
    "AccountService",
    # Stock
    "StockLedgerService",
    # Work orders
    "WorkOrderService",
    "WorkOrderLineService",
    # Billing
    "ReceivablesService",
    # Reports
    "ReportingService",
    "Period",
    "month_window",
    "day_window",
    "add_months",
]
