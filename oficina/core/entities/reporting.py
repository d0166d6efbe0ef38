"""Read-side aggregates for stock and dashboard reports."""

from datetime import datetime

from pydantic import BaseModel


class MonthlyEntryTotal(BaseModel):
    """Stock entries aggregated over one UTC month."""

    month: str  # "YYYY-MM"
    start: datetime
    end: datetime
    entry_count: int = 0
    total_quantity: int = 0
    total_cost: float = 0.0


class DashboardSummary(BaseModel):
    """Financial and operational snapshot for one UTC month."""

    month: str
    received_total: float = 0.0
    pending_total: float = 0.0
    expenses_total: float = 0.0
    stock_entries_total: float = 0.0
    real_profit: float = 0.0
    open_work_orders: int = 0
    due_today: float = 0.0
    overdue: float = 0.0
    due_next_7_days: float = 0.0
    stale_open_work_orders: int = 0
