"""
Reporting aggregator for the dashboard.

All windows are half-open UTC intervals. Queries run one after another; the
first failure aborts the whole summary.
"""

from datetime import UTC, datetime, timedelta

from oficina.config import get_logger
from oficina.core.entities.reporting import DashboardSummary
from oficina.core.interfaces.expense_store import IExpenseStore
from oficina.core.interfaces.inventory_store import IStockLedgerStore
from oficina.core.interfaces.receivable_store import IReceivableStore
from oficina.core.interfaces.work_order_store import IWorkOrderStore
from oficina.core.services.periods import day_window, month_window

logger = get_logger(__name__)

STALE_AFTER_DAYS = 7
UPCOMING_DAYS = 7


class ReportingService:
    """Monthly financial and operational snapshot."""

    def __init__(
        self,
        receivable_store: IReceivableStore,
        expense_store: IExpenseStore,
        ledger_store: IStockLedgerStore,
        work_order_store: IWorkOrderStore,
    ) -> None:
        self._receivable_store = receivable_store
        self._expense_store = expense_store
        self._ledger_store = ledger_store
        self._work_order_store = work_order_store

    async def summarize(
        self, month: str | None = None, now: datetime | None = None
    ) -> DashboardSummary:
        """
        Build the dashboard summary for a UTC month (current month by default).

        Raises:
            InvalidRangeError: malformed month selector
        """
        now = (now or datetime.now(UTC)).astimezone(UTC)
        period = month_window(month, now)
        today = day_window(now)
        upcoming = day_window(now, offset_days=1, span_days=UPCOMING_DAYS)

        received = await self._receivable_store.sum_amount(
            period.start_date, period.end_date, paid=True
        )
        pending = await self._receivable_store.sum_amount(
            period.start_date, period.end_date, paid=False
        )
        expenses = await self._expense_store.sum_amount(period.start_date, period.end_date)
        entries = await self._ledger_store.summarize_entries(period.start, period.end)
        open_orders = await self._work_order_store.count_open()

        due_today = await self._receivable_store.sum_amount(
            today.start_date, today.end_date, paid=False
        )
        overdue = await self._receivable_store.sum_amount(
            datetime.min.date(), today.start_date, paid=False
        )
        due_soon = await self._receivable_store.sum_amount(
            upcoming.start_date, upcoming.end_date, paid=False
        )
        stale = await self._work_order_store.count_open(
            opened_before=today.start - timedelta(days=STALE_AFTER_DAYS)
        )

        summary = DashboardSummary(
            month=period.label,
            received_total=round(received, 2),
            pending_total=round(pending, 2),
            expenses_total=round(expenses, 2),
            stock_entries_total=round(entries.cost, 2),
            real_profit=round(received - (expenses + entries.cost), 2),
            open_work_orders=open_orders,
            due_today=round(due_today, 2),
            overdue=round(overdue, 2),
            due_next_7_days=round(due_soon, 2),
            stale_open_work_orders=stale,
        )
        logger.debug("dashboard_summarized", month=period.label)
        return summary
