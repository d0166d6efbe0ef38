"""
Stock ledger service.

The ledger is purchasing history: it records inbound ENTRY movements only.
Consumption by work-order lines lowers `quantity_on_hand` without a
movement, and current stock is always read from the product row, never
rebuilt from the ledger.
"""

import math
from datetime import datetime

from oficina.config import get_logger
from oficina.core.entities.inventory import StockMovement
from oficina.core.entities.reporting import MonthlyEntryTotal
from oficina.core.exceptions import ValidationError
from oficina.core.interfaces.inventory_store import IStockLedgerStore
from oficina.core.services.periods import Period, month_window

logger = get_logger(__name__)


def _validate_whole_quantity(field: str, quantity: object, allow_zero: bool = False) -> int:
    if isinstance(quantity, bool) or not isinstance(quantity, (int, float)):
        raise ValidationError(field, "must be a whole number", quantity)
    if not math.isfinite(quantity) or quantity != int(quantity):
        raise ValidationError(field, "must be a whole number", quantity)
    if quantity < 0 or (quantity == 0 and not allow_zero):
        raise ValidationError(field, "must be greater than zero", quantity)
    return int(quantity)


def _validate_cost(unit_cost: object) -> float:
    if isinstance(unit_cost, bool) or not isinstance(unit_cost, (int, float)):
        raise ValidationError("unit_cost", "must be a number", unit_cost)
    if not math.isfinite(unit_cost) or unit_cost < 0:
        raise ValidationError("unit_cost", "must be a non-negative number", unit_cost)
    return float(unit_cost)


class StockLedgerService:
    """Records stock entries and answers monthly entry reports."""

    def __init__(self, ledger_store: IStockLedgerStore) -> None:
        self._ledger_store = ledger_store

    async def record_entry(
        self, product_id: int, quantity: int, unit_cost: float
    ) -> StockMovement:
        """
        Add `quantity` units to a product and append one ENTRY movement.

        Raises:
            ValidationError: quantity not a positive whole number, or bad cost
            ProductNotFoundError: product does not exist
        """
        qty = _validate_whole_quantity("entry_quantity", quantity)
        cost = _validate_cost(unit_cost)
        movement = await self._ledger_store.record_entry(product_id, qty, cost)
        logger.info(
            "stock_entry_recorded",
            product_id=product_id,
            quantity=qty,
            unit_cost=cost,
            movement_id=movement.id,
        )
        return movement

    async def adjust_to_count(
        self, product_id: int, counted: int, unit_cost: float
    ) -> StockMovement | None:
        """Set on-hand quantity to a physical count; increases are ledgered."""
        qty = _validate_whole_quantity("quantity", counted, allow_zero=True)
        cost = _validate_cost(unit_cost)
        movement = await self._ledger_store.adjust_to_count(product_id, qty, cost)
        logger.info(
            "stock_count_adjusted",
            product_id=product_id,
            counted=qty,
            ledgered=movement.quantity if movement else 0,
        )
        return movement

    async def resolve_monthly_entry_total(
        self, month: str | None = None, now: datetime | None = None
    ) -> MonthlyEntryTotal:
        """
        Aggregate ENTRY movements of a UTC month.

        Raises:
            InvalidRangeError: malformed month selector
        """
        period = month_window(month, now)
        totals = await self._ledger_store.summarize_entries(period.start, period.end)
        return MonthlyEntryTotal(
            month=period.label,
            start=period.start,
            end=period.end,
            entry_count=totals.count,
            total_quantity=totals.quantity,
            total_cost=round(totals.cost, 2),
        )

    async def resolve_monthly_entry_history(
        self, month: str | None = None, now: datetime | None = None
    ) -> tuple[Period, list[StockMovement]]:
        """
        List ENTRY movements of a UTC month, newest first.

        Raises:
            InvalidRangeError: malformed month selector
        """
        period = month_window(month, now)
        entries = await self._ledger_store.list_entries(period.start, period.end)
        return period, entries
