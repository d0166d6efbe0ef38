"""Abstract interface for the stock ledger."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime

from oficina.core.entities.inventory import StockMovement


@dataclass
class EntryTotals:
    """Aggregate of ENTRY movements inside a time window."""

    count: int = 0
    quantity: int = 0
    cost: float = 0.0


class IStockLedgerStore(ABC):
    """Interface for stock entries and the quantity they add."""

    @abstractmethod
    async def record_entry(
        self, product_id: int, quantity: int, unit_cost: float
    ) -> StockMovement:
        """Atomically increment quantity_on_hand and append one ENTRY movement."""
        pass

    @abstractmethod
    async def adjust_to_count(
        self, product_id: int, counted: int, unit_cost: float
    ) -> StockMovement | None:
        """
        Set quantity_on_hand to a physical count.

        An increase is ledgered as an ENTRY of the difference; a decrease is
        applied without a movement. Returns the movement, if any.
        """
        pass

    @abstractmethod
    async def list_entries(self, start: datetime, end: datetime) -> list[StockMovement]:
        """List ENTRY movements in [start, end), newest first."""
        pass

    @abstractmethod
    async def summarize_entries(self, start: datetime, end: datetime) -> EntryTotals:
        """Count, quantity and cost (quantity * unit_cost) of ENTRY movements in [start, end)."""
        pass
