"""Abstract interface for work order storage."""

from abc import ABC, abstractmethod
from datetime import datetime

from oficina.core.entities.work_order import WorkOrder, WorkOrderLine, WorkOrderStatus


class IWorkOrderStore(ABC):
    """Interface for work orders and their line items."""

    @abstractmethod
    async def create(self, order: WorkOrder) -> WorkOrder:
        """Create a new work order."""
        pass

    @abstractmethod
    async def get(self, work_order_id: int) -> WorkOrder | None:
        """Get work order by ID (with customer name)."""
        pass

    @abstractmethod
    async def list_orders(self, status: WorkOrderStatus | None = None) -> list[WorkOrder]:
        """List work orders, newest first, optionally filtered by status."""
        pass

    @abstractmethod
    async def close(self, work_order_id: int, closed_at: datetime) -> WorkOrder | None:
        """Set status CLOSED and stamp closed_at. None when the order is missing."""
        pass

    @abstractmethod
    async def list_lines(self, work_order_id: int) -> list[WorkOrderLine]:
        """List line items of a work order."""
        pass

    @abstractmethod
    async def add_line(self, line: WorkOrderLine, consume_stock: bool) -> WorkOrderLine:
        """
        Insert a line and recompute the order total in one transaction.

        The order status is checked inside the transaction: WorkOrderNotFoundError
        or WorkOrderClosedError when it is missing or no longer OPEN.

        With `consume_stock`, the product's quantity_on_hand is decremented by
        `line.quantity` only if enough is on hand; otherwise
        InsufficientStockError is raised and nothing is written.
        """
        pass

    @abstractmethod
    async def remove_line(self, line_id: int) -> float:
        """
        Delete a line, restore part stock, and recompute the order total.

        The line is read inside the transaction, so a line removed twice only
        restores its stock once; the second call raises
        WorkOrderLineNotFoundError. Returns the new total.
        """
        pass

    @abstractmethod
    async def count_open(self, opened_before: datetime | None = None) -> int:
        """Count OPEN work orders, optionally only those opened before a moment."""
        pass
