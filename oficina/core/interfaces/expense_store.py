"""Abstract interface for expense storage."""

from abc import ABC, abstractmethod
from datetime import date

from oficina.core.entities.expense import Expense


class IExpenseStore(ABC):
    """Interface for expense persistence."""

    @abstractmethod
    async def create(self, expense: Expense) -> Expense:
        pass

    @abstractmethod
    async def get(self, expense_id: int) -> Expense | None:
        pass

    @abstractmethod
    async def list_expenses(self) -> list[Expense]:
        """List expenses, most recent date first."""
        pass

    @abstractmethod
    async def delete(self, expense_id: int) -> bool:
        pass

    @abstractmethod
    async def sum_amount(self, start: date, end: date) -> float:
        """Sum expense amounts dated in [start, end)."""
        pass
