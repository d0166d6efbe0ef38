"""Abstract interface for receivable installment storage."""

from abc import ABC, abstractmethod
from datetime import date

from oficina.core.entities.receivable import Installment


class IReceivableStore(ABC):
    """Interface for installment persistence and due-date aggregates."""

    @abstractmethod
    async def create_batch(self, installments: list[Installment]) -> list[Installment]:
        """Insert all installments of one issuance as a single batch."""
        pass

    @abstractmethod
    async def get(self, installment_id: int) -> Installment | None:
        pass

    @abstractmethod
    async def list_installments(self) -> list[Installment]:
        """List installments ordered by due date, with customer name and tax id."""
        pass

    @abstractmethod
    async def mark_paid(self, installment_id: int) -> Installment | None:
        """Set status PAID regardless of the current status."""
        pass

    @abstractmethod
    async def delete(self, installment_id: int) -> bool:
        pass

    @abstractmethod
    async def sum_amount(
        self, start: date, end: date, paid: bool | None = None
    ) -> float:
        """
        Sum installment amounts due in [start, end).

        paid=True counts PAID only, paid=False everything not PAID,
        None every installment.
        """
        pass
