"""Receivable installment entities."""

from datetime import UTC, date, datetime
from enum import Enum

from pydantic import BaseModel, Field


class InstallmentStatus(str, Enum):
    """Installment lifecycle: PENDING until flipped to PAID."""

    PENDING = "PENDENTE"
    PAID = "PAGO"


class Installment(BaseModel):
    """One scheduled payment out of a batch issued against a customer document."""

    id: int | None = None
    customer_id: int
    customer_name: str | None = None  # joined on read
    customer_tax_id: str | None = None  # joined on read
    document_number: str  # "{doc}/{n}"
    installment_amount: float
    installment_number: int
    total_installments: int
    status: InstallmentStatus = InstallmentStatus.PENDING
    issued_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    due_date: date

    @property
    def is_paid(self) -> bool:
        return self.status == InstallmentStatus.PAID

    def is_overdue(self, today: date) -> bool:
        """Due strictly before `today` and not paid."""
        return not self.is_paid and self.due_date < today
