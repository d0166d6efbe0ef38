"""Operational expense entity."""

from datetime import UTC, date, datetime

from pydantic import BaseModel, Field


class Expense(BaseModel):
    """An operational expense backed by a supplier invoice."""

    id: int | None = None
    expense_date: date
    invoice_number: str | None = None
    invoice_type: str | None = None
    amount: float = Field(ge=0)
    supplier: str | None = None
    department: str | None = None
    notes: str | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
