"""Work order (OS) domain entities."""

from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, Field, field_validator, model_validator


class WorkOrderStatus(str, Enum):
    """Work order lifecycle."""

    OPEN = "ABERTA"
    CLOSED = "FINALIZADA"


class LineKind(str, Enum):
    """Kinds of billable line."""

    PART = "PECA"
    LABOR = "SERVICO"


class WorkOrderLine(BaseModel):
    """One billable entry on a work order. Price and quantity are fixed at creation."""

    id: int | None = None
    work_order_id: int
    product_id: int | None = None  # None for labor and after product deletion
    description: str
    kind: LineKind
    quantity: float
    unit_price: float
    subtotal: float = 0.0  # quantity * unit_price
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @model_validator(mode="after")
    def compute_subtotal(self) -> "WorkOrderLine":
        self.subtotal = self.quantity * self.unit_price
        return self


class WorkOrder(BaseModel):
    """A service job against a customer's vehicle."""

    id: int | None = None
    customer_id: int
    customer_name: str | None = None  # joined on read
    plate: str
    vehicle_description: str | None = None
    problem_description: str | None = None
    status: WorkOrderStatus = WorkOrderStatus.OPEN
    total: float = 0.0  # derived: sum of line subtotals, written by the store only
    opened_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    closed_at: datetime | None = None

    @field_validator("plate")
    @classmethod
    def normalize_plate(cls, v: str) -> str:
        return v.strip().upper()

    @property
    def is_open(self) -> bool:
        return self.status == WorkOrderStatus.OPEN
