"""Stock ledger entities."""

from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, Field


class MovementType(str, Enum):
    """Types of stock movements. Only inbound entries are ledgered."""

    ENTRY = "ENTRADA"


class StockMovement(BaseModel):
    """Append-only record of one inbound stock movement."""

    id: int | None = None
    product_id: int  # not a foreign key: history outlives the product row
    product_code: str | None = None  # captured at insert time
    product_description: str | None = None
    movement_type: MovementType = MovementType.ENTRY
    quantity: int = Field(gt=0)
    unit_cost: float = Field(default=0.0, ge=0)
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @property
    def total_cost(self) -> float:
        return self.quantity * self.unit_cost
