"""Product (inventory part) entity."""

from datetime import UTC, datetime

from pydantic import BaseModel, Field, field_validator


class Product(BaseModel):
    """A stocked part. `quantity_on_hand` is the authoritative running total."""

    id: int | None = None
    code: str  # unique, stored upper-case
    description: str
    brand: str | None = None
    unit: str = "UN"
    quantity_on_hand: int = Field(default=0, ge=0)
    cost_price: float = Field(default=0.0, ge=0)
    sale_price: float = Field(default=0.0, ge=0)
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @field_validator("code")
    @classmethod
    def normalize_code(cls, v: str) -> str:
        return v.strip().upper()

    @property
    def label(self) -> str:
        """Default line description, e.g. 'FLT-001 - Oil filter'."""
        return f"{self.code} - {self.description}"

    @property
    def reference_price(self) -> float:
        """Sale price when set, cost price otherwise."""
        return self.sale_price if self.sale_price > 0 else self.cost_price
