"""Customer entity."""

from datetime import UTC, datetime

from pydantic import BaseModel, Field, field_validator


class Customer(BaseModel):
    """A company or person billed for work orders and installments."""

    id: int | None = None
    name: str
    tax_id: str | None = None  # CNPJ / CPF
    phone: str | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @field_validator("name")
    @classmethod
    def normalize_name(cls, v: str) -> str:
        return v.strip().upper()
