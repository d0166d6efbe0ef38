"""Staff account entities."""

from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, Field


class Role(str, Enum):
    """Known account roles. Stored and compared upper-case."""

    ADMIN = "ADMIN"
    MANAGER = "GERENTE"
    STAFF = "FUNCIONARIO"


class User(BaseModel):
    """A staff account. Only the bcrypt hash of the secret is kept."""

    id: int | None = None
    name: str
    secret_hash: str
    role: str = Role.MANAGER.value
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


class Caller(BaseModel):
    """Identity decoded from a verified bearer token."""

    id: int
    name: str
    role: str
