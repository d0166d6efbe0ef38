"""Response DTOs for API endpoints.

Pydantic v2 models for API response serialization. Products, work orders
and their lines are not listed here: they leave the API as role-shaped
dicts built by the role policy.
"""

from datetime import UTC, date, datetime
from typing import Any

from pydantic import BaseModel, Field


class UserResponse(BaseModel):
    """Account as exposed by the API. Never carries the secret hash."""

    id: int
    name: str
    role: str
    created_at: datetime | None = None


class LoginResponse(BaseModel):
    """Issued bearer token and the identity it carries."""

    token: str
    user: UserResponse


class StockMovementResponse(BaseModel):
    """Stock ledger entry."""

    id: int
    product_id: int
    product_code: str | None = None
    product_description: str | None = None
    movement_type: str
    quantity: int
    unit_cost: float
    total_cost: float
    created_at: datetime


class StockSummaryResponse(BaseModel):
    """Monthly stock entry totals."""

    month: str
    start: datetime
    end: datetime
    entry_count: int
    total_quantity: int
    total_cost: float


class StockHistoryResponse(BaseModel):
    """Monthly stock entries, newest first."""

    month: str
    start: datetime
    end: datetime
    entries: list[StockMovementResponse]
    total: int


class RemoveLineResponse(BaseModel):
    """Result of reversing a work order line."""

    line_id: int
    work_order_total: float


class CustomerResponse(BaseModel):
    """Customer response DTO."""

    id: int
    name: str
    tax_id: str | None = None
    phone: str | None = None
    created_at: datetime | None = None


class InstallmentResponse(BaseModel):
    """Receivable installment response DTO."""

    id: int
    customer_id: int
    customer_name: str | None = None
    customer_tax_id: str | None = None
    document_number: str
    installment_amount: float
    installment_number: int
    total_installments: int
    status: str
    issued_at: datetime
    due_date: date


class ExpenseResponse(BaseModel):
    """Expense response DTO."""

    id: int
    expense_date: date
    invoice_number: str | None = None
    invoice_type: str | None = None
    amount: float
    supplier: str | None = None
    department: str | None = None
    notes: str | None = None
    created_at: datetime | None = None


class DashboardResponse(BaseModel):
    """Monthly dashboard figures."""

    month: str
    received_total: float
    pending_total: float
    expenses_total: float
    stock_entries_total: float
    real_profit: float
    open_work_orders: int
    due_today: float
    overdue: float
    due_next_7_days: float
    stale_open_work_orders: int


class DeleteResponse(BaseModel):
    """Acknowledgement for delete operations."""

    id: int
    deleted: bool = True


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str = "1.0.0"
    uptime_seconds: float
    database: dict[str, Any] | None = None


class ErrorResponse(BaseModel):
    """Standardized error body.

    - error: human-readable description
    - error_code: machine-readable code (e.g. WORK_ORDER_NOT_FOUND)
    - path: request path that triggered the error
    """

    error: str = Field(..., description="Human-readable error description")
    error_code: str = Field(..., description="Machine-readable error code")
    path: str | None = Field(default=None, description="Request path")
    details: dict[str, Any] | None = Field(default=None, description="Additional details")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
