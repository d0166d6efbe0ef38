"""Request DTOs for API endpoints.

Pydantic v2 models for API request validation.
These are the ONLY contracts between API and use cases.

Business rules (stock availability, price resolution, role branching) are
checked by the services, so several numeric fields here are deliberately
loose and only type-checked.
"""

from pydantic import BaseModel, Field

# --- Auth / accounts ---


class LoginRequest(BaseModel):
    """Login with account name and secret."""

    name: str = Field(..., min_length=1, description="Account name")
    secret: str = Field(..., min_length=1, description="Account secret")


class CreateUserRequest(BaseModel):
    """Create a staff account (ADMIN only)."""

    name: str = Field(..., min_length=1)
    secret: str = Field(..., min_length=1)
    role: str | None = Field(
        default=None,
        description="ADMIN, GERENTE or FUNCIONARIO (defaults to GERENTE)",
        examples=["FUNCIONARIO"],
    )


class UpdateUserRequest(BaseModel):
    """Partial account update. Omitted fields are left unchanged."""

    name: str | None = None
    secret: str | None = None
    role: str | None = None


# --- Products ---


class CreateProductRequest(BaseModel):
    """Register a product. A positive quantity is recorded as the first stock entry."""

    code: str = Field(..., min_length=1, description="Product code (stored upper-case)")
    description: str = Field(..., min_length=1)
    brand: str | None = None
    unit: str = Field(default="UN", description="Unit of measure")
    quantity: int = Field(default=0, ge=0, description="Initial quantity on hand")
    cost_price: float = Field(default=0.0, ge=0)
    sale_price: float = Field(default=0.0, ge=0)


class UpdateProductRequest(BaseModel):
    """Product update.

    Staff may only send `entry_quantity`. Other roles may also edit details,
    correct the on-hand count with `quantity`, or both.
    """

    description: str | None = None
    brand: str | None = None
    unit: str | None = None
    cost_price: float | None = Field(default=None, ge=0)
    sale_price: float | None = Field(default=None, ge=0)
    quantity: int | None = Field(default=None, description="Physical count (non-staff)")
    entry_quantity: int | None = Field(default=None, description="Units received")


# --- Work orders ---


class CreateWorkOrderRequest(BaseModel):
    """Open a work order for a customer's vehicle."""

    customer_id: int
    plate: str = Field(..., min_length=1, examples=["ABC1D23"])
    vehicle_description: str | None = None
    problem_description: str | None = None


class AddWorkOrderLineRequest(BaseModel):
    """Add a part or labor line."""

    kind: str = Field(..., description="PECA (part) or SERVICO (labor)", examples=["PECA"])
    product_id: int | None = Field(default=None, description="Required for parts")
    description: str | None = Field(
        default=None, description="Required for labor; parts default to 'CODE - description'"
    )
    quantity: float
    price: float | None = Field(default=None, description="Ignored for staff")


# --- Customers ---


class CreateCustomerRequest(BaseModel):
    """Register a customer."""

    name: str = Field(..., min_length=1)
    tax_id: str | None = Field(default=None, description="CNPJ or CPF")
    phone: str | None = None


class UpdateCustomerRequest(BaseModel):
    """Partial customer update."""

    name: str | None = None
    tax_id: str | None = None
    phone: str | None = None


# --- Receivables ---


class IssueInstallmentsRequest(BaseModel):
    """Split an invoiced amount into monthly installments."""

    customer_id: int
    total_amount: float = Field(..., description="Amount to split")
    count: int = Field(..., description="Number of installments")
    document_number: str = Field(..., description="Base document number, suffixed /n")
    first_due_date: str = Field(..., description="YYYY-MM-DD", examples=["2024-03-10"])


# --- Expenses ---


class CreateExpenseRequest(BaseModel):
    """Record an operational expense."""

    expense_date: str = Field(..., description="YYYY-MM-DD")
    invoice_number: str | None = None
    invoice_type: str | None = None
    amount: float = Field(..., ge=0)
    supplier: str | None = None
    department: str | None = None
    notes: str | None = None
