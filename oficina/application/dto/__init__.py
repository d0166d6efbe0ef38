"""Data Transfer Objects for API layer.

Request DTOs: Validate and parse incoming API requests.
Response DTOs: Structure and serialize API responses.

These are the ONLY contracts between API handlers and use cases.
"""

from oficina.application.dto.requests import (
    AddWorkOrderLineRequest,
    CreateCustomerRequest,
    CreateExpenseRequest,
    CreateProductRequest,
    CreateUserRequest,
    CreateWorkOrderRequest,
    IssueInstallmentsRequest,
    LoginRequest,
    UpdateCustomerRequest,
    UpdateProductRequest,
    UpdateUserRequest,
)
from oficina.application.dto.responses import (
    CustomerResponse,
    DashboardResponse,
    DeleteResponse,
    ErrorResponse,
    ExpenseResponse,
    HealthResponse,
    InstallmentResponse,
    LoginResponse,
    RemoveLineResponse,
    StockHistoryResponse,
    StockMovementResponse,
    StockSummaryResponse,
    UserResponse,
)

__all__ = [
    # Requests
    "LoginRequest",
    "CreateUserRequest",
    "UpdateUserRequest",
    "CreateProductRequest",
    "UpdateProductRequest",
    "CreateWorkOrderRequest",
    "AddWorkOrderLineRequest",
    "CreateCustomerRequest",
    "UpdateCustomerRequest",
    "IssueInstallmentsRequest",
    "CreateExpenseRequest",
    # Responses
    "UserResponse",
    "LoginResponse",
    "StockMovementResponse",
    "StockSummaryResponse",
    "StockHistoryResponse",
    "RemoveLineResponse",
    "CustomerResponse",
    "InstallmentResponse",
    "ExpenseResponse",
    "DashboardResponse",
    "DeleteResponse",
    "HealthResponse",
    "ErrorResponse",
]
