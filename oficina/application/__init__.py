"""
Application layer - Use cases, DTOs, and service factories.

This layer orchestrates business logic by:
1. Defining request/response DTOs for API contracts
2. Implementing use cases that coordinate core services
3. Providing factory functions for dependency injection
"""

from oficina.application.services import (
    get_account_service,
    get_auth_service,
    get_receivables_service,
    get_reporting_service,
    get_role_policy,
    get_stock_ledger_service,
    get_work_order_line_service,
    get_work_order_service,
    reset_services,
)
from oficina.application.use_cases import RegisterProductUseCase, UpdateProductUseCase

__all__ = [
    # Use Cases
    "RegisterProductUseCase",
    "UpdateProductUseCase",
    # Service factories
    "get_role_policy",
    "get_auth_service",
    "get_account_service",
    "get_stock_ledger_service",
    "get_work_order_service",
    "get_work_order_line_service",
    "get_receivables_service",
    "get_reporting_service",
    "reset_services",
]
