"""
Domain exceptions for the back-office application.

Every failure a request can end with is one of these; the API layer maps
each family to an HTTP status.
"""

from typing import Any


class OficinaError(Exception):
    """Base exception for all application errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "error": self.message,
            "error_code": self.code,
            "details": self.details,
        }


# Authentication / authorization
class UnauthenticatedError(OficinaError):
    """No credential was supplied."""

    def __init__(self, message: str = "Token not provided"):
        super().__init__(message, code="UNAUTHENTICATED")


class InvalidCredentialError(OficinaError):
    """Credential is malformed, unsigned or expired."""

    def __init__(self, message: str = "Invalid or expired token"):
        super().__init__(message, code="INVALID_CREDENTIAL")


class LoginFailedError(InvalidCredentialError):
    """Submitted name/secret pair matches no account."""

    def __init__(self) -> None:
        super().__init__("Invalid name or secret")
        self.code = "LOGIN_FAILED"


class ForbiddenError(OficinaError):
    """Role policy denied the action. The message never says which rule matched."""

    def __init__(self, message: str = "Access denied"):
        super().__init__(message, code="FORBIDDEN")


# Input validation
class ValidationError(OficinaError):
    """Input validation failed."""

    def __init__(self, field: str, message: str, value: Any = None):
        super().__init__(
            f"Validation error for '{field}': {message}",
            code="VALIDATION_ERROR",
            details={
                "field": field,
                "message": message,
                "value": str(value)[:100] if value is not None else None,
            },
        )


class DuplicateProductCodeError(ValidationError):
    """A product with the same code already exists."""

    def __init__(self, code: str):
        super().__init__(field="code", message=f"Product code already exists: {code}", value=code)
        self.code = "DUPLICATE_PRODUCT_CODE"


class DuplicateUserError(ValidationError):
    """An account with the same name already exists."""

    def __init__(self, name: str):
        super().__init__(field="name", message=f"Account name already exists: {name}", value=name)
        self.code = "DUPLICATE_USER"


class InvalidRangeError(OficinaError):
    """Date or month selector is malformed or out of range."""

    def __init__(self, value: Any, reason: str = "invalid date range"):
        super().__init__(
            f"Invalid range '{value}': {reason}",
            code="INVALID_RANGE",
            details={"value": str(value)[:100] if value is not None else None},
        )


class InsufficientStockError(OficinaError):
    """Requested quantity exceeds the quantity on hand."""

    def __init__(self, product_id: int, requested: float, available: float):
        super().__init__(
            f"Insufficient stock for product {product_id}: "
            f"requested {requested}, available {available}",
            code="INSUFFICIENT_STOCK",
            details={
                "product_id": product_id,
                "requested": requested,
                "available": available,
            },
        )


# Missing entities
class NotFoundError(OficinaError):
    """Base exception for missing referenced entities."""

    entity = "Entity"

    def __init__(self, entity_id: Any):
        super().__init__(
            f"{self.entity} not found: {entity_id}",
            code=f"{self.entity.upper().replace(' ', '_')}_NOT_FOUND",
            details={"id": entity_id},
        )


class ProductNotFoundError(NotFoundError):
    entity = "Product"


class WorkOrderNotFoundError(NotFoundError):
    entity = "Work order"


class WorkOrderLineNotFoundError(NotFoundError):
    entity = "Work order line"


class CustomerNotFoundError(NotFoundError):
    entity = "Customer"


class InstallmentNotFoundError(NotFoundError):
    entity = "Installment"


class ExpenseNotFoundError(NotFoundError):
    entity = "Expense"


class UserNotFoundError(NotFoundError):
    entity = "User"


# State
class InvalidStateError(OficinaError):
    """Action is not permitted given the entity's current status."""

    pass


class WorkOrderClosedError(InvalidStateError):
    """Lines can only be added while the work order is open."""

    def __init__(self, work_order_id: int):
        super().__init__(
            f"Work order {work_order_id} is closed",
            code="WORK_ORDER_CLOSED",
            details={"work_order_id": work_order_id},
        )


class CustomerInUseError(InvalidStateError):
    """Customer still has work orders attached."""

    def __init__(self, customer_id: int):
        super().__init__(
            f"Customer {customer_id} has work orders and cannot be deleted",
            code="CUSTOMER_IN_USE",
            details={"customer_id": customer_id},
        )


class SelfDeletionError(InvalidStateError):
    """An account cannot delete itself."""

    def __init__(self, user_id: int):
        super().__init__(
            "An account cannot delete itself",
            code="SELF_DELETION",
            details={"user_id": user_id},
        )


# Storage
class StorageError(OficinaError):
    """Base exception for storage operations."""

    pass


class DatabaseError(StorageError):
    """Database operation failed."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            f"Database error during {operation}: {error}",
            code="DATABASE_ERROR",
            details={"operation": operation, "error": error},
        )
