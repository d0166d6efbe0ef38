"""Tests for domain exceptions."""

from oficina.core.exceptions import (
    CustomerNotFoundError,
    DatabaseError,
    DuplicateProductCodeError,
    ForbiddenError,
    InsufficientStockError,
    InvalidCredentialError,
    InvalidRangeError,
    InvalidStateError,
    LoginFailedError,
    NotFoundError,
    OficinaError,
    ProductNotFoundError,
    SelfDeletionError,
    StorageError,
    UnauthenticatedError,
    ValidationError,
    WorkOrderClosedError,
    WorkOrderLineNotFoundError,
)


class TestOficinaError:
    def test_defaults(self):
        err = OficinaError("boom")
        assert err.message == "boom"
        assert err.code == "OficinaError"
        assert err.details == {}
        assert str(err) == "boom"

    def test_to_dict(self):
        err = OficinaError("boom", code="X", details={"a": 1})
        assert err.to_dict() == {"error": "boom", "error_code": "X", "details": {"a": 1}}


class TestAuthErrors:
    def test_unauthenticated(self):
        err = UnauthenticatedError()
        assert err.code == "UNAUTHENTICATED"
        assert err.message == "Token not provided"

    def test_login_failed_is_credential_error(self):
        err = LoginFailedError()
        assert isinstance(err, InvalidCredentialError)
        assert err.code == "LOGIN_FAILED"

    def test_forbidden_message_is_generic(self):
        assert ForbiddenError().message == "Access denied"


class TestValidationErrors:
    def test_validation_error_details(self):
        err = ValidationError("quantity", "must be positive", -1)
        assert err.code == "VALIDATION_ERROR"
        assert err.details["field"] == "quantity"
        assert err.details["value"] == "-1"
        assert "quantity" in err.message

    def test_duplicate_code_keeps_family(self):
        err = DuplicateProductCodeError("FLT-001")
        assert isinstance(err, ValidationError)
        assert err.code == "DUPLICATE_PRODUCT_CODE"

    def test_invalid_range(self):
        err = InvalidRangeError("2024-13", "month must be between 01 and 12")
        assert err.code == "INVALID_RANGE"
        assert "2024-13" in err.message

    def test_insufficient_stock_details(self):
        err = InsufficientStockError(product_id=7, requested=5, available=2)
        assert err.code == "INSUFFICIENT_STOCK"
        assert err.details == {"product_id": 7, "requested": 5, "available": 2}


class TestNotFoundErrors:
    def test_codes_derive_from_entity(self):
        assert ProductNotFoundError(1).code == "PRODUCT_NOT_FOUND"
        assert WorkOrderLineNotFoundError(1).code == "WORK_ORDER_LINE_NOT_FOUND"
        assert CustomerNotFoundError(1).code == "CUSTOMER_NOT_FOUND"

    def test_message_and_details(self):
        err = ProductNotFoundError(42)
        assert isinstance(err, NotFoundError)
        assert err.message == "Product not found: 42"
        assert err.details == {"id": 42}


class TestStateAndStorageErrors:
    def test_closed_order(self):
        err = WorkOrderClosedError(3)
        assert isinstance(err, InvalidStateError)
        assert err.code == "WORK_ORDER_CLOSED"

    def test_self_deletion(self):
        assert isinstance(SelfDeletionError(1), InvalidStateError)

    def test_database_error(self):
        err = DatabaseError("insert", "disk I/O error")
        assert isinstance(err, StorageError)
        assert err.code == "DATABASE_ERROR"
        assert "disk I/O error" in err.message
