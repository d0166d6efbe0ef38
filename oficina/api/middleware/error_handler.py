"""
Error handling middleware.

Every failure leaves the API as JSON:
- error: human-readable message (storage errors pass through unsanitized)
- error_code: machine-readable identifier
- path: request path
"""

import traceback
from collections.abc import Awaitable, Callable

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from oficina.application.dto.responses import ErrorResponse
from oficina.config import get_logger
from oficina.core.exceptions import (
    ForbiddenError,
    InsufficientStockError,
    InvalidCredentialError,
    InvalidRangeError,
    InvalidStateError,
    LoginFailedError,
    NotFoundError,
    OficinaError,
    StorageError,
    UnauthenticatedError,
    ValidationError,
)

logger = get_logger(__name__)


# Ordered: subclasses before their bases
EXCEPTION_STATUS_MAP: dict[type[Exception], int] = {
    UnauthenticatedError: status.HTTP_401_UNAUTHORIZED,
    LoginFailedError: status.HTTP_401_UNAUTHORIZED,
    InvalidCredentialError: status.HTTP_403_FORBIDDEN,
    ForbiddenError: status.HTTP_403_FORBIDDEN,
    InvalidStateError: status.HTTP_403_FORBIDDEN,
    ValidationError: status.HTTP_400_BAD_REQUEST,
    InvalidRangeError: status.HTTP_400_BAD_REQUEST,
    InsufficientStockError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    StorageError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def status_for(exc: Exception) -> int:
    """HTTP status for an exception; anything unmapped is a 500."""
    for exc_type, code in EXCEPTION_STATUS_MAP.items():
        if isinstance(exc, exc_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def error_response(request: Request, exc: Exception) -> JSONResponse:
    """Convert an exception to the standard JSON error response."""
    status_code = status_for(exc)

    if isinstance(exc, OficinaError):
        error_code = exc.code
        message = exc.message
        details = exc.details or None
    else:
        error_code = exc.__class__.__name__
        message = str(exc) or error_code
        details = None

    # Which rule denied access is never disclosed
    if isinstance(exc, ForbiddenError):
        details = None

    request_id = getattr(request.state, "request_id", None)
    log = logger.error if status_code >= 500 else logger.warning
    log(
        "request_error",
        request_id=request_id,
        path=request.url.path,
        status=status_code,
        error_type=error_code,
        error=message,
        traceback=traceback.format_exc() if status_code >= 500 else None,
    )

    body = ErrorResponse(
        error=message,
        error_code=error_code,
        path=request.url.path,
        details=details,
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Global error handling middleware.

    Catches whatever escapes the route and its registered handlers.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        try:
            return await call_next(request)
        except Exception as e:
            return error_response(request, e)


def setup_exception_handlers(app: FastAPI) -> None:
    """Set up FastAPI exception handlers."""
    from fastapi.exceptions import RequestValidationError
    from starlette.exceptions import HTTPException

    @app.exception_handler(OficinaError)
    async def domain_exception_handler(request: Request, exc: OficinaError) -> JSONResponse:
        """Handle domain errors raised by routes, services and stores."""
        return error_response(request, exc)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Handle request schema violations."""
        errors = []
        for error in exc.errors():
            loc = " -> ".join(str(part) for part in error["loc"])
            errors.append(f"{loc}: {error['msg']}")

        return JSONResponse(
            status_code=422,
            content=ErrorResponse(
                error="Request validation failed: " + "; ".join(errors),
                error_code="VALIDATION_ERROR",
                path=request.url.path,
            ).model_dump(mode="json"),
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(
        request: Request,
        exc: HTTPException,
    ) -> JSONResponse:
        """Handle HTTP exceptions (unknown routes, wrong methods) in the same shape."""
        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(
                error=str(exc.detail or "An error occurred"),
                error_code="NOT_FOUND" if exc.status_code == 404 else "HTTP_ERROR",
                path=request.url.path,
            ).model_dump(mode="json"),
        )
