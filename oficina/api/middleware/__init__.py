"""API middleware."""

from oficina.api.middleware.error_handler import ErrorHandlerMiddleware
from oficina.api.middleware.logging import LoggingMiddleware

__all__ = ["LoggingMiddleware", "ErrorHandlerMiddleware"]
