"""
Request logging for the shop API.

Each request gets an id (the caller's ``X-Request-ID`` when it is a short
token, a fresh one otherwise) bound into structlog's context, so store and
service events logged while serving carry it. Health checks from the
orchestrator are logged at DEBUG to keep the access log readable.
"""

import re
import time
import uuid
from collections.abc import Callable

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from oficina.config import get_logger

logger = get_logger(__name__)

_QUIET_PREFIX = "/health"
_INCOMING_ID = re.compile(r"^[A-Za-z0-9._-]{1,64}$")


def _request_id(request: Request) -> str:
    incoming = request.headers.get("X-Request-ID", "")
    if _INCOMING_ID.match(incoming):
        return incoming
    return uuid.uuid4().hex[:8]


class LoggingMiddleware(BaseHTTPMiddleware):
    """One start and one outcome event per request, with timing."""

    async def dispatch(
        self,
        request: Request,
        call_next: Callable,
    ) -> Response:
        request_id = _request_id(request)
        request.state.request_id = request_id
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id)

        path = request.url.path
        log = logger.debug if path.startswith(_QUIET_PREFIX) else logger.info
        started = time.perf_counter()

        log(
            "request_started",
            method=request.method,
            path=path,
            client=request.client.host if request.client else "unknown",
        )

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "request_failed",
                method=request.method,
                path=path,
                error_type=type(e).__name__,
                error=str(e),
                duration_ms=round((time.perf_counter() - started) * 1000, 2),
            )
            raise

        duration_ms = (time.perf_counter() - started) * 1000
        # The auth dependency leaves the caller on the shared request state
        caller = getattr(request.state, "user", None)
        if response.status_code >= 500:
            log = logger.error
        log(
            "request_completed",
            method=request.method,
            path=path,
            status=response.status_code,
            user_id=caller.id if caller else None,
            duration_ms=round(duration_ms, 2),
        )

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Response-Time"] = f"{duration_ms:.2f}ms"
        return response
