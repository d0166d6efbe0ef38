"""
Structured logging configuration using structlog.

JSON output outside development, colored console output in development.
Credential fields are masked before rendering, whatever the output format.
"""

import logging
import sys

import structlog
from structlog.types import EventDict, Processor

from oficina.config.settings import get_settings

# Event keys that may carry a password, a bcrypt hash or a bearer token
SENSITIVE_KEYS = frozenset({"password", "secret", "secret_hash", "token", "authorization"})
MASK = "***"


def mask_credentials(logger: logging.Logger, method_name: str, event_dict: EventDict) -> EventDict:
    for key in SENSITIVE_KEYS & event_dict.keys():
        if event_dict[key]:
            event_dict[key] = MASK
    return event_dict


def app_context(app: str, version: str, environment: str) -> Processor:
    """Processor stamping every event with the application identity."""
    identity = {"app": app, "version": version, "environment": environment}

    def add_app_context(
        logger: logging.Logger, method_name: str, event_dict: EventDict
    ) -> EventDict:
        for key, value in identity.items():
            event_dict.setdefault(key, value)
        return event_dict

    return add_app_context


def configure_logging() -> None:
    """Configure structlog and route stdlib logging (uvicorn, aiosqlite) to stdout."""
    settings = get_settings()

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        mask_credentials,
        app_context(settings.app_name, settings.app_version, settings.environment),
    ]

    if settings.environment == "development":
        renderer: list[Processor] = [structlog.dev.ConsoleRenderer(colors=True)]
    else:
        renderer = [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]

    structlog.configure(
        processors=shared_processors + renderer,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, settings.log_level),
    )

    # aiosqlite logs every statement at DEBUG; LoggingMiddleware covers access logs
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)
