"""
FastAPI application factory.

Creates and configures the main application instance.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from oficina import __version__
from oficina.api.middleware import ErrorHandlerMiddleware, LoggingMiddleware
from oficina.api.middleware.error_handler import setup_exception_handlers
from oficina.api.routes import (
    auth_router,
    customers_router,
    dashboard_router,
    expenses_router,
    health_router,
    products_router,
    receivables_router,
    stock_router,
    users_router,
    work_orders_router,
)
from oficina.config import configure_logging, get_logger, get_settings
from oficina.core.exceptions import DatabaseError

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application lifespan handler.

    Applies pending migrations and opens the connection pool on startup,
    closes the pool on shutdown.
    """
    configure_logging()
    settings = get_settings()

    logger.info(
        "application_starting",
        host=settings.api.host,
        port=settings.api.port,
        debug=settings.api.debug,
    )

    try:
        from oficina.infrastructure.storage.sqlite import get_pool
        from oficina.infrastructure.storage.sqlite.migrations import initialize_database

        results = await initialize_database()
        failed = [r for r in results if not r.success]
        if failed:
            raise DatabaseError(f"migration {failed[0].version}", failed[0].error or "unknown")
        logger.info("database_initialized", applied=len(results))

        await get_pool()
        logger.info("connection_pool_ready")

    except Exception as e:
        logger.error("database_init_failed", error=str(e))
        raise

    logger.info("application_started")

    yield

    logger.info("application_stopping")

    try:
        from oficina.infrastructure.storage.sqlite import close_pool

        await close_pool()
        logger.info("connection_pool_closed")

    except Exception as e:
        logger.warning("connection_pool_close_failed", error=str(e))

    logger.info("application_stopped")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()

    app = FastAPI(
        title="Oficina Back-Office API",
        description="Parts inventory, work orders, receivables and staff accounts",
        version=__version__,
        docs_url="/docs" if settings.api.debug else None,
        redoc_url="/redoc" if settings.api.debug else None,
        lifespan=lifespan,
    )

    # Add middleware
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(ErrorHandlerMiddleware)

    # CORS
    if settings.api.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.api.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    # Setup exception handlers
    setup_exception_handlers(app)

    # Register routers
    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(products_router)
    app.include_router(stock_router)
    app.include_router(work_orders_router)
    app.include_router(dashboard_router)
    app.include_router(customers_router)
    app.include_router(receivables_router)
    app.include_router(expenses_router)
    app.include_router(users_router)

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()

    uvicorn.run(
        "oficina.api.main:app",
        host=settings.api.host,
        port=settings.api.port,
        reload=settings.api.debug,
    )
