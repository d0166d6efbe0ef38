"""API route modules."""

from oficina.api.routes.auth import router as auth_router
from oficina.api.routes.customers import router as customers_router
from oficina.api.routes.dashboard import router as dashboard_router
from oficina.api.routes.expenses import router as expenses_router
from oficina.api.routes.health import router as health_router
from oficina.api.routes.products import router as products_router
from oficina.api.routes.receivables import router as receivables_router
from oficina.api.routes.stock import router as stock_router
from oficina.api.routes.users import router as users_router
from oficina.api.routes.work_orders import router as work_orders_router

__all__ = [
    "auth_router",
    "customers_router",
    "dashboard_router",
    "expenses_router",
    "health_router",
    "products_router",
    "receivables_router",
    "stock_router",
    "users_router",
    "work_orders_router",
]
