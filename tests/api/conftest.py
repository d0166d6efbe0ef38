"""Fixtures for API tests: ASGI client, role tokens and mocked stores."""

from collections.abc import AsyncGenerator
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from oficina.api.dependencies import (
    get_auth,
    get_customers_store,
    get_expenses_store,
    get_orders_store,
    get_products_store,
    get_register_product_use_case,
    get_update_product_use_case,
    get_work_order_lines,
    get_work_orders,
)
from oficina.api.main import app
from oficina.application.use_cases import RegisterProductUseCase, UpdateProductUseCase
from oficina.core.services import WorkOrderLineService, WorkOrderService


@pytest.fixture
def headers(auth_service, callers) -> dict[str, dict[str, str]]:
    """Authorization header per role value, plus a few invalid variants."""
    result = {
        role: {"Authorization": f"Bearer {auth_service.issue_token(caller)}"}
        for role, caller in callers.items()
    }
    result["unsigned"] = {"Authorization": "Bearer not-a-token"}
    result["basic"] = {"Authorization": "Basic dXNlcjpwYXNz"}
    return result


@pytest.fixture
def product_store(sample_product) -> AsyncMock:
    store = AsyncMock()
    store.list_products.return_value = [sample_product]
    store.get.return_value = sample_product
    store.get_by_code.return_value = sample_product
    return store


@pytest.fixture
def ledger_store() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def work_order_store(open_order, closed_order) -> AsyncMock:
    store = AsyncMock()
    store.list_orders.return_value = [open_order, closed_order]
    store.get.return_value = open_order
    return store


@pytest.fixture
def customer_store(sample_customer) -> AsyncMock:
    store = AsyncMock()
    store.get.return_value = sample_customer
    store.list_customers.return_value = [sample_customer]
    return store


@pytest.fixture
def expense_store() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
async def client(
    auth_service,
    policy,
    product_store,
    ledger_store,
    work_order_store,
    customer_store,
    expense_store,
) -> AsyncGenerator[AsyncClient, None]:
    """App with every store mocked and real services on top."""
    app.dependency_overrides[get_auth] = lambda: auth_service
    app.dependency_overrides[get_products_store] = lambda: product_store
    app.dependency_overrides[get_orders_store] = lambda: work_order_store
    app.dependency_overrides[get_customers_store] = lambda: customer_store
    app.dependency_overrides[get_expenses_store] = lambda: expense_store
    app.dependency_overrides[get_register_product_use_case] = lambda: RegisterProductUseCase(
        product_store, policy
    )
    app.dependency_overrides[get_update_product_use_case] = lambda: UpdateProductUseCase(
        product_store, ledger_store, policy
    )
    app.dependency_overrides[get_work_orders] = lambda: WorkOrderService(
        work_order_store, customer_store, policy
    )
    app.dependency_overrides[get_work_order_lines] = lambda: WorkOrderLineService(
        work_order_store, product_store, policy
    )

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
