"""Pytest configuration and shared fixtures."""

from datetime import UTC, datetime
from unittest.mock import AsyncMock

import pytest

from oficina.core.entities import (
    Caller,
    Customer,
    LineKind,
    Product,
    Role,
    WorkOrder,
    WorkOrderLine,
    WorkOrderStatus,
)
from oficina.core.services import AuthService, RolePolicy

TEST_SECRET_KEY = "test-secret-key"


@pytest.fixture
def policy() -> RolePolicy:
    return RolePolicy()


@pytest.fixture
def fixed_now() -> datetime:
    """Mid-month instant used by report tests."""
    return datetime(2024, 3, 15, 14, 30, tzinfo=UTC)


@pytest.fixture
def sample_product() -> Product:
    return Product(
        id=1,
        code="flt-001",
        description="Oil filter",
        brand="Tecfil",
        unit="UN",
        quantity_on_hand=10,
        cost_price=20.0,
        sale_price=35.0,
    )


@pytest.fixture
def sample_customer() -> Customer:
    return Customer(id=1, name="auto pecas silva", tax_id="12.345.678/0001-90", phone="11 5555-0000")


@pytest.fixture
def open_order() -> WorkOrder:
    return WorkOrder(
        id=1,
        customer_id=1,
        customer_name="AUTO PECAS SILVA",
        plate="abc1d23",
        vehicle_description="Gol 1.6",
        problem_description="Oil change",
        total=70.0,
    )


@pytest.fixture
def closed_order(open_order: WorkOrder) -> WorkOrder:
    return open_order.model_copy(
        update={"status": WorkOrderStatus.CLOSED, "closed_at": datetime.now(UTC)}
    )


@pytest.fixture
def part_line() -> WorkOrderLine:
    return WorkOrderLine(
        id=1,
        work_order_id=1,
        product_id=1,
        description="FLT-001 - Oil filter",
        kind=LineKind.PART,
        quantity=2,
        unit_price=35.0,
    )


@pytest.fixture
def user_store() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def auth_service(user_store: AsyncMock) -> AuthService:
    return AuthService(user_store=user_store, secret_key=TEST_SECRET_KEY)


@pytest.fixture
def callers() -> dict[str, Caller]:
    return {
        Role.ADMIN.value: Caller(id=1, name="admin", role=Role.ADMIN.value),
        Role.MANAGER.value: Caller(id=2, name="gerente", role=Role.MANAGER.value),
        Role.STAFF.value: Caller(id=3, name="mecanico", role=Role.STAFF.value),
    }
