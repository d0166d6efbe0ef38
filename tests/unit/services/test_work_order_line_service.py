"""Tests for WorkOrderLineService (work order line engine)."""

from unittest.mock import AsyncMock

import pytest

from oficina.core.entities import LineKind, WorkOrderLine
from oficina.core.exceptions import (
    ForbiddenError,
    InsufficientStockError,
    ProductNotFoundError,
    ValidationError,
    WorkOrderClosedError,
    WorkOrderLineNotFoundError,
    WorkOrderNotFoundError,
)
from oficina.core.services import WorkOrderLineService
from oficina.core.services.work_order_lines import parse_kind, resolve_unit_price


@pytest.fixture
def work_order_store(open_order) -> AsyncMock:
    store = AsyncMock()
    store.get.return_value = open_order

    def _persist(line: WorkOrderLine, consume_stock: bool) -> WorkOrderLine:
        return line.model_copy(update={"id": 99})

    store.add_line.side_effect = _persist
    return store


@pytest.fixture
def product_store(sample_product) -> AsyncMock:
    store = AsyncMock()
    store.get.return_value = sample_product
    return store


@pytest.fixture
def service(work_order_store, product_store, policy) -> WorkOrderLineService:
    return WorkOrderLineService(work_order_store, product_store, policy)


class TestParseKind:
    def test_case_insensitive(self):
        assert parse_kind("peca") == LineKind.PART
        assert parse_kind(" Servico ") == LineKind.LABOR

    def test_unknown(self):
        with pytest.raises(ValidationError):
            parse_kind("MATERIAL")


class TestResolveUnitPrice:
    def test_staff_part_uses_sale_price(self, sample_product):
        assert resolve_unit_price(LineKind.PART, True, sample_product, 1.0) == 35.0

    def test_staff_part_falls_back_to_cost(self, sample_product):
        product = sample_product.model_copy(update={"sale_price": 0.0})
        assert resolve_unit_price(LineKind.PART, True, product) == 20.0

    def test_manager_part_explicit_price(self, sample_product):
        assert resolve_unit_price(LineKind.PART, False, sample_product, 30) == 30.0

    @pytest.mark.parametrize("requested", [None, -1, "abc", float("nan")])
    def test_manager_part_invalid_price_falls_back(self, sample_product, requested):
        assert resolve_unit_price(LineKind.PART, False, sample_product, requested) == 35.0

    def test_staff_labor_is_free(self):
        assert resolve_unit_price(LineKind.LABOR, True, None, 500) == 0.0

    def test_manager_labor_needs_price(self):
        with pytest.raises(ValidationError):
            resolve_unit_price(LineKind.LABOR, False, None, None)


class TestAddPartLine:
    async def test_staff_part_line(self, service, work_order_store):
        line = await service.add_line(1, "PECA", 2, "FUNCIONARIO", product_id=1, price=1.0)

        assert line.id == 99
        assert line.unit_price == 35.0
        assert line.subtotal == 70.0
        assert line.quantity == 2
        assert line.description == "FLT-001 - Oil filter"
        assert work_order_store.add_line.call_args.kwargs["consume_stock"] is True

    async def test_manager_explicit_price(self, service):
        line = await service.add_line(1, "peca", 3, "GERENTE", product_id=1, price=30)
        assert line.unit_price == 30.0
        assert line.subtotal == 90.0

    async def test_custom_description_kept(self, service):
        line = await service.add_line(1, "PECA", 1, "ADMIN", product_id=1, description="Filtro")
        assert line.description == "Filtro"

    async def test_insufficient_stock(self, service, work_order_store):
        with pytest.raises(InsufficientStockError) as exc:
            await service.add_line(1, "PECA", 11, "ADMIN", product_id=1)
        assert exc.value.details["available"] == 10
        work_order_store.add_line.assert_not_called()

    async def test_exact_stock_allowed(self, service):
        line = await service.add_line(1, "PECA", 10, "ADMIN", product_id=1)
        assert line.quantity == 10

    async def test_missing_product_id(self, service):
        with pytest.raises(ValidationError):
            await service.add_line(1, "PECA", 1, "ADMIN")

    async def test_unknown_product(self, service, product_store):
        product_store.get.return_value = None
        with pytest.raises(ProductNotFoundError):
            await service.add_line(1, "PECA", 1, "ADMIN", product_id=7)

    async def test_fractional_part_quantity(self, service):
        with pytest.raises(ValidationError):
            await service.add_line(1, "PECA", 1.5, "ADMIN", product_id=1)


class TestAddLaborLine:
    async def test_staff_labor_is_free(self, service, work_order_store):
        line = await service.add_line(1, "SERVICO", 1, "FUNCIONARIO", description="Alinhamento", price=500)

        assert line.unit_price == 0.0
        assert line.subtotal == 0.0
        assert line.product_id is None
        assert work_order_store.add_line.call_args.kwargs["consume_stock"] is False

    async def test_manager_labor(self, service):
        line = await service.add_line(1, "SERVICO", 1.5, "GERENTE", description="Revisao", price=80)
        assert line.quantity == 1.5
        assert line.subtotal == 120.0

    async def test_labor_needs_description(self, service):
        with pytest.raises(ValidationError):
            await service.add_line(1, "SERVICO", 1, "GERENTE", description="  ", price=80)

    async def test_manager_labor_needs_price(self, service):
        with pytest.raises(ValidationError):
            await service.add_line(1, "SERVICO", 1, "GERENTE", description="Revisao")


class TestAddLinePreconditions:
    async def test_missing_order(self, service, work_order_store):
        work_order_store.get.return_value = None
        with pytest.raises(WorkOrderNotFoundError):
            await service.add_line(5, "SERVICO", 1, "ADMIN", description="x", price=1)

    async def test_closed_order(self, service, work_order_store, closed_order):
        work_order_store.get.return_value = closed_order
        with pytest.raises(WorkOrderClosedError):
            await service.add_line(1, "SERVICO", 1, "ADMIN", description="x", price=1)

    @pytest.mark.parametrize("quantity", [0, -2, float("inf"), "3", None])
    async def test_bad_quantity(self, service, quantity):
        with pytest.raises(ValidationError):
            await service.add_line(1, "SERVICO", quantity, "ADMIN", description="x", price=1)

    async def test_bad_kind(self, service):
        with pytest.raises(ValidationError):
            await service.add_line(1, "OUTRO", 1, "ADMIN", description="x", price=1)


class TestListLines:
    async def test_staff_closed_order_forbidden(self, service, work_order_store, closed_order):
        work_order_store.get.return_value = closed_order
        with pytest.raises(ForbiddenError):
            await service.list_lines(1, "FUNCIONARIO")
        work_order_store.list_lines.assert_not_called()

    async def test_admin_closed_order(self, service, work_order_store, closed_order, part_line):
        work_order_store.get.return_value = closed_order
        work_order_store.list_lines.return_value = [part_line]
        assert await service.list_lines(1, "ADMIN") == [part_line]

    async def test_missing_order(self, service, work_order_store):
        work_order_store.get.return_value = None
        with pytest.raises(WorkOrderNotFoundError):
            await service.list_lines(1, "ADMIN")


class TestRemoveLine:
    async def test_returns_new_total(self, service, work_order_store):
        work_order_store.remove_line.return_value = 0.0

        total = await service.remove_line(1, "GERENTE")

        assert total == 0.0
        work_order_store.remove_line.assert_awaited_once_with(1)

    async def test_staff_forbidden(self, service, work_order_store):
        with pytest.raises(ForbiddenError):
            await service.remove_line(1, "FUNCIONARIO")
        work_order_store.remove_line.assert_not_called()

    async def test_missing_line(self, service, work_order_store):
        work_order_store.remove_line.side_effect = WorkOrderLineNotFoundError(1)
        with pytest.raises(WorkOrderLineNotFoundError):
            await service.remove_line(1, "ADMIN")
