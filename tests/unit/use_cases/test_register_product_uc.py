"""Tests for RegisterProductUseCase."""

from unittest.mock import AsyncMock

import pytest

from oficina.application.dto.requests import CreateProductRequest
from oficina.application.use_cases import RegisterProductUseCase
from oficina.core.exceptions import DuplicateProductCodeError, ForbiddenError, ValidationError


@pytest.fixture
def mock_product_store(sample_product):
    store = AsyncMock()
    store.get_by_code.return_value = None
    store.create.side_effect = lambda product: product.model_copy(update={"id": 1})
    return store


@pytest.fixture
def use_case(mock_product_store):
    return RegisterProductUseCase(product_store=mock_product_store)


class TestRegisterProductUseCase:
    async def test_creates_product(self, use_case, mock_product_store):
        request = CreateProductRequest(
            code="flt-001", description=" Oil filter ", brand="Tecfil", quantity=4, cost_price=20.0
        )

        product = await use_case.execute(request, "GERENTE")

        assert product.id == 1
        assert product.code == "FLT-001"
        assert product.description == "Oil filter"
        assert product.quantity_on_hand == 4
        assert product.sale_price == 0.0
        mock_product_store.get_by_code.assert_awaited_once_with("FLT-001")

    async def test_blank_unit_defaults(self, use_case):
        request = CreateProductRequest(code="X1", description="Bolt", unit="  ")
        product = await use_case.execute(request, "ADMIN")
        assert product.unit == "UN"

    async def test_staff_forbidden(self, use_case, mock_product_store):
        request = CreateProductRequest(code="X1", description="Bolt")
        with pytest.raises(ForbiddenError):
            await use_case.execute(request, "FUNCIONARIO")
        mock_product_store.create.assert_not_called()

    async def test_duplicate_code(self, use_case, mock_product_store, sample_product):
        mock_product_store.get_by_code.return_value = sample_product
        request = CreateProductRequest(code="FLT-001", description="Other")
        with pytest.raises(DuplicateProductCodeError):
            await use_case.execute(request, "ADMIN")
        mock_product_store.create.assert_not_called()

    async def test_blank_code(self, use_case):
        request = CreateProductRequest(code="   ", description="Bolt")
        with pytest.raises(ValidationError):
            await use_case.execute(request, "ADMIN")
