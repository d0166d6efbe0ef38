"""Tests for StockLedgerService."""

from datetime import UTC, datetime
from unittest.mock import AsyncMock

import pytest

from oficina.core.entities import StockMovement
from oficina.core.exceptions import InvalidRangeError, ValidationError
from oficina.core.interfaces import EntryTotals
from oficina.core.services import StockLedgerService


@pytest.fixture
def ledger_store() -> AsyncMock:
    store = AsyncMock()
    store.record_entry.return_value = StockMovement(id=1, product_id=1, quantity=5, unit_cost=2.0)
    return store


@pytest.fixture
def service(ledger_store) -> StockLedgerService:
    return StockLedgerService(ledger_store)


class TestRecordEntry:
    async def test_delegates_to_store(self, service, ledger_store):
        movement = await service.record_entry(1, 5, 2.0)
        ledger_store.record_entry.assert_awaited_once_with(1, 5, 2.0)
        assert movement.quantity == 5

    async def test_whole_float_accepted(self, service, ledger_store):
        await service.record_entry(1, 5.0, 2)
        ledger_store.record_entry.assert_awaited_once_with(1, 5, 2.0)

    @pytest.mark.parametrize("quantity", [0, -1, 1.5, float("nan"), "5", True, None])
    async def test_bad_quantity(self, service, ledger_store, quantity):
        with pytest.raises(ValidationError):
            await service.record_entry(1, quantity, 2.0)
        ledger_store.record_entry.assert_not_called()

    @pytest.mark.parametrize("cost", [-0.01, float("inf"), "2"])
    async def test_bad_cost(self, service, cost):
        with pytest.raises(ValidationError):
            await service.record_entry(1, 1, cost)


class TestAdjustToCount:
    async def test_zero_count_allowed(self, service, ledger_store):
        ledger_store.adjust_to_count.return_value = None
        assert await service.adjust_to_count(1, 0, 2.0) is None
        ledger_store.adjust_to_count.assert_awaited_once_with(1, 0, 2.0)

    async def test_negative_count_rejected(self, service):
        with pytest.raises(ValidationError):
            await service.adjust_to_count(1, -3, 2.0)


class TestMonthlyReports:
    async def test_total(self, service, ledger_store):
        ledger_store.summarize_entries.return_value = EntryTotals(count=2, quantity=7, cost=20.004)

        total = await service.resolve_monthly_entry_total("2024-02")

        start, end = ledger_store.summarize_entries.call_args[0]
        assert start == datetime(2024, 2, 1, tzinfo=UTC)
        assert end == datetime(2024, 3, 1, tzinfo=UTC)
        assert total.month == "2024-02"
        assert total.entry_count == 2
        assert total.total_quantity == 7
        assert total.total_cost == 20.0

    async def test_history(self, service, ledger_store):
        ledger_store.list_entries.return_value = [
            StockMovement(id=2, product_id=1, quantity=1),
            StockMovement(id=1, product_id=1, quantity=2),
        ]
        period, entries = await service.resolve_monthly_entry_history("2024-02")
        assert period.label == "2024-02"
        assert [e.id for e in entries] == [2, 1]

    async def test_invalid_month(self, service, ledger_store):
        with pytest.raises(InvalidRangeError):
            await service.resolve_monthly_entry_total("2024-13")
        ledger_store.summarize_entries.assert_not_called()
