"""Tests for ReceivablesService and installment scheduling."""

from datetime import date
from unittest.mock import AsyncMock

import pytest

from oficina.core.entities import Installment, InstallmentStatus
from oficina.core.exceptions import (
    CustomerNotFoundError,
    InstallmentNotFoundError,
    InvalidRangeError,
    ValidationError,
)
from oficina.core.services import ReceivablesService
from oficina.core.services.receivables import build_schedule, split_amount


@pytest.fixture
def receivable_store() -> AsyncMock:
    store = AsyncMock()
    store.create_batch.side_effect = lambda batch: [
        i.model_copy(update={"id": n}) for n, i in enumerate(batch, start=1)
    ]
    return store


@pytest.fixture
def customer_store(sample_customer) -> AsyncMock:
    store = AsyncMock()
    store.get.return_value = sample_customer
    return store


@pytest.fixture
def service(receivable_store, customer_store) -> ReceivablesService:
    return ReceivablesService(receivable_store, customer_store)


class TestSplitAmount:
    def test_even(self):
        assert split_amount(300.0, 3) == 100.0

    def test_rounds_half_up(self):
        assert split_amount(100.0, 3) == 33.33
        assert split_amount(0.05, 2) == 0.03

    @pytest.mark.parametrize("total,count", [(100.0, 3), (1000.0, 7), (99.99, 4), (10.0, 6)])
    def test_drift_bounded_by_a_cent_per_installment(self, total, count):
        drift = abs(split_amount(total, count) * count - total)
        assert drift <= count * 0.01 + 1e-9


class TestBuildSchedule:
    def test_numbering_and_due_dates(self):
        schedule = build_schedule(1, 300.0, 3, "NF-100", date(2024, 1, 31))

        assert [i.document_number for i in schedule] == ["NF-100/1", "NF-100/2", "NF-100/3"]
        assert [i.installment_number for i in schedule] == [1, 2, 3]
        assert all(i.total_installments == 3 for i in schedule)
        assert all(i.status == InstallmentStatus.PENDING for i in schedule)
        assert [i.due_date for i in schedule] == [
            date(2024, 1, 31),
            date(2024, 3, 2),
            date(2024, 3, 31),
        ]

    def test_single_installment(self):
        schedule = build_schedule(1, 50.0, 1, "NF-1", date(2024, 5, 10))
        assert len(schedule) == 1
        assert schedule[0].installment_amount == 50.0


class TestIssueInstallments:
    async def test_issues_batch(self, service, receivable_store):
        created = await service.issue_installments(1, 100.0, 3, " NF-7 ", "2024-03-10")

        assert [i.id for i in created] == [1, 2, 3]
        assert all(i.installment_amount == 33.33 for i in created)
        assert created[0].document_number == "NF-7/1"
        assert created[2].due_date == date(2024, 5, 10)
        receivable_store.create_batch.assert_awaited_once()

    @pytest.mark.parametrize("total", [0, -10, float("nan"), "100", True])
    async def test_bad_total(self, service, total):
        with pytest.raises(ValidationError):
            await service.issue_installments(1, total, 3, "NF", "2024-03-10")

    @pytest.mark.parametrize("count", [0, -1, 2.5, True])
    async def test_bad_count(self, service, count):
        with pytest.raises(ValidationError):
            await service.issue_installments(1, 100.0, count, "NF", "2024-03-10")

    async def test_missing_document_number(self, service):
        with pytest.raises(ValidationError):
            await service.issue_installments(1, 100.0, 3, " ", "2024-03-10")

    async def test_bad_date(self, service, receivable_store):
        with pytest.raises(InvalidRangeError):
            await service.issue_installments(1, 100.0, 3, "NF", "10/03/2024")
        receivable_store.create_batch.assert_not_called()

    async def test_unknown_customer(self, service, customer_store, receivable_store):
        customer_store.get.return_value = None
        with pytest.raises(CustomerNotFoundError):
            await service.issue_installments(9, 100.0, 3, "NF", "2024-03-10")
        receivable_store.create_batch.assert_not_called()


class TestSettlement:
    async def test_mark_paid(self, service, receivable_store):
        receivable_store.mark_paid.return_value = Installment(
            id=1,
            customer_id=1,
            document_number="NF/1",
            installment_amount=10.0,
            installment_number=1,
            total_installments=1,
            status=InstallmentStatus.PAID,
            due_date=date(2024, 3, 10),
        )
        paid = await service.mark_paid(1)
        assert paid.is_paid

    async def test_mark_paid_missing(self, service, receivable_store):
        receivable_store.mark_paid.return_value = None
        with pytest.raises(InstallmentNotFoundError):
            await service.mark_paid(1)

    async def test_delete_missing(self, service, receivable_store):
        receivable_store.delete.return_value = False
        with pytest.raises(InstallmentNotFoundError):
            await service.delete_installment(1)
