"""
Receivables engine.

Splits an invoiced amount into monthly installments. Every installment gets
round(total / count, 2), half-up; the rounding drift is not pushed onto the
last installment.
"""

import math
from datetime import UTC, date, datetime
from decimal import ROUND_HALF_UP, Decimal

from oficina.config import get_logger
from oficina.core.entities.receivable import Installment, InstallmentStatus
from oficina.core.exceptions import (
    CustomerNotFoundError,
    InstallmentNotFoundError,
    ValidationError,
)
from oficina.core.interfaces.customer_store import ICustomerStore
from oficina.core.interfaces.receivable_store import IReceivableStore
from oficina.core.services.periods import add_months, parse_date

logger = get_logger(__name__)

CENT = Decimal("0.01")


def split_amount(total_amount: float, count: int) -> float:
    """Per-installment amount, rounded half-up to cents."""
    share = Decimal(str(total_amount)) / Decimal(count)
    return float(share.quantize(CENT, rounding=ROUND_HALF_UP))


def build_schedule(
    customer_id: int,
    total_amount: float,
    count: int,
    document_number: str,
    first_due_date: date,
    issued_at: datetime | None = None,
) -> list[Installment]:
    """Installments 1..count, due dates one calendar month apart."""
    amount = split_amount(total_amount, count)
    issued = issued_at or datetime.now(UTC)
    return [
        Installment(
            customer_id=customer_id,
            document_number=f"{document_number}/{n}",
            installment_amount=amount,
            installment_number=n,
            total_installments=count,
            status=InstallmentStatus.PENDING,
            issued_at=issued,
            due_date=add_months(first_due_date, n - 1),
        )
        for n in range(1, count + 1)
    ]


class ReceivablesService:
    """Issue, list, settle and delete installments."""

    def __init__(
        self, receivable_store: IReceivableStore, customer_store: ICustomerStore
    ) -> None:
        self._receivable_store = receivable_store
        self._customer_store = customer_store

    async def list_installments(self) -> list[Installment]:
        return await self._receivable_store.list_installments()

    async def issue_installments(
        self,
        customer_id: int,
        total_amount: float,
        count: int,
        document_number: str,
        first_due_date: str | date,
    ) -> list[Installment]:
        """
        Generate and persist one batch of installments.

        Raises:
            ValidationError: non-positive total or count, empty document number
            InvalidRangeError: first due date is not an ISO date
            CustomerNotFoundError: unknown customer
        """
        if (
            isinstance(total_amount, bool)
            or not isinstance(total_amount, (int, float))
            or not math.isfinite(total_amount)
            or total_amount <= 0
        ):
            raise ValidationError("total_amount", "must be greater than zero", total_amount)
        if isinstance(count, bool) or not isinstance(count, int) or count < 1:
            raise ValidationError("count", "must be a whole number of at least 1", count)
        document = (document_number or "").strip()
        if not document:
            raise ValidationError("document_number", "document number is required")
        due = parse_date(first_due_date, "first_due_date")

        if await self._customer_store.get(customer_id) is None:
            raise CustomerNotFoundError(customer_id)

        schedule = build_schedule(customer_id, total_amount, count, document, due)
        created = await self._receivable_store.create_batch(schedule)
        logger.info(
            "installments_issued",
            customer_id=customer_id,
            document_number=document,
            count=count,
            installment_amount=schedule[0].installment_amount,
        )
        return created

    async def mark_paid(self, installment_id: int) -> Installment:
        """Flip to PAID. Paying twice is not an error."""
        installment = await self._receivable_store.mark_paid(installment_id)
        if installment is None:
            raise InstallmentNotFoundError(installment_id)
        logger.info("installment_paid", installment_id=installment_id)
        return installment

    async def delete_installment(self, installment_id: int) -> None:
        if not await self._receivable_store.delete(installment_id):
            raise InstallmentNotFoundError(installment_id)
        logger.info("installment_deleted", installment_id=installment_id)
