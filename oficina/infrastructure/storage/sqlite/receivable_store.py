"""SQLite implementation of receivable installment storage."""

from datetime import date

import aiosqlite

from oficina.config import get_logger
from oficina.core.entities.receivable import Installment, InstallmentStatus
from oficina.core.interfaces.receivable_store import IReceivableStore
from oficina.infrastructure.storage.sqlite.connection import (
    from_db_timestamp,
    get_connection,
    get_transaction,
    to_db_date,
    to_db_timestamp,
)

logger = get_logger(__name__)

_INSTALLMENT_SELECT = """
    SELECT i.*, c.name AS customer_name, c.tax_id AS customer_tax_id
    FROM installments i
    LEFT JOIN customers c ON c.id = i.customer_id
"""


class SQLiteReceivableStore(IReceivableStore):
    """SQLite implementation of installment storage."""

    async def create_batch(self, installments: list[Installment]) -> list[Installment]:
        async with get_transaction() as conn:
            for installment in installments:
                cursor = await conn.execute(
                    """
                    INSERT INTO installments (
                        customer_id, document_number, installment_amount,
                        installment_number, total_installments, status,
                        issued_at, due_date
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        installment.customer_id,
                        installment.document_number,
                        installment.installment_amount,
                        installment.installment_number,
                        installment.total_installments,
                        installment.status.value,
                        to_db_timestamp(installment.issued_at),
                        to_db_date(installment.due_date),
                    ),
                )
                installment.id = cursor.lastrowid
            logger.info("installments_inserted", count=len(installments))
            return installments

    async def get(self, installment_id: int) -> Installment | None:
        async with get_connection() as conn:
            cursor = await conn.execute(
                f"{_INSTALLMENT_SELECT} WHERE i.id = ?", (installment_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_installment(row)

    async def list_installments(self) -> list[Installment]:
        async with get_connection() as conn:
            cursor = await conn.execute(
                f"{_INSTALLMENT_SELECT} ORDER BY i.due_date, i.id"
            )
            rows = await cursor.fetchall()
            return [self._row_to_installment(row) for row in rows]

    async def mark_paid(self, installment_id: int) -> Installment | None:
        async with get_transaction() as conn:
            cursor = await conn.execute(
                "UPDATE installments SET status = ? WHERE id = ?",
                (InstallmentStatus.PAID.value, installment_id),
            )
            if cursor.rowcount == 0:
                return None
            cursor = await conn.execute(
                f"{_INSTALLMENT_SELECT} WHERE i.id = ?", (installment_id,)
            )
            row = await cursor.fetchone()
            return self._row_to_installment(row)

    async def delete(self, installment_id: int) -> bool:
        async with get_transaction() as conn:
            cursor = await conn.execute(
                "DELETE FROM installments WHERE id = ?", (installment_id,)
            )
            return cursor.rowcount > 0

    async def sum_amount(
        self, start: date, end: date, paid: bool | None = None
    ) -> float:
        query = (
            "SELECT COALESCE(SUM(installment_amount), 0) FROM installments "
            "WHERE due_date >= ? AND due_date < ?"
        )
        params: tuple = (to_db_date(start), to_db_date(end))
        if paid is True:
            query += " AND status = ?"
            params += (InstallmentStatus.PAID.value,)
        elif paid is False:
            query += " AND status != ?"
            params += (InstallmentStatus.PAID.value,)

        async with get_connection() as conn:
            cursor = await conn.execute(query, params)
            row = await cursor.fetchone()
            return float(row[0])

    @staticmethod
    def _row_to_installment(row: aiosqlite.Row) -> Installment:
        return Installment(
            id=row["id"],
            customer_id=row["customer_id"],
            customer_name=row["customer_name"],
            customer_tax_id=row["customer_tax_id"],
            document_number=row["document_number"],
            installment_amount=float(row["installment_amount"]),
            installment_number=row["installment_number"],
            total_installments=row["total_installments"],
            status=InstallmentStatus(row["status"]),
            issued_at=from_db_timestamp(row["issued_at"]),
            due_date=date.fromisoformat(row["due_date"]),
        )
