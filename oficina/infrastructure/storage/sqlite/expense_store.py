"""SQLite implementation of expense storage."""

from datetime import UTC, date, datetime

import aiosqlite

from oficina.config import get_logger
from oficina.core.entities.expense import Expense
from oficina.core.interfaces.expense_store import IExpenseStore
from oficina.infrastructure.storage.sqlite.connection import (
    from_db_timestamp,
    get_connection,
    get_transaction,
    to_db_date,
    to_db_timestamp,
)

logger = get_logger(__name__)


class SQLiteExpenseStore(IExpenseStore):
    """SQLite implementation of expense storage."""

    async def create(self, expense: Expense) -> Expense:
        expense.created_at = datetime.now(UTC)
        async with get_transaction() as conn:
            cursor = await conn.execute(
                """
                INSERT INTO expenses (
                    expense_date, invoice_number, invoice_type, amount,
                    supplier, department, notes, created_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    to_db_date(expense.expense_date),
                    expense.invoice_number,
                    expense.invoice_type,
                    expense.amount,
                    expense.supplier,
                    expense.department,
                    expense.notes,
                    to_db_timestamp(expense.created_at),
                ),
            )
            expense.id = cursor.lastrowid
            logger.info("expense_created", expense_id=expense.id, amount=expense.amount)
            return expense

    async def get(self, expense_id: int) -> Expense | None:
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT * FROM expenses WHERE id = ?", (expense_id,))
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_expense(row)

    async def list_expenses(self) -> list[Expense]:
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM expenses ORDER BY expense_date DESC, id DESC"
            )
            rows = await cursor.fetchall()
            return [self._row_to_expense(row) for row in rows]

    async def delete(self, expense_id: int) -> bool:
        async with get_transaction() as conn:
            cursor = await conn.execute("DELETE FROM expenses WHERE id = ?", (expense_id,))
            return cursor.rowcount > 0

    async def sum_amount(self, start: date, end: date) -> float:
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT COALESCE(SUM(amount), 0) FROM expenses
                WHERE expense_date >= ? AND expense_date < ?
                """,
                (to_db_date(start), to_db_date(end)),
            )
            row = await cursor.fetchone()
            return float(row[0])

    @staticmethod
    def _row_to_expense(row: aiosqlite.Row) -> Expense:
        return Expense(
            id=row["id"],
            expense_date=date.fromisoformat(row["expense_date"]),
            invoice_number=row["invoice_number"],
            invoice_type=row["invoice_type"],
            amount=float(row["amount"]),
            supplier=row["supplier"],
            department=row["department"],
            notes=row["notes"],
            created_at=from_db_timestamp(row["created_at"]),
        )
