"""SQLite implementation of customer storage."""

from datetime import UTC, datetime

import aiosqlite

from oficina.config import get_logger
from oficina.core.entities.customer import Customer
from oficina.core.exceptions import CustomerInUseError
from oficina.core.interfaces.customer_store import ICustomerStore
from oficina.infrastructure.storage.sqlite.connection import (
    from_db_timestamp,
    get_connection,
    get_transaction,
    to_db_timestamp,
)

logger = get_logger(__name__)


class SQLiteCustomerStore(ICustomerStore):
    """SQLite implementation of customer storage."""

    async def create(self, customer: Customer) -> Customer:
        customer.created_at = datetime.now(UTC)
        async with get_transaction() as conn:
            cursor = await conn.execute(
                "INSERT INTO customers (name, tax_id, phone, created_at) VALUES (?, ?, ?, ?)",
                (
                    customer.name,
                    customer.tax_id,
                    customer.phone,
                    to_db_timestamp(customer.created_at),
                ),
            )
            customer.id = cursor.lastrowid
            logger.info("customer_created", customer_id=customer.id)
            return customer

    async def get(self, customer_id: int) -> Customer | None:
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT * FROM customers WHERE id = ?", (customer_id,))
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_customer(row)

    async def list_customers(self) -> list[Customer]:
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT * FROM customers ORDER BY name, id")
            rows = await cursor.fetchall()
            return [self._row_to_customer(row) for row in rows]

    async def update(self, customer: Customer) -> Customer:
        async with get_transaction() as conn:
            await conn.execute(
                "UPDATE customers SET name = ?, tax_id = ?, phone = ? WHERE id = ?",
                (customer.name, customer.tax_id, customer.phone, customer.id),
            )
            logger.info("customer_updated", customer_id=customer.id)
            return customer

    async def delete(self, customer_id: int) -> bool:
        """Remove a customer and its installments. Refused while work orders exist."""
        async with get_transaction() as conn:
            cursor = await conn.execute(
                "SELECT 1 FROM work_orders WHERE customer_id = ? LIMIT 1", (customer_id,)
            )
            if await cursor.fetchone():
                raise CustomerInUseError(customer_id)
            cursor = await conn.execute("DELETE FROM customers WHERE id = ?", (customer_id,))
            deleted = cursor.rowcount > 0
            if deleted:
                logger.info("customer_deleted", customer_id=customer_id)
            return deleted

    @staticmethod
    def _row_to_customer(row: aiosqlite.Row) -> Customer:
        return Customer(
            id=row["id"],
            name=row["name"],
            tax_id=row["tax_id"],
            phone=row["phone"],
            created_at=from_db_timestamp(row["created_at"]),
        )
