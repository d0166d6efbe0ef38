"""SQLite implementation of the stock ledger."""

from datetime import UTC, datetime

import aiosqlite

from oficina.config import get_logger
from oficina.core.entities.inventory import MovementType, StockMovement
from oficina.core.exceptions import ProductNotFoundError
from oficina.core.interfaces.inventory_store import EntryTotals, IStockLedgerStore
from oficina.infrastructure.storage.sqlite.connection import (
    from_db_timestamp,
    get_connection,
    get_transaction,
    to_db_timestamp,
)

logger = get_logger(__name__)


async def insert_entry(
    conn: aiosqlite.Connection,
    product_id: int,
    product_code: str,
    product_description: str,
    quantity: int,
    unit_cost: float,
) -> StockMovement:
    """Append one ENTRY row on an open transaction."""
    movement = StockMovement(
        product_id=product_id,
        product_code=product_code,
        product_description=product_description,
        movement_type=MovementType.ENTRY,
        quantity=quantity,
        unit_cost=unit_cost,
        created_at=datetime.now(UTC),
    )
    cursor = await conn.execute(
        """
        INSERT INTO stock_movements (
            product_id, product_code, product_description,
            movement_type, quantity, unit_cost, created_at
        ) VALUES (?, ?, ?, ?, ?, ?, ?)
        """,
        (
            movement.product_id,
            movement.product_code,
            movement.product_description,
            movement.movement_type.value,
            movement.quantity,
            movement.unit_cost,
            to_db_timestamp(movement.created_at),
        ),
    )
    movement.id = cursor.lastrowid
    return movement


class SQLiteStockLedgerStore(IStockLedgerStore):
    """Stock entries and the on-hand quantity they add, one transaction each."""

    async def record_entry(
        self, product_id: int, quantity: int, unit_cost: float
    ) -> StockMovement:
        """Relative increment of quantity_on_hand plus one ENTRY row."""
        async with get_transaction() as conn:
            cursor = await conn.execute(
                "UPDATE products SET quantity_on_hand = quantity_on_hand + ? WHERE id = ?",
                (quantity, product_id),
            )
            if cursor.rowcount == 0:
                raise ProductNotFoundError(product_id)

            product = await self._fetch_label(conn, product_id)
            movement = await insert_entry(
                conn, product_id, product["code"], product["description"], quantity, unit_cost
            )
            logger.info(
                "stock_movement_recorded",
                movement_id=movement.id,
                product_id=product_id,
                qty=quantity,
            )
            return movement

    async def adjust_to_count(
        self, product_id: int, counted: int, unit_cost: float
    ) -> StockMovement | None:
        async with get_transaction() as conn:
            cursor = await conn.execute(
                "SELECT code, description, quantity_on_hand FROM products WHERE id = ?",
                (product_id,),
            )
            row = await cursor.fetchone()
            if row is None:
                raise ProductNotFoundError(product_id)

            difference = counted - int(row["quantity_on_hand"])
            if difference == 0:
                return None

            # The write lock is held since BEGIN IMMEDIATE, so the read above is current
            await conn.execute(
                "UPDATE products SET quantity_on_hand = ? WHERE id = ?",
                (counted, product_id),
            )
            if difference < 0:
                logger.info(
                    "stock_count_lowered",
                    product_id=product_id,
                    removed=-difference,
                )
                return None

            movement = await insert_entry(
                conn, product_id, row["code"], row["description"], difference, unit_cost
            )
            logger.info(
                "stock_movement_recorded",
                movement_id=movement.id,
                product_id=product_id,
                qty=difference,
            )
            return movement

    async def list_entries(self, start: datetime, end: datetime) -> list[StockMovement]:
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM stock_movements
                WHERE movement_type = ? AND created_at >= ? AND created_at < ?
                ORDER BY created_at DESC, id DESC
                """,
                (MovementType.ENTRY.value, to_db_timestamp(start), to_db_timestamp(end)),
            )
            rows = await cursor.fetchall()
            return [self._row_to_movement(row) for row in rows]

    async def summarize_entries(self, start: datetime, end: datetime) -> EntryTotals:
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT
                    COUNT(*) AS entry_count,
                    COALESCE(SUM(quantity), 0) AS total_quantity,
                    COALESCE(SUM(quantity * unit_cost), 0) AS total_cost
                FROM stock_movements
                WHERE movement_type = ? AND created_at >= ? AND created_at < ?
                """,
                (MovementType.ENTRY.value, to_db_timestamp(start), to_db_timestamp(end)),
            )
            row = await cursor.fetchone()
            return EntryTotals(
                count=int(row["entry_count"]),
                quantity=int(row["total_quantity"]),
                cost=float(row["total_cost"]),
            )

    @staticmethod
    async def _fetch_label(conn: aiosqlite.Connection, product_id: int) -> aiosqlite.Row:
        cursor = await conn.execute(
            "SELECT code, description FROM products WHERE id = ?", (product_id,)
        )
        return await cursor.fetchone()

    @staticmethod
    def _row_to_movement(row: aiosqlite.Row) -> StockMovement:
        """Convert a database row to a StockMovement entity."""
        return StockMovement(
            id=row["id"],
            product_id=row["product_id"],
            product_code=row["product_code"],
            product_description=row["product_description"],
            movement_type=MovementType(row["movement_type"]),
            quantity=int(row["quantity"]),
            unit_cost=float(row["unit_cost"]),
            created_at=from_db_timestamp(row["created_at"]),
        )
