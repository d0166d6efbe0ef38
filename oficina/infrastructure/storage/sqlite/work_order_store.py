"""SQLite implementation of work order storage."""

from datetime import UTC, datetime

import aiosqlite

from oficina.config import get_logger
from oficina.core.entities.work_order import (
    LineKind,
    WorkOrder,
    WorkOrderLine,
    WorkOrderStatus,
)
from oficina.core.exceptions import (
    InsufficientStockError,
    ProductNotFoundError,
    WorkOrderClosedError,
    WorkOrderLineNotFoundError,
    WorkOrderNotFoundError,
)
from oficina.core.interfaces.work_order_store import IWorkOrderStore
from oficina.infrastructure.storage.sqlite.connection import (
    from_db_timestamp,
    get_connection,
    get_transaction,
    to_db_timestamp,
)

logger = get_logger(__name__)

_ORDER_SELECT = """
    SELECT wo.*, c.name AS customer_name
    FROM work_orders wo
    LEFT JOIN customers c ON c.id = wo.customer_id
"""


async def _recompute_total(conn: aiosqlite.Connection, work_order_id: int) -> float:
    """Write total = fresh SUM(subtotal) on an open transaction."""
    await conn.execute(
        """
        UPDATE work_orders
        SET total = (
            SELECT COALESCE(SUM(subtotal), 0)
            FROM work_order_lines
            WHERE work_order_id = ?
        )
        WHERE id = ?
        """,
        (work_order_id, work_order_id),
    )
    cursor = await conn.execute("SELECT total FROM work_orders WHERE id = ?", (work_order_id,))
    row = await cursor.fetchone()
    return float(row["total"]) if row else 0.0


class SQLiteWorkOrderStore(IWorkOrderStore):
    """Work orders and lines. Every line mutation carries its stock and total update."""

    async def create(self, order: WorkOrder) -> WorkOrder:
        order.opened_at = datetime.now(UTC)
        order.status = WorkOrderStatus.OPEN
        order.total = 0.0
        async with get_transaction() as conn:
            cursor = await conn.execute(
                """
                INSERT INTO work_orders (
                    customer_id, plate, vehicle_description, problem_description,
                    status, total, opened_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    order.customer_id,
                    order.plate,
                    order.vehicle_description,
                    order.problem_description,
                    order.status.value,
                    order.total,
                    to_db_timestamp(order.opened_at),
                ),
            )
            order.id = cursor.lastrowid
            logger.info("work_order_created", work_order_id=order.id, plate=order.plate)
            return order

    async def get(self, work_order_id: int) -> WorkOrder | None:
        async with get_connection() as conn:
            cursor = await conn.execute(f"{_ORDER_SELECT} WHERE wo.id = ?", (work_order_id,))
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_order(row)

    async def list_orders(self, status: WorkOrderStatus | None = None) -> list[WorkOrder]:
        query = _ORDER_SELECT
        params: tuple = ()
        if status is not None:
            query += " WHERE wo.status = ?"
            params = (status.value,)
        query += " ORDER BY wo.opened_at DESC, wo.id DESC"

        async with get_connection() as conn:
            cursor = await conn.execute(query, params)
            rows = await cursor.fetchall()
            return [self._row_to_order(row) for row in rows]

    async def close(self, work_order_id: int, closed_at: datetime) -> WorkOrder | None:
        async with get_transaction() as conn:
            cursor = await conn.execute(
                "UPDATE work_orders SET status = ?, closed_at = ? WHERE id = ?",
                (WorkOrderStatus.CLOSED.value, to_db_timestamp(closed_at), work_order_id),
            )
            if cursor.rowcount == 0:
                return None
            cursor = await conn.execute(f"{_ORDER_SELECT} WHERE wo.id = ?", (work_order_id,))
            row = await cursor.fetchone()
            return self._row_to_order(row)

    async def list_lines(self, work_order_id: int) -> list[WorkOrderLine]:
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM work_order_lines
                WHERE work_order_id = ?
                ORDER BY id
                """,
                (work_order_id,),
            )
            rows = await cursor.fetchall()
            return [self._row_to_line(row) for row in rows]

    async def add_line(self, line: WorkOrderLine, consume_stock: bool) -> WorkOrderLine:
        line.created_at = datetime.now(UTC)
        async with get_transaction() as conn:
            # Status read under the write lock; a concurrent close cannot slip in
            cursor = await conn.execute(
                "SELECT status FROM work_orders WHERE id = ?", (line.work_order_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                raise WorkOrderNotFoundError(line.work_order_id)
            if row["status"] != WorkOrderStatus.OPEN.value:
                raise WorkOrderClosedError(line.work_order_id)

            if consume_stock:
                # Conditional relative decrement: never below zero, never a stale overwrite
                cursor = await conn.execute(
                    """
                    UPDATE products
                    SET quantity_on_hand = quantity_on_hand - ?
                    WHERE id = ? AND quantity_on_hand >= ?
                    """,
                    (line.quantity, line.product_id, line.quantity),
                )
                if cursor.rowcount == 0:
                    cursor = await conn.execute(
                        "SELECT quantity_on_hand FROM products WHERE id = ?",
                        (line.product_id,),
                    )
                    row = await cursor.fetchone()
                    if row is None:
                        raise ProductNotFoundError(line.product_id)
                    raise InsufficientStockError(
                        product_id=line.product_id,
                        requested=line.quantity,
                        available=int(row["quantity_on_hand"]),
                    )

            cursor = await conn.execute(
                """
                INSERT INTO work_order_lines (
                    work_order_id, product_id, description, kind,
                    quantity, unit_price, subtotal, created_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    line.work_order_id,
                    line.product_id,
                    line.description,
                    line.kind.value,
                    line.quantity,
                    line.unit_price,
                    line.subtotal,
                    to_db_timestamp(line.created_at),
                ),
            )
            line.id = cursor.lastrowid
            total = await _recompute_total(conn, line.work_order_id)
            logger.info(
                "work_order_line_inserted",
                line_id=line.id,
                work_order_id=line.work_order_id,
                total=total,
            )
            return line

    async def remove_line(self, line_id: int) -> float:
        async with get_transaction() as conn:
            cursor = await conn.execute(
                "SELECT * FROM work_order_lines WHERE id = ?", (line_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                raise WorkOrderLineNotFoundError(line_id)
            line = self._row_to_line(row)

            await conn.execute("DELETE FROM work_order_lines WHERE id = ?", (line_id,))
            restored = 0
            if line.kind == LineKind.PART and line.product_id is not None:
                restored = int(line.quantity)
                await conn.execute(
                    "UPDATE products SET quantity_on_hand = quantity_on_hand + ? WHERE id = ?",
                    (restored, line.product_id),
                )
            total = await _recompute_total(conn, line.work_order_id)
            logger.info(
                "work_order_line_deleted",
                line_id=line_id,
                work_order_id=line.work_order_id,
                restored=restored,
                total=total,
            )
            return total

    async def count_open(self, opened_before: datetime | None = None) -> int:
        query = "SELECT COUNT(*) FROM work_orders WHERE status = ?"
        params: tuple = (WorkOrderStatus.OPEN.value,)
        if opened_before is not None:
            query += " AND opened_at < ?"
            params += (to_db_timestamp(opened_before),)

        async with get_connection() as conn:
            cursor = await conn.execute(query, params)
            row = await cursor.fetchone()
            return int(row[0])

    @staticmethod
    def _row_to_order(row: aiosqlite.Row) -> WorkOrder:
        """Convert a joined database row to a WorkOrder entity."""
        return WorkOrder(
            id=row["id"],
            customer_id=row["customer_id"],
            customer_name=row["customer_name"],
            plate=row["plate"],
            vehicle_description=row["vehicle_description"],
            problem_description=row["problem_description"],
            status=WorkOrderStatus(row["status"]),
            total=float(row["total"]),
            opened_at=from_db_timestamp(row["opened_at"]),
            closed_at=from_db_timestamp(row["closed_at"]),
        )

    @staticmethod
    def _row_to_line(row: aiosqlite.Row) -> WorkOrderLine:
        """Convert a database row to a WorkOrderLine entity."""
        kind = LineKind(row["kind"])
        quantity = float(row["quantity"])
        return WorkOrderLine(
            id=row["id"],
            work_order_id=row["work_order_id"],
            product_id=row["product_id"],
            description=row["description"],
            kind=kind,
            quantity=int(quantity) if kind == LineKind.PART else quantity,
            unit_price=float(row["unit_price"]),
            subtotal=float(row["subtotal"]),
            created_at=from_db_timestamp(row["created_at"]),
        )
