"""SQLite implementation of product storage."""

from datetime import UTC, datetime

import aiosqlite

from oficina.config import get_logger
from oficina.core.entities.product import Product
from oficina.core.exceptions import DuplicateProductCodeError, ProductNotFoundError
from oficina.core.interfaces.product_store import IProductStore
from oficina.infrastructure.storage.sqlite.connection import (
    from_db_timestamp,
    get_connection,
    get_transaction,
    to_db_timestamp,
)
from oficina.infrastructure.storage.sqlite.inventory_store import insert_entry

logger = get_logger(__name__)


class SQLiteProductStore(IProductStore):
    """SQLite implementation of product storage."""

    async def create(self, product: Product) -> Product:
        """Insert the product and, when stocked, its initial ENTRY."""
        product.created_at = datetime.now(UTC)
        async with get_transaction() as conn:
            try:
                cursor = await conn.execute(
                    """
                    INSERT INTO products (
                        code, description, brand, unit, quantity_on_hand,
                        cost_price, sale_price, created_at
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        product.code,
                        product.description,
                        product.brand,
                        product.unit,
                        product.quantity_on_hand,
                        product.cost_price,
                        product.sale_price,
                        to_db_timestamp(product.created_at),
                    ),
                )
            except aiosqlite.IntegrityError:
                raise DuplicateProductCodeError(product.code)
            product.id = cursor.lastrowid

            if product.quantity_on_hand > 0:
                await insert_entry(
                    conn,
                    product.id,
                    product.code,
                    product.description,
                    product.quantity_on_hand,
                    product.cost_price,
                )

            logger.info(
                "product_created",
                product_id=product.id,
                code=product.code,
                quantity=product.quantity_on_hand,
            )
            return product

    async def get(self, product_id: int) -> Product | None:
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT * FROM products WHERE id = ?", (product_id,))
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_product(row)

    async def get_by_code(self, code: str) -> Product | None:
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM products WHERE code = ?", (code.strip().upper(),)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_product(row)

    async def list_products(self) -> list[Product]:
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT * FROM products ORDER BY description, id")
            rows = await cursor.fetchall()
            return [self._row_to_product(row) for row in rows]

    async def update_details(self, product: Product) -> Product:
        """Write descriptive and price fields, then re-read the row."""
        async with get_transaction() as conn:
            cursor = await conn.execute(
                """
                UPDATE products SET
                    description = ?,
                    brand = ?,
                    unit = ?,
                    cost_price = ?,
                    sale_price = ?
                WHERE id = ?
                """,
                (
                    product.description,
                    product.brand,
                    product.unit,
                    product.cost_price,
                    product.sale_price,
                    product.id,
                ),
            )
            if cursor.rowcount == 0:
                raise ProductNotFoundError(product.id)
            cursor = await conn.execute("SELECT * FROM products WHERE id = ?", (product.id,))
            row = await cursor.fetchone()
            logger.info("product_updated", product_id=product.id)
            return self._row_to_product(row)

    async def delete(self, product_id: int) -> bool:
        """Detach lines (keeping their description), then drop the row."""
        async with get_transaction() as conn:
            cursor = await conn.execute(
                "UPDATE work_order_lines SET product_id = NULL WHERE product_id = ?",
                (product_id,),
            )
            unlinked = cursor.rowcount
            cursor = await conn.execute("DELETE FROM products WHERE id = ?", (product_id,))
            deleted = cursor.rowcount > 0
            if deleted:
                logger.info("product_deleted", product_id=product_id, unlinked_lines=unlinked)
            return deleted

    @staticmethod
    def _row_to_product(row: aiosqlite.Row) -> Product:
        """Convert a database row to a Product entity."""
        return Product(
            id=row["id"],
            code=row["code"],
            description=row["description"],
            brand=row["brand"],
            unit=row["unit"],
            quantity_on_hand=int(row["quantity_on_hand"]),
            cost_price=float(row["cost_price"]),
            sale_price=float(row["sale_price"]),
            created_at=from_db_timestamp(row["created_at"]),
        )
