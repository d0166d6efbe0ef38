"""SQLite implementation of account storage."""

from datetime import UTC, datetime

import aiosqlite

from oficina.config import get_logger
from oficina.core.entities.user import User
from oficina.core.exceptions import DuplicateUserError
from oficina.core.interfaces.user_store import IUserStore
from oficina.infrastructure.storage.sqlite.connection import (
    from_db_timestamp,
    get_connection,
    get_transaction,
    to_db_timestamp,
)

logger = get_logger(__name__)


class SQLiteUserStore(IUserStore):
    """SQLite implementation of account storage."""

    async def create(self, user: User) -> User:
        user.created_at = datetime.now(UTC)
        async with get_transaction() as conn:
            try:
                cursor = await conn.execute(
                    "INSERT INTO users (name, secret_hash, role, created_at) VALUES (?, ?, ?, ?)",
                    (user.name, user.secret_hash, user.role, to_db_timestamp(user.created_at)),
                )
            except aiosqlite.IntegrityError:
                raise DuplicateUserError(user.name)
            user.id = cursor.lastrowid
            return user

    async def get(self, user_id: int) -> User | None:
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT * FROM users WHERE id = ?", (user_id,))
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_user(row)

    async def get_by_name(self, name: str) -> User | None:
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT * FROM users WHERE name = ?", (name,))
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_user(row)

    async def list_users(self) -> list[User]:
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT * FROM users ORDER BY name")
            rows = await cursor.fetchall()
            return [self._row_to_user(row) for row in rows]

    async def update(self, user: User) -> User:
        async with get_transaction() as conn:
            try:
                await conn.execute(
                    "UPDATE users SET name = ?, secret_hash = ?, role = ? WHERE id = ?",
                    (user.name, user.secret_hash, user.role, user.id),
                )
            except aiosqlite.IntegrityError:
                raise DuplicateUserError(user.name)
            return user

    async def delete(self, user_id: int) -> bool:
        async with get_transaction() as conn:
            cursor = await conn.execute("DELETE FROM users WHERE id = ?", (user_id,))
            return cursor.rowcount > 0

    @staticmethod
    def _row_to_user(row: aiosqlite.Row) -> User:
        return User(
            id=row["id"],
            name=row["name"],
            secret_hash=row["secret_hash"],
            role=row["role"],
            created_at=from_db_timestamp(row["created_at"]),
        )
