"""
Shared aiosqlite connections for the shop database.

Reads are served from a small set of reader connections. All writes go
through a single writer connection, handed out one transaction at a time
behind an asyncio lock, so concurrent requests in this process queue in
the event loop rather than spinning on SQLite's busy handler. Each write
still opens with BEGIN IMMEDIATE, which keeps stock and order totals
consistent when another process (``manage.py``) writes to the same file.
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, date, datetime
from pathlib import Path

import aiosqlite

from oficina.config import get_logger, get_settings
from oficina.core.exceptions import DatabaseError

logger = get_logger(__name__)

_PRAGMAS = (
    "PRAGMA journal_mode=WAL",
    "PRAGMA synchronous=NORMAL",
    "PRAGMA foreign_keys=ON",
)


def to_db_timestamp(value: datetime) -> str:
    """Aware UTC ISO string; lexical order equals chronological order."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).isoformat(timespec="microseconds")


def to_db_date(value: date) -> str:
    return value.isoformat()


def from_db_timestamp(value: str | None) -> datetime | None:
    if not value:
        return None
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


class ConnectionPool:
    """
    ``pool_size`` reader connections plus one writer connection.

    ``busy_timeout`` (milliseconds) bounds both the SQLite busy handler and
    the wait for the in-process writer.
    """

    def __init__(
        self,
        db_path: Path,
        pool_size: int = 5,
        busy_timeout: int = 30000,
    ):
        self.db_path = db_path
        self.pool_size = pool_size
        self.busy_timeout = busy_timeout

        self._readers: asyncio.Queue[aiosqlite.Connection] = asyncio.Queue(maxsize=pool_size)
        self._writer: aiosqlite.Connection | None = None
        self._write_lock = asyncio.Lock()
        self._open_lock = asyncio.Lock()
        self._opened: list[aiosqlite.Connection] = []

    @property
    def is_open(self) -> bool:
        return self._writer is not None

    async def initialize(self) -> None:
        """Open the writer and the readers. Safe to call more than once."""
        async with self._open_lock:
            if self.is_open:
                return

            self.db_path.parent.mkdir(parents=True, exist_ok=True)

            # Writer first so WAL mode is set before any reader attaches
            writer = await self._connect()
            for _ in range(self.pool_size):
                reader = await self._connect()
                self._readers.put_nowait(reader)
            self._writer = writer

            logger.info(
                "connection_pool_opened",
                db_path=str(self.db_path),
                readers=self.pool_size,
            )

    async def _connect(self) -> aiosqlite.Connection:
        conn = await aiosqlite.connect(self.db_path)
        for pragma in _PRAGMAS:
            await conn.execute(pragma)
        await conn.execute(f"PRAGMA busy_timeout={int(self.busy_timeout)}")
        conn.row_factory = aiosqlite.Row
        self._opened.append(conn)
        return conn

    @asynccontextmanager
    async def acquire(self) -> AsyncIterator[aiosqlite.Connection]:
        """Borrow a reader connection. Waits while every reader is in use."""
        if not self.is_open:
            await self.initialize()

        conn = await self._readers.get()
        try:
            yield conn
        finally:
            self._readers.put_nowait(conn)

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[aiosqlite.Connection]:
        """
        The writer connection inside BEGIN IMMEDIATE.

        Commits when the block exits normally. Any exception, cancellation
        included, rolls back so the writer is clean for the next caller.

        Raises:
            DatabaseError: the writer stayed busy for longer than busy_timeout
        """
        if not self.is_open:
            await self.initialize()

        try:
            async with asyncio.timeout(self.busy_timeout / 1000):
                await self._write_lock.acquire()
        except TimeoutError:
            logger.warning("write_lock_timeout", busy_timeout=self.busy_timeout)
            raise DatabaseError("write transaction", "timed out waiting for the writer")

        conn = self._writer
        try:
            await conn.execute("BEGIN IMMEDIATE")
            try:
                yield conn
                await conn.commit()
            finally:
                if conn.in_transaction:
                    await conn.rollback()
        finally:
            self._write_lock.release()

    async def close(self) -> None:
        async with self._open_lock:
            for conn in self._opened:
                await conn.close()
            self._opened.clear()
            self._readers = asyncio.Queue(maxsize=self.pool_size)
            self._writer = None
            logger.info("connection_pool_closed", db_path=str(self.db_path))


_pool: ConnectionPool | None = None


async def get_pool() -> ConnectionPool:
    """The process-wide pool, opened from settings on first use."""
    global _pool
    if _pool is None:
        storage = get_settings().storage
        _pool = ConnectionPool(
            db_path=storage.db_path,
            pool_size=storage.pool_size,
            busy_timeout=storage.busy_timeout,
        )
        await _pool.initialize()
    return _pool


async def close_pool() -> None:
    global _pool
    if _pool is not None:
        await _pool.close()
        _pool = None


@asynccontextmanager
async def get_connection() -> AsyncIterator[aiosqlite.Connection]:
    """A reader connection from the process-wide pool."""
    pool = await get_pool()
    async with pool.acquire() as conn:
        yield conn


@asynccontextmanager
async def get_transaction() -> AsyncIterator[aiosqlite.Connection]:
    """The writer connection inside a transaction. Do not nest."""
    pool = await get_pool()
    async with pool.transaction() as conn:
        yield conn
