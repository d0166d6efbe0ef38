"""Fixtures wiring real SQLite stores into the core services."""

from collections.abc import AsyncGenerator
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from oficina.infrastructure.storage.sqlite import (
    SQLiteCustomerStore,
    SQLiteExpenseStore,
    SQLiteProductStore,
    SQLiteReceivableStore,
    SQLiteStockLedgerStore,
    SQLiteUserStore,
    SQLiteWorkOrderStore,
)
from oficina.infrastructure.storage.sqlite import connection as conn_module
from oficina.infrastructure.storage.sqlite.migrations import initialize_database
from oficina.infrastructure.storage.sqlite.migrations import migrator as migrator_module


@pytest.fixture
async def stores(tmp_path: Path) -> AsyncGenerator[dict, None]:
    """Fresh migrated database; yields one instance of every store."""
    settings = MagicMock()
    settings.storage.db_path = tmp_path / "oficina.db"
    settings.storage.pool_size = 3
    settings.storage.busy_timeout = 5000

    with (
        patch.object(migrator_module, "get_settings", return_value=settings),
        patch.object(conn_module, "get_settings", return_value=settings),
    ):
        await initialize_database(settings.storage.db_path, create_backup_before=False)
        conn_module._pool = None
        try:
            yield {
                "products": SQLiteProductStore(),
                "ledger": SQLiteStockLedgerStore(),
                "work_orders": SQLiteWorkOrderStore(),
                "customers": SQLiteCustomerStore(),
                "receivables": SQLiteReceivableStore(),
                "expenses": SQLiteExpenseStore(),
                "users": SQLiteUserStore(),
            }
        finally:
            await conn_module.close_pool()
