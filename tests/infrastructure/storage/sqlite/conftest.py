"""Pytest fixtures for SQLite storage tests."""

from collections.abc import AsyncGenerator
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from oficina.core.entities import Customer
from oficina.infrastructure.storage.sqlite import connection as conn_module
from oficina.infrastructure.storage.sqlite.customer_store import SQLiteCustomerStore
from oficina.infrastructure.storage.sqlite.migrations import migrator as migrator_module
from oficina.infrastructure.storage.sqlite.migrations import initialize_database


@pytest.fixture
def temp_db_path(tmp_path: Path) -> Path:
    """Create a temporary database path."""
    return tmp_path / "test.db"


@pytest.fixture
def mock_settings(temp_db_path: Path):
    """Mock settings with temp database path."""
    mock = MagicMock()
    mock.storage.db_path = temp_db_path
    mock.storage.pool_size = 2
    mock.storage.busy_timeout = 5000
    return mock


@pytest.fixture
async def db(temp_db_path: Path, mock_settings) -> AsyncGenerator[Path, None]:
    """Migrated database behind the global pool."""
    with (
        patch.object(migrator_module, "get_settings", return_value=mock_settings),
        patch.object(conn_module, "get_settings", return_value=mock_settings),
    ):
        await initialize_database(temp_db_path, create_backup_before=False)
        conn_module._pool = None
        try:
            yield temp_db_path
        finally:
            await conn_module.close_pool()


@pytest.fixture
async def customer_id(db) -> int:
    """Id of a persisted customer."""
    customer = await SQLiteCustomerStore().create(Customer(name="Auto Pecas Silva"))
    return customer.id
