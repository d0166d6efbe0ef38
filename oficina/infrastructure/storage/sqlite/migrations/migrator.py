"""
Schema migrations for the shop database.

Migration files live next to this module as ``vNNN_<name>.sql``. Each file
runs in one transaction together with its row in ``schema_migrations``, so a
broken script leaves neither tables nor a ledger row behind. When a run
applies several files and a later one fails, the copy taken before the run
is restored.
"""

import hashlib
import re
import sqlite3
import time
from contextlib import closing
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path

import aiosqlite

from oficina.config import get_logger, get_settings

logger = get_logger(__name__)

MIGRATIONS_DIR = Path(__file__).parent

_FILENAME_RE = re.compile(r"^v(\d{3})_([a-z0-9_]+)\.sql$")

_LEDGER_DDL = """
CREATE TABLE IF NOT EXISTS schema_migrations (
    version TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    checksum TEXT NOT NULL,
    applied_at TEXT NOT NULL
)
"""

# Tables the stores read and write
REQUIRED_TABLES = (
    "users",
    "products",
    "stock_movements",
    "customers",
    "work_orders",
    "work_order_lines",
    "installments",
    "expenses",
)


@dataclass(frozen=True)
class MigrationInfo:
    """A migration file: zero-padded version, name and content checksum."""

    version: str
    name: str
    path: Path
    checksum: str

    @classmethod
    def from_file(cls, path: Path) -> "MigrationInfo":
        match = _FILENAME_RE.match(path.name)
        if not match:
            raise ValueError(f"Invalid migration filename: {path.name}")
        checksum = hashlib.sha256(path.read_bytes()).hexdigest()[:16]
        return cls(version=match.group(1), name=match.group(2), path=path, checksum=checksum)

    def script(self, applied_at: datetime) -> str:
        """File body and its ledger row inside one explicit transaction."""
        # Every interpolated value is constrained by _FILENAME_RE or is hex / ISO text
        return (
            "BEGIN IMMEDIATE;\n"
            f"{self.path.read_text(encoding='utf-8')}\n"
            "INSERT INTO schema_migrations (version, name, checksum, applied_at) VALUES "
            f"('{self.version}', '{self.name}', '{self.checksum}', '{applied_at.isoformat()}');\n"
            "COMMIT;\n"
        )


@dataclass
class MigrationResult:
    version: str
    name: str
    success: bool
    execution_time_ms: int
    error: str | None = None


def discover_migrations(directory: Path = MIGRATIONS_DIR) -> list[MigrationInfo]:
    """Migration files in version order. Misnamed .sql files are an error."""
    migrations = [MigrationInfo.from_file(path) for path in directory.glob("v*.sql")]
    migrations.sort(key=lambda m: m.version)
    versions = [m.version for m in migrations]
    if len(versions) != len(set(versions)):
        raise ValueError(f"Duplicate migration versions in {directory}")
    return migrations


async def _read_ledger(conn: aiosqlite.Connection) -> dict[str, str]:
    """Applied version -> checksum. Empty when the ledger table does not exist."""
    cursor = await conn.execute(
        "SELECT 1 FROM sqlite_master WHERE type = 'table' AND name = 'schema_migrations'"
    )
    if await cursor.fetchone() is None:
        return {}
    cursor = await conn.execute("SELECT version, checksum FROM schema_migrations")
    return {row[0]: row[1] for row in await cursor.fetchall()}


async def get_current_version(conn: aiosqlite.Connection) -> str | None:
    applied = await _read_ledger(conn)
    return max(applied, default=None)


async def apply_migration(conn: aiosqlite.Connection, migration: MigrationInfo) -> MigrationResult:
    """Run one migration file. A failure rolls the whole file back."""
    started = time.perf_counter()
    try:
        await conn.executescript(migration.script(datetime.now(UTC)))
    except sqlite3.Error as e:
        if conn.in_transaction:
            await conn.rollback()
        elapsed = int((time.perf_counter() - started) * 1000)
        logger.error(
            "migration_failed", version=migration.version, name=migration.name, error=str(e)
        )
        return MigrationResult(migration.version, migration.name, False, elapsed, str(e))

    elapsed = int((time.perf_counter() - started) * 1000)
    logger.info(
        "migration_applied",
        version=migration.version,
        name=migration.name,
        execution_time_ms=elapsed,
    )
    return MigrationResult(migration.version, migration.name, True, elapsed)


def create_backup(db_path: Path) -> Path:
    """
    Snapshot the database through SQLite's online backup API.

    Unlike a file copy, the snapshot includes pages still held in the WAL.
    """
    stamp = datetime.now(UTC).strftime("%Y%m%d_%H%M%S_%f")
    backup_path = db_path.with_name(f"{db_path.stem}.backup_{stamp}{db_path.suffix}")
    with closing(sqlite3.connect(db_path)) as source:
        with closing(sqlite3.connect(backup_path)) as target:
            source.backup(target)
    logger.info("database_backup_created", backup_path=str(backup_path))
    return backup_path


def restore_backup(db_path: Path, backup_path: Path) -> None:
    """Write a snapshot back over the live database."""
    with closing(sqlite3.connect(backup_path)) as source:
        with closing(sqlite3.connect(db_path)) as target:
            source.backup(target)
    logger.warning("database_restored_from_backup", backup_path=str(backup_path))


async def initialize_database(
    db_path: Path | None = None,
    create_backup_before: bool = True,
    migrations_dir: Path | None = None,
) -> list[MigrationResult]:
    """
    Apply pending migrations in version order, stopping at the first failure.

    Args:
        db_path: database file (default from settings)
        create_backup_before: snapshot an existing database before applying
        migrations_dir: where to look for migration files

    Returns:
        One result per attempted migration; empty when the schema is current.
    """
    db_path = Path(db_path or get_settings().storage.db_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)
    migrations = discover_migrations(migrations_dir or MIGRATIONS_DIR)
    existed = db_path.exists()

    results: list[MigrationResult] = []
    backup_path: Path | None = None

    async with aiosqlite.connect(db_path) as conn:
        await conn.execute("PRAGMA foreign_keys=ON")
        await conn.execute(_LEDGER_DDL)
        await conn.commit()

        applied = await _read_ledger(conn)
        for migration in migrations:
            recorded = applied.get(migration.version)
            if recorded is not None and recorded != migration.checksum:
                logger.warning(
                    "migration_checksum_mismatch",
                    version=migration.version,
                    recorded=recorded,
                    on_disk=migration.checksum,
                )

        pending = [m for m in migrations if m.version not in applied]
        if not pending:
            logger.info("schema_up_to_date", version=max(applied, default=None))
            return results

        if create_backup_before and existed:
            backup_path = create_backup(db_path)

        logger.info(
            "applying_migrations",
            db_path=str(db_path),
            pending=[m.version for m in pending],
        )
        for migration in pending:
            result = await apply_migration(conn, migration)
            results.append(result)
            if not result.success:
                break

    if backup_path is not None:
        if all(r.success for r in results):
            backup_path.unlink()
        else:
            restore_backup(db_path, backup_path)

    return results


async def get_migration_status(db_path: Path | None = None) -> dict:
    """Applied, pending and modified (checksum changed) migration versions."""
    db_path = Path(db_path or get_settings().storage.db_path)
    migrations = discover_migrations()

    if not db_path.exists():
        return {
            "exists": False,
            "current_version": None,
            "applied_migrations": [],
            "pending_migrations": [m.version for m in migrations],
            "modified_migrations": [],
        }

    async with aiosqlite.connect(db_path) as conn:
        applied = await _read_ledger(conn)

    return {
        "exists": True,
        "current_version": max(applied, default=None),
        "applied_migrations": sorted(applied),
        "pending_migrations": [m.version for m in migrations if m.version not in applied],
        "modified_migrations": [
            m.version
            for m in migrations
            if m.version in applied and applied[m.version] != m.checksum
        ],
    }


async def verify_schema_integrity(db_path: Path | None = None) -> list[dict]:
    """
    Health checks for ``manage.py status``.

    Besides SQLite's own integrity and foreign key checks, confirms that every
    store table exists and that each work order's stored total equals the sum
    of its line subtotals.
    """
    db_path = Path(db_path or get_settings().storage.db_path)
    checks: list[dict] = []

    async with aiosqlite.connect(db_path) as conn:
        cursor = await conn.execute("PRAGMA integrity_check")
        (verdict,) = await cursor.fetchone()
        checks.append({"check": "integrity", "status": "PASS" if verdict == "ok" else "FAIL"})

        cursor = await conn.execute("PRAGMA foreign_key_check")
        violations = len(await cursor.fetchall())
        checks.append(
            {
                "check": "foreign_keys",
                "status": "PASS" if not violations else "FAIL",
                "violations": violations,
            }
        )

        cursor = await conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'")
        existing = {row[0] for row in await cursor.fetchall()}
        missing = [table for table in REQUIRED_TABLES if table not in existing]
        checks.append(
            {
                "check": "required_tables",
                "status": "PASS" if not missing else "FAIL",
                "missing": missing,
            }
        )

        if {"work_orders", "work_order_lines"} <= existing:
            cursor = await conn.execute(
                """
                SELECT wo.id
                FROM work_orders wo
                LEFT JOIN work_order_lines l ON l.work_order_id = wo.id
                GROUP BY wo.id
                HAVING ABS(wo.total - COALESCE(SUM(l.subtotal), 0)) > 0.005
                """
            )
            drifted = [row[0] for row in await cursor.fetchall()]
            checks.append(
                {
                    "check": "work_order_totals",
                    "status": "PASS" if not drifted else "FAIL",
                    "work_order_ids": drifted,
                }
            )

    return checks
