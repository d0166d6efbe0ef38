#!/usr/bin/env python3
"""
Oficina management CLI.

Usage:
    python manage.py start         Apply migrations & start server
    python manage.py stop          Graceful shutdown
    python manage.py status        Server and schema status
    python manage.py migrate       Apply pending migrations
    python manage.py create-user   Create an account (ADMIN by default)
"""

import argparse
import asyncio
import getpass
import os
import signal
import subprocess
import sys
import time
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parent
PID_FILE = ROOT_DIR / ".oficina.pid"


def _read_pid() -> int | None:
    """Read PID from .oficina.pid, return None if missing or stale."""
    if not PID_FILE.exists():
        return None
    try:
        pid = int(PID_FILE.read_text().strip())
    except (ValueError, OSError):
        return None
    if _is_pid_alive(pid):
        return pid
    # Stale PID file
    PID_FILE.unlink(missing_ok=True)
    return None


def _is_pid_alive(pid: int) -> bool:
    try:
        os.kill(pid, 0)
        return True
    except OSError:
        return False


async def _migrate() -> int:
    from oficina.infrastructure.storage.sqlite.migrations import initialize_database

    results = await initialize_database()
    if not results:
        print("Schema is up to date.")
        return 0

    for result in results:
        state = "ok" if result.success else f"FAILED: {result.error}"
        print(f"  {result.version}: {state} ({result.execution_time_ms} ms)")
    return 0 if all(r.success for r in results) else 1


async def _schema_status() -> None:
    from oficina.infrastructure.storage.sqlite.migrations import (
        get_migration_status,
        verify_schema_integrity,
    )

    status = await get_migration_status()
    if not status["exists"]:
        print("Database: not created yet.")
        print(f"  Pending migrations: {', '.join(status['pending_migrations']) or '-'}")
        return

    print(f"Database version: {status['current_version']}")
    print(f"  Applied: {len(status['applied_migrations'])}")
    print(f"  Pending: {', '.join(status['pending_migrations']) or '-'}")
    if status["modified_migrations"]:
        print(f"  Modified since applied: {', '.join(status['modified_migrations'])}")
    for check in await verify_schema_integrity():
        print(f"  {check['check']}: {check['status']}")


async def _create_user(name: str, secret: str, role: str) -> None:
    from oficina.application.services import get_account_service
    from oficina.infrastructure.storage.sqlite import close_pool
    from oficina.infrastructure.storage.sqlite.migrations import initialize_database

    await initialize_database()
    try:
        accounts = await get_account_service()
        user = await accounts.create_user(name, secret, role)
        print(f"Created {user.role} account '{user.name}' (id {user.id}).")
    finally:
        await close_pool()


def cmd_migrate(args: argparse.Namespace) -> None:
    """Apply pending migrations."""
    sys.exit(asyncio.run(_migrate()))


def cmd_start(args: argparse.Namespace) -> None:
    """Apply migrations and start the server."""
    existing_pid = _read_pid()
    if existing_pid is not None:
        print(f"Server already running (PID {existing_pid}). Use 'stop' first.")
        sys.exit(1)

    if asyncio.run(_migrate()) != 0:
        print("Error: migrations failed, not starting.")
        sys.exit(1)

    uvicorn_cmd = [
        sys.executable, "-m", "uvicorn",
        "oficina.api.main:app",
        "--host", args.host,
        "--port", str(args.port),
    ]
    if args.reload:
        uvicorn_cmd.append("--reload")

    print(f"Starting server on {args.host}:{args.port}...")
    proc = subprocess.Popen(uvicorn_cmd, cwd=str(ROOT_DIR))
    PID_FILE.write_text(str(proc.pid))
    print(f"Server started (PID {proc.pid}).")
    print(f"  PID file: {PID_FILE}")


def cmd_stop(args: argparse.Namespace) -> None:
    """Stop the running server."""
    pid = _read_pid()
    if pid is None:
        print("Server is not running.")
        return

    print(f"Stopping server (PID {pid})...")
    try:
        os.kill(pid, signal.SIGTERM)
    except OSError:
        pass
    for _ in range(30):
        if not _is_pid_alive(pid):
            break
        time.sleep(0.1)
    else:
        print("Warning: Process did not exit within 3 seconds.")

    PID_FILE.unlink(missing_ok=True)
    print("Server stopped." if not _is_pid_alive(pid) else "Warning: Server may still be running.")


def cmd_status(args: argparse.Namespace) -> None:
    """Report server process and schema state."""
    pid = _read_pid()
    print(f"Server is running (PID {pid})." if pid else "Server is not running.")
    asyncio.run(_schema_status())


def cmd_create_user(args: argparse.Namespace) -> None:
    """Create an account; prompts for the secret when not given."""
    secret = args.secret or getpass.getpass("Secret: ")
    if not secret:
        print("Error: secret is required.")
        sys.exit(1)
    asyncio.run(_create_user(args.name, secret, args.role))


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Oficina management CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    sub = parser.add_subparsers(dest="command", required=True)

    # start
    p_start = sub.add_parser("start", help="Apply migrations and start server")
    p_start.add_argument("--host", default="0.0.0.0", help="Bind host (default: 0.0.0.0)")
    p_start.add_argument("--port", type=int, default=8080, help="Bind port (default: 8080)")
    p_start.add_argument("--reload", action="store_true", help="Reload on code changes")
    p_start.set_defaults(func=cmd_start)

    # stop
    p_stop = sub.add_parser("stop", help="Stop the server")
    p_stop.set_defaults(func=cmd_stop)

    # status
    p_status = sub.add_parser("status", help="Server and schema status")
    p_status.set_defaults(func=cmd_status)

    # migrate
    p_migrate = sub.add_parser("migrate", help="Apply pending migrations")
    p_migrate.set_defaults(func=cmd_migrate)

    # create-user
    p_user = sub.add_parser("create-user", help="Create an account")
    p_user.add_argument("name", help="Account name")
    p_user.add_argument("--secret", help="Account secret (prompted when omitted)")
    p_user.add_argument(
        "--role",
        default="ADMIN",
        choices=["ADMIN", "GERENTE", "FUNCIONARIO"],
        help="Account role (default: ADMIN)",
    )
    p_user.set_defaults(func=cmd_create_user)

    args = parser.parse_args()
    args.func(args)


if __name__ == "__main__":
    main()
