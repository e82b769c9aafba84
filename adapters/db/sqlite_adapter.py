"""
SQLite adapter

Manages SQLite connections in WAL mode so several request handlers
can read while another writes.

Note: do not use time or count as SQLite aliases (reserved words)
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncIterator

import aiosqlite

from core.constants import Paths
from core.types import AppMode

logger = logging.getLogger(__name__)


def get_db_path(mode: AppMode | str) -> Path:
    """Return the DB path for a mode

    Args:
        mode: runtime mode (production/development)

    Returns:
        DB file path
    """
    if isinstance(mode, str):
        mode = AppMode(mode.lower())

    if mode == AppMode.PRODUCTION:
        return Paths.PROD_DB
    return Paths.DEV_DB


async def create_connection(
    db_path: Path | str,
    readonly: bool = False,
) -> aiosqlite.Connection:
    """Open a SQLite connection (WAL mode)

    Args:
        db_path: DB file path
        readonly: open read-only

    Returns:
        aiosqlite connection
    """
    db_path_str = str(db_path)

    db_dir = Path(db_path).parent
    db_dir.mkdir(parents=True, exist_ok=True)

    if readonly:
        conn = await aiosqlite.connect(f"file:{db_path_str}?mode=ro", uri=True)
    else:
        conn = await aiosqlite.connect(db_path_str)

    await conn.execute("PRAGMA journal_mode=WAL")

    # Concurrent access
    await conn.execute("PRAGMA busy_timeout=30000")  # wait up to 30s

    await conn.execute("PRAGMA foreign_keys=ON")

    logger.debug(
        "SQLite connection opened",
        extra={"db_path": db_path_str, "readonly": readonly},
    )

    return conn


class SQLiteAdapter:
    """SQLite adapter

    Manages a WAL-mode connection and provides a transaction
    context manager.

    Args:
        db_path: DB file path
        readonly: read-only connection (statement queries)

    Example:
    ```python
    adapter = SQLiteAdapter(db_path)
    await adapter.connect()

    async with adapter.transaction():
        await adapter.execute("INSERT INTO ...")

    await adapter.close()
    ```
    """

    def __init__(self, db_path: Path | str, readonly: bool = False):
        self.db_path = Path(db_path)
        self.readonly = readonly
        self._conn: aiosqlite.Connection | None = None

    @property
    def is_connected(self) -> bool:
        """Whether a connection is open"""
        return self._conn is not None

    async def connect(self) -> None:
        """Open the connection"""
        if self._conn is not None:
            return

        self._conn = await create_connection(self.db_path, self.readonly)

    async def close(self) -> None:
        """Close the connection"""
        if self._conn is not None:
            await self._conn.close()
            self._conn = None
            logger.debug("SQLite connection closed")

    async def execute(
        self,
        sql: str,
        parameters: tuple[Any, ...] | None = None,
    ) -> aiosqlite.Cursor:
        """Execute SQL"""
        if self._conn is None:
            raise RuntimeError("Not connected to database")

        if parameters:
            return await self._conn.execute(sql, parameters)
        return await self._conn.execute(sql)

    async def executemany(
        self,
        sql: str,
        parameters: list[tuple[Any, ...]],
    ) -> aiosqlite.Cursor:
        """Execute SQL for many parameter sets"""
        if self._conn is None:
            raise RuntimeError("Not connected to database")

        return await self._conn.executemany(sql, parameters)

    async def fetchone(
        self,
        sql: str,
        parameters: tuple[Any, ...] | None = None,
    ) -> tuple[Any, ...] | None:
        """Fetch a single row"""
        cursor = await self.execute(sql, parameters)
        return await cursor.fetchone()

    async def fetchall(
        self,
        sql: str,
        parameters: tuple[Any, ...] | None = None,
    ) -> list[tuple[Any, ...]]:
        """Fetch all rows"""
        cursor = await self.execute(sql, parameters)
        return await cursor.fetchall()

    async def commit(self) -> None:
        """Commit"""
        if self._conn is not None:
            await self._conn.commit()

    async def rollback(self) -> None:
        """Rollback"""
        if self._conn is not None:
            await self._conn.rollback()

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[aiosqlite.Connection]:
        """Transaction context manager

        Commits on success, rolls back on any exception.

        Example:
        ```python
        async with adapter.transaction():
            await adapter.execute("INSERT INTO ...")
            await adapter.execute("UPDATE ...")
        ```
        """
        if self._conn is None:
            raise RuntimeError("Not connected to database")

        try:
            yield self._conn
            await self._conn.commit()
        except Exception:
            await self._conn.rollback()
            raise

    async def table_exists(self, table_name: str) -> bool:
        """Check whether a table exists"""
        result = await self.fetchone(
            "SELECT name FROM sqlite_master WHERE type='table' AND name=?",
            (table_name,),
        )
        return result is not None

    # -------------------------------------------------------------------------
    # Context manager
    # -------------------------------------------------------------------------

    async def __aenter__(self) -> "SQLiteAdapter":
        await self.connect()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()


async def init_schema(adapter: SQLiteAdapter) -> None:
    """Create tables (idempotent)

    Args:
        adapter: connected SQLiteAdapter
    """
    # Ledger entries
    await adapter.execute("""
        CREATE TABLE IF NOT EXISTS ledger_transaction (
            id                  TEXT PRIMARY KEY,
            date                TEXT NOT NULL,
            type                TEXT NOT NULL CHECK (type IN ('Credit', 'Debit')),
            accounting_category TEXT,
            category            TEXT NOT NULL,
            amount              TEXT NOT NULL,
            description         TEXT,
            payment_mode        TEXT NOT NULL DEFAULT 'Bank Transfer',

            reference_type      TEXT NOT NULL DEFAULT 'None',
            reference_id        TEXT,
            reference_doc_no    TEXT,

            created_by          TEXT,
            created_at          TEXT NOT NULL
        )
    """)

    # Invoices (partial view owned by the invoicing module)
    await adapter.execute("""
        CREATE TABLE IF NOT EXISTS invoice (
            id               TEXT PRIMARY KEY,
            invoice_no       TEXT NOT NULL UNIQUE,
            client_name      TEXT,
            total_amount     TEXT NOT NULL DEFAULT '0',
            amount_paid      TEXT NOT NULL DEFAULT '0',
            status           TEXT NOT NULL DEFAULT 'Pending',
            created_at       TEXT NOT NULL DEFAULT (datetime('now'))
        )
    """)

    # Invoice payment history (one row per referencing ledger entry)
    await adapter.execute("""
        CREATE TABLE IF NOT EXISTS invoice_payment (
            id               INTEGER PRIMARY KEY AUTOINCREMENT,
            invoice_id       TEXT NOT NULL,
            amount           TEXT NOT NULL,
            date             TEXT NOT NULL,
            note             TEXT,
            transaction_id   TEXT,
            position         INTEGER NOT NULL DEFAULT 0,
            FOREIGN KEY (invoice_id) REFERENCES invoice(id) ON DELETE CASCADE
        )
    """)

    # Payroll users (partial view owned by the user module)
    await adapter.execute("""
        CREATE TABLE IF NOT EXISTS payroll_user (
            id               TEXT PRIMARY KEY,
            name             TEXT NOT NULL,
            enable_payroll   INTEGER NOT NULL DEFAULT 1
        )
    """)

    # Salary slips (partial view owned by the payroll module)
    await adapter.execute("""
        CREATE TABLE IF NOT EXISTS salary_slip (
            id               TEXT PRIMARY KEY,
            user_id          TEXT,
            month            INTEGER NOT NULL,
            year             INTEGER NOT NULL,
            net_pay          TEXT NOT NULL DEFAULT '0',
            status           TEXT NOT NULL DEFAULT 'finalized',
            paid_on          TEXT,
            created_at       TEXT NOT NULL DEFAULT (datetime('now'))
        )
    """)

    # Manual balance sheet adjustments
    await adapter.execute("""
        CREATE TABLE IF NOT EXISTS balance_sheet_item (
            id               TEXT PRIMARY KEY,
            name             TEXT NOT NULL,
            category         TEXT NOT NULL,
            amount           TEXT NOT NULL,
            notes            TEXT,
            created_by       TEXT,
            created_at       TEXT NOT NULL
        )
    """)

    # Indexes
    await adapter.execute("""
        CREATE INDEX IF NOT EXISTS ix_ledger_transaction_date
        ON ledger_transaction(date)
    """)

    await adapter.execute("""
        CREATE INDEX IF NOT EXISTS ix_ledger_transaction_type
        ON ledger_transaction(type)
    """)

    await adapter.execute("""
        CREATE INDEX IF NOT EXISTS ix_ledger_transaction_reference
        ON ledger_transaction(reference_type, reference_id)
    """)

    await adapter.execute("""
        CREATE INDEX IF NOT EXISTS ix_invoice_payment_invoice
        ON invoice_payment(invoice_id, position)
    """)

    await adapter.execute("""
        CREATE INDEX IF NOT EXISTS ix_salary_slip_status
        ON salary_slip(status)
    """)

    await adapter.commit()

    logger.info("Schema initialized")
