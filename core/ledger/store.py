"""
Ledger store

SQL access for the ledger_transaction table. The store never commits;
the caller owns the transaction so an entry and its reconciliation
side effects land together.
"""

from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Any

from core.constants import Accounting
from core.ledger.entry import LedgerEntry, LedgerFilters, Reference
from core.types import EntryType, ReferenceType
from core.utils.timezone import from_storage, to_storage

if TYPE_CHECKING:
    from adapters.db.sqlite_adapter import SQLiteAdapter

logger = logging.getLogger(__name__)

_COLUMNS = """
    id, date, type, accounting_category, category, amount, description,
    payment_mode, reference_type, reference_id, reference_doc_no,
    created_by, created_at
"""


def format_amount(amount: Decimal) -> str:
    """Serialize an amount with two decimal places"""
    return str(amount.quantize(Accounting.AMOUNT_QUANTUM))


def escape_like(text: str) -> str:
    """Escape LIKE wildcards so they match literally (ESCAPE '\\')"""
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _row_to_entry(row: tuple[Any, ...]) -> LedgerEntry:
    return LedgerEntry(
        id=row[0],
        date=from_storage(row[1]),
        type=row[2],
        accounting_category=row[3],
        category=row[4],
        amount=Decimal(row[5]),
        description=row[6],
        payment_mode=row[7],
        reference=Reference(
            type=row[8] or ReferenceType.NONE.value,
            id=row[9],
            document_no=row[10],
        ),
        created_by=row[11],
        created_at=from_storage(row[12]) if row[12] else None,
    )


class LedgerStore:
    """Ledger store

    Args:
        db: SQLite adapter
    """

    def __init__(self, db: SQLiteAdapter):
        self.db = db

    async def insert(self, entry: LedgerEntry) -> None:
        """Insert an entry"""
        await self.db.execute(
            f"INSERT INTO ledger_transaction ({_COLUMNS}) "
            "VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
            (
                entry.id,
                to_storage(entry.date),
                entry.type,
                entry.accounting_category,
                entry.category,
                format_amount(entry.amount),
                entry.description,
                entry.payment_mode,
                entry.reference.type,
                entry.reference.id,
                entry.reference.document_no,
                entry.created_by,
                to_storage(entry.created_at) if entry.created_at else None,
            ),
        )
        logger.debug(f"Inserted ledger entry: {entry.id}")

    async def get(self, entry_id: str) -> LedgerEntry | None:
        """Fetch one entry by id"""
        row = await self.db.fetchone(
            f"SELECT {_COLUMNS} FROM ledger_transaction WHERE id = ?",
            (entry_id,),
        )
        return _row_to_entry(row) if row else None

    async def update(self, entry: LedgerEntry) -> None:
        """Overwrite the mutable fields of an entry"""
        await self.db.execute(
            """
            UPDATE ledger_transaction SET
                date = ?, type = ?, accounting_category = ?, category = ?,
                amount = ?, description = ?, payment_mode = ?,
                reference_type = ?, reference_id = ?, reference_doc_no = ?
            WHERE id = ?
            """,
            (
                to_storage(entry.date),
                entry.type,
                entry.accounting_category,
                entry.category,
                format_amount(entry.amount),
                entry.description,
                entry.payment_mode,
                entry.reference.type,
                entry.reference.id,
                entry.reference.document_no,
                entry.id,
            ),
        )

    async def delete(self, entry_id: str) -> bool:
        """Delete an entry

        Returns:
            True if a row was removed
        """
        cursor = await self.db.execute(
            "DELETE FROM ledger_transaction WHERE id = ?",
            (entry_id,),
        )
        return cursor.rowcount > 0

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    @staticmethod
    def _where(filters: LedgerFilters) -> tuple[str, list[Any]]:
        clauses: list[str] = []
        params: list[Any] = []

        if filters.type:
            clauses.append("type = ?")
            params.append(filters.type)

        if filters.window is not None:
            clauses.append("date >= ? AND date < ?")
            params.extend([to_storage(filters.window.start), to_storage(filters.window.end)])

        if filters.search:
            pattern = f"%{escape_like(filters.search.lower())}%"
            clauses.append(
                "(LOWER(COALESCE(description, '')) LIKE ? ESCAPE '\\' "
                "OR LOWER(category) LIKE ? ESCAPE '\\' "
                "OR LOWER(payment_mode) LIKE ? ESCAPE '\\')"
            )
            params.extend([pattern, pattern, pattern])

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        return where, params

    async def list(self, filters: LedgerFilters) -> list[LedgerEntry]:
        """Entries matching the filters, newest first

        Pagination is skipped when filters.fetch_all is set.
        """
        where, params = self._where(filters)
        sql = (
            f"SELECT {_COLUMNS} FROM ledger_transaction {where} "
            "ORDER BY date DESC, created_at DESC"
        )
        if not filters.fetch_all:
            sql += " LIMIT ? OFFSET ?"
            params.extend([filters.limit, (filters.page - 1) * filters.limit])

        rows = await self.db.fetchall(sql, tuple(params))
        return [_row_to_entry(row) for row in rows]

    async def count(self, filters: LedgerFilters) -> int:
        """Number of entries matching the filters (pagination ignored)"""
        where, params = self._where(filters)
        row = await self.db.fetchone(
            f"SELECT COUNT(*) FROM ledger_transaction {where}",
            tuple(params),
        )
        return int(row[0]) if row else 0

    async def all_entries(self) -> list[LedgerEntry]:
        """Every entry, oldest first"""
        rows = await self.db.fetchall(
            f"SELECT {_COLUMNS} FROM ledger_transaction ORDER BY date ASC, created_at ASC"
        )
        return [_row_to_entry(row) for row in rows]

    async def entries_between(self, start: datetime, end: datetime) -> list[LedgerEntry]:
        """Entries dated in [start, end), oldest first"""
        rows = await self.db.fetchall(
            f"SELECT {_COLUMNS} FROM ledger_transaction "
            "WHERE date >= ? AND date < ? ORDER BY date ASC, created_at ASC",
            (to_storage(start), to_storage(end)),
        )
        return [_row_to_entry(row) for row in rows]

    async def global_balance(self) -> Decimal:
        """Sum of all credits minus all debits, regardless of filters

        Summed in Decimal; SQLite would aggregate the text amounts as floats.
        """
        rows = await self.db.fetchall("SELECT type, amount FROM ledger_transaction")
        balance = Decimal("0")
        for entry_type, amount in rows:
            if entry_type == EntryType.CREDIT.value:
                balance += Decimal(amount)
            else:
                balance -= Decimal(amount)
        return balance

    async def count_referencing_slip(self, slip_id: str, exclude_id: str | None = None) -> int:
        """Number of entries referencing a salary slip

        Args:
            slip_id: salary slip id
            exclude_id: entry to leave out of the count
        """
        row = await self.db.fetchone(
            """
            SELECT COUNT(*) FROM ledger_transaction
            WHERE reference_type = ? AND reference_id = ? AND id != ?
            """,
            (ReferenceType.SALARY_SLIP.value, slip_id, exclude_id or ""),
        )
        return int(row[0]) if row else 0
