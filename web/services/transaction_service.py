"""
Transaction service

Ledger listing and writes for the transactions API
"""

from typing import Any

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.constants import Defaults
from core.ledger.amounts import money
from core.ledger.calendar import ALL, resolve_list_window
from core.ledger.categories import CategoryRegistry
from core.ledger.entry import LedgerFilters
from core.ledger.ledger import Ledger, LedgerWriteResult


class TransactionService:
    """Transaction service

    Thin layer over Ledger that turns query parameters into filters and
    results into API payloads.
    """

    def __init__(self, db: SQLiteAdapter, registry: CategoryRegistry):
        self.db = db
        self.ledger = Ledger(db, registry)

    async def list_transactions(
        self,
        type: str | None = None,
        month: str | None = None,
        year: str | None = None,
        start_date: str | None = None,
        end_date: str | None = None,
        search: str | None = None,
        page: int = 1,
        limit: int = Defaults.PAGE_SIZE,
        fetch_all: bool = False,
    ) -> dict[str, Any]:
        """Filtered entries plus the global balance

        Args:
            type: Credit / Debit ("all" or empty = no filter)
            month, year: calendar filter ("all" = no filter)
            start_date, end_date: explicit IST date range (YYYY-MM-DD)
            search: case-insensitive substring
            page, limit: pagination
            fetch_all: ignore pagination

        Returns:
            data (entries) and meta (globalBalance, total, page, limit)
        """
        filters = LedgerFilters(
            type=type if type and type != ALL else None,
            search=search.strip() if search and search.strip() else None,
            window=resolve_list_window(month, year, start_date, end_date),
            page=page,
            limit=limit,
            fetch_all=fetch_all,
        )
        result = await self.ledger.list(filters)

        return {
            "data": [entry.to_dict() for entry in result.entries],
            "meta": {
                "globalBalance": money(result.global_balance),
                "total": result.total_count,
                "page": result.page,
                "limit": result.limit,
                "period": filters.window.label if filters.window else None,
            },
        }

    async def create_transaction(self, data: dict[str, Any], actor_id: str) -> dict[str, Any]:
        """Record an entry (and reconcile its reference)"""
        result = await self.ledger.create(data, actor_id=actor_id)
        return self._write_payload(result)

    async def update_transaction(self, entry_id: str, patch: dict[str, Any]) -> dict[str, Any]:
        """Patch an entry (and resync its reference)"""
        result = await self.ledger.update(entry_id, patch)
        return self._write_payload(result)

    async def delete_transaction(self, entry_id: str | None) -> dict[str, Any]:
        """Delete an entry after reverting its reference"""
        outcome = await self.ledger.delete(entry_id)
        return {"meta": {"reconciliation": outcome.value}}

    @staticmethod
    def _write_payload(result: LedgerWriteResult) -> dict[str, Any]:
        return {
            "data": result.entry.to_dict(),
            "meta": {"reconciliation": result.reconciliation.value},
        }
