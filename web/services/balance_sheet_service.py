"""
Balance sheet service

Loads the ledger, open invoices, payable slips and manual items, then
builds the balance sheet.
"""

import logging
from typing import Any

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.ledger.calendar import parse_entry_date
from core.ledger.categories import CategoryRegistry
from core.ledger.statements import build_balance_sheet
from core.ledger.store import LedgerStore
from core.storage.balance_sheet_store import BalanceSheetStore
from core.storage.invoice_store import InvoiceStore
from core.storage.salary_slip_store import SalarySlipStore
from core.utils.timezone import now_utc

logger = logging.getLogger(__name__)


class BalanceSheetService:
    """Balance sheet service"""

    def __init__(self, db: SQLiteAdapter, registry: CategoryRegistry):
        self.db = db
        self.registry = registry
        self.ledger_store = LedgerStore(db)
        self.items = BalanceSheetStore(db)
        self.invoices = InvoiceStore(db)
        self.slips = SalarySlipStore(db)

    async def get_balance_sheet(self, as_of: str | None = None) -> dict[str, Any]:
        """Balance sheet as of a date (default now)

        Args:
            as_of: ISO date or datetime; selects the current-year split only
        """
        moment = parse_entry_date(as_of) if as_of else now_utc()

        sheet = build_balance_sheet(
            entries=await self.ledger_store.all_entries(),
            manual_items=await self.items.list_items(),
            receivable_invoices=await self.invoices.receivable(),
            payable_slips=await self.slips.payable(),
            as_of=moment,
            registry=self.registry,
        )
        return sheet.to_dict()

    async def create_item(
        self,
        name: str | None,
        category: str | None,
        amount: Any,
        notes: str | None,
        actor_id: str,
    ) -> dict[str, Any]:
        """Create a manual item"""
        async with self.db.transaction():
            item = await self.items.create(
                name=name,
                category=category,
                amount=amount,
                notes=notes,
                created_by=actor_id,
            )
        return item.to_dict()

    async def delete_item(self, item_id: str | None) -> None:
        """Delete a manual item"""
        async with self.db.transaction():
            await self.items.delete(item_id)
