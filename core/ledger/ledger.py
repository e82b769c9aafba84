"""
Ledger service

Validates ledger writes and runs each one together with its
reconciliation inside a single database transaction: an entry and the
invoice / salary slip it settles either both change or neither does.

Usage:
```python
ledger = Ledger(db, get_default_registry())

result = await ledger.create(
    {"type": "Credit", "category": "Client payment", "amount": "1000",
     "accounting_category": "invoice_payment",
     "reference": {"type": "Invoice", "id": invoice_id}},
    actor_id="user-1",
)
result.entry.id          # new entry id
result.reconciliation    # ReconciliationOutcome.APPLIED
```
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, replace
from decimal import Decimal
from typing import TYPE_CHECKING, Any

from core.ledger.amounts import parse_amount
from core.ledger.calendar import parse_entry_date
from core.ledger.categories import CategoryRegistry
from core.ledger.entry import LedgerEntry, LedgerFilters, LedgerPage, Reference
from core.ledger.errors import NotFoundError, ValidationError
from core.ledger.reconciliation import ReconciliationEngine, ReconciliationOutcome
from core.ledger.store import LedgerStore
from core.storage.invoice_store import InvoiceStore
from core.storage.salary_slip_store import SalarySlipStore
from core.types import EntryType, PaymentMode, ReferenceType
from core.utils.timezone import now_utc

if TYPE_CHECKING:
    from adapters.db.sqlite_adapter import SQLiteAdapter

logger = logging.getLogger(__name__)

# Fields an update may change. The reference is fixed at creation.
PATCHABLE_FIELDS = (
    "date",
    "type",
    "category",
    "accounting_category",
    "amount",
    "description",
    "payment_mode",
)


@dataclass
class LedgerWriteResult:
    """Entry after a write, plus what happened to its referenced document"""

    entry: LedgerEntry
    reconciliation: ReconciliationOutcome


def _parse_enum(enum_cls: type, value: Any, field_name: str) -> str:
    try:
        return enum_cls(value).value
    except ValueError:
        valid = ", ".join(m.value for m in enum_cls)
        raise ValidationError(f"Invalid {field_name}: {value}. Must be one of: {valid}") from None


def _clean_text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


class Ledger:
    """Ledger service

    Args:
        db: connected SQLite adapter
        registry: accounting category registry
        engine: reconciliation engine (defaults to one over the SQLite stores)
    """

    def __init__(
        self,
        db: SQLiteAdapter,
        registry: CategoryRegistry,
        engine: ReconciliationEngine | None = None,
    ):
        self.db = db
        self.registry = registry
        self.store = LedgerStore(db)
        self.engine = engine or ReconciliationEngine(
            invoices=InvoiceStore(db),
            slips=SalarySlipStore(db),
            references=self.store,
        )

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    def _validate_category(self, accounting_category: Any, entry_type: str) -> str | None:
        category_id = _clean_text(accounting_category)
        if category_id is None:
            return None

        category = self.registry.get_category_by_id(category_id)
        if category is None:
            raise ValidationError(f"Unknown accounting category: {category_id}")
        if not category.applies_to_type(entry_type):
            raise ValidationError(
                f"Accounting category {category_id} cannot be used on a {entry_type} entry"
            )
        return category.id

    @staticmethod
    def _parse_reference(data: Any) -> Reference:
        if not data:
            return Reference()
        if not isinstance(data, dict):
            raise ValidationError("Invalid reference")

        ref_type = _parse_enum(
            ReferenceType, data.get("type") or ReferenceType.NONE.value, "reference type"
        )
        if ref_type == ReferenceType.NONE.value:
            return Reference()

        ref_id = _clean_text(data.get("id"))
        if ref_id is None:
            raise ValidationError(f"Reference id is required for {ref_type}")
        return Reference(
            type=ref_type,
            id=ref_id,
            document_no=_clean_text(data.get("document_no")),
        )

    def _validate(self, entry: LedgerEntry) -> LedgerEntry:
        """Check a fully assembled entry (create or patched)"""
        entry.type = _parse_enum(EntryType, entry.type, "type")
        entry.amount = parse_amount(entry.amount)

        category = _clean_text(entry.category)
        if category is None:
            raise ValidationError("Category is required")
        entry.category = category

        entry.accounting_category = self._validate_category(entry.accounting_category, entry.type)
        entry.payment_mode = _parse_enum(
            PaymentMode, entry.payment_mode or PaymentMode.BANK_TRANSFER.value, "payment mode"
        )
        entry.description = _clean_text(entry.description)
        return entry

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    async def create(self, data: dict[str, Any], actor_id: str | None = None) -> LedgerWriteResult:
        """Record a new entry and apply it to its referenced document

        Args:
            data: entry fields (date, type, category, accounting_category,
                amount, description, payment_mode, reference)
            actor_id: id of the user recording the entry

        Raises:
            ValidationError: invalid input; nothing is persisted
        """
        entry = LedgerEntry(
            id=str(uuid.uuid4()),
            date=parse_entry_date(data.get("date")),
            type=data.get("type"),
            category=data.get("category"),
            amount=data.get("amount"),
            accounting_category=data.get("accounting_category"),
            description=data.get("description"),
            payment_mode=data.get("payment_mode"),
            reference=self._parse_reference(data.get("reference")),
            created_by=actor_id,
            created_at=now_utc().replace(microsecond=0),
        )
        self._validate(entry)

        async with self.db.transaction():
            await self.store.insert(entry)
            outcome = await self.engine.on_created(entry)

        logger.info(
            f"Ledger entry created: {entry.id} {entry.type} {entry.amount} "
            f"category={entry.accounting_category or '-'} reconciliation={outcome.value}"
        )
        return LedgerWriteResult(entry=entry, reconciliation=outcome)

    async def list(self, filters: LedgerFilters) -> LedgerPage:
        """Filtered page of entries plus the global balance"""
        if filters.type:
            _parse_enum(EntryType, filters.type, "type")
        if filters.page < 1:
            raise ValidationError("Page must be 1 or greater")
        if filters.limit < 1:
            raise ValidationError("Limit must be 1 or greater")

        entries = await self.store.list(filters)
        total = await self.store.count(filters)
        balance = await self.store.global_balance()

        return LedgerPage(
            entries=entries,
            total_count=total,
            global_balance=balance,
            page=filters.page,
            limit=filters.limit,
        )

    async def get(self, entry_id: str) -> LedgerEntry:
        """Fetch one entry

        Raises:
            NotFoundError: unknown id
        """
        entry = await self.store.get(entry_id) if entry_id else None
        if entry is None:
            raise NotFoundError("Transaction not found")
        return entry

    async def update(self, entry_id: str, patch: dict[str, Any]) -> LedgerWriteResult:
        """Apply a partial update and resync the referenced document

        Only keys present in `patch` change. The invoice payment row always
        follows the entry; the invoice amount paid moves by the amount delta.

        Raises:
            NotFoundError: unknown id
            ValidationError: patched entry is invalid; nothing is persisted
        """
        existing = await self.get(entry_id)

        changes = {k: patch[k] for k in PATCHABLE_FIELDS if k in patch}
        if "date" in changes:
            changes["date"] = parse_entry_date(changes["date"])

        updated = self._validate(replace(existing, **changes))
        amount_delta: Decimal = updated.amount - existing.amount

        async with self.db.transaction():
            await self.store.update(updated)
            outcome = await self.engine.on_updated(updated, amount_delta)

        logger.info(
            f"Ledger entry updated: {updated.id} fields={sorted(changes)} "
            f"delta={amount_delta} reconciliation={outcome.value}"
        )
        return LedgerWriteResult(entry=updated, reconciliation=outcome)

    async def delete(self, entry_id: str | None) -> ReconciliationOutcome:
        """Remove an entry and roll back its reconciliation effect

        The entry row is deleted first so the transaction holds the write
        lock before the referenced document is read.

        Raises:
            ValidationError: no id given
            NotFoundError: unknown id
        """
        if not entry_id:
            raise ValidationError("ID required")
        entry = await self.get(entry_id)

        async with self.db.transaction():
            await self.store.delete(entry.id)
            outcome = await self.engine.on_deleted(entry)

        logger.info(f"Ledger entry deleted: {entry.id} reconciliation={outcome.value}")
        return outcome
