"""
Ledger entry model

A ledger entry is a single dated money movement. The amount is always
stored positive; its sign comes from the entry type when aggregating.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any

from core.ledger.amounts import money
from core.types import EntryType, PaymentMode, ReferenceType
from core.utils.timezone import to_storage


@dataclass
class Reference:
    """Source document an entry settles (Invoice, SalarySlip, or nothing)"""

    type: str = ReferenceType.NONE.value
    id: str | None = None
    document_no: str | None = None

    @property
    def is_invoice(self) -> bool:
        return self.type == ReferenceType.INVOICE.value and bool(self.id)

    @property
    def is_salary_slip(self) -> bool:
        return self.type == ReferenceType.SALARY_SLIP.value and bool(self.id)

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "id": self.id, "documentNo": self.document_no}


@dataclass
class LedgerEntry:
    """Ledger entry

    accounting_category is None for legacy entries recorded before the
    category taxonomy existed.
    """

    id: str
    date: datetime
    type: str
    category: str
    amount: Decimal
    payment_mode: str = PaymentMode.BANK_TRANSFER.value
    accounting_category: str | None = None
    description: str | None = None
    reference: Reference = field(default_factory=Reference)
    created_by: str | None = None
    created_at: datetime | None = None

    @property
    def is_credit(self) -> bool:
        return self.type == EntryType.CREDIT.value

    @property
    def signed_amount(self) -> Decimal:
        """Credit (+) / Debit (-)"""
        return self.amount if self.is_credit else -self.amount

    @property
    def is_cash(self) -> bool:
        return self.payment_mode == PaymentMode.CASH.value

    def to_dict(self) -> dict[str, Any]:
        """API representation (camelCase keys)"""
        return {
            "id": self.id,
            "date": to_storage(self.date),
            "type": self.type,
            "accountingCategory": self.accounting_category,
            "category": self.category,
            "amount": money(self.amount),
            "description": self.description,
            "paymentMode": self.payment_mode,
            "reference": self.reference.to_dict(),
            "createdBy": self.created_by,
            "createdAt": to_storage(self.created_at) if self.created_at else None,
        }


@dataclass(frozen=True)
class LedgerFilters:
    """Listing filters

    window is resolved by the calendar; search matches description,
    category, and payment mode case-insensitively.
    """

    type: str | None = None
    search: str | None = None
    window: Any = None  # DateWindow | None
    page: int = 1
    limit: int = 50
    fetch_all: bool = False


@dataclass
class LedgerPage:
    """One page of entries plus the window-independent global balance"""

    entries: list[LedgerEntry]
    total_count: int
    global_balance: Decimal
    page: int
    limit: int
