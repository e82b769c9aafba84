"""
Accounting ledger

Single-entry business ledger with an accounting category taxonomy,
reconciliation against invoices and salary slips, and P&L / balance
sheet builders.

Usage:
```python
from core.ledger import Ledger, LedgerFilters, get_default_registry

registry = get_default_registry()
ledger = Ledger(db, registry)

# Record an entry
result = await ledger.create(
    {"type": "Debit", "category": "AWS", "amount": "100",
     "accounting_category": "hosting_cloud"},
    actor_id="user-1",
)

# List entries with the global balance
page = await ledger.list(LedgerFilters(type="Debit", page=1, limit=50))
```
"""

from core.ledger.calendar import (
    DateWindow,
    fiscal_year_window,
    month_window,
    range_window,
    resolve_list_window,
    year_window,
)
from core.ledger.categories import (
    ACCOUNTING_CATEGORIES,
    Category,
    CategoryRegistry,
    get_default_registry,
)
from core.ledger.entry import LedgerEntry, LedgerFilters, LedgerPage, Reference
from core.ledger.errors import (
    AccountingError,
    ForbiddenError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from core.ledger.ledger import Ledger, LedgerWriteResult
from core.ledger.reconciliation import (
    ReconciliationEngine,
    ReconciliationOutcome,
    invoice_status,
)
from core.ledger.statements import build_balance_sheet, build_profit_and_loss
from core.ledger.store import LedgerStore
from core.ledger.types import AppliesTo, BalanceSheetImpact, PLGroup

__all__ = [
    # Core classes
    "Ledger",
    "LedgerStore",
    "LedgerEntry",
    "LedgerFilters",
    "LedgerPage",
    "LedgerWriteResult",
    "Reference",
    "ReconciliationEngine",
    "ReconciliationOutcome",
    # Taxonomy
    "ACCOUNTING_CATEGORIES",
    "Category",
    "CategoryRegistry",
    "get_default_registry",
    # Calendar
    "DateWindow",
    "month_window",
    "year_window",
    "fiscal_year_window",
    "range_window",
    "resolve_list_window",
    # Statements
    "build_profit_and_loss",
    "build_balance_sheet",
    "invoice_status",
    # Enums
    "AppliesTo",
    "BalanceSheetImpact",
    "PLGroup",
    # Errors
    "AccountingError",
    "ValidationError",
    "UnauthorizedError",
    "ForbiddenError",
    "NotFoundError",
]
