"""
Accounting category taxonomy

Developer-maintained list of the categories a ledger entry can be tagged
with. Each category maps an entry to:
- pl_group: where it appears in the Profit & Loss statement
- bs_impact: which Balance Sheet line it moves directly
- applies_to: Credit, Debit, or Both

The registry is built once at startup and handed to whoever needs it
(Ledger validation, statement building, the categories API).
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from functools import lru_cache
from typing import Any

from core.ledger.types import (
    BALANCE_SHEET_GROUP_LABEL,
    AppliesTo,
    BalanceSheetImpact,
    PLGroup,
)


@dataclass(frozen=True)
class Category:
    """Accounting category (immutable)"""

    id: str
    label: str
    applies_to: AppliesTo
    pl_group: PLGroup | None
    pl_label: str | None
    bs_impact: BalanceSheetImpact
    description: str

    def applies_to_type(self, entry_type: str) -> bool:
        """Whether the category may be used on a Credit/Debit entry"""
        return self.applies_to == AppliesTo.BOTH or self.applies_to.value == entry_type

    @property
    def bucket_label(self) -> str:
        """Label of the P&L line this category sums into"""
        return self.pl_label or self.label

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "label": self.label,
            "appliesTo": self.applies_to.value,
            "plGroup": self.pl_group.value if self.pl_group else None,
            "plLabel": self.pl_label,
            "bsImpact": self.bs_impact.value if self.bs_impact != BalanceSheetImpact.NONE else None,
            "description": self.description,
        }


def _category(
    id: str,
    label: str,
    applies_to: AppliesTo,
    description: str,
    pl_group: PLGroup | None = None,
    pl_label: str | None = None,
    bs_impact: BalanceSheetImpact = BalanceSheetImpact.NONE,
) -> Category:
    return Category(
        id=id,
        label=label,
        applies_to=applies_to,
        pl_group=pl_group,
        pl_label=pl_label,
        bs_impact=bs_impact,
        description=description,
    )


ACCOUNTING_CATEGORIES: tuple[Category, ...] = (
    # --- Income (Credit) ---------------------------------------------------
    _category(
        "invoice_payment", "Invoice Payment", AppliesTo.CREDIT,
        "Payment received against a client invoice",
        PLGroup.REVENUE, "Invoice Revenue",
    ),
    _category(
        "service_income", "Service / Consulting Fee", AppliesTo.CREDIT,
        "Income from services or consulting not linked to an invoice",
        PLGroup.REVENUE, "Service Revenue",
    ),
    _category(
        "other_income", "Other Income", AppliesTo.CREDIT,
        "Interest, refunds, or miscellaneous income",
        PLGroup.OTHER_INCOME, "Other Income",
    ),
    _category(
        "owner_capital", "Owner's Capital Input", AppliesTo.CREDIT,
        "Money invested by the owner into the business",
        bs_impact=BalanceSheetImpact.EQUITY_CAPITAL,
    ),
    _category(
        "loan_received", "Loan Received", AppliesTo.CREDIT,
        "Business loan received from a bank or lender",
        bs_impact=BalanceSheetImpact.LONG_TERM_LIABILITY,
    ),

    # --- Cost of goods sold / direct costs (Debit) -------------------------
    _category(
        "hosting_cloud", "Hosting / Cloud Services", AppliesTo.DEBIT,
        "AWS, GCP, Azure, server hosting costs",
        PLGroup.COGS, "Hosting & Infrastructure",
    ),
    _category(
        "software_tools", "Software Tools & SaaS", AppliesTo.DEBIT,
        "Third-party software licenses, SaaS subscriptions used for delivery",
        PLGroup.COGS, "Software & Tools",
    ),
    _category(
        "freelancer_contract", "Freelancer / Contractor", AppliesTo.DEBIT,
        "Payments to freelancers or sub-contractors for project work",
        PLGroup.COGS, "Contract Labour",
    ),

    # --- Operating expenses (Debit) ----------------------------------------
    _category(
        "salary", "Salary / Payroll", AppliesTo.DEBIT,
        "Employee salary disbursements",
        PLGroup.OPERATING_EXPENSE, "Salaries & Wages",
    ),
    _category(
        "office_rent", "Office Rent", AppliesTo.DEBIT,
        "Monthly office or workspace rent",
        PLGroup.OPERATING_EXPENSE, "Rent",
    ),
    _category(
        "utilities", "Utilities & Internet", AppliesTo.DEBIT,
        "Electricity, internet, phone bills",
        PLGroup.OPERATING_EXPENSE, "Utilities",
    ),
    _category(
        "travel", "Travel & Conveyance", AppliesTo.DEBIT,
        "Business travel, fuel, cab fares",
        PLGroup.OPERATING_EXPENSE, "Travel & Conveyance",
    ),
    _category(
        "marketing", "Marketing & Advertising", AppliesTo.DEBIT,
        "Advertising, promotions, digital marketing",
        PLGroup.OPERATING_EXPENSE, "Sales & Marketing",
    ),
    _category(
        "office_supplies", "Office Supplies & Stationery", AppliesTo.DEBIT,
        "Stationery, printing, general office consumables",
        PLGroup.OPERATING_EXPENSE, "Office Expenses",
    ),
    _category(
        "professional_fees", "Professional Fees (CA/Legal)", AppliesTo.DEBIT,
        "Chartered accountant, legal, or consultant fees",
        PLGroup.OPERATING_EXPENSE, "Professional Fees",
    ),
    _category(
        "misc_expense", "Miscellaneous Expense", AppliesTo.DEBIT,
        "Any other operating expense",
        PLGroup.OPERATING_EXPENSE, "Miscellaneous",
    ),

    # --- Tax (Debit) -------------------------------------------------------
    _category(
        "gst_payment", "GST Payment", AppliesTo.DEBIT,
        "GST deposited to government",
        PLGroup.TAX, "GST Paid",
    ),
    _category(
        "tds_payment", "TDS / Income Tax", AppliesTo.DEBIT,
        "TDS deducted or advance income tax payment",
        PLGroup.TAX, "TDS / Income Tax",
    ),

    # --- Balance sheet only: asset / liability movements (Debit) ------------
    _category(
        "asset_purchase", "Asset Purchase", AppliesTo.DEBIT,
        "Purchase of laptop, equipment, furniture etc.",
        bs_impact=BalanceSheetImpact.FIXED_ASSET,
    ),
    _category(
        "prepaid_expense", "Prepaid Expense", AppliesTo.DEBIT,
        "Advance rent, insurance, or subscription paid upfront",
        bs_impact=BalanceSheetImpact.PREPAID_EXPENSE,
    ),
    _category(
        "loan_repayment", "Loan Repayment", AppliesTo.DEBIT,
        "Repayment of outstanding business loan",
        bs_impact=BalanceSheetImpact.LONG_TERM_LIABILITY_REDUCTION,
    ),
)


class CategoryRegistry:
    """Immutable category registry

    Indexes categories by id once at construction.

    Args:
        categories: category definitions (ids must be unique)

    Raises:
        ValueError: duplicate category id
    """

    def __init__(self, categories: Iterable[Category]):
        self._categories: tuple[Category, ...] = tuple(categories)
        index: dict[str, Category] = {}
        for category in self._categories:
            if category.id in index:
                raise ValueError(f"Duplicate accounting category id: {category.id}")
            index[category.id] = category
        self._index = index

    def __len__(self) -> int:
        return len(self._categories)

    def __iter__(self):
        return iter(self._categories)

    def __contains__(self, category_id: object) -> bool:
        return category_id in self._index

    @property
    def category_ids(self) -> tuple[str, ...]:
        """All valid category ids, in definition order"""
        return tuple(c.id for c in self._categories)

    def get_category_by_id(self, category_id: str | None) -> Category | None:
        """Find a category by id (None for unknown or empty ids)"""
        if not category_id:
            return None
        return self._index.get(category_id)

    def get_categories_by_type(self, entry_type: str) -> list[Category]:
        """Categories usable on a Credit or Debit entry"""
        return [c for c in self._categories if c.applies_to_type(entry_type)]

    def get_grouped_categories_by_type(self, entry_type: str) -> dict[str, list[Category]]:
        """Categories for a type, grouped by P&L section

        Balance-sheet-only categories are grouped under "Balance Sheet Entry".
        """
        groups: dict[str, list[Category]] = {}
        for category in self.get_categories_by_type(entry_type):
            key = category.pl_group.value if category.pl_group else BALANCE_SHEET_GROUP_LABEL
            groups.setdefault(key, []).append(category)
        return groups


@lru_cache(maxsize=1)
def get_default_registry() -> CategoryRegistry:
    """Registry over the built-in categories (built once per process)"""
    return CategoryRegistry(ACCOUNTING_CATEGORIES)
