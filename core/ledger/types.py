"""
Ledger type definitions

Enums shared by the category taxonomy and the statement builder
"""

from enum import Enum


class AppliesTo(str, Enum):
    """Which entry types a category may be used with"""

    CREDIT = "Credit"
    DEBIT = "Debit"
    BOTH = "Both"


class PLGroup(str, Enum):
    """Profit & Loss section

    Member order is the display order of the statement.
    """

    REVENUE = "Revenue"
    COGS = "COGS"
    OPERATING_EXPENSE = "Operating Expense"
    OTHER_INCOME = "Other Income"
    TAX = "Tax"


class BalanceSheetImpact(str, Enum):
    """Balance Sheet line a category moves directly

    NONE means the entry only flows through the generic cash/bank roll-up.
    """

    FIXED_ASSET = "fixed_asset"
    PREPAID_EXPENSE = "current_asset_prepaid"
    EQUITY_CAPITAL = "equity_capital"
    LONG_TERM_LIABILITY = "liability_longterm"
    LONG_TERM_LIABILITY_REDUCTION = "liability_longterm_reduction"
    NONE = "none"


# P&L sections that count as income (the rest are expenses)
INCOME_GROUPS: frozenset[PLGroup] = frozenset({PLGroup.REVENUE, PLGroup.OTHER_INCOME})

# Fallback buckets for legacy entries without an accounting category
LEGACY_INCOME_LABEL = "Other / Unclassified Income"
LEGACY_EXPENSE_LABEL = "Other / Unclassified Expense"

# Group label used when listing balance-sheet-only categories
BALANCE_SHEET_GROUP_LABEL = "Balance Sheet Entry"
